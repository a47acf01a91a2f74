"""Message search service tests: composed queries executed against SQLite.

Tests cover:
    - Term matches body, contact name and contact phone, case-insensitively
    - Organization scoping
    - Groups widen (any listed group) and exclude contacts with no membership
    - A contact in two listed groups appears once
    - Labels narrow: [A, B] is a subset of [A]
    - Labels from another organization do not resolve
    - Inclusive date range boundaries
    - Date expressions with a fixed clock; unparsable expressions add nothing
    - Invalid group ids raise
    - Filter order does not change the result
    - Newest-first ordering
"""

from datetime import date

import pytest

from message_search.core.date_expression import RelativeDateEvaluator
from message_search.core.errors import InvalidIdentifierError
from message_search.services.search_messages import search_messages

ORG = 1


def _names(seeded: dict[str, int], messages) -> set[str]:
    by_id = {v: k for k, v in seeded.items() if "_" in k}
    return {by_id[m.id] for m in messages}


async def _search(db, seeded, term=None, filter_spec=None, **kwargs):
    messages = await search_messages(
        db, term, filter_spec, organization_id=kwargs.pop("organization_id", ORG), **kwargs,
    )
    return _names(seeded, messages)


async def test_term_matches_body_name_and_phone(test_db, seeded):
    assert await _search(test_db, seeded, "Hello") == {
        "alice_hello", "bob_checking", "carol_hello", "dan_hello",
    }
    assert await _search(test_db, seeded, "2222") == {"bob_checking"}


async def test_no_term_no_filter_returns_whole_organization(test_db, seeded):
    assert await _search(test_db, seeded) == {
        "alice_hello", "bob_checking", "carol_hello", "dan_hello",
    }


async def test_without_organization_all_rows_are_searched(test_db, seeded):
    result = await _search(test_db, seeded, "elsewhere", organization_id=None)
    assert result == {"alice_other_org"}


async def test_term_with_groups(test_db, seeded):
    result = await _search(
        test_db, seeded, "Hello",
        {"include_groups": [seeded["friends"], seeded["family"]]},
    )
    assert result == {"alice_hello", "bob_checking", "carol_hello"}


async def test_contact_in_two_listed_groups_appears_once(test_db, seeded):
    messages = await search_messages(
        test_db, "again",
        {"include_groups": [seeded["friends"], seeded["family"]]},
        organization_id=ORG,
    )
    assert [m.id for m in messages] == [seeded["carol_hello"]]


async def test_group_without_members_excludes_everything(test_db, seeded):
    assert await _search(test_db, seeded, None, {"include_groups": [seeded["empty"]]}) == set()


async def test_string_group_ids_are_accepted(test_db, seeded):
    result = await _search(test_db, seeded, None, {"include_groups": [str(seeded["family"])]})
    assert result == {"bob_checking", "carol_hello"}


async def test_invalid_group_id_raises(test_db, seeded):
    with pytest.raises(InvalidIdentifierError):
        await search_messages(test_db, None, {"include_groups": ["abc"]}, organization_id=ORG)


async def test_labels_are_conjunctive(test_db, seeded):
    positive = await _search(test_db, seeded, None, {"include_labels": [seeded["positive"]]})
    both = await _search(
        test_db, seeded, None,
        {"include_labels": [seeded["positive"], seeded["feedback"]]},
    )
    assert positive == {"alice_hello", "dan_hello"}
    assert both == {"alice_hello"}
    assert both <= positive


async def test_label_match_is_case_insensitive_substring(test_db, seeded):
    result = await _search(test_db, seeded, None, {"include_labels": [seeded["feedback"]]})
    assert result == {"alice_hello", "bob_checking"}


async def test_label_from_other_organization_does_not_resolve(test_db, seeded):
    result = await _search(test_db, seeded, None, {"include_labels": [seeded["foreign"]]})
    assert result == {"alice_hello", "bob_checking", "carol_hello", "dan_hello"}


async def test_date_range_is_inclusive_of_whole_end_day(test_db, seeded):
    result = await _search(
        test_db, seeded, None,
        {"date_range": {"from": "2024-01-01", "to": "2024-01-31"}},
    )
    assert result == {"alice_hello", "bob_checking"}


async def test_open_ended_date_ranges(test_db, seeded):
    after = await _search(test_db, seeded, None, {"date_range": {"from": date(2024, 2, 1)}})
    before = await _search(test_db, seeded, None, {"date_range": {"to": "2023-12-31"}})
    assert after == {"carol_hello"}
    assert before == {"dan_hello"}


async def test_unparsable_absolute_date_is_ignored(test_db, seeded):
    result = await _search(
        test_db, seeded, None, {"date_range": {"from": "someday", "to": "2023-12-31"}},
    )
    assert result == {"dan_hello"}


async def test_date_expression_with_fixed_clock(test_db, seeded):
    evaluator = RelativeDateEvaluator(today=lambda: date(2024, 1, 31))
    result = await _search(
        test_db, seeded, None,
        {"date_expression": {
            "from_expression": "{{ 30 days ago }}",
            "to_expression": "{{ today }}",
        }},
        evaluator=evaluator,
    )
    assert result == {"alice_hello", "bob_checking"}


async def test_unparsable_date_expression_adds_no_constraint(test_db, seeded):
    result = await _search(
        test_db, seeded, None,
        {"date_expression": {"from_expression": "not-a-date"}},
    )
    assert result == {"alice_hello", "bob_checking", "carol_hello", "dan_hello"}


async def test_filter_order_does_not_matter(test_db, seeded):
    groups = ("include_groups", [seeded["friends"], seeded["family"]])
    labels = ("include_labels", [seeded["feedback"]])
    dates = ("date_range", {"from": "2024-01-01"})
    forward = await _search(test_db, seeded, "h", dict([groups, labels, dates]))
    backward = await _search(test_db, seeded, "h", dict([dates, labels, groups]))
    assert forward == backward == {"alice_hello", "bob_checking"}


async def test_results_are_newest_first(test_db, seeded):
    messages = await search_messages(test_db, None, None, organization_id=ORG)
    assert [m.id for m in messages] == [
        seeded["carol_hello"], seeded["bob_checking"],
        seeded["alice_hello"], seeded["dan_hello"],
    ]


async def test_label_repository_is_skipped_without_labels(test_db, seeded):
    class ExplodingRepository:
        async def get_names_by_ids(self, label_ids, organization_id=None):
            raise AssertionError("label lookup should not run")

    result = await _search(
        test_db, seeded, "hello", {"include_groups": [seeded["friends"]]},
        label_repository=ExplodingRepository(),
    )
    assert result == {"alice_hello", "carol_hello"}
