"""Service test fixtures: async in-memory DB, seeded messages, FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use the test DB session
    - db_manager patched so readiness checks see the test engine

Design Decisions:
    - SQLite in-memory: fast, no external dependency; icontains renders as
      lower() LIKE, so matching semantics agree with PostgreSQL
    - Seed covers every branch: named contact, phone match, contact in two
      groups, contact in none, cross-organization rows, day-boundary timestamps
"""

from datetime import datetime, timezone

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncSession, async_sessionmaker, create_async_engine,
)
from sqlalchemy.pool import StaticPool

import message_search.infrastructure.database as db_module
from message_search.db.base import Base
from message_search.infrastructure.database import DatabaseSessionManager, get_db
from message_search.main import app
from message_search.models import (
    Contact, ContactGroup, FlowLabel, Group, Message,
)

ORG = 1
OTHER_ORG = 2


def _at(*args) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
async def seeded(test_session_factory) -> dict[str, int]:
    """Seed contacts, groups, labels and messages. Returns ids by name."""
    async with test_session_factory() as db:
        alice = Contact(name="Alice", phone="+91 1111")
        bob = Contact(name="Bob Hello", phone="+91 2222")
        carol = Contact(name="Carol", phone="+91 3333")
        dan = Contact(name="Dan", phone="+91 4444")
        db.add_all([alice, bob, carol, dan])

        friends = Group(label="Friends", organization_id=ORG)
        family = Group(label="Family", organization_id=ORG)
        empty = Group(label="Nobody", organization_id=ORG)
        db.add_all([friends, family, empty])
        await db.flush()

        db.add_all([
            ContactGroup(contact_id=alice.id, group_id=friends.id),
            ContactGroup(contact_id=bob.id, group_id=family.id),
            ContactGroup(contact_id=carol.id, group_id=friends.id),
            ContactGroup(contact_id=carol.id, group_id=family.id),
        ])

        positive = FlowLabel(name="Positive", organization_id=ORG)
        feedback = FlowLabel(name="Feedback", organization_id=ORG)
        foreign = FlowLabel(name="Foreign", organization_id=OTHER_ORG)
        db.add_all([positive, feedback, foreign])

        messages = {
            "alice_hello": Message(
                body="Hello there", flow_label="Positive, Feedback",
                contact_id=alice.id, organization_id=ORG,
                inserted_at=_at(2024, 1, 5, 9, 0),
            ),
            "bob_checking": Message(
                body="just checking in", flow_label="Feedback",
                contact_id=bob.id, organization_id=ORG,
                inserted_at=_at(2024, 1, 31, 23, 30),
            ),
            "carol_hello": Message(
                body="HELLO again", flow_label=None,
                contact_id=carol.id, organization_id=ORG,
                inserted_at=_at(2024, 2, 1, 0, 0),
            ),
            "dan_hello": Message(
                body="hello from nowhere", flow_label="Positive",
                contact_id=dan.id, organization_id=ORG,
                inserted_at=_at(2023, 12, 31, 23, 59, 59),
            ),
            "alice_other_org": Message(
                body="hello elsewhere", flow_label="Foreign",
                contact_id=alice.id, organization_id=OTHER_ORG,
                inserted_at=_at(2024, 1, 10, 12, 0),
            ),
        }
        db.add_all(messages.values())
        await db.commit()

        ids = {name: m.id for name, m in messages.items()}
        ids.update(
            friends=friends.id, family=family.id, empty=empty.id,
            positive=positive.id, feedback=feedback.id, foreign=foreign.id,
        )
        return ids


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager
