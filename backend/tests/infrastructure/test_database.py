"""Database session manager tests.

Tests cover:
    - health_check reports True against a live engine
    - health_check reports False (never raises) when the server is unreachable,
      where the driver raises a raw OSError rather than a SQLAlchemy error
"""

from message_search.infrastructure.database import DatabaseSessionManager


async def test_health_check_true_for_reachable_database():
    manager = DatabaseSessionManager("sqlite+aiosqlite:///:memory:")
    try:
        assert await manager.health_check() is True
    finally:
        await manager.engine.dispose()


async def test_health_check_false_for_unreachable_server():
    manager = DatabaseSessionManager("postgresql+asyncpg://u:p@127.0.0.1:1/x")
    try:
        assert await manager.health_check() is False
    finally:
        await manager.engine.dispose()
