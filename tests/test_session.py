from app.db.session import _engine_options


def test_postgres_gets_a_pool():
    options = _engine_options("postgresql+asyncpg://u:p@db/ordering")
    assert options["pool_size"] == 20
    assert options["pool_pre_ping"] is True


def test_sqlite_keeps_driver_defaults():
    assert _engine_options("sqlite+aiosqlite:///:memory:") == {"echo": False}
