"""Test async engine options per backend."""

from sqlalchemy import pool

from campaign_health.db.engine import get_async_engine_options


def test_supabase_pooler_disables_client_pool():
    url = "postgresql+asyncpg://u:p@aws-0-eu-west-2.pooler.supabase.com:6543/postgres"
    options = get_async_engine_options(url)
    assert options["poolclass"] is pool.NullPool
    assert options["connect_args"] == {"statement_cache_size": 0}


def test_direct_postgres_uses_defaults():
    options = get_async_engine_options("postgresql+asyncpg://localhost:5432/portal", echo=True)
    assert options == {"echo": True}


def test_in_memory_sqlite_shares_one_connection():
    options = get_async_engine_options("sqlite+aiosqlite:///:memory:")
    assert options["poolclass"] is pool.StaticPool
