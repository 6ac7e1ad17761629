from sqlalchemy import pool


def get_async_engine_options(database_url: str, echo: bool = False) -> dict:
    options: dict = {"echo": echo}

    if database_url.startswith("postgresql+asyncpg") and "pooler.supabase.com" in database_url:
        # Supavisor transaction pooler: no client-side pool, no prepared statements
        options["poolclass"] = pool.NullPool
        options["connect_args"] = {"statement_cache_size": 0}
    elif database_url.startswith("sqlite+aiosqlite") and ":memory:" in database_url:
        # Keep one connection so the in-memory schema survives across sessions
        options["poolclass"] = pool.StaticPool
        options["connect_args"] = {"check_same_thread": False}

    return options
