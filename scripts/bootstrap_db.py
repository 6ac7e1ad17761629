"""Create a local SQLite portal database and seed it with demo data.

The hosted schema is owned by the backend's migrations; this script only
builds an offline copy of the tables the health engine reads.

Also handles Windows + Python 3.14 SQLAlchemy C-extension runtime issues.
"""

import argparse
import asyncio
import logging
import os
import sys
from pathlib import Path


if sys.platform == "win32" and sys.version_info >= (3, 14):
    os.environ.setdefault("DISABLE_SQLALCHEMY_CEXT_RUNTIME", "1")

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Bootstrap a local portal database")
    parser.add_argument(
        "--sqlite-path",
        default="portal_local.db",
        help="SQLite file path (default: portal_local.db)",
    )
    parser.add_argument(
        "--no-seed",
        action="store_true",
        help="Create the schema only, without demo campaigns",
    )
    return parser.parse_args()


def configure_local_database(sqlite_path: str) -> Path:
    db_path = Path(sqlite_path).resolve()
    os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{db_path.as_posix()}"
    return db_path


async def bootstrap(seed: bool) -> None:
    from campaign_health.db.models import Base
    from campaign_health.db.seed import seed_demo
    from campaign_health.db.session import async_session, engine

    async with engine.begin() as connection:
        await connection.run_sync(Base.metadata.create_all)
    if seed:
        async with async_session() as session:
            await seed_demo(session)
    await engine.dispose()


if __name__ == "__main__":
    args = parse_args()
    db_path = configure_local_database(args.sqlite_path)

    from campaign_health.config import settings

    logging.basicConfig(level=settings.log_level, format="%(levelname)s %(name)s: %(message)s")

    try:
        asyncio.run(bootstrap(seed=not args.no_seed))
        print(f"Local database ready: {db_path}")
    except Exception as exc:
        print(f"Database bootstrap failed: {exc}")
        sys.exit(1)
