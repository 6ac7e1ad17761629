"""CLI to print campaign health from the portal database.

Usage:
    python scripts/run_health.py --all
    python scripts/run_health.py --project 3f0c...-uuid
    python scripts/run_health.py --all --now 2026-03-01T09:00:00+00:00 --local
"""

import argparse
import asyncio
import logging
import os
import sys
from datetime import datetime, timezone
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

logger = logging.getLogger("run_health")


def print_breakdown(name: str, company: str, result) -> None:
    print(f"{company} / {name}")
    print("=" * 60)
    print(f"  Health: {result.score}/100 — {result.label.value}")
    print(f"{'─' * 60}")
    for s in result.signals:
        print(
            f"  [{s.status.value:8s}] {s.name:16s} {s.score:>2d}/{s.max_score:<2d} | {s.detail}"
        )
    print()


async def run_health(project_id: str | None, company_id: str | None, include_complete: bool, now: datetime) -> int:
    from campaign_health.db.session import async_session, engine
    from campaign_health.scoring.portfolio import campaign_table, clients_of, company_summary
    from campaign_health.scoring.snapshot import (
        CampaignNotFoundError,
        load_campaign_snapshot,
        load_portfolio_snapshots,
    )

    print(f"Campaign health as of {now.isoformat(timespec='minutes')}\n")

    try:
        async with async_session() as session:
            if project_id:
                try:
                    snapshot = await load_campaign_snapshot(session, project_id)
                except CampaignNotFoundError as exc:
                    print(exc)
                    return 1
                print_breakdown(snapshot.campaign.name, snapshot.company_name, snapshot.score(now))
                return 0

            snapshots = await load_portfolio_snapshots(
                session, company_id=company_id, include_complete=include_complete
            )
    finally:
        await engine.dispose()

    if not snapshots:
        print("No campaigns found.")
        return 0

    table = campaign_table(snapshots, now)
    print("CAMPAIGNS:")
    print(table.to_string(index=False))
    print(f"\n{'─' * 60}")
    print("BY CLIENT:")
    print(company_summary(table, clients_of(snapshots)).to_string(index=False))
    return 0


def parse_now(value: str | None) -> datetime:
    if value is None:
        return datetime.now(timezone.utc)
    moment = datetime.fromisoformat(value)
    return moment if moment.tzinfo else moment.replace(tzinfo=timezone.utc)


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Print campaign health scores")
    target = parser.add_mutually_exclusive_group()
    target.add_argument("--project", default=None, help="Project (campaign) id")
    target.add_argument("--all", action="store_true", help="Score every active campaign (default)")
    parser.add_argument("--company", default=None, help="Limit --all to one company id")
    parser.add_argument(
        "--include-complete", action="store_true", help="Also score completed campaigns"
    )
    parser.add_argument("--now", default=None, help="Reference time (ISO 8601, default: now UTC)")
    parser.add_argument(
        "--local",
        action="store_true",
        help="Use local SQLite DB for offline development",
    )
    parser.add_argument(
        "--sqlite-path",
        default="portal_local.db",
        help="SQLite file path used with --local (default: portal_local.db)",
    )
    args = parser.parse_args()

    if args.local:
        db_path = Path(args.sqlite_path).resolve()
        os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{db_path.as_posix()}"
        print(f"Using local SQLite DB: {db_path}")

    from campaign_health.config import settings

    logging.basicConfig(level=settings.log_level, format="%(levelname)s %(name)s: %(message)s")

    try:
        code = asyncio.run(
            run_health(args.project, args.company, args.include_complete, parse_now(args.now))
        )
    except Exception as exc:
        logger.exception("Health run failed")
        print(f"Health run failed: {exc}")
        code = 1
    sys.exit(code)
