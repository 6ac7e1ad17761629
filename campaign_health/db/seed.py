"""Seed a development database with a demo client and three campaigns.

The client is on an hourly retainer close to its allocation. Dates are
relative to the moment of seeding so the health report shows one
healthy, one slipping and one critical campaign.
"""

import asyncio
import logging
import uuid
from datetime import datetime, timedelta, timezone
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from campaign_health.db.models import (
    Company,
    Project,
    ProjectStatus,
    ProjectType,
    RetainerType,
    Task,
    TaskStatus,
    Update,
    WorkflowPhase,
)

logger = logging.getLogger(__name__)

DEMO_COMPANY = "Northwind Outfitters"
DEMO_ASSIGNEE = uuid.UUID("00000000-0000-4000-8000-000000000001")


# ── Demo campaigns: offsets in days relative to now ──────────────────────────

DEMO_CAMPAIGNS = [
    {
        "name": "Spring Launch Funnel",
        "project_type": ProjectType.DEVELOPMENT,
        "status": ProjectStatus.IN_PROGRESS,
        "phase": WorkflowPhase.DESIGN,
        "assigned": True,
        "is_blocked": False,
        "target_in": 30,
        "phase_due_in": 7,
        # (days ago, is_deliverable, is_approved)
        "updates": [(9, True, True), (2, False, None), (1, True, None)],
        "tasks": [TaskStatus.DONE, TaskStatus.DONE, TaskStatus.DONE, TaskStatus.IN_PROGRESS],
    },
    {
        "name": "Email Nurture Rewrite",
        "project_type": ProjectType.COPYWRITING,
        "status": ProjectStatus.REVISION,
        "phase": WorkflowPhase.SALES_COPY,
        "assigned": True,
        "is_blocked": False,
        "target_in": 10,
        "phase_due_in": -2,
        "updates": [(12, True, False), (10, True, False), (8, False, None)],
        "tasks": [TaskStatus.DONE, TaskStatus.BLOCKED, TaskStatus.TODO, TaskStatus.REVIEW],
    },
    {
        "name": "CRM Migration",
        "project_type": ProjectType.STRATEGY,
        "status": ProjectStatus.IN_PROGRESS,
        "phase": WorkflowPhase.CRM_CONFIG,
        "assigned": False,
        "is_blocked": True,
        "target_in": -4,
        "phase_due_in": -9,
        "updates": [(30, True, False), (25, True, False), (21, True, False), (20, True, None)],
        "tasks": [TaskStatus.BLOCKED, TaskStatus.BLOCKED, TaskStatus.TODO],
    },
]


async def seed_demo(session: AsyncSession, now: datetime | None = None) -> Company:
    """Create the demo client and its campaigns unless already present."""
    now = now or datetime.now(timezone.utc)
    today = now.date()

    result = await session.execute(select(Company).where(Company.name == DEMO_COMPANY))
    existing = result.scalar_one_or_none()
    if existing is not None:
        logger.info("%s already exists, skipping seed.", DEMO_COMPANY)
        return existing

    company = Company(
        name=DEMO_COMPANY,
        retainer_type=RetainerType.HOURLY,
        hours_allocated=40,
        hours_used=Decimal("37.50"),
        is_active=True,
    )
    session.add(company)
    await session.flush()  # Get company.id

    for spec in DEMO_CAMPAIGNS:
        project = Project(
            company_id=company.id,
            name=spec["name"],
            project_type=spec["project_type"],
            status=spec["status"],
            phase=spec["phase"],
            assigned_to=DEMO_ASSIGNEE if spec["assigned"] else None,
            is_blocked=spec["is_blocked"],
            blocked_reason="Waiting on CRM credentials" if spec["is_blocked"] else None,
            target_date=today + timedelta(days=spec["target_in"]),
            phase_due_date=today + timedelta(days=spec["phase_due_in"]),
        )
        session.add(project)
        await session.flush()

        for days_ago, is_deliverable, is_approved in spec["updates"]:
            session.add(
                Update(
                    project_id=project.id,
                    content=f"{spec['name']} update",
                    is_deliverable=is_deliverable,
                    is_approved=is_approved,
                    created_at=now - timedelta(days=days_ago),
                )
            )
        for i, status in enumerate(spec["tasks"]):
            session.add(
                Task(
                    project_id=project.id,
                    title=f"{spec['name']} task {i + 1}",
                    status=status.value,
                    sort_order=i,
                )
            )

    await session.commit()
    logger.info("Seeded %s with %d campaigns.", DEMO_COMPANY, len(DEMO_CAMPAIGNS))
    return company


async def main() -> None:
    from campaign_health.db.session import async_session

    async with async_session() as session:
        await seed_demo(session)


if __name__ == "__main__":
    asyncio.run(main())
