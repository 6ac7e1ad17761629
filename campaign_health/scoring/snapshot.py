"""Read a campaign and its history from the portal database.

The engine only sees immutable records; this module is the single place
where ORM rows are turned into them.
"""

import logging
import uuid
from collections import defaultdict
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from campaign_health.db import models as db
from campaign_health.scoring.engine import compute_health_score
from campaign_health.scoring.models import (
    ApprovalState,
    Campaign,
    ClientAccount,
    HealthScoreResult,
    StatusUpdate,
    Task,
)

logger = logging.getLogger(__name__)


class CampaignNotFoundError(LookupError):
    """No project row matches the requested id."""


@dataclass(frozen=True)
class CampaignSnapshot:
    campaign: Campaign
    company_name: str
    updates: tuple[StatusUpdate, ...] = field(default_factory=tuple)
    tasks: tuple[Task, ...] = field(default_factory=tuple)
    status: db.ProjectStatus = db.ProjectStatus.IN_PROGRESS
    client: ClientAccount | None = None

    def score(self, now: datetime) -> HealthScoreResult:
        return compute_health_score(self.campaign, self.updates, self.tasks, now)


def client_from_row(company: db.Company) -> ClientAccount:
    return ClientAccount(
        name=company.name,
        retainer_type=company.retainer_type or db.RetainerType.UNLIMITED,
        hours_allocated=company.hours_allocated or 0,
        hours_used=float(company.hours_used or 0),
    )


def campaign_from_row(project: db.Project) -> Campaign:
    return Campaign(
        id=project.id,
        name=project.name,
        company_id=project.company_id,
        target_date=project.target_date,
        phase_due_date=project.phase_due_date,
        is_blocked=bool(project.is_blocked),
        assigned_to=project.assigned_to,
    )


def update_from_row(update: db.Update) -> StatusUpdate:
    return StatusUpdate(
        created_at=update.created_at,
        is_deliverable=bool(update.is_deliverable),
        approval=ApprovalState.from_flag(update.is_approved),
    )


def task_from_row(task: db.Task) -> Task:
    # Unknown status strings raise ValueError
    return Task(status=db.TaskStatus(task.status))


def _as_uuid(value: uuid.UUID | str) -> uuid.UUID:
    return value if isinstance(value, uuid.UUID) else uuid.UUID(str(value))


async def _load_history(
    session: AsyncSession, project_ids: Sequence[uuid.UUID]
) -> tuple[dict[uuid.UUID, list[StatusUpdate]], dict[uuid.UUID, list[Task]]]:
    """Fetch updates and tasks (done ones included) for many projects at once."""
    updates_by_project: dict[uuid.UUID, list[StatusUpdate]] = defaultdict(list)
    tasks_by_project: dict[uuid.UUID, list[Task]] = defaultdict(list)
    if not project_ids:
        return updates_by_project, tasks_by_project

    result = await session.execute(
        select(db.Update)
        .where(db.Update.project_id.in_(project_ids))
        .order_by(db.Update.created_at)
    )
    for row in result.scalars().all():
        updates_by_project[row.project_id].append(update_from_row(row))

    result = await session.execute(
        select(db.Task).where(db.Task.project_id.in_(project_ids))
    )
    for row in result.scalars().all():
        tasks_by_project[row.project_id].append(task_from_row(row))

    return updates_by_project, tasks_by_project


def _snapshot(
    project: db.Project,
    company: db.Company,
    updates: dict[uuid.UUID, list[StatusUpdate]],
    tasks: dict[uuid.UUID, list[Task]],
) -> CampaignSnapshot:
    return CampaignSnapshot(
        campaign=campaign_from_row(project),
        company_name=company.name,
        updates=tuple(updates[project.id]),
        tasks=tuple(tasks[project.id]),
        status=project.status or db.ProjectStatus.QUEUED,
        client=client_from_row(company),
    )


async def load_campaign_snapshot(
    session: AsyncSession, project_id: uuid.UUID | str
) -> CampaignSnapshot:
    """Load one campaign with its full update and task history."""
    pid = _as_uuid(project_id)
    result = await session.execute(
        select(db.Project, db.Company)
        .join(db.Company, db.Project.company_id == db.Company.id)
        .where(db.Project.id == pid)
    )
    row = result.one_or_none()
    if row is None:
        raise CampaignNotFoundError(f"Campaign '{pid}' not found")

    project, company = row
    updates, tasks = await _load_history(session, [pid])
    logger.debug(
        "Loaded campaign %s: %d updates, %d tasks", pid, len(updates[pid]), len(tasks[pid])
    )
    return _snapshot(project, company, updates, tasks)


async def load_portfolio_snapshots(
    session: AsyncSession,
    company_id: uuid.UUID | str | None = None,
    include_complete: bool = False,
) -> list[CampaignSnapshot]:
    """Load every campaign of active clients, optionally for one company."""
    query = (
        select(db.Project, db.Company)
        .join(db.Company, db.Project.company_id == db.Company.id)
        .where(db.Company.is_active.is_not(False))
        .order_by(db.Company.name, db.Project.name)
    )
    if company_id is not None:
        query = query.where(db.Project.company_id == _as_uuid(company_id))
    if not include_complete:
        query = query.where(db.Project.status != db.ProjectStatus.COMPLETE)

    result = await session.execute(query)
    rows = result.all()
    project_ids = [project.id for project, _ in rows]
    updates, tasks = await _load_history(session, project_ids)
    logger.info("Loaded %d campaigns for portfolio scoring", len(rows))

    return [_snapshot(project, company, updates, tasks) for project, company in rows]


async def score_campaign(
    session: AsyncSession, project_id: uuid.UUID | str, now: datetime
) -> HealthScoreResult:
    snapshot = await load_campaign_snapshot(session, project_id)
    return snapshot.score(now)
