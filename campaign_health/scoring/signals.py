"""The seven weighted health signals.

    Update Recency    25    freshness of the latest status update
    Deadline Status   20    overall / phase deadline misses
    Revision Rate     15    rejected deliverables
    Task Completion   20    share of tasks done
    Blocked Status    10    blocked campaign or tasks
    Has Assignee       5    someone owns the campaign
    Pending Review     5    deliverables waiting on the client

Each function is pure: ``now`` is passed in, nothing is read from the clock.
"""

import math
from collections.abc import Sequence
from datetime import date, datetime, timezone

from campaign_health.db.models import TaskStatus
from campaign_health.scoring.models import (
    Campaign,
    HealthSignal,
    SignalStatus,
    StatusUpdate,
    Task,
)

SECONDS_PER_DAY = 86_400

MAX_RECENCY = 25
MAX_DEADLINE = 20
MAX_REVISION = 15
MAX_TASKS = 20
MAX_BLOCKED = 10
MAX_ASSIGNEE = 5
MAX_PENDING = 5

RECENCY_FRESH_DAYS = 3
RECENCY_STALE_DAYS = 14
DEADLINE_SOON_DAYS = 3
PHASE_OVERDUE_SCORE = 10
BLOCKED_TASK_PENALTY = 5
PENDING_REVIEW_LIMIT_DAYS = 5

# revision count → score; anything above the last key scores 0
REVISION_TIERS = {0: 15, 1: 15, 2: 10, 3: 5}

UPDATE_RECENCY = "Update Recency"
DEADLINE_STATUS = "Deadline Status"
REVISION_RATE = "Revision Rate"
TASK_COMPLETION = "Task Completion"
BLOCKED_STATUS = "Blocked Status"
HAS_ASSIGNEE = "Has Assignee"
PENDING_REVIEW = "Pending Review"

SIGNAL_ORDER = (
    UPDATE_RECENCY,
    DEADLINE_STATUS,
    REVISION_RATE,
    TASK_COMPLETION,
    BLOCKED_STATUS,
    HAS_ASSIGNEE,
    PENDING_REVIEW,
)


def signal_status(score: int, max_score: int) -> SignalStatus:
    """Classify a signal by the share of its ceiling it earned."""
    ratio = score / max_score if max_score > 0 else 1.0
    if ratio >= 0.7:
        return SignalStatus.GOOD
    if ratio >= 0.4:
        return SignalStatus.WARNING
    return SignalStatus.CRITICAL


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def as_utc(moment: datetime) -> datetime:
    """Naive timestamps are taken to be UTC."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def days_elapsed(since: datetime, now: datetime) -> float:
    """Fractional days from ``since`` to ``now``; future timestamps count as 0."""
    seconds = (as_utc(now) - as_utc(since)).total_seconds()
    return max(0.0, seconds / SECONDS_PER_DAY)


def _days(n: int) -> str:
    return f"{n} day" if n == 1 else f"{n} days"


def _signal(name: str, score: int, max_score: int, detail: str) -> HealthSignal:
    return HealthSignal(
        name=name,
        score=score,
        max_score=max_score,
        status=signal_status(score, max_score),
        detail=detail,
    )


def update_recency(updates: Sequence[StatusUpdate], now: datetime) -> HealthSignal:
    if not updates:
        # New campaigns are not penalised before a first update is due
        return _signal(UPDATE_RECENCY, MAX_RECENCY, MAX_RECENCY, "No updates posted yet")

    latest = max(updates, key=lambda u: as_utc(u.created_at))
    days_since = days_elapsed(latest.created_at, now)
    shown = round_half_up(days_since)

    if days_since <= RECENCY_FRESH_DAYS:
        return _signal(UPDATE_RECENCY, MAX_RECENCY, MAX_RECENCY, f"Updated {_days(shown)} ago")

    if days_since <= RECENCY_STALE_DAYS:
        window = RECENCY_STALE_DAYS - RECENCY_FRESH_DAYS
        score = round_half_up(MAX_RECENCY * (1 - (days_since - RECENCY_FRESH_DAYS) / window))
        return _signal(UPDATE_RECENCY, score, MAX_RECENCY, f"Last update {_days(shown)} ago")

    return _signal(UPDATE_RECENCY, 0, MAX_RECENCY, f"No update in {_days(shown)}")


def deadline_status(campaign: Campaign, now: datetime) -> HealthSignal:
    """Deadlines are calendar dates compared against the UTC date of ``now``.

    A deadline only counts as missed from the day after it: a target of today
    reads "Due in 0 days", never "Overdue by 0 days". Comparing the deadline's
    midnight with the current instant instead would flag it overdue for the
    whole of its own day.

    An overall deadline miss outranks a phase deadline miss, which outranks
    the on-track case.
    """
    today: date = as_utc(now).date()
    target = campaign.target_date
    phase_due = campaign.phase_due_date

    if target is not None and target < today:
        overdue = (today - target).days
        return _signal(DEADLINE_STATUS, 0, MAX_DEADLINE, f"Overdue by {_days(overdue)}")

    if phase_due is not None and phase_due < today:
        overdue = (today - phase_due).days
        return _signal(
            DEADLINE_STATUS, PHASE_OVERDUE_SCORE, MAX_DEADLINE, f"Phase overdue by {_days(overdue)}"
        )

    if target is not None:
        left = (target - today).days
        if left <= DEADLINE_SOON_DAYS:
            detail = f"Due in {_days(left)}"
        else:
            detail = f"On track — {_days(left)} remaining"
        return _signal(DEADLINE_STATUS, MAX_DEADLINE, MAX_DEADLINE, detail)

    return _signal(DEADLINE_STATUS, MAX_DEADLINE, MAX_DEADLINE, "No deadline set")


def revision_rate(updates: Sequence[StatusUpdate]) -> HealthSignal:
    revisions = sum(1 for u in updates if u.is_revision)
    score = REVISION_TIERS.get(revisions, 0)

    if revisions == 0:
        detail = "No revisions"
    elif revisions == 1:
        detail = "1 revision request"
    else:
        detail = f"{revisions} revision requests"

    return _signal(REVISION_RATE, score, MAX_REVISION, detail)


def task_completion(tasks: Sequence[Task]) -> HealthSignal:
    if not tasks:
        return _signal(TASK_COMPLETION, MAX_TASKS, MAX_TASKS, "No tasks created")

    done = sum(1 for t in tasks if t.status == TaskStatus.DONE)
    total = len(tasks)
    ratio = done / total
    score = round_half_up(MAX_TASKS * ratio)
    return _signal(
        TASK_COMPLETION,
        score,
        MAX_TASKS,
        f"{done}/{total} tasks complete ({round_half_up(ratio * 100)}%)",
    )


def blocked_status(campaign: Campaign, tasks: Sequence[Task]) -> HealthSignal:
    if campaign.is_blocked:
        return _signal(BLOCKED_STATUS, 0, MAX_BLOCKED, "Project is blocked")

    blocked = sum(1 for t in tasks if t.status == TaskStatus.BLOCKED)
    if blocked:
        score = max(0, MAX_BLOCKED - BLOCKED_TASK_PENALTY * blocked)
        noun = "task" if blocked == 1 else "tasks"
        return _signal(BLOCKED_STATUS, score, MAX_BLOCKED, f"{blocked} blocked {noun}")

    return _signal(BLOCKED_STATUS, MAX_BLOCKED, MAX_BLOCKED, "No blockers")


def has_assignee(campaign: Campaign) -> HealthSignal:
    if campaign.assigned_to:
        return _signal(HAS_ASSIGNEE, MAX_ASSIGNEE, MAX_ASSIGNEE, "Assigned")
    return _signal(HAS_ASSIGNEE, 0, MAX_ASSIGNEE, "Unassigned")


def pending_review(updates: Sequence[StatusUpdate], now: datetime) -> HealthSignal:
    """Full marks until the oldest pending deliverable passes the limit, then zero."""
    pending = [u for u in updates if u.is_pending_review]
    if not pending:
        return _signal(PENDING_REVIEW, MAX_PENDING, MAX_PENDING, "No pending deliverables")

    oldest = min(pending, key=lambda u: as_utc(u.created_at))
    pending_days = days_elapsed(oldest.created_at, now)
    shown = round_half_up(pending_days)

    if pending_days > PENDING_REVIEW_LIMIT_DAYS:
        return _signal(
            PENDING_REVIEW, 0, MAX_PENDING, f"Deliverable pending review for {_days(shown)}"
        )
    return _signal(PENDING_REVIEW, MAX_PENDING, MAX_PENDING, f"Deliverable awaiting review ({shown}d)")
