"""Test the individual health signals and their tiers."""

from datetime import datetime, timedelta, timezone

from campaign_health.db.models import TaskStatus
from campaign_health.scoring import signals
from campaign_health.scoring.models import (
    ApprovalState,
    Campaign,
    SignalStatus,
    StatusUpdate,
    Task,
)

NOW = datetime(2026, 3, 10, 12, 0, tzinfo=timezone.utc)
TODAY = NOW.date()


def update_at(days_ago: float, deliverable: bool = False, approval=ApprovalState.PENDING):
    return StatusUpdate(
        created_at=NOW - timedelta(days=days_ago), is_deliverable=deliverable, approval=approval
    )


# ── signal_status ────────────────────────────────────────────────────────────


def test_signal_status_thresholds():
    assert signals.signal_status(7, 10) == SignalStatus.GOOD
    assert signals.signal_status(69, 100) == SignalStatus.WARNING
    assert signals.signal_status(4, 10) == SignalStatus.WARNING
    assert signals.signal_status(39, 100) == SignalStatus.CRITICAL
    assert signals.signal_status(0, 5) == SignalStatus.CRITICAL


def test_signal_status_zero_max_is_good():
    assert signals.signal_status(0, 0) == SignalStatus.GOOD


def test_round_half_up():
    assert signals.round_half_up(2.5) == 3
    assert signals.round_half_up(5.5) == 6
    assert signals.round_half_up(13.49) == 13


# ── Update Recency ───────────────────────────────────────────────────────────


def test_recency_no_updates_full_marks():
    s = signals.update_recency([], NOW)
    assert s.score == 25
    assert s.detail == "No updates posted yet"


def test_recency_fresh_window():
    s = signals.update_recency([update_at(3)], NOW)
    assert s.score == 25
    assert s.detail == "Updated 3 days ago"

    s = signals.update_recency([update_at(1)], NOW)
    assert s.detail == "Updated 1 day ago"


def test_recency_uses_latest_update_regardless_of_order():
    s = signals.update_recency([update_at(1), update_at(30), update_at(12)], NOW)
    assert s.score == 25


def test_recency_linear_decay():
    # 8 days: 25 × (1 − 5/11) = 13.64 → 14
    s = signals.update_recency([update_at(8)], NOW)
    assert s.score == 14
    assert s.detail == "Last update 8 days ago"
    assert s.status == SignalStatus.WARNING


def test_recency_decays_to_zero_at_14_days():
    assert signals.update_recency([update_at(14)], NOW).score == 0


def test_recency_stale():
    s = signals.update_recency([update_at(21)], NOW)
    assert s.score == 0
    assert s.detail == "No update in 21 days"
    assert s.status == SignalStatus.CRITICAL


def test_recency_future_timestamp_counts_as_now():
    s = signals.update_recency([update_at(-2)], NOW)
    assert s.score == 25
    assert s.detail == "Updated 0 days ago"


def test_recency_naive_timestamps_are_utc():
    naive = StatusUpdate(created_at=datetime(2026, 3, 1, 12, 0))
    s = signals.update_recency([naive], NOW)
    # 9 days: 25 × (1 − 6/11) = 11.36 → 11
    assert s.score == 11


# ── Deadline Status ──────────────────────────────────────────────────────────


def test_deadline_none_set():
    s = signals.deadline_status(Campaign(id=1), NOW)
    assert s.score == 20
    assert s.detail == "No deadline set"


def test_deadline_target_overdue_dominates_phase():
    campaign = Campaign(
        id=1,
        target_date=TODAY - timedelta(days=1),
        phase_due_date=TODAY - timedelta(days=9),
    )
    s = signals.deadline_status(campaign, NOW)
    assert s.score == 0
    assert s.detail == "Overdue by 1 day"


def test_deadline_phase_overdue():
    campaign = Campaign(
        id=1,
        target_date=TODAY + timedelta(days=20),
        phase_due_date=TODAY - timedelta(days=2),
    )
    s = signals.deadline_status(campaign, NOW)
    assert s.score == 10
    assert s.detail == "Phase overdue by 2 days"
    assert s.status == SignalStatus.WARNING


def test_deadline_due_soon():
    s = signals.deadline_status(Campaign(id=1, target_date=TODAY + timedelta(days=3)), NOW)
    assert s.score == 20
    assert s.detail == "Due in 3 days"


def test_deadline_on_track():
    s = signals.deadline_status(Campaign(id=1, target_date=TODAY + timedelta(days=12)), NOW)
    assert s.score == 20
    assert s.detail == "On track — 12 days remaining"


def test_deadline_today_is_due_until_midnight():
    """A target of today stays "Due in 0 days" through its last minute."""
    campaign = Campaign(id=1, target_date=TODAY)
    late = datetime(2026, 3, 10, 23, 59, tzinfo=timezone.utc)
    for moment in (NOW.replace(hour=0, minute=0), late):
        s = signals.deadline_status(campaign, moment)
        assert s.score == 20
        assert s.detail == "Due in 0 days"

    s = signals.deadline_status(campaign, late + timedelta(minutes=1))
    assert s.score == 0
    assert s.detail == "Overdue by 1 day"


def test_deadline_phase_only_not_past():
    s = signals.deadline_status(Campaign(id=1, phase_due_date=TODAY + timedelta(days=4)), NOW)
    assert s.score == 20
    assert s.detail == "No deadline set"


# ── Revision Rate ────────────────────────────────────────────────────────────


def test_revision_tiers():
    def rejected(n):
        return [update_at(1, True, ApprovalState.REJECTED) for _ in range(n)]

    assert signals.revision_rate(rejected(0)).score == 15
    assert signals.revision_rate(rejected(1)).score == 15
    assert signals.revision_rate(rejected(2)).score == 10
    assert signals.revision_rate(rejected(3)).score == 5
    assert signals.revision_rate(rejected(4)).score == 0
    assert signals.revision_rate(rejected(9)).score == 0


def test_revision_details():
    one = [update_at(1, True, ApprovalState.REJECTED)]
    assert signals.revision_rate([]).detail == "No revisions"
    assert signals.revision_rate(one).detail == "1 revision request"
    assert signals.revision_rate(one * 4).detail == "4 revision requests"


def test_revision_ignores_non_deliverables_and_other_states():
    updates = [
        update_at(1, False, ApprovalState.REJECTED),
        update_at(1, True, ApprovalState.APPROVED),
        update_at(1, True, ApprovalState.PENDING),
    ]
    assert signals.revision_rate(updates).score == 15


# ── Task Completion ──────────────────────────────────────────────────────────


def test_tasks_none_created():
    s = signals.task_completion([])
    assert s.score == 20
    assert s.detail == "No tasks created"


def test_tasks_rounding():
    # 1/3 done: 20 × 0.333 = 6.67 → 7, 33%
    tasks = [Task(TaskStatus.DONE), Task(TaskStatus.TODO), Task(TaskStatus.BLOCKED)]
    s = signals.task_completion(tasks)
    assert s.score == 7
    assert s.detail == "1/3 tasks complete (33%)"


def test_tasks_all_done():
    s = signals.task_completion([Task(TaskStatus.DONE)] * 5)
    assert s.score == 20
    assert s.detail == "5/5 tasks complete (100%)"


# ── Blocked Status ───────────────────────────────────────────────────────────


def test_blocked_tasks_penalty():
    campaign = Campaign(id=1)
    one = signals.blocked_status(campaign, [Task(TaskStatus.BLOCKED), Task(TaskStatus.TODO)])
    assert one.score == 5
    assert one.detail == "1 blocked task"

    three = signals.blocked_status(campaign, [Task(TaskStatus.BLOCKED)] * 3)
    assert three.score == 0
    assert three.detail == "3 blocked tasks"


def test_blocked_campaign_takes_priority():
    s = signals.blocked_status(Campaign(id=1, is_blocked=True), [])
    assert s.score == 0
    assert s.detail == "Project is blocked"


def test_no_blockers():
    s = signals.blocked_status(Campaign(id=1), [Task(TaskStatus.IN_PROGRESS)])
    assert s.score == 10
    assert s.detail == "No blockers"


# ── Has Assignee ─────────────────────────────────────────────────────────────


def test_assignee():
    assert signals.has_assignee(Campaign(id=1, assigned_to="u-1")).score == 5
    unassigned = signals.has_assignee(Campaign(id=1))
    assert unassigned.score == 0
    assert unassigned.detail == "Unassigned"


# ── Pending Review ───────────────────────────────────────────────────────────


def test_pending_none():
    updates = [update_at(10, True, ApprovalState.APPROVED), update_at(10, False)]
    s = signals.pending_review(updates, NOW)
    assert s.score == 5
    assert s.detail == "No pending deliverables"


def test_pending_within_limit_keeps_full_marks():
    s = signals.pending_review([update_at(5, True)], NOW)
    assert s.score == 5
    assert s.detail == "Deliverable awaiting review (5d)"


def test_pending_cliff_after_five_days():
    s = signals.pending_review([update_at(1, True), update_at(6, True)], NOW)
    assert s.score == 0
    assert s.detail == "Deliverable pending review for 6 days"


def test_approval_state_from_flag():
    assert ApprovalState.from_flag(True) is ApprovalState.APPROVED
    assert ApprovalState.from_flag(False) is ApprovalState.REJECTED
    assert ApprovalState.from_flag(None) is ApprovalState.PENDING
