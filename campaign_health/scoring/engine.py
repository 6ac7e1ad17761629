"""Campaign health score: the sum of seven weighted signals, 0-100.

Label bands (from settings, inclusive lower bounds):
    >= 80  → Healthy
    >= 60  → Needs Attention
    >= 40  → At Risk
    below  → Critical
"""

from collections.abc import Iterable
from datetime import datetime

from campaign_health.config import settings
from campaign_health.scoring import signals as sig
from campaign_health.scoring.models import (
    LABEL_COLORS,
    Campaign,
    HealthLabel,
    HealthScoreResult,
    StatusUpdate,
    Task,
)


def health_label(score: int) -> HealthLabel:
    if score >= settings.health_healthy_min:
        return HealthLabel.HEALTHY
    if score >= settings.health_attention_min:
        return HealthLabel.NEEDS_ATTENTION
    if score >= settings.health_at_risk_min:
        return HealthLabel.AT_RISK
    return HealthLabel.CRITICAL


def compute_health_score(
    campaign: Campaign,
    updates: Iterable[StatusUpdate],
    tasks: Iterable[Task],
    now: datetime,
) -> HealthScoreResult:
    """Score a campaign snapshot as of ``now``.

    Never raises for empty or missing optional data; every gap maps to a
    non-penalising default.
    """
    updates = tuple(updates)
    tasks = tuple(tasks)

    signals = (
        sig.update_recency(updates, now),
        sig.deadline_status(campaign, now),
        sig.revision_rate(updates),
        sig.task_completion(tasks),
        sig.blocked_status(campaign, tasks),
        sig.has_assignee(campaign),
        sig.pending_review(updates, now),
    )

    total = sum(s.score for s in signals)
    label = health_label(total)
    color, bg_color = LABEL_COLORS[label]

    return HealthScoreResult(
        score=total,
        label=label,
        color=color,
        bg_color=bg_color,
        signals=signals,
    )
