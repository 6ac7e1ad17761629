"""Immutable records consumed and produced by the health engine."""

import enum
import uuid
from dataclasses import dataclass, field
from datetime import date, datetime

from campaign_health.db.models import RetainerType, TaskStatus


class ApprovalState(str, enum.Enum):
    """Client decision on a deliverable."""

    APPROVED = "approved"
    REJECTED = "rejected"
    PENDING = "pending"

    @classmethod
    def from_flag(cls, is_approved: bool | None) -> "ApprovalState":
        """Map the backend's nullable ``is_approved`` column."""
        if is_approved is None:
            return cls.PENDING
        return cls.APPROVED if is_approved else cls.REJECTED


class SignalStatus(str, enum.Enum):
    GOOD = "good"
    WARNING = "warning"
    CRITICAL = "critical"


class HealthLabel(str, enum.Enum):
    HEALTHY = "Healthy"
    NEEDS_ATTENTION = "Needs Attention"
    AT_RISK = "At Risk"
    CRITICAL = "Critical"


# (text colour, background colour) per label
LABEL_COLORS: dict[HealthLabel, tuple[str, str]] = {
    HealthLabel.HEALTHY: ("#047857", "#d1fae5"),
    HealthLabel.NEEDS_ATTENTION: ("#a16207", "#fef9c3"),
    HealthLabel.AT_RISK: ("#c2410c", "#ffedd5"),
    HealthLabel.CRITICAL: ("#b91c1c", "#fee2e2"),
}


@dataclass(frozen=True)
class ClientAccount:
    """The client company a campaign belongs to, with its retainer usage."""

    name: str
    retainer_type: RetainerType = RetainerType.UNLIMITED
    hours_allocated: int = 0
    hours_used: float = 0.0


@dataclass(frozen=True)
class Campaign:
    id: uuid.UUID | str
    name: str = ""
    company_id: uuid.UUID | str | None = None
    target_date: date | None = None
    phase_due_date: date | None = None
    is_blocked: bool = False
    assigned_to: uuid.UUID | str | None = None


@dataclass(frozen=True)
class StatusUpdate:
    created_at: datetime
    is_deliverable: bool = False
    approval: ApprovalState = ApprovalState.PENDING

    @property
    def is_revision(self) -> bool:
        return self.is_deliverable and self.approval is ApprovalState.REJECTED

    @property
    def is_pending_review(self) -> bool:
        return self.is_deliverable and self.approval is ApprovalState.PENDING


@dataclass(frozen=True)
class Task:
    status: TaskStatus


@dataclass(frozen=True)
class HealthSignal:
    name: str
    score: int
    max_score: int
    status: SignalStatus
    detail: str


@dataclass(frozen=True)
class HealthScoreResult:
    """Composite campaign health.

    ``score`` is the exact sum of the signal scores; ``signals`` always holds
    the seven signals in display order.
    """

    score: int
    label: HealthLabel
    color: str
    bg_color: str
    signals: tuple[HealthSignal, ...] = field(default_factory=tuple)

    def signal(self, name: str) -> HealthSignal:
        for s in self.signals:
            if s.name == name:
                return s
        raise KeyError(f"Unknown signal '{name}'")
