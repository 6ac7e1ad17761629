"""ORM mapping of the portal tables the health engine reads.

The schema is owned by the hosted backend (Supabase migrations); these models
mirror only the columns this package needs. `Base.metadata.create_all` is used
for local SQLite development databases only.
"""

import enum
import uuid
from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import (
    Boolean,
    Date,
    DateTime,
    Enum,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    Uuid,
    func,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase):
    pass


def _enum_values(enum_cls: type[enum.Enum]) -> list[str]:
    return [member.value for member in enum_cls]


# ── Enums matching the portal's Postgres types ───────────────────────────────


class RetainerType(str, enum.Enum):
    UNLIMITED = "unlimited"
    HOURLY = "hourly"
    ONE_TIME = "one_time"


class ProjectStatus(str, enum.Enum):
    QUEUED = "queued"
    IN_PROGRESS = "in_progress"
    REVISION = "revision"
    REVIEW = "review"
    COMPLETE = "complete"


class ProjectType(str, enum.Enum):
    DESIGN = "design"
    DEVELOPMENT = "development"
    CONTENT = "content"
    STRATEGY = "strategy"
    OTHER = "other"
    COPYWRITING = "copywriting"
    CRO = "cro"


class WorkflowPhase(str, enum.Enum):
    """Delivery pipeline, in order."""

    SHAPING = "shaping"
    SALES_COPY = "sales_copy"
    DESIGN = "design"
    CRM_CONFIG = "crm_config"
    LAUNCH_ANALYZE = "launch_analyze"
    CRO = "cro"


class TaskStatus(str, enum.Enum):
    TODO = "todo"
    IN_PROGRESS = "in_progress"
    BLOCKED = "blocked"
    REVIEW = "review"
    DONE = "done"


# ── Models ───────────────────────────────────────────────────────────────────


class Company(Base):
    __tablename__ = "companies"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    retainer_type: Mapped[RetainerType] = mapped_column(
        Enum(RetainerType, name="retainer_type", values_callable=_enum_values),
        default=RetainerType.UNLIMITED,
    )
    hours_allocated: Mapped[int | None] = mapped_column(Integer, default=0)
    hours_used: Mapped[Decimal | None] = mapped_column(Numeric(10, 2), default=0)
    is_active: Mapped[bool | None] = mapped_column(Boolean, default=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )

    projects: Mapped[list["Project"]] = relationship(back_populates="company")


class Project(Base):
    """A campaign moving through the delivery pipeline."""

    __tablename__ = "projects"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    company_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("companies.id"))
    name: Mapped[str] = mapped_column(Text, nullable=False)
    project_type: Mapped[ProjectType] = mapped_column(
        Enum(ProjectType, name="project_type", values_callable=_enum_values),
        default=ProjectType.OTHER,
    )
    status: Mapped[ProjectStatus] = mapped_column(
        Enum(ProjectStatus, name="project_status", values_callable=_enum_values),
        default=ProjectStatus.QUEUED,
    )
    phase: Mapped[WorkflowPhase | None] = mapped_column(
        Enum(WorkflowPhase, name="workflow_phase", values_callable=_enum_values),
        default=WorkflowPhase.SHAPING,
    )
    # auth.users lives in the backend's auth schema, so no FK here
    assigned_to: Mapped[uuid.UUID | None] = mapped_column(Uuid, nullable=True)
    is_blocked: Mapped[bool] = mapped_column(Boolean, default=False)
    blocked_reason: Mapped[str | None] = mapped_column(Text, nullable=True)
    target_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    phase_due_date: Mapped[date | None] = mapped_column(Date, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    company: Mapped["Company"] = relationship(back_populates="projects")
    updates: Mapped[list["Update"]] = relationship(back_populates="project")
    tasks: Mapped[list["Task"]] = relationship(back_populates="project")


class Update(Base):
    """Activity feed entry; deliverables carry a client approval state."""

    __tablename__ = "updates"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    project_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("projects.id"))
    author_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, nullable=True)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    is_deliverable: Mapped[bool] = mapped_column(Boolean, default=False)
    is_approved: Mapped[bool | None] = mapped_column(Boolean, nullable=True)  # None = pending
    hours_logged: Mapped[Decimal | None] = mapped_column(Numeric(10, 2), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )

    project: Mapped["Project"] = relationship(back_populates="updates")


class Task(Base):
    __tablename__ = "tasks"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    project_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("projects.id"))
    title: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=TaskStatus.TODO.value
    )  # TEXT with a CHECK constraint upstream, not a Postgres enum
    priority: Mapped[str] = mapped_column(String(20), nullable=False, default="normal")
    assigned_to: Mapped[uuid.UUID | None] = mapped_column(Uuid, nullable=True)
    due_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    sort_order: Mapped[int | None] = mapped_column(Integer, default=0)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )

    project: Mapped["Project"] = relationship(back_populates="tasks")
