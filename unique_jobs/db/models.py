"""
SQLAlchemy database models.
Defines the jobs table used by the SQL queue engine.
"""

from datetime import datetime

from sqlalchemy import JSON, DateTime, Enum, Index, Integer, String, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from unique_jobs.constants import JobPriority, JobStatus


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


class JobRecord(Base):
    """
    A persisted job.

    Uniqueness keys live inside `data` like any other job data; the
    registry document, not this table, decides which job owns a key.
    """

    __tablename__ = "jobs"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )
    type: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        index=True,
    )
    data: Mapped[dict] = mapped_column(
        JSON,
        nullable=False,
        default=dict,
    )
    status: Mapped[JobStatus] = mapped_column(
        Enum(JobStatus, name="job_status", values_callable=lambda x: [e.value for e in x]),
        nullable=False,
        default=JobStatus.INACTIVE,
    )
    priority: Mapped[JobPriority] = mapped_column(
        Enum(JobPriority, name="job_priority", values_callable=lambda x: [e.value for e in x]),
        nullable=False,
        default=JobPriority.NORMAL,
    )
    attempts: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

    __table_args__ = (
        Index("ix_jobs_status_priority", "status", "priority"),
    )

    def __repr__(self) -> str:
        return f"JobRecord(id={self.id}, type={self.type}, status={self.status})"
