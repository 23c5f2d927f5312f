import time
import uuid as uuid_module

from sqlalchemy import Index
from sqlmodel import Field, SQLModel


class Evaluation(SQLModel, table=True):
    """A unit of scheduling work queued for the evaluation broker."""

    __tablename__ = "evaluations"
    __table_args__ = (
        Index("ix_evaluations_job_id_status", "job_id", "status"),
        Index("ix_evaluations_created_at", "created_at"),
    )

    id: str = Field(default_factory=lambda: str(uuid_module.uuid4()), primary_key=True)
    namespace: str = Field(default="default")
    job_id: str = Field(index=True)
    type: str = Field(default="service")
    priority: int = Field(default=50)
    triggered_by: str = Field(default="job-register")
    status: str = Field(default="pending", index=True)
    status_description: str | None = Field(default=None)
    node_id: str | None = Field(default=None)
    job_modify_index: int = Field(default=0)
    created_at: int = Field(default_factory=lambda: time.time_ns())
    modified_at: int = Field(default_factory=lambda: time.time_ns())
