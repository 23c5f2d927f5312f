"""Evaluation schemas."""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field


class EvaluationStatus(str, Enum):
    """Evaluation status states."""

    BLOCKED = "blocked"
    PENDING = "pending"
    COMPLETE = "complete"
    FAILED = "failed"
    CANCELED = "canceled"


class EvaluationResponse(BaseModel):
    """Evaluation response model."""

    id: str
    namespace: str
    job_id: str
    type: str
    priority: int
    triggered_by: str
    status: str
    status_description: Optional[str] = None
    node_id: Optional[str] = None
    job_modify_index: int
    created_at: int
    modified_at: int


class EvaluationDeleteRequest(BaseModel):
    """Batch delete request."""

    eval_ids: List[str] = Field(default_factory=list)


class EvaluationDeleteResponse(BaseModel):
    """Number of evaluations removed by a batch delete."""

    deleted: int
