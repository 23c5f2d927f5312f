"""Scheduler configuration schemas."""

from typing import Optional

from pydantic import BaseModel


class SchedulerConfigResponse(BaseModel):
    """Scheduler configuration response model."""

    scheduler_algorithm: str
    pause_eval_broker: bool
    reject_job_registration: bool
    memory_oversubscription_enabled: bool
    modify_index: int


class SchedulerConfigUpdateRequest(BaseModel):
    """Partial update of the scheduler configuration."""

    scheduler_algorithm: Optional[str] = None
    pause_eval_broker: Optional[bool] = None
    reject_job_registration: Optional[bool] = None
    memory_oversubscription_enabled: Optional[bool] = None
