"""Job registration schemas."""

from pydantic import BaseModel, Field


class JobRegisterRequest(BaseModel):
    """Register (create or update) a job."""

    name: str = Field(min_length=1)
    namespace: str = "default"
    type: str = "service"
    priority: int = Field(default=50, ge=1, le=100)


class JobRegisterResponse(BaseModel):
    """Job register response model."""

    job_id: str
    eval_id: str
    job_modify_index: int
