import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from tiller_server.dependencies import get_db_session
from tiller_server.operator.store import get_scheduler_config
from tiller_server.schemas.jobs import JobRegisterRequest, JobRegisterResponse

from .store import register_job

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/v1", tags=["jobs"])


@router.post("/jobs")
async def register(request: JobRegisterRequest, session: AsyncSession = Depends(get_db_session)) -> JobRegisterResponse:
    """Register a job, creating an evaluation for the scheduler."""
    config = await get_scheduler_config(session)
    if config.reject_job_registration:
        raise HTTPException(status_code=409, detail="job registration is currently rejected by the scheduler")

    job, evaluation = await register_job(session, request)
    return JobRegisterResponse(job_id=job.id, eval_id=evaluation.id, job_modify_index=job.modify_index)
