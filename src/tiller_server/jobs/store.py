import logging

from sqlalchemy.ext.asyncio import AsyncSession

from tiller_server.models.evaluations import Evaluation
from tiller_server.models.jobs import Job
from tiller_server.schemas.jobs import JobRegisterRequest

logger = logging.getLogger(__name__)


async def register_job(session: AsyncSession, request: JobRegisterRequest) -> tuple[Job, Evaluation]:
    """Create or update a job and enqueue a pending evaluation for it."""
    job = await session.get(Job, request.name)
    if job is None:
        job = Job(id=request.name, namespace=request.namespace, type=request.type, priority=request.priority)
        session.add(job)
    else:
        job.namespace = request.namespace
        job.type = request.type
        job.priority = request.priority
        job.version += 1
    job.modify_index += 1

    evaluation = Evaluation(
        namespace=job.namespace,
        job_id=job.id,
        type=job.type,
        priority=job.priority,
        triggered_by="job-register",
        status="pending",
        job_modify_index=job.modify_index,
    )
    session.add(evaluation)
    await session.commit()
    await session.refresh(job)
    await session.refresh(evaluation)
    logger.info(f"Job {job.id} registered (version {job.version}), evaluation {evaluation.id} enqueued")
    return job, evaluation
