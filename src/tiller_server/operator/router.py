import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from tiller_server.dependencies import get_db_session
from tiller_server.models.scheduler import SchedulerConfiguration
from tiller_server.schemas.scheduler import SchedulerConfigResponse, SchedulerConfigUpdateRequest

from .store import get_scheduler_config, update_scheduler_config

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/v1/operator", tags=["operator"])


def _to_response(config: SchedulerConfiguration) -> SchedulerConfigResponse:
    return SchedulerConfigResponse(
        scheduler_algorithm=config.scheduler_algorithm,
        pause_eval_broker=config.pause_eval_broker,
        reject_job_registration=config.reject_job_registration,
        memory_oversubscription_enabled=config.memory_oversubscription_enabled,
        modify_index=config.modify_index,
    )


@router.get("/scheduler/configuration")
async def read_scheduler_config(session: AsyncSession = Depends(get_db_session)) -> SchedulerConfigResponse:
    """Get the scheduler configuration."""
    config = await get_scheduler_config(session)
    return _to_response(config)


@router.put("/scheduler/configuration")
async def write_scheduler_config(
    request: SchedulerConfigUpdateRequest,
    session: AsyncSession = Depends(get_db_session),
) -> SchedulerConfigResponse:
    """Update the scheduler configuration; unset fields are left unchanged."""
    config = await update_scheduler_config(session, request.model_dump(exclude_none=True))
    return _to_response(config)
