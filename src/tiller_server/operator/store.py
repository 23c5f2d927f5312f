import logging
from typing import Any, Dict

from sqlalchemy.ext.asyncio import AsyncSession

from tiller_server.models.scheduler import SCHEDULER_CONFIG_ID, SchedulerConfiguration

logger = logging.getLogger(__name__)


async def get_scheduler_config(session: AsyncSession) -> SchedulerConfiguration:
    """Fetch the scheduler configuration, creating the default row on first use."""
    config = await session.get(SchedulerConfiguration, SCHEDULER_CONFIG_ID)
    if config is None:
        config = SchedulerConfiguration(id=SCHEDULER_CONFIG_ID)
        session.add(config)
        await session.commit()
    return config


async def update_scheduler_config(session: AsyncSession, updates: Dict[str, Any]) -> SchedulerConfiguration:
    config = await get_scheduler_config(session)
    for key, value in updates.items():
        setattr(config, key, value)
    config.modify_index += 1
    await session.commit()
    await session.refresh(config)
    logger.info(f"Scheduler configuration updated: {updates} (modify_index={config.modify_index})")
    return config
