import logging
from typing import List, Optional

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import col

from tiller_server.models.evaluations import Evaluation
from tiller_server.services.filters import compile_filter

logger = logging.getLogger(__name__)


async def list_evaluations(session: AsyncSession, filter_expr: Optional[str] = None) -> List[Evaluation]:
    query = select(Evaluation)
    if filter_expr:
        query = query.where(compile_filter(filter_expr))
    query = query.order_by(col(Evaluation.created_at).asc(), col(Evaluation.id).asc())
    result = await session.execute(query)
    return list(result.scalars().all())


async def get_evaluation(session: AsyncSession, eval_id: str) -> Optional[Evaluation]:
    return await session.get(Evaluation, eval_id)


async def count_evaluations(session: AsyncSession, eval_ids: List[str]) -> int:
    result = await session.execute(
        select(func.count()).select_from(Evaluation).where(col(Evaluation.id).in_(eval_ids))
    )
    return int(result.scalar_one())


async def delete_evaluations(session: AsyncSession, eval_ids: List[str]) -> int:
    """Delete evaluations in one statement; returns the number of rows removed."""
    if not eval_ids:
        return 0
    result = await session.execute(delete(Evaluation).where(col(Evaluation.id).in_(eval_ids)))
    deleted = result.rowcount or 0
    await session.commit()
    logger.info(f"Deleted {deleted} of {len(eval_ids)} requested evaluations")
    return deleted
