import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from tiller_server.dependencies import get_db_session, get_readonly_db_session
from tiller_server.models.evaluations import Evaluation
from tiller_server.operator.store import get_scheduler_config
from tiller_server.schemas.evaluations import (
    EvaluationDeleteRequest,
    EvaluationDeleteResponse,
    EvaluationResponse,
)

from .store import count_evaluations, delete_evaluations, get_evaluation, list_evaluations

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/v1", tags=["evaluations"])

EVAL_NOT_FOUND = "eval not found"
BROKER_ENABLED = "eval broker is enabled; eval broker must be paused to delete evals"


def _to_response(evaluation: Evaluation) -> EvaluationResponse:
    return EvaluationResponse.model_validate(evaluation.model_dump())


@router.get("/evaluations")
async def list_evals(
    filter: Optional[str] = Query(None, description="Filter expression over evaluation fields"),
    session: AsyncSession = Depends(get_readonly_db_session),
) -> Dict[str, Any]:
    """List evaluations, oldest first."""
    evaluations = await list_evaluations(session, filter)
    return {
        "object": "list",
        "data": [_to_response(evaluation).model_dump() for evaluation in evaluations],
    }


@router.get("/evaluations/{eval_id}")
async def get_eval(eval_id: str, session: AsyncSession = Depends(get_readonly_db_session)) -> EvaluationResponse:
    """Get a specific evaluation by ID."""
    evaluation = await get_evaluation(session, eval_id)
    if evaluation is None:
        raise HTTPException(status_code=404, detail=EVAL_NOT_FOUND)
    return _to_response(evaluation)


@router.delete("/evaluations")
async def delete_evals(
    request: EvaluationDeleteRequest,
    session: AsyncSession = Depends(get_db_session),
) -> EvaluationDeleteResponse:
    """Delete a batch of evaluations. The eval broker must be paused."""
    config = await get_scheduler_config(session)
    if not config.pause_eval_broker:
        raise HTTPException(status_code=409, detail=BROKER_ENABLED)

    eval_ids = list(dict.fromkeys(request.eval_ids))
    if not eval_ids:
        return EvaluationDeleteResponse(deleted=0)

    # Some IDs may already be gone; only a request matching nothing is an error
    if await count_evaluations(session, eval_ids) == 0:
        raise HTTPException(status_code=404, detail=EVAL_NOT_FOUND)

    deleted = await delete_evaluations(session, eval_ids)
    return EvaluationDeleteResponse(deleted=deleted)
