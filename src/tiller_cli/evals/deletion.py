"""Stages of ``tiller eval delete``: safety gate, resolution, deletion, reporting.

Each stage is a plain function over a ``SchedulerAPI``. The broker pause
check and the delete are separate requests, so an operator can unpause the
broker in between; the server repeats the check when it applies the delete.
"""

import logging
from dataclasses import dataclass
from typing import List

from tiller_cli.api import SchedulerAPI, SchedulerConfig
from tiller_cli.errors import BrokerNotPausedError, TillerError
from tiller_cli.evals.selector import ByFilter, ByID, Selector, describe

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DeletionOutcome:
    count: int


def check_broker_paused(api: SchedulerAPI) -> SchedulerConfig:
    """Fail unless the eval broker is paused. Queried on every call."""
    try:
        config = api.get_scheduler_config()
    except TillerError as e:
        raise e.with_context("Error querying scheduler configuration") from e
    if not config.pause_eval_broker:
        raise BrokerNotPausedError()
    logger.debug(f"Eval broker paused (modify_index={config.modify_index})")
    return config


def resolve_eval_ids(api: SchedulerAPI, selector: Selector) -> List[str]:
    match selector:
        case ByID(eval_id=eval_id):
            # Existence is checked by the delete request itself
            return [eval_id]
        case ByFilter(expression=expression):
            try:
                evaluations = api.list_evaluations(expression)
            except TillerError as e:
                raise e.with_context(f"Error listing evaluations with filter {expression!r}") from e
            logger.debug(f"Filter {expression!r} matched {len(evaluations)} evaluations")
            return [evaluation.id for evaluation in evaluations]


def delete_evals(api: SchedulerAPI, eval_ids: List[str], selector: Selector) -> DeletionOutcome:
    if not eval_ids:
        return DeletionOutcome(count=0)
    try:
        deleted = api.delete_evaluations(eval_ids)
    except TillerError as e:
        raise e.with_context(f"Error deleting {describe(selector)}") from e
    if deleted < len(eval_ids):
        logger.debug(f"Requested {len(eval_ids)} deletions, store removed {deleted}")
    return DeletionOutcome(count=deleted)


def run_eval_delete(api: SchedulerAPI, selector: Selector) -> DeletionOutcome:
    check_broker_paused(api)
    eval_ids = resolve_eval_ids(api, selector)
    return delete_evals(api, eval_ids, selector)


def pluralize(count: int) -> str:
    return f"{count} evaluation" if count == 1 else f"{count} evaluations"


def format_outcome(outcome: DeletionOutcome) -> str:
    return f"Successfully deleted {pluralize(outcome.count)}"
