"""Validation of the eval delete selector.

An invocation selects evaluations either by a single positional ID or by a
``--filter`` expression, never both.
"""

from dataclasses import dataclass
from typing import Sequence, Union

from tiller_cli.errors import ConflictingSelectorsError, MissingSelectorError, TooManyArgumentsError


@dataclass(frozen=True)
class ByID:
    eval_id: str


@dataclass(frozen=True)
class ByFilter:
    expression: str


Selector = Union[ByID, ByFilter]


def verify_args_and_flags(args: Sequence[str], filter_expr: str = "") -> Selector:
    """Turn positional arguments and the filter flag into a selector.

    Raises a ``SelectorError`` subclass when both or neither are supplied, or
    when more than one ID is given.
    """
    if filter_expr and args:
        raise ConflictingSelectorsError()
    if not filter_expr and not args:
        raise MissingSelectorError()
    if len(args) > 1:
        raise TooManyArgumentsError(expected=1, actual=len(args))

    if args:
        return ByID(args[0])
    return ByFilter(filter_expr)


def describe(selector: Selector) -> str:
    match selector:
        case ByID(eval_id=eval_id):
            return f"evaluation {eval_id}"
        case ByFilter(expression=expression):
            return f"evaluations matching filter {expression!r}"
