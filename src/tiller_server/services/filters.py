"""Compile evaluation filter expressions into SQL where-clauses.

Expressions are boolean predicates over evaluation fields, for example::

    JobID == "example" and Status == "pending"
    not (TriggeredBy == "node-update" or Priority != 50)
    "batch" in Type
    StatusDescription is empty

Selectors may use the API spelling (``JobID``) or the column name
(``job_id``). String values are double-quoted or backtick-quoted.
"""

import re
from typing import Any, cast

from sqlalchemy import and_, not_, or_
from sqlalchemy.sql.elements import ColumnElement
from sqlmodel import col

from tiller_server.models.evaluations import Evaluation

TOKEN_PATTERN = re.compile(
    r"""
    \s*(?:
        (?P<lparen>\()
      | (?P<rparen>\))
      | (?P<op>==|!=)
      | (?P<string>"(?:[^"\\]|\\.)*"|`[^`]*`)
      | (?P<number>-?\d+)
      | (?P<word>[A-Za-z_][A-Za-z0-9_]*)
    )
    """,
    re.VERBOSE,
)

SELECTORS = {
    "ID": "id",
    "Namespace": "namespace",
    "JobID": "job_id",
    "Type": "type",
    "Priority": "priority",
    "TriggeredBy": "triggered_by",
    "Status": "status",
    "StatusDescription": "status_description",
    "NodeID": "node_id",
    "JobModifyIndex": "job_modify_index",
    "CreateTime": "created_at",
    "ModifyTime": "modified_at",
}

KEYWORDS = {"and", "or", "not", "in", "contains", "is", "empty", "true", "false"}


class FilterError(ValueError):
    """Raised when a filter expression cannot be parsed."""

    def __init__(self, message: str) -> None:
        super().__init__(f"failed to parse filter: {message}")


def _col(expr: Any, /) -> ColumnElement[Any]:
    return cast(ColumnElement[Any], col(expr))


def tokenize(text: str) -> list[tuple[str, str]]:
    tokens: list[tuple[str, str]] = []
    pos = 0
    text = text.rstrip()
    while pos < len(text):
        match = TOKEN_PATTERN.match(text, pos)
        if match is None or match.end() == pos:
            raise FilterError(f"unexpected character {text[pos:].lstrip()[:1]!r} at offset {pos}")
        kind = match.lastgroup
        if kind is None:
            raise FilterError(f"unexpected input at offset {pos}")
        tokens.append((kind, match.group(kind)))
        pos = match.end()
    return tokens


def _unquote(raw: str) -> str:
    if raw.startswith("`"):
        return raw[1:-1]
    return re.sub(r"\\(.)", r"\1", raw[1:-1])


class _Parser:
    def __init__(self, tokens: list[tuple[str, str]]) -> None:
        self.tokens = tokens
        self.pos = 0

    def peek(self) -> tuple[str, str] | None:
        return self.tokens[self.pos] if self.pos < len(self.tokens) else None

    def next(self) -> tuple[str, str]:
        token = self.peek()
        if token is None:
            raise FilterError("unexpected end of expression")
        self.pos += 1
        return token

    def accept_word(self, word: str) -> bool:
        token = self.peek()
        if token is not None and token[0] == "word" and token[1] == word:
            self.pos += 1
            return True
        return False

    def expect_word(self, word: str) -> None:
        if not self.accept_word(word):
            found = self.peek()
            raise FilterError(f"expected {word!r}, found {found[1] if found else 'end of expression'!r}")

    def parse(self) -> ColumnElement[bool]:
        clause = self.parse_or()
        trailing = self.peek()
        if trailing is not None:
            raise FilterError(f"unexpected token {trailing[1]!r}")
        return clause

    def parse_or(self) -> ColumnElement[bool]:
        clauses = [self.parse_and()]
        while self.accept_word("or"):
            clauses.append(self.parse_and())
        return clauses[0] if len(clauses) == 1 else or_(*clauses)

    def parse_and(self) -> ColumnElement[bool]:
        clauses = [self.parse_not()]
        while self.accept_word("and"):
            clauses.append(self.parse_not())
        return clauses[0] if len(clauses) == 1 else and_(*clauses)

    def parse_not(self) -> ColumnElement[bool]:
        if self.accept_word("not"):
            return not_(self.parse_not())
        return self.parse_primary()

    def parse_primary(self) -> ColumnElement[bool]:
        kind, value = self.next()
        if kind == "lparen":
            clause = self.parse_or()
            kind, value = self.next()
            if kind != "rparen":
                raise FilterError(f"expected ')', found {value!r}")
            return clause
        if kind in ("string", "number"):
            return self.parse_membership(self.literal(kind, value))
        if kind == "word" and value in ("true", "false"):
            return self.parse_membership(value == "true")
        if kind == "word" and value not in KEYWORDS:
            return self.parse_match(self.selector(value))
        raise FilterError(f"unexpected token {value!r}")

    def parse_membership(self, needle: Any) -> ColumnElement[bool]:
        negate = self.accept_word("not")
        self.expect_word("in")
        kind, value = self.next()
        if kind != "word":
            raise FilterError(f"expected selector after 'in', found {value!r}")
        clause = self.selector(value).contains(str(needle), autoescape=True)
        return not_(clause) if negate else clause

    def parse_match(self, column: ColumnElement[Any]) -> ColumnElement[bool]:
        kind, value = self.next()
        if kind == "op":
            operand = self.value()
            if value == "==":
                return column == operand
            return column.is_distinct_from(operand)
        if kind == "word" and value == "is":
            negate = self.accept_word("not")
            self.expect_word("empty")
            empty = or_(column.is_(None), column == "")
            return not_(empty) if negate else empty
        if kind == "word" and value == "contains":
            return column.contains(str(self.value()), autoescape=True)
        if kind == "word" and value == "not":
            self.expect_word("contains")
            return not_(column.contains(str(self.value()), autoescape=True))
        raise FilterError(f"expected operator, found {value!r}")

    def value(self) -> Any:
        kind, value = self.next()
        if kind in ("string", "number"):
            return self.literal(kind, value)
        if kind == "word" and value in ("true", "false"):
            return value == "true"
        raise FilterError(f"expected value, found {value!r}")

    @staticmethod
    def literal(kind: str, value: str) -> Any:
        return int(value) if kind == "number" else _unquote(value)

    @staticmethod
    def selector(name: str) -> ColumnElement[Any]:
        field = SELECTORS.get(name, name)
        if field not in Evaluation.model_fields:
            raise FilterError(f"unknown selector {name!r}")
        return _col(getattr(Evaluation, field))


def compile_filter(expression: str) -> ColumnElement[bool]:
    """Translate a filter expression into a where-clause on ``Evaluation``."""
    tokens = tokenize(expression)
    if not tokens:
        raise FilterError("empty expression")
    return _Parser(tokens).parse()
