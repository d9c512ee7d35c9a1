"""Store-agnostic predicates and the query plan sent to the remote store.

Handlers never talk to the PostgREST builder directly.  They describe what they
want as a ``StoreQuery``: a relation, an ordered conjunction of ``Predicate``
objects, optional sort directives and an inclusive row range.  The storage
adapter replays the plan onto the real client, and tests can assert on the plan
without any network round trip.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional, Sequence, Tuple


class Op(str, Enum):
    EQ = "eq"
    GTE = "gte"
    LTE = "lte"
    ILIKE = "ilike"
    IN = "in"
    OR = "or"


@dataclass(frozen=True)
class Predicate:
    """A single ``(field, op, value)`` filter condition.

    For ``Op.OR`` the ``field`` is empty and ``value`` is a tuple of the
    ``ilike`` predicates being combined.
    """

    field: str
    op: Op
    value: Any

    def encode(self) -> str:
        """Render the predicate in PostgREST filter syntax, e.g. ``asn=eq.13335``."""
        if self.op is Op.OR:
            return f"or=({or_filter(self.value)})"
        if self.op is Op.IN:
            return f"{self.field}=in.({','.join(str(v) for v in self.value)})"
        return f"{self.field}={self.op.value}.{self.value}"


def eq(column: str, value: Any) -> Predicate:
    return Predicate(column, Op.EQ, str(value))


def gte(column: str, value: Any) -> Predicate:
    return Predicate(column, Op.GTE, str(value))


def lte(column: str, value: Any) -> Predicate:
    return Predicate(column, Op.LTE, str(value))


def ilike(column: str, pattern: str) -> Predicate:
    return Predicate(column, Op.ILIKE, pattern)


def in_(column: str, values: Sequence[Any]) -> Predicate:
    return Predicate(column, Op.IN, tuple(str(v) for v in values))


def any_of(*predicates: Predicate) -> Predicate:
    """Combine pattern predicates into one disjunction."""
    for predicate in predicates:
        if predicate.op is not Op.ILIKE:
            raise ValueError(f"only ilike predicates can be OR-ed, got {predicate.op.value}")
    return Predicate("", Op.OR, tuple(predicates))


def _quote(value: str) -> str:
    # Double quotes keep commas and parentheses in user text from splitting the group.
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def or_filter(predicates: Sequence[Predicate]) -> str:
    """Return the inner body of a PostgREST ``or=(...)`` group."""
    return ",".join(f"{p.field}.{p.op.value}.{_quote(p.value)}" for p in predicates)


@dataclass
class StoreQuery:
    """Fluent description of one select against a named relation."""

    relation: str
    predicates: List[Predicate] = field(default_factory=list)
    order: List[str] = field(default_factory=list)
    row_range: Optional[Tuple[int, int]] = None

    def where(self, *predicates: Predicate) -> "StoreQuery":
        self.predicates.extend(predicates)
        return self

    def order_asc(self, column: str) -> "StoreQuery":
        self.order.append(column)
        return self

    def range(self, low: int, high: int) -> "StoreQuery":
        """Restrict the result to the inclusive row range ``[low, high]``."""
        self.row_range = (low, high)
        return self

    def describe(self) -> str:
        parts = [p.encode() for p in self.predicates]
        parts.extend(f"order={column}.asc" for column in self.order)
        if self.row_range:
            parts.append(f"range={self.row_range[0]}-{self.row_range[1]}")
        return f"{self.relation}?{'&'.join(parts)}"
