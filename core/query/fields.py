"""Field rules that translate typed query parameters into store predicates.

Every endpoint declares an ordered mapping ``{parameter name: FieldRule}``.
``build_predicates`` walks that table, skips parameters the caller did not
supply, and asks each rule for its predicates.  The table order is the order
in which predicates reach the store.
"""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

from core.query.predicates import Predicate, any_of, eq, gte, ilike, in_


class FieldPolicy(str, Enum):
    """How to treat values outside a controlled vocabulary."""

    LENIENT = "lenient"
    STRICT = "strict"


class InvalidFieldValue(ValueError):
    """Raised when a parameter value cannot be turned into a predicate."""

    def __init__(self, field_name: str, value: Any, message: str):
        super().__init__(message)
        self.field_name = field_name
        self.value = value


class FieldRule:
    def predicates(self, name: str, value: Any, policy: FieldPolicy) -> List[Predicate]:
        raise NotImplementedError


@dataclass(frozen=True)
class Exact(FieldRule):
    column: str
    transform: Optional[Callable[[Any], Any]] = None

    def predicates(self, name: str, value: Any, policy: FieldPolicy) -> List[Predicate]:
        if self.transform is not None:
            value = self.transform(value)
        return [eq(self.column, value)]


@dataclass(frozen=True)
class Members(FieldRule):
    """Comma-separated list matched with set membership."""

    column: str

    def predicates(self, name: str, value: Any, policy: FieldPolicy) -> List[Predicate]:
        items = [item.strip() for item in str(value).split(",")]
        items = [item for item in items if item]
        if not items:
            return []
        return [in_(self.column, items)]


@dataclass(frozen=True)
class Search(FieldRule):
    """Free text matched case-insensitively against several columns at once.

    ``patterns`` pairs each column with a template where ``{}`` is replaced by
    the user's text, e.g. ``("as_name", "*{}*")`` for a substring match.
    """

    patterns: Tuple[Tuple[str, str], ...]

    def predicates(self, name: str, value: Any, policy: FieldPolicy) -> List[Predicate]:
        text = str(value).strip()
        if not text:
            return []
        return [any_of(*(ilike(column, template.format(text)) for column, template in self.patterns))]


@dataclass(frozen=True)
class Vocabulary(FieldRule):
    """Value normalised through a synonym table before filtering.

    ``emit`` maps the canonical value to the predicate.  Unknown values yield
    no predicate under the lenient policy and an error under the strict one.
    """

    synonyms: Mapping[str, str]
    emit: Callable[[str], Predicate]

    def predicates(self, name: str, value: Any, policy: FieldPolicy) -> List[Predicate]:
        canonical = self.synonyms.get(str(value).strip().lower())
        if canonical is None:
            if policy is FieldPolicy.STRICT:
                accepted = ", ".join(sorted(self.synonyms))
                raise InvalidFieldValue(
                    name,
                    value,
                    f"unrecognized {name} value: {value} (accepted: {accepted})",
                )
            return []
        return [self.emit(canonical)]


@dataclass(frozen=True)
class Threshold(FieldRule):
    column: str

    def predicates(self, name: str, value: Any, policy: FieldPolicy) -> List[Predicate]:
        return [gte(self.column, value)]


@dataclass(frozen=True)
class Pattern(FieldRule):
    column: str

    def predicates(self, name: str, value: Any, policy: FieldPolicy) -> List[Predicate]:
        return [ilike(self.column, str(value))]


@dataclass(frozen=True)
class Date(FieldRule):
    column: str

    def predicates(self, name: str, value: Any, policy: FieldPolicy) -> List[Predicate]:
        return [eq(self.column, parse_calendar_date(name, value).isoformat())]


def parse_calendar_date(name: str, value: Any) -> dt.date:
    """Parse a ``YYYY-MM-DD`` value, raising InvalidFieldValue when malformed."""
    if isinstance(value, dt.date):
        return value
    try:
        return dt.date.fromisoformat(str(value).strip())
    except ValueError:
        raise InvalidFieldValue(name, value, f"cannot parse date string: {value}") from None


@dataclass
class FieldTable:
    """Ordered parameter-to-rule table for one endpoint."""

    rules: Dict[str, FieldRule] = field(default_factory=dict)

    def build(self, params: Mapping[str, Any], policy: FieldPolicy = FieldPolicy.LENIENT) -> List[Predicate]:
        return build_predicates(params, self.rules, policy)


def build_predicates(
    params: Mapping[str, Any],
    rules: Mapping[str, FieldRule],
    policy: FieldPolicy = FieldPolicy.LENIENT,
) -> List[Predicate]:
    """Translate supplied parameters into an ordered conjunction of predicates."""
    predicates: List[Predicate] = []
    for name, rule in rules.items():
        value = params.get(name)
        if value is None:
            continue
        predicates.extend(rule.predicates(name, value, policy))
    return predicates
