"""Translation of endpoint query parameters into remote store predicates."""

from .fields import FieldPolicy, FieldTable, InvalidFieldValue, build_predicates
from .predicates import Op, Predicate, StoreQuery

__all__ = [
    "FieldPolicy",
    "FieldTable",
    "InvalidFieldValue",
    "Op",
    "Predicate",
    "StoreQuery",
    "build_predicates",
]
