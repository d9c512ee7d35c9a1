from __future__ import annotations

import os

from core.query.fields import FieldPolicy


def field_policy_from_env(default: str = FieldPolicy.LENIENT.value) -> FieldPolicy:
    """
    Return the vocabulary policy for controlled query fields.

    BGPKIT_FIELD_POLICY=strict rejects unrecognized values such as
    ``project=bogus`` with a 400; lenient (the default) drops the filter.
    Unknown settings fall back to the configured default.
    """
    val = os.getenv("BGPKIT_FIELD_POLICY", "").strip().lower()
    if val in ("strict", "1", "true", "yes"):
        return FieldPolicy.STRICT
    if val in ("lenient", "0", "false", "no"):
        return FieldPolicy.LENIENT
    try:
        return FieldPolicy(str(default).strip().lower())
    except ValueError:
        return FieldPolicy.LENIENT
