"""Permissive numeric coercion for loosely-typed upstream payloads.

Behavior-event aggregates arrive from several clients with inconsistent
typing (numbers, numeric strings, nulls, stray objects). Every numeric field
read by the draft engine goes through ``as_number``: anything that is not a
finite number or a numeric string becomes 0. Coercion never raises.
"""

import math
from typing import Any

from intervention_engine.core.schemas_drafts import Number, Rec

# Unsigned 0x/0o/0b literals are numeric; digit separators are not
RADIX_PREFIXES = ("0x", "0o", "0b")


def as_number(value: Any) -> Number:
    """
    Coerce a value to a number, falling back to 0.

    - int/float are returned as-is (bool is not a number here)
    - numeric strings are parsed; integral values come back as int
    - unsigned hex/octal/binary strings ("0x10") are parsed as integers
    - strings with underscores ("1_000") are not numeric
    - NaN, infinities and everything else become 0

    Args:
        value: Raw value from a payload

    Returns:
        int or float
    """
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return value if math.isfinite(value) else 0
    if isinstance(value, str):
        text = value.strip()
        if not text or "_" in text:
            return 0
        if text[:2].lower() in RADIX_PREFIXES:
            try:
                return int(text, 0)
            except ValueError:
                return 0
        try:
            parsed = float(text)
        except ValueError:
            return 0
        if not math.isfinite(parsed):
            return 0
        return int(parsed) if parsed.is_integer() else parsed
    return 0


def number_map(value: Any) -> dict[str, Number]:
    """Coerce every value of a mapping with ``as_number``; non-mappings give {}."""
    if not isinstance(value, dict):
        return {}
    return {str(key): as_number(raw) for key, raw in value.items()}


def recs_from(value: Any) -> list[Rec]:
    """
    Read a list of recommendations leniently.

    Non-list input gives []. Entries that are not objects, or whose title or
    rationale is not a string, keep their slot with empty strings so the
    merger can drop them.
    """
    if not isinstance(value, list):
        return []

    recs = []
    for raw in value:
        entry = raw if isinstance(raw, dict) else {}
        title = entry.get("title")
        rationale = entry.get("rationale")
        recs.append(
            Rec(
                title=title if isinstance(title, str) else "",
                rationale=rationale if isinstance(rationale, str) else "",
            )
        )
    return recs


def format_number(value: Number) -> str:
    """Render a number for prose: integral floats lose their trailing ``.0``."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
