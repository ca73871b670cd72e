"""
changes — The single place that decides whether a tag value changes.

Direct command-line values, filters and the editor all end up in
apply_value(), which prints the change notice, updates the snapshot and
writes through the tag handle.
"""
from __future__ import annotations
from typing import Any, Dict
import structlog

from ..console import console
from .fields import TAG_FIELDS, ValueKind

log = structlog.get_logger()


def coerce_value(name: str, value: Any) -> Any:
    """Bring a proposed value to the tag's kind; numeric "" means 0."""
    if TAG_FIELDS[name].kind is ValueKind.NUMERIC:
        if value == "":
            return 0
        return int(value)
    return str(value)


def apply_value(handle, snapshot: Dict[str, Any], name: str, proposed: Any) -> int:
    """
    Apply proposed to tag name if it differs from the snapshot.

    Returns 1 when the tag changed and 0 otherwise (None means "not supplied").
    """
    if proposed is None:
        return 0
    value = coerce_value(name, proposed)
    if value == snapshot[name]:
        return 0

    console.print(f"Changing {name} to '{value}'", markup=False)
    log.debug("tag_changed", tag=name, old=snapshot[name], new=value)
    snapshot[name] = value
    handle.set(name, value)
    return 1
