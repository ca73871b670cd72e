"""
tagedit.tags — Tag inspection and editing.

Public API:
    open_tags(path) -> TagReadResult
    apply_value(handle, snapshot, name, proposed) -> int
    apply_filters(handle, snapshot, request) -> int
    validate_filters(request) -> list[str]
    clean(text) / replace_underscores(text) / remove_html(text) -> str
    format_text(text, label, align, margin, width) -> str
    edit_tag(handle, snapshot, name, editor=None) -> int
"""
from .fields import TAG_FIELDS, EDITABLE, TagField, ValueKind
from .reader import open_tags, TagHandle, TagReadResult
from .changes import apply_value
from .filters import (
    FILTERS,
    apply_filters,
    validate_filters,
    clean,
    replace_underscores,
    remove_html,
)
from .formatter import Align, format_text
from .editor import EditorError, edit_tag

__all__ = [
    "TAG_FIELDS",
    "EDITABLE",
    "TagField",
    "ValueKind",
    "open_tags",
    "TagHandle",
    "TagReadResult",
    "apply_value",
    "FILTERS",
    "apply_filters",
    "validate_filters",
    "clean",
    "replace_underscores",
    "remove_html",
    "Align",
    "format_text",
    "EditorError",
    "edit_tag",
]
