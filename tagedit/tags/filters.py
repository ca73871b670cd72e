"""
filters — Text cleanup filters for tag values and the engine that runs them.

Filters are pure str -> str functions registered by name in FILTERS.
apply_filters() runs the requested ones per tag in a fixed order, feeding
every result through apply_value() so the next filter sees it.
"""
from __future__ import annotations
import re
from types import MappingProxyType
from typing import Any, Callable, Dict, Iterable, List, Mapping

from bs4 import BeautifulSoup
import structlog

from .changes import apply_value
from .fields import TEXT_TAGS

log = structlog.get_logger()

# Typographic characters and their plain ASCII spelling
_PUNCT_MAP = {
    "\u00a0": " ",    # no-break space
    "\u2013": "-",    # en dash
    "\u2014": "-",    # em dash
    "\u2018": "'",
    "\u2019": "'",
    "\u201c": '"',
    "\u201d": '"',
    "\u2026": "...",
    "&#8217;": "'",
    "&#8230;": "...",
    "&#8220;": '"',
    "&#8221;": '"',
}

_CRLF_RE = re.compile(r"\r\n")
_SPACES_RE = re.compile(r" {2,}")


def clean(text: str) -> str:
    """Trim, normalise smart punctuation, blank out non-printables, collapse spaces."""
    text = text.strip()
    text = _CRLF_RE.sub("", text)
    # must run before the sweep below
    for old, new in _PUNCT_MAP.items():
        text = text.replace(old, new)
    text = "".join(ch if ch.isprintable() else " " for ch in text)
    text = _SPACES_RE.sub(" ", text)
    return text.strip()


def replace_underscores(text: str) -> str:
    return text.replace("_", " ")


def remove_html(text: str) -> str:
    """Strip all markup, keeping the text content."""
    return BeautifulSoup(text, "html.parser").get_text()


FILTERS: Mapping[str, Callable[[str], str]] = MappingProxyType({
    "clean": clean,
    "HTML": remove_html,
    "underscore": replace_underscores,
})

# Registry order used when applying: case-insensitive by name
FILTER_ORDER = tuple(sorted(FILTERS, key=str.lower))


def build_request(pairs: Iterable[tuple[str, str]]) -> Dict[str, List[str]]:
    """Group (tag, filter) pairs into {tag: [filters...]} keeping first-seen order."""
    request: Dict[str, List[str]] = {}
    for tag, name in pairs:
        wanted = request.setdefault(tag.lower(), [])
        if name.lower() not in (w.lower() for w in wanted):
            wanted.append(name)
    return request


def validate_filters(request: Mapping[str, Iterable[str]]) -> List[str]:
    """Return every problem with a filter request; an empty list means valid."""
    known_filters = {f.lower() for f in FILTERS}
    bad_tags = [t for t in request if t.lower() not in TEXT_TAGS]
    bad_filters: List[str] = []
    for names in request.values():
        for name in names:
            if name.lower() not in known_filters and name not in bad_filters:
                bad_filters.append(name)

    errors = []
    if bad_tags:
        errors.append(f"unknown tag names: {', '.join(bad_tags)}")
    if bad_filters:
        errors.append(f"unknown filter names: {', '.join(bad_filters)}")
    return errors


def apply_filters(handle, snapshot: Dict[str, Any], request: Mapping[str, Iterable[str]]) -> int:
    """Run the requested filters; returns the number of tag changes made."""
    changes = 0
    for tag in sorted(request, key=str.lower):
        name = tag.lower()
        wanted = {f.lower() for f in request[tag]}
        for filter_name in FILTER_ORDER:
            if filter_name.lower() not in wanted:
                continue
            result = FILTERS[filter_name](snapshot[name])
            log.debug("filter_applied", tag=name, filter=filter_name)
            changes += apply_value(handle, snapshot, name, result)
    return changes
