"""
reader — Opening audio files and reading tags through mutagen.

open_tags() never raises for bad input: it returns a TagReadResult holding
either a TagHandle or the reason the file could not be used.
"""
from __future__ import annotations
import re
from dataclasses import dataclass
from typing import Any, Dict, Optional
import structlog

from mutagen import File as MutagenFile, MutagenError
from mutagen._vorbis import VCommentDict
from mutagen.id3 import ID3

from .fields import LENGTH, TAG_FIELDS, TagField, ValueKind
from .writer import save_audio, vorbis_keys, write_id3, write_vorbis

log = structlog.get_logger()

_LEADING_INT = re.compile(r"\s*(\d+)")


def parse_number(raw: Any) -> int:
    """Leading integer of a tag value ("3/12" -> 3, "2001-05-03" -> 2001), 0 if none."""
    if isinstance(raw, int):
        return raw
    m = _LEADING_INT.match(str(raw or ""))
    return int(m.group(1)) if m else 0


def format_length(seconds: float) -> str:
    """Duration as M:SS, or H:MM:SS from one hour on."""
    total = int(seconds or 0)
    hours, rest = divmod(total, 3600)
    minutes, secs = divmod(rest, 60)
    if hours:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"


def read_id3(tags: ID3, field: TagField) -> str:
    if field.id3 == "COMM":
        for frame in tags.getall("COMM"):
            if frame.desc == "" and frame.text:
                return str(frame.text[0])
        return ""
    frame = tags.get(field.id3)
    if frame is None:
        return ""
    if field.id3 == "TCON":
        # resolves numeric "(17)" style genres
        return frame.genres[0] if frame.genres else ""
    return str(frame.text[0]) if frame.text else ""


def read_vorbis(tags, field: TagField) -> str:
    for key in vorbis_keys(field):
        values = tags.get(key)
        if values:
            return str(values[0])
    return ""


class TagHandle:
    """Get/set access to the common tags of one opened audio file."""

    def __init__(self, path: str, audio):
        self.path = path
        self._audio = audio
        self._id3 = isinstance(audio.tags, ID3)

    @property
    def length(self) -> float:
        return getattr(self._audio.info, "length", 0) or 0

    def get(self, name: str) -> Any:
        field = TAG_FIELDS[name]
        raw = read_id3(self._audio.tags, field) if self._id3 else read_vorbis(self._audio.tags, field)
        return parse_number(raw) if field.kind is ValueKind.NUMERIC else raw

    def set(self, name: str, value: Any) -> None:
        field = TAG_FIELDS[name]
        if self._id3:
            write_id3(self._audio.tags, field, value)
        else:
            write_vorbis(self._audio.tags, field, value)
        log.debug("tag_set", file=self.path, tag=name)

    def snapshot(self) -> Dict[str, Any]:
        """Fresh dict of every tag value plus the formatted length."""
        values: Dict[str, Any] = {name: self.get(name) for name in TAG_FIELDS}
        values[LENGTH] = format_length(self.length)
        return values

    def save(self, preserve_times: bool = False) -> None:
        save_audio(self._audio, self.path, preserve_times=preserve_times)


@dataclass
class TagReadResult:
    handle: Optional[TagHandle] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.handle is not None


def open_tags(path: str) -> TagReadResult:
    """Open path with mutagen and wrap it in a TagHandle."""
    try:
        audio = MutagenFile(path)
    except (MutagenError, OSError) as e:
        log.info("tag_read_failed", file=path, error=str(e))
        return TagReadResult(error=f"cannot read tag data: {e}")

    if audio is None:
        log.info("tag_read_failed", file=path, error="unknown format")
        return TagReadResult(error="unrecognised audio format")

    if audio.tags is None:
        try:
            audio.add_tags()
        except (MutagenError, NotImplementedError) as e:
            log.info("tag_add_failed", file=path, error=str(e))
            return TagReadResult(error=f"cannot create tags: {e}")

    if not isinstance(audio.tags, (ID3, VCommentDict)):
        kind = type(audio).__name__
        log.info("tag_read_failed", file=path, error="unsupported container", kind=kind)
        return TagReadResult(error=f"unsupported tag container ({kind})")

    return TagReadResult(handle=TagHandle(path, audio))
