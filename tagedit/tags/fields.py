"""
fields — Static tag tables shared by the reader, writer and CLI.

Each editable tag is a TagField carrying its value kind and the container
keys used to reach it (ID3 frame id, Vorbis comment key).
"""
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping


class ValueKind(Enum):
    STRING = "string"
    NUMERIC = "numeric"


@dataclass(frozen=True)
class TagField:
    name: str
    kind: ValueKind
    editable: bool
    id3: str      # ID3v2.4 frame id
    vorbis: str   # Vorbis comment key (FLAC, Ogg Vorbis, Speex, Opus)


_FIELDS = (
    TagField("album",   ValueKind.STRING,  True,  "TALB", "album"),
    TagField("artist",  ValueKind.STRING,  True,  "TPE1", "artist"),
    TagField("comment", ValueKind.STRING,  True,  "COMM", "comment"),
    TagField("genre",   ValueKind.STRING,  True,  "TCON", "genre"),
    TagField("title",   ValueKind.STRING,  True,  "TIT2", "title"),
    TagField("track",   ValueKind.NUMERIC, False, "TRCK", "tracknumber"),
    TagField("year",    ValueKind.NUMERIC, False, "TDRC", "date"),
)

TAG_FIELDS: Mapping[str, TagField] = MappingProxyType({f.name: f for f in _FIELDS})

# Read-only key present in every snapshot
LENGTH = "length"

EDITABLE: Mapping[str, bool] = MappingProxyType(
    {**{f.name: f.editable for f in _FIELDS}, LENGTH: False}
)

TEXT_TAGS = tuple(sorted(f.name for f in _FIELDS if f.kind is ValueKind.STRING))
NUMERIC_TAGS = tuple(sorted(f.name for f in _FIELDS if f.kind is ValueKind.NUMERIC))
SNAPSHOT_KEYS = tuple(sorted([*TAG_FIELDS, LENGTH]))

# Width of the label column used when long values are wrapped ("comment: ")
LABEL_MARGIN = max(len(k) for k in SNAPSHOT_KEYS) + 3
