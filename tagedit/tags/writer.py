"""
writer — Tag writing for the supported containers (ID3 in MP3/WAV, Vorbis comments).

TagHandle.set() dispatches here with a TagField; save_audio() persists the file.
"""
from __future__ import annotations
import os
from typing import Any, Tuple
import structlog

from mutagen.id3 import ID3, COMM, TALB, TCON, TDRC, TIT2, TPE1, TRCK

from .fields import TagField

log = structlog.get_logger()

_ID3_FRAMES = {
    "TALB": TALB,
    "TCON": TCON,
    "TDRC": TDRC,
    "TIT2": TIT2,
    "TPE1": TPE1,
    "TRCK": TRCK,
}

# Other Vorbis keys some taggers use for the same field, read as fallbacks
VORBIS_FALLBACKS = {
    "comment": ("description",),
}


def vorbis_keys(field: TagField) -> Tuple[str, ...]:
    """Vorbis keys holding field, preferred key first."""
    return (field.vorbis, *VORBIS_FALLBACKS.get(field.vorbis, ()))


def _is_clear(value: Any) -> bool:
    return value in (None, "", 0)


def write_id3(tags: ID3, field: TagField, value: Any) -> None:
    """Replace one ID3 frame; empty strings and 0 remove it."""
    if field.id3 == "COMM":
        # Only the description-less comment belongs to us
        for frame in tags.getall("COMM"):
            if frame.desc == "":
                del tags[frame.HashKey]
        if not _is_clear(value):
            tags.add(COMM(encoding=3, lang="eng", desc="", text=[str(value)]))
        return

    tags.delall(field.id3)
    if not _is_clear(value):
        tags.add(_ID3_FRAMES[field.id3](encoding=3, text=[str(value)]))


def write_vorbis(tags, field: TagField, value: Any) -> None:
    """Replace one Vorbis comment; empty strings and 0 remove it."""
    # fallback keys included
    for key in vorbis_keys(field):
        if key in tags:
            del tags[key]
    if not _is_clear(value):
        tags[field.vorbis] = [str(value)]


def save_audio(audio, path: str, preserve_times: bool = False) -> None:
    """
    Save a mutagen file object.

    ID3 containers are written as v2.3 for player compatibility. With
    preserve_times the access/modification times from before the write are
    restored afterwards.
    """
    st = os.stat(path) if preserve_times else None

    if isinstance(audio.tags, ID3):
        audio.tags.update_to_v23()
        audio.save(v2_version=3)
    else:
        audio.save()

    if st is not None:
        os.utime(path, ns=(st.st_atime_ns, st.st_mtime_ns))
    log.debug("file_saved", file=path, preserve_times=preserve_times)
