"""
formatter — Wraps long tag values into a labelled block.

    format_text("a long comment ...", "comment:", Align.RIGHT, 10, 40)

     comment: a long comment that goes on
              and on
"""
from __future__ import annotations
from enum import Enum
from typing import List


class Align(Enum):
    LEFT = "left"
    RIGHT = "right"


def _pad_label(label: str, align: Align, field: int) -> str:
    return label.rjust(field) if align is Align.RIGHT else label.ljust(field)


def format_text(text: str, label: str, align: Align = Align.RIGHT,
                margin: int = 10, width: int = 80) -> str:
    """
    Word-wrap text so every line is shorter than width.

    Body lines are indented by margin columns; the label, padded to
    margin - 1 columns, replaces the indent of the first line. Original
    line breaks are not kept. Callers must pass width > margin.
    """
    tag = _pad_label(label, align, margin - 1)
    if not text.strip():
        return tag

    room = width - margin
    indent = " " * margin
    lines: List[str] = []
    words: List[str] = []
    for word in text.split():
        candidate = " ".join(words + [word])
        if not words or len(candidate) < room:
            words.append(word)
            continue
        lines.append(indent + " ".join(words))
        words = [word]
    if words:
        lines.append(indent + " ".join(words))

    lines[0] = tag + lines[0][len(tag):]
    return "\n".join(lines)
