"""
editor — Edit one tag value in an external text editor.
"""
from __future__ import annotations
import os
import shlex
import subprocess
import tempfile
from typing import Any, Dict, List, Optional
import structlog

from .changes import apply_value

log = structlog.get_logger()


class EditorError(RuntimeError):
    """The editor could not be started or did not exit cleanly."""


def editor_command(configured: Optional[str] = None) -> List[str]:
    """Editor argv: explicit/config value, then $VISUAL, $EDITOR, vi."""
    cmd = configured or os.environ.get("VISUAL") or os.environ.get("EDITOR") or "vi"
    return shlex.split(cmd)


def _strip_line_end(text: str) -> str:
    if text.endswith("\r\n"):
        return text[:-2]
    if text.endswith("\n"):
        return text[:-1]
    return text


def run_editor(value: str, editor: Optional[str] = None) -> str:
    """Let the user edit value; returns the saved text minus one line terminator."""
    cmd = editor_command(editor)
    fd, path = tempfile.mkstemp(prefix="tagedit-", suffix=".txt")
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
            f.write(value)

        log.info("editor_launch", cmd=cmd[0], file=path)
        try:
            proc = subprocess.run([*cmd, path])
        except OSError as e:
            raise EditorError(f"cannot run editor '{cmd[0]}': {e}") from e
        if proc.returncode != 0:
            raise EditorError(f"editor '{cmd[0]}' exited with status {proc.returncode}")

        try:
            with open(path, encoding="utf-8", newline="") as f:
                edited = f.read()
        except UnicodeDecodeError as e:
            raise EditorError(f"edited text is not valid UTF-8: {e}") from e
    finally:
        os.unlink(path)

    return _strip_line_end(edited)


def edit_tag(handle, snapshot: Dict[str, Any], name: str, editor: Optional[str] = None) -> int:
    """Edit tag name interactively and apply the result; returns 0 or 1 changes."""
    edited = run_editor(str(snapshot[name]), editor)
    return apply_value(handle, snapshot, name, edited)
