"""
console — Shared Rich consoles (stdout for reports, stderr for diagnostics).

Tag values are printed with markup disabled so brackets in titles survive.
"""
from __future__ import annotations
from rich.console import Console

console = Console(highlight=False, soft_wrap=True, emoji=False)
err_console = Console(stderr=True, highlight=False, soft_wrap=True, emoji=False)


def warn(message: str) -> None:
    err_console.print(f"warning: {message}", style="yellow", markup=False)


def error(message: str) -> None:
    err_console.print(f"error: {message}", style="red", markup=False)
