"""
cli — Command-line tag viewer/editor.

    tagedit [-title=STRING ...] [-filter TAG=FILTER ...] [-edit=TAG] FILE...

Long options take one or two dashes and are never abbreviated.
"""
from __future__ import annotations
import argparse
import os
import sys
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple
import structlog
from mutagen import MutagenError

from .. import __version__
from ..config import ConfigError, load_config
from ..console import console, error, warn
from ..logging_setup import setup_logging
from .changes import apply_value
from .editor import EditorError, edit_tag
from .fields import EDITABLE, LABEL_MARGIN, NUMERIC_TAGS, SNAPSHOT_KEYS, TAG_FIELDS, TEXT_TAGS
from .filters import FILTER_ORDER, apply_filters, build_request, validate_filters
from .formatter import Align, format_text
from .reader import open_tags

log = structlog.get_logger()

MIN_WIDTH = 60


@dataclass
class Options:
    values: Dict[str, Any] = field(default_factory=dict)
    filters: Dict[str, List[str]] = field(default_factory=dict)
    format: bool = False
    width: int = 80
    silent: bool = False
    edit: Optional[str] = None
    editor: Optional[str] = None
    preserve: bool = False


# ---------------------------------------------------------------------------
# Argument parsing
# ---------------------------------------------------------------------------

class _Parser(argparse.ArgumentParser):
    """argparse with exit status 1 for every usage error."""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def _number(value: str):
    if value == "":
        return value
    try:
        return int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a number: '{value}'")


def _filter_pair(value: str) -> Tuple[str, str]:
    tag, sep, name = value.partition("=")
    if not sep or not tag or not name:
        raise argparse.ArgumentTypeError(f"expected TAGNAME=FILTERNAME, got '{value}'")
    return tag, name


def build_parser() -> argparse.ArgumentParser:
    parser = _Parser(
        prog="tagedit",
        description="Show and edit the tags of FLAC, MP3, Ogg, Speex and WAV files.",
        add_help=False,
        allow_abbrev=False,
    )
    parser.add_argument("files", nargs="*", metavar="FILE", help="Audio files to process.")
    parser.add_argument("-help", "--help", action="store_true", help="Show this help and exit.")
    parser.add_argument("-version", "--version", action="store_true", help="Show the version and exit.")

    for name in TEXT_TAGS:
        parser.add_argument(f"-{name}", f"--{name}", metavar="STRING",
                            help=f"Set the {name} (empty string clears it).")
    for name in NUMERIC_TAGS:
        parser.add_argument(f"-{name}", f"--{name}", metavar="NUMBER", type=_number,
                            help=f"Set the {name} number (empty string sets 0).")

    parser.add_argument("-filter", "--filter", dest="filters", action="append", default=[],
                        type=_filter_pair, metavar="TAG=FILTER",
                        help=f"Run FILTER ({', '.join(FILTER_ORDER)}) over TAG; repeatable.")
    parser.add_argument("-format", "--format", dest="format", action="store_true", default=None,
                        help="Wrap long tag values.")
    parser.add_argument("-noformat", "--noformat", dest="format", action="store_false",
                        help="Print tag values on one line (default).")
    parser.add_argument("-width", "--width", type=int, metavar="N",
                        help=f"Display width for wrapping (minimum {MIN_WIDTH}, default 80).")
    parser.add_argument("-edit", "--edit", metavar="TAG",
                        help="Edit TAG in $VISUAL/$EDITOR.")
    parser.add_argument("-editor", "--editor", metavar="COMMAND",
                        help="Editor command used by -edit.")
    parser.add_argument("-silent", "--silent", dest="silent", action="store_true", default=None,
                        help="Do not print file names and tags.")
    parser.add_argument("-nosilent", "--nosilent", dest="silent", action="store_false",
                        help="Print file names and tags (default).")
    parser.add_argument("-preserve", "--preserve", dest="preserve", action="store_true", default=None,
                        help="Keep file access/modification times when saving.")
    parser.add_argument("-nopreserve", "--nopreserve", dest="preserve", action="store_false",
                        help="Let saving update file times (default).")
    return parser


def _pick(cli_value, config_value):
    return config_value if cli_value is None else cli_value


def build_options(args: argparse.Namespace, cfg) -> Tuple[Options, List[str]]:
    """Resolve parsed arguments against the config. Returns (options, usage errors)."""
    errors: List[str] = []

    request = build_request(args.filters)
    errors.extend(validate_filters(request))

    edit = None
    if args.edit is not None:
        edit = args.edit.lower()
        if edit not in EDITABLE:
            errors.append(f"unknown tag name for -edit: {args.edit}")
            edit = None
        elif not EDITABLE[edit]:
            warn(f"tag '{edit}' cannot be edited, skipping -edit")
            edit = None

    opts = Options(
        values={name: getattr(args, name) for name in TAG_FIELDS},
        filters=request,
        format=bool(_pick(args.format, cfg.format)),
        width=max(int(_pick(args.width, cfg.width)), MIN_WIDTH),
        silent=bool(_pick(args.silent, cfg.silent)),
        edit=edit,
        editor=args.editor or cfg.editor or None,
        preserve=bool(_pick(args.preserve, cfg.preserve)),
    )
    return opts, errors


# ---------------------------------------------------------------------------
# Per-file processing
# ---------------------------------------------------------------------------

def print_report(path: str, snapshot: Dict[str, Any], opts: Options) -> None:
    console.print(path, markup=False)
    threshold = opts.width - LABEL_MARGIN
    for name in SNAPSHOT_KEYS:
        value = str(snapshot[name])
        if opts.format and len(value) > threshold:
            console.print(format_text(value, f"{name}:", Align.RIGHT, LABEL_MARGIN, opts.width),
                          markup=False)
        else:
            console.print(f"{name}: {value}", markup=False)


def process_file(path: str, opts: Options) -> bool:
    """
    Show and update the tags of one file.

    Returns False when the file was skipped. Missing, empty and unreadable
    files are warnings; EditorError propagates and ends the run.
    """
    if not os.path.exists(path):
        warn(f"{path}: file not found")
        return False
    if os.path.getsize(path) == 0:
        warn(f"{path}: file is empty")
        return False

    result = open_tags(path)
    if not result.ok:
        warn(f"{path}: {result.error}")
        return False
    handle = result.handle
    snapshot = handle.snapshot()

    if not opts.silent:
        print_report(path, snapshot, opts)

    changes = 0
    for name in TAG_FIELDS:
        changes += apply_value(handle, snapshot, name, opts.values.get(name))
    if opts.filters:
        changes += apply_filters(handle, snapshot, opts.filters)
    if opts.edit:
        changes += edit_tag(handle, snapshot, opts.edit, opts.editor)

    ok = True
    if changes:
        try:
            handle.save(preserve_times=opts.preserve)
            log.info("file_saved", file=path, changes=changes)
        except (MutagenError, OSError) as e:
            warn(f"{path}: cannot save tags: {e}")
            log.info("tag_write_failed", file=path, error=str(e))
            ok = False

    if not opts.silent:
        console.print()
    return ok


# ---------------------------------------------------------------------------
# Main CLI entry point
# ---------------------------------------------------------------------------

def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    # files may sit between options
    args = parser.parse_intermixed_args(argv)

    if args.help:
        parser.print_help()
        return 1
    if args.version:
        console.print(f"tagedit {__version__}", markup=False)
        return 0
    if not args.files:
        parser.print_usage(sys.stderr)
        error("no files given")
        return 1

    try:
        cfg = load_config()
    except ConfigError as e:
        error(str(e))
        return 1
    setup_logging(cfg.log_level)

    opts, errors = build_options(args, cfg)
    if errors:
        for msg in errors:
            error(msg)
        return 1

    processed = 0
    for path in args.files:
        try:
            if process_file(path, opts):
                processed += 1
        except EditorError as e:
            error(str(e))
            log.info("edit_failed", file=path, error=str(e))
            return 1

    log.info("run_finished", files=len(args.files), processed=processed)
    return 0
