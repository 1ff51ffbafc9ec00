from __future__ import annotations

import os
import sys
import json
import time
import logging
import argparse
from typing import Optional, List, Dict

from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from .errors import InvalidRoot, SizrError
from .models import Entry, ScanResult
from .scanner import scan_path
from .ranking import TotalPolicy, sort_entries, take_top, total_size
from .utils import format_bytes, parse_size, shorten_path
from .drives import volume_for

APP_NAME = "sizr"
APP_VERSION = "0.1.0"

DEFAULT_PATH = "."
DEFAULT_LIMIT = 10
DEFAULT_MIN_SIZE = "0"
PATH_COLUMN_WIDTH = 60

logger = logging.getLogger(__name__)


# -------------------- Console --------------------
def _make_console(no_color: bool = False, stderr: bool = False) -> Console:
    stream = sys.stderr if stderr else sys.stdout
    if stream.isatty():
        return Console(stderr=stderr, no_color=no_color, highlight=not no_color)
    # redirected or captured output: wide and plain
    return Console(stderr=stderr, width=200, force_terminal=False, no_color=True,
                   highlight=False, soft_wrap=False)


def setup_logging(verbose: bool):
    handler = RichHandler(console=_make_console(stderr=True), show_path=False, show_time=False)
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[handler],
        force=True,
    )


# -------------------- Arguments --------------------
def _positive_int(value: str) -> int:
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog=APP_NAME,
        description="A CLI tool to explore and list files and folders by size.",
    )
    p.add_argument("target", nargs="?", default=None, metavar="PATH",
                   help="Path to analyze (same as --path).")
    p.add_argument("-p", "--path", default=None,
                   help="Path to analyze (defaults to current directory).")
    p.add_argument("-l", "--limit", type=_positive_int, default=DEFAULT_LIMIT,
                   help=f"Number of items to display (default: {DEFAULT_LIMIT}).")
    p.add_argument("--files", action=argparse.BooleanOptionalAction, default=True,
                   help="Include files in the listing.")
    p.add_argument("--directories", action=argparse.BooleanOptionalAction, default=True,
                   help="Include directories in the listing.")
    only = p.add_mutually_exclusive_group()
    only.add_argument("-d", "--dirs-only", action="store_true",
                      help="Show only directories (overrides --files/--directories).")
    only.add_argument("-f", "--files-only", action="store_true",
                      help="Show only files (overrides --files/--directories).")
    p.add_argument("-m", "--min-size", default=DEFAULT_MIN_SIZE,
                   help="Hide items smaller than this, e.g. 500KB, 2GB (binary units, default: 0).")
    p.add_argument("--total-mode", choices=[m.value for m in TotalPolicy], default=TotalPolicy.FILES.value,
                   help="'files' counts each file once; 'listed' sums every listed row (legacy, double-counts).")
    p.add_argument("--follow-symlinks", action="store_true", help="Classify symlinks by their target.")
    p.add_argument("--json", metavar="FILE", default=None, help="Also write the full sorted result to FILE.")
    p.add_argument("--no-color", action="store_true", help="Disable color output.")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging to stderr.")
    p.add_argument("--version", action="version", version=f"%(prog)s {APP_VERSION}")
    return p


def resolve_inclusion(args: argparse.Namespace) -> tuple[bool, bool]:
    if args.dirs_only:
        return False, True
    if args.files_only:
        return True, False
    return args.files, args.directories


# -------------------- Output --------------------
def render_results(console: Console, shown: List[Entry], remaining: int, total: int,
                   policy: TotalPolicy, volume: Optional[Dict[str, object]] = None):
    table = Table(title=f"Top {len(shown)} largest items", box=box.SIMPLE_HEAD, title_justify="left")
    table.add_column("#", justify="right")
    table.add_column("Path", no_wrap=True, max_width=PATH_COLUMN_WIDTH)
    table.add_column("Size", justify="right")
    table.add_column("Type")
    for index, item in enumerate(shown, start=1):
        table.add_row(
            str(index),
            Text(shorten_path(item.path, PATH_COLUMN_WIDTH)),
            format_bytes(item.size),
            "DIR" if item.is_dir else "FILE",
        )
    console.print(table)

    if remaining > 0:
        console.print(f"... and {remaining} more items")

    label = "Total size analyzed" if policy is TotalPolicy.FILES else "Total size listed"
    console.print(f"\n{label}: {format_bytes(total)}")
    if volume:
        console.print(
            f"Filesystem {escape(str(volume['mountpoint']))}: {format_bytes(volume['used'])} used of "
            f"{format_bytes(volume['total'])} ({volume['percent']:.0f}%)",
            soft_wrap=True,
        )


def export_json(path: str, result: ScanResult, entries: List[Entry], total: int, policy: TotalPolicy):
    data = {
        "created": time.time(),
        "root": result.root,
        "total": total,
        "total_mode": policy.value,
        "entries": [{"path": e.path, "size": e.size, "kind": e.kind.value} for e in entries],
    }
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, ensure_ascii=False, indent=2)
    logger.debug("wrote %d entries to %s", len(entries), path)


# -------------------- Entry point --------------------
def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.target is not None and args.path is not None:
        parser.error("Cannot combine positional PATH with --path.")

    setup_logging(args.verbose)
    console = _make_console(args.no_color)
    err_console = _make_console(args.no_color, stderr=True)

    if args.target is not None:
        root = args.target
    elif args.path is not None:
        root = args.path
    else:
        root = DEFAULT_PATH
    include_files, include_directories = resolve_inclusion(args)
    policy = TotalPolicy(args.total_mode)

    try:
        if not os.path.exists(root):
            raise InvalidRoot(root)
        min_size = parse_size(args.min_size)

        console.print(f"Analyzing path: {escape(root)}", soft_wrap=True)
        console.print("Scanning files and directories...\n")

        def prog(cur: str, files: int, dirs: int, bytes_scanned: int):
            status.update(f"Scanning… {format_bytes(bytes_scanned)} • {files} files • {dirs} dirs")

        if console.is_terminal:
            with console.status("Scanning…") as status:
                result = scan_path(root, include_files, include_directories, min_size,
                                   follow_symlinks=args.follow_symlinks, progress=prog)
        else:
            result = scan_path(root, include_files, include_directories, min_size,
                               follow_symlinks=args.follow_symlinks)
    except SizrError as e:
        err_console.print(f"Error: {escape(str(e))}", soft_wrap=True)
        return 1

    if result.skipped:
        logger.debug("%d entries could not be read and were skipped", result.skipped)

    entries = sort_entries(result.entries)
    total = total_size(entries, policy, file_bytes=result.file_bytes)

    if not entries:
        console.print("No items found matching the criteria.")
    else:
        shown, remaining = take_top(entries, args.limit)
        render_results(console, shown, remaining, total, policy, volume_for(root))

    if args.json:
        try:
            export_json(args.json, result, entries, total, policy)
        except OSError as e:
            err_console.print(f"Error: cannot write {escape(args.json)}: {escape(str(e))}", soft_wrap=True)
            return 1
    return 0


def run():
    sys.exit(main())
