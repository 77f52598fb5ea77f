"""LocalHistory CLI.

Principles:
- The save hook never fails the save that triggered it.
- Revision numbers match the engine's ordinals: 0 = current, 1 = previous.
- Stdlib-only.
"""

from __future__ import annotations

import argparse
import os
import sys
from datetime import datetime
from pathlib import Path

from .. import __version__
from ..config import ConfigLoader
from ..core.engine import VersioningEngine
from ..core.revisions import Revision
from ..errors import LocalHistoryError
from ..utils.log import log_debug

LISTING_FIELDS = ("ad", "s")


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="localhistory",
        description="LocalHistory - per-save version history for local files",
    )
    parser.add_argument(
        "--version",
        "-v",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug output",
    )
    parser.add_argument("--repository-dir", help="Repository location (overrides config)")
    parser.add_argument("--exclude-paths", help="Regex of full paths to skip")
    parser.add_argument("--exclude-files", help="Regex of file names to skip")
    parser.add_argument("--log-dir", help="Directory for localhistory.log")

    subparsers = parser.add_subparsers(dest="command")

    commit = subparsers.add_parser("commit", help="Snapshot one or more files")
    commit.add_argument("paths", nargs="+", help="Files to snapshot")

    hook = subparsers.add_parser(
        "hook",
        help="Editor post-write hook: snapshot a file without ever failing the save",
    )
    hook.add_argument("path", help="File that was just written")

    log = subparsers.add_parser("log", help="List recent revisions of a file")
    log.add_argument("path", help="Versioned file")

    show = subparsers.add_parser("show", help="Check out a revision into a temporary file")
    show.add_argument("path", help="Versioned file")
    show.add_argument("revision", type=int, help="0 = current, 1 = previous, ...")
    show.add_argument(
        "--print",
        dest="print_content",
        action="store_true",
        help="Write the content to stdout instead of printing the temp file path",
    )

    revert = subparsers.add_parser("revert", help="Revert a file to a past revision")
    revert.add_argument("path", help="Versioned file")
    revert.add_argument("revision", type=int, help="1 = previous, 2 = two versions ago, ...")

    subparsers.add_parser("status", help="Show repository location and state")

    return parser


def main(args: list[str] | None = None) -> int:
    parser = create_parser()
    parsed = parser.parse_args(args)

    if parsed.debug:
        os.environ["LOCALHISTORY_DEBUG"] = "1"

    if not parsed.command:
        parser.print_help()
        return 1

    try:
        engine = build_engine(parsed)
    except LocalHistoryError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    with engine:
        if parsed.command == "hook":
            return cmd_hook(parsed, engine)

        try:
            if parsed.command == "commit":
                return cmd_commit(parsed, engine)
            if parsed.command == "log":
                return cmd_log(parsed, engine)
            if parsed.command == "show":
                return cmd_show(parsed, engine)
            if parsed.command == "revert":
                return cmd_revert(parsed, engine)
            if parsed.command == "status":
                return cmd_status(engine)
        except (LocalHistoryError, OSError) as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1

    parser.print_help()
    return 1


def build_engine(args: argparse.Namespace) -> VersioningEngine:
    """Engine configured from ~/.localhistory/config.json, env and flags."""
    overrides = {
        "location": args.repository_dir,
        "exclude_paths": args.exclude_paths,
        "exclude_files": args.exclude_files,
        "log": args.log_dir,
    }
    return VersioningEngine(ConfigLoader().options(overrides))


def cmd_commit(args: argparse.Namespace, engine: VersioningEngine) -> int:
    for path in args.paths:
        if engine.commit_file(path):
            print(f"Saved: {path}")
        else:
            print(f"Unchanged or excluded: {path}")
    return 0


def cmd_hook(args: argparse.Namespace, engine: VersioningEngine) -> int:
    """Snapshot a just-written file.

    Errors are reported on stderr as "<ErrorClass>: <message>" and exit 1
    (non-blocking); they never propagate into the editor's save.
    """
    try:
        if engine.is_enabled():
            engine.commit_file(args.path)
        elif engine.location:
            print(
                f"LocalHistory -- Unable to write to the repository location '{engine.location}'",
                file=sys.stderr,
            )
    except Exception as e:
        log_debug(f"Hook error: {e}")
        print(f"{type(e).__name__}: {e}", file=sys.stderr)
        return 1
    return 0


def cmd_log(args: argparse.Namespace, engine: VersioningEngine) -> int:
    revisions = engine.revision_information(args.path, LISTING_FIELDS)
    if not revisions:
        print("No history found.")
        return 0

    for revision in revisions:
        print(format_revision(revision))
    return 0


def cmd_show(args: argparse.Namespace, engine: VersioningEngine) -> int:
    tmp_path = engine.checkout_file(args.path, args.revision)
    if tmp_path is None:
        print(f"No revision {args.revision} for {args.path}", file=sys.stderr)
        return 1

    if not args.print_content:
        print(tmp_path)
        return 0

    try:
        sys.stdout.buffer.write(Path(tmp_path).read_bytes())
        sys.stdout.flush()
    finally:
        os.unlink(tmp_path)
    return 0


def cmd_revert(args: argparse.Namespace, engine: VersioningEngine) -> int:
    if not engine.revert_file(args.path, args.revision):
        print(f"Nothing to revert for {args.path}")
        return 1

    print(f"Reverted {args.path} to revision {args.revision}")
    return 0


def cmd_status(engine: VersioningEngine) -> int:
    store = engine.store
    print(f"Location:    {engine.location or '(not set)'}")
    print(f"Enabled:     {'yes' if store.is_enabled() else 'no'}")
    print(f"Initialized: {'yes' if store.is_initialized() else 'no'}")
    if engine.log.path:
        print(f"Log:         {engine.log.path}")
    head = store.head()
    if head:
        print(f"Head:        {head}")
    return 0


def format_revision(revision: Revision) -> str:
    """One listing line: ordinal, age, date, subject.

    e.g. " 1 # previous        07 Jan 2008 imagine a log entry here"
    """
    return "%2d # %-15.15s %11.11s %s" % (
        revision.ordinal,
        revision.label,
        _format_date(revision.fields.get("ad", "")),
        revision.fields.get("s", ""),
    )


def _format_date(value: str) -> str:
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(value).strftime("%d %b %Y")
    except ValueError:
        return value


if __name__ == "__main__":
    sys.exit(main())
