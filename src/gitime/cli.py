"""Command-line interface for gitime.

Collects, adds up and prints all the ``/spend`` and ``/spent`` time-tracking
directives found in the git log of the checked out branch.

COMMANDS:
---------
- total:   Print the time spent over the whole history (default).
- log:     List every commit that declares time, with a total row.
- parse:   Read directives from text given as arguments or on stdin.
- version: Show version and configuration.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import NoReturn

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from gitime import __version__
from gitime.config import settings
from gitime.duration import Duration
from gitime.gitlog import GitLogError, read_commits
from gitime.report import TimeReport, build_report, collect_total

console = Console()


def setup_logging(verbose: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if verbose else settings.log_level.upper()
    fmt = "%(name)s: %(message)s" if verbose else "%(message)s"
    logging.basicConfig(
        level=level,
        format=fmt,
        handlers=[RichHandler(rich_tracebacks=True, console=console, show_path=verbose)],
    )


def _repo_and_rev(args: argparse.Namespace) -> tuple[str | Path, str | None]:
    """Resolve the repository and revision, command line first."""
    repo = args.repo if args.repo is not None else settings.repo_path
    rev = args.rev if args.rev is not None else settings.rev
    return repo, rev


def _load_report(args: argparse.Namespace) -> TimeReport:
    repo, rev = _repo_and_rev(args)
    commits = read_commits(repo, rev=rev, git_executable=settings.git_executable)
    return build_report(commits)


def _print_duration(duration: Duration) -> None:
    """Print a duration the way the total is always printed: text, then minutes."""
    if duration.is_zero():
        console.print("No time spent found.")
    else:
        console.print(duration.format())
    console.print(f"{duration.to_minutes()} minutes")


def cmd_total(args: argparse.Namespace) -> None:
    """Print the time spent over the scanned history."""
    report = _load_report(args)

    if args.json:
        print(json.dumps({
            "total": report.total.model_dump(),
            "total_minutes": report.total_minutes,
            "total_formatted": report.total.format(),
            "commits_scanned": report.commits_scanned,
        }, indent=2))
        return

    _print_duration(report.total)


def cmd_log(args: argparse.Namespace) -> None:
    """List the commits that declare time."""
    report = _load_report(args)

    if args.json:
        print(json.dumps(report.to_dict(), indent=2))
        return

    if not report.entries:
        console.print(f"[yellow]No time spent found[/yellow] in {report.commits_scanned} commits.")
        return

    table = Table(title=f"Time Spent ({len(report.entries)} of {report.commits_scanned} commits)")
    table.add_column("Commit", style="cyan", no_wrap=True)
    table.add_column("Date", style="blue")
    table.add_column("Subject", style="white")
    table.add_column("Time", style="yellow")
    table.add_column("Minutes", style="magenta", justify="right", no_wrap=True)

    for entry in report.entries:
        table.add_row(
            entry.commit.short_hash,
            entry.commit.date[:10],
            escape(entry.commit.subject),
            entry.duration.format(),
            str(entry.duration.to_minutes()),
        )

    table.add_section()
    table.add_row("", "", "[bold]Total[/bold]", report.total.format(), str(report.total_minutes))
    console.print(table)


def cmd_parse(args: argparse.Namespace) -> None:
    """Sum the directives in text given on the command line or stdin."""
    texts = args.text or ["-"]
    if "-" in texts:
        stdin = sys.stdin.read()
        texts = [stdin if text == "-" else text for text in texts]

    total = collect_total(texts)

    if args.json:
        print(json.dumps({
            "total": total.model_dump(),
            "total_minutes": total.to_minutes(),
            "total_formatted": total.format(),
        }, indent=2))
        return

    _print_duration(total)


def cmd_version(args: argparse.Namespace) -> None:
    """Show version and configuration information."""
    console.print(f"[bold]gitime[/bold] v{__version__}")
    repo, rev = _repo_and_rev(args)
    console.print(f"Repository: {repo}")
    console.print(f"Revision: {rev or 'HEAD'}")
    console.print(f"Git: {settings.git_executable}")


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="gitime",
        description="Add up the /spend and /spent directives in git commit messages",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Show detailed output")
    parser.add_argument(
        "-C", "--repo",
        default=None,
        help="Run as if started in this directory (default: current directory)",
    )
    parser.add_argument(
        "--rev",
        default=None,
        help="Revision or range to scan, e.g. main..feature (default: checked out branch)",
    )
    parser.add_argument("--json", action="store_true", help="Print machine-readable JSON")
    parser.set_defaults(func=cmd_total)

    subparsers = parser.add_subparsers(dest="command")

    total_parser = subparsers.add_parser(
        "total",
        help="Print the total time spent (default)",
    )
    total_parser.set_defaults(func=cmd_total)

    log_parser = subparsers.add_parser(
        "log",
        help="List commits that declare time spent",
    )
    log_parser.set_defaults(func=cmd_log)

    parse_parser = subparsers.add_parser(
        "parse",
        help="Add up directives in arbitrary text",
        description="Read /spend and /spent directives from the given text, "
                    "or from stdin when no text is given. Each '-' stands for stdin.",
    )
    parse_parser.add_argument(
        "text",
        nargs="*",
        help="Text blocks to scan (use '-' for stdin)",
    )
    parse_parser.set_defaults(func=cmd_parse)

    version_parser = subparsers.add_parser(
        "version",
        help="Show version information",
    )
    version_parser.set_defaults(func=cmd_version)

    return parser


def main(argv: list[str] | None = None) -> NoReturn:
    """Main entry point for the gitime CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    try:
        args.func(args)
    except GitLogError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        sys.exit(1)

    sys.exit(0)


if __name__ == "__main__":
    main()
