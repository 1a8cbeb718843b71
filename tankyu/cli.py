"""Command-line grammar of the ``tankyu`` tool."""

from __future__ import annotations

import argparse
from collections.abc import Sequence
from pathlib import Path

_VERSION = "0.1.0"


def _non_negative(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid count: {text!r}") from None
    if value < 0:
        raise argparse.ArgumentTypeError(f"count must not be negative: {text!r}")
    return value


def _global_options(top_level: bool) -> argparse.ArgumentParser:
    """Options accepted before or after any subcommand."""
    parser = argparse.ArgumentParser(add_help=False)
    # Below the top level, absent options must not overwrite what was parsed above.
    dir_default = None if top_level else argparse.SUPPRESS
    json_default = False if top_level else argparse.SUPPRESS
    parser.add_argument(
        "--tankyu-dir", type=Path, default=dir_default, help="Override data directory"
    )
    parser.add_argument(
        "--json", action="store_true", default=json_default, help="Output as JSON"
    )
    return parser


def _add_topic(commands, shared) -> None:
    topic = commands.add_parser("topic", parents=[shared], help="Topic management")
    actions = topic.add_subparsers(dest="action", metavar="COMMAND", required=True)
    actions.add_parser("list", parents=[shared], help="List all topics")
    inspect = actions.add_parser("inspect", parents=[shared], help="Inspect a topic by name")
    inspect.add_argument("name")
    create = actions.add_parser("create", parents=[shared], help="Create a new research topic")
    create.add_argument("name")
    create.add_argument("--description", default="")
    create.add_argument("--tags", default="")


def _add_source(commands, shared) -> None:
    source = commands.add_parser("source", parents=[shared], help="Source management")
    actions = source.add_subparsers(dest="action", metavar="COMMAND", required=True)
    listing = actions.add_parser(
        "list", parents=[shared], help="List sources, optionally filtered by topic or role"
    )
    listing.add_argument("--topic", help="Filter by topic name")
    listing.add_argument("--role", help="Filter by role: starred, role-model, reference")
    inspect = actions.add_parser("inspect", parents=[shared], help="Show full details for a source")
    inspect.add_argument("name")
    add = actions.add_parser(
        "add", parents=[shared], help="Add a source (auto-detects type from URL)"
    )
    add.add_argument("url")
    add.add_argument("--name")
    add.add_argument("--topic")
    add.add_argument("--role")
    add.add_argument("--source-type", metavar="TYPE")
    remove = actions.add_parser("remove", parents=[shared], help="Mark a source as pruned")
    remove.add_argument("name")


def _add_entry(commands, shared) -> None:
    entry = commands.add_parser("entry", parents=[shared], help="Entry management")
    actions = entry.add_subparsers(dest="action", metavar="COMMAND", required=True)
    listing = actions.add_parser(
        "list",
        parents=[shared],
        help="List entries, optionally filtered by state, signal, source, or topic",
    )
    listing.add_argument("--state", help="Filter by state: new, scanned, triaged, read, archived")
    listing.add_argument("--signal", help="Filter by signal: high, medium, low, noise")
    listing.add_argument("--source", help="Filter by source name")
    listing.add_argument(
        "--topic",
        help="Filter by topic name (resolves to sources monitored by that topic)",
    )
    listing.add_argument(
        "--limit",
        type=_non_negative,
        help="Limit number of results (applied after all filters)",
    )
    listing.add_argument(
        "--unclassified",
        action="store_true",
        help="Show only entries with no topic classification",
    )
    inspect = actions.add_parser("inspect", parents=[shared], help="Inspect a single entry by UUID")
    inspect.add_argument("id", help="Entry UUID")
    update = actions.add_parser(
        "update", parents=[shared], help="Update entry fields (state and/or signal)"
    )
    update.add_argument("id")
    update.add_argument("--state")
    update.add_argument("--signal")


def build_parser() -> argparse.ArgumentParser:
    """Build the full argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="tankyu",
        description="Research intelligence graph",
        parents=[_global_options(top_level=True)],
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {_VERSION}")
    shared = _global_options(top_level=False)
    commands = parser.add_subparsers(dest="command", metavar="COMMAND", required=True)
    commands.add_parser(
        "status", parents=[shared], help="Dashboard with source, topic, and entry counts"
    )
    _add_topic(commands, shared)
    _add_source(commands, shared)
    _add_entry(commands, shared)
    config = commands.add_parser("config", parents=[shared], help="Configuration")
    config_actions = config.add_subparsers(dest="action", metavar="COMMAND", required=True)
    config_actions.add_parser("show", parents=[shared], help="Print the current configuration")
    commands.add_parser("doctor", parents=[shared], help="Run diagnostics on the data directory")
    commands.add_parser(
        "health",
        parents=[shared],
        help="Check source health — stale, dormant, and empty sources",
    )
    return parser


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments; exits with status 2 on a usage error."""
    return build_parser().parse_args(argv)