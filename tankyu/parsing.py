"""Parsing and display helpers for command-line values."""

from __future__ import annotations

from enum import Enum
from typing import TypeVar

from .types import EntryState, Signal, SourceRole, SourceType

_E = TypeVar("_E", bound=Enum)

NONE_LABEL = "—"
ELLIPSIS = "…"
DEFAULT_TITLE_WIDTH = 60


class InvalidValueError(ValueError):
    """A command-line value or combination of values is not accepted."""


def _parse(enum: type[_E], text: str, what: str) -> _E:
    try:
        return enum(text)
    except ValueError:
        valid = ", ".join(member.value for member in enum)
        raise InvalidValueError(f"Invalid {what} '{text}'. Valid: {valid}") from None


def parse_entry_state(text: str) -> EntryState:
    """Parse an entry state such as ``new`` or ``archived``."""
    return _parse(EntryState, text, "state")


def parse_signal(text: str) -> Signal:
    """Parse a signal level such as ``high`` or ``noise``."""
    return _parse(Signal, text, "signal")


def parse_source_role(text: str) -> SourceRole:
    """Parse a source role such as ``starred`` or ``role-model``."""
    return _parse(SourceRole, text, "role")


def parse_source_type(text: str) -> SourceType:
    """Parse a source type such as ``github-repo`` or ``rss-feed``."""
    return _parse(SourceType, text, "type")


def signal_label(signal: Signal | None) -> str:
    """Display text for a signal, a dash when there is none."""
    return NONE_LABEL if signal is None else signal.value


def role_label(role: SourceRole | None) -> str:
    """Display text for a source role, a dash when there is none."""
    return NONE_LABEL if role is None else role.value


def truncate_title(title: str, width: int = DEFAULT_TITLE_WIDTH) -> str:
    """Shorten a title longer than ``width`` characters, ending it with an ellipsis."""
    if width < 1:
        raise ValueError(f"width must be at least 1, got {width}")
    if len(title) > width:
        return title[: width - 1] + ELLIPSIS
    return title


def parse_tags(csv: str) -> list[str]:
    """Split comma-separated tags, trimming whitespace and dropping empty ones."""
    return [tag for tag in (part.strip() for part in csv.split(",")) if tag]


def check_entry_filters(
    unclassified: bool, source: str | None, topic: str | None
) -> None:
    """Reject combinations of entry-list filters that exclude each other."""
    if unclassified and (source is not None or topic is not None):
        raise InvalidValueError(
            "--unclassified is mutually exclusive with --topic and --source"
        )
    if source is not None and topic is not None:
        raise InvalidValueError("--topic and --source are mutually exclusive")