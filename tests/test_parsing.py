import pytest

from tankyu.parsing import (
    InvalidValueError,
    check_entry_filters,
    parse_entry_state,
    parse_signal,
    parse_source_role,
    parse_source_type,
    parse_tags,
    role_label,
    signal_label,
    truncate_title,
)
from tankyu.types import EntryState, Signal, SourceRole, SourceType


@pytest.mark.parametrize(
    "text, expected",
    [
        ("new", EntryState.NEW),
        ("scanned", EntryState.SCANNED),
        ("triaged", EntryState.TRIAGED),
        ("read", EntryState.READ),
        ("archived", EntryState.ARCHIVED),
    ],
)
def test_parse_entry_state(text, expected):
    assert parse_entry_state(text) is expected


def test_parse_entry_state_invalid():
    with pytest.raises(InvalidValueError) as info:
        parse_entry_state("garbage")
    assert str(info.value) == (
        "Invalid state 'garbage'. Valid: new, scanned, triaged, read, archived"
    )


def test_invalid_value_error_is_value_error():
    with pytest.raises(ValueError, match="Invalid state"):
        parse_entry_state("NEW")


@pytest.mark.parametrize(
    "text, expected",
    [
        ("high", Signal.HIGH),
        ("medium", Signal.MEDIUM),
        ("low", Signal.LOW),
        ("noise", Signal.NOISE),
    ],
)
def test_parse_signal(text, expected):
    assert parse_signal(text) is expected


def test_parse_signal_invalid():
    with pytest.raises(InvalidValueError) as info:
        parse_signal("loud")
    assert str(info.value) == "Invalid signal 'loud'. Valid: high, medium, low, noise"


@pytest.mark.parametrize(
    "text, expected",
    [
        ("starred", SourceRole.STARRED),
        ("role-model", SourceRole.ROLE_MODEL),
        ("reference", SourceRole.REFERENCE),
    ],
)
def test_parse_source_role(text, expected):
    assert parse_source_role(text) is expected


def test_parse_source_role_invalid():
    with pytest.raises(InvalidValueError) as info:
        parse_source_role("role_model")
    assert str(info.value) == (
        "Invalid role 'role_model'. Valid: starred, role-model, reference"
    )


@pytest.mark.parametrize(
    "text, expected",
    [
        ("x-account", SourceType.X_ACCOUNT),
        ("x-bookmarks", SourceType.X_BOOKMARKS),
        ("github-repo", SourceType.GITHUB_REPO),
        ("github-releases", SourceType.GITHUB_RELEASES),
        ("github-user", SourceType.GITHUB_USER),
        ("blog", SourceType.BLOG),
        ("rss-feed", SourceType.RSS_FEED),
        ("web-page", SourceType.WEB_PAGE),
        ("manual", SourceType.MANUAL),
        ("github-issues", SourceType.GITHUB_ISSUES),
        ("agent-report", SourceType.AGENT_REPORT),
    ],
)
def test_parse_source_type(text, expected):
    assert parse_source_type(text) is expected


def test_parse_source_type_invalid():
    with pytest.raises(InvalidValueError) as info:
        parse_source_type("podcast")
    assert str(info.value) == (
        "Invalid type 'podcast'. Valid: x-account, x-bookmarks, github-repo, "
        "github-releases, github-user, blog, rss-feed, web-page, manual, "
        "github-issues, agent-report"
    )


def test_signal_label():
    assert signal_label(None) == "—"
    assert signal_label(Signal.HIGH) == "high"
    assert signal_label(Signal.NOISE) == "noise"


def test_role_label():
    assert role_label(None) == "—"
    assert role_label(SourceRole.ROLE_MODEL) == "role-model"
    assert role_label(SourceRole.STARRED) == "starred"


def test_truncate_title_short_unchanged():
    assert truncate_title("feat: add entry management") == "feat: add entry management"


def test_truncate_title_exactly_sixty_unchanged():
    title = "a" * 60
    assert truncate_title(title) == title


def test_truncate_title_long():
    result = truncate_title("b" * 61)
    assert result == "b" * 59 + "…"
    assert len(result) == 60


def test_truncate_title_counts_characters_not_bytes():
    title = "é" * 60
    assert truncate_title(title) == title
    assert truncate_title("é" * 61) == "é" * 59 + "…"


def test_truncate_title_custom_width():
    assert truncate_title("abcdef", width=4) == "abc…"


def test_truncate_title_rejects_zero_width():
    with pytest.raises(ValueError):
        truncate_title("abc", width=0)


def test_parse_tags():
    assert parse_tags("rust,c,cpp") == ["rust", "c", "cpp"]
    assert parse_tags(" rust , , cpp ,") == ["rust", "cpp"]
    assert parse_tags("") == []


def test_check_entry_filters_source_and_topic():
    with pytest.raises(InvalidValueError, match="mutually exclusive") as info:
        check_entry_filters(False, "foo", "bar")
    assert str(info.value) == "--topic and --source are mutually exclusive"


@pytest.mark.parametrize("source, topic", [("foo", None), (None, "bar"), ("foo", "bar")])
def test_check_entry_filters_unclassified_excludes_others(source, topic):
    with pytest.raises(InvalidValueError) as info:
        check_entry_filters(True, source, topic)
    assert str(info.value) == (
        "--unclassified is mutually exclusive with --topic and --source"
    )


@pytest.mark.parametrize(
    "unclassified, source, topic",
    [(False, None, None), (True, None, None), (False, "foo", None), (False, None, "bar")],
)
def test_check_entry_filters_accepts_valid(unclassified, source, topic):
    assert check_entry_filters(unclassified, source, topic) is None