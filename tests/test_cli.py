from pathlib import Path

import pytest

from tankyu.cli import build_parser, parse_args


def test_help_shows_all_subcommands(capsys):
    with pytest.raises(SystemExit) as exc:
        parse_args(["--help"])
    assert exc.value.code == 0
    stdout = capsys.readouterr().out
    for name in ("status", "topic", "source", "config", "doctor"):
        assert name in stdout, f"help should list {name!r}"


def test_help_text_from_parser_lists_entry_and_health():
    text = build_parser().format_help()
    assert "entry" in text
    assert "health" in text
    assert "Research intelligence graph" in text


def test_version(capsys):
    with pytest.raises(SystemExit) as exc:
        parse_args(["--version"])
    assert exc.value.code == 0
    assert "0.1.0" in capsys.readouterr().out


def test_global_defaults():
    args = parse_args(["status"])
    assert args.command == "status"
    assert args.json is False
    assert args.tankyu_dir is None


def test_global_options_before_subcommand():
    args = parse_args(["--json", "--tankyu-dir", "/data/tk", "doctor"])
    assert args.json is True
    assert args.tankyu_dir == Path("/data/tk")
    assert args.command == "doctor"


def test_global_options_after_subcommand():
    args = parse_args(["topic", "list", "--json", "--tankyu-dir", "d"])
    assert (args.command, args.action) == ("topic", "list")
    assert args.json is True
    assert args.tankyu_dir == Path("d")


def test_topic_create_defaults():
    args = parse_args(["topic", "create", "New-Topic"])
    assert args.name == "New-Topic"
    assert args.description == ""
    assert args.tags == ""


def test_topic_create_with_tags():
    args = parse_args(["topic", "create", "Systems", "--tags", "rust,c,cpp"])
    assert args.tags == "rust,c,cpp"


def test_source_add_options():
    args = parse_args(
        ["source", "add", "https://github.com/tokio-rs/tokio", "--source-type", "github-repo",
         "--role", "starred"]
    )
    assert args.url == "https://github.com/tokio-rs/tokio"
    assert args.source_type == "github-repo"
    assert args.role == "starred"
    assert args.name is None
    assert args.topic is None


def test_entry_list_filters():
    args = parse_args(
        ["entry", "list", "--state", "new", "--signal", "high", "--limit", "5", "--unclassified"]
    )
    assert args.state == "new"
    assert args.signal == "high"
    assert args.limit == 5
    assert args.unclassified is True
    assert args.source is None


def test_entry_list_defaults():
    args = parse_args(["entry", "list"])
    assert args.limit is None
    assert args.unclassified is False


def test_entry_update():
    args = parse_args(
        ["entry", "update", "33333333-3333-3333-3333-333333333333", "--state", "read"]
    )
    assert args.id == "33333333-3333-3333-3333-333333333333"
    assert args.state == "read"
    assert args.signal is None


@pytest.mark.parametrize("limit", ["-1", "many"])
def test_entry_list_bad_limit_is_usage_error(limit):
    with pytest.raises(SystemExit) as exc:
        parse_args(["entry", "list", "--limit", limit])
    assert exc.value.code == 2


@pytest.mark.parametrize("argv", [[], ["topic"], ["config"], ["bogus"]])
def test_missing_or_unknown_subcommand_is_usage_error(argv):
    with pytest.raises(SystemExit) as exc:
        parse_args(argv)
    assert exc.value.code == 2


def test_config_show():
    args = parse_args(["config", "show"])
    assert (args.command, args.action) == ("config", "show")