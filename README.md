# tankyu

`tankyu` is the core of a research intelligence graph. It describes the
**topics** you follow, the **sources** that feed them (GitHub repositories,
blogs, RSS feeds, X accounts and others), the **entries** those sources
produce, the **edges** between them, and **insights** and **entities**. Every
record converts to and from a JSON object with camelCase keys.

## Installation

```
pip install .
```

Install the extra `test` to run the test suite:

```
pip install ".[test]"
pytest
```

## The data model

`tankyu.types` holds the records and their enumerations. Enumeration values
are the kebab-case strings used in JSON:

```python
from tankyu.types import EntryState, Signal, SourceType, EdgeType

SourceType("github-repo") is SourceType.GITHUB_REPO
EdgeType("tagged-with") is EdgeType.TAGGED_WITH
Signal("high"), EntryState("triaged")
```

Every record (`Topic`, `Source`, `Entry`, `Edge`, `GraphIndex`,
`TankyuConfig`, `Insight`, `Entity`, `TopicRouting`) is a `JsonRecord`:

```python
from tankyu.types import Entry

entry = Entry.from_json(text)        # parse JSON text
entry = Entry.from_dict(data)        # or an already-parsed object
data = entry.to_dict()               # camelCase keys, JSON-ready values
text = entry.to_json()               # compact JSON text
```

Details of the JSON form:

- Nullable fields such as `summary`, `contentHash` and `signal` on an entry,
  or `discoveredVia` and `lastCheckedAt` on a source, are always written, as
  `null` when empty, and read as `None` when missing.
- Optional fields such as `routing`, `metadata`, `role` or `registryPath`
  are left out when empty.
- Timestamps are read as RFC 3339 with any offset, converted to UTC, and
  written in UTC with a trailing `Z`.
- Counts must be integers from 0 to 2³²−1.
- Unknown keys are ignored; a missing required field, an unknown enumeration
  value or a malformed UUID or timestamp raises `ValueError`.

Partial updates are described by `TopicUpdate`, `SourceUpdate`,
`EntryUpdate` and `InsightUpdate` (a field left as `None` stays unchanged);
edge searches by `GraphQuery`, whose set fields must all match.

## Store interfaces

`tankyu.ports` defines abstract store classes: `TopicStore`, `SourceStore`,
`EntryStore`, `InsightStore`, `EntityStore` and `GraphStore`. Their methods
are coroutines. A subclass supplies the storage operations (`create`,
`list`, `update`, and for the graph `add_edge` and `remove_edge`); the
lookups have default implementations that filter what `list()` returns:

- `get(id)`, `get_by_name(name)`, `get_by_url(url)`,
  `get_by_content_hash(hash)` return the first match or `None`;
- `EntryStore.list_by_source(source_id)` returns the entries of one source;
- `GraphStore.query(opts)` returns the edges matching a `GraphQuery`,
  `get_neighbors(node_id, edge_type)` the edges leading out of a node, and
  `get_edges_by_node(node_id)` every edge that starts or ends at it.

## Command-line helpers

`tankyu.cli.build_parser()` builds an `argparse` parser for the `status`,
`topic`, `source`, `entry`, `config`, `doctor` and `health` commands and
their subcommands, with the `--tankyu-dir` and `--json` options accepted
before or after a subcommand. `tankyu.cli.parse_args(argv)` parses a list of
arguments into a namespace and exits with status 2 on a usage error.

`tankyu.output.OutputMode.detect(json, environ, stream)` chooses how to
render: `JSON` when asked for, `PLAIN` when `NO_COLOR` is set in `environ`
or `stream` is not a terminal, `RICH` otherwise. `environ` and `stream`
default to `os.environ` and `sys.stdout`.

`tankyu.parsing` validates user input and formats values for tables:

```python
from tankyu.parsing import parse_signal, parse_tags, truncate_title, InvalidValueError

parse_signal("high")              # Signal.HIGH
parse_tags("rust, c,,cpp")        # ["rust", "c", "cpp"]
truncate_title(long_title, 60)    # at most 60 characters, ending in "…" when cut

try:
    parse_signal("loud")
except InvalidValueError as exc:
    print(exc)                    # Invalid signal 'loud'. Valid: high, medium, low, noise
```

`parse_entry_state`, `parse_source_role` and `parse_source_type` work the
same way. `signal_label` and `role_label` give a value's text, or `—` for
`None`. `check_entry_filters(unclassified, source, topic)` raises
`InvalidValueError` for filters that cannot be combined: `--source` with
`--topic`, and `--unclassified` with either.

## What this package does not do

- It has no concrete stores: nothing here reads or writes records on disk.
  To keep data you subclass the store interfaces yourself.
- It installs no `tankyu` command. The argument parser is provided, but
  nothing carries out the parsed commands: there is no status dashboard,
  topic or source management, entry listing, configuration display,
  diagnostics or source health check.