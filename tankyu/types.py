"""Domain records of the research graph and their JSON form."""

import json
import re
import types
from dataclasses import dataclass, field, fields
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any, NamedTuple, TypeVar, Union, get_args, get_origin
from uuid import UUID

_U32_MAX = 2**32 - 1

# ── Source enums ──────────────────────────────────────────────────────────────


class SourceState(str, Enum):
    ACTIVE = "active"
    STALE = "stale"
    DORMANT = "dormant"
    PRUNED = "pruned"


class SourceType(str, Enum):
    X_ACCOUNT = "x-account"
    X_BOOKMARKS = "x-bookmarks"
    GITHUB_REPO = "github-repo"
    GITHUB_RELEASES = "github-releases"
    GITHUB_USER = "github-user"
    BLOG = "blog"
    RSS_FEED = "rss-feed"
    WEB_PAGE = "web-page"
    MANUAL = "manual"
    GITHUB_ISSUES = "github-issues"
    AGENT_REPORT = "agent-report"


class SourceRole(str, Enum):
    STARRED = "starred"
    ROLE_MODEL = "role-model"
    REFERENCE = "reference"


# ── Entry enums ───────────────────────────────────────────────────────────────


class EntryState(str, Enum):
    NEW = "new"
    SCANNED = "scanned"
    TRIAGED = "triaged"
    READ = "read"
    ARCHIVED = "archived"


class EntryType(str, Enum):
    TWEET = "tweet"
    COMMIT = "commit"
    PR = "pr"
    RELEASE = "release"
    ARTICLE = "article"
    PAGE = "page"
    REPO = "repo"
    GITHUB_ISSUE = "github-issue"
    SPIKE_REPORT = "spike-report"


class Signal(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    NOISE = "noise"


# ── Graph enums ───────────────────────────────────────────────────────────────


class EdgeType(str, Enum):
    MONITORS = "monitors"
    PRODUCED = "produced"
    YIELDS = "yields"
    RELATES_TO = "relates-to"
    SUPERSEDES = "supersedes"
    CONTRADICTS = "contradicts"
    INFORMS = "informs"
    DISCOVERED_VIA = "discovered-via"
    INSPIRED_BY = "inspired-by"
    TAGGED_WITH = "tagged-with"
    MENTIONS = "mentions"
    CITES = "cites"
    CO_OCCURS_WITH = "co-occurs-with"
    DERIVED_FROM = "derived-from"
    SYNTHESIZES = "synthesizes"


class NodeType(str, Enum):
    TOPIC = "topic"
    SOURCE = "source"
    ENTRY = "entry"
    INSIGHT = "insight"
    PROJECT = "project"
    ENTITY = "entity"


class ClassificationMethod(str, Enum):
    SOURCE_RULE = "source-rule"
    KEYWORD = "keyword"
    LLM = "llm"
    MANUAL = "manual"


# ── Insight / Entity enums ────────────────────────────────────────────────────


class InsightType(str, Enum):
    RESEARCH_NOTE = "research-note"
    SYNTHESIS = "synthesis"
    BRIEFING = "briefing"


class EntityType(str, Enum):
    PERSON = "person"
    ORGANIZATION = "organization"
    TECHNOLOGY = "technology"
    CONCEPT = "concept"
    PRODUCT = "product"
    EVENT = "event"


# ── JSON mapping ──────────────────────────────────────────────────────────────

_DATETIME_RE = re.compile(
    r"^(\d{4})-(\d{2})-(\d{2})[Tt ](\d{2}):(\d{2}):(\d{2})(?:\.(\d+))?"
    r"(Z|z|[+-]\d{2}:\d{2})$"
)


def _parse_datetime(text: str, where: str) -> datetime:
    match = _DATETIME_RE.match(text)
    if match is None:
        raise ValueError(f"{where}: invalid RFC 3339 timestamp {text!r}")
    year, month, day, hour, minute, second = (int(g) for g in match.groups()[:6])
    micro = int((match.group(7) or "")[:6].ljust(6, "0"))
    offset = match.group(8)
    if offset in ("Z", "z"):
        tz = timezone.utc
    else:
        sign = -1 if offset[0] == "-" else 1
        delta = timedelta(hours=int(offset[1:3]), minutes=int(offset[4:6]))
        tz = timezone(sign * delta)
    try:
        value = datetime(year, month, day, hour, minute, second, micro, tzinfo=tz)
    except ValueError as exc:
        raise ValueError(f"{where}: invalid timestamp {text!r}: {exc}") from None
    return value.astimezone(timezone.utc)


def _format_datetime(value: datetime) -> str:
    """Format as RFC 3339 in UTC with a trailing Z; naive values count as UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    v = value.astimezone(timezone.utc)
    text = (
        f"{v.year:04d}-{v.month:02d}-{v.day:02d}"
        f"T{v.hour:02d}:{v.minute:02d}:{v.second:02d}"
    )
    if v.microsecond:
        if v.microsecond % 1000 == 0:
            text += f".{v.microsecond // 1000:03d}"
        else:
            text += f".{v.microsecond:06d}"
    return text + "Z"


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


def _is_optional(hint: Any) -> bool:
    return get_origin(hint) in (Union, types.UnionType) and type(None) in get_args(hint)


def _decode(hint: Any, value: Any, where: str) -> Any:
    if hint is Any:
        return value
    origin = get_origin(hint)
    if origin in (Union, types.UnionType):
        if value is None:
            return None
        inner = [arg for arg in get_args(hint) if arg is not type(None)]
        return _decode(inner[0], value, where)
    if origin is list:
        if not isinstance(value, list):
            raise ValueError(f"{where}: expected an array")
        (item_hint,) = get_args(hint)
        return [_decode(item_hint, item, f"{where}[{i}]") for i, item in enumerate(value)]
    if origin is dict:
        if not isinstance(value, dict):
            raise ValueError(f"{where}: expected an object")
        _, item_hint = get_args(hint)
        return {str(k): _decode(item_hint, v, f"{where}.{k}") for k, v in value.items()}
    if isinstance(hint, type):
        if issubclass(hint, JsonRecord):
            return hint.from_dict(value)
        if issubclass(hint, Enum):
            try:
                return hint(value)
            except ValueError:
                raise ValueError(
                    f"{where}: unknown {hint.__name__} variant {value!r}"
                ) from None
        if hint is UUID:
            if not isinstance(value, str):
                raise ValueError(f"{where}: expected a UUID string")
            try:
                return UUID(value)
            except ValueError:
                raise ValueError(f"{where}: invalid UUID {value!r}") from None
        if hint is datetime:
            if not isinstance(value, str):
                raise ValueError(f"{where}: expected a timestamp string")
            return _parse_datetime(value, where)
        if hint is bool:
            if not isinstance(value, bool):
                raise ValueError(f"{where}: expected a boolean")
            return value
        if hint is int:
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"{where}: expected an integer")
            if not 0 <= value <= _U32_MAX:
                raise ValueError(f"{where}: {value} is out of range for an unsigned 32-bit integer")
            return value
        if hint is float:
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ValueError(f"{where}: expected a number")
            return float(value)
        if hint is str:
            if not isinstance(value, str):
                raise ValueError(f"{where}: expected a string")
            return value
    raise TypeError(f"{where}: unsupported field type {hint!r}")


def _encode(value: Any) -> Any:
    if isinstance(value, JsonRecord):
        return value.to_dict()
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, UUID):
        return str(value)
    if isinstance(value, datetime):
        return _format_datetime(value)
    if isinstance(value, (list, tuple)):
        return [_encode(item) for item in value]
    if isinstance(value, dict):
        return {str(k): _encode(v) for k, v in value.items()}
    return value


class _FieldSpec(NamedTuple):
    attr: str
    key: str
    hint: Any
    omit_none: bool


_SPECS: dict = {}


def _specs(cls: type) -> tuple:
    cached = _SPECS.get(cls)
    if cached is None:
        cached = tuple(
            _FieldSpec(f.name, _camel(f.name), f.type, f.metadata.get("omit_none", False))
            for f in fields(cls)
        )
        _SPECS[cls] = cached
    return cached


def _omitted() -> Any:
    """An optional field left out of the JSON when it is None."""
    return field(default=None, metadata={"omit_none": True})


R = TypeVar("R", bound="JsonRecord")


class JsonRecord:
    """Base for records stored as camelCase JSON objects."""

    def to_dict(self) -> dict:
        """Return the JSON object form, keys in declaration order."""
        out: dict = {}
        for spec in _specs(type(self)):
            value = getattr(self, spec.attr)
            if value is None and spec.omit_none:
                continue
            out[spec.key] = _encode(value)
        return out

    @classmethod
    def from_dict(cls, data: Any):
        """Build a record from its JSON object form; unknown keys are ignored."""
        if not isinstance(data, dict):
            raise ValueError(f"{cls.__name__}: expected a JSON object")
        kwargs: dict = {}
        for spec in _specs(cls):
            where = f"{cls.__name__}.{spec.key}"
            if spec.key in data:
                kwargs[spec.attr] = _decode(spec.hint, data[spec.key], where)
            elif _is_optional(spec.hint):
                kwargs[spec.attr] = None
            else:
                raise ValueError(f"{where}: missing field")
        return cls(**kwargs)

    def to_json(self) -> str:
        """Serialise to compact JSON text."""
        return json.dumps(self.to_dict(), separators=(",", ":"), ensure_ascii=False)

    @classmethod
    def from_json(cls, text):
        """Parse JSON text into a record."""
        return cls.from_dict(json.loads(text))


# ── Records ───────────────────────────────────────────────────────────────────


@dataclass(kw_only=True)
class TopicRouting(JsonRecord):
    keywords: list[str]
    min_score: float


@dataclass(kw_only=True)
class Topic(JsonRecord):
    id: UUID
    name: str
    description: str
    tags: list[str]
    projects: list[UUID]
    routing: TopicRouting | None = _omitted()
    created_at: datetime
    updated_at: datetime
    last_scanned_at: datetime | None = _omitted()
    scan_count: int


@dataclass(kw_only=True)
class Source(JsonRecord):
    id: UUID
    type: SourceType
    role: SourceRole | None = _omitted()
    name: str
    url: str
    config: dict[str, str] | None = _omitted()
    state: SourceState
    poll_interval_minutes: int | None = _omitted()
    discovered_via: UUID | None = None
    discovery_reason: str | None = None
    last_checked_at: datetime | None = None
    last_new_content_at: datetime | None = None
    check_count: int
    hit_count: int
    miss_count: int
    created_at: datetime


@dataclass(kw_only=True)
class Entry(JsonRecord):
    id: UUID
    source_id: UUID
    type: EntryType
    title: str
    url: str
    summary: str | None = None
    content_hash: str | None = None
    state: EntryState
    signal: Signal | None = None
    scanned_at: datetime
    metadata: dict[str, Any] | None = _omitted()
    created_at: datetime


@dataclass(kw_only=True)
class Edge(JsonRecord):
    id: UUID
    from_id: UUID
    from_type: NodeType
    to_id: UUID
    to_type: NodeType
    edge_type: EdgeType
    reason: str
    score: float | None = _omitted()
    method: ClassificationMethod | None = _omitted()
    created_at: datetime


@dataclass(kw_only=True)
class GraphIndex(JsonRecord):
    version: int
    edges: list[Edge]


@dataclass(kw_only=True)
class TankyuConfig(JsonRecord):
    version: int
    default_scan_limit: int
    stale_days: int
    dormant_days: int
    llm_classify: bool
    local_repo_paths: dict[str, str]
    registry_path: str | None = _omitted()


@dataclass(kw_only=True)
class Insight(JsonRecord):
    id: UUID
    type: InsightType
    title: str
    body: str
    key_points: list[str]
    citations: list[UUID]
    created_at: datetime
    updated_at: datetime
    metadata: dict[str, Any] | None = _omitted()


@dataclass(kw_only=True)
class Entity(JsonRecord):
    id: UUID
    type: EntityType
    name: str
    aliases: list[str]
    url: str | None = _omitted()
    description: str | None = _omitted()
    metadata: dict[str, Any] | None = _omitted()
    created_at: datetime
    updated_at: datetime


# ── Partial updates ───────────────────────────────────────────────────────────


@dataclass(kw_only=True)
class TopicUpdate:
    """Fields to change on a topic; None leaves a field as it is."""

    name: str | None = None
    description: str | None = None
    tags: list[str] | None = None
    routing: TopicRouting | None = None
    updated_at: datetime | None = None
    last_scanned_at: datetime | None = None
    scan_count: int | None = None


@dataclass(kw_only=True)
class SourceUpdate:
    """Fields to change on a source; None leaves a field as it is."""

    role: SourceRole | None = None
    state: SourceState | None = None
    poll_interval_minutes: int | None = None
    last_checked_at: datetime | None = None
    last_new_content_at: datetime | None = None
    check_count: int | None = None
    hit_count: int | None = None
    miss_count: int | None = None


@dataclass(kw_only=True)
class EntryUpdate:
    """Fields to change on an entry; None leaves a field as it is."""

    state: EntryState | None = None
    signal: Signal | None = None
    summary: str | None = None


@dataclass(kw_only=True)
class InsightUpdate:
    """Fields to change on an insight; None leaves a field as it is."""

    title: str | None = None
    body: str | None = None
    key_points: list[str] | None = None
    citations: list[UUID] | None = None
    updated_at: datetime | None = None


@dataclass(kw_only=True)
class GraphQuery:
    """Edge filter; each set field must match."""

    from_type: NodeType | None = None
    to_type: NodeType | None = None
    edge_type: EdgeType | None = None
    from_id: UUID | None = None
    to_id: UUID | None = None