"""Storage interfaces for the records of the research graph.

Each store declares the operations that touch storage as abstract. Lookups
that only filter what ``list()`` returns have default implementations, which
a concrete store may override with something faster.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable
from typing import TypeVar
from uuid import UUID

from .types import (
    Edge,
    EdgeType,
    Entity,
    Entry,
    EntryUpdate,
    GraphQuery,
    Insight,
    InsightUpdate,
    Source,
    SourceUpdate,
    Topic,
    TopicUpdate,
)

_T = TypeVar("_T")


def _first(items: Iterable[_T], predicate: Callable[[_T], bool]) -> _T | None:
    return next((item for item in items if predicate(item)), None)


def _edge_matches(edge: Edge, opts: GraphQuery) -> bool:
    return (
        (opts.from_type is None or edge.from_type == opts.from_type)
        and (opts.to_type is None or edge.to_type == opts.to_type)
        and (opts.edge_type is None or edge.edge_type == opts.edge_type)
        and (opts.from_id is None or edge.from_id == opts.from_id)
        and (opts.to_id is None or edge.to_id == opts.to_id)
    )


class TopicStore(ABC):
    """Persists and queries topics."""

    @abstractmethod
    async def create(self, topic: Topic) -> None:
        """Persist a new topic."""

    async def get(self, id: UUID) -> Topic | None:
        """Return the topic with this id, or None."""
        return _first(await self.list(), lambda topic: topic.id == id)

    async def get_by_name(self, name: str) -> Topic | None:
        """Return the topic with this exact (case-sensitive) name, or None."""
        return _first(await self.list(), lambda topic: topic.name == name)

    @abstractmethod
    async def list(self) -> list[Topic]:
        """Return all topics."""

    @abstractmethod
    async def update(self, id: UUID, updates: TopicUpdate) -> Topic:
        """Apply the set fields of ``updates`` and return the stored topic."""


class SourceStore(ABC):
    """Persists and queries sources."""

    @abstractmethod
    async def create(self, source: Source) -> None:
        """Persist a new source."""

    async def get(self, id: UUID) -> Source | None:
        """Return the source with this id, or None."""
        return _first(await self.list(), lambda source: source.id == id)

    async def get_by_url(self, url: str) -> Source | None:
        """Return the source with this URL, or None."""
        return _first(await self.list(), lambda source: source.url == url)

    @abstractmethod
    async def list(self) -> list[Source]:
        """Return all sources."""

    @abstractmethod
    async def update(self, id: UUID, updates: SourceUpdate) -> Source:
        """Apply the set fields of ``updates`` and return the stored source."""


class EntryStore(ABC):
    """Persists and queries entries."""

    @abstractmethod
    async def create(self, entry: Entry) -> None:
        """Persist a new entry."""

    async def get(self, id: UUID) -> Entry | None:
        """Return the entry with this id, or None."""
        return _first(await self.list(), lambda entry: entry.id == id)

    async def get_by_url(self, url: str) -> Entry | None:
        """Return the entry with this URL, or None."""
        return _first(await self.list(), lambda entry: entry.url == url)

    async def get_by_content_hash(self, hash: str) -> Entry | None:
        """Return the entry with this content hash, or None."""
        return _first(await self.list(), lambda entry: entry.content_hash == hash)

    async def list_by_source(self, source_id: UUID) -> list[Entry]:
        """Return the entries produced by one source, in store order."""
        return [entry for entry in await self.list() if entry.source_id == source_id]

    @abstractmethod
    async def list(self) -> list[Entry]:
        """Return all entries."""

    @abstractmethod
    async def update(self, id: UUID, updates: EntryUpdate) -> Entry:
        """Apply the set fields of ``updates`` and return the stored entry."""


class InsightStore(ABC):
    """Persists and queries insights."""

    @abstractmethod
    async def create(self, insight: Insight) -> None:
        """Persist a new insight."""

    async def get(self, id: UUID) -> Insight | None:
        """Return the insight with this id, or None."""
        return _first(await self.list(), lambda insight: insight.id == id)

    @abstractmethod
    async def list(self) -> list[Insight]:
        """Return all insights."""

    @abstractmethod
    async def update(self, id: UUID, updates: InsightUpdate) -> Insight:
        """Apply the set fields of ``updates`` and return the stored insight."""


class EntityStore(ABC):
    """Persists and queries entities."""

    @abstractmethod
    async def create(self, entity: Entity) -> None:
        """Persist a new entity."""

    async def get(self, id: UUID) -> Entity | None:
        """Return the entity with this id, or None."""
        return _first(await self.list(), lambda entity: entity.id == id)

    async def get_by_name(self, name: str) -> Entity | None:
        """Return the entity with this exact (case-sensitive) name, or None."""
        return _first(await self.list(), lambda entity: entity.name == name)

    @abstractmethod
    async def list(self) -> list[Entity]:
        """Return all entities."""


class GraphStore(ABC):
    """Persists and queries the edges of the graph."""

    @abstractmethod
    async def add_edge(self, edge: Edge) -> None:
        """Add a new edge."""

    @abstractmethod
    async def remove_edge(self, id: UUID) -> None:
        """Remove the edge with this id; a missing edge is an error."""

    async def get_edges_by_node(self, node_id: UUID) -> list[Edge]:
        """Return every edge that starts or ends at the node."""
        return [
            edge
            for edge in await self.list()
            if edge.from_id == node_id or edge.to_id == node_id
        ]

    async def get_neighbors(
        self, node_id: UUID, edge_type: EdgeType | None = None
    ) -> list[Edge]:
        """Return the edges leading out of the node, optionally of one type."""
        return await self.query(GraphQuery(from_id=node_id, edge_type=edge_type))

    async def query(self, opts: GraphQuery) -> list[Edge]:
        """Return the edges matching every field set in ``opts``."""
        return [edge for edge in await self.list() if _edge_matches(edge, opts)]

    @abstractmethod
    async def list(self) -> list[Edge]:
        """Return all edges."""