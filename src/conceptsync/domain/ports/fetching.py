"""Ports for fetching concept data from the terminology server."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from conceptsync.domain.model import Concept, ConceptId, Reference, SourceVersion


@runtime_checkable
class ConceptFetcher(Protocol):
    """Callable port retrieving one concept, with its mappings, by identifier."""

    async def __call__(self, concept_id: ConceptId, /) -> Concept: ...


@runtime_checkable
class ConceptRepository(Protocol):
    """Read side of the terminology server used by one sync run."""

    async def fetch_versions(self, source_path: str) -> list[SourceVersion]: ...

    async def fetch_concept(self, version_url: str, concept_id: ConceptId) -> Concept: ...

    async def fetch_references(self, collection_path: str) -> list[Reference]: ...


__all__ = ["ConceptFetcher", "ConceptRepository"]
