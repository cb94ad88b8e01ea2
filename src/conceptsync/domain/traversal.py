"""Worklist-driven traversal of the same-source concept graph.

The traversal proceeds in fan-out/fan-in batches: up to ``concurrency`` fetches
are dispatched together, the coordinator waits for the whole batch to settle,
and only then folds results into the cache and expands the worklist. Cache and
worklist are therefore only ever touched by the coordinating coroutine.
"""

from __future__ import annotations

import asyncio
from collections import deque
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from .errors import ConceptFetchError

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .model import Concept, ConceptId
    from .ports.fetching import ConceptFetcher

log = getLogger(__name__)

DEFAULT_CONCURRENCY = 15


@dataclass(slots=True)
class ConceptGraphTraversal:
    """Resolve every concept reachable from a seed set through same-source mappings."""

    fetch: ConceptFetcher
    source_url: str
    concurrency: int = DEFAULT_CONCURRENCY
    cache: dict[ConceptId, Concept] = field(default_factory=dict["ConceptId", "Concept"])
    _worklist: deque[ConceptId] = field(default_factory=deque["ConceptId"], init=False)
    _dispatched: set[ConceptId] = field(default_factory=set["ConceptId"], init=False)
    _aliases: dict[ConceptId, ConceptId] = field(
        default_factory=dict["ConceptId", "ConceptId"], init=False
    )

    def __post_init__(self) -> None:
        if self.concurrency < 1:
            raise ValueError(f"Concurrency must be at least 1, got {self.concurrency}")

    def enqueue(self, concept_ids: Iterable[ConceptId]) -> int:
        """Add identifiers to the worklist, skipping those already resolved."""

        added = 0
        for concept_id in concept_ids:
            if concept_id in self.cache:
                continue
            self._worklist.append(concept_id)
            added += 1
        return added

    async def resolve(self, concept_id: ConceptId) -> Concept:
        """Return ``concept_id`` from the cache, fetching and expanding it if needed."""

        cached = self.cache.get(concept_id)
        if cached is not None:
            log.debug("Using already-fetched %s", concept_id)
            return cached
        await self.run([concept_id])
        return self.cache[self._aliases.get(concept_id, concept_id)]

    async def run(self, seed_ids: Iterable[ConceptId]) -> dict[ConceptId, Concept]:
        """Drain the worklist and return the resolved cache."""

        self.enqueue(seed_ids)
        while self._worklist:
            batch = self._next_batch()
            if not batch:
                break
            log.info(
                "Handling batch of %s (%s left to handle)", len(batch), len(self._worklist)
            )
            results = await asyncio.gather(
                *(self.fetch(concept_id) for concept_id in batch),
                return_exceptions=True,
            )
            self._fold(batch, results)
        return self.cache

    def _next_batch(self) -> list[ConceptId]:
        batch: list[ConceptId] = []
        while self._worklist and len(batch) < self.concurrency:
            concept_id = self._worklist.popleft()
            if concept_id in self.cache or concept_id in self._dispatched:
                continue
            self._dispatched.add(concept_id)
            batch.append(concept_id)
        return batch

    def _fold(self, batch: list[ConceptId], results: list[Concept | BaseException]) -> None:
        concepts: list[Concept] = []
        for concept_id, result in zip(batch, results, strict=True):
            if isinstance(result, BaseException):
                # Nothing from a failed batch is cached, so a later run may fetch it again.
                self._dispatched.difference_update(batch)
                raise ConceptFetchError(concept_id, result) from result
            concepts.append(result)

        for concept_id, concept in zip(batch, concepts, strict=True):
            if concept.id != concept_id:
                log.warning("Requested concept %s but received %s", concept_id, concept.id)
                self._aliases[concept_id] = concept.id
            self.cache.setdefault(concept.id, concept)
            related = concept.related_concept_ids(self.source_url)
            queued = self.enqueue(related)
            log.info(
                "Got back %s which has %s related concepts (%s new)",
                concept.id,
                len(related),
                queued,
            )


async def traverse(
    seed_ids: Iterable[ConceptId],
    fetch: ConceptFetcher,
    *,
    source_url: str,
    concurrency: int = DEFAULT_CONCURRENCY,
) -> dict[ConceptId, Concept]:
    """Resolve the transitive closure of ``seed_ids`` within ``source_url``."""

    traversal = ConceptGraphTraversal(fetch=fetch, source_url=source_url, concurrency=concurrency)
    return await traversal.run(seed_ids)
