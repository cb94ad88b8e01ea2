"""Application service synchronising a collection with a concept-graph closure."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from .projection import log_interpretation, project_references
from .reconciliation import ReconciliationPlan, reconcile
from .traversal import DEFAULT_CONCURRENCY, traverse
from .versions import resolve_version_url

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence
    from datetime import datetime

    from .model import Concept, ConceptId, Reference, SourceVersion
    from .ports.collection import CollectionSyncClient
    from .ports.fetching import ConceptRepository

log = getLogger(__name__)


@dataclass(slots=True)
class SyncCollectionResult:
    """Outcome of one reconciliation pass."""

    version_url: str
    concepts: int
    desired: int
    observed: int
    plan: ReconciliationPlan
    committed: bool

    @property
    def added(self) -> int:
        return len(self.plan.to_add) if self.committed else 0

    @property
    def deleted(self) -> int:
        return len(self.plan.to_delete) if self.committed else 0


async def sync_collection(
    *,
    repository: ConceptRepository,
    collection: CollectionSyncClient,
    seed_ids: Sequence[ConceptId],
    source_path: str,
    collection_path: str,
    concurrency: int = DEFAULT_CONCURRENCY,
    dry_run: bool = False,
    now_provider: Callable[[], datetime] | None = None,
) -> SyncCollectionResult:
    """Traverse from ``seed_ids`` and reconcile the collection to the closure found."""

    observed, versions = await _read_collection_and_versions(
        repository, collection_path, source_path
    )
    version_url = resolve_version_url(versions, now_provider=now_provider)
    log.info(
        "Collection has %s references (before). Ready to start fetching concepts",
        len(observed),
    )

    async def fetch(concept_id: ConceptId) -> Concept:
        return await repository.fetch_concept(version_url, concept_id)

    concepts = await traverse(
        seed_ids,
        fetch,
        source_url=source_path,
        concurrency=concurrency,
    )
    log_interpretation(concepts)

    desired = project_references(concepts)
    log.debug("Desired references: %s", desired)
    plan = reconcile(desired, observed)
    log.info("Adding %s", len(plan.to_add))
    log.info("Deleting %s", len(plan.to_delete))

    if dry_run:
        log.info("Dry run, not committing changes")
    else:
        await apply_plan(collection, collection_path, plan)

    return SyncCollectionResult(
        version_url=version_url,
        concepts=len(concepts),
        desired=len(desired),
        observed=len(set(observed)),
        plan=plan,
        committed=not dry_run,
    )


async def _read_collection_and_versions(
    repository: ConceptRepository, collection_path: str, source_path: str
) -> tuple[list[Reference], list[SourceVersion]]:
    # A failed read cancels its sibling before the caller closes the HTTP client.
    try:
        async with asyncio.TaskGroup() as group:
            references = group.create_task(repository.fetch_references(collection_path))
            versions = group.create_task(repository.fetch_versions(source_path))
    except ExceptionGroup as exc:
        first = exc.exceptions[0]
        raise first from first.__cause__
    return references.result(), versions.result()


async def apply_plan(
    collection: CollectionSyncClient,
    collection_path: str,
    plan: ReconciliationPlan,
) -> None:
    """Apply additions, then deletions.

    Deletions wait for the additions to complete so an interrupted run leaves
    stale references behind rather than dropping desired ones.
    """

    await collection.add_references(collection_path, plan.to_add)
    await collection.delete_references(collection_path, plan.to_delete)
