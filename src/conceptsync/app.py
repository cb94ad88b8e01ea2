"""Application orchestration entry points."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from logging import getLogger
from typing import TYPE_CHECKING

from conceptsync.adapters.ocl import OclClient
from conceptsync.config import get_ocl_config
from conceptsync.domain.collection_sync import SyncCollectionResult, sync_collection
from conceptsync.domain.seeds import read_seed_file

if TYPE_CHECKING:
    from conceptsync.config import OclConfig

OclClientFactory = Callable[["OclConfig"], OclClient]


log = getLogger(__name__)


def sync_ocl_collection(
    *,
    config: OclConfig | None = None,
    concept_file: str | None = None,
    concurrency: int | None = None,
    dry_run: bool = False,
    client_factory: OclClientFactory | None = None,
) -> SyncCollectionResult:
    """Synchronise the configured OCL collection with the seed list's concept closure."""

    effective_config = config or get_ocl_config(concept_file=concept_file)
    seed_file = concept_file or effective_config.concept_file
    seed_ids = read_seed_file(seed_file)
    effective_concurrency = concurrency or effective_config.concurrent_fetches
    factory = client_factory or _default_client_factory

    log.info(
        "Starting OCL collection sync: source=%s, collection=%s, concurrency=%s, dry_run=%s",
        effective_config.source_path,
        effective_config.collection_path,
        effective_concurrency,
        dry_run,
    )

    result = asyncio.run(
        _sync_async(
            factory(effective_config),
            config=effective_config,
            seed_ids=seed_ids,
            concurrency=effective_concurrency,
            dry_run=dry_run,
        )
    )

    log.info(
        f"Finished OCL collection sync: version={result.version_url}, "
        f"concepts={result.concepts}, desired={result.desired}, observed={result.observed}, "
        f"added={result.added}, deleted={result.deleted}, committed={result.committed}"
    )
    return result


async def _sync_async(
    client: OclClient,
    *,
    config: OclConfig,
    seed_ids: list[str],
    concurrency: int,
    dry_run: bool,
) -> SyncCollectionResult:
    async with client:
        return await sync_collection(
            repository=client,
            collection=client,
            seed_ids=seed_ids,
            source_path=config.source_path,
            collection_path=config.collection_path,
            concurrency=concurrency,
            dry_run=dry_run,
        )


def _default_client_factory(config: OclConfig) -> OclClient:
    return OclClient(config=config)
