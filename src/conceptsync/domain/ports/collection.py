"""Port for writing reference changes to a remote collection."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from conceptsync.domain.model import Reference

type WriteResult = list[object]


@runtime_checkable
class CollectionSyncClient(Protocol):
    """Applies additions and deletions to a collection's references.

    Both operations return immediately with an empty result for an empty list.
    Re-adding a present reference or deleting an absent one is not an error.
    """

    async def add_references(
        self, collection_path: str, references: Sequence[Reference]
    ) -> WriteResult: ...

    async def delete_references(
        self, collection_path: str, references: Sequence[Reference]
    ) -> WriteResult: ...


__all__ = ["CollectionSyncClient", "WriteResult"]
