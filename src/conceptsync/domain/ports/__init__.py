"""Ports implemented by adapters and consumed by the domain services."""

from __future__ import annotations

from .collection import CollectionSyncClient, WriteResult
from .fetching import ConceptFetcher, ConceptRepository

__all__ = ["CollectionSyncClient", "ConceptFetcher", "ConceptRepository", "WriteResult"]
