"""Public interface for the Open Concept Lab adapter."""

from __future__ import annotations

from .client import (
    MalformedResponseError,
    OclAPIError,
    OclClient,
    UpstreamConnectionError,
)
from .schema import ConceptPayload, MappingPayload, ReferencePayload, SourceVersionPayload
from .translator import translate_concept, translate_version

__all__ = [
    "ConceptPayload",
    "MalformedResponseError",
    "MappingPayload",
    "OclAPIError",
    "OclClient",
    "ReferencePayload",
    "SourceVersionPayload",
    "UpstreamConnectionError",
    "translate_concept",
    "translate_version",
]
