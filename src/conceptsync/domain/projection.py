"""Project a resolved concept cache onto collection references."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping

    from .model import Concept, ConceptId, Reference

log = getLogger(__name__)


def project_references(concepts: Mapping[ConceptId, Concept]) -> list[Reference]:
    """Return the references a collection needs to represent ``concepts``.

    Each concept contributes its version URL followed by the URL of every
    mapping it carries, whatever the mapping's target source. The result keeps
    first-seen order and holds no duplicates.
    """

    references: dict[Reference, None] = {}
    for concept in concepts.values():
        references.setdefault(concept.version_url, None)
        for mapping in concept.mappings:
            references.setdefault(mapping.url, None)
    return list(references)


def log_interpretation(concepts: Mapping[ConceptId, Concept]) -> None:
    """Log a readable summary of the concepts and mappings being synchronised."""

    log.info("=== Interpretation ===")
    for concept in concepts.values():
        log.info("Concept: %s", concept.display_name)
        for mapping in concept.mappings:
            log.info("Mapping: %s", mapping.describe())
