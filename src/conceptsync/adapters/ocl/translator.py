"""Translate OCL payloads into domain records."""

from __future__ import annotations

from typing import TYPE_CHECKING

from conceptsync.domain.model import Concept, Mapping, SourceVersion

if TYPE_CHECKING:
    from .schema import ConceptPayload, MappingPayload, ReferencePayload, SourceVersionPayload


def translate_mapping(payload: MappingPayload) -> Mapping:
    return Mapping(
        to_source_url=payload.to_source_url,
        to_concept_code=payload.to_concept_code,
        to_concept_url=payload.to_concept_url,
        map_type=payload.map_type,
        url=payload.url,
        from_concept_url=payload.from_concept_url,
    )


def translate_concept(payload: ConceptPayload) -> Concept:
    return Concept(
        id=payload.id,
        display_name=payload.display_name,
        version_url=payload.version_url,
        mappings=tuple(translate_mapping(mapping) for mapping in payload.mappings or ()),
    )


def translate_version(payload: SourceVersionPayload) -> SourceVersion:
    return SourceVersion(
        id=payload.id,
        version_url=payload.version_url,
        created_on=payload.created_on,
    )


def translate_references(payloads: list[ReferencePayload]) -> list[str]:
    return [payload.expression for payload in payloads]
