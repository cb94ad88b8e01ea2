"""Domain records for concepts, mappings and source versions.

Records are immutable once built; the traversal cache owns concepts for the
lifetime of one run and nothing else mutates them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datetime import datetime

type ConceptId = str
type Reference = str

HEAD_VERSION_ID = "HEAD"


@dataclass(frozen=True, slots=True, kw_only=True)
class Mapping:
    """Directed relation from the owning concept to a target concept."""

    to_source_url: str
    to_concept_code: str
    map_type: str
    url: str
    from_concept_url: str
    to_concept_url: str | None = None

    @property
    def target_description(self) -> str:
        return self.to_concept_url or f"{self.to_source_url}{self.to_concept_code}"

    def describe(self) -> str:
        return f"{self.from_concept_url} {self.map_type} {self.target_description}"


@dataclass(frozen=True, slots=True, kw_only=True)
class Concept:
    id: ConceptId
    display_name: str
    version_url: str
    mappings: tuple[Mapping, ...] = field(default_factory=tuple)

    def related_concept_ids(self, source_url: str) -> list[ConceptId]:
        """Target codes of mappings that stay within ``source_url``."""

        return [
            mapping.to_concept_code
            for mapping in self.mappings
            if mapping.to_source_url == source_url
        ]


@dataclass(frozen=True, slots=True, kw_only=True)
class SourceVersion:
    id: str
    version_url: str
    created_on: datetime

    @property
    def is_head(self) -> bool:
        return self.id == HEAD_VERSION_ID
