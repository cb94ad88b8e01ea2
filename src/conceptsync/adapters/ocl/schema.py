"""Pydantic models describing the OCL API payloads."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, RootModel, field_validator


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


class OclBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)


class SourceVersionPayload(OclBaseModel):
    id: str
    version_url: str
    created_on: datetime


class SourceVersionList(RootModel[list[SourceVersionPayload]]):
    pass


class MappingPayload(OclBaseModel):
    to_source_url: str
    to_concept_code: str
    map_type: str
    url: str
    from_concept_url: str
    to_concept_url: str | None = None

    _normalize_to_concept_url = field_validator("to_concept_url", mode="before")(_blank_to_none)

    @field_validator("to_concept_code", mode="before")
    @classmethod
    def _stringify_code(cls, value: object) -> object:
        # numeric codes come back as JSON numbers from some deployments
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value


class ConceptPayload(OclBaseModel):
    id: str
    display_name: str
    version_url: str
    mappings: list[MappingPayload] | None = Field(default=None)

    @field_validator("id", mode="before")
    @classmethod
    def _stringify_id(cls, value: object) -> object:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value


class ReferencePayload(OclBaseModel):
    expression: str


class ReferenceList(RootModel[list[ReferencePayload]]):
    pass
