"""Errors raised by the domain engines."""

from __future__ import annotations


class NoVersionsAvailableError(LookupError):
    """Raised when a source publishes neither a released nor a HEAD version."""


class SeedParseError(ValueError):
    """Raised for a seed line that is not a concept identifier."""

    def __init__(self, line: str, *, line_number: int) -> None:
        super().__init__(f"Could not parse line {line_number}: {line!r}")
        self.line = line
        self.line_number = line_number


class ConceptFetchError(RuntimeError):
    """Raised when fetching a concept fails and the traversal has to abort."""

    def __init__(self, concept_id: str, cause: BaseException) -> None:
        super().__init__(f"Error fetching concept {concept_id}: {cause}")
        self.concept_id = concept_id
        self.cause = cause
