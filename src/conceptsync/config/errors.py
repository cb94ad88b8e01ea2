"""Errors that stop a sync before the first request reaches OCL.

Each error records what the operator has to change, either environment
variables or the seed file, and ``hint`` turns that into the line the CLI
prints before exiting with status 2.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path


class ConfigurationError(RuntimeError):
    """Raised when a setting is present but unusable."""

    def __init__(self, message: str, *, variables: Iterable[str] = ()) -> None:
        super().__init__(message)
        self.variables: tuple[str, ...] = tuple(variables)

    @property
    def hint(self) -> str:
        if not self.variables:
            return "Check the command line arguments"
        return f"Set {', '.join(self.variables)} in the environment or in .env"


class MissingConfigurationError(ConfigurationError):
    """Raised when required environment variables are absent, blank or placeholders."""

    def __init__(self, variables: Iterable[str], *, reason: str | None = None) -> None:
        names = sorted(variables)
        message = f"Missing configuration for: {', '.join(names)}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message, variables=names)


class SeedFileError(ConfigurationError):
    """Raised when the seed concept file cannot be read."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"Cannot read seed file: {path}", variables=("OCL_CONCEPT_FILE",))
        self.path = path

    @property
    def hint(self) -> str:
        return f"Create {self.path} or pass --concept-file (or set OCL_CONCEPT_FILE)"
