"""HTTP client for the Open Concept Lab API."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING, Literal

import httpx
from pydantic import BaseModel, ValidationError

from conceptsync.adapters.http_resilience import ResilienceConfig, ResilientClient

from .schema import ConceptPayload, ReferenceList, SourceVersionList
from .translator import translate_concept, translate_references, translate_version

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence
    from types import TracebackType

    from conceptsync.config.ocl import OclConfig
    from conceptsync.domain.model import Concept, ConceptId, Reference, SourceVersion
    from conceptsync.domain.ports.collection import CollectionSyncClient, WriteResult
    from conceptsync.domain.ports.fetching import ConceptRepository

log = getLogger(__name__)


class OclAPIError(RuntimeError):
    """Base class for failures talking to the OCL API."""

    def __init__(self, message: str, *, operation: str, url: str) -> None:
        super().__init__(f"{operation} failed ({url}): {message}")
        self.operation = operation
        self.url = url


class UpstreamConnectionError(OclAPIError):
    """Raised for transport failures and non-2xx responses."""

    def __init__(
        self,
        message: str,
        *,
        operation: str,
        url: str,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message, operation=operation, url=url)
        self.status_code = status_code


class MalformedResponseError(OclAPIError):
    """Raised when a response body is not the JSON shape the API documents."""


def _default_client_factory(config: ResilienceConfig) -> ResilientClient:
    return ResilientClient(config)


@dataclass(slots=True)
class OclClient:
    """Reads sources and collections and writes collection references.

    Use as an async context manager; one HTTP connection pool is shared by
    every request made inside the block.
    """

    config: OclConfig
    client_factory: Callable[[ResilienceConfig], ResilientClient] = field(
        default=_default_client_factory
    )
    _client: ResilientClient | None = field(default=None, init=False)

    async def __aenter__(self) -> OclClient:
        self._client = self.client_factory(self.config.http)
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def fetch_versions(self, source_path: str) -> list[SourceVersion]:
        payload = await self._request_json("Version lookup", "GET", f"{source_path}versions")
        versions = self._validate(SourceVersionList, payload, "Version lookup", source_path)
        return [translate_version(version) for version in versions.root]

    async def fetch_concept(self, version_url: str, concept_id: ConceptId) -> Concept:
        path = f"{version_url}concepts/{concept_id}"
        payload = await self._request_json(
            f"Concept fetch {concept_id}",
            "GET",
            path,
            params={"includeMappings": "true"},
        )
        concept = self._validate(ConceptPayload, payload, f"Concept fetch {concept_id}", path)
        return translate_concept(concept)

    async def fetch_references(self, collection_path: str) -> list[Reference]:
        path = f"{collection_path}references"
        payload = await self._request_json(
            "Reference read",
            "GET",
            path,
            params={"limit": str(self.config.reference_limit)},
        )
        references = self._validate(ReferenceList, payload, "Reference read", path)
        return translate_references(references.root)

    async def add_references(
        self, collection_path: str, references: Sequence[Reference]
    ) -> WriteResult:
        if not references:
            log.info("No references to add")
            return []
        path = f"{collection_path}references"
        log.info("PUT %s references to %s", len(references), path)
        payload = await self._request_json(
            "Reference add",
            "PUT",
            path,
            json={"data": {"expressions": list(references)}},
        )
        return self._messages("Reference add", payload)

    async def delete_references(
        self, collection_path: str, references: Sequence[Reference]
    ) -> WriteResult:
        if not references:
            log.info("No references to delete")
            return []
        path = f"{collection_path}references"
        log.info("DELETE %s references from %s", len(references), path)
        payload = await self._request_json(
            "Reference delete",
            "DELETE",
            path,
            json={"references": list(references)},
        )
        return self._messages("Reference delete", payload)

    async def _request_json(
        self,
        operation: str,
        method: Literal["GET", "PUT", "DELETE"],
        path: str,
        *,
        params: dict[str, str] | None = None,
        json: object = None,
    ) -> object:
        client = self._active_client()
        send = {"GET": client.get, "PUT": client.put, "DELETE": client.delete}[method]
        log.debug("%s %s", method, path)
        try:
            if json is None:
                response = await send(path, params=params)
            else:
                response = await send(path, params=params, json=json)
        except httpx.HTTPError as exc:
            raise UpstreamConnectionError(
                f"Error connecting to OCL: {exc}", operation=operation, url=path
            ) from exc

        if not response.is_success:
            raise UpstreamConnectionError(
                f"{response.status_code} {response.reason_phrase}",
                operation=operation,
                url=path,
                status_code=response.status_code,
            )

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise MalformedResponseError(
                "Response body is not valid JSON", operation=operation, url=path
            ) from exc

    @staticmethod
    def _validate[M: BaseModel](
        model: type[M], payload: object, operation: str, url: str
    ) -> M:
        try:
            return model.model_validate(payload)
        except ValidationError as exc:
            raise MalformedResponseError(str(exc), operation=operation, url=url) from exc

    @staticmethod
    def _messages(operation: str, payload: object) -> WriteResult:
        if payload is None:
            return []
        messages: WriteResult = payload if isinstance(payload, list) else [payload]
        log.info("%s response: %s", operation, messages)
        return messages

    def _active_client(self) -> ResilientClient:
        if self._client is None:
            raise RuntimeError("OclClient must be used inside 'async with'")
        return self._client


if TYPE_CHECKING:
    _repository_check: ConceptRepository = OclClient(config=...)  # type: ignore[arg-type]
    _collection_check: CollectionSyncClient = OclClient(config=...)  # type: ignore[arg-type]
