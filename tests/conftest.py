from __future__ import annotations

from typing import TYPE_CHECKING

import httpx
import pytest

from conceptsync.adapters.http_resilience import ResilientClient
from conceptsync.config.ocl import OclConfig

if TYPE_CHECKING:
    from collections.abc import Callable

    from conceptsync.config.http_resilience import ResilienceConfig

SOURCE_PATH = "/orgs/PIH/sources/PIH/"
COLLECTION_PATH = "/users/tester/collections/sync/"


@pytest.fixture
def ocl_config() -> OclConfig:
    return OclConfig(
        server_url="https://ocl.test",
        source_path=SOURCE_PATH,
        collection_path=COLLECTION_PATH,
        api_token="secret-token",
        concurrent_fetches=3,
        reference_limit=500,
    )


@pytest.fixture
def make_client_factory() -> Callable[
    [Callable[[httpx.Request], httpx.Response]], Callable[[ResilienceConfig], ResilientClient]
]:
    def build(
        handler: Callable[[httpx.Request], httpx.Response],
    ) -> Callable[[ResilienceConfig], ResilientClient]:
        async def async_handler(request: httpx.Request) -> httpx.Response:
            return handler(request)

        def factory(resilience: ResilienceConfig) -> ResilientClient:
            client = ResilientClient(resilience)
            client._client = httpx.AsyncClient(  # noqa: SLF001  # type: ignore[reportPrivateUsage]
                base_url=resilience.base_url or "",
                headers=dict(resilience.default_headers or {}),
                transport=httpx.MockTransport(async_handler),
            )
            return client

        return factory

    return build
