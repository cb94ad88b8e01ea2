"""Open Concept Lab configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import optional_env_var, positive_int_env_var, require_env_vars
from .errors import MissingConfigurationError
from .http_resilience import RateLimit, ResilienceConfig

DEFAULT_OCL_SERVER_URL = "https://api.openconceptlab.org"
DEFAULT_CONCEPT_FILE = "concepts.txt"
DEFAULT_CONCURRENT_FETCHES = 15
DEFAULT_REFERENCE_LIMIT = 20000
OCL_TIMEOUT_SECONDS = 60.0

# Shipped in the sample configuration; never a usable credential.
API_TOKEN_PLACEHOLDER = "NEED TO SPECIFY"


@dataclass(frozen=True, slots=True)
class OclConfig:
    """Holds OCL API configuration values."""

    server_url: str
    source_path: str
    collection_path: str
    api_token: str
    concept_file: str = DEFAULT_CONCEPT_FILE
    concurrent_fetches: int = DEFAULT_CONCURRENT_FETCHES
    reference_limit: int = DEFAULT_REFERENCE_LIMIT
    resilience: ResilienceConfig | None = None

    @property
    def http(self) -> ResilienceConfig:
        return self.resilience or default_resilience_config(self.server_url, self.api_token)


def normalize_path(path: str) -> str:
    """Return ``path`` with exactly one leading and one trailing slash."""

    stripped = path.strip().strip("/")
    if not stripped:
        return "/"
    return f"/{stripped}/"


def default_resilience_config(
    server_url: str,
    api_token: str,
    *,
    ratelimit: RateLimit | None = None,
) -> ResilienceConfig:
    return ResilienceConfig(
        name="ocl",
        base_url=server_url.rstrip("/"),
        timeout_seconds=OCL_TIMEOUT_SECONDS,
        ratelimit=ratelimit,
        default_headers={"Authorization": f"Token {api_token}"},
    )


def get_ocl_config(*, concept_file: str | None = None) -> OclConfig:
    values = require_env_vars(("OCL_SOURCE_PATH", "OCL_COLLECTION_PATH", "OCL_API_TOKEN"))
    api_token = values["OCL_API_TOKEN"]
    if api_token.startswith(API_TOKEN_PLACEHOLDER):
        raise MissingConfigurationError(
            ["OCL_API_TOKEN"], reason="still holds the placeholder value"
        )

    server_url = optional_env_var("OCL_SERVER_URL", DEFAULT_OCL_SERVER_URL).rstrip("/")
    ratelimit: RateLimit | None = None
    if optional_env_var("OCL_REQUESTS_PER_SECOND", ""):
        ratelimit = RateLimit(
            max_calls=positive_int_env_var("OCL_REQUESTS_PER_SECOND", 1), per_seconds=1.0
        )
    return OclConfig(
        server_url=server_url,
        source_path=normalize_path(values["OCL_SOURCE_PATH"]),
        collection_path=normalize_path(values["OCL_COLLECTION_PATH"]),
        api_token=api_token,
        concept_file=concept_file or optional_env_var("OCL_CONCEPT_FILE", DEFAULT_CONCEPT_FILE),
        concurrent_fetches=positive_int_env_var(
            "OCL_CONCURRENT_FETCHES", DEFAULT_CONCURRENT_FETCHES
        ),
        reference_limit=positive_int_env_var("OCL_REFERENCE_LIMIT", DEFAULT_REFERENCE_LIMIT),
        resilience=default_resilience_config(server_url, api_token, ratelimit=ratelimit),
    )
