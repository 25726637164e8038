"""OIDC helpers.

Discovery of the configured OpenID provider: the well-known metadata document
is fetched once, validated against the configuration and cached for the life
of the provider object.
"""

import asyncio
import logging
from collections.abc import Sequence
from functools import lru_cache
from typing import Any

import httpx

from . import config
from .exceptions import (
    IssuerMismatchError,
    MetadataParseError,
    MetadataReadError,
    MetadataStatusError,
    MissingAuthorizationEndpointError,
    MissingEndpointError,
)
from .types import ProviderMetadata

logger = logging.getLogger(__name__)

WELL_KNOWN_PATH = "/.well-known/openid-configuration"
DISCOVERY_TIMEOUT = 10.0

_STRING_FIELDS = (
    "issuer",
    "authorization_endpoint",
    "token_endpoint",
    "jwks_uri",
    "userinfo_endpoint",
    "end_session_endpoint",
)
_LIST_FIELDS = (
    "id_token_signing_alg_values_supported",
    "scopes_supported",
    "response_types_supported",
)


def get_configured_openid_scopes(scopes: Sequence[str] | None = None) -> list[str]:
    """Get the scopes to request at login, making sure "openid" is present.

    Args:
        scopes: The configured scopes. If None, they are read from the
            OIDC_SCOPES environment variable.

    Returns:
        A new list with the configured scopes in their original order, with
        "openid" appended at the end when it was missing.
    """
    if scopes is None:
        scopes = config.scopes()
    effective = list(scopes)
    if "openid" not in effective:
        effective.append("openid")
    return effective


def _parse_metadata(payload: Any) -> ProviderMetadata:
    if not isinstance(payload, dict):
        raise MetadataParseError(
            f"cannot parse OpenID metadata: expected a JSON object, got {type(payload).__name__}"
        )

    parsed: dict[str, Any] = {}
    for key in _STRING_FIELDS:
        value = payload.get(key)
        if value is None:
            value = ""
        if not isinstance(value, str):
            raise MetadataParseError(f"cannot parse OpenID metadata: {key!r} must be a string")
        parsed[key] = value
    for key in _LIST_FIELDS:
        value = payload.get(key)
        if value is None:
            value = []
        if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
            raise MetadataParseError(
                f"cannot parse OpenID metadata: {key!r} must be a list of strings"
            )
        parsed[key] = list(value)
    return ProviderMetadata(**parsed)


class OpenIdMetadataProvider:
    """Fetches, validates and caches the discovery document of one provider.

    The first successful call to `get_metadata` stores the document; later
    calls return that same object without touching the network. Failed
    fetches are not cached, so the next call tries again. Concurrent callers
    on a cold cache wait for a single in-flight fetch.

    Attributes:
        issuer_uri: The configured issuer URI, compared verbatim against the
            issuer the provider exposes.
        scopes: The configured scopes, before "openid" is enforced.
        insecure_skip_verify_tls: Skip TLS certificate verification for
            requests made to the provider.
        timeout: Total timeout in seconds for requests to the provider.
    """

    def __init__(
        self,
        issuer_uri: str,
        scopes: Sequence[str] | None = None,
        insecure_skip_verify_tls: bool = False,
        timeout: float = DISCOVERY_TIMEOUT,
    ):
        self.issuer_uri = issuer_uri
        self.scopes = list(scopes or ())
        self.insecure_skip_verify_tls = insecure_skip_verify_tls
        self.timeout = timeout
        self._metadata: ProviderMetadata | None = None
        self._lock: asyncio.Lock | None = None
        self._lock_loop: asyncio.AbstractEventLoop | None = None

    @classmethod
    def from_env(cls) -> "OpenIdMetadataProvider":
        """Build a provider from the OIDC_* environment variables."""
        return cls(
            issuer_uri=config.issuer_uri(),
            scopes=config.scopes(),
            insecure_skip_verify_tls=config.insecure_skip_verify_tls(),
        )

    @property
    def metadata_url(self) -> str:
        """The well-known discovery URL derived from the issuer URI."""
        return self.issuer_uri.rstrip("/") + WELL_KNOWN_PATH

    @property
    def cached_metadata(self) -> ProviderMetadata | None:
        """The cached metadata, or None if it has not been fetched yet."""
        return self._metadata

    def configured_scopes(self) -> list[str]:
        """The effective scopes to request from this provider."""
        return get_configured_openid_scopes(self.scopes)

    def http_client(self) -> httpx.AsyncClient:
        """Create an HTTP client honouring this provider's TLS and timeout settings."""
        return httpx.AsyncClient(
            timeout=self.timeout,
            verify=not self.insecure_skip_verify_tls,
        )

    async def get_metadata(self) -> ProviderMetadata:
        """Return the provider metadata, fetching it on first use.

        Returns:
            The validated discovery document.

        Raises:
            httpx.TransportError: If the provider could not be reached.
            httpx.TimeoutException: If the whole exchange, body included,
                took longer than `timeout`.
            OpenIdMetadataError: If the response is not a valid discovery
                document for the configured issuer.
        """
        if self._metadata is not None:
            return self._metadata
        async with self._loop_lock():
            if self._metadata is None:
                self._metadata = await self._fetch_metadata()
        return self._metadata

    def _loop_lock(self) -> asyncio.Lock:
        # asyncio locks belong to one event loop; keep one per running loop.
        loop = asyncio.get_running_loop()
        if self._lock is None or self._lock_loop is not loop:
            self._lock = asyncio.Lock()
            self._lock_loop = loop
        return self._lock

    async def _fetch_metadata(self) -> ProviderMetadata:
        url = self.metadata_url
        logger.debug("Fetching OpenID metadata from %s", url)
        # httpx timeouts apply per phase; the deadline covers the whole exchange.
        try:
            async with asyncio.timeout(self.timeout):
                payload = await self._download_metadata(url)
        except TimeoutError as e:
            raise httpx.TimeoutException(
                f"fetching OpenID metadata from {url} took longer than {self.timeout}s"
            ) from e

        metadata = _parse_metadata(payload)
        self._validate(metadata)
        return metadata

    async def _download_metadata(self, url: str) -> Any:
        async with self.http_client() as client:
            async with client.stream("GET", url) as resp:
                if resp.status_code != 200:
                    raise MetadataStatusError(resp.status_code, resp.reason_phrase)
                try:
                    await resp.aread()
                except httpx.RequestError as e:
                    raise MetadataReadError(f"failed to read OpenID metadata: {e}") from e
                try:
                    return resp.json()
                except ValueError as e:
                    raise MetadataParseError(f"cannot parse OpenID metadata: {e}") from e

    def _validate(self, metadata: ProviderMetadata):
        if metadata["issuer"] != self.issuer_uri:
            raise IssuerMismatchError(self.issuer_uri, metadata["issuer"])

        if not metadata["authorization_endpoint"]:
            raise MissingAuthorizationEndpointError()

        # The remaining checks only warn: if the provider is really
        # incompatible, the login attempt itself will fail.
        if "id_token" not in " ".join(metadata["response_types_supported"]):
            logger.warning(
                "Configured OpenID provider informs response_type=id_token is unsupported. "
                "Users may not be able to login."
            )

        supported_scopes = metadata["scopes_supported"]
        for scope in self.configured_scopes():
            if scope not in supported_scopes:
                logger.warning(
                    "Configured OpenID provider informs some of the configured scopes are "
                    "unsupported. Users may not be able to login."
                )
                break


@lru_cache()
def default_provider() -> OpenIdMetadataProvider:
    """The process-wide provider configured from environment variables.

    It can be awaited from any event loop; the cold-start lock is recreated
    per running loop.
    """
    return OpenIdMetadataProvider.from_env()


async def get_openid_metadata() -> ProviderMetadata:
    """Fetch the metadata of the provider configured in the environment."""
    return await default_provider().get_metadata()


async def oidc_issuer_endpoint(service: str) -> str:
    """Fetch an endpoint URL (authorization/token/userinfo/etc) from OIDC metadata."""
    endpoint = (await get_openid_metadata()).get(service)
    if not endpoint:
        raise MissingEndpointError(service)
    return endpoint
