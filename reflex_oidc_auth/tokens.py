"""ID token checks against the keys published by the OpenID provider."""

import time
from typing import Any

from jose import jwt
from jose.exceptions import JOSEError

from .exceptions import MissingEndpointError, TokenVerificationError
from .oidc import OpenIdMetadataProvider, default_provider


def id_token_expired(id_token: str, leeway: int = 0) -> bool:
    """Check the ``exp`` claim of an ID token without verifying its signature.

    A token counts as expired ``leeway`` seconds before its ``exp``. Tokens
    that cannot be decoded, or that carry no numeric ``exp``, count as
    expired too.
    """
    try:
        claims = jwt.get_unverified_claims(id_token)
    except JOSEError:
        return True
    exp = claims.get("exp")
    if not isinstance(exp, (int, float)):
        return True
    return exp - leeway <= time.time()


async def fetch_jwks(provider: OpenIdMetadataProvider | None = None) -> dict[str, Any]:
    """Download the JSON Web Key Set advertised in the provider metadata.

    Raises:
        MissingEndpointError: If the provider does not advertise a jwks_uri.
        httpx.HTTPError: If the key set could not be downloaded.
    """
    provider = provider or default_provider()
    metadata = await provider.get_metadata()
    if not metadata["jwks_uri"]:
        raise MissingEndpointError("jwks_uri")
    async with provider.http_client() as client:
        resp = await client.get(metadata["jwks_uri"])
        resp.raise_for_status()
        return resp.json()


async def verify_id_token(
    id_token: str,
    client_id: str,
    access_token: str | None = None,
    provider: OpenIdMetadataProvider | None = None,
) -> dict[str, Any]:
    """Verify an ID token and return its claims.

    The signature is checked against the provider's key set, restricted to
    the algorithms listed in ``id_token_signing_alg_values_supported``. The
    audience must be the client ID and the issuer must match the discovered
    issuer. When an access token is given and the ID token carries an
    ``at_hash`` claim, the hash is checked too.

    Raises:
        TokenVerificationError: If the token is invalid, expired or was not
            issued for this client.
    """
    provider = provider or default_provider()
    metadata = await provider.get_metadata()
    jwks = await fetch_jwks(provider)
    try:
        return jwt.decode(
            id_token,
            jwks,
            algorithms=metadata["id_token_signing_alg_values_supported"] or None,
            audience=client_id,
            issuer=metadata["issuer"],
            access_token=access_token,
        )
    except JOSEError as e:
        raise TokenVerificationError(f"ID token verification failed: {e}") from e
