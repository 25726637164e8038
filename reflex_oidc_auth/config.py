"""Configuration helpers for OpenID Connect authentication."""

import os

DEFAULT_SCOPES = ("openid", "profile", "email")

_TRUTHY = {"1", "true", "yes", "on"}


def issuer_uri() -> str:
    """Get the OpenID provider issuer URI from environment variables.

    Returns:
        The issuer URI from the OIDC_ISSUER_URI environment variable, exactly
        as configured (no trailing-slash normalisation).

    Raises:
        RuntimeError: If the OIDC_ISSUER_URI environment variable is not set.
    """
    oidc_issuer_uri = os.environ.get("OIDC_ISSUER_URI")
    if not oidc_issuer_uri:
        raise RuntimeError("OIDC_ISSUER_URI environment variable is not set.")
    return oidc_issuer_uri


def client_id() -> str:
    """Get the OAuth client ID from environment variables.

    Returns:
        The client ID from the OIDC_CLIENT_ID environment variable,
        or an empty string if not set.
    """
    return os.environ.get("OIDC_CLIENT_ID", "")


def client_secret() -> str:
    """Get the OAuth client secret from environment variables.

    Returns:
        The client secret from the OIDC_CLIENT_SECRET environment variable,
        or an empty string if not set.
    """
    return os.environ.get("OIDC_CLIENT_SECRET", "")


def scopes() -> list[str]:
    """Get the configured OAuth scopes from environment variables.

    OIDC_SCOPES may separate scopes with whitespace or commas. When the
    variable is not set, ``openid profile email`` is used. An empty value
    yields an empty list.

    Returns:
        The configured scopes, in the order they were given.
    """
    raw = os.environ.get("OIDC_SCOPES")
    if raw is None:
        return list(DEFAULT_SCOPES)
    return raw.replace(",", " ").split()


def insecure_skip_verify_tls() -> bool:
    """Whether TLS certificate verification is skipped when talking to the provider."""
    return os.environ.get("OIDC_INSECURE_SKIP_VERIFY_TLS", "").strip().lower() in _TRUTHY
