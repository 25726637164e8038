"""Integrate OpenID Connect authentication with Reflex applications."""

from .config import client_id, client_secret
from .endpoints import register_auth_endpoints
from .exceptions import (
    IssuerMismatchError,
    MetadataParseError,
    MetadataReadError,
    MetadataStatusError,
    MissingAuthorizationEndpointError,
    MissingEndpointError,
    OidcError,
    OpenIdMetadataError,
    TokenVerificationError,
)
from .oidc import (
    OpenIdMetadataProvider,
    default_provider,
    get_configured_openid_scopes,
    get_openid_metadata,
    oidc_issuer_endpoint,
)
from .state import OidcAuthState
from .tokens import verify_id_token
from .types import OidcUserInfo, ProviderMetadata
from .ui import oidc_login_button

__all__ = [
    "IssuerMismatchError",
    "MetadataParseError",
    "MetadataReadError",
    "MetadataStatusError",
    "MissingAuthorizationEndpointError",
    "MissingEndpointError",
    "OidcAuthState",
    "OidcError",
    "OidcUserInfo",
    "OpenIdMetadataError",
    "OpenIdMetadataProvider",
    "ProviderMetadata",
    "TokenVerificationError",
    "client_id",
    "client_secret",
    "default_provider",
    "get_configured_openid_scopes",
    "get_openid_metadata",
    "oidc_issuer_endpoint",
    "oidc_login_button",
    "register_auth_endpoints",
    "verify_id_token",
]
