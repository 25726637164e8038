"""Errors raised while discovering provider metadata and validating tokens."""


class OidcError(Exception):
    """Base class for all errors raised by reflex_oidc_auth."""


class OpenIdMetadataError(OidcError):
    """The provider metadata could not be retrieved or failed validation."""


class MetadataStatusError(OpenIdMetadataError):
    """The well-known endpoint answered with a status other than 200."""

    def __init__(self, status_code: int, reason_phrase: str):
        self.status_code = status_code
        self.reason_phrase = reason_phrase
        super().__init__(
            f"cannot fetch OpenID metadata (HTTP response status = {status_code} {reason_phrase})"
        )


class MetadataReadError(OpenIdMetadataError):
    """The response body of the well-known endpoint could not be read."""


class MetadataParseError(OpenIdMetadataError):
    """The discovery document is not valid JSON or has the wrong shape."""


class IssuerMismatchError(OpenIdMetadataError):
    """The issuer exposed by the provider differs from the configured one."""

    def __init__(self, configured: str, exposed: str):
        self.configured = configured
        self.exposed = exposed
        message = (
            f"mismatch between the configured issuer_uri ({configured}) and the "
            f"exposed Issuer URI in OpenID provider metadata ({exposed})"
        )
        if configured.rstrip("/") == exposed.rstrip("/"):
            message += "; the values differ only by a trailing slash"
        super().__init__(message)


class MissingAuthorizationEndpointError(OpenIdMetadataError):
    """The provider does not expose an authorization endpoint."""

    def __init__(self):
        super().__init__("the OpenID provider does not expose an authorization endpoint")


class MissingEndpointError(OidcError):
    """An optional endpoint was requested but the provider does not advertise it."""

    def __init__(self, endpoint: str):
        self.endpoint = endpoint
        super().__init__(f"the OpenID provider does not advertise {endpoint!r}")


class TokenVerificationError(OidcError):
    """An ID token failed signature or claim verification."""
