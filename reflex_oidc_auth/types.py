"""TypedDicts for OpenID provider metadata and user info."""

from typing import Required, TypedDict


class ProviderMetadata(TypedDict):
    """TypedDict representing an OpenID provider discovery document.

    Decoded from ``{issuer}/.well-known/openid-configuration``. Keys the
    provider omits are filled with an empty string or an empty list, so every
    key is always present. The cached instance is shared by every caller and
    must not be modified.

    Attributes:
        issuer: The canonical issuer URL of the provider.
        authorization_endpoint: URL users are redirected to for login.
        token_endpoint: URL used to exchange the authorization code.
        jwks_uri: URL of the provider's JSON Web Key Set.
        userinfo_endpoint: URL returning claims about the logged in user.
        end_session_endpoint: URL for RP-initiated logout, if any.
        id_token_signing_alg_values_supported: Algorithms used to sign ID tokens.
        scopes_supported: Scopes the provider accepts.
        response_types_supported: OAuth response types the provider accepts.
    """

    issuer: str
    authorization_endpoint: str
    token_endpoint: str
    jwks_uri: str
    userinfo_endpoint: str
    end_session_endpoint: str
    id_token_signing_alg_values_supported: list[str]
    scopes_supported: list[str]
    response_types_supported: list[str]


class OidcAddress(TypedDict, total=False):
    """The ``address`` claim (OpenID Connect Core 1.0, section 5.1.1)."""

    formatted: str
    street_address: str
    locality: str
    region: str
    postal_code: str
    country: str


class OidcUserInfo(TypedDict, total=False):
    """Claims returned by the provider's userinfo endpoint.

    Keys are the standard claims of OpenID Connect Core 1.0, section 5.1,
    grouped by the scope that requests them. Only ``sub`` is guaranteed; the
    rest depend on the scopes granted.
    Provider-specific claims are passed through untyped.
    """

    sub: Required[str]

    # profile scope
    name: str
    given_name: str
    family_name: str
    middle_name: str
    nickname: str
    preferred_username: str
    profile: str
    picture: str
    website: str
    gender: str
    birthdate: str
    zoneinfo: str
    locale: str
    updated_at: int

    # email scope
    email: str
    email_verified: bool

    # address scope
    address: OidcAddress

    # phone scope
    phone_number: str
    phone_number_verified: bool
