from reflex_oidc_auth.types import OidcAddress, OidcUserInfo, ProviderMetadata


def test_userinfo_only_requires_subject():
    assert OidcUserInfo.__required_keys__ == frozenset({"sub"})


def test_userinfo_covers_standard_claim_scopes():
    keys = set(OidcUserInfo.__annotations__)
    assert {"name", "preferred_username", "email", "email_verified"} <= keys
    assert {"address", "phone_number", "phone_number_verified"} <= keys
    assert OidcUserInfo.__annotations__["address"] is OidcAddress


def test_provider_metadata_keys():
    assert set(ProviderMetadata.__annotations__) == {
        "issuer",
        "authorization_endpoint",
        "token_endpoint",
        "jwks_uri",
        "userinfo_endpoint",
        "end_session_endpoint",
        "id_token_signing_alg_values_supported",
        "scopes_supported",
        "response_types_supported",
    }
