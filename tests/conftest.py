import httpx
import pytest

from reflex_oidc_auth.oidc import default_provider

ISSUER = "https://idp.example.com"
WELL_KNOWN_URL = f"{ISSUER}/.well-known/openid-configuration"


def discovery_document(issuer: str = ISSUER, **overrides) -> dict:
    document = {
        "issuer": issuer,
        "authorization_endpoint": f"{issuer}/authorize",
        "token_endpoint": f"{issuer}/token",
        "jwks_uri": f"{issuer}/keys",
        "userinfo_endpoint": f"{issuer}/userinfo",
        "id_token_signing_alg_values_supported": ["RS256"],
        "scopes_supported": ["openid", "profile", "email"],
        "response_types_supported": ["code", "id_token", "code id_token"],
    }
    document.update(overrides)
    return document


class FakeIdentityProvider:
    """Serves canned responses keyed by URL and records what was asked."""

    def __init__(self):
        self.routes: dict = {}
        self.requests: list[httpx.Request] = []
        self.client_kwargs: list[dict] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get(str(request.url))
        if route is None:
            return httpx.Response(404)
        if callable(route):
            return route(request)
        return route


@pytest.fixture
def idp(monkeypatch):
    fake = FakeIdentityProvider()
    transport = httpx.MockTransport(fake.handler)
    real_client = httpx.AsyncClient

    def make_client(**kwargs):
        fake.client_kwargs.append(kwargs)
        return real_client(transport=transport, **kwargs)

    monkeypatch.setattr(httpx, "AsyncClient", make_client)
    return fake


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in (
        "OIDC_ISSUER_URI",
        "OIDC_CLIENT_ID",
        "OIDC_CLIENT_SECRET",
        "OIDC_SCOPES",
        "OIDC_INSECURE_SKIP_VERIFY_TLS",
    ):
        monkeypatch.delenv(name, raising=False)
    default_provider.cache_clear()
    yield
    default_provider.cache_clear()
