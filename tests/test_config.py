import pytest

from reflex_oidc_auth import config


def test_issuer_uri_required():
    with pytest.raises(RuntimeError, match="OIDC_ISSUER_URI"):
        config.issuer_uri()


def test_issuer_uri_is_returned_verbatim(monkeypatch):
    monkeypatch.setenv("OIDC_ISSUER_URI", "https://idp.example.com/")
    assert config.issuer_uri() == "https://idp.example.com/"


def test_client_credentials_default_to_empty():
    assert config.client_id() == ""
    assert config.client_secret() == ""


def test_scopes_default():
    assert config.scopes() == ["openid", "profile", "email"]


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("profile email", ["profile", "email"]),
        ("profile,email", ["profile", "email"]),
        (" groups, openid  email ", ["groups", "openid", "email"]),
        ("", []),
    ],
)
def test_scopes_from_env(monkeypatch, raw, expected):
    monkeypatch.setenv("OIDC_SCOPES", raw)
    assert config.scopes() == expected


@pytest.mark.parametrize(
    "raw, expected",
    [("true", True), ("1", True), ("YES", True), ("false", False), ("", False), ("0", False)],
)
def test_insecure_skip_verify_tls(monkeypatch, raw, expected):
    monkeypatch.setenv("OIDC_INSECURE_SKIP_VERIFY_TLS", raw)
    assert config.insecure_skip_verify_tls() is expected


def test_insecure_skip_verify_tls_default():
    assert config.insecure_skip_verify_tls() is False
