"""Reflex state for OpenID Connect authentication."""

import base64
import datetime
import hashlib
import logging
import os
import secrets
from urllib.parse import urlencode, urlparse

import httpx
import reflex as rx

from .config import client_id, client_secret
from .exceptions import OidcError
from .oidc import default_provider
from .tokens import id_token_expired, verify_id_token
from .types import OidcUserInfo

logger = logging.getLogger(__name__)

AUTHORIZATION_CODE_ENDPOINT = os.environ.get(
    "OIDC_AUTHORIZATION_CODE_ENDPOINT", "/authorization-code/callback"
)


class OidcAuthState(rx.State):
    """Reflex state class for managing OpenID Connect authentication.

    This state class handles the OAuth 2.0 Authorization Code flow with PKCE
    against the configured OpenID provider. Endpoints come from the provider's
    discovery document and the requested scopes always include "openid".

    Attributes:
        access_token: The OAuth 2.0 access token stored in local storage.
        id_token: The OpenID Connect ID token stored in local storage.
        error_message: Error message for authentication failures.
    """

    access_token: str = rx.LocalStorage()
    id_token: str = rx.LocalStorage()
    error_message: str

    _redirect_to_url: str
    _app_state: str
    _code_verifier: str

    async def _validate_tokens(self, expiration_only: bool = False) -> bool:
        if not self.access_token or not self.id_token:
            return False

        # Access tokens may be opaque, so expiry is judged on the ID token.
        if id_token_expired(self.id_token):
            return False

        if expiration_only:
            return True

        try:
            await verify_id_token(
                self.id_token,
                client_id=client_id(),
                access_token=self.access_token,
            )
        except (OidcError, httpx.HTTPError) as e:
            logger.warning("ID token verification failed: %s", e)
            return False

        return True

    @rx.var(interval=datetime.timedelta(minutes=30))
    async def userinfo(self) -> OidcUserInfo | None:
        """Get the authenticated user's information from the OpenID provider.

        This property retrieves the user's profile information from the
        discovered userinfo endpoint using the stored access token. The result
        is cached for 30 minutes and automatically revalidated.

        Returns:
            OidcUserInfo containing user profile data if authentication is valid,
            None if tokens are invalid, the provider has no userinfo endpoint
            or the request fails.
        """
        if not await self._validate_tokens(expiration_only=True):
            return None

        provider = default_provider()
        try:
            metadata = await provider.get_metadata()
            if not metadata["userinfo_endpoint"]:
                return None
            async with provider.http_client() as client:
                resp = await client.get(
                    metadata["userinfo_endpoint"],
                    headers={"Authorization": f"Bearer {self.access_token}"},
                )
                resp.raise_for_status()
                return OidcUserInfo(resp.json())
        except (OidcError, httpx.HTTPError, ValueError) as e:
            logger.warning("Fetching userinfo failed: %s", e)
            return None

    def _redirect_uri(self) -> str:
        current_url = urlparse(self.router.url)
        return current_url._replace(
            path=AUTHORIZATION_CODE_ENDPOINT,
            query=None,
            fragment=None,
        ).geturl()

    def _index_uri(self) -> str:
        current_url = urlparse(self.router.url)
        return current_url._replace(path="/", query=None, fragment=None).geturl()

    def _auth_error(self, message: str):
        self.error_message = message
        return rx.toast.error("Authentication error")

    @rx.event
    async def redirect_to_login(self):
        """Initiate the OAuth 2.0 authorization code flow with PKCE.

        This method generates the necessary state and code verifier for PKCE,
        constructs the authorization URL from the discovered metadata, and
        redirects the user to the provider's authorization endpoint.

        Returns:
            A redirect response to the authorization endpoint, or an error
            toast if the provider metadata is unavailable.
        """
        if await self._validate_tokens():
            return rx.toast("You are logged in.")

        provider = default_provider()
        try:
            metadata = await provider.get_metadata()
        except (OidcError, httpx.HTTPError) as e:
            logger.warning("Cannot start login: %s", e)
            return self._auth_error(f"Cannot reach the OpenID provider: {e}")

        # store app state and code verifier in session
        self._app_state = secrets.token_urlsafe(64)
        self._code_verifier = secrets.token_urlsafe(64)
        self._redirect_to_url = self.router.url

        # calculate code challenge
        hashed = hashlib.sha256(self._code_verifier.encode("ascii")).digest()
        encoded = base64.urlsafe_b64encode(hashed)
        code_challenge = encoded.decode("ascii").strip("=")

        # get request params
        query_params = {
            "client_id": client_id(),
            "redirect_uri": self._redirect_uri(),
            "scope": " ".join(provider.configured_scopes()),
            "state": self._app_state,
            "code_challenge": code_challenge,
            "code_challenge_method": "S256",
            "response_type": "code",
            "response_mode": "query",
        }

        # build request_uri
        request_uri = f"{metadata['authorization_endpoint']}?{urlencode(query_params)}"
        return rx.redirect(request_uri)

    @rx.event
    async def redirect_to_logout(self):
        """Log the user out, at the provider when it supports RP-initiated logout.

        If the discovery document advertises an ``end_session_endpoint`` the
        user is redirected there with the ID token hint; otherwise the tokens
        are only cleared locally and the user is sent to the index page.

        Returns:
            A redirect response to the end session endpoint or the index page.
        """
        id_token = self.id_token
        index_uri = self._index_uri()
        self.reset()

        try:
            metadata = await default_provider().get_metadata()
        except (OidcError, httpx.HTTPError) as e:
            logger.warning("Cannot reach the OpenID provider for logout: %s", e)
            return rx.redirect(index_uri)

        if not metadata["end_session_endpoint"]:
            return rx.redirect(index_uri)

        query_params = {
            "id_token_hint": id_token,
            "state": secrets.token_urlsafe(64),
            "post_logout_redirect_uri": index_uri,
        }
        request_uri = f"{metadata['end_session_endpoint']}?{urlencode(query_params)}"
        return rx.redirect(request_uri)

    @rx.event
    async def auth_callback(self):
        """Handle the OAuth 2.0 authorization callback from the provider.

        This method is called when the user is redirected back from the
        authorization endpoint. It validates the state parameter to prevent
        CSRF attacks, exchanges the authorization code for tokens using PKCE,
        and stores the tokens for future use.

        Returns:
            A redirect response to the original requested URL, or an error toast
            if authentication fails.
        """
        headers = {"Content-Type": "application/x-www-form-urlencoded"}
        code = self.router.url.query_parameters.get("code")
        app_state = self.router.url.query_parameters.get("state")
        if app_state != self._app_state:
            return self._auth_error("App state mismatch. Possible CSRF attack.")
        if not code:
            return self._auth_error("No code provided in the callback.")
        query_params = {
            "grant_type": "authorization_code",
            "code": code,
            "redirect_uri": self._redirect_uri(),
            "code_verifier": self._code_verifier,
        }

        provider = default_provider()
        try:
            metadata = await provider.get_metadata()
            async with provider.http_client() as client:
                resp = await client.post(
                    metadata["token_endpoint"],
                    headers=headers,
                    data=query_params,
                    auth=(client_id(), client_secret()),
                )
                resp.raise_for_status()
                exchange = resp.json()
        except (OidcError, httpx.HTTPError, ValueError) as e:
            logger.warning("Token exchange failed: %s", e)
            return self._auth_error(f"Token exchange failed: {e}")

        # Get tokens and validate
        if str(exchange.get("token_type", "")).lower() != "bearer":
            return self._auth_error("Unsupported token type. Should be 'Bearer'.")
        if not exchange.get("access_token") or not exchange.get("id_token"):
            return self._auth_error("The token response is missing tokens.")

        self.access_token = exchange["access_token"]
        self.id_token = exchange["id_token"]
        if not await self._validate_tokens():
            self.access_token = self.id_token = ""
            return self._auth_error("The ID token could not be verified.")

        return rx.redirect(self._redirect_to_url)
