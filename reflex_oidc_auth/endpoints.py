"""Helpers to register authentication endpoints on a Reflex app."""

from typing import Callable

import reflex as rx

from .state import AUTHORIZATION_CODE_ENDPOINT, OidcAuthState
from .ui import _authentication_loading_page


def register_auth_endpoints(
    app: rx.App,
    loading_page: Callable[[], rx.Component] = _authentication_loading_page,
):
    """Register the OpenID Connect callback endpoint with the Reflex app.

    The callback page receives the authorization response from the provider,
    exchanges the authorization code for tokens and redirects the user back
    to the page that started the login.
    """
    if not isinstance(app, rx.App):
        raise TypeError("The app must be an instance of reflex.App.")
    app.add_page(
        loading_page,
        route=AUTHORIZATION_CODE_ENDPOINT,
        on_load=OidcAuthState.auth_callback,
        title="OpenID Connect Auth Callback",
    )
