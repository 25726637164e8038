"""UI helpers and components for OpenID Connect auth pages and buttons."""

import reflex as rx

from .state import OidcAuthState


def oidc_login_button(*children) -> rx.Component:
    """Return a login button component that initiates the OpenID Connect login.

    If `children` are provided they will be placed inside the clickable
    element; otherwise a default button label is used.
    """
    if not children:
        children = [rx.button("Login")]
    return rx.el.div(
        *children,
        on_click=OidcAuthState.redirect_to_login,
    )


def _authentication_loading_page() -> rx.Component:
    """Small loading page shown while authentication is validated.

    This page is registered by the package as the callback target when the
    authorization response is being processed. Errors from the callback are
    displayed in place of the spinner.
    """
    return rx.container(
        rx.vstack(
            rx.cond(
                OidcAuthState.error_message,
                rx.callout(OidcAuthState.error_message, color_scheme="red"),
                rx.cond(
                    ~rx.State.is_hydrated | ~OidcAuthState.userinfo,
                    rx.hstack(
                        rx.heading("Validating Authentication..."),
                        rx.spinner(),
                        width="50%",
                        justify="between",
                    ),
                    rx.heading("Redirecting to app..."),
                ),
            ),
        ),
    )
