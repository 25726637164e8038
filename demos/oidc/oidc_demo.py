"""Welcome to Reflex! This file outlines the steps to create a basic app."""

import reflex as rx

from reflex_oidc_auth import OidcAuthState, oidc_login_button, register_auth_endpoints


def index():
    return rx.container(
        rx.vstack(
            rx.heading("OpenID Connect Auth Demo"),
            rx.cond(
                rx.State.is_hydrated,
                rx.cond(
                    OidcAuthState.userinfo,
                    rx.vstack(
                        rx.text(f"Welcome, {OidcAuthState.userinfo['name']}!"),
                        rx.text(OidcAuthState.userinfo.to_string()),
                        rx.button("Logout", on_click=OidcAuthState.redirect_to_logout),
                    ),
                    oidc_login_button(),
                ),
                rx.spinner(),
            ),
        ),
    )


app = rx.App()
app.add_page(index, title="OpenID Connect Auth Demo")
register_auth_endpoints(app)
