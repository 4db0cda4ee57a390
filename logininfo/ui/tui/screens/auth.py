"""Host login layout."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Container, Vertical
from textual.widget import Widget
from textual.widgets import Button, Input, Static

AUTH_LAYOUT_ID = "auth-layout"
POWERED_BY_TEXT = "Powered by Login Info"


class AuthLayout(Widget):
    """Sign-in form followed by a "powered by" footer.

    Plugins have no slot inside this layout. The footer text carries the
    ``powered-by`` class and sits in a direct child of ``#auth-layout``, which
    is what the layout injector searches for.
    """

    DEFAULT_CSS = """
    AuthLayout {
        height: auto;
        align: center top;
    }
    """

    def compose(self) -> ComposeResult:
        with Vertical(id=AUTH_LAYOUT_ID, classes="auth-layout"):
            yield Static("Sign in", classes="auth-title")
            yield Input(placeholder="Username", id="auth-username")
            yield Input(placeholder="Password", password=True, id="auth-password")
            yield Button("Sign in", id="auth-submit", variant="primary")
            with Container(classes="auth-footer"):
                yield Static(POWERED_BY_TEXT, classes="powered-by")
