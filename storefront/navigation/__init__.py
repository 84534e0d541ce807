"""Page navigation and login state as a pure reducer."""

from .state import (
    Action,
    AppState,
    Login,
    Logout,
    Navigate,
    Page,
    ShowLogin,
    ToggleMenu,
    reduce,
    visible_page,
)

__all__ = [
    "Action",
    "AppState",
    "Page",
    "Navigate",
    "Login",
    "Logout",
    "ToggleMenu",
    "ShowLogin",
    "reduce",
    "visible_page",
]
