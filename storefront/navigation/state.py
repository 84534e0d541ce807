"""Storefront session and navigation state.

State changes are expressed as actions applied by reduce(), which returns a
new AppState and never mutates its input. The caller owns the current state.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Union

from storefront.config.models import AuthConfig


class Page(str, Enum):
    HOME = "home"
    PRODUCTS = "products"
    SHOP_ALL = "shop_all"
    CONTACT = "contact"
    LOGIN = "login"
    ADMIN = "admin"
    PRODUCT_DETAIL = "product_detail"


@dataclass(frozen=True)
class AppState:
    """What one visitor is looking at and who they are signed in as."""

    page: Page = Page.HOME
    selected_category: Optional[str] = None
    selected_product_id: Optional[int] = None
    is_logged_in: bool = False
    is_admin: bool = False
    user_email: Optional[str] = None
    menu_open: bool = False
    show_login: bool = False


@dataclass(frozen=True)
class Navigate:
    page: Page
    category: Optional[str] = None
    product_id: Optional[int] = None


@dataclass(frozen=True)
class Login:
    """Sign-in by an email the identity provider has already verified."""

    email: str


@dataclass(frozen=True)
class Logout:
    pass


@dataclass(frozen=True)
class ToggleMenu:
    pass


@dataclass(frozen=True)
class ShowLogin:
    visible: bool = True


Action = Union[Navigate, Login, Logout, ToggleMenu, ShowLogin]


def reduce(state: AppState, action: Action, auth: Optional[AuthConfig] = None) -> AppState:
    """Return the state that results from applying ``action`` to ``state``.

    ``auth`` decides which signed-in emails get the admin role; the
    configured defaults apply when it is omitted.

    Raises:
        TypeError: If ``action`` is not a known action type
    """
    if isinstance(action, Navigate):
        page = Page(action.page)
        if page == Page.ADMIN and not state.is_admin:
            page = Page.HOME
        return replace(
            state,
            page=page,
            selected_category=action.category,
            selected_product_id=action.product_id,
            menu_open=False,
            show_login=False,
        )

    if isinstance(action, Login):
        is_admin = (auth or AuthConfig()).is_admin(action.email)
        return replace(
            state,
            page=Page.ADMIN if is_admin else Page.HOME,
            selected_category=None,
            selected_product_id=None,
            is_logged_in=True,
            is_admin=is_admin,
            user_email=action.email.strip(),
            menu_open=False,
            show_login=False,
        )

    if isinstance(action, Logout):
        return AppState()

    if isinstance(action, ToggleMenu):
        return replace(state, menu_open=not state.menu_open)

    if isinstance(action, ShowLogin):
        return replace(state, show_login=action.visible)

    raise TypeError(f"Unknown navigation action: {type(action).__name__}")


def visible_page(state: AppState) -> Page:
    """The page to render for ``state``.

    The admin dashboard is only shown to admins, and the detail page only
    when a product is selected; anything else falls back to a public page.
    """
    if state.page == Page.ADMIN:
        return Page.ADMIN if state.is_admin else Page.HOME
    if state.page == Page.PRODUCT_DETAIL and state.selected_product_id is None:
        return Page.PRODUCTS
    return state.page
