"""Unit tests for the navigation reducer."""

import pytest

from storefront.config.models import AuthConfig
from storefront.navigation import (
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

AUTH = AuthConfig(admin_emails=["admin@aggarwal.com"])


class TestReduce:
    """Tests for reduce()."""

    def test_initial_state(self):
        state = AppState()
        assert state.page == Page.HOME
        assert not state.is_logged_in

    def test_navigate_sets_page_and_closes_menu(self):
        state = AppState(menu_open=True, show_login=True)
        new_state = reduce(state, Navigate(Page.SHOP_ALL, category="Batteries"))
        assert new_state.page == Page.SHOP_ALL
        assert new_state.selected_category == "Batteries"
        assert new_state.menu_open is False
        assert new_state.show_login is False

    def test_navigate_accepts_page_value(self):
        assert reduce(AppState(), Navigate("contact")).page == Page.CONTACT

    def test_navigate_to_product_detail(self):
        state = reduce(AppState(), Navigate(Page.PRODUCT_DETAIL, product_id=7))
        assert state.selected_product_id == 7
        assert visible_page(state) == Page.PRODUCT_DETAIL

    def test_reducer_does_not_mutate_input(self):
        state = AppState()
        reduce(state, ToggleMenu())
        assert state.menu_open is False
        with pytest.raises(AttributeError):
            state.page = Page.ADMIN

    def test_admin_login_lands_on_admin(self):
        state = reduce(AppState(show_login=True), Login("Admin@Aggarwal.com "), AUTH)
        assert state.is_logged_in and state.is_admin
        assert state.page == Page.ADMIN
        assert state.show_login is False
        assert state.user_email == "Admin@Aggarwal.com"

    def test_customer_login_lands_on_home(self):
        state = reduce(AppState(page=Page.LOGIN), Login("shopper@example.com"), AUTH)
        assert state.is_logged_in
        assert not state.is_admin
        assert state.page == Page.HOME

    def test_navigate_to_admin_requires_role(self):
        customer = reduce(AppState(), Login("shopper@example.com"), AUTH)
        assert reduce(customer, Navigate(Page.ADMIN), AUTH).page == Page.HOME

        admin = reduce(AppState(), Login("admin@aggarwal.com"), AUTH)
        home = reduce(admin, Navigate(Page.HOME), AUTH)
        assert reduce(home, Navigate(Page.ADMIN), AUTH).page == Page.ADMIN

    def test_configured_admins_are_used(self):
        auth = AuthConfig(admin_emails=["Owner@Shop.in"])
        state = reduce(AppState(), Login("owner@shop.in"), auth)
        assert state.is_admin
        assert state.page == Page.ADMIN
        assert not reduce(AppState(), Login("admin@aggarwal.com"), auth).is_admin

    def test_default_admins_without_config(self):
        assert reduce(AppState(), Login("admin@aggarwal.com")).is_admin
        assert not reduce(AppState(), Login("owner@shop.in")).is_admin

    def test_logout_resets_everything(self):
        state = reduce(AppState(), Login("admin@aggarwal.com"), AUTH)
        state = reduce(state, ToggleMenu())
        assert reduce(state, Logout()) == AppState()

    def test_toggle_menu(self):
        state = reduce(AppState(), ToggleMenu())
        assert state.menu_open is True
        assert reduce(state, ToggleMenu()).menu_open is False

    def test_show_login(self):
        assert reduce(AppState(), ShowLogin()).show_login is True
        assert reduce(AppState(show_login=True), ShowLogin(False)).show_login is False

    def test_unknown_action(self):
        with pytest.raises(TypeError):
            reduce(AppState(), object())


class TestVisiblePage:
    """Tests for visible_page()."""

    def test_admin_page_hidden_from_non_admins(self):
        assert visible_page(AppState(page=Page.ADMIN)) == Page.HOME
        assert visible_page(AppState(page=Page.ADMIN, is_admin=True)) == Page.ADMIN

    def test_detail_without_product_falls_back(self):
        assert visible_page(AppState(page=Page.PRODUCT_DETAIL)) == Page.PRODUCTS

    @pytest.mark.parametrize("page", [Page.HOME, Page.PRODUCTS, Page.SHOP_ALL, Page.CONTACT, Page.LOGIN])
    def test_public_pages(self, page):
        assert visible_page(AppState(page=page)) == page
