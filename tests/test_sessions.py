"""
Tests for the customization and order sessions.

Run with: pytest tests/test_sessions.py -v
"""

import logging

import pytest

import kiosk_core.config as config_mod
from kiosk_core.customization import (
    CustomizationSession,
    EmptyCartError,
    InvalidTransitionError,
    OrderSession,
    OrderStep,
    OrderType,
    ValidationError,
)
from kiosk_core.schemas import SelectedOption, ToppingSelection, find_selection


# =============================================================================
# CustomizationSession Tests
# =============================================================================

class TestCustomizationSession:
    """Tests for the per-item customization session."""

    def test_starts_with_initial_selections(self, burger):
        session = CustomizationSession(burger)
        assert session.selected_toppings["size"] == (ToppingSelection("small"),)
        assert session.selected_options == (SelectedOption("bun", ("brioche",)),)
        assert session.quantity == 1
        assert session.special_instructions == ""
        assert session.is_valid()

    def test_toggles_route_through_reducers(self, burger):
        session = CustomizationSession(burger)
        session.toggle_topping("size", "large")
        session.toggle_topping("sauce", "sauce-A", 3)
        session.toggle_topping("sauce", "sauce-B", 4)
        session.toggle_choice("sides", "fries")

        assert session.selected_toppings["size"] == (ToppingSelection("large"),)
        assert find_selection(session.selected_toppings, "sauce", "sauce-B").quantity == 2
        assert session.selected_options[-1] == SelectedOption("sides", ("fries",))

    def test_unknown_category_is_logged_and_ignored(self, burger, caplog):
        session = CustomizationSession(burger)
        before = session.selected_toppings
        with caplog.at_level(logging.WARNING, logger="kiosk_core"):
            session.toggle_topping("crust", "thin")
        assert session.selected_toppings == before
        assert "Unknown topping category crust" in caplog.text

    def test_unknown_topping_is_logged_and_ignored(self, burger, caplog):
        session = CustomizationSession(burger)
        with caplog.at_level(logging.WARNING, logger="kiosk_core"):
            session.toggle_topping("size", "xxl")
        assert session.selected_toppings["size"] == (ToppingSelection("small"),)
        assert "Unknown topping xxl" in caplog.text

    def test_unknown_choice_is_logged_and_ignored(self, burger, caplog):
        session = CustomizationSession(burger)
        with caplog.at_level(logging.WARNING, logger="kiosk_core"):
            session.toggle_choice("bun", "rye")
            session.toggle_choice("ghost", "x")
        assert session.selected_options == (SelectedOption("bun", ("brioche",)),)
        assert "Unknown choice rye" in caplog.text
        assert "Unknown option group ghost" in caplog.text

    def test_switching_item_resets_everything(self, burger, pizza):
        session = CustomizationSession(burger)
        session.toggle_topping("extra-cheese", "cheddar")
        session.set_quantity(3)
        session.set_special_instructions("no onions")

        session.open_item(pizza)
        assert session.menu_item.id == "pizza"
        assert session.selected_toppings == {"crust": (ToppingSelection("thin"),)}
        assert session.selected_options == ()
        assert session.quantity == 1
        assert session.special_instructions == ""

    def test_reopening_same_item_keeps_selections(self, burger):
        session = CustomizationSession(burger)
        session.toggle_topping("size", "medium")
        session.open_item(burger.model_copy())
        assert session.selected_toppings["size"] == (ToppingSelection("medium"),)

    @pytest.mark.parametrize("requested,expected", [(0, 1), (-4, 1), (3, 3), (500, 99)])
    def test_quantity_is_clamped(self, burger, monkeypatch, requested, expected):
        monkeypatch.setattr(config_mod, "MAX_LINE_ITEM_QUANTITY", 99)
        session = CustomizationSession(burger)
        assert session.set_quantity(requested) == expected

    def test_issues_reflect_current_state(self, burger):
        session = CustomizationSession(burger)
        session.toggle_topping("size", "small")
        assert not session.is_valid()
        assert [issue.target_id for issue in session.issues] == ["size"]

    def test_visible_categories_follow_selections(self, burger):
        session = CustomizationSession(burger)
        assert "sauce-side" not in [c.id for c in session.visible_categories]
        session.toggle_topping("sauce", "sauce-C")
        assert "sauce-side" in [c.id for c in session.visible_categories]

    def test_build_leaves_out_hidden_categories(self, burger):
        session = CustomizationSession(burger)
        # "sauce-side" starts pre-selected but stays hidden without a sauce
        assert "sauce-side" in session.selected_toppings
        item = session.build_cart_item()
        assert "sauce-side" not in item.selected_toppings
        assert item.selected_toppings["size"] == (ToppingSelection("small"),)

    def test_build_with_unlocked_category(self, burger):
        session = CustomizationSession(burger)
        session.toggle_topping("sauce", "sauce-A")
        session.toggle_topping("sauce-side", "on-side")
        item = session.build_cart_item()
        assert item.selected_toppings["sauce-side"] == (ToppingSelection("on-side"),)

    def test_edit_existing_cart_item(self, burger):
        session = CustomizationSession(burger)
        session.toggle_topping("size", "large")
        session.set_quantity(2)
        session.set_special_instructions("extra crispy")
        original = session.build_cart_item()

        editing = CustomizationSession.from_cart_item(original)
        assert editing.editing_item_id == original.id
        assert editing.selected_toppings == original.selected_toppings
        assert editing.quantity == 2
        assert editing.special_instructions == "extra crispy"

        editing.toggle_topping("size", "medium")
        replacement = editing.build_cart_item()
        assert replacement.id == original.id
        assert replacement.selected_toppings["size"] == (ToppingSelection("medium"),)
        assert original.selected_toppings["size"] == (ToppingSelection("large"),)


# =============================================================================
# OrderSession Tests
# =============================================================================

class TestOrderSession:
    """Tests for a whole kiosk visit."""

    def _at_menu(self, session_config, order_type=OrderType.TAKEAWAY, table_number=None):
        order = OrderSession(session_config)
        order.start()
        order.choose_order_type(order_type, table_number)
        return order

    def test_uses_explicit_config(self, session_config):
        order = OrderSession(session_config)
        assert order.config.restaurant_id == "resto-42"
        assert order.step == OrderStep.WELCOME

    def test_default_config_from_env(self):
        order = OrderSession()
        assert order.config.language_code in config_mod.SUPPORTED_LANGUAGES

    def test_choose_order_type_moves_to_menu(self, session_config):
        order = self._at_menu(session_config, OrderType.DINE_IN, "12")
        assert order.step == OrderStep.MENU
        assert order.order_type == OrderType.DINE_IN
        assert order.table_number == "12"

    def test_add_item_to_cart(self, session_config, burger):
        order = self._at_menu(session_config)
        customization = order.open_item(burger)
        customization.toggle_topping("size", "large")
        item = order.add_to_cart()

        assert order.step == OrderStep.CART
        assert order.cart == (item,)
        assert order.customization is None

    def test_failed_build_keeps_customization_open(self, session_config, burger, monkeypatch):
        monkeypatch.setattr(config_mod, "MAX_SPECIAL_INSTRUCTIONS_LENGTH", 5)
        order = self._at_menu(session_config)
        order.open_item(burger).set_special_instructions("a very long note")
        with pytest.raises(ValidationError):
            order.add_to_cart()
        assert order.step == OrderStep.CUSTOMIZE_ITEM
        assert order.cart == ()
        assert order.customization is not None

    def test_add_without_customization_fails(self, session_config):
        order = self._at_menu(session_config)
        with pytest.raises(RuntimeError):
            order.add_to_cart()

    def test_edit_replaces_line_item(self, session_config, burger, pizza):
        order = self._at_menu(session_config)
        order.open_item(burger)
        first = order.add_to_cart()
        order.back_to_menu()
        order.open_item(pizza)
        order.add_to_cart()

        editing = order.edit_cart_item(first.id)
        assert order.step == OrderStep.CUSTOMIZE_ITEM
        editing.set_quantity(3)
        order.add_to_cart()

        assert [i.id for i in order.cart][0] == first.id
        assert order.cart[0].quantity == 3
        assert len(order.cart) == 2

    def test_edit_unknown_item_fails(self, session_config):
        order = self._at_menu(session_config)
        order.view_cart()
        with pytest.raises(KeyError):
            order.edit_cart_item("nope")

    def test_cart_quantity_and_removal(self, session_config, burger):
        order = self._at_menu(session_config)
        order.open_item(burger)
        item = order.add_to_cart()

        order.update_item_quantity(item.id, 4)
        assert order.cart[0].quantity == 4
        order.remove_item(item.id)
        assert order.cart == ()

    def test_confirm_empty_cart_fails(self, session_config):
        order = self._at_menu(session_config)
        order.view_cart()
        with pytest.raises(EmptyCartError):
            order.confirm()
        assert order.step == OrderStep.CART

    def test_confirm(self, session_config, burger, caplog):
        order = self._at_menu(session_config)
        order.open_item(burger).set_quantity(2)
        order.add_to_cart()
        with caplog.at_level(logging.INFO, logger="kiosk_core"):
            confirmed = order.confirm()
        assert order.step == OrderStep.CONFIRMATION
        assert confirmed == order.cart
        assert "resto-42" in caplog.text

    def test_instructions_not_logged_at_info(self, session_config, burger, caplog):
        order = self._at_menu(session_config)
        order.open_item(burger).set_special_instructions("call me at 555-0100")
        with caplog.at_level(logging.INFO, logger="kiosk_core"):
            order.add_to_cart()
            order.confirm()
        assert "555-0100" not in caplog.text

    def test_cannot_open_new_item_from_cart(self, session_config, burger, pizza):
        order = self._at_menu(session_config)
        order.open_item(burger)
        order.add_to_cart()
        with pytest.raises(InvalidTransitionError):
            order.open_item(pizza)
        assert order.step == OrderStep.CART
        assert order.customization is None

        order.back_to_menu()
        assert order.open_item(pizza).menu_item.id == "pizza"
        assert order.step == OrderStep.CUSTOMIZE_ITEM

    def test_cannot_open_item_from_welcome(self, session_config, burger):
        order = OrderSession(session_config)
        with pytest.raises(InvalidTransitionError):
            order.open_item(burger)

    def test_reset(self, session_config, burger):
        order = self._at_menu(session_config, OrderType.DINE_IN, "7")
        order.open_item(burger)
        order.add_to_cart()
        order.reset()
        assert order.step == OrderStep.WELCOME
        assert order.order_type is None
        assert order.cart == ()
        assert order.table_number is None
        assert order.customization is None
