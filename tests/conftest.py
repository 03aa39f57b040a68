import pytest

from kiosk_core.config import SessionConfig
from kiosk_core.schemas import MenuItemWithOptions


def make_burger() -> MenuItemWithOptions:
    """Burger with one category of every kind plus option groups."""
    return MenuItemWithOptions.model_validate({
        "id": "burger",
        "name": "Classic Burger",
        "unit_price": 8.5,
        "tax_rate": 0.09,
        "options": [
            {
                "id": "bun",
                "name": "Bun",
                "required": True,
                "multiple": False,
                "choices": [
                    {"id": "brioche", "name": "Brioche", "price": None},
                    {"id": "sesame", "name": "Sesame", "price": 0.5},
                ],
            },
            {
                "id": "sides",
                "name": "Sides",
                "required": False,
                "multiple": True,
                "choices": [
                    {"id": "fries", "name": "Fries", "price": 2.0},
                    {"id": "salad", "name": "Salad", "price": 2.5},
                ],
            },
        ],
        "topping_categories": [
            {
                "id": "size",
                "name": "Size",
                "required": True,
                "min_selections": 1,
                "max_selections": 1,
                "display_order": 1,
                "toppings": [
                    {"id": "small", "name": "Small", "unit_price": 0.0, "tax_rate": 0.09},
                    {"id": "medium", "name": "Medium", "unit_price": 1.0, "tax_rate": 0.09},
                    {"id": "large", "name": "Large", "unit_price": 2.0, "tax_rate": 0.09},
                ],
            },
            {
                "id": "extra-cheese",
                "name": "Extra Cheese",
                "min_selections": 0,
                "max_selections": 3,
                "display_order": 2,
                "toppings": [
                    {"id": "cheddar", "name": "Cheddar", "unit_price": 0.75},
                    {"id": "swiss", "name": "Swiss", "unit_price": 0.75},
                    {"id": "gouda", "name": "Gouda", "unit_price": 0.75},
                    {"id": "brie", "name": "Brie", "unit_price": 1.0},
                ],
            },
            {
                "id": "sauce",
                "name": "Sauce",
                "min_selections": 0,
                "max_selections": 5,
                "allow_multiple_same_topping": True,
                "display_order": 3,
                "toppings": [
                    {"id": "sauce-A", "name": "Ketchup", "unit_price": 0.2},
                    {"id": "sauce-B", "name": "Mayo", "unit_price": 0.2},
                    {"id": "sauce-C", "name": "Mustard", "unit_price": 0.2},
                ],
            },
            {
                "id": "sauce-side",
                "name": "Sauce on the side",
                "required": True,
                "max_selections": 1,
                "display_order": 4,
                "show_if_selection_ids": ["sauce-A", "sauce-B", "sauce-C"],
                "toppings": [
                    {"id": "on-burger", "name": "On the burger"},
                    {"id": "on-side", "name": "On the side"},
                ],
            },
        ],
    })


def make_pizza() -> MenuItemWithOptions:
    """A second item whose categories share no ids with the burger."""
    return MenuItemWithOptions.model_validate({
        "id": "pizza",
        "name": "Margherita",
        "unit_price": 11.0,
        "topping_categories": [
            {
                "id": "crust",
                "name": "Crust",
                "required": True,
                "max_selections": 1,
                "toppings": [
                    {"id": "thin", "name": "Thin"},
                    {"id": "thick", "name": "Thick"},
                ],
            },
            {
                "id": "pizza-extras",
                "name": "Extras",
                "max_selections": 0,
                "toppings": [
                    {"id": "olives", "name": "Olives"},
                    {"id": "basil", "name": "Basil"},
                ],
            },
        ],
    })


@pytest.fixture
def burger():
    return make_burger()


@pytest.fixture
def pizza():
    return make_pizza()


@pytest.fixture
def size_category(burger):
    return burger.get_topping_category("size")


@pytest.fixture
def cheese_category(burger):
    return burger.get_topping_category("extra-cheese")


@pytest.fixture
def sauce_category(burger):
    return burger.get_topping_category("sauce")


@pytest.fixture
def session_config():
    """Explicit session configuration so tests don't depend on the environment."""
    return SessionConfig(language_code="en", restaurant_id="resto-42")
