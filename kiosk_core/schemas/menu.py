"""
Menu Descriptor Schemas
=======================

Pydantic models for the menu data a customization screen works from. A menu
item arrives from the menu loader as a plain dict and is validated once with
`MenuItemWithOptions.model_validate(...)`; afterwards it is read-only.

Menu Item Concepts:
-------------------
1. **Option Groups**: Alternatives chosen per item (e.g., "Bread": white,
   brown). A group is `required` and/or allows `multiple` choices.

2. **Topping Categories**: Named groups of toppings with shared cardinality
   rules (`min_selections`, `max_selections`, `required`).

3. **Category Kind**: How a category behaves when tapped, derived once at load
   time from its limits:
   - SINGLE: `max_selections == 1`, radio semantics
   - QUANTITY_SUM: `allow_multiple_same_topping`, the max bounds the sum of
     per-topping quantities
   - MULTI: everything else, the max bounds the number of distinct toppings

4. **Conditional Display**: A category with `show_if_selection_ids` is only
   shown once one of those toppings is selected (e.g., "Sauce amount" after a
   sauce is picked).

Usage:
------
    menu_item = MenuItemWithOptions.model_validate({
        "id": "burger",
        "name": "Burger",
        "unit_price": 8.5,
        "topping_categories": [
            {"id": "size", "name": "Size", "required": True, "max_selections": 1,
             "toppings": [{"id": "small", "name": "Small"}]},
        ],
    })
"""

from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

# Categories without an explicit display order sort after ordered ones
DEFAULT_DISPLAY_ORDER = 1000


class CategoryKind(str, Enum):
    """Selection behavior of a topping category."""
    SINGLE = "single"
    MULTI = "multi"
    QUANTITY_SUM = "quantity_sum"


def derive_category_kind(max_selections: Optional[int], allow_multiple_same_topping: bool) -> CategoryKind:
    """Pick the selection behavior for a category from its raw limits."""
    if max_selections == 1:
        return CategoryKind.SINGLE
    if allow_multiple_same_topping:
        return CategoryKind.QUANTITY_SUM
    return CategoryKind.MULTI


class Topping(BaseModel):
    """
    A single topping a customer can put on an item.

    Attributes:
        id: Topping identifier
        name: Display name (e.g., "Extra Cheese")
        unit_price: Price per unit in the restaurant's currency
        tax_rate: Tax rate as a fraction (0.09 for 9%)
    """
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    unit_price: float = 0.0
    tax_rate: float = 0.0
    description: Optional[str] = None


class ToppingCategory(BaseModel):
    """
    A named group of toppings sharing cardinality rules.

    `max_selections` of None means unbounded. Menus exported from the admin
    screens store "unbounded" as 0, which is accepted and normalized to None.
    """
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: Optional[str] = None
    min_selections: int = Field(default=0, ge=0)
    max_selections: Optional[int] = Field(default=None, ge=1)
    required: bool = False
    toppings: List[Topping] = Field(default_factory=list)
    display_order: int = DEFAULT_DISPLAY_ORDER
    allow_multiple_same_topping: bool = False
    show_if_selection_ids: List[str] = Field(default_factory=list)
    kind: CategoryKind = CategoryKind.MULTI

    @model_validator(mode="before")
    @classmethod
    def _normalize_limits(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)

        if data.get("max_selections") == 0:
            data["max_selections"] = None
        # A required category needs at least one selection
        if data.get("required") and (data.get("min_selections") or 0) < 1:
            data["min_selections"] = 1
        if data.get("display_order") is None:
            data.pop("display_order", None)
        if data.get("show_if_selection_ids") is None:
            data.pop("show_if_selection_ids", None)

        data["kind"] = derive_category_kind(
            data.get("max_selections"),
            bool(data.get("allow_multiple_same_topping")),
        )
        return data

    @model_validator(mode="after")
    def _check_limits(self) -> "ToppingCategory":
        if self.max_selections is not None and self.max_selections < self.min_selections:
            raise ValueError(
                f"max_selections ({self.max_selections}) is below "
                f"min_selections ({self.min_selections}) for category '{self.id}'"
            )
        return self

    @property
    def is_bounded(self) -> bool:
        return self.max_selections is not None

    def get_topping(self, topping_id: str) -> Optional[Topping]:
        """Find a topping of this category by id."""
        for topping in self.toppings:
            if topping.id == topping_id:
                return topping
        return None


class OptionChoice(BaseModel):
    """One alternative within an option group. `price` of None means no upcharge."""
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    price: Optional[float] = None


class OptionGroup(BaseModel):
    """A set of alternatives for a menu item (e.g., bread type, side)."""
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: Optional[str] = None
    required: bool = False
    multiple: bool = False
    choices: List[OptionChoice] = Field(default_factory=list)

    def get_choice(self, choice_id: str) -> Optional[OptionChoice]:
        """Find a choice of this group by id."""
        for choice in self.choices:
            if choice.id == choice_id:
                return choice
        return None


class MenuItemWithOptions(BaseModel):
    """
    A menu item together with everything a customer can customize on it.

    Attributes:
        id: Menu item identifier; a change of id starts a fresh customization
        name: Display name (e.g., "Classic Burger")
        unit_price: Base price before options and toppings
        tax_rate: Tax rate as a fraction
        options: Option groups, in display order
        topping_categories: Topping categories as delivered by the menu loader
    """
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: Optional[str] = None
    unit_price: float = 0.0
    tax_rate: float = 0.0
    options: List[OptionGroup] = Field(default_factory=list)
    topping_categories: List[ToppingCategory] = Field(default_factory=list)

    def get_topping_category(self, category_id: str) -> Optional[ToppingCategory]:
        """Find a topping category of this item by id."""
        for category in self.topping_categories:
            if category.id == category_id:
                return category
        return None

    def get_option(self, option_id: str) -> Optional[OptionGroup]:
        """Find an option group of this item by id."""
        for option in self.options:
            if option.id == option_id:
                return option
        return None
