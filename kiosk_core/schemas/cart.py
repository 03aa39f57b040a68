"""
Selection and cart line item schemas.

Selections are small frozen value objects so a selection state can be shared
between successive states without copying. A `CartItem` is a frozen pydantic
model built once at "add to cart" time.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from .menu import MenuItemWithOptions


@dataclass(frozen=True)
class ToppingSelection:
    """A selected topping and how many of it."""
    topping_id: str
    quantity: int = 1

    def __post_init__(self):
        if self.quantity < 1:
            raise ValueError(f"quantity must be at least 1, got {self.quantity}")


@dataclass(frozen=True)
class SelectedOption:
    """The chosen alternatives for one option group."""
    option_id: str
    choice_ids: Tuple[str, ...] = ()


# category_id -> selected toppings of that category, in selection order
SelectedToppings = Mapping[str, Tuple[ToppingSelection, ...]]

# One entry per option group that has at least one choice
SelectedOptions = Tuple[SelectedOption, ...]


def selections_for(selected_toppings: SelectedToppings, category_id: str) -> Tuple[ToppingSelection, ...]:
    """Entries of one category; a category without a key has no selections."""
    return tuple(selected_toppings.get(category_id, ()))


def find_selection(
    selected_toppings: SelectedToppings,
    category_id: str,
    topping_id: str,
) -> Optional[ToppingSelection]:
    """Find the selection of a topping within a category, if any."""
    for entry in selections_for(selected_toppings, category_id):
        if entry.topping_id == topping_id:
            return entry
    return None


def total_quantity(entries: Tuple[ToppingSelection, ...]) -> int:
    """Sum of quantities across a category's entries."""
    return sum(entry.quantity for entry in entries)


class CartItem(BaseModel):
    """
    One finalized line of the order.

    Attributes:
        id: Line item id, generated when the item is built
        menu_item: Snapshot of the menu item the selections refer to
        quantity: Number of identical items on this line
        selected_options: Chosen option group alternatives
        selected_toppings: Chosen toppings per category
        special_instructions: Free text for the kitchen, if any
    """
    model_config = ConfigDict(frozen=True)

    id: str
    menu_item: MenuItemWithOptions
    quantity: int = Field(ge=1)
    selected_options: Tuple[SelectedOption, ...] = ()
    selected_toppings: Mapping[str, Tuple[ToppingSelection, ...]] = Field(default_factory=dict)
    special_instructions: Optional[str] = None

    @field_validator("selected_toppings", mode="after")
    @classmethod
    def freeze_toppings(cls, v):
        """Store the selections behind a read-only view."""
        return MappingProxyType(dict(v))

    @field_serializer("selected_toppings")
    def dump_toppings(self, v):
        return dict(v)

    def describe_options(self) -> str:
        """Comma-separated names of the chosen option alternatives."""
        names = []
        for selected in self.selected_options:
            option = self.menu_item.get_option(selected.option_id)
            if option is None:
                continue
            for choice_id in selected.choice_ids:
                choice = option.get_choice(choice_id)
                if choice is not None:
                    names.append(choice.name)
        return ", ".join(names)

    def describe_toppings(self) -> str:
        """Comma-separated topping names, prefixed with a count when above one."""
        names = []
        for category in self.menu_item.topping_categories:
            for entry in self.selected_toppings.get(category.id, ()):
                topping = category.get_topping(entry.topping_id)
                if topping is None:
                    continue
                if entry.quantity > 1:
                    names.append(f"{entry.quantity}x {topping.name}")
                else:
                    names.append(topping.name)
        return ", ".join(names)

    def get_summary(self) -> str:
        """Get a one-line description of this line item."""
        parts = []

        if self.quantity > 1:
            parts.append(f"{self.quantity}x")

        parts.append(self.menu_item.name)

        details = [d for d in (self.describe_options(), self.describe_toppings()) if d]
        if details:
            parts.append(f"({', '.join(details)})")

        summary = " ".join(parts)
        if self.special_instructions:
            summary = f"{summary} - {self.special_instructions}"
        return summary
