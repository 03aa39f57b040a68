"""
Conditional display of topping categories.

Some categories only make sense after another choice, e.g. "Sauce amount"
once a sauce is picked. Such a category lists the topping ids that unlock it
in `show_if_selection_ids`; it is visible while any of them is selected in
any category.
"""

from typing import List

from ..schemas import (
    MenuItemWithOptions,
    SelectedToppings,
    ToppingCategory,
)


def _selected_topping_ids(selected_toppings: SelectedToppings) -> set:
    return {
        entry.topping_id
        for entries in selected_toppings.values()
        for entry in entries
    }


def should_show_category(category: ToppingCategory, selected_toppings: SelectedToppings) -> bool:
    """Check whether a category is visible under the current selections."""
    if not category.show_if_selection_ids:
        return True
    selected_ids = _selected_topping_ids(selected_toppings)
    return any(topping_id in selected_ids for topping_id in category.show_if_selection_ids)


def visible_topping_categories(
    menu_item: MenuItemWithOptions,
    selected_toppings: SelectedToppings,
) -> List[ToppingCategory]:
    """Visible categories of a menu item, sorted by display order."""
    visible = [
        category for category in menu_item.topping_categories
        if should_show_category(category, selected_toppings)
    ]
    return sorted(visible, key=lambda c: c.display_order)


def prune_hidden_selections(
    menu_item: MenuItemWithOptions,
    selected_toppings: SelectedToppings,
) -> dict:
    """
    Drop selections of categories that are not visible (or not on the item).

    A hidden category can itself unlock another one, so pruning repeats until
    the visible set stops changing.
    """
    pruned = dict(selected_toppings)
    while True:
        visible_ids = {c.id for c in visible_topping_categories(menu_item, pruned)}
        next_pruned = {cid: entries for cid, entries in pruned.items() if cid in visible_ids}
        if next_pruned == pruned:
            return pruned
        pruned = next_pruned
