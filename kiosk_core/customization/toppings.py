"""
Topping selection reducer.

Every tap on a topping goes through `toggle_topping`, which returns the next
selection state without touching the current one. Only the tapped category's
entry tuple is replaced; every other category keeps the very same tuple.

Behavior is dispatched on the category's kind:

- SINGLE (radio): selecting a topping replaces the previous one.
- MULTI: toppings are added until `max_selections` distinct toppings are
  selected; further adds are rejected.
- QUANTITY_SUM: `max_selections` bounds the sum of quantities. Explicit
  quantities are clamped to the remaining capacity.

Deselecting is always allowed, even when it leaves a required category below
its minimum. Whether the selections are complete is decided when the item is
submitted (see validation.py), not on every tap.

The reducer never raises. A category or topping it does not know about leaves
the state unchanged; callers log those.
"""

import logging
from typing import Callable, Dict, Optional, Tuple

from ..schemas import (
    CategoryKind,
    SelectedToppings,
    ToppingCategory,
    ToppingSelection,
    selections_for,
    total_quantity,
)

logger = logging.getLogger(__name__)

Entries = Tuple[ToppingSelection, ...]


def _index_of(entries: Entries, topping_id: str) -> Optional[int]:
    for index, entry in enumerate(entries):
        if entry.topping_id == topping_id:
            return index
    return None


def _without(entries: Entries, topping_id: str) -> Entries:
    return tuple(entry for entry in entries if entry.topping_id != topping_id)


def _upsert(entries: Entries, topping_id: str, quantity: int) -> Entries:
    index = _index_of(entries, topping_id)
    entry = ToppingSelection(topping_id, quantity)
    if index is None:
        return entries + (entry,)
    return entries[:index] + (entry,) + entries[index + 1:]


def _replace_category(current: SelectedToppings, category_id: str, entries: Entries) -> dict:
    updated = dict(current)
    if entries:
        updated[category_id] = entries
    else:
        updated.pop(category_id, None)
    return updated


# =============================================================================
# Binary toggles (no quantity given)
# =============================================================================

def _toggle_single(entries: Entries, topping_id: str, category: ToppingCategory) -> Entries:
    if _index_of(entries, topping_id) is not None:
        return _without(entries, topping_id)
    return (ToppingSelection(topping_id, 1),)


def _toggle_multi(entries: Entries, topping_id: str, category: ToppingCategory) -> Entries:
    if _index_of(entries, topping_id) is not None:
        return _without(entries, topping_id)
    if category.is_bounded and len(entries) >= category.max_selections:
        logger.debug(
            "Category %s already has %d selections, ignoring %s",
            category.id, category.max_selections, topping_id,
        )
        return entries
    return entries + (ToppingSelection(topping_id, 1),)


def _toggle_quantity_sum(entries: Entries, topping_id: str, category: ToppingCategory) -> Entries:
    if _index_of(entries, topping_id) is not None:
        return _without(entries, topping_id)
    if category.is_bounded and total_quantity(entries) >= category.max_selections:
        logger.debug(
            "Category %s is at its quantity limit of %d, ignoring %s",
            category.id, category.max_selections, topping_id,
        )
        return entries
    return entries + (ToppingSelection(topping_id, 1),)


_BINARY_TOGGLES: Dict[CategoryKind, Callable[[Entries, str, ToppingCategory], Entries]] = {
    CategoryKind.SINGLE: _toggle_single,
    CategoryKind.MULTI: _toggle_multi,
    CategoryKind.QUANTITY_SUM: _toggle_quantity_sum,
}


# =============================================================================
# Explicit quantities
# =============================================================================

def _set_quantity(entries: Entries, topping_id: str, quantity: int, category: ToppingCategory) -> Entries:
    if quantity <= 0:
        return _without(entries, topping_id)

    if category.kind == CategoryKind.SINGLE:
        # Radio categories hold one entry; max_selections is 1
        return (ToppingSelection(topping_id, min(quantity, category.max_selections)),)

    if category.kind == CategoryKind.QUANTITY_SUM:
        if category.is_bounded:
            remaining = category.max_selections - total_quantity(_without(entries, topping_id))
            if quantity > remaining:
                logger.debug(
                    "Clamping %s in %s from %d to %d",
                    topping_id, category.id, quantity, max(remaining, 0),
                )
                quantity = remaining
            if quantity <= 0:
                return _without(entries, topping_id)
        return _upsert(entries, topping_id, quantity)

    # MULTI: the limit counts distinct toppings
    is_new = _index_of(entries, topping_id) is None
    if is_new and category.is_bounded and len(entries) >= category.max_selections:
        logger.debug(
            "Category %s already has %d selections, ignoring %s",
            category.id, category.max_selections, topping_id,
        )
        return entries
    return _upsert(entries, topping_id, quantity)


def toggle_topping(
    current: SelectedToppings,
    category_id: str,
    topping_id: str,
    quantity: Optional[int] = None,
    category: Optional[ToppingCategory] = None,
) -> SelectedToppings:
    """
    Apply one topping tap to the selection state.

    Args:
        current: Current selections (not modified)
        category_id: Category the tapped topping belongs to
        topping_id: The tapped topping
        quantity: New quantity for quantity steppers; None for a plain tap.
                  Zero or less removes the topping.
        category: The category definition from the menu item

    Returns:
        The next selection state. `current` itself when nothing changes.
    """
    if category is None or category.id != category_id:
        return current
    if category.get_topping(topping_id) is None:
        return current

    entries = selections_for(current, category_id)
    if quantity is not None:
        new_entries = _set_quantity(entries, topping_id, quantity, category)
    else:
        new_entries = _BINARY_TOGGLES[category.kind](entries, topping_id, category)

    if new_entries == entries:
        return current
    return _replace_category(current, category_id, new_entries)
