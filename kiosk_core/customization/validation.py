"""
Submission-time validation of a customization.

The reducers let a customer pass through incomplete states (deselecting the
only size, for instance). This module is the check run once, when the item is
about to be added to the cart, and reports every problem found so the screen
can highlight all of them at once.
"""

from dataclasses import dataclass
from typing import List

from ..schemas import (
    CategoryKind,
    MenuItemWithOptions,
    SelectedOptions,
    SelectedToppings,
    ToppingCategory,
    selections_for,
    total_quantity,
)
from .options import choices_for
from .visibility import prune_hidden_selections, visible_topping_categories

BELOW_MINIMUM = "below_minimum"
ABOVE_MAXIMUM = "above_maximum"
MISSING_CHOICE = "missing_choice"
TOO_MANY_CHOICES = "too_many_choices"


@dataclass(frozen=True)
class SelectionIssue:
    """One reason a customization cannot be submitted yet."""
    kind: str  # BELOW_MINIMUM, ABOVE_MAXIMUM, MISSING_CHOICE, TOO_MANY_CHOICES
    target_id: str  # Category or option group id
    target_name: str
    message: str


def selection_count(category: ToppingCategory, selected_toppings: SelectedToppings) -> int:
    """Count selections the way the category's limits count them."""
    entries = selections_for(selected_toppings, category.id)
    if category.kind == CategoryKind.QUANTITY_SUM:
        return total_quantity(entries)
    return len(entries)


def find_selection_issues(
    menu_item: MenuItemWithOptions,
    selected_options: SelectedOptions,
    selected_toppings: SelectedToppings,
) -> List[SelectionIssue]:
    """
    Check the selections against every option group and visible category.

    Returns:
        List of SelectionIssue, empty when the customization is complete.
    """
    issues = []

    for option in menu_item.options:
        chosen = choices_for(selected_options, option.id)
        if option.required and not chosen:
            issues.append(SelectionIssue(
                kind=MISSING_CHOICE,
                target_id=option.id,
                target_name=option.name,
                message=f"Please choose an option for {option.name}",
            ))
        elif not option.multiple and len(chosen) > 1:
            issues.append(SelectionIssue(
                kind=TOO_MANY_CHOICES,
                target_id=option.id,
                target_name=option.name,
                message=f"Only one option can be chosen for {option.name}",
            ))

    # Only what survives into the cart item counts, including chained unlocks
    kept = prune_hidden_selections(menu_item, selected_toppings)
    for category in visible_topping_categories(menu_item, kept):
        count = selection_count(category, kept)
        if count < category.min_selections:
            issues.append(SelectionIssue(
                kind=BELOW_MINIMUM,
                target_id=category.id,
                target_name=category.name,
                message=f"Select at least {category.min_selections} for {category.name}",
            ))
        elif category.is_bounded and count > category.max_selections:
            issues.append(SelectionIssue(
                kind=ABOVE_MAXIMUM,
                target_id=category.id,
                target_name=category.name,
                message=f"Select at most {category.max_selections} for {category.name}",
            ))

    return issues
