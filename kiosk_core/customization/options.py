"""
Option choice reducer.

Option groups ("Bread", "Side") are toggled at the choice level. A group that
allows multiple choices toggles the tapped choice in or out; a single-choice
group replaces its choice, and tapping the chosen one clears it. Groups left
without choices are dropped from the selection.
"""

from typing import Optional

from ..schemas import OptionGroup, SelectedOption, SelectedOptions


def choices_for(selected_options: SelectedOptions, option_id: str) -> tuple:
    """Chosen choice ids of one option group."""
    for selected in selected_options:
        if selected.option_id == option_id:
            return tuple(selected.choice_ids)
    return ()


def toggle_choice(
    current: SelectedOptions,
    option_id: str,
    choice_id: str,
    group: Optional[OptionGroup] = None,
) -> SelectedOptions:
    """Apply one tap on an option choice; unknown groups or choices change nothing."""
    if group is None or group.id != option_id:
        return current
    if group.get_choice(choice_id) is None:
        return current

    chosen = choices_for(current, option_id)
    if group.multiple:
        if choice_id in chosen:
            new_choices = tuple(c for c in chosen if c != choice_id)
        else:
            new_choices = chosen + (choice_id,)
    else:
        new_choices = () if choice_id in chosen else (choice_id,)

    updated = []
    replaced = False
    for selected in current:
        if selected.option_id != option_id:
            updated.append(selected)
            continue
        replaced = True
        if new_choices:
            updated.append(SelectedOption(option_id, new_choices))
    if not replaced and new_choices:
        updated.append(SelectedOption(option_id, new_choices))
    return tuple(updated)
