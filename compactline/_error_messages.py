"""Error message templates for compaction planning.

Messages include a clear problem description and, for name lookups, fuzzy
"Did you mean...?" suggestions for common typos.
"""

from __future__ import annotations

from difflib import get_close_matches


def strategy_not_found_error(name: str, available_strategies: list[str]) -> str:
    """Error message when a compaction strategy name is not registered.

    Args:
        name: The strategy name that was not found
        available_strategies: List of registered strategy names

    Returns:
        Formatted error message with suggestions
    """
    suggestions = get_close_matches(name.lower(), available_strategies, n=3, cutoff=0.6)

    msg = f"Compaction strategy '{name}' is not registered.\n"

    if suggestions:
        msg += "\nDid you mean one of these?\n"
        for suggestion in suggestions:
            msg += f"  - {suggestion}\n"

    msg += "\nAvailable strategies:\n"
    for strategy in sorted(available_strategies):
        msg += f"  - {strategy}\n"

    msg += "\nRun `compactline strategies` to list them from the command line."

    return msg


def negative_budget_error(field_name: str, value: object) -> str:
    """Error message when a numeric budget is configured below zero."""
    return (
        f"{field_name} must be >= 0 or unset, got {value!r}.\n"
        "\n"
        "Leave the setting out of the [compaction] table (or pass None) for an\n"
        "unbounded budget."
    )


def unknown_config_keys_error(unknown: list[str], known: list[str]) -> str:
    """Error message when the [compaction] table carries unrecognized keys."""
    msg = f"Unknown [compaction] config keys: {', '.join(sorted(unknown))}.\n"
    for key in sorted(unknown):
        suggestions = get_close_matches(key, known, n=1, cutoff=0.6)
        if suggestions:
            msg += f"  - '{key}': did you mean '{suggestions[0]}'?\n"
    msg += "\nSupported keys:\n"
    for key in sorted(known):
        msg += f"  - {key}\n"
    return msg


__all__ = [
    "negative_budget_error",
    "strategy_not_found_error",
    "unknown_config_keys_error",
]
