"""Non-fatal configuration checks."""

import warnings
from typing import Any, Dict, List


def check_for_warnings(config_dict: Dict[str, Any]) -> List[str]:
    """
    Inspect the raw configuration for suspicious but valid settings.

    Args:
        config_dict: Raw configuration dictionary

    Returns:
        List of warning messages
    """
    messages = []

    catalog = config_dict.get("catalog") or {}
    if not isinstance(catalog, dict):
        return messages

    aliases = catalog.get("category_aliases") or {}
    if isinstance(aliases, dict):
        for label, variants in aliases.items():
            if isinstance(variants, list) and label not in variants:
                messages.append(
                    f"Category alias list for '{label}' does not include the label itself; it will be added"
                )
            if isinstance(variants, list) and len(variants) != len(set(variants)):
                messages.append(f"Category alias list for '{label}' contains duplicate variants")

    categories = catalog.get("categories") or []
    if isinstance(categories, list) and isinstance(aliases, dict) and aliases:
        for category in categories:
            if not isinstance(category, dict):
                continue
            label = category.get("collection") or category.get("title")
            if label and label not in aliases:
                messages.append(
                    f"Category '{label}' has no alias entry; only exact '{label}' rows will be listed"
                )

    page_size = catalog.get("admin_page_size")
    if isinstance(page_size, int) and page_size > 200:
        messages.append(f"Large admin_page_size ({page_size}) may make the inventory table slow")

    return messages


def emit_warnings(warning_messages: List[str]) -> None:
    """Emit each message as a UserWarning."""
    for message in warning_messages:
        warnings.warn(message, UserWarning, stacklevel=2)
