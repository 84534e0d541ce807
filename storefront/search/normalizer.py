"""Text canonicalization shared by the catalog matcher and its callers."""

import re
from typing import Any

# Whitespace, hyphen, forward slash and comma. Everything else passes through.
SEPARATOR_PATTERN = re.compile(r"[\s\-/,]+")


def normalize(value: Any) -> str:
    """Canonicalize a value for separator- and case-insensitive comparison.

    ``None`` becomes the empty string; anything else is converted with
    ``str()``, lowercased, and stripped of whitespace, ``-``, ``/`` and ``,``.
    Idempotent: ``normalize(normalize(x)) == normalize(x)``.

    Example:
        >>> normalize("HP510-4C / 65 W")
        'hp5104c65w'
    """
    if value is None:
        return ""

    try:
        text = value if isinstance(value, str) else str(value)
    except Exception:
        return ""

    return SEPARATOR_PATTERN.sub("", text.lower())
