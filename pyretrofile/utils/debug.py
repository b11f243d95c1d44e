"""Category-gated debug output for the conversion tool.

``RETROFILE_DEBUG`` holds a comma separated list of the names in
:data:`CATEGORIES`, or ``all``. Messages go to stderr prefixed with
``[RETROFILE][<category>]``.
"""

from __future__ import annotations

import os
import sys
from typing import FrozenSet, Optional

ENV_VAR = "RETROFILE_DEBUG"

CATEGORY_BUS = "bus"
CATEGORY_HEX = "hex"
CATEGORY_PAP = "pap"
CATEGORY_CONVERT = "convert"

CATEGORIES = (CATEGORY_BUS, CATEGORY_HEX, CATEGORY_PAP, CATEGORY_CONVERT)

_enabled: Optional[FrozenSet[str]] = None


def parse_categories(value: str) -> FrozenSet[str]:
    """Return the known categories named in ``value``; unknown names are dropped."""

    names = {part.strip().lower() for part in value.split(",")}
    if "all" in names:
        return frozenset(CATEGORIES)
    return frozenset(name for name in names if name in CATEGORIES)


def _enabled_categories() -> FrozenSet[str]:
    global _enabled
    if _enabled is None:
        _enabled = parse_categories(os.environ.get(ENV_VAR, ""))
    return _enabled


def reset_categories() -> None:
    """Forget the cached categories so the environment is read again."""

    global _enabled
    _enabled = None


def debug_enabled(category: str | None = None) -> bool:
    enabled = _enabled_categories()
    if category is None:
        return bool(enabled)
    return category.lower() in enabled


def debug_log(category: str, message: str, *args) -> None:
    if not debug_enabled(category):
        return
    if args:
        try:
            message = message % args
        except (TypeError, ValueError):
            message = f"{message} {args!r}"
    print(f"[RETROFILE][{category}] {message}", file=sys.stderr)
