"""Utility helpers for the retro file conversion tool."""

from .debug import (
    CATEGORIES,
    CATEGORY_BUS,
    CATEGORY_CONVERT,
    CATEGORY_HEX,
    CATEGORY_PAP,
    debug_enabled,
    debug_log,
    parse_categories,
    reset_categories,
)

__all__ = [
    "CATEGORIES",
    "CATEGORY_BUS",
    "CATEGORY_CONVERT",
    "CATEGORY_HEX",
    "CATEGORY_PAP",
    "debug_enabled",
    "debug_log",
    "parse_categories",
    "reset_categories",
]
