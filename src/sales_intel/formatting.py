"""Number formatting shared by human-readable detail strings."""

from __future__ import annotations


def format_number(value: float) -> str:
    """Thousands-separated; whole values print without a decimal part."""
    if float(value).is_integer():
        return f"{int(value):,}"
    return f"{value:,}"


def format_money(value: float) -> str:
    return f"${format_number(value)}"
