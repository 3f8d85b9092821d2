"""Formatting utilities for rendering snapshot values as strings."""

from typing import Optional

from ..core.units import DataUnit, format_bytes


def format_percentage(value: Optional[float]) -> str:
    """Format a percentage (or load average) with two decimal places.

    Examples:
        >>> format_percentage(12.3456)
        '12.35'
        >>> format_percentage(None)
        ''
    """
    if value is None:
        return ""
    return f"{value:.2f}"


def format_temperature(value: Optional[float]) -> str:
    """Format a temperature in Celsius with two decimal places.

    A missing threshold (e.g. no critical temperature) renders as an
    empty string.
    """
    if value is None:
        return ""
    return f"{value:.2f}"


def format_flag(value: bool) -> str:
    """Format a boolean as "1" or "0"."""
    return "1" if value else "0"


def format_count(value: Optional[int]) -> str:
    """Format an integer counter, or an empty string when unavailable."""
    if value is None:
        return ""
    return str(int(value))


def format_text(value: Optional[str]) -> str:
    """Format an optional string value."""
    return value or ""


def format_size(value: Optional[int], unit: DataUnit = DataUnit.BYTES) -> str:
    """Format a byte-valued metric in the configured unit.

    Examples:
        >>> format_size(16000000000)
        '16000000000'
        >>> format_size(2 * 1024**3, DataUnit.GIB)
        '2.00'
    """
    if value is None:
        return ""
    return format_bytes(value, unit)
