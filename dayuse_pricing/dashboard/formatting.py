# This file collects small formatting helpers used across dashboard pages.
# It exists so money and counts are presented consistently on every card.
# The functions return plain strings that Streamlit can display directly.

from __future__ import annotations


def format_money(value: int | float | None, *, symbol: str = "¥") -> str:
    if value is None:
        return "-"
    return f"{symbol}{int(value):,}"


def format_target(value: int | None, *, symbol: str = "¥") -> str:
    if not value or value <= 0:
        return "Not set"
    return format_money(value, symbol=symbol)


def format_minimum_price(value: int, *, symbol: str = "¥") -> str:
    if value <= 0:
        return "-"
    return f"{format_money(value, symbol=symbol)} / room"


def format_count(value: int | float | None) -> str:
    if value is None:
        return "0"
    return f"{int(value):,}"
