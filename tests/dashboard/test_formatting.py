"""
Unit tests for dashboard formatting helpers.
It asserts expected behavior and guards against regressions in the corresponding component.
"""

from dayuse_pricing.dashboard.formatting import format_count, format_minimum_price, format_money, format_target


def test_money_uses_thousands_separator() -> None:
    assert format_money(1234567) == "¥1,234,567"
    assert format_money(None) == "-"
    assert format_money(5000, symbol="$") == "$5,000"


def test_target_and_minimum_price_placeholders() -> None:
    assert format_target(0) == "Not set"
    assert format_target(300000) == "¥300,000"
    assert format_minimum_price(0) == "-"
    assert format_minimum_price(3000) == "¥3,000 / room"


def test_format_count() -> None:
    assert format_count(None) == "0"
    assert format_count(12345) == "12,345"
