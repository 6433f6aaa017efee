# This file renders the metric cards shown on the today page.
# It exists so target, forecast, and rate cards share one visual and tooltip pattern.
# The functions expect business-ready values and do not compute anything.

from __future__ import annotations

import streamlit as st


def render_target_cards(*, monthly_target: str, daily_target: str, tooltips: dict[str, str]) -> None:
    col1, col2 = st.columns(2)
    col1.metric("Monthly Target", monthly_target, help=tooltips["monthly_target"])
    col2.metric("Today's Target", daily_target, help=tooltips["daily_target"])


def render_prediction_cards(
    *,
    predicted_count: str,
    predicted_revenue: str,
    basis: str,
    tooltips: dict[str, str],
) -> None:
    col1, col2 = st.columns(2)
    col1.metric("Predicted Bookings", predicted_count, help=tooltips["predicted_count"])
    col2.metric("Predicted Revenue", predicted_revenue, help=tooltips["predicted_revenue"])
    st.caption(f"Basis: {basis}", help=tooltips["prediction_basis"])


def render_minimum_price_card(
    *,
    minimum_price: str,
    remaining_rooms: str,
    required_revenue: str,
    dayuse_revenue: str,
    tooltips: dict[str, str],
) -> None:
    st.metric("Minimum Acceptable Rate", minimum_price, help=tooltips["minimum_price"])
    col1, col2, col3 = st.columns(3)
    col1.metric("Remaining Rooms", remaining_rooms, help=tooltips["remaining_rooms"])
    col2.metric("Required Revenue", required_revenue, help=tooltips["required_revenue"])
    col3.metric("Day-Use Revenue", dayuse_revenue, help=tooltips["dayuse_revenue"])
