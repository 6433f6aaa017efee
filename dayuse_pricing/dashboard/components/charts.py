# This file contains the chart renderers for day-use history.
# It exists so chart logic handles empty datasets the same way on every page.
# The charts use Altair because it integrates cleanly with Streamlit.

from __future__ import annotations

import altair as alt
import pandas as pd
import streamlit as st

from dayuse_pricing.prediction.prediction_engine import WEEKDAY_NAMES


def render_weekday_stats_chart(dataframe: pd.DataFrame, *, help_text: str, height: int = 280) -> None:
    st.subheader("Average Day-Use Revenue by Weekday", help=help_text)
    if dataframe.empty or int(dataframe["avg_count"].sum()) == 0:
        st.info("No day-use history available for weekday statistics.")
        return

    chart = (
        alt.Chart(dataframe)
        .mark_bar()
        .encode(
            x=alt.X("day_name:N", sort=list(WEEKDAY_NAMES), title="Weekday"),
            y=alt.Y("avg_revenue:Q", title="Average revenue"),
            tooltip=[
                alt.Tooltip("day_name:N", title="Weekday"),
                alt.Tooltip("avg_count:Q", title="Bookings"),
                alt.Tooltip("avg_revenue:Q", title="Revenue", format=","),
                alt.Tooltip("avg_price:Q", title="Avg price", format=","),
            ],
        )
        .properties(height=height)
    )
    st.altair_chart(chart, use_container_width=True)
