# This file is the Streamlit entrypoint for the front-desk pricing dashboard.
# It exists to combine the password gate, hotel selection, and the today and settings pages in one app.
# Forecasts are drawn from cached holidays first; a missing holiday year is fetched after the page renders.
# The second render then shows the holiday-aware forecast without blocking the first one.

from __future__ import annotations

import asyncio
from datetime import date

import streamlit as st

from dayuse_pricing.common.logging import configure_logging
from dayuse_pricing.common.settings import get_settings
from dayuse_pricing.dashboard.dashboard_config import load_dashboard_config
from dayuse_pricing.dashboard.page_views import login, settings, today
from dayuse_pricing.dashboard.tooltips import TOOLTIPS
from dayuse_pricing.dashboard.ui_text import APP_SUBTITLE, APP_TITLE
from dayuse_pricing.pricing.pricing_service import PricingService
from dayuse_pricing.security.password_gate import LoginAttemptTracker, PasswordGate, SessionManager


@st.cache_resource
def get_service() -> PricingService:
    configure_logging()
    return PricingService.from_settings(get_settings())


def build_gate(service: PricingService) -> PasswordGate:
    app_settings = get_settings()
    return PasswordGate(
        service.store,
        min_length=app_settings.PASSWORD_MIN_LENGTH,
        tracker=LoginAttemptTracker(
            service.store,
            max_attempts=app_settings.LOGIN_MAX_ATTEMPTS,
            lockout_seconds=app_settings.LOGIN_LOCKOUT_SECONDS,
        ),
        sessions=SessionManager(
            service.store,
            duration_seconds=app_settings.SESSION_DURATION_HOURS * 60 * 60,
        ),
    )


def select_hotel(service: PricingService, gate: PasswordGate) -> str:
    hotel_ids = service.directory.ids()
    session = gate.sessions.get() or {}
    current = session.get("hotel_id")
    if current not in hotel_ids:
        current = service.directory.default_hotel_id()

    selected = st.sidebar.selectbox(
        "Hotel",
        hotel_ids,
        index=hotel_ids.index(current),
        format_func=lambda hotel_id: service.directory.get(hotel_id).name,
    )
    gate.sessions.refresh(hotel_id=selected)
    return selected


def main() -> None:
    st.set_page_config(page_title=APP_TITLE, layout="centered")

    config = load_dashboard_config()
    service = get_service()
    gate = build_gate(service)

    st.title(APP_TITLE)
    st.caption(APP_SUBTITLE)

    if not login.render(gate=gate, hotel_id=service.directory.default_hotel_id()):
        return

    hotel_id = select_hotel(service, gate)
    current_day = date.today()
    st.sidebar.caption(f"Session expires in {gate.sessions.remaining_seconds() // 60} minutes")

    tabs = st.tabs(["Today", "Settings"])
    with tabs[0]:
        snapshot = today.render(
            service=service,
            hotel_id=hotel_id,
            target_date=current_day,
            config=config,
            tooltips=TOOLTIPS,
        )
    with tabs[1]:
        settings.render(
            service=service,
            gate=gate,
            hotel_id=hotel_id,
            today=current_day,
            config=config,
            tooltips=TOOLTIPS,
        )

    if not snapshot.holidays_loaded:
        asyncio.run(service.preload_holidays(current_day.year))
        st.rerun()


if __name__ == "__main__":
    main()
