# This file renders the password gate shown before any pricing data.
# It exists so first-run setup and the lockout countdown are handled in one place.
# The page returns True only when the visitor has a valid session.

from __future__ import annotations

import streamlit as st

from dayuse_pricing.dashboard.ui_text import FIRST_RUN
from dayuse_pricing.security.password_gate import PasswordGate, PasswordPolicyError


def _render_first_run(gate: PasswordGate, hotel_id: str) -> None:
    st.info(FIRST_RUN)
    with st.form("first_run_password"):
        password = st.text_input("New password", type="password")
        confirm = st.text_input("Confirm password", type="password")
        submitted = st.form_submit_button("Set password")

    if not submitted:
        return
    try:
        gate.set_initial_password(password, confirm, hotel_id=hotel_id)
    except PasswordPolicyError as exc:
        st.error(str(exc))
        return
    st.rerun()


def _render_login(gate: PasswordGate, hotel_id: str) -> None:
    lockout = gate.tracker.check_lockout()
    if lockout.is_locked:
        st.error(f"Too many failed attempts. Try again in {lockout.remaining_seconds} seconds.")
        return

    with st.form("login"):
        password = st.text_input("Password", type="password")
        submitted = st.form_submit_button("Log in")

    if not submitted:
        return
    outcome = gate.attempt_login(password, hotel_id=hotel_id)
    if outcome.success:
        st.rerun()
    elif outcome.is_locked:
        st.error(f"Too many failed attempts. Try again in {outcome.lockout_seconds} seconds.")
    else:
        st.error(f"Incorrect password. {outcome.remaining_attempts} attempts left.")


def render(*, gate: PasswordGate, hotel_id: str) -> bool:
    if gate.sessions.is_valid():
        return True

    st.header("Log in")
    if gate.is_password_set():
        _render_login(gate, hotel_id)
    else:
        _render_first_run(gate, hotel_id)
    return False
