# This file renders the settings page for targets, history uploads, and maintenance tasks.
# It exists so everything that changes stored data sits behind one page.
# Each section handles its own validation errors and reruns the app after a write.

from __future__ import annotations

from datetime import date

import streamlit as st

from dayuse_pricing.dashboard.components.charts import render_weekday_stats_chart
from dayuse_pricing.dashboard.dashboard_config import DashboardConfig
from dayuse_pricing.dashboard.formatting import format_count
from dayuse_pricing.dashboard.ui_text import CLEAR_DATA_CONFIRM, UPLOAD_HINT
from dayuse_pricing.ingestion.csv_loader import CSV_FORMAT_HINT, CsvValidationError
from dayuse_pricing.pricing.pricing_service import UPLOAD_MODE_MERGE, UPLOAD_MODE_REPLACE, PricingService
from dayuse_pricing.security.password_gate import PasswordGate, PasswordPolicyError


def _render_monthly_targets(
    service: PricingService,
    hotel_id: str,
    today: date,
    config: DashboardConfig,
    tooltips: dict[str, str],
) -> None:
    st.subheader("Monthly Targets", help=tooltips["monthly_target"])
    schedule = service.monthly_target_schedule(hotel_id, today, months=config.target_months_ahead)
    with st.form(f"monthly_targets_{hotel_id}"):
        values: dict[tuple[int, int], int] = {}
        columns = st.columns(3)
        for index, item in enumerate(schedule):
            values[(item["year"], item["month"])] = columns[index % 3].number_input(
                item["year_month"],
                min_value=0,
                step=10000,
                value=item["monthly_target"],
                key=f"target_{hotel_id}_{item['year_month']}",
            )
        submitted = st.form_submit_button("Save targets")

    if submitted:
        for (year, month), value in values.items():
            service.save_monthly_target(hotel_id, year, month, value)
        st.success("Monthly targets saved.")


def _render_upload(service: PricingService, hotel_id: str, config: DashboardConfig) -> None:
    st.subheader("Day-Use History")
    st.caption(UPLOAD_HINT)
    st.caption(f"Expected header: `{CSV_FORMAT_HINT}`")
    st.caption(f"Stored records: {format_count(service.store.count_dayuse_records(hotel_id))}")

    modes = [UPLOAD_MODE_MERGE, UPLOAD_MODE_REPLACE]
    mode = st.radio(
        "Upload mode",
        modes,
        index=modes.index(config.default_upload_mode),
        horizontal=True,
        key=f"upload_mode_{hotel_id}",
    )
    uploaded = st.file_uploader("Day-use CSV", type=["csv"], key=f"upload_{hotel_id}")
    if uploaded is None:
        return

    try:
        parsed = service.parse_upload(uploaded.name, uploaded.getvalue())
    except CsvValidationError as exc:
        st.error(str(exc))
        return

    preview = parsed.records[:5]
    st.dataframe(preview, use_container_width=True, hide_index=True)
    if parsed.skipped_rows:
        st.warning(f"{len(parsed.skipped_rows)} rows will be skipped.")

    if st.button("Import", key=f"import_{hotel_id}"):
        report = service.import_history(hotel_id, uploaded.name, parsed, mode=mode)
        if report.merge_summary is not None:
            st.success(
                f"Imported {report.preview.row_count} rows: {report.merge_summary.added} added, "
                f"{report.merge_summary.updated} updated, {report.total_records} stored."
            )
        else:
            st.success(f"Replaced history with {report.total_records} records.")


def _render_clear_history(service: PricingService, hotel_id: str) -> None:
    with st.expander("Delete day-use history"):
        st.warning(CLEAR_DATA_CONFIRM)
        if st.button("Delete history", key=f"clear_{hotel_id}"):
            service.clear_history(hotel_id)
            st.rerun()


def _render_password_change(gate: PasswordGate) -> None:
    st.subheader("Password")
    with st.form("change_password", clear_on_submit=True):
        current = st.text_input("Current password", type="password")
        new_password = st.text_input("New password", type="password")
        confirm = st.text_input("Confirm new password", type="password")
        submitted = st.form_submit_button("Change password")

    if not submitted:
        return
    try:
        gate.change_password(current, new_password, confirm)
    except PasswordPolicyError as exc:
        st.error(str(exc))
        return
    st.success("Password changed.")


def _render_backup(service: PricingService) -> None:
    st.subheader("Backup")
    st.download_button(
        "Download backup",
        data=service.export_backup(),
        file_name=f"dayuse_backup_{date.today():%Y%m%d}.json",
        mime="application/json",
    )
    restore = st.file_uploader("Restore from backup", type=["json"], key="restore_backup")
    if restore is not None and st.button("Restore", key="restore_button"):
        try:
            service.import_backup(restore.getvalue())
        except ValueError as exc:
            st.error(str(exc))
            return
        st.success("Backup restored.")


def render(
    *,
    service: PricingService,
    gate: PasswordGate,
    hotel_id: str,
    today: date,
    config: DashboardConfig,
    tooltips: dict[str, str],
) -> None:
    st.header("Settings")

    _render_monthly_targets(service, hotel_id, today, config, tooltips)
    st.markdown("---")
    _render_upload(service, hotel_id, config)
    _render_clear_history(service, hotel_id)
    render_weekday_stats_chart(
        service.weekday_stats(hotel_id),
        help_text=tooltips["weekday_stats_chart"],
        height=config.stats_chart_height,
    )
    st.markdown("---")
    _render_password_change(gate)
    _render_backup(service)

    st.markdown("---")
    if st.button("Log out"):
        gate.logout()
        st.rerun()
