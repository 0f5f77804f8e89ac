import calendar

import streamlit as st
from core.session_manager import require_role
from core.helpers import render_admin_sidebar, format_money
from core.time_utils import now_local
from models.appointment import Status
from services.store_service import get_store
from services.dashboard_service import (
    appointments_on_date,
    build_monthly_summary,
    resolve_patient_name,
)


def render_month(summary, selected):
    """Month grid; days with appointments are bold and selectable."""
    weeks = calendar.Calendar(firstweekday=6).monthdatescalendar(selected.year, selected.month)
    header = st.columns(7)
    for col, name in zip(header, ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]):
        col.markdown(f"**{name}**")

    for week in weeks:
        cols = st.columns(7)
        for col, day in zip(cols, week):
            if day.month != selected.month:
                col.write(" ")
                continue
            label = f"**{day.day}**" if day in summary.busy_days else str(day.day)
            if col.button(label, key=f"day_{day.isoformat()}", type="primary" if day == selected else "secondary"):
                st.session_state["selected_date"] = day
                st.rerun()


def main():
    require_role("Admin")
    render_admin_sidebar()

    st.title("Calendar View")
    st.caption("View appointments by date")

    store = get_store()
    patients = store.load_patients()
    appointments = store.load_appointments()

    selected = st.session_state.get("selected_date") or now_local().date()
    picked = st.date_input("Jump to date", value=selected)
    if picked != selected:
        st.session_state["selected_date"] = picked
        selected = picked

    summary = build_monthly_summary(appointments, selected, now_local())

    left, right = st.columns([3, 1])
    with left:
        st.subheader(f"{summary.month_start:%B %Y}")
        render_month(summary, selected)
    with right:
        st.subheader("Monthly Summary")
        st.metric("Scheduled", summary.counts[Status.SCHEDULED])
        st.metric("Completed", summary.counts[Status.COMPLETED])
        st.metric("Cancelled", summary.counts[Status.CANCELLED])
        st.metric("Revenue", format_money(summary.revenue))

    st.divider()
    st.subheader("Upcoming This Month")
    if not summary.upcoming:
        st.info("No upcoming appointments this month")
    for a in summary.upcoming:
        st.write(
            f"- **{a.title}** · {resolve_patient_name(patients, a.patient_id)} · "
            f"{a.appointment_date:%b %d, %H:%M} · {a.status.value}"
        )

    st.divider()
    st.subheader(f"Appointments for {selected:%B %d, %Y}")
    day_list = appointments_on_date(appointments, selected)
    if not day_list:
        st.info("No appointments on this day")
    for a in day_list:
        with st.container():
            st.write(f"**{a.title}** ({a.status.value})")
            st.write(f"{resolve_patient_name(patients, a.patient_id)} · {a.appointment_date:%H:%M} · {format_money(a.cost)}")
            if a.treatment:
                st.write(f"Treatment: {a.treatment}")
            if a.description:
                st.caption(a.description)


if __name__ == "__main__":
    main()
