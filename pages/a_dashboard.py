import streamlit as st
from core.session_manager import require_role
from core.helpers import render_admin_sidebar, format_money
from core.time_utils import now_local
from services.store_service import get_store
from services.dashboard_service import appointment_label, build_dashboard


def main():
    user = require_role("Admin")
    render_admin_sidebar()

    st.title("Admin Dashboard")
    st.write("Overview of your dental practice")

    store = get_store()
    patients = store.load_patients()
    summary = build_dashboard(user, patients, store.load_appointments(), now_local())

    # KPI cards
    c1, c2, c3, c4 = st.columns(4)
    with c1:
        st.metric("Total Patients", summary.patient_count)
        if st.button("Open Patients", key="card_patients"):
            st.switch_page("pages/a_patients.py")
    with c2:
        st.metric("Completed", summary.completed_count)
    with c3:
        st.metric("Pending", summary.pending_count)
        if st.button("Open Appointments", key="card_pending"):
            st.switch_page("pages/a_appointments.py")
    with c4:
        st.metric("Revenue", format_money(summary.revenue))

    st.divider()

    st.subheader("Upcoming Appointments")
    st.caption("Next 10 scheduled appointments")
    if not summary.upcoming:
        st.info("No upcoming appointments")
    for a in summary.upcoming:
        with st.container():
            st.write(appointment_label(patients, a))
            st.write(
                f"{a.appointment_date:%b %d, %Y} at {a.appointment_date:%H:%M} · "
                f"{a.status.value} · {format_money(a.cost)}"
            )

    st.divider()

    st.subheader("Recent Treatments")
    st.caption("Latest completed treatments")
    if not summary.recent:
        st.info("No completed treatments")
    for a in summary.recent:
        with st.container():
            st.write(appointment_label(patients, a))
            st.write(
                f"{a.treatment or 'Treatment completed'} - {a.appointment_date:%b %d, %Y} · "
                f"{format_money(a.cost)}"
            )


if __name__ == "__main__":
    main()
