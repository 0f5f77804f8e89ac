import streamlit as st
from core.session_manager import require_role
from core.helpers import render_patient_sidebar, format_money
from core.time_utils import now_local
from services.store_service import get_store
from services.dashboard_service import build_dashboard, find_patient


def main():
    user = require_role("Patient")
    render_patient_sidebar()

    store = get_store()
    patients = store.load_patients()
    summary = build_dashboard(user, patients, store.load_appointments(), now_local())

    st.title("My Dashboard")
    st.write("Your dental care information")

    profile = find_patient(patients, user.patient_id)
    if profile is None:
        st.error("Patient record not found.")
    else:
        st.subheader("Your Profile")
        st.write(f"**Name:** {profile.name}")
        st.write(f"**Date of Birth:** {profile.dob or '-'}")
        st.write(f"**Contact:** {profile.contact or '-'}")
        st.write(f"**Health Info:** {profile.health_info or '-'}")

    st.write("---")

    c1, c2, c3 = st.columns(3)
    c1.metric("Completed", summary.completed_count)
    c2.metric("Pending", summary.pending_count)
    c3.metric("Total Paid", format_money(summary.revenue))

    st.subheader("Your upcoming appointments")
    if not summary.upcoming:
        st.info("No upcoming appointments")
    for a in summary.upcoming:
        st.write(f"- **{a.title}** on {a.appointment_date:%b %d, %Y} at {a.appointment_date:%H:%M}")

    st.subheader("Your treatment history")
    if not summary.recent:
        st.info("No completed treatments")
    for a in summary.recent:
        st.write(
            f"- **{a.title}**: {a.treatment or 'Treatment completed'} "
            f"({a.appointment_date:%b %d, %Y}) · {format_money(a.cost)}"
        )

    if st.button("View all my appointments"):
        st.switch_page("pages/p_my_appointments.py")


if __name__ == "__main__":
    main()
