import streamlit as st
from core.session_manager import require_role
from core.helpers import render_patient_sidebar, format_money
from core.time_utils import now_local
from services.store_service import get_store
from services.dashboard_service import (
    past_or_resolved_appointments,
    patient_history_total,
    scope_for_role,
    upcoming_appointments,
)
from services.attachment_service import decode_data_url
from core.errors import AttachmentError


def main():
    user = require_role("Patient")
    render_patient_sidebar()

    st.title("My Appointments")
    st.write("View your upcoming appointments and treatment history")

    store = get_store()
    _, appointments = scope_for_role(user, store.load_patients(), store.load_appointments())

    today = now_local()
    upcoming = upcoming_appointments(appointments, today)
    past = past_or_resolved_appointments(appointments, today)

    c1, c2, c3 = st.columns(3)
    c1.metric("Upcoming", len(upcoming))
    c2.metric("History", len(past))
    c3.metric("Total Spent", format_money(patient_history_total(appointments, today)))

    st.subheader(f"Upcoming Appointments ({len(upcoming)})")
    if not upcoming:
        st.info("No upcoming appointments")
    for a in upcoming:
        with st.container():
            st.write(f"**{a.title}** · {a.appointment_date:%b %d, %Y at %H:%M} · {a.status.value}")
            if a.description:
                st.write(a.description)
            if a.comments:
                st.caption(a.comments)

    st.subheader(f"Treatment History ({len(past)})")
    if not past:
        st.info("No treatment history")
    for a in past:
        with st.container():
            st.write(f"**{a.title}** · {a.appointment_date:%b %d, %Y} · {a.status.value} · {format_money(a.cost)}")
            if a.treatment:
                st.write(f"Treatment: {a.treatment}")
            if a.comments:
                st.caption(a.comments)
            if a.next_date:
                st.write(f"Next appointment: {a.next_date:%b %d, %Y}")
            for index, f in enumerate(a.files):
                try:
                    mime, data = decode_data_url(f.url)
                except AttachmentError:
                    st.caption(f"📎 {f.name} (unreadable)")
                    continue
                st.download_button(f"📎 {f.name}", data=data, file_name=f.name, mime=mime, key=f"dl_{a.id}_{index}")


if __name__ == "__main__":
    main()
