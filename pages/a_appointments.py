from datetime import datetime, time

import streamlit as st
from core.errors import ClinicError
from core.session_manager import require_role
from core.helpers import render_admin_sidebar, format_money
from core.time_utils import now_local
from models.appointment import Status
from services.store_service import get_store
from services.dashboard_service import appointment_label
from services.appointment_service import create_appointment, delete_appointment, update_appointment
from services.attachment_service import encode_uploads, remove_attachment

STATUSES = [s.value for s in Status]


def appointment_form(key: str, patients, appointment=None):
    """Render the schedule/edit form; returns (fields, uploads) or None."""
    patient_ids = [p.id for p in patients]
    labels = {p.id: f"{p.name} ({p.email})" for p in patients}
    default_when = appointment.appointment_date if appointment else now_local().replace(second=0, microsecond=0)

    with st.form(key):
        patient_id = st.selectbox(
            "Patient *",
            patient_ids,
            index=patient_ids.index(appointment.patient_id) if appointment and appointment.patient_id in patient_ids else None,
            format_func=lambda pid: labels.get(pid, pid),
            placeholder="Select patient",
        )
        title = st.text_input("Title *", value=appointment.title if appointment else "", placeholder="e.g., Routine Checkup")
        c1, c2 = st.columns(2)
        day = c1.date_input("Appointment Date *", value=default_when.date())
        at = c2.time_input("Time", value=default_when.time())
        description = st.text_input("Description", value=appointment.description if appointment else "")
        comments = st.text_area("Comments", value=appointment.comments if appointment else "")
        treatment = st.text_input("Treatment", value=appointment.treatment if appointment else "")
        cost = st.number_input("Cost ($)", min_value=0.0, value=float(appointment.cost) if appointment else 0.0, step=10.0)
        status = st.selectbox(
            "Status",
            STATUSES,
            index=STATUSES.index(appointment.status.value) if appointment else 0,
        )
        has_next = st.checkbox("Schedule follow-up", value=bool(appointment and appointment.next_date))
        next_default = appointment.next_date if appointment and appointment.next_date else default_when
        n1, n2 = st.columns(2)
        next_day = n1.date_input("Next Appointment", value=next_default.date())
        next_at = n2.time_input("Next Time", value=next_default.time())
        uploads = st.file_uploader("Attach files", accept_multiple_files=True)
        submitted = st.form_submit_button("Update Appointment" if appointment else "Schedule Appointment")

    if not submitted:
        return None

    fields = dict(
        patient_id=patient_id,
        title=title,
        appointment_date=datetime.combine(day, at or time.min),
        description=description,
        comments=comments,
        treatment=treatment,
        cost=cost,
        status=status,
        next_date=datetime.combine(next_day, next_at or time.min) if has_next else None,
    )
    return fields, [(f.name, f.getvalue()) for f in uploads or []]


def main():
    require_role("Admin")
    render_admin_sidebar()

    st.title("Appointments")
    st.caption("Schedule and manage patient appointments")

    store = get_store()
    patients = store.load_patients()

    with st.expander("Schedule Appointment", expanded=False):
        result = appointment_form("new_appointment_form", patients)
        if result is not None:
            fields, uploads = result
            try:
                create_appointment(store, files=encode_uploads(uploads), **fields)
                st.success("Appointment scheduled successfully")
                st.rerun()
            except ClinicError as e:
                st.error(str(e))

    appointments = store.load_appointments()
    st.subheader(f"All Appointments ({len(appointments)})")

    if not appointments:
        st.info("No appointments scheduled. Schedule your first appointment to get started.")
        return

    editing = st.session_state.get("editing_appointment")

    for a in appointments:
        with st.container():
            st.write(appointment_label(patients, a))
            st.write(f"{a.appointment_date:%b %d, %Y %H:%M} · {a.status.value} · {format_money(a.cost)}")

            col1, col2 = st.columns([1, 1])
            with col1:
                if st.button("Edit", key=f"edit_{a.id}"):
                    st.session_state["editing_appointment"] = a.id
                    st.rerun()
            with col2:
                if st.button("Delete", key=f"delete_{a.id}"):
                    try:
                        delete_appointment(store, a.id)
                        st.rerun()
                    except ClinicError as e:
                        st.error(str(e))

            if editing == a.id:
                for index, f in enumerate(a.files):
                    f1, f2 = st.columns([4, 1])
                    f1.write(f"📎 {f.name}")
                    if f2.button("Remove", key=f"rm_{a.id}_{index}"):
                        try:
                            remove_attachment(store, a.id, index)
                            st.rerun()
                        except ClinicError as e:
                            st.error(str(e))

                result = appointment_form(f"edit_form_{a.id}", patients, a)
                if result is not None:
                    fields, uploads = result
                    try:
                        update_appointment(store, a.id, files=a.files + encode_uploads(uploads), **fields)
                        st.session_state.pop("editing_appointment", None)
                        st.success("Appointment updated successfully")
                        st.rerun()
                    except ClinicError as e:
                        st.error(str(e))
            st.write("---")


if __name__ == "__main__":
    main()
