import streamlit as st
from core.errors import ClinicError
from core.session_manager import require_role
from core.helpers import render_admin_sidebar
from services.store_service import get_store
from services.patient_service import (
    create_patient,
    delete_patient,
    search_patients,
    update_patient,
)


def patient_form(key: str, patient=None):
    """Render the add/edit form; returns the submitted field values or None."""
    with st.form(key):
        name = st.text_input("Full Name *", value=patient.name if patient else "")
        dob = st.text_input("Date of Birth (YYYY-MM-DD)", value=patient.dob if patient else "")
        contact = st.text_input("Contact Number *", value=patient.contact if patient else "")
        email = st.text_input("Email *", value=patient.email if patient else "")
        address = st.text_input("Address", value=patient.address if patient else "")
        health_info = st.text_area("Health Information", value=patient.health_info if patient else "")
        submitted = st.form_submit_button("Update Patient" if patient else "Add Patient")

    if not submitted:
        return None
    return dict(name=name, dob=dob, contact=contact, email=email, address=address, health_info=health_info)


def main():
    require_role("Admin")
    render_admin_sidebar()

    st.title("Patients")
    st.caption("Manage patient records")

    store = get_store()

    with st.expander("Add New Patient", expanded=False):
        fields = patient_form("new_patient_form")
        if fields is not None:
            try:
                patient = create_patient(store, **fields)
                st.success(f"Patient added successfully ({patient.id})")
                st.rerun()
            except ClinicError as e:
                st.error(str(e))

    q = st.text_input("Search", placeholder="Name, email or phone").strip()
    patients = search_patients(store.load_patients(), q)

    st.subheader(f"All Patients ({len(patients)})")

    if not patients:
        st.info("No patients found.")
        return

    editing = st.session_state.get("editing_patient")

    for p in patients:
        with st.container():
            st.write(f"**{p.name}** · {p.email} · {p.contact}")
            st.write(f"DOB: {p.dob or '-'} · {p.address or 'No address'}")
            if p.health_info:
                st.caption(p.health_info)

            col1, col2 = st.columns([1, 1])
            with col1:
                if st.button("Edit", key=f"edit_{p.id}"):
                    st.session_state["editing_patient"] = p.id
                    st.rerun()
            with col2:
                if st.button("Delete", key=f"delete_{p.id}"):
                    try:
                        delete_patient(store, p.id)
                        st.success("Patient deleted successfully")
                        st.rerun()
                    except ClinicError as e:
                        st.error(str(e))

            if editing == p.id:
                fields = patient_form(f"edit_form_{p.id}", p)
                if fields is not None:
                    try:
                        update_patient(store, p.id, **fields)
                        st.session_state.pop("editing_patient", None)
                        st.success("Patient updated successfully")
                        st.rerun()
                    except ClinicError as e:
                        st.error(str(e))
            st.write("---")


if __name__ == "__main__":
    main()
