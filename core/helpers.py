import uuid
import streamlit as st


def generate_record_id(prefix: str, existing_ids=()) -> str:
    """Return a fresh id like p3f9a1c2e7b40 that is not in existing_ids."""
    taken = set(existing_ids)
    while True:
        candidate = f"{prefix}{uuid.uuid4().hex[:12]}"
        if candidate not in taken:
            return candidate


def format_money(amount: float) -> str:
    if float(amount).is_integer():
        return f"${int(amount)}"
    return f"${amount:.2f}"


# -----------------------------
# Sidebar helpers
# -----------------------------
def hide_default_sidebar_nav():
    """Hide Streamlit's default multi-page navigation for a cleaner custom menu."""
    st.markdown(
        """
        <style>
        /* Hide the auto-generated Pages section */
        [data-testid="stSidebarNav"] { display: none; }
        </style>
        """,
        unsafe_allow_html=True,
    )


def hide_sidebar_completely():
    """Completely hide Streamlit's sidebar and the toggle control.

    Used on the login view where navigation should not be visible.
    """
    st.markdown(
        """
        <style>
        [data-testid="stSidebar"] { display: none !important; }
        [data-testid="collapsedControl"] { display: none !important; }
        </style>
        """,
        unsafe_allow_html=True,
    )


def render_admin_sidebar():
    """Render the admin menu.

    Items:
    - Dashboard
    - Patients
    - Appointments
    - Calendar View
    - Logout
    """
    hide_default_sidebar_nav()
    with st.sidebar:
        st.markdown("### Dental Center")
        if st.button("Dashboard", use_container_width=True):
            st.switch_page("pages/a_dashboard.py")
        if st.button("Patients", use_container_width=True):
            st.switch_page("pages/a_patients.py")
        if st.button("Appointments", use_container_width=True):
            st.switch_page("pages/a_appointments.py")
        if st.button("Calendar View", use_container_width=True):
            st.switch_page("pages/a_calendar.py")
        st.divider()
        if st.button("Logout", use_container_width=True):
            from core.session_manager import logout
            logout()


def render_patient_sidebar():
    """Render the patient menu: My Dashboard, My Appointments, Logout."""
    hide_default_sidebar_nav()
    with st.sidebar:
        st.markdown("### Dental Center")
        if st.button("My Dashboard", use_container_width=True):
            st.switch_page("pages/p_dashboard.py")
        if st.button("My Appointments", use_container_width=True):
            st.switch_page("pages/p_my_appointments.py")
        st.divider()
        if st.button("Logout", use_container_width=True):
            from core.session_manager import logout
            logout()
