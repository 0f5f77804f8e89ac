import logging

import streamlit as st

from core.config import SEED_DEFAULTS
from core.helpers import hide_sidebar_completely
from core.logging_setup import configure_logging
from core.session_manager import init_session_state, login, logout
from services.store_service import get_store

logger = logging.getLogger(__name__)

HOME_PAGES = {
    "Admin": "pages/a_dashboard.py",
    "Patient": "pages/p_my_appointments.py",
}


def go_to(page_path: str):
    st.switch_page(page_path)


def main():
    st.set_page_config(
        page_title="Dental Center",
        page_icon="🦷",
        layout="wide",
        initial_sidebar_state="collapsed",
    )
    configure_logging()

    if SEED_DEFAULTS:
        get_store().initialize_defaults()

    session = init_session_state()
    user = session.current_user()

    cols = st.columns([4, 2])
    with cols[0]:
        st.title("Dental Center")
    with cols[1]:
        if user:
            st.info(f"Logged in as: **{user.email}** ({user.role.value})")
            if st.button("Log out"):
                logout()

    st.write("---")

    if user is None:
        hide_sidebar_completely()

        st.subheader("Sign in")
        with st.form("login_form"):
            email = st.text_input("Email", placeholder="admin@entnt.in")
            password = st.text_input("Password", type="password")
            submitted = st.form_submit_button("Login")

        if submitted:
            if login(email, password):
                st.success("Welcome to the Dental Center Dashboard")
                go_to(HOME_PAGES[session.current_user().role.value])
            else:
                st.error("Invalid email or password")

        with st.expander("Demo accounts"):
            st.write("- Admin: `admin@entnt.in` / `admin123`")
            st.write("- Patient: `john@entnt.in` / `patient123`")
        return

    st.subheader("Quick navigation")

    if user.is_admin:
        if st.button("Go to Admin Dashboard"):
            go_to("pages/a_dashboard.py")
    else:
        if st.button("Go to My Dashboard"):
            go_to("pages/p_dashboard.py")
        if st.button("Go to My Appointments"):
            go_to("pages/p_my_appointments.py")


if __name__ == "__main__":
    main()
