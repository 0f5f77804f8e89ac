import re
from uuid import uuid4

import streamlit as st

from services.store_service import get_store
from services.user_service import SessionContext

# Query parameter carrying this browser's session token across reloads
BROWSER_PARAM = "sid"
_TOKEN_RE = re.compile(r"^[0-9a-f]{32}$")


def browser_id() -> str:
    """Token identifying this browser tab's session.

    Kept in st.session_state for the life of the connection and mirrored into
    the URL so a reload picks the same token back up.
    """
    token = st.session_state.get("browser_id")
    if token is None:
        from_url = st.query_params.get(BROWSER_PARAM, "")
        token = from_url if _TOKEN_RE.match(from_url) else uuid4().hex
        st.session_state.browser_id = token
    if st.query_params.get(BROWSER_PARAM) != token:
        st.query_params[BROWSER_PARAM] = token
    return token


def init_session_state() -> SessionContext:
    """Ensure this browser session has its SessionContext."""
    token = browser_id()
    if "session" not in st.session_state:
        st.session_state.session = SessionContext(get_store(), token)
    return st.session_state.session


def get_context() -> SessionContext:
    return init_session_state()


def current_user():
    return init_session_state().current_user()


def login(email: str, password: str) -> bool:
    return init_session_state().login(email, password)


def logout():
    """Clear the session and redirect to the login page."""
    init_session_state().logout()

    # Drop page-level selections left behind by the previous user
    for key in ("selected_date", "editing_appointment", "editing_patient"):
        st.session_state.pop(key, None)

    st.switch_page("app.py")


def require_role(role: str):
    """Restrict a page by role; send everyone else back to app.py."""
    user = current_user()

    if user is None:
        st.warning("Please log in to access this page.")
        st.switch_page("app.py")

    if user.role.value.lower() != (role or "").strip().lower():
        st.error(f"Access denied. This page requires the '{role}' role.")
        st.switch_page("app.py")

    return user
