import streamlit as st

from laundryms.auth import sign_up
from laundryms.errors import error_message
from laundryms.guard import LANDING, LOGIN
from laundryms.log import get_logger
from laundryms.session import navigate, notify

logger = get_logger(__name__)


def render_signup(cfg, client):
    if st.button("← Back"):
        navigate(LANDING)

    st.title("Create Account")

    with st.form("signup_form"):
        name = st.text_input("Full name")
        email = st.text_input("Email address")
        password = st.text_input("Password", type="password")
        confirm = st.text_input("Confirm password", type="password")
        submitted = st.form_submit_button("Create Account", type="primary")

    if submitted:
        try:
            with st.spinner("Creating Account..."):
                sign_up(client, name, email, password, confirm)
        except Exception as e:
            logger.warning("Sign-up failed: %s", e)
            st.error(error_message(e))
        else:
            notify("success", "Account created! Please sign in.")
            navigate(LOGIN)

    st.caption("Already have an account?")
    if st.button("Sign In"):
        navigate(LOGIN)
