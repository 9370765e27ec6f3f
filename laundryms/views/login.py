import streamlit as st

from laundryms.auth import sign_in
from laundryms.errors import error_message
from laundryms.guard import LANDING, SIGNUP, landing_route_for
from laundryms.log import get_logger
from laundryms.session import navigate, set_identity

logger = get_logger(__name__)


def render_login(cfg, client):
    if st.button("← Back"):
        navigate(LANDING)

    st.title("Sign In")

    with st.form("login_form"):
        email = st.text_input("Email address")
        password = st.text_input("Password", type="password")
        submitted = st.form_submit_button("Sign In", type="primary")

    if submitted:
        try:
            with st.spinner("Signing In..."):
                user, role = sign_in(client, email, password)
        except Exception as e:
            logger.warning("Sign-in failed for %s: %s", email, e)
            st.error(error_message(e))
        else:
            set_identity(user, role)
            navigate(landing_route_for(role))

    st.caption("Don't have an account?")
    if st.button("Create Account"):
        navigate(SIGNUP)
