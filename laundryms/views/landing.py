import streamlit as st

from laundryms.guard import LOGIN, SIGNUP
from laundryms.session import navigate


def render_landing(cfg, client):
    st.title("✨ Laundry Management System")
    st.write(
        "Streamline your laundry business with our intuitive management platform. "
        "Get started in seconds."
    )

    if st.button("Get Started →", type="primary"):
        navigate(SIGNUP)

    st.caption("Already have an account?")
    if st.button("Sign In"):
        navigate(LOGIN)
