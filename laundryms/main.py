from __future__ import annotations

import sys
import os

# --- Add project root to sys.path ---
current_dir = os.path.dirname(os.path.abspath(__file__))
parent_dir = os.path.dirname(current_dir)
if parent_dir not in sys.path:
    sys.path.insert(0, parent_dir)

import streamlit as st

# IMPORTS
from db.database import get_supabase_client
from laundryms.auth import current_user, fetch_role
from laundryms.config import load_config
from laundryms.guard import (
    ADMIN_DASHBOARD,
    CUSTOMER_DASHBOARD,
    CUSTOMER_ORDERS,
    LANDING,
    LOGIN,
    SIGNUP,
    resolve_route,
)
from laundryms.log import get_logger
from laundryms.session import flush_notifications, init_state
from laundryms.views.admin_dashboard import render_admin_dashboard
from laundryms.views.customer_dashboard import render_customer_dashboard
from laundryms.views.customer_orders import render_customer_orders
from laundryms.views.landing import render_landing
from laundryms.views.login import render_login
from laundryms.views.signup import render_signup

logger = get_logger(__name__)

PAGES = {
    LANDING: render_landing,
    SIGNUP: render_signup,
    LOGIN: render_login,
    CUSTOMER_DASHBOARD: render_customer_dashboard,
    CUSTOMER_ORDERS: render_customer_orders,
    ADMIN_DASHBOARD: render_admin_dashboard,
}


# --- CSS STYLING ---
def inject_custom_css():
    st.markdown("""
    <style>
        /* --- Hide Header/Footer for clean look --- */
        header {visibility: hidden;}
        footer {visibility: hidden;}
    </style>
    """, unsafe_allow_html=True)


def _refresh_identity(client):
    """Pick up the stored auth session (e.g. after a browser refresh)."""
    if st.session_state.user is not None:
        return
    try:
        user = current_user(client)
        if user is not None:
            st.session_state.user = user
            st.session_state.role = fetch_role(client, user.id)
    except Exception:
        logger.exception("Session retrieval failed")


def main():
    st.set_page_config(
        page_title="LaundryMS",
        page_icon="🧺",
        layout="wide",
    )

    inject_custom_css()
    cfg = load_config()
    init_state()
    client = get_supabase_client(cfg.supabase)
    _refresh_identity(client)

    requested = st.session_state.route
    route = resolve_route(requested, st.session_state.user, st.session_state.role)
    if route != requested:
        st.session_state.route = route
    if st.query_params.get("route") != route:
        st.query_params["route"] = route

    flush_notifications()
    PAGES[route](cfg, client)


if __name__ == "__main__":
    main()
