from __future__ import annotations

from typing import Any, Dict, List

import streamlit as st

from db.database import reset_supabase_client
from laundryms.auth import sign_out
from laundryms.errors import error_message
from laundryms.guard import LANDING, ROUTES
from laundryms.log import get_logger

logger = get_logger(__name__)

NOTIFICATION_BUFFER_KEY = "_notifications"

# Everything tied to the signed-in user; widget keys go by prefix
USER_KEYS = ("user", "role", "customer", "laundry_bot", "chat_messages", "editing_order_id", "confirm_delete_id")
USER_KEY_PREFIXES = ("order_", "admin_")

_ICONS = {
    "success": "✅",
    "error": "⚠️",
    "info": "ℹ️",
}


def init_state() -> None:
    if "route" not in st.session_state:
        requested = st.query_params.get("route", LANDING)
        st.session_state.route = requested if requested in ROUTES else LANDING
    if "user" not in st.session_state:
        st.session_state.user = None
    if "role" not in st.session_state:
        st.session_state.role = None
    if NOTIFICATION_BUFFER_KEY not in st.session_state:
        st.session_state[NOTIFICATION_BUFFER_KEY] = []


def navigate(route: str) -> None:
    st.session_state.route = route
    st.query_params["route"] = route
    st.rerun()


def set_identity(user: Any, role: Any) -> None:
    st.session_state.user = user
    st.session_state.role = role


def clear_identity() -> None:
    for key in list(st.session_state.keys()):
        if key in USER_KEYS or key.startswith(USER_KEY_PREFIXES):
            del st.session_state[key]
    st.session_state.user = None
    st.session_state.role = None


def logout(client) -> None:
    try:
        sign_out(client)
    except Exception as e:
        logger.exception("Sign-out failed")
        notify("error", error_message(e))
        # The client may still hold a live auth session
        reset_supabase_client()
    clear_identity()


# --- Notifications ---
# Toasts raised right before st.rerun() would be lost, so they are buffered
# and drained at the top of the next run.

def notify(kind: str, message: str) -> None:
    buffer: List[Dict[str, str]] = st.session_state.setdefault(NOTIFICATION_BUFFER_KEY, [])
    buffer.append({"kind": kind, "message": message})


def flush_notifications() -> None:
    buffer = st.session_state.get(NOTIFICATION_BUFFER_KEY) or []
    for note in buffer:
        st.toast(note["message"], icon=_ICONS.get(note["kind"], "ℹ️"))
    st.session_state[NOTIFICATION_BUFFER_KEY] = []
