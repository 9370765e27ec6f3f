# db/database.py

from supabase import create_client, Client
import streamlit as st

from laundryms.config import SupabaseConfig


def get_supabase_client(cfg: SupabaseConfig) -> Client:
    """
    Returns the Supabase client of the current browser session.
    Uses the anon key so every query runs as the signed-in user and the
    row-level security policies of profiles/customers/orders apply.
    One client per session keeps auth sessions from leaking between users.
    """

    if "supabase_client" not in st.session_state:
        st.session_state.supabase_client = create_client(cfg.url, cfg.anon_key)

    return st.session_state.supabase_client


def reset_supabase_client() -> None:
    st.session_state.pop("supabase_client", None)
