from __future__ import annotations

from dataclasses import dataclass
import streamlit as st


DEFAULT_GEMINI_MODEL = "gemini-2.5-flash"


# ---------------------- DATA CLASSES ----------------------

@dataclass
class GeminiConfig:
    api_key: str
    model: str = DEFAULT_GEMINI_MODEL


@dataclass
class SupabaseConfig:
    url: str
    anon_key: str  # user-scoped key, row-level security stays on


@dataclass
class UIConfig:
    currency: str = "₱"
    chat_history_limit: int = 25


@dataclass
class AppConfig:
    gemini: GeminiConfig
    supabase: SupabaseConfig
    ui: UIConfig


# ---------------------- LOADING ----------------------

def _gemini_section(secrets) -> dict:
    # Checks for [google] section first, then falls back to [gemini]
    if "google" in secrets:
        return dict(secrets["google"])
    if "gemini" in secrets:
        return dict(secrets["gemini"])
    return {"api_key": secrets.get("google_api_key", "")}


def load_config(secrets=None) -> AppConfig:
    if secrets is None:
        secrets = st.secrets

    # --- Gemini (Google) ---
    gemini = _gemini_section(secrets)
    gemini_cfg = GeminiConfig(
        api_key=gemini.get("api_key", ""),
        model=gemini.get("model") or DEFAULT_GEMINI_MODEL,
    )

    # --- Supabase ---
    supabase = secrets["supabase"]
    key = supabase.get("anon_key") or supabase.get("service_key")
    if not key:
        raise KeyError("supabase.anon_key is missing from secrets")
    supabase_cfg = SupabaseConfig(url=supabase["url"], anon_key=key)

    # --- UI ---
    app = dict(secrets["app"]) if "app" in secrets else {}
    ui_cfg = UIConfig(
        currency=app.get("currency", "₱"),
        # toml may hand back strings for numbers typed in quotes
        chat_history_limit=int(app.get("chat_history_limit", 25)),
    )

    return AppConfig(
        gemini=gemini_cfg,
        supabase=supabase_cfg,
        ui=ui_cfg,
    )
