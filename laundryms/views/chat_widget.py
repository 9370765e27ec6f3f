import streamlit as st

from laundryms.chat import LaundryBot, WIDGET_GREETING, store_message

USER_AVATAR = "👤"
BOT_AVATAR = "🤖"


def _get_bot(cfg) -> LaundryBot:
    if "laundry_bot" not in st.session_state:
        st.session_state.laundry_bot = LaundryBot(cfg.gemini.api_key, cfg.gemini.model, max_history=cfg.ui.chat_history_limit)
    return st.session_state.laundry_bot


def render_chat_widget(cfg):
    if "chat_messages" not in st.session_state:
        st.session_state.chat_messages = [{"role": "assistant", "content": WIDGET_GREETING}]

    with st.expander("💬 LaundryBot", expanded=False):
        for msg in st.session_state.chat_messages:
            avatar = BOT_AVATAR if msg["role"] == "assistant" else USER_AVATAR
            with st.chat_message(msg["role"], avatar=avatar):
                st.write(msg["content"])

        with st.form("chat_form", clear_on_submit=True):
            text = st.text_input("Message", placeholder="Type a message...", label_visibility="collapsed")
            sent = st.form_submit_button("Send")

        if not sent or not text.strip():
            return

        limit = cfg.ui.chat_history_limit
        store_message(st.session_state.chat_messages, "user", text, max_messages=limit)
        with st.spinner("LaundryBot is typing..."):
            reply = _get_bot(cfg).send(text)
        store_message(st.session_state.chat_messages, "assistant", reply, max_messages=limit)
        st.rerun()
