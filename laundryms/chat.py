from __future__ import annotations

from typing import Any, Dict, List, Optional

import google.generativeai as genai

from laundryms.log import get_logger

logger = get_logger(__name__)

SYSTEM_PROMPT = """
You are LaundryBot, the assistant for LaundryMS.
You ONLY provide information about:
- Services: Wash & Fold (₱50/kg), Ironing & Pressing (₱30/piece), Dry Cleaning (₱150/piece)
- Orders: creating, updating, cancelling
- Scheduling: customers can schedule any date and time
- Customer support

If a user asks anything unrelated to LaundryMS, reply:
"I can only help with LaundryMS-related questions."
Be polite, concise, and friendly.
""".strip()

MODEL_GREETING = "Hi! I'm LaundryBot 🤖. I can help you with your laundry orders and scheduling!"
WIDGET_GREETING = "Hi! I'm Laundry Chatbot 🤖 How can I assist you today?"
FALLBACK_REPLY = "Sorry, I couldn't process your request."

FALLBACK_MODELS = [
    "gemini-2.5-flash",
    "gemini-2.0-flash",
    "gemini-2.0-flash-lite",
    "gemini-flash-latest",
]


def seed_history() -> List[Dict[str, Any]]:
    return [
        {"role": "user", "parts": [SYSTEM_PROMPT]},
        {"role": "model", "parts": [MODEL_GREETING]},
    ]


def store_message(history: List[Dict[str, Any]], role: str, content: str, max_messages: int = 25) -> None:
    history.append({"role": role, "content": content})
    if len(history) > max_messages:
        del history[: len(history) - max_messages]


class LaundryBot:
    """Scripted Gemini chat, one instance per browser session."""

    def __init__(self, api_key: str, model: str = FALLBACK_MODELS[0], max_history: int = 25):
        self.api_key = api_key
        self.max_history = max_history
        self.models = [model] + [m for m in FALLBACK_MODELS if m != model]
        self.history = seed_history()
        self._configured = False

    def _configure(self) -> None:
        if not self._configured:
            genai.configure(api_key=self.api_key)
            self._configured = True

    def _trim_history(self) -> None:
        # The two seed turns carry the system prompt and are always kept
        seed = len(seed_history())
        overflow = len(self.history) - seed - self.max_history
        if overflow > 0:
            # whole user/model pairs, so turns keep alternating
            overflow += overflow % 2
            del self.history[seed:seed + overflow]

    def send(self, message: str) -> Optional[str]:
        """Reply to ``message``; None for blank input, the fallback reply on failure."""
        if not message or not message.strip():
            return None

        try:
            self._configure()
        except Exception:
            logger.exception("Gemini configuration failed")
            return FALLBACK_REPLY

        last_error = None
        for model_name in self.models:
            try:
                model = genai.GenerativeModel(model_name)
                chat = model.start_chat(history=list(self.history))
                response = chat.send_message(message)
                reply = response.text
            except Exception as e:
                last_error = e
                logger.warning("Gemini model %s failed: %s", model_name, e)
                continue

            self.history.append({"role": "user", "parts": [message]})
            self.history.append({"role": "model", "parts": [reply]})
            self._trim_history()
            return reply

        logger.error("Gemini chat failed on all models. Last error: %s", last_error)
        return FALLBACK_REPLY
