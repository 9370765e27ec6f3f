from types import SimpleNamespace

import pytest

from laundryms import chat
from laundryms.chat import FALLBACK_REPLY, SYSTEM_PROMPT, LaundryBot, store_message


class FakeModel:
    """Records every chat started against it; ``failing`` names models that error."""

    failing = set()
    started = []

    def __init__(self, model_name):
        self.model_name = model_name

    def start_chat(self, history):
        FakeModel.started.append((self.model_name, history))
        return self

    def send_message(self, message):
        if self.model_name in FakeModel.failing:
            raise RuntimeError(f"{self.model_name} overloaded")
        return SimpleNamespace(text=f"[{self.model_name}] {message}")


@pytest.fixture
def fake_genai(monkeypatch):
    FakeModel.failing = set()
    FakeModel.started = []
    configured = []
    monkeypatch.setattr(chat.genai, "configure", lambda api_key: configured.append(api_key))
    monkeypatch.setattr(chat.genai, "GenerativeModel", FakeModel)
    return configured


def test_chat_is_seeded_with_system_prompt(fake_genai):
    bot = LaundryBot("key-123", "gemini-2.5-flash")

    reply = bot.send("How much is dry cleaning?")

    assert reply == "[gemini-2.5-flash] How much is dry cleaning?"
    assert fake_genai == ["key-123"]
    model_name, history = FakeModel.started[0]
    assert history[0] == {"role": "user", "parts": [SYSTEM_PROMPT]}
    assert history[1]["role"] == "model"


def test_system_prompt_restricts_topics():
    assert "I can only help with LaundryMS-related questions." in SYSTEM_PROMPT
    assert "Dry Cleaning (₱150/piece)" in SYSTEM_PROMPT


def test_follow_up_carries_history(fake_genai):
    bot = LaundryBot("key")
    bot.send("hi")
    bot.send("can I schedule for Sunday?")

    _, history = FakeModel.started[-1]
    assert history[-2:] == [
        {"role": "user", "parts": ["hi"]},
        {"role": "model", "parts": ["[gemini-2.5-flash] hi"]},
    ]


def test_falls_back_to_next_model(fake_genai):
    FakeModel.failing = {"gemini-2.5-flash"}
    bot = LaundryBot("key")

    assert bot.send("hello") == "[gemini-2.0-flash] hello"


def test_configured_model_tried_first(fake_genai):
    bot = LaundryBot("key", "gemini-2.0-flash-lite")
    bot.send("hello")
    assert FakeModel.started[0][0] == "gemini-2.0-flash-lite"
    assert bot.models.count("gemini-2.0-flash-lite") == 1


def test_all_models_failing_returns_apology(fake_genai):
    FakeModel.failing = set(chat.FALLBACK_MODELS)
    bot = LaundryBot("key")

    assert bot.send("hello") == FALLBACK_REPLY
    assert len(bot.history) == 2


def test_blank_message_ignored(fake_genai):
    bot = LaundryBot("key")
    assert bot.send("   ") is None
    assert FakeModel.started == []


def test_store_message_trims_oldest():
    history = []
    for i in range(5):
        store_message(history, "user", f"m{i}", max_messages=3)
    assert [m["content"] for m in history] == ["m2", "m3", "m4"]


def test_replayed_history_is_capped_but_keeps_system_prompt(fake_genai):
    bot = LaundryBot("key", max_history=4)
    for i in range(5):
        bot.send(f"q{i}")

    assert len(bot.history) == 2 + 4
    assert bot.history[:2] == chat.seed_history()
    assert [turn["parts"][0] for turn in bot.history[2::2]] == ["q3", "q4"]


def test_odd_history_cap_drops_whole_turns(fake_genai):
    bot = LaundryBot("key", max_history=3)
    for i in range(3):
        bot.send(f"q{i}")

    roles = [turn["role"] for turn in bot.history[2:]]
    assert roles == ["user", "model"]
