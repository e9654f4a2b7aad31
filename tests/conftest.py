from __future__ import annotations

from typing import Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

from app.config import Settings
from app.llm import LLMClient, LLMError
from app.main import create_app
from app.prompts import get_template


class FakeLLMClient(LLMClient):
    """Returns canned replies and remembers what it was sent."""

    def __init__(self, reply: str = "Thanks! Could you tell me more?", fail: bool = False):
        self.reply = reply
        self.fail = fail
        self.calls: List[Dict] = []

    def chat(
        self,
        messages: List[Dict[str, str]],
        temperature: float = 0.2,
        model: Optional[str] = None,
        max_tokens: Optional[int] = None,
    ) -> str:
        self.calls.append(
            {"messages": messages, "temperature": temperature, "max_tokens": max_tokens}
        )
        if self.fail:
            raise LLMError("upstream unavailable")
        return self.reply


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None).model_copy(
        update={
            "openai_api_key": "test-key",
            "clinic_template": "screening",
            "clinic_name": "Strong Medicine",
            "chat_history_window": 10,
            "report_history_window": 20,
            "strict_stage_advancement": False,
        }
    )


@pytest.fixture
def template(settings):
    return get_template(settings.clinic_template, settings.clinic_name)


@pytest.fixture
def fake_llm() -> FakeLLMClient:
    return FakeLLMClient()


@pytest.fixture
def client(settings, fake_llm) -> TestClient:
    return TestClient(create_app(settings, llm_client=fake_llm))
