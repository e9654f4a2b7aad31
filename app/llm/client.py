# app/llm/client.py
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import List, Dict, Optional

from openai import OpenAI, OpenAIError

from app.config import Settings

logger = logging.getLogger(__name__)


class LLMError(RuntimeError):
    """
    Raised when the upstream model call fails for any reason.
    """


class LLMClient(ABC):
    """
    Simple abstraction so we can swap providers if needed.
    """

    @abstractmethod
    def chat(
        self,
        messages: List[Dict[str, str]],
        temperature: float = 0.2,
        model: Optional[str] = None,
        max_tokens: Optional[int] = None,
    ) -> str:
        """
        messages: list of {"role": "system"|"user"|"assistant", "content": "..."}
        returns: assistant content as a string ("" if the model sent nothing)
        """
        ...


class OpenAILLMClient(LLMClient):
    """
    OpenAI implementation using the official Python client.
    """

    def __init__(self, settings: Settings, model: Optional[str] = None):
        if not settings.openai_api_key:
            raise RuntimeError(
                "OPENAI_API_KEY is not set in environment (.env)."
            )

        self.client = OpenAI(api_key=settings.openai_api_key, base_url=settings.openai_base_url)
        self.default_model = model or settings.llm_model

    def chat(
        self,
        messages: List[Dict[str, str]],
        temperature: float = 0.2,
        model: Optional[str] = None,
        max_tokens: Optional[int] = None,
    ) -> str:
        kwargs = {}
        if max_tokens is not None:
            kwargs["max_tokens"] = max_tokens

        try:
            completion = self.client.chat.completions.create(
                model=model or self.default_model,
                messages=messages,
                temperature=temperature,
                **kwargs,
            )
        except OpenAIError as exc:
            raise LLMError(f"LLM request failed: {exc}") from exc

        if not completion.choices:
            return ""
        content = completion.choices[0].message.content
        return content or ""
