# src/llm/base_client.py — v2
"""Abstract LLM client interface."""

from __future__ import annotations

from abc import ABC, abstractmethod

from caselens.llm.models import LLMResponse, Message


class BaseLLMClient(ABC):
    """Unified interface for LLM providers: prompt in, text out."""

    @abstractmethod
    async def complete(
        self,
        messages: list[Message],
        system: str | None = None,
        max_tokens: int = 2000,
        temperature: float = 0.2,
        json_mode: bool = False,
    ) -> LLMResponse:
        """Text completion.

        Args:
            messages: Conversation turns (the document is the user turn).
            system: System prompt.
            max_tokens: Output token cap.
            temperature: Sampling temperature.
            json_mode: Ask the provider for a JSON object response when supported.
        """

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Provider identifier (e.g. openai)."""

    @property
    @abstractmethod
    def model(self) -> str:
        """Model name used for completions."""
