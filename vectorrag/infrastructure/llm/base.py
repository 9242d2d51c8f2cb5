"""LLM client base classes."""
from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import AsyncGenerator

from ...exceptions import PromptTooLongError
from .prompt import build_answer_prompt


class LLMClient(ABC):
    """Answer generator on top of a streaming completion API."""

    max_prompt_chars: int | None = None

    @abstractmethod
    def generate(self, prompt: str) -> AsyncGenerator[str, None]:
        """Yield response chunks for the given prompt."""

    async def answer(self, context: str, question: str) -> str:
        """Answer ``question`` from ``context``, refusing prompts over the character limit."""

        prompt = build_answer_prompt(context, question)
        if self.max_prompt_chars is not None and len(prompt) > self.max_prompt_chars:
            raise PromptTooLongError(len(prompt), self.max_prompt_chars)
        pieces = [piece async for piece in self.generate(prompt) if piece]
        return "".join(pieces).strip()


__all__ = ["LLMClient"]
