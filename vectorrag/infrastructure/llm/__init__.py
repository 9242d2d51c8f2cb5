"""LLM client exports."""

from .base import LLMClient
from .factory import create_llm_client
from .ollama import OllamaClient
from .openai_compat import OpenAICompatibleClient
from .prompt import ANSWER_PROMPT_TEMPLATE, build_answer_prompt

__all__ = [
    "LLMClient",
    "OllamaClient",
    "OpenAICompatibleClient",
    "create_llm_client",
    "ANSWER_PROMPT_TEMPLATE",
    "build_answer_prompt",
]
