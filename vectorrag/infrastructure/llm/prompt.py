"""Prompt template shared by the answer clients and the retrieval pipeline."""
from __future__ import annotations

ANSWER_PROMPT_TEMPLATE = (
    "Answer the question based on the context below. If the question can't be answered based on the "
    "context, make a reasonable guess.\n"
    "Context: {context}\n"
    "Question: {question}\n"
    "Answer:"
)


def build_answer_prompt(context: str, question: str) -> str:
    return ANSWER_PROMPT_TEMPLATE.format(context=context, question=question)


__all__ = ["ANSWER_PROMPT_TEMPLATE", "build_answer_prompt"]
