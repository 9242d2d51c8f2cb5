"""Query pipeline: embed, search, hydrate, build the prompt, answer."""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from enum import Enum
from time import perf_counter

from ..exceptions import PromptTooLongError, ProviderError, ValidationError
from ..infrastructure.embeddings.base import EmbeddingClient, embed_text
from ..infrastructure.llm.base import LLMClient
from ..infrastructure.llm.prompt import build_answer_prompt
from ..infrastructure.repositories.document_repo import DocumentStore
from ..infrastructure.vectorstore.base import SearchHit, VectorIndex

LOGGER = logging.getLogger(__name__)


class RetrievalStage(str, Enum):
    validating = "validating"
    embedding = "embedding"
    searching = "searching"
    hydrating = "hydrating"
    prompt_building = "prompt_building"
    answering = "answering"
    done = "done"
    failed = "failed"


@dataclass(slots=True)
class RetrievalMatch:
    """A search hit; ``content`` is ``None`` when the store has no such row."""

    document_id: int
    score: float
    content: str | None = None


@dataclass(slots=True)
class RetrievalResult:
    query: str
    answer: str
    matches: list[RetrievalMatch] = field(default_factory=list)
    context: str = ""


def build_context(matches: list[RetrievalMatch]) -> str:
    """Number the hydrated matches ``1. <content>`` in ranking order."""

    lines = [match.content for match in matches if match.content is not None]
    return "\n".join(f"{rank}. {content}" for rank, content in enumerate(lines, start=1))


class RetrievalPipeline:
    """Turn a query into a ranked context and an answer.

    Any stage failure aborts the call; there are no retries inside a call.
    """

    def __init__(
        self,
        store: DocumentStore,
        index: VectorIndex,
        embedder: EmbeddingClient,
        llm: LLMClient,
        *,
        max_prompt_chars: int | None = None,
        provider_timeout: float | None = None,
    ) -> None:
        self.store = store
        self.index = index
        self.embedder = embedder
        self.llm = llm
        self.max_prompt_chars = max_prompt_chars
        self.provider_timeout = provider_timeout

    async def retrieve(self, query: str | None, k: int) -> RetrievalResult:
        stage = RetrievalStage.validating
        start = perf_counter()
        try:
            if query is None or not query.strip():
                raise ValidationError("Query is required")

            stage = RetrievalStage.embedding
            query_vector = await embed_text(self.embedder, query, timeout=self.provider_timeout)

            stage = RetrievalStage.searching
            hits = self.index.search(query_vector, k)

            stage = RetrievalStage.hydrating
            matches = await self._hydrate(hits)

            stage = RetrievalStage.prompt_building
            context = build_context(matches)
            prompt = build_answer_prompt(context, query)
            if self.max_prompt_chars is not None and len(prompt) > self.max_prompt_chars:
                raise PromptTooLongError(len(prompt), self.max_prompt_chars)

            stage = RetrievalStage.answering
            answer = await self._answer(context, query)
        except Exception as exc:
            LOGGER.warning(
                "Retrieval %s | stage=%s kind=%s error=%s",
                RetrievalStage.failed.value,
                stage.value,
                type(exc).__name__,
                exc,
            )
            raise

        LOGGER.info(
            "Retrieval %s | k=%d matches=%d context_chars=%d duration=%.3fs",
            RetrievalStage.done.value,
            k,
            len(matches),
            len(context),
            perf_counter() - start,
        )
        return RetrievalResult(query=query, answer=answer, matches=matches, context=context)

    async def _hydrate(self, hits: list[SearchHit]) -> list[RetrievalMatch]:
        contents = await self.store.get_by_ids({hit.document_id for hit in hits})
        matches: list[RetrievalMatch] = []
        for hit in hits:
            content = contents.get(hit.document_id)
            if content is None:
                LOGGER.warning("Indexed document %s has no stored content; skipping", hit.document_id)
            matches.append(RetrievalMatch(document_id=hit.document_id, score=hit.score, content=content))
        return matches

    async def _answer(self, context: str, query: str) -> str:
        try:
            return await asyncio.wait_for(self.llm.answer(context, query), timeout=self.provider_timeout)
        except asyncio.TimeoutError as exc:
            raise ProviderError(f"Answer request timed out after {self.provider_timeout}s", cause=exc) from exc
        except (ProviderError, ValidationError):
            raise
        except Exception as exc:  # noqa: BLE001
            raise ProviderError(f"Answer request failed: {exc}", cause=exc) from exc


__all__ = ["RetrievalPipeline", "RetrievalResult", "RetrievalMatch", "RetrievalStage", "build_context"]
