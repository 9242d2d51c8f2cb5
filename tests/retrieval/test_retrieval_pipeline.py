"""Retrieval pipeline tests."""
from __future__ import annotations

import asyncio

import pytest

from vectorrag.exceptions import PromptTooLongError, ProviderError, ValidationError
from vectorrag.infrastructure.llm.prompt import build_answer_prompt
from vectorrag.retrieval.pipeline import RetrievalMatch, RetrievalPipeline, build_context

from conftest import CATS, DOGS, FailingLLM, KeywordEmbedder, RecordingLLM


def test_retrieve_builds_numbered_context_and_answers(services, llm: RecordingLLM) -> None:
    async def _run() -> None:
        async with services() as container:
            cats = await container.ingestion.ingest(CATS)
            await container.ingestion.ingest(DOGS)

            result = await container.retrieval.retrieve("about cats", 1)

            assert [match.document_id for match in result.matches] == [cats.document_id]
            assert result.matches[0].score == pytest.approx(0.994, abs=1e-3)
            assert result.context == "1. cats are mammals"
            assert llm.calls == [("1. cats are mammals", "about cats")]
            assert llm.prompts == [build_answer_prompt("1. cats are mammals", "about cats")]
            assert result.answer == "They are mammals."

    asyncio.run(_run())


def test_retrieve_over_empty_index_still_answers(services, llm: RecordingLLM) -> None:
    async def _run() -> None:
        async with services() as container:
            result = await container.retrieval.retrieve("about cats", 3)

            assert result.matches == []
            assert result.context == ""
            assert llm.calls == [("", "about cats")]

    asyncio.run(_run())


def test_missing_content_is_left_out_of_context(services, llm: RecordingLLM) -> None:
    async def _run() -> None:
        async with services() as container:
            await container.ingestion.ingest(CATS)
            # An index entry whose document is not in the store.
            container.index.add(1000, [0.95, 0.05])

            result = await container.retrieval.retrieve("about cats", 2)

            assert [match.document_id for match in result.matches][0] == 1000
            assert result.matches[0].content is None
            assert result.context == "1. cats are mammals"

    asyncio.run(_run())


@pytest.mark.parametrize("query", ["", "  ", None])
def test_blank_query_is_rejected(services, llm: RecordingLLM, query) -> None:
    async def _run() -> None:
        async with services() as container:
            with pytest.raises(ValidationError):
                await container.retrieval.retrieve(query, 1)
            assert llm.calls == []

    asyncio.run(_run())


def test_prompt_over_limit_is_rejected_before_generation(services, llm: RecordingLLM) -> None:
    long_text = "cats " * 3000
    embedder = KeywordEmbedder({long_text: [1.0, 0.0], "about cats": [1.0, 0.0]})

    async def _run() -> None:
        async with services(embedder_override=embedder) as container:
            await container.ingestion.ingest(long_text)

            with pytest.raises(PromptTooLongError) as error:
                await container.retrieval.retrieve("about cats", 1)

            assert error.value.limit == 10_000
            assert llm.calls == []
            assert llm.prompts == []

    asyncio.run(_run())


def test_answer_failure_is_a_provider_error(services) -> None:
    async def _run() -> None:
        async with services(llm_override=FailingLLM()) as container:
            await container.ingestion.ingest(CATS)
            with pytest.raises(ProviderError):
                await container.retrieval.retrieve("about cats", 1)

    asyncio.run(_run())


def test_answer_timeout_is_a_provider_error(services) -> None:
    class StallingLLM(RecordingLLM):
        async def generate(self, prompt: str):
            await asyncio.sleep(1.0)
            yield "late"

    async def _run() -> None:
        async with services() as container:
            pipeline = RetrievalPipeline(
                container.store,
                container.index,
                container.embedder,
                StallingLLM(),
                provider_timeout=0.05,
            )
            with pytest.raises(ProviderError, match="timed out"):
                await pipeline.retrieve("about cats", 1)

    asyncio.run(_run())


def test_build_context_numbers_only_hydrated_matches() -> None:
    matches = [
        RetrievalMatch(document_id=3, score=0.9, content="first"),
        RetrievalMatch(document_id=7, score=0.8, content=None),
        RetrievalMatch(document_id=1, score=0.1, content="second"),
    ]

    assert build_context(matches) == "1. first\n2. second"
