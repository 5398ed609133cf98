"""Shared test doubles and fixtures."""

import pytest

from smart_recall.config import Settings, StorageBackend
from smart_recall.errors import ModelUnavailableError
from smart_recall.llm.base import GenerationParams, LLMProvider, ResponseResult
from smart_recall.storage.memory import InMemoryKnowledgeStore


class FakeLLMProvider(LLMProvider):
    """Records prompts and returns a canned answer or raises a canned error."""

    def __init__(self, answer: str = "Found it: the Q3 marketing deck.", error: Exception | None = None):
        self.answer = answer
        self.error = error
        self.prompts: list[str] = []
        self.params: list[GenerationParams | None] = []

    async def generate_response(
        self, prompt: str, params: GenerationParams | None = None
    ) -> ResponseResult:
        self.prompts.append(prompt)
        self.params.append(params)
        if self.error is not None:
            raise self.error
        return ResponseResult(content=self.answer, model="fake")

    async def health_check(self) -> bool:
        return self.error is None


@pytest.fixture
def settings():
    return Settings(_env_file=None, storage_backend=StorageBackend.MEMORY)


@pytest.fixture
def store():
    return InMemoryKnowledgeStore()


@pytest.fixture
def llm():
    return FakeLLMProvider()


@pytest.fixture
def failing_llm():
    return FakeLLMProvider(error=ModelUnavailableError("Gemini API error: 500"))
