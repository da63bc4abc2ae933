from collections.abc import Iterator
from typing import Any, ClassVar

import pytest

from soka_app.config.store import ConfigurationStore, default_store

SOKA_ENVIRONMENT_VARIABLES = [
    "SOKA_PROVIDER",
    "SOKA_MODEL",
    "SOKA_API_KEY",
    "SOKA_ENV",
    "GEMINI_API_KEY",
    "OPENAI_API_KEY",
    "ANTHROPIC_API_KEY",
]

BUILT_IN_MODEL = "built-in-model"
BUILT_IN_MAX_ITERATIONS = 7


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for variable in SOKA_ENVIRONMENT_VARIABLES:
        monkeypatch.delenv(variable, raising=False)


@pytest.fixture(autouse=True)
def fresh_default_store() -> Iterator[ConfigurationStore]:
    default_store.reset()
    yield default_store
    default_store.reset()


@pytest.fixture
def store() -> ConfigurationStore:
    return ConfigurationStore()


class MockAgent:
    """Mimics the class-level setters of a Soka agent."""

    _provider: ClassVar[str | None] = None
    _model: ClassVar[str | None] = BUILT_IN_MODEL
    _api_key: ClassVar[str | None] = None
    _max_iterations: ClassVar[int | None] = BUILT_IN_MAX_ITERATIONS

    @classmethod
    def provider(cls, value: str) -> None:
        cls._provider = value

    @classmethod
    def model(cls, value: str) -> None:
        cls._model = value

    @classmethod
    def api_key(cls, value: str) -> None:
        cls._api_key = value

    @classmethod
    def max_iterations(cls, value: int) -> None:
        cls._max_iterations = value


def agent_settings(agent_class: type) -> dict[str, Any]:
    return {
        "provider": agent_class._provider,  # pyright: ignore[reportAttributeAccessIssue]
        "model": agent_class._model,  # pyright: ignore[reportAttributeAccessIssue]
        "api_key": agent_class._api_key,  # pyright: ignore[reportAttributeAccessIssue]
        "max_iterations": agent_class._max_iterations,  # pyright: ignore[reportAttributeAccessIssue]
    }


@pytest.fixture
def agent_base() -> type[MockAgent]:
    class Agent(MockAgent):
        pass

    return Agent
