import pkgutil
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from logging import Logger
from typing import Any, Protocol
from unittest.mock import MagicMock

import pytest
from fastmcp.utilities.logging import get_logger
from pydantic import BaseModel, Field

from soka_app.config.configuration import SokaConfiguration
from soka_app.config.store import ConfigurationStore, ConfigureFunction, default_store

logger: Logger = get_logger(name=__name__)

DEFAULT_LLM_TARGET = "soka.LLM"
DEFAULT_THOUGHT = "Analyzing the request"
COMPLETED = "completed"


class AgentResult(BaseModel):
    """The outcome of an agent run, as returned by the mocks and `successful_result`."""

    status: str = COMPLETED
    final_answer: str | None = None
    iterations: int = 1
    thought_process: list[str] = Field(default_factory=list)


class RunnableAgent(Protocol):
    def run(self, input: str, *args: Any, **kwargs: Any) -> Any: ...


class ChatResponse(BaseModel):
    content: str


def build_mock_response(**attrs: Any) -> dict[str, Any]:
    default_response: dict[str, Any] = {
        "final_answer": "Mocked answer",
        "status": COMPLETED,
        "iterations": 1,
        "thought_process": [],
    }
    return {**default_response, **attrs}


def build_react_response(attrs: dict[str, Any]) -> str:
    """Render a response in the ReAct text format the Soka runtime parses.

    For example:
    <Thought>Analyzing the request</Thought>
    <Final_Answer>Mocked answer</Final_Answer>"""

    thoughts: list[str] = list(attrs.get("thought_process") or []) or [DEFAULT_THOUGHT]

    response = "\n".join(f"<Thought>{thought}</Thought>" for thought in thoughts)
    response += f"\n<Final_Answer>{attrs.get('final_answer')}</Final_Answer>"
    return response


class MockLLM(MagicMock):
    """A stand-in for the Soka LLM client whose `chat` returns a canned ReAct response."""

    @classmethod
    def returning(cls, response: dict[str, Any]) -> "MockLLM":
        mock_llm = cls()
        mock_llm.chat.return_value = ChatResponse(content=build_react_response(response))
        return mock_llm


def mock_ai_response(monkeypatch: pytest.MonkeyPatch, target: str = DEFAULT_LLM_TARGET, **response_attrs: Any) -> MockLLM:
    """Make every LLM created through `target` answer with the given response.

    Nothing is patched when `target` cannot be imported, the mock is still returned."""

    response: dict[str, Any] = build_mock_response(**response_attrs)
    mock_llm: MockLLM = MockLLM.returning(response)

    try:
        _ = pkgutil.resolve_name(target)
    except (ImportError, AttributeError, ValueError):
        logger.debug(f"{target} is not available, the LLM will not be mocked.")
        return mock_llm

    monkeypatch.setattr(target, MagicMock(return_value=mock_llm))

    return mock_llm


def mock_tool_execution(monkeypatch: pytest.MonkeyPatch, tool_class: type, result: Any) -> MagicMock:
    """Make `call` on every instance of `tool_class` return `result`."""
    call_mock = MagicMock(return_value=result)
    monkeypatch.setattr(tool_class, "call", lambda self, *args, **kwargs: call_mock(*args, **kwargs))
    return call_mock


def run_agent(agent: RunnableAgent, input: str, on_event: Callable[[Any], object] | None = None) -> Any:
    """Run `agent` and check that it produced a result."""
    result = agent.run(input, on_event) if on_event is not None else agent.run(input)

    assert result is not None, f"{type(agent).__name__}.run returned no result"

    return result


def collect_agent_events(agent: RunnableAgent, input: str) -> list[Any]:
    events: list[Any] = []

    _ = agent.run(input, events.append)

    return events


def apply_test_settings(configuration: SokaConfiguration) -> None:
    configuration.provider = "mock"
    configuration.max_iterations = 3
    configuration.timeout = 5


@contextmanager
def with_test_configuration(
    fn: ConfigureFunction | None = None, store: ConfigurationStore = default_store
) -> Iterator[SokaConfiguration]:
    """Use a mock provider with tight limits for the duration of the block, then restore the original."""

    def test_settings(configuration: SokaConfiguration) -> None:
        apply_test_settings(configuration)
        if fn is not None:
            fn(configuration)

    with store.override(test_settings) as configuration:
        yield configuration


def successful_result(**attrs: Any) -> AgentResult:
    default_attrs: dict[str, Any] = {
        "status": COMPLETED,
        "final_answer": "Success",
        "iterations": 1,
    }
    return AgentResult(**{**default_attrs, **attrs})


def is_successful(result: Any) -> bool:
    status = getattr(result, "status", None)
    return getattr(status, "value", status) == COMPLETED
