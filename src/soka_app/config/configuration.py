import os
from collections.abc import Callable
from typing import Self

from pydantic import BaseModel, ConfigDict, Field, PositiveInt

DEFAULT_PROVIDER = "gemini"
DEFAULT_MODEL = "gemini-2.5-flash-lite"
DEFAULT_TIMEOUT = 30
DEFAULT_MAX_ITERATIONS = 5
PRODUCTION_MAX_ITERATIONS = 10


def get_default_provider() -> str:
    return os.getenv("SOKA_PROVIDER") or DEFAULT_PROVIDER


def get_default_model() -> str:
    return os.getenv("SOKA_MODEL") or DEFAULT_MODEL


def get_default_api_key() -> str | None:
    return os.getenv("SOKA_API_KEY") or None


def is_production() -> bool:
    return os.getenv("SOKA_ENV", "").strip().lower() == "production"


def get_default_max_iterations(production: bool | None = None) -> int:
    if production is None:
        production = is_production()

    return PRODUCTION_MAX_ITERATIONS if production else DEFAULT_MAX_ITERATIONS


class SokaConfiguration(BaseModel):
    """The settings handed to every Soka agent defined by the application.

    A bare `SokaConfiguration()` leaves every field unset. Use `from_environment` to build the
    default record, which reads `SOKA_PROVIDER`, `SOKA_MODEL` and `SOKA_API_KEY`."""

    model_config = ConfigDict(validate_assignment=True)

    provider: str | None = Field(default=None, description="The LLM provider, e.g. gemini, openai or anthropic.")
    model: str | None = Field(default=None, description="The model name passed to the provider.")
    api_key: str | None = Field(default=None, description="The API key for the provider.")
    max_iterations: PositiveInt | None = Field(default=None, description="The iteration cap for the ReAct loop.")
    timeout: PositiveInt | None = Field(default=None, description="The agent execution timeout, in seconds.")

    @classmethod
    def from_environment(cls, production: bool | None = None) -> Self:
        return cls(
            provider=get_default_provider(),
            model=get_default_model(),
            api_key=get_default_api_key(),
            max_iterations=get_default_max_iterations(production=production),
            timeout=DEFAULT_TIMEOUT,
        )

    def copy_configuration(self) -> Self:
        return self.model_copy(deep=True)

    def ai(self, fn: Callable[["AISection"], object] | None = None) -> None:
        """Run `fn` against the AI section of this configuration. Does nothing without `fn`."""
        if fn is None:
            return

        fn(AISection(configuration=self))

    def performance(self, fn: Callable[["PerformanceSection"], object] | None = None) -> None:
        """Run `fn` against the performance section of this configuration. Does nothing without `fn`."""
        if fn is None:
            return

        fn(PerformanceSection(configuration=self))


class AISection:
    """Writes provider, model and API key settings through to a configuration."""

    def __init__(self, configuration: SokaConfiguration):
        self._configuration = configuration

    @property
    def provider(self) -> str | None:
        return self._configuration.provider

    @provider.setter
    def provider(self, value: str | None) -> None:
        self._configuration.provider = value

    @property
    def model(self) -> str | None:
        return self._configuration.model

    @model.setter
    def model(self, value: str | None) -> None:
        self._configuration.model = value

    @property
    def api_key(self) -> str | None:
        return self._configuration.api_key

    @api_key.setter
    def api_key(self, value: str | None) -> None:
        self._configuration.api_key = value


class PerformanceSection:
    """Writes iteration and timeout limits through to a configuration."""

    def __init__(self, configuration: SokaConfiguration):
        self._configuration = configuration

    @property
    def max_iterations(self) -> int | None:
        return self._configuration.max_iterations

    @max_iterations.setter
    def max_iterations(self, value: int | None) -> None:
        self._configuration.max_iterations = value

    @property
    def timeout(self) -> int | None:
        return self._configuration.timeout

    @timeout.setter
    def timeout(self, value: int | str | None) -> None:
        if isinstance(value, str):
            value = value.strip()

        self._configuration.timeout = value
