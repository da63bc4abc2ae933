from collections.abc import Sequence

ExtraInfoType = dict[str, str | None]

SUPPORTED_PROVIDERS: tuple[str, ...] = ("gemini", "openai", "anthropic")


class SokaError(Exception):
    """A base error for the Soka application integration."""

    def __init__(self, message: str, extra_info: ExtraInfoType | None = None):
        msg = message
        if extra_info:
            msg += " (" + ", ".join([f"{key}: {value}" for key, value in extra_info.items() if value is not None]) + ")"
        super().__init__(msg)


class ConfigurationError(SokaError):
    """A configuration error, raised by the runtime when it consumes the settings."""


class AgentError(SokaError):
    """An error raised while an agent is executing."""


class ToolError(SokaError):
    """An error raised while a tool is looked up, validated or executed."""


class GeneratorError(SokaError):
    """An error raised while scaffolding agents or tools."""


class AutoloadError(SokaError):
    """An error raised while loading the application's agents and tools."""


class MissingApiKeyError(ConfigurationError):
    """No API key could be resolved for the provider."""

    def __init__(self, provider: str | None = None):
        self.provider = provider

        if provider:
            message = (
                f"Missing API key for provider: {provider}. "
                f"Please set SOKA_API_KEY or {provider.upper()}_API_KEY environment variable."
            )
        else:
            message = "Missing API key. Please set SOKA_API_KEY environment variable."

        super().__init__(message=message)


class InvalidProviderError(ConfigurationError):
    """The provider is not one of the supported providers."""

    def __init__(self, provider: str | None):
        self.provider = provider
        supported = ", ".join(SUPPORTED_PROVIDERS)
        super().__init__(message=f"Invalid AI provider: {provider}. Supported providers: {supported}")


class MaxIterationsExceededError(AgentError):
    """The agent exceeded the configured iteration limit."""

    def __init__(self, max_iterations: int):
        self.max_iterations = max_iterations
        super().__init__(message=f"Agent exceeded maximum iterations limit of {max_iterations}")


class ToolNotFoundError(ToolError):
    def __init__(self, tool_name: str):
        self.tool_name = tool_name
        super().__init__(message=f"Tool not found: {tool_name}")


class InvalidToolParametersError(ToolError):
    """The tool was called with parameters that failed validation."""

    def __init__(self, tool_name: str, errors: Sequence[str]):
        self.tool_name = tool_name
        self.errors: list[str] = list(errors)
        super().__init__(message=f"Invalid parameters for tool {tool_name}: {', '.join(self.errors)}")


class InvalidNameError(GeneratorError):
    def __init__(self, name: str, reason: str):
        super().__init__(message=f"Invalid name {name!r}", extra_info={"reason": reason})


class FileExistsGeneratorError(GeneratorError):
    def __init__(self, path: str):
        super().__init__(message=f"File {path} already exists, pass --force to overwrite it")


class InvalidParameterTypeError(GeneratorError):
    def __init__(self, parameter: str, parameter_type: str, supported: Sequence[str]):
        super().__init__(
            message=f"Unsupported type {parameter_type!r} for parameter {parameter!r}",
            extra_info={"supported": ", ".join(supported)},
        )


class ExpectedClassMissingError(AutoloadError):
    """A loaded module does not define the class its file name implies."""

    def __init__(self, path: str, expected_class: str):
        super().__init__(message=f"Expected file {path} to define class {expected_class}, but it didn't")
