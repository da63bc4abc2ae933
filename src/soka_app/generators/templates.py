from collections.abc import Sequence
from textwrap import dedent, indent

from pydantic import BaseModel

from soka_app.generators.naming import GeneratedName

INITIALIZER = '''\
"""Soka settings for this application, imported once at startup."""

import os

from soka_app.config.configuration import AISection, PerformanceSection, SokaConfiguration, is_production
from soka_app.config.store import configure


def ai_settings(ai: AISection) -> None:
    # Setup Gemini AI Studio
    ai.provider = "gemini"
    ai.model = "gemini-2.5-flash-lite"
    ai.api_key = os.getenv("GEMINI_API_KEY")

    # Setup OpenAI
    # ai.provider = "openai"
    # ai.model = "gpt-4.1-mini"
    # ai.api_key = os.getenv("OPENAI_API_KEY")

    # Setup Anthropic
    # ai.provider = "anthropic"
    # ai.model = "claude-sonnet-4-0"
    # ai.api_key = os.getenv("ANTHROPIC_API_KEY")


def performance_settings(performance: PerformanceSection) -> None:
    # Maximum iterations for the ReAct loop
    performance.max_iterations = 10 if is_production() else 5

    # Timeout for agent execution (in seconds)
    performance.timeout = 30


def soka_settings(config: SokaConfiguration) -> None:
    config.ai(ai_settings)
    config.performance(performance_settings)


configure(soka_settings)
'''

APPLICATION_AGENT = '''\
from soka import Agent

from soka_app.agents.propagation import ConfigurationPropagation


class ApplicationAgent(ConfigurationPropagation, Agent):
    """The base class for the agents of this application.

    Every subclass receives the provider, model, API key and iteration limit from config/soka.py
    when it is defined."""
'''

APPLICATION_TOOL = '''\
from soka import AgentTool


class ApplicationTool(AgentTool):
    """The base class for the tools of this application."""
'''


class ToolParameter(BaseModel):
    name: str
    python_type: str

    @property
    def example_value(self) -> str:
        return {"str": f'"{self.name}"', "int": "1", "float": "1.0", "bool": "True", "list": "[]", "dict": "{}"}[self.python_type]


def agent_template(name: GeneratedName, tools: Sequence[GeneratedName]) -> str:
    imports: list[str] = ["from application_agent import ApplicationAgent"]
    imports.extend(f"from {tool.module_path} import {tool.class_name}" for tool in tools)
    import_block: str = "\n".join(imports)

    if tools:
        tools_line = f"tools = [{', '.join(tool.class_name for tool in tools)}]"
    else:
        tools_line = "# tools = [SearchTool]\n    tools = []"

    return dedent(
        f'''\
{import_block}


class {name.class_name}(ApplicationAgent):
    """{name.class_name} agent.

    Settings from config/soka.py are applied when this class is defined, override them here with
    the class-level setters, e.g. `{name.class_name}.max_iterations(10)`."""

    {tools_line}
'''
    )


def agent_test_template(name: GeneratedName) -> str:
    test_name: str = name.file_name

    return dedent(
        f"""\
import pytest
from {name.module_path} import {name.class_name}

from soka_app.testing.helpers import is_successful

pytestmark = pytest.mark.agent


def test_{test_name}_returns_final_answer(mock_ai_response) -> None:
    mock_ai_response(final_answer="Mocked answer")

    agent = {name.class_name}()
    result = agent.run("Hello")

    assert is_successful(result)
    assert result.final_answer == "Mocked answer"
"""
    )


def tool_template(name: GeneratedName, parameters: Sequence[ToolParameter]) -> str:
    if parameters:
        parameter_lines = "\n".join(f'"{parameter.name}": {parameter.python_type},' for parameter in parameters)
        parameters_block = "parameters = {\n" + indent(parameter_lines, "        ") + "\n    }"
    else:
        parameters_block = "parameters = {}"

    signature = ", ".join(["self", *[f"{parameter.name}: {parameter.python_type}" for parameter in parameters]])
    call_arguments = ", ".join(f"{parameter.name}={{{parameter.name}}}" for parameter in parameters)
    if parameters:
        return_line = f'return f"{name.class_name} called with {call_arguments}"'
    else:
        return_line = f'return "{name.class_name} called"'

    return dedent(
        f'''\
from application_tool import ApplicationTool


class {name.class_name}(ApplicationTool):
    """{name.class_name} tool."""

    description = "Describe what {name.class_name} does, the agent reads this to decide when to call it."

    {parameters_block}

    def call({signature}) -> str:
        # Implement the tool logic here
        {return_line}
'''
    )


def tool_test_template(name: GeneratedName, parameters: Sequence[ToolParameter]) -> str:
    arguments = ", ".join(f"{parameter.name}={parameter.example_value}" for parameter in parameters)

    return dedent(
        f"""\
import pytest
from {name.module_path} import {name.class_name}

pytestmark = pytest.mark.tool


def test_{name.file_name}_call() -> None:
    tool = {name.class_name}()

    result = tool.call({arguments})

    assert result is not None
"""
    )
