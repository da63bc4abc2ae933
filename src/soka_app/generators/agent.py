from collections.abc import Sequence
from pathlib import Path

from soka_app.generators.base import AGENT_TESTS_DIR, AGENTS_DIR, Generator
from soka_app.generators.naming import GeneratedName, parse_name
from soka_app.generators.templates import agent_template, agent_test_template


class AgentGenerator(Generator):
    """Creates an agent class, and its test when the application uses pytest."""

    def __init__(self, name: str, tools: Sequence[str] = (), **kwargs):
        super().__init__(**kwargs)
        self.agent_name: GeneratedName = parse_name(name, suffix="agent")
        self.tools: list[GeneratedName] = [parse_name(tool, suffix="tool") for tool in tools]

    @property
    def agent_path(self) -> Path:
        return AGENTS_DIR / self.agent_name.directory / f"{self.agent_name.file_name}.py"

    @property
    def test_path(self) -> Path:
        return AGENT_TESTS_DIR / self.agent_name.directory / f"test_{self.agent_name.file_name}.py"

    def planned_files(self) -> list[Path]:
        return [self.agent_path, self.test_path] if self.tests_installed() else [self.agent_path]

    def create_files(self) -> None:
        _ = self.create_agent_file()
        _ = self.create_test_file()

    def create_agent_file(self) -> Path:
        return self.create_file(self.agent_path, agent_template(name=self.agent_name, tools=self.tools))

    def create_test_file(self) -> Path | None:
        if not self.tests_installed():
            return None

        return self.create_file(self.test_path, agent_test_template(name=self.agent_name))
