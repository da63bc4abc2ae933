from pathlib import Path

from soka_app.generators.base import AGENTS_DIR, TOOLS_DIR, Generator
from soka_app.generators.templates import APPLICATION_AGENT, APPLICATION_TOOL, INITIALIZER

INITIALIZER_PATH = Path("config/soka.py")

POST_INSTALL_STEPS: list[str] = [
    "  1. Set your AI provider API key: GEMINI_API_KEY, OPENAI_API_KEY, ANTHROPIC_API_KEY",
    "  2. Create your first agent: soka generate agent MyAgent",
    "  3. Create your first tool: soka generate tool MyTool",
    "  4. Import config/soka.py and call setup_autoloading() when your application starts",
]


class InstallGenerator(Generator):
    """Sets up the Soka configuration, base classes and directories in an application."""

    def planned_files(self) -> list[Path]:
        return [INITIALIZER_PATH, AGENTS_DIR / "application_agent.py", TOOLS_DIR / "application_tool.py"]

    def create_files(self) -> None:
        _ = self.create_initializer()
        _ = self.create_application_agent()
        _ = self.create_application_tool()
        self.add_soka_directory()
        self.display_post_install_message()

    def create_initializer(self) -> Path:
        return self.create_file(INITIALIZER_PATH, INITIALIZER)

    def create_application_agent(self) -> Path:
        return self.create_file(AGENTS_DIR / "application_agent.py", APPLICATION_AGENT)

    def create_application_tool(self) -> Path:
        return self.create_file(TOOLS_DIR / "application_tool.py", APPLICATION_TOOL)

    def add_soka_directory(self) -> None:
        _ = self.empty_directory(AGENTS_DIR.parent)
        _ = self.empty_directory(AGENTS_DIR)
        _ = self.empty_directory(TOOLS_DIR)

    def display_post_install_message(self) -> None:
        self.say("\nSoka has been successfully installed!", color="green")
        self.say("\nNext steps:")
        for step in POST_INSTALL_STEPS:
            self.say(step)
