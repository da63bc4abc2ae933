import tomllib
from abc import ABC, abstractmethod
from logging import Logger
from pathlib import Path

import click
from fastmcp.utilities.logging import get_logger

from soka_app.errors import FileExistsGeneratorError

logger: Logger = get_logger(name=__name__)

AGENTS_DIR = Path("app/soka/agents")
TOOLS_DIR = Path("app/soka/tools")
AGENT_TESTS_DIR = Path("tests/soka/agents")
TOOL_TESTS_DIR = Path("tests/soka/tools")


class Generator(ABC):
    """Writes scaffolding files below a destination root."""

    def __init__(self, destination_root: Path | str = ".", force: bool = False, skip_tests: bool = False):
        self.destination_root: Path = Path(destination_root)
        self.force: bool = force
        self.skip_tests: bool = skip_tests
        self.created: list[Path] = []

    @abstractmethod
    def planned_files(self) -> list[Path]:
        """The paths, relative to the destination root, that `create_files` will write."""

    @abstractmethod
    def create_files(self) -> None: ...

    def generate(self) -> list[Path]:
        """Create every file of the scaffold and return their paths. Nothing is written on a conflict."""
        self.check_conflicts(self.planned_files())
        self.create_files()

        return self.created

    def check_conflicts(self, relative_paths: list[Path]) -> None:
        if self.force:
            return

        for relative_path in relative_paths:
            if (self.destination_root / relative_path).exists():
                raise FileExistsGeneratorError(path=str(relative_path))

    def create_file(self, relative_path: Path | str, content: str) -> Path:
        path: Path = self.destination_root / relative_path

        if path.exists() and not self.force:
            raise FileExistsGeneratorError(path=str(relative_path))

        path.parent.mkdir(parents=True, exist_ok=True)
        _ = path.write_text(content, encoding="utf-8")

        logger.info(f"Created {relative_path}")
        self.created.append(path)

        return path

    def empty_directory(self, relative_path: Path | str) -> Path:
        path: Path = self.destination_root / relative_path
        path.mkdir(parents=True, exist_ok=True)

        logger.info(f"Created directory {relative_path}")

        return path

    def tests_installed(self) -> bool:
        """Whether the destination project runs its tests with pytest."""
        if self.skip_tests:
            return False

        root: Path = self.destination_root

        if any((root / marker).exists() for marker in ("conftest.py", "tests/conftest.py", "pytest.ini")):
            return True

        pyproject: Path = root / "pyproject.toml"

        if not pyproject.exists():
            return False

        with pyproject.open("rb") as pyproject_file:
            settings = tomllib.load(pyproject_file)

        return "ini_options" in settings.get("tool", {}).get("pytest", {})

    def say(self, message: str, color: str | None = None) -> None:
        click.secho(message, fg=color)
