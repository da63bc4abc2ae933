"""Makes the application's agents and tools importable and loads them at startup.

`app/soka/agents` and `app/soka/tools` are collapsed: `app/soka/agents/support_agent.py` is imported
as the top-level module `support_agent` and must define `SupportAgent`. Sub-directories become
namespace packages, so `app/soka/agents/admin/report_agent.py` is `admin.report_agent`."""

import importlib
import importlib.util
import inspect
import sys
from logging import Logger
from pathlib import Path

from fastmcp.utilities.logging import get_logger

from soka_app.errors import AutoloadError, ExpectedClassMissingError
from soka_app.generators.naming import camelize

logger: Logger = get_logger(name=__name__)

SOKA_ROOT = Path("app/soka")
COLLAPSED_DIRECTORIES: tuple[str, ...] = ("agents", "tools")
INITIALIZER = Path("config/soka.py")
INITIALIZER_MODULE = "soka_app_initializer"


class SokaLoader:
    def __init__(self, app_root: Path | str | None = None):
        self.app_root: Path = Path(app_root) if app_root is not None else Path.cwd()
        self.soka_root: Path = self.app_root / SOKA_ROOT
        self.added_paths: list[str] = []
        self.loaded_modules: list[str] = []

    @property
    def collapsed_directories(self) -> list[Path]:
        return [directory for name in COLLAPSED_DIRECTORIES if (directory := self.soka_root / name).is_dir()]

    def setup(self) -> list[str]:
        """Put the collapsed directories on the import path. Calling it again is a no-op."""
        for directory in self.collapsed_directories:
            directory_str = str(directory.resolve())

            if directory_str in sys.path:
                continue

            sys.path.insert(0, directory_str)
            self.added_paths.append(directory_str)
            logger.debug(f"Added {directory_str} to the import path")

        return self.added_paths

    def load_initializer(self) -> bool:
        """Execute config/soka.py when the application has one."""
        initializer_path: Path = self.app_root / INITIALIZER

        if not initializer_path.exists():
            return False

        spec = importlib.util.spec_from_file_location(INITIALIZER_MODULE, initializer_path)

        if spec is None or spec.loader is None:
            msg = f"Unable to load the Soka initializer from {initializer_path}"
            raise AutoloadError(message=msg)

        module = importlib.util.module_from_spec(spec)
        spec.loader.exec_module(module)

        logger.info(f"Loaded Soka initializer {initializer_path}")

        return True

    def eager_load(self) -> dict[str, type]:
        """Import every agent and tool module and return the classes they define, by qualified name."""
        _ = self.setup()
        importlib.invalidate_caches()

        constants: dict[str, type] = {}

        for directory in self.collapsed_directories:
            for path in sorted(directory.rglob("*.py")):
                if path.name.startswith("_"):
                    continue

                relative: Path = path.relative_to(directory).with_suffix("")
                module_name: str = ".".join(relative.parts)
                expected_class: str = camelize(relative.name)

                module = importlib.import_module(module_name)
                self.loaded_modules.extend(".".join(relative.parts[: index + 1]) for index in range(len(relative.parts)))

                loaded = getattr(module, expected_class, None)

                if not inspect.isclass(loaded):
                    raise ExpectedClassMissingError(path=str(path.relative_to(self.app_root)), expected_class=expected_class)

                constants[".".join([*relative.parts[:-1], expected_class])] = loaded

        logger.info(f"Eager loaded {len(constants)} Soka agents and tools from {self.soka_root}")

        return constants

    def unload(self) -> None:
        """Forget the loaded modules and remove the added import paths."""
        for module_name in self.loaded_modules:
            _ = sys.modules.pop(module_name, None)

        for directory_str in self.added_paths:
            if directory_str in sys.path:
                sys.path.remove(directory_str)

        _ = sys.modules.pop(INITIALIZER_MODULE, None)

        self.loaded_modules = []
        self.added_paths = []


def setup_autoloading(app_root: Path | str | None = None, eager_load: bool = True) -> SokaLoader:
    """Set up the import path, apply config/soka.py, then optionally load every agent and tool.

    The initializer runs before the agents are imported so their classes pick up the configuration."""

    loader = SokaLoader(app_root=app_root)
    _ = loader.setup()
    _ = loader.load_initializer()

    if eager_load:
        _ = loader.eager_load()

    return loader
