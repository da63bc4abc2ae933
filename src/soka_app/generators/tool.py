from collections.abc import Sequence
from pathlib import Path

from soka_app.errors import InvalidNameError, InvalidParameterTypeError
from soka_app.generators.base import TOOL_TESTS_DIR, TOOLS_DIR, Generator
from soka_app.generators.naming import GeneratedName, is_identifier, parse_name, underscore
from soka_app.generators.templates import ToolParameter, tool_template, tool_test_template

DEFAULT_PARAMETER_TYPE = "string"

PARAMETER_TYPES: dict[str, str] = {
    "string": "str",
    "str": "str",
    "integer": "int",
    "int": "int",
    "float": "float",
    "number": "float",
    "boolean": "bool",
    "bool": "bool",
    "array": "list",
    "list": "list",
    "hash": "dict",
    "object": "dict",
    "dict": "dict",
}


def parse_parameter(parameter: str) -> ToolParameter:
    """Parse a `name:type` argument, the type defaults to string."""
    name, _, parameter_type = parameter.partition(":")
    name = underscore(name)
    parameter_type = parameter_type.strip().lower() or DEFAULT_PARAMETER_TYPE

    if not is_identifier(name):
        raise InvalidNameError(name=name, reason="parameter names must be valid Python identifiers")

    if parameter_type not in PARAMETER_TYPES:
        raise InvalidParameterTypeError(parameter=name, parameter_type=parameter_type, supported=sorted(PARAMETER_TYPES))

    return ToolParameter(name=name, python_type=PARAMETER_TYPES[parameter_type])


class ToolGenerator(Generator):
    """Creates a tool class with typed parameters, and its test when the application uses pytest."""

    def __init__(self, name: str, params: Sequence[str] = (), **kwargs):
        super().__init__(**kwargs)
        self.tool_name: GeneratedName = parse_name(name, suffix="tool")
        self.parameters: list[ToolParameter] = [parse_parameter(param) for param in params]

    @property
    def tool_path(self) -> Path:
        return TOOLS_DIR / self.tool_name.directory / f"{self.tool_name.file_name}.py"

    @property
    def test_path(self) -> Path:
        return TOOL_TESTS_DIR / self.tool_name.directory / f"test_{self.tool_name.file_name}.py"

    def planned_files(self) -> list[Path]:
        return [self.tool_path, self.test_path] if self.tests_installed() else [self.tool_path]

    def create_files(self) -> None:
        _ = self.create_tool_file()
        _ = self.create_test_file()

    def create_tool_file(self) -> Path:
        return self.create_file(self.tool_path, tool_template(name=self.tool_name, parameters=self.parameters))

    def create_test_file(self) -> Path | None:
        if not self.tests_installed():
            return None

        return self.create_file(self.test_path, tool_test_template(name=self.tool_name, parameters=self.parameters))
