from collections.abc import Callable
from pathlib import Path
from typing import Any

import click
from fastmcp.utilities.logging import configure_logging

from soka_app.errors import GeneratorError
from soka_app.generators.agent import AgentGenerator
from soka_app.generators.base import Generator
from soka_app.generators.install import InstallGenerator
from soka_app.generators.tool import ToolGenerator


def generator_options(command: Callable[..., Any]) -> Callable[..., Any]:
    command = click.option(
        "--destination-root",
        type=click.Path(file_okay=False, path_type=Path),
        default=Path(),
        help="The application root to generate files in",
    )(command)
    command = click.option("--force", is_flag=True, default=False, help="Overwrite files that already exist")(command)
    return click.option("--skip-tests", is_flag=True, default=False, help="Do not generate test files")(command)


def run_generator(build: Callable[[], Generator]) -> None:
    try:
        generator: Generator = build()
        created: list[Path] = generator.generate()
    except GeneratorError as e:
        raise click.ClickException(str(e)) from e

    for path in created:
        click.echo(f"      create  {path.relative_to(generator.destination_root)}")


@click.group()
@click.option("--log-level", type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"]), default="WARNING", help="The log level")
def cli(log_level: str):
    """Scaffold Soka agents and tools in your application."""
    configure_logging(level=log_level)  # pyright: ignore[reportArgumentType]


@cli.command()
@generator_options
def install(destination_root: Path, force: bool, skip_tests: bool):
    """Create config/soka.py, the application base classes and the app/soka directories."""
    run_generator(lambda: InstallGenerator(destination_root=destination_root, force=force, skip_tests=skip_tests))


@cli.group()
def generate():
    """Generate an agent or a tool."""


@generate.command()
@click.argument("name")
@click.argument("tools", nargs=-1)
@generator_options
def agent(name: str, tools: tuple[str, ...], destination_root: Path, force: bool, skip_tests: bool):
    """Generate the NAME agent using the given TOOLS, e.g. `soka generate agent CustomerSupport order_lookup`."""
    run_generator(lambda: AgentGenerator(name, tools, destination_root=destination_root, force=force, skip_tests=skip_tests))


@generate.command()
@click.argument("name")
@click.argument("params", nargs=-1)
@generator_options
def tool(name: str, params: tuple[str, ...], destination_root: Path, force: bool, skip_tests: bool):
    """Generate the NAME tool with PARAMS given as name:type, e.g. `soka generate tool WeatherApi location:string`."""
    run_generator(lambda: ToolGenerator(name, params, destination_root=destination_root, force=force, skip_tests=skip_tests))


if __name__ == "__main__":
    cli()
