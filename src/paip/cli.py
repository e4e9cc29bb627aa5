"""CLI entry point for paip."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

import typer

from . import __version__
from .client import LlmClient
from .config import CONFIG_PATH_ENV, Config, ConfigError, default_path, init_default
from .metrics import create_metrics_collector
from .prompting import assemble_prompt, read_inputs
from .providers.base import ProviderError

LOGGER = logging.getLogger("paip.cli")

app = typer.Typer(
    help="Send text from files or stdin to an LLM and print the plain-text answer.",
    add_completion=False,
)


def _level_for(name: str) -> int:
    level = getattr(logging, name.upper(), logging.WARNING)
    if isinstance(level, int):
        return level
    return logging.WARNING


def _configure_logging(log_level: str, verbose: bool) -> None:
    level = logging.DEBUG if verbose else _level_for(log_level)
    logging.basicConfig(format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    logging.getLogger().setLevel(level)


def _fail(prefix: str, exc: Exception, code: int) -> typer.Exit:
    typer.secho(f"{prefix}: {exc}", fg=typer.colors.RED, err=True)
    return typer.Exit(code=code)


def _load_config(path: Optional[Path]) -> Config:
    try:
        return Config.load(path)
    except ConfigError as exc:
        raise _fail("Configuration error", exc, 2) from exc


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"paip {__version__}")
        raise typer.Exit()


@app.command()
def run(
    files: Optional[List[Path]] = typer.Argument(
        None,
        help="Files to process. Reads from stdin if no files are provided. "
        "Use '-' to read from stdin within a list of files.",
        show_default=False,
    ),
    prompt: Optional[str] = typer.Option(
        None, "--prompt", "-p", help="Use a predefined prompt from the configuration file."
    ),
    message: Optional[str] = typer.Option(
        None, "--message", "-m", help="Additional message to include after input."
    ),
    init_config: bool = typer.Option(
        False, "--init-config", help="Create a default configuration file if it doesn't exist."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose output for debugging."),
    config_path: Optional[Path] = typer.Option(
        None, "--config", "-c", envvar=CONFIG_PATH_ENV, help="Path to the configuration file."
    ),
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True, help="Show the version and exit."
    ),
) -> None:
    """Send text to the configured LLM and print its answer."""
    if init_config:
        path = config_path or default_path()
        if init_default(path):
            typer.echo(f"Default config file created at: {path}")
            typer.echo("Please edit the config file with your LLM provider details.")
        else:
            typer.echo(f"Config file already exists at: {path}")
        return

    config = _load_config(config_path)
    _configure_logging(config.log_level, verbose)

    template = None
    if prompt is not None:
        try:
            template = config.get_prompt(prompt)
        except ConfigError as exc:
            raise _fail("Configuration error", exc, 2) from exc

    try:
        input_text = read_inputs(files)
    except (OSError, UnicodeDecodeError) as exc:
        raise _fail("Failed to read input", exc, 1) from exc

    full_input = assemble_prompt(template, input_text, message)
    if verbose:
        typer.echo("--- Full Input to LLM ---", err=True)
        typer.echo(full_input, err=True)
        typer.echo("-------------------------", err=True)

    try:
        client = LlmClient(config, verbose, metrics=create_metrics_collector(config.metrics))
    except ConfigError as exc:
        raise _fail("Configuration error", exc, 2) from exc

    with client:
        try:
            answer = client.send(full_input)
        except ProviderError as exc:
            LOGGER.debug("Request failed", exc_info=True)
            raise _fail("Request failed", exc, 1) from exc

    typer.echo(answer)


def main() -> None:
    """Entry point for console script."""
    app()


if __name__ == "__main__":
    main()
