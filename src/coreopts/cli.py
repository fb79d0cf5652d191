"""Shared CLI utilities for coreopts commands.

Provides the common ``--core`` option, config loading, logging setup and
standardised error / JSON output helpers.

Usage in a command module::

    import typer
    from coreopts.cli import CoreNameOption, get_config, error_exit, json_print

    app = typer.Typer()

    @app.command()
    def main(core: str = CoreNameOption) -> None:
        cfg = get_config(core)
        ...
"""

from __future__ import annotations

import json
import logging
import os
from typing import Any, NoReturn

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from coreopts.config import ProjectConfig, load_config
from coreopts.errors import OptionsError

# Re-usable Typer option for --core
CoreNameOption: str | None = typer.Option(
    None,
    "--core",
    "-c",
    help="Core name from coreopts.toml (default: first core).",
)

_err_console = Console(stderr=True)


def configure_logging(verbose: bool = False) -> None:
    """Route library log records to stderr through rich.

    ``COREOPTS_LOG_LEVEL`` overrides the level chosen by *verbose*.
    """
    level: int = logging.DEBUG if verbose else logging.WARNING
    env_level = os.environ.get("COREOPTS_LOG_LEVEL")
    if env_level:
        level = logging.getLevelName(env_level.upper())
        if not isinstance(level, int):
            level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=_err_console, show_path=False)],
        force=True,
    )


def get_config(core: str | None = None, *, json_mode: bool = False) -> ProjectConfig:
    """Load the project config for *core*, exiting on failure."""
    try:
        return load_config(core=core)
    except (FileNotFoundError, OptionsError) as exc:
        error_exit(str(exc), json_mode=json_mode)


# ---------------------------------------------------------------------------
# Standardised output helpers
# ---------------------------------------------------------------------------


def error_exit(msg: str, *, json_mode: bool = False, code: int = 1) -> NoReturn:
    """Print *msg* as an error and ``raise typer.Exit(code)``."""
    if json_mode:
        print(json.dumps({"error": msg}, indent=2))
    else:
        _err_console.print(f"[red bold]error:[/red bold] {escape(msg)}")
    raise typer.Exit(code=code)


def json_print(data: dict[str, Any] | list[Any]) -> None:
    """Print *data* as pretty-printed JSON to stdout."""
    print(json.dumps(data, indent=2))
