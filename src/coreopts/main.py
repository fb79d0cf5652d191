"""main.py – Umbrella CLI entry point for coreopts.

Lazily imports and registers the subcommand typer apps so that a module
that fails to import doesn't prevent the entire CLI from loading.

Single-command modules are registered as flat ``app.command()`` entries;
multi-command modules (currently only ``opt``) use ``add_typer()``.
"""

import importlib
import sys
from collections.abc import Callable

import typer

from coreopts.cli import configure_logging

app = typer.Typer(
    help="Manage multiple-choice core options and their persisted selections.",
    rich_markup_mode="rich",
    epilog="""\
[bold]Typical workflow:[/bold]
  coreopts check               Validate the descriptors in coreopts.toml
  coreopts opt list            Show every option and its current value
  coreopts opt next <key>      Cycle an option to its next choice
  coreopts opt set <key> <v>   Select a specific choice

[dim]All subcommands read project settings from coreopts.toml.[/dim]""",
)

# ---------------------------------------------------------------------------
# Subcommand registry
# ---------------------------------------------------------------------------

_SINGLE_COMMANDS: list[tuple[str, str, str]] = [
    ("check", "coreopts.check", "Validate option descriptors in coreopts.toml."),
]

_MULTI_COMMANDS: list[tuple[str, str, str]] = [
    ("opt", "coreopts.opt", "Inspect and edit persisted core options."),
]


@app.callback()
def _root(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    configure_logging(verbose)


def _make_stub_cmd(mod_name: str, err: ImportError) -> Callable[[], None]:
    """Create a stub command function that reports a missing dependency."""

    def _stub() -> None:
        print(f"Error: could not load '{mod_name}': {err}", file=sys.stderr)
        raise typer.Exit(code=1)

    return _stub


def _make_stub_app(mod_name: str, err: ImportError) -> typer.Typer:
    """Create a stub Typer app that reports a missing dependency."""
    stub = typer.Typer(help=f"[unavailable] {mod_name}")

    @stub.callback(invoke_without_command=True)
    def _stub_main() -> None:
        print(f"Error: could not load '{mod_name}': {err}", file=sys.stderr)
        raise typer.Exit(code=1)

    return stub


for _name, _module, _help in _SINGLE_COMMANDS:
    try:
        _mod = importlib.import_module(_module)
        app.command(name=_name, help=_help)(_mod.main)
    except ImportError as _exc:
        app.command(name=_name, help=f"[unavailable] {_help}")(_make_stub_cmd(_module, _exc))

for _name, _module, _help in _MULTI_COMMANDS:
    try:
        _mod = importlib.import_module(_module)
        app.add_typer(_mod.app, name=_name, help=_help)
    except ImportError as _exc:
        app.add_typer(_make_stub_app(_module, _exc), name=_name, help=f"[unavailable] {_help}")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
