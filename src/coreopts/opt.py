"""coreopts opt: Inspect and edit the persisted selections of a core.

Every editing command loads the option table, applies one change and
flushes the table back to the core's option file.

Usage::

    coreopts opt list
    coreopts opt get snes9x_gfx_api
    coreopts opt set snes9x_gfx_api vulkan
    coreopts opt next snes9x_gfx_api
    coreopts opt prev snes9x_gfx_api
    coreopts opt reset snes9x_gfx_api
"""

from collections.abc import Callable

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from coreopts.cli import CoreNameOption, error_exit, get_config, json_print
from coreopts.errors import OptionsError
from coreopts.manager import CoreOptionManager

app = typer.Typer(
    help="Inspect and edit persisted core options.",
    rich_markup_mode="rich",
)

_console = Console()


def _open(core: str | None, json_mode: bool) -> CoreOptionManager:
    cfg = get_config(core, json_mode=json_mode)
    try:
        return cfg.open_manager()
    except OptionsError as exc:
        error_exit(str(exc), json_mode=json_mode)


def _require_index(opts: CoreOptionManager, key: str, json_mode: bool) -> int:
    idx = opts.index_of(key)
    if idx is None:
        error_exit(f"Unknown option '{key}'", json_mode=json_mode)
    return idx


def _option_dict(opts: CoreOptionManager, idx: int) -> dict[str, object]:
    option = opts.options[idx]
    return {
        "index": idx,
        "key": option.key,
        "description": opts.description(idx),
        "value": opts.current_value(idx),
        "values": list(opts.values(idx)),
    }


def _edit(
    key: str,
    core: str | None,
    json_output: bool,
    change: Callable[[CoreOptionManager, int], None],
) -> None:
    """Apply *change* to option *key* and flush the table."""
    with _open(core, json_output) as opts:
        idx = _require_index(opts, key, json_output)
        change(opts, idx)
        if not opts.flush():
            error_exit(f"Could not write {opts.conf_path or 'option file'}", json_mode=json_output)
        if json_output:
            json_print(_option_dict(opts, idx))
        else:
            typer.echo(f"{key} = {opts.current_value(idx)}")


@app.command("list")
def list_options(
    core: str | None = CoreNameOption,
    json_output: bool = typer.Option(False, "--json", help="Output structured JSON"),
) -> None:
    """List every option of a core with its current value."""
    with _open(core, json_output) as opts:
        if json_output:
            json_print([_option_dict(opts, i) for i in range(opts.size())])
            return
        if not opts.size():
            typer.echo("No options declared.")
            return
        table = Table(show_header=True, header_style="bold")
        table.add_column("#", justify="right", style="dim")
        table.add_column("Key", style="cyan")
        table.add_column("Description")
        table.add_column("Value", style="green")
        table.add_column("Choices", style="dim")
        for i in range(opts.size()):
            option = opts.options[i]
            table.add_row(
                str(i),
                escape(option.key),
                escape(opts.description(i)),
                escape(opts.current_value(i)),
                escape("|".join(opts.values(i))),
            )
        _console.print(table)


@app.command("get")
def get(
    key: str = typer.Argument(..., help="Option key, e.g. 'snes9x_gfx_api'"),
    core: str | None = CoreNameOption,
    json_output: bool = typer.Option(False, "--json", help="Output structured JSON"),
) -> None:
    """Print the current value of an option."""
    with _open(core, json_output) as opts:
        value = opts.lookup_by_key(key)
        if value is None:
            error_exit(f"Unknown option '{key}'", json_mode=json_output)
        if json_output:
            json_print({"key": key, "value": value})
        else:
            typer.echo(value)


@app.command("set")
def set_value(
    key: str = typer.Argument(..., help="Option key"),
    value: str = typer.Argument(..., help="One of the option's choices"),
    core: str | None = CoreNameOption,
    json_output: bool = typer.Option(False, "--json", help="Output structured JSON"),
) -> None:
    """Select a value for an option and save it."""

    def _select(opts: CoreOptionManager, idx: int) -> None:
        choice = opts.options[idx].find(value)
        if choice is None:
            error_exit(
                f"'{value}' is not a choice for '{key}'. "
                f"Choices: {'|'.join(opts.values(idx))}",
                json_mode=json_output,
            )
        opts.set_selection(idx, choice)

    _edit(key, core, json_output, _select)


@app.command("next")
def next_value(
    key: str = typer.Argument(..., help="Option key"),
    core: str | None = CoreNameOption,
    json_output: bool = typer.Option(False, "--json", help="Output structured JSON"),
) -> None:
    """Advance an option to its next choice (wraps around)."""
    _edit(key, core, json_output, CoreOptionManager.advance)


@app.command("prev")
def prev_value(
    key: str = typer.Argument(..., help="Option key"),
    core: str | None = CoreNameOption,
    json_output: bool = typer.Option(False, "--json", help="Output structured JSON"),
) -> None:
    """Move an option back to its previous choice (wraps around)."""
    _edit(key, core, json_output, CoreOptionManager.retreat)


@app.command("reset")
def reset(
    key: str = typer.Argument(..., help="Option key"),
    core: str | None = CoreNameOption,
    json_output: bool = typer.Option(False, "--json", help="Output structured JSON"),
) -> None:
    """Reset an option to its default (first) choice."""
    _edit(key, core, json_output, CoreOptionManager.reset_to_default)
