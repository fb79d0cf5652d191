"""check.py – Validate option descriptors declared in coreopts.toml.

Parses every descriptor of every core (or of the one named by ``--core``)
and reports the malformed ones.  Exits with code 1 if any fail.
"""

import typer

from coreopts.cli import CoreNameOption, get_config, json_print
from coreopts.descriptor import parse_descriptor
from coreopts.errors import DescriptorError

app = typer.Typer(
    help="Validate option descriptors in coreopts.toml.",
    rich_markup_mode="rich",
)


@app.callback(invoke_without_command=True)
def main(
    core: str | None = CoreNameOption,
    json_output: bool = typer.Option(False, "--json", help="Output structured JSON"),
) -> None:
    """Parse every option descriptor and report malformed ones."""
    cfg = get_config(core, json_mode=json_output)
    names = [cfg.core_name] if core is not None else cfg.all_cores

    checked = 0
    problems: list[dict[str, object]] = []
    for name in names:
        core_cfg = cfg if name == cfg.core_name else get_config(name, json_mode=json_output)
        for var in core_cfg.variables:
            checked += 1
            try:
                parse_descriptor(var.key, var.value)
            except DescriptorError as exc:
                problems.append({"core": name, **exc.to_dict()})

    if json_output:
        json_print({"checked": checked, "errors": problems})
    else:
        for problem in problems:
            typer.secho(f"  {problem['core']}: {problem['message']}", fg=typer.colors.RED)
        typer.echo(f"{checked} option(s) checked, {len(problems)} malformed.")

    if problems:
        raise typer.Exit(code=1)
