from __future__ import annotations

import typer

from appdist import __version__
from appdist.cli.commands.distribute import distribute, execute

app = typer.Typer(
    add_completion=False,
    no_args_is_help=False,
    rich_markup_mode="rich",
)

app.command()(distribute)


@app.callback(invoke_without_command=True)
def _main(  # pyright: ignore[reportUnusedFunction]
    ctx: typer.Context,
    version: bool = typer.Option(False, "--version", help="Show version and exit."),
) -> None:
    if version:
        typer.echo(__version__)
        raise typer.Exit(code=0)

    # Actions steps run the bare entry point; inputs come from INPUT_*.
    if ctx.invoked_subcommand is None:
        execute()


def main() -> None:
    app()
