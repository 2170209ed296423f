"""CLI entry point: registers all subcommands."""

import typer

from .. import __version__
from ._common import console

app = typer.Typer(
    name="workflow-graph",
    help="Workflow Graph - repository workflow graphs from symbol summaries",
    add_completion=False,
    rich_markup_mode="rich",
)


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: bool = typer.Option(False, "--version", help="Show version and exit"),
) -> None:
    """Build classified, laid-out dependency graphs from extractor output."""
    if version:
        console.print(f"workflow-graph {__version__}")
        raise typer.Exit()
    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())
        raise typer.Exit()


# Import subcommands to register them
from .analyze import analyze as _analyze  # noqa: F401, E402
