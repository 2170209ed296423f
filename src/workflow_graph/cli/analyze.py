"""Analyze command: summaries document in, workflow graph out."""

from pathlib import Path
from typing import Optional

import typer
from rich.table import Table

from ..engine import WorkflowEngine
from ..exceptions import WorkflowGraphError
from ..graph.models import RepositoryWorkflow
from ..logging_config import setup_logging
from ..scanning.loader import load_document
from . import app
from ._common import console, resolve_config


@app.command()
def analyze(
    summaries: Path = typer.Argument(
        ...,
        help="JSON document with per-file symbol summaries",
        exists=True,
        file_okay=True,
        dir_okay=False,
    ),
    mode: Optional[str] = typer.Option(
        None,
        "--mode",
        "-m",
        help="Edge fidelity: essential (default) or detailed",
    ),
    fmt: str = typer.Option(
        "rich",
        "--format",
        "-f",
        help="Output format: rich (human-readable) or json",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Configuration file (TOML)",
        exists=True,
        file_okay=True,
        dir_okay=False,
    ),
    width: Optional[float] = typer.Option(None, "--width", help="Canvas width in pixels"),
    height: Optional[float] = typer.Option(None, "--height", help="Canvas height in pixels"),
    workers: Optional[int] = typer.Option(
        None,
        "--workers",
        "-w",
        help="Classification worker threads",
        min=1,
        max=32,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress logging"),
):
    """
    Build the workflow graph for a summaries document.

    [bold cyan]Examples:[/bold cyan]

      workflow-graph analyze summaries.json

      workflow-graph analyze summaries.json --mode detailed --format json
    """
    logger = setup_logging(verbose=verbose, quiet=quiet)

    try:
        engine_config = resolve_config(
            config=config,
            mode=mode,
            width=width,
            height=height,
            workers=workers,
            verbose=verbose,
        )
        file_summaries, tree = load_document(summaries)
        workflow = WorkflowEngine(engine_config).run(file_summaries, tree=tree)

        if fmt == "json":
            print(workflow.to_json(indent=2))
        else:
            _output_rich(workflow, verbose=verbose)

    except WorkflowGraphError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    except Exception as e:
        logger.exception("Unexpected error")
        console.print(f"[red]Unexpected error:[/red] {e}")
        raise typer.Exit(1)


def _output_rich(workflow: RepositoryWorkflow, verbose: bool = False):
    """Human-readable terminal output."""
    m = workflow.metrics

    # ── Summary ────────────────────────────────────────────────────
    console.print()
    console.print(
        f"  [bold]{m.total_files}[/bold] files, [bold]{len(workflow.edges)}[/bold] edges, "
        f"depth [bold]{m.dependency_depth}[/bold]"
    )
    console.print(
        f"  {m.total_functions} functions, {m.total_classes} classes, "
        f"avg complexity {m.avg_complexity:.1f}, coupling {m.coupling_metric:.2f}"
    )
    console.print()

    # ── Nodes ──────────────────────────────────────────────────────
    nodes = workflow.nodes if verbose else [n for n in workflow.nodes if n.is_high or n.is_entry]
    if nodes:
        table = Table(title="Files" if verbose else "Key files", show_lines=False)
        table.add_column("Path", style="cyan")
        table.add_column("Type")
        table.add_column("Role", style="dim")
        table.add_column("Importance")
        table.add_column("Complexity", justify="right")
        table.add_column("Position", justify="right", style="dim")
        for node in nodes:
            table.add_row(
                node.path,
                node.type.value,
                node.role,
                node.importance.value,
                str(node.complexity),
                f"({node.position.x:.0f}, {node.position.y:.0f})",
            )
        console.print(table)
        console.print()

    # ── Edges ──────────────────────────────────────────────────────
    if verbose and workflow.edges:
        table = Table(title="Edges")
        table.add_column("Source", style="cyan")
        table.add_column("Label")
        table.add_column("Target", style="cyan")
        table.add_column("Type", style="dim")
        for edge in workflow.edges:
            table.add_row(edge.source, edge.label, edge.target, edge.type.value)
        console.print(table)
        console.print()

    # ── Clusters ───────────────────────────────────────────────────
    if workflow.clusters:
        console.print("[bold]Clusters[/bold]")
        for cluster in workflow.clusters:
            console.print(
                f"  {cluster.id}/ [dim]({len(cluster.node_ids)} files)[/dim] {cluster.purpose}"
            )
        console.print()

    # ── Critical paths ─────────────────────────────────────────────
    if workflow.critical_paths:
        console.print("[bold]Critical paths[/bold]")
        for path in workflow.critical_paths:
            console.print(f"  {' -> '.join(path.path)}")
        console.print()
