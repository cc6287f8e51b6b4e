"""CLI entrypoint for workflow-graph."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from ui.cli import commands

app = typer.Typer(help="Workflow board dependency graph tools")
config_app = typer.Typer(help="Configuration commands")


@app.command("validate")
def validate_cmd(
    board: Path = typer.Argument(..., exists=True, dir_okay=False, help="Board file (JSON or YAML)"),
) -> None:
    """Check a board for cycles, dangling, duplicate and self-referencing edges."""
    commands.validate(board)


@app.command("order")
def order_cmd(
    board: Path = typer.Argument(..., exists=True, dir_okay=False, help="Board file (JSON or YAML)"),
) -> None:
    """Print nodes in dependency order."""
    commands.order(board)


@app.command("critical-path")
def critical_path_cmd(
    board: Path = typer.Argument(..., exists=True, dir_okay=False, help="Board file (JSON or YAML)"),
    default_days: Optional[float] = typer.Option(
        None, "--default-days", min=0, help="Duration for nodes without one"
    ),
) -> None:
    """Print the longest duration-weighted dependency chain."""
    commands.critical_path(board, default_days=default_days)


@app.command("status")
def status_cmd(
    board: Path = typer.Argument(..., exists=True, dir_okay=False, help="Board file (JSON or YAML)"),
    now: Optional[str] = typer.Option(None, "--now", help="Reference time, ISO 8601"),
) -> None:
    """Print node statuses and overall progress."""
    commands.status(board, now=now)


@app.command("stats")
def stats_cmd(
    board: Path = typer.Argument(..., exists=True, dir_okay=False, help="Board file (JSON or YAML)"),
    now: Optional[str] = typer.Option(None, "--now", help="Reference time, ISO 8601"),
) -> None:
    """Print board summary counts."""
    commands.stats(board, now=now)


@app.command("can-link")
def can_link_cmd(
    board: Path = typer.Argument(..., exists=True, dir_okay=False, help="Board file (JSON or YAML)"),
    source: str = typer.Argument(..., help="Node that must come first"),
    target: str = typer.Argument(..., help="Node that depends on SOURCE"),
) -> None:
    """Check whether SOURCE -> TARGET can be added."""
    commands.can_link(board, source, target)


@app.command("neighbors")
def neighbors_cmd(
    board: Path = typer.Argument(..., exists=True, dir_okay=False, help="Board file (JSON or YAML)"),
    node: str = typer.Argument(..., help="Node id"),
) -> None:
    """Print transitive predecessors and successors of NODE."""
    commands.neighbors(board, node)


@app.command("report")
def report_cmd(
    board: Path = typer.Argument(..., exists=True, dir_okay=False, help="Board file (JSON or YAML)"),
    now: Optional[str] = typer.Option(None, "--now", help="Reference time, ISO 8601"),
) -> None:
    """Print the full board report as JSON."""
    commands.report(board, now=now)


@config_app.command("show")
def config_show_cmd() -> None:
    """Show effective configuration."""
    commands.config_show()


app.add_typer(config_app, name="config")


def main() -> None:
    """Console script entrypoint."""
    app()


if __name__ == "__main__":
    main()
