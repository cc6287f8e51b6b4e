"""Typer command handlers."""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from pathlib import Path

import typer
from pydantic import ValidationError

from core.board_loader import BoardSnapshot, load_board
from core.orchestrator import Orchestrator, RuntimeBundle
from core.policy_runtime import configure_logging
from workflow.admission import evaluate_edge
from workflow.critical_path import duration_lookup, find_critical_path
from workflow.ordering import topological_sort
from workflow.progress import calculate_progress, summarize_board
from workflow.reachability import get_predecessors, get_successors
from workflow.status import resolve_statuses
from workflow.validator import validate_graph

logger = logging.getLogger("wg.cli")

_LOAD_ERROR_EXIT = 2


def _runtime(root: Path | None = None) -> RuntimeBundle:
    bundle = Orchestrator(root=root).build()
    configure_logging(bundle.settings.log_level)
    return bundle


def _board(path: Path) -> BoardSnapshot:
    try:
        return load_board(path)
    except (ValueError, ValidationError) as exc:
        logger.debug("Board load failed", exc_info=True)
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=_LOAD_ERROR_EXIT) from exc


def _now(value: str | None) -> datetime:
    if not value:
        return datetime.now(UTC)
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError as exc:
        typer.echo(f"Error: --now must be an ISO 8601 timestamp, got {value!r}", err=True)
        raise typer.Exit(code=_LOAD_ERROR_EXIT) from exc
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=UTC)


def validate(board_path: Path) -> None:
    """Print validation errors for a board."""
    _runtime()
    result = validate_graph(_board(board_path))
    if result.is_valid:
        typer.echo("Board is valid.")
        return
    for error in result.errors:
        typer.echo(f"- {error}")
    raise typer.Exit(code=1)


def order(board_path: Path) -> None:
    """Print nodes in dependency order."""
    _runtime()
    sequence = topological_sort(_board(board_path))
    if sequence is None:
        typer.echo("Board has circular dependencies; no order exists.")
        raise typer.Exit(code=1)
    for position, node_id in enumerate(sequence, start=1):
        typer.echo(f"{position}. {node_id}")


def critical_path(board_path: Path, default_days: float | None = None) -> None:
    """Print the critical path of a board."""
    bundle = _runtime()
    board = _board(board_path)
    days = bundle.settings.default_duration_days if default_days is None else default_days
    result = find_critical_path(board, duration_lookup(board, board.durations, days))
    if result is None:
        typer.echo("Board has circular dependencies; no critical path exists.")
        raise typer.Exit(code=1)
    if not result.path:
        typer.echo("Critical path is empty.")
        return
    typer.echo(" -> ".join(result.path))
    typer.echo(f"Total duration: {result.total_duration:g} day(s)")


def status(board_path: Path, now: str | None = None) -> None:
    """Print each node's scheduling status and overall progress."""
    bundle = _runtime()
    board = _board(board_path)
    statuses = resolve_statuses(board.nodes, now=_now(now), lookahead=bundle.settings.lookahead)
    for item in statuses:
        due = f" (due {item.due_date.isoformat()})" if item.due_date else ""
        typer.echo(f"{item.id}: {item.status}{due}")
    typer.echo(f"Progress: {calculate_progress(statuses)}%")


def stats(board_path: Path, now: str | None = None) -> None:
    """Print board summary counts as JSON."""
    _runtime()
    summary = summarize_board(_board(board_path), now=_now(now))
    typer.echo(json.dumps(summary.to_dict(), indent=2))


def can_link(board_path: Path, source_id: str, target_id: str) -> None:
    """Report whether a dependency edge may be added."""
    _runtime()
    decision = evaluate_edge(_board(board_path), source_id, target_id, require_endpoints=True)
    verdict = "allowed" if decision.allowed else "rejected"
    typer.echo(f"{source_id} -> {target_id}: {verdict}. {decision.reason}")
    if not decision.allowed:
        raise typer.Exit(code=1)


def neighbors(board_path: Path, node_id: str) -> None:
    """Print transitive predecessors and successors of a node."""
    _runtime()
    board = _board(board_path)
    typer.echo(f"Predecessors: {', '.join(get_predecessors(board, node_id)) or '(none)'}")
    typer.echo(f"Successors: {', '.join(get_successors(board, node_id)) or '(none)'}")


def report(board_path: Path, now: str | None = None) -> None:
    """Print the combined board report as JSON."""
    bundle = _runtime()
    result = bundle.report(_board(board_path), now=_now(now))
    typer.echo(json.dumps(result.to_dict(), indent=2))


def config_show() -> None:
    """Show effective runtime config."""
    bundle = _runtime()
    typer.echo(json.dumps(bundle.config, indent=2, default=str))
