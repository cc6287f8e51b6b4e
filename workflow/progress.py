"""Board completion progress and summary statistics."""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from datetime import datetime, timedelta
from typing import Any

from workflow.model import EventSnapshot, NodeStatus, TaskSnapshot, TaskStatus, WorkflowGraph
from workflow.status import as_utc, resolve_statuses


def _percent(part: int, whole: int) -> int:
    if whole == 0:
        return 0
    # Half rounds up, not to even.
    return math.floor(part * 100 / whole + 0.5)


def calculate_progress(statuses: list[NodeStatus]) -> int:
    """Return completed share of nodes as an integer percentage in [0, 100]."""
    completed = sum(1 for status in statuses if status.is_completed)
    return _percent(completed, len(statuses))


@dataclass
class BoardStats:
    """Counts shown on a board's summary panel."""

    total_items: int = 0
    completed_items: int = 0
    progress_percentage: int = 0
    total_edges: int = 0
    overdue_tasks: int = 0
    due_today_tasks: int = 0
    upcoming_events: int = 0
    tasks_count: int = 0
    events_count: int = 0

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def summarize_board(graph: WorkflowGraph, *, now: datetime) -> BoardStats:
    """Compute summary counts for a board snapshot.

    Overdue and due-today counts use calendar days in the timezone of
    ``now`` (naive values are UTC); upcoming events are those starting
    after ``now`` and no later than the end of today.
    """
    now = as_utc(now)
    today = now.replace(hour=0, minute=0, second=0, microsecond=0)
    tomorrow = today + timedelta(days=1)

    statuses = resolve_statuses(graph.nodes, now=now)
    stats = BoardStats(
        total_items=len(graph.nodes),
        completed_items=sum(1 for status in statuses if status.is_completed),
        progress_percentage=calculate_progress(statuses),
        total_edges=len(graph.edges),
    )

    for node in graph.nodes:
        payload = node.data
        if isinstance(payload, TaskSnapshot):
            stats.tasks_count += 1
            if payload.status is not TaskStatus.ACTIVE or payload.due_date is None:
                continue
            due = as_utc(payload.due_date)
            if due < today:
                stats.overdue_tasks += 1
            elif due < tomorrow:
                stats.due_today_tasks += 1
        elif isinstance(payload, EventSnapshot):
            stats.events_count += 1
            starts = as_utc(payload.starts_at)
            if now < starts <= tomorrow:
                stats.upcoming_events += 1
    return stats
