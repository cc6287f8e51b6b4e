"""Critical path (longest duration-weighted path) through a board."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field

from workflow.model import EventSnapshot, WorkflowGraph, WorkflowNode
from workflow.ordering import topological_sort
from workflow.status import as_utc

DurationFn = Callable[[str], float]

_SECONDS_PER_DAY = 24 * 60 * 60


@dataclass
class CriticalPath:
    """Longest chain of dependent nodes and its total duration in days."""

    path: list[str] = field(default_factory=list)
    total_duration: float = 0.0


def find_critical_path(graph: WorkflowGraph, duration_of: DurationFn) -> CriticalPath | None:
    """Return the critical path, or None when the graph has cycles."""
    order = topological_sort(graph)
    if order is None:
        return None

    distance: dict[str, float] = {node_id: 0.0 for node_id in order}
    predecessor: dict[str, str | None] = {node_id: None for node_id in order}
    duration = {node_id: duration_of(node_id) for node_id in order}
    outgoing = graph.outgoing()

    for node_id in order:
        reach = distance[node_id] + duration[node_id]
        for target in outgoing.get(node_id, []):
            if target not in distance:
                continue
            # Strictly greater: ties keep the first predecessor found.
            if reach > distance[target]:
                distance[target] = reach
                predecessor[target] = node_id

    best = 0.0
    end: str | None = None
    for node_id in order:
        total = distance[node_id] + duration[node_id]
        if total > best:
            best = total
            end = node_id

    if end is None:
        return CriticalPath()

    path: list[str] = []
    current: str | None = end
    while current is not None:
        path.append(current)
        current = predecessor[current]
    path.reverse()
    return CriticalPath(path=path, total_duration=best)


def payload_duration(node: WorkflowNode, default_days: float) -> float:
    """Duration in days: event length for events, ``default_days`` otherwise."""
    if isinstance(node.data, EventSnapshot):
        span = as_utc(node.data.ends_at) - as_utc(node.data.starts_at)
        return max(0.0, span.total_seconds() / _SECONDS_PER_DAY)
    return default_days


def duration_lookup(
    graph: WorkflowGraph,
    overrides: Mapping[str, float] | None = None,
    default_days: float = 1.0,
) -> DurationFn:
    """Build a ``duration_of`` callable from explicit overrides and payloads."""
    overrides = dict(overrides or {})
    nodes = {node.id: node for node in graph.nodes}

    def duration_of(node_id: str) -> float:
        if node_id in overrides:
            return float(overrides[node_id])
        node = nodes.get(node_id)
        if node is None:
            return default_days
        return payload_duration(node, default_days)

    return duration_of
