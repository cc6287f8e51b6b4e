"""Transitive predecessor and successor queries."""

from __future__ import annotations

from collections.abc import Iterator

from workflow.model import WorkflowGraph


def _reachable(index: dict[str, list[str]], start: str) -> list[str]:
    """Depth-first walk over ``index`` from ``start``.

    ``start`` itself is only included when a cycle leads back to it.
    """
    seen: dict[str, None] = {}
    stack: list[Iterator[str]] = [iter(index.get(start, []))]
    while stack:
        neighbour = next(stack[-1], None)
        if neighbour is None:
            stack.pop()
            continue
        if neighbour in seen:
            continue
        seen[neighbour] = None
        stack.append(iter(index.get(neighbour, [])))
    return list(seen)


def get_predecessors(graph: WorkflowGraph, node_id: str) -> list[str]:
    """Nodes that must complete before ``node_id``, nearest first along each branch."""
    return _reachable(graph.incoming(), node_id)


def get_successors(graph: WorkflowGraph, node_id: str) -> list[str]:
    """Nodes that depend, directly or transitively, on ``node_id``."""
    return _reachable(graph.outgoing(), node_id)
