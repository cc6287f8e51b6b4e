"""Topological ordering of acyclic workflow graphs."""

from __future__ import annotations

from collections.abc import Iterator

from workflow.cycles import has_cycles
from workflow.model import WorkflowGraph


def topological_sort(graph: WorkflowGraph) -> list[str] | None:
    """Return node ids so that every edge points forward, or None if cyclic.

    Postorder DFS from each node in board order, reversed. Edges to ids
    that are not nodes of the graph are dead ends.
    """
    if has_cycles(graph):
        return None

    known = set(graph.node_ids())
    outgoing = graph.outgoing()
    visited: set[str] = set()
    postorder: list[str] = []

    for root in graph.node_ids():
        if root in visited:
            continue
        visited.add(root)
        path: list[tuple[str, Iterator[str]]] = [(root, iter(outgoing.get(root, [])))]
        while path:
            node, targets = path[-1]
            target = next(targets, None)
            if target is None:
                path.pop()
                postorder.append(node)
                continue
            if target in visited or target not in known:
                continue
            visited.add(target)
            path.append((target, iter(outgoing.get(target, []))))

    postorder.reverse()
    return postorder
