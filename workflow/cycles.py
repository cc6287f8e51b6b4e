"""Circular dependency detection over a workflow graph."""

from __future__ import annotations

import logging
from collections.abc import Iterator

from workflow.model import WorkflowGraph

logger = logging.getLogger("wg.cycles")


def detect_cycles(graph: WorkflowGraph) -> list[str]:
    """Return ids of nodes caught in a circular dependency.

    Depth-first search from every unvisited node. When a search reaches a
    node that is still on the current path, that node and every node on the
    path leading to it are reported, and the search from that root stops.
    Ids come back de-duplicated in discovery order; an acyclic graph yields
    an empty list.
    """
    outgoing = graph.outgoing()
    visited: set[str] = set()
    on_stack: set[str] = set()
    found: dict[str, None] = {}

    for root in graph.node_ids():
        if root in visited:
            continue
        visited.add(root)
        on_stack.add(root)
        path: list[tuple[str, Iterator[str]]] = [(root, iter(outgoing.get(root, [])))]

        while path:
            node, targets = path[-1]
            target = next(targets, None)
            if target is None:
                path.pop()
                on_stack.discard(node)
                continue
            if target in on_stack:
                logger.debug("Dependency cycle closes at node %s", target)
                found[target] = None
                while path:
                    ancestor, _ = path.pop()
                    on_stack.discard(ancestor)
                    found[ancestor] = None
                break
            if target in visited:
                continue
            visited.add(target)
            on_stack.add(target)
            path.append((target, iter(outgoing.get(target, []))))

    return list(found)


def has_cycles(graph: WorkflowGraph) -> bool:
    return bool(detect_cycles(graph))
