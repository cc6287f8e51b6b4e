"""Edge admission checks guarding board topology."""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass

from workflow.cycles import detect_cycles
from workflow.model import WorkflowGraph

logger = logging.getLogger("wg.admission")

_CANDIDATE_EDGE_ID = "candidate"


class EdgeRejectedError(ValueError):
    """Raised when a prospective edge would break the board topology."""

    def __init__(self, source_id: str, target_id: str, reason: str) -> None:
        super().__init__(f"Cannot link {source_id} -> {target_id}: {reason}")
        self.source_id = source_id
        self.target_id = target_id
        self.reason = reason


@dataclass
class EdgeDecision:
    """Represents admit/reject decision for a prospective edge."""

    allowed: bool
    reason: str


def evaluate_edge(
    graph: WorkflowGraph,
    source_id: str,
    target_id: str,
    *,
    require_endpoints: bool = False,
) -> EdgeDecision:
    """Decide whether ``source_id -> target_id`` keeps the graph acyclic."""
    if require_endpoints:
        known = set(graph.node_ids())
        missing = [node_id for node_id in (source_id, target_id) if node_id not in known]
        if missing:
            return EdgeDecision(False, f"Unknown node(s) on this board: {', '.join(missing)}.")

    if source_id == target_id:
        return EdgeDecision(False, "A node cannot depend on itself.")
    if graph.has_edge(source_id, target_id):
        return EdgeDecision(False, "Edge already exists.")

    candidate = graph.with_edge(source_id, target_id, _CANDIDATE_EDGE_ID)
    cycle_nodes = detect_cycles(candidate)
    if cycle_nodes:
        return EdgeDecision(
            False,
            f"Edge would create a circular dependency through: {', '.join(cycle_nodes)}.",
        )
    return EdgeDecision(True, "Edge keeps the board acyclic.")


def can_add_edge(graph: WorkflowGraph, source_id: str, target_id: str) -> bool:
    """Return True when the edge may be added without breaking the DAG."""
    return evaluate_edge(graph, source_id, target_id).allowed


def link_nodes(
    graph: WorkflowGraph,
    source_id: str,
    target_id: str,
    edge_id: str | None = None,
) -> WorkflowGraph:
    """Return a new graph with the edge applied, or raise ``EdgeRejectedError``."""
    decision = evaluate_edge(graph, source_id, target_id, require_endpoints=True)
    if not decision.allowed:
        logger.info("Rejected edge %s -> %s: %s", source_id, target_id, decision.reason)
        raise EdgeRejectedError(source_id, target_id, decision.reason)
    return graph.with_edge(source_id, target_id, edge_id or f"edge_{uuid.uuid4().hex[:12]}")
