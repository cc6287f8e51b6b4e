"""Consistency report for a workflow graph."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from workflow.cycles import detect_cycles
from workflow.model import WorkflowGraph

logger = logging.getLogger("wg.validator")


@dataclass
class ValidationResult:
    """Outcome of ``validate_graph``."""

    is_valid: bool
    errors: list[str] = field(default_factory=list)


def validate_graph(graph: WorkflowGraph) -> ValidationResult:
    """Collect every structural problem in the graph; never raises."""
    errors: list[str] = []

    cycle_nodes = detect_cycles(graph)
    if cycle_nodes:
        errors.append(f"Circular dependencies detected in nodes: {', '.join(cycle_nodes)}")

    node_ids = set(graph.node_ids())
    for edge in graph.edges:
        if edge.source_id not in node_ids:
            errors.append(f"Edge {edge.id} references non-existent source node: {edge.source_id}")
        if edge.target_id not in node_ids:
            errors.append(f"Edge {edge.id} references non-existent target node: {edge.target_id}")

    signatures: set[str] = set()
    for edge in graph.edges:
        signature = f"{edge.source_id}->{edge.target_id}"
        if signature in signatures:
            errors.append(f"Duplicate edge detected: {signature}")
        signatures.add(signature)

    for edge in graph.edges:
        if edge.source_id == edge.target_id:
            errors.append(f"Self-loop detected on node: {edge.source_id}")

    if errors:
        logger.warning("Graph failed validation with %d error(s)", len(errors))
    return ValidationResult(is_valid=not errors, errors=errors)
