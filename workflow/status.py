"""Scheduling status of board nodes."""

from __future__ import annotations

import logging
from datetime import UTC, datetime, timedelta

from workflow.model import (
    EventSnapshot,
    ExternalType,
    NodeStatus,
    TaskSnapshot,
    TaskStatus,
    WorkflowNode,
)

logger = logging.getLogger("wg.status")

DEFAULT_LOOKAHEAD = timedelta(hours=24)


def as_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC so they compare with aware ones."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def resolve_status(
    node: WorkflowNode,
    *,
    now: datetime,
    lookahead: timedelta = DEFAULT_LOOKAHEAD,
) -> NodeStatus:
    """Resolve one node's status against ``now``."""
    now = as_utc(now)
    horizon = now + lookahead
    payload = node.data

    if isinstance(payload, TaskSnapshot):
        if node.external_type is not ExternalType.TASK:
            logger.warning("Node %s is typed %s but carries a task", node.id, node.external_type.value)
        due = as_utc(payload.due_date) if payload.due_date else None
        if payload.status is TaskStatus.COMPLETED:
            return NodeStatus(id=node.id, status="completed", is_completed=True, due_date=due)
        if due is None:
            return NodeStatus(id=node.id, status="upcoming")
        if due < now:
            return NodeStatus(id=node.id, status="overdue", due_date=due)
        if due <= horizon:
            return NodeStatus(id=node.id, status="at-risk", due_date=due)
        return NodeStatus(id=node.id, status="upcoming", due_date=due)

    if isinstance(payload, EventSnapshot):
        if node.external_type is not ExternalType.EVENT:
            logger.warning("Node %s is typed %s but carries an event", node.id, node.external_type.value)
        starts = as_utc(payload.starts_at)
        # Events elapse rather than go overdue.
        if as_utc(payload.ends_at) < now:
            return NodeStatus(id=node.id, status="completed", is_completed=True, due_date=starts)
        if starts <= horizon:
            return NodeStatus(id=node.id, status="at-risk", due_date=starts)
        return NodeStatus(id=node.id, status="upcoming", due_date=starts)

    return NodeStatus(id=node.id, status="upcoming")


def resolve_statuses(
    nodes: list[WorkflowNode],
    *,
    now: datetime,
    lookahead: timedelta = DEFAULT_LOOKAHEAD,
) -> list[NodeStatus]:
    """Resolve statuses for every node, preserving order."""
    return [resolve_status(node, now=now, lookahead=lookahead) for node in nodes]
