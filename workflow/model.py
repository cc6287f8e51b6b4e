"""Workflow board graph records."""

from __future__ import annotations

from collections import defaultdict
from datetime import datetime
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel

StatusKind = Literal["completed", "upcoming", "at-risk", "overdue"]


class ExternalType(str, Enum):
    """Kind of domain record a board node wraps."""

    TASK = "TASK"
    EVENT = "EVENT"


class TaskStatus(str, Enum):
    """Lifecycle state of a task record."""

    ACTIVE = "ACTIVE"
    COMPLETED = "COMPLETED"
    ARCHIVED = "ARCHIVED"


class _BoardRecord(BaseModel):
    """Accepts both snake_case and the camelCase keys of persisted boards."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TaskSnapshot(_BoardRecord):
    """Task payload attached to a node."""

    id: str
    title: str = ""
    status: TaskStatus = TaskStatus.ACTIVE
    due_date: datetime | None = None


class EventSnapshot(_BoardRecord):
    """Calendar event payload attached to a node."""

    id: str
    title: str = ""
    starts_at: datetime
    ends_at: datetime
    all_day: bool = False


Payload = TaskSnapshot | EventSnapshot

_PAYLOAD_MODELS: dict[ExternalType, type[BaseModel]] = {
    ExternalType.TASK: TaskSnapshot,
    ExternalType.EVENT: EventSnapshot,
}


class WorkflowNode(_BoardRecord):
    """Board item referencing a task or event."""

    id: str
    external_id: str
    external_type: ExternalType
    x_pos: float = 0.0
    y_pos: float = 0.0
    data: Payload | None = None

    @field_validator("data", mode="before")
    @classmethod
    def _coerce_payload(cls, value: Any, info: ValidationInfo) -> Any:
        if not isinstance(value, dict):
            return value
        model = _PAYLOAD_MODELS.get(info.data.get("external_type"))
        if model is None:
            return value
        return model.model_validate(value)


class WorkflowEdge(_BoardRecord):
    """Directed dependency: source must precede target."""

    id: str
    source_id: str
    target_id: str


class WorkflowGraph(_BoardRecord):
    """Snapshot of a board's nodes and edges.

    Edge endpoints are not checked here; an invalid graph is representable
    and must go through ``validate_graph``.
    """

    nodes: list[WorkflowNode] = Field(default_factory=list)
    edges: list[WorkflowEdge] = Field(default_factory=list)

    def node_ids(self) -> list[str]:
        return [node.id for node in self.nodes]

    def outgoing(self) -> dict[str, list[str]]:
        """Map source id to target ids, in edge order."""
        index: dict[str, list[str]] = defaultdict(list)
        for edge in self.edges:
            index[edge.source_id].append(edge.target_id)
        return index

    def incoming(self) -> dict[str, list[str]]:
        """Map target id to source ids, in edge order."""
        index: dict[str, list[str]] = defaultdict(list)
        for edge in self.edges:
            index[edge.target_id].append(edge.source_id)
        return index

    def has_edge(self, source_id: str, target_id: str) -> bool:
        return any(
            edge.source_id == source_id and edge.target_id == target_id
            for edge in self.edges
        )

    def with_edge(self, source_id: str, target_id: str, edge_id: str) -> WorkflowGraph:
        """Return a new graph with one more edge; this graph is left untouched."""
        edge = WorkflowEdge(id=edge_id, source_id=source_id, target_id=target_id)
        return WorkflowGraph(nodes=list(self.nodes), edges=[*self.edges, edge])


class NodeStatus(BaseModel):
    """Derived scheduling status of one node."""

    id: str
    status: StatusKind = "upcoming"
    is_completed: bool = False
    due_date: datetime | None = None
