"""Top-level wiring for board analysis."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any

from core.board_loader import BoardSnapshot
from core.policy_runtime import EngineSettings, engine_settings, load_effective_config
from workflow.critical_path import CriticalPath, duration_lookup, find_critical_path
from workflow.model import NodeStatus
from workflow.ordering import topological_sort
from workflow.progress import BoardStats, calculate_progress, summarize_board
from workflow.status import resolve_statuses
from workflow.validator import ValidationResult, validate_graph


@dataclass
class BoardReport:
    """Everything the board view derives from one snapshot."""

    validation: ValidationResult
    statuses: list[NodeStatus]
    progress: int
    stats: BoardStats
    order: list[str] | None
    critical_path: CriticalPath | None
    generated_at: datetime
    name: str = ""
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "generated_at": self.generated_at.isoformat(),
            "validation": asdict(self.validation),
            "statuses": [status.model_dump(mode="json") for status in self.statuses],
            "progress": self.progress,
            "stats": self.stats.to_dict(),
            "order": self.order,
            "critical_path": asdict(self.critical_path) if self.critical_path else None,
            "warnings": list(self.warnings),
        }


@dataclass
class RuntimeBundle:
    """Holds resolved configuration for CLI use."""

    config: dict[str, Any]
    settings: EngineSettings

    def report(self, board: BoardSnapshot, *, now: datetime) -> BoardReport:
        """Run every engine query over ``board``."""
        statuses = resolve_statuses(board.nodes, now=now, lookahead=self.settings.lookahead)
        order = topological_sort(board)
        critical = find_critical_path(
            board,
            duration_lookup(board, board.durations, self.settings.default_duration_days),
        )
        warnings: list[str] = []
        if order is None:
            warnings.append("Board has circular dependencies; ordering and critical path skipped.")
        return BoardReport(
            validation=validate_graph(board),
            statuses=statuses,
            progress=calculate_progress(statuses),
            stats=summarize_board(board, now=now),
            order=order,
            critical_path=critical,
            generated_at=now,
            name=board.name,
            warnings=warnings,
        )


class Orchestrator:
    """Loads configuration and builds the runtime bundle."""

    def __init__(self, root: Path | None = None) -> None:
        default_root = Path(__file__).resolve().parents[1]
        self.root = (root or default_root).resolve()

    def build(self) -> RuntimeBundle:
        config = load_effective_config(self.root)
        return RuntimeBundle(config=config, settings=engine_settings(config))
