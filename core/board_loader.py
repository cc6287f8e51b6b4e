"""Load board snapshots from JSON or YAML files."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field

from workflow.model import WorkflowGraph

logger = logging.getLogger("wg.board_loader")


class BoardSnapshot(WorkflowGraph):
    """A board graph as exported by the storage service.

    ``durations`` optionally pins node durations in days for critical path
    queries.
    """

    name: str = ""
    durations: dict[str, float] = Field(default_factory=dict)


def _read_mapping(path: Path) -> dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ValueError(f"Cannot read board file {path}: {exc}") from exc

    if path.suffix.lower() in {".yaml", ".yml"}:
        try:
            data = yaml.safe_load(text) or {}
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid YAML in board file {path}: {exc}") from exc
    else:
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ValueError(f"Invalid JSON in board file {path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ValueError(f"Board file must contain a mapping: {path}")
    return data


def load_board(path: Path) -> BoardSnapshot:
    """Parse a board file; record errors surface as pydantic ``ValidationError``."""
    board = BoardSnapshot.model_validate(_read_mapping(path))
    logger.debug(
        "Loaded board %s: %d nodes, %d edges",
        board.name or path.name,
        len(board.nodes),
        len(board.edges),
    )
    return board
