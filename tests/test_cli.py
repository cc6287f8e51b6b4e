"""CLI command tests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from typer.testing import CliRunner

from ui.cli.cli import app

runner = CliRunner()

NOW = "2024-01-15T12:00:00+00:00"


def write_board(tmp_path: Path, edges: list[tuple[str, str]], **extra: Any) -> Path:
    nodes = [
        {
            "id": "A",
            "externalId": "t1",
            "externalType": "TASK",
            "data": {"id": "t1", "status": "COMPLETED"},
        },
        {
            "id": "B",
            "externalId": "t2",
            "externalType": "TASK",
            "data": {"id": "t2", "dueDate": "2024-01-15T18:00:00Z"},
        },
        {
            "id": "C",
            "externalId": "ev1",
            "externalType": "EVENT",
            "data": {
                "id": "ev1",
                "startsAt": "2024-01-20T10:00:00Z",
                "endsAt": "2024-01-20T11:00:00Z",
            },
        },
    ]
    payload = {
        "name": "Launch",
        "nodes": nodes,
        "edges": [
            {"id": f"e{i}", "sourceId": s, "targetId": t}
            for i, (s, t) in enumerate(edges, start=1)
        ],
        **extra,
    }
    path = tmp_path / "board.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def test_validate_valid_board(tmp_path: Path) -> None:
    board = write_board(tmp_path, [("A", "B"), ("B", "C")])

    result = runner.invoke(app, ["validate", str(board)])

    assert result.exit_code == 0
    assert "Board is valid." in result.output


def test_validate_invalid_board_exits_one(tmp_path: Path) -> None:
    board = write_board(tmp_path, [("A", "B"), ("B", "A"), ("C", "ghost")])

    result = runner.invoke(app, ["validate", str(board)])

    assert result.exit_code == 1
    assert "Circular dependencies detected in nodes: A, B" in result.output
    assert "non-existent target node: ghost" in result.output


def test_order(tmp_path: Path) -> None:
    board = write_board(tmp_path, [("A", "B"), ("B", "C")])

    result = runner.invoke(app, ["order", str(board)])

    assert result.exit_code == 0
    assert result.output.splitlines() == ["1. A", "2. B", "3. C"]


def test_order_of_cyclic_board(tmp_path: Path) -> None:
    board = write_board(tmp_path, [("A", "B"), ("B", "A")])

    result = runner.invoke(app, ["order", str(board)])

    assert result.exit_code == 1
    assert "circular dependencies" in result.output


def test_critical_path_uses_board_durations(tmp_path: Path) -> None:
    board = write_board(tmp_path, [("A", "B"), ("B", "C")], durations={"A": 1, "B": 2, "C": 3})

    result = runner.invoke(app, ["critical-path", str(board)])

    assert result.exit_code == 0
    assert "A -> B -> C" in result.output
    assert "Total duration: 6 day(s)" in result.output


def test_critical_path_default_days_option(tmp_path: Path) -> None:
    board = write_board(tmp_path, [("A", "B")])

    result = runner.invoke(app, ["critical-path", str(board), "--default-days", "2"])

    # C is a one-hour event; A -> B is two tasks of two days each.
    assert result.exit_code == 0
    assert "A -> B" in result.output
    assert "Total duration: 4 day(s)" in result.output


def test_status_with_fixed_now(tmp_path: Path) -> None:
    board = write_board(tmp_path, [("A", "B"), ("B", "C")])

    result = runner.invoke(app, ["status", str(board), "--now", NOW])

    assert result.exit_code == 0
    lines = result.output.splitlines()
    assert lines[0] == "A: completed"
    assert lines[1].startswith("B: at-risk")
    assert lines[2].startswith("C: upcoming")
    assert lines[-1] == "Progress: 33%"


def test_status_rejects_bad_timestamp(tmp_path: Path) -> None:
    board = write_board(tmp_path, [])

    result = runner.invoke(app, ["status", str(board), "--now", "yesterday"])

    assert result.exit_code == 2


def test_stats_json(tmp_path: Path) -> None:
    board = write_board(tmp_path, [("A", "B")])

    result = runner.invoke(app, ["stats", str(board), "--now", NOW])

    assert result.exit_code == 0
    stats = json.loads(result.output)
    assert stats["total_items"] == 3
    assert stats["completed_items"] == 1
    assert stats["due_today_tasks"] == 1
    assert stats["total_edges"] == 1


def test_can_link(tmp_path: Path) -> None:
    board = write_board(tmp_path, [("A", "B")])

    allowed = runner.invoke(app, ["can-link", str(board), "B", "C"])
    rejected = runner.invoke(app, ["can-link", str(board), "B", "A"])
    unknown = runner.invoke(app, ["can-link", str(board), "A", "Z"])

    assert allowed.exit_code == 0
    assert "B -> C: allowed" in allowed.output
    assert rejected.exit_code == 1
    assert "circular dependency" in rejected.output
    assert unknown.exit_code == 1
    assert "Unknown node(s)" in unknown.output


def test_neighbors(tmp_path: Path) -> None:
    board = write_board(tmp_path, [("A", "B"), ("B", "C")])

    result = runner.invoke(app, ["neighbors", str(board), "B"])

    assert result.exit_code == 0
    assert "Predecessors: A" in result.output
    assert "Successors: C" in result.output


def test_report(tmp_path: Path) -> None:
    board = write_board(tmp_path, [("A", "B"), ("B", "C")], durations={"C": 2})

    result = runner.invoke(app, ["report", str(board), "--now", NOW])

    assert result.exit_code == 0
    report = json.loads(result.output)
    assert report["name"] == "Launch"
    assert report["validation"] == {"is_valid": True, "errors": []}
    assert report["order"] == ["A", "B", "C"]
    assert report["critical_path"] == {"path": ["A", "B", "C"], "total_duration": 4.0}
    assert report["progress"] == 33
    assert [s["status"] for s in report["statuses"]] == ["completed", "at-risk", "upcoming"]
    assert report["warnings"] == []


def test_report_on_cyclic_board(tmp_path: Path) -> None:
    board = write_board(tmp_path, [("A", "B"), ("B", "A")])

    result = runner.invoke(app, ["report", str(board), "--now", NOW])

    assert result.exit_code == 0
    report = json.loads(result.output)
    assert report["order"] is None
    assert report["critical_path"] is None
    assert report["validation"]["is_valid"] is False
    assert report["warnings"]


def test_unreadable_board_exits_two(tmp_path: Path) -> None:
    path = tmp_path / "board.json"
    path.write_text("{broken", encoding="utf-8")

    result = runner.invoke(app, ["validate", str(path)])

    assert result.exit_code == 2
    assert "Invalid JSON" in result.output


def test_config_show() -> None:
    result = runner.invoke(app, ["config", "show"])

    assert result.exit_code == 0
    config = json.loads(result.output)
    assert config["status"]["lookahead_hours"] == 24
