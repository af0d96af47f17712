"""Small JSONL logging utilities for plan inspection."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Mapping

from .core.base import BaseTransform, iter_plan_graph


class JsonlLogger:
    """Append JSON-serializable records to a JSON Lines file."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)

    def write(self, record: Mapping[str, Any]) -> None:
        with self.path.open("a", encoding="utf-8") as handle:
            handle.write(json.dumps(dict(record), ensure_ascii=False) + "\n")


def plan_records(transform: BaseTransform) -> list[dict[str, Any]]:
    """Flatten the plan graph of ``transform`` into one record per node."""
    records = []
    for node in iter_plan_graph(transform):
        record = node.summary()
        record["children"] = [
            f"{child.kind.value}:{child.length}" for child in node.children
        ]
        records.append(record)
    return records


def log_plan_jsonl(path: str | Path, transform: BaseTransform) -> int:
    """Append the plan graph of ``transform`` to JSONL; return the record count."""
    logger = JsonlLogger(path)
    records = plan_records(transform)
    for record in records:
        logger.write(record)
    return len(records)
