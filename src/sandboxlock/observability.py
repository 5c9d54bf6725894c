"""In-memory install log.

Each record is a flat dict so it can be filtered in tests and dumped as one
JSON object per line. ``package`` is the ``name@version`` spec being
installed, or None for standalone checksum operations.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal

LogLevel = Literal["info", "warning", "error"]


@dataclass(slots=True)
class StructuredLogger:
    records: list[dict[str, Any]] = field(default_factory=list)

    def log(
        self,
        operation: str,
        message: str,
        *,
        package: str | None = None,
        stage: str | None = None,
        level: LogLevel = "info",
        extra: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        record: dict[str, Any] = {
            "level": level,
            "operation": operation,
            "package": package,
            "stage": stage,
            "message": message,
        }
        if extra is not None:
            record["extra"] = extra
        self.records.append(record)
        return record

    def records_for_package(self, package: str) -> list[dict[str, Any]]:
        return [record for record in self.records if record["package"] == package]

    def records_at_level(self, level: LogLevel) -> list[dict[str, Any]]:
        return [record for record in self.records if record["level"] == level]

    def stage_trail(self, package: str) -> list[str]:
        """Stages reached by ``package`` in order, ending in ``failed`` on error."""
        trail: list[str] = []
        for record in self.records_for_package(package):
            if record["operation"] == "stage":
                trail.append(record["stage"])
            elif record["operation"] == "install_failed":
                trail.append("failed")
        return trail

    def to_json_lines(self, path: str | Path) -> Path:
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        with target.open("w", encoding="utf-8") as handle:
            for record in self.records:
                handle.write(json.dumps(record, sort_keys=True) + "\n")
        return target
