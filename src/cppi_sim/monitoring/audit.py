"""Append-only JSON-lines audit trail of simulation runs."""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal
from pathlib import Path
from typing import Any, Optional


def _encode(value: Any) -> Any:
    # Decimals keep their cents as strings; floats would reintroduce drift.
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, (Path, datetime)):
        return str(value)
    raise TypeError(f"Cannot audit value of type {type(value).__name__}")


@dataclass
class AuditLog:
    path: Path
    run_id: str | None = None
    config_hash: str | None = None

    def __init__(self, path: str | Path, run_id: str | None = None, config_hash: str | None = None) -> None:
        self.path = Path(path)
        self.run_id = run_id
        self.config_hash = config_hash
        self.path.parent.mkdir(parents=True, exist_ok=True)

    def log(self, event: str, payload: dict[str, Any]) -> None:
        record = {
            "ts": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "run_id": self.run_id,
            "config_hash": self.config_hash,
            "event": event,
            "payload": payload,
        }
        with self.path.open("a", encoding="utf-8") as handle:
            handle.write(json.dumps(record, default=_encode))
            handle.write("\n")

    def read(self, run_id: Optional[str] = None) -> list[dict[str, Any]]:
        """Records in write order, optionally only those of one run."""
        if not self.path.exists():
            return []
        lines = self.path.read_text(encoding="utf-8").splitlines()
        records = [json.loads(line) for line in lines if line.strip()]
        if run_id is not None:
            records = [record for record in records if record.get("run_id") == run_id]
        return records

    def events(self, run_id: Optional[str] = None) -> list[str]:
        return [record["event"] for record in self.read(run_id)]
