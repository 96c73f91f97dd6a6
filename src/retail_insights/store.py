"""JSON data store with metadata envelopes.

Files are organized by role under one base directory:
  - snapshots/: upstream table exports (sales.json, weather.json, events.json)
    read by the snapshot gateway
  - derived/: analysis results written by the analysis flow

Every file is wrapped as ``{"meta": {...}, "data": ...}`` so a reader can
tell where the payload came from and when it was written.
"""

from __future__ import annotations

import json
from datetime import UTC, datetime
from pathlib import Path  # noqa: TC003
from typing import Any

SNAPSHOT_TABLES = ("sales", "weather", "events")


class DataStore:
    """Reads and writes enveloped JSON files below a base directory."""

    def __init__(self, base_dir: Path) -> None:
        self.base = base_dir
        self.snapshots = base_dir / "snapshots"
        self.derived = base_dir / "derived"

    def snapshot_path(self, table: str) -> Path:
        """Relative path of a table snapshot, e.g. ``snapshots/sales.json``."""
        if table not in SNAPSHOT_TABLES:
            msg = f"Unknown snapshot table: {table}"
            raise ValueError(msg)
        return self.snapshots.relative_to(self.base) / f"{table}.json"

    def derived_path(self, *parts: str) -> Path:
        """Relative path below ``derived/``, e.g. ``derived/correlation/x.json``."""
        return self.derived.relative_to(self.base).joinpath(*parts)

    def read(self, path: Path) -> Any | None:
        """Read the ``data`` payload of an enveloped JSON file.

        Returns None if the file doesn't exist. Plain JSON without an
        envelope is returned as-is.
        """
        envelope = self.read_raw(path)
        if envelope is None:
            return None
        if isinstance(envelope, dict) and "data" in envelope:
            return envelope["data"]
        return envelope

    def read_raw(self, path: Path) -> Any | None:
        """Read the full file (meta + data)."""
        full = self._resolve(path)
        if not full.exists():
            return None
        with full.open(encoding="utf-8") as f:
            return json.load(f)

    def write(self, path: Path, data: Any, source: str, **params: Any) -> Path:
        """Write data wrapped in a metadata envelope.

        Args:
            path: Relative path under base_dir (e.g. ``snapshots/sales.json``).
            data: JSON-compatible payload stored under the ``data`` key.
            source: Producer identifier (e.g. ``"supabase"``, ``"analysis"``).
            **params: Extra metadata fields (filters, timings, ...).

        Returns:
            Absolute path of the written file.
        """
        full = self._resolve(path)
        full.parent.mkdir(parents=True, exist_ok=True)

        meta: dict[str, Any] = {
            "source": source,
            "written_at": datetime.now(UTC).isoformat(),
            **params,
        }
        with full.open("w", encoding="utf-8") as f:
            json.dump({"meta": meta, "data": data}, f, indent=2, ensure_ascii=False)

        return full

    def _resolve(self, path: Path) -> Path:
        full = self.base / path if not path.is_absolute() else path
        try:
            full.resolve().relative_to(self.base.resolve())
        except ValueError:
            msg = f"Path escapes store base directory: {path}"
            raise ValueError(msg) from None
        return full
