"""Tests for the DataStore module."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from retail_insights.store import DataStore


class TestDataStoreInit:
    """Test DataStore initialization."""

    def test_creates_role_paths(self, tmp_path: Path) -> None:
        store = DataStore(tmp_path)
        assert store.base == tmp_path
        assert store.snapshots == tmp_path / "snapshots"
        assert store.derived == tmp_path / "derived"


class TestSnapshotPath:
    """Test snapshot path lookup."""

    def test_known_table(self, tmp_path: Path) -> None:
        assert DataStore(tmp_path).snapshot_path("sales") == Path("snapshots/sales.json")

    def test_unknown_table(self, tmp_path: Path) -> None:
        with pytest.raises(ValueError, match="Unknown snapshot table"):
            DataStore(tmp_path).snapshot_path("customers")


class TestDerivedPath:
    """Test derived result path lookup."""

    def test_relative_to_base(self, tmp_path: Path) -> None:
        store = DataStore(tmp_path)
        path = store.derived_path("correlation", "r.json")
        assert path == Path("derived/correlation/r.json")
        assert store.base / path == store.derived / "correlation" / "r.json"


class TestDataStoreWrite:
    """Test writing data with metadata envelopes."""

    def test_write_envelope_format(self, tmp_path: Path) -> None:
        store = DataStore(tmp_path)
        path = store.write(Path("derived/result.json"), {"correlations": []}, source="analysis")

        assert path.exists()
        data = json.loads(path.read_text())
        assert data["meta"]["source"] == "analysis"
        assert "written_at" in data["meta"]
        assert data["data"] == {"correlations": []}

    def test_write_extra_params(self, tmp_path: Path) -> None:
        store = DataStore(tmp_path)
        store.write(Path("derived/r.json"), {}, source="test", processing_ms=12.5)
        data = json.loads((tmp_path / "derived" / "r.json").read_text())
        assert data["meta"]["processing_ms"] == 12.5

    def test_write_keeps_unicode(self, tmp_path: Path) -> None:
        store = DataStore(tmp_path)
        path = store.write(Path("snapshots/weather.json"), [{"condition": "晴れ"}], source="test")
        assert "晴れ" in path.read_text(encoding="utf-8")

    def test_write_creates_parent_dirs(self, tmp_path: Path) -> None:
        store = DataStore(tmp_path)
        store.write(Path("derived/correlation/deep/nested.json"), {}, source="test")
        assert (tmp_path / "derived" / "correlation" / "deep" / "nested.json").exists()

    def test_rejects_escaping_path(self, tmp_path: Path) -> None:
        store = DataStore(tmp_path / "data")
        with pytest.raises(ValueError, match="escapes"):
            store.write(Path("../outside.json"), {}, source="test")


class TestDataStoreRead:
    """Test reading data from the store."""

    def test_read_returns_data_payload(self, tmp_path: Path) -> None:
        store = DataStore(tmp_path)
        store.write(Path("snapshots/sales.json"), [{"date": "2024-01-01"}], source="test")
        assert store.read(Path("snapshots/sales.json")) == [{"date": "2024-01-01"}]

    def test_read_plain_json(self, tmp_path: Path) -> None:
        (tmp_path / "plain.json").write_text('[{"date": "2024-01-01"}]')
        assert DataStore(tmp_path).read(Path("plain.json")) == [{"date": "2024-01-01"}]

    def test_read_missing_file(self, tmp_path: Path) -> None:
        store = DataStore(tmp_path)
        assert store.read(Path("nonexistent.json")) is None
        assert store.read_raw(Path("nonexistent.json")) is None

    def test_read_raw_includes_meta(self, tmp_path: Path) -> None:
        store = DataStore(tmp_path)
        store.write(Path("derived/r.json"), {"k": 1}, source="test")
        raw = store.read_raw(Path("derived/r.json"))
        assert raw["meta"]["source"] == "test"
        assert raw["data"] == {"k": 1}
