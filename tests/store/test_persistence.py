"""Tests for the snapshot codec and the SnapshotStore implementations."""

import json

import pytest
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from bedrock.models.snapshot import Snapshot
from bedrock.store import mutations
from bedrock.store.persistence import (
    FileSnapshotStore,
    InMemorySnapshotStore,
    SnapshotFormatError,
    SnapshotStore,
    SqlSnapshotStore,
    dump_snapshot,
    parse_snapshot,
)


@pytest.fixture
def sqlite_engine():
    eng = create_engine("sqlite:///:memory:", poolclass=StaticPool)
    yield eng
    eng.dispose()


# ---------------------------------------------------------------------------
# Codec
# ---------------------------------------------------------------------------


class TestCodec:
    def test_round_trip_seed(self, seed: Snapshot) -> None:
        assert parse_snapshot(dump_snapshot(seed)) == seed

    def test_round_trip_after_mutations(self, seed: Snapshot) -> None:
        snap = mutations.add_process(seed, "d6", {"name": "Events", "rto": "6+ Days"}).snapshot
        snap = mutations.add_task(snap, "early", "Post status page").snapshot
        snap = mutations.delete_entity(snap, "vendors", "v5").snapshot
        assert parse_snapshot(dump_snapshot(snap)) == snap

    def test_document_uses_persisted_keys(self, seed: Snapshot) -> None:
        doc = json.loads(dump_snapshot(seed))
        assert doc["threats"][0]["like"] == 4
        assert doc["departments"][0]["processes"][0]["pri"] == "Critical"
        assert doc["bia"][0]["finImpact"] == 500000

    def test_accepts_bytes(self, seed: Snapshot) -> None:
        assert parse_snapshot(dump_snapshot(seed).encode("utf-8")) == seed

    def test_not_json(self) -> None:
        with pytest.raises(SnapshotFormatError):
            parse_snapshot("{not json")

    def test_wrong_shape(self) -> None:
        with pytest.raises(SnapshotFormatError):
            parse_snapshot(json.dumps({"threats": "many"}))

    def test_unknown_top_level_key(self) -> None:
        with pytest.raises(SnapshotFormatError):
            parse_snapshot(json.dumps({"widgets": []}))

    def test_empty_object_is_empty_snapshot(self) -> None:
        assert parse_snapshot("{}") == Snapshot()


# ---------------------------------------------------------------------------
# Stores
# ---------------------------------------------------------------------------


class TestSnapshotStoreABC:
    def test_cannot_instantiate(self) -> None:
        with pytest.raises(TypeError):
            SnapshotStore()  # type: ignore[abstract]


class TestInMemorySnapshotStore:
    def test_empty_load(self) -> None:
        assert InMemorySnapshotStore().load() is None

    def test_save_and_load(self) -> None:
        store = InMemorySnapshotStore()
        store.save('{"users": []}')
        assert store.load() == '{"users": []}'
        assert store.save_count == 1


class TestFileSnapshotStore:
    def test_missing_file_loads_none(self, tmp_path) -> None:
        assert FileSnapshotStore(tmp_path / "state.json").load() is None

    def test_save_and_load(self, tmp_path, seed: Snapshot) -> None:
        store = FileSnapshotStore(tmp_path / "state.json")
        store.save(dump_snapshot(seed))
        assert parse_snapshot(store.load()) == seed

    def test_creates_parent_dirs(self, tmp_path) -> None:
        path = tmp_path / "nested" / "dir" / "state.json"
        FileSnapshotStore(path).save("{}")
        assert path.read_text(encoding="utf-8") == "{}"

    def test_overwrites_and_leaves_no_temp_file(self, tmp_path) -> None:
        store = FileSnapshotStore(tmp_path / "state.json")
        store.save("{}")
        store.save('{"users": []}')
        assert store.load() == '{"users": []}'
        assert [p.name for p in tmp_path.iterdir()] == ["state.json"]


class TestSqlSnapshotStore:
    def test_empty_load(self, sqlite_engine) -> None:
        assert SqlSnapshotStore(sqlite_engine).load() is None

    def test_save_then_update(self, sqlite_engine, seed: Snapshot) -> None:
        store = SqlSnapshotStore(sqlite_engine)
        store.save("{}")
        store.save(dump_snapshot(seed))
        assert parse_snapshot(store.load()) == seed

    def test_keys_are_independent(self, sqlite_engine) -> None:
        first = SqlSnapshotStore(sqlite_engine, key="one")
        second = SqlSnapshotStore(sqlite_engine, key="two")
        first.save('{"users": []}')
        assert second.load() is None
        assert first.load() == '{"users": []}'

    def test_accepts_url(self, tmp_path) -> None:
        store = SqlSnapshotStore(f"sqlite:///{tmp_path / 'bedrock.db'}")
        store.save("{}")
        assert store.load() == "{}"
