"""Snapshot persistence — store interface, implementations, and document codec.

- SnapshotStore: abstract interface (load the last document, save a new one)
- InMemorySnapshotStore: for tests
- FileSnapshotStore: one JSON document on local disk
- SqlSnapshotStore: key/value row in a SQL database via SQLAlchemy

Stores move opaque text. Parsing and shape checking live in the codec
(``dump_snapshot`` / ``parse_snapshot``) so the same document serves the
write-through after each mutation and the manual backup export/import.
"""

import json
from abc import ABC, abstractmethod
from pathlib import Path

from pydantic import ValidationError
from sqlalchemy import Column, MetaData, String, Table, Text, create_engine, select
from sqlalchemy.engine import Engine

from bedrock.models.snapshot import Snapshot


class SnapshotFormatError(ValueError):
    """Raised when a document does not parse into a Snapshot."""


# ---------------------------------------------------------------------------
# Codec
# ---------------------------------------------------------------------------


def dump_snapshot(snapshot: Snapshot) -> str:
    """Serialize a snapshot to the persisted JSON document."""
    return json.dumps(snapshot.to_document(), indent=2, ensure_ascii=False)


def parse_snapshot(document: str | bytes) -> Snapshot:
    """Parse a persisted JSON document into a Snapshot.

    Raises:
        SnapshotFormatError: if the document is not JSON or does not match
            the snapshot shape.
    """
    try:
        return Snapshot.model_validate_json(document)
    except ValidationError as exc:
        msg = f"Snapshot document does not match the expected shape: {exc.error_count()} error(s)"
        raise SnapshotFormatError(msg) from exc


# ---------------------------------------------------------------------------
# Stores
# ---------------------------------------------------------------------------


class SnapshotStore(ABC):
    """Abstract interface for snapshot persistence."""

    @abstractmethod
    def load(self) -> str | None:
        """Return the last saved document, or ``None`` if there is none."""

    @abstractmethod
    def save(self, document: str) -> None:
        """Persist a document, replacing the previous one."""


class InMemorySnapshotStore(SnapshotStore):
    """In-memory snapshot store for testing."""

    def __init__(self, document: str | None = None) -> None:
        self._document = document
        self.save_count = 0

    def load(self) -> str | None:
        return self._document

    def save(self, document: str) -> None:
        self._document = document
        self.save_count += 1


class FileSnapshotStore(SnapshotStore):
    """Keeps the snapshot document in a single UTF-8 JSON file."""

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> str | None:
        if not self._path.exists():
            return None
        return self._path.read_text(encoding="utf-8")

    def save(self, document: str) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self._path.with_suffix(self._path.suffix + ".tmp")
        tmp.write_text(document, encoding="utf-8")
        tmp.replace(self._path)


_metadata = MetaData()

snapshot_table = Table(
    "snapshots",
    _metadata,
    Column("key", String(100), primary_key=True),
    Column("document", Text, nullable=False),
)


class SqlSnapshotStore(SnapshotStore):
    """Keeps the snapshot document as one keyed row in a SQL table."""

    def __init__(self, url_or_engine: str | Engine, key: str = "bedrock_state") -> None:
        if isinstance(url_or_engine, str):
            self._engine = create_engine(url_or_engine)
        else:
            self._engine = url_or_engine
        self._key = key
        _metadata.create_all(self._engine)

    def load(self) -> str | None:
        with self._engine.connect() as conn:
            row = conn.execute(
                select(snapshot_table.c.document).where(snapshot_table.c.key == self._key)
            ).first()
        return row[0] if row is not None else None

    def save(self, document: str) -> None:
        with self._engine.begin() as conn:
            updated = conn.execute(
                snapshot_table.update()
                .where(snapshot_table.c.key == self._key)
                .values(document=document)
            )
            if updated.rowcount == 0:
                conn.execute(
                    snapshot_table.insert().values(key=self._key, document=document)
                )
