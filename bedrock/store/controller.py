"""SnapshotController — owner of the single current snapshot.

Loads the persisted snapshot once at construction (falling back to the seed
when it is absent or does not parse), applies mutations by swapping in the
new snapshot the engine returns, writes every changed snapshot through to
the store, and notifies subscribers.

Single-threaded: a mutation runs to completion before the new snapshot is
published, and readers holding an earlier snapshot keep a consistent view.
Persistence write failures are logged and never surfaced; the in-memory
snapshot stays authoritative for the rest of the session.
"""

import logging
from collections.abc import Callable
from typing import Any, Mapping

from bedrock.models.commands import MutationCommand
from bedrock.models.common import Collection, TaskPhase
from bedrock.models.snapshot import Snapshot
from bedrock.store import mutations
from bedrock.store.mutations import MutationResult
from bedrock.store.persistence import (
    SnapshotFormatError,
    SnapshotStore,
    dump_snapshot,
    parse_snapshot,
)
from bedrock.store.seed import make_seed

logger = logging.getLogger(__name__)

SnapshotListener = Callable[[Snapshot], None]


def load_or_seed(store: SnapshotStore) -> Snapshot:
    """Load the persisted snapshot, or the seed if there is no usable one."""
    try:
        document = store.load()
    except Exception:
        logger.warning("Snapshot store could not be read; starting from seed", exc_info=True)
        return make_seed()

    if document is None:
        logger.info("No persisted snapshot; starting from seed")
        return make_seed()

    try:
        return parse_snapshot(document)
    except SnapshotFormatError as exc:
        logger.warning("Persisted snapshot rejected (%s); starting from seed", exc)
        return make_seed()


class SnapshotController:
    """Hold the current snapshot and route mutations through the engine."""

    def __init__(self, store: SnapshotStore) -> None:
        self._store = store
        self._snapshot = load_or_seed(store)
        self._listeners: list[SnapshotListener] = []

    @property
    def snapshot(self) -> Snapshot:
        return self._snapshot

    def subscribe(self, listener: SnapshotListener) -> Callable[[], None]:
        """Register a "snapshot changed" callback; returns an unsubscribe function."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def add_entity(self, collection: str | Collection, attributes: Mapping[str, Any]) -> MutationResult:
        return self._commit(mutations.add_entity(self._snapshot, collection, attributes))

    def update_entity(
        self, collection: str | Collection, record_id: str, patch: Mapping[str, Any],
    ) -> MutationResult:
        return self._commit(mutations.update_entity(self._snapshot, collection, record_id, patch))

    def delete_entity(self, collection: str | Collection, record_id: str) -> MutationResult:
        return self._commit(mutations.delete_entity(self._snapshot, collection, record_id))

    def add_process(self, department_id: str, attributes: Mapping[str, Any]) -> MutationResult:
        return self._commit(mutations.add_process(self._snapshot, department_id, attributes))

    def update_process(self, process_id: str, patch: Mapping[str, Any]) -> MutationResult:
        return self._commit(mutations.update_process(self._snapshot, process_id, patch))

    def delete_process(self, process_id: str) -> MutationResult:
        return self._commit(mutations.delete_process(self._snapshot, process_id))

    def update_company(self, patch: Mapping[str, Any]) -> MutationResult:
        return self._commit(mutations.update_company(self._snapshot, patch))

    def add_task(self, phase: str | TaskPhase, text: str) -> MutationResult:
        return self._commit(mutations.add_task(self._snapshot, phase, text))

    def remove_task(self, phase: str | TaskPhase, index: int) -> MutationResult:
        return self._commit(mutations.remove_task(self._snapshot, phase, index))

    def add_document(self, folder_id: str | None, attributes: Mapping[str, Any]) -> MutationResult:
        return self._commit(mutations.add_document(self._snapshot, folder_id, attributes))

    def delete_document(self, file_id: str) -> MutationResult:
        return self._commit(mutations.delete_document(self._snapshot, file_id))

    def apply(self, command: MutationCommand) -> MutationResult:
        """Apply a tagged mutation command against the current snapshot."""
        return self._commit(mutations.apply_command(self._snapshot, command))

    def restore(self, snapshot: Snapshot) -> None:
        """Replace the current snapshot wholesale (backup import, reset)."""
        self._publish(snapshot)

    def reset_to_seed(self) -> None:
        self._publish(make_seed())

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _commit(self, result: MutationResult) -> MutationResult:
        if result.matched:
            self._publish(result.snapshot)
        return result

    def _publish(self, snapshot: Snapshot) -> None:
        self._snapshot = snapshot
        self._write_through(snapshot)
        for listener in list(self._listeners):
            listener(snapshot)

    def _write_through(self, snapshot: Snapshot) -> None:
        try:
            self._store.save(dump_snapshot(snapshot))
        except Exception:
            logger.warning("Snapshot write failed; keeping in-memory snapshot", exc_info=True)
