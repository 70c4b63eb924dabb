"""Mutation Engine — pure create/update/delete operations over a Snapshot.

Every operation takes a snapshot and returns a ``MutationResult`` holding a
new, complete snapshot; the input snapshot is never modified. Rules:

- add assigns a fresh id and appends to the collection.
- update merges the supplied fields over the existing record; fields not
  supplied are retained.
- delete filters the record out. Nothing else is removed: weak references
  to the deleted id elsewhere in the snapshot are left dangling.
- An update or delete whose target id does not resolve is a silent no-op:
  the same snapshot comes back with ``matched=False``.
- Threat and Assessment RPN is rewritten as likelihood x impact on every
  add and update.

Processes live nested inside their owning Department. Update and delete by
bare process id scan every department, an O(departments x processes) walk
that is fine at the tens-to-hundreds scale this store holds.
"""

import logging
from dataclasses import dataclass
from typing import Any, Mapping

from bedrock.metrics.calculator import compute_rpn
from bedrock.models.commands import ActionKind, EntityKind, MutationCommand
from bedrock.models.common import (
    BedrockBase,
    Collection,
    Outcome,
    TaskPhase,
    new_record_id,
)
from bedrock.models.entities import Department, DocFile, Process
from bedrock.models.snapshot import COLLECTION_MODELS, Snapshot

logger = logging.getLogger(__name__)


class UnknownCollectionError(KeyError):
    """Raised when a name does not denote a mutable top-level collection."""


@dataclass(frozen=True)
class MutationResult:
    """New snapshot plus the outcome label shown to the operator."""

    snapshot: Snapshot
    outcome: Outcome
    record_id: str | None = None
    matched: bool = True


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def resolve_collection(name: str | Collection) -> Collection:
    """Map a collection name to the ``Collection`` enum.

    Raises:
        UnknownCollectionError: if ``name`` is not a mutable collection.
    """
    try:
        return Collection(name)
    except ValueError:
        msg = f"Unknown collection: {name!r}"
        raise UnknownCollectionError(msg) from None


def _field_names(model_cls: type[BedrockBase], attributes: Mapping[str, Any]) -> dict[str, Any]:
    """Normalize payload keys to field names, accepting aliases too."""
    by_alias = {
        info.alias: name
        for name, info in model_cls.model_fields.items()
        if info.alias
    }
    return {by_alias.get(key, key): value for key, value in attributes.items()}


def _build(model_cls: type[BedrockBase], attributes: Mapping[str, Any]) -> BedrockBase:
    record = model_cls.model_validate(_field_names(model_cls, attributes))
    return _with_rpn(record)


def _merge(record: BedrockBase, patch: Mapping[str, Any]) -> BedrockBase:
    model_cls = type(record)
    changes = _field_names(model_cls, patch)
    if model_cls is Department:
        # Nested processes change only through the process operations.
        changes.pop("processes", None)
    merged = dict(record)
    merged.update(changes)
    merged["id"] = record.id
    return _with_rpn(model_cls.model_validate(merged))


def _with_rpn(record: BedrockBase) -> BedrockBase:
    if hasattr(record, "rpn") and hasattr(record, "likelihood"):
        rpn = compute_rpn(record.likelihood, record.impact)
        if record.rpn != rpn:
            return record.model_copy(update={"rpn": rpn})
    return record


def _not_found(snapshot: Snapshot, outcome: Outcome, kind: str, record_id: str) -> MutationResult:
    logger.debug("%s %s: no record with id %s", outcome.value, kind, record_id)
    return MutationResult(
        snapshot=snapshot, outcome=outcome, record_id=record_id, matched=False,
    )


# ---------------------------------------------------------------------------
# Generic collection mutations
# ---------------------------------------------------------------------------


def add_entity(
    snapshot: Snapshot,
    collection: str | Collection,
    attributes: Mapping[str, Any],
) -> MutationResult:
    """Append a new record with a fresh id. Any supplied ``id`` is replaced.

    No uniqueness or reference checks are made on the attributes.
    """
    coll = resolve_collection(collection)
    record_id = new_record_id()
    payload = dict(attributes)
    payload["id"] = record_id
    if coll is Collection.DEPARTMENTS:
        # A new department starts empty; processes are added with add_process.
        payload["processes"] = ()
    record = _build(COLLECTION_MODELS[coll], payload)
    return MutationResult(
        snapshot=snapshot.with_records(coll, snapshot.records(coll) + (record,)),
        outcome=Outcome.ADDED,
        record_id=record_id,
    )


def update_entity(
    snapshot: Snapshot,
    collection: str | Collection,
    record_id: str,
    patch: Mapping[str, Any],
) -> MutationResult:
    """Merge ``patch`` over the record with ``record_id``."""
    coll = resolve_collection(collection)
    records = snapshot.records(coll)
    for index, record in enumerate(records):
        if record.id == record_id:
            updated = _merge(record, patch)
            new_records = records[:index] + (updated,) + records[index + 1:]
            return MutationResult(
                snapshot=snapshot.with_records(coll, new_records),
                outcome=Outcome.UPDATED,
                record_id=record_id,
            )
    return _not_found(snapshot, Outcome.UPDATED, coll.value, record_id)


def delete_entity(
    snapshot: Snapshot,
    collection: str | Collection,
    record_id: str,
) -> MutationResult:
    """Filter out the record with ``record_id``. No cascade."""
    coll = resolve_collection(collection)
    records = snapshot.records(coll)
    remaining = tuple(r for r in records if r.id != record_id)
    if len(remaining) == len(records):
        return _not_found(snapshot, Outcome.DELETED, coll.value, record_id)
    return MutationResult(
        snapshot=snapshot.with_records(coll, remaining),
        outcome=Outcome.DELETED,
        record_id=record_id,
    )


# ---------------------------------------------------------------------------
# Nested processes
# ---------------------------------------------------------------------------


def add_process(
    snapshot: Snapshot,
    department_id: str,
    attributes: Mapping[str, Any],
) -> MutationResult:
    """Create a process under the given department.

    An unknown department id leaves the snapshot unchanged (``matched=False``).
    """
    process_id = new_record_id()
    payload = dict(attributes)
    payload["id"] = process_id
    process = _build(Process, payload)

    departments = snapshot.departments
    for index, dept in enumerate(departments):
        if dept.id == department_id:
            new_dept = dept.model_copy(update={"processes": dept.processes + (process,)})
            new_departments = departments[:index] + (new_dept,) + departments[index + 1:]
            return MutationResult(
                snapshot=snapshot.with_records(Collection.DEPARTMENTS, new_departments),
                outcome=Outcome.ADDED,
                record_id=process_id,
            )
    return _not_found(snapshot, Outcome.ADDED, "department", department_id)


def update_process(
    snapshot: Snapshot,
    process_id: str,
    patch: Mapping[str, Any],
) -> MutationResult:
    """Merge ``patch`` over the process with ``process_id``, wherever it lives."""
    new_departments = []
    matched = False
    for dept in snapshot.departments:
        if not matched and any(p.id == process_id for p in dept.processes):
            processes = tuple(
                _merge(p, patch) if p.id == process_id else p
                for p in dept.processes
            )
            dept = dept.model_copy(update={"processes": processes})
            matched = True
        new_departments.append(dept)

    if not matched:
        return _not_found(snapshot, Outcome.UPDATED, "process", process_id)
    return MutationResult(
        snapshot=snapshot.with_records(Collection.DEPARTMENTS, tuple(new_departments)),
        outcome=Outcome.UPDATED,
        record_id=process_id,
    )


def delete_process(snapshot: Snapshot, process_id: str) -> MutationResult:
    """Remove the process with ``process_id`` from whichever department owns it."""
    new_departments = []
    matched = False
    for dept in snapshot.departments:
        kept = tuple(p for p in dept.processes if p.id != process_id)
        if len(kept) != len(dept.processes):
            dept = dept.model_copy(update={"processes": kept})
            matched = True
        new_departments.append(dept)

    if not matched:
        return _not_found(snapshot, Outcome.DELETED, "process", process_id)
    return MutationResult(
        snapshot=snapshot.with_records(Collection.DEPARTMENTS, tuple(new_departments)),
        outcome=Outcome.DELETED,
        record_id=process_id,
    )


# ---------------------------------------------------------------------------
# Company, tasks, documents
# ---------------------------------------------------------------------------


def update_company(snapshot: Snapshot, patch: Mapping[str, Any]) -> MutationResult:
    company = snapshot.company
    merged = dict(company)
    merged.update(_field_names(type(company), patch))
    return MutationResult(
        snapshot=snapshot.model_copy(
            update={"company": type(company).model_validate(merged)},
        ),
        outcome=Outcome.UPDATED,
    )


def add_task(snapshot: Snapshot, phase: str | TaskPhase, text: str) -> MutationResult:
    """Append a task description to the end of a phase list."""
    phase = TaskPhase(phase)
    tasks = snapshot.tasks.for_phase(phase) + (text,)
    return MutationResult(
        snapshot=snapshot.model_copy(
            update={"tasks": snapshot.tasks.with_phase(phase, tasks)},
        ),
        outcome=Outcome.ADDED,
    )


def remove_task(snapshot: Snapshot, phase: str | TaskPhase, index: int) -> MutationResult:
    """Remove the task at ``index`` from a phase list, keeping the rest in order."""
    phase = TaskPhase(phase)
    tasks = snapshot.tasks.for_phase(phase)
    if not 0 <= index < len(tasks):
        return _not_found(snapshot, Outcome.DELETED, f"task[{phase.value}]", str(index))
    remaining = tasks[:index] + tasks[index + 1:]
    return MutationResult(
        snapshot=snapshot.model_copy(
            update={"tasks": snapshot.tasks.with_phase(phase, remaining)},
        ),
        outcome=Outcome.DELETED,
    )


def add_document(
    snapshot: Snapshot,
    folder_id: str | None,
    attributes: Mapping[str, Any],
) -> MutationResult:
    """Add a file record to a folder; no folder id means the first folder."""
    folders = snapshot.documents.folders
    if not folders:
        return _not_found(snapshot, Outcome.ADDED, "folder", folder_id or "")
    target_id = folder_id or folders[0].id

    file_id = new_record_id()
    payload = dict(attributes)
    payload["id"] = file_id
    doc = _build(DocFile, payload)

    for index, folder in enumerate(folders):
        if folder.id == target_id:
            new_folder = folder.model_copy(update={"files": folder.files + (doc,)})
            new_folders = folders[:index] + (new_folder,) + folders[index + 1:]
            return MutationResult(
                snapshot=snapshot.model_copy(update={
                    "documents": snapshot.documents.model_copy(
                        update={"folders": new_folders},
                    ),
                }),
                outcome=Outcome.ADDED,
                record_id=file_id,
            )
    return _not_found(snapshot, Outcome.ADDED, "folder", target_id)


def delete_document(snapshot: Snapshot, file_id: str) -> MutationResult:
    """Remove a file record from whichever folder holds it."""
    new_folders = []
    matched = False
    for folder in snapshot.documents.folders:
        kept = tuple(f for f in folder.files if f.id != file_id)
        if len(kept) != len(folder.files):
            folder = folder.model_copy(update={"files": kept})
            matched = True
        new_folders.append(folder)

    if not matched:
        return _not_found(snapshot, Outcome.DELETED, "document", file_id)
    return MutationResult(
        snapshot=snapshot.model_copy(update={
            "documents": snapshot.documents.model_copy(
                update={"folders": tuple(new_folders)},
            ),
        }),
        outcome=Outcome.DELETED,
        record_id=file_id,
    )


# ---------------------------------------------------------------------------
# Command dispatch
# ---------------------------------------------------------------------------


def apply_command(snapshot: Snapshot, command: MutationCommand) -> MutationResult:
    """Dispatch a ``MutationCommand`` to the matching mutation."""
    attrs = command.attributes
    match (command.entity, command.action):
        case (EntityKind.PROCESSES, ActionKind.ADD):
            return add_process(snapshot, command.parent_id, attrs)
        case (EntityKind.PROCESSES, ActionKind.UPDATE):
            return update_process(snapshot, command.target_id, attrs)
        case (EntityKind.PROCESSES, ActionKind.DELETE):
            return delete_process(snapshot, command.target_id)
        case (EntityKind.DOCUMENTS, ActionKind.ADD):
            return add_document(snapshot, command.parent_id, attrs)
        case (EntityKind.DOCUMENTS, ActionKind.DELETE):
            return delete_document(snapshot, command.target_id)
        case (EntityKind.TASKS, ActionKind.ADD):
            return add_task(snapshot, command.parent_id, attrs.get("text", ""))
        case (EntityKind.TASKS, ActionKind.DELETE):
            return remove_task(snapshot, command.parent_id, command.index)
        case (EntityKind.COMPANY, ActionKind.UPDATE):
            return update_company(snapshot, attrs)
        case (entity, ActionKind.ADD) if entity.collection is not None:
            return add_entity(snapshot, entity.collection, attrs)
        case (entity, ActionKind.UPDATE) if entity.collection is not None:
            return update_entity(snapshot, entity.collection, command.target_id, attrs)
        case (entity, ActionKind.DELETE) if entity.collection is not None:
            return delete_entity(snapshot, entity.collection, command.target_id)
        case (entity, action):
            msg = f"Unsupported command: {action.value} {entity.value}"
            raise ValueError(msg)
