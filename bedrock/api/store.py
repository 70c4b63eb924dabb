"""FastAPI record endpoints — the mutation call surface.

GET    /v1/snapshot                               — full current snapshot
GET    /v1/collections/{collection}               — list one collection
GET    /v1/equipment-types                        — equipment type choices
POST   /v1/collections/{collection}               — add record
PATCH  /v1/collections/{collection}/{record_id}   — update record (partial)
DELETE /v1/collections/{collection}/{record_id}   — delete record (no cascade)

POST   /v1/departments/{department_id}/processes  — add process
PATCH  /v1/processes/{process_id}                 — update process
DELETE /v1/processes/{process_id}                 — delete process

PATCH  /v1/company                                — update company profile
POST   /v1/tasks/{phase}                          — append recovery task
DELETE /v1/tasks/{phase}/{index}                  — remove recovery task
POST   /v1/documents                              — add document file
DELETE /v1/documents/{file_id}                    — delete document file
POST   /v1/commands                               — apply a MutationCommand

Every mutation answers with the outcome label and ``matched``; a target id
that does not resolve is not an error (``matched`` is false).
"""

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException
from pydantic import BaseModel, ValidationError

from bedrock.access.gate import can_view
from bedrock.api.dependencies import (
    get_controller,
    get_operator_role,
    require_mutate,
    require_view,
)
from bedrock.models.commands import MutationCommand
from bedrock.models.common import Collection, TaskPhase
from bedrock.store.controller import SnapshotController
from bedrock.store.mutations import MutationResult, UnknownCollectionError, resolve_collection
from bedrock.store.seed import EQUIPMENT_TYPES

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1", tags=["store"])

# Collection name -> permission section id, where they differ.
_SECTION_FOR_COLLECTION: dict[Collection, str] = {
    Collection.CRITICAL_DATES: "critdates",
    Collection.CUSTOM_QUESTIONS: "custom_questions",
}


# ---------------------------------------------------------------------------
# Request / Response schemas
# ---------------------------------------------------------------------------


class MutationResponse(BaseModel):
    outcome: str
    record_id: str | None = None
    matched: bool


class AddTaskRequest(BaseModel):
    text: str


class AddDocumentRequest(BaseModel):
    folder_id: str | None = None
    name: str = ""
    size: str = "N/A"
    author: str = ""


def _respond(result: MutationResult) -> MutationResponse:
    return MutationResponse(
        outcome=result.outcome.value,
        record_id=result.record_id,
        matched=result.matched,
    )


def _collection_or_404(name: str) -> Collection:
    try:
        return resolve_collection(name)
    except UnknownCollectionError:
        raise HTTPException(status_code=404, detail=f"Unknown collection {name!r}.") from None


def _run(fn, *args) -> MutationResponse:
    try:
        return _respond(fn(*args))
    except ValidationError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc


# ---------------------------------------------------------------------------
# Reads
# ---------------------------------------------------------------------------


@router.get("/snapshot", dependencies=[Depends(require_view("dashboard"))])
async def get_snapshot(
    controller: SnapshotController = Depends(get_controller),
) -> dict:
    return controller.snapshot.to_document()


@router.get("/collections/{collection}")
async def list_collection(
    collection: str,
    role: str = Depends(get_operator_role),
    controller: SnapshotController = Depends(get_controller),
) -> list[dict]:
    coll = _collection_or_404(collection)
    section = _SECTION_FOR_COLLECTION.get(coll, coll.value)
    if not can_view(role, section):
        raise HTTPException(status_code=403, detail=f"Role {role!r} may not view {section}.")
    return [record.to_document() for record in controller.snapshot.records(coll)]


@router.get("/equipment-types", dependencies=[Depends(require_view("equipment"))])
async def list_equipment_types() -> list[str]:
    return list(EQUIPMENT_TYPES)


# ---------------------------------------------------------------------------
# Generic collection mutations
# ---------------------------------------------------------------------------


@router.post(
    "/collections/{collection}",
    status_code=201,
    response_model=MutationResponse,
    dependencies=[Depends(require_mutate)],
)
async def add_record(
    collection: str,
    attributes: dict[str, Any] = Body(...),
    controller: SnapshotController = Depends(get_controller),
) -> MutationResponse:
    coll = _collection_or_404(collection)
    return _run(controller.add_entity, coll, attributes)


@router.patch(
    "/collections/{collection}/{record_id}",
    response_model=MutationResponse,
    dependencies=[Depends(require_mutate)],
)
async def update_record(
    collection: str,
    record_id: str,
    patch: dict[str, Any] = Body(...),
    controller: SnapshotController = Depends(get_controller),
) -> MutationResponse:
    coll = _collection_or_404(collection)
    return _run(controller.update_entity, coll, record_id, patch)


@router.delete(
    "/collections/{collection}/{record_id}",
    response_model=MutationResponse,
    dependencies=[Depends(require_mutate)],
)
async def delete_record(
    collection: str,
    record_id: str,
    controller: SnapshotController = Depends(get_controller),
) -> MutationResponse:
    coll = _collection_or_404(collection)
    return _run(controller.delete_entity, coll, record_id)


# ---------------------------------------------------------------------------
# Processes
# ---------------------------------------------------------------------------


@router.post(
    "/departments/{department_id}/processes",
    status_code=201,
    response_model=MutationResponse,
    dependencies=[Depends(require_mutate)],
)
async def add_process(
    department_id: str,
    attributes: dict[str, Any] = Body(...),
    controller: SnapshotController = Depends(get_controller),
) -> MutationResponse:
    return _run(controller.add_process, department_id, attributes)


@router.patch(
    "/processes/{process_id}",
    response_model=MutationResponse,
    dependencies=[Depends(require_mutate)],
)
async def update_process(
    process_id: str,
    patch: dict[str, Any] = Body(...),
    controller: SnapshotController = Depends(get_controller),
) -> MutationResponse:
    return _run(controller.update_process, process_id, patch)


@router.delete(
    "/processes/{process_id}",
    response_model=MutationResponse,
    dependencies=[Depends(require_mutate)],
)
async def delete_process(
    process_id: str,
    controller: SnapshotController = Depends(get_controller),
) -> MutationResponse:
    return _run(controller.delete_process, process_id)


# ---------------------------------------------------------------------------
# Company, tasks, documents
# ---------------------------------------------------------------------------


@router.patch(
    "/company",
    response_model=MutationResponse,
    dependencies=[Depends(require_mutate)],
)
async def update_company(
    patch: dict[str, Any] = Body(...),
    controller: SnapshotController = Depends(get_controller),
) -> MutationResponse:
    return _run(controller.update_company, patch)


@router.post(
    "/tasks/{phase}",
    status_code=201,
    response_model=MutationResponse,
    dependencies=[Depends(require_mutate)],
)
async def add_task(
    phase: TaskPhase,
    body: AddTaskRequest,
    controller: SnapshotController = Depends(get_controller),
) -> MutationResponse:
    return _run(controller.add_task, phase, body.text)


@router.delete(
    "/tasks/{phase}/{index}",
    response_model=MutationResponse,
    dependencies=[Depends(require_mutate)],
)
async def remove_task(
    phase: TaskPhase,
    index: int,
    controller: SnapshotController = Depends(get_controller),
) -> MutationResponse:
    return _run(controller.remove_task, phase, index)


@router.post(
    "/documents",
    status_code=201,
    response_model=MutationResponse,
    dependencies=[Depends(require_mutate)],
)
async def add_document(
    body: AddDocumentRequest,
    controller: SnapshotController = Depends(get_controller),
) -> MutationResponse:
    attributes = body.model_dump(exclude={"folder_id"})
    return _run(controller.add_document, body.folder_id, attributes)


@router.delete(
    "/documents/{file_id}",
    response_model=MutationResponse,
    dependencies=[Depends(require_mutate)],
)
async def delete_document(
    file_id: str,
    controller: SnapshotController = Depends(get_controller),
) -> MutationResponse:
    return _run(controller.delete_document, file_id)


@router.post(
    "/commands",
    response_model=MutationResponse,
    dependencies=[Depends(require_mutate)],
)
async def apply_command(
    command: MutationCommand,
    controller: SnapshotController = Depends(get_controller),
) -> MutationResponse:
    logger.debug("Applying %s %s", command.action.value, command.entity.value)
    return _run(controller.apply, command)
