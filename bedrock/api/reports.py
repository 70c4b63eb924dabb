"""FastAPI report and backup endpoints.

GET  /v1/reports/bcp   — plain-text BCP report download
GET  /v1/backup        — snapshot document download
POST /v1/backup        — restore from a snapshot document
POST /v1/reset         — replace all data with the seed
"""

import logging
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Request, Response

from bedrock.api.dependencies import get_controller, require_mutate, require_view
from bedrock.config.settings import Settings, get_settings
from bedrock.reports.generator import backup_filename, generate_report, report_filename
from bedrock.store.controller import SnapshotController
from bedrock.store.persistence import SnapshotFormatError, dump_snapshot, parse_snapshot

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1", tags=["reports"])


def _attachment(filename: str) -> dict[str, str]:
    return {"Content-Disposition": f'attachment; filename="{filename}"'}


@router.get("/reports/bcp", dependencies=[Depends(require_view("reports"))])
async def download_report(
    controller: SnapshotController = Depends(get_controller),
    settings: Settings = Depends(get_settings),
) -> Response:
    snapshot = controller.snapshot
    filename = report_filename(
        snapshot.company.name, date.today(), tool_name=settings.REPORT_TOOL_NAME,
    )
    return Response(
        content=generate_report(snapshot).encode("utf-8"),
        media_type="text/plain; charset=utf-8",
        headers=_attachment(filename),
    )


@router.get("/backup", dependencies=[Depends(require_view("settings"))])
async def download_backup(
    controller: SnapshotController = Depends(get_controller),
) -> Response:
    return Response(
        content=dump_snapshot(controller.snapshot).encode("utf-8"),
        media_type="application/json",
        headers=_attachment(backup_filename(date.today())),
    )


@router.post("/backup", dependencies=[Depends(require_mutate)])
async def restore_backup(
    request: Request,
    controller: SnapshotController = Depends(get_controller),
) -> dict:
    try:
        snapshot = parse_snapshot(await request.body())
    except SnapshotFormatError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    controller.restore(snapshot)
    logger.info("Snapshot restored from backup")
    return {"outcome": "restored"}


@router.post("/reset", dependencies=[Depends(require_mutate)])
async def reset_data(
    controller: SnapshotController = Depends(get_controller),
) -> dict:
    controller.reset_to_seed()
    logger.info("Snapshot reset to seed")
    return {"outcome": "reset"}
