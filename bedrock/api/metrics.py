"""FastAPI derived-metric endpoints.

GET /v1/metrics/dashboard        — dashboard summary
GET /v1/metrics/risk-matrix      — 5x5 threat count grid + category counts
GET /v1/metrics/threats          — threat register ranked by RPN with band
GET /v1/metrics/processes        — flattened process table
GET /v1/metrics/critical-dates   — chronological critical dates (optional month)

Read-only and recomputed on every request.
"""

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from bedrock.api.dependencies import get_controller, require_view
from bedrock.metrics import calculator
from bedrock.store.controller import SnapshotController

router = APIRouter(prefix="/v1/metrics", tags=["metrics"])


class RiskMatrixResponse(BaseModel):
    matrix: list[list[int]]
    categories: dict[str, int]


class ThreatRow(BaseModel):
    id: str
    name: str
    category: str
    likelihood: int
    impact: int
    rpn: int
    band: str
    trend: str


class ProcessRowOut(BaseModel):
    id: str
    name: str
    priority: str
    rto: str
    department_id: str
    department_name: str


@router.get("/dashboard", dependencies=[Depends(require_view("dashboard"))])
async def get_dashboard(
    controller: SnapshotController = Depends(get_controller),
) -> dict:
    return calculator.dashboard_summary(controller.snapshot).to_dict()


@router.get(
    "/risk-matrix",
    response_model=RiskMatrixResponse,
    dependencies=[Depends(require_view("threats"))],
)
async def get_risk_matrix(
    controller: SnapshotController = Depends(get_controller),
) -> RiskMatrixResponse:
    snapshot = controller.snapshot
    return RiskMatrixResponse(
        matrix=calculator.risk_matrix(snapshot),
        categories=calculator.threat_counts_by_category(snapshot),
    )


@router.get(
    "/threats",
    response_model=list[ThreatRow],
    dependencies=[Depends(require_view("threats"))],
)
async def get_ranked_threats(
    controller: SnapshotController = Depends(get_controller),
) -> list[ThreatRow]:
    return [
        ThreatRow(
            id=t.id,
            name=t.name,
            category=t.category,
            likelihood=t.likelihood,
            impact=t.impact,
            rpn=t.rpn,
            band=band.value,
            trend=t.trend,
        )
        for t, band in calculator.ranked_threat_bands(controller.snapshot.threats)
    ]


@router.get(
    "/processes",
    response_model=list[ProcessRowOut],
    dependencies=[Depends(require_view("processes"))],
)
async def get_processes(
    controller: SnapshotController = Depends(get_controller),
) -> list[ProcessRowOut]:
    return [
        ProcessRowOut(
            id=row.process.id,
            name=row.process.name,
            priority=row.process.priority,
            rto=row.process.rto,
            department_id=row.department_id,
            department_name=row.department_name,
        )
        for row in calculator.all_processes(controller.snapshot)
    ]


@router.get("/critical-dates", dependencies=[Depends(require_view("calendar"))])
async def get_critical_dates(
    year: int | None = Query(default=None),
    month: int | None = Query(default=None, ge=1, le=12),
    controller: SnapshotController = Depends(get_controller),
) -> list[dict]:
    snapshot = controller.snapshot
    if year is not None and month is not None:
        dates = calculator.critical_dates_in_month(snapshot, year, month)
    else:
        dates = calculator.critical_dates_chronological(snapshot)
    return [cd.to_document() for cd in dates]
