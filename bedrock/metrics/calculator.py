"""Derived Metrics Calculator — pure projections over a Snapshot.

Counts, distributions, the 5x5 risk matrix, severity banding and top-N
ranking for the dashboard and list views. Nothing is cached: every call
recomputes from the snapshot it is given.

Two severity scales exist, one per view:
- threat list:   RPN >= 15 Critical, >= 8 High, else Medium
- dashboard top: RPN >= 15 Critical, >= 10 High, else Medium
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import date

from bedrock.models.common import RtoBucket, SeverityBand
from bedrock.models.entities import CriticalDate, Process, Threat
from bedrock.models.snapshot import Snapshot

RISK_SCALE = range(1, 6)
TOP_RISK_COUNT = 5


# ---------------------------------------------------------------------------
# RPN and banding
# ---------------------------------------------------------------------------


def compute_rpn(likelihood: int, impact: int) -> int:
    """Risk Priority Number: likelihood x impact (each 1-5, result 1-25)."""
    return likelihood * impact


def threat_severity_band(rpn: int) -> SeverityBand:
    """Band used by the threat register list."""
    if rpn >= 15:
        return SeverityBand.CRITICAL
    if rpn >= 8:
        return SeverityBand.HIGH
    return SeverityBand.MEDIUM


def dashboard_severity_band(rpn: int) -> SeverityBand:
    """Band used by the dashboard top-risks panel."""
    if rpn >= 15:
        return SeverityBand.CRITICAL
    if rpn >= 10:
        return SeverityBand.HIGH
    return SeverityBand.MEDIUM


def rank_by_rpn(threats: Iterable[Threat]) -> list[Threat]:
    """Sort by RPN descending; equal RPNs keep their stored order."""
    return sorted(threats, key=lambda t: t.rpn, reverse=True)


def top_risks(snapshot: Snapshot, n: int = TOP_RISK_COUNT) -> list[Threat]:
    return rank_by_rpn(snapshot.threats)[:n]


# ---------------------------------------------------------------------------
# Counts and distributions
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ProcessRow:
    """A process flattened out of its department for table views."""

    process: Process
    department_id: str
    department_name: str


@dataclass(frozen=True)
class DepartmentProcessCount:
    department_id: str
    department_name: str
    process_count: int
    same_day_count: int


def all_processes(snapshot: Snapshot) -> list[ProcessRow]:
    """Every process with its owning department, department order first."""
    return [
        ProcessRow(process=p, department_id=d.id, department_name=d.name)
        for d in snapshot.departments
        for p in d.processes
    ]


def critical_vendor_count(snapshot: Snapshot) -> int:
    return sum(1 for v in snapshot.vendors if v.critical)


def open_issue_count(snapshot: Snapshot) -> int:
    return sum(1 for i in snapshot.issues if i.status == "Open")


def process_counts_by_department(snapshot: Snapshot) -> list[DepartmentProcessCount]:
    return [
        DepartmentProcessCount(
            department_id=d.id,
            department_name=d.name,
            process_count=len(d.processes),
            same_day_count=sum(1 for p in d.processes if p.rto == RtoBucket.SAME_DAY),
        )
        for d in snapshot.departments
    ]


def critical_process_count_by_department(snapshot: Snapshot) -> dict[str, int]:
    """Department id -> number of its processes with a "Same Day" RTO."""
    return {c.department_id: c.same_day_count for c in process_counts_by_department(snapshot)}


def rto_bucket_counts(snapshot: Snapshot) -> dict[RtoBucket, int]:
    """Process count per RTO bucket. Non-bucket RTO values are not counted."""
    counts = {bucket: 0 for bucket in RtoBucket}
    for row in all_processes(snapshot):
        if row.process.rto in counts:
            counts[RtoBucket(row.process.rto)] += 1
    return counts


def threat_counts_by_category(snapshot: Snapshot) -> dict[str, int]:
    """Threat count per category, categories in first-seen order."""
    counts: dict[str, int] = {}
    for threat in snapshot.threats:
        counts[threat.category] = counts.get(threat.category, 0) + 1
    return counts


def risk_matrix(snapshot: Snapshot) -> list[list[int]]:
    """5x5 grid of threat counts: ``matrix[likelihood - 1][impact - 1]``.

    Threats whose factors fall outside 1-5 have no cell and are skipped.
    """
    matrix = [[0 for _ in RISK_SCALE] for _ in RISK_SCALE]
    for threat in snapshot.threats:
        if threat.likelihood in RISK_SCALE and threat.impact in RISK_SCALE:
            matrix[threat.likelihood - 1][threat.impact - 1] += 1
    return matrix


# ---------------------------------------------------------------------------
# Critical dates
# ---------------------------------------------------------------------------


def critical_dates_chronological(snapshot: Snapshot) -> list[CriticalDate]:
    """Critical dates ordered by ISO date string (stable for equal dates)."""
    return sorted(snapshot.critical_dates, key=lambda cd: cd.date)


def critical_dates_in_month(snapshot: Snapshot, year: int, month: int) -> list[CriticalDate]:
    """Critical dates falling in the given month; unparseable dates are skipped."""
    found = []
    for cd in critical_dates_chronological(snapshot):
        try:
            day = date.fromisoformat(cd.date)
        except ValueError:
            continue
        if day.year == year and day.month == month:
            found.append(cd)
    return found


# ---------------------------------------------------------------------------
# Dashboard
# ---------------------------------------------------------------------------


@dataclass
class TopRisk:
    threat_id: str
    name: str
    category: str
    rpn: int
    band: SeverityBand


@dataclass
class DashboardSummary:
    """Aggregated dashboard data."""

    department_count: int
    process_count: int
    critical_vendor_count: int
    threat_count: int
    open_issue_count: int
    incident_count: int
    rto_buckets: dict[str, int]
    departments: list[DepartmentProcessCount] = field(default_factory=list)
    top_risks: list[TopRisk] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "department_count": self.department_count,
            "process_count": self.process_count,
            "critical_vendor_count": self.critical_vendor_count,
            "threat_count": self.threat_count,
            "open_issue_count": self.open_issue_count,
            "incident_count": self.incident_count,
            "rto_buckets": dict(self.rto_buckets),
            "departments": [
                {
                    "department_id": d.department_id,
                    "department_name": d.department_name,
                    "process_count": d.process_count,
                    "same_day_count": d.same_day_count,
                }
                for d in self.departments
            ],
            "top_risks": [
                {
                    "threat_id": r.threat_id,
                    "name": r.name,
                    "category": r.category,
                    "rpn": r.rpn,
                    "band": r.band.value,
                }
                for r in self.top_risks
            ],
        }


def dashboard_summary(snapshot: Snapshot) -> DashboardSummary:
    return DashboardSummary(
        department_count=len(snapshot.departments),
        process_count=len(all_processes(snapshot)),
        critical_vendor_count=critical_vendor_count(snapshot),
        threat_count=len(snapshot.threats),
        open_issue_count=open_issue_count(snapshot),
        incident_count=len(snapshot.incidents),
        rto_buckets={b.value: n for b, n in rto_bucket_counts(snapshot).items()},
        departments=process_counts_by_department(snapshot),
        top_risks=[
            TopRisk(
                threat_id=t.id,
                name=t.name,
                category=t.category,
                rpn=t.rpn,
                band=dashboard_severity_band(t.rpn),
            )
            for t in top_risks(snapshot)
        ],
    )


def ranked_threat_bands(threats: Sequence[Threat]) -> list[tuple[Threat, SeverityBand]]:
    """Threat register rows: ranked by RPN with the list-view band."""
    return [(t, threat_severity_band(t.rpn)) for t in rank_by_rpn(threats)]
