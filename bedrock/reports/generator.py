"""BCP report generator — snapshot to plain-text document.

Deterministic: the same snapshot always renders byte-identical text. The
body carries no timestamps, and records appear in stored collection order;
callers wanting another order sort before generating.

Weak references are resolved to names when they still point at a record
and otherwise printed as the raw stored value.
"""

import re
from datetime import date

from bedrock.metrics.calculator import threat_severity_band
from bedrock.models.common import TASK_PHASE_LABELS, TaskPhase
from bedrock.models.snapshot import Snapshot

RULE = "=" * 64
SUBRULE = "-" * 64

_UNSAFE_FILENAME_CHARS = re.compile(r"[\s/\\]")


def report_filename(company_name: str, on_date: date, tool_name: str = "BCP") -> str:
    """``<tool>_<company>_<YYYY-MM-DD>.txt`` with whitespace and path
    separators in the company name replaced by underscores."""
    safe = _UNSAFE_FILENAME_CHARS.sub("_", company_name)
    return f"{tool_name}_{safe}_{on_date.isoformat()}.txt"


def backup_filename(on_date: date) -> str:
    return f"bedrock_backup_{on_date.isoformat()}.json"


def _money(value: float) -> str:
    return f"${value:,.0f}"


def _or_dash(value: str) -> str:
    return value if value else "-"


class _Lookup:
    """Name resolution for weak references inside one snapshot."""

    def __init__(self, snapshot: Snapshot) -> None:
        self._users = {u.id: u.full_name for u in snapshot.users}
        self._departments = {d.id: d.name for d in snapshot.departments}
        self._processes = {
            p.id: p.name for d in snapshot.departments for p in d.processes
        }

    def user(self, user_id: str) -> str:
        return self._users.get(user_id) or user_id

    def department(self, department_id: str) -> str:
        return self._departments.get(department_id) or department_id

    def process(self, process_id: str) -> str:
        return self._processes.get(process_id) or process_id


def _section(lines: list[str], title: str) -> None:
    lines.append("")
    lines.append(title)
    lines.append(SUBRULE)


def generate_report(snapshot: Snapshot) -> str:
    """Render the full BCP report for ``snapshot``."""
    names = _Lookup(snapshot)
    company = snapshot.company
    lines: list[str] = [
        RULE,
        "BUSINESS CONTINUITY PLAN",
        company.name,
        RULE,
    ]

    _section(lines, "COMPANY PROFILE")
    city_line = " ".join(
        part for part in (f"{company.city}," if company.city else "", company.state, company.zip) if part
    )
    lines.append(f"Name: {company.name}")
    lines.append(f"Address: {company.address}" + (f", {city_line}" if city_line else ""))
    lines.append(f"Phone: {_or_dash(company.phone)}")
    lines.append(f"Industry: {_or_dash(company.industry)}")
    lines.append(f"Employees: {company.employees}")
    lines.append(f"Fiscal Year Start: {_or_dash(company.fiscal_start)}")

    _section(lines, "DEPARTMENTS & PROCESSES")
    if not snapshot.departments:
        lines.append("(none)")
    for dept in snapshot.departments:
        lines.append(
            f"{dept.name} (Lead: {names.user(dept.lead)}, Headcount: {dept.headcount})"
        )
        if not dept.processes:
            lines.append("  (no processes)")
        for proc in dept.processes:
            lines.append(f"  - {proc.name} [{_or_dash(proc.priority)}]")
            lines.append(f"      RTO: {_or_dash(proc.rto)} | RPO: {_or_dash(proc.rpo)} | MTD: {_or_dash(proc.mtd)}")
            lines.append(f"      Strategy: {_or_dash(proc.strategy)}")
            lines.append(f"      Dependencies: {', '.join(proc.dependencies) or '-'}")
            lines.append(f"      Workaround: {_or_dash(proc.workaround)}")

    _section(lines, "BUSINESS IMPACT ANALYSIS")
    if not snapshot.bia:
        lines.append("(none)")
    for entry in snapshot.bia:
        lines.append(
            f"{names.department(entry.department_id)} / {names.process(entry.process_id)}"
        )
        lines.append(f"  Financial Impact: {_money(entry.financial_impact)}")
        lines.append(
            f"  Operational: {_or_dash(entry.operational_impact)}"
            f" | Reputational: {_or_dash(entry.reputational_impact)}"
            f" | Regulatory: {_or_dash(entry.regulatory_impact)}"
        )
        if entry.notes:
            lines.append(f"  Notes: {entry.notes}")

    _section(lines, "THREAT ASSESSMENT")
    if not snapshot.threats:
        lines.append("(none)")
    for threat in snapshot.threats:
        band = threat_severity_band(threat.rpn)
        lines.append(
            f"{threat.name} ({_or_dash(threat.category)}) - "
            f"L{threat.likelihood} x I{threat.impact} = RPN {threat.rpn} "
            f"[{band.value}] trend: {_or_dash(threat.trend)}"
        )

    _section(lines, "VENDORS")
    if not snapshot.vendors:
        lines.append("(none)")
    for vendor in snapshot.vendors:
        flag = " [CRITICAL]" if vendor.critical else ""
        lines.append(f"{vendor.name}{flag}")
        lines.append(f"  SLA: {_or_dash(vendor.sla)} | Contract ends: {_or_dash(vendor.contract)}")
        lines.append(
            f"  Contact: {_or_dash(vendor.contact)} | {_or_dash(vendor.phone)} | {_or_dash(vendor.email)}"
        )

    _section(lines, "RISK ASSESSMENTS")
    if not snapshot.assessments:
        lines.append("(none)")
    for assessment in snapshot.assessments:
        lines.append(
            f"{assessment.name} [{_or_dash(assessment.status)}] - RPN {assessment.rpn}"
            f" (L{assessment.likelihood} x I{assessment.impact})"
        )
        lines.append(
            f"  Reviewer: {_or_dash(names.user(assessment.reviewer))} | Date: {_or_dash(assessment.date)}"
        )
        lines.append(f"  Mitigation: {_or_dash(assessment.mitigation)}")

    _section(lines, "TRAINING & EXERCISES")
    if not snapshot.training:
        lines.append("(none)")
    for training in snapshot.training:
        lines.append(
            f"{training.name} ({_or_dash(training.type)}, {_or_dash(training.frequency)})"
            f" [{_or_dash(training.status)}]"
        )
        lines.append(
            f"  Last: {_or_dash(training.last)} | Next: {_or_dash(training.next)}"
            f" | Attendees: {len(training.attendees)}"
        )

    _section(lines, "CRITICAL DATES")
    if not snapshot.critical_dates:
        lines.append("(none)")
    for cd in snapshot.critical_dates:
        lines.append(
            f"{_or_dash(cd.date)}  {cd.name} ({_or_dash(cd.department)}, {_or_dash(cd.type)})"
        )

    _section(lines, "RECOVERY TASKS")
    for phase in TaskPhase:
        lines.append(f"{TASK_PHASE_LABELS[phase]}:")
        tasks = snapshot.tasks.for_phase(phase)
        if not tasks:
            lines.append("  (none)")
        for number, task in enumerate(tasks, start=1):
            lines.append(f"  {number}. {task}")

    lines.append("")
    lines.append(RULE)
    lines.append("END OF REPORT")
    lines.append(RULE)
    return "\n".join(lines) + "\n"
