"""Record models for every entity held in a Bedrock snapshot.

Each model is frozen and forbids unknown keys. Field defaults mirror what
the planning forms submit when a field is left blank, so partially-filled
records are accepted as-is. Weak references (user, department, process and
vendor ids embedded in other records) are plain strings and are never
checked to resolve.
"""

from pydantic import Field

from bedrock.models.common import BedrockBase, today_iso


class Role(BedrockBase):
    """Static role catalog entry. A permission token equal to a section id
    grants edit capability; ``<section>_view`` grants read-only capability."""

    id: str
    label: str
    permissions: tuple[str, ...] = Field(default=(), alias="perms")


class User(BedrockBase):
    id: str
    first_name: str = Field(default="", alias="fn")
    last_name: str = Field(default="", alias="ln")
    email: str = ""
    phone: str = ""
    title: str = ""
    role: str = ""
    department_id: str = Field(default="", alias="dept")
    active: bool = True

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


class Process(BedrockBase):
    """Business process, exclusively owned by one Department."""

    id: str
    name: str = ""
    priority: str = Field(default="", alias="pri")
    rto: str = ""
    rpo: str = ""
    mtd: str = ""
    strategy: str = Field(default="", alias="strat")
    status: str = "Active"
    dependencies: tuple[str, ...] = Field(default=(), alias="deps")
    workaround: str = ""


class Department(BedrockBase):
    id: str
    name: str = ""
    lead: str = ""
    headcount: int = 0
    processes: tuple[Process, ...] = ()


class Technology(BedrockBase):
    id: str
    name: str = ""
    tier: str = ""
    type: str = ""
    rpo: str = ""
    vendor: str = ""
    department_id: str = Field(default="", alias="dept")
    status: str = "Active"


class Vendor(BedrockBase):
    id: str
    name: str = ""
    critical: bool = False
    sla: str = ""
    contact: str = ""
    phone: str = ""
    email: str = ""
    contract: str = ""


class Threat(BedrockBase):
    """Threat register entry. ``rpn`` is a denormalized likelihood x impact
    cache maintained by the mutation engine."""

    id: str
    name: str = ""
    category: str = Field(default="", alias="cat")
    likelihood: int = Field(default=1, alias="like")
    impact: int = 1
    rpn: int = 1
    trend: str = "stable"


class Assessment(BedrockBase):
    id: str
    name: str = ""
    status: str = ""
    likelihood: int = Field(default=1, alias="like")
    impact: int = 1
    rpn: int = 1
    mitigation: str = Field(default="", alias="miti")
    date: str = ""
    reviewer: str = ""


class BiaEntry(BedrockBase):
    """Business Impact Analysis record for one department process."""

    id: str
    department_id: str = Field(default="", alias="dept")
    process_id: str = Field(default="", alias="process")
    financial_impact: float = Field(default=0, alias="finImpact")
    operational_impact: str = Field(default="", alias="opsImpact")
    reputational_impact: str = Field(default="", alias="repImpact")
    regulatory_impact: str = Field(default="", alias="regImpact")
    notes: str = ""


class Location(BedrockBase):
    id: str
    name: str = ""
    address: str = Field(default="", alias="addr")
    type: str = ""
    capacity: int = 0
    status: str = "Active"


class Group(BedrockBase):
    id: str
    name: str = ""
    description: str = Field(default="", alias="desc")
    members: tuple[str, ...] = ()


class DocFile(BedrockBase):
    id: str
    name: str = ""
    size: str = "N/A"
    date: str = Field(default_factory=today_iso)
    author: str = ""


class DocumentFolder(BedrockBase):
    id: str
    name: str = ""
    files: tuple[DocFile, ...] = ()


class Training(BedrockBase):
    id: str
    name: str = ""
    type: str = ""
    frequency: str = Field(default="", alias="freq")
    last: str = ""
    next: str = ""
    status: str = "Upcoming"
    attendees: tuple[str, ...] = ()


class CriticalDate(BedrockBase):
    id: str
    name: str = ""
    date: str = ""
    department: str = Field(default="", alias="dept")
    type: str = ""


class Issue(BedrockBase):
    id: str
    title: str = ""
    status: str = "Open"
    priority: str = Field(default="", alias="pri")
    department: str = Field(default="", alias="dept")
    assignee: str = Field(default="", alias="assigned")
    created: str = Field(default_factory=today_iso)
    description: str = Field(default="", alias="desc")


class Incident(BedrockBase):
    id: str
    title: str = ""
    date: str = ""
    severity: str = ""
    status: str = ""
    lead: str = ""
    description: str = Field(default="", alias="desc")
    resolution: str = ""


class Equipment(BedrockBase):
    id: str
    name: str = ""
    type: str = ""
    serial: str = ""
    location: str = ""
    status: str = "Active"
    assignee: str = Field(default="", alias="assigned")


class CustomQuestion(BedrockBase):
    id: str
    question: str = Field(default="", alias="q")
