"""Snapshot aggregate: one complete, immutable value of the Bedrock store."""

from pydantic import Field

from bedrock.models.common import BedrockBase, Collection, TaskPhase
from bedrock.models.entities import (
    Assessment,
    BiaEntry,
    CriticalDate,
    CustomQuestion,
    Department,
    DocumentFolder,
    Equipment,
    Group,
    Incident,
    Issue,
    Location,
    Technology,
    Threat,
    Training,
    User,
    Vendor,
)


class Company(BedrockBase):
    """Singleton company profile (no id)."""

    name: str = ""
    address: str = Field(default="", alias="addr")
    city: str = ""
    state: str = ""
    zip: str = ""
    phone: str = ""
    industry: str = ""
    employees: int = 0
    fiscal_start: str = Field(default="", alias="fiscalStart")


class TaskPhases(BedrockBase):
    """Four ordered task lists. Positional: order is meaningful, no ids."""

    early: tuple[str, ...] = ()
    immediate: tuple[str, ...] = Field(default=(), alias="immed")
    short: tuple[str, ...] = ()
    long: tuple[str, ...] = ()

    def for_phase(self, phase: TaskPhase) -> tuple[str, ...]:
        return getattr(self, _PHASE_FIELDS[phase])

    def with_phase(self, phase: TaskPhase, tasks: tuple[str, ...]) -> "TaskPhases":
        return self.model_copy(update={_PHASE_FIELDS[phase]: tuple(tasks)})


_PHASE_FIELDS: dict[TaskPhase, str] = {
    TaskPhase.EARLY: "early",
    TaskPhase.IMMEDIATE: "immediate",
    TaskPhase.SHORT: "short",
    TaskPhase.LONG: "long",
}


class Documents(BedrockBase):
    folders: tuple[DocumentFolder, ...] = ()


class Snapshot(BedrockBase):
    """The single aggregate root holding every collection plus the company.

    A Snapshot is never mutated in place: every mutation returns a new one,
    so a reader holding an older reference keeps a self-consistent view.
    """

    company: Company = Field(default_factory=Company)
    users: tuple[User, ...] = ()
    departments: tuple[Department, ...] = ()
    technologies: tuple[Technology, ...] = ()
    vendors: tuple[Vendor, ...] = ()
    threats: tuple[Threat, ...] = ()
    assessments: tuple[Assessment, ...] = ()
    bia: tuple[BiaEntry, ...] = ()
    locations: tuple[Location, ...] = ()
    groups: tuple[Group, ...] = ()
    documents: Documents = Field(default_factory=Documents)
    training: tuple[Training, ...] = ()
    critical_dates: tuple[CriticalDate, ...] = Field(default=(), alias="critDates")
    tasks: TaskPhases = Field(default_factory=TaskPhases)
    issues: tuple[Issue, ...] = ()
    incidents: tuple[Incident, ...] = ()
    equipment: tuple[Equipment, ...] = ()
    custom_questions: tuple[CustomQuestion, ...] = Field(
        default=(), alias="customQuestions",
    )

    def records(self, collection: Collection) -> tuple:
        """Return the record tuple stored under a collection name."""
        return getattr(self, COLLECTION_FIELDS[collection])

    def with_records(self, collection: Collection, records: tuple) -> "Snapshot":
        """Return a new snapshot with one collection replaced."""
        return self.model_copy(update={COLLECTION_FIELDS[collection]: tuple(records)})


# Collection name (persisted key) -> Snapshot attribute.
COLLECTION_FIELDS: dict[Collection, str] = {
    Collection.USERS: "users",
    Collection.DEPARTMENTS: "departments",
    Collection.TECHNOLOGIES: "technologies",
    Collection.VENDORS: "vendors",
    Collection.THREATS: "threats",
    Collection.ASSESSMENTS: "assessments",
    Collection.BIA: "bia",
    Collection.LOCATIONS: "locations",
    Collection.GROUPS: "groups",
    Collection.TRAINING: "training",
    Collection.CRITICAL_DATES: "critical_dates",
    Collection.ISSUES: "issues",
    Collection.INCIDENTS: "incidents",
    Collection.EQUIPMENT: "equipment",
    Collection.CUSTOM_QUESTIONS: "custom_questions",
}

# Collection name -> record model.
COLLECTION_MODELS: dict[Collection, type[BedrockBase]] = {
    Collection.USERS: User,
    Collection.DEPARTMENTS: Department,
    Collection.TECHNOLOGIES: Technology,
    Collection.VENDORS: Vendor,
    Collection.THREATS: Threat,
    Collection.ASSESSMENTS: Assessment,
    Collection.BIA: BiaEntry,
    Collection.LOCATIONS: Location,
    Collection.GROUPS: Group,
    Collection.TRAINING: Training,
    Collection.CRITICAL_DATES: CriticalDate,
    Collection.ISSUES: Issue,
    Collection.INCIDENTS: Incident,
    Collection.EQUIPMENT: Equipment,
    Collection.CUSTOM_QUESTIONS: CustomQuestion,
}
