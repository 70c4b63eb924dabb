"""Shared types, enums, and base models used across Bedrock domain models."""

from datetime import date
from enum import StrEnum

from pydantic import BaseModel
from uuid_extensions import uuid7


def new_record_id() -> str:
    """Generate a fresh opaque record identifier (UUID v7 string)."""
    return str(uuid7())


def today_iso() -> str:
    """Return today's date as an ISO ``YYYY-MM-DD`` string."""
    return date.today().isoformat()


# --- Shared enums ---


class RtoBucket(StrEnum):
    """Recovery Time Objective buckets used for process classification."""

    SAME_DAY = "Same Day"
    ONE_DAY = "1 Day"
    TWO_TO_FIVE_DAYS = "2-5 Days"
    SIX_PLUS_DAYS = "6+ Days"


class Collection(StrEnum):
    """Top-level record collections addressable by the generic mutations."""

    USERS = "users"
    DEPARTMENTS = "departments"
    TECHNOLOGIES = "technologies"
    VENDORS = "vendors"
    THREATS = "threats"
    ASSESSMENTS = "assessments"
    BIA = "bia"
    LOCATIONS = "locations"
    GROUPS = "groups"
    TRAINING = "training"
    CRITICAL_DATES = "critDates"
    ISSUES = "issues"
    INCIDENTS = "incidents"
    EQUIPMENT = "equipment"
    CUSTOM_QUESTIONS = "customQuestions"


class TaskPhase(StrEnum):
    """Recovery task phases, in timeline order."""

    EARLY = "early"
    IMMEDIATE = "immed"
    SHORT = "short"
    LONG = "long"


TASK_PHASE_LABELS: dict[TaskPhase, str] = {
    TaskPhase.EARLY: "Early Closure",
    TaskPhase.IMMEDIATE: "0-24 Hours",
    TaskPhase.SHORT: "2-5 Days",
    TaskPhase.LONG: "6+ Days",
}


class Outcome(StrEnum):
    """Human-readable outcome label emitted by every mutation."""

    ADDED = "added"
    UPDATED = "updated"
    DELETED = "deleted"


class SeverityBand(StrEnum):
    """Severity band derived from a Risk Priority Number."""

    CRITICAL = "Critical"
    HIGH = "High"
    MEDIUM = "Medium"


# --- Base model ---


class BedrockBase(BaseModel):
    """Base model with common configuration for all Bedrock records.

    Records are immutable; a mutation always builds a new record. Python
    attribute names are descriptive while the persisted document keeps the
    short keys declared as aliases.
    """

    model_config = {
        "populate_by_name": True,
        "frozen": True,
        "extra": "forbid",
        "protected_namespaces": (),
    }

    def to_document(self) -> dict:
        """Serialize to the persisted-document shape (aliased keys)."""
        return self.model_dump(mode="json", by_alias=True)
