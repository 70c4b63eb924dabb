"""Mutation commands — entity kind x action kind, checked at construction.

A command names what to touch (``EntityKind``) and what to do
(``ActionKind``) as two orthogonal closed enums. Attribute payloads are
checked against the target entity's fields so a command can only carry
fields that belong to that entity. Dispatch lives in
``bedrock.store.mutations.apply_command``.
"""

from enum import StrEnum
from typing import Any

from pydantic import Field, model_validator

from bedrock.models.common import BedrockBase, Collection, TaskPhase
from bedrock.models.entities import DocFile, Process
from bedrock.models.snapshot import COLLECTION_MODELS, Company


class EntityKind(StrEnum):
    """Every kind of record a command can target."""

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
    PROCESSES = "processes"
    DOCUMENTS = "documents"
    TASKS = "tasks"
    COMPANY = "company"

    @property
    def collection(self) -> Collection | None:
        """Top-level collection for generic kinds, ``None`` for special ones."""
        try:
            return Collection(self.value)
        except ValueError:
            return None


class ActionKind(StrEnum):
    ADD = "add"
    UPDATE = "update"
    DELETE = "delete"


# Special kinds and the actions they support. Generic collection kinds
# support all three.
_SPECIAL_ACTIONS: dict[EntityKind, frozenset[ActionKind]] = {
    EntityKind.PROCESSES: frozenset(ActionKind),
    EntityKind.DOCUMENTS: frozenset({ActionKind.ADD, ActionKind.DELETE}),
    EntityKind.TASKS: frozenset({ActionKind.ADD, ActionKind.DELETE}),
    EntityKind.COMPANY: frozenset({ActionKind.UPDATE}),
}

_SPECIAL_MODELS: dict[EntityKind, type[BedrockBase]] = {
    EntityKind.PROCESSES: Process,
    EntityKind.DOCUMENTS: DocFile,
    EntityKind.COMPANY: Company,
}

# Fields owned by nested operations, never carried in a payload.
_NESTED_FIELDS: dict[EntityKind, frozenset[str]] = {
    EntityKind.DEPARTMENTS: frozenset({"processes"}),
}


def allowed_fields(entity: EntityKind) -> frozenset[str]:
    """Field names and aliases a command payload may carry for ``entity``."""
    if entity is EntityKind.TASKS:
        return frozenset({"text"})
    model_cls = _SPECIAL_MODELS.get(entity) or COLLECTION_MODELS[entity.collection]
    excluded = _NESTED_FIELDS.get(entity, frozenset())
    names: set[str] = set()
    for name, info in model_cls.model_fields.items():
        if name == "id" or name in excluded:
            continue
        names.add(name)
        if info.alias:
            names.add(info.alias)
    return frozenset(names)


class MutationCommand(BedrockBase):
    """One create / update / delete request from the presentation layer.

    ``target_id`` names the record for update and delete. ``parent_id`` is
    the owning department for process adds, the folder for document adds
    (optional) and the phase for task commands. ``index`` is the position
    of the task to delete.
    """

    entity: EntityKind
    action: ActionKind
    target_id: str | None = None
    parent_id: str | None = None
    index: int | None = None
    attributes: dict[str, Any] = Field(default_factory=dict)

    @model_validator(mode="after")
    def _check_shape(self) -> "MutationCommand":
        supported = _SPECIAL_ACTIONS.get(self.entity, frozenset(ActionKind))
        if self.action not in supported:
            msg = f"{self.action.value} is not supported for {self.entity.value}"
            raise ValueError(msg)

        unknown = set(self.attributes) - allowed_fields(self.entity)
        if unknown:
            msg = f"Fields not valid for {self.entity.value}: {sorted(unknown)}"
            raise ValueError(msg)

        if self.entity is EntityKind.TASKS:
            TaskPhase(self.parent_id)
            if self.action is ActionKind.DELETE and self.index is None:
                raise ValueError("Task delete requires an index")
        elif self.entity is EntityKind.PROCESSES and self.action is ActionKind.ADD:
            if not self.parent_id:
                raise ValueError("Process add requires the owning department id")
        elif self.action is not ActionKind.ADD and self.entity is not EntityKind.COMPANY:
            if not self.target_id:
                msg = f"{self.action.value} requires a target id"
                raise ValueError(msg)
        return self
