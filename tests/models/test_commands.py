"""Tests for MutationCommand construction checks."""

import pytest
from pydantic import ValidationError

from bedrock.models.commands import ActionKind, EntityKind, MutationCommand, allowed_fields
from bedrock.models.common import Collection


class TestEntityKind:
    def test_generic_kinds_map_to_collections(self) -> None:
        assert EntityKind.THREATS.collection is Collection.THREATS
        assert EntityKind.CRITICAL_DATES.collection is Collection.CRITICAL_DATES

    def test_special_kinds_have_no_collection(self) -> None:
        for kind in (EntityKind.PROCESSES, EntityKind.DOCUMENTS, EntityKind.TASKS, EntityKind.COMPANY):
            assert kind.collection is None

    def test_every_collection_is_a_kind(self) -> None:
        for coll in Collection:
            assert EntityKind(coll.value).collection is coll


class TestAllowedFields:
    def test_includes_names_and_aliases(self) -> None:
        fields = allowed_fields(EntityKind.THREATS)
        assert {"likelihood", "like", "category", "cat", "impact"} <= fields

    def test_excludes_id(self) -> None:
        assert "id" not in allowed_fields(EntityKind.VENDORS)

    def test_department_processes_not_a_payload_field(self) -> None:
        fields = allowed_fields(EntityKind.DEPARTMENTS)
        assert "processes" not in fields
        assert {"name", "lead", "headcount"} <= fields

    def test_tasks_only_text(self) -> None:
        assert allowed_fields(EntityKind.TASKS) == frozenset({"text"})


class TestMutationCommand:
    """Commands carry only the fields valid for their entity."""

    def test_valid_add(self) -> None:
        cmd = MutationCommand(
            entity=EntityKind.VENDORS,
            action=ActionKind.ADD,
            attributes={"name": "Acme Supply", "critical": True},
        )
        assert cmd.entity is EntityKind.VENDORS

    def test_parses_from_strings(self) -> None:
        cmd = MutationCommand.model_validate({
            "entity": "threats", "action": "update", "target_id": "th1",
            "attributes": {"like": 5},
        })
        assert cmd.action is ActionKind.UPDATE

    def test_field_from_other_entity_rejected(self) -> None:
        with pytest.raises(ValidationError, match="Fields not valid"):
            MutationCommand(
                entity=EntityKind.VENDORS,
                action=ActionKind.ADD,
                attributes={"likelihood": 3},
            )

    def test_unknown_entity_rejected(self) -> None:
        with pytest.raises(ValidationError):
            MutationCommand.model_validate({"entity": "widgets", "action": "add"})

    def test_update_requires_target(self) -> None:
        with pytest.raises(ValidationError, match="target id"):
            MutationCommand(entity=EntityKind.THREATS, action=ActionKind.UPDATE)

    def test_delete_requires_target(self) -> None:
        with pytest.raises(ValidationError, match="target id"):
            MutationCommand(entity=EntityKind.USERS, action=ActionKind.DELETE)

    def test_process_add_requires_department(self) -> None:
        with pytest.raises(ValidationError, match="department"):
            MutationCommand(
                entity=EntityKind.PROCESSES,
                action=ActionKind.ADD,
                attributes={"name": "Shipping"},
            )

    def test_department_update_cannot_carry_processes(self) -> None:
        with pytest.raises(ValidationError, match="Fields not valid"):
            MutationCommand(
                entity=EntityKind.DEPARTMENTS,
                action=ActionKind.UPDATE,
                target_id="d1",
                attributes={"processes": [{"id": "p3"}]},
            )

    def test_company_only_updates(self) -> None:
        with pytest.raises(ValidationError, match="not supported"):
            MutationCommand(entity=EntityKind.COMPANY, action=ActionKind.DELETE)

    def test_company_update_needs_no_target(self) -> None:
        cmd = MutationCommand(
            entity=EntityKind.COMPANY,
            action=ActionKind.UPDATE,
            attributes={"name": "Globex"},
        )
        assert cmd.target_id is None

    def test_documents_cannot_update(self) -> None:
        with pytest.raises(ValidationError, match="not supported"):
            MutationCommand(entity=EntityKind.DOCUMENTS, action=ActionKind.UPDATE, target_id="doc1")

    def test_task_needs_valid_phase(self) -> None:
        with pytest.raises(ValidationError):
            MutationCommand(
                entity=EntityKind.TASKS,
                action=ActionKind.ADD,
                parent_id="someday",
                attributes={"text": "Call vendors"},
            )

    def test_task_delete_requires_index(self) -> None:
        with pytest.raises(ValidationError, match="index"):
            MutationCommand(entity=EntityKind.TASKS, action=ActionKind.DELETE, parent_id="early")

    def test_task_add_valid(self) -> None:
        cmd = MutationCommand(
            entity=EntityKind.TASKS,
            action=ActionKind.ADD,
            parent_id="immed",
            attributes={"text": "Open command center"},
        )
        assert cmd.parent_id == "immed"
