"""Tests for the pure mutation engine."""

import pytest
from pydantic import ValidationError

from bedrock.metrics.calculator import rto_bucket_counts
from bedrock.models.commands import ActionKind, EntityKind, MutationCommand
from bedrock.models.common import Collection, Outcome, RtoBucket, TaskPhase
from bedrock.models.snapshot import Snapshot
from bedrock.store import mutations
from bedrock.store.mutations import UnknownCollectionError


def _dept(snapshot: Snapshot, dept_id: str):
    return next(d for d in snapshot.departments if d.id == dept_id)


def _threat(snapshot: Snapshot, threat_id: str):
    return next(t for t in snapshot.threats if t.id == threat_id)


def _process_ids(snapshot: Snapshot) -> list[str]:
    return [p.id for d in snapshot.departments for p in d.processes]


# ---------------------------------------------------------------------------
# Generic collections
# ---------------------------------------------------------------------------


class TestAddEntity:
    def test_appends_with_fresh_id(self, seed: Snapshot) -> None:
        result = mutations.add_entity(seed, "vendors", {"name": "Acme Supply", "critical": True})
        assert result.outcome is Outcome.ADDED
        assert result.matched is True
        assert len(result.snapshot.vendors) == len(seed.vendors) + 1
        added = result.snapshot.vendors[-1]
        assert added.id == result.record_id
        assert added.name == "Acme Supply"
        assert added.id not in {v.id for v in seed.vendors}

    def test_supplied_id_is_replaced(self, seed: Snapshot) -> None:
        result = mutations.add_entity(seed, Collection.GROUPS, {"id": "g1", "name": "Dup"})
        assert result.record_id != "g1"
        assert [g.id for g in result.snapshot.groups].count("g1") == 1

    def test_input_snapshot_unchanged(self, seed: Snapshot) -> None:
        before = seed.to_document()
        mutations.add_entity(seed, "issues", {"title": "Generator fuel low"})
        assert seed.to_document() == before

    def test_accepts_short_keys(self, seed: Snapshot) -> None:
        result = mutations.add_entity(seed, "users", {"fn": "Sam", "ln": "Ortiz", "dept": "d5"})
        user = result.snapshot.users[-1]
        assert user.full_name == "Sam Ortiz"
        assert user.department_id == "d5"

    def test_new_department_has_no_processes(self, seed: Snapshot) -> None:
        result = mutations.add_entity(seed, "departments", {"name": "Research"})
        assert result.snapshot.departments[-1].processes == ()

    def test_new_department_ignores_supplied_processes(self, seed: Snapshot) -> None:
        result = mutations.add_entity(seed, "departments", {
            "name": "Dup",
            "processes": [{"id": "p1", "name": "dup"}],
        })
        assert result.snapshot.departments[-1].processes == ()
        assert _process_ids(result.snapshot).count("p1") == 1

    def test_unknown_collection(self, seed: Snapshot) -> None:
        with pytest.raises(UnknownCollectionError):
            mutations.add_entity(seed, "widgets", {"name": "x"})

    def test_invalid_field_rejected(self, seed: Snapshot) -> None:
        with pytest.raises(ValidationError):
            mutations.add_entity(seed, "vendors", {"nonsense": 1})


class TestUpdateEntity:
    def test_merges_partial_patch(self, seed: Snapshot) -> None:
        result = mutations.update_entity(seed, "vendors", "v4", {"critical": True})
        vendor = next(v for v in result.snapshot.vendors if v.id == "v4")
        assert vendor.critical is True
        assert vendor.name == "Workday"
        assert vendor.sla == "99.5%"

    def test_keeps_position(self, seed: Snapshot) -> None:
        result = mutations.update_entity(seed, "vendors", "v2", {"name": "SAP SE"})
        assert [v.id for v in result.snapshot.vendors] == [v.id for v in seed.vendors]

    def test_id_cannot_change(self, seed: Snapshot) -> None:
        result = mutations.update_entity(seed, "vendors", "v1", {"id": "v99", "name": "MS"})
        assert result.snapshot.vendors[0].id == "v1"

    def test_same_patch_twice_is_idempotent(self, seed: Snapshot) -> None:
        patch = {"status": "Resolved", "pri": "Low"}
        once = mutations.update_entity(seed, "issues", "i1", patch).snapshot
        twice = mutations.update_entity(once, "issues", "i1", patch).snapshot
        assert once == twice

    def test_department_patch_keeps_its_processes(self, seed: Snapshot) -> None:
        other = [p.to_document() for p in _dept(seed, "d2").processes]
        result = mutations.update_entity(
            seed, "departments", "d1", {"name": "Leadership", "processes": other},
        )
        d1 = _dept(result.snapshot, "d1")
        assert d1.name == "Leadership"
        assert d1.processes == _dept(seed, "d1").processes
        ids = _process_ids(result.snapshot)
        assert len(ids) == len(set(ids))

    def test_missing_id_is_noop(self, seed: Snapshot) -> None:
        result = mutations.update_entity(seed, "vendors", "nope", {"name": "x"})
        assert result.matched is False
        assert result.snapshot is seed
        assert result.outcome is Outcome.UPDATED


class TestDeleteEntity:
    def test_removes_record(self, seed: Snapshot) -> None:
        result = mutations.delete_entity(seed, "threats", "th3")
        assert result.outcome is Outcome.DELETED
        assert "th3" not in {t.id for t in result.snapshot.threats}
        assert len(result.snapshot.threats) == len(seed.threats) - 1

    def test_missing_id_is_noop(self, seed: Snapshot) -> None:
        result = mutations.delete_entity(seed, "threats", "nope")
        assert result.matched is False
        assert result.snapshot is seed

    def test_department_delete_does_not_cascade(self, seed: Snapshot) -> None:
        result = mutations.delete_entity(seed, "departments", "d2")
        snap = result.snapshot
        assert "d2" not in {d.id for d in snap.departments}
        b2 = next(b for b in snap.bia if b.id == "b2")
        assert b2 == next(b for b in seed.bia if b.id == "b2")
        assert b2.department_id == "d2"
        assert snap.technologies == seed.technologies
        assert snap.issues == seed.issues

    def test_department_delete_takes_its_processes(self, seed: Snapshot) -> None:
        result = mutations.delete_entity(seed, "departments", "d2")
        remaining = {p.id for d in result.snapshot.departments for p in d.processes}
        assert remaining.isdisjoint({"p3", "p4", "p5"})
        assert "p1" in remaining


# ---------------------------------------------------------------------------
# RPN
# ---------------------------------------------------------------------------


class TestRpn:
    def test_add_computes_rpn(self, seed: Snapshot) -> None:
        result = mutations.add_entity(seed, "threats", {"name": "Wildfire", "like": 3, "impact": 4, "rpn": 1})
        assert result.snapshot.threats[-1].rpn == 12

    def test_update_recomputes_rpn(self, seed: Snapshot) -> None:
        result = mutations.update_entity(seed, "threats", "th1", {"like": 2})
        threat = _threat(result.snapshot, "th1")
        assert threat.likelihood == 2
        assert threat.rpn == 10

    def test_assessment_rpn(self, seed: Snapshot) -> None:
        result = mutations.update_entity(seed, "assessments", "a1", {"impact": 5})
        assessment = next(a for a in result.snapshot.assessments if a.id == "a1")
        assert assessment.rpn == 10

    def test_rpn_over_full_scale(self, seed: Snapshot) -> None:
        snap = seed
        for likelihood in range(1, 6):
            for impact in range(1, 6):
                snap = mutations.update_entity(
                    snap, "threats", "th2", {"likelihood": likelihood, "impact": impact},
                ).snapshot
                assert _threat(snap, "th2").rpn == likelihood * impact

    def test_stale_rpn_in_patch_is_overwritten(self, seed: Snapshot) -> None:
        result = mutations.update_entity(seed, "threats", "th7", {"rpn": 25})
        assert _threat(result.snapshot, "th7").rpn == 5


# ---------------------------------------------------------------------------
# Processes
# ---------------------------------------------------------------------------


class TestProcesses:
    def test_add_process_same_day_bucket(self, seed: Snapshot) -> None:
        before = rto_bucket_counts(seed)[RtoBucket.SAME_DAY]
        assert len(_dept(seed, "d2").processes) == 3

        result = mutations.add_process(seed, "d2", {"name": "Security Ops", "rto": "Same Day", "pri": "Critical"})

        assert len(_dept(result.snapshot, "d2").processes) == 4
        assert rto_bucket_counts(result.snapshot)[RtoBucket.SAME_DAY] == before + 1
        assert _dept(result.snapshot, "d2").processes[-1].id == result.record_id

    def test_add_process_unknown_department(self, seed: Snapshot) -> None:
        result = mutations.add_process(seed, "d99", {"name": "Orphan"})
        assert result.matched is False
        assert result.snapshot is seed

    def test_update_process_found_in_any_department(self, seed: Snapshot) -> None:
        result = mutations.update_process(seed, "p8", {"rto": "Same Day"})
        proc = next(p for p in _dept(result.snapshot, "d4").processes if p.id == "p8")
        assert proc.rto == "Same Day"
        assert proc.name == "Accounts Payable"
        assert _dept(result.snapshot, "d1") == _dept(seed, "d1")

    def test_update_process_missing(self, seed: Snapshot) -> None:
        result = mutations.update_process(seed, "p99", {"rto": "1 Day"})
        assert result.matched is False

    def test_delete_process(self, seed: Snapshot) -> None:
        result = mutations.delete_process(seed, "p4")
        assert [p.id for p in _dept(result.snapshot, "d2").processes] == ["p3", "p5"]

    def test_delete_process_missing(self, seed: Snapshot) -> None:
        result = mutations.delete_process(seed, "p99")
        assert result.snapshot is seed


# ---------------------------------------------------------------------------
# Company, tasks, documents
# ---------------------------------------------------------------------------


class TestCompany:
    def test_partial_update(self, seed: Snapshot) -> None:
        result = mutations.update_company(seed, {"name": "Globex", "addr": "1 Elm St"})
        company = result.snapshot.company
        assert company.name == "Globex"
        assert company.address == "1 Elm St"
        assert company.city == "Springfield"
        assert result.outcome is Outcome.UPDATED


class TestTasks:
    def test_add_appends(self, seed: Snapshot) -> None:
        result = mutations.add_task(seed, "short", "Order replacement hardware")
        assert result.snapshot.tasks.short[-1] == "Order replacement hardware"
        assert result.snapshot.tasks.short[:-1] == seed.tasks.short

    def test_remove_keeps_order(self, seed: Snapshot) -> None:
        result = mutations.remove_task(seed, TaskPhase.EARLY, 1)
        expected = seed.tasks.early[:1] + seed.tasks.early[2:]
        assert result.snapshot.tasks.early == expected

    def test_remove_out_of_range(self, seed: Snapshot) -> None:
        result = mutations.remove_task(seed, "long", 50)
        assert result.matched is False
        assert result.snapshot is seed

    def test_unknown_phase(self, seed: Snapshot) -> None:
        with pytest.raises(ValueError):
            mutations.add_task(seed, "later", "x")


class TestDocuments:
    def test_add_defaults_to_first_folder(self, seed: Snapshot) -> None:
        result = mutations.add_document(seed, None, {"name": "Call Tree.docx", "author": "u2"})
        folder = result.snapshot.documents.folders[0]
        assert folder.files[-1].name == "Call Tree.docx"
        assert folder.files[-1].size == "N/A"

    def test_add_to_named_folder(self, seed: Snapshot) -> None:
        result = mutations.add_document(seed, "f3", {"name": "Checklist.xlsx"})
        assert result.snapshot.documents.folders[2].files[-1].id == result.record_id

    def test_add_to_missing_folder(self, seed: Snapshot) -> None:
        result = mutations.add_document(seed, "f9", {"name": "Lost.pdf"})
        assert result.matched is False

    def test_delete(self, seed: Snapshot) -> None:
        result = mutations.delete_document(seed, "doc3")
        files = [f.id for folder in result.snapshot.documents.folders for f in folder.files]
        assert "doc3" not in files
        assert "doc4" in files


# ---------------------------------------------------------------------------
# Command dispatch
# ---------------------------------------------------------------------------


class TestApplyCommand:
    def test_generic_update(self, seed: Snapshot) -> None:
        cmd = MutationCommand(
            entity=EntityKind.THREATS,
            action=ActionKind.UPDATE,
            target_id="th5",
            attributes={"impact": 5},
        )
        result = mutations.apply_command(seed, cmd)
        assert _threat(result.snapshot, "th5").rpn == 15

    def test_process_add(self, seed: Snapshot) -> None:
        cmd = MutationCommand(
            entity=EntityKind.PROCESSES,
            action=ActionKind.ADD,
            parent_id="d7",
            attributes={"name": "Litigation Hold", "rto": "1 Day"},
        )
        result = mutations.apply_command(seed, cmd)
        assert _dept(result.snapshot, "d7").processes[-1].name == "Litigation Hold"

    def test_task_delete(self, seed: Snapshot) -> None:
        cmd = MutationCommand(
            entity=EntityKind.TASKS,
            action=ActionKind.DELETE,
            parent_id="immed",
            index=0,
        )
        result = mutations.apply_command(seed, cmd)
        assert result.snapshot.tasks.immediate == seed.tasks.immediate[1:]

    def test_company_update(self, seed: Snapshot) -> None:
        cmd = MutationCommand(
            entity=EntityKind.COMPANY,
            action=ActionKind.UPDATE,
            attributes={"employees": 300},
        )
        result = mutations.apply_command(seed, cmd)
        assert result.snapshot.company.employees == 300

    def test_document_delete(self, seed: Snapshot) -> None:
        cmd = MutationCommand(entity=EntityKind.DOCUMENTS, action=ActionKind.DELETE, target_id="doc5")
        result = mutations.apply_command(seed, cmd)
        assert result.snapshot.documents.folders[2].files == ()

    def test_generic_delete(self, seed: Snapshot) -> None:
        cmd = MutationCommand(entity=EntityKind.CRITICAL_DATES, action=ActionKind.DELETE, target_id="cd1")
        result = mutations.apply_command(seed, cmd)
        assert "cd1" not in {cd.id for cd in result.snapshot.critical_dates}
