"""Unit and property tests for the permission evaluator."""

from __future__ import annotations

import threading

import pytest
from hypothesis import given
from hypothesis import strategies as st

from admin_access.access import (
    PermissionEvaluator,
    Role,
    RoleRegistry,
    has_all_permissions,
    has_any_permission,
    has_permission,
)
from admin_access.access.defaults import build_default_catalog, build_default_registry
from admin_access.testing.generators import permission_id_strategy, role_strategy

JOB_MANAGER = {"jobs.view", "jobs.create", "jobs.edit", "jobs.publish", "users.view", "analytics.view"}


@pytest.fixture
def evaluator() -> PermissionEvaluator:
    return PermissionEvaluator(build_default_registry())


# ---------------------------------------------------------------------------
# Scenarios
# ---------------------------------------------------------------------------


class TestJobManagerScenario:
    def test_role_holds_expected_permissions(self, evaluator: PermissionEvaluator) -> None:
        assert set(evaluator.permissions_for("job_manager")) == JOB_MANAGER

    def test_cannot_delete_jobs(self, evaluator: PermissionEvaluator) -> None:
        assert evaluator.has_permission("job_manager", "jobs.delete") is False

    def test_any_of_delete_or_edit(self, evaluator: PermissionEvaluator) -> None:
        assert evaluator.has_any_permission("job_manager", ["jobs.delete", "jobs.edit"]) is True

    def test_all_of_delete_and_edit(self, evaluator: PermissionEvaluator) -> None:
        assert evaluator.has_all_permissions("job_manager", ["jobs.delete", "jobs.edit"]) is False
        assert evaluator.has_all_permissions("job_manager", ["jobs.view", "jobs.edit"]) is True


class TestSuperAdminScenario:
    def test_holds_every_catalog_permission(self, evaluator: PermissionEvaluator) -> None:
        for permission in build_default_catalog():
            assert evaluator.has_permission("super_admin", permission.id) is True

    def test_all_of_whole_catalog(self, evaluator: PermissionEvaluator) -> None:
        assert evaluator.has_all_permissions("super_admin", build_default_catalog().ids()) is True


# ---------------------------------------------------------------------------
# Fail-closed edge cases
# ---------------------------------------------------------------------------


class TestFailClosed:
    def test_unknown_role_has_nothing(self, evaluator: PermissionEvaluator) -> None:
        assert evaluator.has_permission("deleted_role", "jobs.view") is False
        assert evaluator.has_any_permission("deleted_role", ["jobs.view"]) is False
        assert len(evaluator.permissions_for("deleted_role")) == 0

    def test_unknown_permission_never_matches(self, evaluator: PermissionEvaluator) -> None:
        assert evaluator.has_permission("super_admin", "jobs.bulk") is False

    def test_dangling_role_entry_grants_nothing_extra(self) -> None:
        registry = RoleRegistry([Role(id="legacy", name="Legacy", permissions=["jobs.view", "ghost.perm"])])
        evaluator = PermissionEvaluator(registry)
        assert evaluator.has_permission("legacy", "jobs.edit") is False
        assert evaluator.has_permission("legacy", "jobs.view") is True

    @pytest.mark.parametrize("role_id", [None, "", 42, ["admin"]])
    def test_malformed_role_id(self, evaluator: PermissionEvaluator, role_id: object) -> None:
        assert evaluator.has_permission(role_id, "jobs.view") is False  # type: ignore[arg-type]

    @pytest.mark.parametrize("permission_id", [None, "", 42, ("jobs.view",)])
    def test_malformed_permission_id(self, evaluator: PermissionEvaluator, permission_id: object) -> None:
        assert evaluator.has_permission("super_admin", permission_id) is False  # type: ignore[arg-type]

    @pytest.mark.parametrize("ids", [None, "jobs.view", 7])
    def test_malformed_sequences_deny(self, evaluator: PermissionEvaluator, ids: object) -> None:
        assert evaluator.has_any_permission("super_admin", ids) is False  # type: ignore[arg-type]
        assert evaluator.has_all_permissions("super_admin", ids) is False  # type: ignore[arg-type]

    def test_none_inside_sequence(self, evaluator: PermissionEvaluator) -> None:
        assert evaluator.has_all_permissions("super_admin", ["jobs.view", None]) is False  # type: ignore[list-item]
        assert evaluator.has_any_permission("super_admin", [None, "jobs.view"]) is True  # type: ignore[list-item]

    def test_generator_input(self, evaluator: PermissionEvaluator) -> None:
        ids = (p for p in ["jobs.view", "jobs.edit"])
        assert evaluator.has_all_permissions("job_manager", ids) is True


class TestEmptySequences:
    @pytest.mark.parametrize("role_id", ["super_admin", "job_manager", "deleted_role"])
    def test_any_of_nothing_is_false(self, evaluator: PermissionEvaluator, role_id: str) -> None:
        assert evaluator.has_any_permission(role_id, []) is False

    @pytest.mark.parametrize("role_id", ["super_admin", "job_manager", "deleted_role"])
    def test_all_of_nothing_is_true(self, evaluator: PermissionEvaluator, role_id: str) -> None:
        assert evaluator.has_all_permissions(role_id, []) is True


class TestModuleFunctions:
    def test_delegate_to_evaluator(self) -> None:
        registry = build_default_registry()
        assert has_permission(registry, "support_agent", "users.edit") is True
        assert has_any_permission(registry, "support_agent", ["users.delete"]) is False
        assert has_all_permissions(registry, "support_agent", []) is True


class TestLiveEdits:
    def test_edits_visible_on_next_call(self, evaluator: PermissionEvaluator) -> None:
        registry = evaluator.registry
        registry.upsert(registry.find("job_manager").with_permission("jobs.delete"))
        assert evaluator.has_permission("job_manager", "jobs.delete") is True
        registry.remove("job_manager")
        assert evaluator.has_permission("job_manager", "jobs.view") is False

    def test_readers_never_see_partial_role(self) -> None:
        full = Role(id="r", name="R", permissions=["a.x", "b.y"])
        empty = Role(id="r", name="R")
        registry = RoleRegistry([full])
        evaluator = PermissionEvaluator(registry)
        stop = threading.Event()
        torn: list[bool] = []

        def writer() -> None:
            while not stop.is_set():
                registry.upsert(empty)
                registry.upsert(full)

        def reader() -> None:
            for _ in range(2000):
                perms = evaluator.permissions_for("r")
                if len(perms) not in (0, 2):
                    torn.append(True)

        w = threading.Thread(target=writer)
        w.start()
        readers = [threading.Thread(target=reader) for _ in range(3)]
        for r in readers:
            r.start()
        for r in readers:
            r.join()
        stop.set()
        w.join()
        assert torn == []


# ---------------------------------------------------------------------------
# Properties
# ---------------------------------------------------------------------------


class TestEvaluatorProperties:
    @given(role=role_strategy())
    def test_members_are_granted(self, role: Role) -> None:
        evaluator = PermissionEvaluator(RoleRegistry([role]))
        for pid in role.permissions:
            assert evaluator.has_permission(role.id, pid) is True

    @given(role=role_strategy(), pid=permission_id_strategy())
    def test_non_members_are_denied(self, role: Role, pid: str) -> None:
        evaluator = PermissionEvaluator(RoleRegistry([role]))
        assert evaluator.has_permission(role.id, pid) is (pid in role.permissions)

    @given(pid=permission_id_strategy())
    def test_unknown_role_denies_everything(self, pid: str) -> None:
        evaluator = PermissionEvaluator(build_default_registry())
        assert evaluator.has_permission("no_such_role", pid) is False

    @given(role=role_strategy(), role_id=st.sampled_from(["present", "absent"]))
    def test_empty_sequence_asymmetry(self, role: Role, role_id: str) -> None:
        evaluator = PermissionEvaluator(RoleRegistry([role]))
        target = role.id if role_id == "present" else f"{role.id}_absent"
        assert evaluator.has_any_permission(target, []) is False
        assert evaluator.has_all_permissions(target, []) is True

    @given(role=role_strategy(), ids=st.lists(permission_id_strategy(["jobs", "users"]), max_size=6))
    def test_all_is_conjunction_and_any_is_disjunction(self, role: Role, ids: list[str]) -> None:
        evaluator = PermissionEvaluator(RoleRegistry([role]))
        singles = [evaluator.has_permission(role.id, pid) for pid in ids]
        assert evaluator.has_all_permissions(role.id, ids) is all(singles)
        assert evaluator.has_any_permission(role.id, ids) is any(singles)
