"""Unit tests for AdminContext and identity resolvers."""

from __future__ import annotations

import asyncio
import dataclasses

import pytest

from admin_access.access import (
    AdminContext,
    AdminDirectory,
    AdminStatus,
    AdminUser,
    ContextState,
    DirectoryIdentityResolver,
    PermissionEvaluator,
    StaticIdentityResolver,
)
from admin_access.access.defaults import build_default_directory, build_default_registry
from admin_access.kernel.errors import ConflictError, ValidationError
from admin_access.kernel.time import FrozenClock


def _admin(role: str, admin_id: str = "a1") -> AdminUser:
    return AdminUser(id=admin_id, name="Test Admin", email="test@zapply.com", role=role)


@pytest.fixture
def context() -> AdminContext:
    return AdminContext(PermissionEvaluator(build_default_registry()))


class TestLifecycle:
    def test_starts_uninitialized_and_denies(self, context: AdminContext) -> None:
        assert context.state is ContextState.UNINITIALIZED
        assert context.is_loading() is False
        assert context.current_admin() is None
        assert context.check_permission("jobs.view") is False

    def test_loading_denies_and_reports_loading(self, context: AdminContext) -> None:
        context.begin_loading()
        assert context.check_permission("jobs.view") is False
        assert context.is_loading() is True

    def test_loading_hides_previous_admin(self, context: AdminContext) -> None:
        context.on_identity_resolved(_admin("super_admin"))
        context.begin_loading()
        assert context.current_admin() is None
        assert context.check_any_permission(["jobs.view"]) is False
        assert context.check_all_permissions([]) is False

    def test_resolved_becomes_ready(self, context: AdminContext) -> None:
        context.begin_loading()
        context.on_identity_resolved(_admin("job_manager"))
        assert context.state is ContextState.READY
        assert context.is_ready() is True
        assert context.is_loading() is False
        assert context.check_permission("jobs.edit") is True

    def test_resolved_to_nobody(self, context: AdminContext) -> None:
        context.on_identity_resolved(None)
        assert context.is_ready() is True
        assert context.current_admin() is None
        assert context.check_permission("jobs.view") is False


class TestIdentity:
    def test_set_current_admin_takes_effect_immediately(self, context: AdminContext) -> None:
        context.set_current_admin(_admin("support_agent"))
        assert context.check_permission("users.edit") is True
        context.set_current_admin(_admin("data_analyst"))
        assert context.check_permission("users.edit") is False
        assert context.check_permission("analytics.export") is True

    def test_set_current_admin_none_signs_out(self, context: AdminContext) -> None:
        context.set_current_admin(_admin("super_admin"))
        context.set_current_admin(None)
        assert context.current_admin() is None
        assert context.check_permission("jobs.view") is False

    def test_set_current_admin_while_loading_finishes_loading(self, context: AdminContext) -> None:
        context.begin_loading()
        context.set_current_admin(_admin("admin"))
        assert context.is_loading() is False
        assert context.check_permission("audit.view") is True

    def test_deleted_role_has_zero_permissions(self, context: AdminContext) -> None:
        context.on_identity_resolved(_admin("deleted_role"))
        assert context.check_permission("jobs.view") is False
        assert context.current_role() is None

    def test_role_deleted_after_sign_in(self, context: AdminContext) -> None:
        context.on_identity_resolved(_admin("content_moderator"))
        assert context.check_permission("jobs.moderate") is True
        context.evaluator.registry.remove("content_moderator")
        assert context.check_permission("jobs.moderate") is False

    def test_current_role(self, context: AdminContext) -> None:
        context.on_identity_resolved(_admin("job_manager"))
        assert context.current_role().id == "job_manager"

    def test_checks_delegate(self, context: AdminContext) -> None:
        context.on_identity_resolved(_admin("job_manager"))
        assert context.check_any_permission(["jobs.delete", "jobs.edit"]) is True
        assert context.check_all_permissions(["jobs.delete", "jobs.edit"]) is False
        assert context.check_all_permissions([]) is True
        assert context.check_any_permission([]) is False


class TestAdminUser:
    def test_email_is_stored_normalised(self) -> None:
        admin = AdminUser(id="a1", name="A", email="  Ops@Zapply.COM ", role="admin")
        assert admin.email == "ops@zapply.com"

    def test_invalid_email_rejected(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            AdminUser(id="a1", name="A", email="ops-at-zapply", role="admin")
        assert exc_info.value.fields == ["email"]

    def test_replace_renormalises_email(self) -> None:
        admin = dataclasses.replace(_admin("admin"), email="New@Zapply.com")
        assert admin.email == "new@zapply.com"

    def test_status_string_coerced(self) -> None:
        admin = AdminUser(id="a1", name="A", email="a@zapply.com", role="admin", status="inactive")
        assert admin.status is AdminStatus.INACTIVE


class _FailingResolver:
    async def resolve(self) -> AdminUser | None:
        raise RuntimeError("session store unavailable")


class _GatedResolver:
    def __init__(self, admin: AdminUser) -> None:
        self.admin = admin
        self.release = asyncio.Event()

    async def resolve(self) -> AdminUser | None:
        await self.release.wait()
        return self.admin


class TestLoad:
    def test_load_static(self, context: AdminContext) -> None:
        admin = _admin("admin")
        result = asyncio.run(context.load(StaticIdentityResolver(admin)))
        assert result is admin
        assert context.current_admin() is admin

    def test_load_reports_loading_until_resolved(self, context: AdminContext) -> None:
        resolver = _GatedResolver(_admin("super_admin"))
        observed: list[tuple[bool, bool]] = []

        async def scenario() -> None:
            task = asyncio.create_task(context.load(resolver))
            await asyncio.sleep(0)
            observed.append((context.is_loading(), context.check_permission("jobs.view")))
            resolver.release.set()
            await task
            observed.append((context.is_loading(), context.check_permission("jobs.view")))

        asyncio.run(scenario())
        assert observed == [(True, False), (False, True)]

    def test_load_failure_fails_closed(self, context: AdminContext) -> None:
        with pytest.raises(RuntimeError):
            asyncio.run(context.load(_FailingResolver()))
        assert context.is_ready() is True
        assert context.current_admin() is None
        assert context.check_permission("jobs.view") is False


class TestDirectoryIdentityResolver:
    def test_defaults_to_first_admin(self, frozen_clock: FrozenClock) -> None:
        directory = build_default_directory(frozen_clock)
        frozen_clock.advance(hours=1)
        admin = asyncio.run(DirectoryIdentityResolver(directory, clock=frozen_clock).resolve())
        assert admin is not None and admin.id == "admin_1"
        assert admin.last_login == frozen_clock.now()
        assert directory.find("admin_1").last_login == frozen_clock.now()

    def test_configured_admin(self, frozen_clock: FrozenClock) -> None:
        directory = build_default_directory(frozen_clock)
        admin = asyncio.run(DirectoryIdentityResolver(directory, "admin_3", clock=frozen_clock).resolve())
        assert admin is not None and admin.role == "job_manager"

    def test_unknown_admin_resolves_to_nobody(self) -> None:
        directory = build_default_directory()
        assert asyncio.run(DirectoryIdentityResolver(directory, "admin_99").resolve()) is None

    def test_empty_directory(self) -> None:
        assert asyncio.run(DirectoryIdentityResolver(AdminDirectory()).resolve()) is None


class TestAdminDirectory:
    def test_update_replaces_stored_record(self, frozen_clock: FrozenClock) -> None:
        directory = build_default_directory(frozen_clock)
        updated = directory.update("admin_3", lambda admin: admin.with_role("support_agent"))
        assert updated is directory.find("admin_3")
        assert updated.role == "support_agent"
        assert directory.count_by_role("job_manager") == 0

    def test_update_unknown_admin_returns_none(self) -> None:
        directory = AdminDirectory()
        assert directory.update("admin_99", lambda admin: admin.with_role("admin")) is None
        assert len(directory) == 0

    def test_update_cannot_change_id(self) -> None:
        directory = AdminDirectory([_admin("admin")])
        with pytest.raises(ConflictError):
            directory.update("a1", lambda admin: dataclasses.replace(admin, id="a2"))
        assert directory.find("a1") is not None
        assert directory.find("a2") is None
