"""Bootstrap – assemble the default access console.

Example::

    console = build_console()
    await console.sign_in()
    console.guard(permission="roles.manage").render(editor)
"""
from __future__ import annotations

import dataclasses
from typing import Iterable

from admin_access.access.catalog import PermissionCatalog
from admin_access.access.context import AdminContext
from admin_access.access.defaults import (
    build_default_catalog,
    build_default_directory,
    build_default_registry,
)
from admin_access.access.directory import AdminDirectory
from admin_access.access.evaluator import PermissionEvaluator
from admin_access.access.guard import AccessGuard
from admin_access.access.identity import AdminUser
from admin_access.access.management import RoleManagementService
from admin_access.access.resolvers import DirectoryIdentityResolver, IdentityResolver
from admin_access.access.roles import RoleRegistry
from admin_access.config import AccessSettings, EnvSettingsLoader, SettingsFactory
from admin_access.kernel.time import Clock, SystemClock
from admin_access.observability.logging import (
    AdminContextProcessor,
    AuditLogger,
    JsonLoggerFactory,
    get_logger,
)

_log = get_logger(__name__)


@dataclasses.dataclass
class AccessConsole:
    """Everything the console needs, wired together."""

    settings: AccessSettings
    catalog: PermissionCatalog
    registry: RoleRegistry
    evaluator: PermissionEvaluator
    directory: AdminDirectory
    context: AdminContext
    management: RoleManagementService
    audit: AuditLogger
    clock: Clock

    def guard(
        self,
        permission: str | None = None,
        permissions: Iterable[str] | None = None,
        *,
        require_all: bool = False,
    ) -> AccessGuard:
        return AccessGuard(
            self.context,
            permission,
            permissions,
            require_all=require_all,
            audit_logger=self.audit if self.settings.audit_denials else None,
        )

    async def sign_in(self, resolver: IdentityResolver | None = None) -> AdminUser | None:
        """Resolve the current admin (default: the configured seed admin)."""
        resolver = resolver or DirectoryIdentityResolver(
            self.directory, self.settings.default_admin_id, clock=self.clock
        )
        admin = await self.context.load(resolver)
        self.audit.log_security_event(
            "sign_in",
            admin,
            description="identity resolved" if admin else "no admin resolved",
        )
        return admin

    def sign_out(self) -> None:
        admin = self.context.current_admin()
        self.context.set_current_admin(None)
        self.audit.log_security_event("sign_out", admin, description="admin signed out")

    def configure_logging(self) -> None:
        """Configure structlog from settings, tagging events with the current admin."""
        JsonLoggerFactory.configure(
            self.settings.log_level,
            json=self.settings.json_logs,
            extra_processors=[AdminContextProcessor(self.context)],
        )


def build_console(
    settings: AccessSettings | None = None,
    *,
    clock: Clock | None = None,
) -> AccessConsole:
    """Build a console over the default catalog, roles and seed admins.

    The context is left ``UNINITIALIZED``; call :meth:`AccessConsole.sign_in`.
    """
    settings = settings or SettingsFactory.create(AccessSettings, [EnvSettingsLoader()])
    clock = clock or SystemClock()
    catalog = build_default_catalog()
    registry = build_default_registry(catalog)
    directory = build_default_directory(clock)
    evaluator = PermissionEvaluator(registry)
    context = AdminContext(evaluator)
    audit = AuditLogger(service=settings.service_name)
    management = RoleManagementService(
        context,
        registry,
        catalog,
        directory,
        clock=clock,
        audit_logger=audit,
    )
    for role_id, missing in registry.dangling_permissions(catalog).items():
        _log.warning("roles.dangling_permissions", role_id=role_id, permission_ids=list(missing))
    return AccessConsole(
        settings=settings,
        catalog=catalog,
        registry=registry,
        evaluator=evaluator,
        directory=directory,
        context=context,
        management=management,
        audit=audit,
        clock=clock,
    )


__all__ = ["AccessConsole", "build_console"]
