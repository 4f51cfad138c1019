"""Access – role and admin management at the mutation boundary.

The evaluator never raises; this layer does. Editing roles requires
``roles.manage``; creating, editing and deleting admins require
``admins.create`` / ``admins.edit`` / ``admins.delete``. Requests arrive as
explicit records and are validated here before they reach a registry.
"""

from __future__ import annotations

import contextlib
import dataclasses
import functools
import inspect
from typing import Any, Callable, Iterator, Sequence, TypeVar

from admin_access.access.catalog import PermissionCatalog
from admin_access.access.context import AdminContext
from admin_access.access.directory import AdminDirectory
from admin_access.access.identity import AdminStatus, AdminUser
from admin_access.access.roles import Role, RoleRegistry
from admin_access.kernel.errors import (
    DomainError,
    ForbiddenError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)
from admin_access.kernel.time import Clock, SystemClock
from admin_access.kernel.types import AdminId, RoleId, is_email, role_id_from_name
from admin_access.observability.logging import AuditLogger, AuditOutcome

F = TypeVar("F", bound=Callable[..., Any])

ROLES_MANAGE = "roles.manage"
ADMINS_CREATE = "admins.create"
ADMINS_EDIT = "admins.edit"
ADMINS_DELETE = "admins.delete"


# ---------------------------------------------------------------------------
# Authorization helpers
# ---------------------------------------------------------------------------


def authorize(context: AdminContext, permission: str) -> AdminUser:
    """Return the current admin if it holds *permission*.

    Raises
    ------
    UnauthorizedError
        No admin is signed in, or identity resolution is still in progress.
    ForbiddenError
        The admin's role lacks *permission*.
    """
    admin = context.current_admin()
    if admin is None:
        reason = "identity still loading" if context.is_loading() else "no admin signed in"
        raise UnauthorizedError(f"Cannot perform '{permission}': {reason}", permission=permission)
    if not context.check_permission(permission):
        raise ForbiddenError(
            f"admin {admin.id!r} (role {admin.role!r}) lacks permission {permission!r}",
            permission=permission,
        )
    return admin


def require_permission(context: AdminContext, permission: str) -> Callable[[F], F]:
    """Decorator enforcing *permission* on the current admin of *context*.

    Works on both async and sync callables. Raises :class:`UnauthorizedError`
    when nobody is signed in and :class:`ForbiddenError` when the admin lacks
    the permission. Use :class:`AccessGuard` instead where a fallback value is
    wanted rather than an exception.

    Example::

        @require_permission(ctx, "jobs.delete")
        def delete_job(job_id: str) -> None:
            ...
    """

    def decorator(fn: F) -> F:
        if inspect.iscoroutinefunction(fn):

            @functools.wraps(fn)
            async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
                authorize(context, permission)
                return await fn(*args, **kwargs)

            return async_wrapper  # type: ignore[return-value]

        @functools.wraps(fn)
        def sync_wrapper(*args: Any, **kwargs: Any) -> Any:
            authorize(context, permission)
            return fn(*args, **kwargs)

        return sync_wrapper  # type: ignore[return-value]

    return decorator


# ---------------------------------------------------------------------------
# Edit requests
# ---------------------------------------------------------------------------


def _error(field: str, message: str) -> dict[str, str]:
    return {"field": field, "message": message}


@dataclasses.dataclass(frozen=True)
class RoleEditRequest:
    """Create (``id is None``) or update a role."""

    name: str
    description: str = ""
    permissions: Sequence[str] = ()
    color: str = ""
    id: str | None = None

    def validate(self, catalog: PermissionCatalog) -> list[dict[str, str]]:
        errors: list[dict[str, str]] = []
        if not isinstance(self.name, str) or not self.name.strip():
            errors.append(_error("name", "required"))
        if self.id is not None:
            try:
                RoleId(self.id)
            except ValidationError as exc:
                errors.extend(exc.errors)
        if isinstance(self.permissions, str):
            errors.append(_error("permissions", "expected a sequence of permission ids"))
        else:
            unknown = [p for p in self.permissions if p not in catalog]
            if unknown:
                errors.append(_error("permissions", f"unknown permission ids: {', '.join(map(str, unknown))}"))
        return errors


@dataclasses.dataclass(frozen=True)
class AdminUserEditRequest:
    """Create (``id is None``) or update an admin account."""

    name: str
    email: str
    role: str
    status: AdminStatus | str = AdminStatus.ACTIVE
    id: str | None = None

    def validate(self, registry: RoleRegistry) -> list[dict[str, str]]:
        errors: list[dict[str, str]] = []
        if not isinstance(self.name, str) or not self.name.strip():
            errors.append(_error("name", "required"))
        if not is_email(self.email):
            errors.append(_error("email", "invalid email address"))
        if registry.find(self.role) is None:
            errors.append(_error("role", f"unknown role {self.role!r}"))
        try:
            AdminStatus(self.status)
        except ValueError:
            errors.append(_error("status", f"expected one of {[s.value for s in AdminStatus]}"))
        return errors


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------


class RoleManagementService:
    """Mutation entry points for roles and admin accounts.

    Every call authorizes the current admin first, then validates, then
    publishes through the copy-on-write registries. Read-modify-write edits
    go through ``RoleRegistry.update`` / ``AdminDirectory.update`` so two
    concurrent edits of one role both land. Each attempt leaves one audit
    entry: ``success``, ``denied`` (authorization) or ``failure`` (a domain
    error, with the error's ``to_dict()`` payload).
    """

    def __init__(
        self,
        context: AdminContext,
        registry: RoleRegistry,
        catalog: PermissionCatalog,
        directory: AdminDirectory,
        *,
        clock: Clock | None = None,
        audit_logger: AuditLogger | None = None,
    ) -> None:
        self._context = context
        self._registry = registry
        self._catalog = catalog
        self._directory = directory
        self._clock = clock or SystemClock()
        self._audit = audit_logger or AuditLogger()

    # -- audit ---------------------------------------------------------

    @contextlib.contextmanager
    def _mutation(self, permission: str, resource: str, action: str) -> Iterator[AdminUser]:
        try:
            actor = authorize(self._context, permission)
        except (UnauthorizedError, ForbiddenError) as exc:
            self._audit.log_access(
                self._context.current_admin(),
                resource=resource,
                action=action,
                outcome=AuditOutcome.DENIED,
                **exc.to_dict(),
            )
            raise
        try:
            yield actor
        except DomainError as exc:
            self._audit.log_access(
                actor, resource=resource, action=action, outcome=AuditOutcome.FAILURE, **exc.to_dict()
            )
            raise

    def _succeeded(self, admin: AdminUser, resource: str, action: str, **extra: Any) -> None:
        self._audit.log_access(admin, resource=resource, action=action, outcome=AuditOutcome.SUCCESS, **extra)

    # -- roles ---------------------------------------------------------

    def save_role(self, request: RoleEditRequest) -> Role:
        """Create or update a role from *request*.

        A new role's id is derived from its name; creating over an existing
        id raises :class:`ConflictError`.
        """
        resource = f"role:{request.id or 'new'}"
        action = "create" if request.id is None else "update"
        with self._mutation(ROLES_MANAGE, resource, action) as actor:
            errors = request.validate(self._catalog)
            if errors:
                raise ValidationError("Invalid role", errors=errors)
            now = self._clock.now()
            if request.id is None:
                role = self._registry.upsert(
                    Role(
                        id=role_id_from_name(request.name),
                        name=request.name.strip(),
                        description=request.description,
                        permissions=request.permissions,
                        color=request.color,
                        updated_at=now,
                    ),
                    expected_version=0,
                )
            else:
                role = self._registry.update(
                    request.id,
                    lambda existing: existing.revise(
                        name=request.name.strip(),
                        description=request.description,
                        permissions=request.permissions,
                        color=request.color or existing.color,
                        updated_at=now,
                    ),
                )
                if role is None:
                    raise NotFoundError("Role", request.id)
        self._succeeded(actor, f"role:{role.id}", action, version=role.version)
        return role

    def delete_role(self, role_id: str) -> Role:
        """Delete a role.

        Admins still assigned to it keep the dangling reference and evaluate
        to zero permissions.
        """
        resource = f"role:{role_id}"
        with self._mutation(ROLES_MANAGE, resource, "delete") as actor:
            removed = self._registry.remove(role_id)
            if removed is None:
                raise NotFoundError("Role", role_id)
        self._succeeded(actor, resource, "delete", orphaned_admins=self._directory.count_by_role(role_id))
        return removed

    def grant(self, role_id: str, permission_id: str) -> Role:
        resource = f"role:{role_id}"
        with self._mutation(ROLES_MANAGE, resource, "grant") as actor:
            if role_id not in self._registry:
                raise NotFoundError("Role", role_id)
            if permission_id not in self._catalog:
                raise ValidationError.for_field("permission", f"{permission_id!r} is not in the catalog")
            updated = self._edit_role(role_id, lambda role: role.with_permission(permission_id))
        self._succeeded(actor, resource, "grant", permission_id=permission_id, version=updated.version)
        return updated

    def revoke(self, role_id: str, permission_id: str) -> Role:
        resource = f"role:{role_id}"
        with self._mutation(ROLES_MANAGE, resource, "revoke") as actor:
            updated = self._edit_role(role_id, lambda role: role.without_permission(permission_id))
        self._succeeded(actor, resource, "revoke", permission_id=permission_id, version=updated.version)
        return updated

    def _edit_role(self, role_id: str, change: Callable[[Role], Role]) -> Role:
        now = self._clock.now()
        updated = self._registry.update(role_id, lambda role: change(role).stamped(now))
        if updated is None:
            raise NotFoundError("Role", role_id)
        return updated

    # -- admins --------------------------------------------------------

    def save_admin(self, request: AdminUserEditRequest) -> AdminUser:
        """Create or update an admin account.

        If the edited account is the signed-in admin, the context is
        refreshed so a role change applies to the next check.
        """
        creating = request.id is None
        permission, action = (ADMINS_CREATE, "create") if creating else (ADMINS_EDIT, "update")
        with self._mutation(permission, f"admin:{request.id or 'new'}", action) as actor:
            if not creating and self._directory.find(request.id) is None:
                raise NotFoundError("Admin", request.id)
            errors = request.validate(self._registry)
            if errors:
                raise ValidationError("Invalid admin", errors=errors)
            fields = {
                "name": request.name.strip(),
                "email": request.email,
                "role": request.role,
                "status": AdminStatus(request.status),
            }
            if creating:
                admin = self._directory.upsert(
                    AdminUser(id=str(AdminId.generate()), created_at=self._clock.now(), **fields)
                )
            else:
                # created_at / last_login stay as stored
                admin = self._directory.update(request.id, lambda stored: dataclasses.replace(stored, **fields))
                if admin is None:
                    raise NotFoundError("Admin", request.id)

        current = self._context.current_admin()
        if current is not None and current.id == admin.id:
            self._context.set_current_admin(admin)
        self._succeeded(actor, f"admin:{admin.id}", action, role=admin.role)
        return admin

    def delete_admin(self, admin_id: str) -> AdminUser:
        resource = f"admin:{admin_id}"
        with self._mutation(ADMINS_DELETE, resource, "delete") as actor:
            removed = self._directory.remove(admin_id)
            if removed is None:
                raise NotFoundError("Admin", admin_id)
        self._succeeded(actor, resource, "delete")
        return removed


__all__ = [
    "ADMINS_CREATE",
    "ADMINS_DELETE",
    "ADMINS_EDIT",
    "AdminUserEditRequest",
    "ROLES_MANAGE",
    "RoleEditRequest",
    "RoleManagementService",
    "authorize",
    "require_permission",
]
