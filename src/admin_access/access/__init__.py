"""Access – permission catalog, role registry, evaluator, admin context and guard.

Control flow::

    AccessGuard -> AdminContext -> PermissionEvaluator -> RoleRegistry
                                                          (ids from PermissionCatalog)
"""
from admin_access.access.catalog import Permission, PermissionCatalog, permissions_by_category
from admin_access.access.context import AdminContext, ContextState
from admin_access.access.directory import AdminDirectory
from admin_access.access.evaluator import (
    PermissionEvaluator,
    has_all_permissions,
    has_any_permission,
    has_permission,
)
from admin_access.access.guard import (
    ACCESS_DENIED,
    LOADING_PLACEHOLDER,
    AccessGuard,
    GuardDecision,
    Placeholder,
)
from admin_access.access.identity import AdminStatus, AdminUser
from admin_access.access.management import (
    AdminUserEditRequest,
    RoleEditRequest,
    RoleManagementService,
    authorize,
    require_permission,
)
from admin_access.access.permission_set import PermissionSet
from admin_access.access.resolvers import (
    DirectoryIdentityResolver,
    IdentityResolver,
    StaticIdentityResolver,
)
from admin_access.access.roles import Role, RoleRegistry

__all__ = [
    "ACCESS_DENIED",
    "AccessGuard",
    "AdminContext",
    "AdminDirectory",
    "AdminStatus",
    "AdminUser",
    "AdminUserEditRequest",
    "ContextState",
    "DirectoryIdentityResolver",
    "GuardDecision",
    "IdentityResolver",
    "LOADING_PLACEHOLDER",
    "Permission",
    "PermissionCatalog",
    "PermissionEvaluator",
    "PermissionSet",
    "Placeholder",
    "Role",
    "RoleEditRequest",
    "RoleManagementService",
    "RoleRegistry",
    "StaticIdentityResolver",
    "authorize",
    "has_all_permissions",
    "has_any_permission",
    "has_permission",
    "permissions_by_category",
    "require_permission",
]
