"""Kernel value-object types – public re-export surface.

Modules:
  ids.py   – PermissionId, RoleId, AdminId, is_permission_id
  email.py – Email, is_email, normalise_email
"""

from admin_access.kernel.types.email import Email, is_email, normalise_email
from admin_access.kernel.types.ids import (
    AdminId,
    PermissionId,
    RoleId,
    is_permission_id,
    role_id_from_name,
)

__all__ = [
    "AdminId",
    "Email",
    "PermissionId",
    "RoleId",
    "is_email",
    "is_permission_id",
    "normalise_email",
    "role_id_from_name",
]
