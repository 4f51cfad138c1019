"""
admin_access – role-based access control for the admin console.

Import path convention::

    from admin_access.access import AccessGuard, AdminContext, PermissionEvaluator
    from admin_access.kernel.errors import ForbiddenError
    from admin_access.config import AccessSettings
    from admin_access.bootstrap import build_console
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
