"""Access – default permission catalog, roles and seed admins.

This is configuration data, not logic: the evaluator works with any catalog.
Each ``build_*`` call returns fresh objects so callers never share mutable
registries.
"""
from __future__ import annotations

from datetime import UTC, datetime, timedelta

from admin_access.access.catalog import Permission, PermissionCatalog
from admin_access.access.directory import AdminDirectory
from admin_access.access.identity import AdminStatus, AdminUser
from admin_access.access.roles import Role, RoleRegistry
from admin_access.kernel.time import Clock, SystemClock

DEFAULT_PERMISSIONS: tuple[Permission, ...] = (
    # Jobs
    Permission("jobs.view", "View Jobs", "View job listings and details", "Jobs"),
    Permission("jobs.create", "Create Jobs", "Create new job postings", "Jobs"),
    Permission("jobs.edit", "Edit Jobs", "Modify existing job postings", "Jobs"),
    Permission("jobs.delete", "Delete Jobs", "Remove job postings", "Jobs"),
    Permission("jobs.publish", "Publish Jobs", "Publish and unpublish jobs", "Jobs"),
    Permission("jobs.moderate", "Moderate Jobs", "Review and approve job submissions", "Jobs"),
    # Users
    Permission("users.view", "View Users", "View user profiles and information", "Users"),
    Permission("users.edit", "Edit Users", "Modify user profiles and settings", "Users"),
    Permission("users.suspend", "Suspend Users", "Suspend or ban user accounts", "Users"),
    Permission("users.delete", "Delete Users", "Permanently delete user accounts", "Users"),
    Permission("users.impersonate", "Impersonate Users", "Login as other users for support", "Users"),
    # Analytics
    Permission("analytics.view", "View Analytics", "Access platform analytics and reports", "Analytics"),
    Permission("analytics.export", "Export Data", "Export analytics data and reports", "Analytics"),
    # Settings
    Permission("settings.view", "View Settings", "View system configuration", "Settings"),
    Permission("settings.edit", "Edit Settings", "Modify system settings", "Settings"),
    Permission("settings.scraping", "Manage Scraping", "Configure job scraping sources", "Settings"),
    # Admin management
    Permission("admins.view", "View Admins", "View admin user accounts", "Admin Management"),
    Permission("admins.create", "Create Admins", "Create new admin accounts", "Admin Management"),
    Permission("admins.edit", "Edit Admins", "Modify admin user accounts", "Admin Management"),
    Permission("admins.delete", "Delete Admins", "Remove admin user accounts", "Admin Management"),
    Permission("roles.manage", "Manage Roles", "Create and modify admin roles", "Admin Management"),
    # Security
    Permission("audit.view", "View Audit Logs", "Access system audit logs and activity", "Security"),
    Permission("security.manage", "Manage Security", "Configure security settings and policies", "Security"),
)

_ROLE_SPECS: tuple[tuple[str, str, str, tuple[str, ...] | None, str], ...] = (
    (
        "super_admin",
        "Super Administrator",
        "Full system access with all permissions",
        None,  # every catalog permission
        "red",
    ),
    (
        "admin",
        "Administrator",
        "Full job and user management access",
        (
            "jobs.view", "jobs.create", "jobs.edit", "jobs.delete", "jobs.publish", "jobs.moderate",
            "users.view", "users.edit", "users.suspend",
            "analytics.view", "analytics.export",
            "settings.view", "settings.edit",
            "audit.view",
        ),
        "blue",
    ),
    (
        "job_manager",
        "Job Manager",
        "Manage job postings and applications",
        ("jobs.view", "jobs.create", "jobs.edit", "jobs.publish", "users.view", "analytics.view"),
        "green",
    ),
    (
        "content_moderator",
        "Content Moderator",
        "Review and moderate job content",
        ("jobs.view", "jobs.edit", "jobs.moderate", "users.view"),
        "yellow",
    ),
    (
        "data_analyst",
        "Data Analyst",
        "Access analytics and generate reports",
        ("jobs.view", "users.view", "analytics.view", "analytics.export"),
        "purple",
    ),
    (
        "support_agent",
        "Support Agent",
        "Basic user support and assistance",
        ("jobs.view", "users.view", "users.edit"),
        "gray",
    ),
)

_SEED_ADMINS: tuple[tuple[str, str, str, str, AdminStatus, int], ...] = (
    # id, name, email, role, status, hours since last login
    ("admin_1", "John Smith", "john@zapply.com", "super_admin", AdminStatus.ACTIVE, 0),
    ("admin_2", "Sarah Johnson", "sarah@zapply.com", "admin", AdminStatus.ACTIVE, 2),
    ("admin_3", "Mike Wilson", "mike@zapply.com", "job_manager", AdminStatus.ACTIVE, 4),
    ("admin_4", "Lisa Brown", "lisa@zapply.com", "data_analyst", AdminStatus.ACTIVE, 6),
    ("admin_5", "David Chen", "david@zapply.com", "support_agent", AdminStatus.INACTIVE, 24),
)


def build_default_catalog() -> PermissionCatalog:
    return PermissionCatalog(DEFAULT_PERMISSIONS)


def build_default_registry(catalog: PermissionCatalog | None = None) -> RoleRegistry:
    """Default roles; ``super_admin`` receives every id in *catalog*."""
    if catalog is None:
        catalog = build_default_catalog()
    roles = [
        Role(
            id=role_id,
            name=name,
            description=description,
            permissions=catalog.ids() if permissions is None else permissions,
            color=color,
        )
        for role_id, name, description, permissions, color in _ROLE_SPECS
    ]
    return RoleRegistry(roles)


def build_default_directory(clock: Clock | None = None) -> AdminDirectory:
    now = (clock or SystemClock()).now()
    admins = [
        AdminUser(
            id=admin_id,
            name=name,
            email=email,
            role=role,
            status=status,
            created_at=datetime(2024, 1, index, tzinfo=UTC),
            last_login=now - timedelta(hours=hours_ago),
        )
        for index, (admin_id, name, email, role, status, hours_ago) in enumerate(_SEED_ADMINS, start=1)
    ]
    return AdminDirectory(admins)


__all__ = [
    "DEFAULT_PERMISSIONS",
    "build_default_catalog",
    "build_default_directory",
    "build_default_registry",
]
