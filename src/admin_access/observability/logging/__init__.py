"""Observability – structured logging helpers."""
from admin_access.observability.logging.filters import DEFAULT_SENSITIVE_FIELDS, SensitiveFieldsFilter
from admin_access.observability.logging.factory import JsonLoggerFactory
from admin_access.observability.logging.processors import AdminContextProcessor, get_logger
from admin_access.observability.logging.audit import AuditLogger, AuditOutcome

__all__ = [
    "AdminContextProcessor",
    "AuditLogger",
    "AuditOutcome",
    "DEFAULT_SENSITIVE_FIELDS",
    "JsonLoggerFactory",
    "SensitiveFieldsFilter",
    "get_logger",
]
