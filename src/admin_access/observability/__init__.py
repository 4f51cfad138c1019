"""Observability – structlog logging and the audit sink."""
