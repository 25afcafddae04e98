"""Audit logging package."""

from paycheck_budget.audit.logger import AuditLogger, configure_logging

__all__ = ["AuditLogger", "configure_logging"]
