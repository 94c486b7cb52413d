"""Persistent entities: users, their sessions and the audit trail."""

from .enums import UserRole
from .user import User
from .session import Session
from .audit_event import AuditEvent

__all__ = ["UserRole", "User", "Session", "AuditEvent"]
