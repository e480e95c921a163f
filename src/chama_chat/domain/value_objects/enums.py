from __future__ import annotations

from enum import StrEnum


class ConnectionState(StrEnum):
    UNAUTHENTICATED = "unauthenticated"
    AUTHENTICATED = "authenticated"


class EnvelopeKind(StrEnum):
    AUTH = "auth"
    CHAT = "chat"
    NOTIFICATION = "notification"
    ERROR = "error"


class UserRole(StrEnum):
    USER = "user"
    ADMIN = "admin"


class MemberRole(StrEnum):
    CHAIRPERSON = "chairperson"
    TREASURER = "treasurer"
    SECRETARY = "secretary"
    MEMBER = "member"


class NotificationType(StrEnum):
    CONTRIBUTION_DUE = "contribution_due"
    MEETING_SCHEDULED = "meeting_scheduled"
    LOAN_APPROVED = "loan_approved"
    ANNOUNCEMENT = "announcement"
