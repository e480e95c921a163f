from __future__ import annotations

from typing import Any

from chama_chat.application.dto.principal import Principal
from chama_chat.domain.value_objects.enums import UserRole


def principal_from_claims(payload: dict[str, Any]) -> Principal:
    """Build a Principal from decoded JWT claims (``sub`` = user id)."""
    role_raw = payload.get("role", UserRole.USER)
    if UserRole.ADMIN in payload.get("roles", []):
        role_raw = UserRole.ADMIN
    role = UserRole(role_raw) if role_raw in UserRole.__members__.values() else UserRole.USER
    return Principal(user_id=int(payload["sub"]), role=role)
