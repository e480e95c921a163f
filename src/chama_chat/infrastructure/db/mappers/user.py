from __future__ import annotations

from chama_chat.domain.entities.group_member import GroupMember
from chama_chat.domain.entities.user import User
from chama_chat.infrastructure.db.models.chama import ChamaMemberModel
from chama_chat.infrastructure.db.models.user import UserModel


def model_to_entity(model: UserModel) -> User:
    return User(id=model.id, display_name=model.full_name, role=model.role)


def member_to_entity(model: ChamaMemberModel) -> GroupMember:
    return GroupMember(
        group_id=model.chama_id,
        user_id=model.user_id,
        role=model.role,
        joined_at=model.joined_at,
    )
