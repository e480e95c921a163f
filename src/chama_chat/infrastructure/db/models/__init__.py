"""Import all models so Base.metadata sees the full schema."""
from chama_chat.infrastructure.db.models.chama import ChamaMemberModel, ChamaModel
from chama_chat.infrastructure.db.models.message import MessageModel
from chama_chat.infrastructure.db.models.notification import NotificationModel
from chama_chat.infrastructure.db.models.user import UserModel

__all__ = [
    "ChamaMemberModel",
    "ChamaModel",
    "MessageModel",
    "NotificationModel",
    "UserModel",
]
