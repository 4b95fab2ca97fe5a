from app.models.user import User, UserRole
from app.models.client import Client, ClientStatus
from app.models.communication import CommunicationLog
from app.models.attachment import ClientAttachment
from app.models.activity_log import ActivityLog
from app.models.password_reset import PasswordResetRequest

__all__ = [
    "User",
    "UserRole",
    "Client",
    "ClientStatus",
    "CommunicationLog",
    "ClientAttachment",
    "ActivityLog",
    "PasswordResetRequest",
]
