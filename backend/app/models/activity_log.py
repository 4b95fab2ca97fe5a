import uuid
from sqlalchemy import Column, String, DateTime, ForeignKey, Text
from sqlalchemy.sql import func
from app.core.database import Base


class ActivityLog(Base):
    """Журнал действий пользователей (аудит)"""
    __tablename__ = "activity_log"

    activity_id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), ForeignKey("users.user_id"), nullable=False)
    client_id = Column(String(36), ForeignKey("clients.client_id"), nullable=True)
    action_type = Column(String(100), nullable=False)
    action_details = Column(Text, nullable=True)
    timestamp = Column(DateTime, server_default=func.now(), nullable=False, index=True)
