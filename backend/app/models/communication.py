import uuid
from sqlalchemy import Column, String, DateTime, ForeignKey, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.core.database import Base


class CommunicationLog(Base):
    __tablename__ = "communications_log"

    log_id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    client_id = Column(String(36), ForeignKey("clients.client_id"), nullable=False, index=True)
    created_by = Column(String(36), ForeignKey("users.user_id"), nullable=False)
    communication_date = Column(DateTime, nullable=False)
    note = Column(Text, nullable=False)

    # Даты
    created_at = Column(DateTime, server_default=func.now(), nullable=False)
    updated_at = Column(DateTime, nullable=True, onupdate=func.now())

    # Relationships
    client = relationship("Client", back_populates="communications")
