import uuid
from sqlalchemy import Column, String, DateTime, ForeignKey, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import enum
from app.core.database import Base


class ClientStatus(str, enum.Enum):
    NEW = "new"
    IN_PROGRESS = "in-progress"
    CLOSED = "closed"


class Client(Base):
    __tablename__ = "clients"

    client_id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))

    # Контакты
    full_name = Column(String(255), nullable=False, index=True)
    phone = Column(String(20), nullable=False)
    email = Column(String, nullable=False)

    # Предпочтения по недвижимости
    property_location = Column(String, nullable=True)
    property_type = Column(String, nullable=True)
    budget_range = Column(String, nullable=True)
    additional_preferences = Column(Text, nullable=True)

    # Работа с клиентом
    # Статус хранится строкой: импорт допускает произвольные значения
    status = Column(String, nullable=False, index=True)
    last_contact_date = Column(DateTime, nullable=True)
    next_follow_up_date = Column(DateTime, nullable=True)
    assigned_agent_id = Column(String(36), ForeignKey("users.user_id"), nullable=True, index=True)
    notes = Column(Text, nullable=True)

    # Даты
    created_at = Column(DateTime, server_default=func.now(), nullable=False)
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now(), nullable=False)
    deleted_at = Column(DateTime, nullable=True)  # Мягкое удаление

    # Relationships
    assigned_agent = relationship("User", back_populates="clients")
    communications = relationship("CommunicationLog", back_populates="client")
    attachments = relationship("ClientAttachment", back_populates="client")
