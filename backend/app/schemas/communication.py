from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional


class CommunicationCreate(BaseModel):
    communication_date: datetime
    note: str = Field(..., min_length=1)


class CommunicationUpdate(BaseModel):
    communication_date: Optional[datetime] = None
    note: Optional[str] = Field(None, min_length=1)


class CommunicationResponse(BaseModel):
    log_id: str
    client_id: str
    created_by: str
    communication_date: datetime
    note: str
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class AttachmentResponse(BaseModel):
    attachment_id: str
    client_id: str
    uploaded_by: str
    file_name: str
    file_url: str
    uploaded_at: datetime

    class Config:
        from_attributes = True
