from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional


class ActivityLogCreate(BaseModel):
    client_id: Optional[str] = None
    action_type: str = Field(..., min_length=1, max_length=100)
    action_details: Optional[str] = None


class ActivityLogResponse(BaseModel):
    activity_id: str
    user_id: str
    client_id: Optional[str] = None
    action_type: str
    action_details: Optional[str] = None
    timestamp: datetime

    class Config:
        from_attributes = True
