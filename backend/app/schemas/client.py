from pydantic import BaseModel, EmailStr, Field, field_validator
from datetime import datetime, timezone
from typing import Optional


def _to_naive_utc(v):
    """Даты храним без таймзоны, в UTC"""
    if isinstance(v, datetime) and v.tzinfo is not None:
        return v.astimezone(timezone.utc).replace(tzinfo=None)
    return v


class ClientBase(BaseModel):
    property_location: Optional[str] = None
    property_type: Optional[str] = None
    budget_range: Optional[str] = None
    additional_preferences: Optional[str] = None
    last_contact_date: Optional[datetime] = None
    next_follow_up_date: Optional[datetime] = None
    assigned_agent_id: Optional[str] = Field(None, max_length=36)
    notes: Optional[str] = None

    @field_validator('last_contact_date', 'next_follow_up_date')
    @classmethod
    def normalize_dates(cls, v):
        return _to_naive_utc(v)


class ClientCreate(ClientBase):
    full_name: str = Field(..., min_length=1, max_length=255)
    phone: str = Field(..., min_length=7, max_length=20)
    email: EmailStr
    status: str = Field(..., min_length=1)


class ClientUpdate(ClientBase):
    full_name: Optional[str] = Field(None, min_length=1, max_length=255)
    phone: Optional[str] = Field(None, min_length=7, max_length=20)
    email: Optional[EmailStr] = None
    status: Optional[str] = Field(None, min_length=1)


class ClientResponse(BaseModel):
    client_id: str
    full_name: str
    phone: str
    email: str
    property_location: Optional[str] = None
    property_type: Optional[str] = None
    budget_range: Optional[str] = None
    additional_preferences: Optional[str] = None
    status: str
    last_contact_date: Optional[datetime] = None
    next_follow_up_date: Optional[datetime] = None
    assigned_agent_id: Optional[str] = None
    notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    deleted_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ImportResultResponse(BaseModel):
    message: str
    successCount: int
    errorCount: int


class DashboardMetrics(BaseModel):
    total_active_clients: int
    new_leads: int
    in_progress: int
    closed: int
    pending_follow_ups: int


class RecentActivity(BaseModel):
    activity_id: str
    description: str
    timestamp: datetime


class DashboardResponse(BaseModel):
    dashboard_metrics: DashboardMetrics
    recent_activity: list[RecentActivity] = []
