from app.schemas.user import UserResponse, UserBrief, LoginRequest, LoginResponse
from app.schemas.client import ClientCreate, ClientUpdate, ClientResponse, ImportResultResponse, DashboardResponse
from app.schemas.communication import CommunicationCreate, CommunicationUpdate, CommunicationResponse, AttachmentResponse
from app.schemas.activity_log import ActivityLogCreate, ActivityLogResponse

__all__ = [
    "UserResponse",
    "UserBrief",
    "LoginRequest",
    "LoginResponse",
    "ClientCreate",
    "ClientUpdate",
    "ClientResponse",
    "ImportResultResponse",
    "DashboardResponse",
    "CommunicationCreate",
    "CommunicationUpdate",
    "CommunicationResponse",
    "AttachmentResponse",
    "ActivityLogCreate",
    "ActivityLogResponse",
]
