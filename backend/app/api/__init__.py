from fastapi import APIRouter
from app.api import auth, clients, communications, attachments, activity_log, users

api_router = APIRouter()
api_router.include_router(auth.router)
api_router.include_router(clients.router)
api_router.include_router(communications.router)
api_router.include_router(attachments.router)
api_router.include_router(activity_log.router)
api_router.include_router(users.router)
