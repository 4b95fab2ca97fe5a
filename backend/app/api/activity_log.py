from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import List
from datetime import datetime
from app.core.config import settings
from app.core.database import get_db
from app.core.permissions import require_permission
from app.models.user import User
from app.models.activity_log import ActivityLog
from app.schemas.activity_log import ActivityLogCreate, ActivityLogResponse
from app.services.client_query import get_visible_client

router = APIRouter(prefix="/activity-log", tags=["activity-log"])

SORTABLE_FIELDS = {
    "activity_id": ActivityLog.activity_id,
    "user_id": ActivityLog.user_id,
    "timestamp": ActivityLog.timestamp,
}


@router.get("", response_model=List[ActivityLogResponse])
def get_activity_log(
    limit: int = Query(settings.DEFAULT_PAGE_LIMIT, ge=1, le=settings.MAX_PAGE_LIMIT),
    offset: int = Query(0, ge=0),
    sort_by: str = Query("timestamp"),
    sort_order: str = Query("desc"),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("activity_log.read"))
):
    """Журнал действий (только менеджер)"""
    column = SORTABLE_FIELDS.get(sort_by, ActivityLog.timestamp)
    ordering = column.desc() if sort_order.lower() == "desc" else column.asc()
    return db.query(ActivityLog).order_by(ordering).offset(offset).limit(limit).all()


@router.post("", response_model=ActivityLogResponse, status_code=status.HTTP_201_CREATED)
def create_activity(
    data: ActivityLogCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("activity_log.write"))
):
    if data.client_id:
        get_visible_client(db, current_user, data.client_id)

    # Автор записи - всегда текущий пользователь
    entry = ActivityLog(
        user_id=current_user.user_id,
        client_id=data.client_id,
        action_type=data.action_type,
        action_details=data.action_details,
        timestamp=datetime.utcnow()
    )
    db.add(entry)
    db.commit()
    db.refresh(entry)
    return entry
