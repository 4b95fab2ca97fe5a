import logging
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List
from app.core.database import get_db
from app.core.permissions import require_permission
from app.models.user import User
from app.models.communication import CommunicationLog
from app.schemas.communication import CommunicationCreate, CommunicationUpdate, CommunicationResponse
from app.services.client_query import get_visible_client

logger = logging.getLogger(__name__)

router = APIRouter(tags=["communications"])


@router.get("/clients/{client_id}/communications", response_model=List[CommunicationResponse])
def get_communications(
    client_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("communications.read"))
):
    """История коммуникаций клиента, новые сверху"""
    get_visible_client(db, current_user, client_id)
    return db.query(CommunicationLog).filter(
        CommunicationLog.client_id == client_id
    ).order_by(CommunicationLog.communication_date.desc()).all()


@router.post(
    "/clients/{client_id}/communications",
    response_model=CommunicationResponse,
    status_code=status.HTTP_201_CREATED
)
def create_communication(
    client_id: str,
    data: CommunicationCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("communications.write"))
):
    """Добавить запись в историю коммуникаций"""
    client = get_visible_client(db, current_user, client_id)

    entry = CommunicationLog(
        client_id=client.client_id,
        created_by=current_user.user_id,
        communication_date=data.communication_date,
        note=data.note
    )
    db.add(entry)
    db.commit()
    db.refresh(entry)
    logger.info("Communication %s recorded for client %s", entry.log_id, client.client_id)
    return entry


@router.put("/communications/{log_id}", response_model=CommunicationResponse)
def update_communication(
    log_id: str,
    data: CommunicationUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("communications.write"))
):
    entry = db.query(CommunicationLog).filter(CommunicationLog.log_id == log_id).first()
    if not entry:
        raise HTTPException(status_code=404, detail="Communication log not found")
    # Доступ к записи - через доступ к клиенту
    get_visible_client(db, current_user, entry.client_id)

    for field, value in data.model_dump(exclude_unset=True).items():
        if value is None:
            raise HTTPException(status_code=400, detail=f"Field {field} cannot be empty")
        setattr(entry, field, value)

    db.commit()
    db.refresh(entry)
    return entry
