import shutil
import uuid
from pathlib import Path
from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status
from sqlalchemy.orm import Session
from typing import List, Optional
from app.core.config import settings
from app.core.database import get_db
from app.core.permissions import require_permission
from app.models.user import User
from app.models.attachment import ClientAttachment
from app.schemas.communication import AttachmentResponse
from app.services.client_query import get_visible_client

router = APIRouter(prefix="/clients/{client_id}/attachments", tags=["attachments"])


@router.get("", response_model=List[AttachmentResponse])
def get_attachments(
    client_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("attachments.read"))
):
    get_visible_client(db, current_user, client_id)
    return db.query(ClientAttachment).filter(
        ClientAttachment.client_id == client_id
    ).order_by(ClientAttachment.uploaded_at.desc()).all()


@router.post("", response_model=AttachmentResponse, status_code=status.HTTP_201_CREATED)
def upload_attachment(
    client_id: str,
    file: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("attachments.write"))
):
    """Загрузить файл к карточке клиента"""
    client = get_visible_client(db, current_user, client_id)
    if file is None or not file.filename:
        raise HTTPException(status_code=400, detail="File is required")

    storage = Path(settings.ATTACHMENTS_DIR)
    storage.mkdir(parents=True, exist_ok=True)
    original_name = Path(file.filename).name
    stored_name = f"{uuid.uuid4()}-{original_name}"
    with open(storage / stored_name, "wb") as fh:
        shutil.copyfileobj(file.file, fh)

    attachment = ClientAttachment(
        client_id=client.client_id,
        uploaded_by=current_user.user_id,
        file_name=original_name,
        file_url=f"/attachments/{stored_name}"
    )
    db.add(attachment)
    db.commit()
    db.refresh(attachment)
    return attachment
