from fastapi import APIRouter, Depends, File, Query, Response, UploadFile, status
from sqlalchemy.orm import Session
from typing import List, Optional
from datetime import datetime
from app.core.config import settings
from app.core.database import get_db
from app.core.dependencies import get_current_active_user
from app.core.errors import ValidationError
from app.core.permissions import require_permission
from app.models.user import User, UserRole
from app.models.client import Client
from app.schemas.client import (
    ClientCreate, ClientUpdate, ClientResponse, ImportResultResponse, DashboardResponse
)
from app.services.client_query import ClientSearchParams, list_clients, get_visible_client
from app.services.client_export import export_clients_csv
from app.services.client_import import import_clients
from app.services.dashboard import get_dashboard

router = APIRouter(prefix="/clients", tags=["clients"])

REQUIRED_CLIENT_FIELDS = ("full_name", "phone", "email", "status")


def client_search_params(
    query: Optional[str] = Query(None, description="Search by client full name"),
    limit: int = Query(settings.DEFAULT_PAGE_LIMIT, ge=1, le=settings.MAX_PAGE_LIMIT),
    offset: int = Query(0, ge=0),
    sort_by: str = Query("created_at", description="client_id, full_name, created_at, updated_at"),
    sort_order: str = Query("desc", description="asc or desc"),
) -> ClientSearchParams:
    """Параметры поиска, общие для списка и экспорта"""
    return ClientSearchParams(
        query=query,
        limit=limit,
        offset=offset,
        sort_by=sort_by,
        sort_order=sort_order,
    )


@router.get("", response_model=List[ClientResponse])
def get_clients(
    params: ClientSearchParams = Depends(client_search_params),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("clients.read"))
):
    """Список клиентов (агент видит только своих)"""
    return list_clients(db, current_user, params)


@router.get("/export")
def export_clients(
    params: ClientSearchParams = Depends(client_search_params),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("clients.export"))
):
    """Экспорт клиентов в CSV с фильтрами списка"""
    content = export_clients_csv(db, current_user, params)
    return Response(
        content=content,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{settings.EXPORT_FILENAME}"'},
    )


@router.post("/import", response_model=ImportResultResponse)
def import_clients_csv(
    file: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    """Импорт клиентов из CSV (только менеджер)"""
    payload = file.file.read() if file is not None else None
    content_type = file.content_type if file is not None else None
    report = import_clients(db, payload, current_user, content_type=content_type)
    return report.to_dict()


@router.get("/dashboard", response_model=DashboardResponse)
def get_clients_dashboard(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("clients.read"))
):
    """Метрики для дашборда агента/менеджера"""
    return get_dashboard(db, current_user)


@router.get("/{client_id}", response_model=ClientResponse)
def get_client(
    client_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("clients.read"))
):
    return get_visible_client(db, current_user, client_id)


@router.post("", response_model=ClientResponse, status_code=status.HTTP_201_CREATED)
def create_client(
    client_data: ClientCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("clients.write"))
):
    """Создать клиента"""
    data = client_data.model_dump()
    # Агент без указанного ответственного назначается сам
    if current_user.role == UserRole.AGENT.value and not data.get("assigned_agent_id"):
        data["assigned_agent_id"] = current_user.user_id

    now = datetime.utcnow()
    client = Client(**data, created_at=now, updated_at=now)
    db.add(client)
    db.commit()
    db.refresh(client)
    return client


@router.put("/{client_id}", response_model=ClientResponse)
def update_client(
    client_id: str,
    client_update: ClientUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("clients.write"))
):
    """Обновить клиента"""
    client = get_visible_client(db, current_user, client_id)

    data = client_update.model_dump(exclude_unset=True)
    cleared = [f for f in REQUIRED_CLIENT_FIELDS if f in data and data[f] is None]
    if cleared:
        raise ValidationError(fields=cleared)

    for field, value in data.items():
        setattr(client, field, value)
    client.updated_at = datetime.utcnow()

    db.commit()
    db.refresh(client)
    return client


@router.delete("/{client_id}")
def delete_client(
    client_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("clients.write"))
):
    """Удалить клиента (мягкое удаление)"""
    client = get_visible_client(db, current_user, client_id)
    client.deleted_at = datetime.utcnow()
    db.commit()
    return {"message": "Client record soft-deleted."}
