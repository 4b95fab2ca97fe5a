"""
Общая логика выборки клиентов: список и экспорт используют одни и те же
параметры поиска, сортировки и пагинации.
"""
from dataclasses import dataclass
from typing import List, Optional

from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.errors import NotFound, PermissionDenied
from app.core.permissions import can_access_client, scope_clients
from app.models.client import Client
from app.models.user import User

SORTABLE_FIELDS = {
    "client_id": Client.client_id,
    "full_name": Client.full_name,
    "created_at": Client.created_at,
    "updated_at": Client.updated_at,
}
FALLBACK_SORT_FIELD = "full_name"
SORT_ORDERS = ("asc", "desc")


@dataclass
class ClientSearchParams:
    query: Optional[str] = None
    limit: int = settings.DEFAULT_PAGE_LIMIT
    offset: int = 0
    sort_by: str = "created_at"
    sort_order: str = "desc"

    def resolved_sort(self) -> tuple:
        """Поле и направление сортировки после проверки по белому списку"""
        sort_by = self.sort_by if self.sort_by in SORTABLE_FIELDS else FALLBACK_SORT_FIELD
        sort_order = (self.sort_order or "").lower()
        if sort_order not in SORT_ORDERS:
            sort_order = "asc"
        return sort_by, sort_order


def list_clients(db: Session, user: User, params: ClientSearchParams) -> List[Client]:
    query = scope_clients(db.query(Client), user)

    if params.query:
        query = query.filter(Client.full_name.ilike(f"%{params.query}%"))

    sort_by, sort_order = params.resolved_sort()
    column = SORTABLE_FIELDS[sort_by]
    ordering = column.asc() if sort_order == "asc" else column.desc()
    # client_id - стабильный порядок при равных значениях
    query = query.order_by(ordering, Client.client_id.asc())

    return query.offset(params.offset).limit(params.limit).all()


def get_visible_client(db: Session, user: User, client_id: str) -> Client:
    client = db.query(Client).filter(
        Client.client_id == client_id,
        Client.deleted_at.is_(None)
    ).first()
    if not client:
        raise NotFound("Client not found")
    if not can_access_client(user, client):
        raise PermissionDenied()
    return client
