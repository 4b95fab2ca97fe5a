"""Экспорт клиентов в CSV с теми же фильтрами, что и список."""
import csv
import io
from datetime import datetime

from sqlalchemy.orm import Session

from app.models.client import Client
from app.models.user import User
from app.services.client_query import ClientSearchParams, list_clients

EXPORT_FIELDS = [column.name for column in Client.__table__.columns]


def _cell(value) -> str:
    if value is None:
        return ""
    if isinstance(value, datetime):
        return value.isoformat()
    return str(value)


def export_clients_csv(db: Session, user: User, params: ClientSearchParams) -> str:
    clients = list_clients(db, user, params)

    buffer = io.StringIO()
    writer = csv.writer(buffer)
    writer.writerow(EXPORT_FIELDS)
    for client in clients:
        writer.writerow([_cell(getattr(client, field)) for field in EXPORT_FIELDS])
    return buffer.getvalue()
