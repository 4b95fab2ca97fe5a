"""
Массовый импорт клиентов из CSV.

csv_reader -> row_validator -> вставка строки -> ImportReport.

Каждая строка сохраняется отдельной транзакцией: ошибка проверки или
ошибка БД при вставке отклоняет только эту строку, пакет всегда
обрабатывается до конца.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import PermissionDenied, ValidationError
from app.core.permissions import has_permission
from app.models.client import Client
from app.models.user import User
from app.services.csv_reader import read_rows
from app.services.row_validator import validate_row

logger = logging.getLogger(__name__)

ALLOWED_CONTENT_TYPES = frozenset({
    "text/csv",
    "application/csv",
    "application/vnd.ms-excel",
    "text/plain",
    "application/octet-stream",
})


@dataclass
class ImportReport:
    total_rows: int = 0
    accepted: int = 0
    rejected: int = 0

    def to_dict(self) -> dict:
        return {
            "message": "CSV import completed",
            "successCount": self.accepted,
            "errorCount": self.rejected,
        }


def ensure_can_import(user: User) -> None:
    if not has_permission(user.role, "clients.import"):
        raise PermissionDenied("Only managers can import clients.")


def _check_content_type(content_type: Optional[str]) -> None:
    if not content_type:
        return
    base = content_type.split(";", 1)[0].strip().lower()
    if base not in ALLOWED_CONTENT_TYPES:
        raise ValidationError(f"Unsupported content type: {base}")


def import_clients(
    db: Session,
    payload: Optional[str | bytes],
    acting_user: User,
    *,
    content_type: Optional[str] = None,
) -> ImportReport:
    """
    Импортировать клиентов из CSV.

    Raises:
        PermissionDenied: пользователь не менеджер
        ValidationError: файла нет или он не разбирается как CSV
    """
    ensure_can_import(acting_user)
    if not payload:
        raise ValidationError("CSV file is required.")
    _check_content_type(content_type)

    rows = read_rows(payload)
    report = ImportReport(total_rows=len(rows))

    for line_no, row in enumerate(rows, start=2):   # строка 1 - заголовок
        try:
            data = validate_row(row)
        except ValidationError as exc:
            report.rejected += 1
            logger.info("Import row %d rejected: %s", line_no, exc.message)
            continue

        now = datetime.utcnow()
        client = Client(**data.model_dump(), created_at=now, updated_at=now)
        try:
            db.add(client)
            db.commit()
        except SQLAlchemyError as exc:
            db.rollback()
            report.rejected += 1
            logger.warning("Import row %d not stored: %s", line_no, exc)
            continue
        report.accepted += 1

    logger.info(
        "CSV import by %s: %d accepted, %d rejected of %d rows",
        acting_user.user_id, report.accepted, report.rejected, report.total_rows,
    )
    return report
