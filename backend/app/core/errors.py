"""
Доменные ошибки приложения.

Сервисы поднимают эти исключения, а обработчики в app.main превращают их
в JSON-ответ с соответствующим HTTP статусом.
"""
from typing import List, Optional


class AppError(Exception):
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"detail": self.message}


class PermissionDenied(AppError):
    status_code = 403
    default_message = "Forbidden"


class ValidationError(AppError):
    """Некорректная строка импорта или некорректный запрос"""
    status_code = 400
    default_message = "Invalid data"

    def __init__(self, message: Optional[str] = None, fields: Optional[List[str]] = None):
        self.fields = list(fields or [])
        if message is None and self.fields:
            message = f"Invalid field(s): {', '.join(self.fields)}"
        super().__init__(message)

    def to_dict(self) -> dict:
        data = super().to_dict()
        if self.fields:
            data["fields"] = self.fields
        return data


class NotFound(AppError):
    status_code = 404
    default_message = "Not found"


class StoreUnavailable(AppError):
    status_code = 500
    default_message = "Database unavailable"
