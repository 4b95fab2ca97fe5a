"""
Проверка одной строки импорта CSV.

Строка приходит как словарь "колонка -> строка". Пустые значения считаются
отсутствующими, лишние колонки игнорируются. Форма записи задается схемой
ClientCreate, поэтому правила импорта и ручного создания клиента совпадают.
"""
from typing import Dict, Optional
from pydantic import ValidationError as PydanticValidationError
from app.core.errors import ValidationError
from app.schemas.client import ClientCreate

CLIENT_FIELDS = tuple(ClientCreate.model_fields.keys())
REQUIRED_FIELDS = ("full_name", "phone", "email", "status")


def _clean(value) -> Optional[str]:
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def validate_row(row: Dict[str, Optional[str]]) -> ClientCreate:
    """
    Проверить строку и вернуть нормализованную запись клиента.

    Raises:
        ValidationError: с перечнем полей, не прошедших проверку
    """
    data = {}
    for field in CLIENT_FIELDS:
        value = _clean(row.get(field))
        if value is not None:
            data[field] = value

    missing = [f for f in REQUIRED_FIELDS if f not in data]
    if missing:
        raise ValidationError(fields=missing)

    try:
        return ClientCreate.model_validate(data)
    except PydanticValidationError as exc:
        fields = []
        for err in exc.errors():
            loc = err.get("loc") or ("row",)
            name = str(loc[0])
            if name not in fields:
                fields.append(name)
        raise ValidationError(fields=fields) from exc
