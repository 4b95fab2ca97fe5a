"""
Чтение CSV для импорта.

  - удаление UTF-8 BOM
  - строгое декодирование UTF-8
  - обрезка пробелов в заголовках и значениях
  - первая строка используется как имена полей

Любая проблема со структурой файла - одна ошибка на весь файл,
а не на отдельную строку.
"""
from __future__ import annotations

import csv
import io
from typing import Dict, List

from app.core.errors import ValidationError


def read_rows(raw: str | bytes) -> List[Dict[str, str]]:
    text = _decode(raw)
    if not text.strip():
        raise ValidationError("CSV file is empty")

    try:
        reader = csv.reader(io.StringIO(text, newline=""), strict=True)
        header = next(reader, None)
        if not header or not any(h.strip() for h in header):
            raise ValidationError("CSV has no header row")
        header = [h.strip() for h in header]

        rows = []
        for values in reader:
            if not any(v.strip() for v in values):
                continue
            if len(values) != len(header):
                raise ValidationError(
                    f"Invalid record length on line {reader.line_num}: "
                    f"expected {len(header)} columns, got {len(values)}"
                )
            rows.append({name: value.strip() for name, value in zip(header, values)})
    except csv.Error as exc:
        raise ValidationError(f"Malformed CSV: {exc}") from exc

    return rows


def _decode(raw: str | bytes) -> str:
    if isinstance(raw, bytes):
        if raw.startswith(b"\xef\xbb\xbf"):
            raw = raw[3:]
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise ValidationError("CSV file must be UTF-8 encoded") from exc
    if raw.startswith("\ufeff"):
        return raw[1:]
    return raw
