# mhsurvey/utils/csv_tools.py
"""Utilidades CSV: parseo posicional de filas y serialización simple."""
from __future__ import annotations

from typing import Any, Callable, Iterable, List, Mapping, Optional, Sequence, TypeVar

T = TypeVar("T")

EMPLOYEE_CSV_HEADERS = ["name", "email", "sector", "position"]


class CsvRow(list):
    """Fila posicional: un índice fuera de rango devuelve None en vez de fallar."""

    def __getitem__(self, index):
        if isinstance(index, int) and not -len(self) <= index < len(self):
            return None
        return super().__getitem__(index)


def decode_csv_bytes(raw: bytes) -> str:
    # UTF-8 con BOM soportado; fallback simple a latin-1
    try:
        return raw.decode("utf-8-sig")
    except UnicodeDecodeError:
        return raw.decode("latin-1")


def parse_csv_text(
    text: str,
    mapper: Callable[[CsvRow], T],
    skip_header: bool = True,
    delimiter: str = ",",
    trim: bool = True,
) -> List[T]:
    lines = [line for line in text.splitlines() if line.strip()]
    if skip_header:
        lines = lines[1:]

    rows: List[T] = []
    for line in lines:
        # separación simple: sin comillas ni escapes
        values = line.split(delimiter)
        if trim:
            values = [v.strip() for v in values]
        rows.append(mapper(CsvRow(values)))
    return rows


def parse_csv_bytes(raw: bytes, mapper: Callable[[CsvRow], T], **options: Any) -> List[T]:
    return parse_csv_text(decode_csv_bytes(raw), mapper, **options)


def objects_to_csv(records: Iterable[Any], headers: Sequence[str]) -> str:
    """Encabezado + una fila por registro, valores unidos con coma sin escapar.

    None o campo ausente -> vacío.
    """
    lines = [",".join(headers)]
    for record in records:
        lines.append(",".join(str(_field(record, h)) for h in headers))
    return "\n".join(lines)


def _field(record: Any, name: str) -> Any:
    if isinstance(record, Mapping):
        value = record.get(name)
    else:
        value = getattr(record, name, None)
    if value is None:
        return ""
    return getattr(value, "value", value)  # Enum -> valor


def generate_employee_csv_template() -> str:
    return objects_to_csv(
        [
            {"name": "João Silva", "email": "joao@empresa.com", "sector": "TI", "position": "Desenvolvedor"},
            {"name": "Maria Santos", "email": "maria@empresa.com", "sector": "RH", "position": "Analista"},
        ],
        EMPLOYEE_CSV_HEADERS,
    )


def employee_row_mapper(row: CsvRow) -> dict[str, Optional[str]]:
    return {
        "name": row[0],
        "email": row[1],
        "sector": row[2],
        "position": row[3],
    }
