"""Resource table calculations shared by every export format."""

import math
from dataclasses import dataclass
from typing import Any, Iterable, Optional, Sequence


def safe_number(v) -> float:
    """Coerce a quantity to a finite float; anything unparsable becomes 0."""
    if v is None:
        return 0.0
    if isinstance(v, bool):
        return float(v)
    try:
        if isinstance(v, (int, float)):
            number = float(v)
        else:
            s = str(v).strip()
            number = float(s) if s else 0.0
    except (TypeError, ValueError):
        return 0.0
    return number if math.isfinite(number) else 0.0


def format_number(v) -> str:
    """Render a quantity the way it is typed: ``3`` rather than ``3.0``."""
    number = safe_number(v)
    if number.is_integer():
        return str(int(number))
    return f"{number:.4f}".rstrip("0").rstrip(".")


def _field(row: Any, name: str):
    if isinstance(row, dict):
        return row.get(name)
    return getattr(row, name, None)


def row_accumulated(prev, today) -> float:
    """The value an accumulated cell holds for one row: previous plus today."""
    return safe_number(prev) + safe_number(today)


@dataclass(frozen=True)
class TableTotals:
    """Column sums of one resource table and the body rows it renders."""

    total_prev: float = 0.0
    total_today: float = 0.0
    total_accumulated: float = 0.0
    effective_row_count: int = 0


def effective_row_count(rows: Sequence, paired: Optional[Sequence] = None, minimum: int = 1) -> int:
    """Body rows a table needs so both tables of a side-by-side pair line up."""
    return max(len(rows), len(paired) if paired is not None else 0, minimum)


def compute_totals(rows: Iterable, paired: Optional[Sequence] = None, minimum: int = 1) -> TableTotals:
    """Sum prev/today/accumulated over ``rows``.

    ``accumulated`` is taken from the rows as given; it is not recomputed
    per row. Non-numeric values count as zero.
    """
    rows = list(rows)
    return TableTotals(
        total_prev=math.fsum(safe_number(_field(r, "prev")) for r in rows),
        total_today=math.fsum(safe_number(_field(r, "today")) for r in rows),
        total_accumulated=math.fsum(safe_number(_field(r, "accumulated")) for r in rows),
        effective_row_count=effective_row_count(rows, paired, minimum),
    )
