from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal
import math
import time
from typing import Optional


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def deadline_passed(deadline: Optional[float]) -> bool:
    """`deadline` is a `time.monotonic()` value, None means no deadline."""
    return deadline is not None and time.monotonic() >= deadline


def ensure_utc(value: datetime | None) -> datetime | None:
    """Databases without timezone support hand back naive datetimes stored as UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def elapsed_ms(start: datetime, end: datetime) -> int:
    return int((ensure_utc(end) - ensure_utc(start)).total_seconds() * 1000)


def round_half_up(value: float, digits: int = 0) -> float:
    quantum = Decimal(1).scaleb(-digits)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def format_brl(cents: int) -> str:
    reais = f"{cents / 100:,.2f}"
    # 1,234.56 -> 1.234,56
    reais = reais.replace(",", "_").replace(".", ",").replace("_", ".")
    return f"R$ {reais}"


def minutes_ceil(seconds: int) -> int:
    return math.ceil(seconds / 60)


def to_iso(value: datetime | None) -> str | None:
    value = ensure_utc(value)
    return value.isoformat().replace("+00:00", "Z") if value else None
