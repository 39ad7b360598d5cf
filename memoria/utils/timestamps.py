"""Helpers de timestamps ISO-8601."""

from datetime import datetime, timezone

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


def utc_now_iso() -> str:
    """Instante actual en UTC, formato ``2024-11-28T10:00:00.000Z``."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_timestamp(value: str | None) -> datetime:
    """Parsea un timestamp ISO-8601; valores inválidos quedan al inicio de los tiempos."""
    if not value:
        return _EPOCH
    try:
        parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError:
        return _EPOCH
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed
