"""
Relógio do domínio.

Services recebem um callable que devolve o instante atual em UTC.
Cada operação de escrita lê o relógio uma única vez, e testes
injetam um relógio fixo para obter timestamps determinísticos.
"""

from datetime import datetime, timezone
from typing import Callable


Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Instante atual, timezone-aware em UTC."""
    return datetime.now(timezone.utc)


def to_iso(value: datetime) -> str:
    """
    Formata datetime como ISO-8601 UTC com milissegundos e sufixo Z.

    Example:
        to_iso(datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc))
        # '2024-01-15T10:30:00.000Z'
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return (
        value.astimezone(timezone.utc)
        .isoformat(timespec="milliseconds")
        .replace("+00:00", "Z")
    )
