"""
Shared Domain Components.

Contém componentes compartilhados entre todos os domínios:
- Exceções de domínio
- Interfaces (Ports) de transação e eventos
- Base class para Domain Events
- Relógio UTC injetável
"""

from .exceptions import (
    DomainException,
    ValidationError,
    NotFoundError,
    DecodeError,
)
from .events import DomainEvent
from .interfaces import UnitOfWork, EventPublisher
from .clock import utc_now

__all__ = [
    "DomainException",
    "ValidationError",
    "NotFoundError",
    "DecodeError",
    "DomainEvent",
    "UnitOfWork",
    "EventPublisher",
    "utc_now",
]
