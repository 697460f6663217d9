"""
Event Publishers - Publicadores de Eventos de Domínio.

Responsável por entregar eventos aos handlers.
Implementações:
- LoggingEventPublisher: Loga e executa handlers locais (modo sync)
- CeleryEventPublisher: Publica via Celery (modo celery)
- InMemoryEventPublisher: Para testes

Padrão Observer/Pub-Sub para desacoplamento.
"""

from typing import Callable, Dict, List
import json
import logging

from src.core.shared.events import DomainEvent
from src.core.shared.interfaces import EventPublisher

logger = logging.getLogger(__name__)


EventHandler = Callable[[DomainEvent], None]


class LoggingEventPublisher(EventPublisher):
    """
    Publisher síncrono: loga o evento e executa handlers locais.

    Usado em desenvolvimento e testes de integração, sem necessidade
    de broker. Erro em handler é logado e não interrompe os demais.
    """

    def __init__(self, log_level: int = logging.INFO):
        self._log_level = log_level
        self._handlers: Dict[str, List[EventHandler]] = {}

    def publish(self, event: DomainEvent) -> None:
        event_data = event.to_dict()

        logger.log(
            self._log_level,
            f"[EVENT] {event.event_type} | "
            f"aggregate={event.aggregate_id} | "
            f"data={json.dumps(event_data, default=str)}"
        )

        self._dispatch_to_handlers(event)

    def register_handler(self, event_type: str, handler: EventHandler) -> None:
        """Registra handler para tipo de evento."""
        self._handlers.setdefault(event_type, []).append(handler)

    def _dispatch_to_handlers(self, event: DomainEvent) -> None:
        for handler in self._handlers.get(event.event_type, []):
            try:
                handler(event)
            except Exception:
                logger.exception(f"Handler failed for {event.event_type}")


class CeleryEventPublisher(EventPublisher):
    """
    Publisher que envia eventos para Celery.

    Usado em produção para processamento assíncrono. Falha ao
    enfileirar é logada e não quebra o fluxo principal, pois a
    escrita já foi comitada.
    """

    def __init__(self, also_log: bool = True):
        self._also_log = also_log

    def publish(self, event: DomainEvent) -> None:
        if self._also_log:
            logger.info(
                f"[EVENT->CELERY] {event.event_type} | "
                f"aggregate={event.aggregate_id}"
            )

        from src.adapters.django_app.events.handlers import dispatch_domain_event

        try:
            dispatch_domain_event.delay(event.event_type, event.to_dict())
        except Exception:
            logger.exception(f"Failed to enqueue {event.event_type} on Celery")


class InMemoryEventPublisher(EventPublisher):
    """
    Publisher em memória para testes.

    Armazena eventos publicados para verificação em testes.
    """

    def __init__(self):
        self._published_events: List[DomainEvent] = []
        self._handlers: Dict[str, List[EventHandler]] = {}

    def publish(self, event: DomainEvent) -> None:
        self._published_events.append(event)
        for handler in self._handlers.get(event.event_type, []):
            handler(event)

    @property
    def published_events(self) -> List[DomainEvent]:
        return self._published_events.copy()

    def clear(self) -> None:
        self._published_events.clear()

    def get_events_by_type(self, event_type: str) -> List[DomainEvent]:
        """Filtra eventos por tipo."""
        return [e for e in self._published_events if e.event_type == event_type]

    def register_handler(self, event_type: str, handler: EventHandler) -> None:
        self._handlers.setdefault(event_type, []).append(handler)


# Eventos que alteram as métricas do dashboard
METRICS_EVENTS = ("TicketCreatedEvent", "TicketStatusChangedEvent")


def get_event_publisher(mode: str = "sync") -> EventPublisher:
    """
    Factory para obter publisher apropriado.

    Args:
        mode: "sync" (log + invalidação local do cache) ou "celery"

    Returns:
        Publisher configurado

    Raises:
        ValueError: Se modo desconhecido
    """
    if mode == "celery":
        return CeleryEventPublisher()

    if mode == "sync":
        from src.adapters.django_app.events.handlers import invalidate_dashboard_cache

        publisher = LoggingEventPublisher()
        for event_type in METRICS_EVENTS:
            publisher.register_handler(event_type, invalidate_dashboard_cache)
        return publisher

    raise ValueError(f"Unknown EVENT_PUBLISHER_MODE: {mode}")
