"""
Event Handlers - Processadores de Eventos de Domínio.

Handlers são executados de forma assíncrona via Celery quando
Domain Events são publicados. Isso permite:

- Desacoplamento: Use cases não conhecem o cache do dashboard
- Escalabilidade: Processamento distribuído em workers
- Resiliência: Retry automático em falhas

Tipos de Handlers:
- Auditoria: Log estruturado de cada evento
- Agregação: Invalidar/recalcular métricas do dashboard

Padrão:
    @shared_task(bind=True, ...)
    def handle_<evento>(self, event_data: dict) -> None:
        # Processar evento
"""

import logging
import time
from typing import Any, Dict, Optional

from celery import shared_task
from django.conf import settings
from django.core.cache import cache

logger = logging.getLogger(__name__)


DASHBOARD_CACHE_KEY = "dashboard:metrics"
DASHBOARD_GENERATION_KEY = "dashboard:metrics:generation"


# =============================================================================
# Cache do Dashboard
# =============================================================================
#
# As métricas ficam em "dashboard:metrics:<geração>". Invalidar incrementa
# a geração; um cálculo iniciado antes da invalidação grava na chave da
# geração antiga, que ninguém mais lê.

def _new_generation() -> int:
    return time.time_ns() // 1_000_000


def _metrics_key(generation: int) -> str:
    return f"{DASHBOARD_CACHE_KEY}:{generation}"


def dashboard_cache_generation() -> int:
    """Geração atual das métricas em cache (muda a cada invalidação)."""
    cache.add(DASHBOARD_GENERATION_KEY, _new_generation(), timeout=None)
    generation = cache.get(DASHBOARD_GENERATION_KEY)
    if generation is None:
        generation = _new_generation()
        cache.set(DASHBOARD_GENERATION_KEY, generation, timeout=None)
    return generation


def invalidate_dashboard_cache(event: Optional[Any] = None) -> None:
    """
    Invalida métricas do dashboard em cache.

    Aceita o evento como argumento para servir de handler local
    no LoggingEventPublisher.
    """
    try:
        generation = cache.incr(DASHBOARD_GENERATION_KEY)
    except ValueError:
        # chave ausente (cache limpo ou expulsa)
        generation = _new_generation()
        cache.set(DASHBOARD_GENERATION_KEY, generation, timeout=None)
    logger.debug(f"Dashboard metrics cache invalidated (generation {generation})")


def get_cached_dashboard_metrics(generation: Optional[int] = None) -> Optional[Dict[str, Any]]:
    """Métricas em cache (formato to_dict) da geração informada, ou None."""
    if generation is None:
        generation = dashboard_cache_generation()
    return cache.get(_metrics_key(generation))


def cache_dashboard_metrics(metrics: Dict[str, Any], generation: Optional[int] = None) -> None:
    """
    Guarda métricas por DASHBOARD_CACHE_TTL segundos.

    Args:
        metrics: Métricas (formato to_dict)
        generation: Geração lida ANTES do cálculo; se houve invalidação
            no meio, o resultado fica numa chave morta
    """
    if generation is None:
        generation = dashboard_cache_generation()
    cache.set(_metrics_key(generation), metrics, settings.DASHBOARD_CACHE_TTL)


# =============================================================================
# Event Handlers - Tickets
# =============================================================================

@shared_task(
    bind=True,
    max_retries=3,
    default_retry_delay=60,
    autoretry_for=(Exception,),
    acks_late=True,
)
def handle_ticket_created(self, event_data: Dict[str, Any]) -> None:
    """
    Handler para evento TicketCreatedEvent.

    Ações:
    - Registrar em log (alerta para prioridade Critical)
    - Invalidar métricas do dashboard

    Args:
        event_data: Evento serializado (DomainEvent.to_dict)
    """
    ticket_id = event_data.get('aggregate_id')
    data = event_data.get('data', {})
    priority = data.get('priority')

    logger.info(
        f"[HANDLER] TicketCreated: {ticket_id} | "
        f"Priority: {priority} | Title: {data.get('title')}"
    )
    if priority == 'Critical':
        logger.warning(f"[HANDLER] Critical ticket opened: {ticket_id}")

    invalidate_dashboard_cache()


@shared_task(
    bind=True,
    max_retries=3,
    default_retry_delay=60,
    autoretry_for=(Exception,),
    acks_late=True,
)
def handle_ticket_status_changed(self, event_data: Dict[str, Any]) -> None:
    """
    Handler para evento TicketStatusChangedEvent.

    Ações:
    - Registrar transição em log
    - Invalidar métricas do dashboard

    Args:
        event_data: Evento serializado (DomainEvent.to_dict)
    """
    ticket_id = event_data.get('aggregate_id')
    data = event_data.get('data', {})

    logger.info(
        f"[HANDLER] TicketStatusChanged: {ticket_id} | "
        f"{data.get('previous_status')} -> {data.get('new_status')} | "
        f"Actor: {data.get('actor_id')}"
    )

    invalidate_dashboard_cache()


@shared_task(
    bind=True,
    max_retries=3,
    default_retry_delay=60,
    acks_late=True,
)
def handle_comment_added(self, event_data: Dict[str, Any]) -> None:
    """
    Handler para evento CommentAddedEvent.

    Comentários não afetam as métricas; apenas registra em log.

    Args:
        event_data: Evento serializado (DomainEvent.to_dict)
    """
    data = event_data.get('data', {})
    logger.info(
        f"[HANDLER] CommentAdded: {event_data.get('aggregate_id')} | "
        f"Author: {data.get('author_id')}"
    )


# =============================================================================
# Event Dispatcher (Router)
# =============================================================================

@shared_task(bind=True, max_retries=5, default_retry_delay=30)
def dispatch_domain_event(self, event_type: str, event_data: Dict[str, Any]) -> None:
    """
    Dispatcher central para Domain Events.

    Roteia eventos para os handlers apropriados.
    Este é o ponto de entrada para todos os eventos.

    Args:
        event_type: Tipo do evento (ex: 'TicketCreatedEvent')
        event_data: Dados do evento serializado
    """
    handlers = {
        'TicketCreatedEvent': handle_ticket_created,
        'TicketStatusChangedEvent': handle_ticket_status_changed,
        'CommentAddedEvent': handle_comment_added,
    }

    handler = handlers.get(event_type)

    if handler:
        logger.info(f"[DISPATCHER] Routing {event_type} to handler")
        handler.delay(event_data)
    else:
        logger.warning(f"[DISPATCHER] No handler for {event_type}")


# =============================================================================
# Scheduled Tasks (Beat)
# =============================================================================

@shared_task(bind=True)
def refresh_dashboard_metrics(self) -> Dict[str, Any]:
    """
    Recalcula e guarda em cache as métricas do dashboard.

    Executada periodicamente pelo Celery Beat.

    Returns:
        Métricas calculadas (formato to_dict)
    """
    logger.info("[SCHEDULED] Refreshing dashboard metrics...")

    from src.config.container import get_container

    generation = dashboard_cache_generation()
    metrics = get_container().dashboard_metrics_service().execute().to_dict()
    cache_dashboard_metrics(metrics, generation)

    logger.info(
        f"[SCHEDULED] Dashboard metrics cached: "
        f"open={metrics['totalOpen']} avg={metrics['averageResolutionTime']}h"
    )
    return metrics
