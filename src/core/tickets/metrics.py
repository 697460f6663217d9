"""
Metrics Aggregator - Métricas do Dashboard.

Calcula contagens e tempo médio de resolução sobre um snapshot
de tickets. Funções puras e determinísticas.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, Iterable, List

from .dtos import DashboardMetricsDTO
from .entities import Ticket, TicketCategory, TicketPriority, TicketStatus


MILLISECONDS_PER_HOUR = 3_600_000
TWO_PLACES = Decimal("0.01")


def count_open(tickets: Iterable[Ticket]) -> int:
    """Número de tickets com status Open."""
    return sum(1 for t in tickets if t.status is TicketStatus.OPEN)


def count_by_priority(tickets: Iterable[Ticket]) -> Dict[str, int]:
    """Contagem por prioridade, com todas as chaves presentes."""
    counts = {priority.value: 0 for priority in TicketPriority}
    for ticket in tickets:
        counts[ticket.priority.value] += 1
    return counts


def count_by_category(tickets: Iterable[Ticket]) -> Dict[str, int]:
    """Contagem por categoria, com todas as chaves presentes."""
    counts = {category.value: 0 for category in TicketCategory}
    for ticket in tickets:
        counts[ticket.category.value] += 1
    return counts


def _duration_ms(ticket: Ticket) -> int:
    delta = ticket.resolution_time
    return (delta.days * 86_400 + delta.seconds) * 1000 + delta.microseconds // 1000


def average_resolution_hours(tickets: Iterable[Ticket]) -> float:
    """
    Tempo médio de resolução em horas.

    Considera apenas tickets com status ATUAL Resolved e resolved_at
    definido. Durações em milissegundos inteiros; a média é dividida
    por 3.600.000 e arredondada uma única vez para 2 casas (meio
    para cima, 0.125 → 0.13).

    Returns:
        Média em horas, ou 0.0 se nenhum ticket se qualifica
    """
    durations: List[int] = [
        _duration_ms(t) for t in tickets if t.resolution_time is not None
    ]
    if not durations:
        return 0.0

    mean_hours = Decimal(sum(durations)) / Decimal(len(durations)) / MILLISECONDS_PER_HOUR
    return float(mean_hours.quantize(TWO_PLACES, rounding=ROUND_HALF_UP))


def compute_metrics(tickets: Iterable[Ticket]) -> DashboardMetricsDTO:
    """
    Calcula todas as métricas do dashboard.

    Example:
        metrics = compute_metrics(store.query_all())
        metrics.to_dict()
        # {"totalOpen": 3, "byPriority": {...}, "byCategory": {...},
        #  "averageResolutionTime": 4.5}
    """
    snapshot = list(tickets)
    return DashboardMetricsDTO(
        total_open=count_open(snapshot),
        by_priority=count_by_priority(snapshot),
        by_category=count_by_category(snapshot),
        average_resolution_time=average_resolution_hours(snapshot),
    )
