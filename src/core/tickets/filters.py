"""
Query/Filter Engine.

Seleciona tickets por critérios opcionais combinados com AND e
ordena o resultado do mais recente para o mais antigo.

Funções puras: nenhuma altera a lista recebida.

Example:
    criteria = TicketFilterCriteria(
        status=TicketStatus.OPEN,
        priority=TicketPriority.HIGH,
    )
    open_high = filter_tickets(store.query_all(), criteria)
"""

from typing import Callable, Iterable, List

from .dtos import TicketFilterCriteria
from .entities import Ticket


Predicate = Callable[[Ticket], bool]


def build_predicates(criteria: TicketFilterCriteria) -> List[Predicate]:
    """
    Traduz critérios em predicados independentes.

    Um critério ausente não gera predicado. Limites de data são
    inclusivos sobre created_at.

    Returns:
        Lista de predicados (vazia se nenhum filtro ativo)
    """
    predicates: List[Predicate] = []

    if criteria.status is not None:
        predicates.append(lambda t: t.status is criteria.status)
    if criteria.priority is not None:
        predicates.append(lambda t: t.priority is criteria.priority)
    if criteria.category is not None:
        predicates.append(lambda t: t.category is criteria.category)
    if criteria.customer_email is not None:
        predicates.append(lambda t: t.customer_email == criteria.customer_email)
    if criteria.start_date is not None:
        predicates.append(lambda t: t.created_at >= criteria.start_date)
    if criteria.end_date is not None:
        predicates.append(lambda t: t.created_at <= criteria.end_date)

    return predicates


def matches(ticket: Ticket, criteria: TicketFilterCriteria) -> bool:
    """True se o ticket satisfaz todos os critérios ativos."""
    return all(predicate(ticket) for predicate in build_predicates(criteria))


def filter_tickets(
    tickets: Iterable[Ticket],
    criteria: TicketFilterCriteria,
) -> List[Ticket]:
    """
    Filtra e ordena tickets.

    Args:
        tickets: Coleção de tickets em qualquer ordem
        criteria: Critérios de filtro (todos opcionais)

    Returns:
        Nova lista com os tickets que satisfazem todos os critérios,
        ordenada por created_at decrescente (empates mantêm a ordem
        de entrada)
    """
    predicates = build_predicates(criteria)
    selected = [t for t in tickets if all(p(t) for p in predicates)]
    return sorted(selected, key=lambda t: t.created_at, reverse=True)
