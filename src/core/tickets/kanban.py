"""
View Organizer - Quadro Kanban.

Organiza tickets em colunas por status, agrupa por categoria dentro
de cada coluna e ordena cada grupo por urgência.

Pipeline:
    partition_by_status → partition_by_category → sort_by_priority → to_card

Nenhuma etapa altera a coleção recebida.
"""

from typing import Dict, Iterable, List

from .dtos import KanbanBoardDTO, TicketCardDTO
from .entities import Ticket, TicketCategory, TicketStatus


def partition_by_status(tickets: Iterable[Ticket]) -> Dict[TicketStatus, List[Ticket]]:
    """
    Agrupa tickets por status.

    Returns:
        Dict com exatamente as 4 chaves de TicketStatus (listas vazias
        inclusive), preservando a ordem relativa de entrada
    """
    groups: Dict[TicketStatus, List[Ticket]] = {status: [] for status in TicketStatus}
    for ticket in tickets:
        groups[ticket.status].append(ticket)
    return groups


def partition_by_category(tickets: Iterable[Ticket]) -> Dict[TicketCategory, List[Ticket]]:
    """
    Agrupa tickets por categoria.

    Returns:
        Dict com exatamente as 3 chaves de TicketCategory
    """
    groups: Dict[TicketCategory, List[Ticket]] = {
        category: [] for category in TicketCategory
    }
    for ticket in tickets:
        groups[ticket.category].append(ticket)
    return groups


def sort_by_priority(tickets: Iterable[Ticket]) -> List[Ticket]:
    """
    Ordena por urgência: Critical, High, Medium, Low.

    Ordenação estável: tickets de mesma prioridade mantêm a ordem
    de entrada.
    """
    return sorted(tickets, key=lambda t: t.priority.rank)


def to_card(ticket: Ticket) -> TicketCardDTO:
    """Projeta ticket em card (nome do cliente cai para o e-mail)."""
    return TicketCardDTO(
        id=ticket.id,
        title=ticket.title,
        customer_name=ticket.customer_display_name,
        priority=ticket.priority.value,
        category=ticket.category.value,
    )


def build_board(tickets: Iterable[Ticket]) -> KanbanBoardDTO:
    """
    Monta o quadro completo.

    Returns:
        KanbanBoardDTO com {status: {categoria: [cards]}}, todas as
        colunas e grupos presentes mesmo quando vazios
    """
    columns = {}
    for status, by_status in partition_by_status(tickets).items():
        columns[status.value] = {
            category.value: [to_card(t) for t in sort_by_priority(group)]
            for category, group in partition_by_category(by_status).items()
        }
    return KanbanBoardDTO(columns=columns)
