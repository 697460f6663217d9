"""
Estratégias hypothesis para os testes de propriedade.

Fixtures de escopo de função não combinam com @given, então os
tickets gerados são montados aqui, fora do conftest.
"""

from datetime import datetime, timedelta, timezone

from hypothesis import strategies as st

from src.core.tickets.dtos import TicketFilterCriteria
from src.core.tickets.entities import (
    Ticket,
    TicketCategory,
    TicketPriority,
    TicketStatus,
)


BASE_TIME = datetime(2024, 1, 15, 10, 0, 0, tzinfo=timezone.utc)

CUSTOMER_EMAILS = ["ann@example.com", "bob@example.com", "cid@example.com"]

# Um mês de janela para created_at, com resolução de minuto
created_instants = st.integers(min_value=0, max_value=30 * 24 * 60).map(
    lambda minutes: BASE_TIME + timedelta(minutes=minutes)
)

statuses = st.sampled_from(list(TicketStatus))
priorities = st.sampled_from(list(TicketPriority))
categories = st.sampled_from(list(TicketCategory))


@st.composite
def tickets(draw) -> Ticket:
    """Ticket válido; resolved_at pode existir mesmo fora de Resolved (reaberto)."""
    created_at = draw(created_instants)
    status = draw(statuses)

    resolved_at = None
    if status is TicketStatus.RESOLVED or draw(st.booleans()):
        elapsed_ms = draw(st.integers(min_value=0, max_value=10 * 24 * 3_600_000))
        resolved_at = created_at + timedelta(milliseconds=elapsed_ms)

    return Ticket(
        id=str(draw(st.uuids())),
        title=draw(st.text(min_size=1, max_size=30).filter(lambda x: x.strip())),
        description="Generated ticket",
        category=draw(categories),
        priority=draw(priorities),
        status=status,
        customer_email=draw(st.sampled_from(CUSTOMER_EMAILS)),
        customer_name=draw(st.none() | st.sampled_from(["Ann", "Bob", "Cid"])),
        created_at=created_at,
        updated_at=resolved_at or created_at,
        resolved_at=resolved_at,
    )


ticket_lists = st.lists(tickets(), max_size=40, unique_by=lambda t: t.id)

filter_criteria = st.builds(
    TicketFilterCriteria,
    status=st.none() | statuses,
    priority=st.none() | priorities,
    category=st.none() | categories,
    customer_email=st.none() | st.sampled_from(CUSTOMER_EMAILS),
    start_date=st.none() | created_instants,
    end_date=st.none() | created_instants,
)
