"""
Testes Unitários para o View Organizer (Kanban).

Coverage:
- Partição por status e por categoria (completa, sem perdas, hypothesis)
- Ordenação por prioridade estável
- Projeção em card
- Montagem do quadro
"""

from hypothesis import given, strategies as st

from src.core.tickets.entities import TicketCategory, TicketStatus
from src.core.tickets.kanban import (
    build_board,
    partition_by_category,
    partition_by_status,
    sort_by_priority,
    to_card,
)
from tests.strategies import ticket_lists, tickets as ticket_strategy


PRIORITIES = ["Low", "Medium", "High", "Critical"]
STATUSES = ["Open", "In Progress", "Resolved", "Closed"]
CATEGORIES = ["Technical", "Billing", "General"]


class TestPartitionByStatus:

    def test_sempre_quatro_colunas(self):
        groups = partition_by_status([])

        assert list(groups) == list(TicketStatus)
        assert all(group == [] for group in groups.values())

    @given(ticket_lists)
    def test_particao_completa(self, tickets):
        """Todo ticket aparece exatamente uma vez, na coluna do seu status."""
        groups = partition_by_status(tickets)

        ids = [t.id for group in groups.values() for t in group]
        assert len(ids) == len(set(ids))
        assert set(ids) == {t.id for t in tickets}
        for status, group in groups.items():
            assert all(t.status is status for t in group)

    def test_preserva_ordem_relativa(self, make_ticket):
        tickets = [make_ticket(status="Open", title=str(i)) for i in range(4)]
        groups = partition_by_status(tickets)

        assert [t.title for t in groups[TicketStatus.OPEN]] == ["0", "1", "2", "3"]


class TestPartitionByCategory:

    def test_sempre_tres_grupos(self):
        assert list(partition_by_category([])) == list(TicketCategory)

    @given(ticket_lists)
    def test_particao_completa(self, tickets):
        groups = partition_by_category(tickets)

        ids = [t.id for group in groups.values() for t in group]
        assert len(ids) == len(set(ids))
        assert set(ids) == {t.id for t in tickets}
        for category, group in groups.items():
            assert all(t.category is category for t in group)


class TestSortByPriority:

    def test_ordem_de_urgencia(self, make_ticket):
        tickets = [make_ticket(priority=p) for p in ["Low", "Critical", "Medium", "High"]]

        result = sort_by_priority(tickets)

        assert [t.priority.value for t in result] == ["Critical", "High", "Medium", "Low"]

    def test_estavel_para_mesma_prioridade(self, make_ticket):
        tickets = [
            make_ticket(title="high-1", priority="High"),
            make_ticket(title="low-1", priority="Low"),
            make_ticket(title="high-2", priority="High"),
            make_ticket(title="low-2", priority="Low"),
        ]

        result = sort_by_priority(tickets)

        assert [t.title for t in result] == ["high-1", "high-2", "low-1", "low-2"]

    @given(st.lists(ticket_strategy(), min_size=8, max_size=8, unique_by=lambda t: t.id))
    def test_oito_tickets_mantem_ordem_relativa(self, tickets):
        result = sort_by_priority(tickets)

        ranks = [t.priority.rank for t in result]
        assert ranks == sorted(ranks)
        for priority in PRIORITIES:
            before = [t.id for t in tickets if t.priority.value == priority]
            after = [t.id for t in result if t.priority.value == priority]
            assert before == after

    def test_nao_altera_entrada(self, make_ticket):
        tickets = [make_ticket(priority="Low"), make_ticket(priority="Critical")]
        original = list(tickets)

        sort_by_priority(tickets)

        assert tickets == original


class TestToCard:

    def test_projecao(self, make_ticket):
        ticket = make_ticket(title="Crash", customer_name="Ann", priority="High",
                             category="Billing")

        card = to_card(ticket)

        assert card.to_dict() == {
            "id": ticket.id,
            "title": "Crash",
            "customerName": "Ann",
            "priority": "High",
            "category": "Billing",
        }

    def test_nome_ausente_usa_email(self, make_ticket):
        ticket = make_ticket(customer_name=None, customer_email="ann@example.com")

        assert to_card(ticket).customer_name == "ann@example.com"


class TestBuildBoard:

    def test_quadro_vazio_tem_todas_as_chaves(self):
        board = build_board([])

        assert list(board.columns) == STATUSES
        for groups in board.columns.values():
            assert list(groups) == CATEGORIES
        assert board.total == 0

    @given(ticket_lists)
    def test_todos_os_tickets_aparecem_uma_vez(self, tickets):
        """Cada ticket vira exatamente um card, na coluna e grupo certos."""
        board = build_board(tickets)

        placed = {
            card.id: (status, category, card)
            for status, groups in board.columns.items()
            for category, cards in groups.items()
            for card in cards
        }
        assert board.total == len(tickets) == len(placed)
        for ticket in tickets:
            status, category, card = placed[ticket.id]
            assert (status, category) == (ticket.status.value, ticket.category.value)
            assert card == to_card(ticket)

    @given(ticket_lists)
    def test_grupos_ordenados_por_prioridade(self, tickets):
        board = build_board(tickets)

        for groups in board.columns.values():
            for cards in groups.values():
                ranks = [PRIORITIES[::-1].index(c.priority) for c in cards]
                assert ranks == sorted(ranks)

    def test_cards_ordenados_por_prioridade(self, make_ticket):
        tickets = [
            make_ticket(status="Open", category="Technical", priority="Low"),
            make_ticket(status="Open", category="Technical", priority="Critical"),
        ]

        board = build_board(tickets)
        cards = board.columns["Open"]["Technical"]

        assert [c.priority for c in cards] == ["Critical", "Low"]

    def test_to_dict(self, make_ticket):
        board = build_board([make_ticket(status="Closed", category="General")])
        data = board.to_dict()

        assert data["total"] == 1
        assert len(data["columns"]["Closed"]["General"]) == 1
        assert data["columns"]["Open"]["General"] == []
