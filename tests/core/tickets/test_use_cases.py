"""
Testes Unitários para Use Cases do Domínio de Tickets.

Testa os serviços de aplicação (use cases) que orquestram
a lógica de negócio do domínio de tickets.

Estratégia de Teste:
- Usa InMemoryTicketStore (fake) para isolamento
- Usa FakeUnitOfWork para testar transações
- Relógio fixo para timestamps determinísticos
- Verifica eventos publicados
- Testa cenários de sucesso e erro

Coverage:
- CreateTicketService
- UpdateStatusService
- AddCommentService
- GetTicketService / ListTicketsService / ListCommentsService
- MoveTicketService
- KanbanBoardService
- DashboardMetricsService
"""

import logging
import pytest
from typing import List

from src.core.tickets.use_cases import (
    AddCommentService,
    CreateTicketService,
    DashboardMetricsService,
    GetTicketService,
    KanbanBoardService,
    ListCommentsService,
    ListTicketsService,
    MoveTicketService,
    UpdateStatusService,
)
from src.core.tickets.dtos import (
    AddCommentInputDTO,
    CreateTicketInputDTO,
    MoveTicketInputDTO,
    TicketFilterCriteria,
    UpdateStatusInputDTO,
)
from src.core.tickets.entities import TicketPriority, TicketStatus
from src.core.tickets.events import (
    CommentAddedEvent,
    TicketCreatedEvent,
    TicketStatusChangedEvent,
)
from src.core.tickets.ports import InMemoryTicketStore
from src.core.shared.exceptions import NotFoundError, ValidationError
from src.core.shared.events import DomainEvent


class FakeUnitOfWork:
    """
    Fake Unit of Work para testes.

    Permite testar:
    - Comportamento de commit/rollback
    - Eventos publicados
    """

    def __init__(self):
        self._events: List[DomainEvent] = []
        self._committed = False
        self._rolled_back = False

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is not None:
            self.rollback()
        else:
            self.commit()
        return False

    def _begin_transaction(self):
        pass

    def commit(self):
        self._committed = True

    def rollback(self):
        self._rolled_back = True
        self._events.clear()

    def publish_event(self, event: DomainEvent):
        self._events.append(event)

    def collect_events(self) -> List[DomainEvent]:
        return list(self._events)

    @property
    def committed(self) -> bool:
        return self._committed

    @property
    def rolled_back(self) -> bool:
        return self._rolled_back


class FailingCommentStore(InMemoryTicketStore):
    """Store cujo insert_comment sempre falha."""

    def insert_comment(self, comment):
        raise RuntimeError("comments table unavailable")


@pytest.fixture
def store():
    """Fixture para store em memória."""
    return InMemoryTicketStore()


@pytest.fixture
def uow():
    """Fixture para Unit of Work fake."""
    return FakeUnitOfWork()


@pytest.fixture
def create_input():
    return CreateTicketInputDTO(
        title="Cannot login",
        description="Invalid credentials error",
        category="Technical",
        priority="High",
        customer_email="john@example.com",
        customer_name="John Doe",
    )


@pytest.fixture
def sample_ticket(store, clock, create_input):
    """Ticket Open criado em BASE_TIME."""
    return CreateTicketService(store, FakeUnitOfWork(), clock).execute(create_input)


def _update(store, uow, clock, ticket_id, status, actor="agent-1"):
    return UpdateStatusService(store, uow, clock).execute(
        UpdateStatusInputDTO(ticket_id=ticket_id, status=status, actor_id=actor)
    )


class TestCreateTicketService:
    """Testes para CreateTicketService."""

    def test_criar_ticket_sucesso(self, store, uow, clock, create_input):
        """Deve criar ticket Open com timestamps do relógio."""
        output = CreateTicketService(store, uow, clock).execute(create_input)

        assert output.status == "Open"
        assert output.priority == "High"
        assert output.created_at == output.updated_at == clock()
        assert output.resolved_at is None
        assert output.comments == []
        assert store.count() == 1
        assert uow.committed

    def test_criar_ticket_publica_evento(self, store, uow, clock, create_input):
        output = CreateTicketService(store, uow, clock).execute(create_input)

        events = uow.collect_events()
        assert len(events) == 1
        assert isinstance(events[0], TicketCreatedEvent)
        assert events[0].aggregate_id == output.id
        assert events[0].priority == "High"

    def test_criar_ticket_invalido_nao_grava(self, store, uow, clock):
        """Deve rejeitar entrada inválida sem tocar no store."""
        bad = CreateTicketInputDTO(
            title="Cannot login",
            description="Invalid credentials error",
            category="Technical",
            priority="High",
            customer_email="not-an-email",
        )

        with pytest.raises(ValidationError) as exc_info:
            CreateTicketService(store, uow, clock).execute(bad)

        assert exc_info.value.field == "customerEmail"
        assert store.count() == 0
        assert uow.collect_events() == []

    def test_to_dict_formato_api(self, store, uow, clock, create_input):
        data = CreateTicketService(store, uow, clock).execute(create_input).to_dict()

        assert data["customerEmail"] == "john@example.com"
        assert data["createdAt"] == "2024-01-15T10:00:00.000Z"
        assert data["resolvedAt"] is None
        assert data["comments"] == []


class TestUpdateStatusService:
    """Testes para UpdateStatusService."""

    def test_resolver_ticket(self, store, uow, clock, sample_ticket):
        """Resolver grava resolved_at == updated_at e comentário de sistema por último."""
        clock.advance(hours=3)

        output = _update(store, uow, clock, sample_ticket.id, "Resolved")

        assert output.status == "Resolved"
        assert output.updated_at == clock()
        assert output.resolved_at == output.updated_at
        assert output.created_at == sample_ticket.created_at

        last = output.comments[-1]
        assert last.content == "Status changed to Resolved"
        assert last.is_system is True
        assert last.author_name == "System"
        assert last.author_id == "agent-1"
        assert last.created_at == output.updated_at

    def test_preserva_outros_campos(self, store, uow, clock, sample_ticket):
        clock.advance(minutes=5)

        output = _update(store, uow, clock, sample_ticket.id, "In Progress")

        assert output.title == sample_ticket.title
        assert output.description == sample_ticket.description
        assert output.priority == sample_ticket.priority
        assert output.category == sample_ticket.category
        assert output.customer_email == sample_ticket.customer_email
        assert output.resolved_at is None

    def test_publica_evento(self, store, uow, clock, sample_ticket):
        _update(store, uow, clock, sample_ticket.id, "Closed")

        events = uow.collect_events()
        assert len(events) == 1
        assert isinstance(events[0], TicketStatusChangedEvent)
        assert events[0].previous_status == "Open"
        assert events[0].new_status == "Closed"

    def test_ticket_inexistente(self, store, uow, clock):
        with pytest.raises(NotFoundError) as exc_info:
            _update(store, uow, clock, "missing-id", "Resolved")

        assert exc_info.value.resource_id == "missing-id"
        assert exc_info.value.message == "Ticket with ID missing-id not found"
        assert uow.rolled_back

    def test_status_invalido_nao_grava(self, store, uow, clock, sample_ticket):
        with pytest.raises(ValidationError):
            _update(store, uow, clock, sample_ticket.id, "Done")

        assert store.get_by_id(sample_ticket.id).status is TicketStatus.OPEN
        assert store.get_comments_by_ticket(sample_ticket.id) == []

    def test_mesmo_status_grava_comentario_redundante(self, store, uow, clock, sample_ticket):
        clock.advance(minutes=1)
        _update(store, uow, clock, sample_ticket.id, "Open")
        clock.advance(minutes=1)
        output = _update(store, FakeUnitOfWork(), clock, sample_ticket.id, "Open")

        assert [c.content for c in output.comments] == [
            "Status changed to Open",
            "Status changed to Open",
        ]
        assert output.updated_at == clock()

    def test_reabrir_mantem_resolved_at(self, store, uow, clock, sample_ticket):
        clock.advance(hours=2)
        resolved = _update(store, uow, clock, sample_ticket.id, "Resolved")
        clock.advance(hours=1)

        reopened = _update(store, FakeUnitOfWork(), clock, sample_ticket.id, "In Progress")

        assert reopened.resolved_at == resolved.resolved_at
        assert reopened.status == "In Progress"

    def test_falha_no_comentario_loga_e_propaga(self, clock, create_input, caplog):
        store = FailingCommentStore()
        ticket = CreateTicketService(store, FakeUnitOfWork(), clock).execute(create_input)
        uow = FakeUnitOfWork()

        with caplog.at_level(logging.ERROR, logger="src.core.tickets.use_cases"):
            with pytest.raises(RuntimeError):
                _update(store, uow, clock, ticket.id, "Resolved")

        assert uow.rolled_back
        assert uow.collect_events() == []
        assert "Failed to record status change comment" in caplog.text

    def test_aceita_enum_como_status(self, store, uow, clock, sample_ticket):
        output = _update(store, uow, clock, sample_ticket.id, TicketStatus.CLOSED)
        assert output.status == "Closed"


class TestAddCommentService:
    """Testes para AddCommentService."""

    def test_adicionar_comentario(self, store, uow, clock, sample_ticket):
        clock.advance(minutes=30)

        comment = AddCommentService(store, uow, clock).execute(
            AddCommentInputDTO(
                ticket_id=sample_ticket.id,
                content="  Looking into it  ",
                author_id="agent-1",
                author_name="Alice Johnson",
            )
        )

        assert comment.content == "Looking into it"
        assert comment.is_system is False
        assert comment.created_at == clock()
        assert comment.to_dict()["authorName"] == "Alice Johnson"

    def test_nao_altera_updated_at(self, store, uow, clock, sample_ticket):
        clock.advance(minutes=30)
        AddCommentService(store, uow, clock).execute(
            AddCommentInputDTO(sample_ticket.id, "Note", "agent-1", "Alice")
        )

        assert store.get_by_id(sample_ticket.id).updated_at == sample_ticket.updated_at

    def test_publica_evento(self, store, uow, clock, sample_ticket):
        content = "x" * 150
        comment = AddCommentService(store, uow, clock).execute(
            AddCommentInputDTO(sample_ticket.id, content, "agent-1", "Alice")
        )

        event = uow.collect_events()[0]
        assert isinstance(event, CommentAddedEvent)
        assert event.comment_id == comment.id
        assert len(event.content_preview) == 100

    def test_conteudo_vazio(self, store, uow, clock, sample_ticket):
        with pytest.raises(ValidationError) as exc_info:
            AddCommentService(store, uow, clock).execute(
                AddCommentInputDTO(sample_ticket.id, "   ", "agent-1", "Alice")
            )

        assert exc_info.value.field == "content"
        assert store.get_comments_by_ticket(sample_ticket.id) == []

    def test_ticket_inexistente(self, store, uow, clock):
        with pytest.raises(NotFoundError):
            AddCommentService(store, uow, clock).execute(
                AddCommentInputDTO("missing-id", "Hello", "agent-1", "Alice")
            )


class TestReadServices:
    """Testes para GetTicketService, ListTicketsService e ListCommentsService."""

    def test_get_ticket_com_comentarios_em_ordem(self, store, uow, clock, sample_ticket):
        clock.advance(minutes=1)
        _update(store, uow, clock, sample_ticket.id, "In Progress")
        clock.advance(minutes=1)
        AddCommentService(store, FakeUnitOfWork(), clock).execute(
            AddCommentInputDTO(sample_ticket.id, "Working on it", "agent-1", "Alice")
        )

        output = GetTicketService(store).execute(sample_ticket.id)

        assert [c.content for c in output.comments] == [
            "Status changed to In Progress",
            "Working on it",
        ]

    def test_comentarios_no_mesmo_instante_em_ordem_de_insercao(self, store, uow, clock, sample_ticket):
        for text in ("first", "second", "third"):
            AddCommentService(store, FakeUnitOfWork(), clock).execute(
                AddCommentInputDTO(sample_ticket.id, text, "agent-1", "Alice")
            )

        comments = ListCommentsService(store).execute(sample_ticket.id)

        assert [c.content for c in comments] == ["first", "second", "third"]

    def test_get_ticket_inexistente(self, store):
        with pytest.raises(NotFoundError):
            GetTicketService(store).execute("missing-id")

    def test_list_comments_ticket_inexistente(self, store):
        with pytest.raises(NotFoundError):
            ListCommentsService(store).execute("missing-id")

    def test_listar_mais_recentes_primeiro(self, store, clock, create_input):
        ids = []
        for _ in range(3):
            ids.append(CreateTicketService(store, FakeUnitOfWork(), clock).execute(create_input).id)
            clock.advance(hours=1)

        result = ListTicketsService(store).execute()

        assert [t.id for t in result] == list(reversed(ids))

    def test_listar_com_filtro(self, store, clock, sample_ticket):
        other = CreateTicketService(store, FakeUnitOfWork(), clock).execute(
            CreateTicketInputDTO(
                title="Invoice",
                description="Wrong amount",
                category="Billing",
                priority="Low",
                customer_email="ann@example.com",
            )
        )

        result = ListTicketsService(store).execute(
            TicketFilterCriteria(priority=TicketPriority.LOW)
        )

        assert [t.id for t in result] == [other.id]


class TestMoveTicketService:
    """Testes para MoveTicketService (drag-and-drop)."""

    def test_mover_para_outra_coluna(self, store, uow, clock, sample_ticket):
        result = MoveTicketService(store, uow, clock).execute(
            MoveTicketInputDTO(sample_ticket.id, "In Progress", "agent-1")
        )

        assert result.moved is True
        assert result.ticket.status == "In Progress"
        assert result.ticket.comments[-1].content == "Status changed to In Progress"

    def test_mesma_coluna_nao_grava(self, store, uow, clock, sample_ticket):
        clock.advance(minutes=5)

        result = MoveTicketService(store, uow, clock).execute(
            MoveTicketInputDTO(sample_ticket.id, "Open", "agent-1")
        )

        assert result.moved is False
        assert result.ticket.updated_at == sample_ticket.updated_at
        assert store.get_comments_by_ticket(sample_ticket.id) == []
        assert uow.collect_events() == []

    def test_ticket_inexistente(self, store, uow, clock):
        with pytest.raises(NotFoundError):
            MoveTicketService(store, uow, clock).execute(
                MoveTicketInputDTO("missing-id", "Open", "agent-1")
            )

    def test_status_invalido(self, store, uow, clock, sample_ticket):
        with pytest.raises(ValidationError):
            MoveTicketService(store, uow, clock).execute(
                MoveTicketInputDTO(sample_ticket.id, "Archived", "agent-1")
            )

    def test_to_dict(self, store, uow, clock, sample_ticket):
        data = MoveTicketService(store, uow, clock).execute(
            MoveTicketInputDTO(sample_ticket.id, "Closed", "agent-1")
        ).to_dict()

        assert data["moved"] is True
        assert data["ticket"]["status"] == "Closed"


class TestAggregationServices:
    """Testes para KanbanBoardService e DashboardMetricsService."""

    def test_kanban_board(self, store, sample_ticket):
        board = KanbanBoardService(store).execute()

        cards = board.columns["Open"]["Technical"]
        assert [c.id for c in cards] == [sample_ticket.id]
        assert board.total == 1

    def test_kanban_board_com_filtro(self, store, sample_ticket):
        board = KanbanBoardService(store).execute(
            TicketFilterCriteria(customer_email="nobody@example.com")
        )

        assert board.total == 0
        assert set(board.columns) == {"Open", "In Progress", "Resolved", "Closed"}

    def test_dashboard_metrics(self, store, uow, clock, sample_ticket):
        clock.advance(hours=4)
        _update(store, uow, clock, sample_ticket.id, "Resolved")

        metrics = DashboardMetricsService(store).execute()

        assert metrics.total_open == 0
        assert metrics.by_priority["High"] == 1
        assert metrics.by_category["Technical"] == 1
        assert metrics.average_resolution_time == 4.0
