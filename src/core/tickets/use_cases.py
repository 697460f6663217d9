"""
Use Cases (Application Services) do Domínio de Tickets.

Este módulo contém os casos de uso da aplicação, que orquestram
a lógica de negócio coordenando entidades, store e eventos.

Use Cases implementados:
- CreateTicketService: Cria novo ticket
- UpdateStatusService: Altera status e registra comentário de auditoria
- AddCommentService: Adiciona comentário manual
- GetTicketService: Obtém ticket com comentários
- ListTicketsService: Lista tickets com filtros
- ListCommentsService: Lista comentários de um ticket
- MoveTicketService: Drag-and-drop no Kanban
- KanbanBoardService: Monta o quadro Kanban
- DashboardMetricsService: Calcula métricas do dashboard

Responsabilidades dos Use Cases:
- Validar entrada (via validators)
- Coordenar entidades
- Gerenciar transações (via UoW)
- Disparar eventos de domínio
- Retornar DTOs de saída

Princípios:
- Um Use Case = Uma operação de negócio
- Dependências injetadas (DI), inclusive o relógio
- Sem lógica de infraestrutura
"""

import logging
from typing import List, Optional

from src.core.shared.clock import Clock, utc_now
from src.core.shared.exceptions import NotFoundError
from src.core.shared.interfaces import UnitOfWork

from .dtos import (
    AddCommentInputDTO,
    CommentOutputDTO,
    CreateTicketInputDTO,
    DashboardMetricsDTO,
    KanbanBoardDTO,
    MoveTicketInputDTO,
    MoveTicketOutputDTO,
    TicketFilterCriteria,
    TicketOutputDTO,
    UpdateStatusInputDTO,
)
from .entities import Comment, Ticket
from .events import CommentAddedEvent, TicketCreatedEvent, TicketStatusChangedEvent
from .filters import filter_tickets
from .kanban import build_board
from .metrics import compute_metrics
from .ports import TicketStore
from .validators import validate_comment_content, validate_status, validate_ticket_input


logger = logging.getLogger(__name__)


def _require_ticket(store: TicketStore, ticket_id: str) -> Ticket:
    ticket = store.get_by_id(ticket_id)
    if ticket is None:
        raise NotFoundError(
            f"Ticket with ID {ticket_id} not found",
            entity_type="Ticket",
            resource_id=ticket_id,
        )
    return ticket


class CreateTicketService:
    """
    Use Case: Criar um novo ticket.

    Fluxo:
    1. Validar dados de entrada
    2. Criar entidade Ticket (status Open)
    3. Persistir via store
    4. Disparar evento TicketCreated
    5. Retornar DTO de saída

    Example:
        service = CreateTicketService(store, uow)
        output = service.execute(CreateTicketInputDTO(
            title="Cannot login",
            description="Invalid credentials error",
            category="Technical",
            priority="High",
            customer_email="john@example.com",
        ))
        print(output.id)  # UUID do ticket criado
    """

    def __init__(self, store: TicketStore, uow: UnitOfWork, clock: Clock = utc_now):
        """
        Inicializa service com dependências injetadas.

        Args:
            store: Store para persistência
            uow: Unit of Work para transação atômica
            clock: Fonte do instante atual (UTC)
        """
        self.store = store
        self.uow = uow
        self.clock = clock

    def execute(self, input_dto: CreateTicketInputDTO) -> TicketOutputDTO:
        """
        Executa criação de ticket em transação atômica.

        Raises:
            ValidationError: Se algum campo for inválido (nada é gravado)
        """
        ticket_input = validate_ticket_input(
            title=input_dto.title,
            description=input_dto.description,
            category=input_dto.category,
            priority=input_dto.priority,
            customer_email=input_dto.customer_email,
            customer_name=input_dto.customer_name,
        )

        with self.uow:
            ticket = Ticket.create(ticket_input, now=self.clock())
            self.store.insert(ticket)

            self.uow.publish_event(
                TicketCreatedEvent(
                    aggregate_id=ticket.id,
                    title=ticket.title,
                    priority=ticket.priority.value,
                    category=ticket.category.value,
                    customer_email=ticket.customer_email,
                )
            )

        logger.info(f"Ticket created: {ticket.id} ({ticket.priority.value})")
        return TicketOutputDTO.from_entity(ticket)


class UpdateStatusService:
    """
    Use Case: Alterar status de um ticket.

    Fluxo:
    1. Validar status de destino
    2. Buscar ticket (NotFoundError antes de qualquer escrita)
    3. Ler o relógio uma única vez
    4. Gravar status, updated_at e, se Resolved, resolved_at
    5. Gravar comentário de sistema "Status changed to {status}"
    6. Disparar evento TicketStatusChanged

    Qualquer transição é aceita, inclusive para o mesmo status: a
    escrita acontece e um novo comentário de auditoria é gravado.
    """

    def __init__(self, store: TicketStore, uow: UnitOfWork, clock: Clock = utc_now):
        self.store = store
        self.uow = uow
        self.clock = clock

    def execute(self, input_dto: UpdateStatusInputDTO) -> TicketOutputDTO:
        """
        Executa mudança de status.

        Returns:
            DTO com ticket atualizado e seus comentários

        Raises:
            ValidationError: Se status inválido
            NotFoundError: Se ticket não existe
        """
        new_status = validate_status(input_dto.status)

        with self.uow:
            ticket = _require_ticket(self.store, input_dto.ticket_id)
            previous_status = ticket.status

            now = self.clock()
            changes = ticket.change_status(new_status, now)
            self.store.update_fields(ticket.id, changes)

            comment = Comment.for_status_change(
                ticket_id=ticket.id,
                new_status=new_status,
                actor_id=input_dto.actor_id,
                now=now,
            )
            try:
                self.store.insert_comment(comment)
            except Exception:
                logger.exception(
                    f"Failed to record status change comment for ticket {ticket.id}"
                )
                raise

            self.uow.publish_event(
                TicketStatusChangedEvent(
                    aggregate_id=ticket.id,
                    previous_status=previous_status.value,
                    new_status=new_status.value,
                    actor_id=input_dto.actor_id,
                )
            )

        logger.info(
            f"Ticket {ticket.id} status changed: "
            f"{previous_status.value} -> {new_status.value} by {input_dto.actor_id}"
        )

        ticket.comments = self.store.get_comments_by_ticket(ticket.id)
        return TicketOutputDTO.from_entity(ticket)


class AddCommentService:
    """
    Use Case: Adicionar comentário manual de agente.

    Não altera updated_at do ticket.
    """

    def __init__(self, store: TicketStore, uow: UnitOfWork, clock: Clock = utc_now):
        self.store = store
        self.uow = uow
        self.clock = clock

    def execute(self, input_dto: AddCommentInputDTO) -> CommentOutputDTO:
        """
        Raises:
            ValidationError: Se conteúdo vazio
            NotFoundError: Se ticket não existe
        """
        content = validate_comment_content(input_dto.content)

        with self.uow:
            _require_ticket(self.store, input_dto.ticket_id)

            comment = Comment.from_agent(
                ticket_id=input_dto.ticket_id,
                content=content,
                author_id=input_dto.author_id,
                author_name=input_dto.author_name,
                now=self.clock(),
            )
            self.store.insert_comment(comment)

            self.uow.publish_event(
                CommentAddedEvent(
                    aggregate_id=input_dto.ticket_id,
                    comment_id=comment.id,
                    author_id=comment.author_id,
                    content_preview=content[:100],
                )
            )

        return CommentOutputDTO.from_entity(comment)


class GetTicketService:
    """
    Use Case: Obter ticket com comentários em ordem cronológica.
    """

    def __init__(self, store: TicketStore):
        self.store = store

    def execute(self, ticket_id: str) -> TicketOutputDTO:
        """
        Raises:
            NotFoundError: Se ticket não existe
        """
        ticket = _require_ticket(self.store, ticket_id)
        ticket.comments = self.store.get_comments_by_ticket(ticket_id)
        return TicketOutputDTO.from_entity(ticket)


class ListTicketsService:
    """
    Use Case: Listar tickets com filtros.

    Não usa UoW pois é operação de leitura (não precisa de transação).
    """

    def __init__(self, store: TicketStore):
        self.store = store

    def execute(self, criteria: Optional[TicketFilterCriteria] = None) -> List[TicketOutputDTO]:
        """
        Lista tickets filtrados, do mais recente para o mais antigo.

        Args:
            criteria: Critérios de filtro (None = todos)

        Returns:
            Lista de DTOs (sem comentários)
        """
        criteria = criteria or TicketFilterCriteria()
        tickets = filter_tickets(self.store.query_all(), criteria)
        return [TicketOutputDTO.from_entity(t) for t in tickets]


class ListCommentsService:
    """
    Use Case: Listar comentários de um ticket.
    """

    def __init__(self, store: TicketStore):
        self.store = store

    def execute(self, ticket_id: str) -> List[CommentOutputDTO]:
        """
        Raises:
            NotFoundError: Se ticket não existe
        """
        _require_ticket(self.store, ticket_id)
        return [
            CommentOutputDTO.from_entity(c)
            for c in self.store.get_comments_by_ticket(ticket_id)
        ]


class MoveTicketService:
    """
    Use Case: Mover card entre colunas do Kanban.

    Soltar o card na própria coluna não grava nada nem gera
    comentário. Qualquer outra coluna delega para UpdateStatusService.
    """

    def __init__(self, store: TicketStore, uow: UnitOfWork, clock: Clock = utc_now):
        self.store = store
        self.uow = uow
        self.clock = clock

    def execute(self, input_dto: MoveTicketInputDTO) -> MoveTicketOutputDTO:
        """
        Raises:
            NotFoundError: Se ticket não existe
            ValidationError: Se status inválido
        """
        ticket = _require_ticket(self.store, input_dto.ticket_id)
        target = validate_status(input_dto.status)

        if ticket.status is target:
            logger.debug(f"Ticket {ticket.id} dropped on its own column, nothing to do")
            ticket.comments = self.store.get_comments_by_ticket(ticket.id)
            return MoveTicketOutputDTO(moved=False, ticket=TicketOutputDTO.from_entity(ticket))

        updated = UpdateStatusService(self.store, self.uow, self.clock).execute(
            UpdateStatusInputDTO(
                ticket_id=ticket.id,
                status=target,
                actor_id=input_dto.actor_id,
            )
        )
        return MoveTicketOutputDTO(moved=True, ticket=updated)


class KanbanBoardService:
    """
    Use Case: Montar quadro Kanban com todos os tickets.
    """

    def __init__(self, store: TicketStore):
        self.store = store

    def execute(self, criteria: Optional[TicketFilterCriteria] = None) -> KanbanBoardDTO:
        """Quadro com os tickets que satisfazem os critérios (None = todos)."""
        tickets = self.store.query_all()
        if criteria is not None:
            tickets = filter_tickets(tickets, criteria)
        return build_board(tickets)


class DashboardMetricsService:
    """
    Use Case: Calcular métricas do dashboard sobre um snapshot do store.
    """

    def __init__(self, store: TicketStore):
        self.store = store

    def execute(self) -> DashboardMetricsDTO:
        return compute_metrics(self.store.query_all())
