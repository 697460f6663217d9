"""
Domínio de Tickets - Ciclo de Vida e Agregações.

Este módulo contém toda a lógica de negócio relacionada a tickets
de suporte ao cliente, incluindo:
- Entidades (Ticket, Comment, TicketStatus, TicketPriority, TicketCategory)
- Validação de entrada
- Use Cases (CreateTicket, UpdateStatus, AddComment, MoveTicket, ...)
- Filtros, quadro Kanban e métricas do dashboard
- Domain Events (TicketCreated, TicketStatusChanged, CommentAdded)
- Ports (TicketStore)

Características do Domínio:
- Qualquer transição de status é permitida
- Toda mudança de status gera comentário de auditoria
- Eventos disparados para side-effects assíncronos
"""

from .entities import Comment, Ticket, TicketCategory, TicketPriority, TicketStatus
from .events import CommentAddedEvent, TicketCreatedEvent, TicketStatusChangedEvent
from .dtos import (
    AddCommentInputDTO,
    CreateTicketInputDTO,
    DashboardMetricsDTO,
    MoveTicketInputDTO,
    TicketCardDTO,
    TicketFilterCriteria,
    TicketOutputDTO,
    UpdateStatusInputDTO,
)
from .ports import InMemoryTicketStore, TicketStore
from .use_cases import (
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

__all__ = [
    # Entities
    "Comment",
    "Ticket",
    "TicketCategory",
    "TicketPriority",
    "TicketStatus",
    # Events
    "CommentAddedEvent",
    "TicketCreatedEvent",
    "TicketStatusChangedEvent",
    # DTOs
    "AddCommentInputDTO",
    "CreateTicketInputDTO",
    "DashboardMetricsDTO",
    "MoveTicketInputDTO",
    "TicketCardDTO",
    "TicketFilterCriteria",
    "TicketOutputDTO",
    "UpdateStatusInputDTO",
    # Ports
    "InMemoryTicketStore",
    "TicketStore",
    # Use Cases
    "AddCommentService",
    "CreateTicketService",
    "DashboardMetricsService",
    "GetTicketService",
    "KanbanBoardService",
    "ListCommentsService",
    "ListTicketsService",
    "MoveTicketService",
    "UpdateStatusService",
]
