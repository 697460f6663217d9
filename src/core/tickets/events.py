"""
Domain Events do Domínio de Tickets.

Este módulo define os eventos de domínio que são disparados
quando algo significativo acontece com tickets.

Eventos:
- TicketCreatedEvent: Novo ticket foi criado
- TicketStatusChangedEvent: Status foi alterado (inclui Kanban)
- CommentAddedEvent: Comentário manual foi adicionado

Uso:
    Eventos são criados nos use cases e publicados através do
    UnitOfWork após commit bem-sucedido.

    with uow:
        store.insert(ticket)
        uow.publish_event(TicketCreatedEvent(aggregate_id=ticket.id, ...))
"""

from dataclasses import dataclass
from typing import Any, Dict

from src.core.shared.events import DomainEvent


@dataclass
class TicketCreatedEvent(DomainEvent):
    """
    Evento: Ticket foi criado.

    Handlers típicos:
    - Invalidar métricas do dashboard em cache
    - Registrar em log de auditoria

    Attributes:
        title: Título do ticket
        priority: Prioridade do ticket
        category: Categoria do ticket
        customer_email: E-mail do cliente
    """

    title: str = ""
    priority: str = ""
    category: str = ""
    customer_email: str = ""

    @property
    def aggregate_type(self) -> str:
        return "Ticket"

    def _get_event_data(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "priority": self.priority,
            "category": self.category,
            "customer_email": self.customer_email,
        }


@dataclass
class TicketStatusChangedEvent(DomainEvent):
    """
    Evento: Status do ticket foi alterado.

    Disparado também quando o status de destino é igual ao atual,
    pois o ciclo de vida grava a alteração mesmo assim.

    Attributes:
        previous_status: Status antes da mudança
        new_status: Status após a mudança
        actor_id: ID do agente que fez a alteração
    """

    previous_status: str = ""
    new_status: str = ""
    actor_id: str = ""

    @property
    def aggregate_type(self) -> str:
        return "Ticket"

    @property
    def is_resolution(self) -> bool:
        """True se o ticket entrou em Resolved."""
        return self.new_status == "Resolved"

    def _get_event_data(self) -> Dict[str, Any]:
        return {
            "previous_status": self.previous_status,
            "new_status": self.new_status,
            "actor_id": self.actor_id,
        }


@dataclass
class CommentAddedEvent(DomainEvent):
    """
    Evento: Comentário manual foi adicionado ao ticket.

    Attributes:
        comment_id: ID do comentário criado
        author_id: ID do autor
        content_preview: Primeiros 100 caracteres do conteúdo
    """

    comment_id: str = ""
    author_id: str = ""
    content_preview: str = ""

    @property
    def aggregate_type(self) -> str:
        return "Ticket"

    def _get_event_data(self) -> Dict[str, Any]:
        return {
            "comment_id": self.comment_id,
            "author_id": self.author_id,
            "content_preview": self.content_preview,
        }
