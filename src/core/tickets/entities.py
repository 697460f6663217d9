"""
Entidades do Domínio de Tickets.

Este módulo define as entidades de domínio que encapsulam
regras de negócio relacionadas a tickets de suporte.

Entidades:
- Ticket: Agregado principal do domínio
- Comment: Comentário (de agente ou de sistema) pertencente a um ticket
- TicketStatus / TicketPriority / TicketCategory: enums fixos

Regras de Negócio Encapsuladas:
- Status inicial sempre Open; qualquer transição entre status é permitida
- updated_at muda em toda alteração de status
- resolved_at é definido ao entrar em Resolved e nunca é limpo
- Comentários são append-only
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum
from typing import Any, ClassVar, Dict, List, Optional
import uuid

from src.core.shared.clock import utc_now


class TicketStatus(Enum):
    """
    Estados possíveis de um ticket.

    Não existe grafo de transições: qualquer agente pode mover um
    ticket de qualquer status para qualquer outro, e não há estado
    terminal (Closed pode ser reaberto).
    """

    OPEN = "Open"
    IN_PROGRESS = "In Progress"
    RESOLVED = "Resolved"
    CLOSED = "Closed"

    @classmethod
    def from_string(cls, value: str) -> "TicketStatus":
        """
        Converte string para enum (comparação exata com o valor).

        Raises:
            ValueError: Se valor inválido
        """
        for status in cls:
            if status.value == value:
                return status
        raise ValueError(f"Status inválido: {value}")


class TicketPriority(Enum):
    """
    Níveis de prioridade.

    O rank define a ordem de urgência usada no Kanban:
        CRITICAL: 0
        HIGH: 1
        MEDIUM: 2
        LOW: 3
    """

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    CRITICAL = "Critical"

    @property
    def rank(self) -> int:
        """Posição na ordenação por urgência (menor = mais urgente)."""
        rank_map = {
            TicketPriority.CRITICAL: 0,
            TicketPriority.HIGH: 1,
            TicketPriority.MEDIUM: 2,
            TicketPriority.LOW: 3,
        }
        return rank_map[self]

    @classmethod
    def from_string(cls, value: str) -> "TicketPriority":
        """
        Converte string para enum (comparação exata com o valor).

        Raises:
            ValueError: Se valor inválido
        """
        for priority in cls:
            if priority.value == value:
                return priority
        raise ValueError(f"Prioridade inválida: {value}")


class TicketCategory(Enum):
    """Classificação do problema reportado."""

    TECHNICAL = "Technical"
    BILLING = "Billing"
    GENERAL = "General"

    @classmethod
    def from_string(cls, value: str) -> "TicketCategory":
        """
        Converte string para enum (comparação exata com o valor).

        Raises:
            ValueError: Se valor inválido
        """
        for category in cls:
            if category.value == value:
                return category
        raise ValueError(f"Categoria inválida: {value}")


@dataclass
class Comment:
    """
    Entidade de Domínio: Comentário em um ticket.

    Criado por um agente (comentário manual) ou automaticamente pelo
    ciclo de vida (comentário de sistema na mudança de status). Nunca
    é editado nem removido.

    Attributes:
        id: Identificador único (UUID)
        ticket_id: Ticket dono do comentário
        content: Texto (não vazio)
        author_id: ID de quem gerou o comentário
        author_name: Nome exibido ("System" para comentários de sistema)
        is_system: True se gerado pelo ciclo de vida
        created_at: Data/hora de criação (imutável)
        sequence: Ordem de inserção atribuída pelo store (desempate)
    """

    SYSTEM_AUTHOR_NAME: ClassVar[str] = "System"

    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    ticket_id: str = ""
    content: str = ""
    author_id: str = ""
    author_name: str = ""
    is_system: bool = False
    created_at: datetime = field(default_factory=utc_now)
    sequence: Optional[int] = None

    @classmethod
    def for_status_change(
        cls,
        ticket_id: str,
        new_status: TicketStatus,
        actor_id: str,
        now: datetime,
    ) -> "Comment":
        """
        Factory do comentário de auditoria de mudança de status.

        Args:
            ticket_id: Ticket alterado
            new_status: Status de destino
            actor_id: Agente que fez a alteração
            now: Mesmo instante gravado em updated_at do ticket

        Returns:
            Comentário de sistema "Status changed to {status}"
        """
        return cls(
            ticket_id=ticket_id,
            content=f"Status changed to {new_status.value}",
            author_id=actor_id,
            author_name=cls.SYSTEM_AUTHOR_NAME,
            is_system=True,
            created_at=now,
        )

    @classmethod
    def from_agent(
        cls,
        ticket_id: str,
        content: str,
        author_id: str,
        author_name: str,
        now: datetime,
    ) -> "Comment":
        """Factory de comentário manual (conteúdo já validado)."""
        return cls(
            ticket_id=ticket_id,
            content=content,
            author_id=author_id,
            author_name=author_name,
            is_system=False,
            created_at=now,
        )


@dataclass
class Ticket:
    """
    Entidade de Domínio: Ticket.

    Agregado principal do domínio de suporte ao cliente.
    É a unidade de atualização; seus comentários são armazenados
    separadamente e carregados sob demanda.

    Invariantes:
    - created_at <= updated_at
    - status sempre pertence a TicketStatus
    - id nunca muda
    - resolved_at só é definido numa transição cujo destino é Resolved

    Attributes:
        id: Identificador único (UUID)
        title: Resumo do problema
        description: Descrição detalhada
        category: Categoria (Technical, Billing, General)
        priority: Prioridade (Low, Medium, High, Critical)
        status: Estado atual
        customer_email: E-mail de contato do cliente
        customer_name: Nome do cliente (opcional)
        created_at: Data/hora de criação
        updated_at: Data/hora da última alteração
        resolved_at: Data/hora da última entrada em Resolved
        comments: Comentários (preenchido apenas em leituras de detalhe)

    Example:
        ticket_input = validate_ticket_input(
            title="Cannot login",
            description="Invalid credentials error",
            category="Technical",
            priority="High",
            customer_email="john@example.com",
        )
        ticket = Ticket.create(ticket_input, now=utc_now())
        fields = ticket.change_status(TicketStatus.RESOLVED, now=utc_now())
    """

    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    title: str = ""
    description: str = ""
    category: TicketCategory = TicketCategory.GENERAL
    priority: TicketPriority = TicketPriority.MEDIUM
    status: TicketStatus = TicketStatus.OPEN
    customer_email: str = ""
    customer_name: Optional[str] = None
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)
    resolved_at: Optional[datetime] = None
    comments: List[Comment] = field(default_factory=list)

    @classmethod
    def create(cls, ticket_input: "TicketInput", now: datetime) -> "Ticket":
        """
        Factory method para criar ticket a partir de entrada validada.

        Args:
            ticket_input: Resultado de validators.validate_ticket_input
            now: Instante de criação (created_at == updated_at)

        Returns:
            Novo ticket com status Open, sem resolved_at e sem comentários
        """
        return cls(
            title=ticket_input.title,
            description=ticket_input.description,
            category=ticket_input.category,
            priority=ticket_input.priority,
            status=TicketStatus.OPEN,
            customer_email=ticket_input.customer_email,
            customer_name=ticket_input.customer_name,
            created_at=now,
            updated_at=now,
        )

    def change_status(self, new_status: TicketStatus, now: datetime) -> Dict[str, Any]:
        """
        Aplica mudança de status e retorna os campos alterados.

        Regras:
        - Qualquer status de destino é aceito (inclusive o atual)
        - updated_at recebe `now`
        - resolved_at recebe `now` somente se o destino for Resolved;
          sair de Resolved não limpa o valor anterior

        Args:
            new_status: Status de destino
            now: Instante da alteração

        Returns:
            Dict {atributo: valor} para store.update_fields
        """
        changes: Dict[str, Any] = {
            "status": new_status,
            "updated_at": now,
        }
        if new_status is TicketStatus.RESOLVED:
            changes["resolved_at"] = now

        for name, value in changes.items():
            setattr(self, name, value)

        return changes

    @property
    def customer_display_name(self) -> str:
        """Nome do cliente se preenchido, senão o e-mail."""
        if self.customer_name and self.customer_name.strip():
            return self.customer_name
        return self.customer_email

    @property
    def resolution_time(self) -> Optional[timedelta]:
        """
        Tempo entre criação e resolução.

        Returns:
            Timedelta se o status ATUAL é Resolved e há resolved_at,
            None caso contrário (um ticket reaberto mantém resolved_at
            mas não conta como resolvido).
        """
        if self.status is not TicketStatus.RESOLVED or self.resolved_at is None:
            return None
        return self.resolved_at - self.created_at

    def __repr__(self) -> str:
        return (
            f"Ticket("
            f"id={self.id[:8]}..., "
            f"title='{self.title[:20]}', "
            f"status={self.status.value}, "
            f"priority={self.priority.value}"
            f")"
        )

    def __eq__(self, other: object) -> bool:
        """Comparação por ID (identidade de entidade)."""
        if not isinstance(other, Ticket):
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)
