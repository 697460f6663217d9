"""
Data Transfer Objects (DTOs) do Domínio de Tickets.

DTOs são estruturas simples para transportar dados entre camadas,
evitando vazamento das entidades para a API.

Tipos de DTOs:
- Input DTOs: dados brutos de entrada (de APIs/scripts)
- Query DTOs: critérios de filtro
- Output DTOs: formatam dados para resposta (nomes JSON camelCase)
"""

from dataclasses import dataclass, field
from datetime import date, datetime, time, timezone
from typing import Any, Dict, List, Mapping, Optional

from src.core.shared.clock import to_iso
from src.core.shared.exceptions import ValidationError

from .entities import Comment, Ticket, TicketCategory, TicketPriority, TicketStatus
from .validators import (
    validate_category,
    validate_email,
    validate_priority,
    validate_status,
)


# =============================================================================
# INPUT DTOs (Entrada)
# =============================================================================

@dataclass(frozen=True)
class CreateTicketInputDTO:
    """
    DTO de entrada para criar ticket.

    Valores ainda não validados; a validação acontece no use case.

    Attributes:
        title: Resumo do problema
        description: Descrição detalhada
        category: "Technical" | "Billing" | "General"
        priority: "Low" | "Medium" | "High" | "Critical"
        customer_email: E-mail do cliente
        customer_name: Nome do cliente (opcional)
    """

    title: Any
    description: Any
    category: Any
    priority: Any
    customer_email: Any
    customer_name: Any = None

    @classmethod
    def from_payload(cls, data: Mapping[str, Any]) -> "CreateTicketInputDTO":
        """Monta DTO a partir do corpo JSON (chaves camelCase)."""
        return cls(
            title=data.get("title"),
            description=data.get("description"),
            category=data.get("category"),
            priority=data.get("priority"),
            customer_email=data.get("customerEmail"),
            customer_name=data.get("customerName"),
        )

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "description": self.description,
            "category": self.category,
            "priority": self.priority,
            "customerEmail": self.customer_email,
            "customerName": self.customer_name,
        }


@dataclass(frozen=True)
class UpdateStatusInputDTO:
    """
    DTO de entrada para mudança de status.

    Attributes:
        ticket_id: ID do ticket
        status: Status de destino (string ou TicketStatus)
        actor_id: ID do agente que fez a alteração
    """

    ticket_id: str
    status: Any
    actor_id: str

    def to_dict(self) -> dict:
        status = self.status.value if isinstance(self.status, TicketStatus) else self.status
        return {
            "ticket_id": self.ticket_id,
            "status": status,
            "actor_id": self.actor_id,
        }


@dataclass(frozen=True)
class AddCommentInputDTO:
    """
    DTO de entrada para comentário manual.

    Attributes:
        ticket_id: ID do ticket comentado
        content: Texto do comentário
        author_id: ID do agente autor
        author_name: Nome exibido do autor
    """

    ticket_id: str
    content: Any
    author_id: str
    author_name: str

    def to_dict(self) -> dict:
        return {
            "ticket_id": self.ticket_id,
            "content": self.content,
            "author_id": self.author_id,
            "author_name": self.author_name,
        }


@dataclass(frozen=True)
class MoveTicketInputDTO:
    """
    DTO de entrada para mover card no Kanban (drag-and-drop).

    Attributes:
        ticket_id: ID do ticket arrastado
        status: Status da coluna de destino
        actor_id: ID do agente
    """

    ticket_id: str
    status: Any
    actor_id: str


# =============================================================================
# QUERY DTOs (Filtros)
# =============================================================================

def parse_timestamp(value: Any, field: str) -> Optional[datetime]:
    """
    Converte string ISO-8601 em datetime UTC.

    - Vazio/None → None (filtro ausente)
    - Data sem hora ("2024-01-15") → meia-noite UTC
    - Datetime sem fuso → assumido UTC
    - Sufixo "Z" aceito

    Raises:
        ValidationError: Se o formato não for reconhecido
    """
    if value is None or value == "":
        return None

    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime.combine(value, time.min)
    elif isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            raise ValidationError(
                f"Invalid {field}. Expected an ISO 8601 date",
                field=field,
            )
    else:
        raise ValidationError(f"Invalid {field}. Expected an ISO 8601 date", field=field)

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


@dataclass(frozen=True)
class TicketFilterCriteria:
    """
    Critérios de filtro de tickets, todos opcionais.

    Predicados ativos combinam com AND; campo ausente não restringe.
    start_date/end_date são limites inclusivos sobre created_at.

    Attributes:
        status: Status exato
        priority: Prioridade exata
        category: Categoria exata
        customer_email: E-mail exato do cliente
        start_date: created_at >= start_date
        end_date: created_at <= end_date
    """

    status: Optional[TicketStatus] = None
    priority: Optional[TicketPriority] = None
    category: Optional[TicketCategory] = None
    customer_email: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None

    def __post_init__(self):
        # Datas sem fuso são tratadas como UTC
        object.__setattr__(self, "start_date", parse_timestamp(self.start_date, "startDate"))
        object.__setattr__(self, "end_date", parse_timestamp(self.end_date, "endDate"))

    @classmethod
    def from_query(cls, params: Mapping[str, Any]) -> "TicketFilterCriteria":
        """
        Monta critérios a partir de query string (chaves camelCase).

        Strings vazias são tratadas como filtro ausente.

        Raises:
            ValidationError: Enum desconhecido ou data malformada
        """
        def present(key: str) -> Optional[Any]:
            value = params.get(key)
            if value is None or value == "":
                return None
            return value

        status = present("status")
        priority = present("priority")
        category = present("category")
        customer_email = present("customerEmail")

        return cls(
            status=validate_status(status) if status is not None else None,
            priority=validate_priority(priority) if priority is not None else None,
            category=validate_category(category) if category is not None else None,
            customer_email=(
                validate_email(customer_email) if customer_email is not None else None
            ),
            start_date=parse_timestamp(present("startDate"), "startDate"),
            end_date=parse_timestamp(present("endDate"), "endDate"),
        )

    @property
    def is_empty(self) -> bool:
        """True se nenhum filtro está ativo."""
        return all(
            value is None
            for value in (
                self.status,
                self.priority,
                self.category,
                self.customer_email,
                self.start_date,
                self.end_date,
            )
        )

    def to_dict(self) -> dict:
        return {
            "status": self.status.value if self.status else None,
            "priority": self.priority.value if self.priority else None,
            "category": self.category.value if self.category else None,
            "customerEmail": self.customer_email,
            "startDate": to_iso(self.start_date) if self.start_date else None,
            "endDate": to_iso(self.end_date) if self.end_date else None,
        }


# =============================================================================
# OUTPUT DTOs (Saída)
# =============================================================================

@dataclass
class CommentOutputDTO:
    """DTO de saída de comentário."""

    id: str
    ticket_id: str
    content: str
    author_id: str
    author_name: str
    is_system: bool
    created_at: datetime

    @classmethod
    def from_entity(cls, entity: Comment) -> "CommentOutputDTO":
        return cls(
            id=entity.id,
            ticket_id=entity.ticket_id,
            content=entity.content,
            author_id=entity.author_id,
            author_name=entity.author_name,
            is_system=entity.is_system,
            created_at=entity.created_at,
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "ticketId": self.ticket_id,
            "content": self.content,
            "authorId": self.author_id,
            "authorName": self.author_name,
            "isSystem": self.is_system,
            "createdAt": to_iso(self.created_at),
        }


@dataclass
class TicketOutputDTO:
    """
    DTO de saída completo com dados do ticket.

    Usado tanto em listagens (comments vazio) quanto no detalhe
    (comments em ordem cronológica).
    """

    id: str
    title: str
    description: str
    category: str
    priority: str
    status: str
    customer_email: str
    customer_name: Optional[str]
    created_at: datetime
    updated_at: datetime
    resolved_at: Optional[datetime]
    comments: List[CommentOutputDTO] = field(default_factory=list)

    @classmethod
    def from_entity(cls, entity: Ticket) -> "TicketOutputDTO":
        """
        Factory method para converter entidade em DTO.

        Args:
            entity: Ticket (com ou sem comentários carregados)

        Returns:
            DTO com dados da entidade
        """
        return cls(
            id=entity.id,
            title=entity.title,
            description=entity.description,
            category=entity.category.value,
            priority=entity.priority.value,
            status=entity.status.value,
            customer_email=entity.customer_email,
            customer_name=entity.customer_name,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
            resolved_at=entity.resolved_at,
            comments=[CommentOutputDTO.from_entity(c) for c in entity.comments],
        )

    def to_dict(self, include_comments: bool = True) -> dict:
        """Serializa com os nomes de campo JSON da API."""
        data = {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "category": self.category,
            "priority": self.priority,
            "status": self.status,
            "customerEmail": self.customer_email,
            "customerName": self.customer_name,
            "createdAt": to_iso(self.created_at),
            "updatedAt": to_iso(self.updated_at),
            "resolvedAt": to_iso(self.resolved_at) if self.resolved_at else None,
        }
        if include_comments:
            data["comments"] = [c.to_dict() for c in self.comments]
        return data


@dataclass(frozen=True)
class TicketCardDTO:
    """
    Projeção de card do Kanban.

    customer_name nunca é vazio: cai para o e-mail do cliente
    quando o nome não foi informado.
    """

    id: str
    title: str
    customer_name: str
    priority: str
    category: str

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "customerName": self.customer_name,
            "priority": self.priority,
            "category": self.category,
        }


@dataclass
class KanbanBoardDTO:
    """
    Quadro Kanban: status → categoria → cards ordenados por prioridade.

    Attributes:
        columns: {status: {categoria: [cards]}}, todas as chaves presentes
    """

    columns: Dict[str, Dict[str, List[TicketCardDTO]]]

    @property
    def total(self) -> int:
        return sum(
            len(cards)
            for groups in self.columns.values()
            for cards in groups.values()
        )

    def to_dict(self) -> dict:
        return {
            "columns": {
                status: {
                    category: [card.to_dict() for card in cards]
                    for category, cards in groups.items()
                }
                for status, groups in self.columns.items()
            },
            "total": self.total,
        }


@dataclass
class MoveTicketOutputDTO:
    """Resultado do drag-and-drop: moved=False quando a coluna é a mesma."""

    moved: bool
    ticket: TicketOutputDTO

    def to_dict(self) -> dict:
        return {
            "moved": self.moved,
            "ticket": self.ticket.to_dict(),
        }


@dataclass
class DashboardMetricsDTO:
    """
    Métricas do dashboard.

    Attributes:
        total_open: Tickets com status Open
        by_priority: Contagem por prioridade (todas as chaves presentes)
        by_category: Contagem por categoria (todas as chaves presentes)
        average_resolution_time: Média em horas, 2 casas decimais
    """

    total_open: int
    by_priority: Dict[str, int]
    by_category: Dict[str, int]
    average_resolution_time: float

    def to_dict(self) -> dict:
        return {
            "totalOpen": self.total_open,
            "byPriority": dict(self.by_priority),
            "byCategory": dict(self.by_category),
            "averageResolutionTime": self.average_resolution_time,
        }
