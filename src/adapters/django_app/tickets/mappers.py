"""
Mappers para conversão entre Entities (Core) e Models (Django).

Responsabilidades:
- Converter Ticket/Comment → TicketModel/CommentModel (para persistência)
- Decodificar TicketModel/CommentModel → Ticket/Comment (para uso no Core)

Decodificação é estrita: campo obrigatório ausente ou valor fora
do enum lança DecodeError. O Core nunca recebe entidade parcial.

Princípios:
- Mappers são stateless
- Não contêm lógica de negócio
- Tratam apenas conversão de dados
"""

from typing import Any, List, Type, TypeVar

from src.core.shared.exceptions import DecodeError
from src.core.tickets.entities import (
    Comment,
    Ticket,
    TicketCategory,
    TicketPriority,
    TicketStatus,
)

from .models import CommentModel, TicketModel


E = TypeVar("E")

TICKET_REQUIRED_FIELDS = (
    "id",
    "title",
    "description",
    "customer_email",
    "created_at",
    "updated_at",
)

COMMENT_REQUIRED_FIELDS = (
    "comment_id",
    "ticket_id",
    "content",
    "author_id",
    "author_name",
    "created_at",
)

# Chaves de update_fields que precisam de conversão para coluna
_FIELD_ENCODERS = {
    "status": lambda value: value.value,
    "priority": lambda value: value.value,
    "category": lambda value: value.value,
}


def _require(model: Any, fields: tuple, entity_type: str) -> None:
    for name in fields:
        value = getattr(model, name, None)
        if value is None or value == "":
            raise DecodeError(
                f"Malformed {entity_type} record: missing {name}",
                entity_type=entity_type,
                field=name,
            )


def _decode_enum(enum_cls: Type[E], value: Any, field: str, entity_type: str) -> E:
    try:
        return enum_cls.from_string(value)
    except ValueError:
        raise DecodeError(
            f"Malformed {entity_type} record: invalid {field} {value!r}",
            entity_type=entity_type,
            field=field,
        )


def decode_ticket(model: TicketModel) -> Ticket:
    """
    Converte TicketModel para Ticket.

    Comentários não são carregados; use o store para isso.

    Raises:
        DecodeError: Se o registro estiver malformado
    """
    _require(model, TICKET_REQUIRED_FIELDS, "Ticket")

    return Ticket(
        id=model.id,
        title=model.title,
        description=model.description,
        category=_decode_enum(TicketCategory, model.category, "category", "Ticket"),
        priority=_decode_enum(TicketPriority, model.priority, "priority", "Ticket"),
        status=_decode_enum(TicketStatus, model.status, "status", "Ticket"),
        customer_email=model.customer_email,
        customer_name=model.customer_name,
        created_at=model.created_at,
        updated_at=model.updated_at,
        resolved_at=model.resolved_at,
    )


def decode_comment(model: CommentModel) -> Comment:
    """
    Converte CommentModel para Comment.

    Raises:
        DecodeError: Se o registro estiver malformado
    """
    _require(model, COMMENT_REQUIRED_FIELDS, "Comment")

    return Comment(
        id=model.comment_id,
        ticket_id=model.ticket_id,
        content=model.content,
        author_id=model.author_id,
        author_name=model.author_name,
        is_system=bool(model.is_system),
        created_at=model.created_at,
        sequence=model.seq,
    )


class TicketMapper:
    """
    Mapper para conversão entre Ticket e TicketModel.

    Responsável por:
    - to_model(): Entity → Model
    - to_entity(): Model → Entity (via decode_ticket)
    - to_entity_list(): List[Model] → List[Entity]
    - to_columns(): update_fields do Core → colunas do Model
    """

    @staticmethod
    def to_model(entity: Ticket) -> TicketModel:
        """
        Converte Ticket para TicketModel.

        Note:
            Não chama .save() - deixa isso para o Store
        """
        return TicketModel(
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
        )

    @staticmethod
    def to_entity(model: TicketModel) -> Ticket:
        return decode_ticket(model)

    @staticmethod
    def to_entity_list(models) -> List[Ticket]:
        return [decode_ticket(model) for model in models]

    @staticmethod
    def to_columns(fields: dict) -> dict:
        """Converte valores de enum em strings de coluna."""
        return {
            name: _FIELD_ENCODERS[name](value) if name in _FIELD_ENCODERS else value
            for name, value in fields.items()
        }


class CommentMapper:
    """Mapper para conversão entre Comment e CommentModel."""

    @staticmethod
    def to_model(entity: Comment) -> CommentModel:
        return CommentModel(
            comment_id=entity.id,
            ticket_id=entity.ticket_id,
            content=entity.content,
            author_id=entity.author_id,
            author_name=entity.author_name,
            is_system=entity.is_system,
            created_at=entity.created_at,
        )

    @staticmethod
    def to_entity(model: CommentModel) -> Comment:
        return decode_comment(model)
