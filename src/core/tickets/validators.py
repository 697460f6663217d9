"""
Camada de Validação do Domínio de Tickets.

Rejeita entrada malformada antes que chegue ao ciclo de vida.
Todas as funções são puras: devolvem o valor normalizado (trim,
enum) ou lançam ValidationError indicando o campo ofendido.

Os nomes de campo nas mensagens seguem os nomes JSON da API
(title, customerEmail, ...), que é o que o cliente enxerga.
"""

from dataclasses import dataclass
import re
from typing import Any, Optional, Type, TypeVar
from enum import Enum

from src.core.shared.exceptions import ValidationError

from .entities import TicketCategory, TicketPriority, TicketStatus


E = TypeVar("E", bound=Enum)

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


@dataclass(frozen=True)
class TicketInput:
    """Entrada de criação de ticket já validada e normalizada."""

    title: str
    description: str
    category: TicketCategory
    priority: TicketPriority
    customer_email: str
    customer_name: Optional[str] = None


def validate_non_empty(value: Any, field: str) -> str:
    """
    Valida string obrigatória.

    Args:
        value: Valor bruto
        field: Nome do campo para a mensagem de erro

    Returns:
        String sem espaços nas pontas

    Raises:
        ValidationError: Se ausente, não-string ou vazia após trim
    """
    if not isinstance(value, str):
        raise ValidationError(f"{field} is required", field=field)

    trimmed = value.strip()
    if not trimmed:
        raise ValidationError(f"{field} cannot be empty", field=field)
    return trimmed


def validate_email(value: Any, field: str = "customerEmail") -> str:
    """
    Valida formato local@dominio.tld (sem espaços, com '.' após o '@').

    Returns:
        E-mail sem espaços nas pontas

    Raises:
        ValidationError: Se formato inválido
    """
    if not isinstance(value, str):
        raise ValidationError("Invalid email format", field=field)

    trimmed = value.strip()
    if not EMAIL_PATTERN.match(trimmed):
        raise ValidationError("Invalid email format", field=field)
    return trimmed


def _validate_choice(enum_cls: Type[E], value: Any, field: str) -> E:
    if isinstance(value, enum_cls):
        return value

    try:
        return enum_cls.from_string(value)
    except (ValueError, TypeError, AttributeError):
        valid = ", ".join(member.value for member in enum_cls)
        raise ValidationError(
            f"Invalid {field}. Must be one of: {valid}",
            field=field,
        )


def validate_status(value: Any) -> TicketStatus:
    """
    Valida status de ticket.

    Raises:
        ValidationError: Listando Open, In Progress, Resolved, Closed
    """
    return _validate_choice(TicketStatus, value, "status")


def validate_priority(value: Any) -> TicketPriority:
    """
    Valida prioridade de ticket.

    Raises:
        ValidationError: Listando Low, Medium, High, Critical
    """
    return _validate_choice(TicketPriority, value, "priority")


def validate_category(value: Any) -> TicketCategory:
    """
    Valida categoria de ticket.

    Raises:
        ValidationError: Listando Technical, Billing, General
    """
    return _validate_choice(TicketCategory, value, "category")


def validate_ticket_input(
    title: Any,
    description: Any,
    category: Any,
    priority: Any,
    customer_email: Any,
    customer_name: Any = None,
) -> TicketInput:
    """
    Valida entrada completa de criação de ticket.

    title, description, category, priority e customer_email são
    obrigatórios; customer_name, se informado, não pode ser vazio.

    Returns:
        TicketInput normalizado

    Raises:
        ValidationError: No primeiro campo inválido encontrado
    """
    normalized_title = validate_non_empty(title, "title")
    normalized_description = validate_non_empty(description, "description")
    normalized_category = validate_category(category)
    normalized_priority = validate_priority(priority)
    normalized_email = validate_email(customer_email)

    normalized_name = None
    if customer_name is not None:
        normalized_name = validate_non_empty(customer_name, "customerName")

    return TicketInput(
        title=normalized_title,
        description=normalized_description,
        category=normalized_category,
        priority=normalized_priority,
        customer_email=normalized_email,
        customer_name=normalized_name,
    )


def validate_comment_content(content: Any) -> str:
    """Valida conteúdo de comentário (não vazio após trim)."""
    return validate_non_empty(content, "content")
