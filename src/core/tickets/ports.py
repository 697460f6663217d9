"""
Ports (Interfaces) do Domínio de Tickets.

Define o contrato que os Adapters de infraestrutura devem implementar
para persistência de tickets e comentários.

Princípio:
    Core define interfaces → Adapters implementam
    Dependências sempre apontam para o Core

Example:
    # No Adapter (Django)
    class DjangoTicketStore:
        def insert(self, ticket: Ticket) -> None:
            TicketMapper.to_model(ticket).save(force_insert=True)
"""

import copy
import itertools
from typing import Any, Callable, Dict, List, Mapping, Optional, Protocol, runtime_checkable

from src.core.shared.exceptions import NotFoundError

from .entities import Comment, Ticket


TicketPredicate = Callable[[Ticket], bool]


@runtime_checkable
class TicketStore(Protocol):
    """
    Interface para persistência de Tickets e Comentários.

    Usando Protocol para duck typing.

    Implementações:
    - DjangoTicketStore (PostgreSQL/SQLite via ORM)
    - InMemoryTicketStore (para testes)

    Garantias exigidas de qualquer implementação:
    - Leituras do mesmo registro após escrita bem-sucedida enxergam a escrita
    - update_fields é atômico por registro (last-write-wins)
    - Comentários de um ticket saem em ordem (created_at, inserção)
    - Registros malformados viram DecodeError, nunca entidade parcial
    """

    def get_by_id(self, ticket_id: str) -> Optional[Ticket]:
        """
        Busca ticket por ID (sem comentários).

        Returns:
            Entidade encontrada ou None se não existir
        """
        ...

    def insert(self, ticket: Ticket) -> None:
        """Persiste ticket novo."""
        ...

    def update_fields(self, ticket_id: str, fields: Mapping[str, Any]) -> None:
        """
        Atualiza apenas os atributos informados.

        Args:
            ticket_id: ID do ticket
            fields: {atributo: valor}, ex. {"status": ..., "updated_at": ...}
        """
        ...

    def query_all(self, predicate: Optional[TicketPredicate] = None) -> List[Ticket]:
        """
        Lista tickets (sem comentários), opcionalmente filtrados.

        A ordem não é garantida; ordenação é feita pelo filter engine.
        """
        ...

    def insert_comment(self, comment: Comment) -> None:
        """Persiste comentário (append-only)."""
        ...

    def get_comments_by_ticket(self, ticket_id: str) -> List[Comment]:
        """Comentários do ticket em ordem cronológica."""
        ...


class InMemoryTicketStore:
    """
    Implementação em memória do TicketStore.

    Útil para:
    - Testes unitários
    - Prototipagem

    Não é transacional: um rollback do UoW não desfaz escritas.
    Retorna cópias para que alterações nas entidades lidas não
    vazem para o estado armazenado.

    Example:
        store = InMemoryTicketStore()
        store.insert(ticket)
        found = store.get_by_id(ticket.id)
    """

    def __init__(self):
        self._tickets: Dict[str, Ticket] = {}
        self._comments: List[Comment] = []
        self._sequence = itertools.count(1)

    def get_by_id(self, ticket_id: str) -> Optional[Ticket]:
        """Busca ticket por ID."""
        ticket = self._tickets.get(ticket_id)
        return self._copy(ticket) if ticket else None

    def insert(self, ticket: Ticket) -> None:
        """Salva ticket em memória."""
        if ticket.id in self._tickets:
            raise ValueError(f"Ticket {ticket.id} already exists")
        stored = self._copy(ticket)
        stored.comments = []
        self._tickets[ticket.id] = stored

    def update_fields(self, ticket_id: str, fields: Mapping[str, Any]) -> None:
        """Sobrescreve os atributos informados."""
        ticket = self._tickets.get(ticket_id)
        if ticket is None:
            raise NotFoundError(
                f"Ticket with ID {ticket_id} not found",
                entity_type="Ticket",
                resource_id=ticket_id,
            )
        for name, value in fields.items():
            setattr(ticket, name, value)

    def query_all(self, predicate: Optional[TicketPredicate] = None) -> List[Ticket]:
        """Lista todos os tickets (filtrados pelo predicado, se houver)."""
        tickets = [self._copy(t) for t in self._tickets.values()]
        if predicate is not None:
            tickets = [t for t in tickets if predicate(t)]
        return tickets

    def insert_comment(self, comment: Comment) -> None:
        """Salva comentário atribuindo sequência de inserção."""
        if comment.ticket_id not in self._tickets:
            raise NotFoundError(
                f"Ticket with ID {comment.ticket_id} not found",
                entity_type="Ticket",
                resource_id=comment.ticket_id,
            )
        stored = copy.copy(comment)
        stored.sequence = next(self._sequence)
        comment.sequence = stored.sequence
        self._comments.append(stored)

    def get_comments_by_ticket(self, ticket_id: str) -> List[Comment]:
        """Comentários do ticket ordenados por (created_at, sequência)."""
        comments = [copy.copy(c) for c in self._comments if c.ticket_id == ticket_id]
        return sorted(comments, key=lambda c: (c.created_at, c.sequence))

    def count(self) -> int:
        """Conta total de tickets."""
        return len(self._tickets)

    def clear(self) -> None:
        """Limpa todos os dados (útil para testes)."""
        self._tickets.clear()
        self._comments.clear()

    @staticmethod
    def _copy(ticket: Ticket) -> Ticket:
        clone = copy.copy(ticket)
        clone.comments = list(ticket.comments)
        return clone
