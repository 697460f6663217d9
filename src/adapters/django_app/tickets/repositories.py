"""
Store Django para persistência de Tickets e Comentários.

Implementa o port TicketStore definido no Core.
É um DRIVEN ADAPTER - acionado pelo Core em resposta a operações.

Responsabilidades:
- Implementar o protocolo TicketStore
- Mapear entities para models e vice-versa (via Mappers)
- Executar queries no banco via ORM

Princípios:
- Store não contém lógica de negócio
- Falhas do banco (DatabaseError, IntegrityError) propagam sem wrap
"""

from typing import Any, List, Mapping, Optional
import logging

from src.core.shared.exceptions import NotFoundError
from src.core.tickets.entities import Comment, Ticket
from src.core.tickets.ports import TicketPredicate, TicketStore

from .mappers import CommentMapper, TicketMapper
from .models import CommentModel, TicketModel

logger = logging.getLogger(__name__)


class DjangoTicketStore(TicketStore):
    """
    Implementação Django do TicketStore.

    Usa Django ORM para persistência (PostgreSQL em produção,
    SQLite em testes). Transações ficam a cargo do DjangoUnitOfWork.

    Example:
        store = DjangoTicketStore()
        store.insert(ticket)
        ticket = store.get_by_id("uuid-here")
        store.update_fields(ticket.id, {"status": TicketStatus.CLOSED})
    """

    def __init__(self):
        self._mapper = TicketMapper()
        self._comment_mapper = CommentMapper()

    def get_by_id(self, ticket_id: str) -> Optional[Ticket]:
        """
        Busca ticket por ID.

        Raises:
            DecodeError: Se o registro estiver malformado
        """
        try:
            model = TicketModel.objects.get(id=ticket_id)
        except TicketModel.DoesNotExist:
            logger.debug(f"Ticket not found: {ticket_id}")
            return None
        return self._mapper.to_entity(model)

    def insert(self, ticket: Ticket) -> None:
        """Persiste ticket novo (INSERT explícito, nunca upsert)."""
        self._mapper.to_model(ticket).save(force_insert=True)
        logger.debug(f"Ticket inserted: {ticket.id}")

    def update_fields(self, ticket_id: str, fields: Mapping[str, Any]) -> None:
        """
        Atualiza colunas em um único UPDATE (atômico por registro).

        Raises:
            NotFoundError: Se nenhuma linha foi afetada
        """
        columns = self._mapper.to_columns(dict(fields))
        updated = TicketModel.objects.filter(id=ticket_id).update(**columns)
        if not updated:
            raise NotFoundError(
                f"Ticket with ID {ticket_id} not found",
                entity_type="Ticket",
                resource_id=ticket_id,
            )
        logger.debug(f"Ticket {ticket_id} updated: {sorted(columns)}")

    def query_all(self, predicate: Optional[TicketPredicate] = None) -> List[Ticket]:
        """Lista todos os tickets, filtrando em memória se houver predicado."""
        tickets = self._mapper.to_entity_list(TicketModel.objects.all())
        if predicate is not None:
            tickets = [t for t in tickets if predicate(t)]
        return tickets

    def insert_comment(self, comment: Comment) -> None:
        """
        Persiste comentário e registra a sequência atribuída pelo banco.

        Raises:
            NotFoundError: Se o ticket não existe
        """
        if not TicketModel.objects.filter(id=comment.ticket_id).exists():
            raise NotFoundError(
                f"Ticket with ID {comment.ticket_id} not found",
                entity_type="Ticket",
                resource_id=comment.ticket_id,
            )
        model = self._comment_mapper.to_model(comment)
        model.save(force_insert=True)
        comment.sequence = model.seq

    def get_comments_by_ticket(self, ticket_id: str) -> List[Comment]:
        """Comentários em ordem (created_at, seq)."""
        models = CommentModel.objects.filter(ticket_id=ticket_id).order_by('created_at', 'seq')
        return [self._comment_mapper.to_entity(m) for m in models]

    def count(self) -> int:
        return TicketModel.objects.count()
