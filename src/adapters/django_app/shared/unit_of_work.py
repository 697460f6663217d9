"""
Unit of Work - Implementação Django.

Gerencia a fronteira transacional das operações de escrita do
ciclo de vida (status + comentário de auditoria).

Responsabilidades:
- Iniciar/finalizar transações
- Commit/Rollback coordenado
- Publicar eventos após commit bem-sucedido

ACID Guarantees:
- Atomicidade: status e comentário de auditoria gravam juntos ou nada
- Consistência: Eventos refletem estado persistido
- Isolamento: Cada request tem sua transação
"""

from typing import List, Optional
import logging

from django.db import transaction

from src.core.shared.events import DomainEvent
from src.core.shared.interfaces import EventPublisher, UnitOfWork

logger = logging.getLogger(__name__)


class DjangoUnitOfWork(UnitOfWork):
    """
    Implementação Django do Unit of Work.

    Usa django.db.transaction.atomic, portanto funciona tanto no nível
    mais externo quanto aninhado (savepoint) dentro de outra transação,
    como nos testes com pytest-django.

    Eventos são publicados apenas após commit bem-sucedido.

    Example:
        with DjangoUnitOfWork(event_publisher=publisher) as uow:
            store.update_fields(ticket_id, fields)
            store.insert_comment(comment)
            uow.publish_event(TicketStatusChangedEvent(...))
        # Commit automático + eventos publicados

    Example com rollback:
        with DjangoUnitOfWork() as uow:
            store.update_fields(ticket_id, fields)
            raise DatabaseError("insert_comment falhou")
        # Rollback automático, status não muda, eventos descartados
    """

    def __init__(self, event_publisher: Optional[EventPublisher] = None, using: Optional[str] = None):
        """
        Inicializa Unit of Work.

        Args:
            event_publisher: Publicador de eventos (log, Celery, memória)
            using: Alias do banco (None = default)
        """
        super().__init__()
        self._event_publisher = event_publisher
        self._using = using
        self._atomic = None
        self._committed = False
        self._rolled_back = False

    def _begin_transaction(self) -> None:
        """Abre bloco atomic (transação ou savepoint)."""
        self._committed = False
        self._rolled_back = False
        self._atomic = transaction.atomic(using=self._using)
        self._atomic.__enter__()
        logger.debug("Transaction started")

    def commit(self) -> None:
        """
        Persiste as mudanças e publica eventos.

        Ordem de execução:
        1. Fechar bloco atomic com sucesso
        2. Publicar eventos para handlers
        3. Limpar estado interno

        Raises:
            Exception: Se commit falhar, re-lança exceção
        """
        if self._committed or self._rolled_back:
            logger.warning("Transaction already finalized")
            return

        if self._atomic is not None:
            atomic, self._atomic = self._atomic, None
            try:
                atomic.__exit__(None, None, None)
            except Exception as e:
                logger.error(f"Commit failed: {e}")
                self._rolled_back = True
                self.clear_events()
                raise
            logger.debug("Transaction committed")

        self._committed = True

        if self._events:
            self._publish_events()

    def rollback(self) -> None:
        """
        Desfaz todas as mudanças e descarta eventos.

        Chamado automaticamente se exceção ocorrer dentro do contexto.
        """
        if self._committed or self._rolled_back:
            return

        try:
            if self._atomic is not None:
                atomic, self._atomic = self._atomic, None
                transaction.set_rollback(True, using=self._using)
                atomic.__exit__(None, None, None)
                logger.debug("Transaction rolled back")
        finally:
            self._rolled_back = True
            self.clear_events()

    def _publish_events(self) -> None:
        """
        Publica eventos para handlers.

        Falha de publicação não desfaz a escrita já comitada: é
        registrada em log e o próximo evento segue.
        """
        for event in self._events:
            logger.info(
                f"Publishing event: {event.event_type} "
                f"for aggregate {event.aggregate_id}"
            )

            if self._event_publisher:
                try:
                    self._event_publisher.publish(event)
                except Exception:
                    logger.exception(f"Failed to publish event {event.event_type}")

        self.clear_events()

    @property
    def is_committed(self) -> bool:
        """Verifica se transação foi comitada."""
        return self._committed

    @property
    def is_rolled_back(self) -> bool:
        """Verifica se transação foi revertida."""
        return self._rolled_back


class InMemoryUnitOfWork(UnitOfWork):
    """
    Unit of Work em memória para testes.

    Não desfaz escritas no store - apenas simula o comportamento
    de commit/rollback e a publicação de eventos.

    Example:
        uow = InMemoryUnitOfWork()
        with uow:
            uow.publish_event(event)

        assert uow.committed
        assert len(uow.published_events) == 1
    """

    def __init__(self, event_publisher: Optional[EventPublisher] = None):
        super().__init__()
        self._event_publisher = event_publisher
        self._committed = False
        self._rolled_back = False
        self._published_events: List[DomainEvent] = []

    def _begin_transaction(self) -> None:
        """Simula início de transação."""
        pass

    def commit(self) -> None:
        """Simula commit e publica eventos."""
        self._committed = True
        self._published_events.extend(self._events)
        if self._event_publisher:
            self._event_publisher.publish_batch(list(self._events))
        self.clear_events()

    def rollback(self) -> None:
        """Simula rollback."""
        self._rolled_back = True
        self.clear_events()

    @property
    def committed(self) -> bool:
        return self._committed

    @property
    def rolled_back(self) -> bool:
        return self._rolled_back

    @property
    def published_events(self) -> List[DomainEvent]:
        """Retorna eventos que foram 'publicados'."""
        return self._published_events

    def reset(self) -> None:
        """Reset para próximo teste."""
        self._committed = False
        self._rolled_back = False
        self._published_events.clear()
        self.clear_events()
