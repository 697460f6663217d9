"""
Dependency Injection Container.

Configura e gerencia todas as dependências da aplicação.
Usa dependency-injector para lazy-loading e injeção automática.

Benefícios:
- Dependências explícitas
- Testabilidade (fácil trocar store/publisher)
- Lazy-loading (criado sob demanda)

Padrões:
- Singleton: Uma instância para toda app (store, publisher)
- Factory: Nova instância por chamada (services, UoW)
"""

from dependency_injector import containers, providers
from typing import Optional


def _lazy(module: str, name: str):
    """
    Retorna callable que importa `module.name` só quando chamado.

    Evita import de Django/ORM na carga do container.
    """
    def build(*args, **kwargs):
        return getattr(__import__(module, fromlist=[name]), name)(*args, **kwargs)
    return build


def _use_case(name: str):
    return _lazy('src.core.tickets.use_cases', name)


def _configured_publisher():
    from django.conf import settings
    from src.adapters.django_app.events.publishers import get_event_publisher

    return get_event_publisher(settings.EVENT_PUBLISHER_MODE)


class Container(containers.DeclarativeContainer):
    """
    Container principal de Dependency Injection.

    Organização:
    - Infrastructure: Publisher de eventos
    - Store: Persistência
    - Unit of Work: Transações
    - Services: Use Cases

    Example:
        from src.config.container import get_container

        service = get_container().create_ticket_service()
        result = service.execute(input_dto)
    """

    config = providers.Configuration()

    # =========================================================================
    # Infrastructure
    # =========================================================================

    event_publisher = providers.Singleton(_configured_publisher)

    # =========================================================================
    # Store (Singleton - uma instância por app)
    # =========================================================================

    ticket_store = providers.Singleton(
        _lazy('src.adapters.django_app.tickets.repositories', 'DjangoTicketStore')
    )

    # =========================================================================
    # Unit of Work (Factory - nova instância por operação)
    # =========================================================================

    unit_of_work = providers.Factory(
        _lazy('src.adapters.django_app.shared.unit_of_work', 'DjangoUnitOfWork'),
        event_publisher=event_publisher,
    )

    # =========================================================================
    # Services / Use Cases (Factory - nova instância por chamada)
    # =========================================================================

    create_ticket_service = providers.Factory(
        _use_case('CreateTicketService'),
        store=ticket_store,
        uow=unit_of_work,
    )

    update_status_service = providers.Factory(
        _use_case('UpdateStatusService'),
        store=ticket_store,
        uow=unit_of_work,
    )

    add_comment_service = providers.Factory(
        _use_case('AddCommentService'),
        store=ticket_store,
        uow=unit_of_work,
    )

    move_ticket_service = providers.Factory(
        _use_case('MoveTicketService'),
        store=ticket_store,
        uow=unit_of_work,
    )

    # Leitura (sem UoW)
    get_ticket_service = providers.Factory(_use_case('GetTicketService'), store=ticket_store)
    list_tickets_service = providers.Factory(_use_case('ListTicketsService'), store=ticket_store)
    list_comments_service = providers.Factory(_use_case('ListCommentsService'), store=ticket_store)
    kanban_board_service = providers.Factory(_use_case('KanbanBoardService'), store=ticket_store)
    dashboard_metrics_service = providers.Factory(
        _use_case('DashboardMetricsService'),
        store=ticket_store,
    )


# =============================================================================
# Container Global (Singleton)
# =============================================================================

_container: Optional[Container] = None


def get_container() -> Container:
    """
    Retorna instância global do container.

    Cria se não existir (lazy initialization).
    """
    global _container

    if _container is None:
        _container = Container()

    return _container


def reset_container() -> None:
    """
    Reset do container (para testes).

    Permite criar novo container limpo.
    """
    global _container
    _container = None


# =============================================================================
# Testing Container
# =============================================================================

class TestingContainer(containers.DeclarativeContainer):
    """
    Container para testes sem banco.

    Usa InMemory implementations para testes rápidos.

    Example:
        container = TestingContainer()
        container.create_ticket_service().execute(input_dto)
        assert container.event_publisher().published_events
    """

    event_publisher = providers.Singleton(
        _lazy('src.adapters.django_app.events.publishers', 'InMemoryEventPublisher')
    )

    ticket_store = providers.Singleton(
        _lazy('src.core.tickets.ports', 'InMemoryTicketStore')
    )

    unit_of_work = providers.Factory(
        _lazy('src.adapters.django_app.shared.unit_of_work', 'InMemoryUnitOfWork'),
        event_publisher=event_publisher,
    )

    create_ticket_service = providers.Factory(
        _use_case('CreateTicketService'),
        store=ticket_store,
        uow=unit_of_work,
    )

    update_status_service = providers.Factory(
        _use_case('UpdateStatusService'),
        store=ticket_store,
        uow=unit_of_work,
    )

    add_comment_service = providers.Factory(
        _use_case('AddCommentService'),
        store=ticket_store,
        uow=unit_of_work,
    )

    move_ticket_service = providers.Factory(
        _use_case('MoveTicketService'),
        store=ticket_store,
        uow=unit_of_work,
    )

    get_ticket_service = providers.Factory(_use_case('GetTicketService'), store=ticket_store)
    list_tickets_service = providers.Factory(_use_case('ListTicketsService'), store=ticket_store)
    list_comments_service = providers.Factory(_use_case('ListCommentsService'), store=ticket_store)
    kanban_board_service = providers.Factory(_use_case('KanbanBoardService'), store=ticket_store)
    dashboard_metrics_service = providers.Factory(
        _use_case('DashboardMetricsService'),
        store=ticket_store,
    )
