"""
Configuração pytest para testes com Django.

Settings vêm de src.config.settings_test (pyproject.toml):
- Banco SQLite em memória
- Cache local
- Publisher síncrono

Este arquivo fornece fixtures compartilhadas dos adapters.
"""

import uuid

import pytest


@pytest.fixture(autouse=True)
def clean_state():
    """Container e cache limpos a cada teste."""
    from django.core.cache import cache
    from src.config.container import reset_container

    reset_container()
    cache.clear()
    yield
    reset_container()
    cache.clear()


@pytest.fixture
def ticket_model_factory(db, base_time):
    """Factory para criar TicketModel para testes."""
    from src.adapters.django_app.tickets.models import TicketModel

    def create_ticket(**kwargs):
        defaults = {
            'id': str(uuid.uuid4()),
            'title': 'Cannot login',
            'description': 'Invalid credentials error',
            'category': 'Technical',
            'priority': 'Medium',
            'status': 'Open',
            'customer_email': 'john@example.com',
            'customer_name': 'John Doe',
            'created_at': base_time,
            'updated_at': base_time,
        }
        defaults.update(kwargs)
        return TicketModel.objects.create(**defaults)

    return create_ticket


@pytest.fixture
def sample_ticket_entity(base_time):
    """Cria entidade de ticket para testes."""
    from src.core.tickets.entities import Ticket
    from src.core.tickets.validators import validate_ticket_input

    ticket_input = validate_ticket_input(
        title="Billing discrepancy on last invoice",
        description="My last invoice shows a charge of $150",
        category="Billing",
        priority="High",
        customer_email="jane@example.com",
        customer_name="Jane Smith",
    )
    return Ticket.create(ticket_input, now=base_time)


@pytest.fixture
def django_store():
    """Store Django (requer acesso ao banco)."""
    from src.adapters.django_app.tickets.repositories import DjangoTicketStore
    return DjangoTicketStore()


@pytest.fixture
def inmemory_uow():
    """Unit of Work em memória para testes unitários."""
    from src.adapters.django_app.shared.unit_of_work import InMemoryUnitOfWork
    return InMemoryUnitOfWork()
