"""
Configurações globais do Pytest para o Support Desk.

Este arquivo é carregado automaticamente pelo pytest e
fornece fixtures e configurações compartilhadas.
"""

import pytest
from datetime import datetime, timedelta, timezone
from pathlib import Path


BASE_TIME = datetime(2024, 1, 15, 10, 0, 0, tzinfo=timezone.utc)


class FakeClock:
    """
    Relógio controlável para timestamps determinísticos.

    Example:
        clock = FakeClock()
        created = clock()
        clock.advance(hours=5)
        resolved = clock()
    """

    def __init__(self, start: datetime = BASE_TIME):
        self.current = start

    def __call__(self) -> datetime:
        return self.current

    def advance(self, **kwargs) -> datetime:
        self.current = self.current + timedelta(**kwargs)
        return self.current


@pytest.fixture(scope="session")
def project_root():
    """Retorna o caminho raiz do projeto."""
    return Path(__file__).parent.parent


@pytest.fixture
def base_time():
    """Instante fixo usado como origem dos testes."""
    return BASE_TIME


@pytest.fixture
def clock():
    """Relógio fixo em BASE_TIME, avançado manualmente pelo teste."""
    return FakeClock()


@pytest.fixture
def make_ticket():
    """
    Factory de entidades Ticket para testes dos componentes puros.

    Aceita strings para enums ("High", "Resolved") e qualquer atributo
    da entidade como override.
    """
    from src.core.tickets.entities import (
        Ticket,
        TicketCategory,
        TicketPriority,
        TicketStatus,
    )

    counter = {"n": 0}

    def build(**overrides) -> Ticket:
        counter["n"] += 1
        created_at = overrides.pop("created_at", BASE_TIME + timedelta(minutes=counter["n"]))

        for name, enum_cls in (
            ("status", TicketStatus),
            ("priority", TicketPriority),
            ("category", TicketCategory),
        ):
            if isinstance(overrides.get(name), str):
                overrides[name] = enum_cls.from_string(overrides[name])

        defaults = {
            "title": f"Ticket {counter['n']}",
            "description": "Something is not working",
            "category": TicketCategory.TECHNICAL,
            "priority": TicketPriority.MEDIUM,
            "status": TicketStatus.OPEN,
            "customer_email": f"customer{counter['n']}@example.com",
            "customer_name": f"Customer {counter['n']}",
            "created_at": created_at,
            "updated_at": overrides.get("resolved_at") or created_at,
        }
        defaults.update(overrides)
        return Ticket(**defaults)

    return build


def pytest_configure(config):
    """Configuração do pytest."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )


def pytest_collection_modifyitems(config, items):
    """Modifica coleção de testes."""
    # Testes de integração precisam de Postgres/Redis reais
    skip_integration = pytest.mark.skip(reason="Integration tests require --run-integration")

    for item in items:
        if item.get_closest_marker("integration") is not None:
            if not config.getoption("--run-integration", default=False):
                item.add_marker(skip_integration)


def pytest_addoption(parser):
    """Adiciona opções de linha de comando."""
    parser.addoption(
        "--run-integration",
        action="store_true",
        default=False,
        help="run integration tests",
    )
