"""
Testes Unitários para o Metrics Aggregator.

Coverage:
- Contagens (todas as chaves presentes, soma == total)
- Tempo médio de resolução (status atual, arredondamento, zero)
"""

import pytest
from datetime import timedelta
from hypothesis import given

from src.core.tickets.metrics import (
    average_resolution_hours,
    compute_metrics,
    count_by_category,
    count_by_priority,
    count_open,
)
from src.core.tickets.entities import TicketStatus
from tests.strategies import ticket_lists


def _resolved(make_ticket, base_time, **duration):
    return make_ticket(
        status="Resolved",
        created_at=base_time,
        resolved_at=base_time + timedelta(**duration),
    )


class TestCounts:

    def test_snapshot_vazio(self):
        metrics = compute_metrics([])

        assert metrics.to_dict() == {
            "totalOpen": 0,
            "byPriority": {"Low": 0, "Medium": 0, "High": 0, "Critical": 0},
            "byCategory": {"Technical": 0, "Billing": 0, "General": 0},
            "averageResolutionTime": 0.0,
        }

    def test_count_open(self, make_ticket):
        tickets = [
            make_ticket(status="Open"),
            make_ticket(status="Open"),
            make_ticket(status="In Progress"),
            make_ticket(status="Closed"),
        ]
        assert count_open(tickets) == 2

    def test_somas_iguais_ao_total(self, make_ticket):
        tickets = [
            make_ticket(priority="High", category="Billing"),
            make_ticket(priority="High", category="Technical"),
            make_ticket(priority="Low", category="Billing"),
        ]

        by_priority = count_by_priority(tickets)
        by_category = count_by_category(tickets)

        assert by_priority == {"Low": 1, "Medium": 0, "High": 2, "Critical": 0}
        assert by_category == {"Technical": 1, "Billing": 2, "General": 0}
        assert sum(by_priority.values()) == sum(by_category.values()) == len(tickets)

    @given(ticket_lists)
    def test_totais_para_qualquer_colecao(self, sample):
        metrics = compute_metrics(sample)

        assert list(metrics.by_priority) == ["Low", "Medium", "High", "Critical"]
        assert list(metrics.by_category) == ["Technical", "Billing", "General"]
        assert sum(metrics.by_priority.values()) == len(sample)
        assert sum(metrics.by_category.values()) == len(sample)
        assert metrics.total_open == sum(1 for t in sample if t.status is TicketStatus.OPEN)


class TestAverageResolutionProperties:

    @given(ticket_lists)
    def test_zero_sem_resolvidos_atuais(self, sample):
        """Tickets reabertos mantêm resolved_at mas não contam."""
        not_resolved = [t for t in sample if t.status is not TicketStatus.RESOLVED]

        assert average_resolution_hours(not_resolved) == 0.0

    @given(ticket_lists)
    def test_media_entre_minimo_e_maximo(self, sample):
        hours = [
            t.resolution_time.total_seconds() / 3600
            for t in sample
            if t.resolution_time is not None
        ]

        average = average_resolution_hours(sample)

        if hours:
            assert min(hours) - 0.01 <= average <= max(hours) + 0.01
        else:
            assert average == 0.0


class TestAverageResolution:

    def test_sem_resolvidos_retorna_zero(self, make_ticket):
        assert average_resolution_hours([make_ticket(status="Open")]) == 0.0

    def test_media_de_um_a_cinco_horas(self, make_ticket, base_time):
        tickets = [_resolved(make_ticket, base_time, hours=h) for h in range(1, 6)]

        assert average_resolution_hours(tickets) == 3.0

    def test_reaberto_nao_conta(self, make_ticket, base_time):
        """Ticket com resolved_at mas status atual diferente fica de fora."""
        reopened = make_ticket(
            status="In Progress",
            created_at=base_time,
            resolved_at=base_time + timedelta(hours=100),
        )
        tickets = [_resolved(make_ticket, base_time, hours=2), reopened]

        assert average_resolution_hours(tickets) == 2.0

    def test_resolved_sem_timestamp_nao_conta(self, make_ticket):
        assert average_resolution_hours([make_ticket(status="Resolved", resolved_at=None)]) == 0.0

    @pytest.mark.parametrize("duration, expected", [
        ({"minutes": 7, "seconds": 30}, 0.13),   # 0.125 h → meio para cima
        ({"minutes": 20}, 0.33),                 # 0.333... h
        ({"minutes": 40}, 0.67),                 # 0.666... h
        ({"hours": 1, "minutes": 0, "seconds": 18}, 1.01),  # 1.005 h
    ])
    def test_arredondamento_meio_para_cima(self, make_ticket, base_time, duration, expected):
        ticket = _resolved(make_ticket, base_time, **duration)

        assert average_resolution_hours([ticket]) == expected

    def test_milissegundos_truncados(self, make_ticket, base_time):
        ticket = _resolved(make_ticket, base_time, hours=1, microseconds=999)

        assert average_resolution_hours([ticket]) == 1.0

    def test_compute_metrics_completo(self, make_ticket, base_time):
        tickets = [
            make_ticket(status="Open", priority="Critical", category="Technical"),
            _resolved(make_ticket, base_time, hours=4),
        ]

        metrics = compute_metrics(tickets)

        assert metrics.total_open == 1
        assert metrics.by_priority["Critical"] == 1
        assert metrics.average_resolution_time == 4.0
