"""
Configuração do Celery para processamento assíncrono.

O Celery é usado para:
- Processar Domain Events de forma assíncrona
- Recalcular periodicamente as métricas do dashboard

Arquitetura:
- Broker: Redis (mensagens entre Django e Workers)
- Backend: Redis (resultados de tarefas)
- Workers: Processos que executam as tarefas

Uso:
    # Iniciar worker
    celery -A src.config.celery worker -l INFO -Q default,events

    # Iniciar beat (tarefas agendadas)
    celery -A src.config.celery beat -l INFO
"""

import os
from celery import Celery
from kombu import Queue, Exchange

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'src.config.settings')

app = Celery('support_desk')

# Carregar configurações do Django (prefixo CELERY_)
app.config_from_object('django.conf:settings', namespace='CELERY')

app.conf.task_queues = (
    Queue('default', Exchange('default'), routing_key='default'),
    Queue('events', Exchange('events'), routing_key='events.#'),
)
app.conf.task_default_queue = 'default'

app.conf.task_routes = {
    'src.adapters.django_app.events.handlers.*': {'queue': 'events'},
}

app.autodiscover_tasks([
    'src.adapters.django_app.events',
], related_name='handlers')

app.conf.beat_schedule = {
    'refresh-dashboard-metrics': {
        'task': 'src.adapters.django_app.events.handlers.refresh_dashboard_metrics',
        'schedule': float(os.environ.get('DASHBOARD_REFRESH_SECONDS', 300)),
    },
}
