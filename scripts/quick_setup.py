#!/usr/bin/env python
"""
Setup rápido para desenvolvimento local.

Este script:
1. Configura Django settings
2. Cria banco de dados SQLite
3. Executa migrations
4. Cria dados de demonstração (opcional)

Uso:
    python scripts/quick_setup.py
    python scripts/quick_setup.py --with-sample-data
"""

import os
import sys
import argparse

# Adicionar raiz do projeto ao path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


DEMO_AGENTS = [
    ('agent-001', 'Alice Johnson'),
    ('agent-002', 'Bob Smith'),
]

DEMO_TICKETS = [
    {
        'title': 'Cannot login to my account',
        'description': 'I have been trying to login for the past hour but keep getting an '
                       '"Invalid credentials" error. I am sure my password is correct.',
        'category': 'Technical',
        'priority': 'High',
        'customerEmail': 'customer1@example.com',
        'customerName': 'John Doe',
    },
    {
        'title': 'Billing discrepancy on last invoice',
        'description': 'My last invoice shows a charge of $150 but I was expecting $100 based '
                       'on my plan. Can you please review this?',
        'category': 'Billing',
        'priority': 'Medium',
        'customerEmail': 'customer2@example.com',
        'customerName': 'Jane Smith',
    },
    {
        'title': 'Feature request: Dark mode',
        'description': 'It would be great if the application had a dark mode option. My eyes '
                       'get tired using the bright interface at night.',
        'category': 'General',
        'priority': 'Low',
        'customerEmail': 'customer3@example.com',
        'customerName': 'Mike Wilson',
    },
    {
        'title': 'Critical: Data loss after update',
        'description': 'After the latest update, all my saved data has disappeared. This is '
                       'urgent as I need this data for my business operations.',
        'category': 'Technical',
        'priority': 'Critical',
        'customerEmail': 'customer4@example.com',
        'customerName': 'Sarah Brown',
    },
    {
        'title': 'How do I export my data?',
        'description': 'I need to export all my data to a CSV file. I cannot find this option '
                       'in the settings. Can you guide me?',
        'category': 'General',
        'priority': 'Low',
        'customerEmail': 'customer5@example.com',
        'customerName': 'Tom Anderson',
    },
    {
        'title': 'Payment method not updating',
        'description': 'I am trying to update my credit card information but the form keeps '
                       'showing an error. I have tried multiple times.',
        'category': 'Billing',
        'priority': 'High',
        'customerEmail': 'customer6@example.com',
        'customerName': 'Emily Davis',
    },
    {
        'title': 'Mobile app crashes on startup',
        'description': 'The mobile app crashes immediately after I open it. I have tried '
                       'reinstalling but the problem persists. Using iPhone 13 with iOS 17.',
        'category': 'Technical',
        'priority': 'High',
        'customerEmail': 'customer7@example.com',
        'customerName': 'David Lee',
    },
    {
        'title': 'Question about enterprise plan',
        'description': 'I am interested in upgrading to the enterprise plan. Can you provide '
                       'more details about the features and pricing?',
        'category': 'General',
        'priority': 'Medium',
        'customerEmail': 'customer8@example.com',
        'customerName': 'Lisa Martinez',
    },
]

# (índice do ticket, agente, status intermediários, comentários)
DEMO_ACTIVITY = [
    (0, 0, ['In Progress'], [
        'I have looked into this issue. It appears your account was temporarily locked '
        'due to multiple failed login attempts. I have unlocked it for you.',
        'Please try logging in again and let me know if you still face any issues.',
    ]),
    (1, 1, ['In Progress', 'Resolved'], [
        'I have reviewed your invoice. The extra $50 charge was for the premium support '
        'add-on that was activated last month.',
    ]),
    (3, 0, ['In Progress'], [
        'This is a critical issue. Our engineering team is investigating the data loss. '
        'We will update you within the next hour.',
    ]),
    (5, 1, ['In Progress', 'Resolved'], [
        'The issue was caused by a browser caching problem. Please clear your browser '
        'cache and try again.',
    ]),
    (6, 0, ['In Progress'], [
        'Thank you for reporting this. We have identified the issue and are working on '
        'a fix. A new version will be released tomorrow.',
    ]),
]


def setup_django():
    """Configura Django para uso standalone."""
    os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'src.config.settings')

    # Forçar SQLite para desenvolvimento rápido
    os.environ['DATABASE_URL'] = 'sqlite:///db.sqlite3'
    # Sem broker: eventos processados no próprio processo
    os.environ['EVENT_PUBLISHER_MODE'] = 'sync'

    import django
    django.setup()


def run_migrations():
    """Executa migrations."""
    from django.core.management import call_command

    print("📦 Executando migrations...")
    call_command('migrate', verbosity=1)
    print("✅ Migrations concluídas!")


def create_sample_data():
    """Cria tickets de demonstração e simula o trabalho dos agentes."""
    from src.config.container import get_container
    from src.core.tickets.dtos import (
        AddCommentInputDTO,
        CreateTicketInputDTO,
        UpdateStatusInputDTO,
    )

    container = get_container()

    print("📝 Criando tickets de demonstração...")

    tickets = []
    for payload in DEMO_TICKETS:
        ticket = container.create_ticket_service().execute(
            CreateTicketInputDTO.from_payload(payload)
        )
        tickets.append(ticket)
        print(f"   ✓ {ticket.title[:50]}")

    print("💬 Atualizando status e adicionando comentários...")

    for index, agent_index, statuses, comments in DEMO_ACTIVITY:
        ticket = tickets[index]
        agent_id, agent_name = DEMO_AGENTS[agent_index]

        # Comentários entram depois do primeiro movimento, como no atendimento real
        container.update_status_service().execute(
            UpdateStatusInputDTO(ticket_id=ticket.id, status=statuses[0], actor_id=agent_id)
        )
        for content in comments:
            container.add_comment_service().execute(
                AddCommentInputDTO(
                    ticket_id=ticket.id,
                    content=content,
                    author_id=agent_id,
                    author_name=agent_name,
                )
            )
        for status in statuses[1:]:
            container.update_status_service().execute(
                UpdateStatusInputDTO(ticket_id=ticket.id, status=status, actor_id=agent_id)
            )

        print(f"   ✓ {ticket.title[:50]} -> {statuses[-1]}")

    print(f"✅ {len(tickets)} tickets criados!")


def check_connection():
    """Verifica conexão com o banco."""
    from django.db import connection, DatabaseError

    print("🔍 Verificando conexão com o banco...")

    try:
        with connection.cursor() as cursor:
            cursor.execute("SELECT 1")
        print("✅ Conexão OK!")
        return True
    except DatabaseError as e:
        print(f"❌ Erro de conexão: {e}")
        return False


def show_info():
    """Mostra informações do setup."""
    from django.conf import settings

    print("\n" + "=" * 60)
    print("📊 Informações do Setup")
    print("=" * 60)
    print(f"  Database Engine: {settings.DATABASES['default']['ENGINE']}")
    print(f"  Database Name: {settings.DATABASES['default']['NAME']}")
    print(f"  Debug Mode: {settings.DEBUG}")
    print("=" * 60)
    print("\n🚀 Próximos passos:")
    print("   1. django-admin runserver --settings=src.config.settings")
    print("   2. Acesse: http://localhost:8000/api/tickets/")
    print("   3. Acesse: http://localhost:8000/api/kanban/")
    print("   4. Acesse: http://localhost:8000/api/dashboard/metrics/")
    print("\n")


def main():
    parser = argparse.ArgumentParser(description='Setup rápido para desenvolvimento')
    parser.add_argument(
        '--with-sample-data',
        action='store_true',
        help='Criar tickets de demonstração'
    )
    parser.add_argument(
        '--check-only',
        action='store_true',
        help='Apenas verificar conexão'
    )

    args = parser.parse_args()

    print("\n" + "=" * 60)
    print("🔧 Support Desk - Quick Setup")
    print("=" * 60 + "\n")

    setup_django()

    if args.check_only:
        check_connection()
        return

    if not check_connection():
        print("\n⚠️  Certifique-se de que o banco de dados está rodando.")
        print("   Para usar SQLite, defina: DATABASE_URL=sqlite:///db.sqlite3")
        return

    run_migrations()

    if args.with_sample_data:
        create_sample_data()

    show_info()


if __name__ == '__main__':
    main()
