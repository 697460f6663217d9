"""
Migration inicial para o domínio de Tickets.

Cria as tabelas:
- tickets: Tabela principal de tickets
- comments: Comentários de agentes e de sistema
"""

from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):
    """Migration inicial."""

    initial = True

    dependencies = [
    ]

    operations = [
        # =================================================================
        # Tabela: tickets
        # =================================================================
        migrations.CreateModel(
            name='TicketModel',
            fields=[
                ('id', models.CharField(
                    max_length=36,
                    primary_key=True,
                    serialize=False,
                    editable=False,
                    help_text='UUID único do ticket'
                )),
                ('title', models.CharField(
                    max_length=255,
                    help_text='Resumo do problema'
                )),
                ('description', models.TextField(
                    help_text='Descrição detalhada do problema'
                )),
                ('category', models.CharField(
                    max_length=20,
                    choices=[
                        ('Technical', 'Technical'),
                        ('Billing', 'Billing'),
                        ('General', 'General'),
                    ],
                    db_index=True,
                    help_text='Categoria do ticket'
                )),
                ('priority', models.CharField(
                    max_length=20,
                    choices=[
                        ('Low', 'Low'),
                        ('Medium', 'Medium'),
                        ('High', 'High'),
                        ('Critical', 'Critical'),
                    ],
                    db_index=True,
                    help_text='Nível de prioridade'
                )),
                ('status', models.CharField(
                    max_length=20,
                    choices=[
                        ('Open', 'Open'),
                        ('In Progress', 'In Progress'),
                        ('Resolved', 'Resolved'),
                        ('Closed', 'Closed'),
                    ],
                    default='Open',
                    db_index=True,
                    help_text='Estado atual do ticket'
                )),
                ('customer_email', models.CharField(
                    max_length=254,
                    db_index=True,
                    help_text='E-mail de contato do cliente'
                )),
                ('customer_name', models.CharField(
                    max_length=255,
                    null=True,
                    blank=True,
                    help_text='Nome do cliente'
                )),
                ('created_at', models.DateTimeField(
                    db_index=True,
                    help_text='Data/hora de criação'
                )),
                ('updated_at', models.DateTimeField(
                    help_text='Data/hora da última atualização'
                )),
                ('resolved_at', models.DateTimeField(
                    null=True,
                    blank=True,
                    help_text='Data/hora da última resolução'
                )),
            ],
            options={
                'verbose_name': 'Ticket',
                'verbose_name_plural': 'Tickets',
                'db_table': 'tickets',
                'ordering': ['-created_at'],
            },
        ),

        # =================================================================
        # Tabela: comments
        # =================================================================
        migrations.CreateModel(
            name='CommentModel',
            fields=[
                ('seq', models.BigAutoField(
                    primary_key=True,
                    serialize=False
                )),
                ('comment_id', models.CharField(
                    max_length=36,
                    unique=True,
                    editable=False,
                    help_text='UUID único do comentário'
                )),
                ('content', models.TextField(
                    help_text='Texto do comentário'
                )),
                ('author_id', models.CharField(
                    max_length=100,
                    help_text='ID do autor (agente ou ator da mudança de status)'
                )),
                ('author_name', models.CharField(
                    max_length=255,
                    help_text='Nome exibido do autor'
                )),
                ('is_system', models.BooleanField(
                    default=False,
                    help_text='Gerado automaticamente pelo ciclo de vida'
                )),
                ('created_at', models.DateTimeField(
                    help_text='Data/hora de criação'
                )),
                ('ticket', models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE,
                    related_name='comments',
                    to='tickets.ticketmodel',
                    help_text='Ticket comentado'
                )),
            ],
            options={
                'verbose_name': 'Comentário',
                'verbose_name_plural': 'Comentários',
                'db_table': 'comments',
                'ordering': ['created_at', 'seq'],
            },
        ),

        # =================================================================
        # Índices
        # =================================================================
        migrations.AddIndex(
            model_name='ticketmodel',
            index=models.Index(
                fields=['status', 'created_at'],
                name='tickets_status_a1c9e2_idx'
            ),
        ),
        migrations.AddIndex(
            model_name='commentmodel',
            index=models.Index(
                fields=['ticket', 'created_at'],
                name='comments_ticket__5b7d30_idx'
            ),
        ),
    ]
