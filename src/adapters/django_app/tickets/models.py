"""
Django Models para o domínio de Tickets.

Estes models são ADAPTERS - implementam a persistência para as
entidades de domínio definidas em src/core/tickets/entities.py.

IMPORTANTE:
- Models NÃO contêm lógica de negócio
- Lógica de negócio fica nas Entities e Use Cases do Core
- Models são convertidos para/de Entities via Mappers

Relacionamentos:
- TicketModel: Tabela principal de tickets
- CommentModel: Comentários (manuais e de sistema), append-only
"""

from django.db import models


class TicketStatusChoices(models.TextChoices):
    """Choices para status de ticket (espelha TicketStatus do Core)."""
    OPEN = 'Open', 'Open'
    IN_PROGRESS = 'In Progress', 'In Progress'
    RESOLVED = 'Resolved', 'Resolved'
    CLOSED = 'Closed', 'Closed'


class TicketPriorityChoices(models.TextChoices):
    """Choices para prioridade de ticket (espelha TicketPriority do Core)."""
    LOW = 'Low', 'Low'
    MEDIUM = 'Medium', 'Medium'
    HIGH = 'High', 'High'
    CRITICAL = 'Critical', 'Critical'


class TicketCategoryChoices(models.TextChoices):
    """Choices para categoria de ticket (espelha TicketCategory do Core)."""
    TECHNICAL = 'Technical', 'Technical'
    BILLING = 'Billing', 'Billing'
    GENERAL = 'General', 'General'


class TicketModel(models.Model):
    """
    Model Django para persistência de Tickets.

    Timestamps são definidos pelo relógio do Core, nunca pelo banco
    (sem auto_now), para que updated_at e o comentário de auditoria
    compartilhem o mesmo instante.

    Fields:
        id: UUID como primary key (gerado pela Entity)
        title: Resumo do problema
        description: Descrição detalhada
        category: Categoria (choices)
        priority: Prioridade (choices)
        status: Estado atual (choices)
        customer_email: E-mail do cliente
        customer_name: Nome do cliente (opcional)
        created_at: Timestamp de criação
        updated_at: Timestamp da última alteração
        resolved_at: Timestamp da última entrada em Resolved
    """

    id = models.CharField(
        max_length=36,
        primary_key=True,
        editable=False,
        help_text="UUID único do ticket"
    )

    title = models.CharField(
        max_length=255,
        help_text="Resumo do problema"
    )

    description = models.TextField(
        help_text="Descrição detalhada do problema"
    )

    category = models.CharField(
        max_length=20,
        choices=TicketCategoryChoices.choices,
        db_index=True,
        help_text="Categoria do ticket"
    )

    priority = models.CharField(
        max_length=20,
        choices=TicketPriorityChoices.choices,
        db_index=True,
        help_text="Nível de prioridade"
    )

    status = models.CharField(
        max_length=20,
        choices=TicketStatusChoices.choices,
        default=TicketStatusChoices.OPEN,
        db_index=True,
        help_text="Estado atual do ticket"
    )

    customer_email = models.CharField(
        max_length=254,
        db_index=True,
        help_text="E-mail de contato do cliente"
    )

    customer_name = models.CharField(
        max_length=255,
        null=True,
        blank=True,
        help_text="Nome do cliente"
    )

    created_at = models.DateTimeField(
        db_index=True,
        help_text="Data/hora de criação"
    )

    updated_at = models.DateTimeField(
        help_text="Data/hora da última atualização"
    )

    resolved_at = models.DateTimeField(
        null=True,
        blank=True,
        help_text="Data/hora da última resolução"
    )

    class Meta:
        db_table = 'tickets'
        verbose_name = 'Ticket'
        verbose_name_plural = 'Tickets'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['status', 'created_at'], name='tickets_status_a1c9e2_idx'),
        ]

    def __str__(self):
        return f"[{self.id[:8]}] {self.title}"

    def __repr__(self):
        return f"<TicketModel id={self.id[:8]} status={self.status}>"


class CommentModel(models.Model):
    """
    Comentário de ticket.

    seq é a ordem de inserção, usada como desempate quando dois
    comentários compartilham created_at. comment_id é o UUID
    exposto pelo domínio.
    """

    seq = models.BigAutoField(primary_key=True)

    comment_id = models.CharField(
        max_length=36,
        unique=True,
        editable=False,
        help_text="UUID único do comentário"
    )

    ticket = models.ForeignKey(
        TicketModel,
        on_delete=models.CASCADE,
        related_name='comments',
        help_text="Ticket comentado"
    )

    content = models.TextField(
        help_text="Texto do comentário"
    )

    author_id = models.CharField(
        max_length=100,
        help_text="ID do autor (agente ou ator da mudança de status)"
    )

    author_name = models.CharField(
        max_length=255,
        help_text="Nome exibido do autor"
    )

    is_system = models.BooleanField(
        default=False,
        help_text="Gerado automaticamente pelo ciclo de vida"
    )

    created_at = models.DateTimeField(
        help_text="Data/hora de criação"
    )

    class Meta:
        db_table = 'comments'
        verbose_name = 'Comentário'
        verbose_name_plural = 'Comentários'
        ordering = ['created_at', 'seq']
        indexes = [
            models.Index(fields=['ticket', 'created_at'], name='comments_ticket__5b7d30_idx'),
        ]

    def __str__(self):
        return f"{self.author_name} @ {self.created_at}: {self.content[:30]}"
