"""
API Views JSON para o domínio de Tickets.

RESTful API consumida pelo frontend (lista, detalhe, Kanban, dashboard).

Endpoints:
- GET   /api/tickets/                 - Listar tickets (filtros via query)
- POST  /api/tickets/                 - Criar ticket
- GET   /api/tickets/<id>/            - Obter ticket com comentários
- PATCH /api/tickets/<id>/status/     - Alterar status
- GET   /api/tickets/<id>/comments/   - Listar comentários
- POST  /api/tickets/<id>/comments/   - Adicionar comentário
- GET   /api/kanban/                  - Quadro Kanban
- POST  /api/kanban/move/             - Drag-and-drop
- GET   /api/dashboard/metrics/       - Métricas do dashboard

Formato:
- Entrada: JSON (chaves camelCase)
- Saída: JSON com estrutura {success, data, ...} ou {success, error, message}
"""

import json
import logging
from typing import Any, Dict, Optional

from django.conf import settings
from django.http import HttpRequest, JsonResponse
from django.utils.decorators import method_decorator
from django.views import View
from django.views.decorators.csrf import csrf_exempt

from src.config.container import get_container
from src.core.shared.exceptions import NotFoundError, ValidationError
from src.core.tickets.dtos import (
    AddCommentInputDTO,
    CreateTicketInputDTO,
    MoveTicketInputDTO,
    TicketFilterCriteria,
    UpdateStatusInputDTO,
)
from src.core.tickets.validators import validate_non_empty

from ..events.handlers import (
    cache_dashboard_metrics,
    dashboard_cache_generation,
    get_cached_dashboard_metrics,
)

logger = logging.getLogger(__name__)

SYSTEM_ACTOR = 'system'


# =============================================================================
# Helpers
# =============================================================================

def json_response(success: bool, data: Any = None, status: int = 200, **extra) -> JsonResponse:
    """
    Cria resposta JSON padronizada.

    Args:
        success: Se operação foi bem sucedida
        data: Dados da resposta
        status: HTTP status code
        **extra: Campos adicionais (count, message, error, ...)
    """
    response = {'success': success}

    if data is not None:
        response['data'] = data

    response.update(extra)
    return JsonResponse(response, status=status)


def parse_json_body(request: HttpRequest) -> Dict[str, Any]:
    """
    Parseia body JSON do request.

    Raises:
        ValidationError: Se JSON malformado ou não for um objeto
    """
    if not request.body:
        return {}

    try:
        data = json.loads(request.body)
    except (json.JSONDecodeError, UnicodeDecodeError):
        raise ValidationError("Malformed JSON body", field="body")

    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object", field="body")
    return data


def get_actor_id(request: HttpRequest) -> str:
    """
    Identifica o agente que executa a ação.

    Usuário autenticado, senão header X-Agent-Id, senão "system".
    """
    user = getattr(request, 'user', None)
    if user is not None and user.is_authenticated:
        return str(user.pk)
    return request.headers.get('X-Agent-Id') or SYSTEM_ACTOR


# =============================================================================
# Base API View
# =============================================================================

@method_decorator(csrf_exempt, name='dispatch')
class BaseAPIView(View):
    """
    View base para APIs JSON.

    Fornece:
    - Parsing de JSON
    - Acesso ao container DI
    - Tratamento de erros padronizado
    """

    def dispatch(self, request, *args, **kwargs):
        try:
            return super().dispatch(request, *args, **kwargs)
        except Exception as e:
            return self.handle_exception(e)

    def get_service(self, service_name: str):
        """Obtém service do container."""
        return getattr(get_container(), service_name)()

    def parse_body(self, request: HttpRequest) -> Dict[str, Any]:
        return parse_json_body(request)

    def handle_exception(self, e: Exception) -> JsonResponse:
        """
        Converte exceção em resposta HTTP.

        - ValidationError → 400
        - NotFoundError → 404
        - Qualquer outra → 500 (detalhe só com DEBUG)
        """
        if isinstance(e, ValidationError):
            return json_response(
                success=False,
                status=400,
                error='Validation Error',
                message=e.message,
                field=e.field,
            )

        if isinstance(e, NotFoundError):
            return json_response(
                success=False,
                status=404,
                error='Not Found',
                message=e.message,
                resourceId=e.resource_id,
            )

        logger.exception(f"Unexpected API error: {e}")
        return json_response(
            success=False,
            status=500,
            error='Internal Server Error',
            message=str(e) if settings.DEBUG else 'An unexpected error occurred. Please try again later.',
        )


# =============================================================================
# Ticket API Views
# =============================================================================

class TicketListAPIView(BaseAPIView):
    """
    GET  /api/tickets/ - Lista tickets
    POST /api/tickets/ - Cria ticket
    """

    def get(self, request: HttpRequest) -> JsonResponse:
        """
        Lista tickets filtrados, do mais recente para o mais antigo.

        Query params (todos opcionais):
        - status, priority, category, customerEmail
        - startDate, endDate (ISO-8601, inclusivos)
        """
        criteria = TicketFilterCriteria.from_query(request.GET)
        tickets = self.get_service('list_tickets_service').execute(criteria)

        return json_response(
            success=True,
            data=[t.to_dict(include_comments=False) for t in tickets],
            count=len(tickets),
        )

    def post(self, request: HttpRequest) -> JsonResponse:
        """
        Cria novo ticket.

        Body JSON:
        {
            "title": "string",
            "description": "string",
            "category": "Technical|Billing|General",
            "priority": "Low|Medium|High|Critical",
            "customerEmail": "string",
            "customerName": "string (opcional)"
        }
        """
        data = self.parse_body(request)
        output = self.get_service('create_ticket_service').execute(
            CreateTicketInputDTO.from_payload(data)
        )

        logger.info(f"API: Ticket created: {output.id}")

        return json_response(
            success=True,
            data=output.to_dict(),
            status=201,
            message='Ticket created successfully',
        )


class TicketDetailAPIView(BaseAPIView):
    """GET /api/tickets/<id>/ - Ticket com comentários."""

    def get(self, request: HttpRequest, pk: str) -> JsonResponse:
        ticket = self.get_service('get_ticket_service').execute(pk)
        return json_response(success=True, data=ticket.to_dict())


class TicketStatusAPIView(BaseAPIView):
    """PATCH /api/tickets/<id>/status/ - Altera status."""

    def patch(self, request: HttpRequest, pk: str) -> JsonResponse:
        """
        Body JSON:
        {
            "status": "Open|In Progress|Resolved|Closed"
        }
        """
        data = self.parse_body(request)
        actor_id = get_actor_id(request)

        output = self.get_service('update_status_service').execute(
            UpdateStatusInputDTO(
                ticket_id=pk,
                status=data.get('status'),
                actor_id=actor_id,
            )
        )

        return json_response(
            success=True,
            data=output.to_dict(),
            message=f"Ticket status updated to {output.status}",
        )


class TicketCommentsAPIView(BaseAPIView):
    """
    GET  /api/tickets/<id>/comments/ - Lista comentários
    POST /api/tickets/<id>/comments/ - Adiciona comentário
    """

    def get(self, request: HttpRequest, pk: str) -> JsonResponse:
        comments = self.get_service('list_comments_service').execute(pk)
        return json_response(
            success=True,
            data=[c.to_dict() for c in comments],
            count=len(comments),
        )

    def post(self, request: HttpRequest, pk: str) -> JsonResponse:
        """
        Body JSON:
        {
            "content": "string",
            "authorId": "string (sem usuário autenticado)",
            "authorName": "string (sem usuário autenticado)"
        }
        """
        data = self.parse_body(request)
        author_id, author_name = self._resolve_author(request, data)

        comment = self.get_service('add_comment_service').execute(
            AddCommentInputDTO(
                ticket_id=pk,
                content=data.get('content'),
                author_id=author_id,
                author_name=author_name,
            )
        )

        return json_response(
            success=True,
            data=comment.to_dict(),
            status=201,
            message='Comment added successfully',
        )

    @staticmethod
    def _resolve_author(request: HttpRequest, data: Dict[str, Any]):
        user = getattr(request, 'user', None)
        if user is not None and user.is_authenticated:
            return str(user.pk), user.get_full_name() or user.get_username()

        return (
            validate_non_empty(data.get('authorId'), 'authorId'),
            validate_non_empty(data.get('authorName'), 'authorName'),
        )


# =============================================================================
# Kanban
# =============================================================================

class KanbanBoardAPIView(BaseAPIView):
    """GET /api/kanban/ - Quadro (aceita os mesmos filtros da listagem)."""

    def get(self, request: HttpRequest) -> JsonResponse:
        criteria = TicketFilterCriteria.from_query(request.GET)
        board = self.get_service('kanban_board_service').execute(criteria)
        return json_response(success=True, data=board.to_dict())


class KanbanMoveAPIView(BaseAPIView):
    """POST /api/kanban/move/ - Solta card em outra coluna."""

    def post(self, request: HttpRequest) -> JsonResponse:
        """
        Body JSON:
        {
            "ticketId": "string",
            "status": "Open|In Progress|Resolved|Closed"
        }
        """
        data = self.parse_body(request)
        ticket_id = validate_non_empty(data.get('ticketId'), 'ticketId')

        result = self.get_service('move_ticket_service').execute(
            MoveTicketInputDTO(
                ticket_id=ticket_id,
                status=data.get('status'),
                actor_id=get_actor_id(request),
            )
        )

        return json_response(success=True, data=result.to_dict())


# =============================================================================
# Dashboard
# =============================================================================

class DashboardMetricsAPIView(BaseAPIView):
    """GET /api/dashboard/metrics/ - Métricas (cache com DASHBOARD_CACHE_TTL)."""

    def get(self, request: HttpRequest) -> JsonResponse:
        generation = dashboard_cache_generation()
        metrics: Optional[Dict[str, Any]] = get_cached_dashboard_metrics(generation)

        if metrics is None:
            metrics = self.get_service('dashboard_metrics_service').execute().to_dict()
            cache_dashboard_metrics(metrics, generation)
        else:
            logger.debug("Dashboard metrics served from cache")

        return json_response(success=True, data=metrics)
