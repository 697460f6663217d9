"""
URL patterns da API JSON do domínio de Tickets.

Montadas em /api/ por src/config/urls.py.
"""

from django.urls import path
from . import api_views

app_name = 'tickets'

urlpatterns = [
    # Tickets
    path('tickets/', api_views.TicketListAPIView.as_view(), name='ticket_list'),
    path('tickets/<str:pk>/', api_views.TicketDetailAPIView.as_view(), name='ticket_detail'),
    path('tickets/<str:pk>/status/', api_views.TicketStatusAPIView.as_view(), name='ticket_status'),
    path('tickets/<str:pk>/comments/', api_views.TicketCommentsAPIView.as_view(), name='ticket_comments'),

    # Kanban
    path('kanban/', api_views.KanbanBoardAPIView.as_view(), name='kanban_board'),
    path('kanban/move/', api_views.KanbanMoveAPIView.as_view(), name='kanban_move'),

    # Dashboard
    path('dashboard/metrics/', api_views.DashboardMetricsAPIView.as_view(), name='dashboard_metrics'),
]
