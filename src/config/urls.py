"""
URL Configuration do Support Desk.

Estrutura:
- /api/ - API JSON (tickets, kanban, dashboard)
- /health/ - Liveness check
"""

from django.http import JsonResponse
from django.urls import path, include


def health(request):
    return JsonResponse({'status': 'ok'})


urlpatterns = [
    path('api/', include('src.adapters.django_app.tickets.urls')),
    path('health/', health, name='health'),
]
