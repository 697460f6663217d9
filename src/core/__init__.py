"""
Core Domain Layer - O Hexágono.

Este pacote contém a lógica de negócio pura do Support Desk:
ciclo de vida de tickets, filtros, quadro Kanban e métricas.
Características:
- Zero dependências de framework (Django, Celery, etc.)
- 100% testável sem banco de dados
- Store, transação e relógio injetados pelos adapters
"""
