"""API routes for the pm_web_svc application.

This package contains all FastAPI route definitions organized by domain.
"""

from .board_template_routes import board_template_router
from .kanban_routes import kanban_router
from .task_routes import task_router
from .user_routes import user_router
from .user_kanban_routes import user_kanban_router
from .work_item_routes import portfolio_router, program_router, project_router

__all__ = [
    "board_template_router",
    "kanban_router",
    "portfolio_router",
    "program_router",
    "project_router",
    "task_router",
    "user_kanban_router",
    "user_router",
]
