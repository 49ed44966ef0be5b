"""Service layer for the pm_web_svc application.

This package contains business logic and persistence for programs,
projects, tasks, users, board templates and kanban boards.
"""

from .errors import ServiceError, ValidationError, NotFoundError, StoreError
from .position_service import (
    POSITION_GAP,
    find_max_position,
    allocate_position,
    apply_card_moves,
    apply_column_orders,
    rebalance_column,
)

__all__ = [
    "ServiceError",
    "ValidationError",
    "NotFoundError",
    "StoreError",
    "POSITION_GAP",
    "find_max_position",
    "allocate_position",
    "apply_card_moves",
    "apply_column_orders",
    "rebalance_column",
]
