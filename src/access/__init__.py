"""Access — привилегированные роли, pause flag и guard-функции."""

from .guards import (
    require_administrator,
    require_any_role,
    require_finance,
    require_not_paused,
    require_operations,
    require_paused,
    require_role,
    require_writable,
)
from .registry import AccessRegistry

__all__ = [
    "AccessRegistry",
    "require_role",
    "require_administrator",
    "require_finance",
    "require_operations",
    "require_any_role",
    "require_not_paused",
    "require_paused",
    "require_writable",
]
