"""Guards — явные проверки авторизации и pause.

Вызываются в начале каждой мутирующей операции, до любой мутации.
Каждый guard либо ничего не делает, либо поднимает исключение:
- AuthorizationError — неверная роль
- StateError — операция недопустима в текущем pause-состоянии или
  вызвана из receiver callback
"""

from typing import TYPE_CHECKING

from src.core.domain.roles import Role
from src.core.domain.units import is_address
from src.core.errors import AuthorizationError, StateError

if TYPE_CHECKING:
    from .registry import AccessRegistry


def _holds(registry: "AccessRegistry", caller: str, *roles: Role) -> bool:
    if not is_address(caller):
        return False
    return registry.role_of(caller) in roles


def require_role(registry: "AccessRegistry", caller: str, role: Role) -> None:
    if not _holds(registry, caller, role):
        raise AuthorizationError(f"caller {caller!r} is not {role.value}")


def require_administrator(registry: "AccessRegistry", caller: str) -> None:
    require_role(registry, caller, Role.ADMINISTRATOR)


def require_finance(registry: "AccessRegistry", caller: str) -> None:
    require_role(registry, caller, Role.FINANCE)


def require_operations(registry: "AccessRegistry", caller: str) -> None:
    require_role(registry, caller, Role.OPERATIONS)


def require_any_role(registry: "AccessRegistry", caller: str) -> None:
    """Любая из трёх привилегированных ролей."""
    if not _holds(registry, caller, Role.ADMINISTRATOR, Role.FINANCE, Role.OPERATIONS):
        raise AuthorizationError(f"caller {caller!r} holds no privileged role")


def require_writable(registry: "AccessRegistry") -> None:
    """Запрет мутаций из receiver callback (read-only окно)."""
    registry.window.require_writable()


def require_not_paused(registry: "AccessRegistry") -> None:
    if registry.paused:
        raise StateError("system is paused")


def require_paused(registry: "AccessRegistry") -> None:
    if not registry.paused:
        raise StateError("system is not paused")
