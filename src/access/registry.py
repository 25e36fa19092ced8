"""AccessRegistry — привилегированные роли и глобальный pause flag.

Три роли с непересекающимися полномочиями:
- ADMINISTRATOR: фиксирован при genesis; переназначает две другие роли,
  unpause, конфигурация коллабораторов, минтинг, emergency cancel
- FINANCE: вывод средств coordinator
- OPERATIONS: pause, reserve fee

Один non-null адрес может держать не более одной роли.
Pause flag = True при genesis.
"""

import logging
from typing import Optional

from src.core.domain.roles import Role
from src.core.domain.units import NULL_ADDRESS, validate_address, validate_non_null_address
from src.core.errors import InvalidArgumentError
from src.core.reentrancy import ReadOnlyWindow

from .guards import (
    require_administrator,
    require_any_role,
    require_not_paused,
    require_paused,
    require_writable,
)

logger = logging.getLogger(__name__)


class AccessRegistry:
    """Роли и pause flag.

    Guard-логика вынесена в src.access.guards и вызывается явно в начале
    каждой мутирующей операции.
    """

    def __init__(
        self,
        administrator: str,
        finance_controller: Optional[str] = None,
        operations_controller: Optional[str] = None,
        window: Optional[ReadOnlyWindow] = None,
    ):
        """
        Args:
            administrator: адрес администратора (обязателен, неизменен)
            finance_controller: адрес finance-controller (None = не назначен)
            operations_controller: адрес operations-controller (None = не назначен)
            window: read-only окно receiver callbacks (default новое)
        """
        self.window = window or ReadOnlyWindow()
        self._roles: dict[Role, str] = {
            Role.ADMINISTRATOR: validate_non_null_address(administrator, "administrator"),
            Role.FINANCE: NULL_ADDRESS,
            Role.OPERATIONS: NULL_ADDRESS,
        }
        if finance_controller is not None:
            self._assign(Role.FINANCE, finance_controller)
        if operations_controller is not None:
            self._assign(Role.OPERATIONS, operations_controller)

        self.paused = True

    @property
    def administrator(self) -> str:
        return self._roles[Role.ADMINISTRATOR]

    @property
    def finance_controller(self) -> str:
        return self._roles[Role.FINANCE]

    @property
    def operations_controller(self) -> str:
        return self._roles[Role.OPERATIONS]

    def role_of(self, address: str) -> Optional[Role]:
        """Роль адреса или None (null address ролей не имеет)."""
        address = validate_address(address, "address")
        if address == NULL_ADDRESS:
            return None
        for role, holder in self._roles.items():
            if holder == address:
                return role
        return None

    def has_role(self, address: str, role: Role) -> bool:
        return self.role_of(address) == role

    # -------------------------------------------------------------------------
    # Переназначение ролей
    # -------------------------------------------------------------------------

    def set_finance_controller(self, caller: str, new_address: str) -> None:
        require_administrator(self, caller)
        require_writable(self)
        self._assign(Role.FINANCE, new_address)

    def set_operations_controller(self, caller: str, new_address: str) -> None:
        require_administrator(self, caller)
        require_writable(self)
        self._assign(Role.OPERATIONS, new_address)

    def _assign(self, role: Role, new_address: str) -> None:
        address = validate_non_null_address(new_address, f"{role.value.lower()} address")

        holder_role = self.role_of(address)
        if holder_role is not None and holder_role != role:
            raise InvalidArgumentError(
                f"address {address} already holds role {holder_role.value}"
            )

        previous = self._roles[role]
        self._roles[role] = address
        logger.info("Role %s reassigned: %s -> %s", role.value, previous, address)

    # -------------------------------------------------------------------------
    # Pause
    # -------------------------------------------------------------------------

    def pause(self, caller: str) -> None:
        """Pause — любая из трёх ролей, только в unpaused состоянии."""
        require_any_role(self, caller)
        require_not_paused(self)
        require_writable(self)
        self.paused = True
        logger.info("System paused by %s", caller)

    def unpause(self, caller: str) -> None:
        """Unpause — только администратор, только в paused состоянии.

        Проверки коллабораторов выполняет CoreCoordinator.unpause.
        """
        require_administrator(self, caller)
        require_paused(self)
        require_writable(self)
        self.paused = False
        logger.info("System unpaused by %s", caller)
