"""Unit тесты для AccessRegistry и guard-функций.

Coverage:
- Genesis состояние (pause = True)
- Переназначение ролей (только администратор, не null, без пересечений)
- Pause/unpause правила
- Guard-функции
"""

import pytest

from src.access import (
    AccessRegistry,
    require_administrator,
    require_any_role,
    require_finance,
    require_not_paused,
    require_operations,
    require_paused,
)
from src.core.domain import NULL_ADDRESS, Role
from src.core.errors import AuthorizationError, InvalidArgumentError, StateError
from tests.helpers import ADMIN, ALICE, BOB, FINANCE, OPS


@pytest.fixture
def registry():
    return AccessRegistry(ADMIN, finance_controller=FINANCE, operations_controller=OPS)


# =============================================================================
# GENESIS
# =============================================================================


def test_paused_at_genesis(registry):
    assert registry.paused is True


def test_roles_at_genesis(registry):
    assert registry.administrator == ADMIN
    assert registry.finance_controller == FINANCE
    assert registry.operations_controller == OPS
    assert registry.role_of(ADMIN) == Role.ADMINISTRATOR
    assert registry.role_of(ALICE) is None
    assert registry.has_role(FINANCE, Role.FINANCE)
    assert not registry.has_role(FINANCE, Role.OPERATIONS)


def test_unassigned_roles_are_null():
    registry = AccessRegistry(ADMIN)
    assert registry.finance_controller == NULL_ADDRESS
    assert registry.operations_controller == NULL_ADDRESS
    assert registry.role_of(NULL_ADDRESS) is None


def test_null_administrator_rejected():
    with pytest.raises(InvalidArgumentError):
        AccessRegistry(NULL_ADDRESS)


def test_overlapping_roles_rejected_at_genesis():
    with pytest.raises(InvalidArgumentError, match="already holds role"):
        AccessRegistry(ADMIN, finance_controller=ADMIN)


# =============================================================================
# ROLE REASSIGNMENT
# =============================================================================


class TestRoleReassignment:
    def test_administrator_reassigns_finance(self, registry):
        registry.set_finance_controller(ADMIN, ALICE)
        assert registry.finance_controller == ALICE
        assert registry.role_of(FINANCE) is None

    def test_administrator_reassigns_operations(self, registry):
        registry.set_operations_controller(ADMIN, BOB)
        assert registry.operations_controller == BOB

    def test_non_administrator_rejected(self, registry):
        with pytest.raises(AuthorizationError):
            registry.set_finance_controller(FINANCE, ALICE)
        assert registry.finance_controller == FINANCE

    def test_null_target_rejected(self, registry):
        with pytest.raises(InvalidArgumentError):
            registry.set_operations_controller(ADMIN, NULL_ADDRESS)

    def test_target_holding_other_role_rejected(self, registry):
        with pytest.raises(InvalidArgumentError):
            registry.set_operations_controller(ADMIN, FINANCE)
        assert registry.operations_controller == OPS

    def test_reassigning_same_holder_is_allowed(self, registry):
        registry.set_finance_controller(ADMIN, FINANCE)
        assert registry.finance_controller == FINANCE


# =============================================================================
# PAUSE / UNPAUSE
# =============================================================================


class TestPause:
    def test_unpause_by_administrator(self, registry):
        registry.unpause(ADMIN)
        assert registry.paused is False

    def test_unpause_requires_paused(self, registry):
        registry.unpause(ADMIN)
        with pytest.raises(StateError):
            registry.unpause(ADMIN)

    def test_unpause_requires_administrator(self, registry):
        with pytest.raises(AuthorizationError):
            registry.unpause(OPS)

    @pytest.mark.parametrize("caller", [ADMIN, FINANCE, OPS])
    def test_any_role_may_pause(self, registry, caller):
        registry.unpause(ADMIN)
        registry.pause(caller)
        assert registry.paused is True

    def test_pause_requires_unpaused(self, registry):
        with pytest.raises(StateError):
            registry.pause(OPS)

    def test_outsider_may_not_pause(self, registry):
        registry.unpause(ADMIN)
        with pytest.raises(AuthorizationError):
            registry.pause(ALICE)
        assert registry.paused is False


# =============================================================================
# GUARDS
# =============================================================================


class TestGuards:
    def test_role_guards(self, registry):
        require_administrator(registry, ADMIN)
        require_finance(registry, FINANCE)
        require_operations(registry, OPS)
        require_any_role(registry, OPS)

    def test_administrator_holds_no_finance_power(self, registry):
        with pytest.raises(AuthorizationError):
            require_finance(registry, ADMIN)

    def test_malformed_caller_is_unauthorized(self, registry):
        with pytest.raises(AuthorizationError):
            require_administrator(registry, "admin")

    def test_pause_guards(self, registry):
        require_paused(registry)
        with pytest.raises(StateError):
            require_not_paused(registry)
        registry.unpause(ADMIN)
        require_not_paused(registry)
        with pytest.raises(StateError):
            require_paused(registry)
