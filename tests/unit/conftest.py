"""Fixtures: управляемые часы и собранная система."""

import pytest

from src.core.clock import ManualClock
from src.coordinator import build_core
from tests.helpers import ADMIN, CORE, FINANCE, OPS, SALE, SIRING, FakeGeneScience


@pytest.fixture
def clock():
    return ManualClock(1_700_000_000)


@pytest.fixture
def core(clock):
    """Сконфигурированная система на паузе (состояние genesis)."""
    return build_core(
        CORE,
        SALE,
        SIRING,
        ADMIN,
        FakeGeneScience(),
        finance_controller=FINANCE,
        operations_controller=OPS,
        clock=clock,
    )


@pytest.fixture
def live_core(core):
    """Система после unpause."""
    core.unpause(ADMIN)
    return core


@pytest.fixture
def ledger(live_core):
    return live_core.ledger


@pytest.fixture
def sale(live_core):
    return live_core.sale_auction
