"""
Тесты для MintingController

Покрывает:
- Promo minting: владелец по умолчанию, права, lifetime cap
- Gen0 auction: custody + аукцион SALE engine, cap, пауза
- Стартовую цену gen0 из скользящего среднего продаж
"""

import pytest

from src.coordinator import CoreCoordinator, build_core
from src.core.domain import NULL_ADDRESS
from src.core.errors import (
    AuthorizationError,
    CapExceededError,
    InvalidArgumentError,
    StateError,
)
from src.minting import MintingConfig
from tests.helpers import (
    ADMIN,
    ALICE,
    BOB,
    CORE,
    DAY,
    FINANCE,
    OPS,
    SALE,
    SIRING,
    FakeGeneScience,
)

GEN0_MIN = 10**16


# =============================================================================
# PROMO
# =============================================================================


class TestPromo:
    def test_explicit_owner(self, live_core):
        asset_id = live_core.minting.create_promo_asset(ADMIN, 7, ALICE)
        assert live_core.ledger.owner_of(asset_id) == ALICE
        assert live_core.minting.promo_created_count == 1

    @pytest.mark.parametrize("owner", [None, NULL_ADDRESS])
    def test_default_owner_is_operations(self, live_core, owner):
        asset_id = live_core.minting.create_promo_asset(ADMIN, 7, owner)
        assert live_core.ledger.owner_of(asset_id) == OPS

    def test_default_owner_falls_back_to_administrator(self, clock):
        core = build_core(CORE, SALE, SIRING, ADMIN, FakeGeneScience(), clock=clock)
        asset_id = core.minting.create_promo_asset(ADMIN, 7)
        assert core.ledger.owner_of(asset_id) == ADMIN

    def test_promo_is_gen0_without_parents(self, live_core):
        record = live_core.ledger.get_asset_record(
            live_core.minting.create_promo_asset(ADMIN, 7, ALICE)
        )
        assert (record.generation, record.matron_id, record.sire_id) == (0, 0, 0)

    @pytest.mark.parametrize("caller", [OPS, FINANCE, ALICE])
    def test_only_administrator(self, live_core, caller):
        with pytest.raises(AuthorizationError):
            live_core.minting.create_promo_asset(caller, 7, ALICE)
        assert live_core.ledger.total_supply() == 0

    def test_genes_overflow(self, live_core):
        with pytest.raises(InvalidArgumentError):
            live_core.minting.create_promo_asset(ADMIN, 2**256, ALICE)
        assert live_core.minting.promo_created_count == 0

    def test_lifetime_cap(self, live_core):
        """5000 promo assets создаются, 5001-й отклоняется."""
        for genes in range(5_000):
            live_core.minting.create_promo_asset(ADMIN, genes, ALICE)
        assert live_core.minting.promo_created_count == 5_000

        with pytest.raises(CapExceededError):
            live_core.minting.create_promo_asset(ADMIN, 1, ALICE)
        assert live_core.ledger.total_supply() == 5_000

    def test_cap_error_is_invalid_argument(self, clock):
        core = build_core(
            CORE, SALE, SIRING, ADMIN, FakeGeneScience(),
            clock=clock, minting_config=MintingConfig(promo_creation_limit=1),
        )
        core.minting.create_promo_asset(ADMIN, 1, ALICE)
        with pytest.raises(InvalidArgumentError):
            core.minting.create_promo_asset(ADMIN, 2, ALICE)


# =============================================================================
# GEN0 AUCTIONS
# =============================================================================


class TestGen0Auction:
    def test_minted_into_sale_auction(self, live_core, sale, clock):
        asset_id = live_core.minting.create_gen0_auction(ADMIN, 0xABC)

        assert live_core.ledger.owner_of(asset_id) == SALE
        auction = sale.get_auction(asset_id)
        assert auction.seller == CORE
        assert auction.starting_price == GEN0_MIN
        assert auction.ending_price == 0
        assert auction.duration == DAY
        assert auction.started_at == clock.now()
        assert live_core.minting.gen0_created_count == 1

    def test_sale_records_sample_and_pays_core(self, live_core, sale):
        asset_id = live_core.minting.create_gen0_auction(ADMIN, 1)
        live_core.currency.mint(BOB, GEN0_MIN)

        sale.bid(BOB, asset_id, GEN0_MIN)

        assert sale.gen0_sale_count == 1
        assert sale.average_gen0_sale_price() == GEN0_MIN
        assert live_core.currency.balance_of(CORE) == GEN0_MIN - GEN0_MIN * 375 // 10_000
        assert live_core.minting.next_gen0_price() == GEN0_MIN + GEN0_MIN // 2

    def test_next_auction_priced_from_samples(self, live_core, sale):
        for price in [10, 20, 30, 40, 50]:
            sale.sample_window.record(price * 10**15)
        assert sale.average_gen0_sale_price() == 30 * 10**15
        assert live_core.minting.next_gen0_price() == 45 * 10**15

        asset_id = live_core.minting.create_gen0_auction(ADMIN, 1)
        assert sale.get_auction(asset_id).starting_price == 45 * 10**15

    def test_price_floor(self, live_core, sale):
        sale.sample_window.record(1)
        assert live_core.minting.next_gen0_price() == GEN0_MIN

    def test_only_administrator(self, live_core):
        with pytest.raises(AuthorizationError):
            live_core.minting.create_gen0_auction(OPS, 1)

    def test_lifetime_cap(self, clock):
        core = build_core(
            CORE, SALE, SIRING, ADMIN, FakeGeneScience(),
            clock=clock, minting_config=MintingConfig(gen0_creation_limit=2),
        )
        core.unpause(ADMIN)
        core.minting.create_gen0_auction(ADMIN, 1)
        core.minting.create_gen0_auction(ADMIN, 2)

        with pytest.raises(CapExceededError):
            core.minting.create_gen0_auction(ADMIN, 3)
        assert core.ledger.total_supply() == 2

    def test_paused_mints_nothing(self, core):
        with pytest.raises(StateError):
            core.minting.create_gen0_auction(ADMIN, 1)
        assert core.ledger.total_supply() == 0
        assert core.minting.gen0_created_count == 0

    def test_without_sale_engine(self):
        bare = CoreCoordinator(CORE, ADMIN)
        with pytest.raises(StateError):
            bare.minting.create_gen0_auction(ADMIN, 1)
        with pytest.raises(StateError):
            bare.minting.next_gen0_price()

    def test_caps_are_independent(self, clock):
        core = build_core(
            CORE, SALE, SIRING, ADMIN, FakeGeneScience(),
            clock=clock, minting_config=MintingConfig(promo_creation_limit=1),
        )
        core.unpause(ADMIN)
        core.minting.create_promo_asset(ADMIN, 1, ALICE)
        core.minting.create_gen0_auction(ADMIN, 2)
        assert core.minting.promo_created_count == 1
        assert core.minting.gen0_created_count == 1
