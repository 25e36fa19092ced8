"""MintingController — создание gen0 assets под lifetime caps.

Два независимых канала:
- promo: asset сразу переходит владельцу, без аукциона (cap 5000)
- gen0 auction: asset минтится на custody address ledger и выставляется
  на однодневный убывающий аукцион SALE engine (cap 45000)

Стартовая цена gen0 аукциона выводится из скользящего среднего последних
engine-originated продаж: next = 1.5 * avg, не ниже минимума.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from src.access.guards import require_administrator, require_not_paused
from src.auction.engine import AuctionEngine
from src.core.domain.units import (
    NULL_ADDRESS,
    UINT64_BITS,
    UINT128_BITS,
    UINT256_BITS,
    validate_address,
    validate_uint,
)
from src.core.errors import CapExceededError, StateError
from src.core.math.pricing import compute_next_gen0_price
from src.ledger.asset_ledger import AssetLedger

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MintingConfig:
    """Лимиты и параметры минтинга."""
    promo_creation_limit: int = 5_000
    gen0_creation_limit: int = 45_000
    gen0_starting_price_min: int = 10**16
    gen0_auction_duration: int = 86_400  # 1 day


class MintingController:
    """Минтинг promo и gen0-auction assets."""

    def __init__(
        self,
        ledger: AssetLedger,
        sale_engine_resolver: Callable[[], Optional[AuctionEngine]],
        config: Optional[MintingConfig] = None,
    ):
        """
        Args:
            ledger: реестр assets
            sale_engine_resolver: callable без аргументов, возвращающий текущий
                SALE engine (или None, если не сконфигурирован)
            config: лимиты и параметры
        """
        self.ledger = ledger
        self.registry = ledger.registry
        self.config = config or MintingConfig()
        self._sale_engine_resolver = sale_engine_resolver

        self.promo_created_count = 0
        self.gen0_created_count = 0

    def _sale_engine(self) -> AuctionEngine:
        engine = self._sale_engine_resolver()
        if engine is None:
            raise StateError("sale auction engine is not configured")
        return engine

    def create_promo_asset(self, caller: str, genes: int, owner: Optional[str] = None) -> int:
        """Promo asset напрямую владельцу.

        Args:
            caller: администратор
            genes: opaque genetic code (uint256)
            owner: владелец; None/null → operations-controller
                (или администратор, если operations-controller не назначен)

        Returns:
            Id нового asset

        Raises:
            AuthorizationError: caller не администратор
            CapExceededError: promo cap исчерпан
        """
        require_administrator(self.registry, caller)
        validate_uint(genes, UINT256_BITS, "genes")
        if self.promo_created_count >= self.config.promo_creation_limit:
            raise CapExceededError(
                f"promo creation limit {self.config.promo_creation_limit} reached"
            )

        owner = validate_address(owner, "owner") if owner is not None else NULL_ADDRESS
        if owner == NULL_ADDRESS:
            owner = self.registry.operations_controller
        if owner == NULL_ADDRESS:
            owner = self.registry.administrator

        asset_id = self.ledger.create_asset(0, 0, 0, genes, owner)
        self.promo_created_count += 1
        logger.info(
            "Promo asset %d minted to %s (%d/%d)",
            asset_id, owner, self.promo_created_count, self.config.promo_creation_limit,
        )
        return asset_id

    def create_gen0_auction(self, caller: str, genes: int) -> int:
        """Gen0 asset на custody address + однодневный аукцион.

        Returns:
            Id нового asset

        Raises:
            AuthorizationError: caller не администратор
            CapExceededError: gen0 cap исчерпан
            StateError: SALE engine не сконфигурирован или система на паузе
        """
        require_administrator(self.registry, caller)
        validate_uint(genes, UINT256_BITS, "genes")
        if self.gen0_created_count >= self.config.gen0_creation_limit:
            raise CapExceededError(
                f"gen0 creation limit {self.config.gen0_creation_limit} reached"
            )
        engine = self._sale_engine()
        # Проверка паузы до минтинга: иначе asset останется на custody address
        require_not_paused(self.registry)

        starting_price = self.next_gen0_price()
        # Все проверки аукциона до минтинга
        validate_uint(starting_price, UINT128_BITS, "gen0 starting price")
        validate_uint(self.config.gen0_auction_duration, UINT64_BITS, "gen0 auction duration")
        custody = self.ledger.custody_address

        asset_id = self.ledger.create_asset(0, 0, 0, genes, custody)
        self.ledger.approve_internal(asset_id, engine.address)
        engine.create_auction(
            custody,
            custody,
            asset_id,
            starting_price,
            0,
            self.config.gen0_auction_duration,
        )
        self.gen0_created_count += 1
        logger.info(
            "Gen0 asset %d put on auction from %d (%d/%d)",
            asset_id, starting_price, self.gen0_created_count, self.config.gen0_creation_limit,
        )
        return asset_id

    def next_gen0_price(self) -> int:
        """1.5x среднего последних gen0 продаж, не ниже минимальной цены."""
        average = self._sale_engine().average_gen0_sale_price()
        return compute_next_gen0_price(average, self.config.gen0_starting_price_min)
