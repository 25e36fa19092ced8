"""AuctionEngine — clock auction с escrow, settlement и price samples.

Жизненный цикл по asset id:
    NONE → ACTIVE → {SETTLED, CANCELLED} → NONE
SETTLED/CANCELLED не архивируются: запись аукциона удаляется.

Reentrancy: в bid() запись аукциона удаляется ДО любой выплаты, поэтому
receiver hook продавца не видит активного аукциона. Hook выполняется в
read-only окне: любая мутация из него поднимает StateError.
Отказ продавца принять выплату проглатывается: продажа завершается,
средства остаются в engine и выводятся через withdraw_balance().

Settlement (bid) и создание аукционов требуют unpaused состояния; во
время паузы доступны только отмены.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from src.access.guards import (
    require_administrator,
    require_not_paused,
    require_paused,
    require_writable,
)
from src.core.domain.auction import Auction, AuctionKind, AuctionState
from src.core.domain.events import AuctionCancelled, AuctionCreated, AuctionSuccessful
from src.core.domain.units import (
    UINT64_BITS,
    UINT128_BITS,
    validate_address,
    validate_bps,
    validate_non_null_address,
    validate_uint,
)
from src.core.errors import AuthorizationError, InvalidArgumentError, NotFoundError
from src.core.math.pricing import clamp_elapsed, compute_current_price, compute_cut
from src.ledger.asset_ledger import INTERFACE_ID_ERC721, AssetLedger
from src.ledger.currency import CurrencyBook

from .sample_window import SAMPLE_WINDOW_SIZE, PriceSampleWindow

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuctionConfig:
    """Конфигурация auction engine.

    owner_cut_bps — доля engine с каждой продажи, [0, 10000].
    """
    owner_cut_bps: int = 375  # 3.75%
    sample_window_size: int = SAMPLE_WINDOW_SIZE


class AuctionEngine:
    """Clock auction над assets одного AssetLedger.

    Engine сам является custodian asset во время аукциона (escrow на
    собственном адресе). Beneficiary комиссий — custody address ledger.
    """

    def __init__(
        self,
        address: str,
        ledger: AssetLedger,
        currency: CurrencyBook,
        kind: AuctionKind = AuctionKind.SALE,
        config: Optional[AuctionConfig] = None,
    ):
        """
        Args:
            address: собственный (escrow) адрес engine
            ledger: реестр assets; должен поддерживать ERC-721 interface id
            currency: книга балансов
            kind: SALE (пишет price samples) или SIRING
            config: конфигурация (owner cut)

        Raises:
            InvalidArgumentError: bps вне диапазона или ledger не поддерживает
                interface
        """
        self.config = config or AuctionConfig()
        validate_bps(self.config.owner_cut_bps)
        if not ledger.supports_interface(INTERFACE_ID_ERC721):
            raise InvalidArgumentError("ledger does not support the ERC-721 interface")

        self.address = validate_non_null_address(address, "engine address")
        self.ledger = ledger
        self.currency = currency
        self.kind = kind
        self.registry = ledger.registry
        self.events = ledger.events
        self.clock = ledger.clock

        self._auctions: dict[int, Auction] = {}
        self.sample_window = PriceSampleWindow(self.config.sample_window_size)

    # =========================================================================
    # PROPERTIES
    # =========================================================================

    @property
    def owner_cut_bps(self) -> int:
        return self.config.owner_cut_bps

    @property
    def is_sale_auction(self) -> bool:
        return self.kind == AuctionKind.SALE

    @property
    def is_siring_auction(self) -> bool:
        return self.kind == AuctionKind.SIRING

    @property
    def beneficiary(self) -> str:
        return self.ledger.custody_address

    @property
    def gen0_sale_count(self) -> int:
        """Сколько engine-originated продаж записано за всё время."""
        return self.sample_window.total_recorded

    def auction_state(self, asset_id: int) -> AuctionState:
        return AuctionState.ACTIVE if asset_id in self._auctions else AuctionState.NONE

    # =========================================================================
    # CREATE
    # =========================================================================

    def create_auction(
        self,
        caller: str,
        seller: str,
        asset_id: int,
        starting_price: int,
        ending_price: int,
        duration: int,
    ) -> Auction:
        """Старт аукциона с escrow asset на адрес engine.

        Args:
            caller: custody address ledger (coordinator/minting) или сам seller
            seller: текущий владелец asset
            asset_id: id asset
            starting_price: цена при старте (uint128)
            ending_price: цена по истечении duration (uint128)
            duration: длительность в секундах (uint64)

        Returns:
            Созданная запись аукциона (перезаписывает предыдущую для id)

        Raises:
            StateError: система на паузе
            InvalidArgumentError: выход за разрядность
            NotFoundError: asset не существует
            AuthorizationError: caller/seller не уполномочен или engine
                не получил escrow approval
        """
        require_not_paused(self.registry)
        require_writable(self.registry)
        validate_uint(starting_price, UINT128_BITS, "starting_price")
        validate_uint(ending_price, UINT128_BITS, "ending_price")
        validate_uint(duration, UINT64_BITS, "duration")
        caller = validate_address(caller, "caller")
        seller = validate_non_null_address(seller, "seller")

        if caller not in (seller, self.ledger.custody_address):
            raise AuthorizationError(f"{caller} may not create auctions for {seller}")
        if self.ledger.owner_of(asset_id) != seller:
            raise AuthorizationError(f"{seller} does not own asset {asset_id}")
        if self.ledger.get_approved(asset_id) != self.address:
            raise AuthorizationError(f"engine is not approved to escrow asset {asset_id}")

        # Escrow: engine становится custodian
        self.ledger.transfer_internal(seller, self.address, asset_id)

        auction = Auction(
            seller=seller,
            starting_price=starting_price,
            ending_price=ending_price,
            duration=duration,
            started_at=self.clock.now(),
        )
        self._auctions[asset_id] = auction

        self.events.emit(
            AuctionCreated(
                asset_id=asset_id,
                starting_price=starting_price,
                ending_price=ending_price,
                duration=duration,
            )
        )
        logger.info(
            "Auction created: asset=%d seller=%s %d -> %d over %ds",
            asset_id, seller, starting_price, ending_price, duration,
        )
        return auction

    # =========================================================================
    # PRICING
    # =========================================================================

    def current_price(self, auction: Auction) -> int:
        elapsed = clamp_elapsed(self.clock.now(), auction.started_at, auction.duration)
        return compute_current_price(
            auction.starting_price, auction.ending_price, auction.duration, elapsed
        )

    def get_auction(self, asset_id: int) -> Auction:
        """
        Raises:
            NotFoundError: нет активного аукциона
        """
        return self._require_auction(asset_id)

    def get_current_price(self, asset_id: int) -> int:
        return self.current_price(self._require_auction(asset_id))

    def average_gen0_sale_price(self) -> int:
        """Среднее по окну price samples (0 если пусто)."""
        return self.sample_window.average()

    # =========================================================================
    # SETTLEMENT
    # =========================================================================

    def bid(self, bidder: str, asset_id: int, amount: int) -> int:
        """Покупка asset по текущей цене.

        Порядок:
        1. Все проверки (аукцион, сумма ≥ цены, средства bidder)
        2. Сбор ставки на адрес engine
        3. Удаление записи аукциона (до любой выплаты)
        4. Возврат излишка amount - price bidder
        5. Выплата proceeds = price - cut продавцу (отказ проглатывается)
        6. Price sample, если продавец — custody address ledger (SALE engine)
        7. Transfer asset bidder, уведомление AuctionSuccessful

        Returns:
            Фактическая цена продажи

        Raises:
            StateError: система на паузе или вызов из receiver callback
            NotFoundError: нет активного аукциона
            InvalidArgumentError: amount < цены или недостаточно средств
        """
        require_not_paused(self.registry)
        require_writable(self.registry)
        bidder = validate_non_null_address(bidder, "bidder")
        validate_uint(amount, UINT128_BITS, "amount")
        auction = self._require_auction(asset_id)

        price = self.current_price(auction)
        if amount < price:
            raise InvalidArgumentError(f"bid {amount} is below current price {price}")
        if self.currency.balance_of(bidder) < amount:
            raise InvalidArgumentError(f"{bidder} cannot cover bid of {amount}")

        seller = auction.seller

        self.currency.move(bidder, self.address, amount)
        del self._auctions[asset_id]

        excess = amount - price
        if excess > 0:
            self.currency.move(self.address, bidder, excess)

        if price > 0:
            cut = compute_cut(price, self.owner_cut_bps)
            proceeds = price - cut
            if not self.currency.send(self.address, seller, proceeds):
                logger.warning(
                    "Seller %s did not accept proceeds %d for asset %d; kept by engine",
                    seller, proceeds, asset_id,
                )

        if self.is_sale_auction and seller == self.ledger.custody_address:
            self.sample_window.record(price)

        self.ledger.transfer_internal(self.address, bidder, asset_id)
        self.events.emit(AuctionSuccessful(asset_id=asset_id, total_price=price, winner=bidder))
        logger.info("Auction settled: asset=%d price=%d winner=%s", asset_id, price, bidder)
        return price

    # =========================================================================
    # CANCELLATION
    # =========================================================================

    def cancel_auction(self, caller: str, asset_id: int) -> None:
        """Отмена продавцом; asset возвращается продавцу.

        Raises:
            NotFoundError: нет активного аукциона
            AuthorizationError: caller не продавец
        """
        require_writable(self.registry)
        caller = validate_address(caller, "caller")
        auction = self._require_auction(asset_id)
        if caller != auction.seller:
            raise AuthorizationError(f"{caller} is not the seller of asset {asset_id}")
        self._cancel(asset_id, auction)

    def cancel_auction_when_paused(self, caller: str, asset_id: int) -> None:
        """Emergency отмена администратором во время паузы (без проверки продавца)."""
        require_paused(self.registry)
        require_administrator(self.registry, caller)
        require_writable(self.registry)
        auction = self._require_auction(asset_id)
        self._cancel(asset_id, auction)

    def _cancel(self, asset_id: int, auction: Auction) -> None:
        del self._auctions[asset_id]
        self.ledger.transfer_internal(self.address, auction.seller, asset_id)
        self.events.emit(AuctionCancelled(asset_id=asset_id))
        logger.info("Auction cancelled: asset=%d returned to %s", asset_id, auction.seller)

    # =========================================================================
    # WITHDRAWAL
    # =========================================================================

    def withdraw_balance(self, caller: str) -> int:
        """Вывод всего баланса engine beneficiary.

        Returns:
            Выведенная сумма

        Raises:
            AuthorizationError: caller не beneficiary и не администратор
        """
        require_writable(self.registry)
        caller = validate_address(caller, "caller")
        if caller != self.beneficiary and caller != self.registry.administrator:
            raise AuthorizationError(f"{caller} may not withdraw engine balance")

        amount = self.currency.balance_of(self.address)
        self.currency.transfer(self.address, self.beneficiary, amount)
        logger.info("Engine %s withdrew %d to %s", self.address, amount, self.beneficiary)
        return amount

    # =========================================================================
    # HELPERS
    # =========================================================================

    def _require_auction(self, asset_id: int) -> Auction:
        auction = self._auctions.get(asset_id)
        if auction is None:
            raise NotFoundError(f"no active auction for asset {asset_id!r}")
        return auction
