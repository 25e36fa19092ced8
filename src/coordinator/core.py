"""CoreCoordinator — composition root системы.

Владеет:
- AccessRegistry (роли, pause flag)
- AssetLedger (custody address ledger = адрес coordinator)
- EventLog, CurrencyBook
- MintingController
- SystemContext (адреса коллабораторов)

Ответственность coordinator:
- Регистрация коллабораторов (SALE/SIRING engines, genetics oracle,
  metadata service) с проверкой их маркеров
- Pause/unpause; unpause требует полной конфигурации и отсутствия
  superseded-маркера
- Отказ во входящих платежах от всех, кроме двух зарегистрированных engines
- Вывод баланса finance-controller с резервом под pending obligations
"""

import logging
from dataclasses import dataclass
from typing import Optional

from src.access.guards import (
    require_administrator,
    require_any_role,
    require_finance,
    require_not_paused,
    require_operations,
    require_paused,
    require_writable,
)
from src.access.registry import AccessRegistry
from src.auction.engine import AuctionConfig, AuctionEngine
from src.core.clock import Clock, SystemClock
from src.core.domain.asset import AssetView
from src.core.domain.auction import Auction, AuctionKind
from src.core.domain.collaborators import GeneScience, MetadataService
from src.core.domain.context import SystemContext
from src.core.domain.events import ContractUpgrade
from src.core.domain.units import (
    NULL_ADDRESS,
    UINT64_BITS,
    UINT128_BITS,
    validate_address,
    validate_non_null_address,
    validate_uint,
)
from src.core.errors import AuthorizationError, InvalidArgumentError, StateError
from src.ledger.asset_ledger import AssetLedger
from src.ledger.currency import CurrencyBook
from src.ledger.event_log import EventLog
from src.minting.controller import MintingConfig, MintingController

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CoordinatorConfig:
    """Конфигурация coordinator.

    reserve_fee — резерв на каждую pending obligation (плюс одна
    фиксированная маржа), не выводимый finance-controller.
    """
    reserve_fee: int = 2 * 10**15
    name: str = "NonFungibleAssets"
    symbol: str = "NFA"


class CoreCoordinator:
    """Composition root: связывает ledger, engines, минтинг и роли."""

    def __init__(
        self,
        address: str,
        administrator: str,
        finance_controller: Optional[str] = None,
        operations_controller: Optional[str] = None,
        clock: Optional[Clock] = None,
        currency: Optional[CurrencyBook] = None,
        config: Optional[CoordinatorConfig] = None,
        minting_config: Optional[MintingConfig] = None,
    ):
        """
        Args:
            address: собственный адрес coordinator (custody address ledger)
            administrator: адрес администратора (фиксирован)
            finance_controller: адрес finance-controller
            operations_controller: адрес operations-controller
            clock: источник времени (default SystemClock)
            currency: книга балансов (default новая CurrencyBook)
            config: конфигурация coordinator
            minting_config: лимиты минтинга
        """
        self.address = validate_non_null_address(address, "coordinator address")
        self.config = config or CoordinatorConfig()
        validate_uint(self.config.reserve_fee, UINT128_BITS, "reserve_fee")
        self.clock = clock or SystemClock()

        self.currency = currency or CurrencyBook()
        # Одно read-only окно на всю систему
        self.registry = AccessRegistry(
            administrator, finance_controller, operations_controller, window=self.currency.window
        )
        self.events = EventLog()
        self.context = SystemContext()
        self.ledger = AssetLedger(
            self.address,
            self.registry,
            self.events,
            self.context,
            clock=self.clock,
            name=self.config.name,
            symbol=self.config.symbol,
        )

        self.sale_auction: Optional[AuctionEngine] = None
        self.siring_auction: Optional[AuctionEngine] = None
        self.minting = MintingController(self.ledger, lambda: self.sale_auction, minting_config)
        self.reserve_fee = self.config.reserve_fee

        self.currency.register_receiver(self.address, self._receive_payment)

    # =========================================================================
    # ROLES & PAUSE
    # =========================================================================

    @property
    def paused(self) -> bool:
        return self.registry.paused

    def set_finance_controller(self, caller: str, new_address: str) -> None:
        self.registry.set_finance_controller(caller, new_address)

    def set_operations_controller(self, caller: str, new_address: str) -> None:
        self.registry.set_operations_controller(caller, new_address)

    def pause(self, caller: str) -> None:
        self.registry.pause(caller)

    def unpause(self, caller: str) -> None:
        """Unpause администратором.

        Raises:
            AuthorizationError: caller не администратор
            StateError: не на паузе; не сконфигурированы engines или
                genetics oracle; установлен superseded-адрес
        """
        require_administrator(self.registry, caller)
        require_paused(self.registry)
        if self.sale_auction is None:
            raise StateError("sale auction engine is not configured")
        if self.siring_auction is None:
            raise StateError("siring auction engine is not configured")
        if self.context.gene_science is None:
            raise StateError("gene science oracle is not configured")
        if self.context.new_contract_address != NULL_ADDRESS:
            raise StateError(
                f"system is superseded by {self.context.new_contract_address}"
            )

        self.registry.unpause(caller)

    # =========================================================================
    # COLLABORATORS
    # =========================================================================

    def set_sale_auction_address(self, caller: str, engine: AuctionEngine) -> None:
        require_administrator(self.registry, caller)
        require_writable(self.registry)
        self._validate_engine(engine, AuctionKind.SALE)

        self.sale_auction = engine
        self.context.sale_auction_address = engine.address
        logger.info("Sale auction engine set to %s", engine.address)

    def set_siring_auction_address(self, caller: str, engine: AuctionEngine) -> None:
        require_administrator(self.registry, caller)
        require_writable(self.registry)
        self._validate_engine(engine, AuctionKind.SIRING)

        self.siring_auction = engine
        self.context.siring_auction_address = engine.address
        logger.info("Siring auction engine set to %s", engine.address)

    def _validate_engine(self, engine: AuctionEngine, kind: AuctionKind) -> None:
        if not isinstance(engine, AuctionEngine) or engine.kind != kind:
            raise InvalidArgumentError(f"candidate is not a {kind.value} auction engine")
        if engine.ledger is not self.ledger:
            raise InvalidArgumentError("auction engine is bound to a different ledger")
        if engine.address == self.address:
            raise InvalidArgumentError("auction engine may not share the coordinator address")

        other = self.siring_auction if kind == AuctionKind.SALE else self.sale_auction
        if other is not None and other.address == engine.address:
            raise InvalidArgumentError("sale and siring engines must have distinct addresses")

    def set_gene_science_address(self, caller: str, oracle: GeneScience) -> None:
        require_administrator(self.registry, caller)
        require_writable(self.registry)
        if getattr(oracle, "is_gene_science", False) is not True:
            raise InvalidArgumentError("candidate is not a gene science oracle")

        self.context.gene_science = oracle
        logger.info("Gene science oracle set to %r", oracle)

    def set_metadata_address(self, caller: str, service: MetadataService) -> None:
        require_administrator(self.registry, caller)
        require_writable(self.registry)
        if not isinstance(service, MetadataService):
            raise InvalidArgumentError("candidate is not a metadata service")

        self.context.metadata_service = service

    def set_new_address(self, caller: str, new_address: str) -> None:
        """Одностороннее deprecation: после этого unpause невозможен."""
        require_administrator(self.registry, caller)
        require_paused(self.registry)
        require_writable(self.registry)
        new_address = validate_non_null_address(new_address, "new_address")

        self.context.new_contract_address = new_address
        self.events.emit(ContractUpgrade(new_address=new_address))
        logger.warning("System marked as superseded by %s", new_address)

    # =========================================================================
    # CURRENCY
    # =========================================================================

    def _receive_payment(self, sender: str, amount: int) -> bool:
        """Receiver hook: принимаются только платежи зарегистрированных engines."""
        if sender not in self.context.engine_addresses():
            logger.warning("Rejected stray payment of %d from %s", amount, sender)
            raise AuthorizationError(f"coordinator does not accept payments from {sender}")
        return True

    def pending_obligations(self) -> int:
        """Количество assets в середине транзакции (gestating)."""
        return self.ledger.count_gestating()

    def set_reserve_fee(self, caller: str, reserve_fee: int) -> None:
        require_operations(self.registry, caller)
        require_writable(self.registry)
        self.reserve_fee = validate_uint(reserve_fee, UINT128_BITS, "reserve_fee")

    def withdraw_balance(self, caller: str) -> int:
        """Вывод finance-controller баланса за вычетом резерва.

        reserve = (pending_obligations + 1) * reserve_fee

        Returns:
            Выведенная сумма (0 если баланс не превышает резерв)
        """
        require_finance(self.registry, caller)
        require_writable(self.registry)

        balance = self.currency.balance_of(self.address)
        reserve = (self.pending_obligations() + 1) * self.reserve_fee
        if balance <= reserve:
            return 0

        amount = balance - reserve
        self.currency.transfer(self.address, self.registry.finance_controller, amount)
        logger.info("Withdrew %d to finance controller (reserve %d)", amount, reserve)
        return amount

    def withdraw_auction_balances(self, caller: str) -> int:
        """Перевод балансов обоих engines на coordinator.

        Returns:
            Суммарная выведенная сумма
        """
        require_any_role(self.registry, caller)
        engines = [e for e in (self.sale_auction, self.siring_auction) if e is not None]
        if len(engines) != 2:
            raise StateError("both auction engines must be configured")

        return sum(engine.withdraw_balance(self.address) for engine in engines)

    # =========================================================================
    # AUCTIONS
    # =========================================================================

    def create_sale_auction(
        self,
        caller: str,
        asset_id: int,
        starting_price: int,
        ending_price: int,
        duration: int,
    ) -> Auction:
        return self._create_auction(
            self.sale_auction, caller, asset_id, starting_price, ending_price, duration
        )

    def create_siring_auction(
        self,
        caller: str,
        asset_id: int,
        starting_price: int,
        ending_price: int,
        duration: int,
    ) -> Auction:
        return self._create_auction(
            self.siring_auction, caller, asset_id, starting_price, ending_price, duration
        )

    def _create_auction(
        self,
        engine: Optional[AuctionEngine],
        caller: str,
        asset_id: int,
        starting_price: int,
        ending_price: int,
        duration: int,
    ) -> Auction:
        """Escrow approval + старт аукциона владельцем asset.

        Все проверки engine повторяются здесь до approve_internal, чтобы
        отказ не оставил висящий escrow approval.
        """
        require_not_paused(self.registry)
        require_writable(self.registry)
        if engine is None:
            raise StateError("auction engine is not configured")
        validate_uint(starting_price, UINT128_BITS, "starting_price")
        validate_uint(ending_price, UINT128_BITS, "ending_price")
        validate_uint(duration, UINT64_BITS, "duration")
        caller = validate_non_null_address(caller, "caller")
        if self.ledger.owner_of(asset_id) != caller:
            raise AuthorizationError(f"{caller} does not own asset {asset_id}")

        self.ledger.approve_internal(asset_id, engine.address)
        return engine.create_auction(
            caller, caller, asset_id, starting_price, ending_price, duration
        )

    # =========================================================================
    # QUERIES
    # =========================================================================

    def get_asset(self, asset_id: int) -> AssetView:
        """
        Raises:
            NotFoundError: asset не существует
        """
        record = self.ledger.get_asset_record(asset_id)
        return AssetView.from_asset(asset_id, record, self.clock.now())


def build_core(
    address: str,
    sale_auction_address: str,
    siring_auction_address: str,
    administrator: str,
    gene_science: GeneScience,
    finance_controller: Optional[str] = None,
    operations_controller: Optional[str] = None,
    clock: Optional[Clock] = None,
    currency: Optional[CurrencyBook] = None,
    sale_auction_config: Optional[AuctionConfig] = None,
    siring_auction_config: Optional[AuctionConfig] = None,
    config: Optional[CoordinatorConfig] = None,
    minting_config: Optional[MintingConfig] = None,
) -> CoreCoordinator:
    """Полностью сконфигурированная система (остаётся на паузе).

    Регистрирует SALE и SIRING engines и genetics oracle от имени
    администратора; unpause остаётся явным шагом.
    """
    core = CoreCoordinator(
        address,
        administrator,
        finance_controller=finance_controller,
        operations_controller=operations_controller,
        clock=clock,
        currency=currency,
        config=config,
        minting_config=minting_config,
    )
    sale = AuctionEngine(
        sale_auction_address, core.ledger, core.currency, AuctionKind.SALE, sale_auction_config
    )
    siring = AuctionEngine(
        siring_auction_address, core.ledger, core.currency, AuctionKind.SIRING, siring_auction_config
    )

    administrator = validate_address(administrator, "administrator")
    core.set_sale_auction_address(administrator, sale)
    core.set_siring_auction_address(administrator, siring)
    core.set_gene_science_address(administrator, gene_science)
    return core
