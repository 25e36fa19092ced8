"""AssetLedger — реестр asset records и ownership mappings.

Инварианты:
- Каждый существующий id ≥ 1 имеет ровно одного non-null владельца
- count[addr] == |{id : owner(id) == addr}|
- sum(count[a] для non-null a) == total_supply()
- Approval и siring-approval слоты очищаются при каждом transfer
- Записи append-only; id 0 — sentinel, не запрашиваемый

Публичные операции (approve/transfer/transfer_from) проверяют pause,
формат аргументов и права вызывающего ДО любой мутации.
Внутренние примитивы (transfer_internal/create_asset/approve_internal)
доступны только связанным компонентам (engines, minting, coordinator).
"""

import logging
from typing import Final, List, Optional

from src.access.guards import require_not_paused, require_writable
from src.access.registry import AccessRegistry
from src.core.clock import Clock, SystemClock
from src.core.domain.asset import (
    SENTINEL_ASSET_ID,
    Asset,
    cooldown_index_for_generation,
)
from src.core.domain.context import SystemContext
from src.core.domain.events import Approval, AssetCreated, Transfer
from src.core.domain.units import (
    NULL_ADDRESS,
    UINT16_BITS,
    UINT32_BITS,
    UINT256_BITS,
    UINT256_MAX,
    validate_address,
    validate_non_null_address,
    validate_uint,
)
from src.core.errors import (
    AuthorizationError,
    InvalidArgumentError,
    NotFoundError,
    StateError,
)

from .event_log import EventLog

logger = logging.getLogger(__name__)


# =============================================================================
# INTERFACE IDS
# =============================================================================

# ERC-165: supportsInterface(bytes4)
INTERFACE_ID_ERC165: Final[int] = 0x01FFC9A7

# Draft ERC-721: XOR селекторов name, symbol, totalSupply, balanceOf, ownerOf,
# approve, transfer, transferFrom, tokensOfOwner, tokenMetadata
INTERFACE_ID_ERC721: Final[int] = 0x9A20483D


class AssetLedger:
    """Реестр non-fungible assets."""

    def __init__(
        self,
        custody_address: str,
        registry: AccessRegistry,
        events: EventLog,
        context: SystemContext,
        clock: Optional[Clock] = None,
        name: str = "NonFungibleAssets",
        symbol: str = "NFA",
    ):
        """
        Args:
            custody_address: собственный адрес ledger/coordinator
                (держит gen0 assets до аукциона)
            registry: роли и pause flag
            events: публичный лог уведомлений
            context: адреса коллабораторов (engines, metadata)
            clock: источник времени (default SystemClock)
            name: имя коллекции
            symbol: тикер коллекции
        """
        self.custody_address = validate_non_null_address(custody_address, "custody_address")
        self.registry = registry
        self.events = events
        self.context = context
        self.clock = clock or SystemClock()
        self.name = name
        self.symbol = symbol

        self._assets: List[Asset] = []
        self._owners: dict[int, str] = {}
        self._counts: dict[str, int] = {}
        self._approvals: dict[int, str] = {}
        self._siring_approvals: dict[int, str] = {}

        # Genesis: sentinel id 0, null → null
        self.create_asset(0, 0, 0, UINT256_MAX, NULL_ADDRESS)

    # =========================================================================
    # QUERIES
    # =========================================================================

    def total_supply(self) -> int:
        return len(self._assets) - 1

    def balance_of(self, owner: str) -> int:
        return self._counts.get(validate_address(owner, "owner"), 0)

    def exists(self, asset_id: int) -> bool:
        if isinstance(asset_id, bool) or not isinstance(asset_id, int):
            return False
        return (
            SENTINEL_ASSET_ID < asset_id < len(self._assets)
            and self._owners.get(asset_id, NULL_ADDRESS) != NULL_ADDRESS
        )

    def owner_of(self, asset_id: int) -> str:
        """
        Raises:
            NotFoundError: для id 0, несуществующих id и null владельца
        """
        self._require_exists(asset_id)
        return self._owners[asset_id]

    def get_asset_record(self, asset_id: int) -> Asset:
        self._require_exists(asset_id)
        return self._assets[asset_id]

    def get_approved(self, asset_id: int) -> str:
        self._require_exists(asset_id)
        return self._approvals.get(asset_id, NULL_ADDRESS)

    def get_siring_approved(self, asset_id: int) -> str:
        self._require_exists(asset_id)
        return self._siring_approvals.get(asset_id, NULL_ADDRESS)

    def tokens_of_owner(self, owner: str) -> List[int]:
        """Все id владельца.

        Полный линейный проход по всем id: дорогая операция, предназначена
        только для инспекции, не для цепочек внутренних вызовов.
        """
        owner = validate_address(owner, "owner")
        if self._counts.get(owner, 0) == 0:
            return []
        return [
            asset_id
            for asset_id in range(1, self.total_supply() + 1)
            if self._owners[asset_id] == owner
        ]

    def count_gestating(self) -> int:
        """Количество assets в паре (siring_with_id != 0). Линейный проход."""
        return sum(1 for asset in self._assets[1:] if asset.is_gestating())

    def supports_interface(self, interface_id: int) -> bool:
        return interface_id in (INTERFACE_ID_ERC165, INTERFACE_ID_ERC721)

    def token_metadata(self, asset_id: int, preferred_transport: str = "") -> str:
        """
        Raises:
            StateError: metadata service не сконфигурирован
            NotFoundError: asset не существует
        """
        if self.context.metadata_service is None:
            raise StateError("metadata service is not configured")
        self._require_exists(asset_id)
        return self.context.metadata_service.get_metadata(asset_id, preferred_transport)

    # =========================================================================
    # PUBLIC MUTATIONS
    # =========================================================================

    def approve(self, caller: str, asset_id: int, to: str) -> None:
        """Перезапись approval слота владельцем.

        Null `to` очищает слот.
        """
        require_not_paused(self.registry)
        to = validate_address(to, "to")
        self._require_owner(caller, asset_id)
        require_writable(self.registry)

        self._approvals[asset_id] = to
        self.events.emit(Approval(owner=self._owners[asset_id], approved=to, asset_id=asset_id))

    def approve_siring(self, caller: str, asset_id: int, partner: str) -> None:
        """Перезапись siring-approval слота владельцем."""
        require_not_paused(self.registry)
        partner = validate_address(partner, "partner")
        self._require_owner(caller, asset_id)
        require_writable(self.registry)

        self._siring_approvals[asset_id] = partner

    def transfer(self, caller: str, asset_id: int, to: str) -> None:
        require_not_paused(self.registry)
        to = self._validate_recipient(to)
        owner = self._require_owner(caller, asset_id)
        if to == owner:
            raise InvalidArgumentError(f"self-transfer of asset {asset_id} is not allowed")

        self.transfer_internal(owner, to, asset_id)

    def transfer_from(self, caller: str, asset_id: int, from_address: str, to: str) -> None:
        require_not_paused(self.registry)
        to = self._validate_recipient(to)
        from_address = validate_address(from_address, "from_address")
        caller = validate_address(caller, "caller")

        self._require_exists(asset_id)
        if self._approvals.get(asset_id, NULL_ADDRESS) != caller or caller == NULL_ADDRESS:
            raise AuthorizationError(f"{caller} is not approved for asset {asset_id}")
        if self._owners[asset_id] != from_address:
            raise AuthorizationError(f"{from_address} does not own asset {asset_id}")
        if to == from_address:
            raise InvalidArgumentError(f"self-transfer of asset {asset_id} is not allowed")

        self.transfer_internal(from_address, to, asset_id)

    # =========================================================================
    # INTERNAL PRIMITIVES
    # =========================================================================

    def approve_internal(self, asset_id: int, to: str) -> None:
        """Escrow approval без уведомления."""
        require_writable(self.registry)
        self._approvals[asset_id] = validate_address(to, "to")

    def transfer_internal(self, from_address: str, to: str, asset_id: int) -> None:
        """Примитив смены владельца.

        Порядок: count[to]++, owner = to, (если from non-null) count[from]--
        и очистка approval слотов; Transfer эмитится последним.
        """
        require_writable(self.registry)
        self._counts[to] = self._counts.get(to, 0) + 1
        self._owners[asset_id] = to

        if from_address != NULL_ADDRESS:
            self._counts[from_address] -= 1
            self._approvals.pop(asset_id, None)
            self._siring_approvals.pop(asset_id, None)

        logger.debug("Asset %d transferred %s -> %s", asset_id, from_address, to)
        self.events.emit(Transfer(from_address=from_address, to_address=to, asset_id=asset_id))

    def create_asset(
        self,
        matron_id: int,
        sire_id: int,
        generation: int,
        genes: int,
        owner: str,
    ) -> int:
        """Примитив создания asset.

        Args:
            matron_id: id матери (uint32, 0 = нет)
            sire_id: id отца (uint32, 0 = нет)
            generation: номер поколения (uint16)
            genes: opaque genetic code (uint256)
            owner: начальный владелец

        Returns:
            Id нового asset

        Raises:
            InvalidArgumentError: выход за разрядность или неверный адрес
            StateError: вызов из receiver callback
        """
        require_writable(self.registry)
        validate_uint(matron_id, UINT32_BITS, "matron_id")
        validate_uint(sire_id, UINT32_BITS, "sire_id")
        validate_uint(generation, UINT16_BITS, "generation")
        validate_uint(genes, UINT256_BITS, "genes")
        owner = validate_address(owner, "owner")

        new_asset_id = len(self._assets)
        validate_uint(new_asset_id, UINT32_BITS, "asset id")

        asset = Asset(
            genes=genes,
            birth_time=self.clock.now(),
            cooldown_end_time=0,
            matron_id=matron_id,
            sire_id=sire_id,
            siring_with_id=0,
            cooldown_index=cooldown_index_for_generation(generation),
            generation=generation,
        )
        self._assets.append(asset)

        self.events.emit(
            AssetCreated(
                owner=owner,
                asset_id=new_asset_id,
                matron_id=matron_id,
                sire_id=sire_id,
                genes=genes,
            )
        )
        self.transfer_internal(NULL_ADDRESS, owner, new_asset_id)

        if new_asset_id != SENTINEL_ASSET_ID:
            logger.info("Asset %d created for %s (generation %d)", new_asset_id, owner, generation)
        return new_asset_id

    # =========================================================================
    # HELPERS
    # =========================================================================

    def _require_exists(self, asset_id: int) -> None:
        if not self.exists(asset_id):
            raise NotFoundError(f"asset {asset_id!r} does not exist")

    def _require_owner(self, caller: str, asset_id: int) -> str:
        caller = validate_address(caller, "caller")
        self._require_exists(asset_id)
        owner = self._owners[asset_id]
        if owner != caller:
            raise AuthorizationError(f"{caller} does not own asset {asset_id}")
        return owner

    def _validate_recipient(self, to: str) -> str:
        """Запрет адресов, на которых asset застрянет навсегда."""
        to = validate_address(to, "to")
        if to == NULL_ADDRESS:
            raise InvalidArgumentError("cannot transfer to the null address")
        if to == self.custody_address:
            raise InvalidArgumentError("cannot transfer to the ledger custody address")
        if to in self.context.engine_addresses():
            raise InvalidArgumentError("cannot transfer directly to an auction engine")
        return to
