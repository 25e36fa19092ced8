"""
Events — Публичные уведомления (append-only log)

Каждое событие — immutable Pydantic модель с дискриминатором `event`.
Сериализованная форма (model_dump) соответствует JSON Schema в
src/core/contracts/schema/<event>.json.
"""

from typing import Literal, Union

from pydantic import BaseModel, Field

from .units import UINT32_BITS, UINT64_BITS, UINT128_BITS, UINT256_BITS

_ADDRESS_PATTERN = "^0x[0-9a-f]{40}$"


class AssetCreated(BaseModel):
    """Создан новый asset (эмитится до Transfer из null)."""

    event: Literal["AssetCreated"] = "AssetCreated"
    owner: str = Field(..., pattern=_ADDRESS_PATTERN)
    asset_id: int = Field(..., ge=0, lt=2**UINT32_BITS)
    matron_id: int = Field(..., ge=0, lt=2**UINT32_BITS)
    sire_id: int = Field(..., ge=0, lt=2**UINT32_BITS)
    genes: int = Field(..., ge=0, lt=2**UINT256_BITS)

    model_config = {"frozen": True}


class Transfer(BaseModel):
    """Смена владельца (включая минтинг из null address)."""

    event: Literal["Transfer"] = "Transfer"
    from_address: str = Field(..., pattern=_ADDRESS_PATTERN)
    to_address: str = Field(..., pattern=_ADDRESS_PATTERN)
    asset_id: int = Field(..., ge=0, lt=2**UINT32_BITS)

    model_config = {"frozen": True}


class Approval(BaseModel):
    """Публичный approve. Escrow-approve не эмитит событие."""

    event: Literal["Approval"] = "Approval"
    owner: str = Field(..., pattern=_ADDRESS_PATTERN)
    approved: str = Field(..., pattern=_ADDRESS_PATTERN)
    asset_id: int = Field(..., ge=0, lt=2**UINT32_BITS)

    model_config = {"frozen": True}


class AuctionCreated(BaseModel):
    event: Literal["AuctionCreated"] = "AuctionCreated"
    asset_id: int = Field(..., ge=0, lt=2**UINT32_BITS)
    starting_price: int = Field(..., ge=0, lt=2**UINT128_BITS)
    ending_price: int = Field(..., ge=0, lt=2**UINT128_BITS)
    duration: int = Field(..., ge=0, lt=2**UINT64_BITS)

    model_config = {"frozen": True}


class AuctionSuccessful(BaseModel):
    """Аукцион закрыт ставкой; total_price — фактическая цена, не ставка."""

    event: Literal["AuctionSuccessful"] = "AuctionSuccessful"
    asset_id: int = Field(..., ge=0, lt=2**UINT32_BITS)
    total_price: int = Field(..., ge=0, lt=2**UINT128_BITS)
    winner: str = Field(..., pattern=_ADDRESS_PATTERN)

    model_config = {"frozen": True}


class AuctionCancelled(BaseModel):
    event: Literal["AuctionCancelled"] = "AuctionCancelled"
    asset_id: int = Field(..., ge=0, lt=2**UINT32_BITS)

    model_config = {"frozen": True}


class ContractUpgrade(BaseModel):
    """Установлен superseded-адрес (одностороннее deprecation)."""

    event: Literal["ContractUpgrade"] = "ContractUpgrade"
    new_address: str = Field(..., pattern=_ADDRESS_PATTERN)

    model_config = {"frozen": True}


Event = Union[
    AssetCreated,
    Transfer,
    Approval,
    AuctionCreated,
    AuctionSuccessful,
    AuctionCancelled,
    ContractUpgrade,
]
