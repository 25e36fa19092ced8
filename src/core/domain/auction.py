"""
Auction — Модель активного clock-аукциона

Аукцион существует только пока asset находится в escrow у engine.
Settled/cancelled аукционы не архивируются: запись удаляется.
"""

from enum import Enum

from pydantic import BaseModel, Field

from .units import UINT64_BITS, UINT128_BITS


# =============================================================================
# ENUMS
# =============================================================================


class AuctionKind(str, Enum):
    """
    Тип auction engine.

    SALE — продажа asset; только SALE engine пишет price samples.
    SIRING — второй зарегистрированный engine (breeding-семантика вне ядра).
    """

    SALE = "SALE"
    SIRING = "SIRING"


class AuctionState(str, Enum):
    """
    Жизненный цикл аукциона по asset id.

    NONE → ACTIVE → {SETTLED, CANCELLED} → NONE
    SETTLED/CANCELLED терминальны и сразу схлопываются в NONE.
    """

    NONE = "NONE"
    ACTIVE = "ACTIVE"
    SETTLED = "SETTLED"
    CANCELLED = "CANCELLED"


# =============================================================================
# AUCTION MODEL
# =============================================================================


class Auction(BaseModel):
    """
    Активный аукцион по одному asset id.

    Immutable модель (frozen=True): повторное создание аукциона
    перезаписывает запись целиком.
    """

    seller: str = Field(..., description="Адрес продавца (владелец до escrow)")
    starting_price: int = Field(..., ge=0, lt=2**UINT128_BITS, description="Стартовая цена (uint128)")
    ending_price: int = Field(..., ge=0, lt=2**UINT128_BITS, description="Конечная цена (uint128)")
    duration: int = Field(..., ge=0, lt=2**UINT64_BITS, description="Длительность (секунды, uint64)")
    started_at: int = Field(..., ge=0, lt=2**UINT64_BITS, description="Timestamp старта")

    model_config = {"frozen": True}

    def ends_at(self) -> int:
        return self.started_at + self.duration
