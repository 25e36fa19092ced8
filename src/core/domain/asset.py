"""
Asset — Модель non-fungible asset record

Immutable Pydantic модель записи реестра. Записи append-only: никогда не
удаляются, не перенумеровываются, genes не меняются после создания.

Идентификатор — последовательный integer начиная с 1. Id 0 зарезервирован
под sentinel ("нет asset" / мифический корневой предок) и никогда не является
валидным запрашиваемым asset.
"""

from typing import Final

from pydantic import BaseModel, Field

from .units import UINT16_BITS, UINT32_BITS, UINT64_BITS, UINT256_BITS


# =============================================================================
# COOLDOWN TABLE
# =============================================================================

# Длительность cooldown по cooldown_index (секунды).
# Данные сохраняются в записи; логика breeding вне ядра.
COOLDOWNS: Final[tuple[int, ...]] = (
    60,            # 1 minute
    2 * 60,        # 2 minutes
    5 * 60,        # 5 minutes
    10 * 60,       # 10 minutes
    30 * 60,       # 30 minutes
    3600,          # 1 hour
    2 * 3600,      # 2 hours
    4 * 3600,      # 4 hours
    8 * 3600,      # 8 hours
    16 * 3600,     # 16 hours
    86400,         # 1 day
    2 * 86400,     # 2 days
    4 * 86400,     # 4 days
    7 * 86400,     # 7 days
)

MAX_COOLDOWN_INDEX: Final[int] = len(COOLDOWNS) - 1

# Id sentinel-записи
SENTINEL_ASSET_ID: Final[int] = 0


def cooldown_index_for_generation(generation: int) -> int:
    """
    Начальный cooldown_index для поколения.

    cooldown_index = min(generation // 2, 13)
    """
    return min(generation // 2, MAX_COOLDOWN_INDEX)


# =============================================================================
# ASSET RECORD
# =============================================================================


class Asset(BaseModel):
    """
    Запись asset в реестре.

    Immutable модель (frozen=True). Owner/approval хранятся не здесь,
    а в mapping-ах AssetLedger.
    """

    genes: int = Field(..., ge=0, lt=2**UINT256_BITS, description="Opaque genetic code (uint256)")
    birth_time: int = Field(..., ge=0, lt=2**UINT64_BITS, description="Timestamp создания (UNIX seconds)")
    cooldown_end_time: int = Field(
        0, ge=0, lt=2**UINT64_BITS, description="Timestamp окончания cooldown"
    )
    matron_id: int = Field(0, ge=0, lt=2**UINT32_BITS, description="Id матери (0 = нет)")
    sire_id: int = Field(0, ge=0, lt=2**UINT32_BITS, description="Id отца (0 = нет)")
    siring_with_id: int = Field(
        0, ge=0, lt=2**UINT32_BITS, description="Id siring-партнёра (0 = нет пары)"
    )
    cooldown_index: int = Field(0, ge=0, le=MAX_COOLDOWN_INDEX, description="Индекс в COOLDOWNS")
    generation: int = Field(0, ge=0, lt=2**UINT16_BITS, description="Номер поколения (0 для gen0)")

    model_config = {"frozen": True}

    @property
    def cooldown_duration(self) -> int:
        """Текущая длительность cooldown в секундах."""
        return COOLDOWNS[self.cooldown_index]

    def is_gestating(self) -> bool:
        return self.siring_with_id != 0

    def is_ready(self, now: int) -> bool:
        """Asset не в паре и cooldown истёк."""
        return self.siring_with_id == 0 and self.cooldown_end_time <= now


class AssetView(BaseModel):
    """
    Read-only проекция asset для внешних потребителей.

    Возвращается CoreCoordinator.get_asset().
    """

    asset_id: int = Field(..., ge=1, description="Id asset")
    is_gestating: bool = Field(..., description="Asset в паре (siring_with_id != 0)")
    is_ready: bool = Field(..., description="Не в паре и cooldown истёк")
    cooldown_index: int = Field(..., ge=0, le=MAX_COOLDOWN_INDEX)
    next_action_at: int = Field(..., ge=0, description="cooldown_end_time")
    siring_with_id: int = Field(..., ge=0)
    birth_time: int = Field(..., ge=0)
    matron_id: int = Field(..., ge=0)
    sire_id: int = Field(..., ge=0)
    generation: int = Field(..., ge=0)
    genes: int = Field(..., ge=0)

    model_config = {"frozen": True}

    @classmethod
    def from_asset(cls, asset_id: int, asset: Asset, now: int) -> "AssetView":
        return cls(
            asset_id=asset_id,
            is_gestating=asset.is_gestating(),
            is_ready=asset.is_ready(now),
            cooldown_index=asset.cooldown_index,
            next_action_at=asset.cooldown_end_time,
            siring_with_id=asset.siring_with_id,
            birth_time=asset.birth_time,
            matron_id=asset.matron_id,
            sire_id=asset.sire_id,
            generation=asset.generation,
            genes=asset.genes,
        )
