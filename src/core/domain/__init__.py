"""
Domain models and value objects.

Contains asset and auction records, notifications, roles, collaborator
protocols and fixed-width unit validators.
"""

from src.core.domain.asset import (
    COOLDOWNS,
    MAX_COOLDOWN_INDEX,
    SENTINEL_ASSET_ID,
    Asset,
    AssetView,
    cooldown_index_for_generation,
)
from src.core.domain.auction import Auction, AuctionKind, AuctionState
from src.core.domain.collaborators import GeneScience, MetadataService
from src.core.domain.context import SystemContext
from src.core.domain.events import (
    Approval,
    AssetCreated,
    AuctionCancelled,
    AuctionCreated,
    AuctionSuccessful,
    ContractUpgrade,
    Event,
    Transfer,
)
from src.core.domain.roles import Role
from src.core.domain.units import (
    BPS_DENOMINATOR,
    NULL_ADDRESS,
    UINT16_BITS,
    UINT32_BITS,
    UINT64_BITS,
    UINT128_BITS,
    UINT256_BITS,
    fits_uint,
    is_address,
    is_null,
    validate_address,
    validate_bps,
    validate_non_null_address,
    validate_uint,
)

__all__ = [
    # Units module
    "BPS_DENOMINATOR",
    "NULL_ADDRESS",
    "UINT16_BITS",
    "UINT32_BITS",
    "UINT64_BITS",
    "UINT128_BITS",
    "UINT256_BITS",
    "fits_uint",
    "is_address",
    "is_null",
    "validate_address",
    "validate_bps",
    "validate_non_null_address",
    "validate_uint",
    # Asset model
    "Asset",
    "AssetView",
    "COOLDOWNS",
    "MAX_COOLDOWN_INDEX",
    "SENTINEL_ASSET_ID",
    "cooldown_index_for_generation",
    # Auction model
    "Auction",
    "AuctionKind",
    "AuctionState",
    # Notifications
    "Event",
    "AssetCreated",
    "Transfer",
    "Approval",
    "AuctionCreated",
    "AuctionSuccessful",
    "AuctionCancelled",
    "ContractUpgrade",
    # Roles & collaborators
    "Role",
    "GeneScience",
    "MetadataService",
    "SystemContext",
]
