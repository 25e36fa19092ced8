"""Minting — promo и gen0-auction минтинг под lifetime caps."""

from .controller import MintingConfig, MintingController

__all__ = [
    "MintingConfig",
    "MintingController",
]
