"""Auction — clock auction engine и окно price samples."""

from .engine import AuctionConfig, AuctionEngine
from .sample_window import SAMPLE_WINDOW_SIZE, PriceSampleWindow

__all__ = [
    "AuctionConfig",
    "AuctionEngine",
    "PriceSampleWindow",
    "SAMPLE_WINDOW_SIZE",
]
