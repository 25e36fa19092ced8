"""Ledger — реестр assets, балансы валюты и лог уведомлений."""

from .asset_ledger import INTERFACE_ID_ERC165, INTERFACE_ID_ERC721, AssetLedger
from .currency import CurrencyBook
from .event_log import EventLog

__all__ = [
    "AssetLedger",
    "CurrencyBook",
    "EventLog",
    "INTERFACE_ID_ERC165",
    "INTERFACE_ID_ERC721",
]
