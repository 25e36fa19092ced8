"""
SystemContext — адреса коллабораторов

Единый источник истины для cross-collaborator адресов. Хранится в
CoreCoordinator и мутируется только через administrator-gated операции
coordinator; ledger и engines получают ссылку только для чтения.
"""

from dataclasses import dataclass
from typing import Optional

from .collaborators import GeneScience, MetadataService
from .units import NULL_ADDRESS


@dataclass
class SystemContext:
    """Сконфигурированные коллабораторы (NULL_ADDRESS / None = не задан)."""

    sale_auction_address: str = NULL_ADDRESS
    siring_auction_address: str = NULL_ADDRESS
    gene_science: Optional[GeneScience] = None
    metadata_service: Optional[MetadataService] = None
    # Superseded-маркер: после установки unpause невозможен
    new_contract_address: str = NULL_ADDRESS

    def engine_addresses(self) -> tuple[str, ...]:
        """Адреса зарегистрированных auction engines (без NULL)."""
        return tuple(
            a
            for a in (self.sale_auction_address, self.siring_auction_address)
            if a != NULL_ADDRESS
        )
