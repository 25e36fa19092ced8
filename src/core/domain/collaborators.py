"""
Collaborators — Интерфейсы внешних коллабораторов

Ядро не реализует генетический алгоритм и metadata-сервис; оно потребляет
их только через фиксированные протоколы ниже.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class GeneScience(Protocol):
    """
    Genetics oracle.

    is_gene_science — маркер, проверяемый при регистрации
    (защита от ошибочно переданного объекта).
    """

    is_gene_science: bool

    def mix_genes(self, genes1: int, genes2: int, target_time: int) -> int:
        ...


@runtime_checkable
class MetadataService(Protocol):
    """Внешний metadata/URI resolver."""

    def get_metadata(self, asset_id: int, preferred_transport: str) -> str:
        ...
