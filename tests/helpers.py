"""Общие адреса и fakes коллабораторов для тестов."""


def addr(n: int) -> str:
    """Детерминированный адрес из целого."""
    return f"0x{n:040x}"


CORE = addr(0xC0DE)
SALE = addr(0x5A1E)
SIRING = addr(0x5121)
ADMIN = addr(0xA1)
FINANCE = addr(0xF1)
OPS = addr(0x0B)
ALICE = addr(0xA11CE)
BOB = addr(0xB0B)
CAROL = addr(0xCA201)

DAY = 86_400


class FakeGeneScience:
    """Genetics oracle: среднее генов."""

    is_gene_science = True

    def mix_genes(self, genes1: int, genes2: int, target_time: int) -> int:
        return (genes1 + genes2) // 2


class NotGeneScience:
    is_gene_science = False

    def mix_genes(self, genes1: int, genes2: int, target_time: int) -> int:
        return 0


class FakeMetadata:
    def get_metadata(self, asset_id: int, preferred_transport: str) -> str:
        scheme = preferred_transport or "https"
        return f"{scheme}://assets.example/{asset_id}"
