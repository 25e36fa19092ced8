"""
Roles — Привилегированные роли системы.
"""

from enum import Enum


class Role(str, Enum):
    """
    Привилегированные роли (непересекающиеся).

    ADMINISTRATOR фиксирован при genesis и переназначает две другие роли.
    """

    ADMINISTRATOR = "ADMINISTRATOR"
    FINANCE = "FINANCE"
    OPERATIONS = "OPERATIONS"
