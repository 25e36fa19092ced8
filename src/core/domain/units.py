"""
Units — Fixed-width integer и address валидаторы

Единственный допустимый способ проверки входных значений на соответствие
объявленной разрядности (uint16/uint32/uint64/uint128/uint256) и формату
адресов. Все ingress-точки (ledger, auction engine, minting) обязаны
использовать функции этого модуля ДО любой мутации состояния.

Значение, не влезающее в объявленную разрядность, отклоняется
(InvalidArgumentError), а не усекается.
"""

import re
from typing import Final

from src.core.errors import InvalidArgumentError


# =============================================================================
# РАЗРЯДНОСТИ
# =============================================================================

UINT16_BITS: Final[int] = 16
UINT32_BITS: Final[int] = 32
UINT64_BITS: Final[int] = 64
UINT128_BITS: Final[int] = 128
UINT256_BITS: Final[int] = 256

UINT32_MAX: Final[int] = 2**UINT32_BITS - 1
UINT128_MAX: Final[int] = 2**UINT128_BITS - 1
UINT256_MAX: Final[int] = 2**UINT256_BITS - 1

# Basis points: 10000 bps = 100%
BPS_DENOMINATOR: Final[int] = 10_000


# =============================================================================
# АДРЕСА
# =============================================================================

# Null address: "нет владельца" / источник минтинга
NULL_ADDRESS: Final[str] = "0x" + "0" * 40

_ADDRESS_RE: Final[re.Pattern] = re.compile(r"^0x[0-9a-fA-F]{40}$")


def fits_uint(value: int, bits: int) -> bool:
    """
    Проверка, что value — целое в диапазоне [0, 2**bits).

    bool отклоняется явно: True/False не являются количествами.
    """
    if isinstance(value, bool) or not isinstance(value, int):
        return False
    return 0 <= value < 2**bits


def validate_uint(value: int, bits: int, name: str) -> int:
    """
    Валидация fixed-width unsigned значения.

    Args:
        value: Проверяемое значение
        bits: Объявленная разрядность
        name: Имя параметра (для сообщения об ошибке)

    Returns:
        value без изменений

    Raises:
        InvalidArgumentError: Если value не целое или не влезает в bits
    """
    if not fits_uint(value, bits):
        raise InvalidArgumentError(
            f"{name} must be an integer in [0, 2**{bits}), got {value!r}"
        )
    return value


def validate_bps(value: int, name: str = "owner_cut_bps") -> int:
    """
    Валидация basis points: [0, 10000].

    Raises:
        InvalidArgumentError: Если value вне диапазона
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidArgumentError(f"{name} must be an integer, got {value!r}")
    if not 0 <= value <= BPS_DENOMINATOR:
        raise InvalidArgumentError(
            f"{name} must be in [0, {BPS_DENOMINATOR}], got {value}"
        )
    return value


def is_address(value: object) -> bool:
    """True если value — строка вида 0x + 40 hex-символов."""
    return isinstance(value, str) and _ADDRESS_RE.match(value) is not None


def validate_address(value: str, name: str) -> str:
    """
    Валидация формата адреса (null address допускается).

    Returns:
        Нормализованный (lowercase) адрес

    Raises:
        InvalidArgumentError: Если формат неверный
    """
    if not is_address(value):
        raise InvalidArgumentError(f"{name} must be a 0x-prefixed 40-hex address, got {value!r}")
    return value.lower()


def validate_non_null_address(value: str, name: str) -> str:
    """
    Валидация адреса, который не может быть null.

    Raises:
        InvalidArgumentError: Если формат неверный или адрес null
    """
    address = validate_address(value, name)
    if address == NULL_ADDRESS:
        raise InvalidArgumentError(f"{name} must not be the null address")
    return address


def is_null(address: str | None) -> bool:
    """True для None и NULL_ADDRESS."""
    return address is None or address.lower() == NULL_ADDRESS

