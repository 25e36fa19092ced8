"""
Sanity-тест для модуля Units

Проверяет:
1. Fixed-width проверки (uint16/32/64/128/256) на границах
2. Отклонение bool, float и отрицательных значений
3. Basis points диапазон
4. Формат и нормализацию адресов
"""

import pytest

from src.core.domain.units import (
    NULL_ADDRESS,
    UINT32_MAX,
    UINT128_MAX,
    fits_uint,
    is_address,
    is_null,
    validate_address,
    validate_bps,
    validate_non_null_address,
    validate_uint,
)
from src.core.errors import InvalidArgumentError


class TestFitsUint:
    """Тесты для fits_uint"""

    def test_boundaries(self) -> None:
        """0 и 2**bits - 1 влезают, 2**bits — нет"""
        assert fits_uint(0, 16)
        assert fits_uint(2**16 - 1, 16)
        assert not fits_uint(2**16, 16)
        assert fits_uint(UINT128_MAX, 128)
        assert not fits_uint(UINT128_MAX + 1, 128)

    def test_negative_rejected(self) -> None:
        assert not fits_uint(-1, 64)

    def test_non_integers_rejected(self) -> None:
        """bool и float не являются количествами"""
        assert not fits_uint(True, 32)
        assert not fits_uint(1.0, 32)
        assert not fits_uint("1", 32)


class TestValidateUint:
    def test_returns_value(self) -> None:
        assert validate_uint(UINT32_MAX, 32, "sire_id") == UINT32_MAX

    def test_overflow_raises_with_name(self) -> None:
        with pytest.raises(InvalidArgumentError, match="starting_price"):
            validate_uint(2**128, 128, "starting_price")

    def test_invalid_argument_is_value_error(self) -> None:
        """InvalidArgumentError совместим с ValueError"""
        with pytest.raises(ValueError):
            validate_uint(-5, 64, "duration")


class TestValidateBps:
    @pytest.mark.parametrize("bps", [0, 375, 10_000])
    def test_valid(self, bps: int) -> None:
        assert validate_bps(bps) == bps

    @pytest.mark.parametrize("bps", [-1, 10_001, 3.75, True])
    def test_invalid(self, bps) -> None:
        with pytest.raises(InvalidArgumentError):
            validate_bps(bps)


class TestAddresses:
    def test_format(self) -> None:
        assert is_address("0x" + "ab" * 20)
        assert not is_address("0x" + "ab" * 19)
        assert not is_address("ab" * 21)
        assert not is_address(None)

    def test_normalization_to_lowercase(self) -> None:
        mixed = "0x" + "AbCdEf" * 6 + "ABCD"
        assert validate_address(mixed, "owner") == mixed.lower()

    def test_null_allowed_by_validate_address(self) -> None:
        assert validate_address(NULL_ADDRESS, "to") == NULL_ADDRESS

    def test_null_rejected_by_non_null(self) -> None:
        with pytest.raises(InvalidArgumentError, match="null address"):
            validate_non_null_address(NULL_ADDRESS, "administrator")

    def test_garbage_rejected(self) -> None:
        with pytest.raises(InvalidArgumentError):
            validate_address("alice", "owner")

    def test_is_null(self) -> None:
        assert is_null(None)
        assert is_null(NULL_ADDRESS)
        assert not is_null("0x" + "0" * 39 + "1")
