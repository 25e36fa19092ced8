"""
Pricing — Clock auction price math

Модуль обеспечивает детерминированные integer-вычисления:
- Линейная интерполяция цены аукциона по времени
- Fee split в basis points
- Integer среднее по price samples
- Цена следующего gen0 аукциона

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. elapsed = 0        → ровно starting_price
2. elapsed ≥ duration → ровно ending_price
3. duration = 0       → ending_price
4. Умножение выполняется ДО деления (без потери точности)
5. Только integer арифметика, float не используется

ФОРМУЛЫ:
    elapsed = clamp(now - started_at, 0, duration)
    price   = start + (end - start) * elapsed / duration   (signed delta)
    cut     = price * owner_cut_bps / 10000
    next    = avg + avg / 2, floor = min_price
"""

from typing import Iterable

from src.core.domain.units import BPS_DENOMINATOR, UINT128_BITS, fits_uint, validate_bps
from src.core.errors import InternalConsistencyError


def clamp_elapsed(now: int, started_at: int, duration: int) -> int:
    """
    Прошедшее время, ограниченное [0, duration].

    now < started_at (часы "позади" старта) трактуется как 0.
    """
    if now <= started_at:
        return 0
    return min(now - started_at, duration)


def compute_current_price(
    starting_price: int,
    ending_price: int,
    duration: int,
    elapsed: int,
) -> int:
    """
    Линейная интерполяция цены.

    Поддерживает как убывающие, так и возрастающие ramp-ы: delta считается
    со знаком.

    Args:
        starting_price: Цена при elapsed = 0
        ending_price: Цена при elapsed ≥ duration
        duration: Длительность в секундах
        elapsed: Прошедшее время в секундах (будет ограничено duration)

    Returns:
        Текущая цена (integer)

    Examples:
        >>> compute_current_price(1_000_000, 0, 86400, 43200)
        500000
        >>> compute_current_price(100, 200, 10, 5)
        150
        >>> compute_current_price(100, 0, 0, 0)
        0
    """
    if elapsed >= duration:
        # duration == 0 попадает сюда же
        return ending_price

    total_price_change = ending_price - starting_price
    # Усечение к нулю: int(a / b) для целых со знаком
    numerator = total_price_change * elapsed
    current_price_change = abs(numerator) // duration
    if numerator < 0:
        current_price_change = -current_price_change

    return starting_price + current_price_change


def compute_cut(price: int, owner_cut_bps: int) -> int:
    """
    Комиссия engine: price * bps / 10000.

    Raises:
        InvalidArgumentError: Если bps вне [0, 10000]
    """
    validate_bps(owner_cut_bps)
    return price * owner_cut_bps // BPS_DENOMINATOR


def integer_mean(samples: Iterable[int]) -> int:
    """
    Integer (floor) среднее; 0 для пустой последовательности.
    """
    values = list(samples)
    if not values:
        return 0
    return sum(values) // len(values)


def compute_next_gen0_price(average_price: int, minimum_price: int) -> int:
    """
    Стартовая цена следующего gen0 аукциона.

    next = avg + avg // 2 (1.5x), но не ниже minimum_price.

    Raises:
        InternalConsistencyError: Если average_price не влезает в uint128
            (недостижимо при корректной upstream-валидации)
    """
    if not fits_uint(average_price, UINT128_BITS):
        raise InternalConsistencyError(
            f"average sale price {average_price!r} does not fit uint128"
        )

    next_price = average_price + average_price // 2

    if next_price < minimum_price:
        next_price = minimum_price

    return next_price
