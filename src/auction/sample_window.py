"""PriceSampleWindow — кольцевой буфер последних engine-originated продаж."""

from typing import Final, List

from src.core.errors import InvalidArgumentError
from src.core.math.pricing import integer_mean

# Размер окна price samples
SAMPLE_WINDOW_SIZE: Final[int] = 5


class PriceSampleWindow:
    """Фиксированный кольцевой буфер цен.

    Меньше SAMPLE_WINDOW_SIZE samples — валидное состояние; среднее
    считается по имеющимся samples (0 если пусто).
    """

    def __init__(self, capacity: int = SAMPLE_WINDOW_SIZE):
        if capacity <= 0:
            raise InvalidArgumentError(f"capacity must be positive, got {capacity}")
        self.capacity = capacity
        self._slots: List[int] = [0] * capacity
        self._count = 0

    def record(self, price: int) -> None:
        """Запись цены в слот count % capacity (перезапись самого старого)."""
        self._slots[self._count % self.capacity] = price
        self._count += 1

    @property
    def total_recorded(self) -> int:
        """Сколько samples записано за всё время (не только в окне)."""
        return self._count

    def samples(self) -> List[int]:
        """Samples в окне, от самого старого к самому новому."""
        if self._count < self.capacity:
            return self._slots[: self._count]
        start = self._count % self.capacity
        return self._slots[start:] + self._slots[:start]

    def __len__(self) -> int:
        return min(self._count, self.capacity)

    def average(self) -> int:
        return integer_mean(self.samples())
