"""
Reentrancy — read-only окно для receiver callbacks

Receiver hook получателя платежа может читать состояние системы, но не
мутировать его. Пока окно открыто, каждая мутирующая операция (ledger,
engines, registry, coordinator, currency) поднимает StateError до первой
мутации. Отказ платежа поэтому никогда не оставляет частичных изменений,
сделанных из hook.

Одно окно разделяется всеми компонентами системы: CoreCoordinator
передаёт окно CurrencyBook в AccessRegistry, остальные компоненты
обращаются к нему через registry.
"""

from contextlib import contextmanager
from typing import Iterator

from src.core.errors import StateError


class ReadOnlyWindow:
    """Счётчик вложенных callback-окон."""

    def __init__(self):
        self._depth = 0

    @property
    def active(self) -> bool:
        return self._depth > 0

    @contextmanager
    def hold(self) -> Iterator[None]:
        """Открыть окно на время вызова callback."""
        self._depth += 1
        try:
            yield
        finally:
            self._depth -= 1

    def require_writable(self) -> None:
        """
        Raises:
            StateError: вызов из receiver callback
        """
        if self.active:
            raise StateError("state is read-only during a receiver callback")
