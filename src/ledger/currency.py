"""CurrencyBook — балансы валюты и выплаты.

Модель платежей:
- transfer(): выплата, отказ получателя пропагирует (операция отменяется)
- send(): выплата, отказ получателя проглатывается, возвращается False
- move(): прямое перемещение без receiver hook (возврат излишка ставки)

Receiver hook вызывается ДО перемещения средств внутри read-only окна:
hook может читать состояние и принять или отклонить платёж, но любая
мутация из hook поднимает StateError. Отклонённый платёж не оставляет
изменений.
"""

import logging
from typing import Callable, Optional

from src.core.domain.units import validate_address
from src.core.errors import InvalidArgumentError, StateError
from src.core.reentrancy import ReadOnlyWindow

logger = logging.getLogger(__name__)

# hook(sender, amount) -> False отклоняет платёж; исключение тоже отклоняет
ReceiveHook = Callable[[str, int], Optional[bool]]


class CurrencyBook:
    """Integer балансы по адресам."""

    def __init__(self, window: Optional[ReadOnlyWindow] = None):
        """
        Args:
            window: read-only окно receiver callbacks (default новое)
        """
        self.window = window or ReadOnlyWindow()
        self._balances: dict[str, int] = {}
        self._receivers: dict[str, ReceiveHook] = {}

    def balance_of(self, address: str) -> int:
        return self._balances.get(validate_address(address, "address"), 0)

    def mint(self, address: str, amount: int) -> None:
        """Выпуск валюты на адрес (внешнее пополнение счёта)."""
        self.window.require_writable()
        address = validate_address(address, "address")
        self._validate_amount(amount)
        self._balances[address] = self._balances.get(address, 0) + amount

    def register_receiver(self, address: str, hook: ReceiveHook) -> None:
        """Регистрация hook, вызываемого при каждом входящем платеже."""
        self._receivers[validate_address(address, "address")] = hook

    def unregister_receiver(self, address: str) -> None:
        self._receivers.pop(validate_address(address, "address"), None)

    def transfer(self, sender: str, recipient: str, amount: int) -> None:
        """Платёж с пропагацией отказа получателя.

        Raises:
            InvalidArgumentError: некорректная сумма или недостаточно средств
            StateError: hook получателя вернул False или вызов из callback
            Любое исключение, поднятое hook получателя
        """
        self.window.require_writable()
        sender = validate_address(sender, "sender")
        recipient = validate_address(recipient, "recipient")
        self._validate_amount(amount)
        self._require_funds(sender, amount)

        hook = self._receivers.get(recipient)
        if hook is not None:
            with self.window.hold():
                accepted = hook(sender, amount)
            if accepted is False:
                raise StateError(f"recipient {recipient} rejected payment of {amount}")

        self._move(sender, recipient, amount)

    def send(self, sender: str, recipient: str, amount: int) -> bool:
        """Платёж без пропагации отказа.

        Returns:
            True если средства доставлены, False если получатель отказал
            (средства остаются у sender)
        """
        try:
            self.transfer(sender, recipient, amount)
        except Exception:
            logger.warning(
                "Payment of %d from %s to %s failed; funds stay with sender",
                amount, sender, recipient, exc_info=True,
            )
            return False
        return True

    def move(self, sender: str, recipient: str, amount: int) -> None:
        """Прямое перемещение без вызова hook.

        Raises:
            InvalidArgumentError: некорректная сумма или недостаточно средств
            StateError: вызов из receiver callback
        """
        self.window.require_writable()
        sender = validate_address(sender, "sender")
        recipient = validate_address(recipient, "recipient")
        self._validate_amount(amount)
        self._require_funds(sender, amount)
        self._move(sender, recipient, amount)

    def _move(self, sender: str, recipient: str, amount: int) -> None:
        if amount == 0:
            return
        self._balances[sender] -= amount
        self._balances[recipient] = self._balances.get(recipient, 0) + amount

    def _require_funds(self, address: str, amount: int) -> None:
        balance = self._balances.get(address, 0)
        if balance < amount:
            raise InvalidArgumentError(
                f"insufficient funds: {address} holds {balance}, needs {amount}"
            )

    @staticmethod
    def _validate_amount(amount: int) -> None:
        if isinstance(amount, bool) or not isinstance(amount, int) or amount < 0:
            raise InvalidArgumentError(f"amount must be a non-negative integer, got {amount!r}")
