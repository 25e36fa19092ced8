"""
Тесты для CurrencyBook и read-only окна receiver callbacks

Покрывает:
- mint / move / transfer / send
- Отказ получателя (False или исключение)
- Регистрацию и снятие receiver hook
- Запрет мутаций из hook (валюта, ledger, coordinator)
"""

import pytest

from src.core.errors import InvalidArgumentError, StateError
from src.core.reentrancy import ReadOnlyWindow
from src.ledger import CurrencyBook
from tests.helpers import ADMIN, ALICE, BOB, CAROL, CORE, FINANCE, OPS, SALE


@pytest.fixture
def book():
    book = CurrencyBook()
    book.mint(ALICE, 1_000)
    return book


class TestPayments:
    def test_move(self, book):
        book.move(ALICE, BOB, 300)
        assert book.balance_of(ALICE) == 700
        assert book.balance_of(BOB) == 300

    def test_insufficient_funds(self, book):
        with pytest.raises(InvalidArgumentError):
            book.transfer(ALICE, BOB, 1_001)
        assert book.send(ALICE, BOB, 1_001) is False
        assert book.balance_of(ALICE) == 1_000

    @pytest.mark.parametrize("amount", [-1, 1.5, True])
    def test_invalid_amount(self, book, amount):
        with pytest.raises(InvalidArgumentError):
            book.move(ALICE, BOB, amount)

    def test_hook_sees_sender_and_amount(self, book):
        calls = []
        book.register_receiver(BOB, lambda sender, amount: calls.append((sender, amount)))
        book.transfer(ALICE, BOB, 10)
        assert calls == [(ALICE, 10)]
        assert book.balance_of(BOB) == 10

    def test_hook_rejection(self, book):
        book.register_receiver(BOB, lambda sender, amount: False)
        with pytest.raises(StateError):
            book.transfer(ALICE, BOB, 10)
        assert book.send(ALICE, BOB, 10) is False
        assert book.balance_of(ALICE) == 1_000

    def test_move_skips_hook(self, book):
        book.register_receiver(BOB, lambda sender, amount: False)
        book.move(ALICE, BOB, 10)
        assert book.balance_of(BOB) == 10

    def test_unregister_receiver(self, book):
        book.register_receiver(BOB, lambda sender, amount: False)
        book.unregister_receiver(BOB)
        assert book.send(ALICE, BOB, 10) is True
        assert book.balance_of(BOB) == 10


class TestReadOnlyWindow:
    def test_nested_hold(self):
        window = ReadOnlyWindow()
        with window.hold():
            with window.hold():
                assert window.active
            assert window.active
        assert not window.active
        window.require_writable()

    def test_hook_cannot_move_funds(self, book):
        book.mint(BOB, 50)

        def forward(sender, amount):
            book.move(BOB, CAROL, 50)

        book.register_receiver(BOB, forward)
        assert book.send(ALICE, BOB, 10) is False
        assert book.balance_of(BOB) == 50
        assert book.balance_of(CAROL) == 0
        assert not book.window.active

    def test_failed_finance_withdraw_is_atomic(self, live_core):
        """Hook finance-controller пытается сменить роль и отказывает."""
        live_core.currency.mint(SALE, 10**16)
        live_core.withdraw_auction_balances(ADMIN)
        balance = live_core.currency.balance_of(CORE)

        def meddle(sender, amount):
            live_core.pause(FINANCE)

        live_core.currency.register_receiver(FINANCE, meddle)
        with pytest.raises(StateError):
            live_core.withdraw_balance(FINANCE)

        assert not live_core.paused
        assert live_core.currency.balance_of(CORE) == balance
        assert live_core.currency.balance_of(FINANCE) == 0

    def test_hook_cannot_reconfigure_coordinator(self, live_core):
        live_core.currency.mint(SALE, 5)

        def meddle(sender, amount):
            live_core.set_reserve_fee(OPS, 0)

        live_core.currency.register_receiver(CORE, meddle)
        with pytest.raises(StateError):
            live_core.sale_auction.withdraw_balance(CORE)
        assert live_core.reserve_fee > 0
        assert live_core.currency.balance_of(SALE) == 5
