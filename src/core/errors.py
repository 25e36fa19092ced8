"""
Errors — Таксономия ошибок ядра реестра

Все предусловия проверяются до первой мутации состояния (fail-fast).
Исключение, поднятое из операции, означает, что состояние не изменилось.

Иерархия:
- CoreError                    — базовый класс
  - AuthorizationError         — неверная роль, не владелец, не approved
  - InvalidArgumentError       — null/зарезервированный адрес, выход за bit width,
                                 self-transfer, недостаточная ставка
    - CapExceededError         — исчерпан lifetime cap минтинга
  - NotFoundError              — несуществующий asset или auction
  - StateError                 — pause/unpause, коллабораторы не настроены
  - InternalConsistencyError   — нарушение внутреннего инварианта (недостижимо)
"""


class CoreError(Exception):
    """Базовая ошибка ядра."""
    pass


class AuthorizationError(CoreError):
    """Вызывающий не обладает нужной ролью или правами на asset."""
    pass


class InvalidArgumentError(CoreError, ValueError):
    """Аргумент отклонён до любой мутации состояния."""
    pass


class CapExceededError(InvalidArgumentError):
    """
    Исчерпан lifetime cap (promo или gen0).

    Счётчики не откатываются и не сбрасываются: cap — пожизненный.
    """
    pass


class NotFoundError(CoreError, LookupError):
    """Запрос к несуществующему asset или auction."""
    pass


class StateError(CoreError, RuntimeError):
    """Операция недопустима в текущем состоянии системы."""
    pass


class InternalConsistencyError(CoreError, AssertionError):
    """
    Нарушен внутренний инвариант.

    При корректной upstream-валидации недостижимо; появление этой ошибки
    означает повреждённое состояние.
    """
    pass
