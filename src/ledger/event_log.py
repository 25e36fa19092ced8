"""EventLog — append-only публичный лог уведомлений."""

from typing import Any, Dict, Iterator, List, Type, TypeVar

from src.core.contracts import validate_event_record
from src.core.domain.events import Event

E = TypeVar("E")


class EventLog:
    """Append-only последовательность событий.

    События никогда не удаляются и не переупорядочиваются.
    """

    def __init__(self):
        self._events: List[Event] = []

    def emit(self, event: Event) -> None:
        self._events.append(event)

    def __len__(self) -> int:
        return len(self._events)

    def __iter__(self) -> Iterator[Event]:
        return iter(list(self._events))

    def __getitem__(self, index: int) -> Event:
        return self._events[index]

    def of_type(self, event_type: Type[E]) -> List[E]:
        return [e for e in self._events if isinstance(e, event_type)]

    def since(self, position: int) -> List[Event]:
        """События, добавленные начиная с позиции position."""
        return list(self._events[position:])

    def export(self) -> List[Dict[str, Any]]:
        """Сериализация всех событий в dict records.

        Каждая запись валидируется против своей JSON Schema.

        Raises:
            jsonschema.ValidationError: Если запись не соответствует контракту
        """
        records = []
        for event in self._events:
            record = event.model_dump()
            validate_event_record(record)
            records.append(record)
        return records
