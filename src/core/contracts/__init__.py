"""
Contract Validation Module

Модуль для валидации JSON контрактов notification records.
"""

from .validators import (
    EVENT_SCHEMAS,
    ContractValidator,
    SchemaLoader,
    get_event_validator,
    validate_event_record,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    # Functions
    "get_event_validator",
    "validate_event_record",
    # Constants
    "EVENT_SCHEMAS",
]
