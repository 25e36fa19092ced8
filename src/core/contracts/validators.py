"""
JSON Schema Contract Validators

Модуль для валидации экспортируемых notification records согласно
формальным JSON Schema контрактам. Использует библиотеку jsonschema
(Draft 2020-12).

Схемы (src/core/contracts/schema/):
- asset_created.json
- transfer.json
- approval.json
- auction_created.json
- auction_successful.json
- auction_cancelled.json
- contract_upgrade.json
"""

import json
from pathlib import Path
from typing import Any, Dict

import jsonschema
from jsonschema import Draft202012Validator, ValidationError


# Имя события (поле "event") → имя схемы
EVENT_SCHEMAS: Dict[str, str] = {
    "AssetCreated": "asset_created",
    "Transfer": "transfer",
    "Approval": "approval",
    "AuctionCreated": "auction_created",
    "AuctionSuccessful": "auction_successful",
    "AuctionCancelled": "auction_cancelled",
    "ContractUpgrade": "contract_upgrade",
}


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Загрузчик JSON Schema файлов.

    Схемы поставляются как package data рядом с этим модулем.
    """

    def __init__(self, schema_dir: Path | None = None):
        self._schema_dir = schema_dir or Path(__file__).parent / "schema"
        if not self._schema_dir.exists():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")

        # Кэш загруженных схем
        self._schemas: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Загрузка JSON Schema файла.

        Args:
            schema_name: Имя схемы без расширения (например, 'transfer')

        Returns:
            Загруженная схема как dict

        Raises:
            FileNotFoundError: Если файл схемы не найден
            ValueError: Если схема не проходит meta-validation
        """
        if schema_name in self._schemas:
            return self._schemas[schema_name]

        schema_path = self._schema_dir / f"{schema_name}.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")

        with open(schema_path, "r", encoding="utf-8") as f:
            schema = json.load(f)

        # Валидируем саму схему (meta-validation)
        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}")

        self._schemas[schema_name] = schema
        return schema


# Глобальный экземпляр загрузчика
_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """
    Валидатор одного контракта.

    Инкапсулирует логику валидации данных против JSON Schema.
    """

    def __init__(self, schema_name: str):
        self.schema_name = schema_name
        self.schema = _SCHEMA_LOADER.load_schema(schema_name)
        self.validator = Draft202012Validator(self.schema)

    def validate(self, data: Dict[str, Any]) -> None:
        """
        Raises:
            ValidationError: Если данные не соответствуют схеме
        """
        self.validator.validate(data)

    def is_valid(self, data: Dict[str, Any]) -> bool:
        return self.validator.is_valid(data)

    def iter_errors(self, data: Dict[str, Any]):
        return self.validator.iter_errors(data)


# Валидаторы создаются лениво и переиспользуются
_VALIDATORS: Dict[str, ContractValidator] = {}


def get_event_validator(event_name: str) -> ContractValidator:
    """
    Валидатор для события по его имени.

    Raises:
        KeyError: Если для события нет контракта
    """
    schema_name = EVENT_SCHEMAS[event_name]
    if schema_name not in _VALIDATORS:
        _VALIDATORS[schema_name] = ContractValidator(schema_name)
    return _VALIDATORS[schema_name]


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_event_record(data: Dict[str, Any]) -> None:
    """
    Валидация сериализованного события по полю "event".

    Args:
        data: Запись события (dict)

    Raises:
        ValidationError: Если поле "event" отсутствует/неизвестно или запись
            не соответствует схеме
    """
    event_name = data.get("event")
    if event_name not in EVENT_SCHEMAS:
        raise ValidationError(f"Unknown or missing event type: {event_name!r}")

    get_event_validator(event_name).validate(data)
