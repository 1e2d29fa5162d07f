"""
JSON Schema Contract Validators

Модуль для валидации исходящих записей ценового ядра согласно формальным
JSON Schema контрактам (jsonschema, Draft 2020-12).

Схемы:
- consensus_stats.json
- blended_price.json
- depreciation_summary.json

Валидаторы принимают как dict, так и Pydantic модель (она сериализуется
через model_dump(mode="json")).
"""

import json
from pathlib import Path
from typing import Any, Dict, Iterator, Union

import jsonschema
from jsonschema import Draft202012Validator, ValidationError
from pydantic import BaseModel


ContractData = Union[Dict[str, Any], BaseModel]


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Загрузчик JSON Schema файлов.

    Схемы лежат в contracts/schema/ относительно корня проекта.
    """

    def __init__(self, schema_dir: Path | None = None):
        # Корень проекта — 4 уровня вверх от этого файла
        self._schema_dir = schema_dir or (
            Path(__file__).parent.parent.parent.parent / "contracts" / "schema"
        )
        if not self._schema_dir.exists():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")

        # Кэш загруженных схем
        self._schemas: Dict[str, Dict[str, Any]] = {}

    @property
    def schema_dir(self) -> Path:
        return self._schema_dir

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Загрузка JSON Schema файла.

        Args:
            schema_name: Имя схемы без расширения (например, 'blended_price')

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

        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}") from e

        self._schemas[schema_name] = schema
        return schema


# Глобальный экземпляр загрузчика
_SCHEMA_LOADER = SchemaLoader()


def _as_json(data: ContractData) -> Dict[str, Any]:
    if isinstance(data, BaseModel):
        return data.model_dump(mode="json")
    return data


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """Базовый валидатор: данные против одной JSON Schema."""

    def __init__(self, schema_name: str):
        self.schema_name = schema_name
        self.schema = _SCHEMA_LOADER.load_schema(schema_name)
        self.validator = Draft202012Validator(self.schema)

    def validate(self, data: ContractData) -> None:
        """
        Raises:
            ValidationError: Если данные не соответствуют схеме
        """
        self.validator.validate(_as_json(data))

    def is_valid(self, data: ContractData) -> bool:
        return self.validator.is_valid(_as_json(data))

    def iter_errors(self, data: ContractData) -> Iterator[ValidationError]:
        return self.validator.iter_errors(_as_json(data))


class ConsensusStatsValidator(ContractValidator):
    def __init__(self):
        super().__init__("consensus_stats")


class BlendedPriceValidator(ContractValidator):
    def __init__(self):
        super().__init__("blended_price")


class DepreciationSummaryValidator(ContractValidator):
    def __init__(self):
        super().__init__("depreciation_summary")


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_consensus_stats(data: ContractData) -> None:
    """Валидация consensus_stats (raises ValidationError)."""
    ConsensusStatsValidator().validate(data)


def validate_blended_price(data: ContractData) -> None:
    """Валидация blended_price (raises ValidationError)."""
    BlendedPriceValidator().validate(data)


def validate_depreciation_summary(data: ContractData) -> None:
    """Валидация depreciation_summary (raises ValidationError)."""
    DepreciationSummaryValidator().validate(data)
