"""
Contract checks — выход конвертера против JSON Schema

Снапшоты, квитанции и события конвертера описаны схемами в contracts/schema/:
- converter_state.json → RateConverter.snapshot()
- conversion_receipt.json → RateConverter.convert_tokens()
- converter_event.json → EventLog.emit()

Каждый объект проверяется в момент создания. Pydantic модели переводятся
в JSON-представление (enum как значения, int без потери точности).
"""

import json
import threading
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

import jsonschema
from jsonschema import Draft202012Validator
from pydantic import BaseModel

# contracts/schema/ в корне проекта
SCHEMA_DIR = Path(__file__).resolve().parents[3] / "contracts" / "schema"

ContractPayload = Union[BaseModel, Mapping[str, Any]]


def to_payload(data: ContractPayload) -> Dict[str, Any]:
    """Pydantic модель или mapping → dict в JSON-представлении."""
    if isinstance(data, BaseModel):
        return data.model_dump(mode="json")
    return dict(data)


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """Чтение схем контрактов с meta-validation и кэшем по имени."""

    def __init__(self, schema_dir: Optional[Path] = None):
        self._schema_dir = Path(schema_dir) if schema_dir is not None else SCHEMA_DIR
        self._schemas: Dict[str, Dict[str, Any]] = {}
        self._lock = threading.Lock()

    @property
    def schema_dir(self) -> Path:
        return self._schema_dir

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Raises:
            FileNotFoundError: Нет файла <schema_name>.json
            ValueError: Файл не является схемой Draft 2020-12
        """
        with self._lock:
            cached = self._schemas.get(schema_name)
            if cached is not None:
                return cached

            path = self._schema_dir / f"{schema_name}.json"
            if not path.is_file():
                raise FileNotFoundError(f"Contract schema not found: {path}")

            schema = json.loads(path.read_text(encoding="utf-8"))
            try:
                Draft202012Validator.check_schema(schema)
            except jsonschema.SchemaError as e:
                raise ValueError(
                    f"{path.name} is not a valid Draft 2020-12 schema: {e.message}"
                ) from e

            self._schemas[schema_name] = schema
            return schema


# =============================================================================
# VALIDATORS
# =============================================================================


class ContractValidator:
    """Проверка payload против одной схемы. Подклассы задают schema_name."""

    schema_name: str = ""

    def __init__(self, loader: Optional[SchemaLoader] = None):
        loader = loader or _default_loader()
        self.schema = loader.load_schema(self.schema_name)
        self._validator = Draft202012Validator(self.schema)

    def validate(self, data: ContractPayload) -> None:
        """
        Raises:
            jsonschema.ValidationError: Первое найденное нарушение
        """
        self._validator.validate(to_payload(data))

    def is_valid(self, data: ContractPayload) -> bool:
        return self._validator.is_valid(to_payload(data))

    def violations(self, data: ContractPayload) -> List[str]:
        """Все нарушения как "json_path: message", отсортированные по пути."""
        errors = sorted(
            self._validator.iter_errors(to_payload(data)), key=lambda e: e.json_path
        )
        return [f"{e.json_path}: {e.message}" for e in errors]


class ConverterStateValidator(ContractValidator):
    schema_name = "converter_state"


class ConversionReceiptValidator(ContractValidator):
    schema_name = "conversion_receipt"


class ConverterEventValidator(ContractValidator):
    schema_name = "converter_event"


@lru_cache(maxsize=None)
def _default_loader() -> SchemaLoader:
    return SchemaLoader()


@lru_cache(maxsize=None)
def _shared(validator_cls: type) -> ContractValidator:
    return validator_cls()


def validate_converter_state(data: ContractPayload) -> None:
    _shared(ConverterStateValidator).validate(data)


def validate_conversion_receipt(data: ContractPayload) -> None:
    _shared(ConversionReceiptValidator).validate(data)


def validate_converter_event(data: ContractPayload) -> None:
    _shared(ConverterEventValidator).validate(data)
