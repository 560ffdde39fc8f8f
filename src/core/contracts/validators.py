"""
JSON Schema Contract Validators

Validates raw JSON payloads against the formal contracts in contracts/schema/
using the jsonschema library, before any Pydantic model is built from them.

Schemas:
- declaration_payload.json (input of the declaration processor)
- validation_result.json (output of validate / process, by alias)
"""

import json
from pathlib import Path
from typing import Any, Dict, Iterator, List

import jsonschema
from jsonschema import Draft202012Validator, ValidationError


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Loader for JSON Schema files.

    Looks the schemas up in contracts/schema/ relative to the project root.
    """

    def __init__(self, schema_dir: Path | None = None):
        # Project root is 4 levels up from this file
        self._schema_dir = schema_dir or (
            Path(__file__).parent.parent.parent.parent / "contracts" / "schema"
        )
        if not self._schema_dir.exists():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")

        self._schemas: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Load a JSON Schema file.

        Args:
            schema_name: Schema name without extension (e.g. 'declaration_payload')

        Returns:
            Loaded schema as dict

        Raises:
            FileNotFoundError: If the schema file does not exist
            ValueError: If the file is not a valid JSON Schema
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
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}")

        self._schemas[schema_name] = schema
        return schema


_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """
    Base class for contract validators.

    Wraps a Draft 2020-12 validator for one schema.
    """

    def __init__(self, schema_name: str):
        self.schema_name = schema_name
        self.schema = _SCHEMA_LOADER.load_schema(schema_name)
        self.validator = Draft202012Validator(self.schema)

    def validate(self, data: Dict[str, Any]) -> None:
        """
        Raises:
            ValidationError: If data does not match the schema
        """
        self.validator.validate(data)

    def is_valid(self, data: Dict[str, Any]) -> bool:
        return self.validator.is_valid(data)

    def iter_errors(self, data: Dict[str, Any]) -> Iterator[ValidationError]:
        return self.validator.iter_errors(data)

    def error_messages(self, data: Dict[str, Any]) -> List[str]:
        """
        Every schema violation as '<path>: <message>', ordered by path.

        Used where violations are reported as data instead of raised.
        """
        errors = sorted(self.iter_errors(data), key=lambda e: [str(p) for p in e.absolute_path])
        return [f"{_format_path(e)}: {e.message}" for e in errors]


def _format_path(error: ValidationError) -> str:
    if not error.absolute_path:
        return "payload"
    return ".".join(str(p) for p in error.absolute_path)


class DeclarationPayloadValidator(ContractValidator):
    """Validator for the declaration_payload contract."""

    def __init__(self):
        super().__init__("declaration_payload")


class ValidationResultValidator(ContractValidator):
    """Validator for the validation_result contract."""

    def __init__(self):
        super().__init__("validation_result")


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_declaration_payload(data: Dict[str, Any]) -> None:
    """
    Raises:
        ValidationError: If data does not match the declaration_payload schema
    """
    DeclarationPayloadValidator().validate(data)


def validate_validation_result(data: Dict[str, Any]) -> None:
    """
    Raises:
        ValidationError: If data does not match the validation_result schema
    """
    ValidationResultValidator().validate(data)
