"""
Contract Validation Module

Validation of the JSON contracts exchanged with the declaration front-end.
"""

from .validators import (
    ContractValidator,
    DeclarationPayloadValidator,
    SchemaLoader,
    ValidationResultValidator,
    validate_declaration_payload,
    validate_validation_result,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "DeclarationPayloadValidator",
    "ValidationResultValidator",
    # Functions
    "validate_declaration_payload",
    "validate_validation_result",
]
