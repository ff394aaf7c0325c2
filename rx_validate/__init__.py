"""rx-validate: Rx schema validation for JSON and YAML records"""

from rx_validate.validation import (
    DataPath,
    Failure,
    FailureKind,
    SchemaError,
    TypeRegistry,
    ValidationResult,
    compile_schema,
    validate,
)

__version__ = "0.1.0"

__all__ = [
    "DataPath",
    "Failure",
    "FailureKind",
    "SchemaError",
    "TypeRegistry",
    "ValidationResult",
    "compile_schema",
    "validate",
]
