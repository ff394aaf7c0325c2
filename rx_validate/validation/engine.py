"""
Validator entry point.

``validate`` walks a compiled schema against a decoded value and returns
every defect it finds. It never raises for bad data; only a programming
error (for example a validator that itself raises) propagates.
"""

from typing import Any, Optional

import structlog

from .compiler import compile_schema
from .registry import TypeRegistry
from .schema import SchemaNode
from .types import DataPath, ValidationResult

logger = structlog.get_logger(__name__)


def validate(schema: SchemaNode, value: Any, path: Optional[DataPath] = None) -> ValidationResult:
    """
    Validate ``value`` against a compiled ``schema``.

    ``path`` lets a custom validator re-enter validation for a nested value
    while keeping failure paths relative to the outer document.
    """
    failures = schema.check(value, path if path is not None else DataPath.root())
    result = ValidationResult.from_failures(failures)
    logger.debug("Validated value", schema_type=schema.type, valid=result.valid, failures=len(result))
    return result


class Validator:
    """
    Convenience wrapper pairing a compiled schema with its registry.

    Compile once, then call ``validate`` for as many values as needed,
    from any number of threads.
    """

    def __init__(self, document: Any, registry: Optional[TypeRegistry] = None):
        self.registry = registry if registry is not None else TypeRegistry()
        self.schema = compile_schema(document, self.registry)

    def validate(self, value: Any) -> ValidationResult:
        return validate(self.schema, value)

    def is_valid(self, value: Any) -> bool:
        return self.validate(value).valid
