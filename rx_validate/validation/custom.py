"""
Factories for common custom scalar types.

Both factories return a validator function ready for
``TypeRegistry.register``. Values of the wrong shape are reported as
``type-mismatch`` with the custom identifier as the expected type, the
same way a built-in scalar reports a wrong kind.
"""

import re
from datetime import datetime
from typing import Any, List, Pattern, Union

from .schema import SchemaNode, ValidatorFn
from .types import DataPath, Failure
from .values import ValueKind, describe, kind_of


def pattern_type(identifier: str, pattern: Union[str, Pattern], allow_null: bool = False) -> ValidatorFn:
    """String type whose whole value must match ``pattern``"""
    regex = re.compile(pattern) if isinstance(pattern, str) else pattern

    def validate_pattern(node: SchemaNode, value: Any, path: DataPath) -> List[Failure]:
        if value is None and allow_null:
            return []
        if kind_of(value) is not ValueKind.STRING:
            return [Failure.type_mismatch(path, identifier, f"expected string, got {describe(value)}")]
        if regex.fullmatch(value) is None:
            return [Failure.type_mismatch(
                path, identifier, f"'{value}' does not match pattern {regex.pattern}"
            )]
        return []

    validate_pattern.__name__ = f"validate_{identifier}"
    return validate_pattern


def date_type(identifier: str, fmt: str = "%Y-%m-%d", allow_null: bool = False) -> ValidatorFn:
    """String type holding a calendar date in ``fmt`` (strptime syntax)"""

    def validate_date(node: SchemaNode, value: Any, path: DataPath) -> List[Failure]:
        if value is None and allow_null:
            return []
        if kind_of(value) is not ValueKind.STRING:
            return [Failure.type_mismatch(path, identifier, f"expected string, got {describe(value)}")]
        try:
            parsed = datetime.strptime(value, fmt)
        except ValueError:
            parsed = None
        # strptime accepts unpadded fields; require the canonical spelling
        if parsed is None or parsed.strftime(fmt) != value:
            return [Failure.type_mismatch(
                path, identifier, f"'{value}' is not a date in format {fmt}"
            )]
        return []

    validate_date.__name__ = f"validate_{identifier}"
    return validate_date
