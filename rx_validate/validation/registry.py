"""
Type registry.

Maps type identifiers to validator functions. Built-in types are
registered when the registry is constructed; custom types are added by
the caller before any schema is compiled against the registry. After
compilation starts the registry is treated as read-only, which is what
lets compiled schemas be shared between threads.
"""

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

import structlog

from rx_validate.config import settings

from .builtins import BUILTIN_VALIDATORS
from .errors import DuplicateTypeError, UnknownTypeError
from .schema import ValidatorFn

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class TypeDefinition:
    """One registry entry"""
    identifier: str
    validator: ValidatorFn
    builtin: bool = False


class TypeRegistry:
    """
    Registry of built-in and custom types for one validation session.

    Custom identifiers are conventionally URI-like
    (``tag:example.com,2024:rx/reindeer-date``) but any string that does
    not collide with a built-in is accepted.
    """

    def __init__(self, allow_shadowing: Optional[bool] = None):
        if allow_shadowing is None:
            allow_shadowing = settings.allow_custom_shadowing
        self.allow_shadowing = allow_shadowing
        self._types: Dict[str, TypeDefinition] = {}
        for identifier, validator in BUILTIN_VALIDATORS.items():
            self._types[identifier] = TypeDefinition(identifier, validator, builtin=True)

    def register(self, identifier: str, validator: ValidatorFn) -> None:
        """Register a custom type validator"""
        if not isinstance(identifier, str) or not identifier:
            raise ValueError("type identifier must be a non-empty string")
        if not callable(validator):
            raise TypeError(f"validator for '{identifier}' is not callable")

        existing = self._types.get(identifier)
        if existing is not None:
            if existing.builtin or not self.allow_shadowing:
                raise DuplicateTypeError(identifier, builtin=existing.builtin)
            logger.warning("Shadowing custom type", identifier=identifier)

        self._types[identifier] = TypeDefinition(identifier, validator)
        logger.debug("Registered custom type", identifier=identifier)

    def type(self, identifier: str) -> Callable[[ValidatorFn], ValidatorFn]:
        """Decorator form of ``register``"""
        def decorator(validator: ValidatorFn) -> ValidatorFn:
            self.register(identifier, validator)
            return validator
        return decorator

    def lookup(self, identifier: str) -> TypeDefinition:
        definition = self._types.get(identifier)
        if definition is None:
            raise UnknownTypeError(identifier)
        return definition

    def resolve(self, identifier: str) -> ValidatorFn:
        """Return the validator registered for ``identifier``"""
        return self.lookup(identifier).validator

    def is_builtin(self, identifier: str) -> bool:
        definition = self._types.get(identifier)
        return definition is not None and definition.builtin

    def identifiers(self, include_builtins: bool = True) -> List[str]:
        return [
            identifier for identifier, definition in self._types.items()
            if include_builtins or not definition.builtin
        ]

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._types

    def __len__(self) -> int:
        return len(self._types)
