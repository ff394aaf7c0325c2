"""
Exceptions raised by the schema compiler, type registry and decoding layer.

Data defects are never raised; they are collected as ``Failure`` values.
Only problems with the schema itself (or misuse of the registry) surface
as exceptions.
"""

from typing import Sequence, Tuple, Union

PathSegment = Union[str, int]


def render_schema_path(path: Sequence[PathSegment]) -> str:
    """Render a location inside a schema document, e.g. ``$schema->{required}->{name}``"""
    parts = ["$schema"]
    for segment in path:
        if isinstance(segment, int):
            parts.append(f"->[{segment}]")
        else:
            parts.append(f"->{{{segment}}}")
    return "".join(parts)


class RxError(Exception):
    """Base exception for rx-validate."""
    pass


class SchemaError(RxError):
    """Raised when a schema document is structurally invalid."""
    def __init__(self, message: str, path: Sequence[PathSegment] = ()):
        self.path: Tuple[PathSegment, ...] = tuple(path)
        self.reason = message
        super().__init__(f"{render_schema_path(self.path)}: {message}")


class UnknownTypeError(SchemaError):
    """Raised when a type identifier is not registered."""
    def __init__(self, identifier: str, path: Sequence[PathSegment] = ()):
        self.identifier = identifier
        super().__init__(f"unknown type '{identifier}'", path)


class DuplicateTypeError(RxError):
    """Raised when registering an identifier that is already taken."""
    def __init__(self, identifier: str, builtin: bool = False):
        self.identifier = identifier
        self.builtin = builtin
        what = "built-in type" if builtin else "custom type"
        super().__init__(f"'{identifier}' is already registered as a {what}")


class DecodeError(RxError):
    """Raised when a document cannot be decoded into a Value."""
    def __init__(self, source: str, detail: str):
        self.source = source
        self.detail = detail
        super().__init__(f"{source}: {detail}")
