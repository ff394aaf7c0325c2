"""
Schema compiler.

Turns a decoded schema document (plain dicts, lists and strings) into a
tree of ``SchemaNode`` objects, resolving every type identifier through a
``TypeRegistry``. All structural problems are reported as ``SchemaError``
with the location inside the schema document; the first defect found in
depth-first order aborts compilation.
"""

from typing import Any, Dict, List, Mapping, Optional, Set, Tuple

import structlog

from rx_validate.config import settings

from . import builtins
from .errors import PathSegment, SchemaError, UnknownTypeError
from .registry import TypeRegistry
from .schema import SchemaNode
from .types import DataPath, Failure
from .values import ValueKind, is_integral, kind_of

logger = structlog.get_logger(__name__)

SchemaPath = Tuple[PathSegment, ...]

_LENGTH_KEYS = ("min", "max")
_RANGE_KEYS = ("min", "min-ex", "max", "max-ex")

_EXPECTED_VALUE = {
    builtins.SCALAR_STRING: ("string", lambda v: kind_of(v) is ValueKind.STRING),
    builtins.SCALAR_NUMBER: ("number", lambda v: kind_of(v) is ValueKind.NUMBER),
    builtins.INTEGER: ("integer", is_integral),
    builtins.SCALAR_BOOL: ("boolean", lambda v: kind_of(v) is ValueKind.BOOL),
}


class SchemaCompiler:
    """Compiles schema documents against one registry"""

    def __init__(self, registry: TypeRegistry, max_depth: Optional[int] = None):
        self.registry = registry
        self.max_depth = settings.max_schema_depth if max_depth is None else max_depth
        # ids of mappings/lists on the current descent, to catch documents
        # that contain themselves
        self._active: Set[int] = set()

    def compile(self, document: Any) -> SchemaNode:
        self._active.clear()
        return self._compile(document, (), 0)

    # ------------------------------------------------------------------
    # Nodes
    # ------------------------------------------------------------------

    def _compile(self, document: Any, path: SchemaPath, depth: int) -> SchemaNode:
        if depth > self.max_depth:
            raise SchemaError(f"schema nests deeper than {self.max_depth} levels", path)

        if isinstance(document, str):
            document = {"type": document}
        if not isinstance(document, Mapping):
            raise SchemaError(
                f"schema must be a mapping or a type name, got {type(document).__name__}", path
            )

        marker = id(document)
        if marker in self._active:
            raise SchemaError("schema document refers to itself", path)
        self._active.add(marker)
        try:
            return self._compile_mapping(document, path, depth)
        finally:
            self._active.discard(marker)

    def _compile_mapping(self, document: Mapping, path: SchemaPath, depth: int) -> SchemaNode:
        if "type" not in document:
            raise SchemaError("missing 'type'", path)
        type_name = document["type"]
        if not isinstance(type_name, str):
            raise SchemaError("'type' must be a string", path + ("type",))

        try:
            definition = self.registry.lookup(type_name)
        except UnknownTypeError as exc:
            raise UnknownTypeError(type_name, path + ("type",)) from exc

        if not definition.builtin:
            params = {key: value for key, value in document.items() if key != "type"}
            return SchemaNode(type_name, definition.validator, builtin=False, params=params)

        allowed = builtins.BUILTIN_KEYS[type_name]
        for key in document:
            if key != "type" and key not in allowed:
                raise SchemaError(f"unknown parameter '{key}' for {type_name}", path + (key,))

        kwargs: Dict[str, Any] = {"params": self._scalar_params(type_name, document, path)}

        if type_name == builtins.RECORD:
            kwargs.update(self._record_parts(document, path, depth))
        elif type_name in (builtins.ARRAY, builtins.MAP):
            if "contents" not in document:
                raise SchemaError(f"'contents' is required for {type_name}", path)
            kwargs["contents"] = self._compile(document["contents"], path + ("contents",), depth + 1)
        elif type_name == builtins.SEQUENCE:
            kwargs.update(self._sequence_parts(document, path, depth))
        elif type_name == builtins.ONE_OF:
            kwargs["alternatives"] = self._alternatives(document, path, depth)

        return SchemaNode(type_name, definition.validator, builtin=True, **kwargs)

    def _record_parts(self, document: Mapping, path: SchemaPath, depth: int) -> Dict[str, Any]:
        required = self._fields(document, "required", path, depth)
        optional = self._fields(document, "optional", path, depth)

        overlap = [key for key in required if key in optional]
        if overlap:
            names = ", ".join(f"'{key}'" for key in overlap)
            raise SchemaError(f"keys declared both required and optional: {names}", path)

        parts: Dict[str, Any] = {"required": required, "optional": optional}
        if "rest" in document:
            parts["rest"] = self._compile(document["rest"], path + ("rest",), depth + 1)
        return parts

    def _fields(self, document: Mapping, section: str, path: SchemaPath, depth: int) -> Dict[str, SchemaNode]:
        declared = document.get(section)
        if declared is None:
            return {}
        if not isinstance(declared, Mapping):
            raise SchemaError(f"'{section}' must be a mapping of field names to schemas", path + (section,))

        fields: Dict[str, SchemaNode] = {}
        for name, child in declared.items():
            if not isinstance(name, str):
                raise SchemaError(f"field name {name!r} is not a string", path + (section,))
            fields[name] = self._compile(child, path + (section, name), depth + 1)
        return fields

    def _sequence_parts(self, document: Mapping, path: SchemaPath, depth: int) -> Dict[str, Any]:
        contents = document.get("contents")
        if not isinstance(contents, list):
            raise SchemaError("'contents' for sequence must be a list of schemas", path + ("contents",))

        parts: Dict[str, Any] = {
            "items": tuple(
                self._compile(child, path + ("contents", position), depth + 1)
                for position, child in enumerate(contents)
            )
        }
        if "tail" in document:
            parts["tail"] = self._compile(document["tail"], path + ("tail",), depth + 1)
        return parts

    def _alternatives(self, document: Mapping, path: SchemaPath, depth: int) -> Tuple[SchemaNode, ...]:
        if "alternatives" in document and "of" in document:
            raise SchemaError("use either 'alternatives' or 'of', not both", path)
        key = "of" if "of" in document else "alternatives"

        alternatives = document.get(key)
        if not isinstance(alternatives, list) or not alternatives:
            raise SchemaError(f"'{key}' must be a non-empty list of schemas", path + (key,))
        return tuple(
            self._compile(child, path + (key, position), depth + 1)
            for position, child in enumerate(alternatives)
        )

    # ------------------------------------------------------------------
    # Value constraints
    # ------------------------------------------------------------------

    def _scalar_params(self, type_name: str, document: Mapping, path: SchemaPath) -> Dict[str, Any]:
        params: Dict[str, Any] = {}

        if "value" in document:
            expected, matches = _EXPECTED_VALUE[type_name]
            if not matches(document["value"]):
                raise SchemaError(f"'value' for {type_name} must be a {expected}", path + ("value",))
            params["value"] = document["value"]

        if "length" in document:
            params["length"] = self._bounds(
                document["length"], _LENGTH_KEYS, path + ("length",), integral=True
            )

        if "range" in document:
            bounds = self._bounds(document["range"], _RANGE_KEYS, path + ("range",), integral=False)
            if "min" in bounds and "min-ex" in bounds:
                raise SchemaError("'range' may not set both 'min' and 'min-ex'", path + ("range",))
            if "max" in bounds and "max-ex" in bounds:
                raise SchemaError("'range' may not set both 'max' and 'max-ex'", path + ("range",))
            params["range"] = bounds

        return params

    @staticmethod
    def _bounds(spec: Any, keys: Tuple[str, ...], path: SchemaPath, integral: bool) -> Dict[str, Any]:
        if not isinstance(spec, Mapping):
            raise SchemaError("must be a mapping", path)

        bounds: Dict[str, Any] = {}
        for key, limit in spec.items():
            if key not in keys:
                raise SchemaError(f"unknown bound '{key}'", path + (key,))
            if integral and not (isinstance(limit, int) and not isinstance(limit, bool) and limit >= 0):
                raise SchemaError(f"'{key}' must be a non-negative integer", path + (key,))
            if not integral and kind_of(limit) is not ValueKind.NUMBER:
                raise SchemaError(f"'{key}' must be a number", path + (key,))
            bounds[key] = limit

        low = bounds.get("min", bounds.get("min-ex"))
        high = bounds.get("max", bounds.get("max-ex"))
        if low is not None and high is not None and low > high:
            raise SchemaError("lower bound is greater than upper bound", path)
        return bounds


def compile_schema(
    document: Any,
    registry: Optional[TypeRegistry] = None,
    max_depth: Optional[int] = None,
) -> SchemaNode:
    """
    Compile a decoded schema document.

    Args:
        document: Decoded schema (mapping, or a bare type name)
        registry: Registry resolving type identifiers; a fresh registry
            with only the built-in types is used when omitted
        max_depth: Nesting limit, defaults to ``settings.max_schema_depth``

    Raises:
        SchemaError: The document is structurally invalid
        UnknownTypeError: A type identifier is not registered
    """
    registry = registry if registry is not None else TypeRegistry()
    try:
        node = SchemaCompiler(registry, max_depth=max_depth).compile(document)
    except RecursionError as exc:
        raise SchemaError("schema nests deeper than the interpreter recursion limit allows") from exc
    logger.debug("Compiled schema", root_type=node.type)
    return node


def learn_type(registry: TypeRegistry, identifier: str, document: Any) -> SchemaNode:
    """
    Compile ``document`` and register it as the custom type ``identifier``.

    Later schemas compiled against ``registry`` can then use the identifier
    like any other type.
    """
    node = compile_schema(document, registry)

    def validate_learned(_node: SchemaNode, value: Any, path: DataPath) -> List[Failure]:
        return node.check(value, path)

    registry.register(identifier, validate_learned)
    return node
