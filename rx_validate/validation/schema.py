"""
Compiled schema tree.

A ``SchemaNode`` is built once by the compiler and never modified. Every
node carries the validator function its type identifier resolved to, so
validation walks the tree without consulting the registry again.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, List, Mapping, Optional, Tuple

from .types import DataPath, Failure

ValidatorFn = Callable[["SchemaNode", Any, DataPath], List[Failure]]


@dataclass(frozen=True)
class SchemaNode:
    """Compiled representation of one type specification"""
    type: str
    validator: ValidatorFn = field(repr=False, compare=False)
    builtin: bool = True
    required: Mapping[str, "SchemaNode"] = field(default_factory=dict)
    optional: Mapping[str, "SchemaNode"] = field(default_factory=dict)
    rest: Optional["SchemaNode"] = None
    contents: Optional["SchemaNode"] = None
    items: Tuple["SchemaNode", ...] = ()
    tail: Optional["SchemaNode"] = None
    alternatives: Tuple["SchemaNode", ...] = ()
    params: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        # freeze caller-supplied dicts so the compiled tree stays read-only
        for name in ("required", "optional", "params"):
            value = getattr(self, name)
            if not isinstance(value, MappingProxyType):
                object.__setattr__(self, name, MappingProxyType(dict(value)))

    def check(self, value: Any, path: DataPath) -> List[Failure]:
        """Run this node's validator against ``value`` located at ``path``"""
        return list(self.validator(self, value, path))

    def accepts(self, value: Any) -> bool:
        return not self.check(value, DataPath.root())

    def fields(self) -> Mapping[str, "SchemaNode"]:
        """All declared record fields, required first, in declaration order"""
        merged = dict(self.required)
        merged.update(self.optional)
        return MappingProxyType(merged)
