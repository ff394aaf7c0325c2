"""
Validation types and data structures
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Tuple, Union

PathSegment = Union[str, int]

DATA_ROOT = "$data"


class FailureKind(str, Enum):
    """Kinds of validation defects"""
    MISSING = "missing"
    UNEXPECTED = "unexpected"
    TYPE_MISMATCH = "type-mismatch"
    VALUE_INVALID = "value-invalid"


@dataclass(frozen=True)
class DataPath:
    """
    Location inside the data tree being validated.

    Segments are mapping keys (``str``) or sequence indices (``int``);
    the root is the empty path. Paths are immutable, so extending one
    returns a new path and siblings never see each other's segments.
    """
    segments: Tuple[PathSegment, ...] = ()

    @classmethod
    def root(cls) -> "DataPath":
        return cls()

    def key(self, name: str) -> "DataPath":
        # mapping keys always render as {key}, even when not a str
        return DataPath(self.segments + (str(name),))

    def index(self, position: int) -> "DataPath":
        return DataPath(self.segments + (position,))

    def render(self) -> str:
        """Render as ``$data->{key}->[index]``"""
        parts = [DATA_ROOT]
        for segment in self.segments:
            if isinstance(segment, int):
                parts.append(f"->[{segment}]")
            else:
                parts.append(f"->{{{segment}}}")
        return "".join(parts)

    def __str__(self) -> str:
        return self.render()


@dataclass(frozen=True)
class Failure:
    """One validation defect"""
    path: DataPath
    kind: FailureKind
    expected_type: str
    message: str

    @classmethod
    def missing(cls, path: DataPath, expected_type: str, message: str) -> "Failure":
        return cls(path, FailureKind.MISSING, expected_type, message)

    @classmethod
    def unexpected(cls, path: DataPath, expected_type: str, message: str) -> "Failure":
        return cls(path, FailureKind.UNEXPECTED, expected_type, message)

    @classmethod
    def type_mismatch(cls, path: DataPath, expected_type: str, message: str) -> "Failure":
        return cls(path, FailureKind.TYPE_MISMATCH, expected_type, message)

    @classmethod
    def value_invalid(cls, path: DataPath, expected_type: str, message: str) -> "Failure":
        return cls(path, FailureKind.VALUE_INVALID, expected_type, message)

    def render(self) -> str:
        """``<path> failed <expected-type>: <message>``"""
        return f"{self.path.render()} failed {self.expected_type}: {self.message}"


@dataclass(frozen=True)
class ValidationResult:
    """Result of validating one value against a compiled schema"""
    failures: Tuple[Failure, ...] = field(default_factory=tuple)

    @classmethod
    def from_failures(cls, failures: Iterable[Failure]) -> "ValidationResult":
        return cls(tuple(failures))

    @property
    def valid(self) -> bool:
        return not self.failures

    def __bool__(self) -> bool:
        return self.valid

    def __len__(self) -> int:
        return len(self.failures)
