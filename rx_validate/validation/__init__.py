"""
Rx Schema Validation

Compiles declarative Rx type specifications and validates decoded
JSON/YAML data against them, collecting path-qualified failures.
"""

from .compiler import SchemaCompiler, compile_schema, learn_type
from .custom import date_type, pattern_type
from .engine import Validator, validate
from .errors import DecodeError, DuplicateTypeError, RxError, SchemaError, UnknownTypeError
from .registry import TypeDefinition, TypeRegistry
from .reporter import ReportBuilder, render_lines, result_to_dict
from .schema import SchemaNode, ValidatorFn
from .types import DataPath, Failure, FailureKind, ValidationResult
from .values import ValueKind, kind_of

__all__ = [
    'SchemaCompiler',
    'compile_schema',
    'learn_type',
    'date_type',
    'pattern_type',
    'Validator',
    'validate',
    'DecodeError',
    'DuplicateTypeError',
    'RxError',
    'SchemaError',
    'UnknownTypeError',
    'TypeDefinition',
    'TypeRegistry',
    'ReportBuilder',
    'render_lines',
    'result_to_dict',
    'SchemaNode',
    'ValidatorFn',
    'DataPath',
    'Failure',
    'FailureKind',
    'ValidationResult',
    'ValueKind',
    'kind_of',
]
