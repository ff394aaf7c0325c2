"""
Shared fixtures for the rx-validate test suite.

Schema documents mirror the reindeer roster walkthrough: a bare record,
the same record with optional aliases, and a version using a custom
date type for ``start_date``.
"""

import pytest

from rx_validate.validation import TypeRegistry, pattern_type

REINDEER_DATE = "reindeer-date"


@pytest.fixture
def registry():
    return TypeRegistry()


@pytest.fixture
def reindeer_registry():
    registry = TypeRegistry()
    registry.register(REINDEER_DATE, pattern_type(REINDEER_DATE, r"\d{4}-\d{2}-\d{2}"))
    return registry


@pytest.fixture
def basic_schema_doc():
    return {
        "type": "record",
        "required": {
            "name": {"type": "scalar-string"},
            "start_date": {"type": "scalar-string"},
        },
    }


@pytest.fixture
def aliases_schema_doc(basic_schema_doc):
    return {
        **basic_schema_doc,
        "optional": {
            "aliases": {"type": "array", "contents": {"type": "scalar-string"}},
        },
    }


@pytest.fixture
def dated_schema_doc(aliases_schema_doc):
    return {
        **aliases_schema_doc,
        "required": {
            "name": {"type": "scalar-string"},
            "start_date": {"type": REINDEER_DATE},
        },
    }
