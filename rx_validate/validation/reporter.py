"""
Report rendering for validation results.

Produces the one-line-per-failure text form
(``$data->{start_date} failed reindeer-date: ...``) and a JSON document
covering one or more validated sources.
"""

import json
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from .types import Failure, ValidationResult


def render_failure(failure: Failure) -> str:
    return failure.render()


def render_lines(result: ValidationResult) -> List[str]:
    """One line per failure, in traversal order"""
    return [render_failure(failure) for failure in result.failures]


def failure_to_dict(failure: Failure) -> Dict[str, Any]:
    return {
        "path": failure.path.render(),
        "segments": list(failure.path.segments),
        "kind": failure.kind.value,
        "expected_type": failure.expected_type,
        "message": failure.message,
    }


def result_to_dict(result: ValidationResult, source: Optional[str] = None) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "valid": result.valid,
        "failure_count": len(result.failures),
        "failures": [failure_to_dict(failure) for failure in result.failures],
    }
    if source is not None:
        payload = {"source": source, **payload}
    return payload


class ReportBuilder:
    """Collects per-document outcomes for a batch run"""

    def __init__(self, schema_source: str):
        self.schema_source = schema_source
        self.documents: List[Dict[str, Any]] = []

    def add_result(self, source: str, result: ValidationResult) -> None:
        self.documents.append(result_to_dict(result, source))

    def add_decode_error(self, source: str, error: str) -> None:
        self.documents.append({"source": source, "valid": False, "decode_error": error})

    @property
    def all_valid(self) -> bool:
        return all(document["valid"] for document in self.documents)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "report_metadata": {
                "generated_at": datetime.now(timezone.utc).isoformat(),
                "schema": self.schema_source,
                "document_count": len(self.documents),
            },
            "summary": {
                "valid": sum(1 for document in self.documents if document["valid"]),
                "invalid": sum(1 for document in self.documents if not document["valid"]),
            },
            "documents": self.documents,
        }

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent, default=str)
