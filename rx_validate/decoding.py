"""
Document decoding.

Reads JSON or YAML text into the value model. Every problem (unreadable
file, malformed text, values outside the model) is raised as
``DecodeError`` naming the source, so a caller processing many documents
can report one and carry on with the next.
"""

import json
from pathlib import Path
from typing import Any, Union

import structlog
import yaml

from rx_validate.validation.errors import DecodeError
from rx_validate.validation.values import to_value

logger = structlog.get_logger(__name__)

JSON_SUFFIXES = {".json"}
YAML_SUFFIXES = {".yaml", ".yml"}


def _normalize(data: Any, source: str) -> Any:
    try:
        return to_value(data)
    except TypeError as exc:
        raise DecodeError(source, str(exc)) from exc


def decode_json(text: str, source: str = "<json>") -> Any:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise DecodeError(
            source, f"invalid JSON ({exc.msg}) at line {exc.lineno} column {exc.colno}"
        ) from exc
    return _normalize(data, source)


def decode_yaml(text: str, source: str = "<yaml>") -> Any:
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise DecodeError(source, f"invalid YAML ({exc})") from exc
    return _normalize(data, source)


def load_document(path: Union[str, Path]) -> Any:
    """
    Read and decode a document, choosing the decoder by file suffix.

    Files with an unknown suffix are tried as JSON first, then YAML.
    """
    path = Path(path)
    source = str(path)
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise DecodeError(source, "file not found") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise DecodeError(source, f"unable to read file ({exc})") from exc

    suffix = path.suffix.lower()
    if suffix in JSON_SUFFIXES:
        return decode_json(text, source)
    if suffix in YAML_SUFFIXES:
        return decode_yaml(text, source)

    try:
        return decode_json(text, source)
    except DecodeError:
        logger.debug("Not JSON, trying YAML", source=source)
        return decode_yaml(text, source)
