"""Parses queue message bodies into Job envelopes."""

import json
from typing import Any

from docpipe.jobs.exceptions import MalformedEnvelopeError
from docpipe.jobs.models import FileType, Job

_REQUIRED_FIELDS = ("id", "blob_name", "file_type")


def parse_envelope(body: str | bytes) -> Job:
    """Validate a raw message body and build a Job.

    Envelopes written before ``file_type``/``attempt`` existed are not
    accepted; every producer in this repo writes the full schema.

    Raises:
        MalformedEnvelopeError: on invalid JSON or any schema violation.
    """
    try:
        data = json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise MalformedEnvelopeError(f"Envelope is not valid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise MalformedEnvelopeError("Envelope must be a JSON object")

    for field in _REQUIRED_FIELDS:
        value = data.get(field)
        if not value or not isinstance(value, str):
            raise MalformedEnvelopeError(f"Envelope field '{field}' must be a non-empty string")

    return Job(
        id=data["id"],
        blob_name=data["blob_name"],
        file_type=_build_file_type(data["file_type"]),
        original_filename=_optional_str(data, "original_filename"),
        file_size_bytes=_non_negative_int(data, "file_size_bytes", default=0),
        timestamp=_optional_str(data, "timestamp"),
        content_type=_optional_str(data, "content_type"),
        attempt=_non_negative_int(data, "attempt", default=1) or 1,
    )


def _build_file_type(raw: str) -> FileType:
    try:
        return FileType(raw)
    except ValueError as exc:
        raise MalformedEnvelopeError(
            f"Unknown file_type '{raw}'. Choose from: {[t.value for t in FileType]}"
        ) from exc


def _optional_str(data: dict[str, Any], field: str) -> str:
    value = data.get(field)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise MalformedEnvelopeError(f"Envelope field '{field}' must be a string")
    return value


def _non_negative_int(data: dict[str, Any], field: str, *, default: int) -> int:
    value = data.get(field, default)
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise MalformedEnvelopeError(f"Envelope field '{field}' must be a non-negative integer")
    return value
