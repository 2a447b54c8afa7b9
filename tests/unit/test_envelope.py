import json

import pytest

from docpipe.jobs.envelope import parse_envelope
from docpipe.jobs.exceptions import MalformedEnvelopeError
from docpipe.jobs.models import FileType, Job


def _envelope(**overrides: object) -> str:
    data: dict[str, object] = {
        "id": "job-1",
        "blob_name": "job-1.pdf",
        "file_type": "pdf",
        "original_filename": "report.pdf",
        "file_size_bytes": 2048,
        "timestamp": "2025-01-01T00:00:00+00:00",
        "content_type": "application/pdf",
    }
    data.update(overrides)
    return json.dumps(data)


class TestParseEnvelope:
    def test_parses_full_envelope(self) -> None:
        job = parse_envelope(_envelope())
        assert job.id == "job-1"
        assert job.blob_name == "job-1.pdf"
        assert job.file_type is FileType.PDF
        assert job.original_filename == "report.pdf"
        assert job.file_size_bytes == 2048
        assert job.attempt == 1

    def test_accepts_bytes(self) -> None:
        job = parse_envelope(_envelope().encode("utf-8"))
        assert job.id == "job-1"

    def test_optional_fields_default(self) -> None:
        body = json.dumps({"id": "a", "blob_name": "a.jpg", "file_type": "image"})
        job = parse_envelope(body)
        assert job.original_filename == ""
        assert job.file_size_bytes == 0
        assert job.content_type == ""

    def test_reads_attempt(self) -> None:
        job = parse_envelope(_envelope(attempt=3))
        assert job.attempt == 3

    def test_round_trips_job_message(self) -> None:
        job = Job(
            id="x",
            blob_name="x.png",
            file_type=FileType.IMAGE,
            original_filename="cat.png",
            file_size_bytes=10,
            timestamp="t",
            content_type="image/png",
        )
        assert parse_envelope(job.to_message()) == job


class TestMalformedEnvelope:
    def test_invalid_json(self) -> None:
        with pytest.raises(MalformedEnvelopeError, match="not valid JSON"):
            parse_envelope("invalid-json-data")

    def test_not_an_object(self) -> None:
        with pytest.raises(MalformedEnvelopeError, match="JSON object"):
            parse_envelope("[1, 2]")

    @pytest.mark.parametrize("field", ["id", "blob_name", "file_type"])
    def test_missing_required_field(self, field: str) -> None:
        data = json.loads(_envelope())
        del data[field]
        with pytest.raises(MalformedEnvelopeError, match=field):
            parse_envelope(json.dumps(data))

    def test_unknown_file_type(self) -> None:
        with pytest.raises(MalformedEnvelopeError, match="Unknown file_type"):
            parse_envelope(_envelope(file_type="video"))

    def test_negative_size(self) -> None:
        with pytest.raises(MalformedEnvelopeError, match="file_size_bytes"):
            parse_envelope(_envelope(file_size_bytes=-1))

    def test_non_string_filename(self) -> None:
        with pytest.raises(MalformedEnvelopeError, match="original_filename"):
            parse_envelope(_envelope(original_filename=42))
