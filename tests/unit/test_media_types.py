import pytest

from docpipe.jobs.exceptions import UnsupportedMediaTypeError
from docpipe.jobs.media_types import blob_name_for, normalize_media_type, resolve_media_type
from docpipe.jobs.models import FileType


class TestResolveMediaType:
    @pytest.mark.parametrize(
        ("content_type", "expected"),
        [
            ("image/jpeg", (FileType.IMAGE, "jpg")),
            ("image/png", (FileType.IMAGE, "png")),
            ("image/webp", (FileType.IMAGE, "webp")),
            ("application/pdf", (FileType.PDF, "pdf")),
        ],
    )
    def test_allowed_types(self, content_type: str, expected: tuple[FileType, str]) -> None:
        assert resolve_media_type(content_type) == expected

    def test_ignores_parameters_and_case(self) -> None:
        assert resolve_media_type("Application/PDF; charset=binary") == (FileType.PDF, "pdf")

    @pytest.mark.parametrize("content_type", ["text/plain", "application/zip", "", None])
    def test_rejects_everything_else(self, content_type: str | None) -> None:
        with pytest.raises(UnsupportedMediaTypeError):
            resolve_media_type(content_type)


class TestNormalizeMediaType:
    def test_strips_parameters_and_case(self) -> None:
        assert normalize_media_type("Image/PNG; charset=binary") == "image/png"

    def test_missing_type_is_empty(self) -> None:
        assert normalize_media_type(None) == ""


def test_blob_name_for() -> None:
    assert blob_name_for("abc", "pdf") == "abc.pdf"
