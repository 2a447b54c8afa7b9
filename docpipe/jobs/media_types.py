"""Upload allow-list: declared content type -> file type and blob extension."""

from docpipe.jobs.exceptions import UnsupportedMediaTypeError
from docpipe.jobs.models import FileType

ALLOWED_MEDIA_TYPES: dict[str, tuple[FileType, str]] = {
    "image/jpeg": (FileType.IMAGE, "jpg"),
    "image/jpg": (FileType.IMAGE, "jpg"),
    "image/png": (FileType.IMAGE, "png"),
    "image/gif": (FileType.IMAGE, "gif"),
    "image/webp": (FileType.IMAGE, "webp"),
    "application/pdf": (FileType.PDF, "pdf"),
}


def normalize_media_type(content_type: str | None) -> str:
    """Bare lowercase media type: ``"Image/PNG; charset=binary"`` -> ``"image/png"``."""
    return (content_type or "").split(";", 1)[0].strip().lower()


def resolve_media_type(content_type: str | None) -> tuple[FileType, str]:
    """Map a declared content type to (file type, extension).

    Parameters such as ``; charset=binary`` are ignored.

    Raises:
        UnsupportedMediaTypeError: if the type is missing or not allowed.
    """
    normalized = normalize_media_type(content_type)
    resolved = ALLOWED_MEDIA_TYPES.get(normalized)
    if resolved is None:
        raise UnsupportedMediaTypeError(
            f"Unsupported media type '{content_type}'. "
            f"Allowed: {sorted(set(ALLOWED_MEDIA_TYPES))}"
        )
    return resolved


def blob_name_for(job_id: str, extension: str) -> str:
    """Build the storage key for an uploaded payload: {id}.{ext}"""
    return f"{job_id}.{extension}"
