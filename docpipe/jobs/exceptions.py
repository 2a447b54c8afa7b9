class PipelineError(Exception):
    """Base exception for all pipeline errors."""


class IngressValidationError(PipelineError):
    """Raised when an upload is rejected before anything is stored or enqueued."""

    status_code = 400


class UnsupportedMediaTypeError(IngressValidationError):
    """Raised when the declared content type is not on the allow-list."""


class EmptyUploadError(IngressValidationError):
    """Raised when the uploaded file has no content."""


class UploadTooLargeError(IngressValidationError):
    """Raised when the uploaded file exceeds the configured size limit."""

    status_code = 413


class TransientInfrastructureError(PipelineError):
    """Raised when storage, queue, document store or network calls fail."""


class BlobNotFoundError(TransientInfrastructureError):
    """Raised when a job points at a blob that does not exist (yet)."""


class BlobAlreadyExistsError(PipelineError):
    """Raised when an upload would overwrite an existing blob."""


class PermanentProcessingError(PipelineError):
    """Raised when a message can never be processed successfully."""


class MalformedEnvelopeError(PermanentProcessingError):
    """Raised when a queue message is not a valid job envelope."""


class PoisonMessageError(PermanentProcessingError):
    """Raised when a job exceeded the maximum number of delivery attempts."""


class OrphanBlobError(PipelineError):
    """Raised when the blob was written but the job could not be published."""

    def __init__(self, job_id: str, blob_name: str, cause: Exception) -> None:
        super().__init__(f"Job {job_id} not enqueued, blob {blob_name} orphaned: {cause}")
        self.job_id = job_id
        self.blob_name = blob_name
