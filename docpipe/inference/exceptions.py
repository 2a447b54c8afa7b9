from docpipe.jobs.exceptions import PipelineError


class InferenceError(PipelineError):
    """Raised when the model call fails or returns an unusable reply."""


class InferenceNetworkError(InferenceError):
    """Raised when the AI provider call fails due to network/infrastructure issues."""
