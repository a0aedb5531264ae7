"""Project-wide custom exception types."""


class ArtReviewError(RuntimeError):
    """Base class for errors raised by the art review service."""


class ConfigurationError(ArtReviewError):
    """Raised at startup when environment configuration is inconsistent."""


class SubmissionValidationError(ArtReviewError):
    """Raised when a submission payload is rejected at the boundary (HTTP 400)."""

    def __init__(self, message: str) -> None:  # noqa: D401 – simple constructor
        super().__init__(message)


class MissingFieldError(SubmissionValidationError):
    """Raised when ``reviewerName`` or ``responses`` is absent or empty."""


class InvalidPayloadError(SubmissionValidationError):
    """Raised when a field is present but has the wrong shape or value."""


class UploadFailedError(ArtReviewError):
    """Raised by the image host adapter when a single upload fails.

    The pipeline catches this per image; it never fails a submission.
    """


class NotificationDispatchError(ArtReviewError):
    """Raised by the mailer when the email provider rejects or is unreachable."""


class SubmissionClientError(ArtReviewError):
    """Raised on the reviewer side when the submission endpoint returns an error."""
