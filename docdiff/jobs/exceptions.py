class JobError(Exception):
    """Base exception for all job-related errors."""


class DocumentNotFoundError(JobError):
    """Raised when a document cannot be found in the database."""


class ComparisonNotFoundError(JobError):
    """Raised when a comparison cannot be found in the database."""


class PreconditionError(JobError):
    """Raised when an entity is not in the state an operation requires."""


class UploadRejectedError(JobError):
    """Raised when an uploaded file is refused before storage."""


_MAX_ERROR_LENGTH = 1000


def error_message(exc: BaseException) -> str:
    """Short human-readable message persisted into an entity's error field."""
    message = str(exc).strip() or type(exc).__name__
    if len(message) > _MAX_ERROR_LENGTH:
        return message[: _MAX_ERROR_LENGTH - 3] + "..."
    return message
