"""Error taxonomy for the grading webhook.

Every error carries the HTTP status the ``/checkrepo`` handler answers with
and a plain-text message that becomes the response body.
"""

from typing import Optional


class AutograderError(Exception):
    status_code: int = 500
    # fixed body for errors whose message carries upstream detail
    response_message: Optional[str] = None

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    @property
    def detail(self) -> str:
        return self.response_message or self.message


class MissingParameter(AutograderError):
    status_code = 400


class InvalidPRNumber(AutograderError):
    status_code = 400


class InvalidRepositoryURL(AutograderError):
    status_code = 400


class Forbidden(AutograderError):
    status_code = 403


class UpstreamLookupError(AutograderError):
    """Repository or pull request could not be read from GitHub."""

    status_code = 400


class MissingHeadBranchError(UpstreamLookupError):
    status_code = 500


class FileRetrievalError(AutograderError):
    """The graded file could not be fetched or decoded.

    Recoverable: the orchestrator turns it into a REQUEST_CHANGES review
    instead of an HTTP failure.
    """


class GradingServiceError(AutograderError):
    pass


class GradingResponseSchemaError(GradingServiceError):
    pass


class ReviewSubmissionError(AutograderError):
    response_message = "error creating review with GitHub API"
