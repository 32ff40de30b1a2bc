"""GitHub API exceptions."""

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """Classification of a failed GitHub call."""

    NOT_FOUND = 'not_found'
    CONFLICT = 'conflict'
    AUTHENTICATION = 'authentication'
    RATE_LIMIT = 'rate_limit'
    VALIDATION = 'validation'
    OTHER = 'other'


class GitHubAPIError(Exception):
    """Base exception for GitHub API errors."""

    kind = ErrorKind.OTHER

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        response_data: Optional[dict] = None,
    ):
        """Initialize GitHub API error.

        Args:
            message: Error message
            status_code: HTTP status code
            response_data: Response data from API
        """
        super().__init__(message)
        self.status_code = status_code
        self.response_data = response_data


class GitHubAuthenticationError(GitHubAPIError):
    """Authentication error with GitHub API."""

    kind = ErrorKind.AUTHENTICATION


class GitHubRateLimitError(GitHubAPIError):
    """Rate limit exceeded error.

    The client never waits on this; the values are informational only.
    """

    kind = ErrorKind.RATE_LIMIT

    def __init__(
        self,
        message: str,
        retry_after: Optional[int] = None,
        reset_at: Optional[int] = None,
        **kwargs,
    ):
        """Initialize rate limit error.

        Args:
            message: Error message
            retry_after: Seconds the server asked to wait, if given
            reset_at: Epoch seconds when the quota resets, if given
            **kwargs: Additional arguments for base class
        """
        super().__init__(message, **kwargs)
        self.retry_after = retry_after
        self.reset_at = reset_at


class GitHubNotFoundError(GitHubAPIError):
    """Resource not found error."""

    kind = ErrorKind.NOT_FOUND


class GitHubConflictError(GitHubAPIError):
    """Resource already exists."""

    kind = ErrorKind.CONFLICT


class GitHubPermissionError(GitHubAPIError):
    """Permission denied error."""

    pass


class GitHubValidationError(GitHubAPIError):
    """Validation error for API requests."""

    kind = ErrorKind.VALIDATION


class GitHubGraphQLError(GitHubAPIError):
    """GraphQL response carried an ``errors`` list."""

    def __init__(self, message: str, errors: Optional[list] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.errors = errors or []
