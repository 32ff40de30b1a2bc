"""GitHub API access."""

from .client import APIResponse, GitHubClient
from .exceptions import (
    ErrorKind,
    GitHubAPIError,
    GitHubAuthenticationError,
    GitHubConflictError,
    GitHubGraphQLError,
    GitHubNotFoundError,
    GitHubPermissionError,
    GitHubRateLimitError,
    GitHubValidationError,
)

__all__ = [
    'APIResponse',
    'GitHubClient',
    'ErrorKind',
    'GitHubAPIError',
    'GitHubAuthenticationError',
    'GitHubConflictError',
    'GitHubGraphQLError',
    'GitHubNotFoundError',
    'GitHubPermissionError',
    'GitHubRateLimitError',
    'GitHubValidationError',
]
