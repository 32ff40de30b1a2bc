"""GitHub API client implementation."""

import json
from typing import Any, Dict, List, Optional
from urllib.parse import urljoin

import aiohttp
import requests
from loguru import logger
from pydantic import BaseModel

from .. import __version__
from ..config.config import GitHubInstanceConfig
from .exceptions import (
    GitHubAPIError,
    GitHubAuthenticationError,
    GitHubConflictError,
    GitHubGraphQLError,
    GitHubNotFoundError,
    GitHubPermissionError,
    GitHubRateLimitError,
    GitHubValidationError,
)


class APIResponse(BaseModel):
    """Standard API response wrapper."""

    status_code: int
    data: Any
    headers: Dict[str, str]
    success: bool


def raise_for_status(
    status: int, headers: Dict[str, str], error_data: Optional[Any]
) -> None:
    """Raise the typed error matching a failed HTTP response.

    Args:
        status: HTTP status code
        headers: Response headers
        error_data: Decoded JSON error body, if any

    Raises:
        GitHubAPIError: A subclass classified by status and body
    """
    if status < 400:
        return

    headers = {k.lower(): v for k, v in headers.items()}
    message = f'HTTP {status}'
    if isinstance(error_data, dict):
        message = error_data.get('message', message)

    if status == 401:
        raise GitHubAuthenticationError(
            'Authentication failed', status_code=status, response_data=error_data
        )

    if status == 429 or (
        status == 403 and headers.get('x-ratelimit-remaining') == '0'
    ):
        retry_after = headers.get('retry-after')
        reset_at = headers.get('x-ratelimit-reset')
        raise GitHubRateLimitError(
            f'Rate limit exceeded: {message}',
            retry_after=int(retry_after) if retry_after else None,
            reset_at=int(reset_at) if reset_at else None,
            status_code=status,
            response_data=error_data,
        )

    if status == 403:
        raise GitHubPermissionError(
            f'Permission denied: {message}', status_code=status, response_data=error_data
        )

    if status == 404:
        raise GitHubNotFoundError(
            'Resource not found', status_code=status, response_data=error_data
        )

    if status == 409 or (status == 422 and _has_error_code(error_data, 'already_exists')):
        raise GitHubConflictError(
            f'Resource already exists: {message}',
            status_code=status,
            response_data=error_data,
        )

    if status == 422:
        raise GitHubValidationError(
            f'Validation failed: {message}', status_code=status, response_data=error_data
        )

    raise GitHubAPIError(
        f'API request failed: {message}', status_code=status, response_data=error_data
    )


def _has_error_code(error_data: Optional[Any], code: str) -> bool:
    if not isinstance(error_data, dict):
        return False
    errors = error_data.get('errors') or []
    return any(isinstance(e, dict) and e.get('code') == code for e in errors)


def _decode(text: str) -> Any:
    if not text:
        return None
    try:
        return json.loads(text)
    except ValueError:
        return text


class GitHubClient:
    """GitHub REST and GraphQL client with token authentication."""

    def __init__(self, config: GitHubInstanceConfig):
        """Initialize GitHub client.

        Args:
            config: GitHub endpoint configuration
        """
        if not config.token:
            raise GitHubAuthenticationError('No authentication token provided')

        self.config = config
        self.base_url = config.api_url
        self.session = requests.Session()
        self.session.headers.update(self._headers())

        logger.info(f'Initialized GitHub client for {config.api_url}')

    def _headers(self) -> Dict[str, str]:
        return {
            'Authorization': f'Bearer {self.config.token}',
            'Accept': 'application/vnd.github+json',
            'X-GitHub-Api-Version': self.config.api_version,
            'User-Agent': f'github-migrate/{__version__}',
        }

    def _build_url(self, endpoint: str) -> str:
        """Build full API URL from endpoint.

        Args:
            endpoint: API endpoint path

        Returns:
            Full API URL
        """
        return urljoin(self.base_url + '/', endpoint.lstrip('/'))

    def _handle_response(self, response: requests.Response) -> APIResponse:
        """Handle API response and convert to standard format.

        Args:
            response: Raw HTTP response

        Returns:
            Standardized API response

        Raises:
            GitHubAPIError: For various API errors
        """
        headers = dict(response.headers)

        if response.status_code >= 400:
            try:
                error_data = response.json()
            except ValueError:
                error_data = None
            raise_for_status(response.status_code, headers, error_data)

        try:
            data = response.json() if response.content else None
        except ValueError:
            data = response.text

        return APIResponse(
            status_code=response.status_code,
            data=data,
            headers=headers,
            success=200 <= response.status_code < 300,
        )

    async def _make_request_async(
        self,
        method: str,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        data: Optional[Dict[str, Any]] = None,
    ) -> APIResponse:
        """Make asynchronous API request.

        Args:
            method: HTTP method
            url: Absolute request URL
            params: Query parameters
            data: Request body data

        Returns:
            API response
        """
        session_args = {}
        if self.config.timeout is not None:
            session_args['timeout'] = aiohttp.ClientTimeout(total=self.config.timeout)

        async with aiohttp.ClientSession(
            headers=self._headers(), **session_args
        ) as session:
            try:
                async with session.request(
                    method=method, url=url, params=params, json=data
                ) as response:
                    response_headers = dict(response.headers)
                    response_data = _decode(await response.text())

                    raise_for_status(response.status, response_headers, response_data)

                    return APIResponse(
                        status_code=response.status,
                        data=response_data,
                        headers=response_headers,
                        success=200 <= response.status < 300,
                    )

            except aiohttp.ClientError as e:
                logger.error(f'Network error during API request: {e}')
                raise GitHubAPIError(f'Network error: {e}')

    def get(
        self, endpoint: str, params: Optional[Dict[str, Any]] = None, **kwargs
    ) -> APIResponse:
        """Make GET request.

        Args:
            endpoint: API endpoint
            params: Query parameters
            **kwargs: Additional request arguments

        Returns:
            API response
        """
        url = self._build_url(endpoint)

        try:
            response = self.session.get(
                url, params=params, timeout=self.config.timeout, **kwargs
            )
            return self._handle_response(response)
        except requests.RequestException as e:
            logger.error(f'Network error during GET request: {e}')
            raise GitHubAPIError(f'Network error: {e}')

    async def get_async(
        self, endpoint: str, params: Optional[Dict[str, Any]] = None
    ) -> APIResponse:
        """Make asynchronous GET request."""
        return await self._make_request_async(
            'GET', self._build_url(endpoint), params=params
        )

    async def post_async(
        self, endpoint: str, data: Optional[Dict[str, Any]] = None
    ) -> APIResponse:
        """Make asynchronous POST request."""
        return await self._make_request_async(
            'POST', self._build_url(endpoint), data=data
        )

    async def get_paginated_async(
        self,
        endpoint: str,
        params: Optional[Dict[str, Any]] = None,
        per_page: int = 100,
    ) -> List[Dict[str, Any]]:
        """Get all pages of a paginated endpoint.

        Args:
            endpoint: API endpoint
            params: Query parameters
            per_page: Items per page

        Returns:
            List of all items from all pages, in server order
        """
        all_items = []
        page = 1
        params = dict(params or {})
        params['per_page'] = per_page

        while True:
            params['page'] = page
            response = await self.get_async(endpoint, params=params)

            items = response.data
            if not items:
                break

            all_items.extend(items)

            if len(items) < per_page:
                break

            page += 1

        logger.debug(f'Retrieved {len(all_items)} items from {endpoint}')
        return all_items

    async def graphql_async(
        self, query: str, variables: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """Execute a GraphQL query or mutation.

        Args:
            query: GraphQL document
            variables: Values bound to the document's variables

        Returns:
            The ``data`` member of the response

        Raises:
            GitHubNotFoundError: If GraphQL reports a NOT_FOUND error
            GitHubGraphQLError: For any other GraphQL error
        """
        response = await self._make_request_async(
            'POST',
            self.config.graphql_url,
            data={'query': query, 'variables': variables or {}},
        )
        payload = response.data or {}
        if not isinstance(payload, dict):
            raise GitHubGraphQLError(
                'GraphQL: unexpected response body',
                status_code=response.status_code,
                response_data=None,
            )

        errors = payload.get('errors')
        if errors:
            messages = '; '.join(e.get('message', str(e)) for e in errors)
            if any(e.get('type') == 'NOT_FOUND' for e in errors):
                raise GitHubNotFoundError(
                    f'GraphQL: {messages}', status_code=response.status_code
                )
            raise GitHubGraphQLError(
                f'GraphQL: {messages}',
                errors=errors,
                status_code=response.status_code,
                response_data=payload,
            )

        return payload.get('data') or {}

    def test_connection(self) -> bool:
        """Test connection to GitHub.

        Returns:
            True if connection successful, False otherwise
        """
        try:
            response = self.get('/user')
            return response.success
        except Exception as e:
            logger.error(f'Connection test failed: {e}')
            return False

    def close(self):
        """Close the client session."""
        self.session.close()
        logger.debug('GitHub client session closed')

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
