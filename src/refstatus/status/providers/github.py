"""GitHub combined commit status provider.

Reads ``GET /repos/{repository_path}/commits/{reference}/status`` from the
GitHub REST API.
"""

import contextlib
import logging
from typing import Any
from urllib.parse import quote

import requests
from pydantic import ValidationError as PydanticValidationError
from requests.exceptions import ConnectionError as RequestsConnectionError
from requests.exceptions import Timeout

from refstatus.lib.errors import (
    ProviderAPIError,
    ProviderConnectionError,
)
from refstatus.models.config import ProviderConfig
from refstatus.models.status import (
    CommitStatusResult,
    StatusEntry,
    StatusState,
    most_severe,
    severity_of,
)
from refstatus.status.providers.base import StatusProvider

logger = logging.getLogger(__name__)


class GitHubStatusProvider(StatusProvider):
    """Client for the GitHub combined status API.

    Example:
        >>> provider = GitHubStatusProvider(ProviderConfig(token="..."))
        >>> result = provider.get_status("org/repo", "v4.2")
        >>> result.state.value if result else "missing"
        'success'
    """

    ACCEPT_HEADER = "application/vnd.github+json"

    def __init__(
        self,
        config: ProviderConfig,
        session: requests.Session | None = None,
    ) -> None:
        """Initialize client from provider configuration.

        Args:
            config: Provider settings (API URL, token, timeout)
            session: Optional pre-built session, mainly for tests
        """
        self.base_url = config.api_url.rstrip("/")
        self.timeout = config.timeout
        self._session = session or requests.Session()
        self._session.headers.update({"Accept": self.ACCEPT_HEADER})
        if config.token:
            self._session.headers.update({"Authorization": f"Bearer {config.token}"})

    def status_url(self, repository_path: str, reference: str) -> str:
        """Build the combined status URL for a reference."""
        encoded_path = quote(repository_path.strip("/"), safe="/")
        encoded_reference = quote(reference, safe="")
        return (
            f"{self.base_url}/repos/{encoded_path}/commits/{encoded_reference}/status"
        )

    def get_status(
        self, repository_path: str, reference: str
    ) -> CommitStatusResult | None:
        url = self.status_url(repository_path, reference)
        logger.debug(f"Fetching commit status from {url}")

        try:
            response = self._request("GET", url)
        except ProviderAPIError as e:
            if e.status_code == 404:
                logger.debug(f"No status found for {repository_path}@{reference}")
                return None
            raise

        try:
            data = response.json()
        except ValueError as e:
            raise ProviderAPIError(url, response.status_code, "invalid JSON") from e
        return self._parse_status(url, response.status_code, data)

    def _request(self, method: str, url: str) -> requests.Response:
        """Execute HTTP request with error handling.

        Raises:
            ProviderConnectionError: Connection/timeout issues
            ProviderAPIError: Non-2xx status code
        """
        try:
            response = self._session.request(
                method=method,
                url=url,
                timeout=self.timeout,
            )
        except (Timeout, RequestsConnectionError) as e:
            raise ProviderConnectionError(self.base_url, original_error=e) from e

        if not response.ok:
            detail = None
            with contextlib.suppress(Exception):
                detail = response.json().get("message")
            raise ProviderAPIError(url, response.status_code, detail)

        return response

    def _parse_status(
        self, url: str, status_code: int, data: Any
    ) -> CommitStatusResult:
        """Convert a combined status payload to a CommitStatusResult."""
        if not isinstance(data, dict):
            raise ProviderAPIError(url, status_code, "unexpected payload")

        raw_statuses = data.get("statuses") or []
        try:
            statuses = [StatusEntry.model_validate(item) for item in raw_statuses]
        except PydanticValidationError as e:
            raise ProviderAPIError(url, status_code, f"invalid statuses: {e}") from e

        state = severity_of(data.get("state")) or most_severe(
            status.state for status in statuses
        )
        if state == StatusState.MISSING:
            # found, but nothing reported yet
            state = StatusState.PENDING
        return CommitStatusResult(state=state, statuses=statuses)
