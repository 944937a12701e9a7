"""
Base extractor with retry logic, rate limiting, and error handling.

Provides the HTTP plumbing shared by every enrichment source:
a managed httpx client, exponential backoff on transient failures
and result wrapping with timing metadata.
"""

import time
from abc import ABC, abstractmethod
from collections.abc import Awaitable
from datetime import datetime, timezone
from typing import Any, Generic, TypeVar

import httpx
from pydantic import BaseModel, Field, SerializeAsAny
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from game_backlog.config import RetryConfig, get_settings
from game_backlog.ingestion.utils.rate_limiter import RateLimiter
from game_backlog.logger import get_logger

T = TypeVar("T", bound=BaseModel)
R = TypeVar("R", bound=BaseModel)


class ExtractionError(Exception):
    """Base exception for extraction errors."""

    def __init__(
        self,
        message: str,
        *,
        source: str | None = None,
        endpoint: str | None = None,
        status_code: int | None = None,
        original_error: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.source = source
        self.endpoint = endpoint
        self.status_code = status_code
        self.original_error = original_error
        self.timestamp = datetime.now(timezone.utc)


class RateLimitError(ExtractionError):
    """Raised when the source answers 429."""


class APIError(ExtractionError):
    """Raised when the source returns an error response."""


class ResponseValidationError(ExtractionError):
    """Raised when a response does not match its contract."""


class ExtractionResult(BaseModel, Generic[T]):
    """
    Wrapper for extraction results with metadata.

    ``not_found`` distinguishes "the source has no data for this
    item" from a failed request; both have ``success=False``.
    """

    success: bool
    not_found: bool = False
    data: SerializeAsAny[T] | None = None
    error_message: str | None = None
    extracted_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    source: str
    endpoint: str
    duration_ms: float | None = None


class BaseExtractor(ABC, Generic[T]):
    """
    Abstract base class for enrichment source clients.

    Subclasses implement ``source_name`` and ``_parse_response`` and
    expose a ``fetch_*`` method returning the parsed model, None when
    the source has no data, or raising ExtractionError.
    """

    def __init__(
        self,
        *,
        rate_limiter: RateLimiter | None = None,
        retry_config: RetryConfig | None = None,
        timeout: float | None = None,
    ) -> None:
        """
        Initialize the extractor.

        Args:
            rate_limiter: Rate limiter shared by this client's requests
            retry_config: Custom retry configuration (uses defaults if None)
            timeout: HTTP request timeout in seconds
        """
        settings = get_settings()
        self._retry_config = retry_config or settings.retry
        self._timeout = timeout or settings.steam.timeout_seconds
        self._rate_limiter = rate_limiter
        self._logger = get_logger(
            self.__class__.__name__,
            component="extractor",
            source=self.source_name,
        )
        self._client: httpx.AsyncClient | None = None

    @property
    @abstractmethod
    def source_name(self) -> str:
        """Return identifier for this data source."""
        ...

    @property
    def client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self._timeout),
                follow_redirects=True,
                headers=self._default_headers(),
            )
        return self._client

    def _default_headers(self) -> dict[str, str]:
        return {
            "User-Agent": "GameBacklog/1.0",
            "Accept": "application/json",
        }

    async def close(self) -> None:
        """Close HTTP client and release resources."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "BaseExtractor[T]":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()

    def _create_retry_decorator(self) -> Any:
        """Create retry decorator with current configuration."""
        return retry(
            retry=retry_if_exception_type((httpx.TransportError, APIError)),
            stop=stop_after_attempt(self._retry_config.max_attempts),
            wait=wait_exponential(
                multiplier=self._retry_config.base_delay_seconds,
                max=self._retry_config.max_delay_seconds,
                exp_base=self._retry_config.exponential_base,
            ),
            before_sleep=self._log_retry_attempt,
            reraise=True,
        )

    def _log_retry_attempt(self, retry_state: Any) -> None:
        self._logger.warning(
            "Retrying request",
            attempt=retry_state.attempt_number,
            wait_seconds=retry_state.next_action.sleep if retry_state.next_action else 0,
            exception=str(retry_state.outcome.exception()) if retry_state.outcome else None,
        )

    async def _make_request(
        self,
        method: str,
        url: str,
        **kwargs: Any,
    ) -> httpx.Response:
        """
        Make HTTP request with rate limiting and retry logic.

        Raises:
            RateLimitError: Source answered 429
            APIError: Source kept answering with an error status
            ExtractionError: Transport failure after all retries
        """
        retry_decorator = self._create_retry_decorator()

        @retry_decorator
        async def _request() -> httpx.Response:
            if self._rate_limiter is not None:
                await self._rate_limiter.acquire()

            self._logger.debug("Making request", method=method, url=url)
            response = await self.client.request(method, url, **kwargs)

            if response.status_code == 429:
                retry_after = response.headers.get("Retry-After", "60")
                raise RateLimitError(
                    f"Rate limit exceeded. Retry after {retry_after}s",
                    source=self.source_name,
                    endpoint=url,
                    status_code=429,
                )

            if response.status_code >= 400:
                raise APIError(
                    f"API error: {response.status_code}",
                    source=self.source_name,
                    endpoint=url,
                    status_code=response.status_code,
                )

            return response

        try:
            return await _request()  # type: ignore[no-any-return]
        except httpx.HTTPError as e:
            self._logger.error(
                "Request failed after retries",
                url=url,
                attempts=self._retry_config.max_attempts,
            )
            raise ExtractionError(
                f"Request failed after {self._retry_config.max_attempts} attempts: {e}",
                source=self.source_name,
                endpoint=url,
                original_error=e,
            ) from e

    def _json(self, response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise ResponseValidationError(
                "Response body is not valid JSON",
                source=self.source_name,
                endpoint=str(response.request.url),
                original_error=e,
            ) from e

    async def _wrap(
        self,
        fetch: Awaitable[R | None],
        *,
        endpoint: str,
        **log_context: Any,
    ) -> ExtractionResult[R]:
        """Await a fetch and wrap its outcome in an ExtractionResult."""
        start_time = time.perf_counter()

        try:
            data = await fetch
        except ExtractionError as e:
            self._logger.error(
                "Extraction failed",
                error=str(e),
                status_code=e.status_code,
                **log_context,
            )
            return ExtractionResult(
                success=False,
                error_message=str(e),
                source=self.source_name,
                endpoint=endpoint,
                duration_ms=(time.perf_counter() - start_time) * 1000,
            )

        duration_ms = (time.perf_counter() - start_time) * 1000
        if data is None:
            return ExtractionResult(
                success=False,
                not_found=True,
                error_message=f"{self.source_name} has no data",
                source=self.source_name,
                endpoint=endpoint,
                duration_ms=duration_ms,
            )

        return ExtractionResult(
            success=True,
            data=data,
            source=self.source_name,
            endpoint=endpoint,
            duration_ms=duration_ms,
        )

    @abstractmethod
    def _parse_response(self, raw_data: Any) -> T:
        """
        Parse and validate a raw API response.

        Raises:
            ResponseValidationError: If response doesn't match expected schema
        """
        ...
