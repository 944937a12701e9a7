"""
Steam Reviews API extractor.

Fetches the review summary (positive share and total count) used
to compute weighted review scores.
"""

from typing import Any

from pydantic import ValidationError as PydanticValidationError

from game_backlog.config import get_settings
from game_backlog.ingestion.contracts import SteamReviewsResponse
from game_backlog.ingestion.extractors.base import (
    BaseExtractor,
    ExtractionResult,
    ResponseValidationError,
)
from game_backlog.ingestion.utils.rate_limiter import RateLimiter, RateLimiterConfig
from game_backlog.library.models import ReviewStats


class SteamReviewsExtractor(BaseExtractor[SteamReviewsResponse]):
    """
    Extractor for Steam Reviews API.

    Example:
        >>> async with SteamReviewsExtractor() as extractor:
        ...     stats = await extractor.fetch_reviews(1091500)
        ...     if stats is not None:
        ...         print(stats.raw_score_percent, stats.review_count)
    """

    def __init__(
        self,
        *,
        rate_limiter: RateLimiter | None = None,
        **kwargs: Any,
    ) -> None:
        settings = get_settings()
        super().__init__(
            rate_limiter=rate_limiter
            or RateLimiter(
                RateLimiterConfig(requests_per_minute=settings.steam.requests_per_minute),
                name=self.source_name,
            ),
            **kwargs,
        )
        self._reviews_url = settings.steam.reviews_url

    @property
    def source_name(self) -> str:
        return "steam_reviews_api"

    def _build_url(self, app_id: int) -> str:
        return f"{self._reviews_url}/{app_id}"

    def _parse_response(self, raw_data: Any) -> SteamReviewsResponse:
        try:
            return SteamReviewsResponse.model_validate(raw_data)
        except PydanticValidationError as e:
            raise ResponseValidationError(
                f"Response validation failed: {e}",
                source=self.source_name,
            ) from e

    async def fetch_summary(self, app_id: int) -> SteamReviewsResponse | None:
        """
        Fetch the review summary of an app.

        Individual reviews are not requested (``num_per_page=0``);
        ``purchase_type=all`` counts reviews from keys as well.

        Returns:
            SteamReviewsResponse, or None when Steam reports success=0
        """
        response = await self._make_request(
            "GET",
            self._build_url(app_id),
            params={
                "json": 1,
                "language": "all",
                "review_type": "all",
                "purchase_type": "all",
                "num_per_page": 0,
            },
        )
        summary = self._parse_response(self._json(response))

        if not summary.is_successful:
            self._logger.warning("API returned unsuccessful response", app_id=app_id)
            return None

        return summary

    async def fetch_reviews(self, app_id: int) -> ReviewStats | None:
        """
        Fetch review statistics for an app.

        Returns:
            ReviewStats, or None when Steam has no review data
        """
        summary = await self.fetch_summary(app_id)
        if summary is None:
            return None

        stats = summary.to_review_stats()
        self._logger.info(
            "Review summary fetched",
            app_id=app_id,
            total_reviews=stats.review_count,
            positive_ratio=summary.positive_ratio,
        )
        return stats

    async def extract(self, app_id: int) -> ExtractionResult[SteamReviewsResponse]:
        """Fetch the review summary wrapped with timing metadata."""
        return await self._wrap(
            self.fetch_summary(app_id),
            endpoint=self._build_url(app_id),
            app_id=app_id,
        )
