"""
HowLongToBeat extractor.

Looks up "time to beat" data by title. The search endpoint answers
with completion times in seconds.
"""

from typing import Any

from pydantic import ValidationError as PydanticValidationError

from game_backlog.config import get_settings
from game_backlog.ingestion.contracts import HLTBGame, HLTBSearchResponse, normalize_title
from game_backlog.ingestion.extractors.base import (
    BaseExtractor,
    ExtractionResult,
    ResponseValidationError,
)
from game_backlog.ingestion.utils.rate_limiter import RateLimiter, RateLimiterConfig


class HowLongToBeatExtractor(BaseExtractor[HLTBSearchResponse]):
    """
    Extractor for HowLongToBeat search.

    Example:
        >>> async with HowLongToBeatExtractor() as extractor:
        ...     seconds = await extractor.fetch_main_story_seconds("Portal 2")
    """

    def __init__(
        self,
        *,
        rate_limiter: RateLimiter | None = None,
        page_size: int = 20,
        **kwargs: Any,
    ) -> None:
        settings = get_settings()
        super().__init__(
            rate_limiter=rate_limiter
            or RateLimiter(
                RateLimiterConfig(requests_per_minute=settings.hltb.requests_per_minute),
                name=self.source_name,
            ),
            **kwargs,
        )
        self._base_url = settings.hltb.base_url.rstrip("/")
        self._search_url = f"{self._base_url}{settings.hltb.search_path}"
        self._page_size = page_size

    @property
    def source_name(self) -> str:
        return "hltb_search"

    def _default_headers(self) -> dict[str, str]:
        headers = super()._default_headers()
        # The search endpoint rejects requests without a same-site referer
        headers["Referer"] = f"{self._base_url}/"
        headers["Origin"] = self._base_url
        return headers

    def _build_payload(self, title: str) -> dict[str, Any]:
        return {
            "searchType": "games",
            "searchTerms": normalize_title(title).split(),
            "searchPage": 1,
            "size": self._page_size,
            "searchOptions": {
                "games": {
                    "userId": 0,
                    "platform": "",
                    "sortCategory": "popular",
                    "rangeCategory": "main",
                    "rangeTime": {"min": None, "max": None},
                    "gameplay": {"perspective": "", "flow": "", "genre": ""},
                    "rangeYear": {"min": "", "max": ""},
                    "modifier": "",
                },
                "users": {"sortCategory": "postcount"},
                "filter": "",
                "sort": 0,
                "randomizer": 0,
            },
        }

    def _parse_response(self, raw_data: Any) -> HLTBSearchResponse:
        try:
            return HLTBSearchResponse.model_validate(raw_data)
        except PydanticValidationError as e:
            raise ResponseValidationError(
                f"Response validation failed: {e}",
                source=self.source_name,
            ) from e

    async def find_game(self, title: str) -> HLTBGame | None:
        """
        Search HowLongToBeat for a title.

        Returns:
            Best matching hit, or None when the search finds nothing
        """
        if not normalize_title(title):
            return None

        response = await self._make_request("POST", self._search_url, json=self._build_payload(title))
        match = self._parse_response(self._json(response)).best_match(title)

        if match is None:
            self._logger.info("No HowLongToBeat match", title=title)
        return match

    async def fetch_main_story_seconds(self, title: str) -> int | None:
        """
        Fetch the main story completion time of a title.

        Returns:
            Seconds, or None when the title has no main story time
        """
        game = await self.find_game(title)
        if game is None or not game.has_main_story_time:
            return None

        self._logger.info(
            "Main story time fetched",
            title=title,
            hltb_name=game.game_name,
            comp_main=game.comp_main,
        )
        return game.comp_main

    async def extract(self, title: str) -> ExtractionResult[HLTBGame]:
        """Search a title wrapped with timing metadata."""
        return await self._wrap(self.find_game(title), endpoint=self._search_url, title=title)
