"""
Steam Store API extractor.

Fetches base catalog metadata (name, type, categories, header
image, Metacritic score) from the Store ``/appdetails`` endpoint.
"""

from typing import Any

from pydantic import ValidationError as PydanticValidationError

from game_backlog.config import get_settings
from game_backlog.ingestion.contracts import SteamStoreGame
from game_backlog.ingestion.extractors.base import (
    BaseExtractor,
    ExtractionResult,
    ResponseValidationError,
)
from game_backlog.ingestion.utils.rate_limiter import RateLimiter, RateLimiterConfig
from game_backlog.library.models import CatalogMetadata


class SteamStoreExtractor(BaseExtractor[SteamStoreGame]):
    """
    Extractor for Steam Store API.

    Example:
        >>> async with SteamStoreExtractor() as extractor:
        ...     metadata = await extractor.fetch_app_details(730)
        ...     if metadata is not None:
        ...         print(metadata.type)
    """

    def __init__(
        self,
        *,
        rate_limiter: RateLimiter | None = None,
        country_code: str = "US",
        language: str = "english",
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
        self._store_url = settings.steam.store_url
        self._country_code = country_code
        self._language = language

    @property
    def source_name(self) -> str:
        return "steam_store_api"

    def _build_url(self) -> str:
        return f"{self._store_url}/appdetails"

    def _parse_response(self, raw_data: Any) -> SteamStoreGame:
        """
        Parse and validate one app entry of the Store API response.

        Raises:
            ResponseValidationError: If response doesn't match expected schema
        """
        try:
            return SteamStoreGame.model_validate(raw_data)
        except PydanticValidationError as e:
            raise ResponseValidationError(
                f"Response validation failed: {e}",
                source=self.source_name,
            ) from e

    async def fetch_store_game(self, app_id: int) -> SteamStoreGame | None:
        """
        Fetch the store entry of an app.

        Returns:
            SteamStoreGame, or None when Steam reports success=false

        Raises:
            ExtractionError: Request or validation failure
        """
        response = await self._make_request(
            "GET",
            self._build_url(),
            params={
                "appids": app_id,
                "cc": self._country_code,
                "l": self._language,
            },
        )
        raw_data = self._json(response)

        # Steam returns {app_id: {success: bool, data: {...}}}
        entry = raw_data.get(str(app_id)) if isinstance(raw_data, dict) else None
        if not isinstance(entry, dict) or not entry.get("success", False):
            self._logger.info("App not found in store", app_id=app_id)
            return None

        return self._parse_response(entry.get("data"))

    async def fetch_app_details(self, app_id: int) -> CatalogMetadata | None:
        """
        Fetch base catalog metadata for an app.

        Returns:
            CatalogMetadata, or None when the app is not in the store
        """
        game = await self.fetch_store_game(app_id)
        if game is None:
            return None

        self._logger.info(
            "Store metadata fetched",
            app_id=app_id,
            game_name=game.name,
            app_type=game.type,
        )
        return game.to_catalog_metadata()

    async def extract(self, app_id: int) -> ExtractionResult[SteamStoreGame]:
        """Fetch the store entry wrapped with timing metadata."""
        return await self._wrap(
            self.fetch_store_game(app_id),
            endpoint=f"{self._build_url()}?appids={app_id}",
            app_id=app_id,
        )
