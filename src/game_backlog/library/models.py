"""
Library domain models.

Catalog items, play statuses, item types and the records
produced by an enrichment sync.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Annotated

from pydantic import BaseModel, Field, field_validator

AppId = Annotated[int, Field(gt=0, description="Steam App ID")]


class PlayStatus(str, Enum):
    """
    User-assigned lifecycle label for a catalog item.

    An item without a stored status is treated as BACKLOG.
    """

    BACKLOG = "backlog"
    PLAYING = "playing"
    FINISHED = "finished"
    DROPPED = "dropped"
    HIDDEN = "hidden"


class EnrichmentSource(str, Enum):
    """External source behind a group of enrichment fields."""

    PLAYTIME = "playtime"
    REVIEWS = "reviews"


class CatalogItemType(str, Enum):
    """Steam app type, closed over the values the library acts on."""

    GAME = "game"
    DLC = "dlc"
    SOFTWARE = "software"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, raw: "str | CatalogItemType | None") -> "CatalogItemType":
        """
        Map a raw type label onto the enum.

        Total over all inputs: ``None``, unrecognized labels and labels
        in a different case all map to UNKNOWN.
        """
        if isinstance(raw, CatalogItemType):
            return raw
        if raw is None:
            return cls.UNKNOWN
        try:
            return cls(raw)
        except ValueError:
            return cls.UNKNOWN


@dataclass
class CatalogItem:
    """A game (or other app) in a user's library."""

    app_id: int
    name: str
    type: CatalogItemType = CatalogItemType.UNKNOWN
    categories: frozenset[str] = field(default_factory=frozenset)
    status: PlayStatus = PlayStatus.BACKLOG
    last_synced_at: str | None = None
    metadata_synced: bool = False
    header_image: str | None = None
    metacritic: int | None = None
    main_story_hours: float | None = None
    steam_review_score: int | None = None
    steam_review_count: int | None = None
    steam_review_weighted: int | None = None
    playtime_forever: int | None = None  # minutes

    @property
    def is_single_player(self) -> bool:
        return "Single-player" in self.categories

    def to_dict(self) -> dict:
        """Convert to a plain dictionary for JSON output."""
        return {
            "app_id": self.app_id,
            "name": self.name,
            "type": self.type.value,
            "categories": sorted(self.categories),
            "status": self.status.value,
            "last_synced_at": self.last_synced_at,
            "metadata_synced": self.metadata_synced,
            "header_image": self.header_image,
            "metacritic": self.metacritic,
            "main_story_hours": self.main_story_hours,
            "steam_review_score": self.steam_review_score,
            "steam_review_count": self.steam_review_count,
            "steam_review_weighted": self.steam_review_weighted,
            "playtime_forever": self.playtime_forever,
        }


class ReviewStats(BaseModel):
    """Aggregate review statistics from the review source."""

    raw_score_percent: float = Field(..., ge=0, le=100, description="Positive review share")
    review_count: int = Field(..., ge=0, description="Total number of reviews")


class CatalogMetadata(BaseModel):
    """Base catalog metadata from the store source."""

    app_id: AppId
    name: str
    type: CatalogItemType = CatalogItemType.UNKNOWN
    categories: list[str] = Field(default_factory=list)
    header_image: str | None = None
    metacritic: int | None = Field(default=None, ge=0, le=100)

    @field_validator("type", mode="before")
    @classmethod
    def coerce_type(cls, v: object) -> CatalogItemType:
        """Unrecognized store types degrade to UNKNOWN."""
        return CatalogItemType.parse(v)  # type: ignore[arg-type]


class EnrichedRecord(BaseModel):
    """
    Normalized update record for the persistence collaborator.

    Enrichment fields are None when the item type does not qualify
    for enrichment or when the source had no data. Fields of a source
    listed in ``failed_sources`` carry no information; stored values
    for them must be kept.
    """

    app_id: AppId
    name: str
    type: CatalogItemType
    categories: list[str] = Field(default_factory=list)
    header_image: str | None = None
    metacritic: int | None = None
    main_story_hours: float | None = None
    steam_review_score: int | None = None
    steam_review_count: int | None = None
    steam_review_weighted: int | None = Field(default=None, ge=0, le=100)
    metadata_synced: bool = True
    metadata_synced_at: str
    failed_sources: list[EnrichmentSource] = Field(default_factory=list)

    @property
    def is_partial(self) -> bool:
        return bool(self.failed_sources)
