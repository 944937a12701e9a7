"""
Data contracts for Steam Store API responses.

These Pydantic models define the fields of ``/appdetails`` the
library uses for base catalog metadata.
"""

from pydantic import BaseModel, Field, field_validator

from game_backlog.library.models import CatalogItemType, CatalogMetadata


class Category(BaseModel):
    """Store category, e.g. ``Single-player``."""

    id: int
    description: str


class Genre(BaseModel):
    """Game genre."""

    id: str
    description: str


class Metacritic(BaseModel):
    """Metacritic score information."""

    score: int = Field(..., ge=0, le=100)
    url: str = Field(default="")


class SteamStoreGame(BaseModel):
    """
    Game details from Steam Store API.

    Endpoint: /appdetails?appids={appid}
    """

    steam_appid: int = Field(..., description="Steam application ID")
    name: str = Field(..., description="Game name")
    type: str = Field(default="", description="Type: game, dlc, demo, etc.")
    is_free: bool = Field(default=False, description="Whether the game is free")
    required_age: int = Field(default=0, description="Required age")
    categories: list[Category] = Field(default_factory=list)
    genres: list[Genre] = Field(default_factory=list)
    header_image: str = Field(default="", description="Header image URL")
    metacritic: Metacritic | None = Field(default=None)

    @field_validator("required_age", mode="before")
    @classmethod
    def coerce_required_age(cls, v: int | str) -> int:
        """Convert required_age to int (API sometimes returns string)."""
        if isinstance(v, str):
            return int(v) if v.isdigit() else 0
        return v

    @property
    def category_names(self) -> list[str]:
        """Extract category names as simple list."""
        return [c.description for c in self.categories]

    @property
    def genre_names(self) -> list[str]:
        return [g.description for g in self.genres]

    def to_catalog_metadata(self) -> CatalogMetadata:
        """Project onto the base metadata the library stores."""
        return CatalogMetadata(
            app_id=self.steam_appid,
            name=self.name,
            type=CatalogItemType.parse(self.type),
            categories=self.category_names,
            header_image=self.header_image or None,
            metacritic=self.metacritic.score if self.metacritic else None,
        )

