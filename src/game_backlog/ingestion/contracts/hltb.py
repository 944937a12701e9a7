"""
Data contracts for HowLongToBeat search responses.

Completion times (``comp_*``) are reported in seconds.
"""

import re

from pydantic import BaseModel, Field

_NON_WORD = re.compile(r"[^\w\s]")
_SPACES = re.compile(r"\s+")


def normalize_title(title: str) -> str:
    """Lowercase a title and strip trademark signs and punctuation."""
    stripped = _NON_WORD.sub(" ", title.lower())
    return _SPACES.sub(" ", stripped).strip()


class HLTBGame(BaseModel):
    """A single search hit."""

    game_id: int
    game_name: str
    comp_main: int = Field(default=0, ge=0, description="Main story, seconds")
    comp_plus: int = Field(default=0, ge=0, description="Main + extras, seconds")
    comp_100: int = Field(default=0, ge=0, description="Completionist, seconds")
    comp_all: int = Field(default=0, ge=0, description="All styles, seconds")

    @property
    def has_main_story_time(self) -> bool:
        return self.comp_main > 0


class HLTBSearchResponse(BaseModel):
    """Response of the HowLongToBeat search endpoint."""

    count: int = Field(default=0, ge=0)
    data: list[HLTBGame] = Field(default_factory=list)

    def best_match(self, title: str) -> HLTBGame | None:
        """
        Pick the hit for ``title``.

        An exact match on the normalized title wins; otherwise the
        first hit (the endpoint sorts by popularity) is used.
        """
        if not self.data:
            return None
        wanted = normalize_title(title)
        for game in self.data:
            if normalize_title(game.game_name) == wanted:
                return game
        return self.data[0]
