"""
Data contracts for Steam Reviews API responses.
"""

from pydantic import BaseModel, Field

from game_backlog.library.models import ReviewStats


class ReviewQuerySummary(BaseModel):
    """Summary of review query results."""

    num_reviews: int = Field(default=0, description="Number of reviews returned")
    review_score: int = Field(default=0, ge=0, le=9, description="Review score (0-9 scale)")
    review_score_desc: str = Field(
        default="", description="Review score description (e.g., 'Very Positive')"
    )
    total_positive: int = Field(default=0, ge=0, description="Total positive reviews")
    total_negative: int = Field(default=0, ge=0, description="Total negative reviews")
    total_reviews: int = Field(default=0, ge=0, description="Total review count")


class SteamReviewsResponse(BaseModel):
    """
    Response from Steam Reviews API.

    Endpoint: /appreviews/{appid}?json=1. Only the summary is used;
    individual reviews are not requested.
    """

    success: int = Field(..., description="1 if successful, 0 otherwise")
    query_summary: ReviewQuerySummary = Field(default_factory=ReviewQuerySummary)

    @property
    def is_successful(self) -> bool:
        """Check if API request was successful."""
        return self.success == 1

    @property
    def positive_ratio(self) -> float | None:
        """Calculate positive review ratio."""
        total = self.query_summary.total_reviews
        if total == 0:
            return None
        return self.query_summary.total_positive / total

    def to_review_stats(self) -> ReviewStats:
        """
        Convert the summary into review statistics.

        A title without reviews yields a zero count, which the
        score engine maps onto the global prior.
        """
        ratio = self.positive_ratio
        return ReviewStats(
            raw_score_percent=ratio * 100 if ratio is not None else 0,
            review_count=self.query_summary.total_reviews,
        )
