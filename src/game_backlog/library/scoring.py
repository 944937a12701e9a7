"""
Review score weighting.

Review percentages from titles with only a handful of reviews are
noisy. The weighted score blends the raw percentage with a global
prior, weighted by review count:

    weighted = n / (n + W) * raw + W / (n + W) * P

with prior weight ``W = 100`` and prior score ``P = 70``. With no
reviews the result is exactly the prior; as the count grows it
converges on the raw percentage.

Arithmetic is exact (``fractions.Fraction``) and the blended value
is rounded once, half away from zero.
"""

import math
from fractions import Fraction

PRIOR_WEIGHT = 100
PRIOR_SCORE = 70

SECONDS_PER_HOUR = 3600


def round_half_away_from_zero(value: Fraction) -> int:
    """Round to the nearest integer, ties away from zero."""
    magnitude = math.floor(abs(value) + Fraction(1, 2))
    return magnitude if value >= 0 else -magnitude


def round_percent(value: float) -> int:
    """Round a percentage to an integer, ties away from zero."""
    return round_half_away_from_zero(Fraction(value))


def calculate_weighted_score(
    raw_score_percent: float,
    review_count: int,
    *,
    prior_weight: int = PRIOR_WEIGHT,
    prior_score: int = PRIOR_SCORE,
) -> int:
    """
    Calculate the review-count weighted score.

    Args:
        raw_score_percent: Share of positive reviews, 0-100
        review_count: Total number of reviews
        prior_weight: Virtual review count behind the prior
        prior_score: Global prior score, 0-100

    Returns:
        Weighted score as an integer in [0, 100]

    Raises:
        ValueError: raw_score_percent outside 0-100 or negative review_count

    Example:
        >>> calculate_weighted_score(90, 100)
        80
        >>> calculate_weighted_score(50, 0)
        70
    """
    if not 0 <= raw_score_percent <= 100:
        raise ValueError(f"raw_score_percent must be within 0-100, got {raw_score_percent}")
    if isinstance(review_count, bool) or not isinstance(review_count, int) or review_count < 0:
        raise ValueError(f"review_count must be a non-negative integer, got {review_count!r}")

    total = review_count + prior_weight
    blended = (
        Fraction(review_count, total) * Fraction(raw_score_percent)
        + Fraction(prior_weight, total) * prior_score
    )
    return round_half_away_from_zero(blended)


def seconds_to_hours(seconds: float) -> float:
    """
    Convert a duration in seconds to hours with one decimal place.

    Used for HowLongToBeat ``comp_main`` values, which are in seconds.

    Example:
        >>> seconds_to_hours(5400)
        1.5
    """
    tenths = round_half_away_from_zero(Fraction(seconds) / SECONDS_PER_HOUR * 10)
    return tenths / 10
