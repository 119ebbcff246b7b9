"""Contractor filtering, scoring and ranking.

Candidates are admitted through a strict quality tier first. When too few
survive, the whole candidate list is re-filtered through a relaxed tier and
every survivor is marked as not quality verified. Survivors are then scored
on a 100 point rubric and the best ``top_n`` are returned.

Rubric (each component is bounded by its weight):

* rating        35  linear in the 0-5 star rating
* reviews       25  log10 of the review count, saturating at ~100 reviews
* relevance     20  5 per job keyword token found in name or categories
* active        10  currently open
* professional  10  5 for a website, 5 for a phone number
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, replace
from typing import Any, Dict, List, Sequence, Tuple

from tradematch.core.config import Settings
from tradematch.core.models import Candidate, FilterTier, RankedContractor, RankingResult, TierSelection

logger = logging.getLogger(__name__)

RATING_WEIGHT = 35
REVIEWS_WEIGHT = 25
RELEVANCE_WEIGHT = 20
RELEVANCE_PER_TOKEN = 5
ACTIVE_WEIGHT = 10
WEBSITE_POINTS = 5
PHONE_POINTS = 5

DEFAULT_TOP_N = 5

STRICT_TIER = FilterTier(name="strict", minimum_rating=4.0, minimum_reviews=5, relaxed=False)
RELAXED_TIER = FilterTier(name="relaxed", minimum_rating=3.5, minimum_reviews=3, relaxed=True)


@dataclass(frozen=True)
class RankingPolicy:
    strict: FilterTier = STRICT_TIER
    relaxed: FilterTier = RELAXED_TIER
    # Relax when fewer than this many candidates pass strict; 1 means "only when none do".
    min_acceptable: int = 3

    def __post_init__(self) -> None:
        if (
            self.relaxed.minimum_rating > self.strict.minimum_rating
            or self.relaxed.minimum_reviews > self.strict.minimum_reviews
        ):
            raise ValueError("relaxed tier thresholds must not exceed the strict tier thresholds")
        if self.min_acceptable < 0:
            raise ValueError("min_acceptable must be non-negative")


DEFAULT_POLICY = RankingPolicy()


def policy_from_settings(settings: Settings) -> RankingPolicy:
    return RankingPolicy(
        strict=FilterTier(
            name="strict",
            minimum_rating=settings.strict_min_rating,
            minimum_reviews=settings.strict_min_reviews,
            relaxed=False,
        ),
        relaxed=FilterTier(
            name="relaxed",
            minimum_rating=settings.relaxed_min_rating,
            minimum_reviews=settings.relaxed_min_reviews,
            relaxed=True,
        ),
        min_acceptable=settings.min_acceptable,
    )


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _rating(value: Any) -> float:
    """Star rating clamped to 0-5; unusable values count as 0."""
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        return 0.0
    try:
        rating = float(value)
    except ValueError:
        return 0.0
    if not math.isfinite(rating):
        return 0.0
    return max(0.0, min(5.0, rating))


def _review_count(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        return 0
    try:
        count = float(value)
    except ValueError:
        return 0
    if not math.isfinite(count):
        return 0
    return max(int(count), 0)


def filter_candidates(candidates: Sequence[Candidate], tier: FilterTier) -> List[Candidate]:
    """Keep candidates meeting both tier thresholds, in input order."""
    return [
        candidate
        for candidate in candidates
        if _rating(candidate.rating) >= tier.minimum_rating
        and _review_count(candidate.review_count) >= tier.minimum_reviews
    ]


def select_tier(candidates: Sequence[Candidate], policy: RankingPolicy = DEFAULT_POLICY) -> TierSelection:
    tier = policy.strict
    selected = filter_candidates(candidates, tier)

    if len(selected) < policy.min_acceptable:
        logger.info(
            "Only %d candidates pass the strict tier (need %d); relaxing to rating>=%.1f reviews>=%d",
            len(selected),
            policy.min_acceptable,
            policy.relaxed.minimum_rating,
            policy.relaxed.minimum_reviews,
        )
        tier = policy.relaxed
        selected = filter_candidates(candidates, tier)

    verified = not tier.relaxed
    return TierSelection(
        candidates=[replace(candidate, quality_verified=verified) for candidate in selected],
        tier=tier,
    )


def _relevance(candidate: Candidate, job_keyword: str) -> float:
    haystack = f"{candidate.name} {' '.join(candidate.categories)}".lower()
    points = 0
    for token in job_keyword.lower().split():
        if token in haystack:
            points += RELEVANCE_PER_TOKEN
    return float(min(points, RELEVANCE_WEIGHT))


def score(candidate: Candidate, job_keyword: str) -> Tuple[int, Dict[str, float]]:
    """Return the 0-100 match score for a candidate together with each component's contribution."""
    review_count = _review_count(candidate.review_count)
    professional = 0.0
    if candidate.has_website:
        professional += WEBSITE_POINTS
    if candidate.has_phone:
        professional += PHONE_POINTS

    breakdown = {
        "rating": (_rating(candidate.rating) / 5) * RATING_WEIGHT,
        "reviews": min(math.log10(review_count + 1) / 2, 1) * REVIEWS_WEIGHT,
        "relevance": _relevance(candidate, job_keyword),
        "active": float(ACTIVE_WEIGHT) if candidate.is_open_now else 0.0,
        "professional": professional,
    }
    return round_half_up(sum(breakdown.values())), breakdown


def rank(
    candidates: Sequence[Candidate],
    job_keyword: str,
    top_n: int = DEFAULT_TOP_N,
    policy: RankingPolicy = DEFAULT_POLICY,
) -> RankingResult:
    selection = select_tier(candidates, policy)

    ranked = []
    for candidate in selection.candidates:
        match_score, breakdown = score(candidate, job_keyword)
        ranked.append(RankedContractor(candidate=candidate, match_score=match_score, score_breakdown=breakdown))

    # list.sort is stable, so equal scores keep their input order.
    ranked.sort(key=lambda contractor: contractor.match_score, reverse=True)

    logger.info(
        "Ranked %d of %d candidates using %s tier",
        len(ranked),
        len(candidates),
        selection.tier.name,
    )
    return RankingResult(contractors=ranked[: max(top_n, 0)], tier=selection.tier, total_found=len(candidates))
