"""Core data models shared by the ranking and cost-adjustment pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple


@dataclass(slots=True)
class Candidate:
    """Normalized snapshot of a business returned by a places lookup."""

    name: str
    address: str = ""
    rating: float = 0.0
    review_count: int = 0
    categories: Tuple[str, ...] = ()
    has_website: bool = False
    has_phone: bool = False
    is_open_now: bool = False
    place_id: Optional[str] = None
    phone: Optional[str] = None
    website: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    price_level: Optional[int] = None
    quality_verified: Optional[bool] = None


@dataclass(frozen=True)
class FilterTier:
    name: str
    minimum_rating: float
    minimum_reviews: int
    relaxed: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            "minimumRating": self.minimum_rating,
            "minimumReviews": self.minimum_reviews,
            "relaxed": self.relaxed,
        }


@dataclass(slots=True)
class TierSelection:
    candidates: List[Candidate]
    tier: FilterTier


@dataclass(slots=True)
class RankedContractor:
    """A candidate that survived filtering, with its match score and breakdown."""

    candidate: Candidate
    match_score: int
    score_breakdown: Dict[str, float] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        c = self.candidate
        return {
            "name": c.name,
            "address": c.address,
            "rating": c.rating,
            "totalReviews": c.review_count,
            "phoneNumber": c.phone,
            "website": c.website,
            "location": {"lat": c.latitude, "lng": c.longitude},
            "placeId": c.place_id,
            "openNow": c.is_open_now,
            "priceLevel": c.price_level,
            "types": list(c.categories),
            "qualityVerified": bool(c.quality_verified),
            "matchScore": self.match_score,
            "scoreBreakdown": {key: round(value, 1) for key, value in self.score_breakdown.items()},
        }


@dataclass(slots=True)
class RankingResult:
    contractors: List[RankedContractor]
    tier: FilterTier
    total_found: int = 0


@dataclass(slots=True)
class VisionAssessment:
    """Difficulty factors reported by the vision model. ``None`` means the factor was not usable."""

    complexity: Optional[float] = None
    condition: Optional[float] = None
    access: Optional[float] = None
    material_quality: Optional[float] = None


@dataclass(frozen=True)
class CostAdjustmentResult:
    adjustment: float
    confidence: int

    def to_dict(self) -> Dict[str, Any]:
        return {"adjustment": self.adjustment, "confidence": self.confidence}
