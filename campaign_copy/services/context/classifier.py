"""Keyword-scored classification of retrieved fragments into semantic categories."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Sequence
from typing import Any

from campaign_copy.services.context.types import (
    CATEGORY_ORDER,
    CategorizedFragments,
    ClassifiedFragment,
    Fragment,
    FragmentCategory,
)

logger = logging.getLogger(__name__)

GENERAL_CONFIDENCE = 0.1
PHRASE_BONUS = 3.0
DENSITY_WEIGHT = 2.0

CATEGORY_KEYWORDS: dict[FragmentCategory, tuple[str, ...]] = {
    FragmentCategory.BRAND_VOICE: (
        "brand", "voice", "tone", "messaging", "communication", "style",
        "personality", "guidelines", "copy", "advertising", "marketing",
        "brand identity", "brand positioning", "tagline", "slogan",
        "voice guidelines", "communication style", "brand standards",
    ),
    FragmentCategory.DEMOGRAPHICS: (
        "demographics", "psychographics", "target audience", "customer",
        "resident", "renter", "buyer", "persona", "age", "income",
        "lifestyle", "behavior", "preferences", "household", "family",
        "professional", "student", "young", "millennial", "gen z",
        "baby boomer", "single", "married", "couple", "roommate",
    ),
    FragmentCategory.PROPERTY_FEATURES: (
        "amenities", "features", "apartment", "unit", "bedroom", "bathroom",
        "square feet", "sqft", "kitchen", "living room", "balcony",
        "pool", "gym", "fitness", "parking", "garage", "pet",
        "laundry", "washer", "dryer", "dishwasher", "air conditioning",
        "heating", "flooring", "appliances", "closet", "storage",
    ),
    FragmentCategory.LOCAL_AREA: (
        "neighborhood", "area", "location", "nearby", "close to", "near",
        "walking distance", "drive", "transportation", "transit", "bus",
        "train", "subway", "metro", "airport", "downtown", "uptown",
        "restaurant", "dining", "shopping", "mall", "entertainment",
        "park", "recreation", "school", "university", "hospital",
        "employer", "office", "business district",
    ),
    FragmentCategory.COMPETITOR_INTELLIGENCE: (
        "competitor", "competition", "versus", "compared to", "alternative",
        "other properties", "similar communities", "competing",
        "market position", "differentiation", "advantage", "unique",
        "better than", "superior", "exclusive", "only", "first",
    ),
}

SECTION_HEADERS: dict[FragmentCategory, tuple[str, str]] = {
    FragmentCategory.BRAND_VOICE: ("BRAND VOICE & MESSAGING GUIDELINES", "Brand Voice"),
    FragmentCategory.DEMOGRAPHICS: ("TARGET DEMOGRAPHICS & PSYCHOGRAPHICS", "Demographics"),
    FragmentCategory.PROPERTY_FEATURES: ("PROPERTY FEATURES & AMENITIES", "Property Features"),
    FragmentCategory.LOCAL_AREA: ("LOCAL AREA & LIFESTYLE INSIGHTS", "Local Area"),
    FragmentCategory.COMPETITOR_INTELLIGENCE: ("COMPETITOR INTELLIGENCE", "Competitor Intel"),
    FragmentCategory.GENERAL: ("ADDITIONAL CONTEXT", "General Context"),
}

_WHITESPACE_RE = re.compile(r"\s+")


def _semantic_score(content_lower: str, keywords: Sequence[str]) -> float:
    words = _WHITESPACE_RE.split(content_lower)
    total_words = len(words)
    score = 0.0
    for keyword in keywords:
        if " " in keyword:
            if keyword in content_lower:
                score += PHRASE_BONUS
            continue
        matches = sum(1 for word in words if keyword in word)
        score += (matches / total_words) * DENSITY_WEIGHT
    return score


def score_categories(content: str) -> dict[FragmentCategory, float]:
    """Score a fragment against every named category."""
    content_lower = content.lower()
    scores: dict[FragmentCategory, float] = {}
    for category, keywords in CATEGORY_KEYWORDS.items():
        matched = sum(1 for keyword in keywords if keyword in content_lower)
        scores[category] = matched + _semantic_score(content_lower, keywords)
    return scores


def classify_fragment(fragment: Fragment) -> ClassifiedFragment:
    """Assign a single fragment to its best-fit category."""
    scores = score_categories(fragment.content)
    best_category = FragmentCategory.GENERAL
    best_score = 0.0
    for category in CATEGORY_ORDER:
        score = scores.get(category, 0.0)
        if score > best_score:
            best_category = category
            best_score = score

    if best_score <= 0:
        return ClassifiedFragment(
            fragment=fragment,
            category=FragmentCategory.GENERAL,
            confidence=GENERAL_CONFIDENCE,
        )
    return ClassifiedFragment(
        fragment=fragment,
        category=best_category,
        confidence=min(best_score / 10, 1.0),
    )


def classify_fragments(fragments: Iterable[Fragment]) -> CategorizedFragments:
    """Classify fragments and partition them by category.

    Each bucket is ordered by similarity descending; ties keep retrieval order.
    """
    classified = [classify_fragment(fragment) for fragment in fragments]
    buckets: dict[FragmentCategory, tuple[ClassifiedFragment, ...]] = {}
    for category in CATEGORY_ORDER:
        members = [item for item in classified if item.category == category]
        buckets[category] = tuple(sorted(members, key=lambda item: -item.similarity))

    logger.info(
        "Fragments classified",
        extra={
            "fragment_count": len(classified),
            "category_counts": {
                category.value: len(items) for category, items in buckets.items()
            },
        },
    )
    return CategorizedFragments(buckets=buckets)


def top_fragments_by_category(
    categorized: CategorizedFragments,
    max_per_category: int = 3,
) -> CategorizedFragments:
    """Keep the highest-similarity fragments of each category."""
    return CategorizedFragments(
        buckets={
            category: categorized.for_category(category)[:max_per_category]
            for category in CATEGORY_ORDER
        }
    )


def _average(values: Sequence[float]) -> float:
    if not values:
        return 0.0
    return sum(values) / len(values)


def category_summary(categorized: CategorizedFragments) -> dict[str, dict[str, Any]]:
    """Per-category count, mean confidence and mean similarity."""
    summary: dict[str, dict[str, Any]] = {}
    for category in CATEGORY_ORDER:
        items = categorized.for_category(category)
        summary[category.value] = {
            "count": len(items),
            "avg_confidence": _average([item.confidence for item in items]),
            "avg_relevance": _average([item.similarity for item in items]),
        }
    return summary


def format_structured_context(categorized: CategorizedFragments) -> str:
    """Render fragments grouped under category headers."""
    parts: list[str] = []
    for category in CATEGORY_ORDER:
        items = categorized.for_category(category)
        if not items:
            continue
        header, label = SECTION_HEADERS[category]
        parts.append(f"\n=== {header} ===\n")
        for position, item in enumerate(items, start=1):
            parts.append(f"[{label} {position}]\n{item.content}\n\n")
    return "".join(parts)
