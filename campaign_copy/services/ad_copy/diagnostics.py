"""Non-blocking composition diagnostics over final ad copy."""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from campaign_copy.schemas.campaign import RE_GENERAL_LOCATION, RE_UNIT_TYPE

APPROVED_CTAS = (
    "call today",
    "schedule a tour",
    "learn more",
    "join the vip list",
    "join the priority list",
    "apply now",
    "lease today",
    "check availability",
)
CTA_TARGETS = {"headlines_min": 3, "headlines_max": 5, "descriptions_min": 1}

SPELLED_UNIT_RE = re.compile(r"(apartments|apartment|bedroom|bedrooms)", re.IGNORECASE)
ABBREVIATED_UNIT_RE = re.compile(r"(apts\b|\b\d\s*br\b|\bbrs?\b)", re.IGNORECASE)
SPELLED_TARGETS = {"headlines_min": 3, "descriptions_min": 1}

COMMUNITY_MENTION_TARGET = "Target 3-5 mentions across headlines"

UNIT_TYPE_PATTERNS = (
    re.compile(r"\bstudio\b", re.IGNORECASE),
    re.compile(r"\b1\s*br\b|\bone\s*bed(room)?s?\b", re.IGNORECASE),
    re.compile(r"\b2\s*br\b|\btwo\s*bed(room)?s?\b", re.IGNORECASE),
    re.compile(r"\b3\s*br\b|\bthree\s*bed(room)?s?\b", re.IGNORECASE),
    re.compile(r"\b4\s*br\b|\bfour\s*bed(room)?s?\b|\b4\+\s*bed(room)?s?\b", re.IGNORECASE),
)
MOST_HEADLINES_THRESHOLD = 8

AMENITY_SIGNALS = (
    "designer finishes",
    "expansive co-working lounge",
    "spacious floorplan layouts",
    "smart home technology",
    "electric car charging",
    "cabanas",
    "grills",
    "pizza oven",
    "pet friendly",
    "dog park",
)

FAIR_HOUSING_RISK_TERMS = (
    "family-friendly",
    "for families",
    "perfect for families",
    "christian",
    "jewish",
    "muslim",
    "seniors only",
    "no children",
    "able-bodied",
    "disabled",
    "handicapped",
    "female only",
    "male only",
)


@dataclass(slots=True)
class CompositionDiagnostics:
    campaign_type: str
    cta_headlines: int
    cta_descriptions: int
    spelled_headlines: int
    spelled_descriptions: int
    abbreviated_headlines: int
    abbreviated_descriptions: int
    community_mentions_in_headlines: int | None = None
    community_mention_target: str | None = None
    headlines_with_unit_type: int | None = None
    total_headlines: int = 0
    amenity_signals_found: list[str] = field(default_factory=list)
    fair_housing_risk_flags: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "campaign_type": self.campaign_type,
            "cta_headlines": self.cta_headlines,
            "cta_descriptions": self.cta_descriptions,
            "cta_targets": dict(CTA_TARGETS),
            "abbreviation_balance": {
                "spelled_headlines": self.spelled_headlines,
                "spelled_descriptions": self.spelled_descriptions,
                "abbreviated_headlines": self.abbreviated_headlines,
                "abbreviated_descriptions": self.abbreviated_descriptions,
                "spelled_targets": dict(SPELLED_TARGETS),
            },
            "amenity_signals_found": list(self.amenity_signals_found),
            "fair_housing_risk_flags": list(self.fair_housing_risk_flags),
        }
        if self.community_mentions_in_headlines is not None:
            data["community_mentions_in_headlines"] = self.community_mentions_in_headlines
            data["community_mention_target"] = self.community_mention_target
        if self.headlines_with_unit_type is not None:
            data["unit_type_mentions"] = {
                "headlines_with_unit_type": self.headlines_with_unit_type,
                "total_headlines": self.total_headlines,
                "most_headlines_threshold": MOST_HEADLINES_THRESHOLD,
            }
        return data


def _count_matching(texts: Sequence[str], pattern: re.Pattern[str]) -> int:
    return sum(1 for text in texts if pattern.search(text))


def _has_cta(text: str) -> bool:
    lowered = text.lower()
    return any(cta in lowered for cta in APPROVED_CTAS)


def compute_diagnostics(
    headlines: Sequence[str],
    descriptions: Sequence[str],
    *,
    campaign_type: str,
    community_name: str | None = None,
) -> CompositionDiagnostics:
    """Metrics that inform reviewers; they never block a campaign."""
    text_all = " ".join([*headlines, *descriptions]).lower()

    diagnostics = CompositionDiagnostics(
        campaign_type=campaign_type,
        cta_headlines=sum(1 for headline in headlines if _has_cta(headline)),
        cta_descriptions=sum(1 for description in descriptions if _has_cta(description)),
        spelled_headlines=_count_matching(headlines, SPELLED_UNIT_RE),
        spelled_descriptions=_count_matching(descriptions, SPELLED_UNIT_RE),
        abbreviated_headlines=_count_matching(headlines, ABBREVIATED_UNIT_RE),
        abbreviated_descriptions=_count_matching(descriptions, ABBREVIATED_UNIT_RE),
        total_headlines=len(headlines),
        amenity_signals_found=[signal for signal in AMENITY_SIGNALS if signal in text_all],
        fair_housing_risk_flags=[term for term in FAIR_HOUSING_RISK_TERMS if term in text_all],
    )

    if campaign_type == RE_GENERAL_LOCATION and community_name:
        community_re = re.compile(re.escape(community_name), re.IGNORECASE)
        diagnostics.community_mentions_in_headlines = _count_matching(headlines, community_re)
        diagnostics.community_mention_target = COMMUNITY_MENTION_TARGET

    if campaign_type == RE_UNIT_TYPE:
        diagnostics.headlines_with_unit_type = sum(
            1 for headline in headlines if any(p.search(headline) for p in UNIT_TYPE_PATTERNS)
        )
    return diagnostics
