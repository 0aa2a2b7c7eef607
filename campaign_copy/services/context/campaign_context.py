"""Campaign-specific context synthesis with per-section relevance scoring."""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from campaign_copy.schemas.campaign import (
    DISTRIBUTED_FOCUS,
    RE_GENERAL_LOCATION,
    RE_PROXIMITY,
    RE_UNIT_TYPE,
    CampaignRequest,
)
from campaign_copy.services.context.types import (
    CampaignContext,
    ClientProfile,
    ContextSection,
    ContextStrength,
    DataSource,
    SectionPriority,
)

logger = logging.getLogger(__name__)

SECTION_NAMES = (
    "brand_voice",
    "target_audience",
    "property_highlights",
    "location_benefits",
    "competitive_advantages",
    "pricing_strategy",
)

CAMPAIGN_TYPE_WEIGHTS: dict[str, dict[str, float]] = {
    RE_GENERAL_LOCATION: {
        "brand_voice": 0.15,
        "target_audience": 0.20,
        "property_highlights": 0.15,
        "location_benefits": 0.30,
        "competitive_advantages": 0.10,
        "pricing_strategy": 0.10,
    },
    RE_UNIT_TYPE: {
        "brand_voice": 0.15,
        "target_audience": 0.25,
        "property_highlights": 0.35,
        "location_benefits": 0.10,
        "competitive_advantages": 0.10,
        "pricing_strategy": 0.05,
    },
    RE_PROXIMITY: {
        "brand_voice": 0.10,
        "target_audience": 0.20,
        "property_highlights": 0.15,
        "location_benefits": 0.40,
        "competitive_advantages": 0.10,
        "pricing_strategy": 0.05,
    },
}

STRONG_THRESHOLD = 70
MODERATE_THRESHOLD = 40

UNIT_AMENITY_MARKERS = (
    "unit", "kitchen", "bathroom", "laundry",
    "dishwasher", "air conditioning", "hardwood", "balcony",
)
PROXIMITY_AMENITY_MARKERS = ("parking", "garage", "transit", "walkable")

CAMPAIGN_INSTRUCTIONS: dict[str, tuple[str, ...]] = {
    RE_GENERAL_LOCATION: (
        "Focus on location-based benefits and neighborhood appeal",
        "Emphasize community features and local lifestyle advantages",
        "Use location-specific keywords and area identifiers",
    ),
    RE_UNIT_TYPE: (
        "Highlight unit-specific features and space utilization",
        "Target demographic needs aligned with unit size",
        "Emphasize lifestyle benefits of the specific unit configuration",
    ),
    RE_PROXIMITY: (
        "Emphasize convenience and accessibility to key destinations",
        "Focus on commute benefits and transportation advantages",
        "Highlight time-saving and lifestyle convenience factors",
    ),
}

AD_GROUP_GUIDANCE: dict[str, dict[str, tuple[str, ...]]] = {
    RE_GENERAL_LOCATION: {
        DISTRIBUTED_FOCUS: (
            "DISTRIBUTED HEADLINES: Create headlines across ALL location focuses:",
            '• Location General (5+ headlines): Broad city/area terms like "apartments in [city]"',
            "• Location Specific (5+ headlines): Specific neighborhoods and district names",
            "• Location Amenities (5+ headlines): Location + amenity combinations",
            "Ensure variety across all three focus areas within the 15 headlines",
        ),
        "location_general": (
            'Use broad location terms like "apartments in [city]"',
            "Focus on city-wide lifestyle and convenience benefits",
        ),
        "location_specific": (
            "Target specific neighborhoods and area names",
            "Highlight unique neighborhood characteristics",
        ),
        "location_amenities": (
            "Combine location with specific amenity keywords",
            "Emphasize lifestyle benefits of amenities + location combination",
        ),
    },
    RE_UNIT_TYPE: {
        "studio": (
            "Target efficiency-focused keywords and space optimization",
            "Appeal to budget-conscious and location-prioritizing renters",
        ),
        "1br": (
            "Focus on work-life balance and personal space benefits",
            "Target young professionals and couples",
        ),
        "2br": (
            "Emphasize family-friendly features and space for growth",
            "Target families, roommates, and space-needing professionals",
        ),
    },
    RE_PROXIMITY: {
        DISTRIBUTED_FOCUS: (
            "DISTRIBUTED HEADLINES: Create headlines across ALL proximity focuses:",
            "• Near Landmarks (4+ headlines): Popular attractions, parks, entertainment venues",
            "• Near Transit (4+ headlines): Bus stops, train stations, metro hubs",
            "• Near Employers (4+ headlines): Major companies, business districts, offices",
            "• Near Schools (3+ headlines): Universities, colleges, schools",
            'Use proximity language: "Near", "Close to", "Minutes from", "Walking distance"',
            "Emphasize convenience and time-saving benefits throughout",
        ),
        "near_landmarks": (
            "Highlight prestige and convenience of landmark proximity",
            "Use specific landmark names in ad copy",
        ),
        "near_transit": (
            "Focus on commute benefits and transportation convenience",
            "Target commuters and car-free lifestyle advocates",
        ),
        "near_employers": (
            "Emphasize work-life balance and reduced commute stress",
            "Target employees of specific companies or districts",
        ),
        "near_schools": (
            "Appeal to students, families, and education-focused renters",
            "Highlight educational quality and convenience",
        ),
    },
}
AD_GROUP_GUIDANCE[RE_UNIT_TYPE]["3br"] = AD_GROUP_GUIDANCE[RE_UNIT_TYPE]["2br"]
AD_GROUP_GUIDANCE[RE_UNIT_TYPE]["4br_plus"] = AD_GROUP_GUIDANCE[RE_UNIT_TYPE]["2br"]


@dataclass(slots=True)
class _SectionDraft:
    """Accumulates section lines and points before priority bucketing."""

    title: str
    high_threshold: int
    medium_threshold: int
    content: str = ""
    score: int = 0
    data_source: DataSource = "derived"

    def add_line(self, line: str, points: int) -> None:
        self.content += f"{line}\n"
        self.score += points

    def add_note(self, note: str, points: int) -> None:
        self.content += f"\n{note}"
        self.score += points

    def finish(self, fallback: str, fallback_score: int) -> ContextSection:
        content = self.content.strip()
        score = self.score
        if not content:
            content = fallback
            score = fallback_score
        score = min(score, 100)
        return ContextSection(
            title=self.title,
            content=content,
            relevance_score=score,
            priority=_priority(score, self.high_threshold, self.medium_threshold),
            data_source=self.data_source,
        )


def _priority(score: int, high: int, medium: int) -> SectionPriority:
    if score >= high:
        return "high"
    if score >= medium:
        return "medium"
    return "low"


def _joined(values: Sequence[str]) -> str:
    return ", ".join(values)


def filter_amenities_by_campaign(amenities: Sequence[str], campaign_type: str) -> list[str]:
    """Prefer amenities relevant to the campaign type, else the first six."""
    if campaign_type == RE_UNIT_TYPE:
        relevant = [a for a in amenities if any(m in a.lower() for m in UNIT_AMENITY_MARKERS)]
        if relevant:
            return relevant[:5]
    if campaign_type == RE_PROXIMITY:
        relevant = [a for a in amenities if any(m in a.lower() for m in PROXIMITY_AMENITY_MARKERS)]
        if relevant:
            return relevant[:5]
    return list(amenities[:6])


def build_brand_voice_section(request: CampaignRequest, profile: ClientProfile) -> ContextSection:
    voice = profile.brand_voice
    draft = _SectionDraft("Brand Voice Guidelines", 50, 25)

    if voice.voice_guidelines:
        draft.add_line(f"Brand Voice Guidelines: {voice.voice_guidelines}", 30)
        draft.data_source = "intake"
    if voice.tone:
        draft.add_line(f"Tone: {_joined(voice.tone)}", 20)
    if voice.personality:
        draft.add_line(f"Brand Personality: {_joined(voice.personality)}", 15)
    if voice.communication_style:
        draft.add_line(f"Communication Style: {_joined(voice.communication_style)}", 15)
    if voice.brand_values:
        draft.add_line(f"Brand Values: {_joined(voice.brand_values)}", 10)

    if request.campaign_type == RE_PROXIMITY:
        draft.add_note(
            "Proximity Campaign Focus: Emphasize convenience and accessibility benefits in brand voice.",
            5,
        )
    elif request.campaign_type == RE_UNIT_TYPE:
        draft.add_note(
            "Unit-Type Campaign Focus: Highlight lifestyle alignment and space utilization in messaging.",
            5,
        )
    elif request.campaign_type == RE_GENERAL_LOCATION:
        draft.add_note(
            "Location Campaign Focus: Emphasize neighborhood character and community connection.",
            5,
        )

    return draft.finish(
        "Brand Voice: Professional, friendly, and customer-focused approach suitable for real estate marketing.",
        10,
    )


def build_target_audience_section(request: CampaignRequest, profile: ClientProfile) -> ContextSection:
    demographics = profile.demographics
    draft = _SectionDraft("Target Audience Profile", 60, 30)

    if demographics.primary_audience:
        draft.add_line(f"Primary Target Audience: {demographics.primary_audience}", 25)
        draft.data_source = "intake"
    if demographics.age_ranges:
        draft.add_line(f"Age Range: {_joined(demographics.age_ranges)}", 15)
    if demographics.income_levels:
        draft.add_line(f"Income Level: {_joined(demographics.income_levels)}", 15)
    if demographics.lifestyle:
        draft.add_line(f"Lifestyle: {_joined(demographics.lifestyle)}", 15)
    if demographics.motivations:
        draft.add_line(f"Key Motivations: {_joined(demographics.motivations)}", 15)
    if demographics.pain_points:
        draft.add_line(f"Pain Points to Address: {_joined(demographics.pain_points)}", 10)

    bedrooms = request.unit_details.bedrooms if request.unit_details else None
    if bedrooms is not None:
        if bedrooms == 0:
            draft.add_note(
                "Studio Demographic Focus: Young professionals, students, singles prioritizing location over space.",
                10,
            )
        elif bedrooms == 1:
            draft.add_note(
                "1-Bedroom Demographic Focus: Young couples, single professionals, those wanting dedicated work space.",
                10,
            )
        elif bedrooms >= 2:
            draft.add_note(
                "Multi-Bedroom Demographic Focus: Families, roommates, professionals needing home office space.",
                10,
            )

    if request.target_demographic:
        draft.add_note(f"Campaign Target Override: {request.target_demographic}", 15)

    location = request.location
    return draft.finish(
        f"Target Audience: General apartment seekers and renters in {location.city}, {location.state}",
        15,
    )


def _unit_description(request: CampaignRequest) -> str:
    unit = request.unit_details
    if unit is None:
        return ""
    description = ""
    if unit.bedrooms is not None and unit.bathrooms is not None:
        description += f"{unit.bedrooms}BR/{unit.bathrooms}BA"
    if unit.sqft:
        description += f" {unit.sqft} sqft"
    if unit.unit_type:
        description += f" {unit.unit_type}"
    return description


def build_property_highlights_section(request: CampaignRequest, profile: ClientProfile) -> ContextSection:
    property_ = profile.property
    draft = _SectionDraft("Property Highlights", 50, 25)

    if property_.community_name:
        draft.add_line(f"Community: {property_.community_name}", 15)
        draft.data_source = "intake"
    relevant = filter_amenities_by_campaign(property_.amenities, request.campaign_type)
    if relevant:
        draft.add_line(f"Key Amenities: {_joined(relevant)}", 25)
    if property_.unique_features:
        draft.add_line(f"Unique Features: {_joined(property_.unique_features)}", 20)
    if property_.competitive_differentiators:
        draft.add_line(
            f"Competitive Differentiators: {_joined(property_.competitive_differentiators)}", 15
        )

    unit_description = _unit_description(request)
    if unit_description:
        draft.add_note(f"Unit Focus: {unit_description}", 15)
    if request.special_offers:
        draft.add_note(f"Special Offers: {request.special_offers}", 10)

    return draft.finish(
        "Property highlights not specified in client data. "
        "Focus on general apartment features and location benefits.",
        5,
    )


def build_location_benefits_section(request: CampaignRequest, profile: ClientProfile) -> ContextSection:
    advantages = profile.property.location_advantages
    draft = _SectionDraft("Location Benefits", 50, 25)

    draft.add_line(f"Location: {request.location.city}, {request.location.state}", 10)
    if advantages:
        draft.add_line(f"Location Benefits: {_joined(advantages)}", 30)
        draft.data_source = "vector"
    if request.proximity_targets:
        draft.add_line(f"Proximity Highlights: Near {_joined(request.proximity_targets)}", 25)

    if request.campaign_type == RE_PROXIMITY:
        draft.add_note(
            "Proximity Campaign Strategy: Emphasize convenience, commute time, "
            "and accessibility to key destinations.",
            15,
        )
    elif request.campaign_type == RE_GENERAL_LOCATION:
        draft.add_note(
            "Location Campaign Strategy: Highlight neighborhood character, lifestyle, "
            "and community features.",
            15,
        )

    if request.additional_context:
        draft.add_note(f"Additional Location Context: {request.additional_context}", 10)

    return draft.finish(f"Location: {request.location.city}, {request.location.state}", 10)


def build_competitive_advantages_section(
    request: CampaignRequest, profile: ClientProfile
) -> ContextSection:
    competitor = profile.competitor
    draft = _SectionDraft("Competitive Advantages", 40, 20)

    if competitor.market_position:
        draft.add_line(f"Market Position: {competitor.market_position}", 15)
    if competitor.competitive_advantages:
        draft.add_line(f"Competitive Advantages: {_joined(competitor.competitive_advantages)}", 25)
        draft.data_source = "vector"
    if competitor.differentiation_points:
        draft.add_line(f"Key Differentiators: {_joined(competitor.differentiation_points)}", 20)
    if competitor.pricing_advantages:
        draft.add_line(f"Pricing Advantages: {_joined(competitor.pricing_advantages)}", 15)
    if competitor.competitors:
        draft.add_line(f"Known Competitors: {_joined(competitor.competitors)}", 10)
        draft.data_source = "intake"

    return draft.finish(
        "Competitive advantages not specified. "
        "Focus on unique property features and location benefits to differentiate.",
        5,
    )


def build_pricing_strategy_section(request: CampaignRequest, profile: ClientProfile) -> ContextSection:
    property_ = profile.property
    draft = _SectionDraft("Pricing Strategy", 40, 20)

    if property_.price_point:
        draft.add_line(f"Price Point: {property_.price_point}", 20)
        draft.data_source = "intake"
    if request.price_range:
        draft.add_line(f"Campaign Price Range: {request.price_range}", 25)
    if property_.special_offers:
        draft.add_line(f"Special Offers: {_joined(property_.special_offers)}", 20)
    if request.special_offers:
        draft.add_line(f"Campaign Special Offers: {request.special_offers}", 15)
    if profile.competitor.pricing_advantages:
        draft.add_line(
            f"Pricing Advantages vs Competitors: {_joined(profile.competitor.pricing_advantages)}",
            10,
        )

    if request.campaign_type == RE_UNIT_TYPE:
        draft.add_note(
            "Unit-Type Pricing Strategy: Emphasize value per square foot and unit-specific amenities.",
            5,
        )

    return draft.finish(
        "Pricing information not specified. "
        "Focus on value proposition and competitive market positioning.",
        5,
    )


def generate_campaign_instructions(request: CampaignRequest, profile: ClientProfile) -> list[str]:
    instructions = list(CAMPAIGN_INSTRUCTIONS.get(request.campaign_type, ()))

    if profile.brand_voice.tone:
        instructions.append(
            f"Maintain {' and '.join(profile.brand_voice.tone)} tone throughout all copy"
        )

    age_ranges = profile.demographics.age_ranges
    if "18-26" in age_ranges or "25-35" in age_ranges:
        instructions.append("Use modern, dynamic language that appeals to younger demographics")
    if "Tech-savvy" in profile.demographics.lifestyle:
        instructions.append("Include references to smart features and technology amenities")

    if profile.competitor.market_position == "Premium":
        instructions.append("Emphasize luxury features, exclusivity, and superior quality")
    elif profile.competitor.market_position == "Value":
        instructions.append("Focus on affordability, value proposition, and cost benefits")
    return instructions


def generate_ad_group_guidance(request: CampaignRequest) -> list[str]:
    by_ad_group = AD_GROUP_GUIDANCE.get(request.campaign_type, {})
    return list(by_ad_group.get(request.effective_ad_group_type, ()))


def generate_keyword_strategy(request: CampaignRequest, profile: ClientProfile) -> list[str]:
    city = request.location.city
    strategy = [
        f'Include exact match keywords for "{city} apartments"',
        f'Use phrase match for "apartments in {city}"',
    ]

    bedrooms = request.unit_details.bedrooms if request.unit_details else None
    if request.campaign_type == RE_UNIT_TYPE and bedrooms is not None:
        bedroom_text = "studio" if bedrooms == 0 else f"{bedrooms} bedroom"
        strategy.append(f'Target exact match: "[{bedroom_text} apartments {city}]"')
        strategy.append(f'Include phrase match: "{bedroom_text} apartments near me"')

    for target in request.proximity_targets:
        strategy.append(f'Add proximity keywords: "apartments near {target}"')

    for amenity in profile.property.amenities[:3]:
        strategy.append(f'Consider amenity keywords: "{amenity.lower()} apartments"')

    strategy.append("Add negative keywords for: sales, buy, purchase, mortgage")
    if "luxury" in profile.property.price_point.lower():
        strategy.append("Add negative keywords for: cheap, budget, low cost")
    return strategy


def calculate_overall_relevance_score(
    sections: dict[str, ContextSection],
    campaign_type: str,
) -> int:
    """Weighted section score, rounded half-up."""
    weights = CAMPAIGN_TYPE_WEIGHTS.get(campaign_type, CAMPAIGN_TYPE_WEIGHTS[RE_GENERAL_LOCATION])
    weighted = sum(sections[name].relevance_score * weights[name] for name in SECTION_NAMES)
    return math.floor(weighted + 0.5)


def determine_context_strength(score: int) -> ContextStrength:
    if score >= STRONG_THRESHOLD:
        return "strong"
    if score >= MODERATE_THRESHOLD:
        return "moderate"
    return "weak"


def build_campaign_context(request: CampaignRequest, profile: ClientProfile) -> CampaignContext:
    """Build the weighted six-section context for one campaign request."""
    sections = {
        "brand_voice": build_brand_voice_section(request, profile),
        "target_audience": build_target_audience_section(request, profile),
        "property_highlights": build_property_highlights_section(request, profile),
        "location_benefits": build_location_benefits_section(request, profile),
        "competitive_advantages": build_competitive_advantages_section(request, profile),
        "pricing_strategy": build_pricing_strategy_section(request, profile),
    }
    overall = calculate_overall_relevance_score(sections, request.campaign_type)

    context = CampaignContext(
        campaign_type=request.campaign_type,
        ad_group_type=request.effective_ad_group_type,
        overall_relevance_score=overall,
        context_strength=determine_context_strength(overall),
        campaign_specific_instructions=tuple(generate_campaign_instructions(request, profile)),
        ad_group_guidance=tuple(generate_ad_group_guidance(request)),
        keyword_strategy=tuple(generate_keyword_strategy(request, profile)),
        **sections,
    )
    logger.info("Campaign context built", extra=context_summary(context))
    return context


def _numbered(heading: str, items: Sequence[str]) -> str:
    lines = [heading]
    lines.extend(f"{position}. {item}" for position, item in enumerate(items, start=1))
    return "\n".join(lines) + "\n"


def format_campaign_context(context: CampaignContext) -> str:
    """Render the context as prompt text, high-priority sections first."""
    parts = [
        f"=== CAMPAIGN CONTEXT ({context.campaign_type.upper()} - {context.ad_group_type.upper()}) ===\n"
        f"Context Strength: {context.context_strength.upper()} "
        f"(Score: {context.overall_relevance_score}/100)\n\n"
    ]

    sections = context.sections.values()
    for section in sections:
        if section.priority == "high":
            parts.append(
                f"**{section.title.upper()}** [Priority: HIGH, Score: {section.relevance_score}]\n"
                f"{section.content}\n\n"
            )
    for section in sections:
        if section.priority == "medium":
            parts.append(
                f"**{section.title}** [Priority: medium, Score: {section.relevance_score}]\n"
                f"{section.content}\n\n"
            )

    if context.campaign_specific_instructions:
        parts.append(_numbered("**CAMPAIGN INSTRUCTIONS:**", context.campaign_specific_instructions) + "\n")
    if context.ad_group_guidance:
        parts.append(_numbered("**AD GROUP GUIDANCE:**", context.ad_group_guidance) + "\n")
    if context.keyword_strategy:
        parts.append(_numbered("**KEYWORD STRATEGY RECOMMENDATIONS:**", context.keyword_strategy))
    return "".join(parts)


def context_summary(context: CampaignContext) -> dict[str, Any]:
    sections = context.sections
    priorities = [section.priority for section in sections.values()]
    return {
        "campaign_type": context.campaign_type,
        "ad_group_type": context.ad_group_type,
        "overall_relevance_score": context.overall_relevance_score,
        "context_strength": context.context_strength,
        "section_scores": {name: section.relevance_score for name, section in sections.items()},
        "section_priorities": {
            "high": priorities.count("high"),
            "medium": priorities.count("medium"),
            "low": priorities.count("low"),
        },
        "instruction_counts": {
            "campaign_instructions": len(context.campaign_specific_instructions),
            "ad_group_guidance": len(context.ad_group_guidance),
            "keyword_strategy": len(context.keyword_strategy),
        },
    }
