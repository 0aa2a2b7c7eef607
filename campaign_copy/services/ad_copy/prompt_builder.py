"""Prompt assembly for ad copy generation and headline correction."""

from __future__ import annotations

import json
from collections.abc import Sequence

from campaign_copy.schemas.ad_copy import DESCRIPTION_COUNT, HEADLINE_COUNT
from campaign_copy.schemas.campaign import (
    DISTRIBUTED_FOCUS,
    RE_GENERAL_LOCATION,
    RE_PROXIMITY,
    RE_UNIT_TYPE,
    CampaignRequest,
)
from campaign_copy.services.ad_copy.constraints import (
    DESCRIPTION_MAX,
    DESCRIPTION_MIN,
    HEADLINE_MAX,
    HEADLINE_MIN,
    ConstraintResult,
)
from campaign_copy.services.context.campaign_context import format_campaign_context
from campaign_copy.services.context.types import CampaignContext, ClientProfile

SECTION_DIVIDER = "\n\n" + "=" * 50 + "\n"

STRONG_CONTEXT_ROLE = (
    "ROLE: You are a Senior Digital Marketing Strategist and Real Estate Copy Expert with "
    "deep knowledge of Google Ads optimization for multifamily and luxury residential "
    "properties. You have access to comprehensive client intelligence and market insights "
    "that enable you to create highly targeted, conversion-optimized ad copy."
)
STANDARD_ROLE = (
    "ROLE: You are a Senior Digital Marketing Strategist specializing in Google Ads for real "
    "estate properties, with expertise in creating compelling ad copy that drives qualified "
    "leads and conversions."
)

CHARACTER_REMINDER = f"""CHARACTER REQUIREMENTS (STRICTLY ENFORCED):
- Exactly {HEADLINE_COUNT} headlines, each {HEADLINE_MIN}-{HEADLINE_MAX} characters
- Exactly {DESCRIPTION_COUNT} descriptions, each {DESCRIPTION_MIN}-{DESCRIPTION_MAX} characters
- Count every character, including spaces and punctuation"""

DISTRIBUTED_REQUIREMENTS = {
    RE_GENERAL_LOCATION: """DISTRIBUTED HEADLINE REQUIREMENTS FOR GENERAL LOCATION CAMPAIGN:
- Distribute 15 headlines across these focuses (at least 1 headline per focus):
  * Location General: Broad city/area terms (5+ headlines)
  * Location Specific: Neighborhood/district specifics (5+ headlines)
  * Location Amenities: Location + amenity combinations (5+ headlines)
- ALL headlines must still be 20-30 characters regardless of focus""",
    RE_PROXIMITY: """DISTRIBUTED HEADLINE REQUIREMENTS FOR PROXIMITY CAMPAIGN:
- Distribute 15 headlines across these focuses (at least 1 headline per focus):
  * Near Landmarks: Popular attractions, parks, entertainment (4+ headlines)
  * Near Transit: Bus, train, metro, transportation hubs (4+ headlines)
  * Near Employers: Major companies, business districts, offices (4+ headlines)
  * Near Schools: Universities, colleges, schools (3+ headlines)
- Use terms like "Near", "Close to", "Minutes from", "Walking distance"
- ALL headlines must still be 20-30 characters regardless of focus""",
}

OUTPUT_FORMAT = """REQUIRED JSON FORMAT:
{
  "headlines": ["Headline 1 (20-30 chars)", "... (15 total)"],
  "descriptions": ["Description 1 (65-90 chars)", "... (4 total)"],
  "keywords": {
    "broad_match": ["campaign specific keyword", "... (45-50 total)"],
    "negative_keywords": ["buy", "purchase", "... (8-12 total)"]
  },
  "final_url_paths": ["suggested-path-1", "suggested-path-2", "suggested-path-3"]
}

Return ONLY valid JSON (no additional text)."""


def role_definition(context: CampaignContext) -> str:
    return STRONG_CONTEXT_ROLE if context.context_strength == "strong" else STANDARD_ROLE


def campaign_brief(request: CampaignRequest, context: CampaignContext) -> str:
    campaign_label = context.campaign_type.replace("re_", "", 1).replace("_", " ", 1).upper()
    lines = ["CAMPAIGN BRIEF:", f"Campaign Type: {campaign_label}"]

    if request.campaign_type == RE_UNIT_TYPE:
        ad_group = (request.ad_group_type or "Unknown").replace("_", " ", 1)
        lines.append(f"Ad Group Focus: {ad_group}")
    elif request.campaign_type == RE_GENERAL_LOCATION:
        lines.append(
            "Headline Distribution: Distributed across Location General, Location Specific, "
            "and Location Amenities focuses"
        )
    elif request.campaign_type == RE_PROXIMITY:
        lines.append(
            "Headline Distribution: Distributed across Near Landmarks, Near Transit, "
            "Near Employers, and Near Schools focuses"
        )

    lines.append(f"Target Location: {request.location.city}, {request.location.state}")
    lines.append(
        f"Context Strength: {context.context_strength.upper()} "
        f"(Relevance Score: {context.overall_relevance_score}/100)"
    )

    unit = request.unit_details
    if unit is not None:
        unit_line = f"Unit Specifications: {unit.bedrooms}BR/{unit.bathrooms}BA"
        if unit.sqft:
            unit_line += f", {unit.sqft} sqft"
        if unit.unit_type:
            unit_line += f", {unit.unit_type}"
        lines.append(unit_line)
    if request.proximity_targets:
        lines.append(f"Proximity Targets: {', '.join(request.proximity_targets)}")
    if request.price_range:
        lines.append(f"Pricing Context: {request.price_range}")
    if request.special_offers:
        lines.append(f"Special Offers: {request.special_offers}")
    if request.move_in_date:
        lines.append(f"Availability: {request.move_in_date}")
    return "\n".join(lines)


def brand_voice_rules(profile: ClientProfile) -> str | None:
    voice = profile.brand_voice
    lines: list[str] = []
    if voice.key_messages:
        lines.append(f"KEY MESSAGES: {'; '.join(voice.key_messages)}")
    if voice.avoid_words:
        lines.append(f"AVOID THESE WORDS/PHRASES: {', '.join(voice.avoid_words)}")
    if not lines:
        return None
    return "BRAND VOICE RULES:\n" + "\n".join(lines)


def technical_requirements(request: CampaignRequest) -> str:
    sections = [
        CHARACTER_REMINDER,
        """CHARACTER EXPANSION TIPS:
Headlines too short? Add descriptors ("Luxury", "Modern") or urgency ("Tour Today", "Available Now")
Descriptions too short? Add "with modern amenities", "in a prime location", "available now"
Headlines too long? Use "Apts", "BR", "&" and drop filler words""",
        """KEYWORDS STRUCTURE:
- Broad Match: 45-50 highly targeted keywords based on campaign type and ad group
- Negative Keywords: 8-12 strategic exclusions (always exclude "buy", "purchase", "for sale", "mortgage")""",
    ]
    if request.effective_ad_group_type == DISTRIBUTED_FOCUS and request.campaign_type in DISTRIBUTED_REQUIREMENTS:
        sections.append(DISTRIBUTED_REQUIREMENTS[request.campaign_type])
    return "\n\n".join(sections)


def build_generation_prompt(
    request: CampaignRequest,
    context: CampaignContext,
    profile: ClientProfile,
) -> str:
    """Assemble the full ad copy generation prompt."""
    sections = [
        CHARACTER_REMINDER,
        role_definition(context),
        campaign_brief(request, context),
        format_campaign_context(context).rstrip(),
    ]
    rules = brand_voice_rules(profile)
    if rules:
        sections.append(rules)
    sections.append(technical_requirements(request))
    sections.append(OUTPUT_FORMAT)
    return SECTION_DIVIDER.join(sections)


def build_headline_correction_prompt(
    headlines: Sequence[str],
    invalid: Sequence[ConstraintResult],
) -> str:
    """Ask for corrected headlines while listing exactly which ones fail."""
    problem_lines: list[str] = []
    for position, result in enumerate(invalid, start=1):
        length = len(result.original)
        too_short = length < HEADLINE_MIN
        reason = "too short" if too_short else "too long"
        needed = HEADLINE_MIN - length if too_short else length - HEADLINE_MAX
        direction = "more" if too_short else "fewer"
        problem_lines.append(
            f'{position}. "{result.original}" ({length} chars - {reason}, '
            f"need {needed} {direction} characters)"
        )

    return f"""CRITICAL: CHARACTER VALIDATION FAILED

The following headlines do NOT meet the {HEADLINE_MIN}-{HEADLINE_MAX} character requirement:
{chr(10).join(problem_lines)}

TASK: Fix ONLY the invalid headlines. Keep all valid headlines unchanged.

REQUIREMENTS:
- EVERY headline MUST be {HEADLINE_MIN}-{HEADLINE_MAX} characters (count manually!)
- Add descriptive words to short headlines: "Downtown Apt" -> "Luxury Downtown Apts for Rent"
- Shorten long headlines while keeping the key message
- Count characters including ALL spaces and punctuation
- Return all {HEADLINE_COUNT} headlines in the original order

Return ONLY a JSON object with the corrected headlines array:
{{"headlines": ["Corrected headline 1", "Corrected headline 2", ...]}}

Original headlines that need fixing:
{json.dumps(list(headlines), indent=2)}"""
