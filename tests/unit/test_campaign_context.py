"""Unit tests for campaign context synthesis and scoring."""

from __future__ import annotations

import pytest

from campaign_copy.schemas.campaign import (
    RE_GENERAL_LOCATION,
    RE_PROXIMITY,
    RE_UNIT_TYPE,
    CampaignLocation,
    CampaignRequest,
    UnitDetails,
)
from campaign_copy.services.context.campaign_context import (
    CAMPAIGN_TYPE_WEIGHTS,
    SECTION_NAMES,
    build_campaign_context,
    build_competitive_advantages_section,
    calculate_overall_relevance_score,
    context_summary,
    determine_context_strength,
    filter_amenities_by_campaign,
    format_campaign_context,
    generate_ad_group_guidance,
    generate_keyword_strategy,
)
from campaign_copy.services.context.profile_builder import build_client_profile
from campaign_copy.services.context.types import CategorizedFragments, ContextSection


def _request(campaign_type: str, **overrides: object) -> CampaignRequest:
    data: dict[str, object] = {
        "client_id": "client-1",
        "campaign_type": campaign_type,
        "location": CampaignLocation(city="San Diego", state="CA"),
    }
    data.update(overrides)
    return CampaignRequest.model_validate(data)


def _section(score: int) -> ContextSection:
    return ContextSection(
        title="Section",
        content="content",
        relevance_score=score,
        priority="low",
        data_source="derived",
    )


def test_weight_tables_sum_to_one() -> None:
    for weights in CAMPAIGN_TYPE_WEIGHTS.values():
        assert set(weights) == set(SECTION_NAMES)
        assert sum(weights.values()) == pytest.approx(1.0)


def test_competitive_section_is_never_empty_without_advantages() -> None:
    profile = build_client_profile(None, CategorizedFragments())
    assert profile.competitor.competitive_advantages == []

    section = build_competitive_advantages_section(_request(RE_PROXIMITY), profile)

    assert section.content
    assert section.priority == "low"
    assert section.relevance_score < 20


def test_competitive_section_uses_fallback_when_nothing_is_known() -> None:
    profile = build_client_profile(None, CategorizedFragments())
    profile.competitor.market_position = ""

    section = build_competitive_advantages_section(_request(RE_PROXIMITY), profile)

    assert section.content.startswith("Competitive advantages not specified.")
    assert section.relevance_score == 5


@pytest.mark.parametrize("campaign_type", [RE_GENERAL_LOCATION, RE_UNIT_TYPE, RE_PROXIMITY, "unknown"])
def test_every_section_has_content(campaign_type: str) -> None:
    context = build_campaign_context(
        _request(campaign_type), build_client_profile(None, CategorizedFragments())
    )

    assert len(context.sections) == 6
    for section in context.sections.values():
        assert section.content
        assert 0 <= section.relevance_score <= 100


def test_sparse_proximity_context_scores() -> None:
    context = build_campaign_context(
        _request(RE_PROXIMITY), build_client_profile(None, CategorizedFragments())
    )

    scores = {name: section.relevance_score for name, section in context.sections.items()}
    assert scores == {
        "brand_voice": 55,
        "target_audience": 45,
        "property_highlights": 5,
        "location_benefits": 25,
        "competitive_advantages": 15,
        "pricing_strategy": 5,
    }
    assert context.sections["brand_voice"].priority == "high"
    assert context.sections["target_audience"].priority == "medium"
    assert context.overall_relevance_score == 27
    assert context.context_strength == "weak"
    assert context.ad_group_type == "distributed_focus"
    assert context.ad_group_guidance[0].startswith("DISTRIBUTED HEADLINES")


def test_context_summary_reports_scores_priorities_and_counts() -> None:
    context = build_campaign_context(
        _request(RE_PROXIMITY), build_client_profile(None, CategorizedFragments())
    )

    summary = context_summary(context)

    assert summary["campaign_type"] == RE_PROXIMITY
    assert summary["overall_relevance_score"] == 27
    assert summary["context_strength"] == "weak"
    assert summary["section_scores"]["brand_voice"] == 55
    assert set(summary["section_scores"]) == set(SECTION_NAMES)
    assert sum(summary["section_priorities"].values()) == len(SECTION_NAMES)
    assert summary["section_priorities"]["high"] >= 1
    assert summary["instruction_counts"]["ad_group_guidance"] == len(context.ad_group_guidance)


def test_section_scores_are_capped_at_one_hundred() -> None:
    profile = build_client_profile(None, CategorizedFragments())
    profile.demographics.primary_audience = "Growing families"
    profile.demographics.motivations = ["Space"]
    profile.demographics.pain_points = ["Limited space"]

    context = build_campaign_context(
        _request(
            RE_UNIT_TYPE,
            ad_group_type="2br",
            unit_details=UnitDetails(bedrooms=2, bathrooms=2),
            target_demographic="Families",
        ),
        profile,
    )

    assert context.target_audience.relevance_score == 100
    assert context.target_audience.priority == "high"
    assert context.target_audience.data_source == "intake"
    assert "Multi-Bedroom Demographic Focus" in context.target_audience.content


def test_overall_score_uses_campaign_weights_and_unknown_falls_back() -> None:
    sections = {name: _section(0) for name in SECTION_NAMES}
    sections["location_benefits"] = _section(100)

    assert calculate_overall_relevance_score(sections, RE_PROXIMITY) == 40
    assert calculate_overall_relevance_score(sections, RE_UNIT_TYPE) == 10
    assert calculate_overall_relevance_score(sections, "unknown") == calculate_overall_relevance_score(
        sections, RE_GENERAL_LOCATION
    )


def test_overall_score_rounds_half_up() -> None:
    sections = {name: _section(0) for name in SECTION_NAMES}
    sections["pricing_strategy"] = _section(50)

    assert calculate_overall_relevance_score(sections, RE_UNIT_TYPE) == 3


@pytest.mark.parametrize(
    ("score", "strength"),
    [(100, "strong"), (70, "strong"), (69, "moderate"), (40, "moderate"), (39, "weak"), (0, "weak")],
)
def test_context_strength_buckets(score: int, strength: str) -> None:
    assert determine_context_strength(score) == strength


def test_amenity_filtering_prefers_relevant_amenities() -> None:
    amenities = ["Pool", "In-unit laundry", "Dishwasher", "Parking"]

    assert filter_amenities_by_campaign(amenities, RE_UNIT_TYPE) == ["In-unit laundry", "Dishwasher"]
    assert filter_amenities_by_campaign(amenities, RE_PROXIMITY) == ["Parking"]
    assert filter_amenities_by_campaign(["Pool", "Spa"], RE_PROXIMITY) == ["Pool", "Spa"]
    assert filter_amenities_by_campaign([f"A{n}" for n in range(8)], RE_GENERAL_LOCATION) == [
        f"A{n}" for n in range(6)
    ]


def test_large_unit_ad_groups_share_multi_bedroom_guidance() -> None:
    two = generate_ad_group_guidance(_request(RE_UNIT_TYPE, ad_group_type="2br"))
    four = generate_ad_group_guidance(_request(RE_UNIT_TYPE, ad_group_type="4br_plus"))

    assert two == four
    assert two


def test_keyword_strategy_for_studio_campaign() -> None:
    profile = build_client_profile(None, CategorizedFragments())
    profile.property.amenities = ["Pool"]
    profile.property.price_point = "Luxury living"
    request = _request(
        RE_UNIT_TYPE,
        ad_group_type="studio",
        unit_details=UnitDetails(bedrooms=0, bathrooms=1, unit_type="Studio"),
    )

    strategy = generate_keyword_strategy(request, profile)

    assert strategy[0] == 'Include exact match keywords for "San Diego apartments"'
    assert 'Target exact match: "[studio apartments San Diego]"' in strategy
    assert 'Consider amenity keywords: "pool apartments"' in strategy
    assert strategy[-1] == "Add negative keywords for: cheap, budget, low cost"


def test_format_orders_high_priority_sections_first_and_omits_low() -> None:
    context = build_campaign_context(
        _request(RE_PROXIMITY), build_client_profile(None, CategorizedFragments())
    )

    text = format_campaign_context(context)

    assert text.startswith("=== CAMPAIGN CONTEXT (RE_PROXIMITY - DISTRIBUTED_FOCUS) ===")
    assert "**BRAND VOICE GUIDELINES** [Priority: HIGH, Score: 55]" in text
    assert "**Target Audience Profile** [Priority: medium, Score: 45]" in text
    assert "Pricing Strategy" not in text
    assert text.index("BRAND VOICE GUIDELINES") < text.index("Target Audience Profile")
    assert "**KEYWORD STRATEGY RECOMMENDATIONS:**" in text
