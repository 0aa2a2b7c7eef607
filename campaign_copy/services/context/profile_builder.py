"""Client profile synthesis from structured intake and classified fragments.

The builder runs in two phases. Intake data is applied first and is
authoritative; fragment extraction afterwards only appends de-duplicated
list items and fills scalar fields that intake left empty.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from campaign_copy.schemas.intake import ClientIntake, split_csv
from campaign_copy.services.context import extractors
from campaign_copy.services.context.types import (
    BrandVoiceProfile,
    CategorizedFragments,
    ClassifiedFragment,
    ClientProfile,
    CompetitorProfile,
    DemographicProfile,
    ProfileValidation,
    PropertyProfile,
)

logger = logging.getLogger(__name__)

MIN_VECTOR_FRAGMENTS = 3
UNKNOWN_CLIENT_ID = "unknown"

DEFAULT_TONE = ("Professional", "Friendly")
DEFAULT_PERSONALITY = ("Reliable", "Modern")
DEFAULT_COMMUNICATION_STYLE = ("Direct", "Data-driven")
DEFAULT_AGE_RANGES = ("25-40",)
DEFAULT_INCOME_LEVELS = ("Middle income",)
DEFAULT_LIFESTYLE = ("Urban", "Professional")


def has_valid_vector_data(categorized: CategorizedFragments) -> bool:
    return categorized.total_count >= MIN_VECTOR_FRAGMENTS


def _extend(target: list[str], values: Iterable[str]) -> None:
    merged = extractors.dedupe([*target, *values])
    target[:] = merged


def _fallback(values: list[str], defaults: tuple[str, ...]) -> None:
    if not values:
        values.extend(defaults)


class ProfileBuilder:
    """Two-phase builder for :class:`ClientProfile`."""

    def __init__(self, client_id: str) -> None:
        self.brand_voice = BrandVoiceProfile()
        self.demographics = DemographicProfile()
        self.property = PropertyProfile()
        self.competitor = CompetitorProfile()
        self.client_id = client_id
        self.has_intake_data = False
        self.has_vector_data = False

    # -- phase 1 ----------------------------------------------------------

    def apply_intake(self, intake: ClientIntake) -> ProfileBuilder:
        self.has_intake_data = intake.intake_completed

        guidelines = (intake.brand_voice_guidelines or "").strip()
        if guidelines:
            self.brand_voice.voice_guidelines = guidelines
            _extend(self.brand_voice.tone, extractors.extract_tone(guidelines))
            _extend(self.brand_voice.personality, extractors.extract_personality(guidelines))
            _extend(self.brand_voice.key_messages, extractors.extract_key_messages(guidelines))
            _extend(self.brand_voice.avoid_words, extractors.extract_avoid_words(guidelines))

        audience = (intake.target_audience or "").strip()
        if audience:
            self.demographics.primary_audience = audience
            _extend(self.demographics.age_ranges, extractors.extract_audience_ages(audience))

        self.property.community_name = (intake.community_name or "").strip()
        self.property.property_type = (intake.community_type or "").strip()
        self.property.price_point = (intake.price_point or "").strip()
        _extend(self.property.unique_features, split_csv(intake.unique_features))
        _extend(self.property.amenities, split_csv(intake.amenities_highlights))
        _extend(self.property.location_advantages, split_csv(intake.location_advantages))
        _extend(self.property.special_offers, split_csv(intake.special_promotions))

        _extend(self.competitor.competitors, split_csv(intake.competitor_info))
        return self

    # -- phase 2 ----------------------------------------------------------

    def apply_fragments(self, categorized: CategorizedFragments) -> ProfileBuilder:
        self.has_vector_data = has_valid_vector_data(categorized)
        self._apply_brand_voice(categorized.brand_voice)
        self._apply_demographics(categorized.demographics)
        self._apply_property(categorized.property_features, categorized.local_area)
        self._apply_competitor(categorized.competitor_intelligence)
        return self

    def apply_client_name(self, client_name: str | None) -> ProfileBuilder:
        if not self.property.community_name and client_name:
            self.property.community_name = client_name.strip()
        return self

    def _apply_brand_voice(self, fragments: Iterable[ClassifiedFragment]) -> None:
        for fragment in fragments:
            _extend(
                self.brand_voice.communication_style,
                extractors.extract_communication_style(fragment.content),
            )
            _extend(self.brand_voice.brand_values, extractors.extract_brand_values(fragment.content))

    def _apply_demographics(self, fragments: Iterable[ClassifiedFragment]) -> None:
        profile = self.demographics
        for fragment in fragments:
            signals = extractors.extract_demographic_signals(fragment.content)
            _extend(profile.age_ranges, signals.age_ranges)
            _extend(profile.income_levels, signals.income_levels)
            _extend(profile.lifestyle, signals.lifestyle)
            _extend(profile.interests, signals.interests)
            _extend(profile.motivations, signals.motivations)
            _extend(profile.pain_points, signals.pain_points)
            _extend(profile.communication_preferences, signals.communication_preferences)

    def _apply_property(
        self,
        property_fragments: Iterable[ClassifiedFragment],
        local_fragments: Iterable[ClassifiedFragment],
    ) -> None:
        for fragment in property_fragments:
            _extend(self.property.amenities, extractors.extract_amenities(fragment.content))
            _extend(
                self.property.competitive_differentiators,
                extractors.extract_differentiators(fragment.content),
            )
        for fragment in local_fragments:
            _extend(
                self.property.location_advantages,
                extractors.extract_location_advantages(fragment.content),
            )

    def _apply_competitor(self, fragments: Iterable[ClassifiedFragment]) -> None:
        profile = self.competitor
        for fragment in fragments:
            _extend(
                profile.competitive_advantages,
                extractors.extract_competitive_advantages(fragment.content),
            )
            _extend(
                profile.differentiation_points,
                extractors.extract_differentiation_points(fragment.content),
            )
            _extend(profile.pricing_advantages, extractors.extract_pricing_advantages(fragment.content))

    # -- result -------------------------------------------------------------

    def build(self) -> ClientProfile:
        _fallback(self.brand_voice.tone, DEFAULT_TONE)
        _fallback(self.brand_voice.personality, DEFAULT_PERSONALITY)
        _fallback(self.brand_voice.communication_style, DEFAULT_COMMUNICATION_STYLE)
        _fallback(self.demographics.age_ranges, DEFAULT_AGE_RANGES)
        _fallback(self.demographics.income_levels, DEFAULT_INCOME_LEVELS)
        _fallback(self.demographics.lifestyle, DEFAULT_LIFESTYLE)

        if not self.competitor.market_position:
            self.competitor.market_position = extractors.derive_market_position(
                self.competitor.competitive_advantages,
                self.competitor.differentiation_points,
                self.competitor.pricing_advantages,
            )

        profile = ClientProfile(
            client_id=self.client_id,
            brand_voice=self.brand_voice,
            demographics=self.demographics,
            property=self.property,
            competitor=self.competitor,
            has_intake_data=self.has_intake_data,
            has_vector_data=self.has_vector_data,
        )
        profile.completeness_score = calculate_completeness_score(profile)
        return profile


def build_client_profile(
    intake: ClientIntake | None,
    categorized: CategorizedFragments,
    client_name: str | None = None,
) -> ClientProfile:
    """Merge intake data and classified fragments into a client profile."""
    builder = ProfileBuilder(client_id=intake.client_id if intake else UNKNOWN_CLIENT_ID)
    if intake is not None:
        builder.apply_intake(intake)
    builder.apply_fragments(categorized)
    builder.apply_client_name(client_name)
    profile = builder.build()

    logger.info("Client profile built", extra=profile_summary(profile))
    return profile


def calculate_completeness_score(profile: ClientProfile) -> int:
    """Fixed-point completeness allocation; the weights sum to 100."""
    brand_voice = profile.brand_voice
    demographics = profile.demographics
    property_ = profile.property
    competitor = profile.competitor

    checks = (
        (bool(brand_voice.voice_guidelines), 10),
        (bool(brand_voice.tone), 5),
        (bool(brand_voice.personality), 5),
        (bool(brand_voice.brand_values), 5),
        (bool(demographics.primary_audience), 8),
        (bool(demographics.age_ranges), 4),
        (bool(demographics.lifestyle), 4),
        (bool(demographics.motivations), 4),
        (bool(demographics.pain_points), 5),
        (bool(property_.community_name), 8),
        (bool(property_.amenities), 5),
        (bool(property_.location_advantages), 5),
        (bool(property_.unique_features), 4),
        (bool(property_.price_point), 3),
        (bool(competitor.competitors), 5),
        (bool(competitor.competitive_advantages), 5),
        (bool(competitor.market_position), 5),
        (profile.has_intake_data, 5),
        (profile.has_vector_data, 5),
    )
    return sum(points for present, points in checks if present)


def validate_client_profile(profile: ClientProfile) -> ProfileValidation:
    """Report missing critical fields and data quality issues."""
    validation = ProfileValidation(is_valid=True, completeness_score=profile.completeness_score)

    if not profile.brand_voice.tone:
        validation.missing_fields.append("Brand voice tone")
        validation.fallbacks_applied.append("Default tone applied")
    if not profile.demographics.primary_audience:
        validation.missing_fields.append("Target audience")
        validation.fallbacks_applied.append("General audience assumed")
    if not profile.property.community_name:
        validation.missing_fields.append("Community name")
        validation.data_quality_issues.append("Property identification unclear")

    if not profile.demographics.age_ranges:
        validation.data_quality_issues.append("Age range not specified")
    if not profile.property.amenities:
        validation.data_quality_issues.append("No amenities identified")

    validation.is_valid = (
        len(validation.missing_fields) <= 2 and len(validation.data_quality_issues) <= 3
    )
    return validation


def profile_summary(profile: ClientProfile) -> dict[str, Any]:
    return {
        "client_id": profile.client_id,
        "completeness_score": profile.completeness_score,
        "has_intake_data": profile.has_intake_data,
        "has_vector_data": profile.has_vector_data,
        "brand_voice_elements": {
            "tone": len(profile.brand_voice.tone),
            "personality": len(profile.brand_voice.personality),
            "guidelines": bool(profile.brand_voice.voice_guidelines),
        },
        "demographic_elements": {
            "primary_audience": bool(profile.demographics.primary_audience),
            "age_ranges": len(profile.demographics.age_ranges),
            "lifestyle_factors": len(profile.demographics.lifestyle),
            "motivations": len(profile.demographics.motivations),
        },
        "property_elements": {
            "community_name": bool(profile.property.community_name),
            "amenities": len(profile.property.amenities),
            "location_advantages": len(profile.property.location_advantages),
            "unique_features": len(profile.property.unique_features),
        },
        "competitor_elements": {
            "competitors": len(profile.competitor.competitors),
            "advantages": len(profile.competitor.competitive_advantages),
            "market_position": bool(profile.competitor.market_position),
        },
    }
