"""Auto-derivation of campaign parameters from fragments, profile and intake."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from campaign_copy.schemas.campaign import (
    RE_PROXIMITY,
    RE_UNIT_TYPE,
    CampaignGenerationRequest,
    CampaignLocation,
    CampaignRequest,
    UnitDetails,
)
from campaign_copy.schemas.intake import ClientIntake
from campaign_copy.services.context import extractors
from campaign_copy.services.context.types import (
    CategorizedFragments,
    ClassifiedFragment,
    ClientProfile,
)

logger = logging.getLogger(__name__)

DEFAULT_CITY = "San Diego"
DEFAULT_STATE = "CA"
MAX_PROXIMITY_TARGETS = 5

# ad group -> (bedrooms, bathrooms, unit type)
AD_GROUP_UNITS: dict[str, tuple[int, int, str]] = {
    "studio": (0, 1, "Studio"),
    "1br": (1, 1, "Apartment"),
    "2br": (2, 2, "Apartment"),
    "3br": (3, 2, "Apartment"),
    "4br_plus": (4, 3, "Apartment"),
}


def _contents(*groups: Iterable[ClassifiedFragment]) -> list[str]:
    return [fragment.content for group in groups for fragment in group]


def extract_location(
    categorized: CategorizedFragments,
    intake: ClientIntake | None = None,
) -> CampaignLocation:
    """Resolve the campaign location.

    Precedence: intake address, then fragment patterns, then well-known city
    indicators, then the San Diego default.
    """
    if intake is not None and intake.community_address:
        parts = extractors.parse_address(intake.community_address)
        if parts is not None:
            return CampaignLocation(city=parts.city, state=parts.state, zip_code=parts.zip_code)
        logger.info(
            "Intake address could not be parsed",
            extra={"client_id": intake.client_id, "address": intake.community_address},
        )

    city: str | None = None
    state: str | None = None
    zip_code: str | None = None
    county: str | None = None

    for content in _contents(categorized.local_area):
        city = city or extractors.extract_city(content)
        state = state or extractors.extract_state(content)
        zip_code = zip_code or extractors.extract_zip_code(content)
        county = county or extractors.extract_county(content)

    for content in _contents(categorized.property_features):
        city = city or extractors.extract_city(content)
        state = state or extractors.extract_state(content)

    if not city and not state:
        combined = " ".join(
            _contents(categorized.local_area, categorized.property_features, categorized.demographics)
        )
        city, state = extractors.infer_city_state(combined) or (DEFAULT_CITY, DEFAULT_STATE)

    return CampaignLocation(
        city=city or DEFAULT_CITY,
        state=state or DEFAULT_STATE,
        zip_code=zip_code,
        county=county,
    )


def extract_price_range(categorized: CategorizedFragments, profile: ClientProfile) -> str | None:
    if profile.property.price_point:
        return profile.property.price_point
    for content in _contents(categorized.property_features, categorized.general):
        price = extractors.extract_price_range(content)
        if price:
            return price
    return None


def extract_target_demographic(categorized: CategorizedFragments, profile: ClientProfile) -> str | None:
    if profile.demographics.primary_audience:
        return profile.demographics.primary_audience
    insights: list[str] = []
    for content in _contents(categorized.demographics):
        insights.extend(extractors.extract_target_demographics(content))
    unique = extractors.dedupe(insights)
    return ", ".join(unique) if unique else None


def extract_unit_details(categorized: CategorizedFragments, ad_group_type: str | None) -> UnitDetails | None:
    """Unit configuration from the ad group, refined by property fragments."""
    details = UnitDetails()
    if ad_group_type in AD_GROUP_UNITS:
        bedrooms, bathrooms, unit_type = AD_GROUP_UNITS[ad_group_type]
        details = UnitDetails(bedrooms=bedrooms, bathrooms=bathrooms, unit_type=unit_type)

    for content in _contents(categorized.property_features):
        if not details.sqft:
            details.sqft = extractors.extract_square_footage(content)
        refined = extractors.extract_unit_type(content)
        if refined:
            details.unit_type = refined

    if details == UnitDetails():
        return None
    return details


def extract_proximity_targets(categorized: CategorizedFragments) -> list[str]:
    targets: list[str] = []
    for content in _contents(categorized.local_area):
        targets.extend(extractors.extract_proximity_targets(content))
    return extractors.dedupe(targets)[:MAX_PROXIMITY_TARGETS]


def extract_special_offers(categorized: CategorizedFragments, profile: ClientProfile) -> str | None:
    if profile.property.special_offers:
        return ", ".join(profile.property.special_offers)
    for content in _contents(categorized.property_features, categorized.general):
        offer = extractors.extract_special_offer(content)
        if offer:
            return offer
    return None


def extract_move_in_date(categorized: CategorizedFragments) -> str | None:
    for content in _contents(categorized.general, categorized.property_features):
        move_in = extractors.extract_move_in_date(content)
        if move_in:
            return move_in
    return None


def extract_additional_context(profile: ClientProfile) -> str | None:
    property_ = profile.property
    elements: list[str] = []
    if property_.amenities:
        elements.append(f"Key amenities: {', '.join(property_.amenities[:3])}")
    if property_.location_advantages:
        elements.append(f"Location benefits: {', '.join(property_.location_advantages[:2])}")
    if property_.unique_features:
        elements.append(f"Unique features: {', '.join(property_.unique_features)}")
    return ". ".join(elements) if elements else None


def extract_campaign_request(
    request: CampaignGenerationRequest,
    categorized: CategorizedFragments,
    profile: ClientProfile,
    intake: ClientIntake | None = None,
) -> CampaignRequest:
    """Derive a full campaign request from retrieved and structured data."""
    campaign_request = CampaignRequest(
        client_id=request.client_id,
        campaign_type=request.campaign_type,
        ad_group_type=request.ad_group_type,
        location=extract_location(categorized, intake),
        unit_details=(
            extract_unit_details(categorized, request.ad_group_type)
            if request.campaign_type == RE_UNIT_TYPE
            else None
        ),
        proximity_targets=(
            extract_proximity_targets(categorized) if request.campaign_type == RE_PROXIMITY else []
        ),
        price_range=extract_price_range(categorized, profile),
        move_in_date=extract_move_in_date(categorized),
        special_offers=extract_special_offers(categorized, profile),
        target_demographic=extract_target_demographic(categorized, profile),
        additional_context=extract_additional_context(profile),
    )

    logger.info(
        "Campaign details extracted",
        extra={
            "client_id": request.client_id,
            "campaign_type": request.campaign_type,
            "city": campaign_request.location.city,
            "state": campaign_request.location.state,
            "has_price_range": campaign_request.price_range is not None,
            "proximity_targets": len(campaign_request.proximity_targets),
        },
    )
    return campaign_request
