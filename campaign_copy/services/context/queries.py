"""Specialized retrieval queries for campaign context."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from campaign_copy.schemas.campaign import (
    RE_GENERAL_LOCATION,
    RE_PROXIMITY,
    RE_UNIT_TYPE,
    CampaignLocation,
    CampaignRequest,
    UnitDetails,
)

AUTO_EXTRACT = "Auto-Extract"
PLACEHOLDER_LOCATION = "real estate property location"

QUERY_LABELS = (
    "Brand Voice & Messaging",
    "Target Demographics & Psychographics",
    "Property Features & Amenities",
    "Local Area & Lifestyle",
)

_BRAND_VOICE_FOCUS = {
    RE_GENERAL_LOCATION: "location-based advertising neighborhood branding",
    RE_UNIT_TYPE: "unit features marketing bedroom bathroom descriptions",
    RE_PROXIMITY: "proximity marketing location benefits messaging",
}

_UNIT_DEMOGRAPHICS = {
    "studio": "young professionals students singles urban lifestyle",
    "1br": "young couples professionals work from home",
    "2br": "families children roommates space requirements",
    "3br": "families children roommates space requirements",
    "4br_plus": "families children roommates space requirements",
}
_ALL_UNIT_DEMOGRAPHICS = "young professionals students families couples roommates all residents"

_PROPERTY_FOCUS = {
    RE_UNIT_TYPE: "unit specifications floor plans layout features",
    RE_PROXIMITY: "location benefits accessibility transportation",
    RE_GENERAL_LOCATION: "community amenities neighborhood features",
}

_LOCAL_AREA_FOCUS = {
    RE_PROXIMITY: "transportation access nearby employers schools landmarks",
    RE_GENERAL_LOCATION: "neighborhood highlights area attractions community features",
    RE_UNIT_TYPE: "residential area family-friendly community amenities",
}


@dataclass(frozen=True, slots=True)
class RetrievalQueries:
    brand_voice: str
    demographics: str
    property_features: str
    local_area: str

    def as_list(self) -> list[str]:
        return [self.brand_voice, self.demographics, self.property_features, self.local_area]

    def labeled(self) -> list[tuple[str, str]]:
        return list(zip(QUERY_LABELS, self.as_list()))


def base_location(location: CampaignLocation | None) -> str:
    """City and state, or a placeholder when location is still to be extracted."""
    if (
        location is None
        or not location.city
        or not location.state
        or AUTO_EXTRACT in (location.city, location.state)
    ):
        return PLACEHOLDER_LOCATION
    return f"{location.city} {location.state}"


def _join(*parts: str | None) -> str:
    return " ".join(part for part in parts if part)


def generate_queries(
    campaign_type: str,
    *,
    ad_group_type: str | None = None,
    location: CampaignLocation | None = None,
    unit_details: UnitDetails | None = None,
    proximity_targets: Sequence[str] = (),
    special_offers: str | None = None,
    price_range: str | None = None,
    target_demographic: str | None = None,
) -> RetrievalQueries:
    """Build the four retrieval queries for a campaign."""
    where = base_location(location)
    has_location = where != PLACEHOLDER_LOCATION

    brand_voice = _join(
        "brand voice messaging guidelines tone communication style marketing copy",
        _BRAND_VOICE_FOCUS.get(campaign_type),
        f"{target_demographic} communication preferences" if target_demographic else None,
        "advertising guidelines brand personality voice tone",
    )

    if campaign_type == RE_GENERAL_LOCATION:
        audience_focus: str | None = "neighborhood demographics area residents community profile"
    elif campaign_type == RE_UNIT_TYPE:
        audience_focus = (
            _UNIT_DEMOGRAPHICS.get(ad_group_type) if ad_group_type else _ALL_UNIT_DEMOGRAPHICS
        )
    elif campaign_type == RE_PROXIMITY:
        audience_focus = "commuters transportation preferences accessibility needs"
    else:
        audience_focus = None
    demographics = _join(
        "target audience demographics psychographics lifestyle",
        f"{where} residents" if has_location else "real estate market demographics",
        audience_focus,
        target_demographic,
        "motivations pain points preferences housing needs",
    )

    unit_terms: list[str] = []
    if unit_details is not None:
        if unit_details.bedrooms is not None:
            unit_terms.append(f"{unit_details.bedrooms} bedroom")
        if unit_details.bathrooms is not None:
            unit_terms.append(f"{unit_details.bathrooms} bathroom")
        if unit_details.sqft:
            unit_terms.append(f"{unit_details.sqft} square feet")
        if unit_details.unit_type:
            unit_terms.append(unit_details.unit_type)
    targets = " ".join(proximity_targets)
    property_features = _join(
        f"{where} amenities features property highlights unique selling points"
        if has_location
        else "property amenities features highlights unique selling points",
        *unit_terms,
        _PROPERTY_FOCUS.get(campaign_type),
        f"near {targets} proximity benefits" if targets else None,
        f"{special_offers} promotions incentives" if special_offers else None,
        f"{price_range} pricing value" if price_range else None,
        "apartment features amenities community benefits property advantages",
    )

    local_area = _join(
        f"{where} neighborhood local area benefits location advantages"
        if has_location
        else "neighborhood local area benefits location advantages city area",
        location.zip_code if location else None,
        f"{location.county} county" if location and location.county else None,
        f"{targets} nearby attractions" if targets else None,
        _LOCAL_AREA_FOCUS.get(campaign_type),
        "local attractions transportation dining entertainment lifestyle downtown area",
    )

    return RetrievalQueries(
        brand_voice=brand_voice,
        demographics=demographics,
        property_features=property_features,
        local_area=local_area,
    )


def queries_for_request(request: CampaignRequest) -> RetrievalQueries:
    return generate_queries(
        request.campaign_type,
        ad_group_type=request.ad_group_type,
        location=request.location,
        unit_details=request.unit_details,
        proximity_targets=request.proximity_targets,
        special_offers=request.special_offers,
        price_range=request.price_range,
        target_demographic=request.target_demographic,
    )
