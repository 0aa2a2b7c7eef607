"""Campaign request schemas and campaign-type catalog."""

from __future__ import annotations

from pydantic import BaseModel, Field

RE_GENERAL_LOCATION = "re_general_location"
RE_UNIT_TYPE = "re_unit_type"
RE_PROXIMITY = "re_proximity"

DISTRIBUTED_FOCUS = "distributed_focus"

CAMPAIGN_TYPES: dict[str, dict[str, object]] = {
    RE_GENERAL_LOCATION: {
        "name": "Real Estate - General Location",
        "requires_ad_group": False,
        "ad_groups": ("location_general", "location_specific", "location_amenities"),
    },
    RE_UNIT_TYPE: {
        "name": "Real Estate - Unit Type",
        "requires_ad_group": True,
        "ad_groups": ("studio", "1br", "2br", "3br", "4br_plus"),
    },
    RE_PROXIMITY: {
        "name": "Real Estate - Proximity Search",
        "requires_ad_group": False,
        "ad_groups": ("near_landmarks", "near_transit", "near_employers", "near_schools"),
    },
}


class CampaignLocation(BaseModel):
    """Target location for a campaign."""

    city: str
    state: str
    zip_code: str | None = None
    county: str | None = None


class UnitDetails(BaseModel):
    """Unit configuration targeted by unit-type campaigns."""

    bedrooms: int | None = None
    bathrooms: int | None = None
    sqft: str | None = None
    unit_type: str | None = None


class CampaignRequest(BaseModel):
    """Fully resolved campaign parameters used to build a campaign context."""

    client_id: str
    campaign_type: str
    ad_group_type: str | None = None
    location: CampaignLocation
    unit_details: UnitDetails | None = None
    proximity_targets: list[str] = Field(default_factory=list)
    price_range: str | None = None
    move_in_date: str | None = None
    special_offers: str | None = None
    target_demographic: str | None = None
    additional_context: str | None = None

    @property
    def effective_ad_group_type(self) -> str:
        return self.ad_group_type or DISTRIBUTED_FOCUS


class CampaignGenerationRequest(BaseModel):
    """Inbound generation request before campaign details are auto-extracted."""

    client_id: str
    campaign_type: str
    campaign_name: str
    ad_group_type: str | None = None
