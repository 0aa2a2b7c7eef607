"""Client intake schemas."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


def split_csv(value: str | None) -> list[str]:
    """Split a comma-separated intake field into trimmed items."""
    if not value:
        return []
    return [item.strip() for item in value.split(",")]


class ClientIntake(BaseModel):
    """Structured intake record captured during client onboarding."""

    model_config = ConfigDict(extra="ignore")

    client_id: str
    community_name: str | None = None
    community_type: str | None = None
    community_address: str | None = None
    target_audience: str | None = None
    price_point: str | None = None
    unique_features: str | None = None
    brand_voice_guidelines: str | None = None
    competitor_info: str | None = None
    location_advantages: str | None = None
    amenities_highlights: str | None = None
    special_promotions: str | None = None
    intake_completed: bool = False
