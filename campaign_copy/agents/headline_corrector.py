"""Headline correction agent used for the single bounded correction round-trip."""

from pydantic import BaseModel, Field

from campaign_copy.agents.base_agent import BaseAgent
from campaign_copy.schemas.ad_copy import HeadlineCorrection


class HeadlineCorrectorInput(BaseModel):
    """Input for headline correction."""

    prompt: str = Field(description="Correction prompt listing the invalid headlines")


class HeadlineCorrectorAgent(BaseAgent[HeadlineCorrectorInput, HeadlineCorrection]):
    """Agent that rewrites out-of-bounds headlines to 20-30 characters."""

    model_tier = "fast"
    temperature = 0.3

    @property
    def system_prompt(self) -> str:
        return (
            "You fix search ad headlines that violate a 20-30 character limit. "
            "Return every headline in its original order, rewriting only the invalid ones."
        )

    @property
    def output_type(self) -> type[HeadlineCorrection]:
        return HeadlineCorrection

    def _build_prompt(self, input_data: HeadlineCorrectorInput) -> str:
        return input_data.prompt
