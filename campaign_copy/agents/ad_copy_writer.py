"""Ad copy writer agent for multifamily real-estate campaigns."""

import logging

from pydantic import BaseModel, Field

from campaign_copy.agents.base_agent import BaseAgent
from campaign_copy.schemas.ad_copy import AdCopyDraft

logger = logging.getLogger(__name__)


class AdCopyWriterInput(BaseModel):
    """Input for the ad copy writer."""

    prompt: str = Field(description="Fully assembled campaign prompt")
    campaign_type: str = ""


class AdCopyWriterAgent(BaseAgent[AdCopyWriterInput, AdCopyDraft]):
    """Agent that writes search ad headlines, descriptions and keywords."""

    model_tier = "standard"
    temperature = 0.7

    @property
    def system_prompt(self) -> str:
        return """You are a senior Google Ads copywriter for apartment communities.

Write responsive search ad assets from the campaign brief and context you are given.

Rules:
1. Return exactly 15 headlines of 20-30 characters each.
2. Return exactly 4 descriptions of 65-90 characters each.
3. Every character counts, including spaces and punctuation.
4. Stay inside the client's brand voice and avoid any word the brief prohibits.
5. Never reference protected classes (familial status, religion, disability, sex);
   describe the property, not the people who should live there.
6. Prefer concrete amenities, locations and offers over generic superlatives.
7. Use approved calls to action such as "Schedule a Tour", "Apply Now" or "Check Availability"."""

    @property
    def output_type(self) -> type[AdCopyDraft]:
        return AdCopyDraft

    def _build_prompt(self, input_data: AdCopyWriterInput) -> str:
        logger.info(
            "Building ad copy prompt",
            extra={
                "campaign_type": input_data.campaign_type,
                "prompt_length": len(input_data.prompt),
            },
        )
        return input_data.prompt
