"""Domain types for fragment classification, profiles, and campaign context."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Literal

SectionPriority = Literal["high", "medium", "low"]
DataSource = Literal["intake", "vector", "derived"]
ContextStrength = Literal["strong", "moderate", "weak"]


class FragmentCategory(str, Enum):
    """Semantic buckets for retrieved fragments.

    Declaration order is the classifier's tie-break order.
    """

    BRAND_VOICE = "brand_voice"
    DEMOGRAPHICS = "demographics"
    PROPERTY_FEATURES = "property_features"
    LOCAL_AREA = "local_area"
    COMPETITOR_INTELLIGENCE = "competitor_intelligence"
    GENERAL = "general"


CATEGORY_ORDER: tuple[FragmentCategory, ...] = tuple(FragmentCategory)


@dataclass(frozen=True, slots=True)
class Fragment:
    """A unit of retrieved text plus its vector-search similarity."""

    content: str
    similarity: float
    index: int


@dataclass(frozen=True, slots=True)
class ClassifiedFragment:
    """Fragment with its assigned category and classification confidence."""

    fragment: Fragment
    category: FragmentCategory
    confidence: float

    @property
    def content(self) -> str:
        return self.fragment.content

    @property
    def similarity(self) -> float:
        return self.fragment.similarity

    @property
    def index(self) -> int:
        return self.fragment.index


@dataclass(frozen=True, slots=True)
class CategorizedFragments:
    """Total, disjoint partition of classified fragments by category."""

    buckets: dict[FragmentCategory, tuple[ClassifiedFragment, ...]] = field(
        default_factory=lambda: {category: () for category in CATEGORY_ORDER}
    )

    def for_category(self, category: FragmentCategory) -> tuple[ClassifiedFragment, ...]:
        return self.buckets.get(category, ())

    @property
    def brand_voice(self) -> tuple[ClassifiedFragment, ...]:
        return self.for_category(FragmentCategory.BRAND_VOICE)

    @property
    def demographics(self) -> tuple[ClassifiedFragment, ...]:
        return self.for_category(FragmentCategory.DEMOGRAPHICS)

    @property
    def property_features(self) -> tuple[ClassifiedFragment, ...]:
        return self.for_category(FragmentCategory.PROPERTY_FEATURES)

    @property
    def local_area(self) -> tuple[ClassifiedFragment, ...]:
        return self.for_category(FragmentCategory.LOCAL_AREA)

    @property
    def competitor_intelligence(self) -> tuple[ClassifiedFragment, ...]:
        return self.for_category(FragmentCategory.COMPETITOR_INTELLIGENCE)

    @property
    def general(self) -> tuple[ClassifiedFragment, ...]:
        return self.for_category(FragmentCategory.GENERAL)

    @property
    def total_count(self) -> int:
        return sum(len(items) for items in self.buckets.values())


@dataclass(slots=True)
class BrandVoiceProfile:
    tone: list[str] = field(default_factory=list)
    personality: list[str] = field(default_factory=list)
    communication_style: list[str] = field(default_factory=list)
    key_messages: list[str] = field(default_factory=list)
    avoid_words: list[str] = field(default_factory=list)
    brand_values: list[str] = field(default_factory=list)
    voice_guidelines: str = ""


@dataclass(slots=True)
class DemographicProfile:
    primary_audience: str = ""
    age_ranges: list[str] = field(default_factory=list)
    income_levels: list[str] = field(default_factory=list)
    lifestyle: list[str] = field(default_factory=list)
    interests: list[str] = field(default_factory=list)
    pain_points: list[str] = field(default_factory=list)
    motivations: list[str] = field(default_factory=list)
    communication_preferences: list[str] = field(default_factory=list)


@dataclass(slots=True)
class PropertyProfile:
    community_name: str = ""
    property_type: str = ""
    unique_features: list[str] = field(default_factory=list)
    amenities: list[str] = field(default_factory=list)
    location_advantages: list[str] = field(default_factory=list)
    price_point: str = ""
    special_offers: list[str] = field(default_factory=list)
    competitive_differentiators: list[str] = field(default_factory=list)


@dataclass(slots=True)
class CompetitorProfile:
    competitors: list[str] = field(default_factory=list)
    competitive_advantages: list[str] = field(default_factory=list)
    differentiation_points: list[str] = field(default_factory=list)
    market_position: str = ""
    pricing_advantages: list[str] = field(default_factory=list)
    unique_selling_points: list[str] = field(default_factory=list)


@dataclass(slots=True)
class ClientProfile:
    """Merged view of intake data and classified fragments for one client."""

    client_id: str
    brand_voice: BrandVoiceProfile
    demographics: DemographicProfile
    property: PropertyProfile
    competitor: CompetitorProfile
    has_intake_data: bool = False
    has_vector_data: bool = False
    completeness_score: int = 0


@dataclass(slots=True)
class ProfileValidation:
    """Quality report for a built client profile."""

    is_valid: bool
    completeness_score: int
    missing_fields: list[str] = field(default_factory=list)
    data_quality_issues: list[str] = field(default_factory=list)
    fallbacks_applied: list[str] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class ContextSection:
    """One scored section of the campaign context."""

    title: str
    content: str
    relevance_score: int
    priority: SectionPriority
    data_source: DataSource


@dataclass(frozen=True, slots=True)
class CampaignContext:
    """Campaign-specific, weighted context consumed by prompt assembly."""

    campaign_type: str
    ad_group_type: str
    brand_voice: ContextSection
    target_audience: ContextSection
    property_highlights: ContextSection
    location_benefits: ContextSection
    competitive_advantages: ContextSection
    pricing_strategy: ContextSection
    overall_relevance_score: int
    context_strength: ContextStrength
    campaign_specific_instructions: tuple[str, ...] = ()
    ad_group_guidance: tuple[str, ...] = ()
    keyword_strategy: tuple[str, ...] = ()

    @property
    def sections(self) -> dict[str, ContextSection]:
        """Sections keyed by name, in weighting order."""
        return {
            "brand_voice": self.brand_voice,
            "target_audience": self.target_audience,
            "property_highlights": self.property_highlights,
            "location_benefits": self.location_benefits,
            "competitive_advantages": self.competitive_advantages,
            "pricing_strategy": self.pricing_strategy,
        }
