"""Pure marker and pattern extractors over free text.

Every function here takes plain text (or a single value) and returns the
extracted labels or ``None``. Profile and campaign-detail builders compose
these over classified fragments.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

MarkerRule = tuple[tuple[str, ...], str]


def dedupe(values: Iterable[str]) -> list[str]:
    """Order-preserving de-duplication after whitespace normalization."""
    seen: set[str] = set()
    result: list[str] = []
    for value in values:
        normalized = " ".join(value.split())
        if not normalized or normalized in seen:
            continue
        seen.add(normalized)
        result.append(normalized)
    return result


def contains_any(text: str, markers: Sequence[str]) -> bool:
    return any(marker in text for marker in markers)


def match_labels(text: str, rules: Sequence[MarkerRule]) -> list[str]:
    """Return the label of every rule with a marker present in ``text``."""
    lowered = text.lower()
    return [label for markers, label in rules if contains_any(lowered, markers)]


# ---------------------------------------------------------------------------
# Brand voice
# ---------------------------------------------------------------------------

TONE_RULES: tuple[MarkerRule, ...] = (
    (("professional",), "Professional"),
    (("friendly",), "Friendly"),
    (("luxury", "premium"), "Luxury"),
    (("casual",), "Casual"),
    (("authoritative",), "Authoritative"),
    (("warm",), "Warm"),
    (("sophisticated",), "Sophisticated"),
)

PERSONALITY_RULES: tuple[MarkerRule, ...] = (
    (("innovative",), "Innovative"),
    (("reliable",), "Reliable"),
    (("modern",), "Modern"),
    (("traditional",), "Traditional"),
    (("approachable",), "Approachable"),
    (("exclusive",), "Exclusive"),
)

COMMUNICATION_STYLE_RULES: tuple[MarkerRule, ...] = (
    (("direct communication",), "Direct"),
    (("storytelling", "narrative"), "Storytelling"),
    (("data-driven", "facts"), "Data-driven"),
    (("emotional appeal",), "Emotional"),
)

BRAND_VALUE_RULES: tuple[MarkerRule, ...] = (
    (("sustainability", "eco-friendly"), "Sustainability"),
    (("community", "neighborhood"), "Community"),
    (("luxury", "premium"), "Luxury"),
    (("innovation", "technology"), "Innovation"),
    (("service", "customer care"), "Service Excellence"),
)


def extract_tone(guidelines: str) -> list[str]:
    return match_labels(guidelines, TONE_RULES)


def extract_personality(guidelines: str) -> list[str]:
    return match_labels(guidelines, PERSONALITY_RULES)


def extract_communication_style(text: str) -> list[str]:
    return match_labels(text, COMMUNICATION_STYLE_RULES)


def extract_brand_values(text: str) -> list[str]:
    return match_labels(text, BRAND_VALUE_RULES)


SENTENCE_SPLIT_RE = re.compile(r"[.!?]+")
KEY_MESSAGE_MARKERS = ("message", "communicate", "convey", "emphasize")
AVOID_TERM_RE = re.compile(r"(?:avoid|don't use|never)[\s\w]*?['\"“”]([^'\"“”]+)['\"“”]", re.IGNORECASE)


def split_sentences(text: str) -> list[str]:
    return [sentence.strip() for sentence in SENTENCE_SPLIT_RE.split(text) if sentence.strip()]


def extract_key_messages(guidelines: str) -> list[str]:
    """Guideline sentences that state what the copy should convey."""
    return [
        sentence
        for sentence in split_sentences(guidelines)
        if contains_any(sentence.lower(), KEY_MESSAGE_MARKERS)
    ]


def extract_avoid_words(guidelines: str) -> list[str]:
    """Quoted terms the guidelines prohibit, e.g. ``avoid "cheap"``."""
    return [match.group(1).strip().lower() for match in AVOID_TERM_RE.finditer(guidelines)]


# ---------------------------------------------------------------------------
# Demographics
# ---------------------------------------------------------------------------

AUDIENCE_AGE_RULES: tuple[MarkerRule, ...] = (
    (("young", "millennial"), "25-35"),
    (("gen z",), "18-26"),
    (("family", "families"), "30-45"),
    (("professional",), "25-40"),
    (("student",), "18-25"),
)

AGE_BRACKETS: tuple[tuple[int, int, str], ...] = (
    (18, 25, "18-25 (Gen Z)"),
    (26, 35, "26-35 (Millennials)"),
    (36, 45, "36-45 (Older Millennials)"),
    (46, 55, "46-55 (Gen X)"),
)

# (markers, income label, lifestyle label)
JOB_TITLE_RULES: tuple[tuple[tuple[str, ...], str, str], ...] = (
    (("founder", "ceo", "executive"), "High income (Executives/Founders)", "Entrepreneurial"),
    (("manager", "director"), "Upper-middle income (Management)", "Career-focused"),
    (("engineer", "developer", "tech"), "High income (Tech professionals)", "Tech-savvy"),
)

PERSONA_RE = re.compile(r"(\w+),\s*(\d+)\s*years?\s*old[^.]*?([^.]*)", re.IGNORECASE)
PERSONA_AGE_RE = re.compile(r"(\d+)\s*years?\s*old", re.IGNORECASE)
MINDSET_RE = re.compile(r"mindset[:\s]*([^.\n]*)", re.IGNORECASE)
PERCENTAGE_RE = re.compile(r"(\d+)%\s*([^,\n]*)", re.IGNORECASE)
EV_RE = re.compile(r"\bevs?\b")

LIFESTYLE_RULES: tuple[MarkerRule, ...] = (
    (("urban", "city"), "Urban"),
    (("active", "fitness", "gym"), "Active"),
    (("professional", "career"), "Career-focused"),
    (("social", "community events"), "Social"),
    (("tech", "digital"), "Tech-savvy"),
)

INCOME_RULES: tuple[MarkerRule, ...] = (
    (("luxury", "premium"), "High income"),
    (("affordable", "budget"), "Moderate income"),
    (("middle income", "middle class"), "Middle income"),
)

MOTIVATION_RULES: tuple[MarkerRule, ...] = (
    (("convenience", "location"), "Convenience"),
    (("amenities", "features"), "Lifestyle amenities"),
    (("investment", "value"), "Investment value"),
    (("community", "neighborhood"), "Community connection"),
)

PAIN_POINT_RULES: tuple[MarkerRule, ...] = (
    (("commute", "transportation"), "Long commute"),
    (("space", "small"), "Limited space"),
    (("cost", "expensive"), "High costs"),
    (("maintenance", "upkeep"), "Maintenance burden"),
)


@dataclass(slots=True)
class DemographicSignals:
    """Demographic labels found in a single text."""

    age_ranges: list[str] = field(default_factory=list)
    income_levels: list[str] = field(default_factory=list)
    lifestyle: list[str] = field(default_factory=list)
    interests: list[str] = field(default_factory=list)
    motivations: list[str] = field(default_factory=list)
    pain_points: list[str] = field(default_factory=list)
    communication_preferences: list[str] = field(default_factory=list)


def extract_audience_ages(target_audience: str) -> list[str]:
    """Map an intake audience description to age ranges."""
    return match_labels(target_audience, AUDIENCE_AGE_RULES)


def age_bracket(age: int) -> str | None:
    for low, high, label in AGE_BRACKETS:
        if low <= age <= high:
            return label
    return None


def extract_persona_age(text: str) -> str | None:
    """Age bracket for a ``"<name>, <N> years old"`` persona mention."""
    match = PERSONA_AGE_RE.search(text)
    if not match:
        return None
    return age_bracket(int(match.group(1)))


def extract_persona_signals(text: str, signals: DemographicSignals) -> None:
    for persona in PERSONA_RE.finditer(text):
        mention = persona.group(0)
        bracket = extract_persona_age(mention)
        if bracket:
            signals.age_ranges.append(bracket)
        lowered = mention.lower()
        for markers, income, lifestyle in JOB_TITLE_RULES:
            if contains_any(lowered, markers):
                signals.income_levels.append(income)
                signals.lifestyle.append(lifestyle)


def extract_mindset_signals(text: str, signals: DemographicSignals) -> None:
    for match in MINDSET_RE.finditer(text):
        mindset = match.group(1).lower()
        if "ambitious" in mindset:
            signals.motivations.append("Career advancement")
            signals.lifestyle.append("Achievement-oriented")
        if "convenience" in mindset:
            signals.motivations.append("Convenience and efficiency")
            signals.pain_points.append("Time constraints")
        if "status" in mindset:
            signals.motivations.append("Social status and prestige")
            signals.lifestyle.append("Status-conscious")
        if "risk" in mindset:
            signals.lifestyle.append("Risk-taking")
            signals.motivations.append("Growth opportunities")


def _extract_lifestyle_markers(lowered: str, signals: DemographicSignals) -> None:
    if contains_any(lowered, ("work remotely", "100% remote")):
        signals.lifestyle.append("Remote work")
        signals.motivations.append("Work-life balance")
    if contains_any(lowered, ("co-working", "home office")):
        signals.lifestyle.append("Flexible workspace needs")
        signals.interests.append("Professional networking")
    if contains_any(lowered, ("early adopters of technology", "keyless entry", "ev charging")):
        signals.lifestyle.append("Tech early adopters")
        signals.interests.append("Smart technology")
    if "electric vehicles" in lowered or EV_RE.search(lowered):
        signals.lifestyle.append("Environmentally conscious")
        signals.interests.append("Sustainable living")
    if contains_any(lowered, ("gym", "yoga", "fitness")):
        signals.lifestyle.append("Health and wellness focused")
        signals.interests.append("Fitness and wellness")
    if contains_any(lowered, ("asian community", "convoy district")):
        signals.interests.append("Cultural diversity and authentic cuisine")
        signals.motivations.append("Cultural connection")
    if contains_any(lowered, ("married", "couple")):
        signals.lifestyle.append("Couples/Partnership living")
    if "single" in lowered:
        signals.lifestyle.append("Single professional")
        signals.motivations.append("Social connection opportunities")
    if contains_any(lowered, ("parents visit", "guest suite")):
        signals.lifestyle.append("Multi-generational considerations")
        signals.motivations.append("Flexible space for family")

    if "lifemode" in lowered:
        if contains_any(lowered, ("metro renters", "emerald city")):
            signals.income_levels.append("High income (Urban professionals)")
            signals.lifestyle.append("Urban metro lifestyle")
        if "enterprising professionals" in lowered:
            signals.income_levels.append("Very high income (Executives)")
            signals.lifestyle.append("Executive/Entrepreneurial")
        if "young & restless" in lowered:
            signals.age_ranges.append("25-35 (Young professionals)")
            signals.lifestyle.append("Career building phase")


def _extract_percentage_markers(text: str, signals: DemographicSignals) -> None:
    for match in PERCENTAGE_RE.finditer(text):
        lowered = match.group(0).lower()
        if contains_any(lowered, ("white", "asian", "hispanic")):
            signals.communication_preferences.append("Culturally diverse community appeal")
        if contains_any(lowered, ("graduate", "bachelor")):
            signals.lifestyle.append("Highly educated")
            signals.motivations.append("Intellectual community")


def extract_demographic_signals(text: str) -> DemographicSignals:
    """Collect every demographic label a fragment supports."""
    signals = DemographicSignals()
    lowered = text.lower()

    extract_persona_signals(text, signals)
    extract_mindset_signals(text, signals)
    _extract_lifestyle_markers(lowered, signals)
    _extract_percentage_markers(text, signals)

    signals.lifestyle.extend(match_labels(lowered, LIFESTYLE_RULES))
    signals.income_levels.extend(match_labels(lowered, INCOME_RULES))
    signals.motivations.extend(match_labels(lowered, MOTIVATION_RULES))
    signals.pain_points.extend(match_labels(lowered, PAIN_POINT_RULES))
    return signals


# ---------------------------------------------------------------------------
# Property and location
# ---------------------------------------------------------------------------

AMENITY_RULES: tuple[MarkerRule, ...] = (
    (("pool", "swimming"), "Pool"),
    (("gym", "fitness"), "Fitness center"),
    (("parking", "garage"), "Parking"),
    (("laundry", "washer"), "In-unit laundry"),
    (("balcony", "patio"), "Private outdoor space"),
    (("dishwasher",), "Dishwasher"),
    (("air conditioning", "a/c"), "Air conditioning"),
    (("hardwood", "wood floors"), "Hardwood floors"),
)

DIFFERENTIATOR_RULES: tuple[MarkerRule, ...] = (
    (("luxury", "premium"), "Luxury finishes"),
    (("new", "newly built"), "New construction"),
    (("pet-friendly", "pets allowed"), "Pet-friendly"),
    (("smart home", "technology"), "Smart home features"),
)

LOCATION_ADVANTAGE_RULES: tuple[MarkerRule, ...] = (
    (("downtown", "city center"), "Downtown location"),
    (("transit", "subway", "bus"), "Public transportation"),
    (("restaurant", "dining"), "Dining options"),
    (("shopping", "retail"), "Shopping nearby"),
    (("park", "green space"), "Parks and recreation"),
    (("school", "university"), "Education access"),
    (("hospital", "medical"), "Healthcare access"),
    (("employer", "business district"), "Employment centers"),
)


def extract_amenities(text: str) -> list[str]:
    return match_labels(text, AMENITY_RULES)


def extract_differentiators(text: str) -> list[str]:
    return match_labels(text, DIFFERENTIATOR_RULES)


def extract_location_advantages(text: str) -> list[str]:
    return match_labels(text, LOCATION_ADVANTAGE_RULES)


# ---------------------------------------------------------------------------
# Competitor intelligence
# ---------------------------------------------------------------------------

ADVANTAGE_RULES: tuple[MarkerRule, ...] = (
    (("amenities",), "Superior amenities"),
    (("location",), "Better location"),
    (("service",), "Better service"),
    (("value",), "Better value"),
)

DIFFERENTIATION_RULES: tuple[MarkerRule, ...] = (
    (("only", "exclusive"), "Exclusive features"),
    (("first", "innovative"), "Innovation leader"),
    (("largest", "biggest"), "Market leader"),
)

PRICING_ADVANTAGE_RULES: tuple[MarkerRule, ...] = (
    (("affordable", "value"), "Competitive pricing"),
    (("no fee", "free"), "No additional fees"),
    (("incentive", "special offer"), "Special incentives"),
)


def extract_competitive_advantages(text: str) -> list[str]:
    """Advantages only count when the text makes a comparative claim."""
    lowered = text.lower()
    if not contains_any(lowered, ("better", "superior")):
        return []
    return match_labels(lowered, ADVANTAGE_RULES)


def extract_differentiation_points(text: str) -> list[str]:
    return match_labels(text, DIFFERENTIATION_RULES)


def extract_pricing_advantages(text: str) -> list[str]:
    return match_labels(text, PRICING_ADVANTAGE_RULES)


def derive_market_position(
    competitive_advantages: Sequence[str],
    differentiation_points: Sequence[str],
    pricing_advantages: Sequence[str],
) -> str:
    if "Superior amenities" in competitive_advantages or "Exclusive features" in differentiation_points:
        return "Premium"
    if "Competitive pricing" in pricing_advantages:
        return "Value"
    return "Balanced"


# ---------------------------------------------------------------------------
# Campaign details
# ---------------------------------------------------------------------------

STATE_CODES: dict[str, str] = {
    "california": "CA",
    "texas": "TX",
    "florida": "FL",
    "new york": "NY",
    "nevada": "NV",
    "arizona": "AZ",
    "colorado": "CO",
    "washington": "WA",
    "oregon": "OR",
}

STREET_SUFFIXES = frozenset(
    {
        "street", "st", "avenue", "ave", "road", "rd", "boulevard", "blvd",
        "drive", "dr", "lane", "ln", "way", "court", "ct", "place", "pl",
        "parkway", "pkwy", "circle", "cir", "terrace", "highway", "hwy",
    }
)

ADDRESS_TAIL_RE = re.compile(r"^\s*([A-Za-z][A-Za-z\s]*?)(?:\s+(\d{5}(?:-\d{4})?))?\s*$")
ADDRESS_UNIT_RE = re.compile(r"\b(?:suite|unit|apt|apartment)\s*\w+|#\s*\w+", re.IGNORECASE)
ADDRESS_IN_RE = re.compile(r"\s(?:in|at)\s+(.+)$", re.IGNORECASE)

CITY_RE = re.compile(
    r"(?:in|located in|downtown|near)\s+([A-Za-z\s]+?)"
    r"(?:,|\s+(?:california|ca|texas|tx|florida|fl|new york|ny)\b)",
    re.IGNORECASE,
)
PROPERTY_CITY_RE = re.compile(
    r"(?:property|building|community).*?(?:in|located in|at)\s+([A-Za-z\s]+?)"
    r"(?:,|\s+(?:california|ca|texas|tx)\b)",
    re.IGNORECASE,
)
STATE_NAME_RE = re.compile(
    r"\b(?:california|texas|florida|nevada|arizona|colorado|washington|oregon)\b",
    re.IGNORECASE,
)
STATE_ABBREVIATION_RE = re.compile(r"\b(?:CA|TX|FL|NY|NV|AZ|CO|WA|OR)\b(?=\s|,|$)")
ZIP_RE = re.compile(r"\b(\d{5})\b")
COUNTY_RE = re.compile(r"((?:[A-Z][a-z]+\s){1,3})County\b")

CITY_INDICATORS: tuple[tuple[tuple[str, ...], str, str], ...] = (
    (("san diego", "sd "), "San Diego", "CA"),
    (("los angeles", "la "), "Los Angeles", "CA"),
    (("san francisco", "sf "), "San Francisco", "CA"),
    (("miami",), "Miami", "FL"),
    (("austin",), "Austin", "TX"),
)

PRICE_FROM_RE = re.compile(
    r"(?:starting|from|rent|price).*?\$([0-9,]+).*?(?:month|monthly|/mo)",
    re.IGNORECASE,
)
PRICE_RANGE_RE = re.compile(r"\$([0-9,]+)\s*[-–]\s*\$([0-9,]+)")
SQFT_RE = re.compile(r"(\d{3,4})\s*(?:sq\.?\s*ft\.?|square feet|sqft)", re.IGNORECASE)
MONTHS_FREE_RE = re.compile(r"(\d+)\s*months?\s*free", re.IGNORECASE)

PROXIMITY_RE = re.compile(
    r"(?:near|close to|walking distance to|minutes from)\s+([A-Za-z\s&]+?)(?:\.|,|;|\n|$)",
    re.IGNORECASE,
)
LANDMARK_KEYWORDS = (
    "university", "college", "mall", "airport", "beach",
    "park", "downtown", "station", "hospital", "school",
)
LANDMARK_PATTERNS = tuple(
    re.compile(rf"([A-Za-z\s]+{keyword}[A-Za-z\s]*)", re.IGNORECASE)
    for keyword in LANDMARK_KEYWORDS
)

_MONTHS = (
    "january|february|march|april|may|june|july|august|"
    "september|october|november|december"
)
MOVE_IN_DATE_PATTERNS = (
    re.compile(
        r"(?:available|move-in\s+ready|lease\s+ready|ready\s+for\s+occupancy)\s+"
        rf"(?:in\s+)?({_MONTHS})\s+(\d{{4}})",
        re.IGNORECASE,
    ),
    re.compile(
        r"(?:available|move-in\s+ready|lease\s+ready)\s+(?:in\s+)?(\d{1,2})/(\d{4})",
        re.IGNORECASE,
    ),
    re.compile(
        rf"(?:coming\s+soon|opening|grand\s+opening)\s+(?:in\s+)?({_MONTHS})\s+(\d{{4}})",
        re.IGNORECASE,
    ),
)

TARGET_DEMOGRAPHIC_RULES: tuple[MarkerRule, ...] = (
    (("young professional",), "Young professionals"),
    (("family", "families"), "Families"),
    (("student",), "Students"),
    (("tech", "technology"), "Tech workers"),
    (("military",), "Military personnel"),
    (("retiree", "senior"), "Retirees"),
    (("couple",), "Couples"),
    (("single",), "Singles"),
)

UNIT_TYPE_RULES: tuple[MarkerRule, ...] = (
    (("townhome", "townhouse"), "Townhome"),
    (("loft",), "Loft"),
    (("penthouse",), "Penthouse"),
)


@dataclass(frozen=True, slots=True)
class AddressParts:
    city: str
    state: str
    zip_code: str | None = None


def normalize_state(value: str) -> str:
    """Two-letter code for a state name or abbreviation."""
    cleaned = " ".join(value.split()).lower()
    if cleaned in STATE_CODES:
        return STATE_CODES[cleaned]
    return cleaned.upper()


def _city_from_street_part(street_part: str) -> str:
    """Best-effort city from text preceding the ``, ST`` tail."""
    if "," in street_part:
        return street_part.rsplit(",", 1)[1].strip()

    in_match = ADDRESS_IN_RE.search(street_part)
    if in_match:
        return in_match.group(1).strip()

    without_unit = ADDRESS_UNIT_RE.sub(" ", street_part)
    words = without_unit.split()
    if not words:
        return ""
    if not any(char.isdigit() for char in without_unit):
        return " ".join(words)

    last_suffix = -1
    for position, word in enumerate(words):
        if word.lower().strip(".") in STREET_SUFFIXES or any(ch.isdigit() for ch in word):
            last_suffix = position
    return " ".join(words[last_suffix + 1 :])


def parse_address(address: str) -> AddressParts | None:
    """Parse ``"<street> <city>, <state> <zip>"`` style addresses."""
    if not address or "," not in address:
        return None

    street_part, tail = address.rsplit(",", 1)
    tail_match = ADDRESS_TAIL_RE.match(tail)
    if not tail_match:
        return None

    city = _city_from_street_part(street_part.strip())
    state = normalize_state(tail_match.group(1))
    if not city or not state:
        return None
    return AddressParts(city=city, state=state, zip_code=tail_match.group(2))


def extract_city(text: str) -> str | None:
    match = CITY_RE.search(text) or PROPERTY_CITY_RE.search(text)
    if not match:
        return None
    city = " ".join(match.group(1).split())
    return city.title() if city else None


def extract_state(text: str) -> str | None:
    match = STATE_NAME_RE.search(text) or STATE_ABBREVIATION_RE.search(text)
    if not match:
        return None
    return normalize_state(match.group(0))


def extract_zip_code(text: str) -> str | None:
    match = ZIP_RE.search(text)
    return match.group(1) if match else None


def extract_county(text: str) -> str | None:
    match = COUNTY_RE.search(text)
    if not match:
        return None
    return f"{match.group(1).strip()} County"


def infer_city_state(text: str) -> tuple[str, str] | None:
    lowered = text.lower()
    for markers, city, state in CITY_INDICATORS:
        if contains_any(lowered, markers):
            return city, state
    return None


def extract_price_range(text: str) -> str | None:
    from_match = PRICE_FROM_RE.search(text)
    if from_match:
        return f"Starting from ${from_match.group(1).replace(',', '')}/month"
    range_match = PRICE_RANGE_RE.search(text)
    if range_match:
        low = range_match.group(1).replace(",", "")
        high = range_match.group(2).replace(",", "")
        return f"${low} - ${high}/month"
    return None


def extract_square_footage(text: str) -> str | None:
    match = SQFT_RE.search(text)
    return match.group(1) if match else None


def extract_unit_type(text: str) -> str | None:
    labels = match_labels(text, UNIT_TYPE_RULES)
    return labels[0] if labels else None


def extract_proximity_targets(text: str) -> list[str]:
    targets: list[str] = []
    for match in PROXIMITY_RE.finditer(text):
        target = match.group(1).strip()
        if 2 < len(target) < 50:
            targets.append(target)
    for pattern in LANDMARK_PATTERNS:
        for match in pattern.finditer(text):
            cleaned = match.group(1).strip()
            if 5 < len(cleaned) < 40:
                targets.append(cleaned)
    return targets


def extract_special_offer(text: str) -> str | None:
    lowered = text.lower()
    if contains_any(lowered, ("month free", "months free")):
        match = MONTHS_FREE_RE.search(lowered)
        if match:
            months = match.group(1)
            return f"{months} month{'' if months == '1' else 's'} free rent"
    if "deposit" in lowered and "waived" in lowered:
        return "Waived security deposit"
    if contains_any(lowered, ("move-in special", "move in special")):
        return "Move-in specials available"
    return None


def extract_move_in_date(text: str) -> str | None:
    lowered = text.lower()
    for pattern in MOVE_IN_DATE_PATTERNS:
        match = pattern.search(lowered)
        if match:
            found = match.group(0).strip()
            return found[:1].upper() + found[1:]
    if contains_any(lowered, ("now leasing", "immediate move-in", "available now")):
        return "Available Now"
    if contains_any(lowered, ("pre-leasing", "accepting applications")):
        return "Pre-Leasing Now"
    return None


def extract_target_demographics(text: str) -> list[str]:
    return match_labels(text, TARGET_DEMOGRAPHIC_RULES)
