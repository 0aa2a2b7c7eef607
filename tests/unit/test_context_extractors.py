"""Unit tests for the pure text extractors."""

from __future__ import annotations

import pytest

from campaign_copy.services.context import extractors


def test_dedupe_normalizes_whitespace_and_keeps_first_occurrence() -> None:
    assert extractors.dedupe(["Pool", " Pool ", "Gym", "", "Fitness  center", "Fitness center"]) == [
        "Pool",
        "Gym",
        "Fitness center",
    ]


def test_brand_voice_markers_map_to_labels() -> None:
    guidelines = "Professional yet warm, with a modern and approachable feel. Premium service."

    assert extractors.extract_tone(guidelines) == ["Professional", "Luxury", "Warm"]
    assert extractors.extract_personality(guidelines) == ["Modern", "Approachable"]
    assert extractors.extract_brand_values(guidelines) == ["Luxury", "Service Excellence"]


def test_key_messages_and_avoid_words_come_from_guideline_sentences() -> None:
    guidelines = (
        'Always emphasize our rooftop views. Keep it short! Avoid "cheap" and never say "deal".'
    )

    assert extractors.extract_key_messages(guidelines) == ["Always emphasize our rooftop views"]
    assert extractors.extract_avoid_words(guidelines) == ["cheap", "deal"]


@pytest.mark.parametrize(
    ("age", "expected"),
    [
        (18, "18-25 (Gen Z)"),
        (29, "26-35 (Millennials)"),
        (45, "36-45 (Older Millennials)"),
        (55, "46-55 (Gen X)"),
        (60, None),
    ],
)
def test_age_bracket_boundaries(age: int, expected: str | None) -> None:
    assert extractors.age_bracket(age) == expected


def test_persona_mention_maps_age_and_job_title() -> None:
    signals = extractors.extract_demographic_signals(
        "Sarah, 29 years old, software engineer who loves the gym."
    )

    assert "26-35 (Millennials)" in signals.age_ranges
    assert "High income (Tech professionals)" in signals.income_levels
    assert "Health and wellness focused" in signals.lifestyle
    assert "Fitness and wellness" in signals.interests


def test_mindset_markers_add_motivations() -> None:
    signals = extractors.extract_demographic_signals(
        "Mindset: ambitious and values convenience above all."
    )

    assert "Career advancement" in signals.motivations
    assert "Convenience and efficiency" in signals.motivations
    assert "Time constraints" in signals.pain_points


def test_ev_marker_requires_a_whole_word() -> None:
    unrelated = extractors.extract_demographic_signals("Residents prevent clutter with storage.")
    ev = extractors.extract_demographic_signals("Residents drive EVs and want EV charging.")

    assert "Environmentally conscious" not in unrelated.lifestyle
    assert "Environmentally conscious" in ev.lifestyle
    assert "Tech early adopters" in ev.lifestyle


def test_audience_ages_from_intake_description() -> None:
    assert extractors.extract_audience_ages("Young professionals and students") == [
        "25-35",
        "25-40",
        "18-25",
    ]


def test_property_and_location_rules() -> None:
    assert extractors.extract_amenities("Swimming pool, fitness room and covered garage") == [
        "Pool",
        "Fitness center",
        "Parking",
    ]
    assert extractors.extract_location_advantages("Steps from the bus and great dining") == [
        "Public transportation",
        "Dining options",
    ]


def test_competitive_advantages_need_a_comparative_claim() -> None:
    assert extractors.extract_competitive_advantages("Amenities and location") == []
    assert extractors.extract_competitive_advantages("Better amenities and location than others") == [
        "Superior amenities",
        "Better location",
    ]


@pytest.mark.parametrize(
    ("advantages", "differentiation", "pricing", "expected"),
    [
        (["Superior amenities"], [], ["Competitive pricing"], "Premium"),
        ([], ["Exclusive features"], [], "Premium"),
        ([], [], ["Competitive pricing"], "Value"),
        ([], [], [], "Balanced"),
    ],
)
def test_derive_market_position(
    advantages: list[str],
    differentiation: list[str],
    pricing: list[str],
    expected: str,
) -> None:
    assert extractors.derive_market_position(advantages, differentiation, pricing) == expected


def test_parse_address_with_city_after_street_suffix() -> None:
    parts = extractors.parse_address("3585 Aero Court San Diego, CA 92123")

    assert parts == extractors.AddressParts(city="San Diego", state="CA", zip_code="92123")


def test_parse_address_with_comma_separated_city_and_state_name() -> None:
    parts = extractors.parse_address("123 Main St, Austin, Texas 78701")

    assert parts == extractors.AddressParts(city="Austin", state="TX", zip_code="78701")


def test_parse_address_without_comma_is_unparseable() -> None:
    assert extractors.parse_address("123 Main Street") is None
    assert extractors.parse_address("") is None


def test_normalize_state() -> None:
    assert extractors.normalize_state("california") == "CA"
    assert extractors.normalize_state(" New  York ") == "NY"
    assert extractors.normalize_state("ca") == "CA"


def test_location_extractors() -> None:
    text = "Luxury apartments located in San Diego, CA 92108 in San Diego County."

    assert extractors.extract_city(text) == "San Diego"
    assert extractors.extract_state(text) == "CA"
    assert extractors.extract_zip_code(text) == "92108"
    assert extractors.extract_county(text) == "San Diego County"


def test_state_abbreviations_are_case_sensitive() -> None:
    assert extractors.extract_state("a relaxed ca lifestyle") is None
    assert extractors.extract_state("Homes across Texas") == "TX"


def test_infer_city_state_from_indicators() -> None:
    assert extractors.infer_city_state("The best of Austin living") == ("Austin", "TX")
    assert extractors.infer_city_state("Somewhere else entirely") is None


def test_price_extraction() -> None:
    assert extractors.extract_price_range("Rent starting from $2,450 per month") == (
        "Starting from $2450/month"
    )
    assert extractors.extract_price_range("Units range $1,800 - $3,200") == "$1800 - $3200/month"
    assert extractors.extract_price_range("Call for details") is None


def test_unit_extractors() -> None:
    assert extractors.extract_square_footage("Spacious 850 sq ft layout") == "850"
    assert extractors.extract_unit_type("Two-story townhome with garage") == "Townhome"
    assert extractors.extract_unit_type("Classic floor plan") is None


def test_proximity_targets_include_named_landmarks() -> None:
    targets = extractors.extract_proximity_targets("Walking distance to Balboa Park.")

    assert "Balboa Park" in targets


def test_special_offer_extraction() -> None:
    assert extractors.extract_special_offer("Get 2 months free on select homes") == "2 months free rent"
    assert extractors.extract_special_offer("Enjoy 1 month free") == "1 month free rent"
    assert extractors.extract_special_offer("Security deposit waived this week") == (
        "Waived security deposit"
    )
    assert extractors.extract_special_offer("Nothing special") is None


def test_move_in_date_extraction() -> None:
    assert extractors.extract_move_in_date("Homes available in March 2026") == "Available in march 2026"
    assert extractors.extract_move_in_date("Now leasing!") == "Available Now"
    assert extractors.extract_move_in_date("We are accepting applications") == "Pre-Leasing Now"
    assert extractors.extract_move_in_date("Great views") is None


def test_target_demographics() -> None:
    assert extractors.extract_target_demographics("Ideal for young professionals and couples") == [
        "Young professionals",
        "Couples",
    ]
