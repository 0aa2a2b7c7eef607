"""Unit tests for headline/description length validation and repair."""

from __future__ import annotations

import pytest

from campaign_copy.services.ad_copy.constraints import (
    DESCRIPTION_MAX,
    DESCRIPTION_MIN,
    ELLIPSIS,
    HEADLINE_MAX,
    HEADLINE_MIN,
    expand_headline,
    repair_description,
    repair_headline,
    shorten_description,
    shorten_headline,
    validate_and_repair,
)


def test_short_headline_is_expanded_with_contextual_modifiers() -> None:
    result = repair_headline("Downtown Apt")

    assert result.text == "Luxury Downtown Apt for Rent"
    assert HEADLINE_MIN <= result.length <= HEADLINE_MAX
    assert result.action == "expanded"
    assert result.valid is False
    assert result.within_bounds is True


def test_long_headline_abbreviates_and_drops_fillers_before_truncating() -> None:
    result = repair_headline("The Heights Community Luxury Apartments Available")

    assert result.text == "The Heights Luxury Apts"
    assert result.action == "shortened"
    assert result.within_bounds is True


def test_short_description_is_expanded_within_bounds() -> None:
    result = repair_description("Great amenities!")

    assert result.text == "Great amenities! Modern amenities throughout. Premium features inside."
    assert DESCRIPTION_MIN <= result.length <= DESCRIPTION_MAX


@pytest.mark.parametrize(
    "headline",
    [
        "Luxury Apartments Downtown",
        "Schedule a Tour Today!",
        "x" * HEADLINE_MIN,
        "y" * HEADLINE_MAX,
    ],
)
def test_in_bounds_headlines_are_unchanged(headline: str) -> None:
    result = repair_headline(headline)

    assert result.text == headline
    assert result.valid is True
    assert result.action == "unchanged"


@pytest.mark.parametrize(
    "description",
    [
        "Spacious homes with modern finishes near downtown. Schedule a tour today!",
        "d" * DESCRIPTION_MIN,
        "e" * DESCRIPTION_MAX,
    ],
)
def test_in_bounds_descriptions_are_unchanged(description: str) -> None:
    assert repair_description(description).text == description


@pytest.mark.parametrize(
    "headline",
    [
        "",
        "Pool",
        "Studio",
        "Near Balboa Park",
        "1BR Units",
        "Tour Our Modern Apartments and Homes in the Heart of Downtown San Diego",
        "Supercalifragilisticexpialidocious Living",
        "Z" * 80,
    ],
)
def test_headline_repair_converges(headline: str) -> None:
    result = repair_headline(headline)

    assert len(result.text) <= HEADLINE_MAX
    if result.within_bounds:
        assert result.warning is None
        assert repair_headline(result.text).text == result.text
    else:
        assert result.warning == "below_minimum"


@pytest.mark.parametrize(
    "description",
    [
        "",
        "Tour today",
        "W" * 120,
        "in order to " * 12,
        (
            "Our truly stunning community is conveniently located within walking distance of "
            "a wide variety of shops and dining. Schedule a tour at this time!"
        ),
    ],
)
def test_description_repair_converges(description: str) -> None:
    result = repair_description(description)

    assert len(result.text) <= DESCRIPTION_MAX
    if result.within_bounds:
        assert result.warning is None
        assert repair_description(result.text).text == result.text
    else:
        assert result.warning == "below_minimum"


def test_unbreakable_headline_is_hard_truncated_with_ellipsis() -> None:
    result = repair_headline("Z" * 45)

    assert result.text == "Z" * (HEADLINE_MAX - len(ELLIPSIS)) + ELLIPSIS
    assert len(result.text) == HEADLINE_MAX


def test_expand_never_exceeds_maximum() -> None:
    expanded = expand_headline("Studio", minimum=20, maximum=12)

    assert expanded == "Studio Now"
    assert len(expanded) <= 12


def test_shorten_headline_truncates_at_word_boundary() -> None:
    shortened = shorten_headline("Modern Lofts Overlooking Harbor Island Marina Views")

    assert shortened == "Modern Lofts Overlooking"
    assert len(shortened) <= HEADLINE_MAX


def test_shorten_description_replaces_verbose_phrases_first() -> None:
    text = (
        "Our community is conveniently located within walking distance of shops, "
        "dining and parks in order to simplify life."
    )

    shortened = shorten_description(text)

    assert shortened == "Our community is located steps from shops, dining and parks to simplify life."
    assert len(shortened) <= DESCRIPTION_MAX


def test_shorten_description_prefers_whole_sentences() -> None:
    text = (
        "Spacious one and two bedroom homes with modern finishes and city views. "
        "Walk to cafes. Tour today and find the perfect place to call home in the neighborhood."
    )

    shortened = shorten_description(text)

    assert DESCRIPTION_MIN <= len(shortened) <= DESCRIPTION_MAX
    assert shortened.endswith(".")


def test_validate_and_repair_keeps_order_and_reports_violations() -> None:
    headlines = ["Downtown Apt", "Luxury Apartments Downtown"]
    descriptions = ["Great amenities!"]

    report = validate_and_repair(headlines, descriptions)

    assert report.is_valid is False
    assert report.violations == [
        'Headline 1: "Downtown Apt" (12 chars) is under 20 characters',
        'Description 1: "Great amenities!" (16 chars) is under 65 characters',
    ]
    assert report.repaired_headlines[1] == "Luxury Apartments Downtown"
    assert [index for index, _ in report.invalid_headlines] == [0]
    assert report.to_dict()["headlines"][0]["original"] == "Downtown Apt"


def test_validate_and_repair_with_valid_copy() -> None:
    report = validate_and_repair(["Luxury Apartments Downtown"], ["d" * 70])

    assert report.is_valid is True
    assert report.invalid_headlines == []
