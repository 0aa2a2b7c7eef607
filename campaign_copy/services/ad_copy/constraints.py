"""Deterministic length validation and repair for ad headlines and descriptions.

Headlines must be 20-30 characters and descriptions 65-90 characters, every
character counted. Strings already within bounds are returned unchanged.
Repairs never exceed the maximum; when expansion cannot reach the minimum
the best achievable text is returned with ``warning="below_minimum"``.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any, Literal

HEADLINE_MIN = 20
HEADLINE_MAX = 30
DESCRIPTION_MIN = 65
DESCRIPTION_MAX = 90

ELLIPSIS = "..."
BELOW_MINIMUM = "below_minimum"

CopyKind = Literal["headline", "description"]
RepairAction = Literal["unchanged", "expanded", "shortened"]

# (pattern, candidate modifiers, position)
HEADLINE_MODIFIERS: tuple[tuple[re.Pattern[str], tuple[str, ...], str], ...] = (
    (re.compile(r"\b(?:apts?|apartments?)\b", re.IGNORECASE), ("Luxury", "Modern", "Spacious"), "prefix"),
    (re.compile(r"\b(?:apts?|apartments?)\b", re.IGNORECASE), ("for Rent",), "suffix"),
    (re.compile(r"\b(?:studios?|\d\s*br|\d\s*bed(?:room)?s?)\b", re.IGNORECASE), ("Spacious", "Bright", "Modern"), "prefix"),
    (re.compile(r"\b(?:homes?|residences?|living)\b", re.IGNORECASE), ("Luxury", "Modern"), "prefix"),
    (re.compile(r"^(?:near|close to|minutes from|steps from|walk to)\b", re.IGNORECASE), ("Apartments", "Homes"), "prefix"),
    (re.compile(r"\b(?:pool|gym|fitness|amenities|rooftop)\b", re.IGNORECASE), ("Resort-Style", "Premium"), "prefix"),
    (re.compile(r"\b(?:downtown|uptown|midtown|city|neighborhood)\b", re.IGNORECASE), ("Apartments", "Living"), "suffix"),
)
HEADLINE_SUFFIXES = ("Available Now", "Tour Today", "Move-In Ready", "Now Leasing", "Apply Today")
HEADLINE_IMPACT_WORDS = ("Now", "Here", "Today", "Ready")

HEADLINE_ABBREVIATIONS: tuple[tuple[str, str], ...] = (
    (" Apartments", " Apts"),
    (" Apartment", " Apt"),
    (" Avenue", " Ave"),
    (" Street", " St"),
    (" Boulevard", " Blvd"),
    (" Bedrooms", " Beds"),
    (" Bedroom", " Bed"),
    (" Bathrooms", " Baths"),
    (" Bathroom", " Bath"),
    (" Square Feet", " Sq Ft"),
    (" and ", " & "),
)
HEADLINE_FILLERS = (
    " Available",
    " Beautiful",
    " Community",
    " Amazing",
    " Stunning",
    " Today",
    " Daily",
    " Here",
    " Now",
)
LOW_PRIORITY_WORDS = frozenset({"the", "a", "an", "of", "for", "with", "in", "at", "to", "your", "our", "&"})
MIN_WORDS_AFTER_STOP_WORD_REMOVAL = 3

DESCRIPTION_CLAUSES = (
    " with modern amenities",
    " and premium features",
    " in a prime location",
    " with excellent service",
    " and community feel",
    " available now",
)
DESCRIPTION_SENTENCES = (
    " Modern amenities throughout.",
    " Premium features inside.",
    " Prime location near it all.",
    " Excellent resident service.",
    " Strong community feel.",
    " Available now.",
)
DESCRIPTION_CLOSERS = (" Tour today!", " Apply now!", " Call today!", " Learn more.")

VERBOSE_PHRASES: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"\bin order to\b", re.IGNORECASE), "to"),
    (re.compile(r"\ba wide variety of\b", re.IGNORECASE), "many"),
    (re.compile(r"\ba variety of\b", re.IGNORECASE), "many"),
    (re.compile(r"\bwithin walking distance (?:of|to)\b", re.IGNORECASE), "steps from"),
    (re.compile(r"\bin close proximity to\b", re.IGNORECASE), "near"),
    (re.compile(r"\bconveniently located\b", re.IGNORECASE), "located"),
    (re.compile(r"\blocated (in|near)\b", re.IGNORECASE), r"\1"),
    (re.compile(r"\bat this time\b", re.IGNORECASE), "now"),
    (re.compile(r"\bschedule a tour\b", re.IGNORECASE), "tour"),
    (re.compile(r" and "), " & "),
    (re.compile(r" with "), " w/ "),
)
REDUNDANT_ADJECTIVES = re.compile(
    r"\b(?:truly|very|really|absolutely|beautiful|stunning|amazing|incredible|gorgeous)\s+",
    re.IGNORECASE,
)
SENTENCE_BOUNDARY_RE = re.compile(r"(?<=[.!?])\s+")
SENTENCE_END_RE = re.compile(r"[.!?]$")
TRAILING_CONNECTORS = " ,;:-&|/"


@dataclass(slots=True)
class ConstraintResult:
    """Outcome of validating and repairing one string."""

    original: str
    valid: bool
    text: str
    length: int
    kind: CopyKind
    action: RepairAction
    within_bounds: bool
    warning: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "original": self.original,
            "valid": self.valid,
            "text": self.text,
            "length": self.length,
            "kind": self.kind,
            "action": self.action,
            "within_bounds": self.within_bounds,
            "warning": self.warning,
        }


@dataclass(slots=True)
class CopyValidationReport:
    """Per-string results plus human-readable violations, in input order."""

    headlines: list[ConstraintResult] = field(default_factory=list)
    descriptions: list[ConstraintResult] = field(default_factory=list)
    violations: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.violations

    @property
    def repaired_headlines(self) -> list[str]:
        return [result.text for result in self.headlines]

    @property
    def repaired_descriptions(self) -> list[str]:
        return [result.text for result in self.descriptions]

    @property
    def invalid_headlines(self) -> list[tuple[int, ConstraintResult]]:
        return [(index, result) for index, result in enumerate(self.headlines) if not result.valid]

    def to_dict(self) -> dict[str, Any]:
        return {
            "is_valid": self.is_valid,
            "headlines": [result.to_dict() for result in self.headlines],
            "descriptions": [result.to_dict() for result in self.descriptions],
            "violations": list(self.violations),
        }


def _normalize_spaces(text: str) -> str:
    return " ".join(text.split())


def _has_words(text: str, phrase: str) -> bool:
    return re.search(rf"(?<!\w){re.escape(phrase)}(?!\w)", text, re.IGNORECASE) is not None


def _attach(text: str, addition: str, position: str) -> str:
    if not text:
        return addition
    return f"{addition} {text}" if position == "prefix" else f"{text} {addition}"


def _truncate_to_words(text: str, maximum: int) -> str:
    """Longest leading run of whole words within ``maximum``; ellipsis if none fit."""
    kept: list[str] = []
    for word in text.split():
        candidate = " ".join([*kept, word])
        if len(candidate) > maximum:
            break
        kept.append(word)
    if not kept:
        return text[: maximum - len(ELLIPSIS)] + ELLIPSIS
    return " ".join(kept).rstrip(TRAILING_CONNECTORS) or " ".join(kept)


# ---------------------------------------------------------------------------
# Headlines
# ---------------------------------------------------------------------------


def expand_headline(text: str, minimum: int = HEADLINE_MIN, maximum: int = HEADLINE_MAX) -> str:
    expanded = _normalize_spaces(text)

    for pattern, candidates, position in HEADLINE_MODIFIERS:
        if len(expanded) >= minimum:
            break
        if not pattern.search(expanded):
            continue
        for candidate in candidates:
            if _has_words(expanded, candidate):
                continue
            attempt = _attach(expanded, candidate, position)
            if len(attempt) <= maximum:
                expanded = attempt
                break

    if len(expanded) < minimum:
        for suffix in HEADLINE_SUFFIXES:
            if _has_words(expanded, suffix):
                continue
            attempt = _attach(expanded, suffix, "suffix")
            if len(attempt) <= maximum:
                expanded = attempt
                break

    for word in HEADLINE_IMPACT_WORDS:
        if len(expanded) >= minimum:
            break
        if _has_words(expanded, word):
            continue
        attempt = _attach(expanded, word, "suffix")
        if len(attempt) <= maximum:
            expanded = attempt

    return expanded


def _apply_table(text: str, table: Sequence[tuple[str, str]], maximum: int) -> str:
    for source, replacement in table:
        if len(text) <= maximum:
            break
        text = text.replace(source, replacement)
    return text


def _remove_fillers(text: str, fillers: Sequence[str], maximum: int) -> str:
    for filler in fillers:
        if len(text) <= maximum:
            break
        text = re.sub(rf"{re.escape(filler)}\b", "", text)
    return text


def _remove_stop_words(text: str, maximum: int) -> str:
    words = text.split()
    position = 0
    while len(" ".join(words)) > maximum and position < len(words):
        if words[position].lower() in LOW_PRIORITY_WORDS and len(words) - 1 > MIN_WORDS_AFTER_STOP_WORD_REMOVAL:
            del words[position]
            continue
        position += 1
    return " ".join(words)


def shorten_headline(text: str, maximum: int = HEADLINE_MAX) -> str:
    shortened = _apply_table(text, HEADLINE_ABBREVIATIONS, maximum)
    shortened = _normalize_spaces(_remove_fillers(shortened, HEADLINE_FILLERS, maximum))
    if len(shortened) > maximum:
        shortened = _remove_stop_words(shortened, maximum)
    if len(shortened) > maximum:
        shortened = _truncate_to_words(shortened, maximum)
    return shortened


# ---------------------------------------------------------------------------
# Descriptions
# ---------------------------------------------------------------------------


def expand_description(
    text: str,
    minimum: int = DESCRIPTION_MIN,
    maximum: int = DESCRIPTION_MAX,
) -> str:
    expanded = text.strip()

    for clause, sentence in zip(DESCRIPTION_CLAUSES, DESCRIPTION_SENTENCES):
        if len(expanded) >= minimum:
            break
        addition = sentence if not expanded or SENTENCE_END_RE.search(expanded) else clause
        attempt = (expanded + addition).strip()
        if len(attempt) <= maximum:
            expanded = attempt

    for closer in DESCRIPTION_CLOSERS:
        if len(expanded) >= minimum:
            break
        if not SENTENCE_END_RE.search(expanded):
            closer = "." + closer
        attempt = (expanded + closer).strip()
        if len(attempt) <= maximum:
            expanded = attempt

    return expanded


def _truncate_to_sentences(text: str, minimum: int, maximum: int) -> str | None:
    kept = ""
    for sentence in SENTENCE_BOUNDARY_RE.split(text):
        candidate = f"{kept} {sentence}".strip()
        if len(candidate) > maximum:
            break
        kept = candidate
    if minimum <= len(kept) <= maximum:
        return kept
    return None


def shorten_description(
    text: str,
    minimum: int = DESCRIPTION_MIN,
    maximum: int = DESCRIPTION_MAX,
) -> str:
    shortened = text
    for pattern, replacement in VERBOSE_PHRASES:
        if len(shortened) <= maximum:
            break
        shortened = pattern.sub(replacement, shortened)
    shortened = _normalize_spaces(shortened)

    if len(shortened) > maximum:
        shortened = _normalize_spaces(REDUNDANT_ADJECTIVES.sub("", shortened))

    if len(shortened) > maximum:
        shortened = _truncate_to_sentences(shortened, minimum, maximum) or _truncate_to_words(
            shortened, maximum
        )
    return shortened


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


def _repair(
    text: str,
    kind: CopyKind,
    minimum: int,
    maximum: int,
) -> ConstraintResult:
    length = len(text)
    if minimum <= length <= maximum:
        return ConstraintResult(
            original=text,
            valid=True,
            text=text,
            length=length,
            kind=kind,
            action="unchanged",
            within_bounds=True,
        )

    action: RepairAction = "shortened" if length > maximum else "expanded"
    repaired = text
    if kind == "headline":
        if length > maximum:
            repaired = shorten_headline(repaired, maximum)
        if len(repaired) < minimum:
            repaired = expand_headline(repaired, minimum, maximum)
    else:
        if length > maximum:
            repaired = shorten_description(repaired, minimum, maximum)
        if len(repaired) < minimum:
            repaired = expand_description(repaired, minimum, maximum)

    within_bounds = minimum <= len(repaired) <= maximum
    return ConstraintResult(
        original=text,
        valid=False,
        text=repaired,
        length=len(repaired),
        kind=kind,
        action=action,
        within_bounds=within_bounds,
        warning=None if within_bounds else BELOW_MINIMUM,
    )


def repair_headline(text: str) -> ConstraintResult:
    return _repair(text, "headline", HEADLINE_MIN, HEADLINE_MAX)


def repair_description(text: str) -> ConstraintResult:
    return _repair(text, "description", DESCRIPTION_MIN, DESCRIPTION_MAX)


def describe_violation(label: str, position: int, text: str, minimum: int, maximum: int) -> str | None:
    length = len(text)
    if length < minimum:
        return f'{label} {position}: "{text}" ({length} chars) is under {minimum} characters'
    if length > maximum:
        return f'{label} {position}: "{text}" ({length} chars) is over {maximum} characters'
    return None


def validate_and_repair(headlines: Sequence[str], descriptions: Sequence[str]) -> CopyValidationReport:
    """Validate every string, repair the out-of-bounds ones, keep input order."""
    report = CopyValidationReport()
    for position, headline in enumerate(headlines, start=1):
        violation = describe_violation("Headline", position, headline, HEADLINE_MIN, HEADLINE_MAX)
        if violation:
            report.violations.append(violation)
        report.headlines.append(repair_headline(headline))
    for position, description in enumerate(descriptions, start=1):
        violation = describe_violation(
            "Description", position, description, DESCRIPTION_MIN, DESCRIPTION_MAX
        )
        if violation:
            report.violations.append(violation)
        report.descriptions.append(repair_description(description))
    return report
