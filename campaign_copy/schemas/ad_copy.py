"""Generated ad copy schemas."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

HEADLINE_COUNT = 15
DESCRIPTION_COUNT = 4


class KeywordSet(BaseModel):
    """Keyword targeting suggested alongside the copy."""

    broad_match: list[str] = Field(default_factory=list)
    negative_keywords: list[str] = Field(default_factory=list)


class AdCopyDraft(BaseModel):
    """Raw copy returned by the text-generation model."""

    headlines: list[str] = Field(default_factory=list)
    descriptions: list[str] = Field(default_factory=list)
    keywords: KeywordSet | list[str] | None = None
    final_url_paths: list[str] = Field(default_factory=list)


class HeadlineCorrection(BaseModel):
    """Corrected headline set returned by the correction round-trip."""

    headlines: list[str] = Field(default_factory=list)


class CharacterCheck(BaseModel):
    """Per-string length check included in the final response."""

    text: str
    valid: bool
    length: int
    warning: str | None = None


class GeneratedCampaignCopy(BaseModel):
    """Final validated copy plus the metadata used to produce it."""

    headlines: list[str]
    descriptions: list[str]
    keywords: KeywordSet
    final_url_paths: list[str] = Field(default_factory=list)
    headline_checks: list[CharacterCheck] = Field(default_factory=list)
    description_checks: list[CharacterCheck] = Field(default_factory=list)
    violations: list[str] = Field(default_factory=list)
    correction_attempted: bool = False
    correction_applied: bool = False
    diagnostics: dict[str, Any] = Field(default_factory=dict)
    context_summary: dict[str, Any] = Field(default_factory=dict)
    profile_summary: dict[str, Any] = Field(default_factory=dict)
    derived_request: dict[str, Any] = Field(default_factory=dict)
