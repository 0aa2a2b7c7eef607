"""Parsing and structural validation of generated ad copy payloads."""

from __future__ import annotations

import json
import math
import re
from typing import Any

from pydantic import ValidationError

from campaign_copy.core.exceptions import GenerationPayloadError
from campaign_copy.schemas.ad_copy import (
    DESCRIPTION_COUNT,
    HEADLINE_COUNT,
    AdCopyDraft,
    KeywordSet,
)

JSON_OBJECT_RE = re.compile(r"\{[\s\S]*\}")
MIN_BROAD_MATCH = 10
BROAD_MATCH_SHARE = 0.8


def parse_generation_payload(text: str) -> AdCopyDraft:
    """Extract the first-to-last brace JSON object from model output."""
    match = JSON_OBJECT_RE.search(text or "")
    if not match:
        raise GenerationPayloadError(
            "No JSON object found in generated ad copy",
            details={"response_preview": (text or "")[:200]},
        )
    try:
        raw: Any = json.loads(match.group(0))
    except json.JSONDecodeError as e:
        raise GenerationPayloadError(
            f"Generated ad copy is not valid JSON: {e.msg}",
            details={"response_preview": match.group(0)[:200]},
        ) from e
    if not isinstance(raw, dict):
        raise GenerationPayloadError("Generated ad copy must be a JSON object")

    try:
        return AdCopyDraft.model_validate(raw)
    except ValidationError as e:
        raise GenerationPayloadError(
            "Generated ad copy has an invalid structure",
            details={"errors": e.errors(include_url=False)},
        ) from e


def validate_cardinality(draft: AdCopyDraft) -> None:
    """Require exactly 15 headlines and exactly 4 descriptions."""
    headline_count = len(draft.headlines)
    description_count = len(draft.descriptions)
    if headline_count != HEADLINE_COUNT or description_count != DESCRIPTION_COUNT:
        raise GenerationPayloadError(
            f"Expected {HEADLINE_COUNT} headlines and {DESCRIPTION_COUNT} descriptions, "
            f"got {headline_count} and {description_count}",
            details={"headline_count": headline_count, "description_count": description_count},
        )


def normalize_keywords(keywords: KeywordSet | list[str] | None) -> KeywordSet:
    """Coerce a flat keyword list into broad-match and negative keywords."""
    if keywords is None:
        return KeywordSet()
    if isinstance(keywords, KeywordSet):
        return keywords
    broad_count = max(MIN_BROAD_MATCH, math.floor(len(keywords) * BROAD_MATCH_SHARE))
    return KeywordSet(
        broad_match=list(keywords[:broad_count]),
        negative_keywords=list(keywords[broad_count:]),
    )
