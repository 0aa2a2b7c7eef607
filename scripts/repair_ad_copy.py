"""Validate and repair ad copy headlines/descriptions from a JSON file."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any

from campaign_copy.core.exceptions import GenerationPayloadError
from campaign_copy.core.logging import setup_logging
from campaign_copy.schemas.campaign import CAMPAIGN_TYPES
from campaign_copy.services.ad_copy.constraints import validate_and_repair
from campaign_copy.services.ad_copy.diagnostics import compute_diagnostics
from campaign_copy.services.ad_copy.payload import parse_generation_payload, validate_cardinality

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Build CLI parser."""
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "input",
        help='Path to a JSON payload with "headlines" and "descriptions" ("-" reads stdin)',
    )
    parser.add_argument(
        "--output",
        type=Path,
        help="Write the repair report to this file instead of stdout",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Require exactly 15 headlines and 4 descriptions",
    )
    parser.add_argument(
        "--campaign-type",
        choices=sorted(CAMPAIGN_TYPES),
        help="Include composition diagnostics for this campaign type",
    )
    parser.add_argument(
        "--community-name",
        help="Community name counted in general-location diagnostics",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable info-level logging",
    )
    return parser.parse_args(argv)


def read_payload(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def build_report(
    raw: str,
    *,
    strict: bool = False,
    campaign_type: str | None = None,
    community_name: str | None = None,
) -> dict[str, Any]:
    """Parse a payload and return the repair report as a JSON-ready dict."""
    draft = parse_generation_payload(raw)
    if strict:
        validate_cardinality(draft)

    report = validate_and_repair(draft.headlines, draft.descriptions)
    result = report.to_dict()
    result["repaired"] = {
        "headlines": report.repaired_headlines,
        "descriptions": report.repaired_descriptions,
    }
    if campaign_type:
        result["diagnostics"] = compute_diagnostics(
            report.repaired_headlines,
            report.repaired_descriptions,
            campaign_type=campaign_type,
            community_name=community_name,
        ).to_dict()

    logger.info(
        "Ad copy repaired",
        extra={
            "headline_count": len(report.headlines),
            "description_count": len(report.descriptions),
            "violations": len(report.violations),
        },
    )
    return result


async def async_main(argv: list[str] | None = None) -> int:
    """Async entrypoint."""
    args = parse_args(argv)
    setup_logging(logging.INFO if args.verbose else logging.WARNING)

    try:
        result = build_report(
            read_payload(args.input),
            strict=args.strict,
            campaign_type=args.campaign_type,
            community_name=args.community_name,
        )
    except GenerationPayloadError as exc:
        logger.error("Invalid ad copy payload", extra={"error": exc.message, "details": exc.details})
        return 2

    rendered = json.dumps(result, indent=2, ensure_ascii=False)
    if args.output:
        args.output.write_text(rendered + "\n", encoding="utf-8")
    else:
        print(rendered)

    unresolved = [
        item for item in [*result["headlines"], *result["descriptions"]] if not item["within_bounds"]
    ]
    return 1 if unresolved else 0


def main(argv: list[str] | None = None) -> int:
    """Sync wrapper."""
    return asyncio.run(async_main(argv))


if __name__ == "__main__":
    raise SystemExit(main())
