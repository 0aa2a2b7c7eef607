"""Generate search ad copy for one client campaign and print it as JSON."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from campaign_copy.core.exceptions import CampaignCopyError
from campaign_copy.core.logging import setup_logging
from campaign_copy.schemas.campaign import CAMPAIGN_TYPES, CampaignGenerationRequest
from campaign_copy.services.pipelines.campaign_generation import generate_campaign_copy

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Build CLI parser."""
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--client-id", required=True, help="Client identifier in the knowledge base")
    parser.add_argument(
        "--campaign-type",
        required=True,
        choices=sorted(CAMPAIGN_TYPES),
        help="Real-estate campaign type",
    )
    parser.add_argument("--campaign-name", required=True, help="Display name of the campaign")
    parser.add_argument("--ad-group-type", help="Ad group focus (required for unit-type campaigns)")
    return parser.parse_args(argv)


async def async_main(argv: list[str] | None = None) -> int:
    """Async entrypoint."""
    args = parse_args(argv)
    setup_logging(logging.WARNING)

    request = CampaignGenerationRequest(
        client_id=args.client_id,
        campaign_type=args.campaign_type,
        campaign_name=args.campaign_name,
        ad_group_type=args.ad_group_type,
    )
    try:
        result = await generate_campaign_copy(request)
    except CampaignCopyError as exc:
        logger.error("Campaign generation failed", extra={"error": exc.message, "details": exc.details})
        print(exc.message, file=sys.stderr)
        return 1

    print(result.model_dump_json(indent=2))
    return 0


def main(argv: list[str] | None = None) -> int:
    """Sync wrapper."""
    return asyncio.run(async_main(argv))


if __name__ == "__main__":
    raise SystemExit(main())
