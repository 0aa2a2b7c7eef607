"""Campaign copy generation pipeline.

Retrieval fans out over the four specialized queries concurrently; every
later stage runs sequentially on the merged fragment set. Final copy always
comes out of the deterministic repairer, after at most one headline
correction round-trip through the text-generation model.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Any, Protocol

from campaign_copy.agents.ad_copy_writer import AdCopyWriterAgent, AdCopyWriterInput
from campaign_copy.agents.headline_corrector import HeadlineCorrectorAgent, HeadlineCorrectorInput
from campaign_copy.config import settings
from campaign_copy.core.exceptions import (
    ExternalAPIError,
    InvalidCampaignRequestError,
    RetrievalError,
)
from campaign_copy.integrations.embeddings import EmbeddingsClient
from campaign_copy.integrations.supabase import SupabaseClient
from campaign_copy.schemas.ad_copy import (
    HEADLINE_COUNT,
    AdCopyDraft,
    CharacterCheck,
    GeneratedCampaignCopy,
)
from campaign_copy.schemas.campaign import CAMPAIGN_TYPES, CampaignGenerationRequest
from campaign_copy.schemas.intake import ClientIntake
from campaign_copy.services.ad_copy.constraints import (
    ConstraintResult,
    CopyValidationReport,
    validate_and_repair,
)
from campaign_copy.services.ad_copy.diagnostics import compute_diagnostics
from campaign_copy.services.ad_copy.payload import normalize_keywords, validate_cardinality
from campaign_copy.services.ad_copy.prompt_builder import (
    build_generation_prompt,
    build_headline_correction_prompt,
)
from campaign_copy.services.context.campaign_context import (
    build_campaign_context,
    context_summary,
)
from campaign_copy.services.context.campaign_details import extract_campaign_request
from campaign_copy.services.context.classifier import category_summary, classify_fragments
from campaign_copy.services.context.profile_builder import build_client_profile, profile_summary
from campaign_copy.services.context.queries import generate_queries
from campaign_copy.services.context.types import Fragment

logger = logging.getLogger(__name__)


class QueryEmbedder(Protocol):
    async def embed(self, texts: list[str]) -> list[list[float]]: ...


class FragmentSearcher(Protocol):
    async def match_fragments(
        self,
        client_id: str,
        embedding: list[float],
        threshold: float | None = None,
        limit: int | None = None,
    ) -> list[dict[str, Any]]: ...


class IntakeStore(Protocol):
    async def get_client_intake(self, client_id: str) -> ClientIntake | None: ...

    async def get_client_name(self, client_id: str) -> str | None: ...


class AdCopyGenerator(Protocol):
    async def generate(self, prompt: str) -> AdCopyDraft: ...

    async def correct_headlines(self, prompt: str) -> list[str]: ...


class AgentAdCopyGenerator:
    """Adapter from the generator seam to the pydantic-ai agents."""

    def __init__(
        self,
        writer: AdCopyWriterAgent | None = None,
        corrector: HeadlineCorrectorAgent | None = None,
        campaign_type: str = "",
    ) -> None:
        self._writer = writer
        self._corrector = corrector
        self.campaign_type = campaign_type

    @property
    def writer(self) -> AdCopyWriterAgent:
        if self._writer is None:
            self._writer = AdCopyWriterAgent()
        return self._writer

    @property
    def corrector(self) -> HeadlineCorrectorAgent:
        if self._corrector is None:
            self._corrector = HeadlineCorrectorAgent()
        return self._corrector

    async def generate(self, prompt: str) -> AdCopyDraft:
        return await self.writer.run(
            AdCopyWriterInput(prompt=prompt, campaign_type=self.campaign_type)
        )

    async def correct_headlines(self, prompt: str) -> list[str]:
        correction = await self.corrector.run(HeadlineCorrectorInput(prompt=prompt))
        return list(correction.headlines)


def validate_generation_request(request: CampaignGenerationRequest) -> None:
    """Reject requests that cannot produce a campaign."""
    missing = [
        name
        for name in ("client_id", "campaign_type", "campaign_name")
        if not str(getattr(request, name) or "").strip()
    ]
    if missing:
        raise InvalidCampaignRequestError(
            f"Missing required fields: {', '.join(missing)}",
            details={"missing_fields": missing},
        )

    config = CAMPAIGN_TYPES.get(request.campaign_type)
    if config is None:
        raise InvalidCampaignRequestError(
            f"Invalid campaign type. Must be one of: {', '.join(CAMPAIGN_TYPES)}",
            details={"campaign_type": request.campaign_type},
        )

    if not config["requires_ad_group"]:
        return
    if not request.ad_group_type:
        raise InvalidCampaignRequestError(
            f"Ad group type is required for {request.campaign_type} campaigns",
            details={"campaign_type": request.campaign_type},
        )
    valid_ad_groups = tuple(config["ad_groups"])  # type: ignore[call-overload]
    if request.ad_group_type not in valid_ad_groups:
        raise InvalidCampaignRequestError(
            f"Invalid ad group type for {request.campaign_type}. "
            f"Must be one of: {', '.join(valid_ad_groups)}",
            details={"campaign_type": request.campaign_type, "ad_group_type": request.ad_group_type},
        )


def merge_fragments(result_sets: list[list[dict[str, Any]]]) -> list[Fragment]:
    """Flatten search results, keeping the first occurrence of each content string."""
    seen: set[str] = set()
    fragments: list[Fragment] = []
    for rows in result_sets:
        for row in rows:
            content = str(row.get("content") or "")
            if content in seen:
                continue
            seen.add(content)
            fragments.append(
                Fragment(
                    content=content,
                    similarity=float(row.get("similarity") or 0.0),
                    index=len(fragments),
                )
            )
    return fragments


def character_checks(results: list[ConstraintResult]) -> list[CharacterCheck]:
    return [
        CharacterCheck(
            text=result.text,
            valid=result.within_bounds,
            length=result.length,
            warning=result.warning,
        )
        for result in results
    ]


class CampaignGenerationPipeline:
    """Orchestrates retrieval, context synthesis, generation and repair."""

    def __init__(
        self,
        embedder: QueryEmbedder,
        searcher: FragmentSearcher,
        intake_store: IntakeStore,
        generator: AdCopyGenerator,
        *,
        match_threshold: float | None = None,
        match_count: int | None = None,
        correction_enabled: bool | None = None,
        correction_timeout: float | None = None,
    ) -> None:
        self.embedder = embedder
        self.searcher = searcher
        self.intake_store = intake_store
        self.generator = generator
        self.match_threshold = (
            settings.retrieval_match_threshold if match_threshold is None else match_threshold
        )
        self.match_count = match_count or settings.retrieval_match_count
        self.correction_enabled = (
            settings.headline_correction_enabled if correction_enabled is None else correction_enabled
        )
        self.correction_timeout = correction_timeout or settings.headline_correction_timeout_seconds

    async def retrieve_fragments(self, request: CampaignGenerationRequest) -> list[Fragment]:
        """Embed and search all four queries concurrently; any failure fails the request."""
        queries = generate_queries(
            request.campaign_type,
            ad_group_type=request.ad_group_type,
        )

        async def _search(label: str, query: str) -> list[dict[str, Any]]:
            try:
                embeddings = await self.embedder.embed([query])
                if not embeddings:
                    raise ExternalAPIError("Embeddings", "No embedding returned for query")
                return await self.searcher.match_fragments(
                    request.client_id,
                    embeddings[0],
                    self.match_threshold,
                    self.match_count,
                )
            except Exception as exc:
                logger.warning(
                    "Retrieval query failed",
                    extra={"client_id": request.client_id, "query_label": label, "error": str(exc)},
                )
                raise RetrievalError(label, str(exc)) from exc

        tasks = [
            asyncio.create_task(_search(label, query)) for label, query in queries.labeled()
        ]
        try:
            result_sets = await asyncio.gather(*tasks)
        except RetrievalError:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise
        fragments = merge_fragments(list(result_sets))
        logger.info(
            "Fragments retrieved",
            extra={
                "client_id": request.client_id,
                "query_count": len(result_sets),
                "raw_count": sum(len(rows) for rows in result_sets),
                "unique_count": len(fragments),
            },
        )
        return fragments

    async def load_client_data(self, client_id: str) -> tuple[ClientIntake | None, str | None]:
        """Fetch intake and client name; lookup failures degrade to missing data."""
        intake: ClientIntake | None = None
        client_name: str | None = None
        try:
            intake = await self.intake_store.get_client_intake(client_id)
        except ExternalAPIError as exc:
            logger.warning(
                "Could not retrieve client intake",
                extra={"client_id": client_id, "error": exc.message},
            )
        try:
            client_name = await self.intake_store.get_client_name(client_id)
        except ExternalAPIError as exc:
            logger.warning(
                "Could not retrieve client name",
                extra={"client_id": client_id, "error": exc.message},
            )
        return intake, client_name

    async def correct_headlines(
        self,
        headlines: list[str],
        report: CopyValidationReport,
    ) -> list[str] | None:
        """Single bounded correction request; returns None when it cannot be used."""
        invalid = [result for _, result in report.invalid_headlines]
        prompt = build_headline_correction_prompt(headlines, invalid)
        logger.info(
            "Requesting headline correction",
            extra={"invalid_count": len(invalid), "timeout_s": self.correction_timeout},
        )
        try:
            corrected = await asyncio.wait_for(
                self.generator.correct_headlines(prompt),
                timeout=self.correction_timeout,
            )
        except asyncio.TimeoutError:
            logger.warning("Headline correction timed out, keeping original headlines")
            return None
        except Exception as exc:
            logger.warning(
                "Headline correction failed, keeping original headlines",
                extra={"error": str(exc)},
            )
            return None

        if len(corrected) != HEADLINE_COUNT:
            logger.warning(
                "Headline correction returned wrong count, keeping original headlines",
                extra={"headline_count": len(corrected)},
            )
            return None
        return [str(headline) for headline in corrected]

    async def run(self, request: CampaignGenerationRequest) -> GeneratedCampaignCopy:
        """Generate validated campaign copy for one request."""
        validate_generation_request(request)
        started = time.perf_counter()
        logger.info(
            "Campaign generation started",
            extra={
                "client_id": request.client_id,
                "campaign_type": request.campaign_type,
                "ad_group_type": request.ad_group_type,
            },
        )

        fragments = await self.retrieve_fragments(request)
        categorized = classify_fragments(fragments)
        logger.info("Fragment categories", extra={"categories": category_summary(categorized)})

        intake, client_name = await self.load_client_data(request.client_id)
        profile = build_client_profile(intake, categorized, client_name)
        campaign_request = extract_campaign_request(request, categorized, profile, intake)
        context = build_campaign_context(campaign_request, profile)
        prompt = build_generation_prompt(campaign_request, context, profile)

        draft = await self.generator.generate(prompt)
        validate_cardinality(draft)
        keywords = normalize_keywords(draft.keywords)

        headlines = list(draft.headlines)
        descriptions = list(draft.descriptions)
        first_pass = validate_and_repair(headlines, descriptions)

        correction_attempted = False
        correction_applied = False
        if first_pass.invalid_headlines and self.correction_enabled:
            correction_attempted = True
            corrected = await self.correct_headlines(headlines, first_pass)
            if corrected is not None:
                headlines = corrected
                correction_applied = True

        report = validate_and_repair(headlines, descriptions)
        final_headlines = report.repaired_headlines
        final_descriptions = report.repaired_descriptions
        diagnostics = compute_diagnostics(
            final_headlines,
            final_descriptions,
            campaign_type=request.campaign_type,
            community_name=profile.property.community_name or None,
        )

        logger.info(
            "Campaign generation completed",
            extra={
                "client_id": request.client_id,
                "campaign_type": request.campaign_type,
                "duration_s": round(time.perf_counter() - started, 2),
                "violations": len(report.violations),
                "correction_attempted": correction_attempted,
                "correction_applied": correction_applied,
                "context_strength": context.context_strength,
            },
        )

        return GeneratedCampaignCopy(
            headlines=final_headlines,
            descriptions=final_descriptions,
            keywords=keywords,
            final_url_paths=list(draft.final_url_paths),
            headline_checks=character_checks(report.headlines),
            description_checks=character_checks(report.descriptions),
            violations=list(report.violations),
            correction_attempted=correction_attempted,
            correction_applied=correction_applied,
            diagnostics=diagnostics.to_dict(),
            context_summary=context_summary(context),
            profile_summary=profile_summary(profile),
            derived_request=campaign_request.model_dump(),
        )


async def generate_campaign_copy(request: CampaignGenerationRequest) -> GeneratedCampaignCopy:
    """Run the pipeline against the configured embeddings, Supabase and LLM backends."""
    async with EmbeddingsClient() as embedder, SupabaseClient() as supabase:
        pipeline = CampaignGenerationPipeline(
            embedder=embedder,
            searcher=supabase,
            intake_store=supabase,
            generator=AgentAdCopyGenerator(campaign_type=request.campaign_type),
        )
        return await pipeline.run(request)
