"""Unit tests for the campaign copy generation pipeline."""

from __future__ import annotations

import asyncio
from typing import Any

import pytest

from campaign_copy.core.exceptions import (
    ExternalAPIError,
    GenerationPayloadError,
    InvalidCampaignRequestError,
    RetrievalError,
)
from campaign_copy.schemas.ad_copy import AdCopyDraft, HeadlineCorrection
from campaign_copy.schemas.campaign import (
    RE_GENERAL_LOCATION,
    RE_UNIT_TYPE,
    CampaignGenerationRequest,
)
from campaign_copy.schemas.intake import ClientIntake
from campaign_copy.services.context.queries import QUERY_LABELS
from campaign_copy.services.pipelines.campaign_generation import (
    AgentAdCopyGenerator,
    CampaignGenerationPipeline,
    merge_fragments,
    validate_generation_request,
)

VALID_HEADLINES = [f"Luxury Apartments Unit {n:02d}" for n in range(1, 16)]
CORRECTED_HEADLINES = [f"Modern Downtown Homes {n:02d}" for n in range(1, 16)]
VALID_DESCRIPTION = "Spacious homes with modern finishes near downtown. Schedule a tour today!"
SHARED_CONTENT = "Resort-style pool and fitness center with covered parking"


class FakeEmbedder:
    def __init__(self) -> None:
        self.calls: list[list[str]] = []

    async def embed(self, texts: list[str]) -> list[list[float]]:
        self.calls.append(texts)
        return [[float(len(self.calls))]]


class FakeSearcher:
    def __init__(self, error: Exception | None = None) -> None:
        self.error = error
        self.calls: list[dict[str, Any]] = []

    async def match_fragments(
        self,
        client_id: str,
        embedding: list[float],
        threshold: float | None = None,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        self.calls.append(
            {"client_id": client_id, "embedding": embedding, "threshold": threshold, "limit": limit}
        )
        if self.error is not None:
            raise self.error
        return [
            {"content": SHARED_CONTENT, "similarity": 0.9},
            {"content": f"Resident note {int(embedding[0])}", "similarity": 0.5},
        ]


class FirstCallFailsSearcher(FakeSearcher):
    """Fails the first search immediately; later searches stall before returning."""

    def __init__(self) -> None:
        super().__init__()
        self.finished: list[int] = []

    async def match_fragments(
        self,
        client_id: str,
        embedding: list[float],
        threshold: float | None = None,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        self.calls.append(
            {"client_id": client_id, "embedding": embedding, "threshold": threshold, "limit": limit}
        )
        if len(self.calls) == 1:
            raise ExternalAPIError("Supabase", "connection reset")
        await asyncio.sleep(0.2)
        self.finished.append(len(self.calls))
        return []


class FakeIntakeStore:
    def __init__(
        self,
        intake: ClientIntake | None = None,
        client_name: str | None = None,
        error: Exception | None = None,
    ) -> None:
        self.intake = intake
        self.client_name = client_name
        self.error = error

    async def get_client_intake(self, client_id: str) -> ClientIntake | None:
        if self.error is not None:
            raise self.error
        return self.intake

    async def get_client_name(self, client_id: str) -> str | None:
        return self.client_name


class FakeGenerator:
    def __init__(
        self,
        draft: AdCopyDraft,
        corrected: list[str] | None = None,
        delay: float = 0.0,
    ) -> None:
        self.draft = draft
        self.corrected = corrected or []
        self.delay = delay
        self.prompts: list[str] = []
        self.correction_prompts: list[str] = []

    async def generate(self, prompt: str) -> AdCopyDraft:
        self.prompts.append(prompt)
        return self.draft

    async def correct_headlines(self, prompt: str) -> list[str]:
        self.correction_prompts.append(prompt)
        if self.delay:
            await asyncio.sleep(self.delay)
        return list(self.corrected)


def _draft(headlines: list[str] | None = None) -> AdCopyDraft:
    return AdCopyDraft(
        headlines=headlines if headlines is not None else list(VALID_HEADLINES),
        descriptions=[VALID_DESCRIPTION] * 4,
        keywords=[f"keyword {n}" for n in range(20)],
        final_url_paths=["apartments", "tour"],
    )


def _request(**overrides: Any) -> CampaignGenerationRequest:
    data: dict[str, Any] = {
        "client_id": "client-1",
        "campaign_type": RE_GENERAL_LOCATION,
        "campaign_name": "Spring Leasing",
    }
    data.update(overrides)
    return CampaignGenerationRequest.model_validate(data)


def _pipeline(
    generator: FakeGenerator,
    *,
    embedder: FakeEmbedder | None = None,
    searcher: FakeSearcher | None = None,
    intake_store: FakeIntakeStore | None = None,
    correction_enabled: bool = True,
    correction_timeout: float = 1.0,
) -> CampaignGenerationPipeline:
    return CampaignGenerationPipeline(
        embedder=embedder or FakeEmbedder(),
        searcher=searcher or FakeSearcher(),
        intake_store=intake_store or FakeIntakeStore(),
        generator=generator,
        match_threshold=0.5,
        match_count=7,
        correction_enabled=correction_enabled,
        correction_timeout=correction_timeout,
    )


@pytest.mark.parametrize(
    ("overrides", "message"),
    [
        ({"client_id": ""}, "Missing required fields: client_id"),
        ({"campaign_type": "re_search"}, "Invalid campaign type. Must be one of:"),
        ({"campaign_type": RE_UNIT_TYPE}, "Ad group type is required for re_unit_type campaigns"),
        (
            {"campaign_type": RE_UNIT_TYPE, "ad_group_type": "5br"},
            "Invalid ad group type for re_unit_type. Must be one of: studio, 1br, 2br, 3br, 4br_plus",
        ),
    ],
)
def test_validate_generation_request_rejects_bad_requests(
    overrides: dict[str, Any],
    message: str,
) -> None:
    with pytest.raises(InvalidCampaignRequestError) as exc_info:
        validate_generation_request(_request(**overrides))

    assert exc_info.value.message.startswith(message)


def test_validate_generation_request_accepts_optional_ad_group() -> None:
    validate_generation_request(_request())
    validate_generation_request(_request(campaign_type=RE_UNIT_TYPE, ad_group_type="studio"))


def test_merge_fragments_keeps_first_occurrence() -> None:
    fragments = merge_fragments(
        [
            [{"content": "a", "similarity": 0.9}, {"content": "b", "similarity": 0.8}],
            [{"content": "a", "similarity": 0.4}, {"content": "c", "similarity": 0.7}],
        ]
    )

    assert [fragment.content for fragment in fragments] == ["a", "b", "c"]
    assert [fragment.index for fragment in fragments] == [0, 1, 2]
    assert fragments[0].similarity == 0.9


@pytest.mark.asyncio
async def test_retrieval_fans_out_all_queries_and_dedupes() -> None:
    embedder = FakeEmbedder()
    searcher = FakeSearcher()
    pipeline = _pipeline(FakeGenerator(_draft()), embedder=embedder, searcher=searcher)

    fragments = await pipeline.retrieve_fragments(_request())

    assert len(embedder.calls) == len(QUERY_LABELS)
    assert all(len(texts) == 1 for texts in embedder.calls)
    assert len(searcher.calls) == len(QUERY_LABELS)
    assert all(call["threshold"] == 0.5 and call["limit"] == 7 for call in searcher.calls)
    assert len(fragments) == 1 + len(QUERY_LABELS)
    assert fragments[0].content == SHARED_CONTENT


@pytest.mark.asyncio
async def test_any_failed_query_fails_the_request() -> None:
    generator = FakeGenerator(_draft())
    pipeline = _pipeline(
        generator,
        searcher=FakeSearcher(error=ExternalAPIError("Supabase", "connection reset")),
    )

    with pytest.raises(RetrievalError) as exc_info:
        await pipeline.run(_request())

    assert exc_info.value.message.startswith("Vector search failed for '")
    assert exc_info.value.details["query_label"] in QUERY_LABELS
    assert generator.prompts == []


@pytest.mark.asyncio
async def test_failed_query_cancels_pending_searches() -> None:
    searcher = FirstCallFailsSearcher()
    pipeline = _pipeline(FakeGenerator(_draft()), searcher=searcher)

    with pytest.raises(RetrievalError):
        await pipeline.retrieve_fragments(_request())

    await asyncio.sleep(0.3)

    assert len(searcher.calls) == len(QUERY_LABELS)
    assert searcher.finished == []


@pytest.mark.asyncio
async def test_invalid_request_fails_before_retrieval() -> None:
    embedder = FakeEmbedder()
    pipeline = _pipeline(FakeGenerator(_draft()), embedder=embedder)

    with pytest.raises(InvalidCampaignRequestError):
        await pipeline.run(_request(campaign_type=RE_UNIT_TYPE))

    assert embedder.calls == []


@pytest.mark.asyncio
async def test_valid_copy_passes_through_without_correction() -> None:
    generator = FakeGenerator(_draft())

    result = await _pipeline(generator).run(_request())

    assert result.headlines == VALID_HEADLINES
    assert result.descriptions == [VALID_DESCRIPTION] * 4
    assert result.violations == []
    assert result.correction_attempted is False
    assert generator.correction_prompts == []
    assert len(result.keywords.broad_match) == 16
    assert len(result.keywords.negative_keywords) == 4
    assert result.final_url_paths == ["apartments", "tour"]
    assert all(check.valid for check in result.headline_checks)
    assert result.derived_request["location"]["city"] == "San Diego"
    assert result.diagnostics["campaign_type"] == RE_GENERAL_LOCATION
    assert "Target Location: San Diego, CA" in generator.prompts[0]


@pytest.mark.asyncio
async def test_invalid_headlines_trigger_one_correction() -> None:
    headlines = ["Downtown Apt", *VALID_HEADLINES[1:]]
    generator = FakeGenerator(_draft(headlines), corrected=CORRECTED_HEADLINES)

    result = await _pipeline(generator).run(_request())

    assert result.correction_attempted is True
    assert result.correction_applied is True
    assert result.headlines == CORRECTED_HEADLINES
    assert result.violations == []
    assert len(generator.correction_prompts) == 1
    assert '"Downtown Apt" (12 chars - too short' in generator.correction_prompts[0]


@pytest.mark.asyncio
async def test_correction_timeout_keeps_repaired_originals() -> None:
    headlines = ["Downtown Apt", *VALID_HEADLINES[1:]]
    generator = FakeGenerator(_draft(headlines), corrected=CORRECTED_HEADLINES, delay=1.0)

    result = await _pipeline(generator, correction_timeout=0.01).run(_request())

    assert result.correction_attempted is True
    assert result.correction_applied is False
    assert result.headlines[0] == "Luxury Downtown Apt for Rent"
    assert result.headlines[1:] == VALID_HEADLINES[1:]
    assert result.violations == ['Headline 1: "Downtown Apt" (12 chars) is under 20 characters']
    assert result.headline_checks[0].valid is True


@pytest.mark.asyncio
async def test_correction_with_wrong_count_is_rejected() -> None:
    headlines = ["Downtown Apt", *VALID_HEADLINES[1:]]
    generator = FakeGenerator(_draft(headlines), corrected=CORRECTED_HEADLINES[:14])

    result = await _pipeline(generator).run(_request())

    assert result.correction_attempted is True
    assert result.correction_applied is False
    assert result.headlines[0] == "Luxury Downtown Apt for Rent"


@pytest.mark.asyncio
async def test_correction_can_be_disabled() -> None:
    headlines = ["Downtown Apt", *VALID_HEADLINES[1:]]
    generator = FakeGenerator(_draft(headlines), corrected=CORRECTED_HEADLINES)

    result = await _pipeline(generator, correction_enabled=False).run(_request())

    assert result.correction_attempted is False
    assert generator.correction_prompts == []
    assert result.headlines[0] == "Luxury Downtown Apt for Rent"


@pytest.mark.asyncio
async def test_wrong_cardinality_fails_generation() -> None:
    generator = FakeGenerator(_draft(VALID_HEADLINES[:14]))

    with pytest.raises(GenerationPayloadError):
        await _pipeline(generator).run(_request())


@pytest.mark.asyncio
async def test_intake_lookup_failure_degrades_to_missing_data() -> None:
    generator = FakeGenerator(_draft())
    store = FakeIntakeStore(
        client_name="Harbor Lofts",
        error=ExternalAPIError("Supabase", "API error: 500"),
    )

    result = await _pipeline(generator, intake_store=store).run(_request())

    assert result.profile_summary["client_id"] == "unknown"
    assert result.profile_summary["has_intake_data"] is False
    assert result.diagnostics["community_mentions_in_headlines"] == 0


@pytest.mark.asyncio
async def test_agent_generator_adapts_agent_outputs() -> None:
    class FakeWriter:
        def __init__(self) -> None:
            self.inputs: list[Any] = []

        async def run(self, input_data: Any) -> AdCopyDraft:
            self.inputs.append(input_data)
            return _draft()

    class FakeCorrector:
        async def run(self, input_data: Any) -> HeadlineCorrection:
            return HeadlineCorrection(headlines=CORRECTED_HEADLINES)

    writer = FakeWriter()
    generator = AgentAdCopyGenerator(
        writer=writer,  # type: ignore[arg-type]
        corrector=FakeCorrector(),  # type: ignore[arg-type]
        campaign_type=RE_GENERAL_LOCATION,
    )

    draft = await generator.generate("prompt text")
    corrected = await generator.correct_headlines("fix these")

    assert draft.headlines == VALID_HEADLINES
    assert writer.inputs[0].prompt == "prompt text"
    assert writer.inputs[0].campaign_type == RE_GENERAL_LOCATION
    assert corrected == CORRECTED_HEADLINES
