"""Custom exception classes for the application."""

from typing import Any


class CampaignCopyError(Exception):
    """Base exception for all application errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


# Request Errors
class InvalidCampaignRequestError(CampaignCopyError):
    """Campaign request is missing required fields or names an invalid ad group."""

    pass


# Pipeline Errors
class PipelineError(CampaignCopyError):
    """Base class for generation pipeline errors."""

    pass


class RetrievalError(PipelineError):
    """A fragment retrieval query failed; the request cannot continue."""

    def __init__(self, query_label: str, message: str) -> None:
        super().__init__(
            f"Vector search failed for '{query_label}': {message}",
            details={"query_label": query_label},
        )


class GenerationPayloadError(PipelineError):
    """Generated ad copy payload is unparsable or has the wrong cardinality."""

    pass


# External API Errors
class ExternalAPIError(CampaignCopyError):
    """Error calling external API."""

    def __init__(self, api_name: str, message: str) -> None:
        super().__init__(f"{api_name} API error: {message}")


class APIKeyMissingError(ExternalAPIError):
    """API key not configured."""

    def __init__(self, api_name: str) -> None:
        super().__init__(api_name, "API key not configured")
