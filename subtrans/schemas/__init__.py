"""Pydantic schemas for API request/response validation."""

from subtrans.schemas.translation import HealthResponse, TranslationRequest, TranslationResponse

__all__ = [
    "TranslationRequest",
    "TranslationResponse",
    "HealthResponse",
]
