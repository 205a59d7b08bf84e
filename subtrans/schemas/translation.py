"""Pydantic schemas for translation API."""

from pydantic import BaseModel, Field

from subtrans.services.reconciler import StructuralMismatch


class TranslationRequest(BaseModel):
    """Request model for translation endpoints."""

    srt_content: str = Field(
        ..., description="SRT subtitle file content to translate", min_length=1
    )
    target_language: str = Field(
        ...,
        description="Target language for translation (e.g., 'Spanish', 'French', 'Japanese')",
        min_length=1,
    )
    source_language: str | None = Field(None, description="Optional source language hint")
    model: str | None = Field(
        None,
        description="Optional Google GenAI model override (default from settings)",
    )
    chunk_size: int | None = Field(
        None,
        description="Number of consecutive entries sent per provider call (default: 50)",
    )


class TranslationResponse(BaseModel):
    """Response model for translation endpoint."""

    translated_srt: str = Field(
        ..., description="Translated SRT subtitle content with preserved timestamps"
    )
    entry_count: int = Field(..., description="Number of subtitle entries translated")
    chunk_count: int = Field(..., description="Number of provider calls made")
    warnings: list[StructuralMismatch] = Field(
        default_factory=list,
        description="Chunks where the provider returned a different number of entries",
    )


class HealthResponse(BaseModel):
    """Response model for health check endpoint."""

    service: str
    status: str
    version: str
    authentication: str
    components: dict[str, dict[str, str]] = Field(default_factory=dict)
