"""Translation endpoints."""

import asyncio
from pathlib import Path
from typing import Annotated
from urllib.parse import quote

from fastapi import APIRouter, Depends, File, Form, HTTPException, Response, UploadFile, status
from fastapi.responses import StreamingResponse

from subtrans.core.config import Settings, get_settings
from subtrans.core.logging import get_logger
from subtrans.schemas import TranslationRequest, TranslationResponse
from subtrans.services.chunker import InvalidChunkSizeError
from subtrans.services.pipeline import (
    ChunkTranslationError,
    EmptyOrInvalidInputError,
    TranslationCancelledError,
    TranslationPipeline,
    TranslationPipelineError,
    TranslationStatus,
)
from subtrans.services.translation import translate_srt_chunk

router = APIRouter()
logger = get_logger(__name__)


def _require_provider(settings: Settings) -> None:
    """Reject requests up front when no Google GenAI key is configured."""
    if not settings.google_api_key:
        logger.error("Translation requested but GOOGLE_API_KEY is not configured")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Translation provider not configured: GOOGLE_API_KEY is missing",
        )


def _build_pipeline(
    settings: Settings,
    target_language: str,
    source_language: str | None = None,
    model: str | None = None,
    chunk_size: int | None = None,
    on_progress=None,
) -> TranslationPipeline:
    _require_provider(settings)

    async def translate_fn(entries, source_lang, target_lang):
        return await translate_srt_chunk(entries, source_lang, target_lang, model=model)

    return TranslationPipeline(
        translate_fn,
        target_language,
        source_language=source_language,
        chunk_size=chunk_size,
        on_progress=on_progress,
        settings=settings,
    )


def _to_http_error(error: Exception) -> HTTPException:
    """Map pipeline errors to HTTP status codes."""
    if isinstance(error, (EmptyOrInvalidInputError, InvalidChunkSizeError)):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(error))
    if isinstance(error, ChunkTranslationError):
        return HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Translation service error: {error}",
        )
    if isinstance(error, TranslationCancelledError):
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(error))
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=f"Unexpected error: {error}",
    )


async def _run_pipeline(pipeline: TranslationPipeline, srt_content: str) -> str:
    try:
        return await pipeline.run(srt_content)
    except (TranslationPipelineError, InvalidChunkSizeError) as e:
        raise _to_http_error(e) from e


def _content_disposition(filename: str) -> str:
    """Build an attachment header that survives non-Latin-1 file names.

    Starlette encodes headers as Latin-1, so the plain ``filename`` carries an
    ASCII-only fallback and ``filename*`` (RFC 5987) carries the real name.
    """
    fallback = "".join(
        c if c.isascii() and c.isprintable() and c not in '"\\' else "_" for c in filename
    )
    return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{quote(filename, safe='')}"


@router.post(
    "",
    response_model=TranslationResponse,
    status_code=status.HTTP_200_OK,
    summary="Translate SRT subtitle file",
    description="Translates SRT subtitle content while preserving numbering and timestamps",
)
async def translate_srt(
    request: TranslationRequest,
    settings: Annotated[Settings, Depends(get_settings)],
):
    """Translate SRT subtitle content to the target language.

    Args:
        request: Translation request with SRT content and target language

    Returns:
        Translated SRT content plus any structural warnings

    Raises:
        HTTPException: 400 (invalid input or chunk size), 502 (provider failure),
            503 (provider not configured)
    """
    pipeline = _build_pipeline(
        settings,
        request.target_language,
        source_language=request.source_language,
        model=request.model,
        chunk_size=request.chunk_size,
    )
    translated_srt = await _run_pipeline(pipeline, request.srt_content)

    return TranslationResponse(
        translated_srt=translated_srt,
        entry_count=pipeline.status.entry_count,
        chunk_count=pipeline.status.total_chunks,
        warnings=pipeline.status.warnings,
    )


@router.post(
    "/stream",
    summary="Translate SRT subtitle file with progress events",
    description=(
        "Streams newline-delimited JSON status events; the last event is either "
        "'completed' (with translated_srt) or 'error'"
    ),
)
async def translate_srt_stream(
    request: TranslationRequest,
    settings: Annotated[Settings, Depends(get_settings)],
):
    """Translate SRT content and stream pipeline status as NDJSON."""
    queue: asyncio.Queue[TranslationStatus | None] = asyncio.Queue()
    pipeline = _build_pipeline(
        settings,
        request.target_language,
        source_language=request.source_language,
        model=request.model,
        chunk_size=request.chunk_size,
        on_progress=queue.put_nowait,
    )

    async def run() -> None:
        try:
            await pipeline.run(request.srt_content)
        except (TranslationPipelineError, InvalidChunkSizeError) as e:
            # The error event has already been queued by the pipeline
            logger.warning("Streamed translation ended with error: %s", e)
        finally:
            queue.put_nowait(None)

    async def events():
        task = asyncio.create_task(run())
        try:
            while True:
                event = await queue.get()
                if event is None:
                    break
                yield event.model_dump_json() + "\n"
        finally:
            # Client went away: stop dispatching further chunks
            pipeline.cancel()
            await task

    return StreamingResponse(events(), media_type="application/x-ndjson")


@router.post(
    "/file",
    summary="Translate an uploaded SRT file",
    description="Returns the translated file as an attachment named <name>_<language>.srt",
)
async def translate_srt_file(
    settings: Annotated[Settings, Depends(get_settings)],
    file: UploadFile = File(..., description="SRT file to translate"),
    target_language: str = Form(..., min_length=1, description="Target language"),
    source_language: str | None = Form(None, description="Optional source language hint"),
    model: str | None = Form(None, description="Optional Google GenAI model override"),
    chunk_size: int | None = Form(None, description="Entries per provider call"),
):
    """Translate an uploaded SRT file and return it as a download.

    Raises:
        HTTPException: 400 (not an .srt file, not UTF-8, invalid content),
            413 (file too large), 502 (provider failure), 503 (provider not configured)
    """
    filename = file.filename or "subtitles.srt"
    if Path(filename).suffix.lower() != ".srt":
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=(
                f"Invalid subtitle format '{Path(filename).suffix}'. "
                "Only .srt files are supported"
            ),
        )

    raw = await file.read()
    if len(raw) > settings.max_upload_size:
        logger.warning("Upload too large: %d bytes (max: %d)", len(raw), settings.max_upload_size)
        raise HTTPException(
            status_code=413,
            detail=(
                f"File size ({len(raw):,} bytes) exceeds maximum allowed "
                f"({settings.max_upload_size:,} bytes)"
            ),
        )

    try:
        # utf-8-sig drops the BOM some subtitle editors write
        srt_content = raw.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="SRT file must be UTF-8 encoded",
        ) from e

    pipeline = _build_pipeline(
        settings,
        target_language,
        source_language=source_language,
        model=model,
        chunk_size=chunk_size,
    )
    translated_srt = await _run_pipeline(pipeline, srt_content)

    download_name = f"{Path(filename).stem}_{target_language.lower()}.srt"
    return Response(
        content=translated_srt,
        media_type="application/x-subrip; charset=utf-8",
        headers={"Content-Disposition": _content_disposition(download_name)},
    )
