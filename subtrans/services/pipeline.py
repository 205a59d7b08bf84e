"""Subtitle translation pipeline.

Runs a document through parse -> chunk -> translate -> reconcile -> assemble.
Chunks are sent to the translation provider one at a time, in order, and each
call is fully awaited before the next chunk starts. A failed provider call
aborts the whole run; a provider that returns the wrong number of entries
only produces a warning.
"""

from collections.abc import Awaitable, Callable, Sequence
import enum
import inspect

from pydantic import BaseModel, Field

from subtrans.core.config import Settings, get_settings
from subtrans.core.logging import get_logger
from subtrans.models.srt import SRTEntry
from subtrans.services.chunker import InvalidChunkSizeError, chunk_entries, validate_chunk_size
from subtrans.services.reconciler import StructuralMismatch, reconcile
from subtrans.services.srt_parser import parse_srt, reconstruct_srt

logger = get_logger(__name__)

ASSEMBLING_PROGRESS = 95


class PipelinePhase(str, enum.Enum):
    """Translation pipeline phase."""

    IDLE = "idle"
    PARSING = "parsing"
    TRANSLATING = "translating"
    ASSEMBLING = "assembling"
    COMPLETED = "completed"
    ERROR = "error"


class TranslationStatus(BaseModel):
    """Snapshot of a pipeline run, sent to progress listeners."""

    phase: PipelinePhase = PipelinePhase.IDLE
    progress: int = Field(0, description="Percentage of chunks started (0-100)")
    current_chunk: int = Field(0, description="1-based index of the chunk being translated")
    total_chunks: int = 0
    entry_count: int = 0
    failed_chunk: int | None = None
    error: str | None = None
    warnings: list[StructuralMismatch] = Field(default_factory=list)
    translated_srt: str | None = None


class TranslationPipelineError(Exception):
    """Base class for errors that abort a pipeline run."""

    def __init__(self, message: str, phase: PipelinePhase):
        super().__init__(message)
        self.phase = phase


class EmptyOrInvalidInputError(TranslationPipelineError):
    """The input contained no valid subtitle entries."""

    def __init__(self):
        super().__init__(
            "Invalid or empty SRT file: no subtitle entries found", PipelinePhase.PARSING
        )


class ChunkTranslationError(TranslationPipelineError):
    """The translation provider failed for one chunk."""

    def __init__(self, chunk_index: int, total_chunks: int, cause: BaseException):
        super().__init__(
            f"Failed translating chunk {chunk_index}/{total_chunks}: {cause}",
            PipelinePhase.TRANSLATING,
        )
        self.chunk_index = chunk_index
        self.total_chunks = total_chunks
        self.cause = cause


class TranslationCancelledError(TranslationPipelineError):
    """The caller abandoned the run between two chunks."""

    def __init__(self, chunk_index: int, total_chunks: int):
        super().__init__(
            f"Translation cancelled before chunk {chunk_index}/{total_chunks}",
            PipelinePhase.TRANSLATING,
        )
        self.chunk_index = chunk_index
        self.total_chunks = total_chunks


TranslateFn = Callable[
    [list[SRTEntry], str | None, str],
    Sequence[SRTEntry] | Awaitable[Sequence[SRTEntry]],
]
ProgressCallback = Callable[[TranslationStatus], None]


class TranslationPipeline:
    """Translate one subtitle document through an external provider.

    Each instance handles a single run. Progress is pushed to ``on_progress``
    as a copy of ``status`` whenever it changes.

    Args:
        translate_fn: Provider callable ``(entries, source_language,
            target_language) -> entries``; may be a coroutine function
        target_language: Language to translate into
        source_language: Optional source language hint
        chunk_size: Entries per provider call (default from settings)
        on_progress: Optional listener for status snapshots
        settings: Settings instance (optional, will use get_settings() if not provided)
    """

    def __init__(
        self,
        translate_fn: TranslateFn,
        target_language: str,
        source_language: str | None = None,
        chunk_size: int | None = None,
        on_progress: ProgressCallback | None = None,
        settings: Settings | None = None,
    ):
        if settings is None:
            settings = get_settings()

        self.translate_fn = translate_fn
        self.target_language = target_language
        self.source_language = source_language
        self.chunk_size = chunk_size if chunk_size is not None else settings.default_chunk_size
        self.on_progress = on_progress
        self.status = TranslationStatus()
        self._cancel_requested = False

    def cancel(self) -> None:
        """Stop the run before the next chunk is dispatched."""
        self._cancel_requested = True

    def _update(self, **changes) -> None:
        for name, value in changes.items():
            setattr(self.status, name, value)
        if self.on_progress is not None:
            self.on_progress(self.status.model_copy(deep=True))

    def _fail(self, error: TranslationPipelineError) -> TranslationPipelineError:
        logger.error("Translation pipeline failed during %s: %s", error.phase.value, error)
        self._update(
            phase=PipelinePhase.ERROR,
            error=str(error),
            failed_chunk=getattr(error, "chunk_index", None),
        )
        return error

    async def _translate_chunk(self, chunk: list[SRTEntry]) -> list[SRTEntry]:
        result = self.translate_fn(list(chunk), self.source_language, self.target_language)
        if inspect.isawaitable(result):
            result = await result
        if result is None:
            return []
        if isinstance(result, (str, bytes)) or not isinstance(result, Sequence):
            raise TypeError(
                f"Malformed provider response: expected a list of SRTEntry, "
                f"got {type(result).__name__}"
            )
        for position, item in enumerate(result):
            if not isinstance(item, SRTEntry):
                raise TypeError(
                    f"Malformed provider response: item {position} is "
                    f"{type(item).__name__}, not SRTEntry"
                )
        return list(result)

    async def run(self, document: str | Sequence[SRTEntry]) -> str:
        """Translate a document and return the reconstructed SRT text.

        Args:
            document: Raw SRT content or already-parsed entries

        Returns:
            Translated SRT content with original numbering and timings

        Raises:
            InvalidChunkSizeError: If the chunk size is not a positive integer
            EmptyOrInvalidInputError: If the document has no valid entries
            ChunkTranslationError: If the provider fails or replies with
                something other than a list of entries for any chunk
            TranslationCancelledError: If cancel() was called mid-run
        """
        if self.status.phase is not PipelinePhase.IDLE:
            raise RuntimeError("TranslationPipeline instances can only be run once")

        try:
            chunk_size = validate_chunk_size(self.chunk_size)
        except InvalidChunkSizeError as e:
            self._update(phase=PipelinePhase.ERROR, error=str(e))
            raise

        self._update(phase=PipelinePhase.PARSING)
        entries = parse_srt(document) if isinstance(document, str) else list(document)
        if not entries:
            raise self._fail(EmptyOrInvalidInputError())

        chunks = chunk_entries(entries, chunk_size)
        total_chunks = len(chunks)
        self._update(
            phase=PipelinePhase.TRANSLATING,
            total_chunks=total_chunks,
            entry_count=len(entries),
        )
        logger.info(
            "Starting translation: %d entries -> %d chunks (chunk_size=%d, %s -> %s)",
            len(entries),
            total_chunks,
            chunk_size,
            self.source_language or "auto",
            self.target_language,
        )

        translated_entries: list[SRTEntry] = []
        for i, chunk in enumerate(chunks):
            chunk_index = i + 1
            if self._cancel_requested:
                raise self._fail(TranslationCancelledError(chunk_index, total_chunks))

            self._update(current_chunk=chunk_index, progress=round(i / total_chunks * 100))

            try:
                returned = await self._translate_chunk(chunk)
                result = reconcile(chunk, returned, chunk_index=chunk_index)
            except Exception as e:
                raise self._fail(ChunkTranslationError(chunk_index, total_chunks, e)) from e

            if result.mismatch is not None:
                self.status.warnings.append(result.mismatch)
            translated_entries.extend(result.entries)

            logger.info(
                "Chunk %d/%d complete (entries %s to %s)",
                chunk_index,
                total_chunks,
                chunk[0].sequence_number,
                chunk[-1].sequence_number,
            )

        self._update(phase=PipelinePhase.ASSEMBLING, progress=ASSEMBLING_PROGRESS)
        translated_srt = reconstruct_srt(translated_entries)

        self._update(
            phase=PipelinePhase.COMPLETED,
            progress=100,
            current_chunk=total_chunks,
            translated_srt=translated_srt,
        )
        logger.info("Translation complete: %d entries translated", len(translated_entries))

        return translated_srt


async def translate_document(
    document: str | Sequence[SRTEntry],
    chunk_size: int | None,
    source_language: str | None,
    target_language: str,
    translate_fn: TranslateFn,
    on_progress: ProgressCallback | None = None,
    settings: Settings | None = None,
) -> str:
    """Run a single-use TranslationPipeline over ``document``."""
    pipeline = TranslationPipeline(
        translate_fn,
        target_language,
        source_language=source_language,
        chunk_size=chunk_size,
        on_progress=on_progress,
        settings=settings,
    )
    return await pipeline.run(document)
