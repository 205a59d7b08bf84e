"""Subtitle document API: parse, translate and serialize SRT documents."""

from subtrans.services.chunker import InvalidChunkSizeError, chunk_entries
from subtrans.services.pipeline import (
    ChunkTranslationError,
    EmptyOrInvalidInputError,
    PipelinePhase,
    TranslationCancelledError,
    TranslationPipeline,
    TranslationPipelineError,
    TranslationStatus,
    translate_document,
)
from subtrans.services.reconciler import ReconcileResult, StructuralMismatch, reconcile
from subtrans.services.srt_parser import parse_srt, reconstruct_srt

parse_document = parse_srt
serialize_document = reconstruct_srt

__all__ = [
    "parse_document",
    "serialize_document",
    "translate_document",
    "parse_srt",
    "reconstruct_srt",
    "chunk_entries",
    "reconcile",
    "ReconcileResult",
    "StructuralMismatch",
    "TranslationPipeline",
    "TranslationStatus",
    "PipelinePhase",
    "TranslationPipelineError",
    "EmptyOrInvalidInputError",
    "ChunkTranslationError",
    "TranslationCancelledError",
    "InvalidChunkSizeError",
]
