"""Merge provider output back into the original subtitle structure.

The provider is trusted for text only. Sequence numbers, timings, entry
count and order always come from the original chunk; returned entries are
matched to originals purely by position.
"""

from collections.abc import Sequence

from pydantic import BaseModel, Field

from subtrans.core.logging import get_logger
from subtrans.models.srt import SRTEntry

logger = get_logger(__name__)


class StructuralMismatch(BaseModel):
    """A chunk came back with a different number of entries than was sent."""

    chunk_index: int | None = Field(None, description="1-based chunk index, if known")
    expected: int = Field(..., description="Number of entries sent")
    received: int = Field(..., description="Number of entries returned")
    fallback_count: int = Field(
        ..., description="Entries kept in their original language because nothing came back"
    )


class ReconcileResult(BaseModel):
    """Reconciled entries for one chunk plus any mismatch that was absorbed."""

    entries: list[SRTEntry]
    mismatch: StructuralMismatch | None = None


def reconcile(
    original_chunk: Sequence[SRTEntry],
    returned_entries: Sequence[SRTEntry],
    chunk_index: int | None = None,
) -> ReconcileResult:
    """Apply returned text to the original entries by position.

    Args:
        original_chunk: Entries that were sent for translation
        returned_entries: Entries the provider returned, in any count
        chunk_index: Optional 1-based chunk index for logging

    Returns:
        ReconcileResult whose entries always have the same length, sequence
        numbers and timings as ``original_chunk``
    """
    reconciled = []
    for position, original in enumerate(original_chunk):
        if position < len(returned_entries):
            reconciled.append(original.with_text_lines(returned_entries[position].text_lines))
        else:
            reconciled.append(original)

    mismatch = None
    if len(returned_entries) != len(original_chunk):
        fallback_count = max(len(original_chunk) - len(returned_entries), 0)
        mismatch = StructuralMismatch(
            chunk_index=chunk_index,
            expected=len(original_chunk),
            received=len(returned_entries),
            fallback_count=fallback_count,
        )
        first_fallback = original_chunk[len(returned_entries)] if fallback_count else None
        logger.warning(
            "Entry count mismatch in chunk %s: expected %d, got %d "
            "(%d kept untranslated, first fallback %s)",
            chunk_index if chunk_index is not None else "?",
            mismatch.expected,
            mismatch.received,
            fallback_count,
            first_fallback.identity_key if first_fallback else "none",
        )

    return ReconcileResult(entries=reconciled, mismatch=mismatch)
