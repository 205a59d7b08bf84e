"""Split subtitle entries into batches for the translation provider."""

from collections.abc import Sequence

from subtrans.models.srt import SRTEntry


class InvalidChunkSizeError(ValueError):
    """Raised when a batch size is not a positive integer."""

    pass


def validate_chunk_size(size) -> int:
    """Return ``size`` if it is a usable batch size, raise otherwise."""
    # bool is an int subclass but never a meaningful size
    if isinstance(size, bool) or not isinstance(size, int) or size <= 0:
        raise InvalidChunkSizeError(f"Chunk size must be a positive integer, got {size!r}")
    return size


def chunk_entries(entries: Sequence[SRTEntry], size: int) -> list[list[SRTEntry]]:
    """Partition entries into consecutive chunks of at most ``size``.

    Args:
        entries: Entries in document order
        size: Maximum number of entries per chunk

    Returns:
        List of chunks in order; the last chunk may be smaller. Empty input
        gives an empty list.

    Raises:
        InvalidChunkSizeError: If size is not a positive integer
    """
    size = validate_chunk_size(size)
    return [list(entries[i : i + size]) for i in range(0, len(entries), size)]
