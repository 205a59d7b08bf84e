"""SRT subtitle file parser and reconstructor.

Handles parsing SRT content into subtitle entries and reconstructing the
SRT text from entries while keeping sequence numbers and timings exactly as
they were read.

Parsing is tolerant per block: blocks that don't look like an SRT entry are
skipped rather than reported. An empty result is how callers learn that the
content was not a subtitle file at all.
"""

import re

from subtrans.core.logging import get_logger
from subtrans.models.srt import SRTEntry

logger = get_logger(__name__)

TIMING_SEPARATOR = "-->"

# A blank line ends a block, so any run of two or more newlines is a boundary
_BLOCK_SEPARATOR = re.compile(r"\n{2,}")
_SEQUENCE_NUMBER = re.compile(r"^\d+$")


def _parse_block(block: str) -> SRTEntry | None:
    """Build an entry from one block, or return None if it isn't one."""
    lines = block.strip().split("\n")
    if len(lines) < 3:
        return None

    sequence_number = lines[0].strip()
    timing = lines[1].strip()
    if not _SEQUENCE_NUMBER.match(sequence_number) or TIMING_SEPARATOR not in timing:
        return None

    return SRTEntry(
        sequence_number=int(sequence_number),
        timing=timing,
        text_lines=tuple(lines[2:]),
    )


def parse_srt(content: str) -> list[SRTEntry]:
    """Parse SRT content into a list of subtitle entries.

    Args:
        content: Raw SRT file content as string

    Returns:
        List of SRTEntry objects in file order. Malformed blocks are dropped,
        so the list is empty when nothing in the content is a valid entry.
    """
    if not content or not content.strip():
        return []

    normalized = content.replace("\r\n", "\n")

    entries = []
    skipped = 0
    for block in _BLOCK_SEPARATOR.split(normalized):
        if not block.strip():
            continue
        entry = _parse_block(block)
        if entry is None:
            skipped += 1
            logger.debug("Skipping malformed SRT block: %r", block[:80])
            continue
        entries.append(entry)

    if skipped:
        logger.info("Parsed %d SRT entries (%d malformed blocks skipped)", len(entries), skipped)

    return entries


def _render_entry(entry: SRTEntry) -> str:
    return "\n".join([str(entry.sequence_number), entry.timing, *entry.text_lines])


def reconstruct_srt(entries: list[SRTEntry]) -> str:
    """Reconstruct SRT format from list of entries.

    Args:
        entries: List of SRTEntry objects

    Returns:
        SRT formatted string with entries separated by a single blank line
    """
    return "\n\n".join(_render_entry(entry) for entry in entries)
