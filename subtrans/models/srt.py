"""SRT subtitle entry model."""

from pydantic import BaseModel, ConfigDict, field_validator


class SRTEntry(BaseModel):
    """Represents a single subtitle entry.

    Entries are immutable. Translation produces a new entry through
    ``with_text_lines`` so the sequence number and timing never change.
    """

    model_config = ConfigDict(frozen=True)

    sequence_number: int
    timing: str
    text_lines: tuple[str, ...] = ()

    @field_validator("timing")
    @classmethod
    def _timing_has_separator(cls, value: str) -> str:
        if "-->" not in value:
            raise ValueError(f"Timing must contain '-->': {value!r}")
        return value

    @property
    def identity_key(self) -> str:
        """Correlation key for log messages."""
        return f"{self.sequence_number}-{self.timing}"

    @property
    def text(self) -> str:
        return "\n".join(self.text_lines)

    def with_text_lines(self, text_lines) -> "SRTEntry":
        """Return a copy of this entry carrying different text lines."""
        return SRTEntry(
            sequence_number=self.sequence_number,
            timing=self.timing,
            text_lines=tuple(text_lines),
        )

    def __repr__(self) -> str:
        return f"SRTEntry(index={self.sequence_number}, time={self.timing})"
