"""Google GenAI translation provider for SRT chunks.

Sends a chunk as SRT text to a Gemini model and parses the reply back into
entries. The reply is not trusted: it may have fewer, more or reordered
entries, which the pipeline's reconciler sorts out.
"""

from collections.abc import Sequence
from functools import partial

from google import genai
from google.genai import types

from subtrans.core.config import Settings, get_settings
from subtrans.core.logging import get_logger
from subtrans.models.srt import SRTEntry
from subtrans.services.srt_parser import parse_srt, reconstruct_srt

logger = get_logger(__name__)

SYSTEM_INSTRUCTION = """You are a professional subtitle translator specialized in movie and \
TV subtitles. Your ONLY task is to translate SRT subtitle files from one language to another \
while keeping:

- EXACT original sequence numbers
- EXACT original timestamps (NEVER change any timing, millisecond values, or arrow format -->)
- Exact same number of text lines per block
- Exact same line breaks within each subtitle block

Rules you MUST strictly follow:
1. Translate ONLY the subtitle text. Never touch numbers, timestamps, or blank lines.
2. Keep translations natural, conversational, and idiomatic in the target language.
3. Make each subtitle line concise, aiming for fewer than 60 characters per line.
4. Preserve formatting tags if present (e.g. <i>italic text</i>, <b>, {\\an8}). Translate the \
content inside tags but keep the tags unchanged.
5. Proper names, brand names, and on-screen text references usually stay in original form.
6. Handle slang, idioms, and cultural references naturally; adapt meaning rather than \
translating word for word.
7. Output MUST be a valid, complete SRT file with the same structure as the input.
8. Do NOT add commentary, explanations, or summaries.
9. Respond ONLY with the translated SRT content."""


class GoogleGenAIError(Exception):
    """Custom exception for Google GenAI API errors."""

    pass


def _response_text(response) -> str:
    if (
        not response.candidates
        or not response.candidates[0].content
        or not response.candidates[0].content.parts
    ):
        raise GoogleGenAIError("Invalid response structure from API")

    translated_parts = [
        part.text for part in response.candidates[0].content.parts if part.text and not part.thought
    ]

    if not translated_parts:
        raise GoogleGenAIError("No translation returned from API")

    return "".join(translated_parts).strip()


async def translate_srt_chunk(
    entries: Sequence[SRTEntry],
    source_language: str | None,
    target_language: str,
    model: str | None = None,
    settings: Settings | None = None,
) -> list[SRTEntry]:
    """Translate a chunk of subtitle entries with a Gemini model.

    Args:
        entries: Consecutive subtitle entries to translate together
        source_language: Optional source language hint
        target_language: Target language (e.g., "Spanish", "French", "Japanese")
        model: Google GenAI model ID (default from settings)
        settings: Settings instance (optional, will use get_settings() if not provided)

    Returns:
        Entries parsed from the model's reply. The count and order are not
        guaranteed to match ``entries``.

    Raises:
        GoogleGenAIError: If API request fails or returns no usable text
        ValueError: If API key not configured
    """
    if settings is None:
        settings = get_settings()

    if not settings.google_api_key:
        raise ValueError(
            "GOOGLE_API_KEY not found in environment. "
            "Please set it in .env file or environment variables."
        )

    model = model or settings.default_model
    source_lang = source_language if source_language else "the source language"

    prompt = f"""Source language: {source_lang}
Target language: {target_language}
SRT content:
{reconstruct_srt(list(entries))}"""

    try:
        client = genai.Client(api_key=settings.google_api_key)

        response = await client.aio.models.generate_content(
            model=model,
            contents=prompt,
            config=types.GenerateContentConfig(
                system_instruction=SYSTEM_INSTRUCTION,
                temperature=settings.translation_temperature,
            ),
        )

        translated_entries = parse_srt(_response_text(response))

    except Exception as e:
        if isinstance(e, GoogleGenAIError):
            raise
        raise GoogleGenAIError(f"Error during chunk translation: {str(e)}") from e

    if len(translated_entries) != len(entries):
        logger.warning(
            "Model %s returned %d entries for a chunk of %d",
            model,
            len(translated_entries),
            len(entries),
        )

    return translated_entries


def build_translator(model: str | None = None, settings: Settings | None = None):
    """Return a pipeline-ready translate function bound to a model."""
    return partial(translate_srt_chunk, model=model, settings=settings)
