"""Pytest configuration and fixtures."""

from unittest.mock import AsyncMock, MagicMock, patch

from fastapi.testclient import TestClient
import pytest

from subtrans.core.config import Settings, get_settings
from subtrans.main import create_app
from subtrans.models.srt import SRTEntry

# ============================================================================
# Base Fixtures
# ============================================================================


def create_test_app():
    """Create the app with a configured Google GenAI key."""
    app = create_app()
    app.dependency_overrides[get_settings] = lambda: Settings(google_api_key="test_api_key")
    return app


@pytest.fixture
def client():
    """Create test client without authentication."""
    with patch("subtrans.core.security.settings") as mock_settings:
        mock_settings.api_key = None
        app = create_test_app()
        yield TestClient(app)


@pytest.fixture
def test_settings():
    """Settings with a provider key and small defaults."""
    return Settings(google_api_key="test_api_key", default_chunk_size=50)


# ============================================================================
# Sample Data Fixtures
# ============================================================================


@pytest.fixture
def sample_srt():
    """Sample SRT content for testing."""
    return """1
00:00:01,000 --> 00:00:04,000
Hello world

2
00:00:05,000 --> 00:00:08,000
How are you?"""


@pytest.fixture
def two_entry_srt():
    """Two single-line entries used by the pipeline scenarios."""
    return "1\n00:00:01,000 --> 00:00:02,000\nHello\n\n2\n00:00:03,000 --> 00:00:04,000\nWorld"


def make_entry(sequence_number, *text_lines, timing=None):
    """Build an SRTEntry with a timing derived from its sequence number."""
    if timing is None:
        timing = f"00:00:{sequence_number:02d},000 --> 00:00:{sequence_number:02d},900"
    return SRTEntry(sequence_number=sequence_number, timing=timing, text_lines=text_lines)


def make_entries(count, start=1):
    """Build ``count`` consecutive entries with text "Line <n>"."""
    return [make_entry(n, f"Line {n}") for n in range(start, start + count)]


# ============================================================================
# Translation Provider Test Doubles
# ============================================================================


class FakeTranslator:
    """In-memory translation provider.

    By default it prefixes every text line with the target language. Per-call
    responses can be scripted by 1-based call number, and one call can be
    made to fail.
    """

    def __init__(self, responses=None, fail_on=None, error=None):
        self.responses = responses or {}
        self.fail_on = fail_on
        self.error = error or RuntimeError("Provider unavailable")
        self.calls = []

    async def __call__(self, entries, source_language, target_language):
        self.calls.append((list(entries), source_language, target_language))
        call_number = len(self.calls)

        if call_number == self.fail_on:
            raise self.error
        if call_number in self.responses:
            return self.responses[call_number]

        return [
            entry.with_text_lines([f"[{target_language}] {line}" for line in entry.text_lines])
            for entry in entries
        ]


@pytest.fixture
def fake_translator():
    """Fake provider that translates every entry it receives."""
    return FakeTranslator()


@pytest.fixture
def mock_translate_chunk():
    """Patch the Gemini chunk translator used by the API routes."""

    async def translate(entries, source_language, target_language, model=None):
        return [entry.with_text_lines([f"ES: {entry.text}"]) for entry in entries]

    with patch("subtrans.api.v1.translation.translate_srt_chunk", new_callable=AsyncMock) as mock:
        mock.side_effect = translate
        yield mock


@pytest.fixture
def mock_translate_chunk_error():
    """Patch the Gemini chunk translator to fail."""
    from subtrans.services.translation import GoogleGenAIError

    with patch("subtrans.api.v1.translation.translate_srt_chunk", new_callable=AsyncMock) as mock:
        mock.side_effect = GoogleGenAIError("API quota exceeded")
        yield mock


# ============================================================================
# Authentication/Security Fixtures
# ============================================================================


@pytest.fixture
def client_no_auth():
    """Client with no API key configured."""
    with patch("subtrans.core.security.settings") as mock_settings:
        mock_settings.api_key = None
        app = create_test_app()
        yield TestClient(app)


@pytest.fixture
def client_with_auth():
    """Client with API key configured (no default headers)."""
    with patch("subtrans.core.security.settings") as mock_settings:
        mock_settings.api_key = "test_secret_key_12345"
        app = create_test_app()
        yield TestClient(app)


# ============================================================================
# Google GenAI Helpers
# ============================================================================


def create_genai_response(text_parts, include_thoughts=False):
    """Create a mock Google GenAI API response.

    Args:
        text_parts: List of text strings or single text string to return
        include_thoughts: Whether to include a thought part (should be filtered)

    Returns:
        Mock response object matching Google GenAI structure
    """
    if isinstance(text_parts, str):
        text_parts = [text_parts]

    parts = []

    if include_thoughts:
        thought_part = MagicMock()
        thought_part.text = "Internal reasoning..."
        thought_part.thought = True
        parts.append(thought_part)

    for text in text_parts:
        text_part = MagicMock()
        text_part.text = text
        text_part.thought = False
        parts.append(text_part)

    response = MagicMock()
    response.candidates = [MagicMock(content=MagicMock(parts=parts))]
    return response


@pytest.fixture
def mock_genai_client():
    """Mock Google GenAI client."""
    with patch("subtrans.services.translation.genai.Client") as mock_client:
        yield mock_client


def configure_genai_response(mock_genai_client, response=None, side_effect=None):
    """Make the mocked client's generate_content return ``response``."""
    mock_instance = MagicMock()
    mock_instance.aio.models.generate_content = AsyncMock(
        return_value=response, side_effect=side_effect
    )
    mock_genai_client.return_value = mock_instance
    return mock_instance.aio.models.generate_content
