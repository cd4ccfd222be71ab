"""Shared fakes for Gemini responses and credential gates."""

import json
import sys
from pathlib import Path
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from newsdesk.agents.credential_gate import CredentialGate  # noqa: E402
from newsdesk.exceptions import CredentialSelectionError  # noqa: E402

API_KEY_VARS = ("GEMINI_API_KEY", "GOOGLE_API_KEY", "API_KEY")

STARSHIP_ARTICLE = {
    "headline": "X",
    "subheadline": "Y",
    "author": "A",
    "location": "L",
    "date": "D",
    "paragraphs": ["p1", "p2"],
    "imagePrompt": "a rocket",
}


def text_response(text, chunks=()):
    """Fake grounded reply. ``chunks`` is a list of (uri, title) or None for a non-web chunk."""
    grounding_chunks = [
        SimpleNamespace(web=None) if c is None else SimpleNamespace(web=SimpleNamespace(uri=c[0], title=c[1]))
        for c in chunks
    ]
    candidate = SimpleNamespace(
        grounding_metadata=SimpleNamespace(grounding_chunks=grounding_chunks)
    )
    return SimpleNamespace(text=text, candidates=[candidate])


def image_response(*parts):
    """Fake image reply with the given content parts."""
    candidate = SimpleNamespace(content=SimpleNamespace(parts=list(parts)))
    return SimpleNamespace(candidates=[candidate])


def inline_part(data=b"\x89PNG\r\n", mime_type="image/png"):
    return SimpleNamespace(text=None, inline_data=SimpleNamespace(data=data, mime_type=mime_type))


def text_part(text="Here is your image"):
    return SimpleNamespace(text=text, inline_data=None)


def fake_client(return_value=None, side_effect=None):
    """genai.Client stand-in whose aio.models.generate_content is awaitable."""
    client = MagicMock()
    client.aio.models.generate_content = AsyncMock(return_value=return_value, side_effect=side_effect)
    return client


class FakeGate(CredentialGate):
    """Credential gate with a switchable key and scripted selection outcome."""

    def __init__(self, present=True, grant_on_select=True, fail_selection=False):
        self.present = present
        self.grant_on_select = grant_on_select
        self.fail_selection = fail_selection
        self.checks = 0
        self.selections = 0

    def has_credential(self) -> bool:
        self.checks += 1
        return self.present

    def request_selection(self) -> None:
        self.selections += 1
        if self.fail_selection:
            raise CredentialSelectionError("cancelled")
        if self.grant_on_select:
            self.present = True


@pytest.fixture
def no_api_keys(monkeypatch, tmp_path):
    """No key in the environment and no .env in the working directory."""
    for var in API_KEY_VARS:
        monkeypatch.setenv(var, "")
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def starship_json():
    return json.dumps(STARSHIP_ARTICLE)
