"""
Agent package for The Insight Times newsroom.

The reporter writes the article, Nano Banana illustrates it and the
credential gate decides whether either may run.
"""

from .credential_gate import (
    CredentialGate,
    EnvironmentCredentialGate,
    DotenvKeySelector,
    KeySelector,
    resolve_api_key,
)
from .gemini_reporter import GeminiReporterAgent, extract_citations
from .nano_banana_client import NanoBananaClient, to_data_uri

__all__ = [
    'CredentialGate',
    'EnvironmentCredentialGate',
    'DotenvKeySelector',
    'KeySelector',
    'resolve_api_key',
    'GeminiReporterAgent',
    'extract_citations',
    'NanoBananaClient',
    'to_data_uri',
]
