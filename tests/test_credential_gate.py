"""
Tests for the credential gate and the .env-backed key selector.

Run with: pytest tests/test_credential_gate.py -v
"""

import os
from unittest.mock import MagicMock

import pytest
from dotenv import dotenv_values

from newsdesk.agents.credential_gate import (
    DotenvKeySelector,
    EnvironmentCredentialGate,
    KeySelector,
    resolve_api_key,
)
from newsdesk.exceptions import CredentialSelectionError


class TestResolveApiKey:
    """Key lookup is fresh on every call."""

    def test_none_when_unset(self, no_api_keys):
        assert resolve_api_key() is None

    def test_picks_up_key_set_later(self, no_api_keys, monkeypatch):
        assert resolve_api_key() is None
        monkeypatch.setenv("API_KEY", "late-key")
        assert resolve_api_key() == "late-key"

    def test_priority_order(self, no_api_keys, monkeypatch):
        monkeypatch.setenv("API_KEY", "generic")
        monkeypatch.setenv("GOOGLE_API_KEY", "google")
        assert resolve_api_key() == "google"
        monkeypatch.setenv("GEMINI_API_KEY", "gemini")
        assert resolve_api_key() == "gemini"

    def test_whitespace_key_ignored(self, no_api_keys, monkeypatch):
        monkeypatch.setenv("GEMINI_API_KEY", "   ")
        assert resolve_api_key() is None

    def test_reads_dotenv_in_working_directory(self, no_api_keys, monkeypatch):
        for var in ("GEMINI_API_KEY", "GOOGLE_API_KEY", "API_KEY"):
            monkeypatch.delenv(var)
        (no_api_keys / ".env").write_text("GOOGLE_API_KEY=from-dotenv\n")
        assert resolve_api_key() == "from-dotenv"


class TestEnvironmentGateWithoutSelector:
    """Fallback to environment variables."""

    def test_absent(self, no_api_keys):
        assert EnvironmentCredentialGate().has_credential() is False

    def test_present(self, no_api_keys, monkeypatch):
        monkeypatch.setenv("GEMINI_API_KEY", "key")
        assert EnvironmentCredentialGate().has_credential() is True

    def test_selection_unavailable(self):
        with pytest.raises(CredentialSelectionError):
            EnvironmentCredentialGate().request_selection()


class TestEnvironmentGateWithSelector:
    """Selector takes precedence and its failures are contained."""

    def test_uses_selector(self):
        selector = MagicMock(spec=["has_selected_api_key", "open_select_key"])
        selector.has_selected_api_key.return_value = True
        assert EnvironmentCredentialGate(selector).has_credential() is True

    def test_selector_error_means_no_credential(self):
        selector = MagicMock(spec=["has_selected_api_key", "open_select_key"])
        selector.has_selected_api_key.side_effect = RuntimeError("bridge gone")
        assert EnvironmentCredentialGate(selector).has_credential() is False

    def test_selection_failure_wrapped(self):
        selector = MagicMock(spec=["has_selected_api_key", "open_select_key"])
        selector.open_select_key.side_effect = RuntimeError("popup blocked")
        with pytest.raises(CredentialSelectionError) as exc_info:
            EnvironmentCredentialGate(selector).request_selection()
        assert isinstance(exc_info.value.__cause__, RuntimeError)

    def test_selection_delegates(self):
        selector = MagicMock(spec=["has_selected_api_key", "open_select_key"])
        EnvironmentCredentialGate(selector).request_selection()
        selector.open_select_key.assert_called_once()


class TestDotenvKeySelector:
    """Credential screen selector."""

    def test_is_a_key_selector(self, tmp_path):
        assert isinstance(DotenvKeySelector(env_path=tmp_path / ".env"), KeySelector)

    def test_open_without_staged_key_is_cancelled(self, tmp_path):
        selector = DotenvKeySelector(env_path=tmp_path / ".env")
        with pytest.raises(CredentialSelectionError):
            selector.open_select_key()
        selector.stage("   ")
        with pytest.raises(CredentialSelectionError):
            selector.open_select_key()
        assert not (tmp_path / ".env").exists()

    def test_open_persists_and_exports_key(self, no_api_keys):
        env_file = no_api_keys / "newsdesk.env"
        selector = DotenvKeySelector(env_path=env_file)
        assert selector.has_selected_api_key() is False

        selector.stage("  secret-key  ")
        selector.open_select_key()

        assert dotenv_values(env_file)["GEMINI_API_KEY"] == "secret-key"
        assert os.environ["GEMINI_API_KEY"] == "secret-key"
        assert selector.has_selected_api_key() is True

    def test_staged_key_is_consumed(self, no_api_keys):
        selector = DotenvKeySelector(env_path=no_api_keys / ".env")
        selector.stage("secret-key")
        selector.open_select_key()
        with pytest.raises(CredentialSelectionError):
            selector.open_select_key()

    def test_gate_round_trip(self, no_api_keys):
        selector = DotenvKeySelector(env_path=no_api_keys / "keys.env")
        gate = EnvironmentCredentialGate(selector)
        assert gate.has_credential() is False

        selector.stage("secret-key")
        gate.request_selection()

        assert gate.has_credential() is True


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
