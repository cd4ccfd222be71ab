"""
Credential Gate - decides whether a usable Gemini API key is configured.

The gate is injected into NewsroomSession, so tests and other front-ends
can swap in their own. Two sources are supported:

1. A KeySelector: an interactive, environment-provided mechanism
   (the Streamlit credential screen uses DotenvKeySelector).
2. Environment variables (GEMINI_API_KEY, GOOGLE_API_KEY, API_KEY, or the
   same names in .env) when no selector is available.

Presence is never cached: every call re-reads the source.
"""

import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional, Protocol, Union, runtime_checkable

from dotenv import set_key

from newsdesk.config import APIConfig, config
from newsdesk.exceptions import CredentialSelectionError
from newsdesk.utils.logging import get_logger

logger = get_logger(__name__)

# Where a key picked on the credential screen is exported
SELECTED_KEY_ENV_VAR = "GEMINI_API_KEY"


def resolve_api_key() -> Optional[str]:
    """Read the API key fresh from the environment and .env."""
    return APIConfig().resolved_key()


@runtime_checkable
class KeySelector(Protocol):
    """Environment-provided interactive key selection."""

    def has_selected_api_key(self) -> bool:
        ...

    def open_select_key(self) -> None:
        ...


class CredentialGate(ABC):
    """Boundary deciding whether an API credential is configured."""

    @abstractmethod
    def has_credential(self) -> bool:
        """Whether a usable credential is configured. Must not raise."""

    @abstractmethod
    def request_selection(self) -> None:
        """Start interactive selection.

        Raises:
            CredentialSelectionError: the flow could not start or was cancelled.

        Does not report whether the chosen key is valid; call
        has_credential() afterwards.
        """


class EnvironmentCredentialGate(CredentialGate):
    """Gate backed by an optional KeySelector, else environment variables."""

    def __init__(self, selector: Optional[KeySelector] = None):
        self.selector = selector

    def has_credential(self) -> bool:
        try:
            if self.selector is not None:
                return bool(self.selector.has_selected_api_key())
            return resolve_api_key() is not None
        except Exception as e:
            logger.warning("credential_check_failed", error=str(e))
            return False

    def request_selection(self) -> None:
        if self.selector is None:
            raise CredentialSelectionError("Interactive key selection is not available")
        try:
            self.selector.open_select_key()
        except CredentialSelectionError:
            raise
        except Exception as e:
            raise CredentialSelectionError(f"Key selection failed: {e}") from e


class DotenvKeySelector:
    """
    KeySelector fed by the credential screen.

    The screen stages whatever the user typed with ``stage()``;
    ``open_select_key()`` then writes it to .env with python-dotenv and
    exports it into the process environment so new Gemini clients see it.
    """

    def __init__(self, env_path: Optional[Union[str, Path]] = None,
                 env_var: str = SELECTED_KEY_ENV_VAR):
        self.env_path = Path(env_path) if env_path else config.ENV_FILE
        self.env_var = env_var
        self._pending: Optional[str] = None

    def stage(self, key: Optional[str]) -> None:
        """Remember the key typed on the credential screen."""
        self._pending = key.strip() if key else None

    def has_selected_api_key(self) -> bool:
        return resolve_api_key() is not None

    def open_select_key(self) -> None:
        key = self._pending
        self._pending = None
        if not key:
            raise CredentialSelectionError("No API key entered")

        # set_key needs the file to exist
        if not self.env_path.exists():
            self.env_path.touch()
        set_key(str(self.env_path), self.env_var, key)
        os.environ[self.env_var] = key
        logger.info("api_key_selected", env_var=self.env_var, env_file=str(self.env_path))
