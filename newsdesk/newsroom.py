"""
Newsroom Session - the state machine behind one reader's visit.

Sequences credential gate -> article generation -> image generation ->
display, and maps failures to the ERROR state. One session per browser
session; the Streamlit app keeps it in ``st.session_state``.

States:
    idle                - waiting for a topic
    awaiting_credential - no API key; sticky until one is present
    searching_text      - article request in flight
    generating_image    - illustration request in flight
    display             - article and image ready
    error               - article generation failed; reader may retry

Usage:
    session = NewsroomSession(EnvironmentCredentialGate(), GeminiReporterAgent(), NanoBananaClient())
    await session.submit("SpaceX Starship")
    snapshot = session.snapshot()
"""

from typing import Callable, Optional, Protocol

from newsdesk.article_state import AppState, ArticleRecord, SessionSnapshot
from newsdesk.agents.credential_gate import CredentialGate
from newsdesk.config import config
from newsdesk.exceptions import CredentialSelectionError, GenerationFailedError
from newsdesk.utils.logging import get_logger

logger = get_logger(__name__)

StateListener = Callable[[SessionSnapshot], None]


class ArticleWriter(Protocol):
    async def generate_article(self, topic: str) -> ArticleRecord:
        ...


class Illustrator(Protocol):
    async def generate_image(self, prompt: str) -> str:
        ...


class NewsroomSession:
    """
    Explicit per-session context object owning all application state.

    Collaborators are injected so the session can be driven with fakes.
    ``on_change`` is called with a fresh SessionSnapshot after every
    transition; the presentation layer only observes through it.
    """

    def __init__(
        self,
        gate: CredentialGate,
        reporter: ArticleWriter,
        illustrator: Illustrator,
        on_change: Optional[StateListener] = None,
    ):
        self.gate = gate
        self.reporter = reporter
        self.illustrator = illustrator
        self.on_change = on_change

        self.state = AppState.IDLE
        self.topic = ""
        self.article: Optional[ArticleRecord] = None
        self.image_url: Optional[str] = None
        self.error: Optional[str] = None
        self.has_credential = False

        # Startup check decides between IDLE and AWAITING_CREDENTIAL
        self.verify_credential()

    # -- Observation ---------------------------------------------------------

    @property
    def is_busy(self) -> bool:
        return self.state.is_busy

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot.from_session(
            state=self.state,
            topic=self.topic,
            has_credential=self.has_credential,
            article=self.article,
            image_url=self.image_url,
            error=self.error,
            status_caption=config.newsroom.STATUS_CAPTIONS.get(self.state.value),
        )

    def _transition(self, new_state: AppState) -> None:
        old_state = self.state
        self.state = new_state
        logger.info("session_transition", old=old_state.value, new=new_state.value)
        if self.on_change is not None:
            self.on_change(self.snapshot())

    # -- Credential gating ---------------------------------------------------

    def verify_credential(self) -> bool:
        """Re-check the credential and adjust the state.

        Absent moves to AWAITING_CREDENTIAL; present leaves every state
        alone except AWAITING_CREDENTIAL, which becomes IDLE.
        """
        self.has_credential = self.gate.has_credential()
        if not self.has_credential:
            if self.state is not AppState.AWAITING_CREDENTIAL:
                self._transition(AppState.AWAITING_CREDENTIAL)
        elif self.state is AppState.AWAITING_CREDENTIAL:
            self._transition(AppState.IDLE)
        return self.has_credential

    def request_credential(self) -> bool:
        """Run interactive selection, then re-check whatever happened."""
        if self.state is not AppState.AWAITING_CREDENTIAL:
            logger.debug("credential_request_ignored", state=self.state.value)
            return self.has_credential

        try:
            self.gate.request_selection()
        except CredentialSelectionError as e:
            logger.warning("credential_selection_failed", error=str(e))
        return self.verify_credential()

    # -- Search flow ---------------------------------------------------------

    async def submit(self, topic: str) -> bool:
        """
        Investigate a topic: article first, then its illustration.

        Returns:
            True if a search ran (ending in DISPLAY or ERROR); False if the
            submission was rejected: blank topic, a search already in
            flight, or no credential (state becomes AWAITING_CREDENTIAL).
        """
        if not topic or not topic.strip():
            return False

        if self.is_busy:
            logger.warning("submission_rejected_in_flight", state=self.state.value, topic=topic)
            return False

        self.topic = topic
        if not self.verify_credential():
            logger.info("submission_blocked_no_credential", topic=topic)
            return False

        self.article = None
        self.image_url = None
        self.error = None

        try:
            self._transition(AppState.SEARCHING_TEXT)

            # 1. Generate text
            article = await self.reporter.generate_article(topic)
            self.article = article

            # 2. Generate image (failures come back as the fallback URL)
            self._transition(AppState.GENERATING_IMAGE)
            self.image_url = await self.illustrator.generate_image(article.image_prompt)

            self._transition(AppState.DISPLAY)
            return True

        except GenerationFailedError as e:
            logger.error("search_failed", topic=topic, error=str(e), cause=repr(e.__cause__))
            self._fail(str(e))
            return True
        except Exception as e:
            logger.exception("search_failed_unexpectedly", topic=topic, error=str(e))
            self._fail(config.newsroom.UNEXPECTED_ERROR_MESSAGE)
            return True
        finally:
            # Cancellation and Streamlit's rerun/stop signals are BaseExceptions
            if self.is_busy:
                self.abandon_search()

    def abandon_search(self) -> None:
        """Drop a search that will never finish and move to ERROR.

        Used when the search was interrupted mid-flight, and by the app when
        a rerun finds the session still busy. Observers are not notified;
        the interrupted caller is already unwinding.
        """
        if not self.is_busy:
            return
        logger.warning("search_abandoned", state=self.state.value, topic=self.topic)
        self.article = None
        self.image_url = None
        self.error = config.newsroom.UNEXPECTED_ERROR_MESSAGE
        self.state = AppState.ERROR

    def _fail(self, message: str) -> None:
        self.article = None
        self.image_url = None
        self.error = message or config.newsroom.UNEXPECTED_ERROR_MESSAGE
        self._transition(AppState.ERROR)

    def reset(self) -> None:
        """Back to the front page with everything cleared."""
        if self.is_busy or self.state is AppState.AWAITING_CREDENTIAL:
            logger.warning("reset_rejected", state=self.state.value)
            return
        self.topic = ""
        self.article = None
        self.image_url = None
        self.error = None
        self._transition(AppState.IDLE)
