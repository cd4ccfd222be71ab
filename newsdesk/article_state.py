"""
Article State Schema - Pydantic models for the newsroom session.

Defines the article produced by the reporter, its grounding citations,
the session state enum and the read-only snapshot handed to observers.

Usage:
    from newsdesk.article_state import ArticleRecord, Citation, AppState
"""

from typing import List, Optional
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class AppState(Enum):
    """Session state. Exactly one is active at a time."""
    IDLE = "idle"
    AWAITING_CREDENTIAL = "awaiting_credential"
    SEARCHING_TEXT = "searching_text"           # Article request in flight
    GENERATING_IMAGE = "generating_image"       # Illustration request in flight
    DISPLAY = "display"
    ERROR = "error"

    @property
    def is_busy(self) -> bool:
        """True while a generation request is in flight."""
        return self in (AppState.SEARCHING_TEXT, AppState.GENERATING_IMAGE)


class Citation(BaseModel):
    """A web page used as grounding evidence."""
    model_config = ConfigDict(frozen=True)

    title: str = Field(min_length=1)
    uri: str = Field(min_length=1)


class ArticleRecord(BaseModel):
    """
    A generated newspaper article.

    Parsed from the model's JSON reply, which uses the camelCase key
    ``imagePrompt``; the Python attribute is ``image_prompt``. Sources are
    attached after parsing from the response's grounding metadata.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    headline: str
    subheadline: str
    author: str
    location: str
    date: str
    paragraphs: List[str] = Field(min_length=1)
    image_prompt: str = Field(alias="imagePrompt", min_length=1)
    sources: List[Citation] = Field(default_factory=list)

    @property
    def byline(self) -> str:
        return f"By {self.author}"

    @property
    def dateline(self) -> str:
        return f"{self.location.upper()} - {self.date}"


class SessionSnapshot(BaseModel):
    """
    Read-only view of a session for the presentation layer.

    ``article`` and ``image_url`` are only populated in DISPLAY and
    ``error`` only in ERROR; use ``from_session`` to build one.
    """
    model_config = ConfigDict(frozen=True)

    state: AppState
    topic: str = ""
    has_credential: bool = False
    article: Optional[ArticleRecord] = None
    image_url: Optional[str] = None
    error: Optional[str] = None
    status_caption: Optional[str] = None

    @classmethod
    def from_session(cls, state: AppState, topic: str, has_credential: bool,
                     article: Optional[ArticleRecord], image_url: Optional[str],
                     error: Optional[str], status_caption: Optional[str] = None) -> "SessionSnapshot":
        displaying = state is AppState.DISPLAY
        return cls(
            state=state,
            topic=topic,
            has_credential=has_credential,
            article=article if displaying else None,
            image_url=image_url if displaying else None,
            error=error if state is AppState.ERROR else None,
            status_caption=status_caption if state.is_busy else None,
        )
