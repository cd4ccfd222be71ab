"""
Gemini Reporter Agent - writes a newspaper article using Google Search Grounding.

The reporter sends one grounded request per topic:
1. Gemini researches the topic with live Google Search results
2. The reply is a JSON article (headline, body, image prompt, ...)
3. groundingMetadata supplies the citation list

JSON mode (response_mime_type) is not allowed together with the
google_search tool, so the reply is free text and is cleaned up and
parsed strictly here.
"""

from typing import List, Optional

from google import genai
from google.genai import types
from pydantic import ValidationError

from newsdesk.article_state import ArticleRecord, Citation
from newsdesk.agents.credential_gate import resolve_api_key
from newsdesk.config import config
from newsdesk.exceptions import GenerationFailedError
from newsdesk.prompts import build_article_prompt
from newsdesk.utils.json_parser import parse_llm_json
from newsdesk.utils.logging import get_logger

logger = get_logger(__name__)


def extract_citations(response) -> List[Citation]:
    """Citations from the first candidate's grounding chunks.

    Chunks missing a title or uri are skipped. Order is kept and
    duplicates are not removed.
    """
    candidates = getattr(response, "candidates", None) or []
    if not candidates:
        return []

    metadata = getattr(candidates[0], "grounding_metadata", None)
    chunks = getattr(metadata, "grounding_chunks", None) or []

    sources = []
    for chunk in chunks:
        web = getattr(chunk, "web", None)
        uri = getattr(web, "uri", None)
        title = getattr(web, "title", None)
        if uri and title:
            sources.append(Citation(title=title, uri=uri))
    return sources


class GeminiReporterAgent:
    """
    Article generation client powered by Gemini with Google Search Grounding.

    A fresh genai.Client is built for every request so a key selected
    mid-session is picked up. Pass ``client`` to pin one (tests).
    """

    def __init__(self, model: Optional[str] = None, client: Optional[genai.Client] = None):
        """
        Args:
            model: Gemini model to use (must support google_search tool).
                   Defaults to config.models.TEXT_MODEL.
            client: Optional pre-built client.
        """
        self.model = model or config.models.TEXT_MODEL
        self._client = client

        # Configure grounding tool
        self.grounding_tool = types.Tool(
            google_search=types.GoogleSearch()
        )

    def _get_client(self) -> genai.Client:
        if self._client is not None:
            return self._client
        return genai.Client(api_key=resolve_api_key())

    async def generate_article(self, topic: str) -> ArticleRecord:
        """
        Research a topic and write it up as a newspaper article.

        Args:
            topic: What the story is about. Must not be blank.

        Returns:
            ArticleRecord with sources taken from grounding metadata.

        Raises:
            ValueError: topic is blank.
            GenerationFailedError: anything went wrong with the request or
                its reply. The message is generic; the cause is chained.
        """
        if not topic or not topic.strip():
            raise ValueError("topic must not be empty")

        log = logger.bind(topic=topic, model=self.model)
        prompt = build_article_prompt(topic)

        try:
            response = await self._get_client().aio.models.generate_content(
                model=self.model,
                contents=prompt,
                config=types.GenerateContentConfig(
                    tools=[self.grounding_tool],
                ),
            )
        except Exception as e:
            log.error("article_request_failed", error=str(e), error_class=type(e).__name__)
            raise GenerationFailedError(config.newsroom.GENERATION_FAILED_MESSAGE) from e

        text = ""
        try:
            sources = extract_citations(response)
            text = getattr(response, "text", None) or ""
            data = parse_llm_json(text)
            if not isinstance(data, dict):
                raise TypeError(f"Expected a JSON object, got {type(data).__name__}")

            article = ArticleRecord.model_validate({**data, "sources": sources})

        except (ValidationError, ValueError, TypeError) as e:
            # json.JSONDecodeError is a ValueError
            log.error("article_parse_failed", error=str(e), raw_response=text[:500])
            raise GenerationFailedError(config.newsroom.GENERATION_FAILED_MESSAGE) from e
        except Exception as e:
            log.error("article_extraction_failed", error=str(e), error_class=type(e).__name__)
            raise GenerationFailedError(config.newsroom.GENERATION_FAILED_MESSAGE) from e

        log.info(
            "article_generated",
            headline=article.headline,
            paragraphs=len(article.paragraphs),
            sources=len(article.sources),
        )
        return article
