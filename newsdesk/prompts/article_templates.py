"""
Reporter prompt templates.

Use build_article_prompt(topic) to get the assignment sent to the
search-grounded text model.
"""
from datetime import date
from typing import Optional

from newsdesk.config import config
from newsdesk.utils.datetime_utils import press_date


REPORTER_PERSONA = """
You are a senior investigative journalist for "{publication}", a prestigious newspaper similar to the New York Times.
"""

ARTICLE_ASSIGNMENT = """
Your assignment is to write a feature story about: "{topic}".

Use the Google Search tool to research the latest information about this topic from the last {months} months.

After gathering information, write a journalistic piece.

CRITICAL: Return the response strictly as a JSON object. Do not include Markdown formatting like ```json at the start or end. Just the raw JSON string.

The JSON structure must be:
{{
  "headline": "A catchy, NYT-style headline",
  "subheadline": "A descriptive subhead",
  "author": "A fictional journalist name",
  "location": "City, Country (relevant to story)",
  "date": "Today's date, {today}, formatted exactly like that",
  "paragraphs": ["Paragraph 1...", "Paragraph 2...", "Paragraph 3..."],
  "imagePrompt": "A highly detailed, photorealistic visual description of a scene representing the story, suitable for an AI image generator. Do not include text in the image."
}}
"""


def build_article_prompt(topic: str, today: Optional[date] = None) -> str:
    """Persona plus assignment for one topic."""
    newsroom = config.newsroom
    persona = REPORTER_PERSONA.format(publication=newsroom.PUBLICATION_NAME)
    assignment = ARTICLE_ASSIGNMENT.format(
        topic=topic,
        months=newsroom.RESEARCH_WINDOW_MONTHS,
        today=press_date(today),
    )
    return f"{persona.strip()}\n\n{assignment.strip()}"
