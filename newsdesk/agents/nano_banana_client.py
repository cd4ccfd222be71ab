"""
Nano Banana Client - article illustrations via the Gemini image model.

Illustrations are nice to have, so this client never raises: on any failure,
or when the reply carries no image, it returns the configured placeholder URL
so the article can still be displayed.

Usage:
    from newsdesk.agents.nano_banana_client import NanoBananaClient

    client = NanoBananaClient()
    image_url = await client.generate_image(article.image_prompt)
"""

import base64
import re
from typing import Dict, Optional

from google import genai
from google.genai import types

from newsdesk.agents.credential_gate import resolve_api_key
from newsdesk.config import config
from newsdesk.utils.logging import get_logger

logger = get_logger(__name__)


def to_data_uri(data, mime_type: Optional[str] = None) -> str:
    """Encode inline image data as a data URI.

    The SDK hands back raw bytes; an already base64-encoded str is
    embedded unchanged.
    """
    mime_type = mime_type or config.image.DEFAULT_MIME_TYPE
    if isinstance(data, (bytes, bytearray)):
        payload = base64.b64encode(bytes(data)).decode("ascii")
    else:
        payload = str(data)
    return f"data:{mime_type};base64,{payload}"


class NanoBananaClient:
    """
    Client for Gemini image generation ("Nano Banana Pro").

    Supports:
        - One request per prompt, fixed aspect ratio and size tier
        - Categorized error logging
        - Placeholder fallback instead of exceptions
    """

    def __init__(
        self,
        model: Optional[str] = None,
        aspect_ratio: Optional[str] = None,
        image_size: Optional[str] = None,
        fallback_url: Optional[str] = None,
        client: Optional[genai.Client] = None,
    ):
        """
        Args:
            model: Model to use. Defaults to config.models.IMAGE_MODEL.
            aspect_ratio: "16:9" by default.
            image_size: Resolution tier ("1K", "2K", "4K"). "2K" by default.
            fallback_url: Placeholder returned when no image is produced.
            client: Optional pre-built genai client. A fresh one is built
                per request otherwise, so a newly selected key is used.
        """
        self.model = model or config.models.IMAGE_MODEL
        self.aspect_ratio = aspect_ratio or config.image.ASPECT_RATIO
        self.image_size = image_size or config.image.IMAGE_SIZE
        self.fallback_url = fallback_url or config.image.FALLBACK_IMAGE_URL
        self._client = client

    def _get_client(self) -> genai.Client:
        if self._client is not None:
            return self._client
        return genai.Client(api_key=resolve_api_key())

    def _parse_error(self, exception: Exception) -> Dict:
        """
        Categorize an API exception for the diagnostic log.

        Returns dict with: error_type, error_code, error_status, message
        """
        error_str = str(exception)

        result = {
            "error_type": "unknown",
            "error_code": getattr(exception, "code", None),
            "error_status": getattr(exception, "status", None),
            "message": error_str,
        }

        # Extract error code if the exception didn't carry one
        if result["error_code"] is None:
            code_match = re.search(r'\b(\d{3})\b', error_str)
            if code_match:
                result["error_code"] = int(code_match.group(1))

        error_upper = error_str.upper()
        code = result["error_code"]

        if "billed users" in error_str.lower() or "billing" in error_str.lower():
            result["error_type"] = "billing"
            result["message"] = "Billing/quota issue - image model requires a billed account"

        elif code == 429 or "RESOURCE_EXHAUSTED" in error_upper or "quota" in error_str.lower():
            result["error_type"] = "rate_limit"
            result["message"] = "Rate limit or quota exceeded"

        elif "SAFETY" in error_upper or "blocked" in error_str.lower():
            result["error_type"] = "safety"
            result["message"] = "Content blocked by safety filter"

        elif code == 404 or "NOT_FOUND" in error_upper:
            result["error_type"] = "model_not_found"
            result["message"] = f"Model not found: {self.model}"

        elif code == 401 or "UNAUTHENTICATED" in error_upper:
            result["error_type"] = "auth"
            result["message"] = "Authentication failed - check API key"

        elif code == 403 or "PERMISSION_DENIED" in error_upper:
            result["error_type"] = "permission"
            result["message"] = "Permission denied - check API key permissions"

        elif (code is not None and 500 <= code < 600) or "INTERNAL" in error_upper:
            result["error_type"] = "server"
            result["message"] = "Google server error"

        return result

    async def generate_image(self, prompt: str) -> str:
        """
        Generate one illustration for a prompt.

        Args:
            prompt: Visual description, usually ArticleRecord.image_prompt.

        Returns:
            A data URI embedding the image, or the fallback URL when the
            request fails or the reply holds no image. Never raises.
        """
        log = logger.bind(model=self.model, prompt=prompt[:80] if prompt else "")

        try:
            response = await self._get_client().aio.models.generate_content(
                model=self.model,
                contents=types.Content(
                    role="user",
                    parts=[types.Part(text=prompt)],
                ),
                config=types.GenerateContentConfig(
                    image_config=types.ImageConfig(
                        aspect_ratio=self.aspect_ratio,
                        image_size=self.image_size,
                    ),
                ),
            )

            candidates = getattr(response, "candidates", None) or []
            content = getattr(candidates[0], "content", None) if candidates else None
            for part in getattr(content, "parts", None) or []:
                inline_data = getattr(part, "inline_data", None)
                if inline_data is not None and getattr(inline_data, "data", None):
                    log.info("image_generated", mime_type=getattr(inline_data, "mime_type", None))
                    return to_data_uri(inline_data.data, getattr(inline_data, "mime_type", None))

            log.warning("image_missing", error_type="empty_response")

        except Exception as e:
            error_info = self._parse_error(e)
            log.error(
                "image_generation_failed",
                error_type=error_info["error_type"],
                error_code=error_info["error_code"],
                error_status=error_info["error_status"],
                message=error_info["message"],
                raw=str(e)[:500],
            )

        return self.fallback_url
