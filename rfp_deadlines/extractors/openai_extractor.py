"""Candidate extractor backed by the OpenAI chat completions API.

Requires ``OPENAI_API_KEY``; the model defaults to ``gpt-4o`` and can be
overridden with ``OPENAI_MODEL``.  ``OPENAI_BASE_URL`` points the client at
any OpenAI-compatible server.
"""

from __future__ import annotations

import base64
import logging
import os

import openai

from ..errors import ExtractionFailed
from ..models import RawCandidate
from .base import (
    IMAGE_PROMPT,
    SYSTEM_PROMPT,
    ImageCandidateExtractor,
    TextCandidateExtractor,
    parse_candidates,
)

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gpt-4o"


class OpenAIExtractor(TextCandidateExtractor, ImageCandidateExtractor):
    """Extract deadline candidates from text and images with GPT-4o."""

    def __init__(self, client: openai.OpenAI | None = None, model: str | None = None):
        if client is None:
            api_key = os.environ.get("OPENAI_API_KEY", "").strip()
            if not api_key:
                raise RuntimeError("OPENAI_API_KEY is missing")
            base_url = os.environ.get("OPENAI_BASE_URL", "").strip() or None
            client = openai.OpenAI(api_key=api_key, base_url=base_url)
        self._client = client
        self.model = model or os.environ.get("OPENAI_MODEL", "").strip() or DEFAULT_MODEL

    @property
    def name(self) -> str:
        return "openai"

    # ------------------------------------------------------------------ #
    # Public
    # ------------------------------------------------------------------ #

    def extract_from_text(self, segment: str) -> list[RawCandidate]:
        return parse_candidates(self._complete(segment))

    def extract_from_image(self, image: bytes, mime_type: str) -> list[RawCandidate]:
        encoded = base64.b64encode(image).decode("ascii")
        content = [
            {"type": "text", "text": IMAGE_PROMPT},
            {
                "type": "image_url",
                "image_url": {"url": f"data:{mime_type};base64,{encoded}"},
            },
        ]
        return parse_candidates(self._complete(content))

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #

    def _complete(self, user_content) -> str:
        try:
            response = self._client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": user_content},
                ],
                response_format={"type": "json_object"},
            )
        except openai.OpenAIError as exc:
            raise ExtractionFailed(f"OpenAI request failed: {exc}") from exc

        content = response.choices[0].message.content if response.choices else None
        if not content:
            raise ExtractionFailed("No response from OpenAI")
        logger.debug("openai returned %d characters", len(content))
        return content
