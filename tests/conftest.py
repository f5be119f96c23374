"""Shared fixtures: fake extractors stand in for the language-model provider."""

from __future__ import annotations

import pytest

from rfp_deadlines.extractors.base import ImageCandidateExtractor, TextCandidateExtractor
from rfp_deadlines.models import RawCandidate


class FakeExtractor(TextCandidateExtractor, ImageCandidateExtractor):
    """Returns canned candidates per call and records what it was given."""

    def __init__(self, responses: list[list[RawCandidate]] | None = None, error: Exception | None = None):
        self._responses = list(responses or [])
        self._error = error
        self.segments: list[str] = []
        self.images: list[tuple[bytes, str]] = []

    @property
    def name(self) -> str:
        return "fake"

    def _next(self) -> list[RawCandidate]:
        if self._error is not None:
            raise self._error
        return self._responses.pop(0) if self._responses else []

    def extract_from_text(self, segment: str) -> list[RawCandidate]:
        self.segments.append(segment)
        return self._next()

    def extract_from_image(self, image: bytes, mime_type: str) -> list[RawCandidate]:
        self.images.append((image, mime_type))
        return self._next()


@pytest.fixture
def fake_extractor_factory():
    def _make(responses=None, error=None):
        return FakeExtractor(responses, error)
    return _make
