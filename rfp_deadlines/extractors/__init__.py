"""Deadline candidate extractors."""

from __future__ import annotations

from .base import ImageCandidateExtractor, TextCandidateExtractor, parse_candidates
from .openai_extractor import OpenAIExtractor

__all__ = [
    "ImageCandidateExtractor",
    "OpenAIExtractor",
    "TextCandidateExtractor",
    "get_extractor",
    "parse_candidates",
]

# Registry of available extractors – add new providers here.
_EXTRACTORS: dict[str, type[TextCandidateExtractor]] = {
    "openai": OpenAIExtractor,
}


def get_extractor(name: str) -> TextCandidateExtractor:
    """Return an extractor instance by name.

    Raises ``KeyError`` if *name* is not registered.
    Available names: openai
    """
    try:
        cls = _EXTRACTORS[name]
    except KeyError:
        available = ", ".join(sorted(_EXTRACTORS))
        raise KeyError(
            f"Unknown extractor '{name}'. Available: {available}"
        ) from None
    return cls()
