"""Chunk → extract → dedupe pipeline turning documents into deadline candidates."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable

from .chunking import CHUNK_OVERLAP, MAX_CHARS_PER_CHUNK, chunk_text
from .errors import InvalidArgument
from .extractors.base import ImageCandidateExtractor, TextCandidateExtractor
from .models import CanonicalCandidate, RawCandidate

logger = logging.getLogger(__name__)

SUPPORTED_IMAGE_TYPES = frozenset({"image/png", "image/jpeg", "image/tiff"})

_EXTENSION_TO_MIME: dict[str, str] = {
    "png": "image/png",
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "tif": "image/tiff",
    "tiff": "image/tiff",
}


def is_image_path(filename: str) -> bool:
    """True when *filename* has an image extension the image extractor accepts."""
    return os.path.splitext(filename)[1].lstrip(".").lower() in _EXTENSION_TO_MIME


def image_mime_type(filename: str) -> str:
    """Guess an image mime type from *filename*'s extension (``image/png`` if unknown)."""
    ext = os.path.splitext(filename)[1].lstrip(".").lower()
    return _EXTENSION_TO_MIME.get(ext, "image/png")


def dedupe_candidates(candidates: Iterable[RawCandidate]) -> list[CanonicalCandidate]:
    """Drop candidates whose ``(date, label)`` was already seen.

    The first occurrence wins and keeps its context; output order is the
    order of first occurrence.
    """
    seen: dict[tuple[str, str], RawCandidate] = {}
    for candidate in candidates:
        if candidate.key not in seen:
            seen[candidate.key] = candidate
    return list(seen.values())


def extract_deadlines(
    text: str,
    extractor: TextCandidateExtractor,
    *,
    max_chars: int = MAX_CHARS_PER_CHUNK,
    overlap_chars: int = CHUNK_OVERLAP,
) -> list[CanonicalCandidate]:
    """Extract deduplicated deadline candidates from a document's text.

    Chunks are sent to *extractor* one at a time, in order.  Any extractor
    error propagates unchanged: a document either extracts completely or
    not at all.
    """
    chunks = chunk_text(text, max_chars, overlap_chars)

    candidates: list[RawCandidate] = []
    for index, chunk in enumerate(chunks, start=1):
        found = extractor.extract_from_text(chunk)
        logger.debug("chunk %d/%d: %d candidates", index, len(chunks), len(found))
        candidates.extend(found)

    unique = dedupe_candidates(candidates)
    logger.info(
        "extracted %d deadlines (%d raw) from %d chunk(s)",
        len(unique), len(candidates), len(chunks),
    )
    return unique


def extract_deadlines_from_image(
    image: bytes,
    mime_type: str,
    extractor: ImageCandidateExtractor,
) -> list[CanonicalCandidate]:
    """Extract deduplicated deadline candidates from a single document image."""
    if mime_type not in SUPPORTED_IMAGE_TYPES:
        supported = ", ".join(sorted(SUPPORTED_IMAGE_TYPES))
        raise InvalidArgument(f"Unsupported image type {mime_type!r}. Supported: {supported}")

    unique = dedupe_candidates(extractor.extract_from_image(image, mime_type))
    logger.info("extracted %d deadlines from %s image", len(unique), mime_type)
    return unique
