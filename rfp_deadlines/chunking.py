"""Split long documents into overlapping chunks for a bounded-context extractor."""

from __future__ import annotations

from .errors import InvalidConfiguration

# Roughly 12,500 tokens: leaves room for the system prompt and the response.
MAX_CHARS_PER_CHUNK = 50_000
# A deadline sentence straddling a boundary appears whole in one of the two chunks.
CHUNK_OVERLAP = 500


def chunk_text(
    text: str,
    max_chars: int = MAX_CHARS_PER_CHUNK,
    overlap_chars: int = CHUNK_OVERLAP,
) -> list[str]:
    """Return *text* as windows of at most *max_chars* characters.

    Consecutive windows share *overlap_chars* characters.  Text that already
    fits (including the empty string) comes back as a single chunk so the
    extractor still runs once.

    Raises :class:`InvalidConfiguration` when the window could not advance.
    """
    if max_chars <= 0 or overlap_chars < 0 or max_chars <= overlap_chars:
        raise InvalidConfiguration(
            f"max_chars ({max_chars}) must be positive and greater than "
            f"overlap_chars ({overlap_chars})"
        )

    if len(text) <= max_chars:
        return [text]

    step = max_chars - overlap_chars
    chunks: list[str] = []
    start = 0
    while True:
        end = min(start + max_chars, len(text))
        chunks.append(text[start:end])
        if end == len(text):
            break
        start += step
    return chunks
