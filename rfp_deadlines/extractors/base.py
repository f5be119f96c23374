"""Interfaces every candidate extractor implements, plus response parsing."""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from typing import Any

from ..civil import is_civil_date, is_wall_time
from ..errors import MalformedExtractorOutput
from ..models import RawCandidate

SYSTEM_PROMPT = """You are a helpful assistant that extracts dates and deadlines from RFP (Request for Proposal) documents.

Extract ALL dates mentioned in the document, including:
- Submission deadlines
- Question/clarification deadlines
- Site visit dates
- Pre-bid meeting dates
- Contract start/end dates
- Any other milestone dates

For each date found, provide:
1. date: in YYYY-MM-DD format
2. time: in HH:MM format (24-hour) if specified, otherwise null
3. label: a brief description of what the deadline is for
4. context: additional context or requirements related to this date

Return your response as a JSON object with a "dates" array containing objects with these fields.

If no dates are found, return an empty dates array."""

IMAGE_PROMPT = "Extract all dates and deadlines from this document image."


class TextCandidateExtractor(ABC):
    """Maps one text segment to the deadline candidates it mentions."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Short identifier for this extractor (e.g. ``'openai'``)."""

    @abstractmethod
    def extract_from_text(self, segment: str) -> list[RawCandidate]:
        """Return candidates found in *segment*.

        Raises
        ------
        ExtractionFailed
            The provider could not be reached or returned nothing.
        MalformedExtractorOutput
            The provider answered with something other than candidates.
        """


class ImageCandidateExtractor(ABC):
    """Maps one document image to the deadline candidates it shows."""

    @abstractmethod
    def extract_from_image(self, image: bytes, mime_type: str) -> list[RawCandidate]:
        """Return candidates found in *image* (``image/png``, ``image/jpeg`` or ``image/tiff``)."""


def _optional_str(entry: dict[str, Any], field: str) -> str | None:
    value = entry.get(field)
    if value is None:
        return None
    if not isinstance(value, str):
        raise MalformedExtractorOutput(f"Candidate field {field!r} is not a string: {value!r}")
    return value.strip() or None


def _parse_entry(entry: Any) -> RawCandidate:
    if not isinstance(entry, dict):
        raise MalformedExtractorOutput(f"Candidate is not an object: {entry!r}")

    date_str = entry.get("date")
    if not is_civil_date(date_str):
        raise MalformedExtractorOutput(f"Candidate date is not YYYY-MM-DD: {date_str!r}")

    label = _optional_str(entry, "label")
    if label is None:
        raise MalformedExtractorOutput(f"Candidate has no label: {entry!r}")

    time_str = _optional_str(entry, "time")
    if time_str is not None and not is_wall_time(time_str):
        raise MalformedExtractorOutput(f"Candidate time is not HH:MM: {time_str!r}")

    return RawCandidate(
        date=date_str,
        label=label,
        time=time_str,
        context=_optional_str(entry, "context"),
    )


def parse_candidates(content: str) -> list[RawCandidate]:
    """Parse a ``{"dates": [...]}`` JSON response into candidates.

    A missing ``dates`` key means the model found nothing.
    """
    try:
        payload = json.loads(content)
    except (json.JSONDecodeError, TypeError) as exc:
        raise MalformedExtractorOutput(f"Extractor response is not valid JSON: {exc}") from exc

    if not isinstance(payload, dict):
        raise MalformedExtractorOutput(
            f"Extractor response is not a JSON object: {type(payload).__name__}"
        )

    entries = payload.get("dates") or []
    if not isinstance(entries, list):
        raise MalformedExtractorOutput(f"'dates' is not a list: {type(entries).__name__}")

    return [_parse_entry(entry) for entry in entries]
