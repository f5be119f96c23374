"""Exceptions raised by the extraction and calendar export pipeline."""

from __future__ import annotations


class RfpDeadlinesError(Exception):
    """Base class for every error this package raises."""


class InvalidConfiguration(RfpDeadlinesError):
    """Chunking parameters that cannot make progress through the text."""


class ExtractionFailed(RfpDeadlinesError):
    """The candidate extractor could not produce a response (network or provider)."""


class MalformedExtractorOutput(RfpDeadlinesError):
    """The extractor answered, but not with the expected candidate shape."""


class InvalidArgument(RfpDeadlinesError, ValueError):
    """A caller passed an argument the operation cannot accept, e.g. zero events."""


class CalendarNotConnected(RfpDeadlinesError):
    """No Google Calendar credentials are configured."""
