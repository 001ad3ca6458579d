"""
Pipeline exceptions. All of them are recovered inside the loader.
"""
from __future__ import annotations


class SourceError(Exception):
    """Base class for failures while acquiring or parsing sheet data."""


class NetworkError(SourceError):
    """Primary or proxy source unreachable, timed out, or non-2xx."""


class ProxyEnvelopeError(SourceError):
    """Proxy answered, but without usable ``contents``."""


class EmptySourceError(SourceError):
    """No usable lines in the fetched text."""
