"""
Sheet retrieval: direct export URL first, pass-through proxy second.

Each stage has its own deadline. The static fallback is applied one level
up, in loader.py, so parse failures share the same path.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

import requests

from clientorbit.config import FETCH_TIMEOUT_SECONDS, PROXY_URL, PROXY_URL_PARAM, SHEET_URL
from clientorbit.data.errors import NetworkError, ProxyEnvelopeError, SourceError
from clientorbit.data.schemas import SnapshotSource


@dataclass(frozen=True)
class SourceText:
    """Raw sheet text plus the stage that produced it."""
    text: str
    source: SnapshotSource


def _is_success(response) -> bool:
    return 200 <= response.status_code < 300


class SourceFetcher:
    """Fetch raw CSV text for the client sheet."""

    def __init__(
        self,
        source_url: str = SHEET_URL,
        proxy_url: str = PROXY_URL,
        timeout: float = FETCH_TIMEOUT_SECONDS,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.source_url = source_url
        self.proxy_url = proxy_url
        self.timeout = timeout
        self.session = session or requests.Session()

    def close(self) -> None:
        """Release pooled connections held by the session."""
        self.session.close()

    # ------------------------------------------------------------------
    # Stages
    # ------------------------------------------------------------------

    def fetch_primary(self) -> str:
        """GET the export URL directly."""
        try:
            response = self.session.get(self.source_url, timeout=self.timeout)
        except requests.RequestException as exc:
            raise NetworkError(f"Sheet request failed: {exc}") from exc
        if not _is_success(response):
            raise NetworkError(f"Sheet returned HTTP {response.status_code}")
        return response.text

    def fetch_via_proxy(self) -> str:
        """GET the export URL through the proxy and unwrap its JSON envelope."""
        try:
            response = self.session.get(
                self.proxy_url,
                params={PROXY_URL_PARAM: self.source_url},
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise NetworkError(f"Proxy request failed: {exc}") from exc
        if not _is_success(response):
            raise NetworkError(f"Proxy returned HTTP {response.status_code}")

        try:
            envelope = response.json()
        except ValueError as exc:
            raise ProxyEnvelopeError(f"Proxy body is not JSON: {exc}") from exc
        if not isinstance(envelope, dict):
            raise ProxyEnvelopeError("Proxy body is not a JSON object")

        contents = envelope.get("contents")
        if not contents or not isinstance(contents, str):
            raise ProxyEnvelopeError("No data received from Google Sheets")
        return contents

    # ------------------------------------------------------------------
    # Chain
    # ------------------------------------------------------------------

    def stages(self) -> list[tuple[SnapshotSource, Callable[[], str]]]:
        return [
            (SnapshotSource.PRIMARY, self.fetch_primary),
            (SnapshotSource.PROXY, self.fetch_via_proxy),
        ]

    def fetch(self) -> SourceText:
        """Try each stage in order; the first one that returns text wins.

        Raises NetworkError only when every stage failed.
        """
        failures = []
        for source, stage in self.stages():
            try:
                text = stage()
            except SourceError as exc:
                print(f"  Warning: {source.value} fetch failed: {exc}")
                failures.append(f"{source.value}: {exc}")
                continue
            print(f"  Fetched {len(text):,} chars via {source.value}")
            return SourceText(text=text, source=source)
        raise NetworkError("All sources failed: " + "; ".join(failures))
