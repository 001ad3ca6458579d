"""Shared fixtures: a scripted stand-in for requests.Session."""
from __future__ import annotations

import json

import pytest
import requests

from clientorbit.data.fetcher import SourceFetcher
from clientorbit.data.store import DataStore

SHEET = "https://sheet.test/export?format=csv"
PROXY = "https://proxy.test/get"

SAMPLE_CSV = (
    "Client Name,Total Items,Total Prices,Status,Email\n"
    "Acme,5,$100.50,Active,a@x.com\n"
    "Globex,12,$2000,In Progress,g@x.com\n"
    "\n"
    "Initech,3,$50,Completed,i@x.com\n"
)


class FakeResponse:
    def __init__(self, status_code=200, text="", payload=None):
        self.status_code = status_code
        self.text = text
        self._payload = payload

    def json(self):
        if self._payload is None:
            return json.loads(self.text)
        return self._payload


class FakeSession:
    """Answers GETs per URL with a FakeResponse or raises a given exception."""

    def __init__(self, routes=None):
        self.routes = dict(routes or {})
        self.calls = []
        self.closed = False

    def close(self):
        self.closed = True

    def get(self, url, params=None, timeout=None):
        self.calls.append({"url": url, "params": params, "timeout": timeout})
        outcome = self.routes.get(url)
        if outcome is None:
            raise requests.ConnectionError(f"no route for {url}")
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


def make_fetcher(primary=None, proxy=None, timeout=2.5):
    session = FakeSession({SHEET: primary, PROXY: proxy})
    return SourceFetcher(source_url=SHEET, proxy_url=PROXY, timeout=timeout, session=session)


@pytest.fixture
def live_fetcher():
    return make_fetcher(primary=FakeResponse(200, SAMPLE_CSV))


@pytest.fixture
def dead_fetcher():
    return make_fetcher(
        primary=requests.ConnectionError("sheet down"),
        proxy=FakeResponse(502, "bad gateway"),
    )


@pytest.fixture
def live_store(live_fetcher):
    return DataStore(fetcher=live_fetcher)


@pytest.fixture
def dead_store(dead_fetcher):
    return DataStore(fetcher=dead_fetcher)
