from datetime import datetime, timedelta, timezone

import requests

from headlinebot.config import BotConfig
from headlinebot.models import Headline

NOW = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)


def make_config(**overrides):
    settings = dict(
        bluesky_handle='bot.bsky.social',
        bluesky_app_password='app-pass',
        negative_keywords=('death', 'war', 'attack'),
        positive_keywords=('union', 'strike', 'victory'),
        fetch_workers=2,
    )
    settings.update(overrides)
    return BotConfig(**settings)


def make_headline(title, days_old=0, link=None, **kwargs):
    return Headline(
        title=title,
        link=link or f"https://example.com/{abs(hash(title))}",
        published=NOW - timedelta(days=days_old),
        **kwargs
    )


class FixedScorer:
    def __init__(self, value=1.0):
        self.value = value
        self.calls = []

    def score(self, text, negative_keywords=()):
        self.calls.append(text)
        return self.value


class FakeSource:
    def __init__(self, name, headlines=None, error=None):
        self.name = name
        self.headlines = headlines or []
        self.error = error

    def fetch(self):
        if self.error:
            raise self.error
        return list(self.headlines)


class FakeResponse:
    def __init__(self, content=b'', status_code=200, headers=None, json_data=None):
        self.content = content
        self.status_code = status_code
        self.headers = headers or {}
        self._json = json_data

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError(f"{self.status_code} Error")

    def json(self):
        if self._json is None:
            raise ValueError("No JSON")
        return self._json


class FakeSession:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.requests = []

    def _respond(self, method, url, **kwargs):
        self.requests.append((method, url, kwargs))
        if self.error:
            raise self.error
        return self.response

    def get(self, url, **kwargs):
        return self._respond('GET', url, **kwargs)

    def post(self, url, **kwargs):
        return self._respond('POST', url, **kwargs)
