import logging
import urllib.parse
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Tuple

import feedparser
import requests
from bs4 import BeautifulSoup
from dateutil import parser as dateparser
from dateutil.parser import ParserError

from headlinebot.errors import SourceError
from headlinebot.models import Headline
from headlinebot.text import clean_text

logger = logging.getLogger(__name__)

NEWSAPI_ENDPOINT = 'https://newsapi.org/v2/everything'
NEWSAPI_MAX_QUERY = 500
NEWSAPI_PAGE_SIZE = 100


def parse_datetime(value):
    if not value:
        return None
    if isinstance(value, datetime):
        dt = value
    else:
        try:
            dt = dateparser.parse(value)
        except (ValueError, OverflowError, ParserError):
            return None
    if not dt.tzinfo:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def get_entry_published_datetime(entry):
    for field in ['published', 'updated', 'created', 'date']:
        dt = parse_datetime(entry.get(field))
        if dt:
            return dt
    return None


def extract_image_url(entry):
    for media in entry.get('media_content') or []:
        url = media.get('url')
        medium = media.get('medium') or ''
        mime = media.get('type') or ''
        if url and (medium == 'image' or mime.startswith('image/') or not (medium or mime)):
            return url
    for thumb in entry.get('media_thumbnail') or []:
        if thumb.get('url'):
            return thumb['url']
    for enclosure in entry.get('enclosures') or []:
        if (enclosure.get('type') or '').startswith('image/') and enclosure.get('href'):
            return enclosure['href']
    image = entry.get('image')
    if isinstance(image, dict) and image.get('href'):
        return image['href']
    summary = entry.get('summary') or ''
    if '<img' in summary:
        img = BeautifulSoup(summary, 'html.parser').find('img', src=True)
        if img:
            return img['src']
    return None


def _source_name(url):
    return urllib.parse.urlparse(url).netloc or url


class FeedSource:
    """One RSS/Atom feed, downloaded with requests and parsed by feedparser."""

    def __init__(self, url, session=None, headers=None, timeout=15):
        self.url = url
        self.name = _source_name(url)
        self.session = session or requests.Session()
        self.headers = headers or {}
        self.timeout = timeout

    def fetch(self):
        response = self.session.get(self.url, headers=self.headers, timeout=self.timeout)
        response.raise_for_status()
        feed = feedparser.parse(response.content)
        if feed.bozo and not feed.entries:
            raise SourceError(f"Malformed feed {self.url}: {feed.get('bozo_exception')}")
        return [self.to_headline(entry) for entry in feed.entries]

    def to_headline(self, entry):
        return Headline(
            title=clean_text(entry.get('title')),
            link=(entry.get('link') or '').strip(),
            published=get_entry_published_datetime(entry),
            image_url=extract_image_url(entry),
            description=clean_text(entry.get('summary')) or None,
            source=self.name,
        )


class NewsApiSource:
    """One keyword group searched through NewsAPI's /everything endpoint."""

    def __init__(self, name, query_keywords, api_key, session=None, headers=None,
                 timeout=15, max_days_old=7, language='en'):
        self.name = f"newsapi:{name}"
        self.query_keywords = tuple(query_keywords)
        self.api_key = api_key
        self.session = session or requests.Session()
        self.headers = headers or {}
        self.timeout = timeout
        self.max_days_old = max_days_old
        self.language = language

    def query(self):
        terms = []
        for keyword in self.query_keywords:
            candidate = ' OR '.join(terms + [f'"{keyword}"'])
            if len(candidate) > NEWSAPI_MAX_QUERY:
                logger.warning(f"{self.name}: query too long, dropping keywords from {keyword!r} on")
                break
            terms.append(f'"{keyword}"')
        return ' OR '.join(terms)

    def fetch(self, now=None):
        now = now or datetime.now(timezone.utc)
        params = {
            'q': self.query(),
            'language': self.language,
            'sortBy': 'publishedAt',
            'pageSize': NEWSAPI_PAGE_SIZE,
            'from': (now - timedelta(days=self.max_days_old)).strftime('%Y-%m-%dT%H:%M:%S'),
        }
        headers = dict(self.headers, **{'X-Api-Key': self.api_key})
        response = self.session.get(NEWSAPI_ENDPOINT, params=params, headers=headers, timeout=self.timeout)
        response.raise_for_status()
        data = response.json() or {}
        if data.get('status') == 'error':
            raise SourceError(f"{self.name}: {data.get('code')}: {data.get('message')}")
        headlines = []
        for article in data.get('articles') or []:
            if not isinstance(article, dict):
                continue
            source = (article.get('source') or {}).get('name') or self.name
            headlines.append(Headline(
                title=clean_text(article.get('title')),
                link=(article.get('url') or '').strip(),
                published=parse_datetime(article.get('publishedAt')),
                image_url=article.get('urlToImage') or None,
                description=clean_text(article.get('description')) or None,
                source=source,
            ))
        return headlines


@dataclass(frozen=True)
class SourceBatch:
    """A source paired with the keywords its headlines are matched against."""
    source: object
    keywords: Tuple[str, ...]


def _fetch_one(batch):
    headlines = batch.source.fetch()
    logger.info(f"Fetched {len(headlines)} headlines from {batch.source.name}")
    return headlines


def fetch_all(batches, max_workers=8):
    """Fetch every source concurrently; a failing source is logged and skipped.

    Returns ``(headlines, keywords)`` pairs in the order of ``batches``.
    """
    batches = list(batches)
    if not batches:
        return []
    results = []
    with ThreadPoolExecutor(max_workers=max(1, min(max_workers, len(batches)))) as ex:
        futures = [ex.submit(_fetch_one, batch) for batch in batches]
        for batch, future in zip(batches, futures):
            try:
                results.append((future.result(), batch.keywords))
            except Exception as e:
                logger.error(f"Error loading feed {batch.source.name}: {e}")
    return results


def build_sources(config, session=None):
    session = session or requests.Session()
    if config.headline_source == 'newsapi':
        return [
            SourceBatch(
                NewsApiSource(name, group, config.newsapi_key, session=session,
                              headers=config.request_headers, timeout=config.http_timeout,
                              max_days_old=config.max_days_old),
                tuple(group),
            )
            for name, group in config.keyword_groups.items()
        ]
    return [
        SourceBatch(
            FeedSource(url, session=session, headers=config.request_headers, timeout=config.http_timeout),
            tuple(config.positive_keywords),
        )
        for url in config.feeds
    ]
