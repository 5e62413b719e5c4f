import logging
import os
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

from headlinebot import keywords
from headlinebot.errors import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = 'HeadlineBot/1.0 (+https://bsky.app)'
DEFAULT_SENTIMENT_API_URL = (
    'https://api-inference.huggingface.co/models/'
    'cardiffnlp/twitter-roberta-base-sentiment-latest'
)
SENTIMENT_BACKENDS = ('lexicon', 'vader', 'classifier')
HEADLINE_SOURCES = ('rss', 'newsapi')


def _env_int(environ, name, default):
    raw = (environ.get(name) or '').strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning(f"Invalid {name}={raw!r}; falling back to {default}")
        return default


def _env_float(environ, name, default):
    raw = (environ.get(name) or '').strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning(f"Invalid {name}={raw!r}; falling back to {default}")
        return default


def _env_list(environ, name, default):
    raw = (environ.get(name) or '').strip()
    if not raw:
        return tuple(default)
    return tuple(item.strip() for item in raw.split(',') if item.strip())


@dataclass(frozen=True)
class BotConfig:
    bluesky_handle: str
    bluesky_app_password: str
    max_days_old: int = 7
    positive_threshold: float = 0.1
    negative_penalty: float = 0.1
    max_posted_titles: int = 50
    recent_keywords_limit: int = 4
    max_text_length: int = 300
    http_timeout: int = 15
    fetch_workers: int = 8
    user_agent: str = DEFAULT_USER_AGENT
    state_dir: str = 'data'
    sentiment_backend: str = 'lexicon'
    sentiment_api_url: str = DEFAULT_SENTIMENT_API_URL
    sentiment_api_key: Optional[str] = None
    headline_source: str = 'rss'
    newsapi_key: Optional[str] = None
    feeds: Tuple[str, ...] = keywords.RSS_FEEDS
    positive_keywords: Tuple[str, ...] = keywords.POSITIVE_KEYWORDS
    negative_keywords: Tuple[str, ...] = keywords.NEGATIVE_KEYWORDS
    keyword_groups: Mapping[str, Tuple[str, ...]] = field(
        default_factory=lambda: MappingProxyType(dict(keywords.KEYWORD_GROUPS)))
    log_level: str = 'INFO'

    @property
    def request_headers(self):
        return {'User-Agent': self.user_agent}

    @classmethod
    def from_env(cls, environ=None):
        environ = os.environ if environ is None else environ
        required = ['BLUESKY_HANDLE', 'BLUESKY_APP_PASSWORD']
        backend = (environ.get('SENTIMENT_BACKEND') or 'lexicon').strip().lower()
        source = (environ.get('HEADLINE_SOURCE') or 'rss').strip().lower()
        if backend not in SENTIMENT_BACKENDS:
            raise ConfigurationError(
                f"Unknown SENTIMENT_BACKEND {backend!r}; expected one of {', '.join(SENTIMENT_BACKENDS)}")
        if source not in HEADLINE_SOURCES:
            raise ConfigurationError(
                f"Unknown HEADLINE_SOURCE {source!r}; expected one of {', '.join(HEADLINE_SOURCES)}")
        if backend == 'classifier':
            required.append('SENTIMENT_API_KEY')
        if source == 'newsapi':
            required.append('NEWSAPI_KEY')
        missing_vars = [var for var in required if not environ.get(var)]
        if missing_vars:
            raise ConfigurationError(
                f"Missing required environment variables: {', '.join(missing_vars)}")

        return cls(
            bluesky_handle=environ['BLUESKY_HANDLE'],
            bluesky_app_password=environ['BLUESKY_APP_PASSWORD'],
            max_days_old=_env_int(environ, 'MAX_DAYS_OLD', 7),
            positive_threshold=_env_float(environ, 'POSITIVE_THRESHOLD', 0.1),
            negative_penalty=_env_float(environ, 'NEGATIVE_PENALTY', 0.1),
            max_posted_titles=_env_int(environ, 'MAX_POSTED_TITLES', 50),
            recent_keywords_limit=_env_int(environ, 'RECENT_KEYWORDS_LIMIT', 4),
            max_text_length=_env_int(environ, 'MAX_TEXT_LENGTH', 300),
            http_timeout=_env_int(environ, 'HTTP_TIMEOUT', 15),
            fetch_workers=max(1, _env_int(environ, 'FETCH_WORKERS', 8)),
            user_agent=environ.get('USER_AGENT') or DEFAULT_USER_AGENT,
            state_dir=environ.get('STATE_DIR') or 'data',
            sentiment_backend=backend,
            sentiment_api_url=environ.get('SENTIMENT_API_URL') or DEFAULT_SENTIMENT_API_URL,
            sentiment_api_key=environ.get('SENTIMENT_API_KEY') or None,
            headline_source=source,
            newsapi_key=environ.get('NEWSAPI_KEY') or None,
            feeds=_env_list(environ, 'FEEDS', keywords.RSS_FEEDS),
            log_level=(environ.get('LOG_LEVEL') or 'INFO').upper(),
        )
