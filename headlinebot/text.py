import html
import re

from bs4 import BeautifulSoup

_NON_WORD = re.compile(r'[^\w\s]')
_SPACES = re.compile(r'\s+')


def normalize_title(title):
    """Canonical form of a headline used for duplicate checks across runs."""
    title = _NON_WORD.sub(' ', title.lower())
    return _SPACES.sub(' ', title).strip()


def match_keywords(title, keywords):
    title_lower = title.lower()
    matched = []
    for keyword in keywords:
        if keyword.lower() in title_lower and keyword not in matched:
            matched.append(keyword)
    return matched


def clean_text(raw):
    if not raw:
        return ""
    text = html.unescape(raw)
    if '<' in text:
        text = BeautifulSoup(text, 'html.parser').get_text(" ")
    return _SPACES.sub(' ', text).strip()


def truncate(text, limit, marker="..."):
    if len(text) <= limit:
        return text
    if limit <= len(marker):
        return text[:limit]
    return text[:limit - len(marker)].rstrip() + marker
