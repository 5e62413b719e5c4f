import logging
from collections import Counter
from datetime import datetime, timedelta, timezone

from headlinebot.errors import ClassificationError
from headlinebot.models import Candidate
from headlinebot.text import match_keywords, normalize_title

logger = logging.getLogger(__name__)


def evaluate(headline, keywords, posted_titles, recent_keywords, config, scorer, cutoff):
    """Run the admission rules in order.

    Returns ``(matched_keywords, None)`` for an admitted headline, or
    ``(None, reason)`` naming the first rule it failed.
    """
    if not headline.title or not headline.link or headline.published is None:
        return None, "missing fields"
    published = headline.published
    if published.tzinfo is None:
        published = published.replace(tzinfo=timezone.utc)
    if published < cutoff:
        return None, "too old"
    try:
        score = scorer.score(headline.title, config.negative_keywords)
    except ClassificationError as e:
        logger.warning(f"Dropping headline, sentiment unavailable: {headline.title} ({e})")
        return None, "sentiment unavailable"
    if score < config.positive_threshold:
        return None, "not positive enough"
    matched = match_keywords(headline.title, keywords)
    if not matched:
        return None, "no keyword"
    if normalize_title(headline.title) in posted_titles:
        return None, "already posted"
    if any(kw in recent_keywords for kw in matched):
        return None, "recent keyword"
    return matched, None


def build_candidates(batches, posted_titles, recent_keywords, config, scorer, now=None):
    """Filtered, deduplicated candidates from ``(headlines, keywords)`` batches.

    A title admitted by several keyword groups becomes one candidate carrying
    the union of its matched keywords, ordered by first appearance.
    """
    now = now or datetime.now(timezone.utc)
    cutoff = now - timedelta(days=config.max_days_old)
    posted_titles = set(posted_titles)
    recent_keywords = set(recent_keywords)
    by_title = {}
    rejected = Counter()
    for headlines, keywords in batches:
        for headline in headlines:
            matched, reason = evaluate(headline, keywords, posted_titles, recent_keywords,
                                       config, scorer, cutoff)
            if reason:
                rejected[reason] += 1
                logger.debug(f"Rejected ({reason}): {headline.title}")
                continue
            norm_title = normalize_title(headline.title)
            candidate = by_title.get(norm_title)
            if candidate is None:
                by_title[norm_title] = Candidate(headline, tuple(matched))
                logger.info(f"Candidate from {headline.source}: {headline.title} | Keywords: {', '.join(matched)}")
            else:
                extra = tuple(kw for kw in matched if kw not in candidate.keywords)
                candidate.keywords += extra
    if rejected:
        summary = ', '.join(f"{reason}: {count}" for reason, count in rejected.most_common())
        logger.info(f"Rejected headlines by reason: {summary}")
    return list(by_title.values())
