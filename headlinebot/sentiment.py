"""Headline positivity scoring.

Every scorer exposes ``score(text, negative_keywords) -> float`` where higher
means more positive. The baseline differs per backend; the negative-keyword
penalty is shared.
"""
import logging

import nltk
import requests
from nltk.sentiment import SentimentIntensityAnalyzer

from headlinebot import keywords
from headlinebot.errors import ClassificationError

logger = logging.getLogger(__name__)

LABEL_ALIASES = {
    'positive': 'POSITIVE', 'pos': 'POSITIVE', 'label_2': 'POSITIVE',
    'negative': 'NEGATIVE', 'neg': 'NEGATIVE', 'label_0': 'NEGATIVE',
    'neutral': 'NEUTRAL', 'neu': 'NEUTRAL', 'label_1': 'NEUTRAL',
}


def keyword_penalty(text, negative_keywords, penalty):
    text_lower = text.lower()
    hits = sum(1 for kw in negative_keywords if kw and kw.lower() in text_lower)
    return hits * penalty


class BaseScorer:
    def __init__(self, negative_penalty=0.1):
        self.negative_penalty = negative_penalty

    def baseline(self, text):
        raise NotImplementedError

    def score(self, text, negative_keywords=()):
        # rounded so sums of 0.1 steps compare cleanly against thresholds
        return round(self.baseline(text) - keyword_penalty(text, negative_keywords, self.negative_penalty), 9)


class LexiconScorer(BaseScorer):
    """Counts known positive and negative words (substring, case-insensitive)."""

    def __init__(self, positive_words=keywords.POLARITY_POSITIVE,
                 negative_words=keywords.POLARITY_NEGATIVE, weight=0.1, negative_penalty=0.1):
        super().__init__(negative_penalty)
        self.positive_words = tuple(w.lower() for w in positive_words)
        self.negative_words = tuple(w.lower() for w in negative_words)
        self.weight = weight

    def baseline(self, text):
        text_lower = text.lower()
        pos = sum(1 for w in self.positive_words if w in text_lower)
        neg = sum(1 for w in self.negative_words if w in text_lower)
        return self.weight * (pos - neg)


class VaderScorer(BaseScorer):
    """NLTK VADER compound polarity in [-1, 1]."""

    def __init__(self, negative_penalty=0.1, analyzer=None):
        super().__init__(negative_penalty)
        if analyzer is None:
            try:
                nltk.data.find('sentiment/vader_lexicon.zip')
            except LookupError:
                logger.info("Downloading VADER lexicon")
                nltk.download('vader_lexicon', quiet=True)
            analyzer = SentimentIntensityAnalyzer()
        self.analyzer = analyzer

    def baseline(self, text):
        if not text:
            return 0.0
        return self.analyzer.polarity_scores(text)['compound']


class ClassifierScorer(BaseScorer):
    """Defers to a hosted text-classification model.

    Any failure to reach the service or to read its reply raises
    ``ClassificationError``; callers drop the headline rather than retry.
    """

    def __init__(self, api_url, api_key, session=None, timeout=15, negative_penalty=0.1):
        super().__init__(negative_penalty)
        self.api_url = api_url
        self.api_key = api_key
        self.session = session or requests.Session()
        self.timeout = timeout

    def classify(self, text):
        try:
            response = self.session.post(
                self.api_url,
                headers={'Authorization': f"Bearer {self.api_key}"},
                json={'inputs': text},
                timeout=self.timeout,
            )
            response.raise_for_status()
            payload = response.json()
        except (requests.exceptions.RequestException, ValueError) as e:
            raise ClassificationError(f"Sentiment service failed: {e}") from e
        return parse_classification(payload)

    def baseline(self, text):
        label, confidence = self.classify(text)
        if label == 'POSITIVE':
            return confidence
        if label == 'NEGATIVE':
            return -confidence
        return 0.0


def parse_classification(payload):
    """Best (label, confidence) from a classifier reply.

    Accepts ``{"label", "score"}``, a list of those, or a list of such lists.
    """
    results = payload
    while isinstance(results, list) and results and isinstance(results[0], list):
        results = results[0]
    if isinstance(results, dict):
        if 'error' in results:
            raise ClassificationError(f"Sentiment service error: {results['error']}")
        results = [results]
    if not isinstance(results, list) or not results:
        raise ClassificationError(f"Unexpected sentiment payload: {payload!r}")
    try:
        best = max(results, key=lambda r: float(r['score']))
        label = LABEL_ALIASES.get(str(best['label']).lower())
        confidence = float(best['score'])
    except (KeyError, TypeError, ValueError) as e:
        raise ClassificationError(f"Unexpected sentiment payload: {payload!r}") from e
    if label is None:
        raise ClassificationError(f"Unknown sentiment label {best['label']!r}")
    return label, min(max(confidence, 0.0), 1.0)


def build_scorer(config, session=None):
    if config.sentiment_backend == 'vader':
        return VaderScorer(negative_penalty=config.negative_penalty)
    if config.sentiment_backend == 'classifier':
        return ClassifierScorer(
            config.sentiment_api_url,
            config.sentiment_api_key,
            session=session,
            timeout=config.http_timeout,
            negative_penalty=config.negative_penalty,
        )
    return LexiconScorer(negative_penalty=config.negative_penalty)
