import unittest
from unittest import mock

import requests

from headlinebot.errors import ClassificationError
from headlinebot.sentiment import (
    ClassifierScorer,
    LexiconScorer,
    VaderScorer,
    build_scorer,
    keyword_penalty,
    parse_classification,
)
from tests.helpers import FakeResponse, FakeSession, make_config


class KeywordPenaltyTests(unittest.TestCase):
    def test_each_present_keyword_costs_one_penalty(self):
        self.assertAlmostEqual(keyword_penalty("War and Death", ["war", "death", "fraud"], 0.5), 1.0)

    def test_empty_text_has_no_penalty(self):
        self.assertEqual(keyword_penalty("", ["war"], 1), 0)


class LexiconScorerTests(unittest.TestCase):
    def setUp(self):
        self.scorer = LexiconScorer(positive_words=["win", "hope"], negative_words=["loss"], weight=0.1,
                                    negative_penalty=0.1)

    def test_counts_positive_and_negative_words(self):
        self.assertAlmostEqual(self.scorer.score("Hope after WIN despite loss"), 0.1)

    def test_negative_keywords_penalise(self):
        self.assertAlmostEqual(self.scorer.score("Win amid war", ["war"]), 0.0)

    def test_empty_text_scores_zero(self):
        self.assertEqual(self.scorer.score("", ["war"]), 0)

    def test_default_lexicon_rates_victory_positive(self):
        score = LexiconScorer().score("Union Wins Historic Victory for Workers", ["death", "war"])
        self.assertGreaterEqual(score, 0.1)

    def test_penalised_score_lands_exactly_on_tenth(self):
        scorer = LexiconScorer(positive_words=["alpha", "bravo", "charlie", "delta"], negative_words=[])
        self.assertEqual(scorer.score("alpha bravo charlie delta xray yankee zulu", ["xray", "yankee", "zulu"]), 0.1)


class VaderScorerTests(unittest.TestCase):
    def test_uses_compound_score_minus_penalty(self):
        analyzer = mock.Mock()
        analyzer.polarity_scores.return_value = {"compound": 0.6}
        scorer = VaderScorer(negative_penalty=0.2, analyzer=analyzer)
        self.assertAlmostEqual(scorer.score("a hopeful attack", ["attack"]), 0.4)

    def test_empty_text_skips_analyzer(self):
        analyzer = mock.Mock()
        scorer = VaderScorer(analyzer=analyzer)
        self.assertEqual(scorer.score(""), 0.0)
        analyzer.polarity_scores.assert_not_called()


class ParseClassificationTests(unittest.TestCase):
    def test_nested_list_picks_highest_score(self):
        payload = [[{"label": "neutral", "score": 0.2}, {"label": "positive", "score": 0.7}]]
        self.assertEqual(parse_classification(payload), ("POSITIVE", 0.7))

    def test_label_aliases(self):
        self.assertEqual(parse_classification({"label": "LABEL_0", "score": 0.9}), ("NEGATIVE", 0.9))

    def test_error_payload(self):
        with self.assertRaises(ClassificationError):
            parse_classification({"error": "Model is loading"})

    def test_unknown_label(self):
        with self.assertRaises(ClassificationError):
            parse_classification([{"label": "mixed", "score": 0.5}])

    def test_garbage(self):
        with self.assertRaises(ClassificationError):
            parse_classification([])


class ClassifierScorerTests(unittest.TestCase):
    def test_positive_label_scores_confidence(self):
        session = FakeSession(FakeResponse(json_data=[[{"label": "POSITIVE", "score": 0.85}]]))
        scorer = ClassifierScorer("https://classify.example", "key", session=session, negative_penalty=0.1)
        self.assertAlmostEqual(scorer.score("Tenants win", ["war"]), 0.85)
        method, url, kwargs = session.requests[0]
        self.assertEqual(method, "POST")
        self.assertEqual(kwargs["json"], {"inputs": "Tenants win"})
        self.assertEqual(kwargs["headers"]["Authorization"], "Bearer key")

    def test_negative_and_neutral(self):
        session = FakeSession(FakeResponse(json_data=[{"label": "NEGATIVE", "score": 0.9}]))
        scorer = ClassifierScorer("https://classify.example", "key", session=session)
        self.assertAlmostEqual(scorer.score("bad"), -0.9)
        session.response = FakeResponse(json_data=[{"label": "NEUTRAL", "score": 0.9}])
        self.assertEqual(scorer.score("meh"), 0.0)

    def test_network_failure_raises(self):
        session = FakeSession(error=requests.exceptions.ConnectionError("down"))
        scorer = ClassifierScorer("https://classify.example", "key", session=session)
        with self.assertRaises(ClassificationError):
            scorer.score("anything")

    def test_http_error_raises(self):
        session = FakeSession(FakeResponse(status_code=503))
        scorer = ClassifierScorer("https://classify.example", "key", session=session)
        with self.assertRaises(ClassificationError):
            scorer.score("anything")


class BuildScorerTests(unittest.TestCase):
    def test_default_is_lexicon(self):
        scorer = build_scorer(make_config(negative_penalty=2))
        self.assertIsInstance(scorer, LexiconScorer)
        self.assertEqual(scorer.negative_penalty, 2)

    def test_classifier_backend(self):
        config = make_config(sentiment_backend="classifier", sentiment_api_key="secret")
        scorer = build_scorer(config)
        self.assertIsInstance(scorer, ClassifierScorer)
        self.assertEqual(scorer.api_key, "secret")

    def test_vader_backend(self):
        with mock.patch("headlinebot.sentiment.VaderScorer") as vader:
            build_scorer(make_config(sentiment_backend="vader", negative_penalty=1))
        vader.assert_called_once_with(negative_penalty=1)


if __name__ == "__main__":
    unittest.main()
