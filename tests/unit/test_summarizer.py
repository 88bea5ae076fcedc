"""Unit tests for the extractive summarizer."""

import pytest

from podscribe.components.summarizer import ExtractiveSummarizer, score_sentence, summarize
from podscribe.utils.text_utils import count_words, normalize_text, split_into_sentences

BUDGET_SAMPLES = [
    "Hello world. This is a test with 42 items, really! Another plain sentence.",
    "Plain words. In 2024, Paris hosted 10,500 athletes from 206 nations. Filler here.",
    "Alpha beta gamma delta epsilon zeta eta theta, iota kappa. Short one here. Tiny.",
    "One. Two words. Three words here. Four words are here. Five words are right here.",
]


class TestScoreSentence:
    """Test class for sentence scoring."""

    def test_length_and_proper_noun(self):
        """A short sentence scores its length plus capitalized words."""
        assert score_sentence("Hello world.") == pytest.approx(0.12 + 0.05)

    def test_length_score_is_capped(self):
        """Very long sentences do not score more than 3 for length."""
        assert score_sentence("a" * 400) == pytest.approx(3.0)

    def test_numbers_and_punctuation(self):
        """Numbers and structural punctuation raise the score."""
        sentence = "This is a test with 42 items, really!"
        expected = len(sentence) / 100 + 0.1 + 0.3 + 0.05
        assert score_sentence(sentence) == pytest.approx(expected)

    def test_scores_are_independent(self):
        """A sentence scores the same regardless of its neighbours."""
        assert ExtractiveSummarizer.score_sentence("Tiny.") == score_sentence("Tiny.")


class TestExtractiveSummarizer:
    """Test class for ExtractiveSummarizer."""

    def test_all_sentences_kept_in_order(self):
        """With enough budget every sentence is kept in document order."""
        text = "Hello world. This is a test with 42 items, really! Another plain sentence."
        assert summarize(text, 100) == text

    def test_single_oversized_sentence_is_skipped(self):
        """A sentence longer than the budget is never truncated."""
        text = " ".join(["word"] * 500)
        assert len(split_into_sentences(text)) == 1
        assert summarize(text, 50) == ""

    def test_empty_text(self):
        """Empty input gives an empty summary for any budget."""
        assert summarize("", 0) == ""
        assert summarize("", 1200) == ""

    def test_zero_budget(self):
        """A zero budget gives an empty summary."""
        assert summarize("Hello world. Another sentence.", 0) == ""

    def test_skip_continues_to_shorter_sentences(self):
        """A high scoring sentence over budget is skipped and scanning continues."""
        text = "Alpha beta gamma delta epsilon zeta eta theta, iota kappa. Short one here. Tiny."
        assert summarize(text, 5) == "Short one here. Tiny."

    def test_selected_sentences_return_to_document_order(self):
        """The highest ranked sentence does not move to the front."""
        text = "Plain words. In 2024, Paris hosted 10,500 athletes from 206 nations. Filler here."
        ranked = ExtractiveSummarizer.rank_sentences(split_into_sentences(text))
        assert ranked[0][0] == 1
        assert summarize(text, 11) == "Plain words. In 2024, Paris hosted 10,500 athletes from 206 nations."

    def test_ties_prefer_earlier_sentences(self):
        """Equal scores are ranked by original position."""
        text = "Same text a. Same text b."
        ranked = ExtractiveSummarizer.rank_sentences(split_into_sentences(text))
        assert [index for index, _ in ranked] == [0, 1]
        assert summarize(text, 3) == "Same text a."

    def test_stops_once_budget_is_reached(self):
        """Nothing else is picked once the budget is filled exactly."""
        text = "One. Two words. Three words here."
        assert summarize(text, 3) == "Three words here."

    @pytest.mark.parametrize("text", BUDGET_SAMPLES)
    @pytest.mark.parametrize("max_words", [0, 1, 2, 3, 5, 8, 11, 13, 100])
    def test_word_budget_respected(self, text, max_words):
        """The summary never exceeds the word budget."""
        assert count_words(summarize(text, max_words)) <= max_words

    @pytest.mark.parametrize("text", BUDGET_SAMPLES)
    @pytest.mark.parametrize("max_words", [3, 5, 8, 11])
    def test_order_preserved(self, text, max_words):
        """Summary sentences appear in the same relative order as the source."""
        source = split_into_sentences(text)
        picked = split_into_sentences(summarize(text, max_words))
        positions = [source.index(sentence) for sentence in picked]
        assert positions == sorted(positions)

    def test_deterministic(self, sample_article):
        """Identical input gives identical output."""
        text = normalize_text(sample_article)
        assert summarize(text, 20) == summarize(text, 20)
