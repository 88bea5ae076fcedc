"""Extractive summarizer module.

Builds a summary by scoring sentences, picking the best ones within a word
budget and putting them back in document order. Used as the offline
fallback when no language model is available.
"""

from typing import List, Tuple

from podscribe.utils.text_utils import (
    count_capitalized_tokens,
    count_numeric_tokens,
    count_scoring_punctuation,
    count_words,
    split_into_sentences,
)


class ExtractiveSummarizer:
    """Deterministic sentence-selection summarizer."""

    # Scoring weights
    LENGTH_DIVISOR = 100
    MAX_LENGTH_SCORE = 3.0
    PUNCTUATION_WEIGHT = 0.1
    NUMBER_WEIGHT = 0.3
    PROPER_NOUN_WEIGHT = 0.05

    @classmethod
    def score_sentence(cls, sentence: str) -> float:
        """
        Compute a relevance score for a single sentence.

        Moderate length, structural punctuation, numbers and capitalized
        words all raise the score. Length is capped so run-on sentences
        are not favored.

        Args:
            sentence (str): Sentence to score

        Returns:
            float: Relevance score
        """
        length_score = min(len(sentence) / cls.LENGTH_DIVISOR, cls.MAX_LENGTH_SCORE)
        punctuation_score = count_scoring_punctuation(sentence) * cls.PUNCTUATION_WEIGHT
        number_score = count_numeric_tokens(sentence) * cls.NUMBER_WEIGHT
        proper_noun_score = count_capitalized_tokens(sentence) * cls.PROPER_NOUN_WEIGHT
        return length_score + punctuation_score + number_score + proper_noun_score

    @classmethod
    def rank_sentences(cls, sentences: List[str]) -> List[Tuple[int, str]]:
        """
        Order sentences by descending score, earlier sentences first on ties.

        Args:
            sentences (List[str]): Sentences in document order

        Returns:
            List[Tuple[int, str]]: (original index, sentence) pairs in rank order
        """
        scored = [(cls.score_sentence(sentence), index, sentence) for index, sentence in enumerate(sentences)]
        scored.sort(key=lambda item: (-item[0], item[1]))
        return [(index, sentence) for _, index, sentence in scored]

    @classmethod
    def summarize(cls, text: str, max_words: int) -> str:
        """
        Summarize text within a word budget.

        Sentences that would overflow the budget are skipped, not truncated,
        and scanning continues so a shorter, lower-ranked sentence can still
        fit afterwards.

        Args:
            text (str): Normalized text
            max_words (int): Upper bound on the summary word count

        Returns:
            str: Selected sentences in original order, joined by single spaces
        """
        sentences = split_into_sentences(text)

        picked: List[Tuple[int, str]] = []
        word_count = 0
        for index, sentence in cls.rank_sentences(sentences):
            sentence_words = count_words(sentence)
            if word_count + sentence_words > max_words:
                continue
            picked.append((index, sentence))
            word_count += sentence_words
            if word_count >= max_words:
                break

        picked.sort()
        return " ".join(sentence for _, sentence in picked)


def score_sentence(sentence: str) -> float:
    """Score a sentence with the default weights."""
    return ExtractiveSummarizer.score_sentence(sentence)


def summarize(text: str, max_words: int) -> str:
    """Summarize text with the default weights."""
    return ExtractiveSummarizer.summarize(text, max_words)
