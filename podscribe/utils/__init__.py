"""Utility functions for podscribe.

Contains text processing and logging helpers.
"""

from podscribe.utils.text_utils import normalize_text, split_into_sentences

__all__ = ["normalize_text", "split_into_sentences"]
