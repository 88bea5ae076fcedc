"""Text processing utilities for podscribe.

Contains whitespace normalization and the lexical scanning rules used to
split text into sentences and count tokens for sentence scoring.
"""

import re
from typing import Iterator, List

# Tab, line terminators, space separators and the byte order mark.
# Unlike str.isspace it includes U+FEFF and excludes U+001C-U+001F and U+0085.
WHITESPACE = (
    "\t\n\v\f\r \u00a0\u1680"
    "\u2000\u2001\u2002\u2003\u2004\u2005\u2006\u2007\u2008\u2009\u200a"
    "\u2028\u2029\u202f\u205f\u3000\ufeff"
)
_WHITESPACE_CHARS = frozenset(WHITESPACE)
_WHITESPACE_RUN = re.compile(f"[{re.escape(WHITESPACE)}]+")

SENTENCE_TERMINATORS = frozenset(".!?")
# Characters (besides capitals and digits) that may open a new sentence
SENTENCE_OPENERS = frozenset("\"'?(")
# Comma, colon, semicolon, dash, question mark, inverted question mark
SCORING_PUNCTUATION = frozenset(",:;-?¿")


def is_whitespace(char: str) -> bool:
    return char in _WHITESPACE_CHARS


def strip_whitespace(text: str) -> str:
    return text.strip(WHITESPACE)


def split_on_whitespace(text: str) -> List[str]:
    """Split text on whitespace runs, dropping empty pieces."""
    return [piece for piece in _WHITESPACE_RUN.split(text) if piece]


def normalize_text(raw: str) -> str:
    """
    Collapse every run of whitespace into a single space and trim both ends.

    Newlines and tabs are whitespace too, so the result never contains them.
    Control characters such as U+001C are kept.

    Args:
        raw (str): Untrusted input text

    Returns:
        str: Normalized text
    """
    return strip_whitespace(_WHITESPACE_RUN.sub(" ", raw))


def is_ascii_upper(char: str) -> bool:
    return "A" <= char <= "Z"


def is_ascii_lower(char: str) -> bool:
    return "a" <= char <= "z"


def is_ascii_digit(char: str) -> bool:
    return "0" <= char <= "9"


def is_word_char(char: str) -> bool:
    """Return True for characters that make up a word token: [A-Za-z0-9_]."""
    return is_ascii_upper(char) or is_ascii_lower(char) or is_ascii_digit(char) or char == "_"


def is_sentence_terminator(char: str) -> bool:
    return char in SENTENCE_TERMINATORS


def is_sentence_opener(char: str) -> bool:
    """Return True if a character can start a sentence after a terminator."""
    return is_ascii_upper(char) or is_ascii_digit(char) or char in SENTENCE_OPENERS


def find_sentence_boundary(text: str, index: int) -> int:
    """
    Check for a sentence boundary right after ``text[index]``.

    A boundary is a terminator (``.``, ``!``, ``?``) followed by one or more
    whitespace characters and then a sentence opener. Abbreviations and
    decimals like ``e.g. foo`` or ``3.14`` are not boundaries.

    Args:
        text (str): Text being scanned
        index (int): Position of the candidate terminator

    Returns:
        int: Position of the opener that starts the next sentence,
            or -1 if there is no boundary here
    """
    if not is_sentence_terminator(text[index]):
        return -1

    position = index + 1
    while position < len(text) and is_whitespace(text[position]):
        position += 1

    if position == index + 1 or position >= len(text):
        return -1
    if not is_sentence_opener(text[position]):
        return -1
    return position


def split_into_sentences(text: str) -> List[str]:
    """
    Split text into sentences in order of appearance.

    Args:
        text (str): Text to split

    Returns:
        List[str]: Trimmed, non-empty sentences
    """
    pieces: List[str] = []
    start = 0
    index = 0

    while index < len(text):
        next_start = find_sentence_boundary(text, index)
        if next_start == -1:
            index += 1
            continue
        pieces.append(text[start : index + 1])
        start = next_start
        index = next_start

    pieces.append(text[start:])

    stripped = (strip_whitespace(piece) for piece in pieces)
    return [piece for piece in stripped if piece]


def iter_word_tokens(text: str) -> Iterator[str]:
    """Yield maximal runs of word characters."""
    token_chars: List[str] = []
    for char in text:
        if is_word_char(char):
            token_chars.append(char)
        elif token_chars:
            yield "".join(token_chars)
            token_chars = []
    if token_chars:
        yield "".join(token_chars)


def is_numeric_token(token: str) -> bool:
    return bool(token) and all(is_ascii_digit(char) for char in token)


def is_capitalized_token(token: str) -> bool:
    """Return True for tokens like ``Paris``: one capital, then only lowercase."""
    return (
        len(token) >= 2
        and is_ascii_upper(token[0])
        and all(is_ascii_lower(char) for char in token[1:])
    )


def count_words(text: str) -> int:
    """Count whitespace-separated words."""
    return len(split_on_whitespace(text))


def count_scoring_punctuation(text: str) -> int:
    return sum(1 for char in text if char in SCORING_PUNCTUATION)


def count_numeric_tokens(text: str) -> int:
    return sum(1 for token in iter_word_tokens(text) if is_numeric_token(token))


def count_capitalized_tokens(text: str) -> int:
    return sum(1 for token in iter_word_tokens(text) if is_capitalized_token(token))
