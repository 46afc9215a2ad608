"""Word frequency extraction for the insights word cloud."""

import re
from collections import Counter
from typing import Iterable

WORD_CLOUD_SIZE = 25
MIN_WORD_LENGTH = 4

_NON_LETTERS = re.compile(r"[^a-z\s]")

# Apostrophes are stripped before lookup, so contractions appear in their
# collapsed form ("dont", "ive") as well as their fragments ("ve", "t").
STOP_WORDS = frozenset([
    "the", "a", "an", "and", "or", "but", "in", "on", "at", "to", "for", "of",
    "with", "by", "from", "is", "are", "was", "were", "be", "been", "being",
    "have", "has", "had", "do", "does", "did", "will", "would", "could",
    "should", "may", "might", "must", "can", "this", "that", "these", "those",
    "i", "you", "he", "she", "it", "we", "they", "my", "your", "his", "her",
    "its", "our", "their", "what", "which", "who", "when", "where", "why",
    "how", "all", "each", "every", "both", "few", "more", "most", "other",
    "some", "such", "no", "nor", "not", "only", "own", "same", "so", "than",
    "too", "very", "just", "also", "now", "here", "there", "then", "once",
    "if", "any", "about", "into", "through", "during", "before", "after",
    "above", "below", "up", "down", "out", "off", "over", "under", "again",
    "further", "because", "as", "until", "while", "although", "though",
    "even", "still", "already", "always", "never", "ever", "really", "ve",
    "m", "t", "s", "like", "get", "got", "much", "many", "way", "make",
    "made", "find", "need", "try", "take", "know", "think", "come", "want",
    "use", "work", "going", "dont", "cant", "didnt", "ive", "im",
])


def tokenize(text: str) -> list[str]:
    """Lowercase, drop everything but a-z and whitespace, and split."""
    return _NON_LETTERS.sub("", text.lower()).split()


def is_significant(word: str) -> bool:
    return len(word) >= MIN_WORD_LENGTH and word not in STOP_WORDS


def word_frequencies(texts: Iterable[str], limit: int = WORD_CLOUD_SIZE) -> list[tuple[str, int]]:
    """
    Count significant words across ``texts``.

    Returns at most ``limit`` (word, count) pairs ordered by descending
    count. Words with equal counts keep the order in which they were
    first seen.
    """
    counts: Counter[str] = Counter()
    for text in texts:
        counts.update(word for word in tokenize(text or "") if is_significant(word))

    # Counter preserves insertion order and sorted() is stable.
    ranked = sorted(counts.items(), key=lambda item: -item[1])
    return ranked[:limit]
