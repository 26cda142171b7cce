"""Text normalization: tokenization and n-gram extraction."""

import re

# Common words to ignore when detecting keywords
STOP_WORDS = frozenset([
    "a", "an", "the", "and", "or", "but", "is", "are", "was", "were", "be", "been",
    "being", "have", "has", "had", "do", "does", "did", "will", "would", "could",
    "should", "may", "might", "must", "shall", "can", "need", "dare", "ought",
    "used", "to", "of", "in", "for", "on", "with", "at", "by", "from", "as",
    "into", "through", "during", "before", "after", "above", "below", "between",
    "under", "again", "further", "then", "once", "here", "there", "when", "where",
    "why", "how", "all", "each", "few", "more", "most", "other", "some", "such",
    "no", "nor", "not", "only", "own", "same", "so", "than", "too", "very", "just",
    "i", "me", "my", "myself", "we", "our", "ours", "ourselves", "you", "your",
    "yours", "yourself", "yourselves", "he", "him", "his", "himself", "she", "her",
    "hers", "herself", "it", "its", "itself", "they", "them", "their", "theirs",
    "themselves", "what", "which", "who", "whom", "this", "that", "these", "those",
    "am", "if", "because", "until", "while", "about", "against", "also", "any",
    "both", "dont", "get", "got", "hi", "hello", "hey", "dear", "regards", "thanks",
    "thank", "please", "let", "know", "like", "want", "see", "look", "looking",
])

# Anything that is not a word character, whitespace, apostrophe or hyphen
_NON_WORD_PATTERN = re.compile(r"[^\w\s'-]")


def tokenize(text: str | None) -> list[str]:
    """Tokenize text into normalized, significant words.

    Punctuation splits words, but internal apostrophes and hyphens survive
    ("follow-up" and "don't" stay single tokens). Tokens of one character
    and stop words are dropped. No stemming is applied.

    Args:
        text: Raw email text. None or empty yields no tokens.

    Returns:
        Tokens in document order.
    """
    if not text:
        return []

    cleaned = _NON_WORD_PATTERN.sub(" ", text.lower())
    return [
        word for word in cleaned.split()
        if len(word) > 1 and word not in STOP_WORDS
    ]


def extract_ngrams(tokens: list[str], n: int = 2) -> list[str]:
    """Build every contiguous window of n tokens, joined by a single space.

    Args:
        tokens: Token sequence from tokenize().
        n: Window size (>= 1).

    Returns:
        Phrases in left-to-right order; empty if there are fewer than n tokens.
    """
    return [" ".join(tokens[i:i + n]) for i in range(len(tokens) - n + 1)]
