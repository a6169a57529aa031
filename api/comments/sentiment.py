"""
Keyword sentiment classifier for comment text.

Rules are checked in order and the first match wins, so a comment that
contains both a positive and a negative keyword is `positive`. Matching is
case-sensitive substring search.
"""

from __future__ import annotations

from enum import Enum


class Sentiment(str, Enum):
    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"


RULES: tuple[tuple[Sentiment, tuple[str, ...]], ...] = (
    (Sentiment.POSITIVE, ("good", "great")),
    (Sentiment.NEGATIVE, ("bad", "terrible")),
)


def classify(text: str) -> Sentiment:
    for label, keywords in RULES:
        if any(keyword in text for keyword in keywords):
            return label
    return Sentiment.NEUTRAL
