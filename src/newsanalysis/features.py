from __future__ import annotations

import math
import re

from .models import TextMetrics

VOWELS = "aeiouy"
# word separators: includes U+FEFF, excludes the U+001C-U+001F separators str.split() honours
WHITESPACE = "\t\n\v\f\r \u00a0\u1680" + "".join(map(chr, range(0x2000, 0x200B))) + "\u2028\u2029\u202f\u205f\u3000\ufeff"


def round_half_up(value: float, digits: int) -> float:
    factor = 10**digits
    return math.floor(value * factor + 0.5) / factor


def count_syllables(word: str) -> int:
    """Approximate syllables as the number of vowel runs in ``word``."""
    lowered = word.lower()
    count = 0
    previous_was_vowel = False
    for char in lowered:
        is_vowel = char in VOWELS
        if is_vowel and not previous_was_vowel:
            count += 1
        previous_was_vowel = is_vowel
    # silent trailing e
    if lowered.endswith("e") and count > 1:
        count -= 1
    return max(1, count)


def exclamation_count(text: str) -> int:
    return text.count("!")


def utf16_length(text: str) -> int:
    """Length in UTF-16 code units, so astral characters such as emoji count twice."""
    return len(text.encode("utf-16-le", "surrogatepass")) // 2


def split_words(text: str) -> list[str]:
    return [word for word in FeatureExtractor.WORD_SPLIT_PATTERN.split(text) if word]


def caps_ratio(text: str) -> float:
    if not text:
        return 0.0
    return len(FeatureExtractor.UPPERCASE_PATTERN.findall(text)) / utf16_length(text)


class FeatureExtractor:
    """Derive readability, bias, sentiment and caveat metrics from raw text."""

    BIAS_PHRASES = (
        "shocking",
        "unbelievable",
        "amazing",
        "incredible",
        "you won't believe",
        "doctors hate",
        "they don't want you to know",
        "secret",
        "exposed",
        "breaking",
        "urgent",
        "must see",
        "click here",
        "find out",
    )
    POSITIVE_WORDS = ("good", "great", "excellent", "amazing", "wonderful")
    NEGATIVE_WORDS = ("bad", "terrible", "awful", "horrible", "shocking")

    WORD_SPLIT_PATTERN = re.compile(f"[{re.escape(WHITESPACE)}]+")
    SENTENCE_SPLIT_PATTERN = re.compile(r"[.!?]+")
    UPPERCASE_PATTERN = re.compile(r"[A-Z]")
    ALL_CAPS_PATTERN = re.compile(r"[A-Z]{5,}")

    def extract(self, text: str) -> TextMetrics:
        lowered = text.lower()
        words = split_words(lowered)
        word_count = len(words)

        readability = self.readability(text, words)
        bias_indicators = self.bias_indicators(text)
        sentiment = self.sentiment(text, word_count)
        factors = self.confidence_factors(text, readability, bias_indicators, word_count)

        return TextMetrics(
            word_count=word_count,
            readability_score=round_half_up(readability, 1),
            sentiment_score=round_half_up(sentiment, 2),
            bias_indicators=bias_indicators,
            confidence_factors=factors,
        )

    def readability(self, text: str, words: list[str]) -> float:
        """Simplified Flesch reading ease, clamped to [0, 100]."""
        sentences = [part for part in self.SENTENCE_SPLIT_PATTERN.split(text) if part.strip(WHITESPACE)]
        avg_words_per_sentence = len(words) / max(len(sentences), 1)
        avg_syllables_per_word = sum(count_syllables(word) for word in words) / max(len(words), 1)
        score = 206.835 - 1.015 * avg_words_per_sentence - 84.6 * avg_syllables_per_word
        return max(0.0, min(100.0, score))

    def bias_indicators(self, text: str) -> list[str]:
        lowered = text.lower()
        return [phrase for phrase in self.BIAS_PHRASES if phrase in lowered]

    def sentiment(self, text: str, word_count: int) -> float:
        lowered = text.lower()
        positive = sum(lowered.count(word) for word in self.POSITIVE_WORDS)
        negative = sum(lowered.count(word) for word in self.NEGATIVE_WORDS)
        return (positive - negative) / max(word_count, 1)

    def confidence_factors(
        self,
        text: str,
        readability: float,
        bias_indicators: list[str],
        word_count: int,
    ) -> list[str]:
        factors = []
        if readability < 30:
            factors.append("Low readability")
        if len(bias_indicators) > 2:
            factors.append("High bias language")
        if len(text.split("!")) > 3:
            factors.append("Excessive exclamation")
        if word_count < 10:
            factors.append("Very short text")
        if self.ALL_CAPS_PATTERN.search(text):
            factors.append("Excessive capitalization")
        return factors
