"""Text normalization and set-similarity helpers shared by the evaluators."""

import re

from engagement_integrity.consts import SCORE_PRECISION

URL_PATTERN = re.compile(r"https?://\S+")
NON_ALPHANUMERIC_PATTERN = re.compile(r"[^a-z0-9\s]")


def tokenize(text: str) -> list[str]:
    """Normalize free text into an ordered set of lowercase tokens.

    URLs are stripped first, then every non-alphanumeric character becomes a
    separator. Order of first appearance is preserved, duplicates dropped.
    """
    normalized = URL_PATTERN.sub(" ", text.lower())
    normalized = NON_ALPHANUMERIC_PATTERN.sub(" ", normalized)
    return list(dict.fromkeys(token for token in normalized.split() if token))


def jaccard(a: set[str] | list[str], b: set[str] | list[str]) -> float:
    """Jaccard similarity |A∩B| / |A∪B|, 0.0 when both sets are empty."""
    set_a, set_b = set(a), set(b)
    union = set_a | set_b
    if not union:
        return 0.0
    return len(set_a & set_b) / len(union)


def contains_any(text: str, phrases: list[str]) -> bool:
    """Case-insensitive substring check against a list of phrases."""
    lowered = text.lower()
    return any(phrase in lowered for phrase in phrases)


def count_urls(text: str) -> int:
    return len(URL_PATTERN.findall(text))


def uppercase_ratio(text: str) -> float:
    """Share of ASCII uppercase letters over the full raw length."""
    if not text:
        return 0.0
    upper = sum(1 for ch in text if "A" <= ch <= "Z")
    return upper / max(1, len(text))


def clamp_score(score: float) -> float:
    """Clamp to [0, 1] and round so threshold comparisons are exact."""
    return round(min(1.0, max(0.0, score)), SCORE_PRECISION)


def add_indicator(indicators: list[str], indicator: str) -> None:
    """Append keeping the list free of duplicates and in detection order."""
    if indicator not in indicators:
        indicators.append(indicator)
