from __future__ import annotations

import re

from pydantic import BaseModel, Field

from resume_ats.core.scoring import get_scoring_value

_DISALLOWED_CHARS_RE = re.compile(r"[^a-z0-9%\s.\-]")
_VOWEL_RE = re.compile(r"[aeiou]")


class NormalizedText(BaseModel):
    words: list[str] = Field(default_factory=list)
    word_count: int = 0
    is_degenerate: bool = True
    signals: list[str] = Field(default_factory=list)


def clean_text(text: str | None) -> str:
    if not text:
        return ""
    return _DISALLOWED_CHARS_RE.sub(" ", text.lower())


def tokenize(text: str | None) -> list[str]:
    return clean_text(text).split()


def has_repeated_run(cleaned: str, run_length: int) -> bool:
    # any non-space character; runs of spaces left by clean_text do not count
    if run_length < 2:
        return False
    pattern = re.compile(r"([^\s])\1{%d,}" % (run_length - 1))
    return bool(pattern.search(cleaned))


def vowelless_ratio(words: list[str], min_length: int) -> float:
    if not words:
        return 0.0
    vowelless = [word for word in words if len(word) >= min_length and not _VOWEL_RE.search(word)]
    return len(vowelless) / len(words)


def normalize_text(text: str | None) -> NormalizedText:
    cleaned = clean_text(text)
    words = cleaned.split()

    min_words = int(get_scoring_value("normalizer.min_words", 80))
    run_length = int(get_scoring_value("normalizer.repeated_run_length", 4))
    vowelless_min_length = int(get_scoring_value("normalizer.vowelless_min_length", 5))
    vowelless_max_ratio = float(get_scoring_value("normalizer.vowelless_max_ratio", 0.3))

    signals: list[str] = []
    if has_repeated_run(cleaned, run_length):
        signals.append("repeated_characters")
    if vowelless_ratio(words, vowelless_min_length) > vowelless_max_ratio:
        signals.append("vowelless_tokens")
    if len(words) < min_words:
        signals.append("too_few_words")

    return NormalizedText(
        words=words,
        word_count=len(words),
        is_degenerate=bool(signals),
        signals=signals,
    )
