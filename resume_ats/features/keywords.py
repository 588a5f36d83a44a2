from __future__ import annotations

import re
from collections import Counter

from resume_ats.core.scoring import ScoringTables, get_scoring_tables, get_scoring_value
from resume_ats.normalize.text import tokenize

_NUMERIC_RE = re.compile(r"^[\d.%\-]+$")


def extract_technical_terms(text: str | None, tables: ScoringTables | None = None) -> list[str]:
    """Technical and domain terms found by the pattern table, lowercased, first occurrence first."""
    if not text:
        return []
    tables = tables or get_scoring_tables()
    found: list[tuple[int, str]] = []
    for pattern in tables.technical_res:
        for match in pattern.finditer(text):
            found.append((match.start(), match.group(0).lower()))
    found.sort(key=lambda item: item[0])

    terms: list[str] = []
    for _, term in found:
        term = re.sub(r"\s+", " ", term).strip()
        if term and term not in terms:
            terms.append(term)
    return terms


def _candidate_words(text: str, tables: ScoringTables) -> list[str]:
    words: list[str] = []
    for raw in tokenize(text):
        token = raw.strip(".-")
        if not token or token in tables.stop_words:
            continue
        if _NUMERIC_RE.match(token):
            continue
        words.append(token)
    return words


def word_frequencies(text: str | None, tables: ScoringTables | None = None) -> Counter[str]:
    if not text:
        return Counter()
    tables = tables or get_scoring_tables()
    return Counter(_candidate_words(text, tables))


def top_words(text: str | None, tables: ScoringTables | None = None) -> list[str]:
    if not text:
        return []
    tables = tables or get_scoring_tables()
    min_frequency = int(get_scoring_value("extractor.min_frequency", 2))
    min_length = int(get_scoring_value("extractor.min_word_length", 5))
    limit = int(get_scoring_value("extractor.top_words", 20))

    words = _candidate_words(text, tables)
    counts = Counter(words)
    first_seen: dict[str, int] = {}
    for index, word in enumerate(words):
        first_seen.setdefault(word, index)

    kept = [word for word in counts if counts[word] >= min_frequency or len(word) >= min_length]
    kept.sort(key=lambda word: (-counts[word], first_seen[word]))
    return kept[:limit]


def extract_keywords(text: str | None, tables: ScoringTables | None = None) -> list[str]:
    """Significant keywords of a job description.

    Technical terms from the pattern table come first, followed by the most
    frequent remaining words after stop-word removal. The result is
    de-duplicated and capped (15 by default).
    """
    if not text or not text.strip():
        return []
    tables = tables or get_scoring_tables()
    max_keywords = int(get_scoring_value("extractor.max_keywords", 15))

    keywords: list[str] = []
    for term in [*extract_technical_terms(text, tables), *top_words(text, tables)]:
        if term not in keywords:
            keywords.append(term)
        if len(keywords) >= max_keywords:
            break
    return keywords


def keyword_importance(keyword: str, technical_terms: list[str], frequencies: Counter[str]) -> str:
    if keyword in technical_terms:
        return "high"
    if frequencies.get(keyword, 0) > 1:
        return "medium"
    return "low"
