from __future__ import annotations

from dataclasses import dataclass, field

from resume_ats.core.scoring import ScoringTables, get_scoring_tables, get_scoring_value, scoring_message
from resume_ats.schemas.ats import JobKeywordMatch

from .keywords import extract_keywords, extract_technical_terms, keyword_importance, word_frequencies
from .outcome import CheckOutcome


@dataclass
class KeywordCoverage:
    outcome: CheckOutcome
    matched: list[str] = field(default_factory=list)
    missing: list[str] = field(default_factory=list)


def match_general_keywords(
    corpus: str,
    *,
    cap: int | None = None,
    tables: ScoringTables | None = None,
) -> KeywordCoverage:
    """Whole-word coverage of the general ATS keyword list.

    `cap` bounds the keyword-score contribution; the rule-based path uses
    `keyword.general.cap_rule_based` and the generated path `cap_generated`.
    """
    tables = tables or get_scoring_tables()
    if cap is None:
        cap = int(get_scoring_value("keyword.general.cap_rule_based", 25))
    per_match = int(get_scoring_value("keyword.general.points_per_match", 3))
    max_matched = int(get_scoring_value("keyword.general.max_matched", 20))
    max_missing = int(get_scoring_value("keyword.general.max_missing", 10))
    good_coverage = int(get_scoring_value("keyword.general.good_coverage", 5))
    hint_count = int(get_scoring_value("keyword.general.hint_count", 3))

    matched: list[str] = []
    missing: list[str] = []
    for keyword, pattern in tables.general_keyword_res:
        if corpus and pattern.search(corpus):
            matched.append(keyword)
        else:
            missing.append(keyword)

    outcome = CheckOutcome(keyword_points=min(cap, len(matched) * per_match))
    outcome.rules["keyword_coverage"] = len(matched) >= good_coverage
    if len(matched) >= good_coverage:
        outcome.strengths.append(scoring_message("keywords_good", count=len(matched)))
    elif missing:
        outcome.suggestions.append(
            scoring_message("keywords_low", keywords=", ".join(missing[:hint_count]))
        )

    return KeywordCoverage(outcome=outcome, matched=matched[:max_matched], missing=missing[:max_missing])


def keyword_in_text(keyword: str, corpus_lower: str) -> bool:
    if not keyword or not corpus_lower:
        return False
    if keyword in corpus_lower:
        return True
    parts = keyword.split()
    if len(parts) < 2:
        return False
    return any(part in corpus_lower for part in parts)


def match_job_keywords(
    job_description: str | None,
    corpus: str,
    tables: ScoringTables | None = None,
) -> list[JobKeywordMatch]:
    """Match keywords extracted from a job description against the resume corpus.

    Presence is a case-insensitive substring test; a multi-word keyword also
    counts when any one of its words appears. Importance is display-only.
    """
    if not job_description or not job_description.strip():
        return []
    tables = tables or get_scoring_tables()
    keywords = extract_keywords(job_description, tables)
    technical_terms = extract_technical_terms(job_description, tables)
    frequencies = word_frequencies(job_description, tables)
    corpus_lower = (corpus or "").lower()

    return [
        JobKeywordMatch(
            keyword=keyword,
            matched=keyword_in_text(keyword, corpus_lower),
            importance=keyword_importance(keyword, technical_terms, frequencies),
        )
        for keyword in keywords
    ]


def merge_keyword_lists(
    coverage: KeywordCoverage,
    job_keywords: list[JobKeywordMatch] | None,
) -> tuple[list[str], list[str]]:
    """Final matched/missing lists: job-specific results first, then general coverage.

    Each list is de-duplicated and anything matched by either mode is dropped
    from the missing list, so the two never overlap.
    """
    max_matched = int(get_scoring_value("keyword.general.max_matched", 20))
    max_missing = int(get_scoring_value("keyword.general.max_missing", 10))

    matched: list[str] = []
    missing: list[str] = []
    for item in job_keywords or []:
        target = matched if item.matched else missing
        if item.keyword not in target:
            target.append(item.keyword)
    for keyword in coverage.matched:
        if keyword not in matched:
            matched.append(keyword)
    for keyword in coverage.missing:
        if keyword not in missing:
            missing.append(keyword)

    matched_set = set(matched)
    missing = [keyword for keyword in missing if keyword not in matched_set]
    return matched[:max_matched], missing[:max_missing]
