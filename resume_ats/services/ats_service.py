from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from resume_ats.core.scoring import get_scoring_tables, get_scoring_value, scoring_message
from resume_ats.features import (
    CheckOutcome,
    KeywordCoverage,
    build_job_match,
    check_content_quality,
    check_structure,
    match_general_keywords,
    match_job_keywords,
    merge_keyword_lists,
)
from resume_ats.normalize.resume_text import matching_corpus
from resume_ats.schemas.ats import AnalysisMode, JobKeywordMatch, JobMatchReport, ScanResult
from resume_ats.schemas.resume import ResumeRecord

logger = logging.getLogger(__name__)


@dataclass
class RuleChecks:
    structure: CheckOutcome
    content: CheckOutcome
    coverage: KeywordCoverage
    job_keywords: list[JobKeywordMatch] | None
    job_match: JobMatchReport | None

    @property
    def strengths(self) -> list[str]:
        return [*self.structure.strengths, *self.content.strengths, *self.coverage.outcome.strengths]

    @property
    def suggestions(self) -> list[str]:
        return [*self.structure.suggestions, *self.content.suggestions, *self.coverage.outcome.suggestions]

    @property
    def warnings(self) -> list[str]:
        return [*self.structure.warnings, *self.content.warnings, *self.coverage.outcome.warnings]

    @property
    def degenerate(self) -> bool:
        return self.content.degenerate


def coerce_resume(resume: ResumeRecord | Mapping[str, Any] | None) -> ResumeRecord:
    if resume is None:
        raise ValueError("resume is required")
    if isinstance(resume, ResumeRecord):
        return resume
    if isinstance(resume, Mapping):
        return ResumeRecord.model_validate(dict(resume))
    raise TypeError(f"unsupported resume type: {type(resume).__name__}")


def clamp_score(value: Any) -> int:
    low = int(get_scoring_value("scores.min", 0))
    high = int(get_scoring_value("scores.max", 100))
    try:
        parsed = int(float(value))
    except (TypeError, ValueError, OverflowError):
        return low
    return max(low, min(high, parsed))


def overall_score(format_score: int, keyword_score: int, structure_score: int, content_score: int) -> int:
    # half-up: 72.5 -> 73
    total = format_score + keyword_score + structure_score + content_score
    return int(total / 4 + 0.5)


def apply_degenerate_cap(checks: RuleChecks, keyword_score: int, content_score: int) -> tuple[int, int]:
    if not checks.degenerate:
        return keyword_score, content_score
    cap = int(get_scoring_value("content.degenerate_cap", 40))
    return min(keyword_score, cap), min(content_score, cap)


def run_rule_checks(
    resume: ResumeRecord,
    job_description: str | None,
    *,
    keyword_cap: int,
) -> RuleChecks:
    tables = get_scoring_tables()
    corpus = matching_corpus(resume)
    job_keywords = match_job_keywords(job_description, corpus, tables) if job_description else []
    has_jd = bool(job_description and job_description.strip())
    return RuleChecks(
        structure=check_structure(resume),
        content=check_content_quality(resume, tables),
        coverage=match_general_keywords(corpus, cap=keyword_cap, tables=tables),
        job_keywords=job_keywords if has_jd else None,
        job_match=build_job_match(resume, job_description, job_keywords) if has_jd else None,
    )


def build_result(
    checks: RuleChecks,
    *,
    format_score: Any,
    keyword_score: Any,
    structure_score: Any,
    content_score: Any,
    strengths: list[str],
    suggestions: list[str],
    warnings: list[str],
    detailed_analysis: str | None,
    analysis_mode: AnalysisMode,
) -> ScanResult:
    """Clamp, cap and average the sub-scores, then assemble the ScanResult."""
    format_score = clamp_score(format_score)
    structure_score = clamp_score(structure_score)
    keyword_score, content_score = apply_degenerate_cap(
        checks, clamp_score(keyword_score), clamp_score(content_score)
    )
    overall = overall_score(format_score, keyword_score, structure_score, content_score)
    matched, missing = merge_keyword_lists(checks.coverage, checks.job_keywords)

    if detailed_analysis is None:
        detailed_analysis = scoring_message(
            "rule_based_detail",
            overall=overall,
            format=format_score,
            keyword=keyword_score,
            structure=structure_score,
            content=content_score,
        )

    return ScanResult(
        overall_score=overall,
        format_score=format_score,
        keyword_score=keyword_score,
        structure_score=structure_score,
        content_score=content_score,
        strengths=strengths,
        suggestions=suggestions,
        warnings=warnings,
        matched_keywords=matched,
        missing_keywords=missing,
        job_keywords=checks.job_keywords,
        job_match=checks.job_match,
        detailed_analysis=detailed_analysis,
        analysis_mode=analysis_mode,
        scoring_version=get_scoring_tables().version,
    )


def rule_based_result(
    resume: ResumeRecord,
    job_description: str | None = None,
    *,
    analysis_mode: AnalysisMode = "rule_based",
    detailed_analysis: str | None = None,
) -> ScanResult:
    checks = run_rule_checks(
        resume,
        job_description,
        keyword_cap=int(get_scoring_value("keyword.general.cap_rule_based", 25)),
    )
    keyword_score = (
        int(get_scoring_value("keyword.baseline", 50))
        + checks.structure.keyword_points
        + checks.content.keyword_points
        + checks.coverage.outcome.keyword_points
    )
    return build_result(
        checks,
        format_score=get_scoring_value("format.baseline", 100),
        keyword_score=keyword_score,
        structure_score=checks.structure.structure_points,
        content_score=checks.content.content_points,
        strengths=checks.strengths,
        suggestions=checks.suggestions,
        warnings=checks.warnings,
        detailed_analysis=detailed_analysis,
        analysis_mode=analysis_mode,
    )


def failed_result() -> ScanResult:
    return ScanResult(
        overall_score=0,
        format_score=0,
        keyword_score=0,
        structure_score=0,
        content_score=0,
        suggestions=[scoring_message("failed_suggestion")],
        warnings=[scoring_message("failed_warning")],
        detailed_analysis=scoring_message("failed_detail"),
        analysis_mode="failed",
        scoring_version=get_scoring_tables().version,
    )


def scan(
    resume: ResumeRecord | Mapping[str, Any] | None,
    job_description: str | None = None,
) -> ScanResult:
    """Rule-based ATS compatibility scan of one resume record.

    Pure and deterministic: no I/O and no clock or randomness, so the same
    record and job description always produce the same result. Malformed
    fields are coerced at the schema boundary; only a missing or unreadable
    record yields the `failed` result.
    """
    try:
        record = coerce_resume(resume)
    except (TypeError, ValueError):
        logger.exception("ats_scan_invalid_resume type=%s", type(resume).__name__)
        return failed_result()

    if job_description is not None and not isinstance(job_description, str):
        job_description = None
    return rule_based_result(record, job_description)
