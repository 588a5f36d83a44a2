from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass, field
from typing import Any, Union

from resume_ats.core.scoring import get_scoring_value, scoring_message
from resume_ats.features import STRUCTURE_RULES
from resume_ats.schemas.ats import ScanResult
from resume_ats.schemas.resume import ResumeRecord
from resume_ats.services.ats_service import build_result, rule_based_result, run_rule_checks

logger = logging.getLogger(__name__)

_CODE_FENCE_RE = re.compile(r"^\s*```(?:json)?\s*(.*?)\s*```\s*$", re.DOTALL | re.IGNORECASE)

_SCORE_FIELDS = ("formatScore", "keywordScore", "structureScore", "contentScore")
_LIST_FIELDS = ("strengths", "suggestions", "warnings")


@dataclass(frozen=True)
class ParsedAnalysis:
    format_score: int
    keyword_score: int
    structure_score: int
    content_score: int
    strengths: list[str] = field(default_factory=list)
    suggestions: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    detailed_analysis: str = ""


@dataclass(frozen=True)
class Fallback:
    reason: str


GeneratedAnalysis = Union[ParsedAnalysis, Fallback]


def _clamp_int(value: Any, default: int, min_value: int, max_value: int) -> int:
    if isinstance(value, bool):
        return default
    try:
        parsed = int(float(value))
    except (TypeError, ValueError, OverflowError):
        return default
    return max(min_value, min(max_value, parsed))


def _safe_str(value: Any, max_len: int) -> str:
    if not isinstance(value, str):
        return ""
    text = re.sub(r"\s+", " ", value).strip()
    if len(text) > max_len:
        text = text[:max_len].rstrip()
    return text


def _safe_str_list(value: Any, max_items: int, max_len: int) -> list[str]:
    if not isinstance(value, list):
        return []
    output: list[str] = []
    for item in value:
        text = _safe_str(item, max_len=max_len)
        if text:
            output.append(text)
        if len(output) >= max_items:
            break
    return output


def _unique(items: list[str]) -> list[str]:
    return list(dict.fromkeys(items))


def _strip_code_fence(raw: str) -> str:
    match = _CODE_FENCE_RE.match(raw)
    return match.group(1) if match else raw


def parse_generated_analysis(raw: Any) -> GeneratedAnalysis:
    """Validate untrusted generator output into a ParsedAnalysis, or say why not.

    Scores are clamped to 0-100 (missing or non-numeric become 0) and list
    fields keep only non-empty strings. Anything that is not a JSON object
    is a Fallback.
    """
    if raw is None:
        return Fallback(reason="no output")
    if isinstance(raw, dict):
        payload: Any = raw
    elif isinstance(raw, str):
        text = _strip_code_fence(raw).strip()
        if not text:
            return Fallback(reason="empty output")
        try:
            payload = json.loads(text)
        except (json.JSONDecodeError, RecursionError) as exc:
            return Fallback(reason=f"invalid JSON: {exc.__class__.__name__}")
    else:
        return Fallback(reason=f"unsupported output type {type(raw).__name__}")

    if not isinstance(payload, dict):
        return Fallback(reason="top-level value is not an object")

    max_items = int(get_scoring_value("generated.max_list_items", 20))
    max_item_chars = int(get_scoring_value("generated.max_item_chars", 300))
    max_detail_chars = int(get_scoring_value("generated.max_detail_chars", 4000))

    scores = [_clamp_int(payload.get(name), 0, 0, 100) for name in _SCORE_FIELDS]
    lists = [_safe_str_list(payload.get(name), max_items, max_item_chars) for name in _LIST_FIELDS]
    return ParsedAnalysis(
        format_score=scores[0],
        keyword_score=scores[1],
        structure_score=scores[2],
        content_score=scores[3],
        strengths=lists[0],
        suggestions=lists[1],
        warnings=lists[2],
        detailed_analysis=_safe_str(payload.get("detailedAnalysis"), max_detail_chars),
    )


def combine_generated_analysis(
    resume: ResumeRecord,
    raw: Any,
    job_description: str | None = None,
) -> ScanResult:
    """Re-validate a generated analysis with the rule-based checks.

    The generator never supplies a final score unchecked: each failed
    structure rule and a missing work history are penalized, general keyword
    coverage is added, degenerate text is capped, and the overall score is
    recomputed. Unparseable output yields the rule-based result instead.
    """
    parsed = parse_generated_analysis(raw)
    if isinstance(parsed, Fallback):
        logger.warning("ats_generated_analysis_fallback reason=%s", parsed.reason)
        return rule_based_result(
            resume,
            job_description,
            analysis_mode="fallback",
            detailed_analysis=scoring_message("fallback_detail", reason=parsed.reason),
        )

    checks = run_rule_checks(
        resume,
        job_description,
        keyword_cap=int(get_scoring_value("keyword.general.cap_generated", 30)),
    )
    structure_penalty = int(get_scoring_value("generated.structure_penalty", 10))
    experience_penalty = int(get_scoring_value("generated.missing_experience_penalty", 20))

    failed_rules = [rule_id for rule_id in STRUCTURE_RULES if not checks.structure.passed(rule_id)]
    structure_score = parsed.structure_score - structure_penalty * len(failed_rules)
    content_score = parsed.content_score
    keyword_score = parsed.keyword_score + checks.coverage.outcome.keyword_points

    rule_warnings: list[str] = []
    if not resume.personal_info.email:
        rule_warnings.append(scoring_message("missing_email"))
    if not resume.work_experience:
        content_score -= experience_penalty
        rule_warnings.append(scoring_message("missing_experience"))

    return build_result(
        checks,
        format_score=parsed.format_score,
        keyword_score=keyword_score,
        structure_score=structure_score,
        content_score=content_score,
        strengths=_unique([*parsed.strengths, *checks.strengths]),
        suggestions=_unique([*parsed.suggestions, *checks.suggestions]),
        warnings=_unique([*parsed.warnings, *rule_warnings, *checks.warnings]),
        detailed_analysis=parsed.detailed_analysis or scoring_message("generated_detail"),
        analysis_mode="generated",
    )
