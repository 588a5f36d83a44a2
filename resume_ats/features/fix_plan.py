from __future__ import annotations

from typing import Any

from resume_ats.core.scoring import get_scoring_value
from resume_ats.schemas.ats import Compatibility, FixPlanItem, ScanResult
from resume_ats.schemas.resume import ResumeRecord

_PRIORITY_ORDER = {"critical": 3, "important": 2, "minor": 1}


def compatibility_band(overall_score: int) -> Compatibility:
    if overall_score >= int(get_scoring_value("compatibility.excellent", 85)):
        return "excellent"
    if overall_score >= int(get_scoring_value("compatibility.good", 70)):
        return "good"
    if overall_score >= int(get_scoring_value("compatibility.fair", 55)):
        return "fair"
    return "poor"


def _fix_item(item_id: str) -> FixPlanItem:
    raw: Any = get_scoring_value(f"fix_items.{item_id}", None)
    if not isinstance(raw, dict):
        raise RuntimeError(f"Invalid scoring config: missing fix item '{item_id}'.")
    return FixPlanItem(
        id=item_id,
        priority=raw.get("priority"),
        category=raw.get("category"),
        title=str(raw.get("title") or ""),
        description=str(raw.get("description") or ""),
        impact=int(raw.get("impact") or 0),
        preview=str(raw.get("preview") or ""),
    )


def build_fix_plan(result: ScanResult, resume: ResumeRecord) -> list[FixPlanItem]:
    """Prioritized fixes: critical before important before minor, then by impact."""
    item_ids: list[str] = []
    if result.keyword_score < int(get_scoring_value("fix_plan.critical_keyword_below", 60)):
        item_ids.append("keywords-critical")
    if result.content_score < int(get_scoring_value("fix_plan.critical_content_below", 60)):
        item_ids.append("content-critical")
    if result.structure_score < int(get_scoring_value("fix_plan.important_structure_below", 80)):
        item_ids.append("structure-important")
    if len(resume.summary) < int(get_scoring_value("fix_plan.summary_min_chars", 100)):
        item_ids.append("summary-important")
    item_ids.append("format-minor")

    items = [_fix_item(item_id) for item_id in item_ids]
    items.sort(key=lambda item: (-_PRIORITY_ORDER[item.priority], -item.impact))
    return items
