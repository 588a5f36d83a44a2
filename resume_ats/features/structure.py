from __future__ import annotations

from resume_ats.core.scoring import get_scoring_value, scoring_message
from resume_ats.schemas.resume import ResumeRecord

from .outcome import CheckOutcome

STRUCTURE_RULES = ("contact", "summary", "experience", "education")


def check_structure(resume: ResumeRecord) -> CheckOutcome:
    """Score required-section presence in four equal buckets (0-100, no partial credit)."""
    bucket = int(get_scoring_value("structure.bucket_points", 25))
    summary_min_chars = int(get_scoring_value("structure.summary_min_chars", 50))
    info = resume.personal_info

    checks = (
        ("contact", bool(info.name and info.email and info.phone), "contact_complete", "contact_missing"),
        ("summary", len(resume.summary) > summary_min_chars, "summary_present", "summary_missing"),
        ("experience", bool(resume.work_experience), "experience_present", "experience_missing"),
        ("education", bool(resume.education), "education_present", "education_missing"),
    )

    outcome = CheckOutcome()
    for rule_id, passed, strength_key, suggestion_key in checks:
        outcome.rules[rule_id] = passed
        if passed:
            outcome.structure_points += bucket
            outcome.strengths.append(scoring_message(strength_key))
        else:
            outcome.suggestions.append(scoring_message(suggestion_key))
    return outcome
