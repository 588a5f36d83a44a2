from __future__ import annotations

from resume_ats.core.scoring import get_scoring_value, scoring_message
from resume_ats.schemas.ats import JobKeywordMatch, JobMatchReport
from resume_ats.schemas.resume import ResumeRecord


def _half_up(value: float) -> int:
    return int(value + 0.5)


def experience_match(resume: ResumeRecord, job_description: str) -> int:
    if not resume.work_experience:
        return int(get_scoring_value("job_match.experience.no_experience", 30))
    score = int(get_scoring_value("job_match.experience.base", 50))
    per_match = int(get_scoring_value("job_match.experience.per_match", 15))
    jd = job_description.lower()
    for job in resume.work_experience:
        title = job.job_title.lower()
        company = job.company.lower()
        if (title and title in jd) or (company and company in jd):
            score += per_match
    return min(100, score)


def skills_match(resume: ResumeRecord, job_description: str) -> int:
    score = int(get_scoring_value("job_match.skills.base", 40))
    per_match = int(get_scoring_value("job_match.skills.per_match", 15))
    jd = job_description.lower()
    for name in resume.named_skills:
        if name.lower() in jd:
            score += per_match
    return min(100, score)


def format_match(resume: ResumeRecord) -> int:
    score = int(get_scoring_value("job_match.format.base", 60))
    per_item = int(get_scoring_value("job_match.format.per_item", 10))
    summary_min = int(get_scoring_value("structure.summary_min_chars", 50))
    present = [
        bool(resume.personal_info.email),
        bool(resume.personal_info.phone),
        len(resume.summary) > summary_min,
        bool(resume.work_experience),
    ]
    return min(100, score + per_item * sum(present))


def keyword_match_percent(job_keywords: list[JobKeywordMatch]) -> int:
    if not job_keywords:
        return 0
    matched = sum(1 for item in job_keywords if item.matched)
    return _half_up(100 * matched / len(job_keywords))


def build_job_match(
    resume: ResumeRecord,
    job_description: str | None,
    job_keywords: list[JobKeywordMatch],
) -> JobMatchReport | None:
    """Display-only report of how well the resume fits one job description."""
    if not job_description or not job_description.strip():
        return None

    keyword_match = keyword_match_percent(job_keywords)
    experience = experience_match(resume, job_description)
    skills = skills_match(resume, job_description)
    formatting = format_match(resume)
    mean = _half_up((keyword_match + experience + skills + formatting) / 4)

    recommendations: list[str] = []
    if keyword_match < int(get_scoring_value("job_match.keyword_hint_below", 60)):
        missing = [item.keyword for item in job_keywords if not item.matched][:3]
        if missing:
            recommendations.append(scoring_message("job_missing_keywords", keywords=", ".join(missing)))
    if mean < int(get_scoring_value("job_match.tailoring_below", 70)):
        recommendations.append(scoring_message("job_tailor_experience"))
        recommendations.append(scoring_message("job_add_skills"))
    if mean < int(get_scoring_value("job_match.quantify_below", 85)):
        recommendations.append(scoring_message("job_quantify"))
        recommendations.append(scoring_message("job_optimize_summary"))

    return JobMatchReport(
        keyword_match=keyword_match,
        experience_match=experience,
        skills_match=skills,
        format_match=formatting,
        recommendations=recommendations,
    )
