from __future__ import annotations

from resume_ats.schemas.resume import ResumeRecord


def content_text(resume: ResumeRecord) -> str:
    """Summary plus every responsibility bullet, the text content checks run over."""
    parts = [resume.summary, *resume.responsibilities]
    return " ".join(part for part in parts if part)


def matching_corpus(resume: ResumeRecord) -> str:
    parts: list[str] = [resume.summary]
    for job in resume.work_experience:
        parts.extend([job.job_title, job.company, *job.responsibilities])
    for edu in resume.education:
        parts.extend([edu.degree, edu.institution])
    parts.extend(resume.named_skills)
    return " ".join(part for part in parts if part)


def build_resume_text(resume: ResumeRecord) -> str:
    """Plain-text rendering of the record, used as generator input."""
    info = resume.personal_info
    lines: list[str] = [
        f"Name: {info.name}",
        f"Email: {info.email}",
        f"Phone: {info.phone}",
        f"Location: {info.location}",
        f"Title: {info.job_title}",
        "",
    ]

    if resume.summary:
        lines.extend(["Professional Summary:", resume.summary, ""])

    if resume.work_experience:
        lines.append("Work Experience:")
        for job in resume.work_experience:
            lines.append(f"{job.job_title} at {job.company} ({job.start_date} - {job.end_date})")
            if job.location:
                lines.append(f"Location: {job.location}")
            lines.extend(f"• {item}" for item in job.responsibilities)
            lines.append("")

    if resume.education:
        lines.append("Education:")
        for edu in resume.education:
            lines.append(f"{edu.degree} from {edu.institution} ({edu.graduation_year})")
            if edu.gpa:
                lines.append(f"GPA: {edu.gpa}")
            if edu.location:
                lines.append(f"Location: {edu.location}")
            lines.append("")

    if resume.skills:
        lines.append("Skills:")
        for skill in resume.skills:
            if not skill.name:
                continue
            level = skill.level if skill.level is not None else "Not specified"
            lines.append(f"• {skill.name} (Level: {level})")
        lines.append("")

    if resume.courses_and_certifications:
        lines.append("Courses and Certifications:")
        for item in resume.courses_and_certifications:
            label = item.title
            if item.provider:
                label = f"{label} - {item.provider}"
            lines.append(f"• {label} ({item.type})")
            if item.description:
                lines.append(f"  {item.description}")

    return "\n".join(lines).strip()
