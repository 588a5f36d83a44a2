from __future__ import annotations

from resume_ats.core.scoring import ScoringTables, get_scoring_tables, get_scoring_value, scoring_message
from resume_ats.normalize.resume_text import content_text
from resume_ats.normalize.text import normalize_text
from resume_ats.schemas.resume import ResumeRecord

from .outcome import CheckOutcome


def has_quantified_achievement(texts: list[str], tables: ScoringTables | None = None) -> bool:
    tables = tables or get_scoring_tables()
    return any(tables.quantifiable_re.search(text) for text in texts if text)


def has_action_verb(text: str, tables: ScoringTables | None = None) -> bool:
    # Whole words only: "managing" is not "managed".
    tables = tables or get_scoring_tables()
    return bool(tables.action_verb_re.search(text))


def find_passive_phrases(text: str, tables: ScoringTables | None = None) -> list[str]:
    tables = tables or get_scoring_tables()
    lowered = text.lower()
    return [phrase for phrase in tables.passive_phrases if phrase in lowered]


def check_content_quality(resume: ResumeRecord, tables: ScoringTables | None = None) -> CheckOutcome:
    """Content buckets (word count, skills, detailed bullets, quantified results) plus
    the action-verb, passive-phrase, summary-length and degenerate-text checks.

    The degenerate cap itself is applied by the aggregator once every other
    adjustment is in, so here it is only flagged and warned about.
    """
    tables = tables or get_scoring_tables()
    bucket = int(get_scoring_value("content.bucket_points", 25))
    outcome = CheckOutcome()

    text = content_text(resume)
    normalized = normalize_text(text)

    # 1. Level of detail
    min_words = int(get_scoring_value("content.min_words", 100))
    word_count_ok = len(text.split()) > min_words
    outcome.rules["word_count"] = word_count_ok
    if word_count_ok:
        outcome.content_points += bucket
        outcome.strengths.append(scoring_message("word_count_good"))
    else:
        outcome.suggestions.append(scoring_message("word_count_low"))

    # 2. Skills breadth
    skill_count = len(resume.named_skills)
    full_count = int(get_scoring_value("content.skills.full_count", 5))
    outcome.rules["skills"] = skill_count >= full_count
    if skill_count >= full_count:
        outcome.content_points += int(get_scoring_value("content.skills.full_content_points", 25))
        outcome.keyword_points += int(get_scoring_value("content.skills.full_keyword_points", 20))
        outcome.strengths.append(scoring_message("skills_full"))
    elif skill_count > 0:
        outcome.content_points += int(get_scoring_value("content.skills.partial_content_points", 15))
        outcome.keyword_points += int(get_scoring_value("content.skills.partial_keyword_points", 10))
        outcome.suggestions.append(scoring_message("skills_partial"))
    else:
        outcome.suggestions.append(scoring_message("skills_missing"))

    # 3. At least one role described in detail
    min_bullets = int(get_scoring_value("content.detailed_experience.min_bullets", 3))
    detailed = any(len(job.responsibilities) >= min_bullets for job in resume.work_experience)
    outcome.rules["detailed_experience"] = detailed
    if detailed:
        outcome.content_points += bucket
        outcome.keyword_points += int(get_scoring_value("content.detailed_experience.keyword_points", 15))
        outcome.strengths.append(scoring_message("bullets_detailed"))
    else:
        outcome.suggestions.append(scoring_message("bullets_thin"))

    # 4. Quantified achievements
    quantified = has_quantified_achievement([resume.summary, *resume.responsibilities], tables)
    outcome.rules["quantified"] = quantified
    if quantified:
        outcome.content_points += bucket
        outcome.keyword_points += int(get_scoring_value("content.quantified.keyword_points", 15))
        outcome.strengths.append(scoring_message("quantified_present"))
    else:
        outcome.suggestions.append(scoring_message("quantified_missing"))

    action_verbs = has_action_verb(text, tables)
    outcome.rules["action_verbs"] = action_verbs
    if action_verbs:
        outcome.keyword_points += int(get_scoring_value("content.action_verbs.keyword_points", 8))
        outcome.strengths.append(scoring_message("action_verbs_present"))
    else:
        outcome.suggestions.append(scoring_message("action_verbs_missing"))

    passive = find_passive_phrases(text, tables)
    outcome.rules["active_voice"] = not passive
    if passive:
        outcome.warnings.append(scoring_message("passive_phrase"))

    summary_max_chars = int(get_scoring_value("content.summary_max_chars", 500))
    summary_ok = len(resume.summary) <= summary_max_chars
    outcome.rules["summary_length"] = summary_ok
    if not summary_ok:
        outcome.warnings.append(scoring_message("summary_too_long"))

    outcome.degenerate = normalized.is_degenerate
    outcome.rules["meaningful_text"] = not normalized.is_degenerate
    if normalized.is_degenerate:
        outcome.warnings.append(scoring_message("degenerate_text"))

    return outcome
