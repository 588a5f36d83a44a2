from .content_quality import check_content_quality, find_passive_phrases, has_action_verb, has_quantified_achievement
from .fix_plan import build_fix_plan, compatibility_band
from .job_match import build_job_match
from .keyword_match import KeywordCoverage, match_general_keywords, match_job_keywords, merge_keyword_lists
from .keywords import extract_keywords, extract_technical_terms
from .outcome import CheckOutcome
from .structure import STRUCTURE_RULES, check_structure

__all__ = [
    "CheckOutcome",
    "check_structure",
    "STRUCTURE_RULES",
    "check_content_quality",
    "has_action_verb",
    "has_quantified_achievement",
    "find_passive_phrases",
    "extract_keywords",
    "extract_technical_terms",
    "KeywordCoverage",
    "match_general_keywords",
    "match_job_keywords",
    "merge_keyword_lists",
    "build_job_match",
    "build_fix_plan",
    "compatibility_band",
]
