from .ats import (
    FixPlanItem,
    JobKeywordMatch,
    JobMatchReport,
    KeywordExtractionRequest,
    KeywordExtractionResponse,
    ScanRequest,
    ScanResponse,
    ScanResult,
)
from .resume import CourseOrCertification, Education, PersonalInfo, ResumeRecord, Skill, WorkExperience

__all__ = [
    "PersonalInfo",
    "WorkExperience",
    "Education",
    "Skill",
    "CourseOrCertification",
    "ResumeRecord",
    "JobKeywordMatch",
    "JobMatchReport",
    "ScanResult",
    "FixPlanItem",
    "ScanRequest",
    "ScanResponse",
    "KeywordExtractionRequest",
    "KeywordExtractionResponse",
]
