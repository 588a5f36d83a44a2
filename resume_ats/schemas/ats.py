from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .resume import ResumeRecord

AnalysisMode = Literal["rule_based", "generated", "fallback", "failed"]
Importance = Literal["high", "medium", "low"]
Compatibility = Literal["excellent", "good", "fair", "poor"]
FixPriority = Literal["critical", "important", "minor"]
FixCategory = Literal["format", "content", "keywords", "structure"]


class _ApiModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class JobKeywordMatch(_ApiModel):
    keyword: str
    matched: bool
    importance: Importance = "low"


class JobMatchReport(_ApiModel):
    keyword_match: int = Field(ge=0, le=100)
    experience_match: int = Field(ge=0, le=100)
    skills_match: int = Field(ge=0, le=100)
    format_match: int = Field(ge=0, le=100)
    recommendations: list[str] = Field(default_factory=list)


class ScanResult(_ApiModel):
    overall_score: int = Field(ge=0, le=100)
    format_score: int = Field(ge=0, le=100)
    keyword_score: int = Field(ge=0, le=100)
    structure_score: int = Field(ge=0, le=100)
    content_score: int = Field(ge=0, le=100)
    strengths: list[str] = Field(default_factory=list)
    suggestions: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    matched_keywords: list[str] = Field(default_factory=list)
    missing_keywords: list[str] = Field(default_factory=list)
    job_keywords: list[JobKeywordMatch] | None = None
    job_match: JobMatchReport | None = None
    detailed_analysis: str = ""
    analysis_mode: AnalysisMode = "rule_based"
    scoring_version: str = ""


class FixPlanItem(_ApiModel):
    id: str
    priority: FixPriority
    category: FixCategory
    title: str
    description: str
    impact: int = Field(ge=0, le=100)
    preview: str = ""


class ScanRequest(_ApiModel):
    resume: ResumeRecord = Field(default_factory=ResumeRecord)
    job_description: str | None = Field(default=None, max_length=50000)
    session_id: str | None = Field(default=None, min_length=8, max_length=200)


class ScanResponse(_ApiModel):
    result: ScanResult
    fix_plan: list[FixPlanItem] = Field(default_factory=list)
    compatibility: Compatibility
    cached: bool = False


class KeywordExtractionRequest(_ApiModel):
    text: str = Field(default="", max_length=50000)


class KeywordExtractionResponse(_ApiModel):
    keywords: list[str] = Field(default_factory=list)
    technical_terms: list[str] = Field(default_factory=list)
    details: dict[str, Any] = Field(default_factory=dict)
