from __future__ import annotations

import re
from typing import Any, Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

CourseType = Literal["course", "certification"]

_BULLET_PREFIX_RE = re.compile(r"^\s*(?:[-*•·▪●◦]|\d+[\.\)])\s*")


def _coerce_str(value: Any) -> str:
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, bool):
        return ""
    if isinstance(value, (int, float)):
        return str(value)
    return ""


def _coerce_list(value: Any) -> list[Any]:
    if isinstance(value, (list, tuple)):
        return list(value)
    return []


def _split_lines(text: str) -> list[str]:
    lines: list[str] = []
    for raw in text.splitlines():
        line = _BULLET_PREFIX_RE.sub("", raw).strip()
        if line:
            lines.append(line)
    return lines


class _RecordModel(BaseModel):
    # Editor payloads are camelCase, Python callers use snake_case.
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class PersonalInfo(_RecordModel):
    name: str = Field(default="", validation_alias=AliasChoices("name", "fullName", "full_name"))
    job_title: str = ""
    location: str = ""
    email: str = ""
    phone: str = ""

    @field_validator("name", "job_title", "location", "email", "phone", mode="before")
    @classmethod
    def _text(cls, value: Any) -> str:
        return _coerce_str(value)


class WorkExperience(_RecordModel):
    job_title: str = ""
    company: str = ""
    start_date: str = ""
    end_date: str = ""
    location: str = ""
    responsibilities: list[str] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def _description_fallback(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        responsibilities = data.get("responsibilities")
        if isinstance(responsibilities, (list, tuple)) and responsibilities:
            return data
        description = data.get("description")
        if isinstance(description, str) and description.strip():
            return {**data, "responsibilities": _split_lines(description)}
        return data

    @field_validator("job_title", "company", "start_date", "end_date", "location", mode="before")
    @classmethod
    def _text(cls, value: Any) -> str:
        return _coerce_str(value)

    @field_validator("responsibilities", mode="before")
    @classmethod
    def _responsibilities(cls, value: Any) -> list[str]:
        if isinstance(value, str):
            return _split_lines(value)
        items = [_coerce_str(item) for item in _coerce_list(value)]
        return [item for item in items if item]


class Education(_RecordModel):
    degree: str = ""
    institution: str = Field(default="", validation_alias=AliasChoices("institution", "school"))
    graduation_year: str = Field(
        default="",
        validation_alias=AliasChoices("graduationYear", "graduation_year", "year"),
    )
    gpa: str | None = None
    location: str = ""

    @field_validator("degree", "institution", "graduation_year", "location", mode="before")
    @classmethod
    def _text(cls, value: Any) -> str:
        return _coerce_str(value)

    @field_validator("gpa", mode="before")
    @classmethod
    def _gpa(cls, value: Any) -> str | None:
        return _coerce_str(value) or None


class Skill(_RecordModel):
    name: str = ""
    level: int | None = Field(default=None, ge=0, le=100)

    @model_validator(mode="before")
    @classmethod
    def _bare_name(cls, data: Any) -> Any:
        if isinstance(data, str):
            return {"name": data}
        return data

    @field_validator("name", mode="before")
    @classmethod
    def _text(cls, value: Any) -> str:
        return _coerce_str(value)

    @field_validator("level", mode="before")
    @classmethod
    def _level(cls, value: Any) -> int | None:
        if isinstance(value, bool) or value is None:
            return None
        try:
            parsed = int(float(value))
        except (TypeError, ValueError, OverflowError):
            return None
        return max(0, min(100, parsed))


class CourseOrCertification(_RecordModel):
    title: str = Field(default="", validation_alias=AliasChoices("title", "name"))
    provider: str = Field(default="", validation_alias=AliasChoices("provider", "issuer"))
    date: str = ""
    description: str = ""
    type: CourseType = "course"

    @field_validator("title", "provider", "date", "description", mode="before")
    @classmethod
    def _text(cls, value: Any) -> str:
        return _coerce_str(value)

    @field_validator("type", mode="before")
    @classmethod
    def _type(cls, value: Any) -> str:
        lowered = _coerce_str(value).lower()
        return lowered if lowered in {"course", "certification"} else "course"


class ResumeRecord(_RecordModel):
    """Structured resume as produced by the editor.

    Every field is optional. Wrong-typed values are coerced to their empty
    equivalent here, once, so scoring code never sees ``None`` or a stray
    string where a list is expected.
    """

    personal_info: PersonalInfo = Field(default_factory=PersonalInfo)
    summary: str = ""
    work_experience: list[WorkExperience] = Field(default_factory=list)
    education: list[Education] = Field(default_factory=list)
    skills: list[Skill] = Field(default_factory=list)
    courses_and_certifications: list[CourseOrCertification] = Field(
        default_factory=list,
        validation_alias=AliasChoices(
            "coursesAndCertifications",
            "courses_and_certifications",
            "certifications",
        ),
    )

    @field_validator("personal_info", mode="before")
    @classmethod
    def _personal_info(cls, value: Any) -> Any:
        if isinstance(value, (dict, PersonalInfo)):
            return value
        return {}

    @field_validator("summary", mode="before")
    @classmethod
    def _summary(cls, value: Any) -> str:
        return _coerce_str(value)

    @field_validator("work_experience", "education", "courses_and_certifications", mode="before")
    @classmethod
    def _record_list(cls, value: Any) -> list[Any]:
        return [item for item in _coerce_list(value) if isinstance(item, (dict, BaseModel))]

    @field_validator("skills", mode="before")
    @classmethod
    def _skills(cls, value: Any) -> list[Any]:
        return [item for item in _coerce_list(value) if isinstance(item, (dict, str, Skill))]

    @property
    def responsibilities(self) -> list[str]:
        return [item for job in self.work_experience for item in job.responsibilities]

    @property
    def named_skills(self) -> list[str]:
        return [skill.name for skill in self.skills if skill.name]
