from __future__ import annotations

from pydantic import BaseModel, Field


class CheckOutcome(BaseModel):
    structure_points: int = 0
    content_points: int = 0
    keyword_points: int = 0
    strengths: list[str] = Field(default_factory=list)
    suggestions: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    rules: dict[str, bool] = Field(default_factory=dict)
    degenerate: bool = False

    def passed(self, rule_id: str) -> bool:
        return self.rules.get(rule_id, False)
