from __future__ import annotations

from typing import Literal

from pydantic import Field

from .base import RecordModel

RiskLevel = Literal["Low", "Medium", "High", "Critical"]
IndicatorSeverity = Literal["Low", "Medium", "High"]


class CheatingIndicator(RecordModel):
    """Single sign of AI-assisted answering."""

    type: str
    description: str
    severity: IndicatorSeverity
    evidence: str


class CheatingAnalysis(RecordModel):
    """Assessment of whether interview answers were machine generated."""

    suspicion_score: int = Field(ge=0, le=100)
    risk_level: RiskLevel
    summary: str
    indicators: list[CheatingIndicator] = Field(default_factory=list)
    authenticity_signals: list[str] = Field(default_factory=list)
    recommendation: str
