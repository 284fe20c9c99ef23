"""Pydantic record definitions for evaluation and cheating-detection output."""

from __future__ import annotations

from .cheating import CheatingAnalysis, CheatingIndicator
from .evaluation import (
    BehavioralAnalysis,
    EvaluationResult,
    ExtractedMustHaves,
    FailedRequirement,
    HardRequirementAnalysis,
    InterviewersKit,
    InterviewVerification,
    JDMatchAnalysis,
    JDRequirementMatch,
    MustHaveAnalysis,
    MustHaveExperience,
    MustHaveQualification,
    MustHaveSkill,
    QuestionAnswerAssessment,
    SkillAssessment,
    TechnicalAnalysis,
    UntestedRequirement,
    VerifiedRequirement,
)

__all__ = [
    "BehavioralAnalysis",
    "CheatingAnalysis",
    "CheatingIndicator",
    "EvaluationResult",
    "ExtractedMustHaves",
    "FailedRequirement",
    "HardRequirementAnalysis",
    "InterviewersKit",
    "InterviewVerification",
    "JDMatchAnalysis",
    "JDRequirementMatch",
    "MustHaveAnalysis",
    "MustHaveExperience",
    "MustHaveQualification",
    "MustHaveSkill",
    "QuestionAnswerAssessment",
    "SkillAssessment",
    "TechnicalAnalysis",
    "UntestedRequirement",
    "VerifiedRequirement",
]
