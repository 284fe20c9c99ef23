from __future__ import annotations

from typing import Literal

from pydantic import Field

from .base import RecordModel
from .cheating import CheatingAnalysis

HiringDecision = Literal["Strong Hire", "Hire", "Weak Hire", "No Hire", "Disqualified"]
LevelAssessment = Literal["Expert", "Senior", "Intermediate", "Junior"]
SkillRating = Literal["Excellent", "Good", "Adequate", "Insufficient", "Not Demonstrated"]
Criticality = Literal["Dealbreaker", "Critical", "Important"]
FailureSeverity = Literal["Dealbreaker", "Critical", "Significant"]
Level3 = Literal["High", "Medium", "Low"]
DepthRating = Literal["Expert", "Advanced", "Intermediate", "Novice"]
MatchLevel = Literal["High", "Medium", "Low", "None"]
Correctness = Literal["Correct", "Partially Correct", "Incorrect"]
Completeness = Literal["Complete", "Partial", "Incomplete"]
QuestionWeight = Literal["Must-Have", "Important", "Nice-to-Have"]


class MustHaveSkill(RecordModel):
    skill: str
    reason: str
    criticality: Criticality


class MustHaveExperience(RecordModel):
    experience: str
    reason: str
    minimum_years: str | None = None
    criticality: Criticality


class MustHaveQualification(RecordModel):
    qualification: str
    reason: str
    criticality: Criticality


class ExtractedMustHaves(RecordModel):
    """Must-have requirements pulled out of the job description."""

    skills: list[MustHaveSkill] = Field(default_factory=list)
    experiences: list[MustHaveExperience] = Field(default_factory=list)
    qualifications: list[MustHaveQualification] = Field(default_factory=list)


class VerifiedRequirement(RecordModel):
    requirement: str
    verified_by: str
    evidence: str
    confidence_level: Level3


class FailedRequirement(RecordModel):
    requirement: str
    failed_at: str
    reason: str
    severity: FailureSeverity


class UntestedRequirement(RecordModel):
    requirement: str
    recommendation: str


class InterviewVerification(RecordModel):
    """How each must-have fared against the interview answers."""

    verified: list[VerifiedRequirement] = Field(default_factory=list)
    failed: list[FailedRequirement] = Field(default_factory=list)
    not_tested: list[UntestedRequirement] = Field(default_factory=list)


class MustHaveAnalysis(RecordModel):
    """Must-have gating data; drives the hiring policy overrides."""

    extracted_must_haves: ExtractedMustHaves = Field(default_factory=ExtractedMustHaves)
    interview_verification: InterviewVerification = Field(default_factory=InterviewVerification)
    must_have_score: int = Field(default=0, ge=0, le=100)
    pass_rate: str = "0/0"
    disqualified: bool = False
    disqualification_reasons: list[str] = Field(default_factory=list)
    assessment: str = "Must-have analysis not available"


class SkillAssessment(RecordModel):
    skill: str
    rating: SkillRating
    evidence: str


class TechnicalAnalysis(RecordModel):
    summary: str
    depth_rating: DepthRating
    details: list[str] = Field(default_factory=list)
    proven_skills: list[str] = Field(default_factory=list)
    claimed_but_unverified: list[str] = Field(default_factory=list)
    response_quality: Level3


class JDRequirementMatch(RecordModel):
    requirement: str
    match_level: MatchLevel
    score: int = Field(ge=0, le=10)
    explanation: str


class HardRequirementAnalysis(RecordModel):
    requirement: str
    met: bool
    analysis: str


class JDMatchAnalysis(RecordModel):
    requirements: list[JDRequirementMatch] = Field(default_factory=list)
    hard_requirements_analysis: list[HardRequirementAnalysis] = Field(default_factory=list)
    extra_skills_found: list[str] = Field(default_factory=list)
    summary: str


class BehavioralAnalysis(RecordModel):
    summary: str
    compatibility: Level3
    details: list[str] = Field(default_factory=list)


class InterviewersKit(RecordModel):
    suggested_questions: list[str] = Field(default_factory=list)
    focus_areas: list[str] = Field(default_factory=list)


class QuestionAnswerAssessment(RecordModel):
    """Per-question grading of the candidate's answer."""

    question: str
    answer: str
    score: int = Field(ge=0, le=100)
    correctness: Correctness
    thought_process: str
    logical_thinking: str
    clarity: Level3
    completeness: Completeness
    related_must_have: str | None = None
    must_have_verified: bool | None = None
    weight: QuestionWeight


class EvaluationResult(RecordModel):
    """Complete interview evaluation returned to callers."""

    score: int = Field(ge=0, le=100)
    hiring_decision: HiringDecision
    summary: str
    recommendation: str
    strengths: list[str] = Field(default_factory=list)
    weaknesses: list[str] = Field(default_factory=list)
    skills_assessment: list[SkillAssessment] = Field(default_factory=list)
    must_have_analysis: MustHaveAnalysis = Field(default_factory=MustHaveAnalysis)
    technical_analysis: TechnicalAnalysis
    jd_match: JDMatchAnalysis
    behavioral_analysis: BehavioralAnalysis
    interviewers_kit: InterviewersKit = Field(default_factory=InterviewersKit)
    level_assessment: LevelAssessment
    expert_advice: str = ""
    suitable_work_types: list[str] = Field(default_factory=list)
    question_answer_assessment: list[QuestionAnswerAssessment] = Field(default_factory=list)
    cheating_analysis: CheatingAnalysis | None = None
