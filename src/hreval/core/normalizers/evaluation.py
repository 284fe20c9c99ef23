"""Normalization of interview-evaluation payloads."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, get_args

from ...schemas import (
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
from ...schemas.evaluation import (
    Completeness,
    Correctness,
    Criticality,
    DepthRating,
    FailureSeverity,
    HiringDecision,
    Level3,
    LevelAssessment,
    MatchLevel,
    QuestionWeight,
    SkillRating,
)
from . import fields
from .cheating import CheatingAnalysisNormalizer


class EvaluationNormalizer:
    """Coerce an arbitrary decoded payload into a valid ``EvaluationResult``.

    Each field is handled by exactly one rule: text falls back to the entry
    in ``TEXT_DEFAULTS``, numbers are clamped, enums fall back to the entry in
    ``ENUM_DEFAULTS``, lists become empty and nested objects recurse. The
    must-have policy overrides are not applied here.
    """

    kind = "interview_evaluation"

    ALLOWED: dict[str, tuple[str, ...]] = {
        "hiringDecision": get_args(HiringDecision),
        "levelAssessment": get_args(LevelAssessment),
        "rating": get_args(SkillRating),
        "criticality": get_args(Criticality),
        "severity": get_args(FailureSeverity),
        "confidenceLevel": get_args(Level3),
        "depthRating": get_args(DepthRating),
        "responseQuality": get_args(Level3),
        "matchLevel": get_args(MatchLevel),
        "compatibility": get_args(Level3),
        "correctness": get_args(Correctness),
        "clarity": get_args(Level3),
        "completeness": get_args(Completeness),
        "weight": get_args(QuestionWeight),
    }

    ENUM_DEFAULTS: dict[str, str] = {
        "hiringDecision": "No Hire",
        "levelAssessment": "Intermediate",
        "rating": "Not Demonstrated",
        "criticality": "Important",
        "severity": "Significant",
        "confidenceLevel": "Low",
        "depthRating": "Intermediate",
        "responseQuality": "Medium",
        "matchLevel": "None",
        "compatibility": "Medium",
        "correctness": "Incorrect",
        "clarity": "Medium",
        "completeness": "Partial",
        "weight": "Important",
    }

    TEXT_DEFAULTS: dict[str, str] = {
        "summary": "Unable to generate summary",
        "recommendation": "Unable to provide recommendation",
        "analysis": "Analysis not available",
        "assessment": "Must-have analysis not available",
        "passRate": "0/0",
        "expertAdvice": "",
        "item": "",
    }

    def __init__(self, *, cheating_normalizer: CheatingAnalysisNormalizer | None = None) -> None:
        self._cheating = cheating_normalizer or CheatingAnalysisNormalizer()

    def normalize(self, payload: Any) -> EvaluationResult:
        data = fields.mapping(payload)
        cheating = data.get("cheatingAnalysis")
        return EvaluationResult(
            score=fields.bounded_int(data.get("score"), 0, 100),
            hiring_decision=self._enum(data, "hiringDecision"),
            summary=fields.text(data.get("summary"), self.TEXT_DEFAULTS["summary"]),
            recommendation=fields.text(
                data.get("recommendation"), self.TEXT_DEFAULTS["recommendation"]
            ),
            strengths=fields.text_list(data.get("strengths")),
            weaknesses=fields.text_list(data.get("weaknesses")),
            skills_assessment=fields.record_list(data.get("skillsAssessment"), self._skill),
            must_have_analysis=self.must_have_analysis(data.get("mustHaveAnalysis")),
            technical_analysis=self._technical(fields.mapping(data.get("technicalAnalysis"))),
            jd_match=self._jd_match(fields.mapping(data.get("jdMatch"))),
            behavioral_analysis=self._behavioral(fields.mapping(data.get("behavioralAnalysis"))),
            interviewers_kit=self._kit(fields.mapping(data.get("interviewersKit"))),
            level_assessment=self._enum(data, "levelAssessment"),
            expert_advice=fields.text(data.get("expertAdvice"), self.TEXT_DEFAULTS["expertAdvice"]),
            suitable_work_types=fields.text_list(data.get("suitableWorkTypes")),
            question_answer_assessment=fields.record_list(
                data.get("questionAnswerAssessment"), self._question
            ),
            cheating_analysis=(
                self._cheating.normalize(cheating) if isinstance(cheating, Mapping) else None
            ),
        )

    def must_have_analysis(self, payload: Any) -> MustHaveAnalysis:
        data = fields.mapping(payload)
        extracted = fields.mapping(data.get("extractedMustHaves"))
        verification = fields.mapping(data.get("interviewVerification"))
        return MustHaveAnalysis(
            extracted_must_haves=ExtractedMustHaves(
                skills=fields.record_list(extracted.get("skills"), self._must_have_skill),
                experiences=fields.record_list(
                    extracted.get("experiences"), self._must_have_experience
                ),
                qualifications=fields.record_list(
                    extracted.get("qualifications"), self._must_have_qualification
                ),
            ),
            interview_verification=InterviewVerification(
                verified=fields.record_list(verification.get("verified"), self._verified),
                failed=fields.record_list(verification.get("failed"), self._failed),
                not_tested=fields.record_list(verification.get("notTested"), self._not_tested),
            ),
            must_have_score=fields.bounded_int(data.get("mustHaveScore"), 0, 100),
            pass_rate=fields.text(data.get("passRate"), self.TEXT_DEFAULTS["passRate"]),
            disqualified=fields.flag(data.get("disqualified")),
            disqualification_reasons=fields.text_list(data.get("disqualificationReasons")),
            assessment=fields.text(data.get("assessment"), self.TEXT_DEFAULTS["assessment"]),
        )

    def _enum(self, data: Mapping[str, Any], key: str) -> str:
        return fields.choice(data.get(key), self.ALLOWED[key], self.ENUM_DEFAULTS[key])

    def _item_text(self, data: Mapping[str, Any], key: str) -> str:
        return fields.text(data.get(key), self.TEXT_DEFAULTS["item"])

    def _must_have_skill(self, item: Mapping[str, Any]) -> MustHaveSkill:
        return MustHaveSkill(
            skill=self._item_text(item, "skill"),
            reason=self._item_text(item, "reason"),
            criticality=self._enum(item, "criticality"),
        )

    def _must_have_experience(self, item: Mapping[str, Any]) -> MustHaveExperience:
        return MustHaveExperience(
            experience=self._item_text(item, "experience"),
            reason=self._item_text(item, "reason"),
            minimum_years=fields.optional_text(item.get("minimumYears")),
            criticality=self._enum(item, "criticality"),
        )

    def _must_have_qualification(self, item: Mapping[str, Any]) -> MustHaveQualification:
        return MustHaveQualification(
            qualification=self._item_text(item, "qualification"),
            reason=self._item_text(item, "reason"),
            criticality=self._enum(item, "criticality"),
        )

    def _verified(self, item: Mapping[str, Any]) -> VerifiedRequirement:
        return VerifiedRequirement(
            requirement=self._item_text(item, "requirement"),
            verified_by=self._item_text(item, "verifiedBy"),
            evidence=self._item_text(item, "evidence"),
            confidence_level=self._enum(item, "confidenceLevel"),
        )

    def _failed(self, item: Mapping[str, Any]) -> FailedRequirement:
        return FailedRequirement(
            requirement=self._item_text(item, "requirement"),
            failed_at=self._item_text(item, "failedAt"),
            reason=self._item_text(item, "reason"),
            severity=self._enum(item, "severity"),
        )

    def _not_tested(self, item: Mapping[str, Any]) -> UntestedRequirement:
        return UntestedRequirement(
            requirement=self._item_text(item, "requirement"),
            recommendation=self._item_text(item, "recommendation"),
        )

    def _skill(self, item: Mapping[str, Any]) -> SkillAssessment:
        return SkillAssessment(
            skill=self._item_text(item, "skill"),
            rating=self._enum(item, "rating"),
            evidence=self._item_text(item, "evidence"),
        )

    def _technical(self, data: Mapping[str, Any]) -> TechnicalAnalysis:
        return TechnicalAnalysis(
            summary=fields.text(data.get("summary"), self.TEXT_DEFAULTS["analysis"]),
            depth_rating=self._enum(data, "depthRating"),
            details=fields.text_list(data.get("details")),
            proven_skills=fields.text_list(data.get("provenSkills")),
            claimed_but_unverified=fields.text_list(data.get("claimedButUnverified")),
            response_quality=self._enum(data, "responseQuality"),
        )

    def _jd_match(self, data: Mapping[str, Any]) -> JDMatchAnalysis:
        return JDMatchAnalysis(
            requirements=fields.record_list(data.get("requirements"), self._requirement_match),
            hard_requirements_analysis=fields.record_list(
                data.get("hardRequirementsAnalysis"), self._hard_requirement
            ),
            extra_skills_found=fields.text_list(data.get("extraSkillsFound")),
            summary=fields.text(data.get("summary"), self.TEXT_DEFAULTS["analysis"]),
        )

    def _requirement_match(self, item: Mapping[str, Any]) -> JDRequirementMatch:
        return JDRequirementMatch(
            requirement=self._item_text(item, "requirement"),
            match_level=self._enum(item, "matchLevel"),
            score=fields.bounded_int(item.get("score"), 0, 10),
            explanation=self._item_text(item, "explanation"),
        )

    def _hard_requirement(self, item: Mapping[str, Any]) -> HardRequirementAnalysis:
        return HardRequirementAnalysis(
            requirement=self._item_text(item, "requirement"),
            met=fields.flag(item.get("met")),
            analysis=self._item_text(item, "analysis"),
        )

    def _behavioral(self, data: Mapping[str, Any]) -> BehavioralAnalysis:
        return BehavioralAnalysis(
            summary=fields.text(data.get("summary"), self.TEXT_DEFAULTS["analysis"]),
            compatibility=self._enum(data, "compatibility"),
            details=fields.text_list(data.get("details")),
        )

    @staticmethod
    def _kit(data: Mapping[str, Any]) -> InterviewersKit:
        return InterviewersKit(
            suggested_questions=fields.text_list(data.get("suggestedQuestions")),
            focus_areas=fields.text_list(data.get("focusAreas")),
        )

    def _question(self, item: Mapping[str, Any]) -> QuestionAnswerAssessment:
        return QuestionAnswerAssessment(
            question=self._item_text(item, "question"),
            answer=self._item_text(item, "answer"),
            score=fields.bounded_int(item.get("score"), 0, 100),
            correctness=self._enum(item, "correctness"),
            thought_process=self._item_text(item, "thoughtProcess"),
            logical_thinking=self._item_text(item, "logicalThinking"),
            clarity=self._enum(item, "clarity"),
            completeness=self._enum(item, "completeness"),
            related_must_have=fields.optional_text(item.get("relatedMustHave")),
            must_have_verified=fields.optional_flag(item.get("mustHaveVerified")),
            weight=self._enum(item, "weight"),
        )
