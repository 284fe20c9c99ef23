from __future__ import annotations

import pytest
from pydantic import ValidationError

from hreval.schemas import CheatingAnalysis, MustHaveAnalysis, QuestionAnswerAssessment


def test_must_have_analysis_defaults():
    analysis = MustHaveAnalysis()

    assert analysis.extracted_must_haves.skills == []
    assert analysis.interview_verification.not_tested == []
    assert analysis.must_have_score == 0
    assert analysis.pass_rate == "0/0"
    assert analysis.disqualified is False
    assert analysis.disqualification_reasons == []


def test_records_serialize_with_camel_case_keys():
    payload = MustHaveAnalysis().to_payload()

    assert set(payload) == {
        "extractedMustHaves",
        "interviewVerification",
        "mustHaveScore",
        "passRate",
        "disqualified",
        "disqualificationReasons",
        "assessment",
    }
    assert set(payload["interviewVerification"]) == {"verified", "failed", "notTested"}


def test_records_accept_aliases_and_field_names():
    by_alias = CheatingAnalysis.model_validate(
        {"suspicionScore": 10, "riskLevel": "Low", "summary": "", "recommendation": ""}
    )
    by_name = CheatingAnalysis(suspicion_score=10, risk_level="Low", summary="", recommendation="")

    assert by_alias == by_name


def test_records_enforce_ranges_and_enums():
    with pytest.raises(ValidationError):
        CheatingAnalysis(suspicion_score=101, risk_level="Low", summary="", recommendation="")
    with pytest.raises(ValidationError):
        CheatingAnalysis(suspicion_score=5, risk_level="Extreme", summary="", recommendation="")
    with pytest.raises(ValidationError):
        QuestionAnswerAssessment(
            question="q",
            answer="a",
            score=50,
            correctness="Mostly",
            thought_process="",
            logical_thinking="",
            clarity="High",
            completeness="Complete",
            weight="Important",
        )


def test_records_are_frozen():
    analysis = MustHaveAnalysis()

    with pytest.raises(ValidationError):
        analysis.disqualified = True  # type: ignore[misc]
