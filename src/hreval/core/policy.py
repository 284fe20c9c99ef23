"""Deterministic must-have gating applied after normalization."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from ..schemas import EvaluationResult

GateType = Literal["disqualified", "critical_failure"]


@dataclass(slots=True)
class PolicyOutcome:
    """Policy-enforced result and the gate that fired, if any."""

    result: EvaluationResult
    gate: GateType | None = None


class MustHavePolicyEnforcer:
    """Override model-proposed score and decision from must-have results.

    Gates are checked in order and at most one fires:

    1. ``disqualified`` is true: score capped at 25, decision ``Disqualified``.
    2. any failed requirement has severity ``Critical``: score capped at 45,
       positive decisions downgraded to ``No Hire``.

    Only the ``disqualified`` flag signals a dealbreaker; failed entries with
    ``Dealbreaker`` severity do not trigger the first gate on their own.
    """

    DISQUALIFIED_SCORE_CAP = 25
    CRITICAL_FAILURE_SCORE_CAP = 45
    DOWNGRADED_DECISIONS: frozenset[str] = frozenset({"Strong Hire", "Hire", "Weak Hire"})

    def apply(self, result: EvaluationResult) -> PolicyOutcome:
        analysis = result.must_have_analysis

        if analysis.disqualified:
            enforced = result.model_copy(
                update={
                    "score": min(result.score, self.DISQUALIFIED_SCORE_CAP),
                    "hiring_decision": "Disqualified",
                }
            )
            return PolicyOutcome(result=enforced, gate="disqualified")

        failed = analysis.interview_verification.failed
        if any(entry.severity == "Critical" for entry in failed):
            decision = result.hiring_decision
            if decision in self.DOWNGRADED_DECISIONS:
                decision = "No Hire"
            enforced = result.model_copy(
                update={
                    "score": min(result.score, self.CRITICAL_FAILURE_SCORE_CAP),
                    "hiring_decision": decision,
                }
            )
            return PolicyOutcome(result=enforced, gate="critical_failure")

        return PolicyOutcome(result=result)
