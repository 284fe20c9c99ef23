"""Schema-valid substitutes for completions that could not be decoded."""

from __future__ import annotations

from dataclasses import dataclass

from ..schemas import CheatingAnalysis, EvaluationResult
from .normalizers import CheatingAnalysisNormalizer, EvaluationNormalizer

DEGRADED_MODE_NOTICE = "Degraded mode: the model response could not be parsed as JSON."


@dataclass
class FallbackConfig:
    """Configuration for fallback records."""

    excerpt_max_chars: int = 500


class FallbackBuilder:
    """Build conservative records when no JSON could be recovered."""

    def __init__(
        self,
        *,
        config: FallbackConfig | None = None,
        evaluation_normalizer: EvaluationNormalizer | None = None,
        cheating_normalizer: CheatingAnalysisNormalizer | None = None,
    ) -> None:
        self._config = config or FallbackConfig()
        self._evaluation = evaluation_normalizer or EvaluationNormalizer()
        self._cheating = cheating_normalizer or CheatingAnalysisNormalizer()

    def excerpt(self, raw_text: str | None) -> str:
        limit = max(0, self._config.excerpt_max_chars)
        return (raw_text or "")[:limit]

    def evaluation(self, raw_text: str | None) -> EvaluationResult:
        """Score 0, ``No Hire``, empty lists, raw excerpt as recommendation."""
        base = self._evaluation.normalize({})
        return base.model_copy(
            update={
                "summary": f"Unable to parse evaluation response. {DEGRADED_MODE_NOTICE}",
                "recommendation": self.excerpt(raw_text),
                "must_have_analysis": base.must_have_analysis.model_copy(
                    update={"assessment": DEGRADED_MODE_NOTICE}
                ),
                "technical_analysis": base.technical_analysis.model_copy(
                    update={"summary": "Analysis failed"}
                ),
                "jd_match": base.jd_match.model_copy(update={"summary": "Analysis failed"}),
                "behavioral_analysis": base.behavioral_analysis.model_copy(
                    update={"summary": "Analysis failed"}
                ),
            }
        )

    def cheating(self) -> CheatingAnalysis:
        base = self._cheating.normalize({})
        return base.model_copy(
            update={
                "summary": (
                    "Unable to perform cheating analysis due to insufficient data or "
                    f"processing error. {DEGRADED_MODE_NOTICE}"
                ),
                "recommendation": (
                    "Proceed with standard evaluation. Consider additional verification "
                    "if concerns arise."
                ),
            }
        )
