"""Core extraction, normalization and policy components."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from .extraction import JsonCandidate, ParsedResponse, ResponseExtractor
from .fallback import DEGRADED_MODE_NOTICE, FallbackBuilder, FallbackConfig
from .normalizers import CheatingAnalysisNormalizer, EvaluationNormalizer
from .policy import MustHavePolicyEnforcer, PolicyOutcome


@runtime_checkable
class Normalizer(Protocol):
    """Normalizer contract: any decoded payload in, valid record out."""

    kind: str

    def normalize(self, payload: Any) -> Any:
        """Return a record satisfying the schema for ``payload`` of any shape."""


__all__ = [
    "DEGRADED_MODE_NOTICE",
    "CheatingAnalysisNormalizer",
    "EvaluationNormalizer",
    "FallbackBuilder",
    "FallbackConfig",
    "JsonCandidate",
    "MustHavePolicyEnforcer",
    "Normalizer",
    "ParsedResponse",
    "PolicyOutcome",
    "ResponseExtractor",
]
