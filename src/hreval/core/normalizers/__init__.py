"""Record normalizers mapping untrusted payloads onto the schemas."""

from .cheating import CheatingAnalysisNormalizer
from .evaluation import EvaluationNormalizer

__all__ = [
    "CheatingAnalysisNormalizer",
    "EvaluationNormalizer",
]
