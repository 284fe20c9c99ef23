"""Normalization of cheating-detection payloads."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, get_args

from ...schemas import CheatingAnalysis, CheatingIndicator
from ...schemas.cheating import IndicatorSeverity, RiskLevel
from . import fields


class CheatingAnalysisNormalizer:
    """Coerce an arbitrary decoded payload into a valid ``CheatingAnalysis``."""

    kind = "cheating_analysis"

    RISK_LEVELS: tuple[str, ...] = get_args(RiskLevel)
    INDICATOR_SEVERITIES: tuple[str, ...] = get_args(IndicatorSeverity)

    TEXT_DEFAULTS: dict[str, str] = {
        "summary": "Unable to perform comprehensive analysis.",
        "recommendation": "Continue with standard evaluation process.",
        "indicator": "",
    }

    ENUM_DEFAULTS: dict[str, str] = {
        "riskLevel": "Low",
        "severity": "Low",
    }

    def normalize(self, payload: Any) -> CheatingAnalysis:
        data = fields.mapping(payload)
        return CheatingAnalysis(
            suspicion_score=fields.bounded_int(data.get("suspicionScore"), 0, 100),
            risk_level=fields.choice(
                data.get("riskLevel"), self.RISK_LEVELS, self.ENUM_DEFAULTS["riskLevel"]
            ),
            summary=fields.text(data.get("summary"), self.TEXT_DEFAULTS["summary"]),
            indicators=fields.record_list(data.get("indicators"), self._indicator),
            authenticity_signals=fields.text_list(data.get("authenticitySignals")),
            recommendation=fields.text(
                data.get("recommendation"), self.TEXT_DEFAULTS["recommendation"]
            ),
        )

    def _indicator(self, item: Mapping[str, Any]) -> CheatingIndicator:
        blank = self.TEXT_DEFAULTS["indicator"]
        return CheatingIndicator(
            type=fields.text(item.get("type"), blank),
            description=fields.text(item.get("description"), blank),
            severity=fields.choice(
                item.get("severity"), self.INDICATOR_SEVERITIES, self.ENUM_DEFAULTS["severity"]
            ),
            evidence=fields.text(item.get("evidence"), blank),
        )
