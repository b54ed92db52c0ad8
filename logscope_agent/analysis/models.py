"""Typed views over the CloudWatch analysis returned by the agent."""

from typing import Any, Dict, List

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, ValidationError


class _Lenient(BaseModel):
    # Agents add fields freely; keep them instead of failing validation.
    model_config = ConfigDict(extra="allow")


# --- Findings ---

class ErrorItem(_Lenient):
    error_type: str = Field(default="Unknown", description="Error class, e.g. 'TimeoutError'")
    count: int = 0
    sample_message: str = ""
    first_occurrence: str = ""
    last_occurrence: str = ""


class WarningItem(_Lenient):
    warning_type: str = "Unknown"
    count: int = 0
    threshold: float = 0
    average: float = 0


class PatternItem(_Lenient):
    pattern: str = ""
    description: str = ""


class AnomalyItem(_Lenient):
    anomaly: str = ""
    description: str = ""


class Findings(_Lenient):
    errors: List[ErrorItem] = Field(default_factory=list)
    warnings: List[WarningItem] = Field(default_factory=list)
    patterns: List[PatternItem] = Field(default_factory=list)
    anomalies: List[AnomalyItem] = Field(default_factory=list)


# --- Insights ---

class PeakTime(_Lenient):
    time: str = ""
    error_count: int = 0
    reason: str = ""


class Insights(_Lenient):
    summary: str = ""
    peak_times: List[PeakTime] = Field(default_factory=list)
    trends: List[str] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)


class FormattedLog(_Lenient):
    timestamp: str = ""
    log_stream: str = ""
    level: str = "INFO"
    message: str = ""
    request_id: str = ""


# --- Top level ---

class CloudWatchResult(_Lenient):
    """
    The ``result`` payload of a log-analysis answer.
    Every field has a default so partial answers still render.
    """

    query_interpretation: str = ""
    logs_analyzed: int = 0
    findings: Findings = Field(default_factory=Findings)
    insights: Insights = Field(default_factory=Insights)
    formatted_results: List[FormattedLog] = Field(default_factory=list)

    @property
    def error_total(self) -> int:
        return sum(e.count for e in self.findings.errors)

    @property
    def warning_total(self) -> int:
        return sum(w.count for w in self.findings.warnings)

    @classmethod
    def from_result(cls, result: Dict[str, Any] | None) -> "CloudWatchResult":
        """Validate a normalized ``result`` mapping, falling back to an empty analysis."""
        if not result:
            return cls()
        try:
            return cls.model_validate(result)
        except ValidationError as e:
            logger.warning(f"Agent result does not match the CloudWatch analysis shape: {e}")
            return cls()
