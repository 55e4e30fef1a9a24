from dataclasses import dataclass
from enum import StrEnum

from app.domain.models import ClassificationResult


class ClassificationFailure(StrEnum):
    CAPABILITY_UNAVAILABLE = "capability_unavailable"
    TRANSPORT_FAILURE = "transport_failure"
    MALFORMED_RESPONSE = "malformed_response"
    INVALID_ENUM_VALUE = "invalid_enum_value"


@dataclass(frozen=True)
class ClassificationOutcome:
    """What the LLM adapter reports back: a valid result or the reason there is none."""

    result: ClassificationResult | None = None
    failure: ClassificationFailure | None = None
    raw: str | None = None

    @property
    def ok(self) -> bool:
        return self.result is not None

    @classmethod
    def success(cls, result: ClassificationResult, raw: str) -> "ClassificationOutcome":
        return cls(result=result, raw=raw)

    @classmethod
    def failed(cls, failure: ClassificationFailure, raw: str | None = None) -> "ClassificationOutcome":
        return cls(failure=failure, raw=raw)
