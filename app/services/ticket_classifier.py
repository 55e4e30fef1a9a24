import logging

from app.domain.keyword_rules import keyword_classify
from app.domain.models import ClassificationResult
from app.domain.ports import LLMClassifier

logger = logging.getLogger(__name__)


class TicketClassificationService:
    """
    Suggests a category and priority for a ticket description.

    - no LLM configured: keyword rules
    - LLM configured: one LLM attempt, keyword rules on any failure

    classify() has no error case; the result always holds valid enum members.
    """

    def __init__(self, llm: LLMClassifier | None) -> None:
        self._llm = llm

    def classify(self, description: str) -> ClassificationResult:
        cleaned = (description or "").strip()
        if self._llm is None or not cleaned:
            return keyword_classify(cleaned)

        outcome = self._llm.classify(cleaned)
        if outcome.ok and outcome.result is not None:
            return outcome.result

        logger.info("Using keyword fallback for ticket classification (%s)", outcome.failure)
        return keyword_classify(cleaned)
