import logging
from typing import Final

from langchain_core.output_parsers import StrOutputParser
from langchain_core.prompts import ChatPromptTemplate

from app.core.config import Settings
from app.core.errors import ExternalServiceError
from app.domain.classification import ClassificationFailure, ClassificationOutcome
from app.domain.models import Category, ClassificationResult, Priority
from app.domain.ports import CompletionCapability
from app.domain.registry import is_member

logger = logging.getLogger(__name__)

CLASSIFY_SYSTEM_PROMPT: Final[str] = """You classify support ticket descriptions into one category and one priority.

Reply with exactly two words on a single line, separated by one space: first the category, then the priority. No other text.

Categories (use exactly one):
- billing: payments, invoices, refunds, subscription, charges
- technical: bugs, errors, crashes, API issues, features, integration
- account: login, password, email, access, sign-in, account settings
- general: anything that doesn't fit above

Priorities (use exactly one):
- critical: outage, system down, urgent, asap, cannot work
- high: blocked, important, need soon
- medium: normal request
- low: minor, suggestion, when possible, no rush

Example: technical high"""


def _build_llm(settings: Settings):
    provider = settings.llm_provider.lower().strip()

    if provider == "openai":
        if not settings.openai_api_key:
            raise ExternalServiceError("OPENAI_API_KEY is required for LLM_PROVIDER=openai")

        from langchain_openai import ChatOpenAI

        # One attempt per classification; the keyword rules are the retry.
        return ChatOpenAI(
            model=settings.llm_model,
            temperature=0,
            max_tokens=settings.llm_max_tokens,
            timeout=settings.llm_timeout_seconds,
            max_retries=0,
            api_key=settings.openai_api_key,
        )

    raise ExternalServiceError(f"Unsupported LLM_PROVIDER: {settings.llm_provider}")


class LangChainCompletion(CompletionCapability):
    def __init__(self, llm) -> None:
        self._prompt = ChatPromptTemplate.from_messages(
            [
                ("system", "{instructions}"),
                ("human", "{description}"),
            ]
        )
        self._chain = self._prompt | llm | StrOutputParser()

    def complete(self, instructions: str, text: str) -> str:
        return self._chain.invoke({"instructions": instructions, "description": text})


def build_completion_capability(settings: Settings) -> CompletionCapability | None:
    """Return the configured completion service, or None when there is none."""
    if settings.llm_provider.lower().strip() == "openai" and not settings.openai_api_key:
        logger.info("OPENAI_API_KEY not set; tickets will be classified with keyword rules")
        return None

    try:
        return LangChainCompletion(_build_llm(settings))
    except ExternalServiceError as e:
        logger.warning("LLM provider unavailable; using keyword rules. Reason: %s", e)
        return None


def parse_classification(raw: str | None) -> ClassificationOutcome:
    """Validate a "category priority" reply against the ticket enums."""
    text = (raw or "").strip().lower()
    parts = text.split()
    if len(parts) < 2:
        return ClassificationOutcome.failed(ClassificationFailure.MALFORMED_RESPONSE, raw)

    category, priority = parts[0], parts[1]
    if not (is_member("category", category) and is_member("priority", priority)):
        return ClassificationOutcome.failed(ClassificationFailure.INVALID_ENUM_VALUE, raw)

    result = ClassificationResult(category=Category(category), priority=Priority(priority))
    return ClassificationOutcome.success(result, raw or "")


class LLMTicketClassifier:
    """
    Asks the completion service for a category and priority.

    Never raises: transport errors and unusable replies come back as a failed
    ClassificationOutcome so the caller can fall back.
    """

    def __init__(self, completion: CompletionCapability | None) -> None:
        self._completion = completion

    def classify(self, description: str) -> ClassificationOutcome:
        if self._completion is None:
            return ClassificationOutcome.failed(ClassificationFailure.CAPABILITY_UNAVAILABLE)

        try:
            raw = self._completion.complete(CLASSIFY_SYSTEM_PROMPT, description)
        except Exception as e:
            logger.warning("LLM classify failed, using fallback: %s", e)
            return ClassificationOutcome.failed(ClassificationFailure.TRANSPORT_FAILURE)

        outcome = parse_classification(raw)
        if not outcome.ok:
            logger.warning("LLM returned invalid format (%s), using fallback: %r", outcome.failure, raw)
        return outcome
