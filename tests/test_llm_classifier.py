import logging

import pytest
from langchain_core.language_models.fake_chat_models import FakeListChatModel

from app.core.config import Settings
from app.domain.classification import ClassificationFailure
from app.domain.models import Category, Priority
from app.infra.llm_classifier import (
    CLASSIFY_SYSTEM_PROMPT,
    LangChainCompletion,
    LLMTicketClassifier,
    _build_llm,
    build_completion_capability,
    parse_classification,
)
from conftest import StubCompletion


def _settings(**overrides) -> Settings:
    values = {
        "SUPABASE_URL": "https://example.supabase.co",
        "SUPABASE_SERVICE_ROLE_KEY": "key",
        "OPENAI_API_KEY": "",
    }
    values.update(overrides)
    return Settings(**values)


class TestPrompt:
    def test_prompt_asks_for_two_words_and_lists_enums(self):
        assert "exactly two words on a single line" in CLASSIFY_SYSTEM_PROMPT
        for value in ("billing", "technical", "account", "general"):
            assert f"- {value}:" in CLASSIFY_SYSTEM_PROMPT
        for value in ("critical", "high", "medium", "low"):
            assert f"- {value}:" in CLASSIFY_SYSTEM_PROMPT
        assert CLASSIFY_SYSTEM_PROMPT.rstrip().endswith("Example: technical high")


class TestParseClassification:
    def test_valid_reply(self):
        outcome = parse_classification("technical high")
        assert outcome.ok
        assert outcome.result.category is Category.TECHNICAL
        assert outcome.result.priority is Priority.HIGH

    def test_reply_is_normalized(self):
        outcome = parse_classification("  Billing   CRITICAL\n")
        assert outcome.ok
        assert (outcome.result.category, outcome.result.priority) == (Category.BILLING, Priority.CRITICAL)

    def test_extra_tokens_are_ignored(self):
        outcome = parse_classification("account low because password")
        assert outcome.ok
        assert outcome.result.category is Category.ACCOUNT

    @pytest.mark.parametrize("raw", [None, "", "   ", "technical"])
    def test_malformed(self, raw):
        outcome = parse_classification(raw)
        assert not outcome.ok
        assert outcome.failure is ClassificationFailure.MALFORMED_RESPONSE
        assert outcome.result is None

    @pytest.mark.parametrize("raw", ["sales high", "technical urgent", "high technical", "technical high."])
    def test_invalid_enum_value(self, raw):
        outcome = parse_classification(raw)
        assert outcome.failure is ClassificationFailure.INVALID_ENUM_VALUE
        assert outcome.raw == raw


class TestLLMTicketClassifier:
    def test_success_sends_prompt_and_description(self):
        stub = StubCompletion(reply="technical high")
        outcome = LLMTicketClassifier(stub).classify("API keeps timing out")

        assert outcome.ok
        assert stub.calls == [(CLASSIFY_SYSTEM_PROMPT, "API keeps timing out")]

    def test_without_completion_reports_unavailable(self):
        classifier = LLMTicketClassifier(None)
        assert classifier.classify("anything").failure is ClassificationFailure.CAPABILITY_UNAVAILABLE

    @pytest.mark.parametrize("error", [TimeoutError("timed out"), ConnectionError("reset"), RuntimeError("500")])
    def test_transport_errors_are_absorbed(self, error, caplog):
        with caplog.at_level(logging.WARNING):
            outcome = LLMTicketClassifier(StubCompletion(error=error)).classify("help")

        assert outcome.failure is ClassificationFailure.TRANSPORT_FAILURE
        assert "LLM classify failed" in caplog.text

    def test_garbage_reply_is_logged_with_raw_text(self, caplog):
        with caplog.at_level(logging.WARNING):
            outcome = LLMTicketClassifier(StubCompletion(reply="I think it is billing")).classify("help")

        assert outcome.failure is ClassificationFailure.INVALID_ENUM_VALUE
        assert "I think it is billing" in caplog.text


class TestBuildCompletionCapability:
    def test_missing_api_key_means_no_capability(self):
        assert build_completion_capability(_settings()) is None

    def test_unsupported_provider_means_no_capability(self, caplog):
        with caplog.at_level(logging.WARNING):
            assert build_completion_capability(_settings(LLM_PROVIDER="acme", OPENAI_API_KEY="sk-x")) is None
        assert "Unsupported LLM_PROVIDER" in caplog.text

    def test_openai_with_key_builds_langchain_completion(self):
        capability = build_completion_capability(_settings(OPENAI_API_KEY="sk-test"))
        assert isinstance(capability, LangChainCompletion)


class TestLangChainCompletion:
    def test_chat_model_reply_flows_through_classifier(self):
        completion = LangChainCompletion(FakeListChatModel(responses=["Technical High"]))

        outcome = LLMTicketClassifier(completion).classify("The integration API returns 500s")

        assert outcome.ok
        assert (outcome.result.category, outcome.result.priority) == (Category.TECHNICAL, Priority.HIGH)
        assert outcome.raw == "Technical High"

    def test_chat_model_garbage_reply_is_rejected(self):
        completion = LangChainCompletion(FakeListChatModel(responses=["Sure! This looks like billing."]))
        outcome = LLMTicketClassifier(completion).classify("refund")
        assert outcome.failure is ClassificationFailure.INVALID_ENUM_VALUE

    def test_openai_client_is_bounded_to_one_short_attempt(self):
        settings = _settings(OPENAI_API_KEY="sk-test", LLM_TIMEOUT_SECONDS=3.5)

        llm = _build_llm(settings)

        assert llm.request_timeout == 3.5
        assert llm.max_retries == 0
        assert llm.max_tokens == settings.llm_max_tokens == 20
        assert llm.temperature == 0
