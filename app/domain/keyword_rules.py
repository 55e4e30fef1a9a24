"""
Keyword classifier used whenever the LLM cannot give a usable answer.

Rules are evaluated top to bottom and the first matching pattern wins, so the
order of each table is part of the behavior:

- category: billing, account, technical, otherwise general
- priority: critical, high, low, otherwise medium

"asap" sits in both the critical and the high table; critical is checked
first and wins.
"""

import re
from typing import Final

from app.domain.models import Category, ClassificationResult, Priority


def _whole_words(*words: str) -> re.Pattern[str]:
    return re.compile(r"\b(" + "|".join(words) + r")\b")


_CATEGORY_RULES: Final[tuple[tuple[re.Pattern[str], Category], ...]] = (
    (_whole_words("bill", "payment", "charge", "invoice", "subscription", "refund"), Category.BILLING),
    (_whole_words("login", "password", "account", "email", "access", "sign"), Category.ACCOUNT),
    (
        _whole_words("error", "bug", "crash", "slow", "broken", "feature", "api", "integration"),
        Category.TECHNICAL,
    ),
)

_PRIORITY_RULES: Final[tuple[tuple[re.Pattern[str], Priority], ...]] = (
    (
        _whole_words("urgent", "urgently", "critical", "down", "outage", "immediately", "asap"),
        Priority.CRITICAL,
    ),
    (_whole_words("important", "asap", "soon", "blocked"), Priority.HIGH),
    (_whole_words("minor", "whenever", "suggestion"), Priority.LOW),
)

DEFAULT_CATEGORY: Final[Category] = Category.GENERAL
DEFAULT_PRIORITY: Final[Priority] = Priority.MEDIUM


def match_category(text: str) -> Category:
    lowered = text.lower()
    for pattern, category in _CATEGORY_RULES:
        if pattern.search(lowered):
            return category
    return DEFAULT_CATEGORY


def match_priority(text: str) -> Priority:
    lowered = text.lower()
    for pattern, priority in _PRIORITY_RULES:
        if pattern.search(lowered):
            return priority
    return DEFAULT_PRIORITY


def keyword_classify(description: str) -> ClassificationResult:
    return ClassificationResult(
        category=match_category(description),
        priority=match_priority(description),
    )
