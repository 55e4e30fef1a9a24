from datetime import datetime
from typing import Protocol
from uuid import UUID

from app.domain.classification import ClassificationOutcome
from app.domain.models import NewTicket, Status, Ticket, TicketChanges, TicketFilters


class TicketRepository(Protocol):
    def create(self, ticket: NewTicket) -> Ticket: ...

    def get(self, ticket_id: UUID) -> Ticket | None: ...

    def list(self, filters: TicketFilters) -> list[Ticket]: ...

    def update(self, ticket_id: UUID, changes: TicketChanges) -> Ticket: ...

    def count(self, status: Status | None = None) -> int: ...

    def count_by(self, field: str, values: tuple[str, ...]) -> dict[str, int]: ...

    def created_at_range(self) -> tuple[datetime | None, datetime | None]: ...


class CompletionCapability(Protocol):
    """Text-completion service: (system instructions, user text) -> free text."""

    def complete(self, instructions: str, text: str) -> str: ...


class LLMClassifier(Protocol):
    def classify(self, description: str) -> ClassificationOutcome: ...
