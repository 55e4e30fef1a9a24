import os
from datetime import datetime, timezone
from uuid import UUID, uuid4

import pytest

os.environ.setdefault("SUPABASE_URL", "https://example.supabase.co")
os.environ.setdefault("SUPABASE_SERVICE_ROLE_KEY", "test-service-role-key")
os.environ["OPENAI_API_KEY"] = ""

from app.core.errors import NotFoundError  # noqa: E402
from app.domain.models import NewTicket, Status, Ticket, TicketChanges, TicketFilters  # noqa: E402


class FakeTicketRepository:
    """In-memory TicketRepository."""

    def __init__(self) -> None:
        self.tickets: dict[UUID, Ticket] = {}

    def add(self, ticket: NewTicket, created_at: datetime | None = None) -> Ticket:
        stored = Ticket(
            id=uuid4(),
            created_at=created_at or datetime.now(timezone.utc),
            **ticket.model_dump(),
        )
        self.tickets[stored.id] = stored
        return stored

    def create(self, ticket: NewTicket) -> Ticket:
        return self.add(ticket)

    def get(self, ticket_id: UUID) -> Ticket | None:
        return self.tickets.get(ticket_id)

    def list(self, filters: TicketFilters) -> list[Ticket]:
        rows = list(self.tickets.values())
        if filters.category:
            rows = [t for t in rows if t.category == filters.category]
        if filters.priority:
            rows = [t for t in rows if t.priority == filters.priority]
        if filters.status:
            rows = [t for t in rows if t.status == filters.status]
        if filters.search:
            term = filters.search.lower()
            rows = [t for t in rows if term in t.title.lower() or term in t.description.lower()]
        return sorted(rows, key=lambda t: t.created_at, reverse=True)

    def update(self, ticket_id: UUID, changes: TicketChanges) -> Ticket:
        current = self.tickets.get(ticket_id)
        if current is None:
            raise NotFoundError(f"Ticket not found: {ticket_id}")
        updated = current.model_copy(update=changes.model_dump(exclude_none=True))
        self.tickets[ticket_id] = updated
        return updated

    def count(self, status: Status | None = None) -> int:
        return sum(1 for t in self.tickets.values() if status is None or t.status == status)

    def count_by(self, field: str, values: tuple[str, ...]) -> dict[str, int]:
        counts = {value: 0 for value in values}
        for ticket in self.tickets.values():
            key = str(getattr(ticket, field))
            if key in counts:
                counts[key] += 1
        return counts

    def created_at_range(self) -> tuple[datetime | None, datetime | None]:
        if not self.tickets:
            return None, None
        dates = [t.created_at for t in self.tickets.values()]
        return min(dates), max(dates)


class StubCompletion:
    """Completion service returning a canned reply, or raising a canned error."""

    def __init__(self, reply: str | None = None, error: Exception | None = None) -> None:
        self.reply = reply
        self.error = error
        self.calls: list[tuple[str, str]] = []

    def complete(self, instructions: str, text: str) -> str:
        self.calls.append((instructions, text))
        if self.error is not None:
            raise self.error
        return self.reply  # type: ignore[return-value]


@pytest.fixture
def repo() -> FakeTicketRepository:
    return FakeTicketRepository()
