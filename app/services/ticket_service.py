import logging
from datetime import datetime
from uuid import UUID

from app.core.errors import NotFoundError
from app.domain.models import (
    Category,
    NewTicket,
    Priority,
    Status,
    Ticket,
    TicketChanges,
    TicketFilters,
    TicketStats,
)
from app.domain.ports import TicketRepository
from app.domain.registry import values_of

logger = logging.getLogger(__name__)

_SECONDS_PER_DAY = 24 * 60 * 60


def _ticket_uuid(ticket_id: UUID | str) -> UUID:
    if isinstance(ticket_id, UUID):
        return ticket_id
    try:
        return UUID(ticket_id)
    except ValueError:
        raise NotFoundError(f"Ticket not found: {ticket_id}") from None


def average_per_day(total: int, first: datetime | None, last: datetime | None) -> float:
    """Tickets per day over the created_at span, at least one day, one decimal."""
    if total <= 0 or first is None or last is None:
        return 0.0
    days = max(1.0, (last - first).total_seconds() / _SECONDS_PER_DAY)
    return round(total / days, 1)


class TicketService:
    """
    Ticket use-cases on top of the repository:
    - create / get / list / update
    - aggregate statistics
    """

    def __init__(self, repo: TicketRepository) -> None:
        self._repo = repo

    def create(self, ticket: NewTicket) -> Ticket:
        created = self._repo.create(ticket)
        logger.info("Created ticket %s (%s/%s)", created.id, created.category, created.priority)
        return created

    def get(self, ticket_id: UUID | str) -> Ticket:
        ticket = self._repo.get(_ticket_uuid(ticket_id))
        if ticket is None:
            raise NotFoundError(f"Ticket not found: {ticket_id}")
        return ticket

    def list(self, filters: TicketFilters) -> list[Ticket]:
        return self._repo.list(filters)

    def update(self, ticket_id: UUID | str, changes: TicketChanges) -> Ticket:
        if not changes.as_update():
            return self.get(ticket_id)
        return self._repo.update(_ticket_uuid(ticket_id), changes)

    def stats(self) -> TicketStats:
        total = self._repo.count()
        open_tickets = self._repo.count(Status.OPEN)
        by_priority = self._repo.count_by("priority", values_of("priority"))
        by_category = self._repo.count_by("category", values_of("category"))
        first, last = self._repo.created_at_range()

        return TicketStats(
            total_tickets=total,
            open_tickets=open_tickets,
            avg_tickets_per_day=average_per_day(total, first, last),
            priority_breakdown={p: by_priority.get(p.value, 0) for p in Priority},
            category_breakdown={c: by_category.get(c.value, 0) for c in Category},
        )
