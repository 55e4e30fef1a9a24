import logging
import re
from datetime import datetime
from uuid import UUID

from supabase import Client, create_client

from app.core.errors import NotFoundError, RepositoryError
from app.domain.models import NewTicket, Status, Ticket, TicketChanges, TicketFilters
from app.domain.ports import TicketRepository

logger = logging.getLogger(__name__)

_TABLE = "tickets"
# Characters with meaning inside a PostgREST or=(...) filter
_FILTER_SYNTAX = re.compile(r"[,()*\\]")
# LIKE wildcards, matched literally
_LIKE_WILDCARDS = re.compile(r"([%_])")


def _search_filter(search: str) -> str | None:
    """Case-insensitive "contains" filter over title and description, or None."""
    term = _FILTER_SYNTAX.sub(" ", search).strip()
    if not term:
        return None
    term = _LIKE_WILDCARDS.sub(r"\\\1", term)
    return f"title.ilike.%{term}%,description.ilike.%{term}%"


class SupabaseTicketRepository(TicketRepository):
    def __init__(self, supabase_url: str, supabase_service_role_key: str) -> None:
        self._client: Client = create_client(supabase_url, supabase_service_role_key)

    def _table(self):
        return self._client.table(_TABLE)

    def create(self, ticket: NewTicket) -> Ticket:
        try:
            resp = self._table().insert(ticket.model_dump(mode="json")).execute()
        except Exception as e:
            logger.exception("Supabase insert failed")
            raise RepositoryError("Failed to create ticket") from e

        data = getattr(resp, "data", None)
        if not data:
            raise RepositoryError("Supabase returned no row for the created ticket")
        return Ticket.model_validate(data[0])

    def get(self, ticket_id: UUID) -> Ticket | None:
        try:
            resp = self._table().select("*").eq("id", str(ticket_id)).limit(1).execute()
        except Exception as e:
            logger.exception("Supabase select failed")
            raise RepositoryError("Failed to get ticket") from e

        data = getattr(resp, "data", None)
        return Ticket.model_validate(data[0]) if data else None

    def list(self, filters: TicketFilters) -> list[Ticket]:
        query = self._table().select("*")
        if filters.category:
            query = query.eq("category", filters.category.value)
        if filters.priority:
            query = query.eq("priority", filters.priority.value)
        if filters.status:
            query = query.eq("status", filters.status.value)
        search = _search_filter(filters.search) if filters.search else None
        if search:
            query = query.or_(search)

        try:
            resp = query.order("created_at", desc=True).execute()
        except Exception as e:
            logger.exception("Supabase list failed")
            raise RepositoryError("Failed to list tickets") from e

        return [Ticket.model_validate(row) for row in resp.data or []]

    def update(self, ticket_id: UUID, changes: TicketChanges) -> Ticket:
        try:
            resp = self._table().update(changes.as_update()).eq("id", str(ticket_id)).execute()

            data = getattr(resp, "data", None)
            if not data:
                raise NotFoundError(f"Ticket not found: {ticket_id}")

        except NotFoundError:
            raise
        except Exception as e:
            logger.exception("Supabase update failed")
            raise RepositoryError("Failed to update ticket in Supabase") from e

        return Ticket.model_validate(data[0])

    def count(self, status: Status | None = None) -> int:
        query = self._table().select("id", count="exact")
        if status is not None:
            query = query.eq("status", status.value)
        try:
            resp = query.limit(1).execute()
        except Exception as e:
            logger.exception("Supabase count failed")
            raise RepositoryError("Failed to count tickets") from e
        return resp.count or 0

    def count_by(self, field: str, values: tuple[str, ...]) -> dict[str, int]:
        counts: dict[str, int] = {}
        for value in values:
            try:
                resp = self._table().select("id", count="exact").eq(field, value).limit(1).execute()
            except Exception as e:
                logger.exception("Supabase grouped count failed")
                raise RepositoryError(f"Failed to count tickets by {field}") from e
            counts[value] = resp.count or 0
        return counts

    def created_at_range(self) -> tuple[datetime | None, datetime | None]:
        try:
            first = self._table().select("created_at").order("created_at").limit(1).execute()
            last = self._table().select("created_at").order("created_at", desc=True).limit(1).execute()
        except Exception as e:
            logger.exception("Supabase date range query failed")
            raise RepositoryError("Failed to read ticket dates") from e

        def _first_value(resp) -> datetime | None:
            data = getattr(resp, "data", None)
            return datetime.fromisoformat(data[0]["created_at"]) if data else None

        return _first_value(first), _first_value(last)
