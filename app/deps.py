from functools import lru_cache

from app.core.config import settings
from app.domain.ports import CompletionCapability
from app.infra.llm_classifier import LLMTicketClassifier, build_completion_capability
from app.infra.supabase_repo import SupabaseTicketRepository
from app.services.ticket_classifier import TicketClassificationService
from app.services.ticket_service import TicketService


@lru_cache(maxsize=1)
def get_ticket_repository() -> SupabaseTicketRepository:
    return SupabaseTicketRepository(settings.supabase_url, settings.supabase_service_role_key)


@lru_cache(maxsize=1)
def get_completion_capability() -> CompletionCapability | None:
    return build_completion_capability(settings)


@lru_cache(maxsize=1)
def get_classification_service() -> TicketClassificationService:
    completion = get_completion_capability()
    llm = LLMTicketClassifier(completion) if completion is not None else None
    return TicketClassificationService(llm)


def get_ticket_service() -> TicketService:
    return TicketService(repo=get_ticket_repository())
