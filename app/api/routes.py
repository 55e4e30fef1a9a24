from fastapi import APIRouter, Depends
from fastapi import status as http_status

from app.api.schemas import ClassifyRequest, ClassifyResponse, CreateTicketRequest, UpdateTicketRequest
from app.deps import get_classification_service, get_ticket_service
from app.domain.models import Category, Priority, Status, Ticket, TicketFilters, TicketStats
from app.domain.registry import parse_enum
from app.services.ticket_classifier import TicketClassificationService
from app.services.ticket_service import TicketService

router = APIRouter()
tickets = APIRouter(prefix="/api/tickets", tags=["tickets"])


@router.get("/health", tags=["health"])
def health():
    return {"status": "ok"}


@tickets.post("/classify/", response_model=ClassifyResponse)
def classify_ticket(
    payload: ClassifyRequest,
    classifier: TicketClassificationService = Depends(get_classification_service),
):
    return ClassifyResponse.from_result(classifier.classify(payload.description))


@tickets.post("/", response_model=Ticket, status_code=http_status.HTTP_201_CREATED)
def create_ticket(
    payload: CreateTicketRequest,
    svc: TicketService = Depends(get_ticket_service),
):
    return svc.create(payload.to_new_ticket())


@tickets.get("/", response_model=list[Ticket])
def list_tickets(
    category: str | None = None,
    priority: str | None = None,
    status: str | None = None,
    search: str | None = None,
    svc: TicketService = Depends(get_ticket_service),
):
    filters = TicketFilters(
        category=parse_enum(Category, category),
        priority=parse_enum(Priority, priority),
        status=parse_enum(Status, status),
        search=search.strip() if search and search.strip() else None,
    )
    return svc.list(filters)


# Registered before /{ticket_id} so "stats" is never parsed as an id
@tickets.get("/stats", response_model=TicketStats, include_in_schema=False)
@tickets.get("/stats/", response_model=TicketStats)
def ticket_stats(svc: TicketService = Depends(get_ticket_service)):
    return svc.stats()


@tickets.get("/{ticket_id}", response_model=Ticket)
def get_ticket(ticket_id: str, svc: TicketService = Depends(get_ticket_service)):
    return svc.get(ticket_id)


@tickets.patch("/{ticket_id}", response_model=Ticket)
def update_ticket(
    ticket_id: str,
    payload: UpdateTicketRequest,
    svc: TicketService = Depends(get_ticket_service),
):
    return svc.update(ticket_id, payload.to_changes())


router.include_router(tickets)
