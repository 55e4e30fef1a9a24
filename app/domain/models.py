from datetime import datetime
from enum import StrEnum
from uuid import UUID

from pydantic import BaseModel, Field


class Category(StrEnum):
    BILLING = "billing"
    TECHNICAL = "technical"
    ACCOUNT = "account"
    GENERAL = "general"


class Priority(StrEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class Status(StrEnum):
    OPEN = "open"
    IN_PROGRESS = "in_progress"
    RESOLVED = "resolved"
    CLOSED = "closed"


class Ticket(BaseModel):
    id: UUID
    title: str
    description: str
    category: Category
    priority: Priority
    status: Status = Status.OPEN
    created_at: datetime


class NewTicket(BaseModel):
    title: str
    description: str
    category: Category = Category.GENERAL
    priority: Priority = Priority.MEDIUM
    status: Status = Status.OPEN


class TicketChanges(BaseModel):
    """Partial update; fields left as None are not touched."""

    title: str | None = None
    description: str | None = None
    category: Category | None = None
    priority: Priority | None = None
    status: Status | None = None

    def as_update(self) -> dict[str, str]:
        return {key: str(value) for key, value in self.model_dump(exclude_none=True).items()}


class TicketFilters(BaseModel):
    category: Category | None = None
    priority: Priority | None = None
    status: Status | None = None
    search: str | None = None


class ClassificationResult(BaseModel):
    category: Category = Field(..., description="billing | technical | account | general")
    priority: Priority = Field(..., description="low | medium | high | critical")


class TicketStats(BaseModel):
    total_tickets: int
    open_tickets: int
    avg_tickets_per_day: float
    priority_breakdown: dict[Priority, int]
    category_breakdown: dict[Category, int]
