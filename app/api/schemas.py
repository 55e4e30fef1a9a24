from pydantic import BaseModel, Field, field_validator

from app.domain.models import (
    Category,
    ClassificationResult,
    NewTicket,
    Priority,
    Status,
    TicketChanges,
)
from app.domain.registry import parse_enum

TITLE_MAX_LENGTH = 200


def _required_text(value: str, field: str) -> str:
    if not value or not value.strip():
        raise ValueError(f"{field} is required")
    return value.strip()


def _title(value: str) -> str:
    if len(value) > TITLE_MAX_LENGTH:
        raise ValueError(f"title must be at most {TITLE_MAX_LENGTH} characters")
    return _required_text(value, "title")


class ClassifyRequest(BaseModel):
    description: str = Field(..., description="Ticket text to classify")

    @field_validator("description")
    @classmethod
    def _description(cls, value: str) -> str:
        return _required_text(value, "description")


class ClassifyResponse(BaseModel):
    suggested_category: Category
    suggested_priority: Priority

    @staticmethod
    def from_result(result: ClassificationResult) -> "ClassifyResponse":
        return ClassifyResponse(
            suggested_category=result.category,
            suggested_priority=result.priority,
        )


class CreateTicketRequest(BaseModel):
    title: str = Field(..., description=f"Ticket title, at most {TITLE_MAX_LENGTH} characters")
    description: str = Field(..., description="Ticket text content")
    # Unknown values fall back to the defaults instead of failing the request
    category: str | None = Field(None, description="billing | technical | account | general")
    priority: str | None = Field(None, description="low | medium | high | critical")

    @field_validator("title")
    @classmethod
    def _check_title(cls, value: str) -> str:
        return _title(value)

    @field_validator("description")
    @classmethod
    def _description(cls, value: str) -> str:
        return _required_text(value, "description")

    def to_new_ticket(self) -> NewTicket:
        return NewTicket(
            title=self.title,
            description=self.description,
            category=parse_enum(Category, self.category) or Category.GENERAL,
            priority=parse_enum(Priority, self.priority) or Priority.MEDIUM,
            status=Status.OPEN,
        )


class UpdateTicketRequest(BaseModel):
    title: str | None = None
    description: str | None = None
    category: str | None = None
    priority: str | None = None
    status: str | None = None

    @field_validator("title")
    @classmethod
    def _check_title(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return _title(value)

    @field_validator("description")
    @classmethod
    def _description(cls, value: str | None) -> str | None:
        return value.strip() if value is not None else None

    def to_changes(self) -> TicketChanges:
        return TicketChanges(
            title=self.title,
            description=self.description,
            category=parse_enum(Category, self.category),
            priority=parse_enum(Priority, self.priority),
            status=parse_enum(Status, self.status),
        )
