"""Conversation Schemas — Pydantic models for the naming and conversation endpoints.

Invariants:
    - Text fields must be JSON strings (no number/bool coercion)
    - Names are NOT length-checked or stripped here: validate_conversation_name()
      owns those rules so clients get its exact messages
    - first_message and name capped at 10000 chars to bound request size

Design Decisions:
    - Response models built from ConversationRecord via from_record() — the registry
      dataclass never leaks to the wire directly
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from kbchat.core.domain_types import ConversationRecord, NameErrorCode, NameSource

MAX_REQUEST_TEXT = 10_000


# --- Naming utilities ---------------------------------------------------------

class TitleRequest(BaseModel):
    message: str = Field(max_length=MAX_REQUEST_TEXT)


class TitleResponse(BaseModel):
    name: str
    is_fallback: bool


class NameRequest(BaseModel):
    name: str = Field(max_length=MAX_REQUEST_TEXT)


class NameValidationResponse(BaseModel):
    is_valid: bool
    error: str | None = None
    code: NameErrorCode | None = None


class CleanNameResponse(BaseModel):
    name: str


# --- Conversations ------------------------------------------------------------

class ConversationCreate(BaseModel):
    """Conversation creation — the first user message drives the name."""
    first_message: str = Field(max_length=MAX_REQUEST_TEXT)


class ConversationRename(BaseModel):
    name: str = Field(max_length=MAX_REQUEST_TEXT)


class ConversationResponse(BaseModel):
    """Conversation response — public-facing conversation data."""
    id: UUID
    name: str
    name_source: NameSource
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_record(cls, record: ConversationRecord) -> "ConversationResponse":
        return cls(
            id=record.id,
            name=record.name,
            name_source=record.name_source,
            created_at=record.created_at,
            updated_at=record.updated_at,
        )


class ConversationList(BaseModel):
    conversations: list[ConversationResponse]
    total: int


class RenameResponse(BaseModel):
    success: bool = True
    message: str = "Conversation name updated successfully"
    conversation_id: UUID
    name: str
