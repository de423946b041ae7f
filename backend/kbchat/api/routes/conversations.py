"""Conversation Lifecycle — create, list, read, rename and delete conversations.

Invariants:
    - User input is validated by Pydantic before reaching the route handler
    - Naming rules run in the service layer, never in the route
    - Unknown conversation ids answer 404 with the KbChatError envelope

Design Decisions:
    - Store injected via Depends(get_conversation_store): swapped out in tests
    - get_conversation_or_404 shared by read routes (DRY over duplication)
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status

from kbchat.api.request_context import request_logger
from kbchat.core.domain_types import ConversationId, ConversationRecord
from kbchat.core.errors import ResourceNotFoundError
from kbchat.core.repository_protocols import ConversationRepository
from kbchat.infrastructure.conversation_store import get_conversation_store
from kbchat.infrastructure.observability import ContextLogger
from kbchat.schemas.conversation import (
    ConversationCreate, ConversationList, ConversationRename,
    ConversationResponse, RenameResponse,
)
from kbchat.services.conversation_service import (
    rename_conversation, start_conversation,
)

router = APIRouter(prefix="/api/v1/conversations", tags=["conversations"])


async def get_conversation_or_404(
    conversation_id: UUID, store: ConversationRepository,
) -> ConversationRecord:
    record = await store.get(ConversationId(conversation_id))
    if record is None:
        raise ResourceNotFoundError("Conversation", str(conversation_id))
    return record


@router.post(
    "", response_model=ConversationResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_conversation(
    body: ConversationCreate,
    store: ConversationRepository = Depends(get_conversation_store),
    log: ContextLogger = Depends(request_logger),
):
    """Start a conversation named after its first message."""
    record = await start_conversation(store, body.first_message, logger=log)
    return ConversationResponse.from_record(record)


@router.get("", response_model=ConversationList)
async def list_conversations(
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
    store: ConversationRepository = Depends(get_conversation_store),
):
    """List conversations, newest first."""
    records = await store.list_recent(limit, offset)
    return ConversationList(
        conversations=[ConversationResponse.from_record(r) for r in records],
        total=await store.count(),
    )


@router.get("/{conversation_id}", response_model=ConversationResponse)
async def get_conversation(
    conversation_id: UUID,
    store: ConversationRepository = Depends(get_conversation_store),
):
    record = await get_conversation_or_404(conversation_id, store)
    return ConversationResponse.from_record(record)


@router.put("/{conversation_id}", response_model=RenameResponse)
async def rename(
    conversation_id: UUID,
    body: ConversationRename,
    store: ConversationRepository = Depends(get_conversation_store),
    log: ContextLogger = Depends(request_logger),
):
    """Rename a conversation. Invalid names answer 400 with the validator's message."""
    record = await rename_conversation(
        store, ConversationId(conversation_id), body.name, logger=log,
    )
    return RenameResponse(conversation_id=record.id, name=record.name)


@router.delete("/{conversation_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_conversation(
    conversation_id: UUID,
    store: ConversationRepository = Depends(get_conversation_store),
):
    if not await store.delete(ConversationId(conversation_id)):
        raise ResourceNotFoundError("Conversation", str(conversation_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
