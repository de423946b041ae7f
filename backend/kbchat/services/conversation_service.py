"""Conversation Service — creation and rename workflows around the naming engine.

Invariants:
    - New conversations are named BEFORE the first write to the repository
    - A manual name is validated, then cleaned, then stored — never stored raw
    - Validation failures raise InvalidConversationNameError with the validator's
      message verbatim; a missing conversation raises ResourceNotFoundError

Design Decisions:
    - Impureim sandwich: pure naming calls in the middle, repository IO around them
    - Logger passed in explicitly (bound with request context by the route)
"""

import logging

from kbchat.core.conversation_naming import (
    Clock, clean_conversation_name, match_opener, name_conversation,
    validate_conversation_name,
)
from kbchat.core.domain_types import ConversationId, ConversationRecord, NameSource
from kbchat.core.errors import (
    ErrorContext, InvalidConversationNameError, ResourceNotFoundError,
)
from kbchat.core.repository_protocols import ConversationRepository
from kbchat.infrastructure.observability import (
    bind_logger, log_business_event, log_security_event,
)

_module_logger = logging.getLogger(__name__)


async def start_conversation(
    repo: ConversationRepository,
    first_message: str,
    *,
    clock: Clock | None = None,
    logger=None,
) -> ConversationRecord:
    """Name and register a new conversation from its first message."""
    log = bind_logger(logger or _module_logger, operation="start_conversation")

    generated = name_conversation(first_message, clock=clock)
    source = NameSource.FALLBACK if generated.is_fallback else NameSource.GENERATED
    opener = match_opener(first_message.strip())
    log.debug(
        "Conversation name derived",
        extra={
            "conversation_name": generated.name,
            "name_source": source.value,
            "opener": opener.phrase if opener else None,
        },
    )

    record = await repo.create(generated.name, first_message, source)
    log_business_event(
        log, "new_conversation_started",
        conversation_id=str(record.id),
        conversation_name=record.name,
        name_source=source.value,
    )
    return record


async def rename_conversation(
    repo: ConversationRepository,
    conversation_id: ConversationId,
    raw_name: str,
    *,
    logger=None,
) -> ConversationRecord:
    """Validate, clean and apply a manual conversation name."""
    log = bind_logger(
        logger or _module_logger,
        operation="rename_conversation", conversation_id=str(conversation_id),
    )

    validation = validate_conversation_name(raw_name)
    if not validation.is_valid:
        log.warning(
            f"Conversation name validation failed: {validation.error}",
            extra={"error_code": validation.code.value},
        )
        raise InvalidConversationNameError(
            validation.code, validation.error,
            ErrorContext(
                conversation_id=str(conversation_id), operation="rename_conversation",
            ),
        )

    name = clean_conversation_name(raw_name)
    record = await repo.rename(conversation_id, name)
    if record is None:
        log_security_event(log, "unknown_conversation_rename_attempt")
        raise ResourceNotFoundError(
            "Conversation", str(conversation_id),
            ErrorContext(
                conversation_id=str(conversation_id), operation="rename_conversation",
            ),
        )

    log.info("Conversation renamed", extra={"conversation_name": name})
    return record
