"""Conversation Store — process-local registry implementing ConversationRepository.

Invariants:
    - Records are keyed by ConversationId; insertion order == creation order
    - Size never exceeds max_conversations — the oldest record is evicted first
    - rename() bumps updated_at and marks the name as manual

Design Decisions:
    - In-memory dict over a database: durable storage is out of scope
      (ADR: single-process uvicorn, state lost on restart)
    - Module-level store behind get_conversation_store(): deliberate exception to the
      no-global-state rule, overridden via app.dependency_overrides in tests
"""

import logging
import uuid
from datetime import datetime, timezone

from kbchat.config import get_settings
from kbchat.core.domain_types import ConversationId, ConversationRecord, NameSource

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class InMemoryConversationStore:
    """Dict-backed conversation registry."""

    def __init__(self, max_conversations: int = 10_000):
        self._records: dict[ConversationId, ConversationRecord] = {}
        self._max_conversations = max_conversations

    async def create(
        self, name: str, first_message: str, name_source: NameSource,
    ) -> ConversationRecord:
        now = _utcnow()
        record = ConversationRecord(
            id=ConversationId(uuid.uuid4()),
            name=name,
            first_message=first_message,
            name_source=name_source,
            created_at=now,
            updated_at=now,
        )
        self._records[record.id] = record
        self._evict_overflow()
        return record

    async def get(self, conversation_id: ConversationId) -> ConversationRecord | None:
        return self._records.get(conversation_id)

    async def rename(
        self, conversation_id: ConversationId, name: str,
    ) -> ConversationRecord | None:
        record = self._records.get(conversation_id)
        if record is None:
            return None
        record.name = name
        record.name_source = NameSource.MANUAL
        record.updated_at = _utcnow()
        return record

    async def list_recent(self, limit: int, offset: int) -> list[ConversationRecord]:
        newest_first = list(reversed(self._records.values()))
        return newest_first[offset:offset + limit]

    async def count(self) -> int:
        return len(self._records)

    async def delete(self, conversation_id: ConversationId) -> bool:
        return self._records.pop(conversation_id, None) is not None

    def _evict_overflow(self) -> None:
        while len(self._records) > self._max_conversations:
            oldest = next(iter(self._records))
            del self._records[oldest]
            logger.warning(
                "Conversation registry full, evicted oldest conversation",
                extra={"conversation_id": str(oldest)},
            )


_store: InMemoryConversationStore | None = None


def get_conversation_store() -> InMemoryConversationStore:
    """FastAPI dependency — lazily builds the process-wide store."""
    global _store
    if _store is None:
        _store = InMemoryConversationStore(get_settings().max_conversations)
    return _store
