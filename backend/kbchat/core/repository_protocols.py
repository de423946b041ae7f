"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in Protocol: boundary methods are async because implementations may do IO,
      but the naming functions that feed them are never async themselves
"""

from typing import Protocol

from kbchat.core.domain_types import ConversationId, ConversationRecord, NameSource


class ConversationRepository(Protocol):
    """Contract for conversation storage — implemented by shell."""
    async def create(
        self, name: str, first_message: str, name_source: NameSource,
    ) -> ConversationRecord: ...
    async def get(self, conversation_id: ConversationId) -> ConversationRecord | None: ...
    async def rename(
        self, conversation_id: ConversationId, name: str,
    ) -> ConversationRecord | None: ...
    async def list_recent(self, limit: int, offset: int) -> list[ConversationRecord]: ...
    async def count(self) -> int: ...
    async def delete(self, conversation_id: ConversationId) -> bool: ...
