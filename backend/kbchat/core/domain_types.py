"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - ConversationId wraps UUID — never use bare UUID in domain logic
    - All valid states encoded as Enums — no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

ConversationId = NewType("ConversationId", UUID)


# ─── Enums ───────────────────────────────────────────────────────

class NameErrorCode(str, Enum):
    """Reasons a manual conversation name is rejected."""
    EMPTY_NAME = "EMPTY_NAME"
    NAME_TOO_LONG = "NAME_TOO_LONG"
    INVALID_CHARACTERS = "INVALID_CHARACTERS"


class NameSource(str, Enum):
    """Where the current conversation name came from."""
    GENERATED = "generated"
    FALLBACK = "fallback"
    MANUAL = "manual"


# ─── Records ─────────────────────────────────────────────────────

@dataclass
class ConversationRecord:
    """A conversation as held by the registry."""
    id: ConversationId
    name: str
    first_message: str
    name_source: NameSource
    created_at: datetime
    updated_at: datetime
