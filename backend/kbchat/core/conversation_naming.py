"""Conversation Naming — derive, validate and clean conversation display names.

Invariants:
    - generate_conversation_name() never raises, never returns "" and never
      returns more than MAX_GENERATED_NAME_LENGTH characters
    - smart_truncate() never returns more than max_length characters;
      max_length below len(ELLIPSIS) is rejected with ValueError
    - validate_conversation_name() never raises — failures are reported in NameValidation
    - clean_conversation_name() output is at most MAX_NAME_LENGTH characters
    - No IO, no shared mutable state; clock and date formatting are injected

Design Decisions:
    - Openers as an ordered tuple of prefix matchers over one alternation regex:
      tie-break order stays explicit and each opener is testable on its own
    - Word-boundary search stops at max_length - 3 so the ellipsis always fits
      (ADR: 50-char title bound holds for every input)
    - Date formatting is a hand-written en-US table, not strftime("%b"):
      strftime follows the process C locale
"""

import re
from dataclasses import dataclass
from datetime import datetime
from typing import Callable

from kbchat.core.domain_types import NameErrorCode

MIN_MESSAGE_LENGTH = 5
MAX_GENERATED_NAME_LENGTH = 50
MAX_NAME_LENGTH = 100
ELLIPSIS = "..."
FALLBACK_PREFIX = "Chat started on"
BOUNDARY_RATIO = 0.6

Clock = Callable[[], datetime]
DateFormatter = Callable[[datetime], str]


# ─── Openers ────────────────────────────────────────────────────

# Conversational filler, removed from the start of the message.
_STRIPPED_OPENERS = (
    "hi", "hello", "hey", "please", "can you", "could you",
    "would you", "i need", "i want", "help me",
)

# Question-style openers, recognized but kept verbatim ("How to deploy X").
_PRESERVED_OPENERS = (
    "tell me", "explain", "show me", "what is", "what are",
    "how do", "how to", "where is", "when is", "why",
)

_OPENER_MATCHERS: tuple[tuple[str, bool, re.Pattern[str]], ...] = tuple(
    (phrase, True, re.compile(rf"^{re.escape(phrase)}\s+", re.IGNORECASE))
    for phrase in _STRIPPED_OPENERS
) + tuple(
    (phrase, False, re.compile(rf"^{re.escape(phrase)}\s*", re.IGNORECASE))
    for phrase in _PRESERVED_OPENERS
)


@dataclass(frozen=True)
class OpenerMatch:
    """First opener found at the start of a message."""
    phrase: str
    stripped: bool
    remainder: str


def match_opener(message: str) -> OpenerMatch | None:
    """Return the first opener at position 0, or None.

    For strippable openers the remainder excludes the opener and its
    trailing whitespace; preserved openers leave the message untouched.
    """
    for phrase, strip, pattern in _OPENER_MATCHERS:
        match = pattern.match(message)
        if match is None:
            continue
        remainder = message[match.end():] if strip else message
        return OpenerMatch(phrase=phrase, stripped=strip, remainder=remainder)
    return None


# ─── Fallback ───────────────────────────────────────────────────

_MONTH_ABBREVIATIONS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


def format_short_datetime_en_us(moment: datetime) -> str:
    """Render 'Jan 20, 2:30 PM' (month short, day numeric, 12-hour clock)."""
    hour = moment.hour % 12 or 12
    meridiem = "AM" if moment.hour < 12 else "PM"
    month = _MONTH_ABBREVIATIONS[moment.month - 1]
    return f"{month} {moment.day}, {hour}:{moment.minute:02d} {meridiem}"


def _local_now() -> datetime:
    return datetime.now().astimezone()


def generate_fallback_name(
    *, clock: Clock | None = None, formatter: DateFormatter | None = None,
) -> str:
    """Timestamp-based default name for messages too short to title."""
    now = (clock or _local_now)()
    return f"{FALLBACK_PREFIX} {(formatter or format_short_datetime_en_us)(now)}"


# ─── Title generation ───────────────────────────────────────────

def smart_truncate(text: str, max_length: int) -> str:
    """Shorten text to max_length, preferring a cut at a word boundary.

    A space is accepted as the cut point only when it sits past 60% of
    max_length and still leaves room for the ellipsis; otherwise the text
    is hard-cut so the result is exactly max_length characters.
    """
    if max_length < len(ELLIPSIS):
        raise ValueError(f"max_length must be at least {len(ELLIPSIS)}, got {max_length}")
    if len(text) <= max_length:
        return text

    room = max_length - len(ELLIPSIS)
    last_space = text.rfind(" ", 0, room + 1)
    if last_space > max_length * BOUNDARY_RATIO:
        return text[:last_space] + ELLIPSIS
    return text[:room] + ELLIPSIS


def _strip_opener(message: str) -> str:
    opener = match_opener(message)
    processed = opener.remainder.strip() if opener else message
    if len(processed) < MIN_MESSAGE_LENGTH:
        return message
    return processed


def _strip_trailing_punctuation(text: str) -> str:
    text = re.sub(r"\?+$", "", text)
    text = re.sub(r"\.+$", "", text)
    text = re.sub(r"!+$", "", text)
    return text.strip()


@dataclass(frozen=True)
class GeneratedName:
    name: str
    is_fallback: bool


def name_conversation(
    first_message: str,
    *,
    clock: Clock | None = None,
    formatter: DateFormatter | None = None,
) -> GeneratedName:
    """Derive a title from the first message, reporting whether the fallback was used."""
    cleaned = first_message.strip()
    if len(cleaned) < MIN_MESSAGE_LENGTH:
        return GeneratedName(generate_fallback_name(clock=clock, formatter=formatter), True)

    name = _strip_opener(cleaned)
    name = name[:1].upper() + name[1:]
    name = _strip_trailing_punctuation(name)
    if not name:
        # e.g. "?????" — nothing left once punctuation is gone
        return GeneratedName(generate_fallback_name(clock=clock, formatter=formatter), True)

    return GeneratedName(smart_truncate(name, MAX_GENERATED_NAME_LENGTH), False)


def generate_conversation_name(
    first_message: str,
    *,
    clock: Clock | None = None,
    formatter: DateFormatter | None = None,
) -> str:
    """Derive a short title from the first message of a conversation."""
    return name_conversation(first_message, clock=clock, formatter=formatter).name


# ─── Manual rename ──────────────────────────────────────────────

_INVALID_NAME_CHARS = re.compile(r'[<>:"/\\|?*\x00-\x1f]')

# Whitespace trimmed from manual names. str.strip() would also drop the
# separator controls \x1c-\x1f, which must reach the character check.
NAME_TRIM_CHARS = (
    "\t\n\x0b\x0c\r \xa0\u1680\u2000\u2001\u2002\u2003\u2004\u2005"
    "\u2006\u2007\u2008\u2009\u200a\u2028\u2029\u202f\u205f\u3000\ufeff"
)
_NAME_WHITESPACE_RUN = re.compile(r"[^\S\x1c-\x1f]+")

NAME_ERROR_MESSAGES: dict[NameErrorCode, str] = {
    NameErrorCode.EMPTY_NAME: "Conversation name cannot be empty",
    NameErrorCode.NAME_TOO_LONG: (
        f"Conversation name must be {MAX_NAME_LENGTH} characters or less"
    ),
    NameErrorCode.INVALID_CHARACTERS: "Conversation name contains invalid characters",
}


@dataclass(frozen=True)
class NameValidation:
    """Outcome of validate_conversation_name()."""
    is_valid: bool
    error: str | None = None
    code: NameErrorCode | None = None

    @classmethod
    def failure(cls, code: NameErrorCode) -> "NameValidation":
        return cls(is_valid=False, error=NAME_ERROR_MESSAGES[code], code=code)


_VALID = NameValidation(is_valid=True)


def validate_conversation_name(name: str) -> NameValidation:
    """Check a user-supplied name. Does not return the trimmed value."""
    trimmed = name.strip(NAME_TRIM_CHARS)
    if not trimmed:
        return NameValidation.failure(NameErrorCode.EMPTY_NAME)
    if len(trimmed) > MAX_NAME_LENGTH:
        return NameValidation.failure(NameErrorCode.NAME_TOO_LONG)
    if _INVALID_NAME_CHARS.search(trimmed):
        return NameValidation.failure(NameErrorCode.INVALID_CHARACTERS)
    return _VALID


def clean_conversation_name(name: str) -> str:
    """Trim, collapse whitespace runs to one space, hard-cut to MAX_NAME_LENGTH."""
    return _NAME_WHITESPACE_RUN.sub(" ", name.strip(NAME_TRIM_CHARS))[:MAX_NAME_LENGTH]
