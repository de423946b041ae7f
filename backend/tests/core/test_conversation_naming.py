"""Conversation naming tests — pure tests for title generation and openers.

Tests cover:
    - Short / empty messages route to the timestamp fallback
    - Exactly one strippable opener removed, case-insensitively
    - Stripping that leaves < 5 chars reverts to the original message
    - Question-style openers are recognized but kept
    - Trailing punctuation removed in order: '?', then '.', then '!'
    - Generated titles are never empty and never longer than 50 chars
"""

import re

import pytest

from kbchat.core.conversation_naming import (
    MAX_GENERATED_NAME_LENGTH,
    generate_conversation_name,
    match_opener,
    name_conversation,
)

FALLBACK_RE = re.compile(
    r"^Chat started on "
    r"(Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sep|Oct|Nov|Dec) \d{1,2}, "
    r"\d{1,2}:\d{2} (AM|PM)$"
)


# --- Fallback path ------------------------------------------------------------

@pytest.mark.parametrize("message", ["", "   ", "hey", "  hi  ", "abcd", "\n\t ok \n"])
def test_short_message_uses_fallback(message, fixed_clock):
    name = generate_conversation_name(message, clock=fixed_clock)
    assert name == "Chat started on Jan 20, 2:30 PM"


def test_short_message_fallback_without_clock_matches_format():
    assert FALLBACK_RE.match(generate_conversation_name("yo"))


def test_five_characters_is_enough_for_a_title():
    assert generate_conversation_name("abcde") == "Abcde"


def test_punctuation_only_message_falls_back(fixed_clock):
    result = name_conversation("?????", clock=fixed_clock)
    assert result.is_fallback
    assert result.name == "Chat started on Jan 20, 2:30 PM"


def test_name_conversation_reports_derived_title():
    result = name_conversation("summarize the onboarding guide")
    assert result.name == "Summarize the onboarding guide"
    assert result.is_fallback is False


# --- Opener stripping ---------------------------------------------------------

def test_strips_please():
    assert (
        generate_conversation_name("please summarize the quarterly report.")
        == "Summarize the quarterly report"
    )


def test_strips_only_one_opener():
    assert (
        generate_conversation_name("hello can you summarize the report")
        == "Can you summarize the report"
    )


def test_opener_match_is_case_insensitive():
    assert generate_conversation_name("Could You list the steps?") == "List the steps"


def test_opener_consumes_all_following_whitespace():
    assert generate_conversation_name("HEY   there friend") == "There friend"


def test_multiword_opener():
    assert (
        generate_conversation_name("i need a packing list for Iceland")
        == "A packing list for Iceland"
    )


def test_reverts_when_stripping_leaves_too_little():
    assert generate_conversation_name("hi team") == "Hi team"


def test_comma_after_opener_prevents_stripping():
    name = generate_conversation_name(
        "hi, can you explain how transformers work in machine learning models today"
    )
    assert name == "Hi, can you explain how transformers work in..."


def test_question_openers_are_kept():
    assert generate_conversation_name("how to deploy a FastAPI app?") == "How to deploy a FastAPI app"
    assert generate_conversation_name("explain quantum tunneling") == "Explain quantum tunneling"


# --- match_opener ---------------------------------------------------------------

def test_match_opener_strippable():
    match = match_opener("help me write a poem")
    assert match is not None
    assert match.phrase == "help me"
    assert match.stripped is True
    assert match.remainder == "write a poem"


def test_match_opener_preserved():
    match = match_opener("What are the refund rules")
    assert match is not None
    assert match.phrase == "what are"
    assert match.stripped is False
    assert match.remainder == "What are the refund rules"


def test_match_opener_requires_whitespace_after_strippable_opener():
    assert match_opener("hiking trip ideas") is None


def test_match_opener_strippable_wins_over_preserved():
    match = match_opener("hey explain this")
    assert match.phrase == "hey"
    assert match.remainder == "explain this"


def test_match_opener_only_at_start():
    assert match_opener("so please help") is None


# --- Capitalization and punctuation ---------------------------------------------

def test_capitalizes_first_character_only():
    assert generate_conversation_name("iPhone battery tips") == "IPhone battery tips"


def test_non_letter_first_character_unchanged():
    assert generate_conversation_name("123 reasons to test") == "123 reasons to test"


def test_question_marks_stripped_before_exclamations():
    # '?' rule runs first and finds '!' at the end, so the '?' survives
    assert generate_conversation_name("What is going on?!") == "What is going on?"


def test_exclamation_after_question_marks_both_removed():
    assert generate_conversation_name("Really done!?") == "Really done"


def test_periods_after_question_mark():
    assert generate_conversation_name("Is it finished?...") == "Is it finished?"


def test_trailing_punctuation_without_opener_strip():
    assert generate_conversation_name("hello?????") == "Hello"


# --- Length bound ---------------------------------------------------------------

@pytest.mark.parametrize("message", [
    "x" * 500,
    "word " * 40,
    "please " + "supercalifragilistic" * 5,
    "can you tell me everything about the history of the Roman empire in detail",
    "   " + "a b " * 30,
])
def test_generated_name_never_exceeds_limit(message):
    name = generate_conversation_name(message)
    assert name
    assert len(name) <= MAX_GENERATED_NAME_LENGTH


def test_long_message_truncated_at_word_boundary():
    name = generate_conversation_name(
        "Summarize the findings of the 2023 annual security audit for the board"
    )
    assert name == "Summarize the findings of the 2023 annual..."
    assert len(name) <= MAX_GENERATED_NAME_LENGTH
