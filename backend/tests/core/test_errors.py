"""Error hierarchy tests — codes, HTTP status and REST envelope shape."""

from kbchat.core.domain_types import NameErrorCode
from kbchat.core.errors import (
    ErrorCategory,
    ErrorContext,
    ErrorSeverity,
    InvalidConversationNameError,
    KbChatError,
    ResourceNotFoundError,
)


def test_invalid_name_error_uses_name_error_code():
    exc = InvalidConversationNameError(
        NameErrorCode.NAME_TOO_LONG, "Conversation name must be 100 characters or less",
    )
    assert isinstance(exc, KbChatError)
    assert exc.code == "NAME_TOO_LONG"
    assert exc.http_status == 400
    assert exc.category == ErrorCategory.VALIDATION
    assert exc.severity == ErrorSeverity.WARNING
    assert exc.name_error is NameErrorCode.NAME_TOO_LONG


def test_not_found_error_message():
    exc = ResourceNotFoundError("Conversation", "abc")
    assert exc.http_status == 404
    assert exc.code == "RESOURCE_NOT_FOUND"
    assert exc.message == "Conversation 'abc' not found"


def test_to_response_envelope_carries_context():
    ctx = ErrorContext(conversation_id="c-1", request_id="r-1", operation="rename_conversation")
    body = InvalidConversationNameError(
        NameErrorCode.EMPTY_NAME, "Conversation name cannot be empty", ctx,
    ).to_response()
    error = body["error"]
    assert error["code"] == "EMPTY_NAME"
    assert error["message"] == "Conversation name cannot be empty"
    assert error["category"] == "validation"
    assert error["severity"] == "warning"
    assert error["context"] == {
        "conversation_id": "c-1", "request_id": "r-1", "operation": "rename_conversation",
    }
    assert error["timestamp"] == ctx.timestamp.isoformat()
