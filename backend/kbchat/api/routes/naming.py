"""Naming Utilities — expose title generation, validation and cleaning to clients.

Invariants:
    - All three endpoints are side-effect free (nothing is stored)
    - /validate always answers 200 — an invalid name is a result, not an error

Design Decisions:
    - Lets UI rename forms run the exact server-side rules before submitting
"""

from fastapi import APIRouter

from kbchat.core.conversation_naming import (
    clean_conversation_name, name_conversation, validate_conversation_name,
)
from kbchat.schemas.conversation import (
    CleanNameResponse, NameRequest, NameValidationResponse,
    TitleRequest, TitleResponse,
)

router = APIRouter(prefix="/api/v1/naming", tags=["naming"])


@router.post("/title", response_model=TitleResponse)
async def generate_title(body: TitleRequest):
    """Preview the name a conversation would get from this first message."""
    generated = name_conversation(body.message)
    return TitleResponse(name=generated.name, is_fallback=generated.is_fallback)


@router.post("/validate", response_model=NameValidationResponse)
async def validate_name(body: NameRequest):
    result = validate_conversation_name(body.name)
    return NameValidationResponse(
        is_valid=result.is_valid, error=result.error, code=result.code,
    )


@router.post("/clean", response_model=CleanNameResponse)
async def clean_name(body: NameRequest):
    return CleanNameResponse(name=clean_conversation_name(body.name))
