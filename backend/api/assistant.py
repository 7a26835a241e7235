"""AI assistant API endpoint."""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from api.errors import handler_errors
from database import get_db
from schemas.assistant import AssistantRequest, AssistantResponse
from services.assistant_service import AssistantService, BusinessContext

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/assistant", tags=["assistant"])

APOLOGY = (
    "I apologize, but I encountered an error while processing your request. "
    "Please try again later."
)


def get_assistant_service() -> AssistantService:
    """Dependency for injecting the assistant service (overridable in tests)."""
    return AssistantService()


@router.post("", response_model=AssistantResponse)
def ask_assistant(
    body: AssistantRequest,
    db: Session = Depends(get_db),
    service: AssistantService = Depends(get_assistant_service),
):
    """Answer one accounting question with the configured LLM provider.

    Answers 503 when no AI configuration is stored.
    """
    context = None
    if body.context is not None:
        context = BusinessContext(**body.context.model_dump())

    with handler_errors(APOLOGY):
        answer = service.ask(db, body.question, context)

    return AssistantResponse(response=answer)
