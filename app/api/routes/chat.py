from fastapi import APIRouter, Depends
import structlog

from app.models.schemas import SupportChatInput, SupportChatOutput
from app.services.tool_advisor_service import ToolAdvisorService
from app.core.dependencies import get_tool_advisor_service

logger = structlog.get_logger()

router = APIRouter(prefix="/chat", tags=["chat"])


@router.post("", response_model=SupportChatOutput)
async def support_chat(
    request: SupportChatInput,
    service: ToolAdvisorService = Depends(get_tool_advisor_service)
):
    """Send the conversation so far and get the assistant's next reply.

    Errors are answered with an apology message rather than an error status.
    """
    logger.info("Support chat turn", turns=len(request.messages))
    return await service.support_chat(request)
