from typing import List, Optional

from openai import OpenAI
import structlog

from app.config.settings import settings
from app.models.schemas import ChatMessage, ChatRole
from app.repositories.implementations.base_llm_service import BaseLLMService
from app.repositories.interfaces.ai_service import AIServiceError

logger = structlog.get_logger()

JSON_SYSTEM_PROMPT = (
    "You are a test automation expert. Reply with a single, valid JSON object ONLY "
    "(no surrounding markdown, explanation text, or backticks). If a value is not "
    "available, provide a reasonable default rather than omitting the field."
)


class OpenAIService(BaseLLMService):
    """OpenAI chat-completions implementation of the AI service"""

    provider = "openai"

    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None):
        self.api_key = api_key or settings.openai_api_key
        self.model = model or settings.openai_model
        self.client: Optional[OpenAI] = None
        if self.api_key:
            self.client = OpenAI(api_key=self.api_key, base_url=settings.openai_base_url)
        else:
            logger.warning("OpenAI API key not configured; AI calls will fail over to fallbacks")

    def _require_client(self) -> OpenAI:
        if self.client is None:
            raise AIServiceError("OPENAI_API_KEY is not configured")
        return self.client

    def _complete_json(self, prompt: str, temperature: float) -> str:
        client = self._require_client()
        response = client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": JSON_SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
            response_format={"type": "json_object"},
            temperature=temperature,
        )
        if not response.choices:
            return ""
        return response.choices[0].message.content or ""

    def _complete_chat(self, system: str, history: List[ChatMessage], message: str, temperature: float) -> str:
        client = self._require_client()
        messages = [{"role": "system", "content": system}]
        for m in history:
            role = "user" if m.role == ChatRole.USER else "assistant"
            messages.append({"role": role, "content": m.content})
        messages.append({"role": "user", "content": message})

        response = client.chat.completions.create(
            model=self.model,
            messages=messages,
            temperature=temperature,
        )
        if not response.choices:
            return ""
        return response.choices[0].message.content or ""
