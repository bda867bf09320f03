from typing import List, Optional

import google.generativeai as genai
import structlog

from app.config.settings import settings
from app.models.schemas import ChatMessage
from app.repositories.implementations.base_llm_service import BaseLLMService
from app.repositories.interfaces.ai_service import AIServiceError

logger = structlog.get_logger()


class GeminiService(BaseLLMService):
    """Google Gemini implementation of the AI service (default provider)."""

    provider = "gemini"

    def __init__(self, api_key: Optional[str] = None, model_name: Optional[str] = None) -> None:
        self.api_key = api_key or settings.gemini_api_key
        self.model_name = model_name or settings.gemini_model
        self.model: Optional[genai.GenerativeModel] = None
        if self.api_key:
            genai.configure(api_key=self.api_key)
            self.model = genai.GenerativeModel(self.model_name)
        else:
            logger.warning("Gemini API key not configured; AI calls will fail over to fallbacks")

    def _require_model(self) -> genai.GenerativeModel:
        if self.model is None:
            raise AIServiceError("GEMINI_API_KEY is not configured")
        return self.model

    def _complete_json(self, prompt: str, temperature: float) -> str:
        model = self._require_model()
        response = model.generate_content(
            prompt,
            generation_config=genai.types.GenerationConfig(
                temperature=temperature,
                # Ask the model to return raw JSON, no prose
                response_mime_type="application/json",
            ),
        )
        return getattr(response, "text", None) or ""

    def _complete_chat(self, system: str, history: List[ChatMessage], message: str, temperature: float) -> str:
        self._require_model()
        # System instructions are bound to the model object, so chat gets its own
        chat_model = genai.GenerativeModel(self.model_name, system_instruction=system)
        chat = chat_model.start_chat(
            history=[{"role": m.role.value, "parts": [m.content]} for m in history]
        )
        response = chat.send_message(
            message,
            generation_config=genai.types.GenerationConfig(temperature=temperature),
        )
        return getattr(response, "text", None) or ""
