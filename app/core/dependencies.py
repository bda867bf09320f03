from functools import lru_cache
from fastapi import Depends

import structlog

from app.config.settings import settings
from app.repositories.interfaces.ai_service import IAIService
from app.repositories.implementations.gemini_service import GeminiService
from app.repositories.implementations.openai_service import OpenAIService
from app.services.report_service import ReportService
from app.services.tool_advisor_service import ToolAdvisorService

logger = structlog.get_logger()


class Container:
    """Dependency injection container"""

    def __init__(self):
        self._ai_service = None
        self._report_service = None

    @lru_cache()
    def ai_service(self) -> IAIService:
        """Get AI service instance (singleton) for the configured provider"""
        if self._ai_service is None:
            provider = settings.ai_provider.lower()
            if provider == "openai":
                self._ai_service = OpenAIService()
            else:
                if provider != "gemini":
                    logger.warning("Unknown AI provider, using Gemini", provider=settings.ai_provider)
                self._ai_service = GeminiService()
        return self._ai_service

    @lru_cache()
    def report_service(self) -> ReportService:
        """Get report service instance (singleton)"""
        if self._report_service is None:
            self._report_service = ReportService()
        return self._report_service

    def tool_advisor_service(self, ai_service: IAIService) -> ToolAdvisorService:
        """Get tool advisor service instance"""
        return ToolAdvisorService(ai_service=ai_service)


# Global container instance
container = Container()


# Dependency providers for FastAPI
def get_ai_service() -> IAIService:
    """FastAPI dependency for AI service"""
    return container.ai_service()


def get_report_service() -> ReportService:
    """FastAPI dependency for report service"""
    return container.report_service()


def get_tool_advisor_service(ai_service: IAIService = Depends(get_ai_service)) -> ToolAdvisorService:
    """FastAPI dependency for tool advisor service"""
    return container.tool_advisor_service(ai_service)
