import pytest
from fastapi.testclient import TestClient

from main import app
from app.core.cache import TOOL_ANALYSIS_CACHE, TOOL_DETAILS_CACHE, TTLCache
from app.core.dependencies import get_ai_service
from app.repositories.interfaces.ai_service import IAIService
from app.services.tool_advisor_service import ToolAdvisorService


class FakeAIService(IAIService):
    """Scriptable AI service: set ``responses[op]`` or ``errors[op]`` per operation.

    Operations without a scripted response return None, which the advisor
    treats as an empty model reply.
    """

    def __init__(self):
        self.responses = {}
        self.errors = {}
        self.calls = []

    async def _respond(self, operation, request):
        self.calls.append((operation, request))
        if operation in self.errors:
            raise self.errors[operation]
        return self.responses.get(operation)

    def called(self, operation):
        return [request for op, request in self.calls if op == operation]

    async def recommend_tools(self, request):
        return await self._respond("recommend_tools", request)

    async def compare_tools(self, request):
        return await self._respond("compare_tools", request)

    async def estimate_effort(self, request):
        return await self._respond("estimate_effort", request)

    async def get_tool_details(self, request):
        return await self._respond("get_tool_details", request)

    async def generate_tool_analysis(self, request):
        return await self._respond("generate_tool_analysis", request)

    async def support_chat(self, request):
        return await self._respond("support_chat", request)


@pytest.fixture(autouse=True)
def clear_tool_caches():
    TOOL_ANALYSIS_CACHE.clear()
    TOOL_DETAILS_CACHE.clear()
    yield
    TOOL_ANALYSIS_CACHE.clear()
    TOOL_DETAILS_CACHE.clear()


@pytest.fixture
def fake_ai():
    return FakeAIService()


@pytest.fixture
def advisor(fake_ai):
    """Advisor wired to the fake AI service with private caches"""
    return ToolAdvisorService(fake_ai, analysis_cache=TTLCache(), details_cache=TTLCache())


@pytest.fixture
def test_client(fake_ai):
    """Synchronous test client with the AI provider replaced by the fake"""
    app.dependency_overrides[get_ai_service] = lambda: fake_ai
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()
