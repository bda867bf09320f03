from abc import ABC, abstractmethod
from app.models.schemas import (
    RecommendToolsInput, RecommendToolsOutput,
    CompareToolsInput, CompareToolsOutput,
    EstimateEffortInput, EstimateEffortOutput,
    GetToolDetailsInput, GetToolDetailsOutput,
    GenerateToolAnalysisInput, ToolAnalysis,
    SupportChatInput, SupportChatOutput,
)


class AIServiceError(Exception):
    """Raised when the hosted model cannot produce a usable answer."""


class IAIService(ABC):
    """Interface for prompt-backed operations against a hosted language model"""

    @abstractmethod
    async def recommend_tools(self, request: RecommendToolsInput) -> RecommendToolsOutput:
        """Recommend the top three tools for the given filter criteria"""
        pass

    @abstractmethod
    async def compare_tools(self, request: CompareToolsInput) -> CompareToolsOutput:
        """Compare tools criterion by criterion"""
        pass

    @abstractmethod
    async def estimate_effort(self, request: EstimateEffortInput) -> EstimateEffortOutput:
        """Estimate automation effort in person-days"""
        pass

    @abstractmethod
    async def get_tool_details(self, request: GetToolDetailsInput) -> GetToolDetailsOutput:
        """Produce a deep-dive profile of a single tool"""
        pass

    @abstractmethod
    async def generate_tool_analysis(self, request: GenerateToolAnalysisInput) -> ToolAnalysis:
        """Summarize strengths and weaknesses of a single tool"""
        pass

    @abstractmethod
    async def support_chat(self, request: SupportChatInput) -> SupportChatOutput:
        """Answer the latest user turn of a support conversation"""
        pass
