from pydantic import BaseModel, Field, field_validator
from typing import List, Optional, Dict
from enum import Enum


class ChatRole(str, Enum):
    USER = "user"
    MODEL = "model"


class RecommendToolsInput(BaseModel):
    """Filter criteria submitted from the navigator sidebar."""
    application_under_test: str = Field(default="all", min_length=1, description="Type of application under test")
    test_type: str = Field(default="all", min_length=1, description="Kind of testing required")
    operating_system: str = Field(default="all", min_length=1, description="Target operating system")
    coding_requirement: str = Field(default="any", min_length=1, description="Codeless, low-code, scripting or AI/ML")
    coding_language: str = Field(default="any", min_length=1, description="Preferred scripting language")
    pricing_model: str = Field(default="any", min_length=1, description="Licensing model")
    reporting_analytics: str = Field(default="any", min_length=1, description="Reporting & analytics capabilities")


class ToolRecommendation(BaseModel):
    tool_name: str = Field(..., description="The name of the recommended tool")
    score: int = Field(..., ge=0, le=100, description="Suitability of the tool (0-100)")
    justification: str = Field(..., description="Why the tool fits the provided filter criteria")


class RecommendToolsOutput(BaseModel):
    recommendations: List[ToolRecommendation] = Field(default_factory=list)


class CompareToolsInput(BaseModel):
    tool_names: List[str] = Field(..., min_length=1, max_length=5, description="Tools to compare side-by-side")

    @field_validator("tool_names")
    @classmethod
    def _clean_tool_names(cls, value: List[str]) -> List[str]:
        cleaned: List[str] = []
        for name in value:
            name = name.strip()
            if not name:
                raise ValueError("tool names must not be blank")
            if name not in cleaned:
                cleaned.append(name)
        return cleaned


class ComparisonCriterion(BaseModel):
    criterion_name: str
    tool_values: Dict[str, str] = Field(default_factory=dict, description="Tool name -> table cell text")


class CompareToolsOutput(BaseModel):
    comparison_table: List[ComparisonCriterion] = Field(default_factory=list)
    tool_overviews: Dict[str, str] = Field(default_factory=dict)


class EstimateEffortInput(BaseModel):
    automation_tool: Optional[str] = Field(None, description="Chosen automation tool, if decided")
    complexity_low: int = Field(default=0, ge=0)
    complexity_medium: int = Field(default=0, ge=0)
    complexity_high: int = Field(default=0, ge=0)
    complexity_highly_complex: int = Field(default=0, ge=0)
    use_standard_framework: bool = False
    cicd_pipeline_integrated: bool = False
    qa_team_size: int = Field(default=1, ge=1, description="Used for calendar duration only")
    project_description: Optional[str] = None

    @field_validator("automation_tool", "project_description")
    @classmethod
    def _blank_to_none(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        value = value.strip()
        if not value or value.lower() == "none":
            return None
        return value

    @property
    def total_test_cases(self) -> int:
        return (
            self.complexity_low
            + self.complexity_medium
            + self.complexity_high
            + self.complexity_highly_complex
        )


class EstimateEffortOutput(BaseModel):
    estimated_effort_days: float = Field(..., ge=0, description="Total person-days")
    effort_days_min: float = Field(..., ge=0)
    effort_days_max: float = Field(..., ge=0)
    estimated_duration_days: float = Field(..., ge=0, description="Person-days divided by QA team size")
    explanation: str
    confidence_score: int = Field(..., ge=0, le=100)


class GetToolDetailsInput(BaseModel):
    tool_name: str = Field(..., min_length=1)

    @field_validator("tool_name")
    @classmethod
    def _strip(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("tool name must not be blank")
        return value


class ToolDetail(BaseModel):
    criterion_name: str
    value: str


class GetToolDetailsOutput(BaseModel):
    tool_name: str
    overview: str
    details: List[ToolDetail] = Field(default_factory=list)


class GenerateToolAnalysisInput(GetToolDetailsInput):
    pass


class ToolAnalysis(BaseModel):
    tool_name: str
    strengths: str
    weaknesses: str
    application_types: List[str] = Field(default_factory=list)
    test_types: List[str] = Field(default_factory=list)


class ChatMessage(BaseModel):
    role: ChatRole
    content: str


class SupportChatInput(BaseModel):
    messages: List[ChatMessage] = Field(..., min_length=1)


class SupportChatOutput(BaseModel):
    response: str


class Trend(BaseModel):
    category: str
    description: str
    popular_tools: List[str] = Field(default_factory=list)
    emerging_tools: List[str] = Field(default_factory=list)


class DocumentationLink(BaseModel):
    tool_name: str
    url: str
    label: str


class RoiPoint(BaseModel):
    month: str
    roi: int = Field(..., ge=0, le=100)


class RoiSeries(BaseModel):
    tool_name: str
    points: List[RoiPoint] = Field(default_factory=list)


class RoiProjectionRequest(BaseModel):
    recommendations: List[ToolRecommendation] = Field(..., min_length=1)


class RecommendAndCompareResponse(BaseModel):
    recommendations: List[ToolRecommendation] = Field(default_factory=list)
    comparison: CompareToolsOutput
    analyses: Dict[str, ToolAnalysis] = Field(default_factory=dict)


class ComparisonExportRequest(BaseModel):
    comparison: CompareToolsOutput
    tool_names: List[str] = Field(default_factory=list, description="Column order; defaults to overview order")
    recommendations: List[ToolRecommendation] = Field(default_factory=list, description="Adds a score row when present")
