from typing import List
from fastapi import APIRouter, Depends, HTTPException, status
import structlog

from app.models.schemas import (
    CompareToolsInput, CompareToolsOutput,
    DocumentationLink,
    EstimateEffortInput, EstimateEffortOutput,
    GenerateToolAnalysisInput, ToolAnalysis,
    GetToolDetailsInput, GetToolDetailsOutput,
    RecommendAndCompareResponse,
    RecommendToolsInput, RecommendToolsOutput,
    RoiProjectionRequest, RoiSeries,
    Trend,
)
from app.services.report_service import ReportService
from app.services.tool_advisor_service import ToolAdvisorError, ToolAdvisorService, calculate_baseline_effort
from app.core.dependencies import get_report_service, get_tool_advisor_service

logger = structlog.get_logger()

router = APIRouter(prefix="/tools", tags=["tools"])


@router.post("/recommend", response_model=RecommendToolsOutput)
async def recommend_tools(
    request: RecommendToolsInput,
    service: ToolAdvisorService = Depends(get_tool_advisor_service)
):
    """Recommend up to three tools for the given filter criteria"""
    try:
        return await service.recommend_tools(request)
    except ToolAdvisorError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))


@router.post("/recommend-and-compare", response_model=RecommendAndCompareResponse)
async def recommend_and_compare(
    request: RecommendToolsInput,
    service: ToolAdvisorService = Depends(get_tool_advisor_service)
):
    """Recommend tools, then compare and analyse exactly those tools"""
    try:
        return await service.recommend_and_compare(request)
    except ToolAdvisorError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))


@router.post("/compare", response_model=CompareToolsOutput)
async def compare_tools(
    request: CompareToolsInput,
    service: ToolAdvisorService = Depends(get_tool_advisor_service)
):
    """Side-by-side comparison; falls back to placeholder cells on failure"""
    logger.info("Comparing tools", tools=request.tool_names)
    return await service.compare_tools(request)


@router.post("/details", response_model=GetToolDetailsOutput)
async def get_tool_details(
    request: GetToolDetailsInput,
    service: ToolAdvisorService = Depends(get_tool_advisor_service)
):
    return await service.get_tool_details(request)


@router.post("/analysis", response_model=ToolAnalysis)
async def generate_tool_analysis(
    request: GenerateToolAnalysisInput,
    service: ToolAdvisorService = Depends(get_tool_advisor_service)
):
    return await service.generate_tool_analysis(request)


@router.post("/estimate-effort", response_model=EstimateEffortOutput)
async def estimate_effort(
    request: EstimateEffortInput,
    service: ToolAdvisorService = Depends(get_tool_advisor_service)
):
    """AI effort estimate in person-days"""
    try:
        return await service.estimate_effort(request)
    except ToolAdvisorError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))


@router.post("/estimate-effort/baseline", response_model=EstimateEffortOutput)
async def estimate_effort_baseline(request: EstimateEffortInput):
    """Rule-based effort estimate; never calls the model"""
    return calculate_baseline_effort(request)


@router.get("/catalog", response_model=List[str])
async def get_tool_catalog(service: ToolAdvisorService = Depends(get_tool_advisor_service)):
    return service.tool_catalog()


@router.get("/trends", response_model=List[Trend])
async def get_trends(service: ToolAdvisorService = Depends(get_tool_advisor_service)):
    return service.trends()


@router.get("/{tool_name}/documentation", response_model=DocumentationLink)
async def get_documentation_link(
    tool_name: str,
    service: ToolAdvisorService = Depends(get_tool_advisor_service)
):
    link = service.documentation_links([tool_name])[tool_name]
    if link is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No documentation link for this tool"
        )
    return link


@router.post("/roi-projection", response_model=List[RoiSeries])
async def roi_projection(
    request: RoiProjectionRequest,
    reports: ReportService = Depends(get_report_service)
):
    """Illustrative six-month ROI curve per tool"""
    return reports.roi_projection(request.recommendations)
