from pathlib import Path
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Form, Query, Request, status
from fastapi.responses import RedirectResponse
from fastapi.templating import Jinja2Templates
from pydantic import ValidationError
import structlog

from app.config.settings import settings
from app.models.reference_data import FILTER_OPTIONS, RELEASE_NOTES
from app.models.schemas import (
    CompareToolsInput,
    EstimateEffortInput,
    GetToolDetailsInput,
    RecommendToolsInput,
)
from app.services.report_service import ReportService, format_score, initials
from app.services.tool_advisor_service import ToolAdvisorError, ToolAdvisorService, calculate_baseline_effort
from app.core.dependencies import get_report_service, get_tool_advisor_service

logger = structlog.get_logger()

router = APIRouter(tags=["pages"], include_in_schema=False)

templates = Jinja2Templates(directory=str(Path(__file__).resolve().parents[2] / "templates"))
templates.env.filters["score"] = format_score
templates.env.filters["initials"] = initials

CONSENT_CHOICES = ("accepted", "rejected")
SEARCH_PROMPT = "Please enter a tool name to search."


def _page_context(request: Request, **extra: Any) -> Dict[str, Any]:
    context: Dict[str, Any] = {
        "app_version": settings.app_version,
        "api_prefix": settings.api_prefix,
        "consent": request.cookies.get(settings.consent_cookie_name),
        "filter_options": FILTER_OPTIONS,
    }
    context.update(extra)
    return context


def _set_cookie(response, name: str, value: str) -> None:
    response.set_cookie(
        key=name,
        value=value,
        max_age=settings.cookie_max_age_seconds,
        httponly=True,
        samesite="lax",
    )


def _as_count(value: Optional[str]) -> int:
    """Empty or non-numeric form fields count as zero."""
    try:
        return max(0, int(float(value))) if value not in (None, "") else 0
    except (ValueError, OverflowError):
        return 0


def _export_payload(comparison, tool_names: List[str], recommendations=None) -> Dict[str, Any]:
    """Body the CSV export button posts back to the exports endpoint"""
    return {
        "comparison": comparison.model_dump(),
        "tool_names": tool_names,
        "recommendations": [rec.model_dump() for rec in recommendations or []],
    }


def _validation_message(error: ValidationError) -> str:
    first = error.errors()[0]
    field = ".".join(str(part) for part in first.get("loc", ()))
    return f"{field}: {first.get('msg')}" if field else first.get("msg", "Invalid input")


@router.get("/")
async def landing(request: Request):
    acknowledged = request.cookies.get(settings.release_notes_cookie_name) == "true"
    return templates.TemplateResponse(
        request,
        "landing.html",
        _page_context(request, get_started_url="/navigator" if acknowledged else "/release-notes"),
    )


@router.get("/release-notes")
async def release_notes(request: Request):
    return templates.TemplateResponse(
        request,
        "release_notes.html",
        _page_context(request, notes=RELEASE_NOTES, version=settings.release_notes_version),
    )


@router.post("/release-notes/acknowledge")
async def acknowledge_release_notes():
    response = RedirectResponse(url="/navigator", status_code=status.HTTP_303_SEE_OTHER)
    _set_cookie(response, settings.release_notes_cookie_name, "true")
    return response


@router.post("/consent")
async def set_consent(request: Request, choice: str = Form(...), next_url: str = Form("/")):
    if choice not in CONSENT_CHOICES:
        choice = "rejected"
    # Only allow local redirects
    target = next_url if next_url.startswith("/") and not next_url.startswith("//") else "/"
    response = RedirectResponse(url=target, status_code=status.HTTP_303_SEE_OTHER)
    _set_cookie(response, settings.consent_cookie_name, choice)
    logger.info("Cookie consent recorded", choice=choice)
    return response


@router.get("/navigator")
async def navigator(
    request: Request,
    service: ToolAdvisorService = Depends(get_tool_advisor_service)
):
    return templates.TemplateResponse(
        request,
        "navigator.html",
        _page_context(
            request,
            filters=RecommendToolsInput(),
            trends=service.trends(),
            catalog=service.tool_catalog(),
        ),
    )


@router.post("/navigator")
async def navigator_results(
    request: Request,
    application_under_test: str = Form("all"),
    test_type: str = Form("all"),
    operating_system: str = Form("all"),
    coding_requirement: str = Form("any"),
    coding_language: str = Form("any"),
    pricing_model: str = Form("any"),
    reporting_analytics: str = Form("any"),
    service: ToolAdvisorService = Depends(get_tool_advisor_service),
    reports: ReportService = Depends(get_report_service)
):
    """Recommend, compare and analyse in one round trip and render the results"""
    filters = RecommendToolsInput(
        application_under_test=application_under_test or "all",
        test_type=test_type or "all",
        operating_system=operating_system or "all",
        coding_requirement=coding_requirement or "any",
        coding_language=coding_language or "any",
        pricing_model=pricing_model or "any",
        reporting_analytics=reporting_analytics or "any",
    )
    context = _page_context(
        request,
        filters=filters,
        trends=service.trends(),
        catalog=service.tool_catalog(),
    )

    try:
        result = await service.recommend_and_compare(filters)
    except ToolAdvisorError as e:
        context["error"] = str(e)
        return templates.TemplateResponse(request, "navigator.html", context)

    names = [rec.tool_name for rec in result.recommendations]
    series = reports.roi_projection(result.recommendations)
    context.update(
        recommendations=result.recommendations,
        analyses=result.analyses,
        comparison=result.comparison,
        compared_tools=names,
        scores={rec.tool_name: rec.score for rec in result.recommendations},
        documentation=service.documentation_links(names),
        export_payload=_export_payload(result.comparison, names, result.recommendations),
        roi_series=series,
        roi_rows=reports.roi_chart_rows(series),
        estimate_tool=names[0] if names else None,
    )
    return templates.TemplateResponse(request, "navigator.html", context)


@router.get("/navigator/compare")
async def compare_page(
    request: Request,
    tools: List[str] = Query(default=[]),
    service: ToolAdvisorService = Depends(get_tool_advisor_service)
):
    """Comparison table for an arbitrary set of tools (column swaps land here)"""
    names = [part.strip() for value in tools for part in value.split(",") if part.strip()]
    context = _page_context(
        request,
        filters=RecommendToolsInput(),
        trends=service.trends(),
        catalog=service.tool_catalog(),
    )
    try:
        compare_input = CompareToolsInput(tool_names=names)
    except ValidationError as e:
        context["error"] = f"Choose between one and five tools to compare. ({_validation_message(e)})"
        return templates.TemplateResponse(request, "navigator.html", context)

    comparison = await service.compare_tools(compare_input)
    context.update(
        comparison=comparison,
        compared_tools=compare_input.tool_names,
        scores={},
        documentation=service.documentation_links(compare_input.tool_names),
        export_payload=_export_payload(comparison, compare_input.tool_names),
    )
    return templates.TemplateResponse(request, "navigator.html", context)


@router.post("/navigator/estimate")
async def estimate_page(
    request: Request,
    automation_tool: Optional[str] = Form(None),
    complexity_low: Optional[str] = Form(None),
    complexity_medium: Optional[str] = Form(None),
    complexity_high: Optional[str] = Form(None),
    complexity_highly_complex: Optional[str] = Form(None),
    use_standard_framework: Optional[str] = Form(None),
    cicd_pipeline_integrated: Optional[str] = Form(None),
    qa_team_size: Optional[str] = Form(None),
    project_description: Optional[str] = Form(None),
    service: ToolAdvisorService = Depends(get_tool_advisor_service)
):
    context = _page_context(
        request,
        filters=RecommendToolsInput(),
        trends=service.trends(),
        catalog=service.tool_catalog(),
        estimate_tool=automation_tool,
    )
    try:
        estimate_input = EstimateEffortInput(
            automation_tool=automation_tool,
            complexity_low=_as_count(complexity_low),
            complexity_medium=_as_count(complexity_medium),
            complexity_high=_as_count(complexity_high),
            complexity_highly_complex=_as_count(complexity_highly_complex),
            use_standard_framework=use_standard_framework is not None,
            cicd_pipeline_integrated=cicd_pipeline_integrated is not None,
            qa_team_size=_as_count(qa_team_size) or 1,
            project_description=project_description,
        )
    except ValidationError as e:
        context["estimate_error"] = _validation_message(e)
        return templates.TemplateResponse(request, "navigator.html", context)

    context["estimate_input"] = estimate_input
    context["baseline"] = calculate_baseline_effort(estimate_input)
    try:
        context["estimate"] = await service.estimate_effort(estimate_input)
    except ToolAdvisorError as e:
        context["estimate_error"] = str(e)
    return templates.TemplateResponse(request, "navigator.html", context)


@router.get("/tools/{tool_name}")
async def tool_details_page(
    request: Request,
    tool_name: str,
    service: ToolAdvisorService = Depends(get_tool_advisor_service)
):
    try:
        details_input = GetToolDetailsInput(tool_name=tool_name)
    except ValidationError:
        return RedirectResponse(url="/search", status_code=status.HTTP_303_SEE_OTHER)

    details = await service.get_tool_details(details_input)
    links = service.documentation_links([details_input.tool_name])
    return templates.TemplateResponse(
        request,
        "tool_details.html",
        _page_context(
            request,
            query=details_input.tool_name,
            details=details,
            documentation=links[details_input.tool_name],
        ),
    )


@router.get("/search")
async def search_page(
    request: Request,
    q: Optional[str] = None,
    service: ToolAdvisorService = Depends(get_tool_advisor_service)
):
    """Tool search: a blank query asks for input instead of calling the model"""
    query = (q or "").strip()
    context = _page_context(request, query=query, details=None, documentation=None)
    if not query:
        if q is not None:
            context["search_error"] = SEARCH_PROMPT
        return templates.TemplateResponse(request, "tool_details.html", context)

    context["details"] = await service.get_tool_details(GetToolDetailsInput(tool_name=query))
    context["documentation"] = service.documentation_links([query])[query]
    return templates.TemplateResponse(request, "tool_details.html", context)
