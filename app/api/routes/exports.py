from fastapi import APIRouter, Depends
from fastapi.responses import Response

from app.models.schemas import ComparisonExportRequest
from app.services.report_service import ReportService
from app.core.dependencies import get_report_service

router = APIRouter(prefix="/exports", tags=["exports"])

CSV_FILENAME = "tool_comparison.csv"


@router.post("/comparison.csv")
async def export_comparison(
    request: ComparisonExportRequest,
    reports: ReportService = Depends(get_report_service)
):
    """Download a comparison table as CSV"""
    content = reports.comparison_to_csv(
        request.comparison,
        tool_names=request.tool_names or None,
        recommendations=request.recommendations or None,
    )
    return Response(
        content=content,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{CSV_FILENAME}"'},
    )
