import csv
import io
import random
from typing import Dict, List, Optional, Sequence

import structlog

from app.models.schemas import (
    CompareToolsOutput,
    RoiPoint,
    RoiSeries,
    ToolRecommendation,
)

logger = structlog.get_logger()

ROI_MONTHS = ["M0", "M1", "M2", "M3", "M4", "M5", "M6"]
ROI_GROWTH_FACTORS = [12, 10, 8, 13, 11, 9]
ROI_JITTER = 4


def format_score(score: Optional[float]) -> str:
    """Render a 0-100 suitability score the way the cards show it, e.g. ``9.3/10``."""
    if score is None:
        return "N/A"
    return f"{score / 10:.1f}/10"


def initials(tool_name: str) -> str:
    words = [w for w in tool_name.replace("-", " ").split() if w]
    if not words:
        return "?"
    if len(words) == 1:
        return words[0][:2].upper()
    return (words[0][0] + words[1][0]).upper()


def _clamp(value: float, low: float = 0, high: float = 100) -> float:
    return max(low, min(high, value))


class ReportService:
    """Derived views over recommendation and comparison results"""

    def comparison_to_csv(
        self,
        comparison: CompareToolsOutput,
        tool_names: Optional[Sequence[str]] = None,
        recommendations: Optional[Sequence[ToolRecommendation]] = None,
    ) -> str:
        """Render the comparison table as CSV.

        Columns are ``Parameters`` followed by one column per tool. A score
        row is added when recommendations are supplied, then the overview
        row, then one row per criterion. Missing cells are written as ``N/A``.
        """
        names = list(tool_names or comparison.tool_overviews.keys())
        if not names and comparison.comparison_table:
            names = list(comparison.comparison_table[0].tool_values.keys())

        buffer = io.StringIO()
        writer = csv.writer(buffer)
        writer.writerow(["Parameters"] + names)

        if recommendations:
            scores = {rec.tool_name.lower(): rec.score for rec in recommendations}
            writer.writerow(
                ["Score"] + [format_score(scores.get(name.lower())) for name in names]
            )

        writer.writerow(["Overview"] + [comparison.tool_overviews.get(name, "N/A") for name in names])
        for row in comparison.comparison_table:
            writer.writerow(
                [row.criterion_name] + [row.tool_values.get(name, "N/A") for name in names]
            )

        logger.info("Comparison exported", tools=names, rows=len(comparison.comparison_table))
        return buffer.getvalue()

    def roi_projection(self, recommendations: Sequence[ToolRecommendation]) -> List[RoiSeries]:
        """Illustrative six-month ROI curve per recommended tool.

        Each tool grows linearly at its own base rate plus ``score / 50``.
        The jitter is seeded from the tool names so the same recommendations
        always draw the same chart.
        """
        rng = random.Random("|".join(rec.tool_name.lower() for rec in recommendations))
        series: List[RoiSeries] = []
        for tool_index, rec in enumerate(recommendations):
            growth = ROI_GROWTH_FACTORS[tool_index % len(ROI_GROWTH_FACTORS)]
            influence = rec.score / 50
            points = []
            for month_index, month in enumerate(ROI_MONTHS):
                roi = month_index * (growth + influence) + rng.uniform(-ROI_JITTER, ROI_JITTER)
                points.append(RoiPoint(month=month, roi=int(round(_clamp(roi)))))
            series.append(RoiSeries(tool_name=rec.tool_name, points=points))
        return series

    def roi_chart_rows(self, series: Sequence[RoiSeries]) -> List[Dict[str, object]]:
        """Pivot ROI series into one row per month for the chart"""
        rows: List[Dict[str, object]] = []
        for i, month in enumerate(ROI_MONTHS):
            row: Dict[str, object] = {"month": month}
            for s in series:
                if i < len(s.points):
                    row[s.tool_name] = s.points[i].roi
            rows.append(row)
        return rows
