import asyncio
import json
import re
from abc import abstractmethod
from typing import Any, Dict, List, Optional, Sequence, Tuple

import structlog

from app.config.settings import settings
from app.models.schemas import (
    ChatMessage,
    ChatRole,
    CompareToolsInput,
    CompareToolsOutput,
    ComparisonCriterion,
    EstimateEffortInput,
    EstimateEffortOutput,
    GenerateToolAnalysisInput,
    GetToolDetailsInput,
    GetToolDetailsOutput,
    RecommendToolsInput,
    RecommendToolsOutput,
    SupportChatInput,
    SupportChatOutput,
    ToolAnalysis,
    ToolDetail,
    ToolRecommendation,
)
from app.repositories.implementations import prompts
from app.repositories.interfaces.ai_service import AIServiceError, IAIService

logger = structlog.get_logger()

MISSING_CELL = "N/A"
MISSING_OVERVIEW = "No overview available."
MISSING_DETAILS = ToolDetail(criterion_name="Analysis", value="No detailed analysis was generated.")
# Fractional spread used when the model omits the min/max range
EFFORT_RANGE_SPREAD = 0.10


def extract_json(content: str) -> Optional[str]:
    """Extract a single JSON object from model output.

    Handles code fences and finds the first balanced JSON object.
    """
    if not content:
        return None
    cleaned = content.strip()
    if cleaned.startswith("```"):
        # drop the opening fence line (``` or ```json)
        cleaned = cleaned.split("\n", 1)[1] if "\n" in cleaned else ""
        if cleaned.rstrip().endswith("```"):
            cleaned = cleaned.rstrip()[:-3]
    cleaned = cleaned.strip()

    m = re.search(r"\{[\s\S]*\}", cleaned)
    if m:
        try:
            json.loads(m.group())
            return m.group()
        except ValueError:
            pass

    # Balanced-brace scan for replies with trailing prose
    depth = 0
    start = -1
    for i, ch in enumerate(cleaned):
        if ch == "{":
            if depth == 0:
                start = i
            depth += 1
        elif ch == "}" and depth > 0:
            depth -= 1
            if depth == 0 and start != -1:
                candidate = cleaned[start:i + 1]
                try:
                    json.loads(candidate)
                    return candidate
                except ValueError:
                    start = -1
    return None


def load_json_object(content: str) -> Dict[str, Any]:
    extracted = extract_json(content)
    if not extracted:
        raise AIServiceError("Model response did not contain a JSON object")
    return json.loads(extracted)


def _pick(data: Dict[str, Any], *keys: str) -> Any:
    for key in keys:
        value = data.get(key)
        if value is not None:
            return value
    return None


def _as_float(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        m = re.search(r"-?\d+(?:\.\d+)?", value)
        if m:
            return float(m.group())
    return None


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, list):
        return "\n".join(str(v) for v in value)
    return str(value).strip()


def _as_str_list(value: Any) -> List[str]:
    if isinstance(value, list):
        return [str(v).strip() for v in value if str(v).strip()]
    if isinstance(value, str) and value.strip():
        return [part.strip() for part in value.split(",") if part.strip()]
    return []


def reshape_recommendations(data: Dict[str, Any]) -> RecommendToolsOutput:
    recommendations: List[ToolRecommendation] = []
    for item in data.get("recommendations") or []:
        if not isinstance(item, dict):
            continue
        name = _as_text(_pick(item, "toolName", "tool_name", "name"))
        if not name:
            continue
        score = _as_float(item.get("score"))
        score = 0.0 if score is None else score
        recommendations.append(
            ToolRecommendation(
                tool_name=name,
                score=int(round(max(0.0, min(100.0, score)))),
                justification=_as_text(item.get("justification")),
            )
        )
    return RecommendToolsOutput(recommendations=recommendations)


def tool_map(raw: Any, value_keys: Tuple[str, ...]) -> Dict[str, str]:
    """Turn ``[{toolName, value}]`` (or an existing mapping) into ``{tool: value}``."""
    result: Dict[str, str] = {}
    if isinstance(raw, dict):
        for key, value in raw.items():
            result[str(key)] = _as_text(value)
        return result
    if isinstance(raw, list):
        for item in raw:
            if not isinstance(item, dict):
                continue
            name = _as_text(_pick(item, "toolName", "tool_name", "tool", "name"))
            if name:
                result[name] = _as_text(_pick(item, *value_keys))
    return result


def align_to_tools(values: Dict[str, str], tool_names: Sequence[str], default: str) -> Dict[str, str]:
    """Key ``values`` by exactly the requested tool names, filling gaps with ``default``."""
    lowered = {key.strip().lower(): value for key, value in values.items()}
    aligned: Dict[str, str] = {}
    for name in tool_names:
        value = values.get(name) or lowered.get(name.strip().lower())
        aligned[name] = value if value else default
    return aligned


def reshape_comparison(data: Dict[str, Any], tool_names: Sequence[str]) -> CompareToolsOutput:
    table: List[ComparisonCriterion] = []
    for row in _pick(data, "comparisonTable", "comparison_table") or []:
        if not isinstance(row, dict):
            continue
        criterion = _as_text(_pick(row, "criterionName", "criterion_name", "criterion"))
        if not criterion:
            continue
        values = tool_map(_pick(row, "toolValues", "tool_values"), ("value", "text"))
        table.append(
            ComparisonCriterion(
                criterion_name=criterion,
                tool_values=align_to_tools(values, tool_names, MISSING_CELL),
            )
        )
    overviews = tool_map(_pick(data, "toolOverviews", "tool_overviews"), ("overview", "value", "text"))
    return CompareToolsOutput(
        comparison_table=table,
        tool_overviews=align_to_tools(overviews, tool_names, MISSING_OVERVIEW),
    )


def reshape_effort(data: Dict[str, Any], request: EstimateEffortInput) -> EstimateEffortOutput:
    estimate = _as_float(_pick(data, "estimatedEffortDays", "estimated_effort_days"))
    if estimate is None:
        raise AIServiceError("Effort estimate missing from model response")
    estimate = round(max(0.0, estimate), 2)

    low = _as_float(_pick(data, "effortDaysMin", "effort_days_min"))
    high = _as_float(_pick(data, "effortDaysMax", "effort_days_max"))
    if low is None:
        low = estimate * (1 - EFFORT_RANGE_SPREAD)
    if high is None:
        high = estimate * (1 + EFFORT_RANGE_SPREAD)
    low = round(max(0.0, min(low, estimate)), 2)
    high = round(max(high, estimate), 2)

    confidence = _as_float(_pick(data, "confidenceScore", "confidence_score")) or 90
    return EstimateEffortOutput(
        estimated_effort_days=estimate,
        effort_days_min=low,
        effort_days_max=high,
        estimated_duration_days=round(estimate / request.qa_team_size, 2),
        explanation=_as_text(data.get("explanation")),
        confidence_score=int(max(90, min(100, round(confidence)))),
    )


def reshape_details(data: Dict[str, Any], tool_name: str) -> GetToolDetailsOutput:
    details: List[ToolDetail] = []
    for item in data.get("details") or []:
        if not isinstance(item, dict):
            continue
        criterion = _as_text(_pick(item, "criterionName", "criterion_name"))
        value = _as_text(item.get("value"))
        if criterion and value:
            details.append(ToolDetail(criterion_name=criterion, value=value))
    return GetToolDetailsOutput(
        tool_name=_as_text(_pick(data, "toolName", "tool_name")) or tool_name,
        overview=_as_text(data.get("overview")),
        details=details or [MISSING_DETAILS],
    )


def reshape_analysis(data: Dict[str, Any], tool_name: str) -> ToolAnalysis:
    return ToolAnalysis(
        tool_name=_as_text(_pick(data, "toolName", "tool_name")) or tool_name,
        strengths=_as_text(data.get("strengths")),
        weaknesses=_as_text(data.get("weaknesses")),
        application_types=_as_str_list(_pick(data, "applicationTypes", "application_types")),
        test_types=_as_str_list(_pick(data, "testTypes", "test_types")),
    )


def split_conversation(messages: Sequence[ChatMessage]) -> Tuple[List[ChatMessage], str]:
    """Separate prior history from the new user prompt (the last message)."""
    if not messages or messages[-1].role != ChatRole.USER:
        raise ValueError("The last message in the history must be from the user.")
    return list(messages[:-1]), messages[-1].content


class BaseLLMService(IAIService):
    """Prompt rendering and response reshaping shared by every provider.

    Subclasses only implement the two blocking transport calls; they run in
    the default executor so the event loop stays free.
    """

    provider = "base"

    @abstractmethod
    def _complete_json(self, prompt: str, temperature: float) -> str:
        """Send a single prompt in JSON mode and return the raw reply text"""
        pass

    @abstractmethod
    def _complete_chat(self, system: str, history: List[ChatMessage], message: str, temperature: float) -> str:
        """Continue a conversation and return the reply text"""
        pass

    async def _generate(self, operation: str, prompt: str, temperature: float) -> Dict[str, Any]:
        def sync_call():
            return self._complete_json(prompt, temperature)

        try:
            text = await asyncio.get_event_loop().run_in_executor(None, sync_call)
        except AIServiceError:
            raise
        except Exception as e:
            logger.error("Model call failed", provider=self.provider, operation=operation, error=str(e))
            raise AIServiceError(f"{self.provider} call failed: {e}") from e

        if not text:
            raise AIServiceError(f"AI returned an empty response for {operation}")
        try:
            data = load_json_object(text)
        except (AIServiceError, ValueError) as e:
            logger.warning("Unparseable model response", operation=operation, preview=text[:200])
            raise AIServiceError(f"Invalid JSON response for {operation}: {e}") from e
        logger.debug("Model response parsed", operation=operation, keys=list(data.keys()))
        return data

    async def recommend_tools(self, request: RecommendToolsInput) -> RecommendToolsOutput:
        data = await self._generate(
            "recommend_tools",
            prompts.build_recommendation_prompt(request),
            settings.recommendation_temperature,
        )
        return reshape_recommendations(data)

    async def compare_tools(self, request: CompareToolsInput) -> CompareToolsOutput:
        data = await self._generate(
            "compare_tools",
            prompts.build_comparison_prompt(request),
            settings.comparison_temperature,
        )
        return reshape_comparison(data, request.tool_names)

    async def estimate_effort(self, request: EstimateEffortInput) -> EstimateEffortOutput:
        data = await self._generate(
            "estimate_effort",
            prompts.build_effort_prompt(request),
            settings.effort_temperature,
        )
        return reshape_effort(data, request)

    async def get_tool_details(self, request: GetToolDetailsInput) -> GetToolDetailsOutput:
        data = await self._generate(
            "get_tool_details",
            prompts.build_details_prompt(request),
            settings.details_temperature,
        )
        return reshape_details(data, request.tool_name)

    async def generate_tool_analysis(self, request: GenerateToolAnalysisInput) -> ToolAnalysis:
        data = await self._generate(
            "generate_tool_analysis",
            prompts.build_analysis_prompt(request),
            settings.analysis_temperature,
        )
        return reshape_analysis(data, request.tool_name)

    async def support_chat(self, request: SupportChatInput) -> SupportChatOutput:
        history, message = split_conversation(request.messages)

        def sync_call():
            return self._complete_chat(
                prompts.CHAT_SYSTEM_PROMPT, history, message, settings.chat_temperature
            )

        try:
            text = await asyncio.get_event_loop().run_in_executor(None, sync_call)
        except AIServiceError:
            raise
        except Exception as e:
            logger.error("Chat call failed", provider=self.provider, error=str(e))
            raise AIServiceError(f"{self.provider} chat failed: {e}") from e

        if not text or not text.strip():
            raise AIServiceError("AI failed to generate a response.")
        return SupportChatOutput(response=text.strip())
