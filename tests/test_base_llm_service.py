import json

import pytest

from app.models.schemas import (
    ChatMessage,
    CompareToolsInput,
    EstimateEffortInput,
    GenerateToolAnalysisInput,
    GetToolDetailsInput,
    RecommendToolsInput,
    SupportChatInput,
)
from app.repositories.implementations.base_llm_service import (
    BaseLLMService,
    extract_json,
    reshape_comparison,
    reshape_effort,
    split_conversation,
    tool_map,
)
from app.repositories.interfaces.ai_service import AIServiceError


class StubLLMService(BaseLLMService):
    """Returns canned text instead of calling a provider"""

    provider = "stub"

    def __init__(self, reply="", error=None):
        self.reply = reply
        self.error = error
        self.prompts = []
        self.chats = []

    def _complete_json(self, prompt, temperature):
        self.prompts.append((prompt, temperature))
        if self.error:
            raise self.error
        return self.reply

    def _complete_chat(self, system, history, message, temperature):
        self.chats.append((system, history, message))
        if self.error:
            raise self.error
        return self.reply


def test_extract_json_strips_code_fences():
    content = '```json\n{"a": 1}\n```'

    assert json.loads(extract_json(content)) == {"a": 1}


def test_extract_json_ignores_surrounding_prose():
    content = 'Here you go: {"a": {"b": 2}} Hope that helps! {not json}'

    assert json.loads(extract_json(content)) == {"a": {"b": 2}}


def test_extract_json_returns_none_without_object():
    assert extract_json("no json here") is None
    assert extract_json("") is None


@pytest.mark.asyncio
async def test_recommendations_are_reshaped():
    reply = json.dumps({"recommendations": [
        {"toolName": "Postman", "score": 88.6, "justification": "API focus"},
        {"toolName": "", "score": 70, "justification": "nameless"},
        {"toolName": "JMeter", "score": "140", "justification": "Load"},
    ]})
    service = StubLLMService(reply)

    result = await service.recommend_tools(RecommendToolsInput(test_type="performance"))

    assert [(r.tool_name, r.score) for r in result.recommendations] == [("Postman", 89), ("JMeter", 100)]
    prompt, temperature = service.prompts[0]
    assert "Test Type: performance" in prompt
    assert temperature == 0.4


@pytest.mark.asyncio
async def test_comparison_arrays_become_maps_keyed_by_requested_names():
    reply = json.dumps({
        "comparisonTable": [
            {"criterionName": "Ease of Use", "toolValues": [
                {"toolName": "cypress", "value": "Easy"},
                {"toolName": "Selenium", "value": "Harder"},
            ]},
            {"criterionName": "Pricing Model", "toolValues": [{"toolName": "Cypress", "value": "Open Source"}]},
        ],
        "toolOverviews": [{"toolName": "Cypress", "overview": "JS E2E."}],
    })
    service = StubLLMService(reply)

    result = await service.compare_tools(CompareToolsInput(tool_names=["Cypress", "Selenium"]))

    assert result.comparison_table[0].tool_values == {"Cypress": "Easy", "Selenium": "Harder"}
    assert result.comparison_table[1].tool_values == {"Cypress": "Open Source", "Selenium": "N/A"}
    assert result.tool_overviews == {"Cypress": "JS E2E.", "Selenium": "No overview available."}


def test_tool_map_accepts_existing_mapping():
    assert tool_map({"Cypress": "Easy"}, ("value",)) == {"Cypress": "Easy"}


def test_comparison_without_table_is_empty():
    result = reshape_comparison({}, ["Cypress"])

    assert result.comparison_table == []
    assert result.tool_overviews == {"Cypress": "No overview available."}


def test_effort_range_and_confidence_are_normalised():
    request = EstimateEffortInput(complexity_low=100, qa_team_size=4)

    result = reshape_effort({"estimatedEffortDays": 10, "explanation": "Base 6", "confidenceScore": 70}, request)

    assert result.effort_days_min == 9.0
    assert result.effort_days_max == 11.0
    assert result.estimated_duration_days == 2.5
    assert result.confidence_score == 90


def test_effort_range_always_contains_estimate():
    request = EstimateEffortInput(complexity_low=1)

    result = reshape_effort(
        {"estimatedEffortDays": "5.5 days", "effortDaysMin": 7, "effortDaysMax": 3, "confidenceScore": 120},
        request,
    )

    assert result.effort_days_min == 5.5
    assert result.effort_days_max == 5.5
    assert result.confidence_score == 100


def test_effort_without_estimate_is_an_error():
    with pytest.raises(AIServiceError):
        reshape_effort({"explanation": "?"}, EstimateEffortInput(complexity_low=1))


@pytest.mark.asyncio
async def test_effort_uses_low_temperature():
    service = StubLLMService('{"estimatedEffortDays": 1.2, "explanation": "x", "confidenceScore": 95}')

    result = await service.estimate_effort(EstimateEffortInput(complexity_medium=10))

    assert result.estimated_effort_days == 1.2
    assert service.prompts[0][1] == 0.1


@pytest.mark.asyncio
async def test_details_default_when_model_omits_details():
    service = StubLLMService('{"overview": "Browser automation."}')

    result = await service.get_tool_details(GetToolDetailsInput(tool_name="Puppeteer"))

    assert result.tool_name == "Puppeteer"
    assert result.details[0].criterion_name == "Analysis"
    assert result.details[0].value == "No detailed analysis was generated."


@pytest.mark.asyncio
async def test_analysis_accepts_comma_separated_types():
    reply = json.dumps({
        "toolName": "k6",
        "strengths": ["Scriptable in JS", "Cloud runs"],
        "weaknesses": "No browser UI",
        "applicationTypes": "API, Web",
        "testTypes": ["Load"],
    })
    service = StubLLMService(reply)

    result = await service.generate_tool_analysis(GenerateToolAnalysisInput(tool_name="Grafana k6"))

    assert result.tool_name == "k6"
    assert result.strengths == "Scriptable in JS\nCloud runs"
    assert result.application_types == ["API", "Web"]


@pytest.mark.asyncio
async def test_invalid_json_raises_ai_service_error():
    service = StubLLMService("I cannot help with that")

    with pytest.raises(AIServiceError, match="Invalid JSON response for recommend_tools"):
        await service.recommend_tools(RecommendToolsInput())


@pytest.mark.asyncio
async def test_empty_reply_raises_ai_service_error():
    service = StubLLMService("")

    with pytest.raises(AIServiceError, match="empty response"):
        await service.compare_tools(CompareToolsInput(tool_names=["Cypress"]))


@pytest.mark.asyncio
async def test_transport_errors_are_wrapped():
    service = StubLLMService(error=RuntimeError("connection reset"))

    with pytest.raises(AIServiceError, match="stub call failed: connection reset"):
        await service.recommend_tools(RecommendToolsInput())


def test_split_conversation_requires_user_last():
    messages = [ChatMessage(role="user", content="Hi"), ChatMessage(role="model", content="Hello")]

    with pytest.raises(ValueError, match="must be from the user"):
        split_conversation(messages)


@pytest.mark.asyncio
async def test_chat_passes_history_and_latest_message():
    service = StubLLMService("  Playwright is a good fit.  ")
    messages = [
        ChatMessage(role="user", content="Hi"),
        ChatMessage(role="model", content="Hello! How can I help?"),
        ChatMessage(role="user", content="Which tool for web?"),
    ]

    result = await service.support_chat(SupportChatInput(messages=messages))

    assert result.response == "Playwright is a good fit."
    system, history, message = service.chats[0]
    assert "Beacon" in system
    assert len(history) == 2
    assert message == "Which tool for web?"


@pytest.mark.asyncio
async def test_blank_chat_reply_is_an_error():
    service = StubLLMService("   ")

    with pytest.raises(AIServiceError, match="AI failed to generate a response."):
        await service.support_chat(SupportChatInput(messages=[ChatMessage(role="user", content="Hi")]))
