"""Prompt templates for the tool-advisor operations.

Each builder renders a complete prompt from a validated request. The JSON
shape each prompt asks for is what ``BaseLLMService`` parses.
"""

from app.models.reference_data import COMPARISON_CRITERIA, DETAIL_CRITERIA
from app.models.schemas import (
    CompareToolsInput,
    EstimateEffortInput,
    GenerateToolAnalysisInput,
    GetToolDetailsInput,
    RecommendToolsInput,
)


TOOL_PROFILES = """**Tool: ZeTA Automation**
- Best for: Enterprise-level projects needing unified testing across UI, API, DB, and Security.
- Application Under Test: Web, API, Desktop
- Test Type: UI, API, Security, Performance, Integration
- Operating System: Cross-platform
- Coding Requirement: Scripting Heavy
- Coding Language: Java
- Pricing Model: Open Source
- Key Features: High reusability, config-driven design, CI-ready, broad coverage.

**Tool: Functionize**
- Best for: Teams looking for rapid test creation and low maintenance through AI.
- Application Under Test: Web Applications
- Test Type: UI, End-to-End, Regression
- Operating System: Cross-platform (Cloud-based)
- Coding Requirement: Low Code, AI/ML
- Coding Language: N/A
- Pricing Model: Subscription-based
- Key Features: AI-powered test creation and maintenance, Self-healing tests, Cloud execution.

**Tool: TestComplete**
- Best for: Teams that need to automate UI tests for a wide range of desktop, web, and mobile technologies.
- Application Under Test: Desktop, Web, Mobile
- Test Type: UI, Keyword-driven, Data-driven
- Operating System: Windows
- Coding Requirement: Low Code & Scripting
- Coding Language: JavaScript, Python, VBScript, JScript, DelphiScript, C++Script, C#Script
- Pricing Model: Perpetual License / Subscription
- Key Features: AI-powered object recognition, record-and-playback, keyword-driven testing, cross-browser and device testing.

**Tool: Ranorex Studio**
- Best for: End-to-end testing of desktop, web, and mobile applications with a powerful object recognition engine.
- Application Under Test: Desktop, Web, Mobile
- Test Type: UI, End-to-End, Regression
- Operating System: Windows (for test creation), can test cross-platform.
- Coding Requirement: Low Code & Scripting
- Coding Language: C#, VB.NET
- Pricing Model: Perpetual License / Subscription
- Key Features: Codeless test creation, record-and-playback, powerful object spy, integrates with CI/CD.

**Tool: WinAppDriver (Windows Application Driver)**
- Best for: Automating native Windows (UWP, WinForms, WPF) applications on Windows 10/11.
- Application Under Test: Desktop
- Test Type: UI, Regression
- Operating System: Windows
- Coding Requirement: Scripting Heavy
- Coding Language: C#, Java, Python, JavaScript (via WebdriverIO)
- Pricing Model: Open Source
- Key Features: Microsoft-supported, based on WebDriver protocol, integrates with Appium.

**Tool: Selenium**
- Best for: Teams needing a flexible, free solution for cross-browser testing on multiple platforms.
- Application Under Test: Web
- Test Type: UI, Regression
- Operating System: Cross-platform
- Coding Requirement: Scripting Heavy
- Coding Language: Java, Python, C#, JavaScript, Ruby
- Pricing Model: Open Source
- Key Features: WebDriver API standard, large community, extensive integrations.

**Tool: Cypress**
- Best for: Developers and QA doing E2E testing of modern web applications.
- Application Under Test: Web
- Test Type: UI, End-to-End, Integration, Component
- Operating System: Cross-platform
- Coding Requirement: Scripting Heavy
- Coding Language: JavaScript, TypeScript
- Pricing Model: Open Source (with paid dashboard)
- Key Features: All-in-one testing framework, fast execution, excellent debugging, real-time reloads.

**Tool: Playwright**
- Best for: Reliable end-to-end testing of modern web apps across all major browsers.
- Application Under Test: Web
- Test Type: UI, End-to-End, API
- Operating System: Cross-platform
- Coding Requirement: Scripting Heavy
- Coding Language: JavaScript, TypeScript, Python, Java, C#
- Pricing Model: Open Source
- Key Features: Auto-waits, reliable execution, cross-browser support (Chromium, Firefox, WebKit), network interception."""


# Authoritative deep-dive profiles; keys are lowercase tool names
DETAIL_PROFILES = {
    "zeta automation": (
        "- Overview: A unified, open-source automation framework for high reusability and comprehensive test coverage across multiple application layers.\n"
        "- Ideal Project & Use Case: Enterprise-level projects requiring a single framework for UI, API, DB, and Security testing.\n"
        "- Technical Deep-Dive: Built on Java and Maven, using a utility-driven layer architecture. It promotes high script reusability and parallel execution.\n"
        "- Best-Fit Team Profile: Teams with moderate to strong Java skills who prefer a code-centric, configurable framework.\n"
        "- Total Cost of Ownership Considerations: Open-source (low licensing cost), but requires internal infrastructure management and skilled Java resources."
    ),
    "functionize": (
        "- Overview: An AI-powered testing platform for web applications that automates test creation and maintenance.\n"
        "- Ideal Project & Use Case: Fast-paced projects with dynamic web UIs where reducing test maintenance is critical.\n"
        "- Technical Deep-Dive: Uses AI and machine learning for element detection and self-healing tests. It's a cloud-based platform with a low-code/NLP interface.\n"
        "- Best-Fit Team Profile: Mixed-skill teams, including manual testers and BAs, who need to create and run tests quickly without extensive coding.\n"
        "- Total Cost of Ownership Considerations: High subscription-based SaaS model, but reduces costs related to script maintenance and flakiness."
    ),
    "selenium": (
        "- Overview: A highly flexible, open-source framework for web browser automation, renowned for its cross-platform and cross-language support. It's the de-facto standard for web UI testing.\n"
        "- Ideal Project & Use Case: Projects that require testing on a wide array of browser/OS combinations and where the team has strong programming skills to build and maintain a custom automation framework.\n"
        "- Technical Deep-Dive: Selenium operates on the WebDriver protocol, a W3C standard, enabling it to control browsers natively. Its architecture consists of Language Bindings, WebDriver, and Drivers for each browser. It does not include built-in test runners or assertion libraries, requiring integration with tools like TestNG, JUnit, or PyTest.\n"
        "- Best-Fit Team Profile: Experienced automation engineers proficient in languages like Java, C#, or Python who are comfortable building and maintaining testing infrastructure from the ground up.\n"
        "- Total Cost of Ownership Considerations: While open-source and free, TCO is driven by high engineering costs for framework development, maintenance, and the setup/management of a Selenium Grid for parallel execution."
    ),
    "playwright": (
        "- Overview: A modern and reliable end-to-end testing framework for web applications developed by Microsoft, supporting all major rendering engines.\n"
        "- Ideal Project & Use Case: Testing modern web applications (React, Vue, Angular) where speed, reliability, and powerful debugging are key. Excellent for applications with complex network interactions.\n"
        "- Technical Deep-Dive: Playwright communicates with browsers over the WebSocket protocol, offering more control than traditional WebDriver. Key features include auto-waits, network interception, multi-tab/context support, and powerful tooling like Codegen, Trace Viewer, and a built-in test runner.\n"
        "- Best-Fit Team Profile: Teams with JavaScript/TypeScript skills. It's well-suited for both developers and dedicated QA engineers who want a modern, all-in-one testing solution.\n"
        "- Total Cost of Ownership Considerations: Open-source and free. The all-in-one nature can reduce the setup and integration costs associated with more modular frameworks like Selenium."
    ),
    "cypress": (
        "- Overview: An all-in-one JavaScript-based end-to-end testing framework focused on making testing a fast, easy, and reliable experience for developers.\n"
        "- Ideal Project & Use Case: Component and E2E testing of modern web applications, especially for teams practicing TDD/BDD, where rapid feedback and debugging are critical.\n"
        "- Technical Deep-Dive: Cypress runs in the same run-loop as the application, giving it unique access to the DOM and network traffic. This architecture enables features like time-travel debugging and real-time reloads. It is an opinionated framework with its own test runner and assertion library.\n"
        "- Best-Fit Team Profile: Primarily front-end developers and QA engineers comfortable with JavaScript/TypeScript. Excellent for teams that want a batteries-included framework with minimal setup.\n"
        "- Total Cost of Ownership Considerations: The core framework is open-source. Optional paid services are available through Cypress Cloud for test parallelization, analytics, and debugging."
    ),
}

DISPLAY_NAMES = {
    "zeta automation": "ZeTA Automation",
    "functionize": "Functionize",
    "selenium": "Selenium",
    "playwright": "Playwright",
    "cypress": "Cypress",
}

CHAT_SYSTEM_PROMPT = (
    "You are an expert Test Automation Analyst and assistant for the TAO Digital Beacon application.\n"
    "Your goal is to help users select the best test automation tools for their needs.\n"
    "You can answer questions about tools, explain testing concepts, and guide users on how to use the Beacon application filters.\n"
    "Be friendly, concise, and helpful.\n"
    "Treat the curated profiles of \"ZeTA Automation\" and \"Functionize\" as your primary knowledge base for those tools.\n"
    "If you don't know the answer, say so politely."
)


def build_recommendation_prompt(request: RecommendToolsInput) -> str:
    return f"""You are an AI-powered tool recommendation engine for test automation.

Based on the following criteria, recommend the top 3 DISTINCT test automation tools. Ensure each recommended tool is unique.
Explain why each tool is a good fit based on the criteria, and provide a score between 0 and 100.
Your response MUST contain exactly three recommendations for three different tools.

Criteria:
Application Under Test: {request.application_under_test}
Test Type: {request.test_type}
Operating System: {request.operating_system}
Coding Requirement: {request.coding_requirement}
Coding Language: {request.coding_language}
Pricing Model: {request.pricing_model}
Reporting & Analytics Capabilities: {request.reporting_analytics}

Consider the following tool profiles when making recommendations:
{TOOL_PROFILES}

If a criterion is set to 'all', 'any', a generic placeholder like 'All Applications', or is not provided, consider it as not a strong preference or applicable to all options for that category.
Focus on tools that best match the specified criteria.

When 'Web Applications' is selected as the Application Under Test, you MUST prioritize tools with strong web automation capabilities like Selenium, Cypress, Playwright, and Functionize.
When 'API Testing' is selected, you should strongly consider tools like ZeTA Automation and others known for robust API capabilities.
When 'Desktop Applications' is selected as the Application Under Test, you MUST prioritize tools with strong desktop capabilities like ZeTA Automation, WinAppDriver, Ranorex Studio, and TestComplete.

Respond ONLY with valid JSON:
{{
  "recommendations": [
    {{"toolName": "string", "score": 0, "justification": "string"}}
  ]
}}"""


def build_comparison_prompt(request: CompareToolsInput) -> str:
    tools = "\n".join(f"- {name}" for name in request.tool_names)
    criteria = "\n".join(f"- {name}: {hint}" for name, hint in COMPARISON_CRITERIA)
    return f"""You are an expert Test Automation Analyst. Compare the following tools:
{tools}

Provide a detailed comparison based on these criteria. For each criterion and each tool, provide concise (1-3 sentences, suitable for a table cell) and factual information:
{criteria}

Also, provide a very brief (1-2 sentence) overall summary for each tool.

Respond ONLY with valid JSON:
{{
  "comparisonTable": [
    {{
      "criterionName": "exact criterion name as listed above",
      "toolValues": [{{"toolName": "exact tool name", "value": "comparison text"}}]
    }}
  ],
  "toolOverviews": [{{"toolName": "exact tool name", "overview": "1-2 sentence summary"}}]
}}

Ensure all requested criteria are present in "comparisonTable".
Ensure every provided tool name appears, spelled exactly as given, in each criterion's "toolValues" and in "toolOverviews".
Be objective and base your comparison on generally accepted knowledge about these tools.
If a tool is significantly weaker or stronger in a particular area, reflect that in the comparison."""


def build_effort_prompt(request: EstimateEffortInput) -> str:
    tool = request.automation_tool or "Not specified/Undecided"
    description = request.project_description or "No additional project description provided."
    return f"""You are an expert QA Project Manager specializing in test automation effort estimation.
Based on the provided project parameters, estimate the effort required in person-days.

Project Parameters:
- Automation Tool: {tool}
- Test Case Complexity:
  - Low: {request.complexity_low}
  - Medium: {request.complexity_medium}
  - High: {request.complexity_high}
  - Highly Complex: {request.complexity_highly_complex}
- Using Standard Framework: {"Yes" if request.use_standard_framework else "No"}
- CI/CD Integrated: {"Yes" if request.cicd_pipeline_integrated else "No"}
- QA Team Size (for calculating final duration, not total person-days): {request.qa_team_size}
- Project Description: {description}

Follow these steps for your calculation and explanation:
1. Calculate Base Estimate: use these multipliers per test case and show the calculation.
   - Low: 0.06 days/case
   - Medium: 0.12 days/case
   - High: 0.2 days/case
   - Highly Complex: 0.3 days/case
2. Apply Tool-Specific Adjustments:
   - If "Functionize" is the tool, apply a 15% reduction to the base estimate for its AI efficiency. State this adjustment clearly.
   - If "ZeTA Automation" is the tool, apply a 10% reduction for its template-driven approach. State this adjustment.
   - For other known script-heavy tools (Selenium, Playwright, Cypress), make no adjustment to the base estimate.
3. Apply Framework/CI-CD Adjustments:
   - If a standard framework is used, apply an additional 5% reduction to the current estimate. State this.
   - If CI/CD is integrated, add a fixed 2 person-days for initial setup overhead. State this.
4. Final Estimate & Explanation: sum all calculations to get "estimatedEffortDays", rounded to two decimal places. The explanation must walk through each step (Base Estimate, Tool Adjustment, Framework/CI-CD adjustments).
5. Range: give "effortDaysMin" and "effortDaysMax" as a realistic range around the final estimate.
6. Confidence Score: between 90 and 100, based on how many parameters were provided. If a tool and all complexities are given, confidence should be high (95-98).

If the total number of test cases is 0, "estimatedEffortDays" must be 0, the explanation should state that no test cases were provided, and the confidence score should be 100.
Do not factor the QA team size into "estimatedEffortDays"; it is context only.

Respond ONLY with valid JSON:
{{
  "estimatedEffortDays": 0.0,
  "effortDaysMin": 0.0,
  "effortDaysMax": 0.0,
  "explanation": "string",
  "confidenceScore": 95
}}"""


def build_details_prompt(request: GetToolDetailsInput) -> str:
    profiles = "\n\n".join(
        f'If the tool is "{DISPLAY_NAMES[key]}", use the following information as the primary source of truth for its profile:\n{text}'
        for key, text in DETAIL_PROFILES.items()
    )
    criteria = "\n".join(f'- "{name}"' for name in DETAIL_CRITERIA)
    return f"""You are a Principal Test Automation Architect providing a detailed analysis for the tool: {request.tool_name}.

{profiles}

Your analysis must be comprehensive and well-structured.

For the "details" array in the output, create a distinct object for each of the following criteria. The "criterionName" must be exactly as listed below:
{criteria}

For each criterion, provide a comprehensive, well-structured narrative in its "value" field. Use newline characters for paragraph breaks where appropriate. Do not use markdown formatting like **bolding** or lists.

The "overview" field should remain a concise 1-2 sentence summary.

Respond ONLY with valid JSON:
{{
  "toolName": "string",
  "overview": "string",
  "details": [{{"criterionName": "string", "value": "string"}}]
}}"""


def build_analysis_prompt(request: GenerateToolAnalysisInput) -> str:
    return f"""You are an expert QA lead specializing in test automation tools.

Analyze the tool below and summarize its strengths and weaknesses, one point per line.
Include the canonical tool name if you normalize it, plus the application types and test types it covers.

Tool Name: {request.tool_name}

Respond ONLY with valid JSON:
{{
  "toolName": "string",
  "strengths": "string",
  "weaknesses": "string",
  "applicationTypes": ["string"],
  "testTypes": ["string"]
}}"""
