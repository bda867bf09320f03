"""Hand-authored reference data.

Used as fallback content when the model is unavailable and as supplementary
display data (documentation links, trend card, release notes, filter
options). Lookups that take a tool name are keyed by the lowercase name.
"""

from typing import Dict, List, Optional, Tuple

from app.models.schemas import DocumentationLink, ToolAnalysis, ToolRecommendation, Trend


# Display names of every tool the comparison table can switch between
TOOL_CATALOG: List[str] = [
    "ACCELQ", "Appium", "Applitools", "BrowserStack Automate", "Cucumber",
    "Cypress", "Detox", "Eggplant", "Espresso", "Functionize", "Gatling",
    "Gauge", "Ghost Inspector", "Grafana k6", "JMeter", "Karate DSL",
    "Katalon Studio", "Kobiton", "LambdaTest", "Leapwork", "Mabl",
    "Micro Focus UFT One", "Newman", "Perfecto", "Percy", "Playwright",
    "Postman", "Puppeteer", "Ranorex Studio", "Reflect", "Rest Assured",
    "Robot Framework", "Sahi Pro", "Sauce Labs", "Selenium", "SoapUI",
    "SpecFlow", "TestCafe", "TestComplete", "Testim", "TestSigma",
    "Tricentis Tosca", "WebdriverIO", "WinAppDriver", "XCUITest",
    "ZeTA Automation",
]


LOCAL_TOOL_ANALYSIS: Dict[str, dict] = {
    "zeta automation": {
        "strengths": "High script reusability\nBroad automation coverage (UI, API, etc.)\nExcellent parallel execution support\nTemplate-based creation speed",
        "weaknesses": "Requires moderate Java and Maven knowledge\nIncludes the overhead of managing internal open-source infrastructure",
        "application_types": ["Web", "API", "DB", "Security"],
        "test_types": ["UI Testing", "API Testing", "Security Testing"],
    },
    "functionize": {
        "strengths": "AI-powered self-healing capabilities dramatically reduce test maintenance\nVery fast test creation using natural language\nExcellent for testing highly dynamic applications",
        "weaknesses": "Can be a 'black box', making complex debugging difficult\nLess granular control compared to code-based frameworks\nSubscription cost may be a factor",
        "application_types": ["Web", "API"],
        "test_types": ["UI Testing", "API Testing", "E2E Testing"],
    },
    "playwright": {
        "strengths": "Reliable end-to-end testing across all modern browsers\nAuto-waits and reliable execution prevent flakiness\nPowerful tooling like Codegen, Trace Viewer, and Test Runner",
        "weaknesses": "Primarily focused on web applications\nCan have a steeper learning curve than codeless tools",
        "application_types": ["Web"],
        "test_types": ["E2E Testing", "API Testing", "Component Testing"],
    },
    "postman": {
        "strengths": "Comprehensive toolset for the entire API lifecycle\nUser-friendly interface for creating and testing requests\nStrong collaboration and documentation features",
        "weaknesses": "Can be resource-intensive\nUI testing capabilities are limited compared to specialized tools",
        "application_types": ["API"],
        "test_types": ["API Testing", "Integration Testing"],
    },
    "selenium": {
        "strengths": "Massive community support and extensive documentation\nSupports a wide range of programming languages\nHighly flexible and extensible for complex scenarios",
        "weaknesses": "Steeper learning curve; requires strong programming skills\nNo built-in reporting tools\nCan be prone to flaky tests without careful design",
        "application_types": ["Web"],
        "test_types": ["UI Testing", "Regression Testing", "E2E Testing"],
    },
    "cypress": {
        "strengths": "Excellent developer experience with real-time reloads\nPowerful debugging tools (time travel, snapshots)\nAll-in-one framework, less setup required",
        "weaknesses": "Only supports JavaScript/TypeScript\nLimited to single-browser instance testing within a single test run\nDoesn't support multiple tabs or iframes as easily as Playwright",
        "application_types": ["Web"],
        "test_types": ["E2E Testing", "Component Testing", "Integration Testing"],
    },
    "testcomplete": {
        "strengths": "Supports desktop, web, and mobile applications\nAI-powered object recognition for robust UI tests\nKeyword-driven and data-driven testing support",
        "weaknesses": "Primarily Windows-based for test creation\nCan be expensive for small teams\nUI can feel dated compared to modern tools",
        "application_types": ["Desktop", "Web", "Mobile"],
        "test_types": ["UI Testing", "Functional Testing", "Regression Testing"],
    },
    "ranorex studio": {
        "strengths": "Powerful object recognition for desktop and web\nCodeless test creation and full code-based flexibility\nExcellent for testing legacy desktop applications",
        "weaknesses": "Windows-only environment\nLicensing can be costly\nLess suited for pure API testing compared to specialized tools",
        "application_types": ["Desktop", "Web", "Mobile"],
        "test_types": ["UI Testing", "E2E Testing", "Regression Testing"],
    },
    "appium": {
        "strengths": "Open-source standard for mobile app automation\nSupports both iOS and Android native/hybrid apps\nUses standard WebDriver protocol, allowing language flexibility",
        "weaknesses": "Setup can be complex and time-consuming\nExecution can be slower than native frameworks (Espresso/XCUITest)\nDependent on OS and device updates",
        "application_types": ["Mobile"],
        "test_types": ["UI Testing", "Functional Testing"],
    },
    "katalon studio": {
        "strengths": "User-friendly interface for both beginners and experts\nBuilt-in keywords and templates for faster test creation\nSupports Web, API, Mobile, and Desktop testing",
        "weaknesses": "Can be slow and resource-heavy\nFree version has limitations, pushing users to paid tiers\nDebugging can be less intuitive than code-native tools",
        "application_types": ["Web", "API", "Mobile", "Desktop"],
        "test_types": ["UI Testing", "API Testing", "E2E Testing"],
    },
    "mabl": {
        "strengths": "AI-driven low-code test automation\nSelf-healing tests adapt to UI changes automatically\nExcellent for CI/CD integration and fast feedback",
        "weaknesses": "Less control for complex, customized test logic\nCloud-based, which may not suit all security requirements\nSubscription cost can be high",
        "application_types": ["Web"],
        "test_types": ["UI Testing", "E2E Testing", "Visual Testing"],
    },
    "testim": {
        "strengths": "AI-powered locators for stable tests\nFast test authoring with record-and-playback\nGood for cross-browser and responsive testing",
        "weaknesses": "Can be a \"black box\" for debugging\nPrimarily focused on web UI testing\nPricing based on test runs can become expensive",
        "application_types": ["Web"],
        "test_types": ["UI Testing", "E2E Testing", "Functional Testing"],
    },
    "cucumber": {
        "strengths": "Promotes collaboration with BDD (Behavior-Driven Development)\nPlain language specifications are easy for non-tech stakeholders to understand\nIntegrates well with other automation frameworks like Selenium",
        "weaknesses": "Adds an extra layer of abstraction which can be complex\nRequires discipline to maintain feature files\nNot a standalone testing tool; needs a driver like Selenium/Playwright",
        "application_types": ["Web", "API", "Mobile"],
        "test_types": ["Acceptance Testing", "BDD"],
    },
    "jmeter": {
        "strengths": "Powerful open-source tool for performance and load testing\nHighly extensible with plugins\nCan test a wide variety of protocols (HTTP, FTP, JDBC, etc.)",
        "weaknesses": "GUI can be resource-intensive; CLI mode is preferred for heavy loads\nSteep learning curve\nReporting capabilities are basic out-of-the-box",
        "application_types": ["API", "Web Services", "Web"],
        "test_types": ["Performance Testing", "Load Testing", "Stress Testing"],
    },
}


_DOCUMENTATION_URLS: Dict[str, Tuple[str, str]] = {
    "selenium": ("Selenium", "https://www.selenium.dev/documentation/"),
    "playwright": ("Playwright", "https://playwright.dev/docs/intro"),
    "cypress": ("Cypress", "https://docs.cypress.io/"),
    "appium": ("Appium", "https://appium.io/docs/en/latest/"),
    "postman": ("Postman", "https://learning.postman.com/docs/"),
    "testcomplete": ("TestComplete", "https://support.smartbear.com/testcomplete/docs/"),
    "katalon studio": ("Katalon Studio", "https://docs.katalon.com/"),
    "cucumber": ("Cucumber", "https://cucumber.io/docs/"),
    "jmeter": ("JMeter", "https://jmeter.apache.org/usermanual/index.html"),
    "webdriverio": ("WebdriverIO", "https://webdriver.io/docs/gettingstarted"),
    "robot framework": ("Robot Framework", "https://robotframework.org/robotframework/"),
    "winappdriver": ("WinAppDriver", "https://github.com/microsoft/WinAppDriver"),
    "puppeteer": ("Puppeteer", "https://pptr.dev/"),
    "testcafe": ("TestCafe", "https://testcafe.io/documentation/402635/getting-started"),
    "rest assured": ("Rest Assured", "https://rest-assured.io/"),
}


def local_analysis_for(tool_name: str) -> Optional[ToolAnalysis]:
    """Return the hand-authored analysis for a tool, keeping the caller's casing."""
    data = LOCAL_TOOL_ANALYSIS.get(tool_name.strip().lower())
    if data is None:
        return None
    return ToolAnalysis(tool_name=tool_name, **data)


def documentation_link_for(tool_name: str) -> Optional[DocumentationLink]:
    entry = _DOCUMENTATION_URLS.get(tool_name.strip().lower())
    if entry is None:
        return None
    display_name, url = entry
    return DocumentationLink(tool_name=tool_name, url=url, label=f"View {display_name} Docs")


# Curated answers that skip the model entirely
AI_ML_RECOMMENDATIONS: List[ToolRecommendation] = [
    ToolRecommendation(
        tool_name="Functionize",
        score=95,
        justification="A leading AI-powered platform for web testing that automates test creation and maintenance.",
    ),
    ToolRecommendation(
        tool_name="Mabl",
        score=92,
        justification="Uses AI for low-code test automation, offering intelligent, self-healing tests for web applications.",
    ),
    ToolRecommendation(
        tool_name="Testim",
        score=90,
        justification="AI-based test automation that speeds up authoring, execution, and maintenance of tests.",
    ),
]

WEB_UI_RECOMMENDATIONS: List[ToolRecommendation] = [
    ToolRecommendation(
        tool_name="Functionize",
        score=93,
        justification="Excellent for web UI testing with its AI-powered, low-code platform for rapid creation and maintenance.",
    ),
    ToolRecommendation(
        tool_name="Playwright",
        score=92,
        justification="Provides robust, reliable end-to-end testing for modern web apps across all major browsers.",
    ),
    ToolRecommendation(
        tool_name="Selenium",
        score=90,
        justification="A highly flexible and widely-used open-source framework for web browser automation with extensive community support.",
    ),
]

# Scores pinned regardless of what the model returns
SCORE_OVERRIDES: Dict[str, int] = {
    "functionize": 93,
    "playwright": 92,
    "selenium": 90,
}

COMPARISON_CRITERIA: List[Tuple[str, str]] = [
    ("Ease of Use", "Consider setup complexity, learning curve, and UI/UX if applicable."),
    ("Key Features", "Highlight 2-3 unique selling points or core functionalities."),
    ("Primary Use Case", "Specify typical applications (e.g., Web UI, Mobile Native, API, Performance)."),
    ("Strengths", "What does this tool do exceptionally well?"),
    ("Weaknesses", "What are its main limitations or drawbacks?"),
    ("Pricing Model", "Describe the general model (e.g., Open Source, Freemium, Subscription Tiers, Perpetual License). Avoid specific costs unless widely known and stable."),
    ("Community Support & Documentation", "Assess availability, quality, and activity of support channels and docs."),
    ("Best For", "Identify specific project types, team sizes, or scenarios where this tool excels."),
]

FALLBACK_COMPARISON_CRITERIA: List[str] = [
    "Initial Setup Time",
    "Maintenance Overhead",
    "Test Creation Speed",
    "Script Reusability",
    "Parallel Execution Support",
    "Test Case Creation Effort",
    "Skill Requirement",
    "Overall Automation Coverage",
    "Total Cost of Ownership",
]

DETAIL_CRITERIA: List[str] = [
    "Ideal Project & Use Case",
    "Technical Deep-Dive",
    "Best-Fit Team Profile",
    "Total Cost of Ownership Considerations",
]

TRENDS: List[Trend] = [
    Trend(
        category="AI in Testing",
        description="Increased adoption of AI/ML for test case generation, self-healing tests, and defect triaging.",
        popular_tools=["Testim", "Applitools", "Mabl"],
        emerging_tools=["Functionize", "GenAI Test Data Platforms"],
    ),
    Trend(
        category="Shift-Left & Shift-Right Testing",
        description="Emphasis on earlier testing in the SDLC and continuous monitoring in production environments.",
        popular_tools=["Cypress (Shift-Left)", "Datadog (Shift-Right)", "Sentry"],
        emerging_tools=["Observability Platforms with Test Hooks"],
    ),
    Trend(
        category="Codeless & Low-Code Automation",
        description="Growing demand for tools that reduce scripting efforts and empower non-technical testers.",
        popular_tools=["Katalon Studio", "ACCELQ", "Tosca"],
        emerging_tools=["Playwright Codegen improvements", "Visual Test Builders"],
    ),
]

# (field, label, [(value, option label), ...]) in sidebar order
FILTER_OPTIONS: List[Tuple[str, str, List[Tuple[str, str]]]] = [
    ("application_under_test", "Application Under Test", [
        ("all", "All Applications"),
        ("web", "Web Applications"),
        ("mobile", "Mobile Applications"),
        ("api", "API / Web Services"),
        ("desktop", "Desktop Applications"),
    ]),
    ("test_type", "Test Type", [
        ("all", "All Test Types"),
        ("ui", "UI Testing"),
        ("api", "API Testing"),
        ("performance", "Performance Testing"),
        ("security", "Security Testing"),
        ("unit", "Unit Testing"),
        ("integration", "Integration Testing"),
    ]),
    ("operating_system", "Operating System", [
        ("all", "All OS"),
        ("windows", "Windows"),
        ("macos", "MacOS"),
        ("linux", "Linux"),
        ("cross-platform", "Cross-platform"),
    ]),
    ("coding_requirement", "Coding Requirement", [
        ("any", "Any Requirement"),
        ("codeless", "Codeless"),
        ("low-code", "Low Code"),
        ("scripting", "Scripting Heavy"),
        ("ai-ml", "AI/ML Powered"),
    ]),
    ("coding_language", "Coding Language", [
        ("any", "Any Language"),
        ("javascript", "JavaScript / TypeScript"),
        ("python", "Python"),
        ("java", "Java"),
        ("csharp", "C#"),
        ("ruby", "Ruby"),
        ("other", "Other"),
    ]),
    ("pricing_model", "Pricing Model", [
        ("any", "Any Model"),
        ("open-source", "Open Source"),
        ("freemium", "Freemium"),
        ("subscription", "Subscription-based"),
        ("perpetual", "Perpetual License"),
    ]),
    ("reporting_analytics", "Reporting Analytics", [
        ("any", "Any Analytics"),
        ("basic", "Basic Reporting"),
        ("advanced", "Advanced Analytics & Dashboards"),
        ("real-time", "Real-time Monitoring"),
        ("integration", "Integration with BI Tools"),
    ]),
]

RELEASE_NOTES: Dict[str, object] = {
    "title": "Beacon - Release Notes",
    "highlights": [
        ("Dive Deeper, Faster", "The revamped Tool Comparison view lets you analyze features side-by-side and swap any column for another tool."),
        ("Find Your Perfect Match Instantly", "Tool Search returns a structured deep-dive profile for any automation tool."),
        ("Smarter Estimations", "The AI Effort Estimator takes your chosen automation tool into account and shows the rule-based baseline next to the AI estimate."),
        ("Maximize Your Returns", "The ROI projection chart compares the recommended tools over six months."),
        ("Export to CSV", "Download any comparison table as a spreadsheet-ready CSV file."),
    ],
    "fixes": [
        "Coding language filter stays available when 'AI/ML' is selected.",
        "Effort estimator accepts empty numeric fields and treats them as zero.",
        "Tool names in the comparison dropdowns always match the table columns.",
    ],
    "notes": [
        "Recommendations and comparisons are AI-generated and may require validation for critical decisions.",
        "When the AI service is unavailable, Beacon shows reference data so you can keep working.",
    ],
}
