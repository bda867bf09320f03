"""
Beacon Tool Navigator

FastAPI application that helps QA teams choose a test automation tool: it recommends
the three best-fitting tools for a set of filters, compares them side by side,
projects ROI and estimates automation effort.

Architecture Overview:
- Clean Architecture with clear separation of concerns
- Repository pattern for the AI provider (Gemini or OpenAI behind one interface)
- Dependency Injection for loose coupling
- Server-rendered pages plus a JSON API over the same service layer

Key Features:
- AI tool recommendations with curated shortcuts and score ranking rules
- Side-by-side comparison with column swapping and CSV export
- Per-tool strengths/weaknesses analysis and deep-dive tool search
- AI effort estimation next to a rule-based baseline
- Support chat widget
- Reference and mock data whenever the AI provider is unavailable
- Structured logging with structlog

Usage:
1. Create a .env file with GEMINI_API_KEY (or AI_PROVIDER=openai and OPENAI_API_KEY)
2. Install dependencies: pip install -e ".[test]"
3. Run the application: python main.py (or python start.py for development)
4. Open http://localhost:8000/ for the UI, http://localhost:8000/api/v1/docs for the API

API Endpoints:
- POST /api/v1/tools/recommend - Recommend up to three tools
- POST /api/v1/tools/recommend-and-compare - Recommend, compare and analyse
- POST /api/v1/tools/compare - Compare up to five tools
- POST /api/v1/tools/details - Deep-dive profile for one tool
- POST /api/v1/tools/analysis - Strengths and weaknesses for one tool
- POST /api/v1/tools/estimate-effort - AI effort estimate
- POST /api/v1/tools/estimate-effort/baseline - Rule-based effort estimate
- POST /api/v1/tools/roi-projection - Illustrative ROI curves
- GET /api/v1/tools/catalog, /api/v1/tools/trends, /api/v1/tools/{name}/documentation
- POST /api/v1/chat - Support chat
- POST /api/v1/exports/comparison.csv - Comparison table as CSV
- GET /api/v1/health - Health check

Architecture Components:

1. Controllers (app/api/routes/):
   - JSON routes and server-rendered pages
   - Input validation using Pydantic

2. Services (app/services/):
   - ToolAdvisorService: business rules and fallbacks around every AI call
   - ReportService: CSV export and ROI projection

3. Repositories (app/repositories/):
   - IAIService interface
   - Gemini and OpenAI implementations sharing prompt building and response reshaping

4. Models (app/models/):
   - Pydantic schemas for request/response
   - Hand-authored reference data

5. Core (app/core/):
   - Dependency injection, logging setup, per-tool TTL cache

6. Configuration (app/config/):
   - Environment-based settings
   - Type-safe configuration management
"""

__version__ = "2.0.0"
__author__ = "Team Chai"
__description__ = "AI-assisted test automation tool navigator"
