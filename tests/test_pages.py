from app.models.schemas import EstimateEffortOutput
from app.repositories.interfaces.ai_service import AIServiceError


def test_landing_sends_new_users_to_release_notes(test_client):
    response = test_client.get("/")

    assert response.status_code == 200
    assert "Get Started" in response.text
    assert 'id="get-started" href="/release-notes"' in response.text


def test_landing_skips_acknowledged_release_notes(test_client):
    test_client.cookies.set("release_notes_acknowledged_v2.0", "true")

    response = test_client.get("/")

    assert 'id="get-started" href="/navigator"' in response.text


def test_release_notes_page(test_client):
    response = test_client.get("/release-notes")

    assert response.status_code == 200
    assert "Beacon - Release Notes" in response.text
    assert "Export to CSV" in response.text


def test_acknowledge_release_notes_sets_cookie(test_client):
    response = test_client.post("/release-notes/acknowledge", follow_redirects=False)

    assert response.status_code == 303
    assert response.headers["location"] == "/navigator"
    assert "release_notes_acknowledged_v2.0=true" in response.headers["set-cookie"]


def test_consent_banner_until_choice_made(test_client):
    assert "consent-banner" in test_client.get("/").text

    response = test_client.post(
        "/consent", data={"choice": "accepted", "next_url": "/navigator"}, follow_redirects=False
    )

    assert response.status_code == 303
    assert response.headers["location"] == "/navigator"
    assert "cookie_consent_preference=accepted" in response.headers["set-cookie"]
    test_client.cookies.set("cookie_consent_preference", "accepted")
    assert "consent-banner" not in test_client.get("/").text


def test_consent_only_redirects_locally(test_client):
    response = test_client.post(
        "/consent", data={"choice": "maybe", "next_url": "https://example.com"}, follow_redirects=False
    )

    assert response.headers["location"] == "/"
    assert "cookie_consent_preference=rejected" in response.headers["set-cookie"]


def test_navigator_form(test_client):
    response = test_client.get("/navigator")

    assert response.status_code == 200
    assert "Find tools" in response.text
    assert "AI/ML Powered" in response.text
    assert "Shift-Left &amp; Shift-Right Testing" in response.text


def test_navigator_results(test_client):
    response = test_client.post("/navigator", data={"test_type": "ui"})

    assert response.status_code == 200
    text = response.text
    assert "Functionize" in text
    assert "9.3/10" in text
    assert "View Playwright Docs" in text
    # compare_tools returned nothing, so placeholder rows are rendered
    assert "Initial Setup Time" in text
    assert "Projected ROI" in text
    assert 'id="export-payload"' in text


def test_navigator_shows_error_toast(test_client, fake_ai):
    fake_ai.errors["recommend_tools"] = AIServiceError("quota exceeded")

    response = test_client.post("/navigator", data={"application_under_test": "api"})

    assert response.status_code == 200
    assert "Failed to get tool recommendations. quota exceeded" in response.text
    assert "Projected ROI" not in response.text


def test_compare_page_accepts_repeated_and_comma_separated_tools(test_client, fake_ai):
    repeated = test_client.get("/navigator/compare", params=[("tools", "Cypress"), ("tools", "Selenium")])
    combined = test_client.get("/navigator/compare", params={"tools": "Cypress,Selenium"})

    assert "Data temporarily unavailable." in repeated.text
    assert [r.tool_names for r in fake_ai.called("compare_tools")] == [
        ["Cypress", "Selenium"], ["Cypress", "Selenium"],
    ]
    assert combined.status_code == 200


def test_compare_page_without_tools(test_client, fake_ai):
    response = test_client.get("/navigator/compare")

    assert "Choose between one and five tools to compare." in response.text
    assert fake_ai.called("compare_tools") == []


def test_estimate_with_empty_fields_is_zero(test_client, fake_ai):
    response = test_client.post(
        "/navigator/estimate",
        data={"automation_tool": "", "complexity_low": "", "complexity_medium": "", "qa_team_size": ""},
    )

    assert response.status_code == 200
    assert "No test cases were provided" in response.text
    assert fake_ai.called("estimate_effort") == []


def test_estimate_shows_ai_and_baseline(test_client, fake_ai):
    fake_ai.responses["estimate_effort"] = EstimateEffortOutput(
        estimated_effort_days=7.25, effort_days_min=6.5, effort_days_max=8.0,
        estimated_duration_days=3.63, explanation="Base estimate", confidence_score=96,
    )

    response = test_client.post(
        "/navigator/estimate",
        data={"automation_tool": "Selenium", "complexity_high": "20", "qa_team_size": "2", "cicd_pipeline_integrated": "on"},
    )

    assert "AI estimate: 7.25 person-days" in response.text
    assert "Rule-based baseline: 6.0 person-days" in response.text
    assert fake_ai.called("estimate_effort")[0].cicd_pipeline_integrated is True


def test_estimate_failure_keeps_baseline(test_client, fake_ai):
    fake_ai.errors["estimate_effort"] = AIServiceError("bad json")

    response = test_client.post("/navigator/estimate", data={"complexity_low": "50"})

    assert "Failed to get effort estimation. bad json" in response.text
    assert "Rule-based baseline: 3.0 person-days" in response.text


def test_tool_details_page_fallback(test_client):
    response = test_client.get("/tools/Gauge")

    assert response.status_code == 200
    assert "Gauge (Error)" in response.text


def test_search_blank_query(test_client, fake_ai):
    response = test_client.get("/search", params={"q": "   "})

    assert "Please enter a tool name to search." in response.text
    assert fake_ai.calls == []


def test_search_without_query_shows_form(test_client):
    response = test_client.get("/search")

    assert response.status_code == 200
    assert "Please enter a tool name to search." not in response.text


def test_search_runs_details_lookup(test_client, fake_ai):
    response = test_client.get("/search", params={"q": "Selenium"})

    assert [r.tool_name for r in fake_ai.called("get_tool_details")] == ["Selenium"]
    assert "View Selenium Docs" in response.text


def test_static_assets(test_client):
    assert test_client.get("/static/beacon.js").status_code == 200
    assert test_client.get("/static/styles.css").status_code == 200
