"""
End-to-end tests for the callback route through the FastAPI app.
"""

import pytest
from fastapi.testclient import TestClient

from callback_server.config import get_settings


def test_code_received(client):
    response = client.get("/auth/callback", params={"code": "ABC123"})

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/html")
    assert "ABC123" in response.text
    assert response.text.count("<script>") == 1


def test_upstream_error(client):
    response = client.get("/auth/callback?error=access_denied")

    assert response.status_code == 400
    assert response.headers["content-type"].startswith("text/html")
    assert "access_denied" in response.text


def test_no_query(client):
    response = client.get("/auth/callback")

    assert response.status_code == 400
    assert "No authorization code received" in response.text


def test_blank_parameters(client):
    response = client.get("/auth/callback?code=&error=")

    assert response.status_code == 400
    assert "No authorization code received" in response.text


@pytest.mark.parametrize("path", ["/random/path", "/", "/auth", "/auth/callback/extra"])
def test_unmatched_path(client, path):
    response = client.get(path)

    assert response.status_code == 404
    assert "http://localhost:4567/auth/callback" in response.text


@pytest.mark.parametrize("path", ["/docs", "/redoc", "/openapi.json"])
def test_framework_docs_are_not_exposed(client, path):
    response = client.get(path)

    assert response.status_code == 404
    assert "404 - Not Found" in response.text


def test_script_injection_in_code(client):
    response = client.get("/auth/callback", params={"code": "<script>alert(1)</script>"})

    assert response.status_code == 200
    assert "&lt;script&gt;" in response.text
    assert "<script>alert(1)</script>" not in response.text


def test_first_of_repeated_values_is_used(client):
    response = client.get("/auth/callback?code=first-code&code=second-code")

    assert response.status_code == 200
    assert "first-code" in response.text
    assert "second-code" not in response.text


def test_other_query_parameters_are_ignored(client):
    response = client.get(
        "/auth/callback",
        params={"code": "4/0Ab-xyz", "scope": "https://www.googleapis.com/auth/drive", "state": "s"},
    )

    assert response.status_code == 200
    assert "4/0Ab-xyz" in response.text
    assert "googleapis" not in response.text


def test_dispatch_does_not_depend_on_method(client):
    response = client.post("/auth/callback?code=ABC123")

    assert response.status_code == 200
    assert "ABC123" in response.text


def test_requests_are_independent(client):
    first = client.get("/auth/callback?error=access_denied")
    second = client.get("/auth/callback?code=ABC123")
    third = client.get("/auth/callback")

    assert [first.status_code, second.status_code, third.status_code] == [400, 200, 400]
    assert "access_denied" not in second.text


def test_lifespan_runs_on_startup_and_shutdown(app):
    with TestClient(app) as client:
        response = client.get("/auth/callback?code=ABC123")

    assert response.status_code == 200


@pytest.mark.parametrize(
    "path",
    ["/auth%2Fcallback?code=ABC123", "/auth%2fcallback?code=ABC123"],
)
def test_percent_encoded_path_is_not_the_callback(client, path):
    response = client.get(path)

    assert response.status_code == 404
    assert "ABC123" not in response.text


def test_settings_dependency_can_be_overridden(app, test_settings):
    app.dependency_overrides[get_settings] = lambda: test_settings.model_copy(
        update={"PORT": 5555, "SERVICE_NAME": "Override MCP"}
    )

    response = TestClient(app).get("/nowhere")

    assert response.status_code == 404
    assert "http://localhost:5555/auth/callback" in response.text
    assert "Override MCP" in response.text
