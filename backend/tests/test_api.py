"""HTTP endpoints: shape list, local and model-backed validation, health."""

import pytest
from fastapi.testclient import TestClient

from app.agents.geometry_expert import GeometryExpertAgent
from app.api import health as health_api
from app.api import validation as validation_api
from app.api.validation import get_model_validator
from app.main import app
from app.services.remote_validation import RemoteValidationClient


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def model_answers(make_settings, fake_llm):
    """Route POST /validate through a model that replies with the given text."""

    def _install(content):
        remote = RemoteValidationClient(
            settings=make_settings(OPENAI_API_KEY="sk-test"),
            agent=GeometryExpertAgent(llm=fake_llm(content)),
        )
        app.dependency_overrides[get_model_validator] = lambda: remote

    return _install


def test_root(client):
    response = client.get("/")

    assert response.status_code == 200
    assert response.json()["health"] == "/api/v1/health"


def test_list_shapes(client):
    response = client.get("/api/v1/shapes")

    assert response.status_code == 200
    shapes = {item["shape"]: item for item in response.json()}
    assert set(shapes) == {"square", "rectangle", "right_triangle", "right_trapezoid"}
    assert shapes["right_triangle"]["fields"] == ["a", "b", "c"]
    assert shapes["right_trapezoid"]["label"] == "Trapesium Siku-Siku"


def test_local_validation_uses_wire_names(client):
    response = client.post(
        "/api/v1/validate/local",
        json={"shape": "right_triangle", "inputs": {"a": "3", "b": 4, "c": "5"}},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["isValid"] is True
    assert body["keliling"] == 12.0
    assert "Mantap, Anda dapat proyek!" in body["explanation"]


def test_local_validation_of_unknown_shape_is_a_normal_result(client):
    response = client.post("/api/v1/validate/local", json={"shape": "circle", "inputs": {"r": "2"}})

    assert response.status_code == 200
    assert response.json() == {
        "isValid": False,
        "explanation": "Bangun tidak dikenali.",
        "keliling": 0.0,
    }


def test_model_validation_returns_model_verdict(client, model_answers):
    model_answers('{"isValid": true, "explanation": "Mantap, Anda dapat proyek!", "keliling": 20}')

    response = client.post(
        "/api/v1/validate",
        json={
            "shape": "square",
            "inputs": {"sisi1": 5, "sisi2": 5, "sisi3": 5, "sisi4": 5},
            "shapeLabel": "Persegi",
        },
    )

    assert response.status_code == 200
    assert response.json() == {
        "isValid": True,
        "explanation": "Mantap, Anda dapat proyek!",
        "keliling": 20.0,
    }


def test_model_failure_maps_to_bad_gateway(client, model_answers):
    model_answers("")

    response = client.post(
        "/api/v1/validate",
        json={"shape": "square", "inputs": {"sisi1": 5, "sisi2": 5, "sisi3": 5, "sisi4": 5}},
    )

    assert response.status_code == 502
    body = response.json()
    assert body["error"] == "remote_validation_failed"
    assert body["message"] == "Layanan AI mengembalikan respons kosong."


def test_model_validation_without_server_key_is_unavailable(client, make_settings, monkeypatch):
    monkeypatch.setattr(validation_api, "get_settings", lambda: make_settings())

    response = client.post(
        "/api/v1/validate",
        json={"shape": "square", "inputs": {"sisi1": 5, "sisi2": 5, "sisi3": 5, "sisi4": 5}},
    )

    assert response.status_code == 503
    assert response.json()["detail"]["error"] == "model_not_configured"


def test_missing_shape_is_rejected(client):
    response = client.post("/api/v1/validate/local", json={"inputs": {}})

    assert response.status_code == 422


def test_local_validation_of_huge_measurements_is_a_normal_result(client):
    response = client.post(
        "/api/v1/validate/local",
        json={"shape": "right_triangle", "inputs": {"a": "1e200", "b": "1e200", "c": "2e200"}},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["isValid"] is False
    assert body["keliling"] == 0.0


def test_health_is_healthy_in_local_mode_without_key(client, make_settings, monkeypatch):
    monkeypatch.setattr(health_api, "get_settings", lambda: make_settings(VALIDATION_MODE="local"))

    body = client.get("/api/v1/health").json()

    assert body["status"] == "healthy"
    assert body["model_configured"] is False


def test_health_is_degraded_in_remote_mode_without_key(client, make_settings, monkeypatch):
    monkeypatch.setattr(health_api, "get_settings", lambda: make_settings(VALIDATION_MODE="remote"))

    body = client.get("/api/v1/health").json()

    assert body["status"] == "degraded"
    assert body["validation_mode"] == "remote"


def test_health(client):
    response = client.get("/api/v1/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] in {"healthy", "degraded"}
    assert body["validation_mode"] in {"local", "remote"}
    assert isinstance(body["model_configured"], bool)
