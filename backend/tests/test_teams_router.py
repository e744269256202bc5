# backend/tests/test_teams_router.py

from typing import List

from fastapi import FastAPI
from fastapi.testclient import TestClient

from app.teams.router import get_teams_service, router as teams_router
from app.teams.schemas import NotificationRequest, NotifyResult, ValidateResult, ValidationRequest


class StubService:
    """実 HTTP を行わず、固定の結果を返すだけのサービス。"""

    def __init__(self, notify_result=None, validate_result=None) -> None:
        self.notify_result = notify_result or NotifyResult(
            success=True, message_id="abc123", delivered_at="2026-01-01T00:00:00Z"
        )
        self.validate_result = validate_result or ValidateResult(
            valid=True, message="configuration is valid"
        )
        self.notify_requests: List[NotificationRequest] = []
        self.validate_requests: List[ValidationRequest] = []

    def notify(self, request: NotificationRequest) -> NotifyResult:
        self.notify_requests.append(request)
        return self.notify_result

    def validate(self, request: ValidationRequest) -> ValidateResult:
        self.validate_requests.append(request)
        return self.validate_result


def create_test_client(service: StubService) -> TestClient:
    app = FastAPI()
    app.include_router(teams_router)
    app.dependency_overrides[get_teams_service] = lambda: service
    return TestClient(app)


def test_post_notify_200_on_success():
    service = StubService()
    client = create_test_client(service)

    response = client.post(
        "/notify",
        json={"channel_type": "channel", "team_id": "team", "channel_id": "channel", "message": "hello"},
    )

    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "message_id": "abc123",
        "delivered_at": "2026-01-01T00:00:00Z",
    }
    assert service.notify_requests[0].team_id == "team"


def test_post_notify_400_on_invalid_json():
    client = create_test_client(StubService())

    response = client.post(
        "/notify", content=b"{not-json", headers={"Content-Type": "application/json"}
    )

    assert response.status_code == 400
    assert response.json() == {"success": False, "error": "Invalid JSON in request body"}


def test_post_notify_400_on_non_object_body():
    client = create_test_client(StubService())

    response = client.post("/notify", json=["hello"])

    assert response.status_code == 400
    assert response.json()["error"] == "request body must be a JSON object"


def test_post_notify_mirrors_result_status_and_retry_after():
    service = StubService(
        notify_result=NotifyResult(
            success=False,
            error="Teams API error: Too many requests",
            retry_after=60,
            status_code=429,
        )
    )
    client = create_test_client(service)

    response = client.post("/notify", json={"channel_type": "chat", "chat_id": "c", "message": "m"})

    assert response.status_code == 429
    assert response.json() == {
        "success": False,
        "error": "Teams API error: Too many requests",
        "retry_after": 60,
    }


def test_post_notify_400_result_omits_null_fields():
    service = StubService(
        notify_result=NotifyResult(success=False, error="message is required", status_code=400)
    )
    client = create_test_client(service)

    response = client.post("/notify", json={"channel_type": "chat", "chat_id": "c"})

    assert response.status_code == 400
    assert response.json() == {"success": False, "error": "message is required"}


def test_post_validate_200_on_valid_and_invalid():
    client = create_test_client(StubService())
    response = client.post("/validate", json={"channel_type": "chat", "chat_id": "c"})

    assert response.status_code == 200
    assert response.json() == {"valid": True, "message": "configuration is valid"}

    invalid = StubService(
        validate_result=ValidateResult(valid=False, error="Teams API error: Not Found")
    )
    response = create_test_client(invalid).post(
        "/validate", json={"channel_type": "chat", "chat_id": "missing"}
    )

    assert response.status_code == 200
    assert response.json() == {"valid": False, "error": "Teams API error: Not Found"}


def test_post_validate_400_on_invalid_json():
    client = create_test_client(StubService())

    response = client.post("/validate", content=b"", headers={"Content-Type": "application/json"})

    assert response.status_code == 400
    assert response.json()["valid"] is False


def test_post_validate_500_on_unexpected_failure():
    service = StubService(
        validate_result=ValidateResult(valid=False, error="internal server error", status_code=500)
    )
    client = create_test_client(service)

    response = client.post("/validate", json={"channel_type": "chat", "chat_id": "c"})

    assert response.status_code == 500
    assert response.json() == {"valid": False, "error": "internal server error"}


def test_deeply_nested_body_is_invalid_json_on_both_routes():
    service = StubService()
    client = create_test_client(service)
    nested = b"[" * 100000

    notify = client.post("/notify", content=nested, headers={"Content-Type": "application/json"})
    validate = client.post("/validate", content=nested, headers={"Content-Type": "application/json"})

    assert notify.status_code == 400
    assert notify.json() == {"success": False, "error": "Invalid JSON in request body"}
    assert validate.status_code == 400
    assert validate.json() == {"valid": False, "error": "Invalid JSON in request body"}
    assert service.notify_requests == []
    assert service.validate_requests == []
