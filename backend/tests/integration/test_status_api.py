"""Integration tests for the Status Workflow API

Tests cover:
- Status listing and lookup endpoints
- Transition validation with per-error HTTP status codes
- Performing transitions and the rejected-transition envelope
- Request body validation errors
- Request ID propagation
"""

import pytest
from fastapi.testclient import TestClient

from po_workflow.dependencies import get_status_service
from po_workflow.domain.status import StateTransitionError, StatusService, WorkflowConfigurationError
from po_workflow.main import create_app


pytestmark = pytest.mark.integration

API = "/api/v1/statuses"


class TestStatusLookup:
    """Test GET /statuses endpoints"""

    def test_list_statuses(self, client: TestClient):
        """Test all statuses are listed in declaration order with camelCase fields"""
        response = client.get(API)

        assert response.status_code == 200
        body = response.json()
        assert list(body) == ["UPLOADED", "CONFIRMED", "SHIPPED", "INVOICED", "DELIVERED", "CANCELLED"]
        assert body["UPLOADED"]["allowedTransitions"] == ["CONFIRMED", "CANCELLED"]
        assert body["DELIVERED"]["metadata"]["isTerminal"] is True
        assert body["CANCELLED"]["requirements"]["cancellationReason"]["level"] == "RECOMMENDED"

    def test_initial_status(self, client: TestClient):
        response = client.get(f"{API}/initial")

        assert response.status_code == 200
        assert response.json() == {"status": "UPLOADED"}

    def test_workflow_info(self, client: TestClient):
        response = client.get(f"{API}/workflow")

        assert response.status_code == 200
        body = response.json()
        assert body["name"] == "purchase_order"
        assert body["lastUpdated"] == "2025-02-05"
        assert body["initial"] == "UPLOADED"

    def test_get_status(self, client: TestClient):
        response = client.get(f"{API}/SHIPPED")

        assert response.status_code == 200
        body = response.json()
        assert body["label"] == "Shipped"
        assert body["metadata"]["requiresNotes"] is True

    def test_get_unknown_status(self, client: TestClient):
        """Test unknown status returns 404"""
        response = client.get(f"{API}/ON_HOLD")

        assert response.status_code == 404

    def test_available_transitions(self, client: TestClient):
        response = client.get(f"{API}/CONFIRMED/transitions")

        assert response.status_code == 200
        assert response.json() == {"status": "CONFIRMED", "transitions": ["SHIPPED", "CANCELLED"]}

    def test_available_transitions_unknown_status(self, client: TestClient):
        """Test unknown status has no transitions rather than an error"""
        response = client.get(f"{API}/ON_HOLD/transitions")

        assert response.status_code == 200
        assert response.json()["transitions"] == []


class TestValidateEndpoint:
    """Test POST /statuses/validate"""

    def test_valid_transition(self, client: TestClient):
        response = client.post(
            f"{API}/validate",
            json={"from": "UPLOADED", "to": "CONFIRMED", "data": {"poNumber": "PO1"}},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["valid"] is True
        assert body["metadata"] == {
            "allowedTransitions": ["CONFIRMED", "CANCELLED"],
            "requirements": ["poNumber", "dataVerified"],
        }

    def test_disallowed_transition_is_conflict(self, client: TestClient):
        """Test UPLOADED -> SHIPPED returns 409 with the allowed choices"""
        response = client.post(f"{API}/validate", json={"from": "UPLOADED", "to": "SHIPPED"})

        assert response.status_code == 409
        body = response.json()
        assert body["valid"] is False
        assert body["errors"][0]["type"] == "INVALID_TRANSITION"
        assert body["metadata"]["allowedTransitions"] == ["CONFIRMED", "CANCELLED"]

    def test_unknown_status_is_bad_request(self, client: TestClient):
        response = client.post(f"{API}/validate", json={"from": "ON_HOLD", "to": "SHIPPED"})

        assert response.status_code == 400
        body = response.json()
        assert body["errors"][0]["message"] == "Invalid status: ON_HOLD"
        assert body["metadata"] == {}

    def test_requirements_not_met_is_unprocessable(self, client: TestClient):
        response = client.post(f"{API}/validate", json={"from": "UPLOADED", "to": "CONFIRMED", "data": {}})

        assert response.status_code == 422
        body = response.json()
        assert [e["type"] for e in body["errors"]] == ["REQUIREMENTS_NOT_MET"]
        assert body["errors"][0]["details"]["requirement"] == "poNumber"

    def test_warnings_do_not_fail(self, client: TestClient):
        response = client.post(f"{API}/validate", json={"from": "SHIPPED", "to": "CANCELLED"})

        assert response.status_code == 200
        assert response.json()["warnings"][0]["message"] == "Cancellation reason recommended"

    def test_missing_target(self, client: TestClient):
        """Test request body validation uses the structured error envelope"""
        response = client.post(f"{API}/validate", json={"from": "UPLOADED"})

        assert response.status_code == 422
        body = response.json()
        assert body["success"] is False
        assert body["error"]["type"] == "MISSING_REQUIRED_DATA"


class TestTransitionEndpoint:
    """Test POST /statuses/transition"""

    def test_perform_transition(self, client: TestClient):
        response = client.post(
            f"{API}/transition",
            json={
                "from": "UPLOADED",
                "to": "CONFIRMED",
                "data": {"poNumber": "PO1"},
                "reason": "Verified by buyer",
                "userId": "u1",
            },
        )

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["type"] == "FORWARD"
        assert body["historyEntry"]["to"] == "CONFIRMED"
        assert body["historyEntry"]["userId"] == "u1"
        assert body["historyEntry"]["reason"] == "Verified by buyer"
        assert body["timestamp"] == "2025-02-05T12:00:00+00:00"

    def test_default_user(self, client: TestClient):
        """Test configured DEFAULT_USER_ID is used when userId is omitted"""
        response = client.post(f"{API}/transition", json={"from": "SHIPPED", "to": "CANCELLED"})

        assert response.status_code == 200
        body = response.json()
        assert body["transition"]["userId"] == "api-user"
        assert body["type"] == "RESET"

    def test_rejected_transition(self, client: TestClient):
        response = client.post(
            f"{API}/transition",
            json={"from": "UPLOADED", "to": "CONFIRMED", "data": {"validationErrors": ["qty"]}},
        )

        assert response.status_code == 422
        body = response.json()
        assert body["success"] is False
        assert body["error"]["type"] == "REQUIREMENTS_NOT_MET"
        assert body["error"]["message"] == "Invalid transition: PO number required, Data verification required"
        assert len(body["errors"]) == 2

    def test_rejected_graph_violation(self, client: TestClient):
        response = client.post(f"{API}/transition", json={"from": "DELIVERED", "to": "UPLOADED"})

        assert response.status_code == 422
        assert response.json()["error"]["type"] == "INVALID_TRANSITION"

    def test_skip_validation(self, client: TestClient):
        response = client.post(
            f"{API}/transition",
            json={"from": "UPLOADED", "to": "INVOICED", "skipValidation": True},
        )

        assert response.status_code == 200
        assert response.json()["type"] == "FORWARD"


class TestRequestID:
    """Test X-Request-ID handling"""

    def test_request_id_echoed(self, client: TestClient):
        response = client.get(f"{API}/initial", headers={"X-Request-ID": "req-42"})

        assert response.headers["X-Request-ID"] == "req-42"

    def test_request_id_generated(self, client: TestClient):
        response = client.get(f"{API}/initial")

        assert response.headers["X-Request-ID"]


class TestHealth:
    """Test service endpoints outside the status router"""

    def test_health(self, client: TestClient):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["workflow"] == "purchase_order"


class _FailingStatusService(StatusService):
    """Status service whose initial-status lookup raises the given error."""

    def __init__(self, workflow, error):
        super().__init__(workflow)
        self.error = error

    def get_initial_status(self):
        raise self.error


@pytest.fixture
def failing_client(test_settings, workflow):
    """Build a client whose status service raises a chosen exception."""

    def _make(error):
        app = create_app(test_settings)
        app.dependency_overrides[get_status_service] = lambda: _FailingStatusService(workflow, error)
        return TestClient(app, raise_server_exceptions=False)

    return _make


class TestExceptionHandlers:
    """Test structured error responses for exceptions escaping the routers"""

    def test_configuration_error_is_server_error(self, failing_client):
        with failing_client(WorkflowConfigurationError("Initial status MISSING is not declared")) as client:
            response = client.get(f"{API}/initial")

        assert response.status_code == 500
        body = response.json()
        assert body["success"] is False
        assert body["error"]["type"] == "SYSTEM_ERROR"

    def test_workflow_error_is_bad_request(self, failing_client):
        with failing_client(StateTransitionError("Invalid transition: UPLOADED -> SHIPPED")) as client:
            response = client.get(f"{API}/initial")

        assert response.status_code == 400
        assert response.json()["error"] == {
            "type": "VALIDATION_FAILED",
            "message": "Invalid transition: UPLOADED -> SHIPPED",
        }

    def test_unexpected_error_is_generic_server_error(self, failing_client):
        """Test internal details are not exposed to the client"""
        with failing_client(RuntimeError("database password leaked")) as client:
            response = client.get(f"{API}/initial")

        assert response.status_code == 500
        body = response.json()
        assert body["error"]["type"] == "SYSTEM_ERROR"
        assert "leaked" not in response.text
