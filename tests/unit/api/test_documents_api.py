"""
CRC — tests/unit/api/test_documents_api.py

Name
- HTTP contract tests for /v1/documents (TestClient, in-memory container)

Responsibilities
- Validate status codes per endpoint (201/200/204/401/403/404/422/500).
- Validate RFC7807 problem+json bodies for errors.
- Validate JWT extraction (Bearer header and cookie).
- Validate the share scenario end-to-end over HTTP.

Collaborators
- docshare.api.main.app
- docshare.container (in-memory singletons under APP_ENV=test)
"""

from datetime import timedelta
from uuid import uuid4

import pytest
from docshare import container
from docshare.api.main import app
from docshare.application.usecases import ListVisibleDocumentsUseCase
from docshare.crosscutting.exceptions import PersistenceError
from fastapi.testclient import TestClient

pytestmark = pytest.mark.unit

PROBLEM_JSON = "application/problem+json"


@pytest.fixture
def client(reset_container):
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def users(reset_container):
    directory = container.get_user_directory()
    return {
        name: directory.add_user(f"{name}@x.com")
        for name in ("owner", "reader", "writer", "stranger")
    }


@pytest.fixture
def as_user(auth_headers, users):
    return lambda name: auth_headers(users[name].id)


@pytest.fixture
def document_id(client, as_user):
    response = client.post(
        "/v1/documents",
        json={"name": "Spec", "description": "v1"},
        headers=as_user("owner"),
    )
    assert response.status_code == 201
    return response.json()["id"]


def _assert_problem(response, status: int, code: str):
    assert response.status_code == status
    assert response.headers["content-type"].startswith(PROBLEM_JSON)
    body = response.json()
    assert body["status"] == status
    assert body["code"] == code
    return body


# =============================================================================
# Auth
# =============================================================================


def test_missing_token_is_401(client, users):
    response = client.get("/v1/documents")
    _assert_problem(response, 401, "UNAUTHORIZED")
    assert response.headers["www-authenticate"] == "Bearer"


def test_invalid_token_is_401(client, users):
    response = client.get(
        "/v1/documents", headers={"Authorization": "Bearer not-a-jwt"}
    )
    _assert_problem(response, 401, "UNAUTHORIZED")


def test_expired_token_is_401(client, users, token_factory):
    token = token_factory(users["owner"].id, expires_in=timedelta(seconds=-30))
    response = client.get(
        "/v1/documents", headers={"Authorization": f"Bearer {token}"}
    )
    body = _assert_problem(response, 401, "UNAUTHORIZED")
    assert body["detail"] == "Token expirado."


def test_token_with_wrong_secret_is_401(client, users, token_factory):
    token = token_factory(users["owner"].id, secret="another-secret-0123456789-abcdefghij")
    response = client.get(
        "/v1/documents", headers={"Authorization": f"Bearer {token}"}
    )
    _assert_problem(response, 401, "UNAUTHORIZED")


def test_token_for_unknown_user_is_401(client, users, auth_headers):
    response = client.get("/v1/documents", headers=auth_headers(uuid4()))
    _assert_problem(response, 401, "UNAUTHORIZED")


def test_token_from_cookie(client, users, token_factory):
    client.cookies.set("access_token", token_factory(users["owner"].id))
    response = client.get("/v1/documents")
    assert response.status_code == 200
    assert response.json() == {"documents": []}


# =============================================================================
# Documents
# =============================================================================


def test_create_document(client, as_user, users):
    response = client.post(
        "/v1/documents",
        json={"name": "  Spec ", "description": "v1"},
        headers=as_user("owner"),
    )

    assert response.status_code == 201
    body = response.json()
    assert body["name"] == "Spec"
    assert body["description"] == "v1"
    assert body["owner_user_id"] == str(users["owner"].id)
    assert response.headers["x-request-id"]


def test_create_document_blank_name_is_422(client, as_user):
    response = client.post(
        "/v1/documents", json={"name": "   "}, headers=as_user("owner")
    )
    assert response.status_code == 422


def test_get_document_for_member_and_stranger(client, as_user, document_id):
    client.post(
        f"/v1/documents/{document_id}/roles",
        json={"email": "reader@x.com", "role": "readOnly"},
        headers=as_user("owner"),
    )

    assert client.get(f"/v1/documents/{document_id}", headers=as_user("owner")).status_code == 200
    assert client.get(f"/v1/documents/{document_id}", headers=as_user("reader")).status_code == 200

    forbidden = client.get(f"/v1/documents/{document_id}", headers=as_user("stranger"))
    _assert_problem(forbidden, 403, "FORBIDDEN")


def test_get_missing_document_is_404(client, as_user):
    response = client.get(f"/v1/documents/{uuid4()}", headers=as_user("owner"))
    body = _assert_problem(response, 404, "NOT_FOUND")
    assert body["type"] == "about:blank/not_found"
    assert body["title"] == "Not Found"


def test_lookup_by_name(client, as_user, document_id):
    found = client.get(
        "/v1/documents/lookup", params={"name": "Spec"}, headers=as_user("owner")
    )
    assert found.status_code == 200
    assert found.json()["id"] == document_id

    other = client.get(
        "/v1/documents/lookup", params={"name": "Spec"}, headers=as_user("stranger")
    )
    _assert_problem(other, 404, "NOT_FOUND")


def test_delete_document(client, as_user, document_id):
    denied = client.delete(f"/v1/documents/{document_id}", headers=as_user("reader"))
    _assert_problem(denied, 403, "FORBIDDEN")

    deleted = client.delete(f"/v1/documents/{document_id}", headers=as_user("owner"))
    assert deleted.status_code == 204

    gone = client.get(f"/v1/documents/{document_id}", headers=as_user("owner"))
    _assert_problem(gone, 404, "NOT_FOUND")


def test_persistence_error_is_500_without_internals(client, as_user):
    class BrokenRepository:
        def list_documents_visible_to(self, user_id):
            raise PersistenceError("password=hunter2 connection refused")

    app.dependency_overrides[container.get_list_visible_documents_use_case] = (
        lambda: ListVisibleDocumentsUseCase(BrokenRepository())
    )

    response = client.get("/v1/documents", headers=as_user("owner"))

    body = _assert_problem(response, 500, "PERSISTENCE_ERROR")
    assert "hunter2" not in response.text
    assert any("error_id" in item for item in body["errors"])


# =============================================================================
# Roles
# =============================================================================


def test_grant_list_and_revoke(client, as_user, document_id):
    url = f"/v1/documents/{document_id}/roles"

    granted = client.post(
        url, json={"email": "Reader@X.com", "role": "readOnly"}, headers=as_user("owner")
    )
    assert granted.status_code == 200
    assert granted.json() == {
        "document_id": document_id,
        "email": "reader@x.com",
        "role": "readOnly",
        "changed": True,
    }

    again = client.post(
        url, json={"email": "reader@x.com", "role": "readOnly"}, headers=as_user("owner")
    )
    assert again.json()["changed"] is False

    client.post(
        url, json={"email": "writer@x.com", "role": "readWrite"}, headers=as_user("owner")
    )
    listed = client.get(url, headers=as_user("owner"))
    assert listed.status_code == 200
    assert listed.json()["assignments"] == [
        {"role": "readOnly", "email": "reader@x.com"},
        {"role": "readWrite", "email": "writer@x.com"},
    ]

    revoked = client.post(
        f"{url}/revoke",
        json={"email": "reader@x.com", "role": "readOnly"},
        headers=as_user("owner"),
    )
    assert revoked.status_code == 200
    assert revoked.json()["changed"] is True

    absent = client.post(
        f"{url}/revoke",
        json={"email": "reader@x.com", "role": "readOnly"},
        headers=as_user("owner"),
    )
    assert absent.status_code == 200
    assert absent.json()["changed"] is False


def test_revoking_owner_email_is_noop(client, as_user, document_id):
    response = client.post(
        f"/v1/documents/{document_id}/roles/revoke",
        json={"email": "owner@x.com", "role": "readOnly"},
        headers=as_user("owner"),
    )
    assert response.status_code == 200
    assert response.json()["changed"] is False


def test_list_roles_requires_owner(client, as_user, document_id):
    response = client.get(
        f"/v1/documents/{document_id}/roles", headers=as_user("stranger")
    )
    _assert_problem(response, 403, "FORBIDDEN")


def test_non_owner_grant_is_403(client, as_user, document_id):
    response = client.post(
        f"/v1/documents/{document_id}/roles",
        json={"email": "stranger@x.com", "role": "readWrite"},
        headers=as_user("reader"),
    )
    body = _assert_problem(response, 403, "FORBIDDEN")
    assert body["detail"] == "not allowed to change access"


def test_unregistered_email_is_404(client, as_user, document_id):
    response = client.post(
        f"/v1/documents/{document_id}/roles",
        json={"email": "ghost@x.com", "role": "readOnly"},
        headers=as_user("owner"),
    )
    body = _assert_problem(response, 404, "NOT_FOUND")
    assert body["detail"] == "email not registered"


def test_granting_admin_is_422(client, as_user, document_id):
    response = client.post(
        f"/v1/documents/{document_id}/roles",
        json={"email": "reader@x.com", "role": "Admin"},
        headers=as_user("owner"),
    )
    _assert_problem(response, 422, "VALIDATION_ERROR")


def test_unknown_role_is_422(client, as_user, document_id):
    response = client.post(
        f"/v1/documents/{document_id}/roles",
        json={"email": "reader@x.com", "role": "owner"},
        headers=as_user("owner"),
    )
    assert response.status_code == 422


def test_share_spec_document_over_http(client, as_user, document_id):
    client.post(
        f"/v1/documents/{document_id}/roles",
        json={"email": "writer@x.com", "role": "readWrite"},
        headers=as_user("owner"),
    )

    roles = client.get(f"/v1/documents/{document_id}/roles", headers=as_user("owner"))
    assert roles.json()["assignments"] == [
        {"role": "readWrite", "email": "writer@x.com"}
    ]

    visible = client.get("/v1/documents", headers=as_user("writer"))
    assert visible.json() == {
        "documents": [
            {
                "document_id": document_id,
                "name": "Spec",
                "description": "v1",
                "role": "readWrite",
            }
        ]
    }

    owner_view = client.get("/v1/documents", headers=as_user("owner"))
    assert owner_view.json()["documents"][0]["role"] == "Admin"

    assert client.get("/v1/documents", headers=as_user("stranger")).json() == {
        "documents": []
    }


# =============================================================================
# Ops endpoints
# =============================================================================


def test_healthz(client):
    response = client.get("/healthz")
    assert response.status_code == 200
    assert response.json()["ok"] is True
    assert response.json()["db"] == "connected"


def test_metrics_exposes_role_counters(client, as_user, document_id):
    client.post(
        f"/v1/documents/{document_id}/roles",
        json={"email": "reader@x.com", "role": "readOnly"},
        headers=as_user("owner"),
    )
    response = client.get("/metrics")
    assert response.status_code == 200
    assert "docshare_role_changes_total" in response.text
    assert "docshare_requests_total" in response.text


def test_incoming_request_id_is_echoed(client, as_user):
    response = client.get(
        "/v1/documents", headers={**as_user("owner"), "X-Request-Id": "trace-42"}
    )
    assert response.headers["x-request-id"] == "trace-42"


def test_request_validation_is_problem_json(client, as_user):
    response = client.post(
        "/v1/documents", json={"description": "no name"}, headers=as_user("owner")
    )
    body = _assert_problem(response, 422, "VALIDATION_ERROR")
    assert any(item.get("loc") == "body.name" for item in body["errors"])
