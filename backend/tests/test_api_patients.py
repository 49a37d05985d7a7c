"""
Tests for the patient endpoints and the shared CRUD routes.
"""

import json

import pytest


def create_patient(client, headers, **overrides):
    body = {
        "firstName": "Ana",
        "lastName": "Lopez",
        "dateOfBirth": "1990-05-17",
        "sex": "female",
        "email": "ana@example.com",
    }
    body.update(overrides)
    response = client.post("/api/patients", json=body, headers=headers)
    assert response.status_code == 201, response.json()
    return response.json()


class TestRequestContext:
    def test_missing_organization_is_unauthorized(self, client):
        response = client.get("/api/patients")
        assert response.status_code == 401
        assert response.json()["detail"] == "Organization context required"


class TestPatientCrud:
    """Full lifecycle over HTTP."""

    def test_create_returns_camel_case(self, client, headers):
        data = create_patient(client, headers)
        assert data["firstName"] == "Ana"
        assert data["dateOfBirth"] == "1990-05-17"
        assert data["organizationId"] == headers["X-Organization-Id"]
        assert data["createdBy"] == headers["X-User-Id"]
        assert data["deletedAt"] is None

    def test_create_validates_body(self, client, headers):
        response = client.post("/api/patients", json={"firstName": "Ana"}, headers=headers)
        assert response.status_code == 422

    def test_create_ignores_protected_fields(self, client, headers, other_org_headers):
        data = create_patient(client, headers, organizationId=other_org_headers["X-Organization-Id"])
        assert data["organizationId"] == headers["X-Organization-Id"]

    def test_get_one(self, client, headers):
        created = create_patient(client, headers)
        response = client.get(f"/api/patients/{created['id']}", headers=headers)
        assert response.status_code == 200
        assert response.json()["id"] == created["id"]

    def test_get_one_other_tenant_is_not_found(self, client, headers, other_org_headers):
        created = create_patient(client, headers)
        response = client.get(f"/api/patients/{created['id']}", headers=other_org_headers)
        assert response.status_code == 404
        assert response.json()["detail"] == f"Patients with ID {created['id']} not found"

    def test_update(self, client, headers):
        created = create_patient(client, headers)
        response = client.patch(
            f"/api/patients/{created['id']}", json={"phone": "555-0199"}, headers=headers
        )
        assert response.status_code == 200
        data = response.json()
        assert data["phone"] == "555-0199"
        assert data["firstName"] == "Ana"

    def test_update_missing_is_not_found(self, client, headers):
        response = client.patch("/api/patients/missing", json={"phone": "1"}, headers=headers)
        assert response.status_code == 404

    def test_delete_restore_and_hard_delete(self, client, headers):
        created = create_patient(client, headers)
        url = f"/api/patients/{created['id']}"

        response = client.delete(url, headers=headers)
        assert response.status_code == 200
        assert response.json() == {"message": "Patients deleted successfully"}
        assert client.get(url, headers=headers).status_code == 404

        response = client.get(url, params={"includeDeleted": "true"}, headers=headers)
        assert response.status_code == 200
        assert response.json()["deletedAt"] is not None

        response = client.post(f"{url}/restore", headers=headers)
        assert response.status_code == 200
        assert response.json()["deletedAt"] is None
        assert client.get(url, headers=headers).status_code == 200

        response = client.delete(f"{url}/hard", headers=headers)
        assert response.json() == {"message": "Patients permanently deleted"}
        response = client.get(url, params={"includeDeleted": "true"}, headers=headers)
        assert response.status_code == 404

    def test_restore_missing_is_not_found(self, client, headers):
        assert client.post("/api/patients/missing/restore", headers=headers).status_code == 404


class TestPatientListing:
    """List endpoint: filters, pagination, projection."""

    @pytest.fixture(autouse=True)
    def patients(self, client, headers, other_org_headers):
        create_patient(client, headers, firstName="Ana", bloodType="O+")
        create_patient(client, headers, firstName="Bruno", sex="male", email="bruno@example.com")
        create_patient(client, headers, firstName="Carla", bloodType="O+", email="carla@example.com")
        create_patient(client, other_org_headers, firstName="Other")

    def test_plain_list(self, client, headers):
        response = client.get("/api/patients", headers=headers)
        assert response.status_code == 200
        assert sorted(p["firstName"] for p in response.json()) == ["Ana", "Bruno", "Carla"]

    def test_paginated_envelope(self, client, headers):
        response = client.get(
            "/api/patients",
            params={"paginated": "true", "page": "2", "limit": "2", "sortBy": "firstName", "sortOrder": "asc"},
            headers=headers,
        )
        data = response.json()
        assert data["total"] == 3
        assert data["page"] == 2
        assert data["limit"] == 2
        assert [p["firstName"] for p in data["data"]] == ["Carla"]

    def test_limit_is_clamped(self, client, headers):
        response = client.get(
            "/api/patients", params={"paginated": "true", "limit": "1000"}, headers=headers
        )
        assert response.json()["limit"] == 100

    def test_equality_and_search(self, client, headers):
        response = client.get("/api/patients", params={"bloodType": "O+"}, headers=headers)
        assert sorted(p["firstName"] for p in response.json()) == ["Ana", "Carla"]

        response = client.get("/api/patients", params={"search": "bruno@"}, headers=headers)
        assert [p["firstName"] for p in response.json()] == ["Bruno"]

    def test_column_projection(self, client, headers):
        response = client.get(
            "/api/patients",
            params={"columns": json.dumps({"firstName": True}), "sortBy": "firstName", "sortOrder": "asc"},
            headers=headers,
        )
        assert response.json() == [
            {"id": response.json()[0]["id"], "firstName": "Ana"},
            {"id": response.json()[1]["id"], "firstName": "Bruno"},
            {"id": response.json()[2]["id"], "firstName": "Carla"},
        ]

    def test_malformed_with_is_ignored(self, client, headers):
        response = client.get("/api/patients", params={"with": "{broken"}, headers=headers)
        assert response.status_code == 200
        assert len(response.json()) == 3

    def test_huge_page_is_clamped(self, client, headers):
        response = client.get(
            "/api/patients", params={"paginated": "true", "page": str(10**19)}, headers=headers
        )
        assert response.status_code == 200
        data = response.json()
        assert data["page"] == 1_000_000_000
        assert data["data"] == []
        assert data["total"] == 3

    def test_invalid_query_value_is_bad_request(self, client, headers):
        response = client.get("/api/patients", params={"page": "first"}, headers=headers)
        assert response.status_code == 400
        assert response.json()["detail"].startswith("Invalid query parameter page")

    def test_statistics(self, client, headers):
        response = client.get("/api/patients/statistics", headers=headers)
        assert response.status_code == 200
        assert response.json() == {"total": 3, "active": 3, "inactive": 0}
