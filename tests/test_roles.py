"""
Tests for job openings (roles).
"""

import uuid

from conftest import create_organization, create_user, get_auth_headers


class TestCreateRole:
    """Tests for POST /api/v1/roles/"""

    def test_admin_creates_role(self, client, admin, admin_headers):
        response = client.post(
            "/api/v1/roles/",
            json={"role_name": "Data Engineer", "department": "Platform", "seniority": "Senior"},
            headers=admin_headers
        )

        assert response.status_code == 201
        data = response.json()
        assert data["role_name"] == "Data Engineer"
        assert data["department"] == "Platform"
        assert data["organization_id"] == str(admin.organization_id)

    def test_recruiter_forbidden(self, client, auth_headers):
        response = client.post("/api/v1/roles/", json={"role_name": "Data Engineer"}, headers=auth_headers)

        assert response.status_code == 403
        assert response.json()["detail"] == "Admin role required"

    def test_empty_name_rejected(self, client, admin_headers):
        response = client.post("/api/v1/roles/", json={"role_name": ""}, headers=admin_headers)

        assert response.status_code == 422

    def test_requires_auth(self, client):
        response = client.post("/api/v1/roles/", json={"role_name": "Data Engineer"})

        assert response.status_code == 401


class TestListRoles:
    """Tests for GET /api/v1/roles/"""

    def test_ordered_by_name(self, client, admin_headers, auth_headers):
        for name in ["QA Analyst", "Backend Engineer", "Designer"]:
            client.post("/api/v1/roles/", json={"role_name": name}, headers=admin_headers)

        response = client.get("/api/v1/roles/", headers=auth_headers)

        assert response.status_code == 200
        assert [r["role_name"] for r in response.json()] == ["Backend Engineer", "Designer", "QA Analyst"]

    def test_scoped_to_organization(self, client, db_session, admin_headers):
        client.post("/api/v1/roles/", json={"role_name": "Backend Engineer"}, headers=admin_headers)

        other_org = create_organization(db_session, name="Umbrella")
        create_user(db_session, other_org, email="other@example.com")
        other_headers = get_auth_headers(client, email="other@example.com")

        assert client.get("/api/v1/roles/", headers=other_headers).json() == []


class TestGetRole:
    def test_get_role(self, client, admin_headers):
        role = client.post("/api/v1/roles/", json={"role_name": "SRE"}, headers=admin_headers).json()

        response = client.get(f"/api/v1/roles/{role['id']}", headers=admin_headers)

        assert response.status_code == 200
        assert response.json()["role_name"] == "SRE"

    def test_not_found(self, client, admin_headers):
        response = client.get(f"/api/v1/roles/{uuid.uuid4()}", headers=admin_headers)

        assert response.status_code == 404

    def test_candidate_cannot_use_foreign_role(self, client, db_session, admin_headers):
        role = client.post("/api/v1/roles/", json={"role_name": "SRE"}, headers=admin_headers).json()

        other_org = create_organization(db_session, name="Umbrella")
        create_user(db_session, other_org, email="other@example.com")
        other_headers = get_auth_headers(client, email="other@example.com")

        response = client.post(
            "/api/v1/candidates/",
            json={"first_name": "Alan", "last_name": "Turing", "role_id": role["id"]},
            headers=other_headers
        )

        assert response.status_code == 404
