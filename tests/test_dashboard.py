"""
Tests for the dashboard, organization and health endpoints.
"""

from datetime import datetime, timedelta, timezone

from pipeline_tracker.models import CandidateStageEvent
from pipeline_tracker.services.analytics import activity_cutoff

from conftest import create_user


def add_candidate(client, headers, first_name="Katherine"):
    response = client.post(
        "/api/v1/candidates/",
        json={"first_name": first_name, "last_name": "Johnson", "source": "Referral"},
        headers=headers
    )
    return response.json()


class TestDashboardStats:
    """Tests for GET /api/v1/dashboard/stats"""

    def test_empty_organization(self, client, auth_headers):
        response = client.get("/api/v1/dashboard/stats", headers=auth_headers)

        assert response.status_code == 200
        assert response.json() == {
            "total_candidates": 0,
            "active_candidates": 0,
            "hired_candidates": 0,
            "recent_activity": 0,
            "recent_activity_days": 30,
        }

    def test_counts(self, client, auth_headers):
        hired = add_candidate(client, auth_headers, "Hired")
        add_candidate(client, auth_headers, "Active")
        client.post(f"/api/v1/candidates/{hired['id']}/move", headers=auth_headers, json={
            "to_stage": "Joined", "reason_code": "Interview feedback"
        })

        data = client.get("/api/v1/dashboard/stats", headers=auth_headers).json()

        assert data["total_candidates"] == 2
        assert data["active_candidates"] == 1
        assert data["hired_candidates"] == 1
        assert data["recent_activity"] == 3

    def test_old_events_outside_window(self, client, db_session, auth_headers):
        candidate = add_candidate(client, auth_headers)
        event = db_session.query(CandidateStageEvent).one()
        event.moved_at = datetime.now(timezone.utc) - timedelta(days=45)
        db_session.commit()

        data = client.get("/api/v1/dashboard/stats", headers=auth_headers).json()

        assert data["total_candidates"] == 1
        assert data["recent_activity"] == 0
        assert candidate["status"] == "active"


def test_activity_cutoff():
    now = datetime(2026, 5, 31, tzinfo=timezone.utc)
    assert activity_cutoff(30, now=now) == datetime(2026, 5, 1, tzinfo=timezone.utc)


class TestOrganization:
    def test_get_organization(self, client, auth_headers, organization):
        response = client.get("/api/v1/organization", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["name"] == organization.name

    def test_list_users(self, client, db_session, auth_headers, organization, admin):
        response = client.get("/api/v1/users", headers=auth_headers)

        assert response.status_code == 200
        assert sorted(u["email"] for u in response.json()) == ["admin@example.com", "recruiter@example.com"]

    def test_inactive_user_still_listed(self, client, db_session, auth_headers, organization):
        create_user(db_session, organization, email="gone@example.com", is_active=False)

        emails = [u["email"] for u in client.get("/api/v1/users", headers=auth_headers).json()]

        assert "gone@example.com" in emails


class TestHealth:
    def test_root(self, client):
        response = client.get("/")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_detailed_health(self, client):
        response = client.get("/health/detailed")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["checks"]["database"]["status"] == "healthy"
        assert data["checks"]["stage_events"]["status"] == "healthy"

    def test_metrics(self, client, auth_headers):
        candidate = add_candidate(client, auth_headers)
        add_candidate(client, auth_headers)
        client.post(f"/api/v1/candidates/{candidate['id']}/move", headers=auth_headers, json={
            "to_stage": "Recruiter Screening", "action_type": "reject", "reason_code": "Ghosted"
        })

        metrics = client.get("/metrics").json()["metrics"]

        assert metrics["total_organizations"] == 1
        assert metrics["total_users"] == 1
        assert metrics["total_candidates"] == 2
        assert metrics["total_stage_events"] == 3
        assert metrics["candidates_by_status"] == {"active": 1, "rejected": 1}
        assert metrics["candidates_by_stage"] == {"Application Submitted": 1, "Recruiter Screening": 1}
