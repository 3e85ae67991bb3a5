"""Tests for the admin moderation workflow and user management."""

import pytest

from interviewexp.errors import InvalidStatusError, ValidationError
from interviewexp.middleware.auth import hash_password
from interviewexp.models import AuditLog, Company, Experience, User
from interviewexp.services import moderation


class TestApproveReject:
    """PUT /api/admin/experiences/{id}/approve and /reject."""

    def test_approve_records_approver(self, client, register, submit, admin):
        admin_user, admin_headers = admin
        _, headers, _ = register()
        experience = submit(headers)

        resp = client.put(f"/api/admin/experiences/{experience['id']}/approve", headers=admin_headers)
        assert resp.status_code == 200
        approved = resp.json()["data"]["experience"]
        assert approved["status"] == "approved"
        assert approved["approved_by"] == admin_user["id"]
        assert approved["approved_at"] is not None

    def test_double_approve_is_invalid_status(self, client, register, submit, admin):
        """A second transition out of approved is refused."""
        _, admin_headers = admin
        _, headers, _ = register()
        experience = submit(headers)
        url = f"/api/admin/experiences/{experience['id']}/approve"
        assert client.put(url, headers=admin_headers).status_code == 200

        resp = client.put(url, headers=admin_headers)
        assert resp.status_code == 400
        assert resp.json()["error"] == "Invalid Status"

        reject = client.put(
            f"/api/admin/experiences/{experience['id']}/reject",
            json={"reason": "Too short on detail for readers."},
            headers=admin_headers,
        )
        assert reject.status_code == 400

    def test_reject_with_reason(self, client, register, submit, admin):
        _, admin_headers = admin
        _, headers, _ = register()
        experience = submit(headers)
        resp = client.put(
            f"/api/admin/experiences/{experience['id']}/reject",
            json={"reason": "  Please add the interview rounds.  "},
            headers=admin_headers,
        )
        assert resp.status_code == 200
        rejected = resp.json()["data"]["experience"]
        assert rejected["status"] == "rejected"
        assert rejected["rejection_reason"] == "Please add the interview rounds."

    def test_short_reason_leaves_pending(self, client, register, submit, admin):
        """A reason under ten characters is refused and nothing changes."""
        _, admin_headers = admin
        _, headers, _ = register()
        experience = submit(headers)
        resp = client.put(
            f"/api/admin/experiences/{experience['id']}/reject",
            json={"reason": "bad"},
            headers=admin_headers,
        )
        assert resp.status_code == 400
        assert resp.json()["error"] == "Invalid Reason"

        detail = client.get(f"/api/admin/experiences/{experience['id']}", headers=admin_headers)
        assert detail.json()["data"]["experience"]["status"] == "pending"

    def test_students_cannot_moderate(self, client, register, submit):
        _, headers, _ = register()
        experience = submit(headers)
        resp = client.put(f"/api/admin/experiences/{experience['id']}/approve", headers=headers)
        assert resp.status_code == 403

    def test_unknown_experience(self, client, admin):
        _, admin_headers = admin
        resp = client.put("/api/admin/experiences/nope/approve", headers=admin_headers)
        assert resp.status_code == 404


class TestModerationService:
    """Service-level checks against the database directly."""

    def _pending(self, db):
        author = User(name="A", email="a@x.edu", password_hash="x", college="C", course="B", year="1")
        admin = User(
            name="Admin", email="root@x.edu", password_hash="x", college="System",
            course="S", year="Admin", role="admin",
        )
        db.add_all([author, admin])
        db.flush()
        company = Company(name="Acme", slug="acme")
        db.add(company)
        db.flush()
        experience = Experience(
            user_id=author.id, company_id=company.id, title="Acme - Dev", role="Dev",
            experience_type="Full-Time", result="Pending", status="pending",
        )
        db.add(experience)
        db.commit()
        return experience, admin

    def test_reject_then_approve_refused(self, db):
        experience, admin = self._pending(db)
        moderation.reject_experience(db, experience.id, admin, "Missing round details")
        with pytest.raises(InvalidStatusError):
            moderation.approve_experience(db, experience.id, admin)

    def test_concurrent_approve_and_reject(self, db, session_factory):
        """Two admins holding the same pending row: only the first write lands."""
        experience, admin = self._pending(db)
        experience_id, admin_id = experience.id, admin.id
        first, second = session_factory(), session_factory()
        try:
            first_admin = first.query(User).filter(User.id == admin_id).one()
            second_admin = second.query(User).filter(User.id == admin_id).one()
            assert first.query(Experience).filter(Experience.id == experience_id).one().status == "pending"
            assert second.query(Experience).filter(Experience.id == experience_id).one().status == "pending"

            moderation.approve_experience(first, experience_id, first_admin)
            with pytest.raises(InvalidStatusError):
                moderation.reject_experience(second, experience_id, second_admin, "Missing round details")
        finally:
            first.close()
            second.close()

        check = session_factory()
        try:
            stored = check.query(Experience).filter(Experience.id == experience_id).one()
            assert stored.status == "approved"
            assert stored.rejection_reason is None
            actions = [e.action for e in check.query(AuditLog).filter(AuditLog.entity_id == experience_id)]
            assert actions == ["approved"]
        finally:
            check.close()

    def test_whitespace_reason_refused(self, db):
        experience, admin = self._pending(db)
        with pytest.raises(ValidationError):
            moderation.reject_experience(db, experience.id, admin, "    short    ")

    def test_transition_writes_audit_log(self, db):
        experience, admin = self._pending(db)
        moderation.approve_experience(db, experience.id, admin)
        entries = db.query(AuditLog).filter(AuditLog.entity_id == experience.id).all()
        assert [e.action for e in entries] == ["approved"]
        assert entries[0].actor_id == admin.id


class TestAdminViews:
    """Dashboard, queue and user management."""

    def test_queue_filters_by_status(self, client, register, submit, approved, admin):
        _, admin_headers = admin
        _, headers, _ = register()
        submit(headers, role="Waiting")
        approved(headers, role="Done")

        resp = client.get("/api/admin/experiences", params={"status": "pending"}, headers=admin_headers)
        roles = [e["role"] for e in resp.json()["data"]["experiences"]]
        assert roles == ["Waiting"]

    def test_college_admin_sees_own_college_only(self, client, register, submit, db):
        """Admins from a real college are scoped to it."""
        db.add(User(
            name="State Admin", email="sadmin@uni.edu", password_hash=hash_password("adminpass"),
            college="State University", course="Staff", year="Admin", role="admin",
        ))
        db.commit()
        login = client.post("/api/auth/admin/login", json={"email": "sadmin@uni.edu", "password": "adminpass"})
        admin_headers = {"Authorization": f"Bearer {login.json()['data']['access_token']}"}

        _, state_headers, _ = register(email="s@uni.edu", college="State University")
        _, tech_headers, _ = register(email="t@uni.edu", college="Tech Institute")
        submit(state_headers, role="State Role")
        submit(tech_headers, role="Tech Role")

        resp = client.get("/api/admin/experiences", headers=admin_headers)
        assert [e["role"] for e in resp.json()["data"]["experiences"]] == ["State Role"]

    def test_dashboard_counts(self, client, register, submit, approved, admin):
        _, admin_headers = admin
        _, headers, _ = register()
        submit(headers)
        approved(headers)

        stats = client.get("/api/admin/dashboard", headers=admin_headers).json()["data"]["stats"]
        assert stats["overview"]["total_users"] == 1
        assert stats["experiences"]["total"] == 2
        assert stats["experiences"]["pending"] == 1
        assert stats["experiences"]["approved"] == 1
        assert stats["experiences"]["success_rate"] == 100

    def test_toggle_user_status_blocks_login(self, client, register, admin):
        _, admin_headers = admin
        user, _, _ = register(email="eve@uni.edu", password="evepass1")

        resp = client.put(f"/api/admin/users/{user['id']}/toggle-status", headers=admin_headers)
        assert resp.status_code == 200
        assert resp.json()["data"]["user"]["is_active"] is False

        login = client.post("/api/auth/login", json={"email": "eve@uni.edu", "password": "evepass1"})
        assert login.status_code == 401

        listed = client.get("/api/admin/users", params={"isActive": "false"}, headers=admin_headers)
        assert [u["id"] for u in listed.json()["data"]["users"]] == [user["id"]]

    def test_cannot_toggle_admin(self, client, admin):
        admin_user, admin_headers = admin
        resp = client.put(f"/api/admin/users/{admin_user['id']}/toggle-status", headers=admin_headers)
        assert resp.status_code == 403

    def test_admin_delete_is_audited(self, client, register, submit, admin, db):
        """Admins may delete any experience; the deletion is logged."""
        _, admin_headers = admin
        _, headers, _ = register()
        experience = submit(headers)

        resp = client.delete(f"/api/admin/experiences/{experience['id']}", headers=admin_headers)
        assert resp.status_code == 200
        assert db.query(Experience).filter(Experience.id == experience["id"]).count() == 0
        entries = db.query(AuditLog).filter(AuditLog.entity_id == experience["id"]).all()
        assert [e.action for e in entries] == ["deleted"]
