"""
Tests for activity submission and review.
"""
from lira_portal.models import Activity, Notification


def submit(client, headers, **fields):
    body = {"title": "Login page", "content": "Worked on the login page validation."}
    body.update(fields)
    return client.post("/api/activities", headers=headers, json=body)


class TestActivitySubmission:

    def test_status_defaults_to_pending(self, client, intern_headers):
        response = submit(client, intern_headers)
        assert response.status_code == 200
        created = response.json()
        assert created["status"] == "pending"
        assert created["reviewed_at"] is None

        fetched = client.get(f"/api/activities/{created['id']}", headers=intern_headers)
        assert fetched.json()["status"] == "pending"

    def test_client_supplied_status_is_ignored(self, client, intern_headers):
        response = submit(client, intern_headers, status="approved")
        assert response.json()["status"] == "pending"

    def test_location_and_generated_content(self, client, intern_headers):
        response = submit(
            client,
            intern_headers,
            generated_content="AI enhanced report",
            location={"latitude": 2.25, "longitude": 32.9, "address": "Lira"},
            activity_date="2026-10-19",
        )
        data = response.json()
        assert data["generated_content"] == "AI enhanced report"
        assert data["location"]["address"] == "Lira"
        assert data["activity_date"] == "2026-10-19"

    def test_blank_title_rejected(self, client, intern_headers):
        response = submit(client, intern_headers, title="   ")
        assert response.status_code == 422
        assert response.json()["error_code"] == "VALIDATION_ERROR"

    def test_staff_cannot_submit(self, client, staff_headers):
        response = submit(client, staff_headers)
        assert response.status_code == 403

    def test_unauthenticated(self, client):
        response = client.post("/api/activities", json={"title": "t", "content": "c"})
        assert response.status_code == 401


class TestActivityVisibility:

    def test_intern_sees_only_own(self, client, intern_headers, other_intern_headers):
        submit(client, intern_headers, title="Mine")
        submit(client, other_intern_headers, title="Theirs")

        response = client.get("/api/activities", headers=intern_headers)
        titles = [a["title"] for a in response.json()]
        assert titles == ["Mine"]

    def test_intern_cannot_open_others(self, client, intern_headers, other_intern_headers):
        theirs = submit(client, other_intern_headers).json()
        response = client.get(f"/api/activities/{theirs['id']}", headers=intern_headers)
        assert response.status_code == 403

    def test_staff_sees_all_with_status_filter(self, client, intern_headers, other_intern_headers, staff_headers):
        first = submit(client, intern_headers).json()
        submit(client, other_intern_headers)
        client.post(f"/api/activities/{first['id']}/approve", headers=staff_headers)

        all_items = client.get("/api/activities", headers=staff_headers).json()
        pending = client.get("/api/activities?status=pending", headers=staff_headers).json()
        assert len(all_items) == 2
        assert len(pending) == 1

    def test_unknown_status_filter(self, client, staff_headers):
        response = client.get("/api/activities?status=done", headers=staff_headers)
        assert response.status_code == 422

    def test_missing_activity(self, client, staff_headers):
        response = client.get("/api/activities/999", headers=staff_headers)
        assert response.status_code == 404


class TestActivityReview:

    def test_approve_sets_review_fields_and_notifies(self, client, db, intern, intern_headers, staff, staff_headers):
        activity = submit(client, intern_headers).json()

        response = client.post(f"/api/activities/{activity['id']}/approve", headers=staff_headers)
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "approved"
        assert data["reviewed_by"] == staff.id
        assert data["reviewed_at"] is not None

        notes = db.query(Notification).filter(Notification.user_id == intern.id).all()
        assert [n.type for n in notes] == ["activity_approved"]

    def test_reject(self, client, intern_headers, admin_headers):
        activity = submit(client, intern_headers).json()
        response = client.post(f"/api/activities/{activity['id']}/reject", headers=admin_headers)
        assert response.json()["status"] == "rejected"

    def test_repeat_approval_does_not_change_reviewed_at(self, client, db, intern_headers, staff_headers):
        activity = submit(client, intern_headers).json()
        first = client.post(f"/api/activities/{activity['id']}/approve", headers=staff_headers).json()

        again = client.post(f"/api/activities/{activity['id']}/approve", headers=staff_headers)
        assert again.status_code == 409

        current = client.get(f"/api/activities/{activity['id']}", headers=staff_headers).json()
        assert current["reviewed_at"] == first["reviewed_at"]

    def test_transition_is_one_way(self, client, intern_headers, staff_headers):
        activity = submit(client, intern_headers).json()
        client.post(f"/api/activities/{activity['id']}/approve", headers=staff_headers)

        response = client.post(f"/api/activities/{activity['id']}/reject", headers=staff_headers)
        assert response.status_code == 409
        assert "approved" in response.json()["error"]

    def test_intern_cannot_review(self, client, intern_headers):
        activity = submit(client, intern_headers).json()
        response = client.post(f"/api/activities/{activity['id']}/approve", headers=intern_headers)
        assert response.status_code == 403

    def test_review_missing_activity(self, client, staff_headers):
        response = client.post("/api/activities/4242/approve", headers=staff_headers)
        assert response.status_code == 404


class TestActivityStats:

    def test_stats_by_scope(self, client, db, intern, other_intern, intern_headers, staff_headers):
        db.add_all([
            Activity(user_id=intern.id, title="a", content="c", status="pending"),
            Activity(user_id=intern.id, title="b", content="c", status="approved"),
            Activity(user_id=other_intern.id, title="c", content="c", status="rejected"),
        ])
        db.commit()

        mine = client.get("/api/activities/stats", headers=intern_headers).json()
        assert mine == {"total": 2, "pending": 1, "approved": 1, "rejected": 0}

        everyone = client.get("/api/activities/stats", headers=staff_headers).json()
        assert everyone == {"total": 3, "pending": 1, "approved": 1, "rejected": 1}

    def test_dashboard(self, client, db, intern, intern_headers, staff_headers):
        db.add(Activity(user_id=intern.id, title="Report", content="c"))
        db.commit()

        intern_view = client.get("/api/dashboard", headers=intern_headers).json()
        assert intern_view["role"] == "intern"
        assert intern_view["pending_activities"] == 1
        assert intern_view["total_interns"] is None
        assert intern_view["recent_activity"][0]["intern_name"] is None

        staff_view = client.get("/api/dashboard", headers=staff_headers).json()
        assert staff_view["total_interns"] == 1
        assert staff_view["recent_activity"][0]["intern_name"] == "Ivy Intern"
