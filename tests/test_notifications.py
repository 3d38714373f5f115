"""
Tests for the notification inbox.
"""
from lira_portal.models import Notification


def seed(db, user, count=2):
    for i in range(count):
        db.add(Notification(user_id=user.id, type="info", title=f"Note {i}", message="Hello"))
    db.commit()


class TestNotifications:

    def test_list_and_unread_count(self, client, db, intern, intern_headers, staff):
        seed(db, intern)
        seed(db, staff, count=1)

        listed = client.get("/api/notifications", headers=intern_headers).json()
        assert len(listed) == 2
        count = client.get("/api/notifications/unread/count", headers=intern_headers).json()
        assert count == {"count": 2}

    def test_mark_one_read(self, client, db, intern, intern_headers):
        seed(db, intern)
        note_id = client.get("/api/notifications", headers=intern_headers).json()[0]["id"]

        response = client.post(f"/api/notifications/{note_id}/read", headers=intern_headers)
        assert response.status_code == 200
        assert response.json()["read"] is True

        unread = client.get("/api/notifications?unread_only=true", headers=intern_headers).json()
        assert len(unread) == 1

    def test_cannot_read_someone_elses(self, client, db, staff, intern_headers):
        seed(db, staff, count=1)
        note = db.query(Notification).first()
        response = client.post(f"/api/notifications/{note.id}/read", headers=intern_headers)
        assert response.status_code == 404

    def test_mark_all_read(self, client, db, intern, intern_headers):
        seed(db, intern, count=3)
        response = client.post("/api/notifications/read-all", headers=intern_headers)
        assert response.json()["data"] == {"updated": 3}
        count = client.get("/api/notifications/unread/count", headers=intern_headers).json()
        assert count["count"] == 0
