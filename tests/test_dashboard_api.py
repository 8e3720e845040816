"""
Personal dashboard API tests.
"""
from lepinet.models import NotificationType
from lepinet.services.notifications import notification_service

from tests.conftest import auth_headers


class TestUserDashboard:
    """GET /api/dashboard"""

    async def test_regular_user(self, client, db, observer, expert, make_record, make_review):
        mine = await make_record(owner=observer)
        await make_record(owner=expert)
        await make_review(mine, expert)
        notification_service.notify(db, observer.id, NotificationType.ROLE_CHANGE, "Hi", "Hello")
        await db.commit()

        response = await client.get("/api/dashboard", headers=auth_headers(observer))
        assert response.status_code == 200
        body = response.json()
        assert body["profile"]["id"] == str(observer.id)
        assert body["isVerifiedExpert"] is False
        assert [r["id"] for r in body["records"]] == [str(mine.id)]
        assert body["reviews"] == []
        assert body["counts"] == {"records": 1, "reviews": 0, "unreadNotifications": 1}

    async def test_verified_expert_sees_own_reviews(self, client, expert, make_record, make_review):
        record = await make_record()
        review = await make_review(record, expert)

        response = await client.get("/api/dashboard", headers=auth_headers(expert))
        body = response.json()
        assert body["isVerifiedExpert"] is True
        assert [r["id"] for r in body["reviews"]] == [str(review.id)]
        assert body["reviews"][0]["record"]["id"] == str(record.id)

    async def test_notification_preview_is_limited(self, client, db, observer):
        for i in range(7):
            notification_service.notify(db, observer.id, NotificationType.ROLE_CHANGE, f"N{i}", "x")
        await db.commit()

        response = await client.get("/api/dashboard", headers=auth_headers(observer))
        body = response.json()
        assert len(body["notifications"]) == 5
        assert body["counts"]["unreadNotifications"] == 7
