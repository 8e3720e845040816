"""
Records browser and record page API tests.
"""
from datetime import datetime, timedelta, timezone

from lepinet.services.records import DateFilter, date_cutoff

from tests.conftest import auth_headers


class TestDateCutoff:
    """Date filter windows."""

    def test_windows(self):
        now = datetime(2024, 3, 31, 15, 30, tzinfo=timezone.utc)
        assert date_cutoff(DateFilter.ALL, now) is None
        assert date_cutoff(DateFilter.TODAY, now) == datetime(2024, 3, 31, tzinfo=timezone.utc)
        assert date_cutoff(DateFilter.WEEK, now) == now - timedelta(days=7)
        # Clamped to the end of February
        assert date_cutoff(DateFilter.MONTH, now) == datetime(2024, 2, 29, 15, 30, tzinfo=timezone.utc)
        assert date_cutoff(DateFilter.YEAR, now) == datetime(2023, 3, 31, 15, 30, tzinfo=timezone.utc)


class TestListRecords:
    """GET /api/records"""

    async def test_requires_sign_in(self, client):
        assert (await client.get("/api/records")).status_code == 401

    async def test_rows_carry_review_count_and_species(
        self, client, observer, expert, make_record, make_review
    ):
        record = await make_record(owner=observer)
        await make_review(record, expert)

        response = await client.get("/api/records", headers=auth_headers(observer))
        assert response.status_code == 200
        body = response.json()
        assert body["total"] == 1
        row = body["records"][0]
        assert row["id"] == str(record.id)
        assert row["reviewCount"] == 1
        assert row["speciesDetails"] == {
            "commonNameEnglish": "Common Mormon",
            "speciesNameBinomial": "Papilio polytes",
            "family": "Papilionidae",
        }

    async def test_filters(self, client, observer, expert, make_record, make_review):
        now = datetime.now(timezone.utc)
        mine_reviewed = await make_record(owner=observer)
        await make_review(mine_reviewed, expert)
        verified = await make_record(
            owner=expert, predicted_id="BF003", predicted_name="Lemon Pansy", final_name="Lemon Pansy"
        )
        old = await make_record(owner=expert, created_at=now - timedelta(days=40))

        async def ids(**params):
            response = await client.get("/api/records", params=params, headers=auth_headers(observer))
            assert response.status_code == 200
            return {row["id"] for row in response.json()["records"]}

        assert await ids() == {str(mine_reviewed.id), str(verified.id), str(old.id)}
        assert await ids(view="mine") == {str(mine_reviewed.id)}
        assert await ids(status="reviewed") == {str(mine_reviewed.id)}
        assert await ids(status="unreviewed") == {str(verified.id), str(old.id)}
        assert await ids(status="verified") == {str(verified.id)}
        assert await ids(status="unverified") == {str(mine_reviewed.id), str(old.id)}
        assert await ids(dateFilter="week") == {str(mine_reviewed.id), str(verified.id)}
        assert await ids(search="pansy") == {str(verified.id)}

    async def test_newest_first(self, client, observer, make_record):
        now = datetime.now(timezone.utc)
        older = await make_record(created_at=now - timedelta(hours=2))
        newer = await make_record(created_at=now - timedelta(hours=1))

        response = await client.get("/api/records", headers=auth_headers(observer))
        assert [row["id"] for row in response.json()["records"]] == [str(newer.id), str(older.id)]

    async def test_search_treats_wildcards_literally(self, client, observer, make_record):
        await make_record()
        response = await client.get(
            "/api/records", params={"search": "%"}, headers=auth_headers(observer)
        )
        assert response.json()["total"] == 0

    async def test_invalid_filter(self, client, observer):
        response = await client.get(
            "/api/records", params={"status": "bogus"}, headers=auth_headers(observer)
        )
        assert response.status_code == 422


class TestRecordDetail:
    """GET /api/records/{id}"""

    async def test_reviews_with_reviewer_and_votes(
        self, client, observer, expert, admin, make_record, make_review
    ):
        record = await make_record(owner=observer)
        older = await make_review(record, expert, age_minutes=10)
        newer = await make_review(record, admin, identified="Blue Mormon", agreed=False)

        vote = await client.post(f"/api/reviews/{older.id}/helpful", headers=auth_headers(observer))
        assert vote.status_code == 200

        response = await client.get(f"/api/records/{record.id}", headers=auth_headers(observer))
        assert response.status_code == 200
        body = response.json()
        assert body["predictedSpecies"]["butterflyId"] == "BF001"
        assert [r["id"] for r in body["reviews"]] == [str(newer.id), str(older.id)]
        assert body["reviews"][0]["helpfulCount"] == 0
        assert body["reviews"][1]["helpfulCount"] == 1
        assert body["reviews"][1]["reviewer"]["id"] == str(expert.id)

    async def test_missing(self, client, observer):
        response = await client.get(
            "/api/records/00000000-0000-0000-0000-000000000000", headers=auth_headers(observer)
        )
        assert response.status_code == 404
        assert response.json()["error"]["code"] == "NOT_FOUND"
