"""
Training-candidate curation API tests.
"""
from datetime import datetime, timezone

import httpx
import pytest

from lepinet.api import training as training_api
from lepinet.models import ConfidenceLevel, NOT_A_BUTTERFLY, TrainingStatus, TrainingStatusEvent
from lepinet.services.training_trigger import TrainingTriggerClient

from tests.conftest import auth_headers

BASE = "/api/admin/training"


@pytest.fixture
async def candidates(make_record, make_review, expert, admin):
    """Three candidates plus two reviews that never qualify."""
    record = await make_record()
    other = await make_record(predicted_id="BF002", predicted_name="Blue Mormon")
    third = await make_record(predicted_id="BF003", predicted_name="Lemon Pansy")

    return {
        "agreed": await make_review(record, expert, age_minutes=3),
        "corrected": await make_review(other, expert, identified="Lemon Pansy", agreed=False, age_minutes=2),
        "ignored": await make_review(
            third, expert, identified="Lemon Pansy", training_status=TrainingStatus.IGNORED, age_minutes=1
        ),
        "uncertain": await make_review(record, admin, confidence=ConfidenceLevel.UNCERTAIN),
        "not_butterfly": await make_review(other, admin, identified=NOT_A_BUTTERFLY, agreed=False),
    }


async def list_ids(client, admin, **params):
    response = await client.get(f"{BASE}/candidates", params=params, headers=auth_headers(admin))
    assert response.status_code == 200
    return response.json(), [c["id"] for c in response.json()["candidates"]]


class TestCandidateListing:
    """GET /candidates"""

    async def test_only_certain_butterfly_reviews(self, client, admin, candidates):
        body, ids = await list_ids(client, admin)
        assert ids == [
            str(candidates["ignored"].id),
            str(candidates["corrected"].id),
            str(candidates["agreed"].id),
        ]
        assert body["totalCandidates"] == 3
        assert body["statusCounts"] == {"pending": 2, "ready": 0, "trained": 0, "ignored": 1}
        assert body["candidates"][0]["aiLog"]["predictedId"] == "BF003"

    async def test_filters(self, client, admin, candidates):
        _, ids = await list_ids(client, admin, status="pending")
        assert str(candidates["ignored"].id) not in ids
        _, ids = await list_ids(client, admin, agreement="corrected")
        assert ids == [str(candidates["corrected"].id)]
        _, ids = await list_ids(client, admin, agreement="agreed")
        assert set(ids) == {str(candidates["agreed"].id), str(candidates["ignored"].id)}
        body, ids = await list_ids(client, admin, species="pansy", status="pending")
        assert ids == [str(candidates["corrected"].id)]
        assert body["totalCandidates"] == 3

    async def test_non_admin_forbidden(self, client, expert, candidates):
        response = await client.get(f"{BASE}/candidates", headers=auth_headers(expert))
        assert response.status_code == 403
        assert "candidates" not in response.json()


class TestTransitions:
    """Server-enforced training-status moves."""

    async def test_approve_then_train(self, client, admin, candidates):
        ids = [str(candidates["agreed"].id), str(candidates["corrected"].id)]

        approved = await client.post(f"{BASE}/approve", json={"ids": ids}, headers=auth_headers(admin))
        assert approved.status_code == 200
        assert approved.json()["updated"] == 2
        assert approved.json()["trainingStatus"] == "ready"

        trained = await client.post(f"{BASE}/mark-trained", json={"ids": ids}, headers=auth_headers(admin))
        assert trained.status_code == 200

        body, _ = await list_ids(client, admin)
        assert body["statusCounts"] == {"pending": 0, "ready": 0, "trained": 2, "ignored": 1}

    async def test_bulk_is_all_or_nothing(self, client, admin, candidates):
        ids = [str(candidates["agreed"].id), str(candidates["ignored"].id)]
        response = await client.post(f"{BASE}/approve", json={"ids": ids}, headers=auth_headers(admin))
        assert response.status_code == 409
        error = response.json()["error"]
        assert error["code"] == "INVALID_TRANSITION"
        assert error["details"]["reviewId"] == str(candidates["ignored"].id)

        body, _ = await list_ids(client, admin)
        assert body["statusCounts"]["pending"] == 2
        assert body["statusCounts"]["ready"] == 0

    async def test_trained_is_terminal(self, client, admin, candidates):
        review_id = str(candidates["agreed"].id)
        await client.post(f"{BASE}/approve", json={"ids": [review_id]}, headers=auth_headers(admin))
        await client.post(f"{BASE}/mark-trained", json={"ids": [review_id]}, headers=auth_headers(admin))

        for action in ("ignore", "restore"):
            response = await client.post(f"{BASE}/{review_id}/{action}", headers=auth_headers(admin))
            assert response.status_code == 409

    async def test_pending_cannot_skip_to_trained(self, client, admin, candidates):
        response = await client.post(
            f"{BASE}/mark-trained", json={"ids": [str(candidates["agreed"].id)]}, headers=auth_headers(admin)
        )
        assert response.status_code == 409

    async def test_restore_returns_to_pending_only(self, client, admin, candidates):
        review_id = str(candidates["ignored"].id)

        _, pending = await list_ids(client, admin, status="pending")
        _, ready = await list_ids(client, admin, status="ready")
        assert review_id not in pending and review_id not in ready

        response = await client.post(f"{BASE}/{review_id}/restore", headers=auth_headers(admin))
        assert response.status_code == 200

        _, pending = await list_ids(client, admin, status="pending")
        _, ready = await list_ids(client, admin, status="ready")
        _, ignored = await list_ids(client, admin, status="ignored")
        assert review_id in pending
        assert review_id not in ready
        assert review_id not in ignored

    async def test_empty_and_unknown_ids(self, client, admin, candidates):
        empty = await client.post(f"{BASE}/approve", json={"ids": []}, headers=auth_headers(admin))
        assert empty.status_code == 422

        unknown = await client.post(
            f"{BASE}/approve",
            json={"ids": [str(candidates["agreed"].id), "00000000-0000-0000-0000-000000000000"]},
            headers=auth_headers(admin),
        )
        assert unknown.status_code == 404

        body, _ = await list_ids(client, admin)
        assert body["statusCounts"]["ready"] == 0

    async def test_history(self, client, admin, candidates):
        review_id = str(candidates["agreed"].id)
        await client.post(f"{BASE}/{review_id}/ignore", headers=auth_headers(admin))
        await client.post(f"{BASE}/{review_id}/restore", headers=auth_headers(admin))

        response = await client.get(f"{BASE}/{review_id}/history", headers=auth_headers(admin))
        events = response.json()["events"]
        assert [(e["fromStatus"], e["toStatus"]) for e in events] == [
            ("pending", "ignored"),
            ("ignored", "pending"),
        ]
        assert events[0]["changedBy"] == str(admin.id)
        assert [e["sequence"] for e in events] == [1, 2]

    async def test_history_order_survives_equal_timestamps(self, client, admin, candidates, monkeypatch):
        frozen = datetime(2025, 1, 1, tzinfo=timezone.utc)
        # Every event gets the same created_at
        monkeypatch.setattr(
            TrainingStatusEvent.__table__.c.created_at.default, "arg", lambda context: frozen
        )

        review_id = str(candidates["agreed"].id)
        for action in ("ignore", "restore", "ignore", "restore"):
            response = await client.post(f"{BASE}/{review_id}/{action}", headers=auth_headers(admin))
            assert response.status_code == 200

        response = await client.get(f"{BASE}/{review_id}/history", headers=auth_headers(admin))
        events = response.json()["events"]
        assert [e["sequence"] for e in events] == [1, 2, 3, 4]
        assert [e["toStatus"] for e in events] == ["ignored", "pending", "ignored", "pending"]

    @pytest.mark.parametrize("kind", ["uncertain", "not_butterfly"])
    async def test_non_candidates_cannot_move(self, client, admin, candidates, kind):
        review_id = str(candidates[kind].id)

        for path, payload in (
            (f"{BASE}/approve", {"ids": [review_id]}),
            (f"{BASE}/{review_id}/ignore", None),
        ):
            response = await client.post(path, json=payload, headers=auth_headers(admin))
            assert response.status_code == 409
            error = response.json()["error"]
            assert error["code"] == "INVALID_TRANSITION"
            assert error["details"]["reviewId"] == review_id

        history = await client.get(f"{BASE}/{review_id}/history", headers=auth_headers(admin))
        assert history.json()["events"] == []

    async def test_non_candidate_spoils_the_whole_batch(self, client, admin, candidates):
        ids = [str(candidates["agreed"].id), str(candidates["uncertain"].id)]
        response = await client.post(f"{BASE}/approve", json={"ids": ids}, headers=auth_headers(admin))
        assert response.status_code == 409

        body, _ = await list_ids(client, admin)
        assert body["statusCounts"]["ready"] == 0


class TestTriggerTraining:
    """POST /trigger"""

    async def test_sent(self, client, admin, monkeypatch):
        client_stub = TrainingTriggerClient(transport=httpx.MockTransport(lambda r: httpx.Response(202)))
        monkeypatch.setattr(training_api, "training_trigger", client_stub)

        response = await client.post(f"{BASE}/trigger", json={"secret": "s3cret"}, headers=auth_headers(admin))
        assert response.status_code == 200
        assert response.json()["sent"] is True
        assert response.json()["upstreamStatus"] == 202

    async def test_unreachable(self, client, admin, monkeypatch):
        def fail(request):
            raise httpx.ConnectError("down", request=request)

        monkeypatch.setattr(
            training_api, "training_trigger", TrainingTriggerClient(transport=httpx.MockTransport(fail))
        )
        response = await client.post(f"{BASE}/trigger", json={"secret": "s3cret"}, headers=auth_headers(admin))
        assert response.status_code == 502
        assert response.json()["error"]["code"] == "UPSTREAM_UNAVAILABLE"

    async def test_missing_secret(self, client, admin):
        response = await client.post(f"{BASE}/trigger", json={"secret": ""}, headers=auth_headers(admin))
        assert response.status_code == 422
