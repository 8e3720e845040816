"""
External trainer client tests.
"""
import httpx
import pytest

from lepinet.core.config import settings
from lepinet.core.exceptions import InvalidArgumentException, UpstreamUnavailableException
from lepinet.services.training_trigger import TrainingTriggerClient


class TestTrigger:
    """Fire-and-forget retrain ping."""

    async def test_posts_secret_as_query_param(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["method"] = request.method
            seen["url"] = request.url
            return httpx.Response(200, json={"status": "started"})

        client = TrainingTriggerClient(transport=httpx.MockTransport(handler))
        result = await client.trigger("s3cret")

        assert result.sent is True
        assert result.status_code == 200
        assert seen["method"] == "POST"
        assert seen["url"].params["secret"] == "s3cret"
        assert str(seen["url"]).startswith(settings.TRAINING_TRIGGER_URL)

    async def test_error_status_still_counts_as_sent(self):
        client = TrainingTriggerClient(transport=httpx.MockTransport(lambda r: httpx.Response(401)))
        result = await client.trigger("wrong")
        assert result.sent is True
        assert result.status_code == 401

    async def test_unreachable(self):
        def fail(request):
            raise httpx.ConnectTimeout("timed out", request=request)

        client = TrainingTriggerClient(transport=httpx.MockTransport(fail))
        with pytest.raises(UpstreamUnavailableException):
            await client.trigger("s3cret")

    @pytest.mark.parametrize("secret", ["", "   "])
    async def test_empty_secret(self, secret):
        with pytest.raises(InvalidArgumentException):
            await TrainingTriggerClient().trigger(secret)
