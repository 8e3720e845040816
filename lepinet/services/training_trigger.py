"""
Client for the external retraining service.

The trainer lives outside this system; we only ping it. A completed HTTP call
counts as "sent" whatever the trainer answers. Whether a job actually started
has to be checked in the trainer's own logs.
"""
from dataclasses import dataclass
from typing import Optional

import httpx

from lepinet.core.config import settings
from lepinet.core.logging import logger
from lepinet.core.exceptions import InvalidArgumentException, UpstreamUnavailableException


@dataclass(frozen=True)
class TriggerResult:
    sent: bool
    status_code: int


class TrainingTriggerClient:
    def __init__(self, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.transport = transport

    async def trigger(self, secret: str, requested_by: Optional[str] = None) -> TriggerResult:
        """
        POST to TRAINING_TRIGGER_URL with the admin-supplied secret.

        Raises:
            InvalidArgumentException: Empty secret
            UpstreamUnavailableException: The trainer could not be reached
        """
        if not secret or not secret.strip():
            raise InvalidArgumentException("A trainer secret is required")

        url = settings.TRAINING_TRIGGER_URL
        logger.info("Sending retrain signal", extra={"url": url, "requested_by": requested_by})

        try:
            async with httpx.AsyncClient(
                transport=self.transport, timeout=settings.TRAINING_TRIGGER_TIMEOUT
            ) as client:
                response = await client.post(url, params={"secret": secret})
        except httpx.HTTPError as e:
            logger.error(
                f"Retrain signal failed: {str(e)}",
                extra={"url": url, "error_type": type(e).__name__},
            )
            raise UpstreamUnavailableException(
                "Training service could not be reached", details={"url": url}
            )

        if not response.is_success:
            logger.warning(
                "Trainer answered with an error status",
                extra={"url": url, "status_code": response.status_code},
            )

        return TriggerResult(sent=True, status_code=response.status_code)


# Global singleton instance
training_trigger = TrainingTriggerClient()
