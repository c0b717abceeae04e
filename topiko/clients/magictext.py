"""Client for the MagicText SMS gateway.

MagicText accepts a JSON POST with the account API key, a registered
sender id, the destination number and the message body. The response is
usually JSON but some error paths return plain text, so both are kept.
"""

from __future__ import annotations

import json

import httpx
import structlog
from typing_extensions import TypedDict

logger = structlog.get_logger()

DEFAULT_GATEWAY_URL = "http://msg.magictext.in/V2/http-api-post.php"


class SmsDeliveryError(Exception):
    """The gateway rejected the message or could not be reached."""

    def __init__(self, message: str, status_code: int | None = None, body: str = "") -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class SmsResult(TypedDict):
    status_code: int
    response: object
    mock: bool


class MagicTextClient:
    """MagicText API client. Returns a mock receipt when no API key is configured."""

    def __init__(
        self,
        api_key: str = "",
        sender_id: str = "TOPIKO",
        base_url: str = DEFAULT_GATEWAY_URL,
        timeout: float = 15.0,
    ) -> None:
        self.api_key = api_key
        self.sender_id = sender_id
        self.base_url = base_url
        self.timeout = timeout

    @property
    def is_available(self) -> bool:
        return bool(self.api_key)

    def send_sms(self, number: str, message: str) -> SmsResult:
        """Send a single SMS.

        Args:
            number: 10-digit destination mobile number.
            message: Message body.

        Returns:
            Dict with keys: status_code, response (parsed JSON or raw text), mock.

        Raises:
            SmsDeliveryError: Non-2xx response or transport failure.
        """
        if not self.is_available:
            logger.debug("MagicText not configured, returning mock receipt", number=number)
            return self._mock_send(number)

        payload = {
            "apikey": self.api_key,
            "senderid": self.sender_id,
            "number": number,
            "message": message,
            "format": "json",
        }
        try:
            with httpx.Client(timeout=self.timeout) as client:
                resp = client.post(
                    self.base_url,
                    json=payload,
                    headers={"Accept": "*/*"},
                )
        except httpx.HTTPError as exc:
            logger.error("MagicText request failed", number=number, error=str(exc))
            raise SmsDeliveryError(f"SMS gateway unreachable: {exc}") from exc

        logger.info(
            "MagicText response",
            number=number,
            status=resp.status_code,
            body=resp.text[:500],
        )
        if not resp.is_success:
            raise SmsDeliveryError(
                f"SMS gateway returned HTTP {resp.status_code}",
                status_code=resp.status_code,
                body=resp.text,
            )

        return {
            "status_code": resp.status_code,
            "response": _parse_body(resp.text),
            "mock": False,
        }

    # ------------------------------------------------------------------
    # Mock data
    # ------------------------------------------------------------------

    def _mock_send(self, number: str) -> SmsResult:
        return {
            "status_code": 200,
            "response": {"status": "OK", "number": number, "message": "mock delivery"},
            "mock": True,
        }


def _parse_body(text: str) -> object:
    try:
        return json.loads(text)
    except ValueError:
        logger.debug("MagicText returned non-JSON body")
        return text
