"""OTP relay: validates the mobile number and forwards the passcode by SMS."""

from __future__ import annotations

import re
import secrets
from typing import TYPE_CHECKING

import structlog

from topiko.clients.magictext import SmsDeliveryError
from topiko.metrics import otp_requests_total
from topiko.models.otp import OtpDispatch

if TYPE_CHECKING:
    from topiko.clients.magictext import MagicTextClient

logger = structlog.get_logger()

_MOBILE_RE = re.compile(r"[0-9]{10}")
_OTP_RE = re.compile(r"[0-9]{4,8}")


def validate_mobile(mobile: object) -> str:
    """Return the mobile number if it is exactly ten digits.

    Raises:
        ValueError: The number is missing or malformed.
    """
    if not isinstance(mobile, str) or not _MOBILE_RE.fullmatch(mobile):
        raise ValueError("Invalid mobile number")
    return mobile


def generate_otp(length: int = 4) -> str:
    return "".join(str(secrets.randbelow(10)) for _ in range(length))


def format_otp_message(otp: str, brand: str = "Topiko", support_phone: str = "885 886 8889") -> str:
    return (
        f"{otp} is your registration OTP for {brand}. "
        f"Do not share this OTP with anyone. Contact {support_phone} for any help."
    )


class OtpRelay:
    """Sends OTPs through the SMS gateway.

    The passcode is not stored; it is returned to the caller, which owns
    verification.
    """

    def __init__(
        self,
        sms: MagicTextClient,
        brand: str = "Topiko",
        support_phone: str = "885 886 8889",
        otp_length: int = 4,
    ) -> None:
        self.sms = sms
        self.brand = brand
        self.support_phone = support_phone
        self.otp_length = otp_length

    def send(self, mobile: object, otp: str | None = None) -> OtpDispatch:
        """Relay an OTP to *mobile*, generating one when none is supplied.

        Raises:
            ValueError: Invalid mobile number or OTP format.
            SmsDeliveryError: The gateway did not accept the message.
        """
        number = validate_mobile(mobile)
        if otp is None:
            otp = generate_otp(self.otp_length)
        elif not _OTP_RE.fullmatch(otp):
            raise ValueError("Invalid OTP format")

        message = format_otp_message(otp, self.brand, self.support_phone)
        try:
            result = self.sms.send_sms(number, message)
        except SmsDeliveryError:
            otp_requests_total.labels(status="failed").inc()
            raise

        otp_requests_total.labels(status="mock" if result["mock"] else "sent").inc()
        logger.info("OTP relayed", mobile_suffix=number[-4:], mock=result["mock"])
        return OtpDispatch(
            success=True,
            message="OTP sent successfully",
            otp=otp,
            gateway_response=result["response"],
        )
