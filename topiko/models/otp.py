"""Models for the OTP relay."""

from __future__ import annotations

from typing import Any

from topiko.models.base import FrozenModel


class OtpDispatch(FrozenModel):
    """Result of relaying an OTP to the SMS gateway.

    The OTP is echoed back so the front-end can verify the user's entry.
    """

    success: bool
    message: str
    otp: str
    gateway_response: Any = None
