"""OTP relay endpoint."""

from __future__ import annotations

from fastapi import APIRouter

from topiko.api.deps import OtpRelayDep
from topiko.api.schemas import OtpRequest
from topiko.models.otp import OtpDispatch

router = APIRouter(prefix="/otp", tags=["otp"])


@router.post("/send", response_model=OtpDispatch)
def send_otp(request: OtpRequest, relay: OtpRelayDep) -> OtpDispatch:
    return relay.send(request.mobile, request.otp)
