from fastapi import APIRouter, Depends, Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from blocktix.config import Settings, get_settings
from blocktix.schemas import OtpSendRequest, OtpVerifyRequest
from blocktix.services.otp import OtpService, OtpStore, get_otp_store

router = APIRouter(prefix="/auth", tags=["auth"])
limiter = Limiter(key_func=get_remote_address, enabled=get_settings().rate_limit_enabled)


@router.post("/send-otp")
@limiter.limit("5/minute")  # Max 5 codes per minute per IP
async def send_otp(
    request: Request,
    payload: OtpSendRequest,
    settings: Settings = Depends(get_settings),
    otp_store: OtpStore = Depends(get_otp_store)
):
    return await OtpService.send(settings, otp_store, payload.email)


@router.post("/verify-otp")
@limiter.limit("10/minute")
async def verify_otp(
    request: Request,
    payload: OtpVerifyRequest,
    otp_store: OtpStore = Depends(get_otp_store)
):
    return OtpService.verify(otp_store, payload.email, payload.code)
