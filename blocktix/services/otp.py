"""Email one-time passwords.

Codes live in process memory, one per lower-cased email. Expiry is checked
lazily when a code is verified.
"""

import logging
import secrets
import threading
import time
from dataclasses import dataclass
from typing import Callable, Optional

from fastapi import Request

from blocktix.config import Settings
from blocktix.errors import ConfigurationError, ValidationError
from blocktix.services.email import EmailService

logger = logging.getLogger(__name__)


@dataclass
class OtpEntry:
    code: str
    expires_at: float
    verified: bool = False


class OtpStore:
    def __init__(self, ttl_seconds: int = 600, clock: Callable[[], float] = time.time) -> None:
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: dict[str, OtpEntry] = {}
        self._lock = threading.Lock()

    @staticmethod
    def _key(email: str) -> str:
        return email.strip().lower()

    def now(self) -> float:
        return self._clock()

    def issue(self, email: str, code: str) -> OtpEntry:
        entry = OtpEntry(code=code, expires_at=self.now() + self.ttl_seconds)
        with self._lock:
            self._entries[self._key(email)] = entry
        return entry

    def get(self, email: str) -> Optional[OtpEntry]:
        with self._lock:
            return self._entries.get(self._key(email))

    def discard(self, email: str) -> None:
        with self._lock:
            self._entries.pop(self._key(email), None)


def get_otp_store(request: Request) -> OtpStore:
    return request.app.state.otp_store


class OtpService:
    @staticmethod
    def generate_code() -> str:
        return f"{secrets.randbelow(900000) + 100000}"

    @staticmethod
    async def send(settings: Settings, otp_store: OtpStore, email: str) -> dict:
        """Issue a fresh code for the email, replacing any earlier one, and mail it."""
        if not settings.email_configured:
            logger.warning("SMTP not configured, refusing to issue OTP")
            raise ConfigurationError("Email not configured on server")

        code = OtpService.generate_code()
        otp_store.issue(email, code)
        await EmailService.send_otp_email(settings, email, code, otp_store.ttl_seconds)
        logger.info(f"OTP issued for {email}")
        return {"sent": True, "expiresInSec": otp_store.ttl_seconds}

    @staticmethod
    def verify(otp_store: OtpStore, email: str, code: str) -> dict:
        entry = otp_store.get(email)
        if entry is None:
            raise ValidationError("No OTP requested for this email")
        if otp_store.now() > entry.expires_at:
            otp_store.discard(email)
            raise ValidationError("OTP expired")
        if code.strip() != entry.code:
            raise ValidationError("Invalid OTP")
        entry.verified = True
        return {"verified": True}
