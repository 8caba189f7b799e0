from datetime import datetime, timedelta, timezone
from typing import Optional
import logging
import secrets
import bcrypt
from jose import JWTError, jwt
from fastapi import Depends, Header
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from blocktix.config import Settings, get_settings
from blocktix.errors import AuthenticationError, ConfigurationError, ValidationError
from blocktix.schemas import ContactCreate, ContactSubmission, SignupResponse, UserCreate
from blocktix.stores.base import TicketStore

logger = logging.getLogger(__name__)
security = HTTPBearer(auto_error=False)


class AuthService:
    @staticmethod
    def get_password_hash(password: str) -> str:
        return bcrypt.hashpw(
            password.encode('utf-8'),
            bcrypt.gensalt()
        ).decode('utf-8')

    @staticmethod
    def create_access_token(settings: Settings, data: dict, expires_delta: Optional[timedelta] = None) -> str:
        to_encode = data.copy()
        if expires_delta:
            expire = datetime.now(timezone.utc) + expires_delta
        else:
            expire = datetime.now(timezone.utc) + timedelta(days=settings.access_token_expire_days)
        to_encode.update({"exp": expire})
        encoded_jwt = jwt.encode(to_encode, settings.secret_key, algorithm=settings.algorithm)
        return encoded_jwt

    @staticmethod
    def decode_token(settings: Settings, token: str) -> Optional[dict]:
        try:
            return jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
        except JWTError:
            return None

    @staticmethod
    def signup(store: TicketStore, settings: Settings, user_data: UserCreate) -> SignupResponse:
        if store.get_user_by_email(user_data.email):
            raise ValidationError("Email already registered")

        hashed_password = AuthService.get_password_hash(user_data.password)
        user = store.create_user(user_data.name.strip(), user_data.email, hashed_password)
        token = AuthService.create_access_token(
            settings,
            {"uid": user.id, "email": user.email, "name": user.name}
        )
        logger.info(f"New account {user.id} for {user.email}")
        return SignupResponse(message="User created successfully", token=token, user=user)

    @staticmethod
    def submit_contact(store: TicketStore, form: ContactCreate) -> ContactSubmission:
        submission = store.add_contact_submission(ContactSubmission(
            name=form.name,
            email=form.email,
            subject=form.subject or "",
            message=form.message,
            submitted_at=datetime.now(timezone.utc)
        ))
        logger.info(f"Contact form from {form.email}")
        return submission


def get_current_claims(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    settings: Settings = Depends(get_settings)
) -> dict:
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("No token provided")

    claims = AuthService.decode_token(settings, credentials.credentials)
    if claims is None:
        raise AuthenticationError("Invalid token")
    return claims


def require_admin_key(
    x_admin_key: Optional[str] = Header(None),
    settings: Settings = Depends(get_settings)
) -> None:
    if not settings.admin_api_key:
        raise ConfigurationError("Server missing ADMIN_API_KEY")
    if not x_admin_key or not secrets.compare_digest(x_admin_key, settings.admin_api_key):
        logger.warning("Rejected request with invalid admin key")
        raise AuthenticationError("Invalid or missing admin key")
