from pydantic import BaseModel, EmailStr, Field
from datetime import datetime
from typing import Optional

from blocktix.schemas.base import CamelModel


class UserCreate(BaseModel):
    name: str = Field(min_length=1)
    email: EmailStr
    password: str = Field(min_length=1)


class User(CamelModel):
    id: int
    name: str
    email: str
    created_at: Optional[datetime] = None


class SignupResponse(BaseModel):
    message: str
    token: str
    user: User


class ContactCreate(BaseModel):
    name: str = Field(min_length=1)
    email: EmailStr
    subject: str = ""
    message: str = Field(min_length=1)


class ContactSubmission(CamelModel):
    id: Optional[int] = None
    name: str
    email: str
    subject: str = ""
    message: str
    submitted_at: Optional[datetime] = None


class OtpSendRequest(BaseModel):
    email: EmailStr


class OtpVerifyRequest(BaseModel):
    email: EmailStr
    code: str = Field(min_length=1)
