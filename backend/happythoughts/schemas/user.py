"""
Happy Thoughts API — User Account Schemas
==========================================

What:  Registration and login bodies, and the credential/profile responses.

Emails are validated by pydantic's EmailStr (email-validator) and lower-cased
so uniqueness and login are case-insensitive. Usernames and emails are
trimmed before the length and format checks run.
"""

import uuid

from pydantic import BaseModel, EmailStr, Field, field_validator


class RegisterRequest(BaseModel):
    username: str = Field(min_length=3, max_length=30)
    email: EmailStr
    password: str = Field(min_length=1, description="Plaintext; hashed before storage")

    @field_validator("username", "email", mode="before")
    @classmethod
    def strip_text(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("email")
    @classmethod
    def lower_email(cls, v: str) -> str:
        return v.lower()


class LoginRequest(BaseModel):
    email: str
    password: str

    @field_validator("email")
    @classmethod
    def lower_email(cls, v: str) -> str:
        return v.strip().lower()


class CredentialsResponse(BaseModel):
    """Returned by register and login. The token goes in the Authorization header."""

    id: uuid.UUID
    username: str
    access_token: str

    model_config = {"from_attributes": True}


class UserProfile(BaseModel):
    id: uuid.UUID
    username: str
    email: str

    model_config = {"from_attributes": True}
