"""Pydantic models for authentication flows and the resolved session."""

from pydantic import BaseModel, Field


class Session(BaseModel):
    """The parts of a Supabase session the views consume."""
    user_id: str
    email: str | None = None
    access_token: str | None = None
    refresh_token: str | None = None


class LoginRequest(BaseModel):
    """Email / password credentials."""
    email: str = Field(min_length=1)
    password: str = Field(min_length=1)


class RegisterRequest(BaseModel):
    """Sign-up form. ``confirm_password`` is checked before any auth call."""
    full_name: str = Field(min_length=1)
    email: str = Field(min_length=1)
    phone: str = Field(min_length=1)
    password: str = Field(min_length=1)
    confirm_password: str = Field(min_length=1)


class ForgotPasswordRequest(BaseModel):
    """Request a password-reset e-mail."""
    email: str = Field(min_length=1)
