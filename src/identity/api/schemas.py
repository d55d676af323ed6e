"""Pydantic request/response schemas for the Identity API."""

from pydantic import BaseModel, Field

from shared.schemas import RequestModel


class SignupRequest(RequestModel):
    name: str = Field(min_length=1, max_length=150)
    email: str = Field(min_length=3, max_length=254)
    password: str = Field(min_length=1)
    phone: str | None = Field(default=None, max_length=20)


class LoginRequest(RequestModel):
    email: str = Field(min_length=1)
    password: str = Field(min_length=1)


class CustomerProfile(BaseModel):
    id: str
    name: str
    email: str
    phone: str | None = None


class AuthResponse(BaseModel):
    token: str
    user: CustomerProfile


class MeResponse(BaseModel):
    user: CustomerProfile
