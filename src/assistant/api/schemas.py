"""Pydantic request/response schemas for the assistant API."""

from pydantic import BaseModel, Field

from shared.schemas import RequestModel


class ChatRequest(RequestModel):
    message: str = Field(min_length=1)


class ChatResponse(BaseModel):
    text: str
    products: list[dict]
    suggestions: list[dict]


class Preferences(RequestModel):
    spicy: bool = False
    vegetarian: bool = False
    category: str | None = None


class RecommendRequest(RequestModel):
    budget: float | None = Field(default=None, ge=0)
    preferences: Preferences | None = None
    past_orders: bool = True


class RecommendResponse(BaseModel):
    recommendations: list[dict]
