"""FastAPI routes for the chat assistant and recommendations.

Both endpoints work without a token and personalise when one is sent.
"""

from fastapi import APIRouter, Depends
from protean.exceptions import ValidationError

from assistant.api.schemas import ChatRequest, ChatResponse, RecommendRequest, RecommendResponse
from assistant.chatbot import respond
from assistant.menu import available_products, recent_orders
from assistant.recommend import recommend
from identity.auth.dependencies import AuthenticatedCustomer, optional_customer

router = APIRouter(prefix="/ai", tags=["assistant"])


@router.post("/chatbot", response_model=ChatResponse)
def chatbot(
    body: ChatRequest,
    customer: AuthenticatedCustomer | None = Depends(optional_customer),
) -> ChatResponse:
    if not body.message.strip():
        raise ValidationError({"message": ["Message is required"]})

    reply = respond(body.message, customer.id if customer else None)
    return ChatResponse(**reply.to_dict())


@router.post("/recommend", response_model=RecommendResponse)
async def recommendations(
    body: RecommendRequest,
    customer: AuthenticatedCustomer | None = Depends(optional_customer),
) -> RecommendResponse:
    orders = recent_orders(customer.id, limit=10) if customer and body.past_orders else []
    preferences = body.preferences.model_dump() if body.preferences else {}
    products = recommend(available_products(), budget=body.budget, preferences=preferences, orders=orders)
    return RecommendResponse(recommendations=products)
