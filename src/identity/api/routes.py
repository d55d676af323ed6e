"""FastAPI routes for the Identity domain — sign-up, login and profile."""

from fastapi import APIRouter, Depends, Response
from protean.utils.globals import current_domain

from identity.api.schemas import AuthResponse, LoginRequest, MeResponse, SignupRequest
from identity.auth.dependencies import TOKEN_COOKIE, AuthenticatedCustomer, require_customer
from identity.auth.passwords import hash_password
from identity.auth.tokens import issue_token, token_ttl_seconds
from identity.customer.customer import Customer
from identity.customer.login import LogInCustomer, authenticate
from identity.customer.registration import RegisterCustomer

router = APIRouter(prefix="/auth", tags=["auth"])


def _authenticated(response: Response, customer: Customer) -> AuthResponse:
    token = issue_token(customer.id, customer.email)
    response.set_cookie(
        TOKEN_COOKIE,
        token,
        max_age=token_ttl_seconds(),
        httponly=True,
        samesite="lax",
    )
    return AuthResponse(token=token, user=customer.to_profile())


@router.post("/signup", status_code=201, response_model=AuthResponse)
async def signup(body: SignupRequest, response: Response) -> AuthResponse:
    command = RegisterCustomer(
        name=body.name,
        email=body.email,
        password_hash=hash_password(body.password),
        phone=body.phone,
    )
    customer_id = current_domain.process(command, asynchronous=False)
    customer = current_domain.repository_for(Customer).get(customer_id)
    return _authenticated(response, customer)


@router.post("/login", response_model=AuthResponse)
async def login(body: LoginRequest, response: Response) -> AuthResponse:
    customer = authenticate(body.email, body.password)
    current_domain.process(LogInCustomer(customer_id=str(customer.id)), asynchronous=False)
    return _authenticated(response, customer)


@router.get("/me", response_model=MeResponse)
async def me(customer: AuthenticatedCustomer = Depends(require_customer)) -> MeResponse:
    profile = current_domain.repository_for(Customer).get(customer.id)
    return MeResponse(user=profile.to_profile())
