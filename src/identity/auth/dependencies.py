"""FastAPI dependencies that resolve the calling customer from a token.

The token is read from an ``Authorization: Bearer`` header, falling back to
the ``token`` cookie. Lookups run in the identity domain context whatever
domain the request itself is routed to.
"""

from dataclasses import dataclass

from fastapi import Request
from protean.exceptions import ObjectNotFoundError

from identity.auth.errors import AuthenticationError
from identity.auth.tokens import verify_token
from identity.customer.customer import Customer
from identity.domain import identity

TOKEN_COOKIE = "token"


@dataclass(frozen=True)
class AuthenticatedCustomer:
    id: str
    email: str
    name: str


def token_from_request(request: Request) -> str | None:
    header = request.headers.get("authorization", "")
    scheme, _, credentials = header.partition(" ")
    if scheme.lower() == "bearer" and credentials.strip():
        return credentials.strip()
    return request.cookies.get(TOKEN_COOKIE) or None


async def require_customer(request: Request) -> AuthenticatedCustomer:
    token = token_from_request(request)
    if not token:
        raise AuthenticationError("Authentication required")

    payload = verify_token(token)

    with identity.domain_context():
        try:
            customer = identity.repository_for(Customer).get(payload["sub"])
        except ObjectNotFoundError:
            raise AuthenticationError("User not found") from None

    return AuthenticatedCustomer(id=str(customer.id), email=customer.email, name=customer.name)


async def optional_customer(request: Request) -> AuthenticatedCustomer | None:
    try:
        return await require_customer(request)
    except AuthenticationError:
        return None
