"""HTTP error mapping shared by the application and router-level tests.

Every error body is ``{"error": <message>}``; validation failures also carry
the full ``details`` payload.
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from protean.exceptions import ObjectNotFoundError, ValidationError

from identity.auth.errors import AuthenticationError

logger = structlog.get_logger(__name__)


def error_payload(exc: Exception):
    """The message payload of a Protean exception.

    Only validation errors carry ``messages``; the rest keep it in ``args``.
    """
    messages = getattr(exc, "messages", None)
    if messages is not None:
        return messages
    return exc.args[0] if exc.args else str(exc)


def first_message(messages) -> str:
    """Pull a single human-readable message out of an exception payload."""
    if isinstance(messages, dict):
        for field, value in messages.items():
            message = first_message(value)
            # Field-level messages ("is required") read better with the field name
            if message[:1].islower() and not field.startswith("_"):
                return f"{field} {message}"
            return message
        return "Invalid request"
    if isinstance(messages, list | tuple):
        return first_message(messages[0]) if messages else "Invalid request"
    return str(messages)


async def validation_error_handler(request: Request, exc: ValidationError):
    messages = exc.messages
    logger.info("Request rejected", errors=messages)
    return JSONResponse(status_code=400, content={"error": first_message(messages), "details": messages})


async def not_found_handler(request: Request, exc: ObjectNotFoundError):
    return JSONResponse(status_code=404, content={"error": first_message(error_payload(exc))})


async def authentication_error_handler(request: Request, exc: AuthenticationError):
    return JSONResponse(status_code=401, content={"error": exc.message})


async def request_validation_handler(request: Request, exc: RequestValidationError):
    details = {".".join(str(part) for part in error["loc"][1:]) or "body": [error["msg"]] for error in exc.errors()}
    field, messages = next(iter(details.items()))
    return JSONResponse(status_code=400, content={"error": f"{field}: {messages[0]}", "details": details})


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error", error=str(exc))
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(ObjectNotFoundError, not_found_handler)
    app.add_exception_handler(AuthenticationError, authentication_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
