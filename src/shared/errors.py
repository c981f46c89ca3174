"""Mapping of domain exceptions onto the JSON error envelope of the HTTP API.

Every error body has the shape `{"message": str, "errors": {field: [str]}}`.
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from protean.exceptions import ObjectNotFoundError, ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from identity.customer.authentication import AuthenticationFailed
from identity.utils.logging import get_logger

logger = get_logger(__name__)


def _as_field_errors(messages) -> dict:
    if not isinstance(messages, dict):
        return {}
    errors = {}
    for field, msgs in messages.items():
        if not isinstance(msgs, list | tuple):
            msgs = [msgs]
        errors[str(field)] = [str(m) for m in msgs]
    return errors


def _first_message(messages, fallback: str) -> str:
    if isinstance(messages, str) and messages:
        return messages
    for msgs in _as_field_errors(messages).values():
        if msgs:
            return msgs[0]
    return fallback


def error_body(message: str, errors: dict | None = None) -> dict:
    return {"message": message, "errors": errors or {}}


async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    errors = _as_field_errors(exc.messages)
    logger.info("request_rejected", path=request.url.path, errors=errors)
    return JSONResponse(status_code=400, content=error_body(_first_message(exc.messages, "Invalid request"), errors))


async def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = {}
    for err in exc.errors():
        field = ".".join(str(part) for part in err.get("loc", ()) if part != "body") or "body"
        errors.setdefault(field, []).append(err.get("msg", "Invalid value"))
    message = next(iter(errors.values()))[0] if errors else "Invalid request"
    return JSONResponse(status_code=400, content=error_body(message, errors))


async def not_found_handler(request: Request, exc: ObjectNotFoundError) -> JSONResponse:
    return JSONResponse(status_code=404, content=error_body(_first_message(exc.messages, "Not found")))


async def authentication_failed_handler(request: Request, exc: AuthenticationFailed) -> JSONResponse:
    return JSONResponse(status_code=401, content=error_body(exc.message))


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    message = exc.detail if isinstance(exc.detail, str) else "Request failed"
    return JSONResponse(status_code=exc.status_code, content=error_body(message), headers=exc.headers)


def install_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(ObjectNotFoundError, not_found_handler)
    app.add_exception_handler(AuthenticationFailed, authentication_failed_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
