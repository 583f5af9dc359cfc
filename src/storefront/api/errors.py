"""HTTP mapping for reconciliation errors."""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from protean.exceptions import InvalidOperationError, ObjectNotFoundError, ValidationError
from protean.integrations.fastapi import register_exception_handlers

from storefront.errors import ActiveOrderConflict, error_kind

STATUS_CODES = {
    ObjectNotFoundError: 404,
    ActiveOrderConflict: 409,
    ValidationError: 400,
    InvalidOperationError: 400,
}


def _body(exc: Exception) -> dict:
    messages = getattr(exc, "messages", None) or str(exc)
    return {"error": messages, "kind": error_kind(exc)}


def register_error_handlers(app: FastAPI) -> None:
    """Install Protean's default handlers, then pin the reconciliation status codes."""
    register_exception_handlers(app)

    for exc_class, status_code in STATUS_CODES.items():

        async def handler(request: Request, exc: Exception, status_code: int = status_code) -> JSONResponse:
            return JSONResponse(status_code=status_code, content=_body(exc))

        app.add_exception_handler(exc_class, handler)
