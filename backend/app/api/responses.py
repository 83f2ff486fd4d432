from decimal import Decimal

from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.services.pricing import to_money

# validation error types whose message is safe to hand back to the client as-is
PUBLIC_ERROR_TYPES = ("cart_empty", "invalid_line_item", "invalid_email")


def money(value: Decimal) -> float:
    return float(to_money(value))


def ok_response(**body) -> dict:
    return {"ok": True, **body}


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"ok": False, "error": message})


def validation_message(exc: RequestValidationError) -> str:
    """First client-facing validation message, or a generic one."""
    for err in exc.errors():
        if err.get("type") in PUBLIC_ERROR_TYPES:
            return err["msg"]
    return "Invalid request"
