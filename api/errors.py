"""
API Error Handling

Standardized error handling for the API.
"""

from fastapi import Request
from fastapi.responses import JSONResponse

from api.models.responses import ErrorResponse, ErrorDetail
from core.schemas.errors import ErrorCodes, ThreadlineException


# Engine error codes that are not the client's fault; anything else is a 400
ERROR_STATUS_CODES: dict[str, int] = {
    ErrorCodes.ANCHOR_NOT_FOUND: 404,
    ErrorCodes.CONFIG_ERROR: 500,
    ErrorCodes.ANCHOR_STORE_ERROR: 500,
}


def status_for_code(code: str) -> int:
    """HTTP status for an engine error code."""
    return ERROR_STATUS_CODES.get(code, 400)


async def threadline_error_handler(request: Request, exc: ThreadlineException) -> JSONResponse:
    """Map engine exceptions to an ErrorResponse with the code's HTTP status."""
    return JSONResponse(
        status_code=status_for_code(exc.code),
        content=ErrorResponse(
            ok=False,
            error=ErrorDetail(
                code=exc.code,
                message=exc.message,
                details=exc.details,
            ),
        ).model_dump(),
    )


async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions."""
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(
            ok=False,
            error=ErrorDetail(
                code="INTERNAL_ERROR",
                message="An unexpected error occurred",
                details={"type": type(exc).__name__},
            ),
        ).model_dump(),
    )
