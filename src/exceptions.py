from fastapi.exception_handlers import http_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.requests import Request
from starlette.status import HTTP_400_BAD_REQUEST, HTTP_405_METHOD_NOT_ALLOWED


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed request bodies get the same {success, message} envelope as every other failure"""
    errors = []
    for error in exc.errors():
        field = " -> ".join(str(loc) for loc in error["loc"])
        message = error["msg"]
        error_type = error.get("type", "validation_error")

        if error_type == "missing":
            message = f"Field '{field}' is required"
        elif error_type in ("model_attributes_type", "dict_type"):
            message = "Request body must be a JSON object"
        elif error_type == "json_invalid":
            message = "Request body is not valid JSON"

        errors.append({
            "field": field,
            "message": message,
            "type": error_type
        })

    return JSONResponse(
        status_code=HTTP_400_BAD_REQUEST,
        content={
            "success": False,
            "message": errors[0]["message"] if errors else "Invalid request",
            "errors": errors
        }
    )


async def method_not_allowed_handler(request: Request, exc: StarletteHTTPException):
    """405s use the envelope of the endpoint that was hit; other HTTP errors keep FastAPI's default body"""
    if exc.status_code != HTTP_405_METHOD_NOT_ALLOWED:
        return await http_exception_handler(request, exc)

    message = "Method not allowed"
    if request.url.path.rstrip("/").endswith("/callback"):
        content = {"status": "error", "message": message}
    else:
        content = {"success": False, "message": message}

    return JSONResponse(status_code=exc.status_code, content=content, headers=getattr(exc, "headers", None))
