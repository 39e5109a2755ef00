# bgsearch/utils/errors.py

from fastapi.responses import JSONResponse

from bgsearch.utils.logging import log_error


def server_error(message: str, exc: Exception, details: bool = False) -> JSONResponse:
    """Log a failed request and build the 500 body returned to the client."""

    log_error(f"{message}: {type(exc).__name__}: {exc}")
    content = {"error": message}
    if details:
        content["details"] = str(exc)
    return JSONResponse(status_code=500, content=content)


def not_found(message: str = "Resource not found") -> JSONResponse:
    return JSONResponse(status_code=404, content={"error": message, "status": "fail"})
