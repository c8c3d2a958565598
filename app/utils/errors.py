from __future__ import annotations

from typing import Any

from fastapi.responses import JSONResponse


def error_response(
    status_code: int, message: str, detail: Any | None = None
) -> JSONResponse:
    content: dict = {"error": message}
    if detail is not None:
        content["detail"] = detail
    return JSONResponse(status_code=status_code, content=content)
