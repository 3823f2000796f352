"""
Endpoint results: a success payload or a tagged error, mapped to HTTP by routes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Union

from fastapi.responses import JSONResponse


@dataclass(frozen=True)
class Ok:
    payload: Any
    status_code: int = 200


@dataclass(frozen=True)
class Err:
    status_code: int
    error: str
    message: Optional[str] = None
    details: Optional[str] = None

    def body(self) -> dict:
        body = {"error": self.error}
        if self.message is not None:
            body["message"] = self.message
        if self.details is not None:
            body["details"] = self.details
        return body


EndpointResult = Union[Ok, Err]


def to_response(result: EndpointResult) -> JSONResponse:
    if isinstance(result, Ok):
        return JSONResponse(content=result.payload, status_code=result.status_code)
    return JSONResponse(content=result.body(), status_code=result.status_code)
